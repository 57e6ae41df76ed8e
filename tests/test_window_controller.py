import pytest
from PyQt6.QtCore import Qt

from core.errors import WindowError
from gui.window_controller import WindowController

from factories import FakeWindow


def test_operations_without_window_raise():
    ctl = WindowController()
    with pytest.raises(WindowError):
        ctl.show_and_focus()
    with pytest.raises(WindowError):
        ctl.hide()
    with pytest.raises(WindowError):
        ctl.set_always_on_top(True)


def test_hide_and_show():
    win = FakeWindow(visible=True)
    ctl = WindowController(win)
    ctl.hide()
    assert ctl.is_visible() is False
    ctl.show_and_focus()
    assert ctl.is_visible() is True
    assert win.calls == ["hide", "show", "raise", "activate"]


def test_always_on_top_keeps_visible_window_shown():
    win = FakeWindow(visible=True)
    ctl = WindowController(win)
    ctl.set_always_on_top(True)
    assert win.flags[Qt.WindowType.WindowStaysOnTopHint] is True
    assert win.isVisible()
    ctl.set_always_on_top(False)
    assert win.flags[Qt.WindowType.WindowStaysOnTopHint] is False


def test_always_on_top_does_not_show_hidden_window():
    win = FakeWindow(visible=False)
    WindowController(win).set_always_on_top(True)
    assert "show" not in win.calls


def test_deleted_window_becomes_window_error_and_unbinds():
    win = FakeWindow()
    ctl = WindowController(win)
    win.deleted = True
    with pytest.raises(WindowError):
        ctl.hide()
    assert ctl.window is None


def test_close_event_hides_instead_of_closing(qtbot):
    from PyQt6.QtWidgets import QMainWindow
    from gui.window_controller import CloseToTrayFilter

    win = QMainWindow()
    qtbot.addWidget(win)
    ctl = WindowController(win)
    win.installEventFilter(CloseToTrayFilter(ctl, parent=win))
    win.show()
    assert win.close() is False
    assert win.isVisible() is False
