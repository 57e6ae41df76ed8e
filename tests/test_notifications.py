from gui.notifications import NotificationService

from factories import FakeTrayIcon


def test_message_shown_through_tray():
    tray = FakeTrayIcon()
    svc = NotificationService(lambda: tray)
    assert svc.show_notification("Focus complete", "Time for a break") is True
    assert tray.messages == [("Focus complete", "Time for a break")]


def test_no_tray_or_unsupported_returns_false():
    assert NotificationService(lambda: None).show_notification("t", "b") is False
    tray = FakeTrayIcon(supports=False)
    assert NotificationService(lambda: tray).show_notification("t", "b") is False
    assert tray.messages == []


def test_permission_always_granted():
    assert NotificationService(lambda: None).request_notification_permission() is True
