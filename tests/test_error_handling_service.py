import sys
import threading

from gui.services.error_handling_service import ErrorHandlingService
from gui.services.event_bus import EventBus, UIEvent


def _raise_and_capture(svc, exc):
    try:
        raise exc
    except Exception as e:  # noqa: BLE001
        return svc.handle_exception(type(e), e, e.__traceback__)


def test_handle_exception_records_and_limits():
    svc = ErrorHandlingService(capacity=2)
    _raise_and_capture(svc, ValueError("boom1"))
    _raise_and_capture(svc, RuntimeError("boom2"))
    _raise_and_capture(svc, KeyError("boom3"))
    errs = svc.recent_errors()
    assert len(errs) == 2
    assert errs[-1].exc_type is KeyError
    assert errs[0].exc_type is RuntimeError


def test_publishes_uncaught_exception_event():
    bus = EventBus()
    payloads = []
    bus.subscribe(UIEvent.UNCAUGHT_EXCEPTION, lambda e: payloads.append(e.payload))
    svc = ErrorHandlingService(event_bus=bus)
    record = _raise_and_capture(svc, ValueError("bad tray callback"))
    assert payloads[0]["type"] == "ValueError"
    assert payloads[0]["message"] == "bad tray callback"
    assert "ValueError" in record.traceback_str
    assert record.summary() == "ValueError: bad tray callback"


def test_install_and_uninstall_restore_hooks():
    prev_sys, prev_thread = sys.excepthook, threading.excepthook
    svc = ErrorHandlingService()
    svc.install()
    try:
        assert svc.installed
        assert sys.excepthook is not prev_sys
    finally:
        svc.uninstall()
    assert sys.excepthook is prev_sys
    assert threading.excepthook is prev_thread
