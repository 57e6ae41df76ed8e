import os
import tempfile

from gui.app import bootstrap


def _lock_path(name):
    return os.path.join(tempfile.gettempdir(), name)


def test_acquire_release_single_instance():
    lock_name = f"test_lock_{os.getpid()}.lock"

    assert bootstrap.acquire_single_instance(lock_name) is True
    # Second acquire in same process returns True (idempotent)
    assert bootstrap.acquire_single_instance(lock_name) is True

    bootstrap.release_single_instance()
    assert not os.path.exists(_lock_path(lock_name))
    assert bootstrap.acquire_single_instance(lock_name) is True
    bootstrap.release_single_instance()


def test_single_instance_contention_with_live_pid():
    lock_name = f"contention_{os.getpid()}.lock"
    path = _lock_path(lock_name)
    # A live PID (ours) holds the lock file
    with open(path, "w", encoding="utf-8") as f:
        f.write(str(os.getpid()))
    try:
        assert bootstrap.acquire_single_instance(lock_name) is False
    finally:
        if os.path.exists(path):
            os.unlink(path)


def test_stale_lock_is_reclaimed(monkeypatch):
    lock_name = f"stale_{os.getpid()}.lock"
    path = _lock_path(lock_name)
    with open(path, "w", encoding="utf-8") as f:
        f.write("999999")
    monkeypatch.setattr(bootstrap.psutil, "pid_exists", lambda pid: False)
    try:
        assert bootstrap.acquire_single_instance(lock_name) is True
        with open(path, "r", encoding="utf-8") as f:
            assert f.read().strip() == str(os.getpid())
    finally:
        bootstrap.release_single_instance()
        if os.path.exists(path):
            os.unlink(path)


def test_stale_lock_kept_without_reclaim(monkeypatch):
    lock_name = f"noreclaim_{os.getpid()}.lock"
    path = _lock_path(lock_name)
    with open(path, "w", encoding="utf-8") as f:
        f.write("999999")
    monkeypatch.setattr(bootstrap.psutil, "pid_exists", lambda pid: False)
    try:
        assert bootstrap.acquire_single_instance(lock_name, force_reclaim_stale=False) is False
    finally:
        if os.path.exists(path):
            os.unlink(path)


def test_single_instance_context_manager():
    lock_name = f"ctx_{os.getpid()}.lock"
    with bootstrap.single_instance(lock_name) as acquired:
        assert acquired is True
    # After exiting context, we can acquire again
    assert bootstrap.acquire_single_instance(lock_name) is True
    bootstrap.release_single_instance()
