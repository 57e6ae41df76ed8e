# Shared fixtures. Provides a fallback 'qtbot' fixture if pytest-qt is not
# installed and forces the offscreen Qt platform so nothing needs a display.

import os
import sys
import contextlib
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from storage import BackupManager, DocumentStore, TransferManager  # noqa: E402

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except Exception:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except Exception:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        QApplication.instance() or QApplication(sys.argv)  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        return Bot()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "appdata"


@pytest.fixture
def store(data_dir):
    return DocumentStore(data_dir)


@pytest.fixture
def backups(store):
    return BackupManager(store)


@pytest.fixture
def transfers(store):
    return TransferManager(store)
