"""Shared fixtures."""

import os

import pytest

# GUI tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from rename_core import RenameItem


@pytest.fixture
def make_files(tmp_path):
    """Create files in a temporary directory and return their candidates."""

    def _make(*names: str):
        items = []
        for name in names:
            path = tmp_path / name
            path.write_text(name)
            items.append(RenameItem.from_path(path))
        return items

    return _make


@pytest.fixture(scope="session")
def qapp():
    """Application instance for widget tests."""
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
