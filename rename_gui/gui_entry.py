"""
gui_entry.py - GUI Entry

Launch PySide6 GUI application
"""

import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from rename_core import RenameOptions, classify_paths
from .gui_mainwindow import MainWindow
from .gui_dialogs import show_no_files

logger = logging.getLogger(__name__)


def main(paths: List[str], options: Optional[RenameOptions] = None) -> int:
    """GUI main entry"""
    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("Batch Regex Rename")
    app.setApplicationVersion("1.0.0")

    # Set style
    app.setStyle("Fusion")

    scan = classify_paths(paths)
    logger.info(
        "%d candidates, %d skipped, %d missing",
        len(scan.items), len(scan.skipped), len(scan.missing),
    )

    if not scan.items:
        return show_no_files()

    window = MainWindow(scan.items, options, missing=scan.missing)
    window.show()
    if window.missing_dialog is not None:
        window.missing_dialog.raise_()

    app.exec()
    return 0
