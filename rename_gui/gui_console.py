"""
gui_console.py - Diagnostic Console

Dock widget showing the application's log records
"""

import logging
from typing import Optional

from PySide6.QtWidgets import QDockWidget, QPlainTextEdit, QWidget
from PySide6.QtCore import QObject, Signal, Qt

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class _LogEmitter(QObject):
    message = Signal(str)


class QtLogHandler(logging.Handler):
    """Forwards formatted log records through a Qt signal"""

    def __init__(self, level: int = logging.DEBUG):
        super().__init__(level)
        self.emitter = _LogEmitter()
        self.setFormatter(logging.Formatter(LOG_FORMAT, "%H:%M:%S"))

    def emit(self, record: logging.LogRecord):
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.emitter.message.emit(msg)


class DiagnosticConsole(QDockWidget):
    """Hidden by default, toggled with a global key"""

    def __init__(self, parent: Optional[QWidget] = None, max_lines: int = 2000):
        super().__init__("Debug Console", parent)
        self.setObjectName("debug_console")
        self.setAllowedAreas(Qt.DockWidgetArea.BottomDockWidgetArea)

        self.view = QPlainTextEdit()
        self.view.setReadOnly(True)
        self.view.setMaximumBlockCount(max_lines)
        self.setWidget(self.view)

        self.handler = QtLogHandler()
        self.handler.emitter.message.connect(self.view.appendPlainText)
        logging.getLogger().addHandler(self.handler)

    def toggle(self):
        self.setVisible(self.isHidden())

    def detach(self):
        """Stop receiving log records"""
        logging.getLogger().removeHandler(self.handler)
