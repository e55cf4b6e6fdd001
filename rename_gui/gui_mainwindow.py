"""
gui_mainwindow.py - GUI Main Window

Find/replace inputs above a live preview table of all candidates
"""

import logging
import re
from typing import Dict, List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QLabel,
    QLineEdit, QPushButton, QTableWidget, QTableWidgetItem, QHeaderView,
    QApplication
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QKeySequence, QShortcut

from rename_core import (
    RenameItem, RenameOptions, CommitResult, PatternState, PatternCompileError,
    ConfirmationWorkflow, WarningKind, WorkflowState, update_renames
)
from .gui_console import DiagnosticConsole
from .gui_dialogs import (
    WarningDialog, MissingPathsDialog, SettingsDialog,
    warning_message, show_summary, show_pattern_error
)

logger = logging.getLogger(__name__)


class RenameTable(QTableWidget):
    """Two-column preview table, sorted by header click"""

    ORIGINAL = 0
    RENAMED = 1

    def __init__(self, items: List[RenameItem], width_percent: int = 48, parent=None):
        super().__init__(0, 2, parent)
        self.items = items
        self.width_percent = width_percent
        # Row -> index into items; starts in insertion order
        self.order: List[int] = list(range(len(items)))
        self.sort_column: Optional[int] = None
        self.sort_descending = False

        self.setHorizontalHeaderLabels(["Original", "Renamed"])
        header = self.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Fixed)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)
        self.verticalHeader().setVisible(False)
        self.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.setMinimumSize(500, 300)

        self._fill()

    def _fill(self):
        self.setRowCount(len(self.order))
        for row, index in enumerate(self.order):
            item = self.items[index]
            original = QTableWidgetItem(item.original)
            original.setData(Qt.ItemDataRole.UserRole, index)
            original.setToolTip(str(item.location))
            self.setItem(row, self.ORIGINAL, original)
            self.setItem(row, self.RENAMED, QTableWidgetItem(item.renamed))

    def item_at(self, row: int) -> RenameItem:
        """Candidate shown in a row"""
        index = self.item(row, self.ORIGINAL).data(Qt.ItemDataRole.UserRole)
        return self.items[index]

    def refresh_renamed(self):
        """Show the current proposed names, keeping the row order"""
        for row, index in enumerate(self.order):
            self.item(row, self.RENAMED).setText(self.items[index].renamed)

    def sort_by(self, column: int, descending: bool = False):
        """Stable sort on one column's text, ties keep their current order"""
        attr = "original" if column == self.ORIGINAL else "renamed"
        self.order = sorted(
            self.order,
            key=lambda i: getattr(self.items[i], attr),
            reverse=descending,
        )
        self.sort_column = column
        self.sort_descending = descending
        self.horizontalHeader().setSortIndicatorShown(True)
        self.horizontalHeader().setSortIndicator(
            column,
            Qt.SortOrder.DescendingOrder if descending else Qt.SortOrder.AscendingOrder,
        )
        self._fill()

    @Slot(int)
    def _on_header_clicked(self, column: int):
        descending = self.sort_column == column and not self.sort_descending
        self.sort_by(column, descending)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        width = self.viewport().width() * self.width_percent // 100
        for column in (self.ORIGINAL, self.RENAMED):
            self.setColumnWidth(column, width)


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(
        self,
        items: List[RenameItem],
        options: Optional[RenameOptions] = None,
        missing: Optional[List[str]] = None
    ):
        super().__init__()
        self.items = items
        self.options = options or RenameOptions()
        self.patterns = PatternState(re.IGNORECASE if self.options.ignore_case else 0)

        self.workflow: Optional[ConfirmationWorkflow] = None
        self.warning_dialogs: Dict[WarningKind, WarningDialog] = {}
        self.summary_dialog = None
        self.missing_dialog: Optional[MissingPathsDialog] = None

        self.setWindowTitle("Batch Regex Rename")
        self.setMinimumSize(800, 600)
        self._init_ui()
        self._init_shortcuts()

        if missing:
            self.show_missing(missing)

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        layout.addWidget(QLabel("Find pattern:"))
        self.find_edit = QLineEdit()
        self.find_edit.textChanged.connect(self._on_edit_find_pattern)
        self.find_edit.returnPressed.connect(self._on_submit_find_pattern)
        layout.addWidget(self.find_edit)

        layout.addWidget(QLabel("Replace pattern:"))
        self.replace_edit = QLineEdit()
        self.replace_edit.textChanged.connect(self._on_edit_replace_pattern)
        layout.addWidget(self.replace_edit)

        # Files group
        files_group = QGroupBox("Files")
        files_layout = QVBoxLayout(files_group)
        self.table = RenameTable(self.items, self.options.column_width_percent)
        files_layout.addWidget(self.table, 1)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch()
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self._quit)
        buttons_layout.addWidget(self.cancel_btn)
        self.settings_btn = QPushButton("Settings")
        self.settings_btn.clicked.connect(self._show_settings)
        buttons_layout.addWidget(self.settings_btn)
        self.apply_btn = QPushButton("Apply")
        self.apply_btn.clicked.connect(self.apply_renames)
        buttons_layout.addWidget(self.apply_btn)
        files_layout.addLayout(buttons_layout)

        layout.addWidget(files_group, 1)

        # Pattern error line
        self.error_label = QLabel("")
        self.error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.error_label.setStyleSheet(
            "QLabel { color: #b00000; font-weight: bold; text-decoration: underline; }"
        )
        layout.addWidget(self.error_label)

        self.console = DiagnosticConsole(self)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self.console)
        self.console.hide()

    def _init_shortcuts(self):
        # Text fields take printable keys first, so typing is not affected
        self.quit_shortcut = QShortcut(QKeySequence(self.options.quit_key), self)
        self.quit_shortcut.activated.connect(self._quit)
        self.console_shortcut = QShortcut(QKeySequence(self.options.console_key), self)
        self.console_shortcut.activated.connect(self.console.toggle)

    def show_missing(self, paths: List[str]):
        """List paths that could not be accessed"""
        self.missing_dialog = MissingPathsDialog(paths, self)
        self.missing_dialog.show()

    # Pattern input

    def set_error_message(self, message: str):
        self.error_label.setText(message)

    def hide_error_message(self):
        self.set_error_message("")

    def update_renames(self):
        """Recompute every proposed name and refresh the table"""
        update_renames(self.items, self.patterns)
        self.table.refresh_renamed()

    @Slot(str)
    def _on_edit_find_pattern(self, text: str):
        try:
            self.patterns.update_search(text)
        except PatternCompileError as e:
            # Keep the last valid pattern
            self.set_error_message(e.short_message)
            logger.warning("%s", e.short_message)
            return
        self.hide_error_message()
        self.update_renames()

    @Slot()
    def _on_submit_find_pattern(self):
        try:
            self.patterns.update_search(self.find_edit.text())
        except PatternCompileError as e:
            show_pattern_error(self, e.detail)
            return
        self.hide_error_message()
        self.update_renames()

    @Slot(str)
    def _on_edit_replace_pattern(self, text: str):
        self.patterns.update_replace(text)
        self.update_renames()

    @Slot()
    def _show_settings(self):
        dialog = SettingsDialog(self.options, self)
        if not dialog.exec():
            return
        self.apply_options(dialog.options())

    def apply_options(self, options: RenameOptions):
        """Use new options, recomputing names if the pattern flags changed"""
        self.options = options
        flags = re.IGNORECASE if options.ignore_case else 0
        if flags != self.patterns.flags:
            self.patterns.set_flags(flags)
            self.update_renames()
        logger.debug("Options changed: %s", options)

    # Apply workflow

    @Slot()
    def apply_renames(self):
        """Check the candidates and ask for confirmation where needed"""
        if self.workflow is not None and not self.workflow.finished:
            return

        self.workflow = ConfirmationWorkflow(
            self.items, self.options, on_committed=self._on_committed,
        )
        check = self.workflow.start()
        if self.workflow.state is WorkflowState.COMMITTED:
            return

        self.apply_btn.setEnabled(False)
        for kind in (WarningKind.NAMES, WarningKind.PERMISSIONS):
            if kind not in self.workflow.open_warnings:
                continue
            dialog = WarningDialog(kind, warning_message(kind, check), self._on_warning_answer, self)
            self.warning_dialogs[kind] = dialog
            dialog.show()

    def _on_warning_answer(self, kind: WarningKind, accepted: bool):
        self.warning_dialogs.pop(kind, None)
        self.workflow.resolve(kind, accepted)

        if self.workflow.state is WorkflowState.ABORTED:
            # A partial acknowledgment must not go through
            for dialog in self.warning_dialogs.values():
                dialog.set_continue_enabled(self.workflow.can_continue(dialog.kind))
            if not self.warning_dialogs:
                self.apply_btn.setEnabled(True)

    def _on_committed(self, result: CommitResult):
        for dialog in list(self.warning_dialogs.values()):
            dialog.dismiss()
        self.warning_dialogs.clear()
        if self.missing_dialog is not None:
            self.missing_dialog.close()

        self.summary_dialog = show_summary(self, result, self._quit)

    @Slot()
    def _quit(self):
        QApplication.quit()

    def closeEvent(self, event):
        self.console.detach()
        super().closeEvent(event)
