"""
gui_dialogs.py - GUI Dialogs

Warning, summary, settings and missing-paths dialogs
"""

from dataclasses import replace
from typing import Callable, List, Optional

from PySide6.QtWidgets import (
    QCheckBox, QDialog, QDialogButtonBox, QLabel, QListWidget,
    QMessageBox, QVBoxLayout, QWidget
)
from PySide6.QtCore import Qt

from rename_core import CheckResult, CommitResult, RenameOptions, WarningKind

WARNING_TITLES = {
    WarningKind.NAMES: "Conflicting names Error",
    WarningKind.PERMISSIONS: "Permissions Error",
}


def warning_message(kind: WarningKind, check: CheckResult) -> str:
    """Dialog text for one warning kind"""
    if kind is WarningKind.NAMES:
        return "Files will be renamed to the same value:\n " + ",\n ".join(check.conflicting_names)
    return "Files cannot be renamed:\n " + ",\n ".join(check.permission_problems)


class WarningDialog:
    """Non-modal warning offering Cancel and Continue"""

    def __init__(
        self,
        kind: WarningKind,
        text: str,
        on_answer: Callable[[WarningKind, bool], None],
        parent: Optional[QWidget] = None
    ):
        self.kind = kind
        self.answered = False
        self._on_answer = on_answer

        self.box = QMessageBox(parent)
        self.box.setIcon(QMessageBox.Icon.Warning)
        self.box.setWindowTitle(WARNING_TITLES[kind])
        self.box.setText(text)
        self.box.setWindowModality(Qt.WindowModality.NonModal)

        self.cancel_button = self.box.addButton("Cancel", QMessageBox.ButtonRole.RejectRole)
        self.continue_button = self.box.addButton("Continue", QMessageBox.ButtonRole.AcceptRole)
        self.box.setEscapeButton(self.cancel_button)
        self.box.setDefaultButton(self.cancel_button)

        # Fires for button clicks, Escape and the window close button alike
        self.box.finished.connect(self._on_finished)

    def show(self):
        self.box.show()

    def set_continue_enabled(self, enabled: bool):
        self.continue_button.setEnabled(enabled)

    def dismiss(self):
        """Close without reporting an answer"""
        self.answered = True
        self.box.close()

    def _on_finished(self, _result: int):
        if self.answered:
            return
        self.answered = True
        accepted = self.box.clickedButton() is self.continue_button
        self._on_answer(self.kind, accepted)


def show_summary(
    parent: Optional[QWidget],
    result: CommitResult,
    on_finish: Callable[[], None]
) -> QMessageBox:
    """Show the commit summary with a Finish button"""
    box = QMessageBox(parent)
    box.setIcon(
        QMessageBox.Icon.Warning if result.failed else QMessageBox.Icon.Information
    )
    box.setWindowTitle("Complete")
    box.setText(result.summary())
    finish_button = box.addButton("Finish", QMessageBox.ButtonRole.AcceptRole)
    finish_button.clicked.connect(on_finish)
    box.setWindowModality(Qt.WindowModality.ApplicationModal)
    box.show()
    return box


def show_pattern_error(parent: Optional[QWidget], message: str):
    """Blocking pattern error"""
    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Icon.Critical)
    box.setWindowTitle("Pattern Error")
    box.setText(message)
    box.addButton("Close", QMessageBox.ButtonRole.RejectRole)
    box.exec()


def show_no_files() -> int:
    """Only dialog of a session without candidates"""
    box = QMessageBox()
    box.setIcon(QMessageBox.Icon.Critical)
    box.setWindowTitle("Error")
    box.setText("No files provided!")
    box.addButton("Close", QMessageBox.ButtonRole.RejectRole)
    box.exec()
    return 0


class MissingPathsDialog(QDialog):
    """Lists command line paths that do not exist"""

    def __init__(self, paths: List[str], parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Failed to access items: ")
        self.setMinimumSize(400, 250)

        layout = QVBoxLayout(self)
        self.list_widget = QListWidget()
        self.list_widget.addItems(paths)
        layout.addWidget(self.list_widget)

        buttons = QDialogButtonBox()
        buttons.addButton("Close", QDialogButtonBox.ButtonRole.RejectRole)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)


class SettingsDialog(QDialog):
    """Edit rename options"""

    def __init__(self, options: RenameOptions, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self._options = options

        layout = QVBoxLayout(self)
        self.ignore_case_check = QCheckBox("Case-insensitive pattern")
        self.ignore_case_check.setChecked(options.ignore_case)
        layout.addWidget(self.ignore_case_check)

        self.detect_check = QCheckBox("Case-insensitive conflict detection")
        self.detect_check.setChecked(options.case_insensitive_detect)
        layout.addWidget(self.detect_check)

        log_text = str(options.log_dir) if options.log_dir else "(disabled)"
        layout.addWidget(QLabel(f"Result log directory: {log_text}"))

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def options(self) -> RenameOptions:
        """Options with the dialog's choices applied"""
        return replace(
            self._options,
            ignore_case=self.ignore_case_check.isChecked(),
            case_insensitive_detect=self.detect_check.isChecked(),
        )
