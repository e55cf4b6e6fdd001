"""
workflow.py - Confirmation Workflow

Decides which warnings have to be confirmed before the renames run, and
makes sure the renames run at most once, only after every shown warning
was answered with Continue.

The workflow holds no UI. A front end calls start(), shows one dialog per
kind in open_warnings, and reports each answer with continue_() or
cancel().
"""

from dataclasses import replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Set
import logging

from .models_fs import RenameItem, CheckResult, CommitResult, RenameOptions
from .plan_rename import check_renames
from .exec_rename import commit_renames

logger = logging.getLogger(__name__)


class WarningKind(Enum):
    """Warning dialog kinds"""
    NAMES = "names"
    PERMISSIONS = "permissions"


class WorkflowState(Enum):
    """Workflow states"""
    IDLE = "idle"
    CHECKING = "checking"
    NO_WARNINGS = "no_warnings"
    NAMES_WARNING = "names_warning"
    PERM_WARNING = "perm_warning"
    BOTH_WARNINGS = "both_warnings"
    COMMITTED = "committed"
    ABORTED = "aborted"


_STATE_FOR_OPEN = {
    frozenset(): WorkflowState.NO_WARNINGS,
    frozenset({WarningKind.NAMES}): WorkflowState.NAMES_WARNING,
    frozenset({WarningKind.PERMISSIONS}): WorkflowState.PERM_WARNING,
    frozenset({WarningKind.NAMES, WarningKind.PERMISSIONS}): WorkflowState.BOTH_WARNINGS,
}

CommitFunc = Callable[..., CommitResult]


class ConfirmationWorkflow:
    """Check, confirm and commit one Apply request"""

    def __init__(
        self,
        items: Sequence[RenameItem],
        options: Optional[RenameOptions] = None,
        commit: CommitFunc = commit_renames,
        on_committed: Optional[Callable[[CommitResult], None]] = None
    ):
        # Later pattern edits must not change what gets committed
        self.items: List[RenameItem] = [replace(item) for item in items]
        self.options = options or RenameOptions()
        self.commit = commit
        self.on_committed = on_committed

        self.state = WorkflowState.IDLE
        self.check: Optional[CheckResult] = None
        self.result: Optional[CommitResult] = None
        self.open_warnings: Set[WarningKind] = set()
        self.shown_warnings: Set[WarningKind] = set()

    @property
    def finished(self) -> bool:
        return self.state in (WorkflowState.COMMITTED, WorkflowState.ABORTED)

    @property
    def attempted(self) -> int:
        """Candidates minus permission-flagged ones"""
        if self.check is None:
            return len(self.items)
        return len(self.items) - len(self.check.permission_problems)

    def start(self) -> CheckResult:
        """
        Validate the snapshot and open the needed warnings

        Commits right away when nothing is wrong.

        Returns:
            Check result
        """
        if self.state is not WorkflowState.IDLE:
            raise RuntimeError(f"Workflow already started (state: {self.state.value})")

        self.state = WorkflowState.CHECKING
        self.check = check_renames(self.items, self.options)

        if self.check.has_conflicts:
            self.open_warnings.add(WarningKind.NAMES)
        if self.check.has_permission_problems:
            self.open_warnings.add(WarningKind.PERMISSIONS)
        self.shown_warnings = set(self.open_warnings)

        self._update_state()
        logger.debug("Check finished, state: %s", self.state.value)

        if not self.open_warnings:
            self._commit()
        return self.check

    def can_continue(self, kind: WarningKind) -> bool:
        """Whether the Continue button of a warning may be used"""
        return kind in self.open_warnings and self.state is not WorkflowState.ABORTED

    def continue_(self, kind: WarningKind) -> bool:
        """
        User acknowledged a warning

        Returns:
            Whether this answer triggered the commit
        """
        if not self.can_continue(kind):
            logger.debug("Ignoring Continue on %s (state: %s)", kind.value, self.state.value)
            return False

        self.open_warnings.discard(kind)
        if self.open_warnings:
            # The other warning's Continue will commit
            self._update_state()
            return False

        self._commit()
        return True

    def cancel(self, kind: WarningKind) -> None:
        """User cancelled a warning, the whole operation is aborted"""
        self.open_warnings.discard(kind)
        if self.state is WorkflowState.COMMITTED:
            return
        if self.state is not WorkflowState.ABORTED:
            logger.info("Rename cancelled on %s warning", kind.value)
        self.state = WorkflowState.ABORTED

    def resolve(self, kind: WarningKind, accepted: bool) -> bool:
        """Report a dialog answer, returns whether it triggered the commit"""
        if accepted:
            return self.continue_(kind)
        self.cancel(kind)
        return False

    def _update_state(self) -> None:
        self.state = _STATE_FOR_OPEN[frozenset(self.open_warnings)]

    def _commit(self) -> None:
        if self.state is WorkflowState.COMMITTED:
            return
        attempted = self.attempted
        self.state = WorkflowState.COMMITTED
        self.result = self.commit(
            self.items,
            attempted=attempted,
            log_dir=self.options.log_dir,
        )
        if self.on_committed:
            self.on_committed(self.result)
