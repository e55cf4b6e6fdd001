"""Unit tests for the confirmation workflow."""

import os
import stat
from unittest.mock import MagicMock

import pytest

from rename_core import (
    CommitResult, ConfirmationWorkflow, PatternState, RenameItem, WarningKind,
    WorkflowState, commit_renames, update_renames,
)

NAMES = WarningKind.NAMES
PERMS = WarningKind.PERMISSIONS


@pytest.fixture
def fake_commit():
    """Commit stand-in that records calls instead of touching files."""
    return MagicMock(return_value=CommitResult())


@pytest.fixture
def both_problems(make_files, tmp_path):
    """Candidates with one name collision and one missing file."""
    items = make_files("a.txt", "b.txt")
    for item in items:
        item.renamed = "same.txt"
    items.append(RenameItem.from_path(tmp_path / "missing.txt"))
    return items


def _started(items, commit, **kwargs):
    workflow = ConfirmationWorkflow(items, commit=commit, **kwargs)
    workflow.start()
    return workflow


class TestNoWarnings:
    """Tests for a clean candidate set."""

    def test_commits_immediately(self, make_files, fake_commit):
        items = make_files("a.txt", "b.txt")

        workflow = _started(items, fake_commit)

        assert workflow.state is WorkflowState.COMMITTED
        assert workflow.open_warnings == set()
        fake_commit.assert_called_once()
        committed = fake_commit.call_args.args[0]
        assert [item.original for item in committed] == ["a.txt", "b.txt"]
        assert fake_commit.call_args.kwargs["attempted"] == 2

    def test_on_committed_callback(self, make_files, fake_commit):
        callback = MagicMock()

        workflow = _started(make_files("a.txt"), fake_commit, on_committed=callback)

        callback.assert_called_once_with(workflow.result)

    def test_cannot_start_twice(self, make_files, fake_commit):
        workflow = _started(make_files("a.txt"), fake_commit)

        with pytest.raises(RuntimeError):
            workflow.start()


class TestSingleWarning:
    """Tests for a single warning dialog."""

    def test_names_warning_continue(self, make_files, fake_commit):
        items = make_files("a.txt", "b.txt")
        for item in items:
            item.renamed = "same.txt"

        workflow = _started(items, fake_commit)

        assert workflow.state is WorkflowState.NAMES_WARNING
        assert workflow.check.conflicting_names == ["same.txt"]
        fake_commit.assert_not_called()

        assert workflow.continue_(NAMES) is True
        assert workflow.state is WorkflowState.COMMITTED
        fake_commit.assert_called_once()

    def test_names_warning_cancel(self, make_files, fake_commit):
        items = make_files("a.txt", "b.txt")
        for item in items:
            item.renamed = "same.txt"

        workflow = _started(items, fake_commit)
        workflow.cancel(NAMES)

        assert workflow.state is WorkflowState.ABORTED
        fake_commit.assert_not_called()

    def test_permission_warning(self, make_files, tmp_path, fake_commit):
        path = tmp_path / "locked.txt"
        path.write_text("x")
        os.chmod(path, stat.S_IRUSR)
        try:
            items = make_files("a.txt") + [RenameItem.from_path(path)]

            workflow = _started(items, fake_commit)

            assert workflow.state is WorkflowState.PERM_WARNING
            assert workflow.attempted == 1
            workflow.continue_(PERMS)
        finally:
            os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)

        # Flagged items are committed too
        assert len(fake_commit.call_args.args[0]) == 2
        assert fake_commit.call_args.kwargs["attempted"] == 1


class TestBothWarnings:
    """Tests for the two-dialog coordination."""

    def test_both_shown(self, both_problems, fake_commit):
        workflow = _started(both_problems, fake_commit)

        assert workflow.state is WorkflowState.BOTH_WARNINGS
        assert workflow.open_warnings == {NAMES, PERMS}

    @pytest.mark.parametrize("first,second", [(NAMES, PERMS), (PERMS, NAMES)])
    def test_continue_both_commits_once(self, both_problems, fake_commit, first, second):
        workflow = _started(both_problems, fake_commit)

        assert workflow.continue_(first) is False
        fake_commit.assert_not_called()
        assert workflow.continue_(second) is True

        fake_commit.assert_called_once()
        assert len(fake_commit.call_args.args[0]) == 3
        assert workflow.state is WorkflowState.COMMITTED

    @pytest.mark.parametrize("cancelled,other", [(NAMES, PERMS), (PERMS, NAMES)])
    def test_cancel_then_continue_aborts(self, both_problems, fake_commit, cancelled, other):
        """Test cancelling one warning blocks the other one's Continue."""
        workflow = _started(both_problems, fake_commit)

        workflow.cancel(cancelled)

        assert not workflow.can_continue(other)
        assert workflow.continue_(other) is False
        assert workflow.state is WorkflowState.ABORTED
        fake_commit.assert_not_called()

    def test_continue_then_cancel_aborts(self, both_problems, fake_commit):
        workflow = _started(both_problems, fake_commit)

        workflow.continue_(NAMES)
        workflow.resolve(PERMS, accepted=False)

        assert workflow.state is WorkflowState.ABORTED
        fake_commit.assert_not_called()

    def test_repeated_continue_commits_once(self, both_problems, fake_commit):
        workflow = _started(both_problems, fake_commit)

        workflow.continue_(NAMES)
        workflow.continue_(NAMES)
        workflow.continue_(PERMS)
        workflow.continue_(PERMS)

        fake_commit.assert_called_once()

    def test_no_filesystem_change_on_abort(self, both_problems, tmp_path, monkeypatch):
        """Test an aborted workflow issues no move call."""
        moves = MagicMock()
        monkeypatch.setattr(os, "rename", moves)
        workflow = _started(both_problems, commit=commit_renames)

        workflow.cancel(NAMES)
        workflow.continue_(PERMS)

        moves.assert_not_called()


class TestSnapshot:
    """Tests for the item snapshot taken on start."""

    def test_later_edits_do_not_leak(self, make_files, fake_commit):
        items = make_files("a.txt", "b.txt")
        for item in items:
            item.renamed = "same.txt"
        workflow = _started(items, fake_commit)

        items[0].renamed = "changed.txt"
        workflow.continue_(NAMES)

        committed = fake_commit.call_args.args[0]
        assert [item.renamed for item in committed] == ["same.txt", "same.txt"]


class TestEndToEnd:
    """Pattern edit to files on disk."""

    def test_rename_foo_to_baz(self, make_files, tmp_path):
        items = make_files("foo.txt", "bar.txt")
        patterns = PatternState()
        patterns.update_search("^foo")
        patterns.update_replace("baz")
        update_renames(items, patterns)

        assert [item.renamed for item in items] == ["baz.txt", "bar.txt"]

        workflow = _started(items, commit=commit_renames)

        assert workflow.state is WorkflowState.COMMITTED
        assert workflow.result.summary() == "Renamed 2 files"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["bar.txt", "baz.txt"]

    def test_collision_cancelled(self, make_files, tmp_path):
        items = make_files("a.txt", "b.txt")
        patterns = PatternState()
        patterns.update_search(".*")
        patterns.update_replace("same.txt")
        update_renames(items, patterns)

        workflow = _started(items, commit=commit_renames)

        assert workflow.check.conflicting_names == ["same.txt"]
        workflow.cancel(NAMES)

        assert workflow.result is None
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.txt", "b.txt"]
