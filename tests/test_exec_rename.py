"""Unit tests for rename execution."""

import json
import os

import pytest

from rename_core import RenameIoError, commit_renames, rename_item


def names_in(directory):
    return sorted(p.name for p in directory.iterdir())


class TestRenameItem:
    """Tests for renaming a single candidate."""

    def test_renames_in_same_directory(self, make_files, tmp_path):
        item, = make_files("foo.txt")
        item.renamed = "bar.txt"

        new_path = item.rename()

        assert new_path == tmp_path / "bar.txt"
        assert names_in(tmp_path) == ["bar.txt"]
        assert new_path.read_text() == "foo.txt"

    def test_missing_source(self, make_files, tmp_path):
        item, = make_files("foo.txt")
        (tmp_path / "foo.txt").unlink()
        item.renamed = "bar.txt"

        with pytest.raises(RenameIoError) as exc_info:
            rename_item(item)

        assert exc_info.value.item is item

    @pytest.mark.parametrize("name", ["", "sub/file.txt", ".."])
    def test_rejects_names_leaving_directory(self, make_files, tmp_path, name):
        item, = make_files("foo.txt")
        item.renamed = name

        with pytest.raises(RenameIoError):
            rename_item(item)

        assert names_in(tmp_path) == ["foo.txt"]

    def test_does_not_overwrite(self, make_files, tmp_path):
        item, _ = make_files("foo.txt", "bar.txt")
        item.renamed = "bar.txt"

        with pytest.raises(RenameIoError):
            rename_item(item)

        assert (tmp_path / "bar.txt").read_text() == "bar.txt"


class TestCommitRenames:
    """Tests for batch commits."""

    def test_renames_all(self, make_files, tmp_path):
        items = make_files("foo.txt", "bar.txt")
        items[0].renamed = "baz.txt"

        result = commit_renames(items)

        assert names_in(tmp_path) == ["bar.txt", "baz.txt"]
        assert result.success_count == 2
        assert result.summary() == "Renamed 2 files"

    def test_failure_does_not_stop_batch(self, make_files, tmp_path):
        """Test a failing item is reported and the rest still run."""
        items = make_files("a.txt", "b.txt", "c.txt")
        (tmp_path / "a.txt").unlink()
        for item in items:
            item.renamed = item.original.upper()

        result = commit_renames(items, attempted=3)

        assert result.attempted == 3
        assert result.success_count == 2
        assert [item.original for item, _ in result.failed] == ["a.txt"]
        assert "Failed to rename 1 files" in result.summary()
        assert set(names_in(tmp_path)) == {"B.TXT", "C.TXT"}

    def test_swap_names(self, make_files, tmp_path):
        """Test two files exchanging names keep their contents."""
        a, b = make_files("a.txt", "b.txt")
        a.renamed = "b.txt"
        b.renamed = "a.txt"

        result = commit_renames([a, b])

        assert result.failed == []
        assert (tmp_path / "a.txt").read_text() == "b.txt"
        assert (tmp_path / "b.txt").read_text() == "a.txt"
        assert names_in(tmp_path) == ["a.txt", "b.txt"]

    def test_blocked_chain_leaves_files_in_place(self, make_files, tmp_path):
        """Test a chain ending on a file that stays put moves nothing aside."""
        a, b, c = make_files("a.txt", "b.txt", "c.txt")
        a.renamed = "b.txt"
        c.renamed = "a.txt"

        result = commit_renames([c, a, b])

        assert names_in(tmp_path) == ["a.txt", "b.txt", "c.txt"]
        assert sorted(item.original for item, _ in result.failed) == ["a.txt", "c.txt"]
        for _, reason in result.failed:
            assert reason == "Destination already exists"
        assert (tmp_path / "c.txt").read_text() == "c.txt"

    def test_stranded_file_location_reported(self, make_files, tmp_path):
        """Test a file that cannot go back names its temporary path."""
        (tmp_path / "z.txt").write_text("z.txt")
        a, c, d = make_files("a.txt", "c.txt", "d.txt")
        a.renamed = "z.txt"
        c.renamed = "a.txt"
        d.renamed = "c.txt"

        result = commit_renames([a, d, c])

        assert (tmp_path / "c.txt").read_text() == "d.txt"
        hidden, = [p for p in tmp_path.iterdir() if p.name.startswith(".__tmp_rename__")]
        assert hidden.read_text() == "c.txt"
        reasons = dict((item.original, reason) for item, reason in result.failed)
        assert str(hidden) in reasons["c.txt"]
        assert str(hidden) in result.summary()

    def test_result_log(self, make_files, tmp_path):
        items = make_files("a.txt")
        items[0].renamed = "z.txt"
        log_dir = tmp_path / "logs"

        commit_renames(items, log_dir=log_dir)

        log_file, = log_dir.iterdir()
        data = json.loads(log_file.read_text(encoding="utf-8"))
        assert data["success_count"] == 1
        assert data["renamed"][0]["dst"] == str(tmp_path / "z.txt")

    def test_uses_os_rename(self, make_files, monkeypatch):
        items = make_files("a.txt")
        items[0].renamed = "b.txt"
        moves = []
        monkeypatch.setattr(os, "rename", lambda src, dst: moves.append((src, dst)))

        commit_renames(items)

        assert moves == [(items[0].location, items[0].destination)]
