"""Unit tests for command line path classification."""

import logging

from rename_core import classify_paths


class TestClassifyPaths:
    """Tests for classify_paths."""

    def test_files_become_candidates(self, tmp_path):
        for name in ("b.txt", "a.txt"):
            (tmp_path / name).write_text(name)

        result = classify_paths([str(tmp_path / "b.txt"), str(tmp_path / "a.txt")])

        assert [item.original for item in result.items] == ["b.txt", "a.txt"]
        assert [item.renamed for item in result.items] == ["b.txt", "a.txt"]
        assert result.items[0].location == tmp_path / "b.txt"

    def test_directory_skipped(self, tmp_path, caplog):
        sub = tmp_path / "sub"
        sub.mkdir()

        with caplog.at_level(logging.DEBUG, logger="rename_core.scan_files"):
            result = classify_paths([str(sub)])

        assert result.items == []
        assert result.skipped == [str(sub)]
        assert result.missing == []
        assert "Ignoring directory" in caplog.text

    def test_missing_paths_collected(self, tmp_path):
        (tmp_path / "real.txt").write_text("x")
        missing = str(tmp_path / "nope.txt")

        result = classify_paths([missing, str(tmp_path / "real.txt")])

        assert result.missing == [missing]
        assert len(result.items) == 1

    def test_no_arguments(self):
        result = classify_paths([])

        assert result.items == []
        assert result.missing == []
