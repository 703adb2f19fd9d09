"""Tests for the recursive Finder."""

import os
from pathlib import Path

import pytest
from fskit.exceptions import FileNotFound, UnsupportedFilter
from fskit.finder.finder import SNAPSHOT_PROPERTIES, Finder
from fskit.finder.models import FileEntry


def _relative(finder: Finder) -> list[str]:
    """Relative pathnames of everything a finder yields."""
    return finder.get("relative_pathname")


class TestIteration:
    """Tests for traversal order and mode selection."""

    def test_files_depth_first_sorted(self, sample_tree: Path) -> None:
        """Files are yielded depth-first with siblings sorted by name."""
        finder = Finder.create().files().in_directory(sample_tree)
        assert _relative(finder) == ["a.txt", "b.md", "sub/c.txt", "sub/deep/d.txt"]

    def test_directories(self, sample_tree: Path) -> None:
        """directories() yields only directories."""
        finder = Finder.create().directories().in_directory(sample_tree)
        assert _relative(finder) == ["empty", "sub", "sub/deep"]

    def test_no_mode_yields_everything(self, sample_tree: Path) -> None:
        """Without files()/directories() every entry is yielded."""
        assert Finder.create().in_directory(sample_tree).count() == 7

    def test_multiple_roots(self, sample_tree: Path) -> None:
        """Every root is searched in order."""
        finder = Finder.create().files().in_directory(sample_tree / "sub", sample_tree / "empty")
        assert _relative(finder) == ["c.txt", "deep/d.txt"]

    def test_yields_file_entries(self, sample_tree: Path) -> None:
        """Iteration yields FileEntry handles with full and relative paths."""
        entries = list(Finder.create().files().in_directory(sample_tree).name("c.txt"))

        assert entries == [
            FileEntry(pathname=str(sample_tree / "sub" / "c.txt"), relative_pathname="sub/c.txt")
        ]

    def test_without_directory(self) -> None:
        """Iterating before in_directory() raises ValueError."""
        with pytest.raises(ValueError, match="in_directory"):
            Finder.create().all()

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root raises FileNotFound."""
        with pytest.raises(FileNotFound):
            Finder.create().in_directory(tmp_path / "missing").all()

    def test_dot_files(self, sample_tree: Path) -> None:
        """Dot files are found unless ignored."""
        (sample_tree / ".hidden").write_text("x")

        assert ".hidden" in _relative(Finder.create().files().in_directory(sample_tree))
        ignoring = Finder.create().files().in_directory(sample_tree).ignore_dot_files()
        assert ".hidden" not in _relative(ignoring)

    def test_symlinked_directory_not_descended(self, sample_tree: Path) -> None:
        """Symlinked directories are yielded but only descended with follow_links()."""
        (sample_tree / "link").symlink_to(sample_tree / "sub", target_is_directory=True)

        finder = Finder.create().in_directory(sample_tree)
        found = _relative(finder)
        assert "link" in found
        assert "link/c.txt" not in found

        following = Finder.create().files().in_directory(sample_tree).follow_links()
        assert "link/c.txt" in _relative(following)


class TestFilters:
    """Tests for individual filter methods."""

    def test_name_glob(self, sample_tree: Path) -> None:
        """Name globs match basenames."""
        finder = Finder.create().files().in_directory(sample_tree).name("*.txt")
        assert _relative(finder) == ["a.txt", "sub/c.txt", "sub/deep/d.txt"]

    def test_name_patterns_are_ored(self, sample_tree: Path) -> None:
        """Repeated name filters accept any match."""
        finder = Finder.create().files().in_directory(sample_tree).name("a.*").name("*.md")
        assert _relative(finder) == ["a.txt", "b.md"]

    def test_name_brace_alternation(self, sample_tree: Path) -> None:
        """{a,b} groups in a name glob match any alternative."""
        finder = Finder.create().files().in_directory(sample_tree).name("*.{txt,md}")
        assert finder.get("basename") == ["a.txt", "b.md", "c.txt", "d.txt"]

    def test_name_nested_braces(self, sample_tree: Path) -> None:
        finder = Finder.create().files().in_directory(sample_tree).name("{a,{c,d}}.txt")
        assert _relative(finder) == ["a.txt", "sub/c.txt", "sub/deep/d.txt"]

    def test_name_several_brace_groups(self, sample_tree: Path) -> None:
        finder = Finder.create().files().in_directory(sample_tree).name("{a,b}.{md,txt}")
        assert _relative(finder) == ["a.txt", "b.md"]

    def test_not_name_brace_alternation(self, sample_tree: Path) -> None:
        finder = Finder.create().files().in_directory(sample_tree).not_name("{a,c}.*")
        assert _relative(finder) == ["b.md", "sub/deep/d.txt"]

    def test_unbalanced_brace_is_literal(self, tmp_path: Path) -> None:
        """A '{' without a closing brace matches itself."""
        (tmp_path / "{draft.txt").write_text("x")
        (tmp_path / "draft.txt").write_text("x")

        finder = Finder.create().files().in_directory(tmp_path).name("{draft.*")
        assert finder.get("basename") == ["{draft.txt"]

    def test_name_regex(self, sample_tree: Path) -> None:
        """/delimited/ names are regular expressions."""
        finder = Finder.create().files().in_directory(sample_tree).name("/^[cd]\\./")
        assert _relative(finder) == ["sub/c.txt", "sub/deep/d.txt"]

    def test_not_name(self, sample_tree: Path) -> None:
        """not_name rejects matching basenames."""
        finder = Finder.create().files().in_directory(sample_tree).not_name("*.txt")
        assert _relative(finder) == ["b.md"]

    def test_path_substring(self, sample_tree: Path) -> None:
        """path matches a substring of the relative pathname."""
        finder = Finder.create().files().in_directory(sample_tree).path("deep")
        assert _relative(finder) == ["sub/deep/d.txt"]

    def test_not_path(self, sample_tree: Path) -> None:
        """not_path rejects matching relative pathnames."""
        finder = Finder.create().files().in_directory(sample_tree).not_path("sub/")
        assert _relative(finder) == ["a.txt", "b.md"]

    def test_depth_zero(self, sample_tree: Path) -> None:
        """depth(0) restricts to immediate children."""
        finder = Finder.create().files().in_directory(sample_tree).depth(0)
        assert _relative(finder) == ["a.txt", "b.md"]

    def test_depth_expressions(self, sample_tree: Path) -> None:
        """Depth accepts comparison expressions."""
        shallow = Finder.create().files().in_directory(sample_tree).depth("< 2")
        assert _relative(shallow) == ["a.txt", "b.md", "sub/c.txt"]

        nested = Finder.create().files().in_directory(sample_tree).depth(">= 1")
        assert _relative(nested) == ["sub/c.txt", "sub/deep/d.txt"]

    def test_size(self, sample_tree: Path) -> None:
        """size compares file sizes in bytes."""
        finder = Finder.create().files().in_directory(sample_tree).size("> 5")
        assert _relative(finder) == ["b.md", "sub/c.txt"]

    def test_date(self, sample_tree: Path) -> None:
        """date compares modification times."""
        old = sample_tree / "a.txt"
        os.utime(old, (946684800, 946684800))  # 2000-01-01

        finder = Finder.create().files().in_directory(sample_tree).date("before 2001-01-01")
        assert _relative(finder) == ["a.txt"]

    def test_contains(self, sample_tree: Path) -> None:
        """contains matches file contents and never directories."""
        finder = Finder.create().in_directory(sample_tree).contains("needle")
        assert _relative(finder) == ["sub/c.txt"]

    def test_not_contains(self, sample_tree: Path) -> None:
        """not_contains rejects files whose contents match."""
        finder = Finder.create().files().in_directory(sample_tree).not_contains("/a$/")
        assert _relative(finder) == ["b.md", "sub/c.txt"]

    def test_exclude(self, sample_tree: Path) -> None:
        """exclude skips a directory and everything below it."""
        finder = Finder.create().in_directory(sample_tree).exclude("deep")
        assert _relative(finder) == ["a.txt", "b.md", "empty", "sub", "sub/c.txt"]


class TestApplyFilters:
    """Tests for bulk filter registration."""

    def test_equivalent_forms(self, sample_tree: Path) -> None:
        """String, list and name mapping select identical entries."""
        results = [
            _relative(Finder.create().files().in_directory(sample_tree).apply_filters(spec))
            for spec in ("*.txt", ["*.txt"], {"name": "*.txt"})
        ]
        assert results[0] == results[1] == results[2]
        assert results[0] == ["a.txt", "sub/c.txt", "sub/deep/d.txt"]

    def test_mapping_with_lists(self, sample_tree: Path) -> None:
        """Each pattern of a key is registered."""
        finder = (
            Finder.create()
            .files()
            .in_directory(sample_tree)
            .apply_filters({"name": ["a.txt", "d.txt"], "notPath": "deep"})
        )
        assert _relative(finder) == ["a.txt"]

    def test_unknown_filter(self, sample_tree: Path) -> None:
        """Unknown filter keys raise before any traversal."""
        finder = Finder.create().files().in_directory(sample_tree)
        with pytest.raises(UnsupportedFilter):
            finder.apply_filters({"owner": "root"})


class TestResults:
    """Tests for get/first/last/all/to_list."""

    def test_get_without_properties(self, sample_tree: Path) -> None:
        """get() returns FileEntry objects."""
        results = Finder.create().files().in_directory(sample_tree).get()
        assert all(isinstance(r, FileEntry) for r in results)
        assert len(results) == 4

    def test_get_limit(self, sample_tree: Path) -> None:
        """limit caps the number of results."""
        finder = Finder.create().files().in_directory(sample_tree)
        assert finder.get("basename", limit=2) == ["a.txt", "b.md"]
        assert finder.get("basename", limit=0) == []

    def test_get_property_list(self, sample_tree: Path) -> None:
        """A property list yields ordered dicts."""
        results = Finder.create().directories().in_directory(sample_tree).get(["basename", "is_dir"])
        assert results[0] == {"basename": "empty", "is_dir": True}
        assert all(list(r) == ["basename", "is_dir"] for r in results)

    def test_first(self, sample_tree: Path) -> None:
        """first() equals the first element of get()."""
        finder = Finder.create().files().in_directory(sample_tree)
        assert finder.first("pathname") == finder.get("pathname")[0]

    def test_first_empty(self, sample_tree: Path) -> None:
        """first() returns None when nothing is found."""
        assert Finder.create().in_directory(sample_tree / "empty").first() is None

    def test_last(self, sample_tree: Path) -> None:
        """last() projects the final element of all()."""
        finder = Finder.create().files().in_directory(sample_tree)
        assert finder.last("basename") == finder.all()[-1].get_basename()
        assert finder.last() == finder.all()[-1]

    def test_last_single_entry(self, sample_tree: Path) -> None:
        """last() works for a single entry."""
        finder = Finder.create().files().in_directory(sample_tree / "sub" / "deep")
        assert finder.last("name") == "d.txt"

    def test_last_empty(self, sample_tree: Path) -> None:
        """last() returns None when nothing is found."""
        assert Finder.create().in_directory(sample_tree / "empty").last("name") is None

    def test_to_list(self, sample_tree: Path) -> None:
        """to_list() returns a snapshot dict per entry."""
        snapshot = Finder.create().files().in_directory(sample_tree).name("a.txt").to_list()

        assert len(snapshot) == 1
        assert tuple(snapshot[0]) == SNAPSHOT_PROPERTIES
        assert snapshot[0]["name"] == "a.txt"
        assert snapshot[0]["filename"] == "a"
        assert snapshot[0]["type"] == "file"
        assert snapshot[0]["path"] == str(sample_tree)
        assert snapshot[0]["real_path"] == str((sample_tree / "a.txt").resolve())
