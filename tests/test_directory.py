"""Tests for directory listing service."""
import os
import pytest
from pathlib import Path

from tidyname.core.errors import ConfigurationError
from tidyname.core.models import ExtensionFilter
from tidyname.services.directory import DirectoryView, is_hidden, is_renameable


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create a small directory tree."""
    (tmp_path / "b.mp3").touch()
    (tmp_path / "A.mp3").touch()
    (tmp_path / "c.txt").touch()
    (tmp_path / ".hidden.mp3").touch()
    sub = tmp_path / "Sub"
    sub.mkdir()
    (sub / "d.mp3").touch()
    deeper = sub / "deeper"
    deeper.mkdir()
    (deeper / "e.mp3").touch()
    return tmp_path


class TestDirectoryView:
    """Tests for DirectoryView."""

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(ConfigurationError):
            DirectoryView(tmp_path / "missing")

    def test_file_is_not_a_directory(self, tmp_path: Path):
        path = tmp_path / "file.txt"
        path.touch()
        with pytest.raises(ConfigurationError):
            DirectoryView(path)

    def test_listing_case_insensitive_order(self, tree: Path):
        view = DirectoryView(tree)
        names = view.names(ExtensionFilter.of(["mp3"]))
        assert names == [".hidden.mp3", "A.mp3", "b.mp3"]

    def test_listing_without_filter(self, tree: Path):
        view = DirectoryView(tree)
        assert "Sub" in view.names()
        assert "c.txt" in view.names()

    def test_listing_with_directories(self, tree: Path):
        view = DirectoryView(tree)
        names = view.names(ExtensionFilter.of(["txt"]).with_directories())
        assert names == ["c.txt", "Sub"]

    def test_snapshot_is_fixed(self, tree: Path):
        """Test files created later show up live but not in the snapshot."""
        view = DirectoryView(tree)
        (tree / "new.mp3").touch()

        assert "new.mp3" not in view.snapshot_names()
        assert "new.mp3" in view.names()

    def test_listing_recursive(self, tree: Path):
        """Test every subdirectory is descended even when directories are filtered out."""
        view = DirectoryView(tree)
        names = [p.name for p in view.listing_recursive(ExtensionFilter.of(["mp3"]))]
        assert names == [".hidden.mp3", "A.mp3", "b.mp3", "d.mp3", "e.mp3"]

    def test_listing_recursive_with_directories(self, tree: Path):
        view = DirectoryView(tree)
        names = [p.name for p in view.listing_recursive(ExtensionFilter.of(["txt"]).with_directories())]
        assert names == ["c.txt", "deeper", "Sub"]

    def test_path_is_absolute(self, tree: Path, monkeypatch):
        monkeypatch.chdir(tree)
        path = DirectoryView("Sub").path
        assert path.is_absolute()
        assert path.resolve() == (tree / "Sub").resolve()


class TestEligibility:
    """Tests for hidden/permission checks."""

    def test_dot_file_hidden(self, tmp_path: Path):
        assert is_hidden(tmp_path / ".secret")
        assert not is_hidden(tmp_path / "visible")

    def test_renameable(self, tmp_path: Path):
        path = tmp_path / "song.mp3"
        path.touch()
        assert is_renameable(path)

    def test_hidden_not_renameable(self, tmp_path: Path):
        path = tmp_path / ".song.mp3"
        path.touch()
        assert not is_renameable(path)

    def test_unwritable_not_renameable(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "song.mp3"
        path.touch()
        monkeypatch.setattr(os, "access", lambda p, mode: False)
        assert not is_renameable(path)
