"""Tests for the audio postprocessor."""
import pytest
from pathlib import Path
from typing import Mapping, Optional

from tidyname.core.errors import PostprocessingError, TagAccessError
from tidyname.core.models import AudioTags, Classification, RenamedFile, RenameResult
from tidyname.engines.tags import MutagenTagEditor
from tidyname.processors import AudioPostprocessor, IdentityPostprocessor, default_postprocessors


class FailingTagEditor:
    """Tag editor whose writes always fail."""

    def __init__(self, tags: AudioTags = AudioTags()):
        self._tags = tags

    def read(self, path: Path) -> AudioTags:
        return self._tags

    def write(self, path: Path, fields: Mapping[str, Optional[str]]) -> None:
        raise TagAccessError(path, "read-only medium")


def renamed_file(path: Path, original: Optional[Path] = None) -> RenamedFile:
    return RenamedFile(
        path=path,
        original_path=original or path,
        extension="mp3",
        classification=Classification.AUDIO,
    )


@pytest.fixture
def processor(rewriter):
    return AudioPostprocessor(rewriter, MutagenTagEditor())


class TestProcessFileName:
    """Tests for the name-only step."""

    @pytest.mark.parametrize("name,expected", [
        ("queen - innuendo", "queen - innuendo"),
        ("queen-innuendo", "queen - innuendo"),
        ("queen  -   innuendo - live", "queen - innuendo live"),
        ("ac-dc - back in black", "ac-dc - back in black"),
        ("no separator here", "no separator here"),
        ("artist -", "artist"),
    ])
    def test_process_file_name(self, processor, name, expected):
        assert processor.process_file_name(name) == expected

    def test_identity(self):
        assert IdentityPostprocessor().process_file_name("a - b") == "a - b"


class TestTagsFromName:
    """Tests for writing tags derived from the filename."""

    def test_artist_and_title(self, processor, tmp_path: Path, mp3_file, mp3_tags):
        path = mp3_file(tmp_path / "Queen - Innuendo.mp3")
        result = RenameResult(directory=tmp_path)

        processor.process_file(renamed_file(path), result, {path.name})

        tags = mp3_tags(path)
        assert tags["artist"] == ["Queen"]
        assert tags["albumartist"] == ["Queen"]
        assert tags["title"] == ["Innuendo"]
        assert result.count == 0

    def test_artist_only(self, processor, tmp_path: Path, mp3_file, mp3_tags):
        path = mp3_file(tmp_path / "Queen.mp3")

        processor.process_file(renamed_file(path), RenameResult(directory=tmp_path), set())

        tags = mp3_tags(path)
        assert tags["artist"] == ["Queen"]
        assert "title" not in tags

    def test_clears_album_fields(self, processor, tmp_path: Path, mp3_file, mp3_tags):
        """Test album, genre, year and track are removed."""
        path = mp3_file(tmp_path / "Queen - Innuendo.mp3", artist="Queen")
        tags = mp3_tags(path)
        tags["album"] = "Innuendo"
        tags["genre"] = "Rock"
        tags["date"] = "1991"
        tags["tracknumber"] = "1"
        tags.save()

        processor.process_file(renamed_file(path), RenameResult(directory=tmp_path), set())

        tags = mp3_tags(path)
        for key in ("album", "genre", "date", "tracknumber"):
            assert key not in tags

    def test_write_failure_names_phase(self, rewriter, tmp_path: Path, mp3_file):
        path = mp3_file(tmp_path / "Queen - Innuendo.mp3")
        processor = AudioPostprocessor(rewriter, FailingTagEditor())

        with pytest.raises(PostprocessingError) as exc_info:
            processor.process_file(renamed_file(path), RenameResult(directory=tmp_path), set())

        assert exc_info.value.phase == "tag write"
        assert isinstance(exc_info.value.cause, TagAccessError)


class TestNameFromTags:
    """Tests for renaming from existing tags."""

    def test_renames_from_tags(self, processor, tmp_path: Path, mp3_file):
        original = tmp_path / "01 - some name.mp3"
        path = mp3_file(tmp_path / "Some Name.mp3", artist="Queen", title="Bohemian Rhapsody")
        result = RenameResult(directory=tmp_path)
        result.record(path, original)
        taken = {original.name, path.name}

        processor.process_file(renamed_file(path, original), result, taken)

        expected = tmp_path / "Queen - Bohemian Rhapsody.mp3"
        assert expected.exists()
        assert not path.exists()
        assert result.renamed == {expected: original}
        assert expected.name in taken

    def test_tag_values_cleaned(self, processor, tmp_path: Path, mp3_file):
        """Test noise and unsafe characters in tags never reach the filename."""
        path = mp3_file(tmp_path / "x.mp3", artist="AC/DC", title="Thunderstruck (Official Video)")

        processor.process_file(renamed_file(path), RenameResult(directory=tmp_path), set())

        assert (tmp_path / "Ac-dc - Thunderstruck.mp3").exists()

    def test_tag_name_collision(self, rewriter, fixed_clock, tmp_path: Path, mp3_file):
        """Test the collision prefix comes from the injected clock."""
        processor = AudioPostprocessor(rewriter, MutagenTagEditor(), clock=fixed_clock)
        path = mp3_file(tmp_path / "x.mp3", artist="Queen", title="Innuendo")
        taken = {"Queen - Innuendo.mp3"}

        processor.process_file(renamed_file(path), RenameResult(directory=tmp_path), taken)

        assert [p.name for p in tmp_path.iterdir()] == ["(1000) Queen - Innuendo.mp3"]
        assert "(1000) Queen - Innuendo.mp3" in taken

    def test_registry_passes_clock(self, rewriter, tmp_path: Path, mp3_file):
        registry = default_postprocessors(rewriter, MutagenTagEditor(), clock=lambda: 42)
        path = mp3_file(tmp_path / "x.mp3", artist="Queen", title="Innuendo")

        registry[Classification.AUDIO].process_file(
            renamed_file(path), RenameResult(directory=tmp_path), {"Queen - Innuendo.mp3"}
        )

        assert (tmp_path / "(42) Queen - Innuendo.mp3").exists()

    def test_already_matching(self, processor, tmp_path: Path, mp3_file):
        path = mp3_file(tmp_path / "Queen - Innuendo.mp3", artist="queen", title="innuendo")
        result = RenameResult(directory=tmp_path)

        processor.process_file(renamed_file(path), result, {path.name})

        assert path.exists()
        assert result.count == 0

    def test_read_failure_names_phase(self, processor, tmp_path: Path):
        path = tmp_path / "broken.flac"
        path.write_bytes(b"\x00" * 32)

        with pytest.raises(PostprocessingError) as exc_info:
            processor.process_file(renamed_file(path), RenameResult(directory=tmp_path), set())

        assert exc_info.value.phase == "tag read"


class TestRegistry:
    """Tests for the default postprocessor registry."""

    def test_audio_registered(self, rewriter):
        registry = default_postprocessors(rewriter, MutagenTagEditor())
        assert isinstance(registry[Classification.AUDIO], AudioPostprocessor)
        assert Classification.VIDEO not in registry
