"""Tests for filename helpers."""
import pytest
from pathlib import Path

from tidyname.engines.naming import (
    capitalize_fully,
    collapse_spaces,
    is_occupied,
    resolve_collision,
    sanitize_filename,
    unescape_markup,
)


class TestCapitalizeFully:
    """Tests for whitespace-delimited title case."""

    @pytest.mark.parametrize("text,expected", [
        ("the beatles - let it be.mp3", "The Beatles - Let It Be.mp3"),
        ("ac-dc - it's a long way", "Ac-dc - It's A Long Way"),
        ("SHOUTING words", "Shouting Words"),
        ("", ""),
    ])
    def test_capitalize(self, text, expected):
        assert capitalize_fully(text) == expected


class TestTextHelpers:
    """Tests for small text helpers."""

    @pytest.mark.parametrize("text,expected", [
        ("rock &amp; roll", "rock & roll"),
        ("&lt;live&gt; &quot;x&quot; it&apos;s", "<live> \"x\" it's"),
        ("caf&#233; &#xE9;", "café é"),
        ("a&copy b", "a&copy b"),
        ("a &copy; b", "a &copy; b"),
        ("fish &amp chips", "fish &amp chips"),
        ("&#99999999999;", "&#99999999999;"),
    ])
    def test_unescape(self, text, expected):
        """Test only XML entities and numeric references are resolved."""
        assert unescape_markup(text) == expected

    def test_sanitize(self):
        assert sanitize_filename('ac/dc: "live"?') == "ac-dc live"

    def test_collapse_spaces(self):
        assert collapse_spaces("  a   b \t c ") == "a b c"


class TestCollisionResolution:
    """Tests for timestamp-prefixed collision handling."""

    def test_free_name(self, tmp_path: Path):
        assert resolve_collision(tmp_path, "Song.mp3", set(), clock=lambda: 5) == "Song.mp3"

    def test_taken_name(self, tmp_path: Path):
        assert resolve_collision(tmp_path, "Song.mp3", {"Song.mp3"}, clock=lambda: 5) == "(5) Song.mp3"

    def test_existing_file(self, tmp_path: Path):
        (tmp_path / "Song.mp3").touch()
        assert resolve_collision(tmp_path, "Song.mp3", set(), clock=lambda: 5) == "(5) Song.mp3"

    def test_prefixed_name_also_taken(self, tmp_path: Path):
        """Test the timestamp is bumped until the name is free."""
        taken = {"Song.mp3", "(5) Song.mp3", "(6) Song.mp3"}
        assert resolve_collision(tmp_path, "Song.mp3", taken, clock=lambda: 5) == "(7) Song.mp3"

    def test_source_itself_is_not_a_clash(self, tmp_path: Path):
        source = tmp_path / "Song.mp3"
        source.touch()
        assert not is_occupied(tmp_path, "Song.mp3", set(), source=source)
        assert is_occupied(tmp_path, "Song.mp3", set())
