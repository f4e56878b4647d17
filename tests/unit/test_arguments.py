"""
Unit tests for the flat command-line argument list.
"""
import pytest

from ffmpeg_composer.arguments import Argument, ArgumentList, command_key
from ffmpeg_composer.common import ContractError


class TestArgument:
    """Tests for a single argument."""

    def test_key_gets_prefixed(self):
        assert Argument("codec").key == "-codec"

    def test_prefixed_key_is_kept(self):
        assert Argument("-codec").key == "-codec"
        assert command_key("-i") == "-i"

    def test_none_key_raises(self):
        with pytest.raises(ContractError):
            Argument(None)

    def test_flag_renders_key_only(self):
        assert Argument("y").tokens() == ["-y"]

    def test_output_marker_renders_value_only(self):
        assert Argument("-", "out.mp4").tokens() == ["out.mp4"]

    def test_quoted_value(self):
        assert Argument("metadata", "title=My Movie", quoted=True).tokens() == [
            "-metadata", '"title=My Movie"',
        ]


class TestArgumentList:
    """Tests for insertion, uniqueness and rendering."""

    @pytest.fixture
    def arguments(self):
        return ArgumentList()

    def test_unique_put_updates_in_place(self, arguments):
        """A unique key keeps its first position and takes the latest value."""
        arguments.put("x", 1)
        arguments.put("y", "a")
        arguments.put("x", 2)

        assert len(arguments) == 2
        assert arguments.render() == ["-x", "2", "-y", "a"]

    def test_non_unique_put_appends(self, arguments):
        arguments.put("x", 1, unique=False)
        arguments.put("x", 2, unique=False)

        assert len(arguments) == 2
        assert arguments.render() == ["-x", "1", "-x", "2"]

    def test_put_returns_position_id(self, arguments):
        first = arguments.put("a")
        second = arguments.put("b")

        assert first == 0
        assert second == 1
        assert arguments.put("a", 5) == first

    def test_put_none_key_raises(self, arguments):
        with pytest.raises(ContractError):
            arguments.put(None, 1)

    def test_values_are_normalized(self, arguments):
        arguments.put("t", 4.0)
        arguments.put("ss", 1.23456)

        assert arguments.render() == ["-t", "4", "-ss", "1.235"]

    def test_find_and_exists(self, arguments):
        arguments.put("crf", 23)

        assert arguments.exists("crf")
        assert "-crf" in arguments
        assert arguments.find("crf").value == "23"
        assert arguments.find("preset") is None

    def test_remove(self, arguments):
        arguments.put("an")
        arguments.put("vn")
        arguments.remove("an")

        assert arguments.render() == ["-vn"]

    def test_remove_missing_key_is_noop(self, arguments):
        arguments.put("an")
        arguments.remove("missing")

        assert len(arguments) == 1

    def test_replace_only_touches_existing(self, arguments):
        arguments.put("r", 25)
        arguments.replace("r", 30)
        arguments.replace("s", "hd720")

        assert arguments.render() == ["-r", "30"]

    def test_render_with_prefix(self, arguments):
        arguments.put("i", "in.mp4", unique=False)
        arguments.put("-", "out.mp4")

        assert arguments.render("ffmpeg") == ["ffmpeg", "-i", "in.mp4", "out.mp4"]

    def test_str(self, arguments):
        assert str(arguments) == "[]"
        arguments.put("y")
        arguments.put("i", "a.mp4", unique=False)
        assert str(arguments) == "[-y -i a.mp4]"
