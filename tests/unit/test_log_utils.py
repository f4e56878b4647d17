"""Tests for log_utils: log injection sanitizer and line truncation."""

import logging

from ffmpeg_composer.log_utils import (
    _safe_record_factory,
    install_safe_logging,
    sanitize,
    truncate_line,
)


class TestSanitize:
    def test_strips_newlines(self):
        assert sanitize("line1\nline2") == "line1\\nline2"

    def test_strips_carriage_returns(self):
        assert sanitize("line1\rline2") == "line1\\rline2"

    def test_strips_crlf(self):
        assert sanitize("line1\r\nline2") == "line1\\r\\nline2"

    def test_passes_non_strings(self):
        assert sanitize(42) == 42
        assert sanitize(None) is None

    def test_clean_string_unchanged(self):
        assert sanitize("scale=1280:720") == "scale=1280:720"


class TestTruncateLine:
    def test_short_line_unchanged(self):
        assert truncate_line("short") == "short"

    def test_line_at_limit_unchanged(self):
        assert truncate_line("x" * 120) == "x" * 120

    def test_long_line_truncated(self):
        assert truncate_line("x" * 121) == "x" * 120 + "..."

    def test_custom_limit(self):
        assert truncate_line("abcdef", limit=3) == "abc..."


class TestSafeRecordFactory:
    """Test the factory function directly."""

    def _make_record(self, msg, args):
        return _safe_record_factory(
            "test", logging.INFO, __file__, 0, msg, args, None,
        )

    def test_sanitizes_tuple_args(self):
        record = self._make_record("%s command: %s", ("ffmpeg", "-i evil\nINFO forged"))
        assert record.getMessage() == "ffmpeg command: -i evil\\nINFO forged"

    def test_sanitizes_dict_args(self):
        record = self._make_record("path=%(path)s", ({"path": "a\nb"},))
        assert record.getMessage() == "path=a\\nb"

    def test_no_args_unchanged(self):
        record = self._make_record("Simple message", None)
        assert record.getMessage() == "Simple message"

    def test_non_string_args_passed_through(self):
        record = self._make_record("Count: %d", (42,))
        assert record.getMessage() == "Count: 42"


class TestInstallSafeLogging:
    def test_installs_factory(self):
        original = logging.getLogRecordFactory()
        try:
            install_safe_logging()
            assert logging.getLogRecordFactory() is _safe_record_factory
        finally:
            logging.setLogRecordFactory(original)
