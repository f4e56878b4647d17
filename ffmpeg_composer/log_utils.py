"""
Logging utilities for safe log output.

Provides a custom LogRecord factory that sanitizes log arguments
to prevent log injection attacks (CWE-117). Command lines contain
user-provided paths and filter expressions that could carry newlines
or control characters and forge log entries.

Install once at startup via install_safe_logging().
"""

import logging

_ORIGINAL_FACTORY = logging.getLogRecordFactory()

MAX_LINE_LENGTH = 120


def sanitize(value):
    """Strip newlines and carriage returns from a value for safe logging."""
    if isinstance(value, str):
        return value.replace('\r\n', '\\r\\n').replace('\r', '\\r').replace('\n', '\\n')
    return value


def truncate_line(line: str, limit: int = MAX_LINE_LENGTH) -> str:
    """Shorten a process output line for the error log."""
    if len(line) > limit:
        return line[:limit] + "..."
    return line


def _safe_record_factory(*args, **kwargs):
    """LogRecord factory that sanitizes args to prevent log injection."""
    record = _ORIGINAL_FACTORY(*args, **kwargs)
    if record.args:
        if isinstance(record.args, dict):
            record.args = {k: sanitize(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(sanitize(a) for a in record.args)
    return record


def install_safe_logging():
    """
    Install a global LogRecord factory that sanitizes all log arguments.

    Call once during application startup, before any logging occurs.
    """
    logging.setLogRecordFactory(_safe_record_factory)
