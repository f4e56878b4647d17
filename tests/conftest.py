"""
Pytest configuration and shared fixtures for ffmpeg_composer tests.
"""
import logging
import sys
from pathlib import Path

import pytest

# Add repository root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from ffmpeg_composer import config, probe  # noqa: E402


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test from default settings and an empty format cache."""
    for name in ("FFMPEG_BIN", "FFPROBE_BIN", "TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"FFMPEG_COMPOSER_{name}", raising=False)
    config.reset_settings()
    probe.reset_supported_formats()
    yield
    config.reset_settings()
    probe.reset_supported_formats()
    logging.getLogger(config.PACKAGE_LOGGER).setLevel(logging.NOTSET)
