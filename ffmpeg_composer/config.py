import logging
from typing import Optional

from pydantic_settings import BaseSettings

from ffmpeg_composer.log_utils import install_safe_logging

# Set up logging
logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "ffmpeg_composer"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ComposerSettings(BaseSettings):
    """Binary locations and execution defaults, read from the environment."""
    ffmpeg_bin: str = "ffmpeg"
    ffprobe_bin: str = "ffprobe"
    # Seconds before a running command is killed; None waits indefinitely
    timeout: Optional[int] = None
    # Log level for the ffmpeg_composer loggers: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = "INFO"

    class Config:
        env_prefix = "FFMPEG_COMPOSER_"
        env_file = ".env"
        env_file_encoding = "utf-8"


# In-memory cache of settings
_cached_settings: ComposerSettings | None = None


def get_settings() -> ComposerSettings:
    """Load settings from the environment once and reuse them."""
    global _cached_settings

    if _cached_settings is None:
        _cached_settings = ComposerSettings()
    return _cached_settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _cached_settings
    _cached_settings = None


def set_log_level(level: str) -> None:
    """Set the logging level of the ffmpeg_composer loggers."""
    level_upper = level.upper()

    if level_upper not in VALID_LOG_LEVELS:
        logger.warning("Invalid log level '%s', using INFO", level)
        level_upper = "INFO"

    logging.getLogger(PACKAGE_LOGGER).setLevel(getattr(logging, level_upper))


def configure_logging(settings: Optional[ComposerSettings] = None) -> None:
    """Install the safe record factory and apply the configured log level."""
    settings = settings or get_settings()
    install_safe_logging()
    set_log_level(settings.log_level)
