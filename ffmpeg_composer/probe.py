"""FFprobe integration: probe sources and read the formats ffmpeg supports."""

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ffmpeg_composer.commands import FFprobeCommand, HelpCommand
from ffmpeg_composer.execution import FFMPEGExecutor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
FORMAT_LIST_DIVIDER = "--"


@dataclass
class ProbeResult:
    """Result of probing a media source with ffprobe."""

    success: bool = True
    streams: List[Dict[str, Any]] = field(default_factory=list)
    format_name: str = ""
    duration: Optional[float] = None
    bit_rate: Optional[int] = None
    size: Optional[int] = None
    error: str = ""
    raw: Optional[Dict[str, Any]] = None

    def _first_stream(self, codec_type: str) -> Optional[Dict[str, Any]]:
        for stream in self.streams:
            if stream.get("codec_type") == codec_type:
                return stream
        return None

    def video_stream(self) -> Optional[Dict[str, Any]]:
        return self._first_stream("video")

    def audio_stream(self) -> Optional[Dict[str, Any]]:
        return self._first_stream("audio")


@dataclass(frozen=True)
class SimpleFormat:
    """One entry of `ffmpeg -formats`: the short name and its description."""

    name: str
    description: str
    demuxing: bool = False
    muxing: bool = False


def probe_source(
    path: str,
    timeout: int = DEFAULT_TIMEOUT,
    executor: Optional[FFMPEGExecutor] = None,
) -> ProbeResult:
    """Probe a media file or URL using ffprobe.

    Args:
        path: File path, URL, or device to probe.
        timeout: Subprocess timeout in seconds.
        executor: Executor to run ffprobe with.

    Returns:
        ProbeResult with stream and format information.
    """
    command = (
        FFprobeCommand.build()
        .cmd("v", "quiet")
        .show_format()
        .show_streams()
        .input(path)
    )

    try:
        return command.probe(executor=executor, timeout=timeout)
    except FileNotFoundError:
        return ProbeResult(success=False, error=f"{command.binary} not found on system")
    except OSError as exc:
        return ProbeResult(success=False, error=str(exc))


def _to_number(value: Any, kind: type) -> Optional[Any]:
    if not value:
        return None
    try:
        return kind(value)
    except (ValueError, TypeError):
        return None


def parse_probe_output(raw_json: str) -> ProbeResult:
    """Parse ffprobe JSON output into a ProbeResult.

    Args:
        raw_json: Raw JSON string from ffprobe -of json.

    Returns:
        ProbeResult populated from the parsed data.
    """
    try:
        data = json.loads(raw_json)
    except (json.JSONDecodeError, TypeError, ValueError) as exc:
        return ProbeResult(success=False, error=f"Failed to parse JSON: {exc}")

    if not isinstance(data, dict):
        return ProbeResult(success=False, error="Unexpected ffprobe output")

    fmt = data.get("format", {})
    streams = data.get("streams", [])

    return ProbeResult(
        success=True,
        streams=streams,
        format_name=fmt.get("format_name", ""),
        duration=_to_number(fmt.get("duration"), float),
        bit_rate=_to_number(fmt.get("bit_rate"), int),
        size=_to_number(fmt.get("size"), int),
        raw=data,
    )


# ---------------------------------------------------------------------------
# Supported formats
# ---------------------------------------------------------------------------

def parse_format_list(output: str) -> List[SimpleFormat]:
    """Parse `ffmpeg -formats` output.

    Only lines after the "--" divider are entries. Each looks like
    " DE mp4             MP4 (MPEG-4 Part 14)": two flag columns, the name
    and a free-text description.
    """
    formats: List[SimpleFormat] = []
    started = False
    for line in output.splitlines():
        if not started:
            started = line.strip() == FORMAT_LIST_DIVIDER
            continue
        if len(line) < 4 or not line.strip():
            continue
        flags, rest = line[:4], line[4:].strip()
        parts = rest.split(None, 1)
        if not parts:
            continue
        formats.append(SimpleFormat(
            name=parts[0],
            description=parts[1].strip() if len(parts) > 1 else "",
            demuxing="D" in flags,
            muxing="E" in flags,
        ))
    return formats


_supported_formats: Optional[List[SimpleFormat]] = None
_formats_lock = threading.Lock()


def read_supported_formats(executor: Optional[FFMPEGExecutor] = None) -> List[SimpleFormat]:
    """Query ffmpeg for its formats once and reuse the answer."""
    global _supported_formats

    if _supported_formats is None:
        with _formats_lock:
            if _supported_formats is None:
                output = HelpCommand.ffmpeg().hide_banner().formats().output(executor=executor)
                _supported_formats = parse_format_list(output)
                logger.debug("Loaded %d supported formats", len(_supported_formats))
    return list(_supported_formats)


def reset_supported_formats() -> None:
    """Forget the cached format list."""
    global _supported_formats
    _supported_formats = None
