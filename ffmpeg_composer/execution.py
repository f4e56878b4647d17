"""
Command execution.

Provides a subprocess-based executor with progress parsing, event emission,
timeout handling and cancellation. Commands are passed to the process as an
argv list, never through a shell, so filtergraph text reaches ffmpeg verbatim.
"""
import logging
import re
import subprocess
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ffmpeg_composer.log_utils import truncate_line

logger = logging.getLogger(__name__)

# Number of trailing stderr lines written to the error log on failure
ERROR_TAIL_LINES = 20


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class ProgressInfo:
    """Parsed progress information from an ffmpeg stderr line."""
    frame: Optional[int] = None
    fps: Optional[float] = None
    speed: Optional[str] = None
    time: Optional[str] = None
    size: Optional[str] = None
    bitrate: Optional[str] = None
    percent: Optional[float] = None
    eta: Optional[str] = None


@dataclass
class ExecutionResult:
    """Result of a command execution."""
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class ExecutionEvent:
    """An event emitted during execution."""
    type: str  # "started", "progress", "completed", "failed", "cancelled"
    data: object = None


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class CommandFailedError(RuntimeError):
    """Raised when a command exits with a non-zero status and the caller asked to check."""

    def __init__(self, program: str, result: ExecutionResult) -> None:
        super().__init__(f"{program} command exited with code {result.exit_code}")
        self.program = program
        self.result = result


# ---------------------------------------------------------------------------
# Progress line parsing
# ---------------------------------------------------------------------------

# (field, pattern, converter) for each key=value pair of an ffmpeg stats line
_PROGRESS_FIELDS = (
    ("frame", re.compile(r"frame=\s*(\d+)"), int),
    ("fps", re.compile(r"fps=\s*([\d.]+)"), float),
    ("speed", re.compile(r"speed=\s*([\d.]+x)"), str),
    ("time", re.compile(r"time=\s*([\d:.]+)"), str),
    ("size", re.compile(r"size=\s*(\S+)"), str),
    ("bitrate", re.compile(r"bitrate=\s*(\S+)"), str),
)


def clock_to_seconds(clock: str) -> float:
    """HH:MM:SS.ff -> seconds; anything else counts as 0."""
    parts = clock.split(":")
    if len(parts) != 3:
        return 0.0
    hours, minutes, seconds = parts
    return int(hours) * 3600 + int(minutes) * 60 + float(seconds)


def seconds_to_clock(seconds: float) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{int(hours):02d}:{int(minutes):02d}:{secs:05.2f}"


def parse_progress_line(line: str, total_duration: Optional[str] = None) -> ProgressInfo:
    """Parse an ffmpeg progress/stats line into a ProgressInfo.

    Args:
        line: A single stderr line from ffmpeg (e.g. "frame=  500 fps=30.0 ...")
        total_duration: Optional total duration string ("HH:MM:SS.ff") for
                        calculating percent and ETA.

    Returns:
        ProgressInfo with parsed fields; fields missing from the line stay None.
    """
    info = ProgressInfo()
    for name, pattern, convert in _PROGRESS_FIELDS:
        match = pattern.search(line)
        if match:
            setattr(info, name, convert(match.group(1)))

    if not (total_duration and info.time):
        return info

    total = clock_to_seconds(total_duration)
    if total <= 0:
        return info
    elapsed = clock_to_seconds(info.time)
    info.percent = elapsed / total * 100.0

    remaining = total - elapsed
    speed = float(info.speed[:-1]) if info.speed else 0.0
    if remaining > 0 and speed > 0:
        info.eta = seconds_to_clock(remaining / speed)
    return info


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------

def execute_command(command: List[str], timeout: Optional[int] = None) -> ExecutionResult:
    """Execute a command and return the result.

    This is a simple synchronous wrapper around FFMPEGExecutor.
    """
    executor = FFMPEGExecutor()
    return executor.run(command, timeout=timeout)


def _drain(stream: Iterable[str], sink: List[str]) -> None:
    for line in stream:
        sink.append(line.rstrip("\n"))


class FFMPEGExecutor:
    """Executes ffmpeg/ffprobe commands with progress parsing and event emission."""

    def __init__(self, total_duration: Optional[str] = None) -> None:
        self._callbacks: List[Callable[[ExecutionEvent], None]] = []
        self._cancelled = False
        self._process: Optional[subprocess.Popen] = None
        self._total_duration = total_duration

    def on_event(self, callback: Callable[[ExecutionEvent], None]) -> None:
        """Register an event listener."""
        self._callbacks.append(callback)

    def _emit(self, event: ExecutionEvent) -> None:
        for cb in self._callbacks:
            cb(event)

    def cancel(self) -> None:
        """Request cancellation of the running process."""
        self._cancelled = True
        proc = self._process
        if proc is None:
            return
        try:
            proc.terminate()
            proc.kill()
        except OSError:
            pass

    def run(self, command: List[str], timeout: Optional[int] = None) -> ExecutionResult:
        """Run a command.

        Args:
            command: Command as a list of strings (e.g. ["ffmpeg", "-i", ...])
            timeout: Optional timeout in seconds.

        Returns:
            ExecutionResult with stdout, stderr, and exit_code.

        Raises:
            ValueError: If command is empty.
        """
        if not command:
            raise ValueError("Command list must not be empty")

        program = command[0]

        if self._cancelled:
            self._emit(ExecutionEvent(type="cancelled"))
            return ExecutionResult(exit_code=-15)

        logger.info("%s command: %s", program, " ".join(command))
        started = time.monotonic()
        self._emit(ExecutionEvent(type="started"))

        stdout_lines: List[str] = []
        stderr_lines: List[str] = []

        self._process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            universal_newlines=True,
        )
        readers = [
            threading.Thread(
                target=_drain, args=(self._process.stdout, stdout_lines), daemon=True,
            ),
            threading.Thread(
                target=self._read_stderr, args=(self._process.stderr, stderr_lines), daemon=True,
            ),
        ]
        for reader in readers:
            reader.start()

        timed_out = False
        try:
            self._process.wait(timeout=timeout)
            exit_code = self._process.returncode
        except (TimeoutError, subprocess.TimeoutExpired):
            self._process.kill()
            self._process.wait()
            timed_out = True
            exit_code = -9
        finally:
            # pipes close once the process is gone
            for reader in readers:
                reader.join()

        if timed_out:
            stderr_lines.append("Process timed out")

        result = ExecutionResult(
            stdout="\n".join(stdout_lines),
            stderr="\n".join(stderr_lines),
            exit_code=exit_code,
        )

        if self._cancelled:
            self._emit(ExecutionEvent(type="cancelled"))
        elif exit_code == 0:
            self._emit(ExecutionEvent(type="completed", data=result))
        else:
            self._log_failure(program, stderr_lines, exit_code)
            self._emit(ExecutionEvent(type="failed", data=result))

        logger.info("%s execution time %.3fs", program, time.monotonic() - started)
        return result

    def _read_stderr(self, stream: Iterable[str], sink: List[str]) -> None:
        for line in stream:
            sink.append(line.rstrip("\n"))
            if "frame=" in line:
                progress = parse_progress_line(line, self._total_duration)
                self._emit(ExecutionEvent(type="progress", data=progress))

    @staticmethod
    def _log_failure(program: str, stderr_lines: List[str], exit_code: int) -> None:
        logger.error("%s exited with code %d", program, exit_code)
        for line in stderr_lines[-ERROR_TAIL_LINES:]:
            logger.error("%s", truncate_line(line))
