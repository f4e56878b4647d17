"""
Command builders.

Each builder owns an ArgumentList and renders it as an argv list that starts
with the configured binary:

    cmd = FFmpegCommand.build().input("in.mp4").vcodec("libx264").crf(23)
    cmd.output("out.mp4").to_args()
    # ["ffmpeg", "-y", "-i", "in.mp4", "-c:v", "libx264", "-crf", "23", "out.mp4"]

Builders do no I/O until run() hands the argv to an FFMPEGExecutor.
"""

import logging
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, TypeVar, Union

from ffmpeg_composer.arguments import ArgumentList
from ffmpeg_composer.common import OUTPUT_MARKER, not_empty
from ffmpeg_composer.config import get_settings
from ffmpeg_composer.enums import CpuFlag, LogLevel, PixelFormat, Preset, VideoSize
from ffmpeg_composer.execution import CommandFailedError, ExecutionResult, FFMPEGExecutor
from ffmpeg_composer.filterset import FilterSet
from ffmpeg_composer.values import expand_flags, normalize

if TYPE_CHECKING:
    from ffmpeg_composer.probe import ProbeResult

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="BaseCommand")

JSON_FORMAT = "json"


class BaseCommand:
    """Global options shared by every ffmpeg-family binary."""

    def __init__(self, binary: str) -> None:
        self.binary = binary
        self.arguments = ArgumentList()

    # -- raw argument access ------------------------------------------------

    def cmd(self: C, key: str, value: Any = None, unique: bool = True, quoted: bool = False) -> C:
        self.arguments.put(key, value, unique=unique, quoted=quoted)
        return self

    def remove(self: C, key: str) -> C:
        self.arguments.remove(key)
        return self

    def replace(self: C, key: str, value: Any) -> C:
        self.arguments.replace(key, value)
        return self

    def exists(self, key: str) -> bool:
        return self.arguments.exists(key)

    # -- global options -----------------------------------------------------

    def log_level(self: C, level: LogLevel) -> C:
        return self.cmd("v", level)

    def overwrite(self: C, value: bool = True) -> C:
        """-y to overwrite outputs without asking, -n to never overwrite."""
        self.remove("n" if value else "y")
        return self.cmd("y" if value else "n")

    def hide_banner(self: C) -> C:
        return self.cmd("hide_banner")

    def report(self: C) -> C:
        return self.cmd("report")

    def threads(self: C, value: int) -> C:
        return self.cmd("threads", value)

    def filter_threads(self: C, value: int) -> C:
        return self.cmd("filter_threads", value)

    def filter_complex_threads(self: C, value: int) -> C:
        return self.cmd("filter_complex_threads", value)

    def stats(self: C) -> C:
        return self.cmd("stats")

    def no_stdin(self: C) -> C:
        return self.cmd("nostdin")

    def cpu_flags(self: C, *flags: CpuFlag) -> C:
        return self.cmd("cpuflags", expand_flags(flags))

    def max_error_rate(self: C, value: float) -> C:
        return self.cmd("max_error_rate", value)

    def time_limit(self: C, seconds: float) -> C:
        return self.cmd("timelimit", seconds)

    # -- rendering and execution -------------------------------------------

    def to_args(self) -> List[str]:
        return self.arguments.render(self.binary)

    def run(
        self,
        executor: Optional[FFMPEGExecutor] = None,
        timeout: Optional[int] = None,
        check: bool = True,
    ) -> ExecutionResult:
        """Execute the rendered command.

        Args:
            executor: Executor to run with; a fresh FFMPEGExecutor by default.
            timeout: Seconds before the process is killed; falls back to settings.
            check: Raise CommandFailedError when the exit code is non-zero.
        """
        executor = executor or FFMPEGExecutor()
        if timeout is None:
            timeout = get_settings().timeout
        result = executor.run(self.to_args(), timeout=timeout)
        if check and result.exit_code != 0:
            raise CommandFailedError(self.binary, result)
        return result

    def __str__(self) -> str:
        return " ".join(self.to_args())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.arguments}>"


class InputCommand(BaseCommand):
    """Options shared by binaries that read input files."""

    def input(self: C, *paths: str) -> C:
        return self.inputs(paths)

    def inputs(self: C, paths: Iterable[str]) -> C:
        for path in paths:
            if path:
                self.cmd("i", path, unique=False)
        return self

    def format(self: C, fmt: str) -> C:
        return self.cmd("f", fmt)

    def pix_format(self: C, pix_fmt: PixelFormat) -> C:
        return self.cmd("pix_fmt", pix_fmt)

    def codec(self: C, codec: str, stream_type: Optional[str] = None) -> C:
        key = "c" if stream_type is None else f"c:{stream_type}"
        return self.cmd(key, codec)

    def limit_size(self: C, size_bytes: int) -> C:
        return self.cmd("fs", size_bytes)

    def time_offset(self: C, offset: Any) -> C:
        return self.cmd("sseof", offset)

    def target(self: C, kind: str) -> C:
        return self.cmd("target", kind)

    def frames(self: C, number: int) -> C:
        return self.cmd("frames", number)

    def timestamp(self: C, value: Any) -> C:
        return self.cmd("timestamp", value)

    def metadata(self: C, key: str, value: Any) -> C:
        return self.cmd("metadata", f"{key}={normalize(value)}", unique=False)

    def search(self: C, start: Any, end: Any) -> C:
        """Seek to start and stop reading at end (-ss / -to)."""
        return self.cmd("ss", start).cmd("to", end)

    def search_at(self: C, start: Any, duration: Any) -> C:
        """Seek to start and read for duration (-ss / -t)."""
        return self.cmd("ss", start).cmd("t", duration)

    def map(self: C, spec: str) -> C:
        return self.cmd("map", spec, unique=False)

    def preset(self: C, preset: Union[Preset, str]) -> C:
        return self.cmd("preset", preset)


class FFmpegCommand(InputCommand):
    """Builder for ffmpeg transcoding commands."""

    @classmethod
    def build(cls, overwrite: bool = True) -> "FFmpegCommand":
        command = cls(get_settings().ffmpeg_bin)
        if overwrite:
            command.overwrite()
        return command

    def loop(self) -> "FFmpegCommand":
        return self.cmd("loop", 1)

    def disable_video(self) -> "FFmpegCommand":
        return self.cmd("vn")

    def disable_audio(self) -> "FFmpegCommand":
        return self.cmd("an")

    def disable_subtitle(self) -> "FFmpegCommand":
        return self.cmd("sn")

    def video_bit_rate(self, bit_rate: Any) -> "FFmpegCommand":
        return self.cmd("b:v", bit_rate)

    def audio_bit_rate(self, bit_rate: Any) -> "FFmpegCommand":
        return self.cmd("b:a", bit_rate)

    def frame_rate(self, rate: Any) -> "FFmpegCommand":
        return self.cmd("r", rate)

    def audio_rate(self, rate: int) -> "FFmpegCommand":
        return self.cmd("ar", rate)

    def duration(self, seconds: Any) -> "FFmpegCommand":
        return self.cmd("t", seconds)

    def aspect(self, ratio: Union[float, str]) -> "FFmpegCommand":
        return self.cmd("aspect", ratio)

    def pass_number(self, number: int) -> "FFmpegCommand":
        return self.cmd("pass", number)

    def video_frames(self, count: int) -> "FFmpegCommand":
        return self.cmd("vframes", count)

    def max_frame_rate(self, rate: Any) -> "FFmpegCommand":
        return self.cmd("fpsmax", rate)

    def vcodec(self, codec: str) -> "FFmpegCommand":
        return self.codec(codec, "v")

    def acodec(self, codec: str) -> "FFmpegCommand":
        return self.codec(codec, "a")

    def timecode(self, value: str) -> "FFmpegCommand":
        return self.cmd("timecode", value)

    def time_base(self, value: str) -> "FFmpegCommand":
        return self.cmd("time_base", value)

    def crf(self, quality: int) -> "FFmpegCommand":
        return self.cmd("crf", quality)

    def resize(self, width: Union[int, VideoSize], height: Optional[int] = None) -> "FFmpegCommand":
        if isinstance(width, VideoSize):
            return self.cmd("s", width)
        return self.cmd("s", f"{width}x{height}")

    def filters(self, *items: Any) -> "FFmpegCommand":
        """Set -vf / -filter_complex from a FilterSet, or -vf from bare nodes.

        A set that renders to nothing adds nothing.
        """
        if len(items) == 1 and isinstance(items[0], FilterSet):
            filter_set = items[0]
        else:
            filter_set = FilterSet.simple()
            filter_set.add(*items)
        rendered = filter_set.render()
        if not rendered:
            return self
        return self.cmd(filter_set.option_name, rendered)

    def output(self, path: str) -> "FFmpegCommand":
        not_empty(path, "The output path cannot be empty")
        return self.cmd(OUTPUT_MARKER, path)

    def to(
        self,
        path: str,
        executor: Optional[FFMPEGExecutor] = None,
        timeout: Optional[int] = None,
    ) -> str:
        """Write to path, run the command and return path."""
        self.output(path).run(executor=executor, timeout=timeout)
        logger.info("ffmpeg output written to %s", path)
        return path


class FFprobeCommand(InputCommand):
    """Builder for ffprobe queries."""

    @classmethod
    def build(cls) -> "FFprobeCommand":
        return cls(get_settings().ffprobe_bin)

    def show_streams(self, select: Optional[str] = None) -> "FFprobeCommand":
        self.cmd("show_streams")
        if select is not None:
            self.cmd("select_streams", select)
        return self

    def video_streams(self) -> "FFprobeCommand":
        return self.show_streams("v")

    def audio_streams(self) -> "FFprobeCommand":
        return self.show_streams("a")

    def show_format(self) -> "FFprobeCommand":
        return self.cmd("show_format")

    def show_versions(self) -> "FFprobeCommand":
        return self.cmd("show_versions")

    def show_frames(self) -> "FFprobeCommand":
        return self.cmd("show_frames")

    def show_chapters(self) -> "FFprobeCommand":
        return self.cmd("show_chapters")

    def show_pixel_formats(self) -> "FFprobeCommand":
        return self.cmd("show_pixel_formats")

    def print_format(self, fmt: str) -> "FFprobeCommand":
        return self.cmd("of", fmt)

    def probe(
        self,
        executor: Optional[FFMPEGExecutor] = None,
        timeout: Optional[int] = None,
    ) -> "ProbeResult":
        """Run the query with JSON output and parse it into a ProbeResult."""
        from ffmpeg_composer.probe import ProbeResult, parse_probe_output

        self.print_format(JSON_FORMAT)
        result = self.run(executor=executor, timeout=timeout, check=False)
        if result.exit_code != 0:
            return ProbeResult(
                success=False,
                error=result.stderr.strip() or f"ffprobe exited with code {result.exit_code}",
            )
        return parse_probe_output(result.stdout)


class HelpCommand(BaseCommand):
    """Capability queries: -formats, -encoders, -filters and friends."""

    @classmethod
    def ffmpeg(cls) -> "HelpCommand":
        return cls(get_settings().ffmpeg_bin)

    @classmethod
    def ffprobe(cls) -> "HelpCommand":
        return cls(get_settings().ffprobe_bin)

    def formats(self) -> "HelpCommand":
        return self.cmd("formats")

    def encoders(self) -> "HelpCommand":
        return self.cmd("encoders")

    def decoders(self) -> "HelpCommand":
        return self.cmd("decoders")

    def filters(self) -> "HelpCommand":
        return self.cmd("filters")

    def version(self) -> "HelpCommand":
        return self.cmd("version")

    def output(
        self,
        executor: Optional[FFMPEGExecutor] = None,
        timeout: Optional[int] = None,
    ) -> str:
        """Run the query and return its stdout."""
        return self.run(executor=executor, timeout=timeout).stdout
