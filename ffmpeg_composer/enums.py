"""Enumerated option values (a representative subset of ffmpeg's catalogs)."""

from enum import Enum, auto, unique
from typing import Any, Tuple

from ffmpeg_composer.aliases import CommandEnum, aliases
from ffmpeg_composer.values import normalize


@unique
class LogLevel(CommandEnum):
    QUIET = auto()
    PANIC = auto()
    FATAL = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    VERBOSE = auto()
    DEBUG = auto()
    TRACE = auto()


@unique
@aliases(VERY_FAST="veryfast", VERY_SLOW="veryslow")
class Preset(CommandEnum):
    """x264/x265 encoding presets, fastest to slowest."""

    ULTRAFAST = auto()
    SUPERFAST = auto()
    VERY_FAST = auto()
    FASTER = auto()
    FAST = auto()
    MEDIUM = auto()
    SLOW = auto()
    SLOWER = auto()
    VERY_SLOW = auto()
    PLACEBO = auto()


@unique
class When(CommandEnum):
    """When filter expressions are evaluated."""

    INIT = auto()
    FRAME = auto()


@unique
class AspectRatio(CommandEnum):
    DISABLE = auto()
    DECREASE = auto()
    INCREASE = auto()


@unique
@aliases(END_ALL="endall")
class EofAction(CommandEnum):
    """What a multi-input filter does when its secondary input ends."""

    REPEAT = auto()
    END_ALL = auto()
    PASS = auto()


@unique
@aliases(
    SSE4_1="sse4.1",
    SSE4_2="sse4.2",
    THREE_DNOW="3dnow",
    THREE_DNOWEXT="3dnowext",
)
class CpuFlag(CommandEnum):
    # x86
    MMX = auto()
    MMXEXT = auto()
    SSE = auto()
    SSE2 = auto()
    SSE3 = auto()
    SSSE3 = auto()
    SSE4_1 = auto()
    SSE4_2 = auto()
    AVX = auto()
    AVX2 = auto()
    FMA3 = auto()
    THREE_DNOW = auto()
    THREE_DNOWEXT = auto()
    CMOV = auto()
    # ARM / AArch64
    ARMV6 = auto()
    VFP = auto()
    NEON = auto()
    ARMV8 = auto()


@unique
@aliases(ZERO_RGB="0rgb")
class PixelFormat(CommandEnum):
    YUV420P = auto()
    YUV422P = auto()
    YUV444P = auto()
    YUV420P10LE = auto()
    NV12 = auto()
    GRAY = auto()
    RGB24 = auto()
    RGBA = auto()
    ZERO_RGB = auto()


@unique
@aliases(
    TWO_K="2k",
    TWO_K_FLAT="2kflat",
    TWO_K_SCOPE="2kscope",
    FOUR_K="4k",
    FOUR_K_FLAT="4kflat",
    FOUR_K_SCOPE="4kscope",
)
class VideoSize(CommandEnum):
    """Named frame sizes ffmpeg accepts in place of WxH."""

    NTSC = "720x480"
    QNTSC = "352x240"
    PAL = "720x576"
    QPAL = "352x288"
    QCIF = "176x144"
    NHD = "640x360"
    QHD = "960x540"
    HD480 = "852x480"
    HD720 = "1280x720"
    HD1080 = "1920x1080"
    UHD2160 = "3840x2160"
    UHD4320 = "7680x4320"
    CGA = "320x200"
    EGA = "640x350"
    VGA = "640x480"
    QVGA = "320x240"
    SVGA = "800x600"
    XGA = "1024x768"
    SXGA = "1280x1024"
    WXGA = "1366x768"
    UXGA = "1600x1200"
    WUXGA = "1920x1200"
    TWO_K = "2048x1080"
    TWO_K_FLAT = "1998x1080"
    TWO_K_SCOPE = "2048x858"
    FOUR_K = "4096x2160"
    FOUR_K_FLAT = "3996x2160"
    FOUR_K_SCOPE = "4096x1716"

    @property
    def dimensions(self) -> Tuple[int, int]:
        width, height = self.value.split("x")
        return int(width), int(height)


class Overlays(Enum):
    """Overlay position templates; "{}" is replaced by the caller's margin."""

    CENTER = ("(main_w-overlay_w)/2", "(main_h-overlay_h)/2")
    LEFT_TOP = ("{}", "{}")
    LEFT_CENTER = ("{}", "(main_h-overlay_h)/2")
    RIGHT_TOP = ("main_w-overlay_w-{}", "{}")
    RIGHT_CENTER = ("main_w-overlay_w-{}", "(main_h-overlay_h)/2")
    RIGHT_BOTTOM = ("main_w-overlay_w-{}", "main_h-overlay_h-{}")
    LEFT_BOTTOM = ("{}", "main_h-overlay_h-{}")

    def get_x(self, margin: Any = 0) -> str:
        return _fill(self.value[0], margin)

    def get_y(self, margin: Any = 0) -> str:
        return _fill(self.value[1], margin)

    def expression(self, x: Any = 0, y: Any = 0) -> str:
        return self.get_x(x) + ":" + self.get_y(y)


def _fill(template: str, value: Any) -> str:
    return template.format(normalize(value)) if "{}" in template else template
