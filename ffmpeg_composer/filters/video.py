"""Video filter nodes.

Each class renders one ffmpeg video filter. Construct them through their
classmethod factories, e.g. Scale.to(1280, 720) or Overlay.at(Overlays.CENTER),
then chain the option methods.
"""

from enum import auto, unique
from typing import Any, Optional, Union

from ffmpeg_composer.aliases import CommandEnum, aliases
from ffmpeg_composer.common import LIST_SEPARATOR, ContractError, not_empty, range_check
from ffmpeg_composer.enums import AspectRatio, EofAction, Overlays, PixelFormat, VideoSize, When
from ffmpeg_composer.functions import ColorFunction, FilterFunction, filter_function
from ffmpeg_composer.values import escape


def _checked(value: Any, start: float, end: float) -> Any:
    # Expressions are passed through; only numbers are range-checked
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        range_check(value, start, end)
    return value


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

@unique
class SampleRange(CommandEnum):
    AUTO = auto()
    JPEG = auto()
    MPEG = auto()
    FULL = auto()
    LIMITED = auto()
    PC = auto()
    TV = auto()


@filter_function("scale")
class Scale(FilterFunction):
    """Resize the input video."""

    @classmethod
    def to(cls, width: Union[int, str, VideoSize], height: Union[int, str, None] = None) -> "Scale":
        """Scale to width x height (expressions allowed) or to a named VideoSize."""
        if isinstance(width, VideoSize):
            return cls().add_arg("s", width)
        if height is None:
            raise ContractError("Scale height is required when width is not a VideoSize")
        return cls().add_base_arg("w", width).add_base_arg("h", height)

    def eval(self, when: When) -> "Scale":
        return self.add_arg("eval", when)

    def flags(self, expression: str) -> "Scale":
        return self.add_arg("flags", expression)

    def interlacing(self) -> "Scale":
        return self.enable("interl")

    def in_range(self, sample_range: SampleRange) -> "Scale":
        return self.add_arg("in_range", sample_range)

    def out_range(self, sample_range: SampleRange) -> "Scale":
        return self.add_arg("out_range", sample_range)

    def force_original_aspect_ratio(self, ratio: AspectRatio) -> "Scale":
        return self.add_arg("force_original_aspect_ratio", ratio)

    def force_divisible_by(self, value: int) -> "Scale":
        range_check(value, 1, 256)
        return self.add_arg("force_divisible_by", value)


@filter_function("crop")
class Crop(FilterFunction):

    @classmethod
    def the(cls, w: Any, h: Any, x: Any = None, y: Any = None) -> "Crop":
        node = cls().add_base_arg("w", w).add_base_arg("h", h)
        if x is not None:
            node.add_base_arg("x", x)
        if y is not None:
            node.add_base_arg("y", y)
        return node

    def keep_aspect(self) -> "Crop":
        return self.enable("keep_aspect")

    def exact(self) -> "Crop":
        return self.enable("exact")


@filter_function("pad")
class Pad(ColorFunction):
    """Add borders around the input; string sizes/positions are escaped."""

    @classmethod
    def of(cls) -> "Pad":
        return cls()

    def size(self, width: Any, height: Any) -> "Pad":
        return self.add_arg("w", _expression(width)).add_arg("h", _expression(height))

    def position(self, x: Any, y: Any) -> "Pad":
        return self.add_arg("x", _expression(x)).add_arg("y", _expression(y))

    def eval(self, when: When) -> "Pad":
        return self.add_arg("eval", when)

    def aspect(self, how: int, to_how: int) -> "Pad":
        return self.add_arg("aspect", f"{how}/{to_how}")


def _expression(value: Any) -> Any:
    return escape(value) if isinstance(value, str) else value


@unique
class OverlayFormat(CommandEnum):
    YUV420 = auto()
    YUV420P10 = auto()
    YUV422 = auto()
    YUV422P10 = auto()
    YUV444 = auto()
    RGB = auto()
    GBRP = auto()
    AUTO = auto()


@unique
class AlphaFormat(CommandEnum):
    STRAIGHT = auto()
    PREMULTIPLIED = auto()


@filter_function("overlay")
class Overlay(FilterFunction):
    """Overlay the second input on top of the first."""

    @classmethod
    def at(cls, x: Any, y: Any = 0) -> "Overlay":
        if isinstance(x, Overlays):
            return cls.anchored(x)
        return cls()._position(x, y)

    @classmethod
    def anchored(cls, position: Overlays, x: Any = 0, y: Any = 0) -> "Overlay":
        """Place the overlay using a position template and a margin."""
        return cls()._position(position.get_x(x), position.get_y(y))

    def _position(self, x: Any, y: Any) -> "Overlay":
        return self.add_base_arg("x", x).add_base_arg("y", y)

    def eval(self, when: When) -> "Overlay":
        return self.add_arg("eval", when)

    def format(self, fmt: OverlayFormat) -> "Overlay":
        return self.add_arg("format", fmt)

    def alpha(self, fmt: AlphaFormat) -> "Overlay":
        return self.add_arg("alpha", fmt)

    def eof_action(self, action: EofAction) -> "Overlay":
        return self.add_arg("eof_action", action)

    def shortest(self, state: bool = True) -> "Overlay":
        return self.status("shortest", state)

    def repeat_last(self, state: bool = True) -> "Overlay":
        return self.status("repeatlast", state)


class Flip(FilterFunction):
    """hflip / vflip; both take no arguments."""

    def __init__(self, name: str) -> None:
        super().__init__()
        self._name = name

    @classmethod
    def horizontal(cls) -> "Flip":
        return cls("hflip")

    @classmethod
    def vertical(cls) -> "Flip":
        return cls("vflip")

    def function_name(self) -> Optional[str]:
        return self._name


# ---------------------------------------------------------------------------
# Timing and format
# ---------------------------------------------------------------------------

@unique
@aliases(NTSC_FILM="ntsc_film")
class FpsLink(CommandEnum):
    SOURCE_FPS = auto()
    NTSC = auto()
    PAL = auto()
    FILM = auto()
    NTSC_FILM = auto()


@unique
class RoundMethod(CommandEnum):
    ZERO = auto()
    INF = auto()
    DOWN = auto()
    UP = auto()
    NEAR = auto()


@unique
class FpsEofAction(CommandEnum):
    ROUND = auto()
    PASS = auto()


@filter_function("fps")
class Fps(FilterFunction):

    @classmethod
    def of(cls, fps: Union[int, FpsLink]) -> "Fps":
        return cls().add_arg("fps", fps)

    def start_time(self, seconds: float) -> "Fps":
        return self.add_arg("start_time", seconds)

    def round(self, method: RoundMethod) -> "Fps":
        return self.add_arg("round", method)

    def eof_action(self, action: FpsEofAction) -> "Fps":
        return self.add_arg("eof_action", action)


@filter_function("format")
class Format(FilterFunction):
    """Convert to one of the listed pixel formats: format=yuv420p|nv12."""

    @classmethod
    def of(cls, *formats: PixelFormat) -> "Format":
        not_empty(formats, "At least one pixel format is required")
        return cls().add_joined(None, LIST_SEPARATOR, *formats)


@filter_function("fade")
class Fade(ColorFunction):
    """Fade in/out. Zero start or duration values are left to ffmpeg defaults."""

    @classmethod
    def fade_in(cls) -> "Fade":
        return cls().add_arg("t", "in")

    @classmethod
    def fade_out(cls) -> "Fade":
        return cls().add_arg("t", "out")

    def at(self, time: float, duration: float) -> "Fade":
        if time > 0:
            self.start_time(time)
        if duration > 0:
            self.duration(duration)
        return self

    def frame(self, index: int, num: int) -> "Fade":
        if index > 0:
            self.start_frame(index)
        if num > 0:
            self.total_frames(num)
        return self

    def start_frame(self, value: int) -> "Fade":
        return self.add_arg("s", value)

    def total_frames(self, value: int) -> "Fade":
        return self.add_arg("n", value)

    def start_time(self, value: float) -> "Fade":
        return self.add_arg("st", value)

    def duration(self, value: float) -> "Fade":
        return self.add_arg("d", value)

    def alpha(self) -> "Fade":
        return self.enable("alpha")


@unique
@aliases(
    FADE_BLACK="fadeblack",
    FADE_WHITE="fadewhite",
    FADE_GRAYS="fadegrays",
    WIPE_LEFT="wipeleft",
    WIPE_RIGHT="wiperight",
    SLIDE_LEFT="slideleft",
    SLIDE_RIGHT="slideright",
    CIRCLE_CROP="circlecrop",
    CIRCLE_OPEN="circleopen",
    HL_SLICE="hlslice",
    HR_SLICE="hrslice",
    ZOOM_IN="zoomin",
)
class Transition(CommandEnum):
    FADE = auto()
    FADE_BLACK = auto()
    FADE_WHITE = auto()
    FADE_GRAYS = auto()
    DISTANCE = auto()
    WIPE_LEFT = auto()
    WIPE_RIGHT = auto()
    SLIDE_LEFT = auto()
    SLIDE_RIGHT = auto()
    CIRCLE_CROP = auto()
    CIRCLE_OPEN = auto()
    DISSOLVE = auto()
    PIXELIZE = auto()
    RADIAL = auto()
    HL_SLICE = auto()
    HR_SLICE = auto()
    ZOOM_IN = auto()


@filter_function("xfade")
class Xfade(FilterFunction):
    """Cross fade between two inputs."""

    @classmethod
    def of(
        cls,
        transition: Transition,
        offset: Optional[float] = None,
        duration: Optional[float] = None,
    ) -> "Xfade":
        node = cls().add_arg("transition", transition)
        if offset is not None:
            node.offset(offset)
        if duration is not None:
            node.duration(duration)
        return node

    def offset(self, seconds: float) -> "Xfade":
        return self.add_arg("offset", seconds)

    def duration(self, seconds: float) -> "Xfade":
        range_check(seconds, 0, 60)
        return self.add_arg("duration", seconds)

    def expression(self, expression: str) -> "Xfade":
        return self.add_arg("expr", expression)


@filter_function("concat")
class Concat(FilterFunction):

    @classmethod
    def of(cls, segments: int, video: Optional[int] = None, audio: Optional[int] = None) -> "Concat":
        node = cls().input(segments)
        if video is not None:
            node.video(video)
        if audio is not None:
            node.audio(audio)
        return node

    def input(self, value: int) -> "Concat":
        return self.add_arg("n", value)

    def video(self, value: int) -> "Concat":
        return self.add_arg("v", value)

    def audio(self, value: int) -> "Concat":
        return self.add_arg("a", value)


# ---------------------------------------------------------------------------
# Sources and color
# ---------------------------------------------------------------------------

@filter_function("movie")
class Movie(FilterFunction):
    """Read a file as a video source: movie='logo.png'."""

    @classmethod
    def of(cls, path: str) -> "Movie":
        return cls().add_base_arg("filename", escape(path, quote=True))

    def loop(self, count: int) -> "Movie":
        return self.add_arg("loop", count)

    def stream_index(self, index: int) -> "Movie":
        return self.add_arg("stream_index", index)

    def seek_point(self, seconds: float) -> "Movie":
        return self.add_arg("seek_point", seconds)


@filter_function("eq")
class Eq(FilterFunction):
    """Brightness, contrast, saturation and gamma adjustment."""

    @classmethod
    def of(cls) -> "Eq":
        return cls()

    def contrast(self, value: Union[float, str]) -> "Eq":
        return self.add_arg("contrast", _checked(value, -1000.0, 1000.0))

    def brightness(self, value: Union[float, str]) -> "Eq":
        return self.add_arg("brightness", _checked(value, -1.0, 1.0))

    def saturation(self, value: Union[float, str]) -> "Eq":
        return self.add_arg("saturation", _checked(value, 0.0, 3.0))

    def gamma(self, value: Union[float, str]) -> "Eq":
        return self.add_arg("gamma", _checked(value, 0.1, 10.0))

    def gamma_weight(self, value: Union[float, str]) -> "Eq":
        return self.add_arg("gamma_weight", _checked(value, 0.1, 1.0))

    def eval(self, when: When) -> "Eq":
        return self.add_arg("eval", when)
