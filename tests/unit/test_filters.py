"""
Unit tests for the concrete video filter nodes.

Each test pins the exact node expression ffmpeg receives.
"""
import pytest

from ffmpeg_composer.common import ContractError
from ffmpeg_composer.enums import AspectRatio, EofAction, Overlays, PixelFormat, VideoSize, When
from ffmpeg_composer.filters import (
    Concat,
    Crop,
    Eq,
    Fade,
    Flip,
    Format,
    Fps,
    Movie,
    Overlay,
    Pad,
    Scale,
    Xfade,
)
from ffmpeg_composer.filters.video import FpsLink, RoundMethod, Transition


class TestScale:
    """Tests for the scale filter."""

    def test_width_and_height(self):
        assert str(Scale.to(1280, 720)) == "scale=1280:720"

    def test_expressions(self):
        assert str(Scale.to("iw/2", "ih/2").eval(When.FRAME)) == "scale=iw/2:ih/2:eval=frame"

    def test_named_size(self):
        assert str(Scale.to(VideoSize.HD720)) == "scale=s=hd720"

    def test_missing_height_raises(self):
        with pytest.raises(ContractError):
            Scale.to(1280)

    def test_options_follow_dimensions(self):
        node = Scale.to(-1, 720).force_original_aspect_ratio(AspectRatio.DECREASE)

        assert str(node) == "scale=-1:720:force_original_aspect_ratio=decrease"

    @pytest.mark.parametrize("value", [0, 257])
    def test_force_divisible_by_range(self, value):
        with pytest.raises(ContractError):
            Scale.to(1280, 720).force_divisible_by(value)


class TestGeometry:
    """Tests for crop, pad, overlay and flip."""

    def test_crop(self):
        assert str(Crop.the(640, 480, 10, 20)) == "crop=640:480:10:20"

    def test_crop_without_position(self):
        assert str(Crop.the(640, 480).exact()) == "crop=640:480:exact=1"

    def test_pad(self):
        node = Pad.of().size("iw+20", "ih+20").position(10, 10).color("black")

        assert str(node) == "pad=w=iw+20:h=ih+20:x=10:y=10:color=black"

    def test_pad_escapes_expressions(self):
        assert str(Pad.of().size("a:b", 10)) == "pad=w=a\\:b:h=10"

    def test_overlay_centered(self):
        assert str(Overlay.at(Overlays.CENTER)) == "overlay=(main_w-overlay_w)/2:(main_h-overlay_h)/2"

    def test_overlay_anchored_with_margin(self):
        node = Overlay.anchored(Overlays.RIGHT_BOTTOM, 10, 10)

        assert str(node) == "overlay=main_w-overlay_w-10:main_h-overlay_h-10"

    def test_overlay_coordinates_and_options(self):
        node = Overlay.at(10, 20).shortest().eof_action(EofAction.END_ALL)

        assert str(node) == "overlay=10:20:shortest=1:eof_action=endall"

    def test_flip(self):
        assert str(Flip.horizontal()) == "hflip"
        assert str(Flip.vertical()) == "vflip"


class TestTiming:
    """Tests for fps, format, fade and xfade."""

    def test_fps(self):
        assert str(Fps.of(25)) == "fps=fps=25"

    def test_fps_named_rate(self):
        assert str(Fps.of(FpsLink.NTSC_FILM).round(RoundMethod.NEAR)) == "fps=fps=ntsc_film:round=near"

    def test_format_joins_with_pipe(self):
        assert str(Format.of(PixelFormat.YUV420P, PixelFormat.NV12)) == "format=yuv420p|nv12"

    def test_format_single(self):
        assert str(Format.of(PixelFormat.GRAY)) == "format=gray"

    def test_format_requires_a_pixel_format(self):
        with pytest.raises(ContractError):
            Format.of()

    def test_fade_in_skips_zero_start(self):
        assert str(Fade.fade_in().at(0, 2)) == "fade=t=in:d=2"

    def test_fade_out(self):
        assert str(Fade.fade_out().at(5.5, 1.5)) == "fade=t=out:st=5.5:d=1.5"

    def test_fade_by_frames(self):
        assert str(Fade.fade_in().frame(10, 25)) == "fade=t=in:s=10:n=25"

    def test_xfade(self):
        node = Xfade.of(Transition.FADE_BLACK, offset=4, duration=1)

        assert str(node) == "xfade=transition=fadeblack:offset=4:duration=1"

    def test_xfade_duration_range(self):
        with pytest.raises(ContractError):
            Xfade.of(Transition.FADE).duration(61)


class TestSourcesAndColor:
    """Tests for concat, movie and eq."""

    def test_concat(self):
        assert str(Concat.of(2, video=1, audio=1)) == "concat=n=2:v=1:a=1"

    def test_movie_quotes_path(self):
        assert str(Movie.of("test.jpg")) == "movie='test.jpg'"

    def test_movie_escapes_path(self):
        assert str(Movie.of("C:/logo.png")) == "movie='C\\:/logo.png'"

    def test_movie_options(self):
        assert str(Movie.of("test.jpg").loop(0)) == "movie='test.jpg':loop=0"

    def test_eq(self):
        assert str(Eq.of().contrast(1.5).brightness(0.1)) == "eq=contrast=1.5:brightness=0.1"

    def test_eq_range_check(self):
        with pytest.raises(ContractError):
            Eq.of().brightness(2)

    def test_eq_accepts_expressions(self):
        assert str(Eq.of().brightness("0.1*sin(t)")) == "eq=brightness=0.1*sin(t)"
