"""Concrete filtergraph nodes."""

from ffmpeg_composer.filters.video import (
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

__all__ = [
    "Concat", "Crop", "Eq", "Fade", "Flip", "Format",
    "Fps", "Movie", "Overlay", "Pad", "Scale", "Xfade",
]
