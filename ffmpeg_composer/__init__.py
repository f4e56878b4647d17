"""
FFMPEG Composer - Command and filtergraph expression building for ffmpeg.

Compiles structured option and filter-node models into ffmpeg's flat
argument syntax and its filtergraph mini-language, and runs the result.
"""

from ffmpeg_composer.commands import FFmpegCommand, FFprobeCommand, HelpCommand
from ffmpeg_composer.common import ContractError, UnknownVariantError
from ffmpeg_composer.execution import CommandFailedError, ExecutionResult, FFMPEGExecutor
from ffmpeg_composer.filterset import FilterSet
from ffmpeg_composer.functions import Custom, FilterFunction
from ffmpeg_composer.graph import Graph, Split
from ffmpeg_composer.values import normalize

__all__ = [
    "CommandFailedError",
    "ContractError",
    "Custom",
    "ExecutionResult",
    "FFMPEGExecutor",
    "FFmpegCommand",
    "FFprobeCommand",
    "FilterFunction",
    "FilterSet",
    "Graph",
    "HelpCommand",
    "Split",
    "UnknownVariantError",
    "normalize",
]
