"""
Value normalization and text helpers.

Every value that enters a command argument or a filter argument passes through
normalize() exactly once, at insertion time. The helpers here also cover the
quoting, escaping and label-wrapping rules of the ffmpeg command line.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from ffmpeg_composer.aliases import resolve_alias
from ffmpeg_composer.common import (
    APPEND_SEPARATOR,
    DECIMAL_EPS,
    DOUBLE_QUOTE,
    LABEL_END,
    LABEL_START,
    QUOTE,
)

FIXED_DECIMALS = 3
FIXED_TEMPLATE = "{:.3f}"
DECIMAL_QUANTUM = Decimal("0.01")

_ESCAPE_RE = re.compile(r"([:=\[\]\\])")


def is_integer(value: float) -> bool:
    """True when value is within DECIMAL_EPS of its floor."""
    return value - math.floor(value) < DECIMAL_EPS


def decimal_digits(value: float) -> int:
    """Count the significant fractional digits of a float's natural text."""
    if value == int(value):
        return 0
    exponent = Decimal(repr(value)).as_tuple().exponent
    return max(0, -exponent)


def _normalize_float(value: float) -> str:
    if not math.isfinite(value):
        return repr(value)
    if is_integer(value):
        return str(int(math.floor(value)))
    if decimal_digits(value) > FIXED_DECIMALS:
        return FIXED_TEMPLATE.format(value)
    return repr(value)


def normalize(value: Any) -> Optional[str]:
    """Canonicalize an option value into its command-line text.

    Floats snap to integers within DECIMAL_EPS and are otherwise limited to
    three fractional digits. Decimals are rounded half-up to two places.
    Enum members render as their alias token. Strings pass through unchanged,
    so normalizing twice is the same as normalizing once.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _normalize_float(value)
    if isinstance(value, Decimal):
        return format(value.quantize(DECIMAL_QUANTUM, rounding=ROUND_HALF_UP), "f")
    if isinstance(value, Enum):
        return resolve_alias(type(value), value.name)
    return str(value)


def escape(value: Any, quote: bool = False) -> str:
    """Backslash-escape filtergraph metacharacters, optionally single-quoting the result."""
    escaped = _ESCAPE_RE.sub(r"\\\1", str(value))
    return QUOTE + escaped + QUOTE if quote else escaped


def quotes(text: str) -> str:
    """Wrap text in double quotes unless it is already wrapped."""
    if len(text) >= 2 and text.startswith(DOUBLE_QUOTE) and text.endswith(DOUBLE_QUOTE):
        return text
    return DOUBLE_QUOTE + text + DOUBLE_QUOTE


def wrap(label: Any) -> str:
    """Bracket-wrap a stream label: "in" -> "[in]"; None -> ""."""
    text = normalize(label)
    if text is None:
        return ""
    return LABEL_START + text + LABEL_END


def wrap_all(labels: Iterable[Any]) -> str:
    """Concatenate wrapped labels with no separator: ("a", "b") -> "[a][b]"."""
    return "".join(wrap(label) for label in labels if label is not None)


def expand_all(separator: str, values: Iterable[Any]) -> str:
    """Normalize each value, drop Nones, and join the rest with separator."""
    parts = [normalize(v) for v in values]
    return separator.join(p for p in parts if p is not None)


def expand_flags(flags: Iterable[Enum], separator: str = APPEND_SEPARATOR) -> str:
    return expand_all(separator, flags)


def _hex_channel(number: int) -> str:
    return format(number & 0xFF, "02X")


def to_hex_color(rgb: Sequence[int], prefix: str = "#") -> str:
    """Render an (r, g, b) triple as #RRGGBB, or 0xRRGGBB with prefix="0x"."""
    red, green, blue = rgb
    return prefix + _hex_channel(red) + _hex_channel(green) + _hex_channel(blue)
