"""Shared constants and contract checks used across ffmpeg_composer modules."""

from typing import Any, Optional, Sized

# Option prefix and the bare output marker (an argument whose key is just "-")
ARG_PREFIX = "-"
OUTPUT_MARKER = ARG_PREFIX

DECIMAL_EPS = 1e-10

# Wrap tokens
LABEL_START = "["
LABEL_END = "]"
QUOTE = "'"
DOUBLE_QUOTE = '"'
ARGUMENT_WRAPPER = ("", "")

# Separators of the filtergraph mini-language
VALUE_SEPARATOR = "="
PARAMETER_SEPARATOR = ":"
GROUP_SEPARATOR = ";"
PART_SEPARATOR = ","
APPEND_SEPARATOR = "+"
LIST_SEPARATOR = "|"


class ContractError(ValueError):
    """Raised when a caller violates a builder's input contract."""


class UnknownVariantError(ContractError):
    """Raised when an alias is requested for a variant the enum does not declare."""


def not_none(target: Any, message: str) -> Any:
    if target is None:
        raise ContractError(message)
    return target


def not_empty(target: Optional[Sized], message: str) -> Any:
    if not target:
        raise ContractError(message)
    return target


def range_check(value: float, start: float, end: float) -> float:
    """Reject values outside the closed interval [start, end]."""
    if value < start or value > end:
        raise ContractError(
            f"Value out of range({start}, {end}), but your value is {value}"
        )
    return value
