"""
Filter node serialization.

A FilterFunction holds an ordered set of named and positional arguments and
renders them as one filtergraph node expression:

    name=positional:other=value:flag

Base arguments (registered with add_base_arg) are buffered until the first
regular argument is added or the node is rendered, whichever comes first, and
are then written out as positional values in registration order. A node built
only from base arguments therefore renders as e.g. "scale=1280:720".
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any, Callable, Dict, List, NamedTuple, Optional, Sequence, TypeVar, Union,
)

from ffmpeg_composer.common import (
    ARGUMENT_WRAPPER,
    PARAMETER_SEPARATOR,
    VALUE_SEPARATOR,
)
from ffmpeg_composer.values import expand_all, normalize, to_hex_color

F = TypeVar("F", bound="FilterFunction")
C = TypeVar("C", bound=type)


class ArgState(Enum):
    """Base-argument buffering state of a node."""

    BUFFERING = "buffering"
    FLUSHED = "flushed"


class PositionalSlot(NamedTuple):
    """Synthetic key for an unnamed argument; never equal to a real name."""

    ordinal: int


@dataclass
class FilterArgument:
    name: Optional[str]
    value: Optional[str]

    @property
    def positional(self) -> bool:
        return self.name is None

    def render(self) -> Optional[str]:
        if self.name is None:
            return self.value
        if self.value is None:
            return self.name
        return self.name + VALUE_SEPARATOR + self.value


# ---------------------------------------------------------------------------
# Function name registry
# ---------------------------------------------------------------------------

_function_tags: Dict[type, str] = {}
_function_names: Dict[type, Optional[str]] = {}
_names_lock = threading.Lock()


def filter_function(name: str) -> Callable[[C], C]:
    """Class decorator declaring the ffmpeg filter name a node class renders."""

    def register(cls: C) -> C:
        _function_tags[cls] = name
        return cls

    return register


def function_name_of(cls: type) -> Optional[str]:
    """Return the filter name declared on cls or its nearest tagged base.

    The lookup walks the MRO once per class; the result (including None for
    untagged classes) is cached for the lifetime of the process.
    """
    try:
        return _function_names[cls]
    except KeyError:
        pass
    with _names_lock:
        if cls not in _function_names:
            _function_names[cls] = next(
                (_function_tags[k] for k in cls.__mro__ if k in _function_tags),
                None,
            )
        return _function_names[cls]


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class FilterFunction:
    """Base class for filtergraph nodes."""

    wrapper: Sequence[str] = ARGUMENT_WRAPPER

    def __init__(self, separator: str = PARAMETER_SEPARATOR) -> None:
        self.separator = separator
        self._args: Dict[Union[str, PositionalSlot], FilterArgument] = {}
        self._positionals = 0
        self._state = ArgState.BUFFERING
        self._base: Dict[str, Any] = {}

    @property
    def state(self) -> ArgState:
        return self._state

    @property
    def arguments(self) -> List[FilterArgument]:
        return list(self._args.values())

    def function_name(self) -> Optional[str]:
        return function_name_of(type(self))

    def _store(self, name: Optional[str], value: Optional[str]) -> None:
        if name is None:
            key: Union[str, PositionalSlot] = PositionalSlot(self._positionals)
            self._positionals += 1
        else:
            key = name
        self._args[key] = FilterArgument(name, value)

    def _flush(self) -> None:
        if self._state is ArgState.FLUSHED:
            return
        self._state = ArgState.FLUSHED
        buffered, self._base = self._base, {}
        for value in buffered.values():
            self._store(None, normalize(value))

    def add_base_arg(self: F, name: str, value: Any) -> F:
        """Register a base argument, rendered positionally."""
        if self._state is ArgState.FLUSHED:
            self._store(None, normalize(value))
        else:
            self._base[name] = value
        return self

    def add_joined(self: F, name: Optional[str], separator: str, *values: Any) -> F:
        """Add an argument whose multiple values are joined by separator.

        No values stores a flag-only argument; name=None stores a positional one.
        """
        self._flush()
        if not values:
            value = None
        elif len(values) == 1:
            value = normalize(values[0])
        else:
            value = expand_all(separator, values)
        self._store(name, value)
        return self

    def add_arg(self: F, name: Optional[str], *values: Any) -> F:
        return self.add_joined(name, self.separator, *values)

    def add_value(self: F, value: Any) -> F:
        return self.add_arg(None, value)

    def add_values(self: F, *values: Any) -> F:
        return self.add_arg(None, *values)

    def status(self: F, name: str, state: bool) -> F:
        return self.add_arg(name, 1 if state else 0)

    def enable(self: F, name: str) -> F:
        return self.status(name, True)

    def disable(self: F, name: str) -> F:
        return self.status(name, False)

    def joined_arguments(self) -> str:
        parts = [a.render() for a in self._args.values()]
        body = self.separator.join(p for p in parts if p is not None)
        return self.wrapper[0] + body + self.wrapper[1]

    def render(self) -> str:
        self._flush()
        name = self.function_name()
        if not self._args:
            return name or ""
        arguments = self.joined_arguments()
        if name is None:
            return arguments
        return name + VALUE_SEPARATOR + arguments

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.function_name()!r}>"


class ColorFunction(FilterFunction):
    """Node that accepts a color argument."""

    def color(self: F, color: Any, alpha: float = 0) -> F:
        if isinstance(color, tuple):
            text = to_hex_color(color, prefix="0x")
        else:
            text = normalize(color)
        if alpha > 0:
            text = f"{text}@{normalize(alpha)}"
        return self.add_arg("color", text)


class Custom(ColorFunction):
    """An ad-hoc filter node for filters without a dedicated class.

    Usage:
        Custom.define("fspp").add_arg("quality", 0.5).add_joined("filter_params", "|", 1, 2)
        # -> "fspp=quality=0.5:filter_params=1|2"
    """

    def __init__(self, name: Optional[str], separator: str = PARAMETER_SEPARATOR) -> None:
        super().__init__(separator)
        self._name = name

    @classmethod
    def define(cls, name: Optional[str], separator: str = PARAMETER_SEPARATOR) -> "Custom":
        return cls(name, separator)

    def function_name(self) -> Optional[str]:
        return self._name
