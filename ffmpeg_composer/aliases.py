"""
Alias resolution for enumerated option values.

Each enum member has a canonical wire token: an override registered with
@aliases(...) when one exists, otherwise the member name lowercased. The table
for a type is built on first use, published as a read-only mapping, and reused
for the lifetime of the process.
"""

import threading
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Type, TypeVar

from ffmpeg_composer.common import ContractError, UnknownVariantError

E = TypeVar("E", bound=Type[Enum])

_overrides: Dict[type, Dict[str, str]] = {}
_tables: Dict[type, Mapping[str, str]] = {}
_lock = threading.Lock()


def aliases(**tokens: str) -> Callable[[E], E]:
    """Class decorator declaring wire tokens that differ from the lowercased name.

    Usage:
        @aliases(VERY_FAST="veryfast")
        class Preset(CommandEnum):
            VERY_FAST = 1
    """

    def register(enum_type: E) -> E:
        unknown = set(tokens) - set(enum_type.__members__)
        if unknown:
            raise ContractError(
                f"{enum_type.__name__} declares no variant(s): {', '.join(sorted(unknown))}"
            )
        _overrides[enum_type] = dict(tokens)
        return enum_type

    return register


def _build_table(enum_type: Type[Enum]) -> Mapping[str, str]:
    overrides = _overrides.get(enum_type, {})
    return MappingProxyType({
        name: overrides.get(name, name.lower())
        for name in enum_type.__members__
    })


def alias_table(enum_type: Type[Enum]) -> Mapping[str, str]:
    """Return the variant -> token table for enum_type, building it once."""
    table = _tables.get(enum_type)
    if table is None:
        with _lock:
            table = _tables.get(enum_type)
            if table is None:
                table = _build_table(enum_type)
                _tables[enum_type] = table
    return table


def resolve_alias(enum_type: Type[Enum], name: str) -> str:
    """Map a variant name of enum_type to its canonical wire token."""
    try:
        return alias_table(enum_type)[name]
    except KeyError:
        raise UnknownVariantError(
            f"{enum_type.__name__} has no variant named {name!r}"
        ) from None


class CommandEnum(Enum):
    """Base for enumerated constants that render as ffmpeg tokens."""

    def command(self) -> str:
        return resolve_alias(type(self), self.name)
