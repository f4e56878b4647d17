"""Flat command-line model: an ordered list of -key [value] arguments."""

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

from ffmpeg_composer.common import ARG_PREFIX, OUTPUT_MARKER, ContractError
from ffmpeg_composer.values import normalize, quotes


def command_key(key: str) -> str:
    """Prefix an option name with "-" unless it already has one."""
    return key if key.startswith(ARG_PREFIX) else ARG_PREFIX + key


@dataclass
class Argument:
    """A single command-line option and its (normalized) value."""

    key: str
    value: Optional[str] = None
    quoted: bool = False
    index: int = 0

    def __post_init__(self) -> None:
        if self.key is None:
            raise ContractError("The command input cannot be null")
        self.key = command_key(self.key)

    def matches(self, key: str) -> bool:
        return self.key == command_key(key)

    def tokens(self) -> List[str]:
        out: List[str] = []
        if self.key != OUTPUT_MARKER:
            out.append(self.key)
        if self.value is not None:
            out.append(quotes(self.value) if self.quoted else self.value)
        return out

    def __str__(self) -> str:
        return " ".join(self.tokens())


class ArgumentList:
    """Ordered arguments with replace-in-place semantics for unique keys."""

    def __init__(self) -> None:
        self._arguments: List[Argument] = []
        self._next_index = 0

    def put(
        self,
        key: str,
        value: Any = None,
        unique: bool = True,
        quoted: bool = False,
    ) -> int:
        """Insert or update an argument and return its position id.

        With unique=True an existing argument for key keeps its position and
        only its value changes. With unique=False a new argument is always
        appended (e.g. repeated -i inputs).
        """
        if key is None:
            raise ContractError("The command input cannot be null")
        argument = self.find(key) if unique else None
        if argument is None:
            argument = Argument(key=key, index=self._next_index)
            self._next_index += 1
            self._arguments.append(argument)
        argument.value = normalize(value)
        argument.quoted = quoted
        return argument.index

    def find(self, key: str) -> Optional[Argument]:
        for argument in self._arguments:
            if argument.matches(key):
                return argument
        return None

    def exists(self, key: str) -> bool:
        return self.find(key) is not None

    def remove(self, key: str) -> None:
        argument = self.find(key)
        if argument is not None:
            self._arguments.remove(argument)

    def replace(self, key: str, value: Any) -> None:
        """Change the value of an existing argument; no-op when key is absent."""
        argument = self.find(key)
        if argument is not None:
            argument.value = normalize(value)

    def render(self, *prefix: str) -> List[str]:
        tokens: List[str] = list(prefix)
        for argument in self._arguments:
            tokens.extend(argument.tokens())
        return tokens

    def __contains__(self, key: str) -> bool:
        return self.exists(key)

    def __iter__(self) -> Iterator[Argument]:
        return iter(self._arguments)

    def __len__(self) -> int:
        return len(self._arguments)

    def __str__(self) -> str:
        if not self._arguments:
            return "[]"
        return "[" + " ".join(self.render()) + "]"
