"""
Filtergraph statement composition.

A Graph is one statement of a filtergraph:

    [in][wm]overlay=10:10,scale=1280:720[out]

input labels, then the comma-joined node chain, then an optional output label.
"""

from typing import TYPE_CHECKING, Any, List, Optional

from ffmpeg_composer.common import PART_SEPARATOR, ContractError
from ffmpeg_composer.functions import function_name_of
from ffmpeg_composer.values import wrap, wrap_all

if TYPE_CHECKING:
    from ffmpeg_composer.filterset import FilterSet

SPLIT = "split"


class Graph:
    """A chain of filter nodes with optional input and output stream labels.

    Items passed to add() may be node expressions (str), nodes (anything with
    render(), captured at add time) or node classes (their filter name).
    """

    def __init__(self, filter_set: Optional["FilterSet"] = None) -> None:
        self._inputs = ""
        self._nodes: List[str] = []
        self._output_label: Optional[str] = None
        self._filter_set = filter_set

    @classmethod
    def stream(cls, *labels: Any) -> "Graph":
        return cls().inputs(*labels)

    @classmethod
    def append(cls, *items: Any) -> "Graph":
        return cls().add(*items)

    def inputs(self, *labels: Any) -> "Graph":
        """Set the input labels: ("in", "wm") -> "[in][wm]"."""
        self._inputs = wrap_all(labels)
        return self

    def add(self, *items: Any) -> "Graph":
        for item in items:
            expression = _expression_of(item)
            if expression:
                self._nodes.append(expression)
        return self

    def to(self, label: Any) -> "Graph":
        """Name the chain's output stream. Empty labels are ignored."""
        if label is not None and label != "":
            self._output_label = wrap(label)
        return self

    def over(self) -> "FilterSet":
        """Return to the filter set that created this graph."""
        if self._filter_set is None:
            raise ContractError("This graph does not belong to a filter set")
        return self._filter_set

    @property
    def input_labels(self) -> str:
        return self._inputs

    @property
    def output_label(self) -> str:
        return self._output_label or ""

    @property
    def nodes(self) -> List[str]:
        return list(self._nodes)

    def get(self) -> str:
        """The statement without its output label."""
        return self._inputs + PART_SEPARATOR.join(self._nodes)

    def output(self) -> str:
        """The full statement including the output label."""
        return self.get() + self.output_label

    def render(self) -> str:
        return self.output()

    def __str__(self) -> str:
        return self.output()

    def __repr__(self) -> str:
        return f"<Graph {self.output()!r}>"


class Split:
    """A split statement: [source]split[a][b]."""

    def __init__(self, source: Any = None) -> None:
        self._source = wrap(source)
        self._labels = ""

    def to(self, *labels: Any) -> "Split":
        self._labels = wrap_all(labels)
        return self

    def render(self) -> str:
        return self._source + SPLIT + self._labels

    def __str__(self) -> str:
        return self.render()


def _expression_of(item: Any) -> Optional[str]:
    if item is None:
        return None
    if isinstance(item, str):
        return item
    if isinstance(item, type):
        return function_name_of(item)
    return item.render()
