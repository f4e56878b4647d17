"""Filter-set container: the value of -vf / -filter_complex."""

from typing import Any, List, Optional

from ffmpeg_composer.common import GROUP_SEPARATOR, not_empty, not_none
from ffmpeg_composer.graph import Graph, Split

SIMPLE = "vf"
COMPLEX = "filter_complex"


class FilterSet:
    """Semicolon-joined filtergraph statements for one filter option.

    Usage:
        filters = FilterSet.complex()
        filters.graph(Graph.append(Movie.of("logo.png")).to("wm"))
        filters.stream("in", "wm").add(Overlay.at(Overlays.CENTER)).to("out")
        str(filters)  # "movie='logo.png'[wm];[in][wm]overlay=...[out]"
    """

    def __init__(self, option: str) -> None:
        self._option = option.lstrip("-")
        self._splitter: Optional[Split] = None
        self._graphs: List[Graph] = []

    @classmethod
    def simple(cls) -> "FilterSet":
        return cls(SIMPLE)

    @classmethod
    def complex(cls) -> "FilterSet":
        return cls(COMPLEX)

    @classmethod
    def define(cls, option: str) -> "FilterSet":
        return cls(not_empty(option, "The filter option name cannot be empty"))

    @property
    def option_name(self) -> str:
        return self._option

    @property
    def graphs(self) -> List[Graph]:
        return list(self._graphs)

    def split(self, *labels: Any) -> "FilterSet":
        """Prepend a split statement fanning the input out to labels."""
        not_empty(labels, "The input split stream name cannot be empty")
        self._splitter = Split().to(*labels)
        return self

    def graph(self, *items: Any) -> "FilterSet":
        """Append a Graph, or a new unlabelled graph built from nodes/expressions."""
        if len(items) == 1 and isinstance(items[0], Graph):
            self._graphs.append(items[0])
        elif len(items) == 1 and items[0] is None:
            not_none(None, "The filter graph cannot be null")
        else:
            self._graphs.append(Graph.append(*items))
        return self

    def stream(self, *labels: Any) -> Graph:
        """Start a new graph reading from labels; call .over() to come back."""
        graph = Graph(self).inputs(*labels)
        self._graphs.append(graph)
        return graph

    def add(self, *items: Any) -> Graph:
        """Start a new unlabelled graph from items; call .over() to come back."""
        graph = Graph(self).add(*items)
        self._graphs.append(graph)
        return graph

    def is_empty(self) -> bool:
        return not self._graphs

    def render(self) -> str:
        if not self._graphs:
            return ""
        statements = []
        if self._splitter is not None:
            statements.append(self._splitter.render())
        statements.extend(graph.output() for graph in self._graphs)
        return GROUP_SEPARATOR.join(statements)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"<FilterSet -{self._option} {self.render()!r}>"
