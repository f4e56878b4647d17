"""
Unit tests for filtergraph statements and split points.
"""
import pytest

from ffmpeg_composer.common import ContractError
from ffmpeg_composer.filters import Flip, Scale
from ffmpeg_composer.functions import Custom
from ffmpeg_composer.graph import Graph, Split


class TestGraph:
    """Tests for composing a single statement."""

    def test_node_with_output_label(self):
        graph = Graph.append(Custom.define("movie").add_value("test.jpg")).to("wm")

        assert graph.output() == "movie=test.jpg[wm]"

    def test_inputs_nodes_and_output(self):
        graph = Graph.stream("in", "wm").add("overlay=10:10", Scale.to(1280, 720)).to("out")

        assert str(graph) == "[in][wm]overlay=10:10,scale=1280:720[out]"

    def test_get_omits_output_label(self):
        graph = Graph.stream("in").add("hflip").to("out")

        assert graph.get() == "[in]hflip"
        assert graph.output_label == "[out]"

    def test_inputs_without_nodes(self):
        assert Graph.stream("a").get() == "[a]"

    def test_none_input_labels_are_skipped(self):
        assert Graph.stream(None, "b").add("null").get() == "[b]null"

    def test_empty_graph(self):
        assert Graph().output() == ""

    def test_empty_and_none_items_are_skipped(self):
        graph = Graph.append("", None, "hflip")

        assert graph.nodes == ["hflip"]

    def test_filter_class_adds_its_name(self):
        assert Graph.append(Scale).output() == "scale"

    def test_untagged_class_adds_nothing(self):
        assert Graph.append(Flip).nodes == []

    def test_node_is_captured_at_add_time(self):
        node = Scale.to(1, 2)
        graph = Graph.append(node)
        node.add_arg("flags", "bicubic")

        assert graph.output() == "scale=1:2"

    def test_empty_output_label_is_ignored(self):
        graph = Graph.append("hflip").to("out").to("").to(None)

        assert graph.output() == "hflip[out]"

    def test_over_without_filter_set_raises(self):
        with pytest.raises(ContractError):
            Graph().over()


class TestSplit:
    """Tests for split statements."""

    def test_split_without_source(self):
        assert Split().to("a", "b").render() == "split[a][b]"

    def test_split_with_source(self):
        assert str(Split("in").to("a", "b")) == "[in]split[a][b]"

    def test_split_inside_graph(self):
        graph = Graph.append(Split("0:v").to("a", "b"))

        assert graph.output() == "[0:v]split[a][b]"
