import asyncio

import pytest

from person_graph.graph.graph_builder import build_graph
from person_graph.graph.layout import LayeredLayoutEngine, LayoutError, LayoutOptions, layout_graph
from person_graph.graph.models import GraphEdge, GraphNode, NodeKind, Position


def _node(node_id, position=None):
    return GraphNode(id=node_id, label=node_id, kind=NodeKind.FILM, position=position)


def _edge(source, target):
    return GraphEdge(id=f"e-{source}-{target}", source=source, target=target)


class PartialEngine:
    """Positions only the first node."""

    def compute(self, node_ids, edges, options):
        return {node_ids[0]: (1.0, 2.0)}


class TestLayout:
    """Layered top-to-bottom layout."""

    def test_layers_run_top_to_bottom(self, luke_graph_data):
        nodes, edges = build_graph(luke_graph_data)
        options = LayoutOptions(node_width=160, node_height=48, spacing=48)

        laid_out, returned_edges = asyncio.run(layout_graph(nodes, edges, options))

        positions = {node.id: node.position for node in laid_out}
        assert all(position is not None for position in positions.values())
        assert positions["person-1"].y == 0
        assert positions["film-10"].y == positions["film-20"].y == 96
        assert positions["ship-100-f10"].y == 192
        assert positions["film-10"].x + 160 + 48 == positions["film-20"].x
        assert min(position.x for position in positions.values()) == 0
        assert returned_edges is edges

    def test_same_node_set_and_input_untouched(self, luke_graph_data):
        nodes, edges = build_graph(luke_graph_data)

        laid_out, _ = asyncio.run(layout_graph(nodes, edges))

        assert [node.id for node in laid_out] == [node.id for node in nodes]
        assert all(node.position is None for node in nodes)

    def test_children_follow_parent_order(self):
        """A child is placed under the side of its parent, not by input order."""
        nodes = [_node("root"), _node("a"), _node("b"), _node("b-child"), _node("a-child")]
        edges = [_edge("root", "a"), _edge("root", "b"), _edge("a", "a-child"), _edge("b", "b-child")]

        laid_out, _ = asyncio.run(layout_graph(nodes, edges))

        positions = {node.id: node.position for node in laid_out}
        assert positions["a"].x < positions["b"].x
        assert positions["a-child"].x < positions["b-child"].x

    def test_cycle_raises_layout_error(self):
        nodes = [_node("a"), _node("b")]
        edges = [_edge("a", "b"), _edge("b", "a")]

        with pytest.raises(LayoutError):
            asyncio.run(layout_graph(nodes, edges))

    def test_unknown_edge_endpoint_raises_layout_error(self):
        with pytest.raises(LayoutError):
            asyncio.run(layout_graph([_node("a")], [_edge("a", "missing")]))

    def test_missing_position_keeps_previous(self):
        nodes = [_node("a"), _node("b", position=Position(x=5, y=7)), _node("c")]

        laid_out, _ = asyncio.run(layout_graph(nodes, [], engine=PartialEngine()))

        assert laid_out[0].position == Position(x=1.0, y=2.0)
        assert laid_out[1].position == Position(x=5, y=7)
        assert laid_out[2].position is None

    def test_engine_failure_becomes_layout_error(self):
        class BrokenEngine:
            def compute(self, node_ids, edges, options):
                raise ValueError("bad input")

        with pytest.raises(LayoutError):
            asyncio.run(layout_graph([_node("a")], [], engine=BrokenEngine()))

    def test_empty_graph(self):
        assert LayeredLayoutEngine().compute([], [], LayoutOptions()) == {}
