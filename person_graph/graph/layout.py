"""
Automatic layered (top to bottom) layout for the person graph.

The layering itself is delegated to networkx; every node is a fixed-size box
and ``spacing`` is used both within a layer and between layers. The
computation runs in the default executor so the event loop stays free.
"""
import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import networkx as nx

from ..utils.logger import app_logger
from .models import GraphEdge, GraphNode, Position

logger = app_logger.bind(component="layout")


class LayoutError(Exception):
    """Raised when the layout computation fails."""


@dataclass
class LayoutOptions:
    node_width: float = 160.0
    node_height: float = 48.0
    spacing: float = 48.0


class LayeredLayoutEngine:
    """Sugiyama-style layered placement on top of networkx.

    Layers come from ``nx.topological_generations``; nodes inside a layer are
    ordered by the barycenter of their predecessors to reduce crossings.
    Returned coordinates are the top-left corner of each box.
    """

    def compute(
        self,
        node_ids: Sequence[str],
        edges: Sequence[Tuple[str, str]],
        options: LayoutOptions,
    ) -> Dict[str, Tuple[float, float]]:
        graph = nx.DiGraph()
        graph.add_nodes_from(node_ids)
        for source, target in edges:
            if source not in graph or target not in graph:
                raise LayoutError(f"Edge {source} -> {target} references an unknown node")
            graph.add_edge(source, target)

        if not nx.is_directed_acyclic_graph(graph):
            raise LayoutError("Layered layout requires an acyclic graph")

        input_order = {node_id: index for index, node_id in enumerate(node_ids)}
        step_x = options.node_width + options.spacing
        step_y = options.node_height + options.spacing

        x_center: Dict[str, float] = {}
        positions: Dict[str, Tuple[float, float]] = {}

        for depth, layer in enumerate(nx.topological_generations(graph)):
            def barycenter(node_id):
                preds = [x_center[p] for p in graph.predecessors(node_id)]
                center = sum(preds) / len(preds) if preds else 0.0
                return (center, input_order[node_id])

            ordered = sorted(layer, key=barycenter)
            width = len(ordered) * step_x - options.spacing
            for index, node_id in enumerate(ordered):
                x_center[node_id] = -width / 2 + index * step_x + options.node_width / 2
                positions[node_id] = (x_center[node_id] - options.node_width / 2, depth * step_y)

        if positions:
            min_x = min(x for x, _ in positions.values())
            positions = {node_id: (x - min_x, y) for node_id, (x, y) in positions.items()}

        return positions


_default_engine = LayeredLayoutEngine()


async def layout_graph(
    nodes: List[GraphNode],
    edges: List[GraphEdge],
    options: Optional[LayoutOptions] = None,
    engine: Optional[LayeredLayoutEngine] = None,
) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """Compute positions for ``nodes``.

    Returns copies of the nodes with positions applied and the edges
    unchanged. A node the engine did not position keeps its previous
    position.

    Raises:
        LayoutError: if the layout computation fails.
    """
    options = options or LayoutOptions()
    engine = engine or _default_engine
    node_ids = [node.id for node in nodes]
    edge_pairs = [(edge.source, edge.target) for edge in edges]

    try:
        positions = await asyncio.get_event_loop().run_in_executor(
            None,
            lambda: engine.compute(node_ids, edge_pairs, options)
        )
    except LayoutError:
        raise
    except Exception as e:
        logger.error(f"Layout computation failed: {e}")
        raise LayoutError(str(e)) from e

    laid_out = []
    for node in nodes:
        point = positions.get(node.id)
        if point is None:
            logger.debug(f"No position computed for {node.id}, keeping previous")
            laid_out.append(node.model_copy(deep=True))
        else:
            laid_out.append(node.model_copy(update={"position": Position(x=point[0], y=point[1])}, deep=True))

    logger.debug(f"Laid out {len(positions)}/{len(nodes)} nodes")
    return laid_out, edges
