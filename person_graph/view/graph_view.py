from typing import Awaitable, Callable, List, Optional, Tuple

from ..config import settings
from ..graph.layout import LayoutError, LayoutOptions, layout_graph
from ..graph.models import GraphEdge, GraphNode
from ..utils.generation import Generation
from ..utils.logger import app_logger


LayoutFn = Callable[
    [List[GraphNode], List[GraphEdge], LayoutOptions],
    Awaitable[Tuple[List[GraphNode], List[GraphEdge]]],
]


def default_layout_options() -> LayoutOptions:
    return LayoutOptions(
        node_width=settings.layout_node_width,
        node_height=settings.layout_node_height,
        spacing=settings.layout_spacing,
    )


class GraphView:
    """Holds the displayed graph and applies layout results that are still current.

    Each call to ``show`` starts a new generation. The layout call always runs
    to completion; a result whose generation has been superseded is dropped.
    """

    def __init__(self, layout_fn: LayoutFn = layout_graph, options: Optional[LayoutOptions] = None):
        self.layout_fn = layout_fn
        self.options = options or default_layout_options()
        self.nodes: List[GraphNode] = []
        self.edges: List[GraphEdge] = []
        self.positioned = False
        self.last_error: Optional[LayoutError] = None
        self._generation = Generation()
        self.logger = app_logger.bind(component="graph_view")

    async def show(self, nodes: List[GraphNode], edges: List[GraphEdge]) -> bool:
        """Display a new abstract graph and lay it out.

        Returns True if the positions were applied, False if a newer graph
        superseded this one first.

        Raises:
            LayoutError: if the layout of the current graph failed.
        """
        token = self._generation.advance()
        self.nodes = list(nodes)
        self.edges = list(edges)
        self.positioned = False
        self.last_error = None

        try:
            laid_out, _ = await self.layout_fn(self.nodes, self.edges, self.options)
        except LayoutError as e:
            if not self._generation.is_current(token):
                self.logger.debug(f"Discarding layout failure of stale generation {token}")
                return False
            self.logger.error(f"Layout failed: {e}")
            self.last_error = e
            raise

        if not self._generation.is_current(token):
            self.logger.debug(f"Discarding stale layout of generation {token}")
            return False

        self.nodes = laid_out
        self.positioned = True
        return True

    def clear(self):
        """Reset the view; pending layouts become stale."""
        self._generation.advance()
        self.nodes = []
        self.edges = []
        self.positioned = False
        self.last_error = None

    def to_dict(self):
        return {
            "positioned": self.positioned,
            "nodes": [node.model_dump(mode="json") for node in self.nodes],
            "edges": [edge.model_dump(mode="json") for edge in self.edges],
        }
