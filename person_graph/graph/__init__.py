"""
Graph module: data orchestration, graph model and layout for a person.
"""

from .models import (
    GraphStarship, GraphFilm, GraphPerson, PersonGraphData,
    NodeKind, Position, GraphNode, GraphEdge
)
from .orchestrator import GraphDataOrchestrator, UnresolvedPolicy, UnresolvedStarshipError
from .cache import GraphDataCache
from .graph_builder import GraphBuilder, build_graph
from .layout import LayoutOptions, LayoutError, LayeredLayoutEngine, layout_graph

__all__ = [
    'GraphStarship',
    'GraphFilm',
    'GraphPerson',
    'PersonGraphData',
    'NodeKind',
    'Position',
    'GraphNode',
    'GraphEdge',
    'GraphDataOrchestrator',
    'UnresolvedPolicy',
    'UnresolvedStarshipError',
    'GraphDataCache',
    'GraphBuilder',
    'build_graph',
    'LayoutOptions',
    'LayoutError',
    'LayeredLayoutEngine',
    'layout_graph'
]
