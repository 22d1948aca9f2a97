"""
Stateful view layer: applies only current orchestration and layout results.
"""

from .graph_view import GraphView, default_layout_options
from .session import PersonGraphSession

__all__ = [
    'GraphView',
    'default_layout_options',
    'PersonGraphSession'
]
