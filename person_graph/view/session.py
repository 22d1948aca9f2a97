from typing import Awaitable, Callable, Optional

from ..graph.graph_builder import GraphBuilder
from ..graph.models import PersonGraphData
from ..utils.generation import Generation
from ..utils.logger import app_logger
from .graph_view import GraphView


GraphDataLoader = Callable[[int], Awaitable[PersonGraphData]]


class PersonGraphSession:
    """Tracks the currently requested person and keeps its graph on display.

    Selecting a person makes every earlier in-flight request stale: its data,
    its error and its layout are dropped instead of being applied.
    """

    def __init__(self, loader: GraphDataLoader, view: Optional[GraphView] = None,
                 builder: Optional[GraphBuilder] = None):
        self.loader = loader
        self.view = view or GraphView()
        self.builder = builder or GraphBuilder()
        self.person_id: Optional[int] = None
        self.data: Optional[PersonGraphData] = None
        self.error: Optional[Exception] = None
        self.loading = False
        self._requests = Generation()
        self.logger = app_logger.bind(component="person_graph_session")

    async def select_person(self, person_id: int) -> Optional[PersonGraphData]:
        """Load, build and lay out the graph for ``person_id``.

        Returns the graph data, or None if a newer selection superseded this
        one while it was in flight. Errors of the current request are stored
        on ``error`` and re-raised.
        """
        token = self._requests.advance()
        self.person_id = person_id
        self.data = None
        self.error = None
        self.loading = True
        self.view.clear()

        try:
            data = await self.loader(person_id)
        except Exception as e:
            if not self._requests.is_current(token):
                self.logger.debug(f"Dropping error of superseded request for person {person_id}: {e}")
                return None
            self.logger.error(f"Failed to load graph data for person {person_id}: {e}")
            self.error = e
            self.loading = False
            raise

        if not self._requests.is_current(token):
            self.logger.debug(f"Discarding superseded graph data for person {person_id}")
            return None

        self.data = data
        self.loading = False

        nodes, edges = self.builder.build_graph(data)
        applied = await self.view.show(nodes, edges)
        if not applied and not self._requests.is_current(token):
            self.logger.debug(f"Discarding layout of superseded request for person {person_id}")
            return None
        return data
