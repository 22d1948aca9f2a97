import asyncio
import time
from typing import Callable, Dict, Optional, Tuple

from ..config import settings
from ..utils.logger import app_logger
from .models import PersonGraphData
from .orchestrator import GraphDataOrchestrator


class GraphDataCache:
    """In-memory memoization of orchestration results keyed by person id.

    An entry is served while it is younger than ``ttl_seconds``. Failures are
    never stored. Concurrent misses for the same id share one in-flight
    orchestration; different ids never wait on each other.
    """

    def __init__(
        self,
        orchestrator: GraphDataOrchestrator,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.orchestrator = orchestrator
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.cache_ttl_seconds
        self._clock = clock
        self._entries: Dict[int, Tuple[float, PersonGraphData]] = {}
        self._in_flight: Dict[int, "asyncio.Future[PersonGraphData]"] = {}
        self.logger = app_logger.bind(component="graph_data_cache")

    def peek(self, person_id: int) -> Optional[PersonGraphData]:
        """Return the fresh cached entry for ``person_id``, if any."""
        entry = self._entries.get(person_id)
        if entry is None:
            return None
        stored_at, data = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[person_id]
            return None
        return data

    async def get(self, person_id: int) -> PersonGraphData:
        cached = self.peek(person_id)
        if cached is not None:
            self.logger.debug(f"Cache hit for person {person_id}")
            return cached

        task = self._in_flight.get(person_id)
        if task is None:
            task = asyncio.ensure_future(self._load(person_id))
            self._in_flight[person_id] = task
            task.add_done_callback(lambda done: self._forget(person_id, done))
        else:
            self.logger.debug(f"Joining in-flight request for person {person_id}")

        # A cancelled caller must not cancel the load for the others
        return await asyncio.shield(task)

    async def _load(self, person_id: int) -> PersonGraphData:
        data = await self.orchestrator.compose(person_id)
        self._entries[person_id] = (self._clock(), data)
        return data

    def _forget(self, person_id: int, task: "asyncio.Future[PersonGraphData]"):
        if self._in_flight.get(person_id) is task:
            del self._in_flight[person_id]

    def invalidate(self, person_id: Optional[int] = None):
        """Drop one entry, or every entry when ``person_id`` is None."""
        if person_id is None:
            self._entries.clear()
        else:
            self._entries.pop(person_id, None)
