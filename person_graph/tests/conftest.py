import asyncio
import os
from typing import Any, Dict, List, Optional

import pytest

# Keep test runs from writing log files
os.environ.setdefault("LOG_FILE", "")

from person_graph.graph.layout import LayoutError, LayoutOptions
from person_graph.graph.models import (
    GraphEdge, GraphFilm, GraphNode, GraphPerson, GraphStarship, PersonGraphData, Position
)
from person_graph.transport.http_client import HttpError


class FakeClient:
    """Stands in for HttpClient: serves canned JSON per path and records requests."""

    def __init__(self, routes: Dict[str, Any], delays: Optional[Dict[str, float]] = None,
                 statuses: Optional[Dict[str, int]] = None,
                 errors: Optional[Dict[str, BaseException]] = None):
        self.routes = routes
        self.delays = delays or {}
        self.statuses = statuses or {}
        self.errors = errors or {}
        self.requested: List[str] = []

    async def request(self, path: str) -> Any:
        self.requested.append(path)
        await asyncio.sleep(self.delays.get(path, 0))
        if path in self.errors:
            raise self.errors[path]
        if path in self.statuses:
            raise HttpError(self.statuses[path], "upstream error")
        if path not in self.routes:
            raise HttpError(404, "Not found")
        return self.routes[path]


class CallRecorder:
    """Wraps a fetcher and records the id argument of every call."""

    def __init__(self, fn):
        self.fn = fn
        self.calls: List[Any] = []

    async def __call__(self, client, arg):
        self.calls.append(list(arg) if isinstance(arg, (list, tuple)) else arg)
        return await self.fn(client, arg)


class GatedLayout:
    """Layout function whose calls resolve only when released by the test."""

    def __init__(self, fail: bool = False):
        self.pending: List[asyncio.Event] = []
        self.fail = fail

    async def __call__(self, nodes: List[GraphNode], edges: List[GraphEdge], options: LayoutOptions):
        gate = asyncio.Event()
        self.pending.append(gate)
        await gate.wait()
        if self.fail:
            raise LayoutError("layout engine failed")
        laid_out = [
            node.model_copy(update={"position": Position(x=float(index), y=0.0)})
            for index, node in enumerate(nodes)
        ]
        return laid_out, edges


async def instant_layout(nodes, edges, options):
    return [
        node.model_copy(update={"position": Position(x=float(index), y=0.0)})
        for index, node in enumerate(nodes)
    ], edges


@pytest.fixture
def swapi_routes() -> Dict[str, Any]:
    """Canned upstream responses keyed by request path."""
    return {
        "/people/1/": {
            "name": "Luke Skywalker",
            "films": [10, 20],
            "starships": [100, 101],
            "url": "https://sw-api.starnavi.io/people/1/",
        },
        "/people/2/": {
            "name": "Han Solo",
            "films": [30],
            "starships": [200],
            "url": "https://sw-api.starnavi.io/people/2/",
        },
        "/people/3/": {
            "name": "Yoda",
            "films": [],
            "starships": [100],
            "url": "https://sw-api.starnavi.io/people/3/",
        },
        "/people/4/": {
            "name": "Wedge Antilles",
            "films": [10, 40],
            "starships": [100, 101],
            "url": "https://sw-api.starnavi.io/people/4/",
        },
        "/films/10/": {"title": "A New Hope", "starships": [100, 999], "url": "https://sw-api.starnavi.io/films/10/"},
        "/films/20/": {"title": "The Empire Strikes Back", "starships": [555], "url": "https://sw-api.starnavi.io/films/20/"},
        "/films/30/": {"title": "Return of the Jedi", "starships": [300, 301], "url": "https://sw-api.starnavi.io/films/30/"},
        "/films/40/": {"title": "Return of the Jedi", "starships": [101, 100, 101], "url": "https://sw-api.starnavi.io/films/40/"},
        "/starships/100/": {"name": "X-wing", "url": "https://sw-api.starnavi.io/starships/100/"},
        "/starships/101/": {"name": "Imperial shuttle", "url": "https://sw-api.starnavi.io/starships/101/"},
    }


@pytest.fixture
def fake_client(swapi_routes) -> FakeClient:
    return FakeClient(swapi_routes)


@pytest.fixture
def luke_graph_data() -> PersonGraphData:
    """Normalized data for the Luke scenario."""
    return PersonGraphData(
        person=GraphPerson(id=1, name="Luke Skywalker"),
        films=[
            GraphFilm(id=10, title="A New Hope", starships=[GraphStarship(id=100, name="X-wing")]),
            GraphFilm(id=20, title="The Empire Strikes Back", starships=[]),
        ],
    )


def make_graph_data(person_id: int, film_ids: List[int] = (10,)) -> PersonGraphData:
    return PersonGraphData(
        person=GraphPerson(id=person_id, name=f"Person {person_id}"),
        films=[GraphFilm(id=film_id, title=f"Film {film_id}") for film_id in film_ids],
    )
