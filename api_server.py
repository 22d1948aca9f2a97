import asyncio
from contextlib import asynccontextmanager

import aiohttp
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Dict, Any, Optional
import uvicorn

from person_graph.config import settings
from person_graph.entities import fetch_people, next_page_number
from person_graph.graph import (
    GraphBuilder, GraphDataCache, GraphDataOrchestrator, LayoutError,
    PersonGraphData, UnresolvedStarshipError, layout_graph
)
from person_graph.transport import HttpClient, HttpError
from person_graph.utils.logger import app_logger
from person_graph.view import default_layout_options


logger = app_logger.bind(component="api_server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with HttpClient() as client:
        app.state.client = client
        app.state.cache = GraphDataCache(GraphDataOrchestrator(client))
        logger.info(f"Using upstream API at {client.base_url}")
        yield


app = FastAPI(title="Person Graph API", version="0.1.0", lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

builder = GraphBuilder()


class PeoplePageResponse(BaseModel):
    count: int
    next_page: Optional[int]
    results: List[Dict[str, Any]]


class GraphResponse(BaseModel):
    person: Dict[str, Any]
    positioned: bool
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]


def get_client() -> HttpClient:
    return app.state.client


def get_cache() -> GraphDataCache:
    return app.state.cache


def _upstream_error(e: HttpError) -> HTTPException:
    status_code = 404 if e.status == 404 else 502
    return HTTPException(status_code=status_code, detail=str(e))


# Connection failures and timeouts never reach the HttpError status mapping
UPSTREAM_UNAVAILABLE = (aiohttp.ClientError, asyncio.TimeoutError)


@app.get("/api/people", response_model=PeoplePageResponse)
async def list_people(
    page: int = Query(1, ge=1),
    search: str = "",
    client: HttpClient = Depends(get_client),
):
    """Get one page of people, with ids extracted from their urls."""
    try:
        result = await fetch_people(client, page=page, search=search)
    except HttpError as e:
        logger.error(f"Error listing people: {e}")
        raise _upstream_error(e)
    except UPSTREAM_UNAVAILABLE as e:
        logger.error(f"Upstream unavailable while listing people: {e!r}")
        raise HTTPException(status_code=502, detail="Upstream unavailable")

    return PeoplePageResponse(
        count=result.count,
        next_page=next_page_number(result, page),
        results=[person.to_dict() for person in result.results],
    )


@app.get("/api/people/{person_id}/graph-data", response_model=PersonGraphData)
async def get_graph_data(person_id: int, cache: GraphDataCache = Depends(get_cache)):
    """Get the person, its films and the starships it used in each film."""
    try:
        return await cache.get(person_id)
    except HttpError as e:
        logger.error(f"Error composing graph data for person {person_id}: {e}")
        raise _upstream_error(e)
    except UnresolvedStarshipError as e:
        logger.error(str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except UPSTREAM_UNAVAILABLE as e:
        logger.error(f"Upstream unavailable for person {person_id}: {e!r}")
        raise HTTPException(status_code=502, detail="Upstream unavailable")


@app.get("/api/people/{person_id}/graph", response_model=GraphResponse)
async def get_graph(person_id: int, cache: GraphDataCache = Depends(get_cache)):
    """Get the laid-out graph for a person."""
    data = await get_graph_data(person_id, cache)
    nodes, edges = builder.build_graph(data)

    try:
        nodes, edges = await layout_graph(nodes, edges, default_layout_options())
    except LayoutError as e:
        logger.error(f"Error laying out graph for person {person_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return GraphResponse(
        person=data.person.model_dump(),
        positioned=True,
        nodes=[node.model_dump(mode="json") for node in nodes],
        edges=[edge.model_dump(mode="json") for edge in edges],
    )


if __name__ == "__main__":
    logger.info("Starting Person Graph API server")

    uvicorn.run(
        "api_server:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower()
    )
