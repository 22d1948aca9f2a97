import asyncio
from typing import List, Sequence

from ..transport.http_client import HttpClient
from ..types import Film
from .ids import coerce_ids


async def fetch_film(client: HttpClient, film_id: int) -> Film:
    """Fetch a single film, tagged with the requested id."""
    data = await client.request(f"/films/{film_id}/")
    return Film(
        id=film_id,
        title=data.get("title", ""),
        starship_ids=coerce_ids(data.get("starships")),
        url=data.get("url", ""),
    )


async def fetch_films(client: HttpClient, film_ids: Sequence[int]) -> List[Film]:
    """Fetch several films concurrently; results follow ``film_ids`` order."""
    if not film_ids:
        return []
    return list(await asyncio.gather(*(fetch_film(client, film_id) for film_id in film_ids)))
