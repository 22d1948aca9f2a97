import asyncio
from typing import List, Sequence

from ..transport.http_client import HttpClient
from ..types import Starship


async def fetch_starship(client: HttpClient, starship_id: int) -> Starship:
    """Fetch a single starship, tagged with the requested id."""
    data = await client.request(f"/starships/{starship_id}/")
    return Starship(id=starship_id, name=data.get("name", ""), url=data.get("url", ""))


async def fetch_starships(client: HttpClient, starship_ids: Sequence[int]) -> List[Starship]:
    """Fetch several starships concurrently; the first failure is raised."""
    if not starship_ids:
        return []
    return list(await asyncio.gather(*(fetch_starship(client, sid) for sid in starship_ids)))
