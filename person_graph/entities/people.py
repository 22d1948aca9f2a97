from typing import Optional
from urllib.parse import urlencode, urlparse, parse_qs

from ..transport.http_client import HttpClient
from ..types import Paginated, Person, PersonSummary
from .ids import coerce_ids, extract_id_from_url


async def fetch_person(client: HttpClient, person_id: int) -> Person:
    """Fetch a single person, tagged with the requested id."""
    data = await client.request(f"/people/{person_id}/")
    return Person(
        id=person_id,
        name=data.get("name", ""),
        film_ids=coerce_ids(data.get("films")),
        starship_ids=coerce_ids(data.get("starships")),
        url=data.get("url", ""),
    )


async def fetch_people(client: HttpClient, page: int = 1, search: str = "") -> Paginated[PersonSummary]:
    """Fetch one page of people, optionally filtered by a search term.

    Ids are extracted from each item's ``url``.
    """
    query = {"page": str(page)}
    if search:
        query["search"] = search

    data = await client.request(f"/people/?{urlencode(query)}")
    results = [
        PersonSummary(
            id=extract_id_from_url(item.get("url")),
            name=item.get("name", ""),
            url=item.get("url", ""),
        )
        for item in data.get("results", [])
    ]
    return Paginated(
        count=data.get("count", len(results)),
        next=data.get("next"),
        previous=data.get("previous"),
        results=results,
    )


def next_page_number(page: Paginated, current_page: int) -> Optional[int]:
    """Derive the page number following ``page``, or None on the last page."""
    if not page.next:
        return None
    values = parse_qs(urlparse(page.next).query).get("page")
    if values and values[0].isdigit():
        return int(values[0])
    return current_page + 1
