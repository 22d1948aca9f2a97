"""
Composes a person, its films and the starships it used into PersonGraphData.
"""
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from ..config import settings
from ..entities import fetch_person, fetch_films, fetch_starships
from ..transport.http_client import HttpClient
from ..types import Film, Person, Starship, UnresolvedPolicy
from ..utils.logger import app_logger
from .models import GraphFilm, GraphPerson, GraphStarship, PersonGraphData


PersonFetcher = Callable[[HttpClient, int], Awaitable[Person]]
FilmsFetcher = Callable[[HttpClient, Sequence[int]], Awaitable[List[Film]]]
StarshipsFetcher = Callable[[HttpClient, Sequence[int]], Awaitable[List[Starship]]]


class UnresolvedStarshipError(Exception):
    """Raised under UnresolvedPolicy.RAISE when starships could not be resolved."""

    def __init__(self, person_id: int, missing_ids: List[int]):
        super().__init__(f"Unresolved starships for person {person_id}: {missing_ids}")
        self.person_id = person_id
        self.missing_ids = missing_ids


class GraphDataOrchestrator:
    """Fetches person -> films -> starships and normalizes the result.

    The three stages run strictly in sequence; stages two and three fan out
    concurrently and fail fast. Starships are fetched in a single batch per
    person, so a starship used in several films is requested once. Any fetch
    failure propagates unchanged; there is no partial result.
    """

    def __init__(
        self,
        client: HttpClient,
        fetch_person: PersonFetcher = fetch_person,
        fetch_films: FilmsFetcher = fetch_films,
        fetch_starships: StarshipsFetcher = fetch_starships,
        unresolved_policy: Optional[UnresolvedPolicy] = None,
    ):
        self.client = client
        self._fetch_person = fetch_person
        self._fetch_films = fetch_films
        self._fetch_starships = fetch_starships
        self.unresolved_policy = UnresolvedPolicy(
            unresolved_policy or settings.unresolved_starship_policy
        )
        self.logger = app_logger.bind(component="graph_orchestrator")

    async def compose(self, person_id: int) -> PersonGraphData:
        """Build the normalized graph data for ``person_id``."""
        # 1. Person; failure here aborts before anything else is issued
        person = await self._fetch_person(self.client, person_id)
        self.logger.info(
            f"Fetched person {person.id} ({person.name}): "
            f"{len(person.film_ids)} films, {len(person.starship_ids)} starships"
        )

        # 2. Films, in the person's order
        films = await self._fetch_films(self.client, person.film_ids) if person.film_ids else []

        # 3. Per-film intersection with the person's starships
        person_ships = set(person.starship_ids)
        film_to_ships: Dict[int, List[int]] = {}
        needed: Dict[int, None] = {}  # insertion-ordered set

        for film in films:
            intersect = []
            seen = set()
            for sid in film.starship_ids:
                if sid in person_ships and sid not in seen:
                    seen.add(sid)
                    intersect.append(sid)
                    needed[sid] = None
            film_to_ships[film.id] = intersect

        # 4. One batched fetch for the whole person
        if needed:
            self.logger.info(f"Fetching {len(needed)} starships for person {person.id}")
            ships = await self._fetch_starships(self.client, list(needed))
        else:
            self.logger.debug(f"No starships to fetch for person {person.id}")
            ships = []
        ships_by_id = {ship.id: ship for ship in ships}

        missing = [sid for sid in needed if sid not in ships_by_id]
        if missing:
            if self.unresolved_policy is UnresolvedPolicy.RAISE:
                self.logger.error(f"Unresolved starships for person {person.id}: {missing}")
                raise UnresolvedStarshipError(person.id, missing)
            self.logger.debug(f"Dropping unresolved starships for person {person.id}: {missing}")

        # 5. Re-expand ids to objects per film
        graph_films = [
            GraphFilm(
                id=film.id,
                title=film.title,
                starships=[
                    GraphStarship(id=ships_by_id[sid].id, name=ships_by_id[sid].name)
                    for sid in film_to_ships.get(film.id, [])
                    if sid in ships_by_id
                ],
            )
            for film in films
        ]

        # 6. Films keep their order even with no starships
        return PersonGraphData(
            person=GraphPerson(id=person.id, name=person.name),
            films=graph_films,
        )
