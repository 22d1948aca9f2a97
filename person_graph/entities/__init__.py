"""
Fetchers for the people, films and starships endpoints.
"""

from .ids import extract_id_from_url, coerce_ids
from .people import fetch_person, fetch_people, next_page_number
from .films import fetch_film, fetch_films
from .starships import fetch_starship, fetch_starships

__all__ = [
    'extract_id_from_url',
    'coerce_ids',
    'fetch_person',
    'fetch_people',
    'next_page_number',
    'fetch_film',
    'fetch_films',
    'fetch_starship',
    'fetch_starships'
]
