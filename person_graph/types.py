from typing import List, Dict, Any, Optional, Generic, TypeVar
from dataclasses import dataclass, field
from enum import Enum


T = TypeVar("T")


class UnresolvedPolicy(str, Enum):
    """What to do with starship ids missing from the batch fetch result."""
    DROP = "drop"
    RAISE = "raise"


@dataclass
class Person:
    """A person as returned by ``GET /people/{id}/``."""
    id: int
    name: str
    film_ids: List[int] = field(default_factory=list)
    starship_ids: List[int] = field(default_factory=list)
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "films": list(self.film_ids),
            "starships": list(self.starship_ids),
            "url": self.url,
        }


@dataclass
class PersonSummary:
    """An item of the people list endpoint.

    ``id`` is extracted from ``url`` and is ``None`` when the url carries no
    numeric suffix.
    """
    id: Optional[int]
    name: str
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
        }


@dataclass
class Film:
    """A film with its full starship manifest."""
    id: int
    title: str
    starship_ids: List[int] = field(default_factory=list)
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "starships": list(self.starship_ids),
            "url": self.url,
        }


@dataclass
class Starship:
    """Represents a starship."""
    id: int
    name: str
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
        }


@dataclass
class Paginated(Generic[T]):
    """A page of a list endpoint."""
    count: int
    next: Optional[str]
    previous: Optional[str]
    results: List[T]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "count": self.count,
            "next": self.next,
            "previous": self.previous,
            "results": [
                item.to_dict() if hasattr(item, "to_dict") else item
                for item in self.results
            ],
        }
