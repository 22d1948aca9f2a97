"""
Data models for the person graph.
"""
from enum import Enum
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field


class GraphStarship(BaseModel):
    """A starship resolved under a film."""
    id: int
    name: str


class GraphFilm(BaseModel):
    """A film with the starships the person used in it (possibly none)."""
    id: int
    title: str
    starships: List[GraphStarship] = Field(default_factory=list)


class GraphPerson(BaseModel):
    id: int
    name: str


class PersonGraphData(BaseModel):
    """Normalized result of one orchestration run."""
    person: GraphPerson
    films: List[GraphFilm] = Field(default_factory=list)


class NodeKind(str, Enum):
    PERSON = "person"
    FILM = "film"
    STARSHIP = "starship"


class Position(BaseModel):
    x: float
    y: float


class GraphNode(BaseModel):
    """Represents a node in the person graph."""
    id: str  # e.g. 'person-1', 'film-10', 'ship-100-f10'
    label: str
    kind: NodeKind
    position: Optional[Position] = None  # set only by the layout stage
    properties: Dict[str, Any] = Field(default_factory=dict)


class GraphEdge(BaseModel):
    """Represents a directed edge between two nodes."""
    id: str
    source: str
    target: str
