"""
Builds the abstract person graph (nodes and edges, no positions).
"""
from typing import List, Tuple

from .models import GraphEdge, GraphNode, NodeKind, PersonGraphData


def person_node_id(person_id: int) -> str:
    return f"person-{person_id}"


def film_node_id(film_id: int) -> str:
    return f"film-{film_id}"


def starship_node_id(starship_id: int, film_id: int) -> str:
    # Namespaced per film: the same starship renders once under each film
    return f"ship-{starship_id}-f{film_id}"


class GraphBuilder:
    """Turns PersonGraphData into nodes and edges.

    Pure and deterministic: identical input gives identical ids in identical
    order, so a layout or rendering engine can diff by id.
    """

    def build_graph(self, data: PersonGraphData) -> Tuple[List[GraphNode], List[GraphEdge]]:
        """
        Builds the graph for one person.
        Returns a tuple of nodes and edges.
        """
        nodes: List[GraphNode] = []
        edges: List[GraphEdge] = []

        # 1. Root person node
        person_id = person_node_id(data.person.id)
        nodes.append(GraphNode(
            id=person_id,
            label=data.person.name,
            kind=NodeKind.PERSON,
            properties={"entity_id": data.person.id},
        ))

        for film in data.films:
            # 2. Film node and person -> film edge, always
            film_id = film_node_id(film.id)
            nodes.append(GraphNode(
                id=film_id,
                label=film.title,
                kind=NodeKind.FILM,
                properties={"entity_id": film.id, "starship_count": len(film.starships)},
            ))
            edges.append(GraphEdge(
                id=f"e-person-{data.person.id}-film-{film.id}",
                source=person_id,
                target=film_id,
            ))

            # 3. Starships the person used in this film
            for ship in film.starships:
                ship_id = starship_node_id(ship.id, film.id)
                nodes.append(GraphNode(
                    id=ship_id,
                    label=ship.name,
                    kind=NodeKind.STARSHIP,
                    properties={"entity_id": ship.id, "film_id": film.id},
                ))
                edges.append(GraphEdge(
                    id=f"e-film-{film.id}-ship-{ship.id}",
                    source=film_id,
                    target=ship_id,
                ))

        return nodes, edges


def build_graph(data: PersonGraphData) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """Module-level shortcut for ``GraphBuilder().build_graph``."""
    return GraphBuilder().build_graph(data)
