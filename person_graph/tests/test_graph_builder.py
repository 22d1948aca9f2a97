from person_graph.graph.graph_builder import GraphBuilder, build_graph
from person_graph.graph.models import GraphFilm, GraphPerson, GraphStarship, NodeKind, PersonGraphData


class TestGraphBuilder:
    """Abstract graph derived from normalized data."""

    def test_nodes_and_edges_for_luke(self, luke_graph_data):
        nodes, edges = build_graph(luke_graph_data)

        assert [node.id for node in nodes] == ["person-1", "film-10", "ship-100-f10", "film-20"]
        assert [node.kind for node in nodes] == [
            NodeKind.PERSON, NodeKind.FILM, NodeKind.STARSHIP, NodeKind.FILM
        ]
        assert [node.label for node in nodes] == [
            "Luke Skywalker", "A New Hope", "X-wing", "The Empire Strikes Back"
        ]
        assert [(edge.id, edge.source, edge.target) for edge in edges] == [
            ("e-person-1-film-10", "person-1", "film-10"),
            ("e-film-10-ship-100", "film-10", "ship-100-f10"),
            ("e-person-1-film-20", "person-1", "film-20"),
        ]

    def test_film_without_starships_is_still_linked(self, luke_graph_data):
        nodes, edges = build_graph(luke_graph_data)

        film = next(node for node in nodes if node.id == "film-20")
        assert film.properties["starship_count"] == 0
        assert any(edge.target == "film-20" and edge.source == "person-1" for edge in edges)
        assert not any(edge.source == "film-20" for edge in edges)

    def test_same_starship_under_two_films_gets_distinct_nodes(self):
        data = PersonGraphData(
            person=GraphPerson(id=4, name="Wedge Antilles"),
            films=[
                GraphFilm(id=10, title="A New Hope", starships=[GraphStarship(id=100, name="X-wing")]),
                GraphFilm(id=40, title="Return of the Jedi", starships=[GraphStarship(id=100, name="X-wing")]),
            ],
        )

        nodes, edges = build_graph(data)

        ship_ids = [node.id for node in nodes if node.kind == NodeKind.STARSHIP]
        assert ship_ids == ["ship-100-f10", "ship-100-f40"]
        assert len({node.id for node in nodes}) == len(nodes)
        assert len({edge.id for edge in edges}) == len(edges)

    def test_no_initial_positions(self, luke_graph_data):
        nodes, _ = build_graph(luke_graph_data)
        assert all(node.position is None for node in nodes)

    def test_deterministic(self, luke_graph_data):
        builder = GraphBuilder()
        first = builder.build_graph(luke_graph_data)
        second = builder.build_graph(luke_graph_data)

        assert [n.model_dump() for n in first[0]] == [n.model_dump() for n in second[0]]
        assert [e.model_dump() for e in first[1]] == [e.model_dump() for e in second[1]]

    def test_person_without_films(self):
        data = PersonGraphData(person=GraphPerson(id=3, name="Yoda"))

        nodes, edges = build_graph(data)

        assert [node.id for node in nodes] == ["person-3"]
        assert edges == []
