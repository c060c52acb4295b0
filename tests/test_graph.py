import pytest

from graph import Edge, Graph, Node

from helpers import E, make_nodes, sample_graph


def test_undirected_edges_are_traversable_both_ways():
    g = Graph(*sample_graph())
    assert [nbr for nbr, _ in g.neighbours("n1")] == ["n0", "n2"]
    assert g.get_edge_between("n1", "n0").id == "e0"
    assert g.get_edge_between("n0", "n3") is None


def test_directed_edges_only_forward():
    g = Graph(make_nodes("a", "b"), [E("ab", "a", "b", 3, directed=True)])
    assert [nbr for nbr, _ in g.neighbours("a")] == ["b"]
    assert g.neighbours("b") == []
    assert g.get_edge_between("b", "a") is None
    assert [(u, v) for u, v, _ in g.arcs()] == [("a", "b")]


def test_arcs_expand_undirected_edges():
    g = Graph(make_nodes("a", "b"), [E("ab", "a", "b", 3)])
    assert [(u, v) for u, v, _ in g.arcs()] == [("a", "b"), ("b", "a")]


def test_dangling_edges_are_kept_but_not_traversed(caplog):
    g = Graph(make_nodes("a"), [E("ax", "a", "x", 1)])
    assert "ax" in g.edges
    assert g.neighbours("a") == []
    assert list(g.arcs()) == []
    assert "unknown node" in caplog.text


def test_duplicate_ids_keep_the_first():
    g = Graph([Node("a", label="first"), Node("a", label="second")])
    assert g.node_count() == 1
    assert g.get_node("a").label == "first"


def test_edge_cost_honours_zero_weight():
    assert Edge("e", "a", "b", 0).cost(1) == 0
    assert Edge("e", "a", "b").cost(1) == 1
    assert Edge("e", "a", "b", -2).cost(0) == -2


def test_edge_other_end():
    assert Edge("e", "a", "b").other_end("b") == "a"
    assert Edge("e", "a", "b", directed=True).other_end("b") is None


def test_node_distance_needs_coordinates():
    a = Node("a", x=0, y=0)
    b = Node("b", x=3, y=4)
    assert a.distance_to(b) == pytest.approx(5.0)
    assert a.distance_to(Node("c")) is None


def test_from_dict_requires_ids():
    with pytest.raises(ValueError):
        Node.from_dict({"label": "x"})
    with pytest.raises(ValueError):
        Edge.from_dict({"id": "e", "source": "a"})


def test_graph_dict_round_trip():
    g = Graph(*sample_graph())
    again = Graph.from_dict(g.to_dict())
    assert list(again.nodes.values()) == list(g.nodes.values())
    assert list(again.edges.values()) == list(g.edges.values())


# ---------------------------------------------------------------------------
# random generator
# ---------------------------------------------------------------------------
def test_generate_random_is_seeded():
    a = Graph.generate_random(8, 12, seed=5)
    b = Graph.generate_random(8, 12, seed=5)
    assert a.to_dict() == b.to_dict()


@pytest.mark.parametrize("seed", range(6))
def test_generate_random_has_no_self_loops_or_duplicates(seed):
    g = Graph.generate_random(6, 20, seed=seed)
    pairs = set()
    for e in g.edges.values():
        assert e.source != e.target
        key = frozenset((e.source, e.target))
        assert key not in pairs
        pairs.add(key)
        assert 1 <= e.weight <= 10
    assert g.node_count() == 6
    assert g.edge_count() <= 15


def test_generate_random_coordinates_are_in_weight_units():
    g = Graph.generate_random(10, 0, max_weight=10, seed=1)
    ids = [n.id for n in g.nodes.values()]
    assert ids == [f"n{i}" for i in range(10)]
    for n in g.nodes.values():
        assert n.has_coordinates
        assert 0 <= n.x <= 10 and 0 <= n.y <= 10


@pytest.mark.parametrize("seed", range(8))
def test_generate_random_weights_cover_straight_line_length(seed):
    g = Graph.generate_random(8, 14, seed=seed)
    for e in g.edges.values():
        length = g.get_node(e.source).distance_to(g.get_node(e.target))
        assert e.weight >= length


def test_generate_random_negative_weights():
    g = Graph.generate_random(6, 10, max_weight=5, allow_negative_weights=True, seed=2)
    assert all(-5 <= e.weight <= 5 for e in g.edges.values())


def test_generate_random_rejects_bad_arguments():
    with pytest.raises(ValueError):
        Graph.generate_random(-1, 3)
    with pytest.raises(ValueError):
        Graph.generate_random(3, 3, max_weight=0)
