import pytest

from graph import Graph
from algorithms.kruskal import kruskal
from algorithms.prim import prim
from algorithms.step import EDGE, MSTExtension

from helpers import E, assert_well_formed, collect, make_nodes, square_graph


def test_kruskal_square():
    steps = collect(kruskal(*square_graph()))
    assert_well_formed(steps)
    ext = steps[-1].extension
    assert ext.mst_weight == 3
    assert len(ext.mst_edge_ids) == 3
    assert ext.is_forest is False


def test_prim_square():
    steps = collect(prim(*square_graph(), "a"))
    assert_well_formed(steps)
    ext = steps[-1].extension
    assert ext.mst_weight == 3
    assert ext.mst_edge_ids == ("ab", "da", "bc")
    assert ext.is_forest is False


@pytest.mark.parametrize("algo", [kruskal, prim])
def test_every_step_carries_mst_extension(algo):
    for step in algo(*square_graph()):
        assert isinstance(step.extension, MSTExtension)


@pytest.mark.parametrize("algo", [kruskal, prim])
def test_empty_graph(algo):
    steps = collect(algo([], []))
    assert len(steps) == 1
    assert steps[0].message == "Graph is empty."
    assert steps[0].extension.mst_weight == 0


def test_kruskal_discards_cycle_edge():
    nodes = make_nodes("a", "b", "c")
    edges = [E("ab", "a", "b", 1), E("bc", "b", "c", 2), E("ca", "c", "a", 3), E("cd", "c", "a", 0)]
    steps = collect(kruskal(nodes, edges))
    ext = steps[-1].extension
    assert ext.mst_edge_ids == ("cd", "ab")
    assert ext.mst_weight == 1
    # stopped after |V|-1 edges, so the heavier edges were never considered
    assert not any("bc" in s.message for s in steps)


def test_kruskal_marks_discarded_edges_muted():
    nodes = make_nodes("a", "b", "c")
    edges = [E("ab", "a", "b", 1), E("ba", "b", "a", 2), E("bc", "b", "c", 3)]
    steps = collect(kruskal(nodes, edges))
    discard = next(s for s in steps if s.message.startswith("Discarded"))
    assert discard.highlight_for(EDGE, "ba").color == "muted"
    assert steps[-1].extension.mst_edge_ids == ("ab", "bc")


def test_kruskal_missing_weight_counts_as_zero():
    nodes = make_nodes("a", "b")
    ext = collect(kruskal(nodes, [E("ab", "a", "b")]))[-1].extension
    assert ext.mst_weight == 0
    assert ext.mst_edge_ids == ("ab",)


@pytest.mark.parametrize("algo", [kruskal, prim])
def test_disconnected_graph_is_a_forest(algo):
    nodes = make_nodes("a", "b", "c", "d")
    edges = [E("ab", "a", "b", 2), E("cd", "c", "d", 5)]
    final = collect(algo(nodes, edges))[-1]
    assert final.extension.is_forest is True
    assert "disconnected" in final.message


def test_prim_unknown_start_falls_back_to_first_node():
    steps = collect(prim(*square_graph(), "zz"))
    assert "not found" in steps[0].message
    assert steps[0].current_node_id == "a"
    assert steps[-1].extension.mst_weight == 3


def test_prim_takes_the_cheapest_leaving_edge():
    nodes = make_nodes("a", "b", "c")
    edges = [E("ab", "a", "b", 1), E("ac", "a", "c", 2), E("bc", "b", "c", 1)]
    steps = collect(prim(nodes, edges, "a"))
    ext = steps[-1].extension
    assert ext.mst_edge_ids == ("ab", "bc")
    assert ext.mst_weight == 2


def test_prim_stale_candidate_is_reported():
    nodes = make_nodes("a", "b", "c", "d")
    edges = [
        E("ab", "a", "b", 1),
        E("ac", "a", "c", 2),
        E("bc", "b", "c", 1),
        E("cd", "c", "d", 9),
    ]
    steps = collect(prim(nodes, edges, "a"))
    assert any("already in MST. Discarding." in s.message for s in steps)
    assert steps[-1].extension.mst_weight == 11


@pytest.mark.parametrize("seed", range(10))
def test_kruskal_and_prim_agree(seed):
    g = Graph.generate_random(7, 12, seed=seed)
    nodes, edges = list(g.nodes.values()), list(g.edges.values())
    k = collect(kruskal(nodes, edges))[-1].extension
    p = collect(prim(nodes, edges, "n0"))[-1].extension
    if not k.is_forest:
        assert not p.is_forest
        assert k.mst_weight == p.mst_weight
