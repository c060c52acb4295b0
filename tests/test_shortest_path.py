import math

import pytest

from graph import Graph
from algorithms.astar import astar
from algorithms.bellman_ford import bellman_ford
from algorithms.dijkstra import dijkstra
from algorithms.floyd_warshall import floyd_warshall, floyd_warshall_path
from algorithms.step import (
    AStarExtension,
    BellmanFordExtension,
    FloydWarshallExtension,
    NODE,
)

from helpers import E, assert_well_formed, collect, make_nodes, sample_graph

SINGLE_SOURCE = [dijkstra, bellman_ford, astar]


def _random_graph(seed, nodes=6, edges=9):
    g = Graph.generate_random(nodes, edges, seed=seed)
    return list(g.nodes.values()), list(g.edges.values())


# ---------------------------------------------------------------------------
# validation shared by every single-source engine
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("algo", SINGLE_SOURCE)
def test_unknown_start_is_an_error_step(algo):
    steps = collect(algo(*sample_graph(), "nope", "n3"))
    assert len(steps) == 1
    assert steps[0].is_final_step and steps[0].is_error
    assert "nope" in steps[0].message


@pytest.mark.parametrize("algo", SINGLE_SOURCE)
def test_unknown_target_is_an_error_step(algo):
    steps = collect(algo(*sample_graph(), "n0", "zz"))
    assert len(steps) == 1
    assert steps[0].is_error


@pytest.mark.parametrize("algo", SINGLE_SOURCE)
def test_empty_graph(algo):
    steps = collect(algo([], [], "n0", "n1"))
    assert len(steps) == 1
    assert steps[0].is_final_step
    assert not steps[0].is_error
    assert steps[0].message == "Graph is empty."


@pytest.mark.parametrize("algo", SINGLE_SOURCE)
def test_shortest_path_on_sample_graph(algo):
    steps = collect(algo(*sample_graph(), "n0", "n3"))
    assert_well_formed(steps)
    final = steps[-1]
    assert final.target_found_path == ("n0", "n1", "n2", "n3")
    assert final.distances["n3"] == 4
    path_edges = {h.id for h in final.highlights if h.kind != NODE and h.color == "path"}
    assert path_edges == {"e0", "e1", "e3"}


@pytest.mark.parametrize("algo", SINGLE_SOURCE)
def test_unreachable_target(algo):
    nodes, edges = sample_graph()
    nodes = nodes + make_nodes("island")
    final = collect(algo(nodes, edges, "n0", "island"))[-1]
    assert final.target_found_path is None
    assert not final.is_error


@pytest.mark.parametrize("algo", [dijkstra, bellman_ford])
def test_start_equals_target(algo):
    final = collect(algo(*sample_graph(), "n2", "n2"))[-1]
    assert final.target_found_path == ("n2",)
    assert final.distances["n2"] == 0


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
def test_dijkstra_without_target_visits_everything_reachable():
    nodes, edges = sample_graph()
    final = collect(dijkstra(nodes + make_nodes("island"), edges, "n0"))[-1]
    assert "All reachable nodes visited" in final.message
    assert final.distances == {"n0": 0, "n1": 1, "n2": 3, "n3": 4, "island": math.inf}
    assert final.target_found_path is None


def test_dijkstra_blank_target_means_no_target():
    final = collect(dijkstra(*sample_graph(), "n0", "   "))[-1]
    assert not final.is_error
    assert "All reachable nodes visited" in final.message


def test_dijkstra_stops_when_target_is_visited():
    steps = collect(dijkstra(*sample_graph(), "n0", "n1"))
    visits = [s.current_node_id for s in steps if s.message.startswith("Visiting")]
    assert visits == ["n0", "n1"]


def test_dijkstra_honours_zero_weights():
    nodes = make_nodes("a", "b", "c")
    edges = [E("ab", "a", "b", 0), E("bc", "b", "c")]       # missing weight → 1
    final = collect(dijkstra(nodes, edges, "a", "c"))[-1]
    assert final.distances["b"] == 0
    assert final.distances["c"] == 1


def test_dijkstra_respects_direction():
    nodes = make_nodes("a", "b")
    edges = [E("ba", "b", "a", 1, directed=True)]
    final = collect(dijkstra(nodes, edges, "a", "b"))[-1]
    assert final.target_found_path is None
    assert "not reachable" in final.message


def test_dijkstra_snapshots_are_independent():
    steps = collect(dijkstra(*sample_graph(), "n0", "n3"))
    assert steps[0].distances["n1"] == math.inf
    assert steps[-1].distances["n1"] == 1


# ---------------------------------------------------------------------------
# Bellman-Ford
# ---------------------------------------------------------------------------
def test_bellman_ford_negative_cycle():
    nodes = make_nodes("n0", "n1")
    edges = [E("e0", "n0", "n1", 1, directed=True), E("e1", "n1", "n0", -2, directed=True)]
    steps = collect(bellman_ford(nodes, edges, "n0"))
    assert_well_formed(steps)
    final = steps[-1]
    assert isinstance(final.extension, BellmanFordExtension)
    assert final.extension.negative_cycle_detected
    assert set(final.extension.negative_cycle_nodes) == {"n0", "n1"}
    assert "Negative-weight cycle detected" in final.message
    assert not final.is_error


def test_bellman_ford_negative_undirected_edge_is_a_cycle():
    nodes = make_nodes("a", "b")
    final = collect(bellman_ford(nodes, [E("ab", "a", "b", -1)], "a"))[-1]
    assert final.extension.negative_cycle_detected


def test_bellman_ford_negative_edges_without_cycle():
    nodes = make_nodes("n0", "n1", "n2")
    edges = [
        E("a", "n0", "n1", 4, directed=True),
        E("b", "n0", "n2", 2, directed=True),
        E("c", "n2", "n1", -1, directed=True),
    ]
    final = collect(bellman_ford(nodes, edges, "n0", "n1"))[-1]
    assert not final.extension.negative_cycle_detected
    assert final.distances["n1"] == 1
    assert final.target_found_path == ("n0", "n2", "n1")
    g = Graph(nodes, edges)
    for u, v, edge in g.arcs():
        assert final.distances[v] <= final.distances[u] + edge.weight


def _negative_dag(seed):
    """Directed graph with negative weights whose arcs only run n_i → n_j, i < j."""
    g = Graph.generate_random(6, 12, directed=True, allow_negative_weights=True, seed=seed)
    index = {nid: i for i, nid in enumerate(g.node_ids())}
    edges = [e for e in g.edges.values() if index[e.source] < index[e.target]]
    return list(g.nodes.values()), edges


@pytest.mark.parametrize("seed", range(10))
def test_bellman_ford_triangle_inequality_with_negative_weights(seed):
    nodes, edges = _negative_dag(seed)
    final = collect(bellman_ford(nodes, edges, "n0"))[-1]
    assert not final.extension.negative_cycle_detected
    for u, v, edge in Graph(nodes, edges).arcs():
        assert final.distances[v] <= final.distances[u] + edge.weight

def test_bellman_ford_stops_early_on_convergence():
    steps = collect(bellman_ford(*sample_graph(), "n0"))
    passes = {s.extension.pass_number for s in steps}
    assert max(passes) < 3
    assert any("No distances updated" in s.message for s in steps)


def test_bellman_ford_every_step_carries_its_extension():
    for step in bellman_ford(*sample_graph(), "n0", "n3"):
        assert isinstance(step.extension, BellmanFordExtension)


@pytest.mark.parametrize("seed", range(10))
def test_dijkstra_and_bellman_ford_agree(seed):
    nodes, edges = _random_graph(seed)
    d = collect(dijkstra(nodes, edges, "n0"))[-1]
    b = collect(bellman_ford(nodes, edges, "n0"))[-1]
    assert d.distances == b.distances


# ---------------------------------------------------------------------------
# A*
# ---------------------------------------------------------------------------
def test_astar_requires_a_target():
    steps = collect(astar(*sample_graph(), "n0"))
    assert len(steps) == 1
    assert steps[0].is_error


def test_astar_without_coordinates_falls_back_to_zero_heuristic():
    steps = collect(astar(*sample_graph(), "n0", "n3"))
    assert "coordinates missing" in steps[0].message
    assert all(isinstance(s.extension, AStarExtension) for s in steps)
    assert steps[-1].extension.heuristic_uses_coordinates is False
    assert steps[-1].distances["n3"] == 4


def test_astar_with_coordinates():
    nodes = make_nodes("a", "b", "c", coords={"a": (0, 0), "b": (1, 0), "c": (2, 0)})
    edges = [E("ab", "a", "b", 1), E("bc", "b", "c", 1), E("ac", "a", "c", 5)]
    steps = collect(astar(nodes, edges, "a", "c"))
    assert_well_formed(steps)
    final = steps[-1]
    assert final.target_found_path == ("a", "b", "c")
    assert final.extension.heuristic_uses_coordinates is True
    assert final.extension.f_scores["c"] == pytest.approx(2.0)
    assert "Cost: 2.00" in final.message


def test_astar_success_message_flags_missing_coordinates():
    final = collect(astar(*sample_graph(), "n0", "n3"))[-1]
    assert final.message.startswith("Path found to n3!")
    assert "coordinates missing" in final.message


def test_astar_partial_coordinates_are_flagged():
    nodes = make_nodes("a", "b", coords={"a": (0, 0)})
    final = collect(astar(nodes, [E("ab", "a", "b", 1)], "a", "b"))[-1]
    assert final.target_found_path == ("a", "b")
    assert "coordinates missing" in final.message


@pytest.mark.parametrize("directed", [False, True])
@pytest.mark.parametrize("seed", range(10))
def test_astar_matches_dijkstra_on_generated_graphs(seed, directed):
    g = Graph.generate_random(8, 14, directed=directed, seed=seed)
    nodes, edges = list(g.nodes.values()), list(g.edges.values())
    expected = collect(dijkstra(nodes, edges, "n0"))[-1].distances
    for target in g.node_ids()[1:]:
        final = collect(astar(nodes, edges, "n0", target))[-1]
        assert final.extension.heuristic_uses_coordinates is True
        if expected[target] == math.inf:
            assert final.target_found_path is None
        else:
            assert final.distances[target] == expected[target]
            assert final.target_found_path[-1] == target

def test_astar_failure_when_target_unreachable():
    nodes = make_nodes("a", "b", "c")
    final = collect(astar(nodes, [E("ab", "a", "b", 1)], "a", "c"))[-1]
    assert "Failed to find a path" in final.message
    assert final.target_found_path is None


# ---------------------------------------------------------------------------
# Floyd-Warshall
# ---------------------------------------------------------------------------
def test_floyd_warshall_sample_graph():
    steps = collect(floyd_warshall(*sample_graph()))
    assert_well_formed(steps)
    ext = steps[-1].extension
    assert isinstance(ext, FloydWarshallExtension)
    assert not ext.negative_cycle_detected
    assert ext.distance_matrix["n0"]["n3"] == 4
    assert ext.distance_matrix["n3"]["n0"] == 4
    assert floyd_warshall_path(ext.next_hop_matrix, "n0", "n3") == ["n0", "n1", "n2", "n3"]


def test_floyd_warshall_step_count():
    steps = collect(floyd_warshall(make_nodes("a", "b"), [E("ab", "a", "b", 1)]))
    # init + one check per (k, i, j) + final, no improving updates
    assert len(steps) == 1 + 8 + 1


def test_floyd_warshall_parallel_edges_keep_minimum():
    nodes = make_nodes("a", "b")
    edges = [E("x", "a", "b", 7), E("y", "a", "b", 3)]
    ext = collect(floyd_warshall(nodes, edges))[0].extension
    assert ext.distance_matrix["a"]["b"] == 3


def test_floyd_warshall_negative_cycle():
    nodes = make_nodes("n0", "n1")
    edges = [E("e0", "n0", "n1", 1, directed=True), E("e1", "n1", "n0", -2, directed=True)]
    final = collect(floyd_warshall(nodes, edges))[-1]
    assert final.extension.negative_cycle_detected


def test_floyd_warshall_path_unreachable():
    nodes = make_nodes("a", "b")
    ext = collect(floyd_warshall(nodes, []))[-1].extension
    assert ext.distance_matrix["a"]["b"] == math.inf
    assert floyd_warshall_path(ext.next_hop_matrix, "a", "b") is None
    assert floyd_warshall_path(ext.next_hop_matrix, "a", "a") == ["a"]


def test_floyd_warshall_empty_graph():
    steps = collect(floyd_warshall([], []))
    assert len(steps) == 1 and steps[0].message == "Graph is empty."


@pytest.mark.parametrize("seed", range(5))
def test_floyd_warshall_agrees_with_bellman_ford(seed):
    nodes, edges = _random_graph(seed, nodes=5, edges=7)
    matrix = collect(floyd_warshall(nodes, edges))[-1].extension.distance_matrix
    for src in (n.id for n in nodes):
        distances = collect(bellman_ford(nodes, edges, src))[-1].distances
        assert matrix[src] == distances

@pytest.mark.parametrize("seed", range(6))
def test_floyd_warshall_agrees_with_bellman_ford_on_negative_weights(seed):
    nodes, edges = _negative_dag(seed)
    ext = collect(floyd_warshall(nodes, edges))[-1].extension
    assert not ext.negative_cycle_detected
    for src in (n.id for n in nodes):
        distances = collect(bellman_ford(nodes, edges, src))[-1].distances
        assert ext.distance_matrix[src] == distances


@pytest.mark.parametrize("algo", [dijkstra, bellman_ford, astar])
def test_single_source_engines_are_deterministic(algo):
    g = Graph.generate_random(7, 11, seed=4)
    nodes, edges = list(g.nodes.values()), list(g.edges.values())
    assert collect(algo(nodes, edges, "n0", "n5")) == collect(algo(nodes, edges, "n0", "n5"))


def test_floyd_warshall_is_deterministic():
    nodes, edges = _random_graph(3, nodes=4, edges=5)
    assert collect(floyd_warshall(nodes, edges)) == collect(floyd_warshall(nodes, edges))
