"""Shared builders for the test-suite."""

from typing import List

from graph import Edge, Node


def collect(gen) -> List:
    return list(gen)


def make_nodes(*ids, coords=None) -> List[Node]:
    coords = coords or {}
    return [Node(nid, x=coords.get(nid, (None, None))[0], y=coords.get(nid, (None, None))[1]) for nid in ids]


def E(eid, source, target, weight=None, directed=False) -> Edge:
    return Edge(eid, source, target, weight, directed)


def sample_graph():
    """
    n0 -1- n1 -2- n2 -1- n3     plus n0 -5- n2, all undirected.
    Shortest n0 → n3 is n0, n1, n2, n3 with cost 4.
    """
    nodes = make_nodes("n0", "n1", "n2", "n3")
    edges = [
        E("e0", "n0", "n1", 1),
        E("e1", "n1", "n2", 2),
        E("e2", "n0", "n2", 5),
        E("e3", "n2", "n3", 1),
    ]
    return nodes, edges


def square_graph():
    """4-cycle, every edge weight 1."""
    nodes = make_nodes("a", "b", "c", "d")
    edges = [
        E("ab", "a", "b", 1),
        E("bc", "b", "c", 1),
        E("cd", "c", "d", 1),
        E("da", "d", "a", 1),
    ]
    return nodes, edges


def assert_well_formed(steps):
    """Step numbers run 0..n-1 and only the last step is final."""
    assert steps, "an algorithm must yield at least one step"
    assert [s.step_number for s in steps] == list(range(len(steps)))
    assert steps[-1].is_final_step
    assert not any(s.is_final_step for s in steps[:-1])
