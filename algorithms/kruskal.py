"""
kruskal.py — Kruskal's Minimum Spanning Tree
==============================================
Edges are taken in ascending weight order (a stable sort, so equal
weights keep their input order).  A disjoint-set union decides whether
an edge joins two components (accept) or closes a cycle (discard).

The graph is treated as undirected.  A missing weight counts as 0.

Yields a Step for:
  1. Start (edges sorted)
  2. Each edge considered  →  SECONDARY
  3. Each accept (edge joins the tree, PATH) or discard (MUTED)
  4. Final: MST weight, worded as a forest when the graph is disconnected

Stops as soon as |V|-1 edges are accepted.
"""

from typing import Generator, Iterable, List, Optional, Set

from graph import Edge, Graph, Node
from algorithms.dsu import DisjointSet
from algorithms.step import GraphHighlights, GraphStep, GraphStepBuilder, MSTExtension

DEFAULT_WEIGHT = 0


def kruskal(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
) -> Generator[GraphStep, None, None]:

    graph = Graph(nodes, edges)
    sb    = GraphStepBuilder("kruskal", graph.nodes.values(), graph.edges.values())
    n     = graph.node_count()

    if n == 0:
        yield sb.final("Graph is empty.", extension=MSTExtension())
        return

    ordered = sorted(graph.traversable_edges(), key=lambda e: e.cost(DEFAULT_WEIGHT))
    dsu     = DisjointSet(graph.node_ids())
    mst: List[Edge] = []
    weight = 0

    def highlights(considering: Optional[str] = None, discarded: Optional[str] = None) -> GraphHighlights:
        in_tree: Set[str] = set()
        for e in mst:
            in_tree.update((e.source, e.target))
        hl = sb.palette()
        for node in sb.nodes:
            hl.node(node.id, "path" if node.id in in_tree else "neutral", node.display_name)
        if considering is not None:
            hl.edge(considering, "secondary")
        if discarded is not None:
            hl.edge(discarded, "muted")
        for e in mst:
            hl.edge(e.id, "path")
        return hl

    def ext(is_forest: bool = False) -> MSTExtension:
        return MSTExtension(
            mst_weight=weight,
            mst_edge_ids=tuple(e.id for e in mst),
            is_forest=is_forest,
        )

    yield sb.build("Starting Kruskal's algorithm. Edges sorted by weight.", highlights(), extension=ext())

    for edge in ordered:
        if len(mst) == n - 1:
            break

        w = edge.cost(DEFAULT_WEIGHT)
        yield sb.build(
            f"Considering edge {edge.id} ({edge.source}-{edge.target}) with weight {w}.",
            highlights(considering=edge.id), extension=ext(),
        )

        if dsu.union(edge.source, edge.target):
            mst.append(edge)
            weight += w
            yield sb.build(
                f"Added edge {edge.id} to MST. Current MST weight: {weight:.2f}.",
                highlights(), extension=ext(),
            )
        else:
            yield sb.build(
                f"Discarded edge {edge.id} (forms a cycle).",
                highlights(discarded=edge.id), extension=ext(),
            )

    if len(mst) < n - 1:
        yield sb.final(
            f"Kruskal's algorithm complete. Graph is disconnected: built a minimum spanning "
            f"forest of {len(dsu)} components. Forest weight: {weight:.2f}.",
            highlights=highlights(), extension=ext(is_forest=True),
        )
        return

    yield sb.final(
        f"Kruskal's algorithm complete. MST weight: {weight:.2f}.",
        highlights=highlights(), extension=ext(),
    )
