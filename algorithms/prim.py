"""
prim.py — Prim's Minimum Spanning Tree
========================================
Grows a single tree from a start node, always taking the cheapest
candidate edge that leaves the tree.

Candidates live in a min-heap keyed by (weight, sequence) so equal
weights are taken in the order they were offered.  A candidate whose
far end joined the tree after it was offered is stale; it is discarded
when popped.  Undirected edges are offered from whichever end joins
the tree first.  A missing weight counts as 0.

Yields a Step for:
  1. Start (start node joins the tree)
  2. Initial candidates
  3. Each stale candidate discarded
  4. Each selection, then the acceptance of edge + node
  5. Each candidate update after a node joins
  6. Final: MST weight, worded as a forest when candidates run out early
"""

import heapq
from typing import Generator, Iterable, List, Optional, Set, Tuple

from graph import Edge, Graph, Node
from algorithms.graph_utils import blank
from algorithms.step import GraphHighlights, GraphStep, GraphStepBuilder, MSTExtension

DEFAULT_WEIGHT = 0

Candidate = Tuple[float, int, str, str, str]   # (weight, seq, u, v, edge_id)


def prim(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    start_node_id: Optional[str] = None,
) -> Generator[GraphStep, None, None]:

    graph = Graph(nodes, edges)
    sb    = GraphStepBuilder("prim", graph.nodes.values(), graph.edges.values())
    n     = graph.node_count()

    if n == 0:
        yield sb.final("Graph is empty.", extension=MSTExtension())
        return

    fallback = not graph.has_node(start_node_id)
    start    = graph.node_ids()[0] if fallback else start_node_id

    in_tree: Set[str]      = {start}
    mst:     List[Edge]    = []
    weight = 0
    seq    = 0
    heap:    List[Candidate] = []

    def offer(u: str) -> None:
        nonlocal seq
        for v, edge in graph.neighbours(u):
            if v not in in_tree:
                heapq.heappush(heap, (edge.cost(DEFAULT_WEIGHT), seq, u, v, edge.id))
                seq += 1

    def highlights(selected: Optional[str] = None) -> GraphHighlights:
        hl = sb.palette()
        for node in sb.nodes:
            hl.node(node.id, "path" if node.id in in_tree else "neutral", node.display_name)
        for c in heap:
            hl.edge(c[4], "secondary")
        if selected is not None:
            hl.edge(selected, "accent")
        for e in mst:
            hl.edge(e.id, "path")
        return hl

    def ext(is_forest: bool = False) -> MSTExtension:
        return MSTExtension(
            mst_weight=weight,
            mst_edge_ids=tuple(e.id for e in mst),
            is_forest=is_forest,
        )

    start_name = graph.get_node(start).display_name
    message = f"Starting Prim's algorithm from node {start_name}."
    if fallback and not blank(start_node_id):
        message = (
            f'Start node "{start_node_id}" not found; starting Prim\'s algorithm '
            f"from the first node {start_name}."
        )
    yield sb.build(message, highlights(), current_node_id=start, extension=ext())

    offer(start)
    yield sb.build(
        f"Added initial candidate edges from {start_name}. Candidates count: {len(heap)}",
        highlights(), current_node_id=start, extension=ext(),
    )

    while heap and len(mst) < n - 1:
        w, _, u, v, edge_id = heapq.heappop(heap)

        if v in in_tree:
            yield sb.build(
                f"Considering edge {edge_id} ({u}-{v}). Node {v} already in MST. Discarding.",
                highlights(edge_id), extension=ext(),
            )
            continue

        yield sb.build(
            f"Selected edge {edge_id} ({u}-{v}) with weight {w}. Adding {v} to MST.",
            highlights(edge_id), current_node_id=v, extension=ext(),
        )

        mst.append(graph.get_edge(edge_id))
        weight += w
        in_tree.add(v)

        yield sb.build(
            f"Added edge {edge_id} and node {v} to MST. Current MST weight: {weight:.2f}.",
            highlights(), current_node_id=v, extension=ext(),
        )

        if len(mst) == n - 1:
            break

        offer(v)
        yield sb.build(
            f"Updated candidate edges from new MST node {v}. Candidates count: {len(heap)}",
            highlights(), current_node_id=v, extension=ext(),
        )

    heap.clear()
    if len(mst) < n - 1:
        yield sb.final(
            f"Prim's algorithm complete. Graph is disconnected: the tree spans "
            f"{len(in_tree)} of {n} nodes (spanning forest). MST weight: {weight:.2f}.",
            highlights=highlights(), extension=ext(is_forest=True),
        )
        return

    yield sb.final(
        f"Prim's algorithm complete. MST weight: {weight:.2f}.",
        highlights=highlights(), extension=ext(),
    )
