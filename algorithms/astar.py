"""
astar.py — A* Search
=====================
Generator-based A* guided by the Euclidean distance to the target.

When either endpoint of a heuristic evaluation has no coordinates the
heuristic falls back to h = 0 (A* degrades to Dijkstra).  The fallback
is announced in the messages and recorded in
`AStarExtension.heuristic_uses_coordinates`.

Open set: a heap of (f, sequence, node_id).  A node keeps its sequence
number while it stays open, so ties on f resolve in the order nodes
were (re)opened.  There is no closed set: a node whose g-score improves
after it was expanded is opened again.

Yields a Step at:
  1. Start
  2. Each node taken from the open set  →  CURRENT (secondary)
  3. Each neighbour evaluation, then improved / not better
  4. Final  →  target reached (path) or open set exhausted
"""

import heapq
from typing import Dict, Generator, Iterable, List, Optional, Sequence, Tuple

from graph import Edge, Graph, Node
from algorithms.graph_utils import path_edge_ids, reconstruct_path, validate
from algorithms.step import INF, AStarExtension, GraphHighlights, GraphStep, GraphStepBuilder

DEFAULT_WEIGHT = 1


def euclidean(a: Node, b: Node) -> Optional[float]:
    """√(Δx² + Δy²), or None when a coordinate is missing."""
    return a.distance_to(b)


def _fmt(value: float, places: int = 2) -> str:
    return "∞" if value == INF else f"{value:.{places}f}"


def astar(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    start_node_id: str,
    target_node_id: Optional[str] = None,
) -> Generator[GraphStep, None, None]:

    graph = Graph(nodes, edges)
    sb    = GraphStepBuilder("astar", graph.nodes.values(), graph.edges.values())

    invalid = validate(sb, graph, start_node_id, target_node_id, target_required=True)
    if invalid is not None:
        yield invalid
        return

    start_node  = graph.get_node(start_node_id)
    target_node = graph.get_node(target_node_id)
    source, target = start_node.id, target_node.id

    uses_coordinates = True

    def h(node: Node) -> float:
        nonlocal uses_coordinates
        value = euclidean(node, target_node)
        if value is None:
            uses_coordinates = False
            return 0.0
        return value

    g:         Dict[str, float]         = {nid: INF for nid in graph.nodes}
    f:         Dict[str, float]         = {nid: INF for nid in graph.nodes}
    came_from: Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    g[source] = 0
    f[source] = h(start_node)

    seq = 0
    open_seq: Dict[str, int] = {source: seq}
    open_heap: List[Tuple[float, int, str]] = [(f[source], seq, source)]

    def highlights(
        current: Optional[str] = None,
        neighbour: Optional[str] = None,
        path: Sequence[str] = (),
    ) -> GraphHighlights:
        hl = sb.palette()
        for node in sb.nodes:
            nid = node.id
            hv = euclidean(node, target_node)
            label = (
                f"{node.display_name}\n"
                f"g:{_fmt(g[nid], 1)} h:{_fmt(hv or 0.0, 1)}\n"
                f"f:{_fmt(f[nid], 1)}"
            )
            if nid in path:
                color = "path"
            elif nid == neighbour:
                color = "info"
            elif nid == current:
                color = "secondary"
            elif nid in open_seq:
                color = "primary"
            elif g[nid] != INF:
                color = "visited"
            else:
                color = "neutral"
            hl.node(nid, color, label)
        for eid in path_edge_ids(graph, path):
            hl.edge(eid, "path")
        return hl

    def ext() -> AStarExtension:
        return AStarExtension(f_scores=dict(f), heuristic_uses_coordinates=uses_coordinates)

    message = f"Starting A* Search from {start_node.display_name} to {target_node.display_name}."
    if not (start_node.has_coordinates and target_node.has_coordinates):
        uses_coordinates = False
        message += (
            " (Warning: Node coordinates missing, heuristic may be 0, "
            "A* might behave like Dijkstra)."
        )
    yield sb.build(message, highlights(), g, came_from, extension=ext())

    while open_heap:
        f_cur, s, current = heapq.heappop(open_heap)
        if open_seq.get(current) != s or f_cur != f[current]:
            continue                                   # stale entry
        current_node = graph.get_node(current)

        if current == target:
            path = reconstruct_path(came_from, source, target)
            if path is None:
                break
            names = " -> ".join(graph.get_node(nid).display_name for nid in path)
            message = f"Path found to {target_node.display_name}! Cost: {_fmt(g[target])}. Path: {names}"
            if not uses_coordinates:
                message += " (Warning: Node coordinates missing, A* may have behaved like Dijkstra)."
            yield sb.final(
                message,
                highlights=highlights(current, path=path), distances=g, predecessors=came_from,
                current_node_id=current, path=path, extension=ext(),
            )
            return

        del open_seq[current]
        yield sb.build(
            f"Visiting node {current_node.display_name}. Removed from OpenSet. "
            f"F-Score: {_fmt(f[current])}",
            highlights(current), g, came_from, current_node_id=current, extension=ext(),
        )

        for nbr, edge in graph.neighbours(current):
            nbr_node  = graph.get_node(nbr)
            tentative = g[current] + edge.cost(DEFAULT_WEIGHT)

            yield sb.build(
                f"Evaluating neighbor {nbr_node.display_name} of {current_node.display_name}. "
                f"Tentative gScore: {_fmt(tentative)}. Current gScore: {_fmt(g[nbr])}",
                highlights(current, nbr), g, came_from, current_node_id=current, extension=ext(),
            )

            if tentative < g[nbr]:
                came_from[nbr] = current
                g[nbr] = tentative
                h_nbr  = h(nbr_node)
                f[nbr] = tentative + h_nbr

                message = (
                    f"Path to {nbr_node.display_name} improved. New gScore: {_fmt(g[nbr])}, "
                    f"hScore: {_fmt(h_nbr)}, fScore: {_fmt(f[nbr])}."
                )
                if nbr in open_seq:
                    message += f" Updated {nbr_node.display_name} in OpenSet."
                else:
                    seq += 1
                    open_seq[nbr] = seq
                    message += f" Added {nbr_node.display_name} to OpenSet."
                heapq.heappush(open_heap, (f[nbr], open_seq[nbr], nbr))

                yield sb.build(
                    message, highlights(current, nbr), g, came_from,
                    current_node_id=current, extension=ext(),
                )
            else:
                yield sb.build(
                    f"Path to {nbr_node.display_name} via {current_node.display_name} "
                    f"(gScore: {_fmt(tentative)}) is not better. No update.",
                    highlights(current, nbr), g, came_from, current_node_id=current, extension=ext(),
                )

    message = f"Failed to find a path to {target_node.display_name}. OpenSet is empty."
    if not uses_coordinates:
        message += " (Warning: Node coordinates missing, A* may have behaved like Dijkstra)."
    yield sb.final(message, highlights=highlights(), distances=g, predecessors=came_from, extension=ext())
