"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq).

Yields a Step at:
  1. Initialise distances / push source
  2. Pop minimum-distance node  →  CURRENT (secondary)
  3. Each neighbour examination  →  edge INFO
  4. Each relaxation outcome  →  skip / success / no improvement
  5. Final  →  path to target, unreachable, or "all reachable visited"

Heap entries are (distance, sequence, node_id).  The sequence number
breaks distance ties by insertion order; entries made stale by a later
improvement, or for already-visited nodes, are discarded silently when
popped, so every node is finalised exactly once.

Correctness note: Dijkstra requires non-negative weights.
The registry flags it as not supporting negative edges.
"""

import heapq
from typing import Dict, Generator, Iterable, List, Optional, Sequence, Set, Tuple

from graph import Edge, Graph, Node
from algorithms.graph_utils import blank, path_edge_ids, reconstruct_path, validate
from algorithms.step import INF, GraphHighlights, GraphStep, GraphStepBuilder, format_distance

DEFAULT_WEIGHT = 1


def _queue_text(pq: List[Tuple[float, int, str]], dist: Dict[str, float], visited: Set[str]) -> str:
    live = [(d, s, n) for d, s, n in sorted(pq) if n not in visited and d == dist[n]]
    return ", ".join(f"{n}({format_distance(d)})" for d, _, n in live)


def _highlights(
    sb: GraphStepBuilder,
    dist: Dict[str, float],
    visited: Set[str],
    current: Optional[str] = None,
    path: Sequence[str] = (),
    path_edges: Sequence[str] = (),
) -> GraphHighlights:
    hl = sb.palette()
    for node in sb.nodes:
        nid = node.id
        label = format_distance(dist[nid])
        if nid in path:
            hl.node(nid, "path", label)
        elif nid == current:
            hl.node(nid, "secondary", label)
        elif nid in visited:
            hl.node(nid, "visited", label)
        elif dist[nid] != INF:
            hl.node(nid, "primary", label)
        else:
            hl.node(nid, "neutral", label)
    for eid in path_edges:
        hl.edge(eid, "path")
    return hl


def dijkstra(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    start_node_id: str,
    target_node_id: Optional[str] = None,
) -> Generator[GraphStep, None, None]:

    graph = Graph(nodes, edges)
    sb    = GraphStepBuilder("dijkstra", graph.nodes.values(), graph.edges.values())

    invalid = validate(sb, graph, start_node_id, target_node_id)
    if invalid is not None:
        yield invalid
        return

    source = start_node_id
    target = None if blank(target_node_id) else target_node_id

    # initialise
    dist: Dict[str, float]         = {nid: INF for nid in graph.nodes}
    pred: Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    dist[source] = 0
    visited: Set[str] = set()
    seq = 0
    pq: List[Tuple[float, int, str]] = [(0, seq, source)]

    yield sb.build(
        f"Starting Dijkstra's from node {source}. Initializing distances. "
        f"Priority queue: [{_queue_text(pq, dist, visited)}]",
        _highlights(sb, dist, visited), dist, pred,
    )

    # --- main loop ---
    while pq:
        d, _, u = heapq.heappop(pq)
        if u in visited or d > dist[u]:
            continue
        visited.add(u)

        yield sb.build(
            f"Visiting node {u}. Distance: {format_distance(dist[u])}. Marked as visited. "
            f"PQ: [{_queue_text(pq, dist, visited)}]",
            _highlights(sb, dist, visited, u), dist, pred, current_node_id=u,
        )

        if target is not None and u == target:
            break

        # -- relax neighbours --
        for v, edge in graph.neighbours(u):
            weight = edge.cost(DEFAULT_WEIGHT)

            hl = _highlights(sb, dist, visited, u)
            hl.edge(edge.id, "info")
            if v != u and v not in visited:
                hl.node(v, "info")
            yield sb.build(
                f"Examining neighbor {v} of {u} via edge {edge.id} (weight {weight}).",
                hl, dist, pred, current_node_id=u,
            )

            if v in visited:
                yield sb.build(
                    f"Neighbor {v} already visited. Skipping relaxation.",
                    _highlights(sb, dist, visited, u), dist, pred, current_node_id=u,
                )
                continue

            alt = dist[u] + weight
            if alt < dist[v]:
                dist[v] = alt
                pred[v] = u
                seq += 1
                heapq.heappush(pq, (alt, seq, v))

                hl = _highlights(sb, dist, visited, u)
                hl.edge(edge.id, "primary")
                hl.node(v, "primary", format_distance(alt))
                yield sb.build(
                    f"Relaxed edge {edge.id} to {v}. New shortest distance to {v} is "
                    f"{format_distance(alt)}. Updated {v} in priority queue. "
                    f"PQ: [{_queue_text(pq, dist, visited)}]",
                    hl, dist, pred, current_node_id=u,
                )
            else:
                yield sb.build(
                    f"Path to {v} via {u} (cost {format_distance(alt)}) is not shorter than "
                    f"current distance {format_distance(dist[v])}. No relaxation.",
                    _highlights(sb, dist, visited, u), dist, pred, current_node_id=u,
                )

    # --- final ---
    if target is None:
        yield sb.final(
            "Dijkstra's complete. All reachable nodes visited.",
            highlights=_highlights(sb, dist, visited), distances=dist, predecessors=pred,
        )
        return

    if target not in visited:
        yield sb.final(
            f"Target node {target} is not reachable from {source}.",
            highlights=_highlights(sb, dist, visited), distances=dist, predecessors=pred,
        )
        return

    path = reconstruct_path(pred, source, target)
    if path is None:
        yield sb.final(
            f"Could not reconstruct path to {target}, though it's marked reachable. "
            f"Predecessor data might be incomplete.",
            highlights=_highlights(sb, dist, visited), distances=dist, predecessors=pred,
        )
        return

    if source == target:
        message = f"Target node {target} is the start node. Distance: 0."
    else:
        message = (
            f"Shortest path to {target} found. Distance: {format_distance(dist[target])}. "
            f"Path: {' → '.join(path)}"
        )
    yield sb.final(
        message,
        highlights=_highlights(sb, dist, visited, path=path, path_edges=path_edge_ids(graph, path)),
        distances=dist, predecessors=pred, path=path,
    )
