"""
bellman_ford.py — Bellman-Ford Shortest Paths
===============================================
Relaxes every arc |V|-1 times.  Handles negative edge weights and
detects negative-weight cycles reachable from the source.

An undirected edge contributes two arcs (u→v and v→u), the same
traversal Dijkstra uses, so both agree on non-negative graphs.  A
negative undirected edge is therefore itself a negative cycle.

Yields a Step at:
  1. Initialise distances
  2. Start of each pass
  3. Each arc considered, and each successful relaxation
  4. A pass with no relaxation  →  converged, stop early
  5. Negative-cycle check
  6. Final  →  negative cycle, path to target, unreachable, or done

Every step carries a BellmanFordExtension with the pass number.
"""

from typing import Dict, Generator, Iterable, List, Optional, Sequence

from graph import Edge, Graph, Node
from algorithms.graph_utils import blank, path_edge_ids, reconstruct_path, validate
from algorithms.step import (
    INF,
    BellmanFordExtension,
    GraphHighlights,
    GraphStep,
    GraphStepBuilder,
    format_distance,
)

DEFAULT_WEIGHT = 0


def _highlights(
    sb: GraphStepBuilder,
    source: str,
    dist: Dict[str, float],
    pred: Dict[str, Optional[str]],
    edge_id: Optional[str] = None,
    updated: Optional[str] = None,
    checking: bool = False,
) -> GraphHighlights:
    hl = sb.palette()
    for node in sb.nodes:
        nid = node.id
        label = format_distance(dist[nid])
        if nid == updated:
            hl.node(nid, "primary", label)
        elif pred[nid] is not None or nid == source:
            hl.node(nid, "visited", label)
        else:
            hl.node(nid, "neutral", label)
    if edge_id is not None:
        hl.edge(edge_id, "destructive" if checking else "secondary")
    return hl


def _cycle_members(pred: Dict[str, Optional[str]], entry: str, n: int) -> List[str]:
    """
    Walk predecessors n times from a node that can still be relaxed to
    land on the cycle, then go once around it.
    """
    x = entry
    for _ in range(n):
        if pred.get(x) is None:
            break
        x = pred[x]
    members = [x]
    y = pred.get(x)
    while y is not None and y not in members:
        members.append(y)
        y = pred.get(y)
    members.reverse()
    return members


def bellman_ford(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    start_node_id: str,
    target_node_id: Optional[str] = None,
) -> Generator[GraphStep, None, None]:

    graph = Graph(nodes, edges)
    sb    = GraphStepBuilder("bellman_ford", graph.nodes.values(), graph.edges.values())

    invalid = validate(sb, graph, start_node_id, target_node_id)
    if invalid is not None:
        yield invalid
        return

    source = start_node_id
    target = None if blank(target_node_id) else target_node_id
    n      = graph.node_count()
    arcs   = list(graph.arcs())

    dist: Dict[str, float]         = {nid: INF for nid in graph.nodes}
    pred: Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    dist[source] = 0

    def ext(pass_no: int) -> BellmanFordExtension:
        return BellmanFordExtension(pass_number=pass_no)

    yield sb.build(
        f"Starting Bellman-Ford from node {source}. Initializing distances.",
        _highlights(sb, source, dist, pred), dist, pred, extension=ext(0),
    )

    # ------------------------------------------------------------------
    # |V| - 1 relaxation passes
    # ------------------------------------------------------------------
    last_pass = 0
    for i in range(1, n):
        last_pass = i
        relaxed = False
        yield sb.build(
            f"Pass {i} of {n - 1}. Relaxing edges.",
            _highlights(sb, source, dist, pred), dist, pred, extension=ext(i),
        )

        for u, v, edge in arcs:
            weight = edge.cost(DEFAULT_WEIGHT)
            yield sb.build(
                f"Pass {i}: Considering edge {edge.id} ({u} -> {v}, weight {weight}).",
                _highlights(sb, source, dist, pred, edge.id), dist, pred, extension=ext(i),
            )
            if dist[u] != INF and dist[u] + weight < dist[v]:
                dist[v] = dist[u] + weight
                pred[v] = u
                relaxed = True
                yield sb.build(
                    f"Pass {i}: Relaxed edge {edge.id}. Distance to {v} updated to "
                    f"{format_distance(dist[v])}.",
                    _highlights(sb, source, dist, pred, edge.id, updated=v),
                    dist, pred, extension=ext(i),
                )

        if not relaxed:
            yield sb.build(
                f"Pass {i}: No distances updated in this pass. Shortest paths found. "
                f"Checking for negative cycles next.",
                _highlights(sb, source, dist, pred), dist, pred, extension=ext(i),
            )
            break

    # ------------------------------------------------------------------
    # negative-cycle check
    # ------------------------------------------------------------------
    yield sb.build(
        "Checking for negative-weight cycles...",
        _highlights(sb, source, dist, pred, checking=True), dist, pred, extension=ext(last_pass),
    )

    for u, v, edge in arcs:
        weight = edge.cost(DEFAULT_WEIGHT)
        if dist[u] != INF and dist[u] + weight < dist[v]:
            members = _cycle_members(pred, v, n)
            hl = _highlights(sb, source, dist, pred, edge.id, updated=v, checking=True)
            for nid in members:
                hl.node(nid, "destructive")
            hl.node(v, "destructive")
            yield sb.final(
                f"Negative-weight cycle detected involving edge {edge.id} ({u} -> {v}). "
                f"Further relaxation possible for node {v}. Shortest paths are undefined or "
                f"infinitely negative for nodes reachable from this cycle.",
                highlights=hl, distances=dist, predecessors=pred,
                extension=BellmanFordExtension(
                    pass_number=last_pass,
                    negative_cycle_detected=True,
                    negative_cycle_nodes=tuple(members),
                ),
            )
            return

    # ------------------------------------------------------------------
    # final
    # ------------------------------------------------------------------
    final_ext = ext(last_pass)
    hl = _highlights(sb, source, dist, pred)

    if target is None:
        yield sb.final(
            "Bellman-Ford complete. No negative-weight cycles detected.",
            highlights=hl, distances=dist, predecessors=pred, extension=final_ext,
        )
        return

    if dist[target] == INF:
        yield sb.final(
            f"Target node {target} is not reachable from {source}.",
            highlights=hl, distances=dist, predecessors=pred, extension=final_ext,
        )
        return

    path = reconstruct_path(pred, source, target)
    if path is None:
        yield sb.final(
            f"Could not reconstruct path to {target}, though distance is "
            f"{format_distance(dist[target])}.",
            highlights=hl, distances=dist, predecessors=pred, extension=final_ext,
        )
        return

    _paint_path(hl, path, path_edge_ids(graph, path))
    yield sb.final(
        f"Shortest path to {target} found. Distance: {format_distance(dist[target])}. "
        f"Path: {' → '.join(path)}",
        highlights=hl, distances=dist, predecessors=pred, path=path, extension=final_ext,
    )


def _paint_path(hl: GraphHighlights, path: Sequence[str], edge_ids: Sequence[str]) -> None:
    for nid in path:
        hl.node(nid, "path")
    for eid in edge_ids:
        hl.edge(eid, "path")
