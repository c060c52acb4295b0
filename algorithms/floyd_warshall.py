"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  Every step carries the full |V|×|V|
distance and next-hop matrices (keyed by node id) in a
FloydWarshallExtension, so a caller can render them as a live grid.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Yields a Step for:
  1. Initialisation (edges → matrix; parallel edges keep the minimum)
  2. Every (k, i, j) check
  3. Every check that improves the matrix
  4. Final: negative cycle (negative diagonal entry) or complete

The step count grows as O(V³); callers cap the node count
(`config.MAX_FLOYD_WARSHALL_NODES` in the JSON API).
"""

from typing import Dict, Generator, Iterable, List, Optional

from graph import Edge, Graph, Node
from algorithms.step import (
    INF,
    FloydWarshallExtension,
    GraphHighlights,
    GraphStep,
    GraphStepBuilder,
    format_distance,
)

DEFAULT_WEIGHT = 1

DistanceMatrix = Dict[str, Dict[str, float]]
NextHopMatrix  = Dict[str, Dict[str, Optional[str]]]


def floyd_warshall_path(next_hop: NextHopMatrix, source: str, dest: str) -> Optional[List[str]]:
    """
    Follow next hops from source to dest in a finished next-hop matrix.
    Returns None when dest is unreachable or the hops loop.
    """
    if source not in next_hop or dest not in next_hop:
        return None
    if next_hop[source].get(dest) is None:
        return None
    path = [source]
    cur  = source
    while cur != dest:
        cur = next_hop[cur].get(dest)
        if cur is None or len(path) > len(next_hop):
            return None
        path.append(cur)
    return path


def floyd_warshall(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
) -> Generator[GraphStep, None, None]:

    graph = Graph(nodes, edges)
    sb    = GraphStepBuilder("floyd_warshall", graph.nodes.values(), graph.edges.values())
    ids   = graph.node_ids()

    if not ids:
        yield sb.final("Graph is empty.")
        return

    # ------------------------------------------------------------------
    # initialisation
    # ------------------------------------------------------------------
    dist: DistanceMatrix = {i: {j: (0 if i == j else INF) for j in ids} for i in ids}
    nxt:  NextHopMatrix  = {i: {j: (j if i == j else None) for j in ids} for i in ids}

    for u, v, edge in graph.arcs():
        weight = edge.cost(DEFAULT_WEIGHT)
        if dist[u][v] > weight:
            dist[u][v] = weight
            nxt[u][v]  = v

    def ext(k=None, i=None, j=None, negative=False) -> FloydWarshallExtension:
        return FloydWarshallExtension(
            distance_matrix={r: dict(row) for r, row in dist.items()},
            next_hop_matrix={r: dict(row) for r, row in nxt.items()},
            current_k_node_id=k,
            current_source_node_id=i,
            current_dest_node_id=j,
            negative_cycle_detected=negative,
        )

    def highlights(k: str, i: str, j: str) -> GraphHighlights:
        hl = sb.palette()
        for node in sb.nodes:
            hl.node(node.id, "neutral", node.display_name)
        hl.node(j, "info" if i != j else "neutral")
        hl.node(i, "primary")
        hl.node(k, "secondary")
        ik = graph.get_edge_between(i, k)
        kj = graph.get_edge_between(k, j)
        if ik is not None:
            hl.edge(ik.id, "primary")
        if kj is not None:
            hl.edge(kj.id, "info")
        return hl

    yield sb.build("Initialized distance and next hop matrices.", sb.palette(), extension=ext())

    # ------------------------------------------------------------------
    # main loops
    # ------------------------------------------------------------------
    for k in ids:
        for i in ids:
            for j in ids:
                via = dist[i][k] + dist[k][j]
                hl  = highlights(k, i, j)
                yield sb.build(
                    f"Iteration k={k}, i={i}, j={j}. Checking path {i} -> {k} -> {j}. "
                    f"dist({i},{j}) = {format_distance(dist[i][j])}, "
                    f"dist({i},{k}) + dist({k},{j}) = {format_distance(via)}",
                    hl, current_node_id=k, extension=ext(k, i, j),
                )

                if dist[i][k] != INF and dist[k][j] != INF and via < dist[i][j]:
                    dist[i][j] = via
                    nxt[i][j]  = nxt[i][k]
                    ij = graph.get_edge_between(i, j)
                    if ij is not None:
                        hl.edge(ij.id, "accent")
                    yield sb.build(
                        f"Updated dist({i},{j}) to {format_distance(via)} via {k}. "
                        f"Next hop from {i} to {j} is {nxt[i][j]}.",
                        hl, current_node_id=k, extension=ext(k, i, j),
                    )

    # ------------------------------------------------------------------
    # negative-cycle check
    # ------------------------------------------------------------------
    negative = [i for i in ids if dist[i][i] < 0]
    if negative:
        hl = sb.palette()
        for nid in negative:
            hl.node(nid, "destructive")
        yield sb.final(
            f"Negative-weight cycle detected (e.g., involving node {negative[0]}). "
            f"Shortest paths are not well-defined.",
            highlights=hl, extension=ext(negative=True),
        )
        return

    yield sb.final(
        "Floyd-Warshall algorithm complete. All-pairs shortest paths computed.",
        highlights=sb.palette(), extension=ext(),
    )
