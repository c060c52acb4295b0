"""
graph.py — Graph Container & Generator
=======================================
Read-only view that the graph algorithms query.

Responsibilities:
  1. Hold the caller's nodes & edges in their original order
  2. Adjacency queries                      (neighbours, arcs, edge lookup)
  3. Random-graph factory                   (seedable, reproducible)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup;
    dict insertion order preserves the caller's order, which fixes the
    order algorithms enumerate neighbours in (and therefore the steps).
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
  - Edges whose endpoints are not nodes of the graph stay in `edges`
    (snapshots must match the input) but never enter the adjacency.
"""

import logging
import math
import random
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from graph.node import Node
from graph.edge import Edge

logger = logging.getLogger(__name__)


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {edge_id: Edge}
        directed   : bool – graph-level directedness used by the generator
        _adj       : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        edges: Iterable[Edge] = (),
        directed: bool = False,
    ):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool            = directed
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}   # node_id → [(nbr, edge_id)]

        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge)

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            logger.warning("Duplicate node id %r ignored", node.id)
            return self.nodes[node.id]
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def add_edge(self, edge: Edge) -> Edge:
        if edge.id in self.edges:
            logger.warning("Duplicate edge id %r ignored", edge.id)
            return self.edges[edge.id]
        self.edges[edge.id] = edge
        if self.is_dangling(edge):
            logger.warning(
                "Edge %r references unknown node(s) %r → %r; it will not be traversed",
                edge.id, edge.source, edge.target,
            )
            return edge
        # maintain adjacency
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed and edge.source != edge.target:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    # ==================================================================
    # LOOKUPS
    # ==================================================================
    def get_node(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return self.nodes.get(node_id)

    def has_node(self, node_id: Optional[str]) -> bool:
        return node_id is not None and node_id in self.nodes

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def is_dangling(self, edge: Edge) -> bool:
        return edge.source not in self.nodes or edge.target not in self.nodes

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge leading a → b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every traversable edge, in edge order."""
        return [(nbr_id, self.edges[eid]) for nbr_id, eid in self._adj.get(node_id, [])]

    def arcs(self) -> Iterator[Tuple[str, str, Edge]]:
        """
        Every traversable direction as (u, v, edge), in edge order.
        Undirected edges yield both (source, target) and (target, source).
        """
        for edge in self.edges.values():
            if self.is_dangling(edge):
                continue
            yield edge.source, edge.target, edge
            if not edge.directed and edge.source != edge.target:
                yield edge.target, edge.source, edge

    def traversable_edges(self) -> List[Edge]:
        return [e for e in self.edges.values() if not self.is_dangling(e)]

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        return cls(
            nodes=[Node.from_dict(nd) for nd in data.get("nodes", [])],
            edges=[Edge.from_dict(ed) for ed in data.get("edges", [])],
            directed=data.get("directed", False),
        )

    # ==================================================================
    # GENERATOR — Factory class-method
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        node_count: int = 6,
        edge_count: int = 9,
        max_weight: int = 10,
        directed: bool = False,
        allow_negative_weights: bool = False,
        min_weight: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Random graph with `node_count` nodes and up to `edge_count` edges.

        Nodes are `n0 … n{k-1}` placed on a jittered circle so A* has
        coordinates to work with.  Coordinates are in weight units (the
        circle fits in a max_weight × max_weight box); a client scales
        them for display.  Self-loops and duplicate pairs are never
        generated; a pair is re-drawn up to node_count² times before the
        edge is skipped, so dense requests can yield fewer edges.

        Weights are integers in [1, max_weight], raised to at least the
        edge's Euclidean length so the straight-line heuristic never
        overestimates.  With negative weights allowed they are drawn from
        [min_weight, max_weight] (min_weight defaults to -max_weight) and
        left as drawn.
        """
        if node_count < 0 or edge_count < 0:
            raise ValueError("node_count and edge_count must be non-negative")
        if max_weight < 1:
            raise ValueError("max_weight must be at least 1")

        low = 1
        if allow_negative_weights:
            low = -max_weight if min_weight is None else min_weight
        elif min_weight is not None:
            low = max(1, min_weight)
        if low > max_weight:
            raise ValueError(f"min_weight {low} exceeds max_weight {max_weight}")

        rng = random.Random(seed)
        g = cls(directed=directed)
        # jittered circle; any two nodes stay less than max_weight apart
        radius = max_weight * 0.4
        jitter = max_weight * 0.05
        centre = max_weight / 2
        for i in range(node_count):
            angle = 2 * math.pi * i / node_count
            x = centre + radius * math.cos(angle) + rng.uniform(-jitter, jitter)
            y = centre + radius * math.sin(angle) + rng.uniform(-jitter, jitter)
            g.add_node(Node(id=f"n{i}", label=f"N{i}", x=round(x, 2), y=round(y, 2)))

        if node_count < 2:
            return g

        ids = list(g.nodes)
        seen = set()

        def taken(s: int, t: int) -> bool:
            return (s, t) in seen or (not directed and (t, s) in seen)

        for i in range(edge_count):
            s = rng.randrange(node_count)
            t = rng.randrange(node_count)
            tries = 0
            while (s == t or taken(s, t)) and tries < node_count * node_count:
                s = rng.randrange(node_count)
                t = rng.randrange(node_count)
                tries += 1
            if s == t or taken(s, t):
                continue
            seen.add((s, t))
            weight = rng.randint(low, max_weight)
            if not allow_negative_weights:
                length = g.nodes[ids[s]].distance_to(g.nodes[ids[t]])
                weight = max(weight, math.ceil(length))
            g.add_edge(Edge(
                id=f"e{i}",
                source=ids[s],
                target=ids[t],
                weight=weight,
                directed=directed,
            ))

        logger.debug("Generated %r (seed=%r)", g, seed)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
