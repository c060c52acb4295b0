"""
edge.py — Graph Edge
====================
Connects two nodes. Carries an optional weight and a directed flag.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight is optional.  Each algorithm picks its own default through
    `cost()`: 1 for Dijkstra / A* / Floyd-Warshall, 0 for Bellman-Ford,
    Kruskal and Prim.  An explicit weight of 0 is always honoured.
  - `directed=False` means the edge is traversable in both directions.
"""

from dataclasses import dataclass
from typing import Optional


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Numeric cost, or None.  Can be negative for Bellman-Ford demos.
        directed : If False, traversal works in both directions.
    """

    id:       str
    source:   str
    target:   str
    weight:   Optional[float] = None
    directed: bool            = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def cost(self, default: float) -> float:
        """Weight of the edge, or `default` when no weight was given."""
        return default if self.weight is None else self.weight

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the reachable other end, or None."""
        if node_id == self.source:
            return self.target
        if node_id == self.target and not self.directed:
            return self.source
        return None          # can't traverse backwards on a directed edge

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "directed": self.directed,
        }
        if self.weight is not None:
            data["weight"] = self.weight
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        missing = [k for k in ("id", "source", "target") if k not in data]
        if missing:
            raise ValueError(f"Edge is missing {', '.join(missing)}: {data!r}")
        return cls(
            id=str(data["id"]),
            source=str(data["source"]),
            target=str(data["target"]),
            weight=data.get("weight"),
            directed=bool(data.get("directed", False)),
        )

    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.id}: {self.source}{arrow}{self.target}, w={self.weight})"
