"""
node.py — Graph Node
====================
Identity plus optional plane coordinates.

Design decisions:
  - Node is frozen.  Algorithms change distances and highlights, never
    the graph structure, so a snapshot can share Node objects safely.
  - `x` / `y` are optional.  Only A*'s heuristic reads them; a node
    without coordinates makes the heuristic fall back to 0.
  - `label` falls back to the id when rendered.
"""

import math
from dataclasses import dataclass
from typing import Optional


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id    : Unique, stable identifier.
        label : Human-readable name (defaults to the id when displayed).
        x, y  : Optional coordinates used by A* and by visual placement.
    """

    id:    str
    label: Optional[str]   = None
    x:     Optional[float] = None
    y:     Optional[float] = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def display_name(self) -> str:
        return self.label or self.id

    @property
    def has_coordinates(self) -> bool:
        return self.x is not None and self.y is not None

    def distance_to(self, other: "Node") -> Optional[float]:
        """Euclidean distance, or None when either node lacks coordinates."""
        if not (self.has_coordinates and other.has_coordinates):
            return None
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {"id": self.id}
        if self.label is not None:
            data["label"] = self.label
        if self.x is not None:
            data["x"] = self.x
        if self.y is not None:
            data["y"] = self.y
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        if "id" not in data:
            raise ValueError(f"Node is missing an 'id': {data!r}")
        return cls(
            id=str(data["id"]),
            label=data.get("label"),
            x=data.get("x"),
            y=data.get("y"),
        )

    def __repr__(self) -> str:
        pos = f", pos=({self.x:.2f},{self.y:.2f})" if self.has_coordinates else ""
        return f"Node(id={self.id}, label={self.display_name}{pos})"
