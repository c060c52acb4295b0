"""
serialize.py — JSON-safe Step export
=====================================
Turns Steps (and anything else built from dataclasses, tuples and
dicts) into plain JSON-compatible values.

JSON has no infinity, so ±inf distances are written as the strings
"Infinity" / "-Infinity".  Dict keys become strings.
"""

import json
import math
from dataclasses import fields, is_dataclass
from typing import Any, Optional

from algorithms.step import (
    AStarExtension,
    BellmanFordExtension,
    FloydWarshallExtension,
    GraphStep,
    MSTExtension,
    SearchStep,
    SortStep,
    Step,
)

EXTENSION_TYPES = {
    AStarExtension:         "astar",
    BellmanFordExtension:   "bellman_ford",
    FloydWarshallExtension: "floyd_warshall",
    MSTExtension:           "mst",
}


def to_plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value) if isinstance(value, (set, frozenset)) else value
        return [to_plain(v) for v in items]
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


def step_family(step: Step) -> Optional[str]:
    if isinstance(step, SearchStep):
        return "search"
    if isinstance(step, SortStep):
        return "sort"
    if isinstance(step, GraphStep):
        return "graph"
    return None


def step_to_dict(step: Step) -> dict:
    data = to_plain(step)
    data["family"] = step_family(step)
    if isinstance(step, GraphStep):
        data["extension_type"] = EXTENSION_TYPES.get(type(step.extension))
    return data


def to_json(value: Any, **kwargs) -> str:
    if isinstance(value, Step):
        value = step_to_dict(value)
    return json.dumps(to_plain(value), ensure_ascii=False, allow_nan=False, **kwargs)
