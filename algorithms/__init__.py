"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, make_generator

REGISTRY is a dict:
    {
        "linear_search": AlgoInfo(key, label, fn, family, params, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and the JSON API both
consume it, so adding a new algorithm is: write the generator, add one
entry here.
"""

import inspect
from dataclasses import dataclass, field
from typing import Callable, Dict, Generator, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.linear_search  import linear_search  as _linear
from algorithms.binary_search  import binary_search  as _binary
from algorithms.bubble_sort    import bubble_sort    as _bubble
from algorithms.merge_sort     import merge_sort     as _merge
from algorithms.quick_sort     import quick_sort     as _quick
from algorithms.dijkstra       import dijkstra       as _dijkstra
from algorithms.bellman_ford   import bellman_ford   as _bf
from algorithms.astar          import astar          as _astar
from algorithms.floyd_warshall import floyd_warshall as _fw
from algorithms.kruskal        import kruskal        as _kruskal
from algorithms.prim           import prim           as _prim
from algorithms.step           import Step

SEARCH = "search"
SORT   = "sort"
GRAPH  = "graph"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:                     str                  # registry key, e.g. "dijkstra"
    label:                   str                  # human label, e.g. "Dijkstra's Algorithm"
    fn:                      Callable             # the generator function
    family:                  str                  # SEARCH | SORT | GRAPH
    params:                  List[str] = field(default_factory=list)   # filled from fn's signature
    description:             str      = ""
    complexity_time:         str      = ""        # worst case
    complexity_time_average: str      = ""
    complexity_space:        str      = ""
    requires_target:         bool     = False     # target input mandatory?
    requires_sorted_input:   bool     = False     # binary search
    supports_negative:       bool     = False     # can handle negative edges?
    is_all_pairs:            bool     = False     # Floyd-Warshall style?
    is_mst:                  bool     = False     # Kruskal / Prim

    def __post_init__(self):
        if not self.params:
            self.params = list(inspect.signature(self.fn).parameters)

    @property
    def required_params(self) -> List[str]:
        sig = inspect.signature(self.fn).parameters
        return [name for name in self.params if sig[name].default is inspect.Parameter.empty]

    def to_dict(self) -> dict:
        return {
            "key":                     self.key,
            "label":                   self.label,
            "family":                  self.family,
            "params":                  list(self.params),
            "required_params":         self.required_params,
            "description":             self.description,
            "complexity_time":         self.complexity_time,
            "complexity_time_average": self.complexity_time_average,
            "complexity_space":        self.complexity_space,
            "requires_target":         self.requires_target,
            "requires_sorted_input":   self.requires_sorted_input,
            "supports_negative":       self.supports_negative,
            "is_all_pairs":            self.is_all_pairs,
            "is_mst":                  self.is_mst,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", fn=_linear, family=SEARCH,
        requires_target=True,
        complexity_time="O(n)", complexity_time_average="O(n)", complexity_space="O(1)",
        description="Checks each element sequentially until the target is found or the list ends.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=_binary, family=SEARCH,
        requires_target=True, requires_sorted_input=True,
        complexity_time="O(log n)", complexity_time_average="O(log n)", complexity_space="O(1)",
        description="Efficiently finds an item in a sorted array by repeatedly dividing the search interval in half.",
    ),

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble, family=SORT,
        complexity_time="O(n^2)", complexity_time_average="O(n^2)", complexity_space="O(1)",
        description="Repeatedly steps through the list, compares adjacent elements and swaps them "
                    "if they are in the wrong order.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge, family=SORT,
        complexity_time="O(n log n)", complexity_time_average="O(n log n)", complexity_space="O(n)",
        description="A divide-and-conquer algorithm that divides the array into halves, sorts them "
                    "and then merges them.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", fn=_quick, family=SORT,
        complexity_time="O(n^2)", complexity_time_average="O(n log n)", complexity_space="O(log n)",
        description="A divide-and-conquer algorithm that picks an element as a pivot and partitions "
                    "the array around the pivot.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, family=GRAPH,
        complexity_time="O((V + E) log V)", complexity_time_average="O((V + E) log V)",
        complexity_space="O(V + E)",
        description="Finds the shortest paths from a single source node to all other nodes in a "
                    "graph with non-negative edge weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman-Ford Algorithm", fn=_bf, family=GRAPH,
        supports_negative=True,
        complexity_time="O(V · E)", complexity_time_average="O(V · E)", complexity_space="O(V)",
        description="Finds the shortest paths from a single source node, allowing for negative "
                    "edge weights. Can detect negative cycles.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search Algorithm", fn=_astar, family=GRAPH,
        requires_target=True,
        complexity_time="O((V + E) log V)", complexity_time_average="O(b^d)", complexity_space="O(V)",
        description="An informed search algorithm that finds the shortest path using a heuristic "
                    "to guide its search.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd-Warshall Algorithm", fn=_fw, family=GRAPH,
        supports_negative=True, is_all_pairs=True,
        complexity_time="O(V³)", complexity_time_average="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest paths via dynamic programming. Detects negative cycles.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's Algorithm", fn=_kruskal, family=GRAPH,
        supports_negative=True, is_mst=True,
        complexity_time="O(E log E)", complexity_time_average="O(E log E)", complexity_space="O(V)",
        description="Builds a minimum spanning tree by adding the cheapest edges that do not "
                    "form a cycle.",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's Algorithm", fn=_prim, family=GRAPH,
        supports_negative=True, is_mst=True,
        complexity_time="O(E log V)", complexity_time_average="O(E log V)", complexity_space="O(V + E)",
        description="Grows a minimum spanning tree from a start node by always taking the "
                    "cheapest edge leaving the tree.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


def make_generator(key: str, **inputs) -> Generator[Step, None, None]:
    """
    Create a fresh step generator for `key`.

    Inputs the algorithm does not take are ignored.  Raises ValueError
    for an unknown key or a missing required input.
    """
    info = REGISTRY.get(key)
    if info is None:
        raise ValueError(f"Unknown algorithm {key!r}")
    missing = [p for p in info.required_params if p not in inputs]
    if missing:
        raise ValueError(f"{key} requires {', '.join(missing)}")
    return info.fn(**{p: inputs[p] for p in info.params if p in inputs})


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "SEARCH",
    "SORT",
    "GRAPH",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "make_generator",
]
