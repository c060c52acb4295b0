"""
step.py — Algorithm Step Snapshots
===================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a visualizer
needs to render one frame:

    • The full array or node/edge snapshot
    • Which elements are highlighted, with a colour tag and label
    • Algorithm state (bounds, distances, predecessors, matrices, MST weight)
    • A plain-English message describing what just happened
    • Whether this is the last step of the run

Two families share the base `Step`:

    ArrayStep ─┬─ SearchStep     (linear / binary search)
               └─ SortStep       (bubble / merge / quick sort)
    GraphStep                    (shortest paths, all-pairs, MST)

GraphStep carries an `extension` slot holding one of the
algorithm-specific variants (AStarExtension, BellmanFordExtension,
FloydWarshallExtension, MSTExtension) so consumers can `isinstance`
on it instead of probing for optional fields.

Design decisions:
  - Steps are frozen dataclasses.  The algorithm generator is the only
    writer; consumers are pure readers.
  - Builders copy every collection at build time (`tuple(...)`,
    `dict(...)`), so a step yielded earlier never changes when the
    algorithm keeps mutating its working state.

Highlight colours:
    primary      – being compared / in the frontier
    secondary    – auxiliary role (current node, low/high bound, …)
    accent       – found / sorted / just placed
    destructive  – being swapped, pivot, discarded, negative cycle
    muted        – inactive / already checked / discarded edge
    neutral      – untouched
    info         – auxiliary role (active range, examined neighbour)
    visited      – finalised graph node
    path         – on the final path / in the MST
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from graph import Edge, Node


NODE = "node"
EDGE = "edge"

INF = float("inf")


# ---------------------------------------------------------------------------
# Highlight records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Highlight:
    """Colour tag (+ optional label) for one array index."""
    color: str
    label: Optional[str] = None


@dataclass(frozen=True)
class ElementHighlight:
    """Colour tag (+ optional label) for one graph node or edge."""
    id:    str
    kind:  str                    # NODE | EDGE
    color: str
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Base step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number   : 0-based index of this step in the run.
        message       : Human-readable narration of what just happened.
        is_final_step : True exactly once, on the last step of a run.
        is_error      : True on a final step produced by input validation.
    """

    step_number:   int  = 0
    message:       str  = ""
    is_final_step: bool = False
    is_error:      bool = False


# ---------------------------------------------------------------------------
# Array family
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ArrayStep(Step):
    array:      Tuple[float, ...]    = ()
    highlights: Dict[int, Highlight] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchStep(ArrayStep):
    target:                Optional[float] = None
    current_index:         Optional[int]   = None
    low:                   Optional[int]   = None
    high:                  Optional[int]   = None
    mid:                   Optional[int]   = None
    target_found_at_index: Optional[int]   = None


@dataclass(frozen=True)
class SortStep(ArrayStep):
    comparing:        Optional[Tuple[int, int]] = None
    swapping:         Optional[Tuple[int, int]] = None
    sorted_indices:   Tuple[int, ...]           = ()
    pivot_index:      Optional[int]             = None
    sub_array_bounds: Optional[Tuple[int, int]] = None   # (start, end) inclusive


# ---------------------------------------------------------------------------
# Graph family — algorithm extensions
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AStarExtension:
    f_scores:                   Dict[str, float] = field(default_factory=dict)
    heuristic_uses_coordinates: bool             = True


@dataclass(frozen=True)
class BellmanFordExtension:
    pass_number:             int             = 0
    negative_cycle_detected: bool            = False
    negative_cycle_nodes:    Tuple[str, ...] = ()


@dataclass(frozen=True)
class FloydWarshallExtension:
    distance_matrix:         Dict[str, Dict[str, float]]         = field(default_factory=dict)
    next_hop_matrix:         Dict[str, Dict[str, Optional[str]]] = field(default_factory=dict)
    current_k_node_id:       Optional[str]                       = None
    current_source_node_id:  Optional[str]                       = None
    current_dest_node_id:    Optional[str]                       = None
    negative_cycle_detected: bool                                = False


@dataclass(frozen=True)
class MSTExtension:
    mst_weight:   float           = 0
    mst_edge_ids: Tuple[str, ...] = ()
    is_forest:    bool            = False


GraphExtension = Union[AStarExtension, BellmanFordExtension, FloydWarshallExtension, MSTExtension]


@dataclass(frozen=True)
class GraphStep(Step):
    algorithm:         str                              = ""
    nodes:             Tuple[Node, ...]                 = ()
    edges:             Tuple[Edge, ...]                 = ()
    highlights:        Tuple[ElementHighlight, ...]     = ()
    current_node_id:   Optional[str]                    = None
    distances:         Dict[str, float]                 = field(default_factory=dict)
    predecessors:      Dict[str, Optional[str]]         = field(default_factory=dict)
    target_found_path: Optional[Tuple[str, ...]]        = None
    extension:         Optional[GraphExtension]         = None

    def highlight_for(self, kind: str, element_id: str) -> Optional[ElementHighlight]:
        for h in self.highlights:
            if h.kind == kind and h.id == element_id:
                return h
        return None


# ---------------------------------------------------------------------------
# Highlight helpers
# ---------------------------------------------------------------------------
def uniform(size: int, color: str, label: Optional[str] = None) -> Dict[int, Highlight]:
    """Every index painted the same colour."""
    h = Highlight(color, label)
    return {i: h for i in range(size)}


class GraphHighlights:
    """
    Mutable colour map over a graph's nodes and edges.
    Freezes into the tuple stored on a GraphStep (nodes first, then
    edges, both in input order).
    """

    def __init__(self, nodes: Sequence[Node], edges: Sequence[Edge], color: str = "neutral"):
        self._nodes: Dict[str, List] = {n.id: [color, None] for n in nodes}
        self._edges: Dict[str, List] = {e.id: [color, None] for e in edges}

    def node(self, node_id: str, color: str, label: Optional[str] = None) -> "GraphHighlights":
        if node_id in self._nodes:
            self._nodes[node_id][0] = color
            if label is not None:
                self._nodes[node_id][1] = label
        return self

    def edge(self, edge_id: str, color: str, label: Optional[str] = None) -> "GraphHighlights":
        if edge_id in self._edges:
            self._edges[edge_id][0] = color
            if label is not None:
                self._edges[edge_id][1] = label
        return self

    def freeze(self) -> Tuple[ElementHighlight, ...]:
        return tuple(
            [ElementHighlight(nid, NODE, c, l) for nid, (c, l) in self._nodes.items()]
            + [ElementHighlight(eid, EDGE, c, l) for eid, (c, l) in self._edges.items()]
        )


def format_distance(value: float) -> str:
    if value == INF:
        return "∞"
    if value == -INF:
        return "-∞"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Builders so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class ArrayStepBuilder:
    """
    Owns the working buffer of an array algorithm and stamps out
    snapshots of it.

    Usage inside an algorithm generator:
        sb = ArrayStepBuilder(values)
        sb.array[0], sb.array[1] = sb.array[1], sb.array[0]
        yield sb.sort("Swapped.", highlights, swapping=(0, 1))
    """

    def __init__(self, values: Iterable[float]):
        self.array: List[float] = list(values)
        self.step_no: int       = 0

    def __len__(self) -> int:
        return len(self.array)

    def _number(self) -> int:
        n = self.step_no
        self.step_no += 1
        return n

    def search(
        self,
        message: str,
        highlights: Dict[int, Highlight],
        target: float,
        is_final: bool = False,
        **fields,
    ) -> SearchStep:
        return SearchStep(
            step_number=self._number(),
            message=message,
            is_final_step=is_final,
            array=tuple(self.array),
            highlights=dict(highlights),
            target=target,
            **fields,
        )

    def sort(
        self,
        message: str,
        highlights: Dict[int, Highlight],
        is_final: bool = False,
        sorted_indices: Iterable[int] = (),
        **fields,
    ) -> SortStep:
        return SortStep(
            step_number=self._number(),
            message=message,
            is_final_step=is_final,
            array=tuple(self.array),
            highlights=dict(highlights),
            sorted_indices=tuple(sorted(sorted_indices)),
            **fields,
        )


class GraphStepBuilder:
    """
    Stamps out GraphSteps for one run.  Node / edge snapshots are taken
    once (they never change during a run); distances, predecessors and
    path are copied on every build.
    """

    def __init__(self, algorithm: str, nodes: Iterable[Node], edges: Iterable[Edge]):
        self.algorithm: str              = algorithm
        self.nodes:     Tuple[Node, ...] = tuple(nodes)
        self.edges:     Tuple[Edge, ...] = tuple(edges)
        self.step_no:   int              = 0

    def palette(self, color: str = "neutral") -> GraphHighlights:
        return GraphHighlights(self.nodes, self.edges, color)

    def build(
        self,
        message: str,
        highlights: Union[GraphHighlights, Tuple[ElementHighlight, ...]] = (),
        distances: Optional[Dict[str, float]] = None,
        predecessors: Optional[Dict[str, Optional[str]]] = None,
        current_node_id: Optional[str] = None,
        path: Optional[Sequence[str]] = None,
        extension: Optional[GraphExtension] = None,
        is_final: bool = False,
        is_error: bool = False,
    ) -> GraphStep:
        if isinstance(highlights, GraphHighlights):
            highlights = highlights.freeze()
        step = GraphStep(
            step_number=self.step_no,
            message=message,
            is_final_step=is_final,
            is_error=is_error,
            algorithm=self.algorithm,
            nodes=self.nodes,
            edges=self.edges,
            highlights=tuple(highlights),
            current_node_id=current_node_id,
            distances=dict(distances or {}),
            predecessors=dict(predecessors or {}),
            target_found_path=tuple(path) if path is not None else None,
            extension=extension,
        )
        self.step_no += 1
        return step

    def final(self, message: str, **kwargs) -> GraphStep:
        return self.build(message, is_final=True, **kwargs)

    def error(self, message: str, **kwargs) -> GraphStep:
        return self.build(message, is_final=True, is_error=True, **kwargs)
