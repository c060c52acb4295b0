"""
graph_utils.py — Shared helpers for the graph algorithms
=========================================================
  • Input validation that every engine runs before touching state
  • Predecessor-chain path reconstruction
  • Path → edge-id mapping for highlighting
"""

import logging
from typing import Dict, List, Optional, Sequence

from graph import Graph
from algorithms.step import GraphStep, GraphStepBuilder

logger = logging.getLogger(__name__)


def blank(node_id: Optional[str]) -> bool:
    """A missing or whitespace-only node id means "no target"."""
    return node_id is None or not str(node_id).strip()


def validate(
    sb: GraphStepBuilder,
    graph: Graph,
    start: Optional[str],
    target: Optional[str] = None,
    target_required: bool = False,
) -> Optional[GraphStep]:
    """
    Return the single final step a run should emit instead of executing,
    or None when the inputs are usable.

        empty graph                 → final step, "Graph is empty."
        unknown start               → final error step
        missing target (required)   → final error step
        unknown non-blank target    → final error step
    """
    if not graph.nodes:
        return sb.final("Graph is empty.")

    if not graph.has_node(start):
        logger.warning("%s: start node %r not found", sb.algorithm, start)
        return sb.error(
            f'Error: Start node "{start}" not found in the graph. '
            f"Please ensure the ID is correct."
        )

    if blank(target):
        if target_required:
            logger.warning("%s: target node is required", sb.algorithm)
            return sb.error("Error: A target node is required for this algorithm.")
        return None

    if not graph.has_node(target):
        logger.warning("%s: target node %r not found", sb.algorithm, target)
        return sb.error(
            f'Error: Target node "{target}" not found in the graph. '
            f"Please ensure the ID is correct or leave it empty if not "
            f"searching for a specific target."
        )
    return None


def reconstruct_path(
    predecessors: Dict[str, Optional[str]],
    start: str,
    target: str,
) -> Optional[List[str]]:
    """
    Walk predecessors back from target to start.
    Returns None when the chain breaks or loops before reaching start.
    """
    path = [target]
    seen = {target}
    cur  = target
    while cur != start:
        cur = predecessors.get(cur)
        if cur is None or cur in seen:
            return None
        seen.add(cur)
        path.append(cur)
    path.reverse()
    return path


def path_edge_ids(graph: Graph, path: Sequence[str]) -> List[str]:
    ids = []
    for a, b in zip(path, path[1:]):
        edge = graph.get_edge_between(a, b)
        if edge is not None:
            ids.append(edge.id)
    return ids
