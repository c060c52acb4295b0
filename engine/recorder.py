"""
recorder.py — Run Recorder & Metrics
======================================
Records a complete algorithm run (all Steps), then summarises the
result in a RunMetrics card.

Usage:
    rec = Recorder()
    rec.start("dijkstra", nodes=nodes, edges=edges, start_node_id="n0", target_node_id="n3")
    metrics = rec.run_to_completion()   # exhausts the generator
    rec.export()                        # JSON-safe snapshot for save / replay
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm, make_generator
from algorithms.step import (
    ArrayStep,
    BellmanFordExtension,
    FloydWarshallExtension,
    GraphStep,
    MSTExtension,
    SearchStep,
    Step,
)
from engine.serialize import step_to_dict, to_plain
from engine.stepper import Stepper

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 200_000


class StepLimitExceeded(RuntimeError):
    """The run produced more steps than run_to_completion() allows."""


# ---------------------------------------------------------------------------
# Metrics dataclass
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm:        str                        = ""
    algorithm_label:  str                        = ""
    total_steps:      int                        = 0
    final_message:    str                        = ""
    is_error:         bool                       = False
    found_index:      Optional[int]              = None     # search
    final_array:      Optional[List[float]]      = None     # search / sort
    path:             Optional[List[str]]        = None     # shortest paths
    path_cost:        Optional[float]            = None
    distances:        Dict[str, float]           = field(default_factory=dict)
    negative_cycle:   bool                       = False
    mst_weight:       Optional[float]            = None
    wall_time_ms:     float                      = 0.0


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run, filled as the Stepper pulls them.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The underlying Stepper.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._algo_info: Optional[AlgoInfo] = None
        self._inputs:    Dict[str, Any]     = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, **inputs) -> None:
        """Create the generator for `algo_key` and attach a Stepper to it."""
        gen = make_generator(algo_key, **inputs)

        self._algo_info = get_algorithm(algo_key)
        self._inputs    = dict(inputs)
        self.steps      = []
        self.metrics    = None

        self.stepper = Stepper(on_step=self.steps.append)
        self.stepper.start(gen)
        logger.debug("Recorder started %s", algo_key)

    def run_to_completion(self, max_steps: int = DEFAULT_MAX_STEPS) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        while not self.stepper.is_finished:
            if self.stepper.total_steps >= max_steps:
                self.stepper.close()
                raise StepLimitExceeded(
                    f"{self._algo_info.key} produced more than {max_steps} steps"
                )
            self.stepper.next_step()
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.debug(
            "Recorded %s: %d steps in %.2f ms",
            self._algo_info.key, self.metrics.total_steps, wall_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algorithm": self._algo_info.key if self._algo_info else "",
            "inputs":    to_plain(self._inputs),
            "metrics":   to_plain(self.metrics) if self.metrics else {},
            "steps":     [step_to_dict(s) for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        metrics = RunMetrics(
            algorithm=info.key if info else "",
            algorithm_label=info.label if info else "",
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
        )
        if last is None:
            return metrics

        metrics.final_message = last.message
        metrics.is_error      = last.is_error

        if isinstance(last, ArrayStep):
            metrics.final_array = list(last.array)
        if isinstance(last, SearchStep):
            metrics.found_index = last.target_found_at_index

        if isinstance(last, GraphStep):
            metrics.distances = dict(last.distances)
            if last.target_found_path:
                metrics.path      = list(last.target_found_path)
                metrics.path_cost = last.distances.get(last.target_found_path[-1])

            ext = last.extension
            if isinstance(ext, (BellmanFordExtension, FloydWarshallExtension)):
                metrics.negative_cycle = ext.negative_cycle_detected
            if isinstance(ext, MSTExtension):
                metrics.mst_weight = ext.mst_weight

        return metrics
