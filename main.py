"""
main.py — Algorithm Step Visualizer JSON API
=============================================
A thin Flask layer over the algorithm registry and the Stepper.

Routes:
  GET    /api/algorithms            – registry metadata
  POST   /api/generate/array        – random array
  POST   /api/generate/graph        – random graph (nodes get coordinates)
  POST   /api/run                   – start a run, returns its first step
  POST   /api/run/<run_id>/next     – advance one step
  DELETE /api/run/<run_id>          – abandon a run
  POST   /api/run/complete          – run to completion, returns every step

State management:
  Generators cannot be stored in a cookie session, so active runs live
  in an in-process table keyed by a random run id.  The table holds at
  most MAX_ACTIVE_RUNS runs; starting one more evicts the oldest.

Errors:
  Malformed input → 400, unknown run → 404, stepping past the final
  step → 409.  Every error body is {"error": message}.
"""

from collections import OrderedDict
from flask import Flask, request, jsonify
import logging
import secrets
import sys
import os
import threading

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from graph import Edge, Graph, Node
from algorithms import SEARCH, SORT, AlgoInfo, get_algorithm, list_algorithms, make_generator
from algorithms.array_utils import generate_random_array
from engine import Recorder, StepLimitExceeded, Stepper, StepperExhausted, step_to_dict

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_object("config")
app.config.from_prefixed_env("ALGOVIZ")

_runs: "OrderedDict[str, Stepper]" = OrderedDict()
_runs_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(ValueError)
def handle_bad_input(err):
    logger.warning("Rejected request to %s: %s", request.path, err)
    return jsonify({"error": str(err)}), 400


@app.errorhandler(StepperExhausted)
def handle_exhausted(err):
    return jsonify({"error": str(err)}), 409


# ---------------------------------------------------------------------------
# Input parsing helpers
# ---------------------------------------------------------------------------
def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _int(data: dict, key: str, default: int) -> int:
    value = data.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    return value


def _seed(data: dict):
    seed = data.get("seed")
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ValueError("seed must be an integer")
    return seed


def _parse_array(data: dict) -> list:
    array = data.get("array")
    if not isinstance(array, list) or not all(_is_number(v) for v in array):
        raise ValueError("array must be a list of numbers")
    if len(array) > app.config["MAX_ARRAY_SIZE"]:
        raise ValueError(f"array may hold at most {app.config['MAX_ARRAY_SIZE']} values")
    return array


def _parse_graph(data: dict, info: AlgoInfo):
    raw_nodes = data.get("nodes")
    raw_edges = data.get("edges", [])
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise ValueError("nodes and edges must be lists")
    if not all(isinstance(n, dict) for n in raw_nodes + raw_edges):
        raise ValueError("nodes and edges must be JSON objects")

    limit = app.config["MAX_FLOYD_WARSHALL_NODES"] if info.is_all_pairs else app.config["MAX_GRAPH_NODES"]
    if len(raw_nodes) > limit:
        raise ValueError(f"{info.label} accepts at most {limit} nodes")
    if len(raw_edges) > app.config["MAX_GRAPH_EDGES"]:
        raise ValueError(f"{info.label} accepts at most {app.config['MAX_GRAPH_EDGES']} edges")

    for nd in raw_nodes:
        for axis in ("x", "y"):
            if nd.get(axis) is not None and not _is_number(nd[axis]):
                raise ValueError(f"Node {nd.get('id')!r} has a non-numeric {axis} coordinate")
    for ed in raw_edges:
        if ed.get("weight") is not None and not _is_number(ed["weight"]):
            raise ValueError(f"Edge {ed.get('id')!r} has a non-numeric weight")

    nodes = [Node.from_dict(nd) for nd in raw_nodes]
    edges = [Edge.from_dict(ed) for ed in raw_edges]
    if not info.supports_negative and any(e.cost(0) < 0 for e in edges):
        raise ValueError(f"{info.label} does not support negative edge weights")
    return nodes, edges


def _inputs_for(info: AlgoInfo, data: dict) -> dict:
    """Translate a JSON body into keyword inputs for the algorithm."""
    if info.family in (SEARCH, SORT):
        array = _parse_array(data)
        if info.requires_sorted_input:
            array = sorted(array)
        inputs = {"array": array}
        if info.family == SEARCH:
            if not _is_number(data.get("target")):
                raise ValueError("target must be a number")
            inputs["target"] = data["target"]
        return inputs

    nodes, edges = _parse_graph(data, info)
    inputs = {"nodes": nodes, "edges": edges}
    for key in ("start_node_id", "target_node_id"):
        if data.get(key) is not None:
            inputs[key] = str(data[key])
    return inputs


def _algorithm(data: dict) -> AlgoInfo:
    key  = data.get("algorithm")
    info = get_algorithm(key) if isinstance(key, str) else None
    if info is None:
        raise ValueError(f"Unknown algorithm {key!r}")
    return info


def _store(stepper: Stepper) -> str:
    run_id = secrets.token_hex(8)
    with _runs_lock:
        _runs[run_id] = stepper
        while len(_runs) > app.config["MAX_ACTIVE_RUNS"]:
            old_id, old = _runs.popitem(last=False)
            old.close()
            logger.info("Evicted run %s", old_id)
    return run_id


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Random inputs
# ---------------------------------------------------------------------------
@app.route("/api/generate/array", methods=["POST"])
def api_generate_array():
    data = _payload()
    size = _int(data, "size", app.config["DEFAULT_ARRAY_SIZE"])
    if size > app.config["MAX_ARRAY_SIZE"]:
        raise ValueError(f"size may be at most {app.config['MAX_ARRAY_SIZE']}")
    array = generate_random_array(
        size,
        max_value=_int(data, "max_value", app.config["DEFAULT_MAX_VALUE"]),
        seed=_seed(data),
    )
    return jsonify({"array": array})


@app.route("/api/generate/graph", methods=["POST"])
def api_generate_graph():
    data = _payload()
    node_count = _int(data, "node_count", app.config["DEFAULT_NODE_COUNT"])
    if node_count > app.config["MAX_GRAPH_NODES"]:
        raise ValueError(f"node_count may be at most {app.config['MAX_GRAPH_NODES']}")
    edge_count = _int(data, "edge_count", app.config["DEFAULT_EDGE_COUNT"])
    if edge_count > app.config["MAX_GRAPH_EDGES"]:
        raise ValueError(f"edge_count may be at most {app.config['MAX_GRAPH_EDGES']}")
    min_weight = data.get("min_weight")
    if min_weight is not None:
        min_weight = _int(data, "min_weight", 0)

    g = Graph.generate_random(
        node_count=node_count,
        edge_count=edge_count,
        max_weight=_int(data, "max_weight", app.config["DEFAULT_MAX_WEIGHT"]),
        directed=bool(data.get("directed", False)),
        allow_negative_weights=bool(data.get("allow_negative_weights", False)),
        min_weight=min_weight,
        seed=_seed(data),
    )
    return jsonify(g.to_dict())


# ---------------------------------------------------------------------------
# API: Runs
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data   = _payload()
    info   = _algorithm(data)
    inputs = _inputs_for(info, data)

    stepper = Stepper()
    stepper.start(make_generator(info.key, **inputs))
    step, exhausted = stepper.next_step()

    run_id = _store(stepper)
    logger.info("Started run %s (%s)", run_id, info.key)
    return jsonify({
        "run_id":    run_id,
        "algorithm": info.key,
        "step":      step_to_dict(step),
        "exhausted": exhausted,
    })


@app.route("/api/run/<run_id>/next", methods=["POST"])
def api_run_next(run_id: str):
    with _runs_lock:
        stepper = _runs.get(run_id)
        if stepper is None:
            return jsonify({"error": f"Unknown run {run_id!r}"}), 404
        step, exhausted = stepper.next_step()

    return jsonify({
        "run_id":    run_id,
        "step":      step_to_dict(step),
        "exhausted": exhausted,
    })


@app.route("/api/run/<run_id>", methods=["DELETE"])
def api_run_delete(run_id: str):
    with _runs_lock:
        stepper = _runs.pop(run_id, None)
    if stepper is None:
        return jsonify({"error": f"Unknown run {run_id!r}"}), 404
    stepper.close()
    logger.info("Abandoned run %s", run_id)
    return jsonify({"run_id": run_id, "deleted": True})


@app.route("/api/run/complete", methods=["POST"])
def api_run_complete():
    data   = _payload()
    info   = _algorithm(data)
    inputs = _inputs_for(info, data)

    rec = Recorder()
    rec.start(info.key, **inputs)
    try:
        rec.run_to_completion(max_steps=app.config["MAX_RECORDED_STEPS"])
    except StepLimitExceeded as err:
        raise ValueError(str(err)) from err

    logger.info("Completed %s in %d steps", info.key, rec.metrics.total_steps)
    return jsonify(rec.export())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Algorithm Step Visualizer on http://localhost:5000")
    app.run(debug=False, host="0.0.0.0", port=5000)
