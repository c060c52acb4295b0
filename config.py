"""
config.py — Visualizer settings
================================
Loaded into the Flask app with `app.config.from_object("config")`;
any value can be overridden from the environment with an `ALGOVIZ_`
prefix, e.g. `ALGOVIZ_MAX_ARRAY_SIZE=200`.
"""

# random input defaults
DEFAULT_ARRAY_SIZE = 10
DEFAULT_MAX_VALUE  = 100
DEFAULT_NODE_COUNT = 6
DEFAULT_EDGE_COUNT = 9
DEFAULT_MAX_WEIGHT = 10

# input caps
MAX_ARRAY_SIZE           = 100
MAX_GRAPH_NODES          = 50
MAX_GRAPH_EDGES          = 300
MAX_FLOYD_WARSHALL_NODES = 8      # O(V³) steps

# run bookkeeping
MAX_RECORDED_STEPS = 200_000
MAX_ACTIVE_RUNS    = 64           # oldest run is evicted first

LOG_LEVEL = "INFO"
