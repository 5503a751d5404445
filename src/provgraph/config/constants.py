DEFAULTS = {
    # Attribute keys indexed for O(1) node lookup (comma-separated)
    "GRAPH_INDICES": "",
    # Worker threads used when walking several paths at once
    "GRAPH_WALK_WORKERS": 4,
    # Edge direction used by queries when none is given ("out" or "in")
    "GRAPH_DEFAULT_DIRECTION": "out",
    # Level of the "provgraph" logger
    "LOG_LEVEL": "WARNING",
}
