DEFAULTS = {
    # Separator used in edge display keys and edge strings ("1->2")
    "EDGE_SEPARATOR": "->",
    # Parallel edge handling for delete_edge: "all" or "first"
    "DELETE_EDGE_POLICY": "all",
    # Max recorded graph actions (0 = history disabled)
    "HISTORY_LIMIT": 1000,
    # Node type applied when add_node receives none
    "DEFAULT_NODE_TYPE": None,
}

DELETE_EDGE_POLICIES = ("all", "first")
