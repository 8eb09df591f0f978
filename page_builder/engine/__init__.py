"""Moteur d'édition : mutations immuables de l'arbre + historique."""
from .history import History
from .mutations import (
    PATCHABLE_FIELDS,
    apply_patch,
    clone_with_fresh_ids,
    collect_ids,
    contains,
    delete,
    duplicate,
    duplicate_subtree,
    find_node,
    find_parent,
    insert,
    insert_child,
    iter_nodes,
    map_node,
    move_down,
    move_to_gap,
    move_up,
    reorder,
    root_index,
    subtree_ids,
    update,
)

__all__ = [
    "History",
    "PATCHABLE_FIELDS",
    "apply_patch", "clone_with_fresh_ids", "collect_ids", "contains",
    "delete", "duplicate", "duplicate_subtree", "find_node", "find_parent",
    "insert", "insert_child", "iter_nodes", "map_node",
    "move_down", "move_to_gap", "move_up", "reorder", "root_index",
    "subtree_ids", "update",
]
