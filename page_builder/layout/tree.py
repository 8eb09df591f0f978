"""
Mutations de l'arbre qui respectent les invariants des conteneurs de layout.

engine.mutations ignore la sémantique des types ; ici les insertions, les
suppressions et les patches qui touchent une grille ou un bloc colonnes
passent par leur moteur :

- enfant inséré dans une grille : reçoit la première place libre (gridCell)
- enfant retiré d'une grille : les autres cellules gardent leur position
- columns / rows d'une grille modifiés : placements reclampés et écrits
- enfant inséré/retiré d'un bloc colonnes, columns ou columnSizes modifiés :
  len(columnSizes) == len(children) == columns
"""
from typing import Mapping, Optional, Sequence

from ..config import COLUMN_DEFAULT_COUNT
from ..core.schemas import COLUMN_SIZES_KEY, Node, Roots
from ..engine import mutations
from . import columns, grid

_GRID_KEYS = {"columns", "rows"}
_COLUMN_KEYS = {"columns", COLUMN_SIZES_KEY}


def _settle_columns(node: Node) -> Node:
    try:
        count = max(1, int(node.props.get("columns")))
    except (TypeError, ValueError):
        count = len(node.children) or COLUMN_DEFAULT_COUNT
    node = node.model_copy(update={"props": {**node.props, "columns": count}})
    return columns.with_column_count(node, count)


def insert_node(
    roots: Sequence[Node],
    node: Node,
    parent_id: Optional[str] = None,
    index: Optional[int] = None,
) -> Roots:
    """Insère à la racine (parent_id None) ou dans les enfants de parent_id."""
    if parent_id is None:
        return mutations.insert(roots, node, index)
    parent = mutations.find_node(roots, parent_id)
    if parent is None:
        return tuple(roots)
    if parent.type == grid.GRID_TYPE:
        return grid.add_cell(roots, parent_id, node, index)
    roots = mutations.insert_child(roots, parent_id, node, index)
    if parent.type == columns.COLUMN_TYPE:
        roots = mutations.map_node(roots, parent_id, columns.normalize_columns)
    return roots


def delete_node(roots: Sequence[Node], node_id: str) -> Roots:
    """Retire node_id et son sous-arbre."""
    parent = mutations.find_parent(roots, node_id)
    if parent is not None and parent.type == grid.GRID_TYPE:
        return grid.remove_cell(roots, parent.id, node_id)
    if parent is not None and parent.type == columns.COLUMN_TYPE:
        if len(parent.children) > 1:
            return columns.remove_column(roots, parent.id, node_id)
        # dernière colonne : une section vide la remplace
        roots = mutations.delete(roots, node_id)
        return mutations.map_node(roots, parent.id, columns.normalize_columns)
    return mutations.delete(roots, node_id)


def update_node(roots: Sequence[Node], node_id: str, patch: Mapping) -> Roots:
    """mutations.update, puis remise en ordre du conteneur si son layout change."""
    updated = mutations.update(roots, node_id, patch)
    node = mutations.find_node(updated, node_id)
    if node is None:
        return updated
    touched = set(patch.get("props") or ())
    if node.type == grid.GRID_TYPE and touched & _GRID_KEYS:
        return mutations.map_node(updated, node_id, grid.pin_cells)
    if node.type == columns.COLUMN_TYPE and touched & _COLUMN_KEYS:
        return mutations.map_node(updated, node_id, _settle_columns)
    return updated
