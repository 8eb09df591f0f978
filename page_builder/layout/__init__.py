"""Moteurs de layout : grille à spans, colonnes fractionnaires, resize libre."""
from .blocks import BlockResize
from .columns import (
    COLUMN_TEMPLATES,
    COLUMN_TYPE,
    ColumnResize,
    apply_column_template,
    column_sizes,
    format_size,
    normalize_columns,
    parse_size,
    remove_column,
    resize_boundary,
    set_column_count,
    set_column_sizes,
    with_column_count,
)
from .grid import (
    GRID_TEMPLATES,
    GRID_TYPE,
    GridCell,
    GridResize,
    ResizeHandle,
    add_cell,
    apply_grid_template,
    cell_of,
    clamp_cell,
    grid_size,
    next_free_slot,
    parse_gap,
    pin_cells,
    placements,
    remove_cell,
    set_cell_span,
    span_delta,
    unit_size,
)
from .tree import delete_node, insert_node, update_node

__all__ = [
    "BlockResize",
    "COLUMN_TEMPLATES", "COLUMN_TYPE", "ColumnResize",
    "apply_column_template", "column_sizes", "format_size", "normalize_columns",
    "parse_size", "remove_column", "resize_boundary", "set_column_count",
    "set_column_sizes", "with_column_count",
    "GRID_TEMPLATES", "GRID_TYPE", "GridCell", "GridResize", "ResizeHandle",
    "add_cell", "apply_grid_template", "cell_of", "clamp_cell", "grid_size",
    "next_free_slot", "parse_gap", "pin_cells", "placements", "remove_cell",
    "set_cell_span", "span_delta", "unit_size",
    "delete_node", "insert_node", "update_node",
]
