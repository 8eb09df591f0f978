"""Core module pour page_builder."""
from .schemas import (
    COLUMN_SIZES_KEY,
    GRID_CELL_KEY,
    Document,
    Node,
    Roots,
)
from .ids import new_id

__all__ = [
    "COLUMN_SIZES_KEY",
    "GRID_CELL_KEY",
    "Document",
    "Node",
    "Roots",
    "new_id",
]
