"""
Moteur de layout grille.

Un noeud `grid` porte `columns`, `rows`, `gap` ; chaque enfant (cellule) est
placé explicitement via props.gridCell {columnStart, rowStart, columnSpan,
rowSpan}. Ajouter/retirer une cellule ne re-tasse jamais les autres.

Resize : une poignée (bord ou coin) convertit un delta pointeur en delta de
span. Les frames intermédiaires sont visuelles uniquement ; seul release()
produit la valeur à committer.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..blocks import create_node
from ..config import (
    GRID_DEFAULT_COLUMNS,
    GRID_DEFAULT_GAP_PX,
    GRID_THRESHOLD_MIN_PX,
    GRID_THRESHOLD_RATIO,
)
from ..core.schemas import GRID_CELL_KEY, Node, Roots
from ..engine.mutations import find_node, map_node

log = logging.getLogger(__name__)

GRID_TYPE = "grid"

# template → (columns, rows) ; le nombre de cellules est columns * rows
GRID_TEMPLATES: Dict[str, Tuple[int, int]] = {
    "2x2": (2, 2),
    "3x3": (3, 3),
    "4x4": (4, 4),
    "2x3": (2, 3),
    "3x2": (3, 2),
    "4x2": (4, 2),
    "2x4": (2, 4),
    "custom": (3, 3),
}


class GridCell(BaseModel):
    """Placement d'une cellule (indices 1-based, spans >= 1)."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    column_start: int = 1
    row_start: int = 1
    column_span: int = 1
    row_span: int = 1

    def to_props(self) -> dict:
        return self.model_dump(by_alias=True)

    def covered(self) -> Set[Tuple[int, int]]:
        """Positions (colonne, ligne) recouvertes par la cellule."""
        return {
            (c, r)
            for c in range(self.column_start, self.column_start + self.column_span)
            for r in range(self.row_start, self.row_start + self.row_span)
        }


class ResizeHandle(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


# ── Géométrie ─────────────────────────────────────────────────────────────────

def parse_gap(gap) -> float:
    """'20px' → 20.0 ; toute autre unité retombe sur le gap par défaut."""
    if isinstance(gap, (int, float)):
        return float(gap)
    if isinstance(gap, str) and gap.strip().endswith("px"):
        try:
            return float(gap.strip()[:-2])
        except ValueError:
            pass
    return GRID_DEFAULT_GAP_PX


def grid_size(grid: Node) -> Tuple[int, int]:
    """(columns, rows) effectifs d'une grille."""
    columns = max(1, int(grid.props.get("columns") or GRID_DEFAULT_COLUMNS))
    rows = grid.props.get("rows") or math.ceil(len(grid.children) / columns)
    return columns, max(1, int(rows))


def cell_of(child: Node, index: int, columns: int) -> GridCell:
    """Placement d'un enfant ; sans gridCell, position row-major selon l'index."""
    raw = child.props.get(GRID_CELL_KEY) or {}
    return GridCell(
        column_start=raw.get("columnStart") or (index % columns) + 1,
        row_start=raw.get("rowStart") or index // columns + 1,
        column_span=raw.get("columnSpan") or 1,
        row_span=raw.get("rowSpan") or 1,
    )


def clamp_cell(cell: GridCell, columns: int, rows: int) -> GridCell:
    """Ramène la cellule dans la grille : span >= 1, start + span - 1 <= n."""
    col = min(max(1, cell.column_start), columns)
    row = min(max(1, cell.row_start), rows)
    return GridCell(
        column_start=col,
        row_start=row,
        column_span=min(max(1, cell.column_span), columns - col + 1),
        row_span=min(max(1, cell.row_span), rows - row + 1),
    )


def placements(grid: Node) -> List[Tuple[Node, GridCell]]:
    """Chaque cellule avec son placement clampé."""
    columns, rows = grid_size(grid)
    return [
        (child, clamp_cell(cell_of(child, i, columns), columns, rows))
        for i, child in enumerate(grid.children)
    ]


def next_free_slot(grid: Node) -> GridCell:
    """Première position libre en row-major ; sous la dernière ligne si pleine."""
    columns, rows = grid_size(grid)
    occupied: Set[Tuple[int, int]] = set()
    for _, cell in placements(grid):
        occupied |= cell.covered()
    for r in range(1, rows + 1):
        for c in range(1, columns + 1):
            if (c, r) not in occupied:
                return GridCell(column_start=c, row_start=r)
    return GridCell(column_start=1, row_start=rows + 1)


def with_cell(child: Node, cell: GridCell) -> Node:
    return child.model_copy(update={"props": {**child.props, GRID_CELL_KEY: cell.to_props()}})


def _positive_int(value, default: int) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return default


def pin_cells(grid: Node) -> Node:
    """
    Écrit dans les props le placement clampé de chaque cellule (et rows si
    absent) : les positions calculées par l'index deviennent explicites et
    ne bougeront plus quand une voisine est retirée.
    """
    props = dict(grid.props)
    props["columns"] = _positive_int(props.get("columns"), GRID_DEFAULT_COLUMNS)
    if props.get("rows") is not None:
        props["rows"] = _positive_int(props["rows"], 1)
    columns, rows = grid_size(grid.model_copy(update={"props": props}))
    props["rows"] = rows
    grid = grid.model_copy(update={"props": props}) if props != grid.props else grid

    children = tuple(
        child if child.props.get(GRID_CELL_KEY) == cell.to_props() else with_cell(child, cell)
        for child, cell in placements(grid)
    )
    if all(a is b for a, b in zip(children, grid.children)):
        return grid
    return grid.model_copy(update={"children": children})


def unit_size(container: float, count: int, gap: float) -> float:
    """Taille d'une colonne (ou ligne) : (container - (n-1)*gap) / n."""
    return (container - (count - 1) * gap) / count


def span_delta(delta: float, container: float, count: int, gap: float) -> int:
    """Delta pixel → delta de span, nul sous le seuil max(30% unité, 20px)."""
    unit = unit_size(container, count, gap)
    if unit <= 0:
        return 0
    threshold = max(unit * GRID_THRESHOLD_RATIO, GRID_THRESHOLD_MIN_PX)
    if abs(delta) < threshold:
        return 0
    return int(math.floor(delta / unit + 0.5))


# ── Opérations sur l'arbre ────────────────────────────────────────────────────

def _grid_with_cell(roots: Sequence[Node], grid_id: str, cell_id: str) -> Optional[Node]:
    grid = find_node(roots, grid_id)
    if grid is None or grid.type != GRID_TYPE:
        return None
    if not any(child.id == cell_id for child in grid.children):
        return None
    return grid


def set_cell_span(
    roots: Sequence[Node],
    grid_id: str,
    cell_id: str,
    column_span: int,
    row_span: int,
) -> Roots:
    """Commit du span d'une cellule (clampé) ; les autres cellules ne bougent pas."""
    if _grid_with_cell(roots, grid_id, cell_id) is None:
        return tuple(roots)

    def _resize(grid: Node) -> Node:
        columns, rows = grid_size(grid)
        children = []
        for i, child in enumerate(grid.children):
            if child.id == cell_id:
                cell = cell_of(child, i, columns).model_copy(
                    update={"column_span": column_span, "row_span": row_span}
                )
                child = with_cell(child, clamp_cell(cell, columns, rows))
            children.append(child)
        return grid.model_copy(update={"children": tuple(children)})

    return map_node(roots, grid_id, _resize)


def add_cell(
    roots: Sequence[Node],
    grid_id: str,
    child: Optional[Node] = None,
    index: Optional[int] = None,
) -> Roots:
    """
    Ajoute une cellule (section vide par défaut) à la première place libre.
    index ne règle que l'ordre des enfants, la position vient de gridCell.
    """
    grid = find_node(roots, grid_id)
    if grid is None or grid.type != GRID_TYPE:
        return tuple(roots)

    def _add(grid: Node) -> Node:
        grid = pin_cells(grid)
        columns, rows = grid_size(grid)
        slot = next_free_slot(grid)
        props = dict(grid.props)
        if slot.row_start > rows:
            props["rows"] = slot.row_start
        cell = with_cell(child or create_node("section", padding="20px"), slot)
        at = len(grid.children) if index is None else max(0, min(index, len(grid.children)))
        children = grid.children[:at] + (cell,) + grid.children[at:]
        return grid.model_copy(update={"props": props, "children": children})

    return map_node(roots, grid_id, _add)


def remove_cell(roots: Sequence[Node], grid_id: str, cell_id: str) -> Roots:
    """Retire une cellule ; les autres sont épinglées à leur place avant."""
    if _grid_with_cell(roots, grid_id, cell_id) is None:
        return tuple(roots)

    def _remove(grid: Node) -> Node:
        grid = pin_cells(grid)
        return grid.model_copy(update={"children": tuple(c for c in grid.children if c.id != cell_id)})

    return map_node(roots, grid_id, _remove)


def apply_grid_template(roots: Sequence[Node], grid_id: str, template: str) -> Roots:
    """
    Applique un template (2x2, 3x3, ...) : redimensionne la grille, reclampe
    les cellules existantes et complète avec des cellules vides.
    """
    if template not in GRID_TEMPLATES:
        raise ValueError(f"Template de grille inconnu : {template!r}")
    grid = find_node(roots, grid_id)
    if grid is None or grid.type != GRID_TYPE:
        return tuple(roots)
    columns, rows = GRID_TEMPLATES[template]

    def _apply(grid: Node) -> Node:
        props = {**grid.props, "columns": columns, "rows": rows, "template": template}
        resized = grid.model_copy(update={"props": props})
        children = tuple(with_cell(child, cell) for child, cell in placements(resized))
        resized = resized.model_copy(update={"children": children})
        while len(resized.children) < columns * rows:
            slot = next_free_slot(resized)
            if slot.row_start > rows:
                break
            cell = with_cell(create_node("section", padding="20px"), slot)
            resized = resized.model_copy(update={"children": resized.children + (cell,)})
        return resized

    log.debug("grid %s → template %s", grid_id, template)
    return map_node(roots, grid_id, _apply)


# ── Geste de resize ───────────────────────────────────────────────────────────

@dataclass
class GridResize:
    """
    Geste de resize d'une cellule : état capturé au pointer-down, spans
    courants recalculés à chaque move, valeur finale rendue par release().
    """
    grid_id: str
    cell_id: str
    handle: ResizeHandle
    start_x: float
    start_y: float
    start_cell: GridCell
    columns: int
    rows: int
    container_width: float
    container_height: float
    gap: float = GRID_DEFAULT_GAP_PX
    column_span: int = field(init=False)
    row_span: int = field(init=False)

    def __post_init__(self):
        self.handle = ResizeHandle(self.handle)
        self.column_span = self.start_cell.column_span
        self.row_span = self.start_cell.row_span

    @classmethod
    def begin(
        cls,
        grid: Node,
        cell_id: str,
        handle,
        x: float,
        y: float,
        container_width: float,
        container_height: float,
    ) -> "GridResize":
        columns, rows = grid_size(grid)
        for i, child in enumerate(grid.children):
            if child.id == cell_id:
                start = clamp_cell(cell_of(child, i, columns), columns, rows)
                break
        else:
            raise ValueError(f"Cellule {cell_id!r} absente de la grille {grid.id!r}")
        return cls(
            grid_id=grid.id,
            cell_id=cell_id,
            handle=handle,
            start_x=x,
            start_y=y,
            start_cell=start,
            columns=columns,
            rows=rows,
            container_width=container_width,
            container_height=container_height,
            gap=parse_gap(grid.props.get("gap")),
        )

    def move(self, x: float, y: float) -> Tuple[int, int]:
        """Recalcule les spans depuis le point de départ ; retourne l'aperçu."""
        col_delta = span_delta(x - self.start_x, self.container_width, self.columns, self.gap)
        row_delta = span_delta(y - self.start_y, self.container_height, self.rows, self.gap)
        column_span = self.start_cell.column_span
        row_span = self.start_cell.row_span
        edge = self.handle.value
        if "right" in edge:
            column_span = self.start_cell.column_span + col_delta
        if "left" in edge:
            column_span = self.start_cell.column_span - col_delta
        if "bottom" in edge:
            row_span = self.start_cell.row_span + row_delta
        if "top" in edge:
            row_span = self.start_cell.row_span - row_delta
        cell = clamp_cell(
            self.start_cell.model_copy(update={"column_span": column_span, "row_span": row_span}),
            self.columns,
            self.rows,
        )
        self.column_span, self.row_span = cell.column_span, cell.row_span
        return self.column_span, self.row_span

    def release(self) -> Tuple[int, int]:
        return self.column_span, self.row_span

    def commit(self, roots: Sequence[Node]) -> Roots:
        return set_cell_span(roots, self.grid_id, self.cell_id, *self.release())
