"""
Moteur de layout colonnes (largeurs fractionnaires `Nfr`).

Invariant d'un noeud `column` : len(columnSizes) == len(children) == columns.

Resize d'une frontière i | i+1 : la colonne i prend le delta, la colonne i+1
(et elle seule) absorbe l'inverse ; les deux restent >= 0.5fr et la somme des
largeurs est conservée.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..blocks import column_slot
from ..config import COLUMN_DEFAULT_COUNT, COLUMN_MIN_FR, COLUMN_UNIT_PX
from ..core.schemas import COLUMN_SIZES_KEY, Node, Roots
from ..engine.mutations import find_node, map_node

log = logging.getLogger(__name__)

COLUMN_TYPE = "column"

COLUMN_TEMPLATES: Dict[str, List[str]] = {
    "1-col": ["1fr"],
    "2-col": ["1fr", "1fr"],
    "2-col-3-1": ["3fr", "1fr"],
    "2-col-1-3": ["1fr", "3fr"],
    "3-col": ["1fr", "1fr", "1fr"],
    "3-col-2-1-1": ["2fr", "1fr", "1fr"],
    "3-col-1-2-1": ["1fr", "2fr", "1fr"],
    "3-col-1-1-2": ["1fr", "1fr", "2fr"],
    "4-col": ["1fr", "1fr", "1fr", "1fr"],
    "custom": ["1fr", "1fr"],
}


# ── Tokens fr ─────────────────────────────────────────────────────────────────

def parse_size(token) -> float:
    """'2.5fr' → 2.5 ; un token illisible vaut 1fr."""
    if isinstance(token, (int, float)):
        return float(token)
    text = str(token).strip()
    if text.endswith("fr"):
        text = text[:-2]
    try:
        return float(text)
    except ValueError:
        return 1.0


def format_size(value: float) -> str:
    """2.5 → '2.5fr', 1.0 → '1fr'."""
    text = f"{round(value, 4):.4f}".rstrip("0").rstrip(".")
    return f"{text}fr"


def column_sizes(node: Node) -> List[float]:
    raw = node.props.get(COLUMN_SIZES_KEY)
    if not raw:
        raw = ["1fr"] * int(node.props.get("columns") or len(node.children) or COLUMN_DEFAULT_COUNT)
    return [parse_size(t) for t in raw]


def resize_boundary(
    sizes: Sequence[float],
    index: int,
    frac_delta: float,
    minimum: float = COLUMN_MIN_FR,
) -> List[float]:
    """
    Applique frac_delta à la colonne index, l'inverse à index + 1.
    Le delta est borné pour que les deux colonnes restent >= minimum.
    """
    sizes = list(sizes)
    if not 0 <= index < len(sizes) - 1:
        return sizes
    left, right = sizes[index], sizes[index + 1]
    low = min(0.0, minimum - left)
    high = max(0.0, right - minimum)
    delta = min(max(frac_delta, low), high)
    new_left = round(left + delta, 4)
    sizes[index] = new_left
    sizes[index + 1] = round(left + right - new_left, 4)
    return sizes


# ── Opérations sur un noeud ───────────────────────────────────────────────────

def normalize_columns(node: Node) -> Node:
    """
    Rétablit l'invariant de longueur. Les enfants en trop ne sont jamais
    supprimés : le nombre de colonnes s'aligne alors sur eux.
    """
    count = max(int(node.props.get("columns") or 0), len(node.children)) or COLUMN_DEFAULT_COUNT
    sizes = [format_size(max(COLUMN_MIN_FR, s)) for s in column_sizes(node)][:count]
    sizes += ["1fr"] * (count - len(sizes))
    children = node.children + tuple(column_slot() for _ in range(count - len(node.children)))
    props = {**node.props, "columns": count, COLUMN_SIZES_KEY: sizes}
    return node.model_copy(update={"props": props, "children": children})


def with_column_count(node: Node, count: int) -> Node:
    """
    Agrandit (colonnes '1fr' + section vide) ou tronque par la fin, sans
    redistribuer la largeur retirée.
    """
    node = normalize_columns(node)
    count = max(1, int(count))
    sizes = list(node.props[COLUMN_SIZES_KEY])[:count]
    children = node.children[:count]
    while len(sizes) < count:
        sizes.append("1fr")
        children += (column_slot(),)
    props = {**node.props, "columns": count, COLUMN_SIZES_KEY: sizes}
    return node.model_copy(update={"props": props, "children": children})


# ── Opérations sur l'arbre ────────────────────────────────────────────────────

def _column_node(roots: Sequence[Node], column_id: str):
    node = find_node(roots, column_id)
    if node is None or node.type != COLUMN_TYPE:
        return None
    return node


def set_column_sizes(roots: Sequence[Node], column_id: str, sizes: Sequence) -> Roots:
    """Commit du tableau columnSizes complet (chaque largeur clampée à 0.5fr)."""
    if _column_node(roots, column_id) is None:
        return tuple(roots)

    def _apply(node: Node) -> Node:
        node = normalize_columns(node)
        count = node.props["columns"]
        tokens = [format_size(max(COLUMN_MIN_FR, parse_size(s))) for s in sizes][:count]
        tokens += node.props[COLUMN_SIZES_KEY][len(tokens):]
        return node.model_copy(update={"props": {**node.props, COLUMN_SIZES_KEY: tokens}})

    return map_node(roots, column_id, _apply)


def set_column_count(roots: Sequence[Node], column_id: str, count: int) -> Roots:
    if _column_node(roots, column_id) is None:
        return tuple(roots)
    return map_node(roots, column_id, lambda node: with_column_count(node, count))


def apply_column_template(roots: Sequence[Node], column_id: str, template: str) -> Roots:
    if template not in COLUMN_TEMPLATES:
        raise ValueError(f"Template de colonnes inconnu : {template!r}")
    if _column_node(roots, column_id) is None:
        return tuple(roots)
    sizes = COLUMN_TEMPLATES[template]

    def _apply(node: Node) -> Node:
        node = with_column_count(node, len(sizes))
        props = {**node.props, COLUMN_SIZES_KEY: list(sizes), "template": template}
        return node.model_copy(update={"props": props})

    log.debug("columns %s → template %s", column_id, template)
    return map_node(roots, column_id, _apply)


def remove_column(roots: Sequence[Node], column_id: str, child_id: str) -> Roots:
    """Retire une colonne et sa largeur ; la dernière colonne restante est conservée."""
    node = _column_node(roots, column_id)
    if node is None:
        return tuple(roots)
    node = normalize_columns(node)
    index = next((i for i, c in enumerate(node.children) if c.id == child_id), -1)
    if index == -1 or len(node.children) == 1:
        return tuple(roots)

    def _remove(column: Node) -> Node:
        column = normalize_columns(column)
        sizes = list(column.props[COLUMN_SIZES_KEY])
        del sizes[index]
        children = column.children[:index] + column.children[index + 1:]
        props = {**column.props, "columns": len(children), COLUMN_SIZES_KEY: sizes}
        return column.model_copy(update={"props": props, "children": children})

    return map_node(roots, column_id, _remove)


# ── Geste de resize ───────────────────────────────────────────────────────────

@dataclass
class ColumnResize:
    """Geste de resize de la frontière entre les colonnes index et index + 1."""
    column_id: str
    index: int
    start_x: float
    start_sizes: Tuple[float, ...]
    unit: float = COLUMN_UNIT_PX
    sizes: List[float] = field(init=False)

    def __post_init__(self):
        self.sizes = list(self.start_sizes)

    @classmethod
    def begin(cls, node: Node, index: int, x: float) -> "ColumnResize":
        sizes = column_sizes(normalize_columns(node))
        if not 0 <= index < len(sizes) - 1:
            raise ValueError(f"Pas de frontière après la colonne {index} de {node.id!r}")
        return cls(column_id=node.id, index=index, start_x=x, start_sizes=tuple(sizes))

    def move(self, x: float) -> List[str]:
        frac_delta = (x - self.start_x) / self.unit
        self.sizes = resize_boundary(self.start_sizes, self.index, frac_delta)
        return self.release()

    def release(self) -> List[str]:
        return [format_size(s) for s in self.sizes]

    def commit(self, roots: Sequence[Node]) -> Roots:
        return set_column_sizes(roots, self.column_id, self.release())
