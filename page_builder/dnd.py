"""
Coordinateur drag & drop.

Machine à états par geste : IDLE → DRAGGING → DROPPED | CANCELLED. L'issue
est portée par le DropResult ; le coordinateur revient aussitôt à IDLE,
prêt pour le geste suivant.

Sources : Palette(block_type) (aucun noeud n'existe avant le drop) ou
ExistingNode(node_id). Cibles : RootGap, SiblingGap, GridCellSlot,
ColumnSlot ; chaque surface droppable publie une identité stable, la
résolution ne dépend donc jamais des coordonnées du pointeur.

Le déplacement d'un noeud existant vers un autre niveau d'imbrication n'est
pas supporté : un tel drop est annulé.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from .blocks import block_types, create_node
from .config import DRAG_ACTIVATION_DISTANCE
from .core.schemas import Node, Roots
from .engine.mutations import contains, move_to_gap, root_index
from .layout.tree import insert_node

log = logging.getLogger(__name__)


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


# ── Sources ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Palette:
    block_type: str


@dataclass(frozen=True)
class ExistingNode:
    node_id: str


DragSource = Union[Palette, ExistingNode]


# ── Cibles ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RootGap:
    index: int


@dataclass(frozen=True)
class SiblingGap:
    parent_id: str
    index: int


@dataclass(frozen=True)
class GridCellSlot:
    cell_id: str


@dataclass(frozen=True)
class ColumnSlot:
    column_id: str


DropTarget = Union[RootGap, SiblingGap, GridCellSlot, ColumnSlot]


@dataclass
class DragGesture:
    """Bookkeeping d'un geste, jeté au drop ou à l'annulation."""
    source: DragSource
    start_x: float
    start_y: float
    activated: bool = False

    def track(self, x: float, y: float, activation_distance: float) -> bool:
        if not self.activated and math.hypot(x - self.start_x, y - self.start_y) >= activation_distance:
            self.activated = True
        return self.activated


@dataclass(frozen=True)
class DropResult:
    phase: DragPhase
    roots: Roots
    node_id: Optional[str] = None
    reason: str = ""

    @property
    def dropped(self) -> bool:
        return self.phase is DragPhase.DROPPED


class DragCoordinator:
    """
    Interprète un geste de drag comme insertion depuis la palette, réordonnement
    racine ou insertion dans un slot imbriqué.

    Usage:
        >>> dnd = DragCoordinator()
        >>> dnd.start(Palette("heading"), 0, 0)
        >>> dnd.move(0, 40)
        >>> result = dnd.drop(roots, RootGap(0))
    """

    def __init__(self, activation_distance: float = DRAG_ACTIVATION_DISTANCE):
        self.activation_distance = activation_distance
        self._phase = DragPhase.IDLE
        self._gesture: Optional[DragGesture] = None

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def gesture(self) -> Optional[DragGesture]:
        return self._gesture

    def start(self, source: DragSource, x: float, y: float) -> DragGesture:
        if self._gesture is not None:
            log.warning("drag: geste précédent abandonné (%s)", self._gesture.source)
        self._gesture = DragGesture(source=source, start_x=x, start_y=y)
        self._phase = DragPhase.DRAGGING
        return self._gesture

    def move(self, x: float, y: float) -> bool:
        """Suit le pointeur ; retourne True une fois la distance d'activation franchie."""
        if self._gesture is None:
            return False
        return self._gesture.track(x, y, self.activation_distance)

    def _reset(self) -> None:
        self._gesture = None
        self._phase = DragPhase.IDLE

    def cancel(self, roots: Sequence[Node] = (), reason: str = "annulé") -> DropResult:
        self._reset()
        return DropResult(DragPhase.CANCELLED, tuple(roots), reason=reason)

    def drop(self, roots: Sequence[Node], target: Optional[DropTarget]) -> DropResult:
        """Résout la cible et applique exactement une mutation, ou annule."""
        roots = tuple(roots)
        gesture = self._gesture
        if gesture is None:
            return self.cancel(roots, "aucun geste en cours")
        if not gesture.activated:
            return self.cancel(roots, "distance d'activation non atteinte")
        if target is None:
            return self.cancel(roots, "aucune cible")

        try:
            if isinstance(gesture.source, Palette):
                result = self._drop_new(roots, gesture.source, target)
            else:
                result = self._drop_existing(roots, gesture.source, target)
        finally:
            self._reset()

        if result.dropped:
            log.debug("drop %s → %s (%s)", gesture.source, target, result.node_id)
        else:
            log.debug("drop annulé : %s", result.reason)
        return result

    # ── Résolution ────────────────────────────────────────────────────────────

    def _drop_new(self, roots: Roots, source: Palette, target: DropTarget) -> DropResult:
        if source.block_type not in block_types():
            return DropResult(DragPhase.CANCELLED, roots, reason=f"bloc {source.block_type!r} inconnu")
        if isinstance(target, RootGap):
            node = create_node(source.block_type)
            return DropResult(DragPhase.DROPPED, insert_node(roots, node, index=target.index), node.id)

        if isinstance(target, SiblingGap):
            parent_id, index = target.parent_id, target.index
        elif isinstance(target, GridCellSlot):
            parent_id, index = target.cell_id, None
        else:
            parent_id, index = target.column_id, None

        if not contains(roots, parent_id):
            return DropResult(DragPhase.CANCELLED, roots, reason=f"cible {parent_id!r} introuvable")
        node = create_node(source.block_type)
        return DropResult(DragPhase.DROPPED, insert_node(roots, node, parent_id, index), node.id)

    def _drop_existing(self, roots: Roots, source: ExistingNode, target: DropTarget) -> DropResult:
        if not isinstance(target, RootGap):
            return DropResult(DragPhase.CANCELLED, roots, reason="déplacement entre niveaux non supporté")
        if root_index(roots, source.node_id) == -1:
            return DropResult(DragPhase.CANCELLED, roots, reason="le noeud n'est pas à la racine")
        moved = move_to_gap(roots, source.node_id, target.index)
        if moved is roots:
            return DropResult(DragPhase.CANCELLED, roots, reason="position inchangée")
        return DropResult(DragPhase.DROPPED, moved, source.node_id)
