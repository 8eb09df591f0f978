"""
Session d'édition — état d'un éditeur ouvert sur une page.

Porte le document courant (via l'historique), la sélection, le survol, les
notices utilisateur, le slot d'édition debouncée et le geste en cours
(drag ou resize).

Ordre des mutations : toute action discrète commence par vider l'édition en
attente, puis applique une mutation et un commit. Une mutation qui ne change
rien (id périmé, position inchangée) ne crée pas d'entrée d'historique.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

from .blocks import create_node
from .config import EDIT_DEBOUNCE_SECONDS, HISTORY_LIMIT
from .core.schemas import Document, Node, Roots
from .defaults import DEFAULT_PAGES, default_document
from .dnd import DragCoordinator, DragSource, DropResult, DropTarget, Palette
from .engine import mutations
from .engine.history import History
from .layout import blocks as block_layout
from .layout import columns, grid, tree
from .manifest.parser import (
    DocumentFormatError,
    dump_json,
    dump_node_json,
    export_filename,
    load_json,
    load_node_json,
)
from .storage import PageNotFound, PageStore, Uploader

log = logging.getLogger(__name__)

Resize = Union[grid.GridResize, columns.ColumnResize, block_layout.BlockResize]


@dataclass
class PendingEdit:
    """Édition du panneau de propriétés en attente de commit (une seule à la fois)."""
    node_id: str
    field: str
    key: Optional[str]
    value: Any
    due: float

    def same_target(self, node_id: str, field: str, key: Optional[str]) -> bool:
        return (self.node_id, self.field, self.key) == (node_id, field, key)

    def patch(self) -> dict:
        if self.field in ("props", "style"):
            return {self.field: {self.key: self.value}}
        return {self.field: self.value}


class EditorSession:
    """
    Éditeur de page.

    Usage:
        >>> session = EditorSession(Document(page_id="home"))
        >>> heading = session.add_block("heading")
        >>> session.edit_property(heading.id, "level", "h1")
        >>> session.tick()      # appelé par la boucle hôte
        >>> session.undo()
    """

    def __init__(
        self,
        initial_document: Optional[Document] = None,
        on_save: Optional[Callable[[Document], Any]] = None,
        on_close: Optional[Callable[[], Any]] = None,
        store: Optional[PageStore] = None,
        uploader: Optional[Uploader] = None,
        clock: Callable[[], float] = time.monotonic,
        debounce: float = EDIT_DEBOUNCE_SECONDS,
        history_limit: int = HISTORY_LIMIT,
    ):
        document = initial_document or Document()
        self._meta = document.with_components(())
        self.history = History(document.components, limit=history_limit)
        self.on_save = on_save
        self.on_close = on_close
        self.store = store
        self.uploader = uploader
        self.clock = clock
        self.debounce = debounce

        self.selected_id: Optional[str] = None
        self.hovered_id: Optional[str] = None
        self.notices: List[str] = []

        self._pending: Optional[PendingEdit] = None
        self._dnd = DragCoordinator()
        self._resize: Optional[Resize] = None

    @classmethod
    def open(cls, store: PageStore, page_id: str, use_defaults: bool = False, **kwargs) -> "EditorSession":
        """
        Charge page_id depuis le store (PageNotFound si absente).

        use_defaults : une page système absente (home, cart, ...) s'ouvre sur
        ses composants par défaut au lieu de lever PageNotFound.
        """
        try:
            document = store.load(page_id)
        except PageNotFound:
            if not use_defaults or page_id not in DEFAULT_PAGES:
                raise
            log.info("page %s absente, composants par défaut", page_id)
            document = default_document(page_id)
        return cls(document, store=store, **kwargs)

    # ── État ──────────────────────────────────────────────────────────────────

    @property
    def components(self) -> Roots:
        return self.history.current

    @property
    def document(self) -> Document:
        return self._meta.with_components(self.history.current)

    @property
    def pending_edit(self) -> Optional[PendingEdit]:
        return self._pending

    @property
    def selected_node(self) -> Optional[Node]:
        if self.selected_id is None:
            return None
        return mutations.find_node(self.components, self.selected_id)

    def select(self, node_id: Optional[str]) -> None:
        if node_id is not None and not mutations.contains(self.components, node_id):
            log.debug("select: %s introuvable", node_id)
            return
        self.selected_id = node_id

    def hover(self, node_id: Optional[str]) -> None:
        self.hovered_id = node_id

    def pop_notices(self) -> List[str]:
        notices, self.notices = self.notices, []
        return notices

    def _notify(self, message: str) -> None:
        self.notices.append(message)

    def _commit(self, roots: Roots, action: str) -> bool:
        if roots is self.history.current or roots == self.history.current:
            log.debug("%s: aucun changement", action)
            return False
        self.history.commit(roots)
        log.debug("%s → commit %d/%d", action, self.history.cursor + 1, len(self.history))
        return True

    def _drop_stale_refs(self) -> None:
        roots = self.components
        if self.selected_id is not None and not mutations.contains(roots, self.selected_id):
            self.selected_id = None
        if self.hovered_id is not None and not mutations.contains(roots, self.hovered_id):
            self.hovered_id = None

    # ── Éditions debouncées ───────────────────────────────────────────────────

    def edit_property(self, node_id: str, key: Optional[str], value: Any, field: str = "props") -> None:
        """
        Enregistre une frappe du panneau de propriétés.

        field : props | style (clé key) ou content | className (key ignorée).
        Une nouvelle frappe sur la même cible remplace la valeur et relance la
        fenêtre ; une frappe sur une autre cible commite d'abord la précédente.
        """
        if field not in mutations.PATCHABLE_FIELDS or field == "children":
            raise ValueError(f"Champ non éditable : {field!r}")
        if field not in ("props", "style"):
            key = None
        if self._pending is not None and not self._pending.same_target(node_id, field, key):
            self.flush_edits()
        self._pending = PendingEdit(node_id, field, key, value, due=self.clock() + self.debounce)

    def tick(self) -> bool:
        """Commite l'édition en attente si sa fenêtre est écoulée."""
        if self._pending is None or self.clock() < self._pending.due:
            return False
        return self.flush_edits()

    def flush_edits(self) -> bool:
        pending, self._pending = self._pending, None
        if pending is None:
            return False
        roots = tree.update_node(self.components, pending.node_id, pending.patch())
        changed = self._commit(roots, f"edit {pending.node_id}.{pending.field}")
        self._drop_stale_refs()
        return changed

    # ── Actions discrètes ─────────────────────────────────────────────────────

    def add_block(
        self,
        block_type: str,
        index: Optional[int] = None,
        parent_id: Optional[str] = None,
        **props,
    ) -> Optional[Node]:
        """Ajoute un bloc de la palette (en fin de page par défaut) et le sélectionne."""
        self.flush_edits()
        return self._insert(create_node(block_type, **props), parent_id, index, f"add {block_type}")

    def _insert(self, node: Node, parent_id: Optional[str], index: Optional[int], action: str) -> Optional[Node]:
        roots = tree.insert_node(self.components, node, parent_id, index)
        if not self._commit(roots, action):
            return None
        self.selected_id = node.id
        # la version insérée peut porter un gridCell
        return mutations.find_node(roots, node.id)

    def update_node(self, node_id: str, patch: dict) -> bool:
        self.flush_edits()
        changed = self._commit(tree.update_node(self.components, node_id, patch), f"update {node_id}")
        self._drop_stale_refs()
        return changed

    def delete_node(self, node_id: str) -> bool:
        self.flush_edits()
        node = mutations.find_node(self.components, node_id)
        if node is None:
            return False
        removed = mutations.subtree_ids(node)
        self._commit(tree.delete_node(self.components, node_id), f"delete {node_id}")
        if self.selected_id in removed:
            self.selected_id = None
        if self.hovered_id in removed:
            self.hovered_id = None
        return True

    # ── Presse-papiers ────────────────────────────────────────────────────────

    def copy_node(self, node_id: str) -> Optional[str]:
        """JSON du composant et de son sous-arbre (menu contextuel « Copy »)."""
        self.flush_edits()
        node = mutations.find_node(self.components, node_id)
        if node is None:
            log.debug("copy: %s introuvable", node_id)
            return None
        return dump_node_json(node)

    def paste_node(self, text, index: Optional[int] = None, parent_id: Optional[str] = None) -> Optional[Node]:
        """Insère une copie (ids neufs) d'un composant copié et la sélectionne."""
        self.flush_edits()
        try:
            node = load_node_json(text)
        except DocumentFormatError as e:
            log.warning("collage refusé : %s", e)
            self._notify(f"Collage impossible : {e}")
            return None
        node = mutations.clone_with_fresh_ids(node)
        return self._insert(node, parent_id, index, f"paste {node.type}")

    def duplicate_node(self, node_id: str) -> Optional[Node]:
        self.flush_edits()
        roots, clone = mutations.duplicate_subtree(self.components, node_id)
        if clone is None:
            return None
        self._commit(roots, f"duplicate {node_id}")
        self.selected_id = clone.id
        return clone

    def reorder(self, from_index: int, to_index: int) -> bool:
        self.flush_edits()
        return self._commit(mutations.reorder(self.components, from_index, to_index), "reorder")

    def move_up(self, node_id: str) -> bool:
        self.flush_edits()
        return self._commit(mutations.move_up(self.components, node_id), f"move_up {node_id}")

    def move_down(self, node_id: str) -> bool:
        self.flush_edits()
        return self._commit(mutations.move_down(self.components, node_id), f"move_down {node_id}")

    def undo(self) -> Roots:
        self.flush_edits()
        roots = self.history.undo()
        self._drop_stale_refs()
        return roots

    def redo(self) -> Roots:
        self.flush_edits()
        roots = self.history.redo()
        self._drop_stale_refs()
        return roots

    # ── Grille / colonnes ─────────────────────────────────────────────────────

    def add_grid_cell(self, grid_id: str) -> bool:
        self.flush_edits()
        return self._commit(grid.add_cell(self.components, grid_id), f"grid {grid_id} +cell")

    def remove_grid_cell(self, grid_id: str, cell_id: str) -> bool:
        self.flush_edits()
        changed = self._commit(grid.remove_cell(self.components, grid_id, cell_id), f"grid {grid_id} -cell")
        self._drop_stale_refs()
        return changed

    def apply_grid_template(self, grid_id: str, template: str) -> bool:
        self.flush_edits()
        roots = grid.apply_grid_template(self.components, grid_id, template)
        return self._commit(roots, f"grid {grid_id} template {template}")

    def set_column_count(self, column_id: str, count: int) -> bool:
        self.flush_edits()
        changed = self._commit(columns.set_column_count(self.components, column_id, count), f"columns {column_id} = {count}")
        self._drop_stale_refs()
        return changed

    def set_column_sizes(self, column_id: str, sizes: Sequence) -> bool:
        self.flush_edits()
        return self._commit(columns.set_column_sizes(self.components, column_id, sizes), f"columns {column_id} sizes")

    def apply_column_template(self, column_id: str, template: str) -> bool:
        self.flush_edits()
        roots = columns.apply_column_template(self.components, column_id, template)
        changed = self._commit(roots, f"columns {column_id} template {template}")
        self._drop_stale_refs()
        return changed

    def remove_column(self, column_id: str, child_id: str) -> bool:
        self.flush_edits()
        changed = self._commit(columns.remove_column(self.components, column_id, child_id), f"columns {column_id} -{child_id}")
        self._drop_stale_refs()
        return changed

    # ── Drag & drop ───────────────────────────────────────────────────────────

    @property
    def drag_phase(self):
        return self._dnd.phase

    def start_drag(self, source: DragSource, x: float, y: float) -> None:
        self.flush_edits()
        self._dnd.start(source, x, y)

    def drag_move(self, x: float, y: float) -> bool:
        return self._dnd.move(x, y)

    def end_drag(self, target: Optional[DropTarget]) -> DropResult:
        """Relâchement : au plus un commit ; un bloc issu de la palette est sélectionné."""
        source = self._dnd.gesture.source if self._dnd.gesture else None
        result = self._dnd.drop(self.components, target)
        if not result.dropped:
            if target is not None:
                log.warning("drop annulé (%s) : %s", source, result.reason)
            return result
        self._commit(result.roots, f"drop {source}")
        if isinstance(source, Palette):
            self.selected_id = result.node_id
        return result

    def cancel_drag(self) -> DropResult:
        return self._dnd.cancel(self.components)

    # ── Resize ────────────────────────────────────────────────────────────────

    @property
    def resize_gesture(self) -> Optional[Resize]:
        return self._resize

    def begin_cell_resize(
        self,
        grid_id: str,
        cell_id: str,
        handle,
        x: float,
        y: float,
        container_width: float,
        container_height: float,
    ) -> Optional[grid.GridResize]:
        self.flush_edits()
        node = mutations.find_node(self.components, grid_id)
        if node is None or node.type != grid.GRID_TYPE:
            log.warning("resize: grille %s introuvable", grid_id)
            return None
        try:
            self._resize = grid.GridResize.begin(node, cell_id, handle, x, y, container_width, container_height)
        except ValueError as e:
            log.warning("resize: %s", e)
            return None
        return self._resize

    def begin_column_resize(self, column_id: str, index: int, x: float) -> Optional[columns.ColumnResize]:
        self.flush_edits()
        node = mutations.find_node(self.components, column_id)
        if node is None or node.type != columns.COLUMN_TYPE:
            log.warning("resize: colonnes %s introuvables", column_id)
            return None
        try:
            self._resize = columns.ColumnResize.begin(node, index, x)
        except ValueError as e:
            log.warning("resize: %s", e)
            return None
        return self._resize

    def begin_block_resize(
        self,
        node_id: str,
        handle,
        x: float,
        y: float,
        width: float,
        height: float,
        left: float = 0.0,
        top: float = 0.0,
    ) -> Optional[block_layout.BlockResize]:
        self.flush_edits()
        if not mutations.contains(self.components, node_id):
            log.warning("resize: bloc %s introuvable", node_id)
            return None
        self._resize = block_layout.BlockResize(node_id, handle, x, y, width, height, left, top)
        return self._resize

    def resize_move(self, x: float, y: float = 0.0):
        """Aperçu du geste en cours (rien n'est commité)."""
        if self._resize is None:
            return None
        if isinstance(self._resize, columns.ColumnResize):
            return self._resize.move(x)
        return self._resize.move(x, y)

    def end_resize(self) -> bool:
        """Relâchement : exactement un commit pour le geste terminé."""
        gesture, self._resize = self._resize, None
        if gesture is None:
            return False
        return self._commit(gesture.commit(self.components), f"resize {type(gesture).__name__}")

    # ── Import / export / collaborateurs ──────────────────────────────────────

    def export_json(self) -> str:
        self.flush_edits()
        return dump_json(self.document)

    def export_filename(self) -> str:
        return export_filename(self.document)

    def import_json(self, text) -> bool:
        """Remplace le document ; l'historique repart de ce seul snapshot."""
        self.flush_edits()
        try:
            document = load_json(text)
        except DocumentFormatError as e:
            log.warning("import refusé : %s", e)
            self._notify(f"Import impossible : {e}")
            return False
        self._meta = document.with_components(())
        self.history.reset(document.components)
        self.selected_id = None
        self.hovered_id = None
        self._resize = None
        log.info("import %s : %d composants", document.page_id or "page", len(document.components))
        return True

    def save(self) -> bool:
        self.flush_edits()
        document = self.document
        if self.store is None and self.on_save is None:
            log.warning("save: aucun stockage configuré")
            self._notify("Aucun stockage configuré")
            return False
        try:
            if self.store is not None:
                self.store.save(document.page_id or "page", document)
            if self.on_save is not None:
                self.on_save(document)
        except Exception as e:
            log.warning("save %s échoué : %s", document.page_id, e)
            self._notify(f"Enregistrement impossible : {e}")
            return False
        log.info("page %s enregistrée", document.page_id or "page")
        return True

    def close(self) -> None:
        self.flush_edits()
        self._dnd.cancel()
        self._resize = None
        if self.on_close is not None:
            self.on_close()

    def upload_image(self, node_id: str, data: bytes, filename: str, prop: str = "src") -> Optional[str]:
        """Upload puis stocke l'URL retournée dans props[prop] ; props intactes en cas d'échec."""
        self.flush_edits()
        if self.uploader is None:
            self._notify("Aucun service d'upload configuré")
            return None
        try:
            url = self.uploader.upload(data, filename)["url"]
        except Exception as e:
            log.warning("upload %s échoué : %s", filename, e)
            self._notify(f"Upload impossible : {e}")
            return None
        self._commit(mutations.update(self.components, node_id, {"props": {prop: url}}), f"upload {node_id}")
        log.info("image %s → %s", filename, url)
        return url
