"""
Page Builder — coeur d'édition de pages par blocs imbriqués.

Usage (moteur pur):
    >>> from page_builder import create_node, insert, History
    >>> history = History(())
    >>> roots = history.commit(insert((), create_node("heading")))

Usage (session d'éditeur):
    >>> from page_builder import EditorSession, Document, Palette, RootGap
    >>> session = EditorSession(Document(page_id="home"))
    >>> session.start_drag(Palette("grid"), 0, 0)
    >>> session.drag_move(0, 20)
    >>> session.end_drag(RootGap(0))

Usage (FastAPI):
    >>> from page_builder import register_page_builder, InMemoryPageStore
    >>> register_page_builder(app, store=InMemoryPageStore())
"""

# ── Modèle ──────────────────────────────────────────────────────────────────
from .core.schemas import COLUMN_SIZES_KEY, GRID_CELL_KEY, Document, Node, Roots
from .core.ids import new_id

# ── Catalogue ───────────────────────────────────────────────────────────────
from .blocks import BlockDefinition, BlockProps, catalog, create_node, get_block, register_block
from .defaults import DEFAULT_PAGES, default_components, default_document

# ── Moteur ──────────────────────────────────────────────────────────────────
from .engine import (
    History,
    delete,
    duplicate,
    find_node,
    insert,
    insert_child,
    move_down,
    move_up,
    reorder,
    update,
)

# ── Gestes / layout ─────────────────────────────────────────────────────────
from .dnd import (
    ColumnSlot,
    DragCoordinator,
    DragPhase,
    DropResult,
    ExistingNode,
    GridCellSlot,
    Palette,
    RootGap,
    SiblingGap,
)
from .layout import BlockResize, ColumnResize, GridCell, GridResize, ResizeHandle

# ── Session / I/O ───────────────────────────────────────────────────────────
from .session import EditorSession, PendingEdit
from .manifest import (
    DocumentFormatError,
    PagePayload,
    dump_json,
    dump_node_json,
    load_json,
    load_node_json,
    parse_payload,
)
from .storage import InMemoryPageStore, JsonFilePageStore, LocalUploader, PageNotFound, UploadError
from .fastapi_integration import register_page_builder

__version__ = "0.1.0"

__all__ = [
    # modèle
    "COLUMN_SIZES_KEY", "GRID_CELL_KEY", "Document", "Node", "Roots", "new_id",
    # catalogue
    "BlockDefinition", "BlockProps", "catalog", "create_node", "get_block", "register_block",
    "DEFAULT_PAGES", "default_components", "default_document",
    # moteur
    "History", "delete", "duplicate", "find_node", "insert", "insert_child",
    "move_down", "move_up", "reorder", "update",
    # gestes
    "ColumnSlot", "DragCoordinator", "DragPhase", "DropResult", "ExistingNode",
    "GridCellSlot", "Palette", "RootGap", "SiblingGap",
    "BlockResize", "ColumnResize", "GridCell", "GridResize", "ResizeHandle",
    # session / I/O
    "EditorSession", "PendingEdit",
    "DocumentFormatError", "PagePayload", "dump_json", "dump_node_json", "load_json",
    "load_node_json", "parse_payload",
    "InMemoryPageStore", "JsonFilePageStore", "LocalUploader", "PageNotFound", "UploadError",
    "register_page_builder",
]
