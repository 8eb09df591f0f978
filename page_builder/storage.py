"""
Collaborateurs externes de l'éditeur : stockage des pages et upload d'images.

L'éditeur ne connaît que les protocoles PageStore / Uploader ; les
implémentations ci-dessous servent de référence (tests, dev local, router).
"""
import logging
import os
import re
import uuid
from pathlib import Path
from typing import Dict, Optional, Protocol

from .config import BASE_URL, PAGES_DIR, UPLOADS_DIR
from .core.schemas import Document
from .manifest.parser import dump_json, load_json

log = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")


class PageNotFound(LookupError):
    """Aucune page enregistrée sous cet id."""


class UploadError(RuntimeError):
    """L'upload n'a pas produit d'URL."""


class PageStore(Protocol):
    def load(self, page_id: str) -> Document: ...

    def save(self, page_id: str, document: Document) -> dict: ...


class Uploader(Protocol):
    def upload(self, data: bytes, filename: str) -> dict: ...


def _safe_name(name: str) -> str:
    """Nom de fichier sans chemin ni caractères exotiques."""
    cleaned = _SAFE_NAME.sub("-", Path(name or "").name).strip(".-")
    return cleaned or "file"


# ── Pages ─────────────────────────────────────────────────────────────────────

class InMemoryPageStore:
    """Stockage en mémoire (tests, démo)."""

    def __init__(self, pages: Optional[Dict[str, Document]] = None):
        self.pages: Dict[str, Document] = dict(pages or {})

    def load(self, page_id: str) -> Document:
        try:
            return self.pages[page_id]
        except KeyError:
            raise PageNotFound(page_id) from None

    def save(self, page_id: str, document: Document) -> dict:
        self.pages[page_id] = document.model_copy(update={"page_id": page_id})
        return {"page_id": page_id, "saved": True}


class JsonFilePageStore:
    """Une page = un fichier <page_id>.json au format d'export."""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or PAGES_DIR)

    def _path(self, page_id: str) -> Path:
        if _safe_name(page_id) != page_id:
            raise ValueError(f"page_id invalide : {page_id!r}")
        return self.directory / f"{page_id}.json"

    def load(self, page_id: str) -> Document:
        path = self._path(page_id)
        if not path.exists():
            raise PageNotFound(page_id)
        return load_json(path.read_text(encoding="utf-8"))

    def save(self, page_id: str, document: Document) -> dict:
        path = self._path(page_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_json(document.model_copy(update={"page_id": page_id})), encoding="utf-8")
        log.info("page %s enregistrée (%s)", page_id, path)
        return {"page_id": page_id, "saved": True}


# ── Uploads ───────────────────────────────────────────────────────────────────

class LocalUploader:
    """Écrit le fichier sous UPLOADS_DIR/images et retourne son URL publique."""

    def __init__(self, uploads_dir: Optional[Path] = None, base_url: Optional[str] = None):
        self.uploads_dir = Path(uploads_dir or UPLOADS_DIR)
        self.base_url = (base_url or os.getenv("BASE_URL", BASE_URL)).rstrip("/")

    def upload(self, data: bytes, filename: str) -> dict:
        if not data:
            raise UploadError("Fichier vide")
        name = f"{uuid.uuid4().hex[:8]}-{_safe_name(filename)}"
        dest_dir = self.uploads_dir / "images"
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            (dest_dir / name).write_bytes(data)
        except OSError as e:
            raise UploadError(f"Écriture impossible : {e}") from e
        url = f"{self.base_url}/dist/uploads/images/{name}"
        log.info("upload %s → %s", filename, url)
        return {"url": url}
