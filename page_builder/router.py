"""
Router FastAPI — endpoints de l'éditeur de pages.

GET  /page-builder/catalog               → blocs de la palette + JSON schemas
GET  /page-builder/pages/{page_id}        → page enregistrée (format d'export)
PUT  /page-builder/pages/{page_id}        → enregistre une page
POST /page-builder/validate               → {"valid": bool, "error"?}
GET  /page-builder/pages/{page_id}/export → fichier <page_id>.json
POST /page-builder/upload/image           → {"url": ...}
"""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response

from .blocks import catalog as block_catalog
from .manifest.parser import DocumentFormatError, dump_json, export_filename, parse_payload
from .manifest.schema import PagePayload
from .storage import (
    JsonFilePageStore,
    LocalUploader,
    PageNotFound,
    PageStore,
    UploadError,
    Uploader,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/page-builder", tags=["page_builder"])


# ── Dépendances (surchargées par register_page_builder) ──────────────────────

def get_store() -> PageStore:
    return JsonFilePageStore()


def get_uploader() -> Uploader:
    return LocalUploader()


def _load_or_404(store: PageStore, page_id: str):
    try:
        return store.load(page_id)
    except PageNotFound:
        raise HTTPException(404, f"Page {page_id} introuvable")
    except DocumentFormatError as e:
        log.error("page %s illisible : %s", page_id, e)
        raise HTTPException(500, f"Page {page_id} illisible")
    except ValueError as e:
        raise HTTPException(400, str(e))


# ── Catalogue ─────────────────────────────────────────────────────────────────

@router.get("/catalog", summary="Liste les blocs disponibles et leurs schemas")
def catalog() -> JSONResponse:
    """Palette : type, libellé, catégorie et JSON schema des props de chaque bloc."""
    return JSONResponse({"blocks": block_catalog()})


# ── Pages ─────────────────────────────────────────────────────────────────────

@router.get("/pages/{page_id}", summary="Charge une page")
def get_page(page_id: str, store: PageStore = Depends(get_store)) -> dict:
    return _load_or_404(store, page_id).to_payload()


@router.put("/pages/{page_id}", summary="Enregistre une page")
def put_page(page_id: str, payload: PagePayload, store: PageStore = Depends(get_store)) -> dict:
    try:
        document = parse_payload(payload)
        return store.save(page_id, document)
    except DocumentFormatError as e:
        raise HTTPException(422, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.post("/validate", summary="Valide une page sans l'enregistrer")
def validate(payload: dict) -> dict:
    """Valide la structure (champs, types, unicité des ids)."""
    try:
        document = parse_payload(payload)
    except DocumentFormatError as e:
        return {"valid": False, "error": str(e)}
    return {"valid": True, "components": len(document.components)}


@router.get("/pages/{page_id}/export", summary="Exporte une page en fichier JSON")
def export_page(page_id: str, store: PageStore = Depends(get_store)) -> Response:
    document = _load_or_404(store, page_id)
    return Response(
        content=dump_json(document),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(document)}"'},
    )


# ── Upload ────────────────────────────────────────────────────────────────────

@router.post("/upload/image", summary="Upload d'une image")
def upload_image(file: UploadFile = File(...), uploader: Uploader = Depends(get_uploader)) -> dict:
    content = file.file.read()
    if not content:
        raise HTTPException(400, "Fichier vide")
    try:
        return uploader.upload(content, file.filename or "image")
    except UploadError as e:
        log.error("upload %s : %s", file.filename, e)
        raise HTTPException(500, str(e))
