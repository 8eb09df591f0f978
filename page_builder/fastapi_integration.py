"""
Helpers pour intégration FastAPI.
"""
from typing import Optional

from fastapi import FastAPI

from .router import get_store, get_uploader, router
from .storage import PageStore, Uploader


def register_page_builder(
    app: FastAPI,
    store: Optional[PageStore] = None,
    uploader: Optional[Uploader] = None,
) -> FastAPI:
    """
    Monte le router /page-builder sur l'app.

    Args:
        app: Instance FastAPI
        store: Stockage des pages (JsonFilePageStore sous PAGES_DIR par défaut)
        uploader: Service d'upload (LocalUploader sous UPLOADS_DIR par défaut)

    Example:
        >>> app = FastAPI()
        >>> register_page_builder(app, store=InMemoryPageStore())
    """
    if store is not None:
        app.dependency_overrides[get_store] = lambda: store
    if uploader is not None:
        app.dependency_overrides[get_uploader] = lambda: uploader
    app.include_router(router)
    return app
