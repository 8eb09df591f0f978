"""
Exemple d'intégration FastAPI.
Lancer avec : python examples/fastapi_example.py
"""
from fastapi import FastAPI

from page_builder import DEFAULT_PAGES, JsonFilePageStore, PageNotFound, default_document, register_page_builder

store = JsonFilePageStore()

app = FastAPI(title="Page Builder FastAPI Example")
register_page_builder(app, store=store)


def seed_pages():
    """Enregistre les pages système par défaut qui n'existent pas encore."""
    for page_id in DEFAULT_PAGES:
        try:
            store.load(page_id)
        except PageNotFound:
            store.save(page_id, default_document(page_id))


if __name__ == "__main__":
    import uvicorn
    seed_pages()
    print("🚀 Serveur FastAPI démarré")
    print("   → http://127.0.0.1:8000/page-builder/pages/home")
    print("   → http://127.0.0.1:8000/docs (Swagger)")
    uvicorn.run(app, host="127.0.0.1", port=8000)
