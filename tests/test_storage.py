"""Tests des collaborateurs de référence — stockage et upload."""
import pytest

from page_builder.core.schemas import Document, Node
from page_builder.storage import (
    InMemoryPageStore,
    JsonFilePageStore,
    LocalUploader,
    PageNotFound,
    UploadError,
)


def doc():
    return Document(title="Accueil", components=(Node(id="a", type="heading", content="Salut"),))


# ── Pages ─────────────────────────────────────────────────────────────────────

def test_memory_store_round_trip():
    store = InMemoryPageStore()
    with pytest.raises(PageNotFound):
        store.load("home")
    assert store.save("home", doc()) == {"page_id": "home", "saved": True}
    loaded = store.load("home")
    assert loaded.page_id == "home"
    assert loaded.components == doc().components


def test_json_store_writes_export_format(tmp_path):
    store = JsonFilePageStore(tmp_path)
    store.save("home", doc())
    assert (tmp_path / "home.json").exists()
    loaded = store.load("home")
    assert loaded == doc().model_copy(update={"page_id": "home"})


def test_json_store_missing_page(tmp_path):
    with pytest.raises(PageNotFound):
        JsonFilePageStore(tmp_path).load("nope")


def test_json_store_rejects_path_ids(tmp_path):
    with pytest.raises(ValueError):
        JsonFilePageStore(tmp_path).save("../evil", doc())


# ── Uploads ───────────────────────────────────────────────────────────────────

def test_local_uploader_writes_file(tmp_path):
    uploader = LocalUploader(tmp_path, "http://cdn.test/")
    result = uploader.upload(b"img", "../../photo.png")
    assert result["url"].startswith("http://cdn.test/dist/uploads/images/")
    assert result["url"].endswith("-photo.png")
    name = result["url"].rsplit("/", 1)[1]
    assert (tmp_path / "images" / name).read_bytes() == b"img"


def test_local_uploader_rejects_empty(tmp_path):
    with pytest.raises(UploadError):
        LocalUploader(tmp_path, "http://cdn.test").upload(b"", "photo.png")
