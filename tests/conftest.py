"""Fixtures partagées : horloge simulée, sessions, stockage en mémoire."""
import pytest

from page_builder.core.schemas import Document
from page_builder.session import EditorSession
from page_builder.storage import InMemoryPageStore


class FakeClock:
    """Horloge injectable pour piloter la fenêtre de debounce."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeUploader:
    def __init__(self, url="https://cdn.test/img/photo.png", error=None):
        self.url = url
        self.error = error
        self.calls = []

    def upload(self, data, filename):
        self.calls.append((data, filename))
        if self.error is not None:
            raise self.error
        return {"url": self.url}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryPageStore()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def session(clock, store, uploader):
    return EditorSession(
        Document(page_id="home", title="Accueil"),
        store=store,
        uploader=uploader,
        clock=clock,
    )
