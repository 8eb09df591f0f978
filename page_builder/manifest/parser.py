"""
Parser de pages — PagePayload (dict / JSON) ↔ Document.

Toute entrée illisible lève DocumentFormatError ; l'appelant décide quoi en
faire (la session ajoute une notice et garde le document courant).
"""
import json
from collections import Counter
from typing import Any, Mapping

from pydantic import ValidationError

from ..core.schemas import Document, Node
from ..engine.mutations import collect_ids
from .schema import PagePayload


class DocumentFormatError(ValueError):
    """Document importé ou chargé illisible."""


def parse_payload(data: Any) -> Document:
    """
    Convertit un payload (dict ou PagePayload) en Document.

    1. Valide la structure (pydantic)
    2. Vérifie l'unicité globale des ids
    """
    if isinstance(data, PagePayload):
        payload = data
    else:
        if not isinstance(data, Mapping):
            raise DocumentFormatError(f"Objet JSON attendu, reçu {type(data).__name__}")
        try:
            payload = PagePayload.model_validate(data)
        except ValidationError as e:
            raise DocumentFormatError(str(e)) from e

    duplicates = sorted(i for i, n in Counter(collect_ids(payload.components)).items() if n > 1)
    if duplicates:
        raise DocumentFormatError(f"Ids dupliqués : {duplicates}")

    return Document(
        page_id=payload.page_id,
        title=payload.title,
        description=payload.description or "",
        components=tuple(payload.components),
    )


def load_json(text) -> Document:
    """Parse un export JSON (str ou bytes)."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise DocumentFormatError(f"JSON invalide : {e}") from e
    return parse_payload(data)


def dump_json(document: Document) -> str:
    """Sérialise un Document au format d'export (indentation 2)."""
    return json.dumps(document.to_payload(), indent=2, ensure_ascii=False)


def export_filename(document: Document) -> str:
    return f"{document.page_id or 'page'}.json"


# ── Presse-papiers (un seul composant) ───────────────────────────────────────

def dump_node_json(node: Node) -> str:
    """Copie d'un composant et de son sous-arbre."""
    return json.dumps(node.to_dict(), ensure_ascii=False)


def load_node_json(text) -> Node:
    """Relit un composant copié ; ids dupliqués dans le sous-arbre refusés."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise DocumentFormatError(f"JSON invalide : {e}") from e
    if not isinstance(data, Mapping):
        raise DocumentFormatError(f"Composant attendu, reçu {type(data).__name__}")
    try:
        node = Node.model_validate(data)
    except ValidationError as e:
        raise DocumentFormatError(str(e)) from e
    duplicates = sorted(i for i, n in Counter(collect_ids((node,))).items() if n > 1)
    if duplicates:
        raise DocumentFormatError(f"Ids dupliqués : {duplicates}")
    return node
