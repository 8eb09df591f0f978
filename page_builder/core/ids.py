"""Génération des identifiants de blocs (uniques, jamais réutilisés)."""
import time
import uuid


def new_id(prefix: str = "comp") -> str:
    """Retourne un id frais : ``comp-<millis>-<9 hex>``."""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"
