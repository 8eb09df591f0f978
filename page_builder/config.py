"""
Configuration du Page Builder.

Constantes de réglage de l'éditeur (historique, debounce, seuils de drag et de
resize) surchargeables par variables d'environnement, plus les chemins des
collaborateurs de référence (stockage JSON, uploads).

Les seuils grille/colonnes sont des valeurs heuristiques reprises telles
quelles de l'éditeur d'origine.
"""
import os
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


# ── Historique / édition ─────────────────────────────────────────────────────

HISTORY_LIMIT = _env_int("PAGE_BUILDER_HISTORY_LIMIT", 50)

# Fenêtre de coalescence des éditions du panneau de propriétés (secondes)
EDIT_DEBOUNCE_SECONDS = _env_float("PAGE_BUILDER_EDIT_DEBOUNCE_MS", 300) / 1000.0

# ── Drag & drop ──────────────────────────────────────────────────────────────

# Distance (px) à parcourir avant qu'un pointer-down devienne un drag
DRAG_ACTIVATION_DISTANCE = _env_float("PAGE_BUILDER_DRAG_ACTIVATION_PX", 8)

# ── Grille ───────────────────────────────────────────────────────────────────

GRID_DEFAULT_COLUMNS = 3
GRID_DEFAULT_GAP_PX = 20.0
GRID_THRESHOLD_RATIO = _env_float("PAGE_BUILDER_GRID_THRESHOLD_RATIO", 0.3)
GRID_THRESHOLD_MIN_PX = _env_float("PAGE_BUILDER_GRID_THRESHOLD_MIN_PX", 20)

# ── Colonnes ─────────────────────────────────────────────────────────────────

COLUMN_UNIT_PX = _env_float("PAGE_BUILDER_COLUMN_UNIT_PX", 50)
COLUMN_MIN_FR = 0.5
COLUMN_DEFAULT_COUNT = 2

# ── Resize libre des blocs ───────────────────────────────────────────────────

BLOCK_MIN_SIZE_PX = 50.0

# ── Collaborateurs de référence ──────────────────────────────────────────────

BASE_URL = os.getenv("BASE_URL", "http://localhost:8001")

_ROOT = Path(__file__).parent.parent
UPLOADS_DIR = Path(os.getenv("UPLOADS_DIR", str(_ROOT / "dist" / "uploads")))
PAGES_DIR = Path(os.getenv("PAGES_DIR", str(_ROOT / "data" / "pages")))
