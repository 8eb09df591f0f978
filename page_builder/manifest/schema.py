"""
Schéma JSON de persistance / export d'une page.

Exemple minimal :
{
  "page_id": "home",
  "title": "Accueil",
  "description": "",
  "components": [
    {"id": "comp-1700000000000-a1b2c3d4e", "type": "heading",
     "props": {"level": "h1"}, "content": "Bienvenue", "children": []}
  ]
}

`components` absent ou null → page vide.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.schemas import Node


class PagePayload(BaseModel):
    """Forme échangée avec le stockage, l'export fichier et l'API HTTP."""
    page_id: str = ""
    title: str = "Untitled Page"
    description: Optional[str] = ""
    components: List[Node] = Field(default_factory=list)

    @field_validator("components", mode="before")
    @classmethod
    def _components_default(cls, v):
        return [] if v is None else v

    @field_validator("page_id", "title", mode="before")
    @classmethod
    def _strings_default(cls, v, info):
        if v is None:
            return "Untitled Page" if info.field_name == "title" else ""
        return v
