"""
Schémas Pydantic du Page Builder.
Structure récursive : Document → Node → Node ...

Les modèles sont figés (frozen) : un noeud ne se modifie jamais sur place, il
est remplacé par une copie dans un nouvel arbre (voir engine.mutations).
"""
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sous-clés de props réservées aux moteurs de layout
GRID_CELL_KEY = "gridCell"
COLUMN_SIZES_KEY = "columnSizes"


class Node(BaseModel):
    """Bloc du document (type + props opaques + enfants ordonnés)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    type: str = Field(..., description="Type de bloc (heading, grid, column, ...)")
    props: Dict[str, Any] = Field(default_factory=dict)
    children: Tuple["Node", ...] = ()
    style: Dict[str, Any] = Field(default_factory=dict)
    content: str = ""
    class_name: Optional[str] = Field(default=None, alias="className")

    @field_validator("props", "style", mode="before")
    @classmethod
    def _none_is_empty_map(cls, v):
        return {} if v is None else v

    @field_validator("children", "content", mode="before")
    @classmethod
    def _none_is_empty(cls, v, info):
        if v is None:
            return () if info.field_name == "children" else ""
        return v

    def to_dict(self) -> dict:
        """Forme JSON du composant (clés camelCase, champs vides omis)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


Node.model_rebuild()


# Liste ordonnée des racines ; c'est aussi la forme d'un snapshot d'historique
Roots = Tuple[Node, ...]


class Document(BaseModel):
    """Page complète : métadonnées + racines. Unité de sauvegarde et d'undo."""
    model_config = ConfigDict(frozen=True)

    page_id: str = ""
    title: str = "Untitled Page"
    description: str = ""
    components: Roots = ()

    @field_validator("components", mode="before")
    @classmethod
    def _components_default(cls, v):
        return () if v is None else v

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, v):
        return "" if v is None else v

    @property
    def is_empty(self) -> bool:
        """Vrai si la page n'a encore aucun contenu."""
        return not self.components

    def with_components(self, components) -> "Document":
        return self.model_copy(update={"components": tuple(components)})

    def to_payload(self) -> dict:
        """Forme de persistance : {page_id, title, description, components}."""
        return {
            "page_id": self.page_id,
            "title": self.title,
            "description": self.description,
            "components": [n.to_dict() for n in self.components],
        }
