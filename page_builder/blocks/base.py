"""
Blocs de base pour page_builder.
Chaque type de bloc déclare un modèle de props par défaut (BlockProps) ; le
catalogue associe ce modèle à un libellé et une catégorie de palette.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..core.ids import new_id
from ..core.schemas import Node


class BlockProps(BaseModel):
    """Props par défaut d'un bloc. Clés sérialisées en camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_props(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


ChildrenFactory = Callable[[dict], Tuple[Node, ...]]


@dataclass(frozen=True)
class BlockDefinition:
    """Entrée du catalogue : type + props par défaut + enfants par défaut."""
    block_type: str
    label: str
    category: str
    props_model: Type[BlockProps]
    content: str = ""
    children_factory: Optional[ChildrenFactory] = None

    def materialize(self, **overrides) -> Node:
        """Crée un noeud neuf (id frais) configuré par défaut."""
        props = self.props_model(**overrides).to_props()
        children = self.children_factory(props) if self.children_factory else ()
        return Node(
            id=new_id(),
            type=self.block_type,
            props=props,
            children=children,
            content=self.content,
        )

    def describe(self) -> dict:
        return {
            "block_type": self.block_type,
            "label": self.label,
            "category": self.category,
            "schema": self.props_model.model_json_schema(by_alias=True),
        }
