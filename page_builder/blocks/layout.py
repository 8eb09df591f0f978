"""
Blocs de mise en page — section, container, spacer, divider, card, grid, column.

`grid` et `column` sont les deux seuls types connus des moteurs de layout
(voir page_builder.layout).
"""
from typing import List, Tuple

from pydantic import Field, model_validator

from ..core.ids import new_id
from ..core.schemas import Node
from .base import BlockProps


class SectionProps(BlockProps):
    padding: str = "40px"
    background: str = "#ffffff"
    align: str = "center"


class ContainerProps(BlockProps):
    columns: int = 2
    gap: str = "20px"
    padding: str = "20px"


class SpacerProps(BlockProps):
    height: str = "40px"


class DividerProps(BlockProps):
    color: str = "#e5e7eb"
    thickness: str = "1px"
    style: str = "solid"


class CardProps(BlockProps):
    title: str = "Card Title"
    content: str = "Card content goes here"
    padding: str = "20px"


class GridProps(BlockProps):
    columns: int = Field(default=3, ge=1)
    rows: int = Field(default=3, ge=1)
    gap: str = "20px"
    template: str = "custom"


class ColumnProps(BlockProps):
    columns: int = Field(default=2, ge=1)
    column_sizes: List[str] = Field(default_factory=lambda: ["1fr", "1fr"])
    gap: str = "20px"
    align: str = "stretch"
    responsive: bool = True

    @model_validator(mode="after")
    def _sizes_match_columns(self):
        sizes = list(self.column_sizes[: self.columns])
        sizes += ["1fr"] * (self.columns - len(sizes))
        self.column_sizes = sizes
        return self


def column_slot() -> Node:
    """Conteneur vide d'une colonne (une section)."""
    return Node(
        id=new_id(),
        type="section",
        props=SectionProps(padding="20px").to_props(),
    )


def column_children(props: dict) -> Tuple[Node, ...]:
    """Une section vide par colonne déclarée."""
    return tuple(column_slot() for _ in range(int(props.get("columns") or 1)))
