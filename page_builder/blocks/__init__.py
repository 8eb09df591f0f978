"""
Catalogue des blocs — registry type → définition (props par défaut, palette).

Un noeud chargé peut porter un type absent du registry (le rendu lui
appartient) ; seule la création depuis la palette exige un type connu.
"""
from typing import Dict, List

from ..core.schemas import Node
from .base import BlockDefinition, BlockProps
from .basic import ButtonProps, HeadingProps, ImageProps, TextProps
from .commerce import FeaturedProductsProps, ProductSearchProps, ProductsGridProps
from .content import AlertProps, CodeBlockProps, FAQProps, SocialIconsProps, TestimonialsProps
from .forms import ContactFormProps, FormProps, NewsletterProps
from .layout import (
    CardProps, ColumnProps, ContainerProps, DividerProps, GridProps,
    SectionProps, SpacerProps, column_children, column_slot,
)
from .media import BannerProps, SliderProps, VideoProps, slider_children

_BLOCK_REGISTRY: Dict[str, BlockDefinition] = {}


def register_block(definition: BlockDefinition) -> BlockDefinition:
    """Ajoute (ou remplace) un type de bloc dans le catalogue."""
    _BLOCK_REGISTRY[definition.block_type] = definition
    return definition


for _definition in (
    # Basic
    BlockDefinition("heading", "Heading", "Basic", HeadingProps, content="Heading Text"),
    BlockDefinition("text", "Text", "Basic", TextProps,
                    content="Lorem ipsum dolor sit amet, consectetur adipiscing elit."),
    BlockDefinition("button", "Button", "Basic", ButtonProps, content="Click Me"),
    BlockDefinition("image", "Image", "Basic", ImageProps),
    # Layout
    BlockDefinition("section", "Section", "Layout", SectionProps),
    BlockDefinition("container", "Container", "Layout", ContainerProps),
    BlockDefinition("spacer", "Spacer", "Layout", SpacerProps),
    BlockDefinition("divider", "Divider", "Layout", DividerProps),
    BlockDefinition("card", "Card", "Layout", CardProps),
    BlockDefinition("grid", "Grid", "Layout", GridProps),
    BlockDefinition("column", "Columns", "Layout", ColumnProps, children_factory=column_children),
    # Media
    BlockDefinition("video", "Video", "Media", VideoProps),
    BlockDefinition("slider", "Slider", "Media", SliderProps, children_factory=slider_children),
    BlockDefinition("banner", "Banner", "Media", BannerProps),
    # Ecommerce
    BlockDefinition("products-grid", "Products Grid", "Ecommerce", ProductsGridProps),
    BlockDefinition("featured-products", "Featured Products", "Ecommerce", FeaturedProductsProps),
    BlockDefinition("product-search", "Product Search", "Ecommerce", ProductSearchProps),
    # Forms
    BlockDefinition("form", "Form", "Forms", FormProps),
    BlockDefinition("contact-form", "Contact Form", "Forms", ContactFormProps),
    BlockDefinition("newsletter", "Newsletter", "Forms", NewsletterProps),
    # Content
    BlockDefinition("testimonials", "Testimonials", "Content", TestimonialsProps),
    BlockDefinition("faq", "FAQ", "Content", FAQProps),
    BlockDefinition("code-block", "Code Block", "Content", CodeBlockProps),
    BlockDefinition("alert", "Alert", "Content", AlertProps),
    BlockDefinition("social-icons", "Social Icons", "Content", SocialIconsProps),
):
    register_block(_definition)


def get_block(block_type: str) -> BlockDefinition:
    definition = _BLOCK_REGISTRY.get(block_type)
    if definition is None:
        raise ValueError(f"Bloc inconnu : {block_type!r}. Registry : {list(_BLOCK_REGISTRY)}")
    return definition


def block_types() -> List[str]:
    return list(_BLOCK_REGISTRY)


def create_node(block_type: str, **props) -> Node:
    """Matérialise un bloc de la palette : id frais + props par défaut."""
    return get_block(block_type).materialize(**props)


def catalog() -> List[dict]:
    """Catalogue de la palette avec le JSON schema des props de chaque bloc."""
    return [d.describe() for d in _BLOCK_REGISTRY.values()]


__all__ = [
    "BlockDefinition", "BlockProps",
    "register_block", "get_block", "block_types", "create_node", "catalog",
    "column_slot",
    "HeadingProps", "TextProps", "ButtonProps", "ImageProps",
    "SectionProps", "ContainerProps", "SpacerProps", "DividerProps", "CardProps",
    "GridProps", "ColumnProps",
    "VideoProps", "SliderProps", "BannerProps",
    "ProductsGridProps", "FeaturedProductsProps", "ProductSearchProps",
    "FormProps", "ContactFormProps", "NewsletterProps",
    "TestimonialsProps", "FAQProps", "CodeBlockProps", "AlertProps", "SocialIconsProps",
]
