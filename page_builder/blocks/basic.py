"""Blocs de base — titre, texte, bouton, image."""
from typing import Literal

from .base import BlockProps


class HeadingProps(BlockProps):
    text: str = "Heading Text"
    level: Literal["h1", "h2", "h3", "h4", "h5", "h6"] = "h1"
    align: Literal["left", "center", "right"] = "left"
    color: str = "#000000"
    font_size: str = "2.5rem"
    background: str = "#ffffff"


class TextProps(BlockProps):
    text: str = "Lorem ipsum dolor sit amet, consectetur adipiscing elit."
    align: Literal["left", "center", "right", "justify"] = "left"
    color: str = "#333333"


class ButtonProps(BlockProps):
    text: str = "Click Me"
    link: str = "#"
    variant: Literal["primary", "secondary", "outline", "ghost"] = "primary"
    size: Literal["sm", "md", "lg"] = "md"
    align: Literal["left", "center", "right"] = "left"


class ImageProps(BlockProps):
    src: str = ""
    alt: str = "Image"
    width: str = "100%"
    height: str = "auto"
