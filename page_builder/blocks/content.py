"""Blocs de contenu — témoignages, FAQ, code, alerte, réseaux sociaux."""
from typing import Any, Dict, List, Literal

from pydantic import Field

from .base import BlockProps


class TestimonialsProps(BlockProps):
    items: List[Dict[str, Any]] = Field(default_factory=list)


class FAQProps(BlockProps):
    items: List[Dict[str, Any]] = Field(default_factory=list)


class CodeBlockProps(BlockProps):
    code: str = ""
    language: str = "javascript"


class AlertProps(BlockProps):
    text: str = "Alert message"
    type: Literal["info", "success", "warning", "error"] = "info"
    dismissible: bool = True


class SocialIconsProps(BlockProps):
    platforms: List[str] = Field(default_factory=lambda: ["facebook", "twitter", "instagram"])
    size: Literal["sm", "md", "lg"] = "md"
