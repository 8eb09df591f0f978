"""Blocs formulaires — formulaire libre, contact, newsletter."""
from typing import Any, List

from pydantic import Field

from .base import BlockProps


class FormProps(BlockProps):
    fields: List[Any] = Field(default_factory=list)


class ContactFormProps(BlockProps):
    title: str = "Contact Us"
    fields: List[str] = Field(default_factory=lambda: ["name", "email", "message"])


class NewsletterProps(BlockProps):
    title: str = "Subscribe to Newsletter"
    placeholder: str = "Enter your email"
