"""Manifest — schéma + parser du format de page."""
from .schema import PagePayload
from .parser import (
    DocumentFormatError,
    dump_json,
    dump_node_json,
    export_filename,
    load_json,
    load_node_json,
    parse_payload,
)

__all__ = [
    "PagePayload",
    "DocumentFormatError",
    "dump_json",
    "dump_node_json",
    "export_filename",
    "load_json",
    "load_node_json",
    "parse_payload",
]
