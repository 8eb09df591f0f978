"""Tests manifest — parse, unicité des ids, export JSON."""
import json

import pytest

from page_builder.core.schemas import Document, Node
from page_builder.manifest import (
    DocumentFormatError,
    PagePayload,
    dump_json,
    dump_node_json,
    export_filename,
    load_json,
    load_node_json,
    parse_payload,
)


# ── parse_payload ─────────────────────────────────────────────────────────────

def test_empty_payload_is_empty_document():
    doc = parse_payload({})
    assert doc.is_empty
    assert doc.title == "Untitled Page"


def test_null_fields_are_defaults():
    doc = parse_payload({"page_id": None, "title": None, "description": None, "components": None})
    assert doc == Document()


def test_nested_components():
    doc = parse_payload({
        "page_id": "home",
        "components": [{
            "id": "s",
            "type": "section",
            "className": "hero",
            "children": [{"id": "t", "type": "text", "content": "Bonjour"}],
        }],
    })
    assert doc.components[0].class_name == "hero"
    assert doc.components[0].children[0].content == "Bonjour"


def test_unknown_block_types_are_kept():
    doc = parse_payload({"components": [{"id": "x", "type": "countdown", "props": {"to": "2030"}}]})
    assert doc.components[0].type == "countdown"


def test_accepts_payload_model():
    payload = PagePayload(page_id="p", components=[Node(id="a", type="text")])
    assert parse_payload(payload).components[0].id == "a"


@pytest.mark.parametrize("data", [
    [],
    "page",
    {"components": [{"type": "text"}]},
    {"components": [{"id": "a"}]},
    {"components": "nope"},
])
def test_malformed_payload_raises(data):
    with pytest.raises(DocumentFormatError):
        parse_payload(data)


def test_duplicate_ids_are_malformed():
    data = {"components": [{"id": "a", "type": "section", "children": [{"id": "a", "type": "text"}]}]}
    with pytest.raises(DocumentFormatError, match="dupliqués"):
        parse_payload(data)


def test_format_error_is_value_error():
    assert issubclass(DocumentFormatError, ValueError)


# ── JSON ──────────────────────────────────────────────────────────────────────

def test_load_json_invalid_text():
    with pytest.raises(DocumentFormatError):
        load_json("{oops")
    with pytest.raises(DocumentFormatError):
        load_json(None)


def test_dump_json_indented():
    text = dump_json(Document(page_id="home", title="Accueil"))
    assert text.startswith('{\n  "page_id": "home"')
    assert json.loads(text)["components"] == []


def test_dump_then_load_restores_document():
    doc = Document(page_id="home", components=(
        Node(id="g", type="grid", props={"columns": 2}, children=(
            Node(id="c", type="section", props={"gridCell": {"columnStart": 1, "rowStart": 1, "columnSpan": 2, "rowSpan": 1}}),
        )),
    ))
    assert load_json(dump_json(doc)) == doc


def test_export_filename():
    assert export_filename(Document(page_id="landing")) == "landing.json"
    assert export_filename(Document()) == "page.json"


# ── Composant copié ───────────────────────────────────────────────────────────

def test_node_json_keeps_subtree():
    node = Node(id="s", type="section", props={"padding": "20px"}, children=(
        Node(id="t", type="text", content="Bonjour", className="lead"),
    ))
    text = dump_node_json(node)
    assert json.loads(text)["children"][0]["className"] == "lead"
    assert load_node_json(text) == node


@pytest.mark.parametrize("text", ["{oops", "[1, 2]", '{"type": "text"}'])
def test_load_node_json_rejects_garbage(text):
    with pytest.raises(DocumentFormatError):
        load_node_json(text)


def test_load_node_json_rejects_duplicate_ids():
    text = json.dumps({"id": "x", "type": "section", "children": [{"id": "x", "type": "text"}]})
    with pytest.raises(DocumentFormatError, match="dupliqués"):
        load_node_json(text)
