"""Tests du catalogue de blocs — props par défaut, enfants par défaut, registry."""
import pytest

from page_builder.blocks import (
    _BLOCK_REGISTRY,
    BlockDefinition,
    BlockProps,
    block_types,
    catalog,
    create_node,
    get_block,
    register_block,
)


# ── Registry ──────────────────────────────────────────────────────────────────

def test_catalog_lists_every_palette_block():
    types = block_types()
    assert len(types) == 25
    for expected in ("heading", "grid", "column", "slider", "products-grid", "newsletter", "social-icons"):
        assert expected in types


def test_catalog_entries_have_schema():
    entries = {e["block_type"]: e for e in catalog()}
    heading = entries["heading"]
    assert heading["label"] == "Heading"
    assert heading["category"] == "Basic"
    assert "fontSize" in heading["schema"]["properties"]


def test_unknown_block_raises():
    with pytest.raises(ValueError, match="Bloc inconnu"):
        get_block("carousel-3d")
    with pytest.raises(ValueError):
        create_node("carousel-3d")


def test_register_custom_block():
    class QuoteProps(BlockProps):
        author: str = "Anonyme"

    register_block(BlockDefinition("quote", "Quote", "Content", QuoteProps, content="…"))
    try:
        node = create_node("quote")
        assert node.type == "quote"
        assert node.props == {"author": "Anonyme"}
        assert node.content == "…"
    finally:
        _BLOCK_REGISTRY.pop("quote")


# ── Matérialisation ───────────────────────────────────────────────────────────

def test_heading_defaults():
    node = create_node("heading")
    assert node.type == "heading"
    assert node.content == "Heading Text"
    assert node.props["level"] == "h1"
    assert node.props["fontSize"] == "2.5rem"
    assert node.children == ()


def test_overrides_by_field_name_or_alias():
    assert create_node("heading", level="h2").props["level"] == "h2"
    assert create_node("heading", fontSize="3rem").props["fontSize"] == "3rem"


def test_fresh_id_per_node():
    assert create_node("text").id != create_node("text").id


def test_featured_products_defaults():
    props = create_node("featured-products").props
    assert props["limit"] == 6
    assert props["columns"] == 3
    assert props["showCartButton"] is True


def test_grid_defaults_have_no_children():
    node = create_node("grid")
    assert node.props == {"columns": 3, "rows": 3, "gap": "20px", "template": "custom"}
    assert node.children == ()


def test_column_defaults_one_section_per_column():
    node = create_node("column")
    assert node.props["columns"] == 2
    assert node.props["columnSizes"] == ["1fr", "1fr"]
    assert [c.type for c in node.children] == ["section", "section"]
    assert all(c.props["padding"] == "20px" for c in node.children)


def test_column_sizes_follow_column_count():
    node = create_node("column", columns=3)
    assert node.props["columnSizes"] == ["1fr", "1fr", "1fr"]
    assert len(node.children) == 3


def test_slider_has_three_banners():
    node = create_node("slider")
    assert [c.type for c in node.children] == ["banner"] * 3
    assert len({c.id for c in node.children}) == 3
    assert node.children[0].props["title"] == "Welcome to Our Store"
    assert node.children[0].props["height"] == "500px"
