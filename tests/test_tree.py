"""Tests des mutations conscientes du layout — grilles et blocs colonnes."""
import pytest

from page_builder.blocks import create_node
from page_builder.core.schemas import COLUMN_SIZES_KEY, GRID_CELL_KEY, Node
from page_builder.engine.mutations import find_node
from page_builder.layout.tree import delete_node, insert_node, update_node


# ── Helpers ───────────────────────────────────────────────────────────────────

def spots(grid):
    return [(c.props[GRID_CELL_KEY]["columnStart"], c.props[GRID_CELL_KEY]["rowStart"]) for c in grid.children]


def assert_columns_aligned(node):
    assert len(node.props[COLUMN_SIZES_KEY]) == len(node.children) == node.props["columns"]


def filled_grid(count, **props):
    roots = (create_node("grid", **props),)
    grid_id = roots[0].id
    for _ in range(count):
        roots = insert_node(roots, create_node("text"), grid_id)
    return roots, grid_id


# ── Grille ────────────────────────────────────────────────────────────────────

def test_insert_into_grid_takes_next_free_slot():
    roots, grid_id = filled_grid(4, rows=2)
    assert spots(find_node(roots, grid_id)) == [(1, 1), (2, 1), (3, 1), (1, 2)]


def test_insert_into_full_grid_grows_rows():
    roots, grid_id = filled_grid(2, columns=2, rows=1)
    roots = insert_node(roots, create_node("text"), grid_id)
    grid = find_node(roots, grid_id)
    assert grid.props["rows"] == 2
    assert spots(grid)[-1] == (1, 2)


def test_delete_grid_child_does_not_repack():
    roots, grid_id = filled_grid(3, rows=2)
    first = find_node(roots, grid_id).children[0].id
    roots = delete_node(roots, first)
    assert spots(find_node(roots, grid_id)) == [(2, 1), (3, 1)]


@pytest.mark.parametrize("columns", [1, 2])
def test_grid_columns_patch_reclamps_cells(columns):
    roots, grid_id = filled_grid(3, columns=3, rows=1)
    roots = update_node(roots, grid_id, {"props": {"columns": columns}})
    grid = find_node(roots, grid_id)
    for child in grid.children:
        cell = child.props[GRID_CELL_KEY]
        assert cell["columnStart"] + cell["columnSpan"] - 1 <= columns


def test_grid_rows_patch_reclamps_cells():
    roots, grid_id = filled_grid(6, columns=3, rows=2)
    roots = update_node(roots, grid_id, {"props": {"rows": 1}})
    assert all(row == 1 for _, row in spots(find_node(roots, grid_id)))


def test_grid_gap_patch_leaves_cells():
    roots, grid_id = filled_grid(2)
    before = find_node(roots, grid_id).children
    roots = update_node(roots, grid_id, {"props": {"gap": "8px"}})
    assert find_node(roots, grid_id).children == before


# ── Colonnes ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("count", [1, 3, 4])
def test_columns_patch_keeps_invariant(count):
    column = create_node("column")
    roots = update_node((column,), column.id, {"props": {"columns": count}})
    node = roots[0]
    assert node.props["columns"] == count
    assert_columns_aligned(node)


def test_columns_shrink_keeps_leading_children():
    column = create_node("column")
    roots = update_node((column,), column.id, {"props": {"columns": 1}})
    assert roots[0].children == column.children[:1]


def test_column_sizes_patch_is_normalized():
    column = create_node("column")
    roots = update_node((column,), column.id, {"props": {COLUMN_SIZES_KEY: ["0.1fr"]}})
    assert roots[0].props[COLUMN_SIZES_KEY] == ["0.5fr", "1fr"]
    assert_columns_aligned(roots[0])


def test_unreadable_column_count_follows_children():
    column = create_node("column")
    roots = update_node((column,), column.id, {"props": {"columns": "abc"}})
    assert roots[0].props["columns"] == 2
    assert_columns_aligned(roots[0])


def test_insert_into_columns_adds_a_column():
    column = create_node("column")
    roots = insert_node((column,), create_node("text"), column.id)
    assert roots[0].props["columns"] == 3
    assert_columns_aligned(roots[0])


def test_delete_column_child_removes_its_size():
    column = create_node("column", columns=3, column_sizes=["2fr", "1fr", "1fr"])
    roots = delete_node((column,), column.children[0].id)
    assert roots[0].props[COLUMN_SIZES_KEY] == ["1fr", "1fr"]
    assert_columns_aligned(roots[0])


def test_delete_last_column_child_leaves_empty_section():
    column = create_node("column", columns=1, column_sizes=["1fr"])
    only = column.children[0].id
    roots = delete_node((column,), only)
    node = roots[0]
    assert_columns_aligned(node)
    assert node.children[0].id != only
    assert node.children[0].type == "section"


# ── Autres noeuds ─────────────────────────────────────────────────────────────

def test_plain_nodes_use_engine_semantics():
    section = Node(id="s", type="section", children=(Node(id="t", type="text"),))
    roots = insert_node((section,), Node(id="u", type="text"), "s", 0)
    assert [c.id for c in roots[0].children] == ["u", "t"]
    roots = delete_node(roots, "t")
    assert [c.id for c in roots[0].children] == ["u"]
    roots = update_node(roots, "u", {"props": {"columns": 4}})
    assert find_node(roots, "u").props == {"columns": 4}


def test_unknown_ids_are_noops():
    roots = (Node(id="s", type="section"),)
    assert insert_node(roots, Node(id="u", type="text"), "missing") == roots
    assert delete_node(roots, "missing") == roots
    assert update_node(roots, "missing", {"props": {"a": 1}}) == roots
