"""Tests du moteur de mutation — arbre immuable, copie de chemin."""
import random

import pytest

from page_builder.blocks import create_node
from page_builder.core.schemas import Node
from page_builder.engine.mutations import (
    collect_ids,
    delete,
    duplicate,
    duplicate_subtree,
    find_node,
    find_parent,
    insert,
    insert_child,
    iter_nodes,
    move_down,
    move_to_gap,
    move_up,
    reorder,
    update,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def n(node_id, *children, type="section", **props):
    return Node(id=node_id, type=type, props=props, children=children)


ROOTS = (n("a", n("a1"), n("a2", n("a2x"))), n("b"), n("c"))


def root_ids(roots):
    return [node.id for node in roots]


# ── Requêtes ──────────────────────────────────────────────────────────────────

def test_find_node_and_parent():
    assert find_node(ROOTS, "a2x").id == "a2x"
    assert find_node(ROOTS, "zzz") is None
    assert find_parent(ROOTS, "a2x").id == "a2"
    assert find_parent(ROOTS, "b") is None


def test_iter_nodes_render_order():
    assert collect_ids(ROOTS) == ["a", "a1", "a2", "a2x", "b", "c"]


# ── insert ────────────────────────────────────────────────────────────────────

def test_insert_appends_by_default():
    roots = insert(ROOTS, n("z"))
    assert root_ids(roots) == ["a", "b", "c", "z"]
    assert root_ids(ROOTS) == ["a", "b", "c"]


def test_insert_index_is_clamped():
    assert root_ids(insert(ROOTS, n("z"), 99))[-1] == "z"
    assert root_ids(insert(ROOTS, n("z"), -5))[0] == "z"
    assert root_ids(insert(ROOTS, n("z"), 1)) == ["a", "z", "b", "c"]


def test_insert_reassigns_colliding_ids():
    roots = insert(ROOTS, n("b", n("a1")))
    ids = collect_ids(roots)
    assert len(ids) == len(set(ids)) == 8
    assert roots[-1].id != "b"


def test_insert_child_shares_untouched_subtrees():
    roots = insert_child(ROOTS, "a2", n("z"), 0)
    assert [c.id for c in find_node(roots, "a2").children] == ["z", "a2x"]
    assert roots[0] is not ROOTS[0]
    assert roots[0].children[0] is ROOTS[0].children[0]
    assert roots[1] is ROOTS[1]
    assert roots[2] is ROOTS[2]


def test_insert_child_unknown_parent_is_noop():
    assert insert_child(ROOTS, "missing", n("z")) is ROOTS


# ── update ────────────────────────────────────────────────────────────────────

def test_update_merges_props():
    roots = update(ROOTS, "a2x", {"props": {"color": "red"}})
    roots = update(roots, "a2x", {"props": {"size": 2}})
    assert find_node(roots, "a2x").props == {"color": "red", "size": 2}
    assert find_node(ROOTS, "a2x").props == {}


def test_update_none_removes_key():
    roots = update(ROOTS, "b", {"style": {"width": "100px", "height": "20px"}})
    roots = update(roots, "b", {"style": {"height": None}})
    assert find_node(roots, "b").style == {"width": "100px"}


def test_update_content_and_class_name():
    roots = update(ROOTS, "c", {"content": "Bonjour", "className": "lead"})
    node = find_node(roots, "c")
    assert node.content == "Bonjour"
    assert node.class_name == "lead"


def test_update_replaces_children():
    roots = update(ROOTS, "b", {"children": [n("b1")]})
    assert collect_ids(roots) == ["a", "a1", "a2", "a2x", "b", "b1", "c"]


def test_update_rejects_unknown_keys():
    with pytest.raises(ValueError):
        update(ROOTS, "b", {"id": "other"})


def test_update_unknown_id_is_noop():
    assert update(ROOTS, "missing", {"props": {"x": 1}}) is ROOTS


# ── delete ────────────────────────────────────────────────────────────────────

def test_delete_is_recursive():
    roots = delete(ROOTS, "a")
    assert collect_ids(roots) == ["b", "c"]


def test_delete_nested():
    roots = delete(ROOTS, "a2")
    assert collect_ids(roots) == ["a", "a1", "b", "c"]


def test_delete_unknown_is_noop():
    assert delete(ROOTS, "missing") is ROOTS


# ── duplicate ─────────────────────────────────────────────────────────────────

def test_duplicate_is_deep_and_fresh():
    roots = duplicate(ROOTS, "a")
    assert root_ids(roots)[0] == "a"
    assert root_ids(roots)[2:] == ["b", "c"]
    clone = roots[1]
    clone_ids = [node.id for node in iter_nodes((clone,))]
    assert len(clone_ids) == 4
    assert not set(clone_ids) & set(collect_ids(ROOTS))
    ids = collect_ids(roots)
    assert len(ids) == len(set(ids))
    assert [node.type for node in iter_nodes((clone,))] == [node.type for node in iter_nodes((ROOTS[0],))]


def test_duplicate_nested_stays_at_same_level():
    roots = duplicate(ROOTS, "a2")
    a = find_node(roots, "a")
    assert len(a.children) == 3
    assert a.children[1].id == "a2"
    assert a.children[2].children[0].id != "a2x"


def test_duplicate_copies_props():
    roots = (n("x", items=[1, 2]),)
    new_roots, clone = duplicate_subtree(roots, "x")
    assert clone.props == {"items": [1, 2]}
    assert clone.props["items"] is not roots[0].props["items"]
    assert new_roots[1] is clone


def test_duplicate_unknown_is_noop():
    roots, clone = duplicate_subtree(ROOTS, "missing")
    assert roots is ROOTS
    assert clone is None


# ── reorder / moves ───────────────────────────────────────────────────────────

def test_reorder_is_stable():
    assert root_ids(reorder(ROOTS, 0, 2)) == ["b", "c", "a"]
    assert root_ids(reorder(ROOTS, 2, 0)) == ["c", "a", "b"]


def test_reorder_noop_cases():
    assert reorder(ROOTS, 1, 1) is ROOTS
    assert reorder(ROOTS, 5, 0) is ROOTS
    assert reorder(ROOTS, 0, -1) is ROOTS


def test_move_up_and_down():
    assert root_ids(move_up(ROOTS, "b")) == ["b", "a", "c"]
    assert root_ids(move_down(ROOTS, "b")) == ["a", "c", "b"]


def test_moves_at_boundary_are_noop():
    assert move_up(ROOTS, "a") is ROOTS
    assert move_down(ROOTS, "c") is ROOTS
    assert move_up(ROOTS, "a1") is ROOTS


def test_move_to_gap_means_before_current_node():
    assert root_ids(move_to_gap(ROOTS, "a", 2)) == ["b", "a", "c"]
    assert root_ids(move_to_gap(ROOTS, "a", 3)) == ["b", "c", "a"]
    assert root_ids(move_to_gap(ROOTS, "c", 0)) == ["c", "a", "b"]


def test_move_to_own_gap_is_noop():
    assert move_to_gap(ROOTS, "a", 0) is ROOTS
    assert move_to_gap(ROOTS, "a", 1) is ROOTS


# ── Propriétés ────────────────────────────────────────────────────────────────

def test_ids_stay_unique_across_random_edits():
    rng = random.Random(7)
    roots = ()
    for _ in range(200):
        ids = collect_ids(roots)
        op = rng.choice(["insert", "insert_child", "duplicate", "delete", "move"])
        if op == "insert" or not ids:
            roots = insert(roots, create_node(rng.choice(["heading", "column", "slider"])), rng.randint(0, len(roots)))
        elif op == "insert_child":
            roots = insert_child(roots, rng.choice(ids), create_node("text"))
        elif op == "duplicate":
            roots = duplicate(roots, rng.choice(ids))
        elif op == "delete":
            roots = delete(roots, rng.choice(ids))
        else:
            roots = move_to_gap(roots, rng.choice(ids), rng.randint(0, len(roots)))
        ids = collect_ids(roots)
        assert len(ids) == len(set(ids))


def test_deleted_subtree_leaves_no_descendant():
    roots = duplicate(ROOTS, "a2")
    target = find_node(roots, "a")
    doomed = {node.id for node in iter_nodes((target,))}
    assert not doomed & set(collect_ids(delete(roots, "a")))
