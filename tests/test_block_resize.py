"""Tests du resize libre d'un bloc."""
from page_builder.core.schemas import Node
from page_builder.engine.mutations import find_node
from page_builder.layout.blocks import BlockResize


def test_bottom_right_follows_pointer():
    gesture = BlockResize("a", "bottom-right", 0, 0, start_width=200, start_height=100)
    assert gesture.move(50, 30) == {"width": 250, "height": 130, "left": 0, "top": 0}
    assert gesture.release() == {"width": "250px", "height": "130px"}


def test_minimum_size():
    gesture = BlockResize("a", "bottom-right", 0, 0, start_width=200, start_height=100)
    box = gesture.move(-500, -500)
    assert box["width"] == 50
    assert box["height"] == 50
    assert gesture.release() == {"width": "50px"}


def test_left_handle_moves_offset():
    gesture = BlockResize("a", "left", 100, 0, start_width=200, start_height=100)
    gesture.move(140, 0)
    assert gesture.release() == {"width": "160px", "height": "100px", "left": "40px"}


def test_commit_merges_style():
    roots = (Node(id="a", type="image", style={"border": "1px solid"}),)
    gesture = BlockResize("a", "right", 0, 0, start_width=300, start_height=200)
    gesture.move(20, 0)
    roots = gesture.commit(roots)
    assert find_node(roots, "a").style == {"border": "1px solid", "width": "320px", "height": "200px"}
