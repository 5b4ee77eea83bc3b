from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

from figsnap import MIXED, CyclicTreeError, TreeDepthError, serialize_node
from figsnap.utils.tree_helper import count_nodes
from conftest import node


def _input_count(n) -> int:
    return 1 + sum(_input_count(c) for c in n.get("children", []) or [])


def test_common_fields_in_order():
    out = serialize_node(node("GROUP", "1:1", name="Group", x=5, y=6, width=7, height=8))

    assert list(out) == ["type", "name", "x", "y", "width", "height", "id", "visible"]
    assert out == {
        "type": "GROUP",
        "name": "Group",
        "x": 5,
        "y": 6,
        "width": 7,
        "height": 8,
        "id": "1:1",
        "visible": True,
    }


def test_leaf_and_empty_children_have_no_children_key():
    assert "children" not in serialize_node(node("FRAME", "1:1"))
    assert "children" not in serialize_node(node("FRAME", "1:2", children=[]))


def test_rectangle_with_mixed_fills():
    rect = node("RECTANGLE", "2:1", cornerRadius=4, fills=MIXED, strokes=[], strokeWeight=1)

    out = serialize_node(rect)

    assert out["cornerRadius"] == 4
    assert "fills" not in out
    assert "children" not in out
    assert out["strokes"] == []
    assert out["strokeWeight"] == 1


def test_rectangle_mixed_stroke_weight_and_radius_omitted():
    rect = node("RECTANGLE", "2:2", cornerRadius=MIXED, strokes=[{"type": "SOLID"}], strokeWeight=MIXED)

    out = serialize_node(rect)

    assert "cornerRadius" not in out
    assert "strokeWeight" not in out
    assert out["strokes"] == [{"type": "SOLID"}]


def test_frame_with_two_text_children_keeps_order():
    frame = node(
        "FRAME",
        "3:1",
        children=[
            node("TEXT", "3:2", characters="Hello"),
            node("TEXT", "3:3", characters="World"),
        ],
    )

    out = serialize_node(frame)

    assert len(out["children"]) == 2
    assert [c["id"] for c in out["children"]] == ["3:2", "3:3"]
    assert [c["characters"] for c in out["children"]] == ["Hello", "World"]


def test_text_fields_and_mixed_omission():
    text = node(
        "TEXT",
        "4:1",
        characters="Mixed styles",
        fontSize=MIXED,
        fontName=MIXED,
        fills=[{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0}}],
        textAlignHorizontal="LEFT",
        textAlignVertical="TOP",
    )

    out = serialize_node(text)

    assert out["characters"] == "Mixed styles"
    assert "fontSize" not in out
    assert "fontName" not in out
    assert out["fills"][0]["color"] == {"r": 1, "g": 0, "b": 0}
    assert out["textAlignHorizontal"] == "LEFT"
    assert out["textAlignVertical"] == "TOP"


def test_text_font_fields_copied_when_uniform():
    out = serialize_node(node("TEXT", "4:2", characters="", fontSize=12, fontName={"family": "Inter", "style": "Bold"}))

    assert out["characters"] == ""
    assert out["fontSize"] == 12
    assert out["fontName"] == {"family": "Inter", "style": "Bold"}


def test_frame_layout_fields_when_capable():
    frame = node(
        "FRAME",
        "5:1",
        layoutMode="VERTICAL",
        primaryAxisSizingMode="AUTO",
        counterAxisSizingMode="FIXED",
        paddingLeft=1,
        paddingRight=2,
        paddingTop=3,
        paddingBottom=4,
    )

    out = serialize_node(frame)

    assert out["layoutMode"] == "VERTICAL"
    assert out["primaryAxisSizingMode"] == "AUTO"
    assert out["counterAxisSizingMode"] == "FIXED"
    assert (out["paddingLeft"], out["paddingRight"], out["paddingTop"], out["paddingBottom"]) == (1, 2, 3, 4)


def test_frame_without_layout_capability_omits_layout_fields():
    out = serialize_node(node("INSTANCE", "5:2", paddingLeft=8))

    assert "layoutMode" not in out
    assert "paddingLeft" not in out


def test_component_set_identity_fields():
    out = serialize_node(node("COMPONENT_SET", "123:4", name="Button"))

    assert out["componentId"] == "123:4"
    assert out["instanceName"] == "Button"
    assert "layoutMode" not in out


def test_component_gets_layout_and_identity():
    out = serialize_node(node("COMPONENT", "9:9", name="Card", layoutMode="NONE"))

    assert out["componentId"] == "9:9"
    assert out["instanceName"] == "Card"
    assert out["layoutMode"] == "NONE"


@pytest.mark.parametrize("type_", ["VECTOR", "ELLIPSE", "SOMETHING_NEW"])
def test_vector_and_unknown_types_emit_common_fields_only(type_):
    out = serialize_node(node(type_, "6:1", fills=[{"type": "SOLID"}], characters="x"))

    assert set(out) == {"type", "name", "x", "y", "width", "height", "id", "visible"}


def test_mixed_common_field_is_omitted():
    out = serialize_node(node("GROUP", "6:2", width=MIXED))

    assert "width" not in out
    assert out["height"] == 10


def test_attribute_nodes_with_missing_fields():
    @dataclass
    class Paint:
        type: str
        opacity: float

    child = SimpleNamespace(type="TEXT", id="7:2", name="Label", x=1, y=2, width=3, height=4, visible=False, characters="Hi")
    rect = SimpleNamespace(
        type="RECTANGLE", id="7:3", name="Box", x=0, y=0, width=1, height=1, visible=True,
        fills=(Paint("SOLID", 0.5),),
    )
    root = SimpleNamespace(type="FRAME", id="7:1", name="Root", x=0, y=0, width=9, height=9, visible=True, children=[child, rect])

    out = serialize_node(root)

    assert "layoutMode" not in out
    text = out["children"][0]
    assert text["characters"] == "Hi"
    assert text["visible"] is False
    assert "fontSize" not in text
    assert out["children"][1]["fills"] == [{"type": "SOLID", "opacity": 0.5}]
    assert "strokes" not in out["children"][1]


def test_non_finite_floats_become_null():
    out = serialize_node(node("RECTANGLE", "8:1", cornerRadius=float("nan")))

    assert out["cornerRadius"] is None


def test_nested_mixed_inside_paints_is_dropped():
    out = serialize_node(node("RECTANGLE", "8:2", strokes=[{"type": "SOLID", "opacity": MIXED}, MIXED]))

    assert out["strokes"] == [{"type": "SOLID"}]


def _forest():
    return node(
        "FRAME",
        "r",
        children=[
            node("GROUP", "a", children=[node("TEXT", "a1", characters="1"), node("VECTOR", "a2")]),
            node("RECTANGLE", "b", children=[]),
            node("FRAME", "c", children=[node("GROUP", "c1", children=[node("TEXT", "c11", characters="deep")])]),
        ],
    )


def test_node_count_and_order_preserved():
    tree = _forest()

    out = serialize_node(tree)

    assert count_nodes([out]) == _input_count(tree) == 8
    assert [c["id"] for c in out["children"]] == ["a", "b", "c"]
    assert [c["id"] for c in out["children"][0]["children"]] == ["a1", "a2"]
    assert "children" not in out["children"][1]
    assert out["children"][2]["children"][0]["children"][0]["characters"] == "deep"


def test_serializing_twice_is_identical_and_input_untouched():
    tree = _forest()
    before = copy.deepcopy(tree)

    first = serialize_node(tree)
    second = serialize_node(tree)

    assert first == second
    assert tree == before


def test_cycle_raises():
    root = node("FRAME", "1", children=[])
    child = node("GROUP", "2", children=[root])
    root["children"].append(child)

    with pytest.raises(CyclicTreeError):
        serialize_node(root)


def test_shared_subtree_is_not_a_cycle():
    shared = node("TEXT", "s", characters="x")
    out = serialize_node(node("FRAME", "1", children=[shared, shared]))

    assert [c["id"] for c in out["children"]] == ["s", "s"]


def _chain(depth: int):
    root = node("GROUP", "0")
    current = root
    for i in range(1, depth + 1):
        nxt = node("GROUP", str(i))
        current["children"] = [nxt]
        current = nxt
    return root


def test_depth_cap():
    serialize_node(_chain(3), max_depth=3)
    with pytest.raises(TreeDepthError):
        serialize_node(_chain(4), max_depth=3)


def test_deep_chain_without_cap():
    out = serialize_node(_chain(5000))

    assert count_nodes([out]) == 5001


class Align(Enum):
    LEFT = "LEFT"


class FontName(BaseModel):
    family: str
    style: str


class SolidPaint(BaseModel):
    type: str = "SOLID"
    opacity: float = 1.0


def test_enum_and_model_values_become_plain_json():
    text = node(
        "TEXT",
        "4:3",
        characters="Hi",
        textAlignHorizontal=Align.LEFT,
        fontName=FontName(family="Inter", style="Regular"),
        fills=[SolidPaint(opacity=0.25)],
    )

    out = serialize_node(text)

    assert out["textAlignHorizontal"] == "LEFT"
    assert out["fontName"] == {"family": "Inter", "style": "Regular"}
    assert out["fills"] == [{"type": "SOLID", "opacity": 0.25}]
