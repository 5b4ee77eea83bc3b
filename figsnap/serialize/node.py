from __future__ import annotations

import dataclasses
import math
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from figsnap.core.models import (
    MIXED,
    FRAME,
    INSTANCE,
    COMPONENT,
    COMPONENT_SET,
    TEXT,
    RECTANGLE,
    VECTOR,
)

COMMON_FIELDS = ("type", "name", "x", "y", "width", "height", "id", "visible")

LAYOUT_FIELDS = (
    "layoutMode",
    "primaryAxisSizingMode",
    "counterAxisSizingMode",
    "paddingLeft",
    "paddingRight",
    "paddingTop",
    "paddingBottom",
)

# Returned by the probes below for fields a node does not carry.
_MISSING = object()


class CyclicTreeError(ValueError):
    pass


class TreeDepthError(ValueError):
    pass


def read_field(node: Any, name: str) -> Any:
    """
    Optional-field probe. Nodes are either mappings (decoded dumps) or objects
    exposing attributes (host proxies); a field the node does not have comes
    back as ``_MISSING`` instead of raising.
    """
    if isinstance(node, Mapping):
        return node.get(name, _MISSING)
    return getattr(node, name, _MISSING)


def to_plain(value: Any) -> Any:
    """Convert a host attribute value to plain JSON data; MIXED anywhere is dropped."""
    if value is _MISSING or value is MIXED:
        return _MISSING
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Enum):
        return to_plain(value.value)
    if isinstance(value, BaseModel):
        return to_plain(value.model_dump())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_plain(dataclasses.asdict(value))
    if isinstance(value, Mapping):
        out = {}
        for k, v in value.items():
            plain = to_plain(v)
            if plain is not _MISSING:
                out[str(k)] = plain
        return out
    if isinstance(value, (list, tuple, set, frozenset)):
        return [p for p in (to_plain(v) for v in value) if p is not _MISSING]
    if hasattr(value, "__dict__"):
        return to_plain({k: v for k, v in vars(value).items() if not k.startswith("_")})
    return str(value)


def _copy(record: Dict[str, Any], node: Any, *names: str) -> None:
    for name in names:
        _put(record, name, read_field(node, name))


def _put(record: Dict[str, Any], key: str, value: Any) -> None:
    plain = to_plain(value)
    if plain is not _MISSING:
        record[key] = plain


# ---- type-specific field sets ----------------------------------------------

def _layout_fields(node: Any, record: Dict[str, Any]) -> None:
    # Some frame-like nodes have no auto-layout capability at all.
    if read_field(node, "layoutMode") is _MISSING:
        return
    _copy(record, node, *LAYOUT_FIELDS)


def _text_fields(node: Any, record: Dict[str, Any]) -> None:
    _copy(
        record,
        node,
        "characters",
        "fontSize",
        "fontName",
        "textAlignHorizontal",
        "textAlignVertical",
        "fills",
    )


def _rectangle_fields(node: Any, record: Dict[str, Any]) -> None:
    _copy(record, node, "cornerRadius", "fills", "strokes", "strokeWeight")


def _component_fields(node: Any, record: Dict[str, Any]) -> None:
    _put(record, "componentId", read_field(node, "id"))
    _put(record, "instanceName", read_field(node, "name"))


FieldExtractor = Callable[[Any, Dict[str, Any]], None]

FIELD_EXTRACTORS: Dict[str, Tuple[FieldExtractor, ...]] = {
    FRAME: (_layout_fields,),
    INSTANCE: (_layout_fields,),
    COMPONENT: (_layout_fields, _component_fields),
    COMPONENT_SET: (_component_fields,),
    TEXT: (_text_fields,),
    RECTANGLE: (_rectangle_fields,),
    VECTOR: (),
}


def _extractors_for(node_type: Any) -> Tuple[FieldExtractor, ...]:
    if not isinstance(node_type, str):
        return ()
    return FIELD_EXTRACTORS.get(node_type, ())


def _record(node: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {}
    _copy(record, node, *COMMON_FIELDS)
    for extract in _extractors_for(read_field(node, "type")):
        extract(node, record)
    return record


def _children_of(node: Any) -> List[Any]:
    kids = read_field(node, "children")
    if kids is _MISSING or kids is MIXED or kids is None:
        return []
    if isinstance(kids, (str, bytes, Mapping)):
        return []
    return list(kids)


_ENTER = "enter"
_EXIT = "exit"


def serialize_node(node: Any, *, max_depth: Optional[int] = None) -> Dict[str, Any]:
    """
    Serialize ``node`` and all its descendants into plain dicts.

    The walk uses an explicit stack, so tree depth is bounded by ``max_depth``
    (root is depth 0; ``None`` means no cap) rather than by the interpreter's
    recursion limit. A node reached again through its own descendants raises
    ``CyclicTreeError``.
    """
    root = _record(node)
    stack: List[Tuple[str, Any, Optional[Dict[str, Any]], int]] = [(_ENTER, node, root, 0)]
    on_path: set = set()

    while stack:
        action, current, record, depth = stack.pop()
        if action == _EXIT:
            on_path.discard(id(current))
            continue

        if max_depth is not None and depth > max_depth:
            raise TreeDepthError(
                f"Node tree is deeper than max_depth={max_depth} "
                f"(reached depth {depth} at node id={read_field(current, 'id')!r})."
            )
        if id(current) in on_path:
            raise CyclicTreeError(
                f"Node id={read_field(current, 'id')!r} is its own ancestor; "
                "the host selection must be an acyclic tree."
            )

        kids = _children_of(current)
        if not kids:
            continue

        child_records = [_record(child) for child in kids]
        record["children"] = child_records

        on_path.add(id(current))
        stack.append((_EXIT, current, None, depth))
        for child, child_record in reversed(list(zip(kids, child_records))):
            stack.append((_ENTER, child, child_record, depth + 1))

    return root
