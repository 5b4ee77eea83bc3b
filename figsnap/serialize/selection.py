from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Optional, Union

from figsnap.core.models import EmptySelection, Page, SelectionEnvelope
from .node import TreeDepthError, serialize_node


def build_selection(
    roots: Optional[Iterable[Any]],
    page_name: str,
    page_id: str,
    *,
    max_depth: Optional[int] = None,
) -> Union[SelectionEnvelope, EmptySelection]:
    """Snapshot every root in order; an empty selection skips the walk entirely."""
    roots = list(roots or [])
    if not roots:
        return EmptySelection()
    return SelectionEnvelope(
        page=Page(name=page_name, id=page_id),
        selected_nodes=[serialize_node(root, max_depth=max_depth) for root in roots],
    )


def selection_payload(
    roots: Optional[Iterable[Any]],
    page_name: str,
    page_id: str,
    *,
    max_depth: Optional[int] = None,
) -> Dict[str, Any]:
    return build_selection(roots, page_name, page_id, max_depth=max_depth).to_dict()


def export_selection(
    roots: Optional[Iterable[Any]],
    page_name: str,
    page_id: str,
    *,
    max_depth: Optional[int] = None,
    indent: int = 2,
) -> str:
    payload = selection_payload(roots, page_name, page_id, max_depth=max_depth)
    try:
        return json.dumps(payload, indent=indent, ensure_ascii=False)
    except RecursionError as e:
        # the indenting encoder recurses about twice per node level
        raise TreeDepthError(
            "Snapshot is nested too deeply to render as JSON; "
            "lower max_depth or raise the interpreter recursion limit."
        ) from e
