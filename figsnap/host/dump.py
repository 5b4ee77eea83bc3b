from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List
import json
import sys

from figsnap.core.models import MIXED
from .bridge import HostAdapter


@dataclass
class DumpHost(HostAdapter):
    """
    Host backed by a JSON dump of a selection:

        {"pageName": "...", "pageId": "...", "selection": [node, ...]}

    Posted messages are kept in ``messages``; ``closed`` flips on close_plugin().

    Any string value equal to the mixed marker is read as MIXED, including
    text content such as ``characters``. Pick a marker that cannot occur as
    real content in the dumped file.
    """
    page_name: str = ""
    page_id: str = ""
    nodes: List[Any] = field(default_factory=list)
    messages: List[Dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    @property
    def selection(self) -> List[Any]:
        return self.nodes

    def post_message(self, message: Dict[str, Any]) -> None:
        self.messages.append(message)

    def close_plugin(self) -> None:
        self.closed = True


def decodable_node_depth() -> int:
    """
    Deepest node chain the JSON decoder can read at the current recursion
    limit: each level costs one object and one ``children`` array.
    """
    return sys.getrecursionlimit() // 2 - 20


def _mixed_hook(marker: str):
    def swap(value: Any) -> Any:
        if isinstance(value, str) and value == marker:
            return MIXED
        if isinstance(value, list):
            return [swap(v) for v in value]
        return value

    # object_hook runs bottom-up on every decoded object, so nested nodes and
    # paints are covered without walking the tree again.
    def hook(obj: Dict[str, Any]) -> Dict[str, Any]:
        return {k: swap(v) for k, v in obj.items()}

    return hook


def parse_dump(text: str, *, mixed_marker: str = "__mixed__") -> DumpHost:
    try:
        raw = json.loads(text, object_hook=_mixed_hook(mixed_marker))
    except RecursionError as e:
        raise ValueError(
            "Selection dump is nested too deeply for the JSON decoder "
            f"(recursion limit {sys.getrecursionlimit()}, about {decodable_node_depth()} node levels)."
        ) from e
    if not isinstance(raw, dict):
        raise ValueError("Selection dump must be a JSON object with a 'selection' list.")

    nodes = raw.get("selection", raw.get("selectedNodes", []))
    if nodes is None:
        nodes = []
    if not isinstance(nodes, list):
        raise ValueError(f"'selection' must be a list of nodes, got {type(nodes).__name__}.")

    return DumpHost(
        page_name=str(raw.get("pageName") or ""),
        page_id=str(raw.get("pageId") or ""),
        nodes=nodes,
    )


def load_dump(path_like: str, *, mixed_marker: str = "__mixed__") -> DumpHost:
    p = Path(path_like)
    if not p.exists():
        raise FileNotFoundError(f"Selection dump not found: {path_like}")
    if p.is_dir():
        raise ValueError(f"Selection dump must be a file: {path_like}")
    try:
        text = p.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValueError(f"Could not read {p} as UTF-8.") from e
    except OSError as e:
        raise ValueError(f"Could not read selection dump {p}: {e}") from e
    try:
        return parse_dump(text, mixed_marker=mixed_marker)
    except json.JSONDecodeError as e:
        raise ValueError(f"Selection dump {p} is not valid JSON: {e}") from e
