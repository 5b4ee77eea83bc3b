from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Mixed(Enum):
    """Value a host reports for an attribute that differs across a mixed selection."""
    MIXED = "mixed"

    def __repr__(self) -> str:
        return "MIXED"


MIXED = Mixed.MIXED

EMPTY_SELECTION_ERROR = "No elements selected"

# Node type discriminants the serializer knows about; the set is open.
FRAME = "FRAME"
INSTANCE = "INSTANCE"
COMPONENT = "COMPONENT"
COMPONENT_SET = "COMPONENT_SET"
TEXT = "TEXT"
RECTANGLE = "RECTANGLE"
VECTOR = "VECTOR"


@dataclass
class Page:
    name: str
    id: str


@dataclass
class SelectionEnvelope:
    page: Page
    selected_nodes: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pageName": self.page.name,
            "pageId": self.page.id,
            "selectedNodes": self.selected_nodes,
        }


@dataclass
class EmptySelection:
    error: str = EMPTY_SELECTION_ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error}
