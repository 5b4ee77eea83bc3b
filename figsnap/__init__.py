__version__ = "0.1.0"

from figsnap.core.models import MIXED, Mixed
from figsnap.serialize import (
    CyclicTreeError,
    TreeDepthError,
    build_selection,
    export_selection,
    selection_payload,
    serialize_node,
)

__all__ = [
    "MIXED",
    "Mixed",
    "CyclicTreeError",
    "TreeDepthError",
    "build_selection",
    "export_selection",
    "selection_payload",
    "serialize_node",
]
