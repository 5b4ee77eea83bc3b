from .node import (
    CyclicTreeError,
    TreeDepthError,
    FIELD_EXTRACTORS,
    read_field,
    serialize_node,
    to_plain,
)
from .selection import build_selection, export_selection, selection_payload
