from __future__ import annotations
from typing import Any, Dict, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel

from figsnap.serialize import export_selection


class ExportMessage(BaseModel):
    """Message posted to the UI with the JSON snapshot (or the error payload)."""
    type: Literal["export"] = "export"
    data: str


class CloseMessage(BaseModel):
    type: Literal["close"] = "close"


class HostAdapter:
    """What the bridge needs from a host: the current page, its selection, and the UI channel."""
    page_name: str = ""
    page_id: str = ""

    @property
    def selection(self) -> Sequence[Any]: ...
    def post_message(self, message: Dict[str, Any]) -> None: ...
    def close_plugin(self) -> None: ...


class PluginBridge:
    """
    Plugin lifecycle around the serializer: export the current selection once,
    then wait for the UI to ask for teardown.
    """

    def __init__(self, host: HostAdapter, *, max_depth: Optional[int] = None, indent: int = 2):
        self.host = host
        self.max_depth = max_depth
        self.indent = indent

    def run_export(self) -> ExportMessage:
        data = export_selection(
            self.host.selection,
            self.host.page_name,
            self.host.page_id,
            max_depth=self.max_depth,
            indent=self.indent,
        )
        msg = ExportMessage(data=data)
        self.host.post_message(msg.model_dump())
        return msg

    def on_message(self, raw: Any) -> bool:
        """Close the plugin on a ``close`` message; anything else is ignored."""
        if isinstance(raw, Mapping):
            msg_type = raw.get("type")
        else:
            msg_type = getattr(raw, "type", None)
        if msg_type != CloseMessage().type:
            return False
        self.host.close_plugin()
        return True
