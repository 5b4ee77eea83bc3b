from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _no_depth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FIGSNAP_MAX_DEPTH", raising=False)


def node(type_: str, id_: str, name: str = "", children=None, **extra):
    data = {
        "type": type_,
        "id": id_,
        "name": name or id_,
        "x": 0,
        "y": 0,
        "width": 10,
        "height": 10,
        "visible": True,
    }
    data.update(extra)
    if children is not None:
        data["children"] = children
    return data
