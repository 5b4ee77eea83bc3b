from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from pathlib import Path
import json
import sys

# --- TOML loaders (kept simple + deterministic) ------------------------------
try:
    import tomllib as _toml  # Python 3.11+
except Exception:
    _toml = None
try:
    import toml as _toml_backport  # Python <=3.10
except Exception:
    _toml_backport = None


# =============================================================================
# CONFIG MODELS
# =============================================================================

class IOConfig(BaseModel):
    """
    Single I/O section.

    Outputs are written under <output_dir>/<run_name>/.
    """
    model_config = ConfigDict(validate_assignment=True)

    # Host selection dump (JSON)
    input: Optional[str] = None

    output_dir: str = "output"

    # Optional; derived from the page name (or input stem) if omitted
    run_name: Optional[str] = None

    output_file: str = "selection.json"


class SerializerConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    # None disables the depth cap; the dump loader decodes about 480 levels
    # at the default recursion limit
    max_depth: Optional[int] = Field(default=400, ge=0)
    indent: int = Field(default=2, ge=0)
    # String a dump uses in place of the host's mixed-value sentinel
    mixed_marker: str = "__mixed__"


class RuntimeConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug: bool = False
    preview: bool = False
    stdout: bool = False


class AppConfig(BaseModel):
    """
    Top-level app config.
    """
    model_config = ConfigDict(validate_assignment=True)

    io: IOConfig = IOConfig()
    serializer: SerializerConfig = SerializerConfig()
    runtime: RuntimeConfig = RuntimeConfig()


# =============================================================================
# LOAD & NORMALIZE
# =============================================================================

def _load_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")  # handles BOM transparently
    except UnicodeDecodeError as e:
        raise ValueError(
            f"Could not read {path} as UTF-8. Please re-save the file as UTF-8 (with or without BOM)."
        ) from e


def _warn(msg: str) -> None:
    print(f"⚠️ {msg}", file=sys.stderr)


def _derive_run_name(input_path: Path) -> str:
    return input_path.stem or "run"


def _apply_legacy_mappings(raw: dict) -> dict:
    """
    Backwards compatibility layer:
    - Map a flat top-level ``max_depth`` into [serializer].
    """
    if not isinstance(raw, dict):
        return {}

    if "max_depth" in raw:
        _warn("Top-level 'max_depth' detected; mapping to [serializer].max_depth.")
        serializer = raw.get("serializer", {}) or {}
        serializer.setdefault("max_depth", raw.pop("max_depth"))
        raw["serializer"] = serializer

    return raw


def _parse_config_text(text: str, suffix: str) -> dict:
    if suffix == ".json":
        return json.loads(text)
    if suffix == ".toml":
        if _toml:
            return _toml.loads(text)
        if _toml_backport:
            return _toml_backport.loads(text)
        raise RuntimeError("TOML requested but no tomllib/toml available. Install 'toml'.")
    # Default to JSON if unknown
    return json.loads(text)


def load_config(path_like: Optional[str]) -> AppConfig:
    raw: dict = {}
    if path_like:
        p = Path(path_like)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {path_like}")
        text = _load_text(p)
        try:
            raw = _parse_config_text(text, p.suffix.lower())
        except ValueError as e:
            raise ValueError(f"Could not parse config file {p}: {e}") from e

    raw = _apply_legacy_mappings(raw)
    return AppConfig(**(raw or {}))
