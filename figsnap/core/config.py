from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from figsnap.config_schema import AppConfig


@dataclass
class RunConfig:
    """
    Runtime config (resolved from AppConfig).

    ``run_name`` may stay None until the dump is loaded; the page name then
    provides it. FIGSNAP_MAX_DEPTH (a number, or "none") replaces the
    configured max_depth; the CLI re-applies explicit depth flags after it.
    """
    input_path: Path
    run_name: Optional[str] = None
    output_root: Path = Path("output")
    output_file: str = "selection.json"

    max_depth: Optional[int] = 400
    indent: int = 2
    mixed_marker: str = "__mixed__"

    debug: bool = False
    preview: bool = False
    stdout: bool = False

    def __post_init__(self):
        env_depth = os.getenv("FIGSNAP_MAX_DEPTH", "").strip().lower()
        if env_depth.isdigit():
            self.max_depth = int(env_depth)
        elif env_depth in ("none", "off"):
            self.max_depth = None

    @classmethod
    def from_app(cls, app: AppConfig):
        if not app.io.input:
            raise ValueError("RunConfig requires an input path; set [io].input or pass --input")

        return cls(
            input_path=Path(app.io.input),
            run_name=app.io.run_name,
            output_root=Path(app.io.output_dir),
            output_file=app.io.output_file,
            max_depth=app.serializer.max_depth,
            indent=app.serializer.indent,
            mixed_marker=app.serializer.mixed_marker,
            debug=app.runtime.debug,
            preview=app.runtime.preview,
            stdout=app.runtime.stdout,
        )
