from __future__ import annotations

from pathlib import Path
from slugify import slugify


class ArtifactStore:
    """
    Workspace-aware artifact store.

    All outputs are written under <output_root>/<run_name>/...; the run name
    is slugified so page names like "Home / Hero 2" become safe directory names.
    """

    def __init__(self, output_root: Path, run_name: str):
        self.run_name = slugify(run_name) or "run"
        self.output_root = Path(output_root).resolve()
        self.workspace_dir = (self.output_root / self.run_name).resolve()
        self.workspace_dir.mkdir(parents=True, exist_ok=True)

    def write_text(self, rel_path: str, text: str) -> Path:
        """
        Writes under workspace dir, keeping path relative.

        Example:
          write_text("selection.json", "{...}")
        """
        p = self.workspace_dir / rel_path
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return p
