from __future__ import annotations

import argparse
import json
import sys
from typing import Optional

from rich.console import Console

from figsnap import __version__
from figsnap.config_schema import _derive_run_name, load_config, AppConfig
from figsnap.core.config import RunConfig
from figsnap.core.artifacts import ArtifactStore
from figsnap.host import PluginBridge, load_dump
from figsnap.utils.tree_helper import count_nodes, render_selection


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="figsnap: export a scene-graph selection dump as a JSON snapshot."
    )
    p.add_argument("--version", action="version", version=f"figsnap {__version__}")
    p.add_argument("--config", type=str, help="Path to config file (.toml/.json)")

    # Common overrides
    p.add_argument("--input", dest="input_override", type=str, help="Override [io].input (selection dump JSON)")
    p.add_argument("--run-name", dest="run_name_override", type=str, help="Override [io].run_name")
    p.add_argument("--output-dir", type=str, help="Override [io].output_dir")

    # Serializer
    p.add_argument("--max-depth", type=int, default=None, help="Override [serializer].max_depth (wins over FIGSNAP_MAX_DEPTH)")
    p.add_argument("--no-depth-limit", action="store_true", help="Disable the tree depth cap (wins over FIGSNAP_MAX_DEPTH)")

    # Runtime/debug
    p.add_argument("--stdout", action="store_true", help="Print the JSON snapshot instead of writing it")
    p.add_argument("--preview", action="store_true", help="Show a tree preview of the snapshot")
    p.add_argument("--debug", action="store_true", help="Enable verbose debug")
    return p


def apply_overrides(app: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.input_override:
        app.io.input = args.input_override
    if args.run_name_override:
        app.io.run_name = args.run_name_override
    if args.output_dir:
        app.io.output_dir = args.output_dir
    if args.max_depth is not None:
        app.serializer.max_depth = args.max_depth
    if args.no_depth_limit:
        app.serializer.max_depth = None
    if args.stdout:
        app.runtime.stdout = True
    if args.preview:
        app.runtime.preview = True
    if args.debug:
        app.runtime.debug = True
    return app


def run(cfg: RunConfig, console: Optional[Console] = None) -> int:
    console = console or Console(stderr=True)

    host = load_dump(str(cfg.input_path), mixed_marker=cfg.mixed_marker)
    bridge = PluginBridge(host, max_depth=cfg.max_depth, indent=cfg.indent)
    msg = bridge.run_export()
    payload = json.loads(msg.data)

    if cfg.debug or cfg.preview:
        console.print(render_selection(payload))

    if cfg.stdout:
        print(msg.data)
    else:
        run_name = cfg.run_name or host.page_name or _derive_run_name(cfg.input_path)
        store = ArtifactStore(output_root=cfg.output_root, run_name=run_name)
        out_path = store.write_text(cfg.output_file, msg.data + "\n")
        console.log(f"✅ selection snapshot saved to: {out_path}")

    if "error" in payload:
        console.log(f"⚠️ {payload['error']}")
        return 0

    if cfg.debug:
        console.log(
            f"[dim]{len(payload['selectedNodes'])} root(s), "
            f"{count_nodes(payload['selectedNodes'])} node(s) in total[/]"
        )
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console(stderr=True)

    try:
        app = load_config(args.config)
        app = apply_overrides(app, args)
        if not app.io.input:
            parser.print_help()
            sys.exit(0)
        cfg = RunConfig.from_app(app)
        # explicit flags beat FIGSNAP_MAX_DEPTH
        if args.no_depth_limit:
            cfg.max_depth = None
        elif args.max_depth is not None:
            cfg.max_depth = args.max_depth
        code = run(cfg, console=console)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        if args.debug:
            console.print_exception()
        else:
            console.print(f"[red]error:[/] {e}")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
