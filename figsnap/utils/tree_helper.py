from typing import Any, Dict, Iterable, List, Optional, Tuple
from rich.tree import Tree as RichTree


def count_nodes(records: Iterable[Dict[str, Any]]) -> int:
    """Number of serialized nodes in a forest, at every depth."""
    stack: List[Dict[str, Any]] = list(records)
    total = 0
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.get("children", []) or [])
    return total


def _label(node: Dict[str, Any]) -> str:
    label = f"[bold]{node.get('name', '')}[/] [cyan]{node.get('type', '?')}[/]"
    if "id" in node:
        label += f" ([dim]{node['id']}[/])"
    if node.get("visible") is False:
        label += " [yellow]hidden[/]"
    return label


def render_tree(node: Dict[str, Any], rich_tree: Optional[RichTree] = None) -> RichTree:
    current = rich_tree.add(_label(node)) if rich_tree else RichTree(_label(node))
    stack: List[Tuple[Dict[str, Any], RichTree]] = [(node, current)]
    while stack:
        record, branch = stack.pop()
        for child in record.get("children", []) or []:
            stack.append((child, branch.add(_label(child))))
    return current


def render_selection(payload: Dict[str, Any]) -> RichTree:
    if "error" in payload:
        return RichTree(f"[red]{payload['error']}[/]")
    root = RichTree(f"[bold magenta]{payload.get('pageName', '')}[/] ([dim]{payload.get('pageId', '')}[/])")
    for node in payload.get("selectedNodes", []):
        render_tree(node, root)
    return root
