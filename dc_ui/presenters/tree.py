"""Rich rendering of composed pages."""

from __future__ import annotations

from rich.text import Text
from rich.tree import Tree

from dc_compose.api import CompositionResult, RenderNode, Standalone, TabGroup
from dc_compose.engine.paths import format_path, parse_path
from dc_compose.engine.signatures import describe_signature, filter_signature


def describe_node(node: RenderNode) -> Text:
    if isinstance(node, TabGroup):
        text = Text("tabs ", style="bold magenta")
        text.append(node.display_label, style="bold")
        if node.label and node.label != node.name:
            text.append(f" ({node.name})", style="dim")
        return text

    item = node.item
    text = Text(f"{item.kind.value} ", style="blue" if item.kind.is_content else "cyan")
    text.append(node.label or "(untitled)")
    text.append(f"  #{item.insertion_index}", style="dim")
    path = parse_path(item.tabgroup)
    if path:
        text.append(f"  {format_path(path)}", style="dim")
    if item.filter is not None:
        text.append(f"  [{describe_signature(filter_signature(item.filter))}]", style="yellow")
    if node.chunk_label:
        text.append(f"  {node.chunk_label}", style="green")
    return text


def _add_branch(parent: Tree, node: RenderNode) -> None:
    branch = parent.add(describe_node(node))
    children = node.children if isinstance(node, TabGroup) else node.nested_children
    for child in children:
        _add_branch(branch, child)


def build_render_tree(result: CompositionResult, title: str = "page") -> Tree:
    """Build a rich tree showing the nesting of a composed page."""
    root = Tree(Text(title, style="bold"))
    for node in result.nodes:
        _add_branch(root, node)
    return root
