"""Turn a hierarchy tree into ordered render nodes."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from dc_common.errors import AmbiguousFilterMatchWarning
from dc_compose.engine.entries import ItemEntry
from dc_compose.engine.hierarchy import HierarchyNode
from dc_compose.engine.paths import format_path
from dc_compose.engine.signatures import describe_signature
from dc_compose.models import RenderNode, Standalone, TabGroup

logger = logging.getLogger(__name__)


class TreeFlattener:
    """Depth-first flattening of hierarchy nodes.

    Warnings raised while matching nested structure to parent tabs are
    appended to ``warnings`` instead of aborting.
    """

    def __init__(
        self,
        labels: Optional[Mapping[str, str]] = None,
        warnings: Optional[list[AmbiguousFilterMatchWarning]] = None,
    ) -> None:
        self.labels = dict(labels or {})
        self.warnings = warnings if warnings is not None else []

    def label_for(self, segment: Optional[str]) -> Optional[str]:
        if segment is None:
            return None
        return self.labels.get(segment)

    def flatten(self, root: HierarchyNode) -> list[RenderNode]:
        """Flatten a page-level tree: root items, then its tab groups."""
        nodes: list[RenderNode] = [
            Standalone(entry.item, label=entry.item.title) for entry in root.items
        ]
        nodes.extend(self.flatten_children(root))
        return nodes

    def flatten_children(self, node: HierarchyNode) -> list[RenderNode]:
        nodes = []
        for child in node.sorted_children():
            flattened = self.flatten_node(child)
            if flattened is not None:
                nodes.append(flattened)
        return nodes

    def flatten_node(self, node: HierarchyNode) -> Optional[RenderNode]:
        if node.is_empty:
            return None
        name = node.segment or ""
        if len(node.items) > 1 and node.children:
            return TabGroup(
                name=name,
                label=self.label_for(node.segment),
                children=tuple(self._parent_tabs(node)),
            )
        if len(node.items) == 1 and not node.children:
            item = node.items[0].item
            return Standalone(item, label=item.title or self.label_for(node.segment) or name)
        members: list[RenderNode] = [self.member(entry) for entry in node.items]
        members.extend(self.flatten_children(node))
        return TabGroup(name=name, label=self.label_for(node.segment), children=tuple(members))

    def member(self, entry: ItemEntry) -> Standalone:
        """A single item shown as one tab of an enclosing group."""
        return Standalone(entry.item, label=entry.item.tab_title)

    def parent_tab(self, entry: ItemEntry, nested: Optional[HierarchyNode]) -> Standalone:
        """A parent tab carrying the flattened structure nested beneath it."""
        nested_children: tuple[RenderNode, ...] = ()
        if nested is not None:
            nested_children = tuple(self.flatten_children(nested))
        return Standalone(
            entry.item,
            label=entry.item.tab_title,
            nested_children=nested_children,
        )

    def warn_unmatched(self, entries: Iterable[ItemEntry], context: str) -> None:
        for entry in entries:
            path = entry.path or ()
            message = (
                f"Item #{entry.index} at '{format_path(path)}' with filter "
                f"{describe_signature(entry.signature)} matches no parent tab in '{context}'; "
                "it is left out of the page"
            )
            logger.warning(message)
            self.warnings.append(
                AmbiguousFilterMatchWarning(
                    message,
                    path=tuple(path),
                    signature=entry.signature,
                    insertion_index=entry.index,
                )
            )

    def _parent_tabs(self, node: HierarchyNode) -> list[Standalone]:
        tabs = []
        attached: set[int] = set()
        for entry in sorted(node.items, key=lambda candidate: candidate.index):
            nested = node.matching_children(entry.signature)
            attached.update(nested_entry.index for nested_entry in nested.iter_entries())
            tabs.append(self.parent_tab(entry, nested))
        nested_entries = [
            nested_entry
            for child in node.sorted_children()
            for nested_entry in child.iter_entries()
        ]
        self.warn_unmatched(
            (candidate for candidate in nested_entries if candidate.index not in attached),
            node.segment or "",
        )
        return tabs
