"""Rooted, ordered tree of items keyed by path segments."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional

from dc_compose.engine.entries import ItemEntry
from dc_compose.engine.signatures import NO_FILTER


@dataclass
class HierarchyNode:
    """One tabgroup level during construction.

    ``min_index`` is the smallest insertion index of anything at or below
    this node and drives sibling ordering; the key order of ``children``
    carries no meaning.
    """

    segment: Optional[str] = None
    items: list[ItemEntry] = field(default_factory=list)
    children: dict[str, "HierarchyNode"] = field(default_factory=dict)
    min_index: float = math.inf

    def insert(self, entry: ItemEntry) -> None:
        """Place ``entry`` at the node addressed by its path."""
        node = self
        node.min_index = min(node.min_index, entry.index)
        for segment in entry.path or ():
            child = node.children.get(segment)
            if child is None:
                child = HierarchyNode(segment=segment)
                node.children[segment] = child
            child.min_index = min(child.min_index, entry.index)
            node = child
        node.items.append(entry)

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.children

    def sorted_children(self) -> list["HierarchyNode"]:
        return sorted(
            self.children.values(),
            key=lambda child: (child.min_index, child.segment or ""),
        )

    def iter_entries(self) -> Iterator[ItemEntry]:
        yield from self.items
        for child in self.sorted_children():
            yield from child.iter_entries()

    def pruned(self, keep: Callable[[ItemEntry], bool]) -> Optional["HierarchyNode"]:
        """Return an independent copy holding only entries accepted by ``keep``.

        Nodes left with neither items nor children are dropped; ``min_index``
        is recomputed from what remains.
        """
        copy = HierarchyNode(segment=self.segment)
        copy.items = [entry for entry in self.items if keep(entry)]
        for name, child in self.children.items():
            kept = child.pruned(keep)
            if kept is not None:
                copy.children[name] = kept
        if copy.is_empty:
            return None
        candidates = [entry.index for entry in copy.items]
        candidates.extend(child.min_index for child in copy.children.values())
        copy.min_index = min(candidates)
        return copy

    def matching_children(self, signature: str) -> "HierarchyNode":
        """Container of the nested structure that belongs under a parent tab.

        Nested entries match when they carry the parent's filter signature or
        no filter at all.
        """
        container = HierarchyNode(segment=self.segment)
        for name, child in self.children.items():
            kept = child.pruned(
                lambda entry: entry.signature == signature or entry.signature == NO_FILTER
            )
            if kept is not None:
                container.children[name] = kept
                container.min_index = min(container.min_index, kept.min_index)
        return container


def build_tree(entries: Iterable[ItemEntry], segment: Optional[str] = None) -> HierarchyNode:
    """Insert ``entries`` into a fresh tree rooted at ``segment``."""
    root = HierarchyNode(segment=segment)
    for entry in entries:
        root.insert(entry)
    return root
