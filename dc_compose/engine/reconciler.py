"""Filter-based construction for roots whose parent tabs carry different filters.

Items under such a root are partitioned by filter signature. Each partition
is built into its own tree with the root segment stripped; the partition's
top-level items become parent tabs, and the nested structure whose filters
match travels with them. All parent tabs end up in a single tab group for
the root, ordered by insertion index.
"""

from __future__ import annotations

import logging
from typing import Iterable

from dc_compose.engine.entries import ItemEntry
from dc_compose.engine.flattener import TreeFlattener
from dc_compose.engine.hierarchy import HierarchyNode, build_tree
from dc_compose.engine.signatures import NO_FILTER, describe_signature
from dc_compose.models import ItemKind, Standalone, TabGroup, VisualizationItem
from dc_compose.settings import ComposeSettings

logger = logging.getLogger(__name__)


class FilterReconciler:
    def __init__(self, flattener: TreeFlattener, settings: ComposeSettings) -> None:
        self.flattener = flattener
        self.settings = settings

    def reconcile(self, root: str, entries: Iterable[ItemEntry]) -> TabGroup:
        partitions = partition_by_signature(entries)
        parent_tabs: list[Standalone] = []

        for signature, members in partitions.items():
            subtree = build_tree((entry.relative_to_root() for entry in members), segment=root)
            logger.debug(
                "Root '%s' partition %s: %d parents, %d nested groups",
                root,
                describe_signature(signature),
                len(subtree.items),
                len(subtree.children),
            )
            if subtree.items:
                for entry in subtree.items:
                    nested = subtree.matching_children(entry.signature)
                    parent_tabs.append(self.flattener.parent_tab(entry, nested))
            elif signature == NO_FILTER:
                parent_tabs.append(self._placeholder_tab(subtree))
            else:
                self.flattener.warn_unmatched(members, root)

        parent_tabs.sort(key=lambda tab: tab.item.insertion_index)
        return TabGroup(
            name=root,
            label=self.flattener.label_for(root),
            children=tuple(parent_tabs),
        )

    def _placeholder_tab(self, subtree: HierarchyNode) -> Standalone:
        placeholder = VisualizationItem(
            kind=ItemKind.PLACEHOLDER,
            insertion_index=int(subtree.min_index),
            tab_label=self.settings.placeholder_label,
        )
        entry = ItemEntry(placeholder, None, NO_FILTER)
        return self.flattener.parent_tab(entry, subtree)


def partition_by_signature(entries: Iterable[ItemEntry]) -> dict[str, list[ItemEntry]]:
    """Group entries by filter signature, in order of first appearance."""
    partitions: dict[str, list[ItemEntry]] = {}
    for entry in entries:
        partitions.setdefault(entry.signature, []).append(entry)
    return partitions
