"""Pagination markers keep their authored position in the page."""

from __future__ import annotations

from typing import Iterable, Sequence

from dc_compose.engine.entries import ItemEntry
from dc_compose.models import ItemKind, RenderNode, Standalone, insertion_indices


def split_markers(entries: Iterable[ItemEntry]) -> tuple[list[ItemEntry], list[ItemEntry]]:
    """Separate pagination markers from the entries that build the tree."""
    content: list[ItemEntry] = []
    markers: list[ItemEntry] = []
    for entry in entries:
        if entry.item.kind is ItemKind.PAGINATION:
            markers.append(entry)
        else:
            content.append(entry)
    return content, markers


def place_markers(nodes: Sequence[RenderNode], markers: Iterable[ItemEntry]) -> list[RenderNode]:
    """Insert each marker after every node built entirely from earlier items."""
    placed = list(nodes)
    for marker in sorted(markers, key=lambda entry: entry.index):
        position = 0
        for offset, node in enumerate(placed):
            indices = insertion_indices(node)
            if indices and max(indices) < marker.index:
                position = offset + 1
        placed.insert(position, Standalone(marker.item, label=marker.item.title))
    return placed
