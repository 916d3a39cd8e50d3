"""Per-item composition records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from dc_common.errors import CompositionError
from dc_compose.engine.paths import parse_path
from dc_compose.engine.signatures import filter_signature, is_filtered
from dc_compose.models import VisualizationItem


@dataclass(frozen=True)
class ItemEntry:
    """An item with its parsed path and filter signature."""

    item: VisualizationItem
    path: tuple[str, ...] | None
    signature: str

    @property
    def index(self) -> int:
        return self.item.insertion_index

    @property
    def root(self) -> str | None:
        return self.path[0] if self.path else None

    @property
    def filtered(self) -> bool:
        return is_filtered(self.signature)

    def relative_to_root(self) -> "ItemEntry":
        """Return a copy with the leading root segment stripped."""
        remainder = self.path[1:] if self.path else ()
        return ItemEntry(self.item, remainder or None, self.signature)


def prepare_entries(items: Iterable[VisualizationItem]) -> list[ItemEntry]:
    """Parse every item's path and filter, ordered by insertion index.

    Path errors and repeated insertion indices abort the composition.
    """
    entries = [
        ItemEntry(item, parse_path(item.tabgroup), filter_signature(item.filter))
        for item in items
    ]
    entries.sort(key=lambda entry: entry.index)
    duplicates = sorted(
        {left.index for left, right in zip(entries, entries[1:]) if left.index == right.index}
    )
    if duplicates:
        raise CompositionError(
            "Insertion indices must be unique within a page",
            context={"duplicates": duplicates},
        )
    return entries
