"""Readable, unique chunk labels for rendered items.

A ``ChunkLabeler`` is the label state of one build: create one per build
(or call ``reset()``) so that concurrent or consecutive builds never see
each other's labels.
"""

from __future__ import annotations

import re
import threading
from typing import Iterable, Optional

from dc_compose.engine.paths import format_path, parse_path
from dc_compose.models import ItemKind, RenderNode, Standalone, TabGroup, VisualizationItem
from dc_compose.settings import ComposeSettings

_VARIABLE_FIELDS: dict[ItemKind, tuple[str, ...]] = {
    ItemKind.BAR: ("x_var", "stack_var", "group_var"),
    ItemKind.STACKEDBAR: ("x_var", "stack_var", "group_var"),
    ItemKind.STACKEDBARS: ("x_vars", "x_var", "questions"),
    ItemKind.TIMELINE: ("y_var", "group_var"),
    ItemKind.HISTOGRAM: ("x_var",),
    ItemKind.HEATMAP: ("x_var", "y_var", "value_var"),
    ItemKind.DENSITY: ("x_var", "group_var"),
    ItemKind.BOXPLOT: ("y_var", "x_var"),
}
# stackedbars names its questions in one of several fields; only the first is used
_FIRST_MATCH_ONLY = frozenset({ItemKind.STACKEDBARS})

_SEPARATORS = re.compile(r"[/_. #]")
_INVALID = re.compile(r"[^a-z0-9-]")
_DASHES = re.compile(r"-+")


def sanitize_label(text: str, max_length: int) -> str:
    label = _SEPARATORS.sub("-", text.lower())
    label = _INVALID.sub("-", label)
    label = _DASHES.sub("-", label).strip("-")
    if len(label) > max_length:
        label = label[:max_length].rstrip("-")
    return label


class ChunkLabeler:
    def __init__(self, settings: Optional[ComposeSettings] = None) -> None:
        self.settings = settings or ComposeSettings()
        self._used: dict[str, int] = {}
        self._issued: set[str] = set()
        self._lock = threading.Lock()

    def reset(self) -> None:
        with self._lock:
            self._used.clear()
            self._issued.clear()

    def label_for(self, item: VisualizationItem) -> str:
        """Return a label for ``item`` that is unique within this labeler."""
        base = sanitize_label(self._describe(item), self.settings.chunk_label_max_length)
        if not base:
            base = self.settings.chunk_label_default
        with self._lock:
            count = self._used.get(base, 0) + 1
            label = base if count == 1 else f"{base}-{count}"
            # a base such as "a-2" can equal a suffixed label issued earlier
            while label in self._issued:
                count += 1
                label = f"{base}-{count}"
            self._used[base] = count
            self._issued.add(label)
        return label

    def stamp(self, nodes: Iterable[RenderNode]) -> tuple[RenderNode, ...]:
        """Return copies of ``nodes`` with chunk labels on renderable items."""
        return tuple(self._stamp_node(node) for node in nodes)

    def _stamp_node(self, node: RenderNode) -> RenderNode:
        if isinstance(node, TabGroup):
            return TabGroup(node.name, node.label, self.stamp(node.children))
        chunk_label = None
        if not node.item.kind.is_structural:
            chunk_label = self.label_for(node.item)
        return Standalone(
            node.item,
            label=node.label,
            nested_children=self.stamp(node.nested_children),
            chunk_label=chunk_label,
        )

    def _describe(self, item: VisualizationItem) -> str:
        path = parse_path(item.tabgroup)
        if path:
            return format_path(path)
        variables = self._variables(item)
        if variables:
            return "-".join([item.kind.value, *variables[:2]])
        if item.title:
            return item.title
        return item.kind.value

    @staticmethod
    def _variables(item: VisualizationItem) -> list[str]:
        found: list[str] = []
        for name in _VARIABLE_FIELDS.get(item.kind, ()):
            value = item.params.get(name)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                if not value:
                    continue
                value = value[0]
            found.append(str(value))
            if item.kind in _FIRST_MATCH_ONLY:
                break
        return found
