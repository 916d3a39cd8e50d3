"""Item and render-node models for the composition core."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Sequence, Tuple, Union

from dc_common.errors import AmbiguousFilterMatchWarning, InvalidItemError
from dc_compose.engine.signatures import describe_signature, filter_signature

TabgroupSpec = Union[str, Sequence[str], Sequence[Tuple[Any, str]], Mapping[Any, str]]


class ItemKind(str, Enum):
    """Renderer targeted by a visualization item."""

    BAR = "bar"
    STACKEDBAR = "stackedbar"
    STACKEDBARS = "stackedbars"
    SCATTER = "scatter"
    HEATMAP = "heatmap"
    HISTOGRAM = "histogram"
    DENSITY = "density"
    TIMELINE = "timeline"
    TREEMAP = "treemap"
    BOXPLOT = "boxplot"
    MAP = "map"
    LOLLIPOP = "lollipop"
    FUNNEL = "funnel"
    PIE = "pie"
    WAFFLE = "waffle"
    DUMBBELL = "dumbbell"
    GAUGE = "gauge"
    SANKEY = "sankey"
    TEXT = "text"
    IMAGE = "image"
    CALLOUT = "callout"
    TABLE = "table"
    HTML = "html"
    PAGINATION = "pagination"
    PLACEHOLDER = "placeholder"

    @classmethod
    def resolve(cls, value: "ItemKind | str | None") -> "ItemKind":
        """Return the kind named by ``value``, following aliases."""
        if isinstance(value, ItemKind):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidItemError(
                "Item type must be a non-empty string, e.g. add_viz('histogram', x_var='age')",
                context={"value": value, "available": sorted(_KIND_NAMES)},
            )
        name = value.strip().lower()
        name = _KIND_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError as exc:
            suggestion = difflib.get_close_matches(name, sorted(_KIND_NAMES), n=1)
            hint = f" Did you mean '{suggestion[0]}'?" if suggestion else ""
            raise InvalidItemError(
                f"Unknown item type '{value}'.{hint}",
                context={"value": value, "available": sorted(_KIND_NAMES)},
                cause=exc,
            ) from exc

    @property
    def is_structural(self) -> bool:
        return self in (ItemKind.PAGINATION, ItemKind.PLACEHOLDER)

    @property
    def is_content(self) -> bool:
        return self in _CONTENT_KINDS


_KIND_ALIASES = {"donut": "pie", "pyramid": "funnel"}
_CONTENT_KINDS = frozenset(
    {ItemKind.TEXT, ItemKind.IMAGE, ItemKind.CALLOUT, ItemKind.TABLE, ItemKind.HTML}
)
_KIND_NAMES = frozenset(kind.value for kind in ItemKind) | frozenset(_KIND_ALIASES)


@dataclass(frozen=True)
class VisualizationItem:
    """One authored visualization or content block.

    ``tabgroup`` keeps the placement as authored (slash string, list of
    names, or position->name pairs); it is parsed when the item is composed.
    ``params`` is passed through to renderers untouched.
    """

    kind: ItemKind
    insertion_index: int
    tabgroup: TabgroupSpec | None = None
    filter: Any = None
    title: str | None = None
    tab_label: str | None = None
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ItemKind.resolve(self.kind))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def tab_title(self) -> str | None:
        """Label to show on a tab header for this item."""
        return self.tab_label or self.title

    @property
    def filter_text(self) -> str | None:
        """The filter as authored text, or its canonical form for non-strings."""
        if self.filter is None or isinstance(self.filter, str):
            return self.filter
        return describe_signature(filter_signature(self.filter))

    def to_dict(self) -> dict[str, Any]:
        tabgroup = self.tabgroup
        if isinstance(tabgroup, Mapping):
            tabgroup = {str(key): value for key, value in tabgroup.items()}
        elif isinstance(tabgroup, (list, tuple)):
            tabgroup = [list(part) if isinstance(part, tuple) else part for part in tabgroup]
        return {
            "kind": self.kind.value,
            "insertion_index": self.insertion_index,
            "tabgroup": tabgroup,
            "filter": self.filter_text,
            "title": self.title,
            "tab_label": self.tab_label,
            "params": {key: value for key, value in self.params.items()},
        }


@dataclass(frozen=True)
class Standalone:
    """A single item rendered without a wrapping tab container.

    Parent tabs produced by filter fan-out carry the structure nested
    under them in ``nested_children``.
    """

    item: VisualizationItem
    label: str | None = None
    nested_children: Tuple["RenderNode", ...] = ()
    chunk_label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "standalone",
            "label": self.label,
            "chunk_label": self.chunk_label,
            "item": self.item.to_dict(),
        }
        if self.nested_children:
            payload["nested_children"] = [child.to_dict() for child in self.nested_children]
        return payload


@dataclass(frozen=True)
class TabGroup:
    """A tab container whose children are rendered as tabs."""

    name: str
    label: str | None = None
    children: Tuple["RenderNode", ...] = ()

    @property
    def display_label(self) -> str:
        return self.label or self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "tabgroup",
            "name": self.name,
            "label": self.label,
            "children": [child.to_dict() for child in self.children],
        }


RenderNode = Union[Standalone, TabGroup]


def insertion_indices(node: RenderNode) -> list[int]:
    """Return every insertion index contained in ``node``, depth-first."""
    if isinstance(node, Standalone):
        indices = [node.item.insertion_index]
        for child in node.nested_children:
            indices.extend(insertion_indices(child))
        return indices
    indices = []
    for child in node.children:
        indices.extend(insertion_indices(child))
    return indices


def min_insertion_index(node: RenderNode) -> float:
    indices = insertion_indices(node)
    return min(indices) if indices else float("inf")


@dataclass(frozen=True)
class CompositionResult:
    """Ordered render nodes for one page plus any non-fatal warnings."""

    nodes: Tuple[RenderNode, ...] = ()
    warnings: Tuple[AmbiguousFilterMatchWarning, ...] = ()

    def __iter__(self) -> Iterator[RenderNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> RenderNode:
        return self.nodes[index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }
