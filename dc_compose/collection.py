"""Authoring API for building a page's visualization items.

Example::

    vizzes = (
        VizCollection(type="histogram", tabgroup_labels={"wave": "Survey Waves"})
        .add_viz(x_var="score", title="Wave 1", tabgroup="wave", filter="wave == 1")
        .add_viz(x_var="score", title="Wave 2", tabgroup="wave", filter="wave == 2")
        .add_viz("bar", x_var="age", tabgroup="wave/age", filter="wave == 1")
    )
    result = vizzes.compose()
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from numbers import Real
from typing import Any, Iterator, Mapping, Optional

from dc_common.errors import InvalidItemError
from dc_compose.engine.paths import parse_path
from dc_compose.labels import ChunkLabeler
from dc_compose.models import CompositionResult, ItemKind, VisualizationItem
from dc_compose.service import compose
from dc_compose.settings import ComposeSettings

logger = logging.getLogger(__name__)

EXPANDABLE_PARAMS = (
    "response_var",
    "x_var",
    "y_var",
    "stack_var",
    "questions",
    "group_var",
    "title",
)
_TEXT_POSITIONS = ("above", "below")
_ICON_RE = re.compile(r"^[a-zA-Z0-9_-]+:[a-zA-Z0-9_-]+$")


class VizCollection:
    """An ordered, growing set of items for one page.

    Keyword arguments given to the constructor are defaults applied to every
    ``add_viz`` call; explicit arguments to ``add_viz`` win.
    """

    def __init__(
        self,
        tabgroup_labels: Optional[Mapping[str, str]] = None,
        **defaults: Any,
    ) -> None:
        self.tabgroup_labels: dict[str, str] = dict(tabgroup_labels or {})
        self.defaults: dict[str, Any] = dict(defaults)
        self._items: list[VisualizationItem] = []

    @property
    def items(self) -> tuple[VisualizationItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[VisualizationItem]:
        return iter(self._items)

    def __add__(self, other: "VizCollection") -> "VizCollection":
        if not isinstance(other, VizCollection):
            return NotImplemented
        return combine_collections(self, other)

    def __repr__(self) -> str:
        return f"VizCollection(items={len(self._items)}, labels={len(self.tabgroup_labels)})"

    def add_viz(self, type: Optional[str] = None, **params: Any) -> "VizCollection":
        """Append one item; returns the collection for chaining."""
        merged = dict(self.defaults)
        merged.update(params)
        if type is not None:
            merged["type"] = type
        self._items.append(_build_item(merged, insertion_index=len(self._items) + 1))
        return self

    def add_vizzes(
        self,
        tabgroup_template: Optional[str] = None,
        title_template: Optional[str] = None,
        **params: Any,
    ) -> "VizCollection":
        """Append one item per value of the vector-valued parameters.

        Parameters listed in ``EXPANDABLE_PARAMS`` that hold lists are
        expanded in parallel; everything else is shared. Templates are
        formatted with ``{i}`` (1-based) and the current parameter values,
        e.g. ``"skills/age/item{i}"`` or ``"skills/{response_var}"``.
        """
        vector_params = [
            name
            for name in EXPANDABLE_PARAMS
            if isinstance(params.get(name), (list, tuple)) and len(params[name]) > 1
        ]
        if not vector_params:
            raise InvalidItemError(
                "No expandable parameters found with more than one value; use add_viz() "
                "for single items. Expandable parameters: " + ", ".join(EXPANDABLE_PARAMS)
            )
        count = len(params[vector_params[0]])
        lengths = {name: len(params[name]) for name in vector_params}
        if any(length != count for length in lengths.values()):
            raise InvalidItemError(
                "All expandable vector parameters must have the same length",
                context={"lengths": lengths},
            )

        tabgroups = None
        tabgroup = params.get("tabgroup")
        if isinstance(tabgroup, (list, tuple)) and len(tabgroup) == count and count > 1:
            tabgroups = params.pop("tabgroup")

        for position in range(count):
            iteration = {
                name: (value[position] if name in vector_params else value)
                for name, value in params.items()
            }
            if tabgroup_template is not None:
                iteration["tabgroup"] = _format_template(tabgroup_template, position + 1, iteration)
            elif tabgroups is not None:
                iteration["tabgroup"] = tabgroups[position]
            if title_template is not None:
                iteration["title"] = _format_template(title_template, position + 1, iteration)
            self.add_viz(**iteration)
        return self

    def set_tabgroup_labels(self, labels: Mapping[str, str]) -> "VizCollection":
        self.tabgroup_labels = dict(labels)
        return self

    def compose(
        self,
        *,
        labeler: Optional[ChunkLabeler] = None,
        settings: Optional[ComposeSettings] = None,
    ) -> CompositionResult:
        return compose(self._items, self.tabgroup_labels, labeler=labeler, settings=settings)


def combine_collections(*collections: VizCollection) -> VizCollection:
    """Concatenate collections, renumbering insertion indices in order.

    Labels and defaults are merged; later collections win on conflicts.
    """
    combined = VizCollection()
    for collection in collections:
        if not isinstance(collection, VizCollection):
            raise InvalidItemError(
                "All arguments must be VizCollection objects",
                context={"type": type(collection).__name__},
            )
        for item in collection.items:
            combined._items.append(_renumbered(item, len(combined._items) + 1))
        combined.tabgroup_labels.update(collection.tabgroup_labels)
        combined.defaults.update(collection.defaults)
    return combined


def _renumbered(item: VisualizationItem, insertion_index: int) -> VisualizationItem:
    return replace(item, insertion_index=insertion_index)


def _format_template(template: str, position: int, values: Mapping[str, Any]) -> str:
    try:
        return template.format_map({**values, "i": position})
    except (KeyError, IndexError, ValueError) as exc:
        raise InvalidItemError(
            f"Cannot fill template '{template}'",
            context={"template": template, "available": sorted(values)},
            cause=exc,
        ) from exc


def _build_item(params: dict[str, Any], insertion_index: int) -> VisualizationItem:
    kind = ItemKind.resolve(params.pop("type", None))
    tabgroup = params.pop("tabgroup", None)
    path = parse_path(tabgroup) if tabgroup is not None else None
    title = _optional_text(params.pop("title", None), "title")
    tab_label = params.pop("tab_label", None)
    title_tabset = params.pop("title_tabset", None)
    tab_label = _optional_text(tab_label if tab_label is not None else title_tabset, "tab_label")
    filter_ = params.pop("filter", None)

    _optional_text(params.get("text"), "text")
    params.setdefault("text_position", "above")
    if params["text_position"] not in _TEXT_POSITIONS:
        raise InvalidItemError(
            "text_position must be either 'above' or 'below'",
            context={"text_position": params["text_position"]},
        )
    height = params.get("height")
    if height is not None and (
        isinstance(height, bool) or not isinstance(height, Real) or height <= 0
    ):
        raise InvalidItemError(
            "height must be a positive number or None", context={"height": height}
        )
    data = params.get("data")
    if data is not None and (not isinstance(data, str) or not data.strip()):
        raise InvalidItemError(
            "data must be a non-empty dataset name or None", context={"data": data}
        )
    icon = _optional_text(params.get("icon"), "icon")
    if icon is not None and not _ICON_RE.match(icon) and "{{< iconify" not in icon:
        logger.warning(
            "Icon '%s' should be in format 'collection:name' (e.g. 'ph:users-three')", icon
        )
    if filter_ is not None and isinstance(filter_, str) and not filter_.strip(" ~"):
        raise InvalidItemError("filter expression must not be empty", context={"filter": filter_})

    return VisualizationItem(
        kind=kind,
        insertion_index=insertion_index,
        tabgroup=path,
        filter=filter_,
        title=title,
        tab_label=tab_label,
        params=params,
    )


def _optional_text(value: Any, name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidItemError(f"{name} must be a string or None", context={name: value})
    return value
