"""YAML collection files.

A collection file describes one page::

    tabgroup_labels:
      wave: Survey Waves
    defaults:
      type: histogram
    items:
      - {x_var: score, title: Wave 1, tabgroup: wave, filter: "wave == 1"}
      - {x_var: score, title: Wave 2, tabgroup: wave, filter: "wave == 2"}
      - {type: bar, x_var: age, tabgroup: wave/age, filter: "wave == 1"}

Fields other than the ones modelled below are passed through as render
parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from dc_common.errors import ConfigurationError, wrap_error
from dc_compose.collection import VizCollection


class ItemDocument(BaseModel):
    type: str | None = None
    tabgroup: str | list[Any] | dict[Any, str] | None = None
    filter: str | dict[str, Any] | None = None
    title: str | None = None
    title_tabset: str | None = None

    model_config = {"extra": "allow"}

    def to_params(self) -> dict[str, Any]:
        params = {
            name: value
            for name, value in self.model_dump(exclude_none=True).items()
            if name in type(self).model_fields
        }
        params.update(self.model_extra or {})
        return params


class CollectionDocument(BaseModel):
    tabgroup_labels: dict[str, str] = Field(default_factory=dict)
    defaults: dict[str, Any] = Field(default_factory=dict)
    items: list[ItemDocument] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    def to_collection(self) -> VizCollection:
        collection = VizCollection(tabgroup_labels=self.tabgroup_labels, **self.defaults)
        for item in self.items:
            collection.add_viz(**item.to_params())
        return collection


def parse_collection(data: Any, source: str = "<memory>") -> VizCollection:
    """Validate already-loaded YAML/JSON data into a collection."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Collection file must contain a mapping at the top level",
            context={"source": source},
        )
    try:
        document = CollectionDocument.model_validate(data)
    except ValidationError as exc:
        raise wrap_error(
            ConfigurationError,
            f"Invalid collection file: {source}",
            context={"source": source, "errors": exc.errors(include_url=False)},
            cause=exc,
        ) from exc
    return document.to_collection()


def load_collection(path: Path) -> VizCollection:
    """Read a YAML collection file from disk."""
    if not path.exists():
        raise ConfigurationError(f"Collection file not found: {path}", context={"path": path})
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise wrap_error(
            ConfigurationError,
            f"Collection file is not valid YAML: {path}",
            context={"path": path},
            cause=exc,
        ) from exc
    return parse_collection(data, source=str(path))
