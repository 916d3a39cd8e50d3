"""Tabbed page composition for dashboard documents."""

from dc_compose.api import (  # noqa: F401
    ChunkLabeler,
    ComposeSettings,
    CompositionResult,
    ItemKind,
    Standalone,
    TabGroup,
    VisualizationItem,
    VizCollection,
    combine_collections,
    compose,
    load_collection,
    parse_path,
)

__all__ = [
    "ChunkLabeler",
    "ComposeSettings",
    "CompositionResult",
    "ItemKind",
    "Standalone",
    "TabGroup",
    "VisualizationItem",
    "VizCollection",
    "combine_collections",
    "compose",
    "load_collection",
    "parse_path",
]
