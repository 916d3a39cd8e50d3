"""Public API surface for dc_compose."""

from dc_compose.collection import VizCollection, combine_collections
from dc_compose.documents import CollectionDocument, load_collection, parse_collection
from dc_compose.engine.paths import parse_path
from dc_compose.engine.signatures import NO_FILTER, filter_signature
from dc_compose.labels import ChunkLabeler
from dc_compose.models import (
    CompositionResult,
    ItemKind,
    RenderNode,
    Standalone,
    TabGroup,
    VisualizationItem,
    insertion_indices,
)
from dc_compose.service import compose
from dc_compose.settings import ComposeSettings

__all__ = [
    "ChunkLabeler",
    "CollectionDocument",
    "ComposeSettings",
    "CompositionResult",
    "ItemKind",
    "NO_FILTER",
    "RenderNode",
    "Standalone",
    "TabGroup",
    "VisualizationItem",
    "VizCollection",
    "combine_collections",
    "compose",
    "filter_signature",
    "insertion_indices",
    "load_collection",
    "parse_collection",
    "parse_path",
]
