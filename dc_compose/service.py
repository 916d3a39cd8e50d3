"""Page composition: authored items in, ordered render nodes out."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from dc_common.errors import AmbiguousFilterMatchWarning
from dc_compose.engine.classifier import ConstructionStrategy, classify_roots
from dc_compose.engine.entries import ItemEntry, prepare_entries
from dc_compose.engine.flattener import TreeFlattener
from dc_compose.engine.hierarchy import HierarchyNode
from dc_compose.engine.pagination import place_markers, split_markers
from dc_compose.engine.reconciler import FilterReconciler
from dc_compose.labels import ChunkLabeler
from dc_compose.models import CompositionResult, VisualizationItem, min_insertion_index
from dc_compose.settings import ComposeSettings

logger = logging.getLogger(__name__)


def compose(
    items: Sequence[VisualizationItem],
    label_lookup: Optional[Mapping[str, str]] = None,
    *,
    labeler: Optional[ChunkLabeler] = None,
    settings: Optional[ComposeSettings] = None,
) -> CompositionResult:
    """Assemble one page's items into ordered render nodes.

    ``label_lookup`` maps tabgroup segment names to display labels. Pass a
    ``labeler`` to share chunk-label uniqueness across the pages of one
    build; otherwise each call labels from scratch.

    Raises EmptyPathError or InvalidPathShapeError on malformed tabgroups.
    Filter arrangements that leave items without a parent tab are reported
    in ``CompositionResult.warnings``.
    """
    if not items:
        return CompositionResult()

    resolved = settings or ComposeSettings()
    entries = prepare_entries(items)
    content, markers = split_markers(entries)
    strategies = classify_roots(content)

    tree = HierarchyNode()
    fanned_out: dict[str, list[ItemEntry]] = {}
    for entry in content:
        if entry.root is not None and strategies[entry.root] is ConstructionStrategy.FILTERED:
            fanned_out.setdefault(entry.root, []).append(entry)
        else:
            tree.insert(entry)

    warnings: list[AmbiguousFilterMatchWarning] = []
    flattener = TreeFlattener(label_lookup, warnings)
    nodes = flattener.flatten(tree)
    reconciler = FilterReconciler(flattener, resolved)
    for root, members in fanned_out.items():
        nodes.append(reconciler.reconcile(root, members))

    nodes.sort(key=min_insertion_index)
    nodes = place_markers(nodes, markers)

    active = labeler if labeler is not None else ChunkLabeler(resolved)
    stamped = active.stamp(nodes)
    logger.debug(
        "Composed %d items into %d top-level nodes (%d fanned-out roots, %d warnings)",
        len(entries),
        len(stamped),
        len(fanned_out),
        len(warnings),
    )
    return CompositionResult(nodes=stamped, warnings=tuple(warnings))
