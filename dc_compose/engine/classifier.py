"""Decide, per tabgroup root, how the root's tree is built."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from dc_compose.engine.entries import ItemEntry

logger = logging.getLogger(__name__)


class ConstructionStrategy(str, Enum):
    STANDARD = "standard"
    FILTERED = "filtered"


@dataclass
class RootProfile:
    """Parents (path length 1) and descendants seen under one root."""

    root: str
    parents: list[ItemEntry] = field(default_factory=list)
    descendants: list[ItemEntry] = field(default_factory=list)

    def strategy(self) -> ConstructionStrategy:
        if len(self.parents) >= 2:
            signatures = {entry.signature for entry in self.parents}
            if len(signatures) > 1:
                return ConstructionStrategy.FILTERED
            return ConstructionStrategy.STANDARD
        if len(self.parents) == 1 and self.parents[0].filtered:
            if any(entry.filtered for entry in self.descendants):
                return ConstructionStrategy.FILTERED
        return ConstructionStrategy.STANDARD


def profile_roots(entries: Iterable[ItemEntry]) -> dict[str, RootProfile]:
    profiles: dict[str, RootProfile] = {}
    for entry in entries:
        root = entry.root
        if root is None:
            continue
        profile = profiles.setdefault(root, RootProfile(root))
        if len(entry.path) == 1:
            profile.parents.append(entry)
        else:
            profile.descendants.append(entry)
    return profiles


def classify_roots(entries: Iterable[ItemEntry]) -> dict[str, ConstructionStrategy]:
    """Map each distinct root segment to its construction strategy."""
    strategies = {}
    for root, profile in profile_roots(entries).items():
        strategies[root] = profile.strategy()
        logger.debug(
            "Root '%s' uses %s construction (%d parents, %d descendants)",
            root,
            strategies[root].value,
            len(profile.parents),
            len(profile.descendants),
        )
    return strategies
