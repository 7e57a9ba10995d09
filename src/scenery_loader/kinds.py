# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Object kinds known to the host catalog and their session capacities."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final


class ObjectKind(str, Enum):
    """Closed set of catalog object kinds reported by the host."""

    SMALL_SCENERY = "small_scenery"
    LARGE_SCENERY = "large_scenery"
    WALL = "wall"
    BANNER = "banner"
    FOOTPATH_ADDITION = "footpath_addition"
    SCENERY_GROUP = "scenery_group"
    FOOTPATH_SURFACE = "footpath_surface"
    FOOTPATH_RAILINGS = "footpath_railings"
    RIDE = "ride"
    PARK_ENTRANCE = "park_entrance"
    WATER = "water"
    TERRAIN_SURFACE = "terrain_surface"
    TERRAIN_EDGE = "terrain_edge"
    STATION = "station"
    MUSIC = "music"

    @classmethod
    def from_raw(cls, raw: str | None) -> ObjectKind | None:
        """Return the kind matching ``raw`` or ``None`` when unrecognised.

        Args:
            raw: Kind token reported by the host or a snapshot document.

        Returns:
            ObjectKind | None: Matching enum member when known; otherwise ``None``.
        """

        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


MAX_LARGE_TABLE: Final[int] = 2047
MAX_SMALL_TABLE: Final[int] = 255

DEFAULT_CAPACITIES: Final[Mapping[ObjectKind, int]] = MappingProxyType(
    {
        ObjectKind.SMALL_SCENERY: MAX_LARGE_TABLE,
        ObjectKind.LARGE_SCENERY: MAX_LARGE_TABLE,
        ObjectKind.WALL: MAX_LARGE_TABLE,
        ObjectKind.BANNER: MAX_SMALL_TABLE,
        ObjectKind.FOOTPATH_ADDITION: MAX_SMALL_TABLE,
        ObjectKind.SCENERY_GROUP: MAX_SMALL_TABLE,
        ObjectKind.FOOTPATH_SURFACE: MAX_SMALL_TABLE,
        ObjectKind.FOOTPATH_RAILINGS: MAX_SMALL_TABLE,
    },
)

# Kinds that can be referenced from a map cell.
PLACEMENT_KINDS: Final[tuple[ObjectKind, ...]] = (
    ObjectKind.SMALL_SCENERY,
    ObjectKind.LARGE_SCENERY,
    ObjectKind.WALL,
    ObjectKind.BANNER,
    ObjectKind.FOOTPATH_ADDITION,
    ObjectKind.FOOTPATH_SURFACE,
    ObjectKind.FOOTPATH_RAILINGS,
)

UNKNOWN_KIND_LABEL: Final[str] = "unknown"


def kind_label(kind: ObjectKind | None) -> str:
    """Return a display label for ``kind``, using ``unknown`` for stale references."""

    if kind is None:
        return UNKNOWN_KIND_LABEL
    return kind.value.replace("_", " ")


__all__ = [
    "DEFAULT_CAPACITIES",
    "MAX_LARGE_TABLE",
    "MAX_SMALL_TABLE",
    "ObjectKind",
    "PLACEMENT_KINDS",
    "UNKNOWN_KIND_LABEL",
    "kind_label",
]
