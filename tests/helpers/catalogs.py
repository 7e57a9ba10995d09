# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog builders shared by the loader tests."""

from __future__ import annotations

from scenery_loader.kinds import ObjectKind
from scenery_loader.models import InstalledObject

TREES = "rct2.scgtrees"
SHRUBS = "rct2.scgshrub"
EMPTY = "rct2.scgempty"
OAK = "rct2.tree.oak"
PINE = "rct2.tree.pine"
HEDGE = "rct2.shrub.hedge"


def legacy(source: str, name: str, checksum: str) -> str:
    """Return a legacy identifier with each segment padded to eight characters."""

    return "|".join(segment.ljust(8) for segment in (source, name, checksum))


def default_catalog() -> tuple[tuple[InstalledObject, ...], dict[str, tuple[str, ...]]]:
    """Return two groups sharing ``PINE``, an empty group and their items."""

    installed = (
        InstalledObject(TREES, ObjectKind.SCENERY_GROUP, "Trees", ("Chris Sawyer",)),
        InstalledObject(OAK, ObjectKind.SMALL_SCENERY, "Oak"),
        InstalledObject(SHRUBS, ObjectKind.SCENERY_GROUP, "Shrubs and Hedges"),
        InstalledObject(PINE, ObjectKind.SMALL_SCENERY, "Pine"),
        InstalledObject(HEDGE, ObjectKind.WALL, "Hedge"),
        InstalledObject(EMPTY, ObjectKind.SCENERY_GROUP, "Empty", ("A", "B")),
    )
    members = {
        TREES: (OAK, PINE),
        SHRUBS: (PINE, HEDGE),
    }
    return installed, members
