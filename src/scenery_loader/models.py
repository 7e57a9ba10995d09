# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value objects shared by the catalog, activation and usage layers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .kinds import ObjectKind


@dataclass(frozen=True, slots=True)
class InstalledObject:
    """Describe one entry of the host's installed catalog.

    Attributes:
        identifier: Identifier the host tracks the entry under.
        kind: Object kind reported by the host.
        name: Human readable display name.
        authors: Author names declared by the object, possibly empty.
        aliases: Additional raw identifiers (usually legacy ones) for the entry.
    """

    identifier: str
    kind: ObjectKind
    name: str = ""
    authors: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()

    def raw_identifiers(self) -> tuple[str, ...]:
        """Return every identifier the entry may be referenced by."""

        return (self.identifier, *self.aliases)


@dataclass(frozen=True, slots=True)
class LoadedObject:
    """Describe an object the host reports as loaded.

    ``items`` lists the raw member identifiers for scenery groups and stays
    empty for leaf objects.
    """

    identifier: str
    kind: ObjectKind
    items: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SceneryGroup:
    """Immutable index record for one scenery group."""

    name: str
    identifier: str
    authors: str
    items: tuple[str, ...] = field(default_factory=tuple)

    def distinct_items(self) -> tuple[str, ...]:
        """Return member identifiers with duplicates removed, preserving order."""

        return tuple(dict.fromkeys(self.items))

    def matches(self, needle: str) -> bool:
        """Return ``True`` when ``needle`` occurs in the name, identifier or authors.

        Args:
            needle: Search text; matching is case-insensitive.

        Returns:
            bool: ``True`` for an empty needle or any case-insensitive match.
        """

        lowered = needle.lower()
        return any(lowered in value.lower() for value in (self.name, self.identifier, self.authors))


@dataclass(frozen=True, slots=True)
class SlotReference:
    """Typed slot on a surface cell.

    ``kind`` is ``None`` when the referenced object no longer resolves to a
    known kind.
    """

    kind: ObjectKind | None
    identifier: str


class GroupStatus(str, Enum):
    """Load state of a scenery group as shown to users."""

    NOT_LOADED = "Not Loaded"
    PARTIAL = "Partially Loaded"
    LOADED = "Loaded"


def dedupe_identifiers(identifiers: Iterable[str]) -> list[str]:
    """Return ``identifiers`` without duplicates, preserving first occurrence."""

    return list(dict.fromkeys(identifiers))


__all__ = [
    "GroupStatus",
    "InstalledObject",
    "LoadedObject",
    "SceneryGroup",
    "SlotReference",
    "dedupe_identifiers",
]
