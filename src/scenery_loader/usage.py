# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scan the map surface for objects that are still in use."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .config import LoaderConfig
from .identifiers import IdentifierCanonicalizer
from .interfaces import UsageSurface
from .kinds import ObjectKind
from .models import SlotReference

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UsageReport:
    """Distinct canonical identifiers referenced by the surface, grouped by kind.

    Attributes:
        by_kind: Referenced identifiers per resolvable kind.
        unresolved: Identifiers whose slot kind could not be resolved.
        cells_scanned: Number of cells visited by the scan.
    """

    by_kind: Mapping[ObjectKind, frozenset[str]] = field(default_factory=dict)
    unresolved: frozenset[str] = frozenset()
    cells_scanned: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_kind", MappingProxyType(dict(self.by_kind)))

    @property
    def referenced(self) -> frozenset[str]:
        """Return every referenced identifier, stale references included."""

        merged: set[str] = set(self.unresolved)
        for identifiers in self.by_kind.values():
            merged.update(identifiers)
        return frozenset(merged)

    def count(self, kind: ObjectKind) -> int:
        """Return the number of distinct objects of ``kind`` in use."""

        return len(self.by_kind.get(kind, ()))


class UsageResolver:
    """Decide which candidate objects nothing on the surface references.

    Scans are never cached because the surface changes between toggles.
    """

    def __init__(
        self,
        surface: UsageSurface,
        canonicalizer: IdentifierCanonicalizer,
        *,
        config: LoaderConfig | None = None,
    ) -> None:
        """Bind the resolver to the surface and canonicalizer.

        Args:
            surface: Map grid to scan.
            canonicalizer: Canonicalizer applied to every slot reference.
            config: Session configuration naming the slot kinds to scan.
        """

        self._surface = surface
        self._canonicalizer = canonicalizer
        self._config = config or LoaderConfig()

    def iter_references(self) -> Iterator[SlotReference]:
        """Yield every relevant slot reference on the surface, cell by cell.

        Stale references (``kind is None``) are always yielded because their
        presence alone must keep an object loaded.
        """

        scanned = frozenset(self._config.scanned_kinds)
        for x in range(self._surface.width):
            for y in range(self._surface.height):
                for slot in self._surface.slots(x, y):
                    if slot.kind is None or slot.kind in scanned:
                        yield slot

    def compute_safe_to_deactivate(self, candidates: Iterable[str]) -> set[str]:
        """Return the candidates that no surface cell references.

        Args:
            candidates: Canonical identifiers considered for unloading.

        Returns:
            set[str]: Subset of ``candidates`` that is safe to unload.
        """

        remaining = set(candidates)
        for slot in self.iter_references():
            if not remaining:
                break
            remaining.discard(self._canonicalizer.canonicalize(slot.identifier))
        LOGGER.debug("%d candidate(s) unreferenced after surface scan", len(remaining))
        return remaining

    def scan(self) -> UsageReport:
        """Return a fresh :class:`UsageReport` for the whole surface."""

        by_kind: dict[ObjectKind, set[str]] = {}
        unresolved: set[str] = set()
        for slot in self.iter_references():
            canonical = self._canonicalizer.canonicalize(slot.identifier)
            if slot.kind is None:
                unresolved.add(canonical)
            else:
                by_kind.setdefault(slot.kind, set()).add(canonical)
        if unresolved:
            LOGGER.debug("Surface holds %d stale reference(s)", len(unresolved))
        return UsageReport(
            by_kind={kind: frozenset(identifiers) for kind, identifiers in by_kind.items()},
            unresolved=frozenset(unresolved),
            cells_scanned=self._surface.width * self._surface.height,
        )


__all__ = ["UsageReport", "UsageResolver"]
