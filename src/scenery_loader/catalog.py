# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Session-wide index of installed scenery groups."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from .activation import ActivationTracker
from .config import LoaderConfig
from .identifiers import IdentifierCanonicalizer
from .interfaces import ObjectHost
from .kinds import ObjectKind
from .models import InstalledObject, SceneryGroup

LOGGER = logging.getLogger(__name__)


class CatalogIndex(Mapping[str, SceneryGroup]):
    """Read-only mapping of scenery group identifiers to index records.

    The index is built once per session on first access. Iteration follows the
    host's enumeration order.
    """

    def __init__(
        self,
        host: ObjectHost,
        tracker: ActivationTracker,
        canonicalizer: IdentifierCanonicalizer,
        *,
        config: LoaderConfig | None = None,
    ) -> None:
        """Bind the index to the collaborators used while building it.

        Args:
            host: Host API used to enumerate the installed catalog.
            tracker: Tracker whose ``peek`` reveals group members.
            canonicalizer: Canonicalizer applied to every member identifier.
            config: Session configuration for author rendering.
        """

        self._host = host
        self._tracker = tracker
        self._canonicalizer = canonicalizer
        self._config = config or LoaderConfig()
        self._groups: dict[str, SceneryGroup] | None = None

    @property
    def built(self) -> bool:
        """Return ``True`` once :meth:`build` has run."""

        return self._groups is not None

    def build(self) -> tuple[SceneryGroup, ...]:
        """Build the index on first call and return the cached groups afterwards.

        Returns:
            tuple[SceneryGroup, ...]: Groups in host enumeration order.
        """

        return tuple(self._built_groups().values())

    def _built_groups(self) -> dict[str, SceneryGroup]:
        if self._groups is not None:
            return self._groups
        installed = tuple(self._host.enumerate_installed())
        self._canonicalizer.observe_installed(installed)
        groups: dict[str, SceneryGroup] = {}
        for entry in installed:
            if entry.kind is not ObjectKind.SCENERY_GROUP:
                continue
            if entry.identifier in groups:
                LOGGER.warning("Duplicate scenery group identifier %r ignored", entry.identifier)
                continue
            groups[entry.identifier] = self._index_group(entry)
        self._groups = groups
        LOGGER.debug("Indexed %d scenery groups from %d installed objects", len(groups), len(installed))
        return groups

    @property
    def groups(self) -> tuple[SceneryGroup, ...]:
        """Return every indexed group, building the index when needed."""

        return self.build()

    def get_group(self, identifier: str) -> SceneryGroup | None:
        """Return the group indexed under ``identifier`` or ``None``."""

        return self._built_groups().get(identifier)

    def groups_containing(self, item: str) -> tuple[SceneryGroup, ...]:
        """Return the groups that list the canonical ``item`` as a member."""

        return tuple(group for group in self.build() if item in group.items)

    def __getitem__(self, identifier: str) -> SceneryGroup:
        group = self.get_group(identifier)
        if group is None:
            raise KeyError(identifier)
        return group

    def __iter__(self) -> Iterator[str]:
        return iter(group.identifier for group in self.build())

    def __len__(self) -> int:
        return len(self.build())

    def _index_group(self, entry: InstalledObject) -> SceneryGroup:
        loaded = self._tracker.peek(entry.identifier)
        if loaded is None:
            LOGGER.warning("Could not read members of scenery group %r; indexing it empty", entry.identifier)
            members: tuple[str, ...] = ()
        else:
            members = self._canonicalizer.canonicalize_all(loaded.items)
        authors = self._config.author_separator.join(entry.authors) or self._config.unknown_author
        return SceneryGroup(
            name=entry.name,
            identifier=entry.identifier,
            authors=authors,
            items=members,
        )


__all__ = ["CatalogIndex"]
