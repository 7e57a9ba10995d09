# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Bookkeeping for the objects currently loaded by the host.

Every load and unload issued by the engine goes through
:class:`ActivationTracker` so that its active set stays in lockstep with the
host. Other components query the tracker instead of the host.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from .config import LoaderConfig
from .interfaces import ObjectHost
from .kinds import ObjectKind
from .models import LoadedObject, dedupe_identifiers

LOGGER = logging.getLogger(__name__)


class ActivationTracker:
    """Track active identifiers and route load/unload calls to the host."""

    def __init__(self, host: ObjectHost, *, config: LoaderConfig | None = None) -> None:
        """Initialise an empty tracker bound to ``host``.

        Args:
            host: Host activation API receiving every load and unload.
            config: Session configuration providing per-kind capacities.
        """

        self._host = host
        self._config = config or LoaderConfig()
        self._active: dict[str, ObjectKind] = {}
        self._counts: Counter[ObjectKind] = Counter()

    def sync(self) -> int:
        """Rebuild the active set from the host's own enumeration.

        Returns:
            int: Number of active identifiers after synchronisation.
        """

        self._active.clear()
        self._counts.clear()
        for kind in ObjectKind:
            for loaded in self._host.enumerate_active(kind):
                self._record(loaded)
        LOGGER.debug("Synchronised %d active objects from host", len(self._active))
        return len(self._active)

    def is_active(self, identifier: str) -> bool:
        """Return ``True`` when ``identifier`` is currently loaded."""

        return identifier in self._active

    def kind_of(self, identifier: str) -> ObjectKind | None:
        """Return the kind recorded for an active ``identifier``."""

        return self._active.get(identifier)

    def active_identifiers(self, kind: ObjectKind | None = None) -> tuple[str, ...]:
        """Return active identifiers in activation order, optionally for one kind."""

        if kind is None:
            return tuple(self._active)
        return tuple(identifier for identifier, active_kind in self._active.items() if active_kind is kind)

    def active_count(self, kind: ObjectKind) -> int:
        """Return the number of active objects of ``kind``."""

        return self._counts[kind]

    def capacity(self, kind: ObjectKind) -> int | None:
        """Return the session maximum for ``kind`` or ``None`` when uncapped."""

        return self._config.capacity(kind)

    def is_full(self, kind: ObjectKind) -> bool:
        """Return ``True`` when no further objects of ``kind`` may be loaded."""

        limit = self.capacity(kind)
        return limit is not None and self._counts[kind] >= limit

    def activate(self, identifier: str) -> bool:
        """Load ``identifier`` when it is not already active.

        Args:
            identifier: Canonical identifier to load.

        Returns:
            bool: ``True`` when the object was newly loaded; ``False`` when it
            was already active or the host refused it.
        """

        if self.is_active(identifier):
            return False
        loaded = self._host.load(identifier)
        return self._accept(identifier, loaded)

    def activate_all(self, identifiers: Iterable[str]) -> bool:
        """Load every identifier in ``identifiers`` that is not yet active.

        Partial success is expected; callers re-check :meth:`is_active` to see
        which objects ended up loaded.

        Args:
            identifiers: Canonical identifiers to load.

        Returns:
            bool: ``True`` when at least one object was newly loaded.
        """

        pending = [identifier for identifier in dedupe_identifiers(identifiers) if not self.is_active(identifier)]
        if not pending:
            return False
        results = self._host.load_many(pending)
        succeeded = False
        for identifier, loaded in zip(pending, results, strict=True):
            succeeded = self._accept(identifier, loaded) or succeeded
        return succeeded

    def deactivate(self, identifiers: str | Sequence[str]) -> None:
        """Unload ``identifiers`` and drop them from the active set.

        The host is always called, even for identifiers that are not active.

        Args:
            identifiers: Identifier or identifiers to unload.
        """

        batch = [identifiers] if isinstance(identifiers, str) else list(identifiers)
        if not batch:
            return
        self._host.unload(batch[0] if isinstance(identifiers, str) else batch)
        for identifier in batch:
            kind = self._active.pop(identifier, None)
            if kind is not None:
                self._counts[kind] -= 1
        LOGGER.debug("Unloaded %d object(s)", len(batch))

    def peek(self, identifier: str) -> LoadedObject | None:
        """Describe ``identifier`` without changing whether it is active.

        The host only reveals group members and resolved identifiers on load,
        so inactive objects are loaded and immediately unloaded again.

        Args:
            identifier: Identifier to describe.

        Returns:
            LoadedObject | None: Host description, or ``None`` on refusal.
        """

        was_active = self.is_active(identifier)
        loaded = self._host.load(identifier)
        if loaded is None:
            LOGGER.debug("Peek of %r refused by host", identifier)
            return None
        if not was_active and not self.is_active(loaded.identifier):
            self._host.unload(loaded.identifier)
        return loaded

    def _accept(self, requested: str, loaded: LoadedObject | None) -> bool:
        if loaded is None:
            LOGGER.debug("Host refused to load %r", requested)
            return False
        if loaded.identifier in self._active:
            return False
        if self._config.enforce_capacity and self.is_full(loaded.kind):
            LOGGER.warning(
                "Capacity for %s reached (%s); unloading %r",
                loaded.kind.value,
                self.capacity(loaded.kind),
                loaded.identifier,
            )
            self._host.unload(loaded.identifier)
            return False
        if loaded.identifier != requested:
            LOGGER.debug("Host resolved %r to %r", requested, loaded.identifier)
        return self._record(loaded)

    def _record(self, loaded: LoadedObject) -> bool:
        if loaded.identifier in self._active:
            return False
        self._active[loaded.identifier] = loaded.kind
        self._counts[loaded.kind] += 1
        return True


__all__ = ["ActivationTracker"]
