# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Explicit per-session context wiring the loader components together."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .activation import ActivationTracker
from .catalog import CatalogIndex
from .config import LoaderConfig
from .controller import ToggleController, ToggleResult
from .errors import HostUnavailableError
from .identifiers import IdentifierCanonicalizer
from .interfaces import ObjectHost, UsageSurface, ViewerCloser
from .kinds import ObjectKind
from .models import GroupStatus, SceneryGroup
from .usage import UsageReport, UsageResolver

LOGGER = logging.getLogger(__name__)


class LoaderSession:
    """Own the alias table, active set and catalog index for one host session.

    Presentation code talks to the session only; it never touches the host
    directly.
    """

    def __init__(
        self,
        host: ObjectHost,
        surface: UsageSurface,
        *,
        config: LoaderConfig | None = None,
    ) -> None:
        """Compose the engine components around ``host`` and ``surface``.

        Args:
            host: Host catalog and activation API.
            surface: Map grid consulted before unloading.
            config: Optional configuration; defaults apply when omitted.
        """

        self.config = config or LoaderConfig()
        self.host = host
        self.tracker = ActivationTracker(host, config=self.config)
        self.canonicalizer = IdentifierCanonicalizer(peek=self.tracker.peek)
        self.index = CatalogIndex(host, self.tracker, self.canonicalizer, config=self.config)
        self.resolver = UsageResolver(surface, self.canonicalizer, config=self.config)
        self.controller = ToggleController(self.index, self.tracker, self.resolver)

    @classmethod
    def open(
        cls,
        host: ObjectHost,
        surface: UsageSurface,
        *,
        config: LoaderConfig | None = None,
    ) -> LoaderSession:
        """Check host availability, create a session and sync its active set.

        Raises:
            HostUnavailableError: If the host API cannot be used.
        """

        if not host.available:
            raise HostUnavailableError()
        session = cls(host, surface, config=config)
        session.tracker.sync()
        return session

    def build_index(self) -> tuple[SceneryGroup, ...]:
        """Build the catalog index once and return its groups."""

        return self.index.build()

    def is_active(self, identifier: str) -> bool:
        """Return ``True`` when ``identifier`` is loaded."""

        return self.tracker.is_active(identifier)

    def status(self, group: str) -> GroupStatus:
        """Return the load status of ``group``."""

        return self.controller.status(group)

    def toggle(self, group: str) -> ToggleResult:
        """Toggle ``group`` and return what changed."""

        result = self.controller.toggle(group)
        LOGGER.debug("Toggled %r via %s -> %s", group, result.action.value, result.status.value)
        return result

    def active_count(self, kind: ObjectKind) -> int:
        """Return the number of loaded objects of ``kind``."""

        return self.tracker.active_count(kind)

    def capacity(self, kind: ObjectKind) -> int | None:
        """Return the maximum number of loaded objects of ``kind``."""

        return self.tracker.capacity(kind)

    def usage(self) -> UsageReport:
        """Scan the surface and report which objects are in use."""

        self.index.build()
        return self.resolver.scan()

    def add_viewer_closer(self, closer: ViewerCloser) -> Callable[[], None]:
        """Register a viewer to close before objects are unloaded."""

        return self.controller.add_viewer_closer(closer)


__all__ = ["LoaderSession"]
