# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load or unload a scenery group in response to a single user action."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .activation import ActivationTracker
from .catalog import CatalogIndex
from .errors import UnknownGroupError
from .interfaces import ViewerCloser
from .models import GroupStatus, SceneryGroup
from .usage import UsageResolver

LOGGER = logging.getLogger(__name__)


class ToggleAction(str, Enum):
    """Branch taken by a toggle."""

    LOAD = "load"
    UNLOAD = "unload"


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """Outcome of one toggle.

    Attributes:
        group: Identifier of the toggled group.
        action: Branch that ran.
        loaded: Objects newly loaded, the group itself included.
        failed: Members that could not be loaded.
        unloaded: Members unloaded because nothing references them.
        retained: Members kept loaded because the surface references them.
        group_unloaded: ``True`` when the group object itself was unloaded.
        status: Group status after the toggle.
    """

    group: str
    action: ToggleAction
    status: GroupStatus
    loaded: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    unloaded: tuple[str, ...] = ()
    retained: tuple[str, ...] = ()
    group_unloaded: bool = False


class ToggleController:
    """Drive the tracker and usage resolver for group toggles."""

    def __init__(
        self,
        index: CatalogIndex,
        tracker: ActivationTracker,
        resolver: UsageResolver,
    ) -> None:
        self._index = index
        self._tracker = tracker
        self._resolver = resolver
        self._viewer_closers: list[ViewerCloser] = []

    def add_viewer_closer(self, closer: ViewerCloser) -> Callable[[], None]:
        """Register ``closer`` to run before any object is unloaded.

        Args:
            closer: Callback closing an external viewer of loaded objects.

        Returns:
            Callable[[], None]: Function removing the registration again.
        """

        self._viewer_closers.append(closer)
        return lambda: self._viewer_closers.remove(closer)

    def status(self, identifier: str) -> GroupStatus:
        """Return the load status of the group ``identifier``.

        Raises:
            UnknownGroupError: If the group is not in the catalog index.
        """

        return self._status(self._require(identifier))

    def is_complete(self, group: SceneryGroup) -> bool:
        """Return ``True`` when the group and all of its members are active."""

        return self._tracker.is_active(group.identifier) and all(
            self._tracker.is_active(item) for item in group.items
        )

    def toggle(self, identifier: str) -> ToggleResult:
        """Load an incomplete group or unload a complete one.

        An active but incomplete group whose load attempt makes no progress is
        treated as complete, so a group stuck at capacity can still be unloaded.

        Args:
            identifier: Scenery group identifier selected by the user.

        Returns:
            ToggleResult: Description of what changed.

        Raises:
            UnknownGroupError: If the group is not in the catalog index.
        """

        group = self._require(identifier)
        if not self.is_complete(group):
            result = self._load(group)
            if result.loaded or not self._tracker.is_active(group.identifier):
                return result
            LOGGER.debug("Load of %r made no progress; unloading instead", identifier)
        return self._unload(group)

    def _load(self, group: SceneryGroup) -> ToggleResult:
        loaded: list[str] = []
        if self._tracker.activate(group.identifier):
            loaded.append(group.identifier)
        members = group.distinct_items()
        before = {item for item in members if self._tracker.is_active(item)}
        self._tracker.activate_all(members)
        loaded.extend(item for item in members if item not in before and self._tracker.is_active(item))
        failed = tuple(item for item in members if not self._tracker.is_active(item))
        if failed:
            LOGGER.info("Group %r loaded partially; %d member(s) refused", group.identifier, len(failed))
        return ToggleResult(
            group=group.identifier,
            action=ToggleAction.LOAD,
            status=self._status(group),
            loaded=tuple(loaded),
            failed=failed,
        )

    def _unload(self, group: SceneryGroup) -> ToggleResult:
        members = group.distinct_items()
        for closer in tuple(self._viewer_closers):
            closer()
        safe = self._resolver.compute_safe_to_deactivate(members)
        unloaded = tuple(item for item in members if item in safe)
        retained = tuple(item for item in members if item not in safe)
        if unloaded:
            self._tracker.deactivate(list(unloaded))
        group_unloaded = not retained
        if group_unloaded:
            self._tracker.deactivate(group.identifier)
        else:
            LOGGER.info("Group %r stays loaded; %d member(s) still in use", group.identifier, len(retained))
        return ToggleResult(
            group=group.identifier,
            action=ToggleAction.UNLOAD,
            status=self._status(group),
            unloaded=unloaded,
            retained=retained,
            group_unloaded=group_unloaded,
        )

    def _status(self, group: SceneryGroup) -> GroupStatus:
        if self.is_complete(group):
            return GroupStatus.LOADED
        if self._tracker.is_active(group.identifier):
            return GroupStatus.PARTIAL
        return GroupStatus.NOT_LOADED

    def _require(self, identifier: str) -> SceneryGroup:
        group = self._index.get_group(identifier)
        if group is None:
            raise UnknownGroupError(identifier)
        return group


__all__ = ["ToggleAction", "ToggleController", "ToggleResult"]
