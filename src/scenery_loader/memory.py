# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""In-memory host and surface implementations plus JSON snapshot loading.

These back the command line interface and the test-suite. A snapshot is a
read-only JSON description of an installed catalog, the objects loaded when
the session starts and the map grid.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import SnapshotError
from .identifiers import split_legacy_identifier
from .interfaces import ObjectHost, UsageSurface
from .kinds import DEFAULT_CAPACITIES, ObjectKind
from .models import InstalledObject, LoadedObject, SlotReference

LOGGER = logging.getLogger(__name__)


class InMemoryHost(ObjectHost):
    """Host catalog kept in process memory with per-kind load limits.

    Identifiers resolve exactly, through declared aliases, or, for legacy
    identifiers, through the first installed object sharing the
    ``source|name`` prefix.
    """

    def __init__(
        self,
        installed: Iterable[InstalledObject],
        *,
        members: Mapping[str, Sequence[str]] | None = None,
        capacities: Mapping[ObjectKind, int] | None = None,
        available: bool = True,
    ) -> None:
        """Create a host over ``installed`` with nothing loaded.

        Args:
            installed: Installed catalog in enumeration order.
            members: Raw member identifiers of each scenery group.
            capacities: Load limits per kind; defaults to the game limits.
            available: Availability flag reported to sessions.
        """

        self._installed = tuple(installed)
        self._members = {key: tuple(value) for key, value in (members or {}).items()}
        self._capacities = dict(DEFAULT_CAPACITIES if capacities is None else capacities)
        self._available = available
        self._by_identifier: dict[str, InstalledObject] = {}
        self._by_prefix: dict[str, InstalledObject] = {}
        for entry in self._installed:
            for raw in entry.raw_identifiers():
                self._by_identifier.setdefault(raw, entry)
                parsed = split_legacy_identifier(raw)
                if parsed is not None:
                    self._by_prefix.setdefault(parsed.prefix, entry)
        self._loaded: dict[str, LoadedObject] = {}
        self.load_calls: list[str] = []
        self.unload_calls: list[str] = []

    @property
    def available(self) -> bool:
        return self._available

    def enumerate_installed(self) -> Sequence[InstalledObject]:
        return self._installed

    def enumerate_active(self, kind: ObjectKind) -> Sequence[LoadedObject]:
        return tuple(loaded for loaded in self._loaded.values() if loaded.kind is kind)

    def resolve(self, identifier: str) -> InstalledObject | None:
        """Return the installed entry ``identifier`` refers to, if any."""

        entry = self._by_identifier.get(identifier)
        if entry is not None:
            return entry
        parsed = split_legacy_identifier(identifier)
        if parsed is None:
            return None
        return self._by_prefix.get(parsed.prefix)

    def load(self, identifier: str) -> LoadedObject | None:
        self.load_calls.append(identifier)
        entry = self.resolve(identifier)
        if entry is None:
            LOGGER.debug("No installed object matches %r", identifier)
            return None
        existing = self._loaded.get(entry.identifier)
        if existing is not None:
            return existing
        limit = self._capacities.get(entry.kind)
        if limit is not None and self.loaded_count(entry.kind) >= limit:
            return None
        loaded = LoadedObject(
            identifier=entry.identifier,
            kind=entry.kind,
            items=self._members.get(entry.identifier, ()),
        )
        self._loaded[entry.identifier] = loaded
        return loaded

    def load_many(self, identifiers: Sequence[str]) -> list[LoadedObject | None]:
        return [self.load(identifier) for identifier in identifiers]

    def unload(self, identifiers: str | Sequence[str]) -> None:
        batch = [identifiers] if isinstance(identifiers, str) else list(identifiers)
        for identifier in batch:
            self.unload_calls.append(identifier)
            entry = self.resolve(identifier)
            if entry is not None:
                self._loaded.pop(entry.identifier, None)

    def is_loaded(self, identifier: str) -> bool:
        """Return ``True`` when the entry ``identifier`` resolves to is loaded."""

        entry = self.resolve(identifier)
        return entry is not None and entry.identifier in self._loaded

    def loaded_identifiers(self) -> frozenset[str]:
        """Return the identifiers of every loaded object."""

        return frozenset(self._loaded)

    def loaded_count(self, kind: ObjectKind) -> int:
        """Return the number of loaded objects of ``kind``."""

        return sum(1 for loaded in self._loaded.values() if loaded.kind is kind)


class GridSurface(UsageSurface):
    """Rectangular map grid with mutable cells."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("surface dimensions must not be negative")
        self._width = width
        self._height = height
        self._cells: dict[tuple[int, int], list[SlotReference]] = {}

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def slots(self, x: int, y: int) -> tuple[SlotReference, ...]:
        return tuple(self._cells.get((x, y), ()))

    def place(self, x: int, y: int, slot: SlotReference) -> None:
        """Add ``slot`` to the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates fall outside the grid.
        """

        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"cell ({x}, {y}) is outside a {self._width}x{self._height} surface")
        self._cells.setdefault((x, y), []).append(slot)

    def clear(self, x: int, y: int) -> None:
        """Remove every slot from the cell at ``(x, y)``."""

        self._cells.pop((x, y), None)


class SnapshotObject(BaseModel):
    """Installed object entry of a snapshot document."""

    model_config = ConfigDict(extra="forbid")

    identifier: str = Field(min_length=1)
    kind: ObjectKind
    name: str = ""
    authors: list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)


class SnapshotSlot(BaseModel):
    """Slot reference of a snapshot cell; unknown kinds become stale references."""

    model_config = ConfigDict(extra="forbid")

    kind: str | None = None
    identifier: str = Field(min_length=1)


class SnapshotCell(BaseModel):
    """Populated cell of the snapshot surface."""

    model_config = ConfigDict(extra="forbid")

    x: int = Field(ge=0)
    y: int = Field(ge=0)
    slots: list[SnapshotSlot] = Field(default_factory=list)


class SnapshotSurface(BaseModel):
    """Map grid of a snapshot document."""

    model_config = ConfigDict(extra="forbid")

    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)
    cells: list[SnapshotCell] = Field(default_factory=list)

    @model_validator(mode="after")
    def _cells_within_bounds(self) -> SnapshotSurface:
        for cell in self.cells:
            if cell.x >= self.width or cell.y >= self.height:
                raise ValueError(f"cell ({cell.x}, {cell.y}) is outside a {self.width}x{self.height} surface")
        return self


class Snapshot(BaseModel):
    """Root snapshot document."""

    model_config = ConfigDict(extra="forbid")

    installed: list[SnapshotObject] = Field(default_factory=list)
    active: list[str] = Field(default_factory=list)
    surface: SnapshotSurface = Field(default_factory=SnapshotSurface)

    def build_host(self, *, capacities: Mapping[ObjectKind, int] | None = None) -> InMemoryHost:
        """Return an :class:`InMemoryHost` with the snapshot's active objects loaded."""

        host = InMemoryHost(
            (
                InstalledObject(
                    identifier=entry.identifier,
                    kind=entry.kind,
                    name=entry.name,
                    authors=tuple(entry.authors),
                    aliases=tuple(entry.aliases),
                )
                for entry in self.installed
            ),
            members={entry.identifier: entry.items for entry in self.installed if entry.items},
            capacities=capacities,
        )
        for identifier in self.active:
            if host.load(identifier) is None:
                LOGGER.warning("Snapshot marks %r active but the host refused it", identifier)
        return host

    def build_surface(self) -> GridSurface:
        """Return a :class:`GridSurface` populated from the snapshot cells."""

        surface = GridSurface(self.surface.width, self.surface.height)
        for cell in self.surface.cells:
            for slot in cell.slots:
                surface.place(cell.x, cell.y, SlotReference(ObjectKind.from_raw(slot.kind), slot.identifier))
        return surface


def load_snapshot(path: Path) -> Snapshot:
    """Read and validate a snapshot document.

    Args:
        path: JSON file to read.

    Returns:
        Snapshot: Validated snapshot model.

    Raises:
        SnapshotError: If the file is missing, is not JSON or fails validation.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SnapshotError(f"Snapshot {path} does not exist") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {exc}") from exc
    try:
        return Snapshot.model_validate(payload)
    except ValidationError as exc:
        raise SnapshotError(f"Snapshot {path} failed validation: {exc}") from exc


__all__ = [
    "GridSurface",
    "InMemoryHost",
    "Snapshot",
    "SnapshotCell",
    "SnapshotObject",
    "SnapshotSlot",
    "SnapshotSurface",
    "load_snapshot",
]
