# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Contracts for the collaborators the loader engine consumes."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from .kinds import ObjectKind
from .models import InstalledObject, LoadedObject, SlotReference


@runtime_checkable
class ObjectHost(Protocol):
    """Define the host catalog and activation API.

    Load and unload calls are synchronous and take effect immediately. A
    ``None`` load result signals that the host refused the object, usually
    because the table for its kind is full. Unloading an object that is not
    loaded must be harmless.
    """

    @property
    @abstractmethod
    def available(self) -> bool:
        """Return ``True`` when the host API can be used in this process.

        Returns:
            bool: Availability flag checked once when a session opens.
        """
        raise NotImplementedError("ObjectHost.available must be implemented")

    @abstractmethod
    def enumerate_installed(self) -> Sequence[InstalledObject]:
        """Return the static installed catalog in host order.

        Returns:
            Sequence[InstalledObject]: Every installed entry regardless of kind.
        """
        raise NotImplementedError

    @abstractmethod
    def enumerate_active(self, kind: ObjectKind) -> Sequence[LoadedObject]:
        """Return the objects of ``kind`` currently loaded by the host.

        Args:
            kind: Object kind to enumerate.

        Returns:
            Sequence[LoadedObject]: Loaded objects of the requested kind.
        """
        raise NotImplementedError

    @abstractmethod
    def load(self, identifier: str) -> LoadedObject | None:
        """Load ``identifier`` and describe the resulting object.

        Loading an object that is already loaded returns its description
        without changing host state.

        Args:
            identifier: Raw or canonical identifier to load.

        Returns:
            LoadedObject | None: Loaded description, or ``None`` on refusal.
        """
        raise NotImplementedError

    @abstractmethod
    def load_many(self, identifiers: Sequence[str]) -> list[LoadedObject | None]:
        """Load several identifiers, one result per input in input order.

        Args:
            identifiers: Identifiers to load.

        Returns:
            list[LoadedObject | None]: Per-identifier outcomes.
        """
        raise NotImplementedError

    @abstractmethod
    def unload(self, identifiers: str | Sequence[str]) -> None:
        """Unload one or several identifiers.

        Args:
            identifiers: Identifier or identifiers to unload.
        """
        raise NotImplementedError


@runtime_checkable
class UsageSurface(Protocol):
    """Define the read-only map grid whose cells reference loaded objects."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Return the number of columns in the grid."""
        raise NotImplementedError

    @property
    @abstractmethod
    def height(self) -> int:
        """Return the number of rows in the grid."""
        raise NotImplementedError

    @abstractmethod
    def slots(self, x: int, y: int) -> Iterable[SlotReference]:
        """Return the populated typed slots of the cell at ``(x, y)``.

        Args:
            x: Column coordinate.
            y: Row coordinate.

        Returns:
            Iterable[SlotReference]: Slot references present on the cell.
        """
        raise NotImplementedError


class ViewerCloser(Protocol):
    """Callable closing an external viewer that lists loaded objects."""

    def __call__(self) -> None:
        """Close the viewer if it is open."""


__all__ = ["ObjectHost", "UsageSurface", "ViewerCloser"]
