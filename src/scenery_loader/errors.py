# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by the scenery loader."""

from __future__ import annotations


class SceneryLoaderError(RuntimeError):
    """Base class for loader failures that callers may want to report."""


class HostUnavailableError(SceneryLoaderError):
    """Raised when a session is opened without a usable host API."""

    def __init__(self, message: str | None = None) -> None:
        """Create the error with an optional ``message``."""

        super().__init__(message or "object host API is not available")


class UnknownGroupError(SceneryLoaderError, KeyError):
    """Raised when a toggle names a group missing from the catalog index."""

    def __init__(self, identifier: str) -> None:
        """Record the unknown ``identifier``."""

        super().__init__(f"Unknown scenery group '{identifier}'")
        self.identifier = identifier

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigError(SceneryLoaderError):
    """Raised when configuration input is invalid."""


class SnapshotError(SceneryLoaderError):
    """Raised when a snapshot document cannot be read or fails validation."""


__all__ = (
    "ConfigError",
    "HostUnavailableError",
    "SceneryLoaderError",
    "SnapshotError",
    "UnknownGroupError",
)
