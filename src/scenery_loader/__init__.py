# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Usage-aware scenery group loading engine."""

from __future__ import annotations

from importlib import metadata

from .activation import ActivationTracker
from .catalog import CatalogIndex
from .config import LoaderConfig, load_config
from .controller import ToggleAction, ToggleController, ToggleResult
from .errors import ConfigError, HostUnavailableError, SceneryLoaderError, SnapshotError, UnknownGroupError
from .identifiers import IdentifierCanonicalizer, split_legacy_identifier
from .kinds import DEFAULT_CAPACITIES, ObjectKind
from .models import GroupStatus, InstalledObject, LoadedObject, SceneryGroup, SlotReference
from .session import LoaderSession
from .usage import UsageReport, UsageResolver

try:
    __version__ = metadata.version("scenery-group-loader")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "ActivationTracker",
    "CatalogIndex",
    "ConfigError",
    "DEFAULT_CAPACITIES",
    "GroupStatus",
    "HostUnavailableError",
    "IdentifierCanonicalizer",
    "InstalledObject",
    "LoadedObject",
    "LoaderConfig",
    "LoaderSession",
    "ObjectKind",
    "SceneryGroup",
    "SceneryLoaderError",
    "SlotReference",
    "SnapshotError",
    "ToggleAction",
    "ToggleController",
    "ToggleResult",
    "UnknownGroupError",
    "UsageReport",
    "UsageResolver",
    "__version__",
    "load_config",
    "split_legacy_identifier",
]
