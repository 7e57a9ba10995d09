# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

import pytest

from helpers.catalogs import default_catalog
from scenery_loader.kinds import ObjectKind
from scenery_loader.memory import GridSurface, InMemoryHost
from scenery_loader.models import InstalledObject
from scenery_loader.session import LoaderSession

HostFactory = Callable[..., InMemoryHost]


@pytest.fixture
def make_host() -> HostFactory:
    """Return a factory building an :class:`InMemoryHost` over the default catalog."""

    def _factory(
        installed: Sequence[InstalledObject] | None = None,
        members: Mapping[str, Sequence[str]] | None = None,
        capacities: Mapping[ObjectKind, int] | None = None,
        available: bool = True,
    ) -> InMemoryHost:
        default_installed, default_members = default_catalog()
        return InMemoryHost(
            default_installed if installed is None else installed,
            members=default_members if members is None else members,
            capacities=capacities,
            available=available,
        )

    return _factory


@pytest.fixture
def host(make_host: HostFactory) -> InMemoryHost:
    return make_host()


@pytest.fixture
def surface() -> GridSurface:
    return GridSurface(4, 4)


@pytest.fixture
def session(host: InMemoryHost, surface: GridSurface) -> LoaderSession:
    return LoaderSession.open(host, surface)
