# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for loader session bootstrap and accessors."""

from __future__ import annotations

import pytest

from helpers.catalogs import OAK, TREES
from scenery_loader.config import LoaderConfig
from scenery_loader.errors import HostUnavailableError
from scenery_loader.interfaces import ObjectHost, UsageSurface
from scenery_loader.kinds import ObjectKind
from scenery_loader.memory import GridSurface, InMemoryHost
from scenery_loader.models import SlotReference
from scenery_loader.session import LoaderSession


def test_open_requires_available_host(make_host, surface: GridSurface) -> None:
    with pytest.raises(HostUnavailableError):
        LoaderSession.open(make_host(available=False), surface)


def test_open_syncs_active_objects(host: InMemoryHost, surface: GridSurface) -> None:
    host.load(OAK)
    session = LoaderSession.open(host, surface)

    assert session.is_active(OAK)
    assert session.active_count(ObjectKind.SMALL_SCENERY) == 1


def test_index_is_built_lazily(session: LoaderSession, host: InMemoryHost) -> None:
    assert not session.index.built
    assert host.load_calls == []

    session.build_index()
    assert session.index.built


def test_capacity_follows_configuration(host: InMemoryHost, surface: GridSurface) -> None:
    config = LoaderConfig(capacities={ObjectKind.BANNER: 10})
    session = LoaderSession.open(host, surface, config=config)

    assert session.capacity(ObjectKind.BANNER) == 10
    assert session.capacity(ObjectKind.LARGE_SCENERY) == 2047


def test_usage_reports_surface_references(session: LoaderSession, surface: GridSurface) -> None:
    session.toggle(TREES)
    surface.place(0, 0, SlotReference(ObjectKind.SMALL_SCENERY, OAK))

    report = session.usage()
    assert report.count(ObjectKind.SMALL_SCENERY) == 1
    assert report.referenced == frozenset({OAK})


def test_in_memory_implementations_satisfy_protocols(host: InMemoryHost, surface: GridSurface) -> None:
    assert isinstance(host, ObjectHost)
    assert isinstance(surface, UsageSurface)
