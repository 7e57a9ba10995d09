# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Toggle scenarios for scenery groups."""

from __future__ import annotations

import pytest

from helpers.catalogs import EMPTY, HEDGE, OAK, PINE, SHRUBS, TREES, legacy
from scenery_loader.controller import ToggleAction
from scenery_loader.errors import UnknownGroupError
from scenery_loader.kinds import ObjectKind
from scenery_loader.memory import GridSurface, InMemoryHost
from scenery_loader.models import GroupStatus, InstalledObject, SlotReference
from scenery_loader.session import LoaderSession


def test_toggle_loads_group_and_items(session: LoaderSession, host: InMemoryHost) -> None:
    result = session.toggle(TREES)

    assert result.action is ToggleAction.LOAD
    assert result.loaded == (TREES, OAK, PINE)
    assert result.failed == ()
    assert result.status is GroupStatus.LOADED
    assert all(session.is_active(identifier) for identifier in (TREES, OAK, PINE))
    assert host.loaded_identifiers() == frozenset({TREES, OAK, PINE})


def test_toggle_keeps_referenced_items_and_group(
    session: LoaderSession,
    host: InMemoryHost,
    surface: GridSurface,
) -> None:
    session.toggle(TREES)
    surface.place(1, 2, SlotReference(ObjectKind.SMALL_SCENERY, OAK))

    result = session.toggle(TREES)

    assert result.action is ToggleAction.UNLOAD
    assert result.unloaded == (PINE,)
    assert result.retained == (OAK,)
    assert result.group_unloaded is False
    assert session.is_active(TREES)
    assert session.is_active(OAK)
    assert not session.is_active(PINE)
    assert host.loaded_identifiers() == frozenset({TREES, OAK})
    assert result.status is GroupStatus.PARTIAL


def test_toggle_unloads_group_when_nothing_is_used(session: LoaderSession, host: InMemoryHost) -> None:
    session.toggle(TREES)
    result = session.toggle(TREES)

    assert result.unloaded == (OAK, PINE)
    assert result.group_unloaded is True
    assert result.status is GroupStatus.NOT_LOADED
    assert host.loaded_identifiers() == frozenset()


def test_toggle_with_item_refused_at_capacity(make_host, surface: GridSurface) -> None:
    host_filler = make_host(
        installed=[
            InstalledObject(TREES, ObjectKind.SCENERY_GROUP, "Trees"),
            InstalledObject(OAK, ObjectKind.SMALL_SCENERY),
            InstalledObject(PINE, ObjectKind.SMALL_SCENERY),
            InstalledObject("rct2.filler", ObjectKind.SMALL_SCENERY),
        ],
        members={TREES: (OAK, PINE)},
        capacities={ObjectKind.SMALL_SCENERY: 2},
    )
    host_filler.load("rct2.filler")
    session = LoaderSession.open(host_filler, surface)

    first = session.toggle(TREES)
    assert first.loaded == (TREES, OAK)
    assert first.failed == (PINE,)
    assert first.status is GroupStatus.PARTIAL
    assert session.is_active(TREES)
    assert not session.is_active(PINE)

    second = session.toggle(TREES)
    assert second.action is ToggleAction.UNLOAD
    assert second.unloaded == (OAK, PINE)
    assert second.group_unloaded is True
    assert host_filler.loaded_identifiers() == frozenset({"rct2.filler"})


def test_group_stays_when_refused_item_is_still_on_the_map(make_host) -> None:
    host = make_host(capacities={ObjectKind.SMALL_SCENERY: 1})
    host.load(OAK)
    surface = GridSurface(2, 2)
    surface.place(0, 0, SlotReference(ObjectKind.SMALL_SCENERY, OAK))
    session = LoaderSession.open(host, surface)

    first = session.toggle(SHRUBS)
    assert first.failed == (PINE,)
    assert first.loaded == (SHRUBS, HEDGE)

    surface.place(1, 1, SlotReference(ObjectKind.SMALL_SCENERY, PINE))
    second = session.toggle(SHRUBS)
    assert second.unloaded == (HEDGE,)
    assert second.retained == (PINE,)
    assert second.group_unloaded is False
    assert session.is_active(SHRUBS)


def test_checksum_variants_load_one_underlying_item(surface: GridSurface) -> None:
    first = legacy("00000001", "NAME1", "0000CK01")
    second = legacy("00000001", "NAME1", "0000CK02")
    host = InMemoryHost(
        [
            InstalledObject("group.a", ObjectKind.SCENERY_GROUP, "A"),
            InstalledObject(first, ObjectKind.SMALL_SCENERY),
            InstalledObject(second, ObjectKind.SMALL_SCENERY),
        ],
        members={"group.a": (second, first)},
    )
    session = LoaderSession.open(host, surface)
    session.build_index()

    assert session.canonicalizer.canonicalize(first) == session.canonicalizer.canonicalize(second)
    result = session.toggle("group.a")

    assert result.loaded == ("group.a", first)
    assert host.loaded_identifiers() == frozenset({"group.a", first})


def test_shared_items_used_by_other_group_are_unloaded_only_when_unused(
    session: LoaderSession,
    surface: GridSurface,
) -> None:
    session.toggle(TREES)
    session.toggle(SHRUBS)
    assert session.status(SHRUBS) is GroupStatus.LOADED

    surface.place(0, 0, SlotReference(ObjectKind.SMALL_SCENERY, PINE))
    result = session.toggle(TREES)

    assert result.unloaded == (OAK,)
    assert result.retained == (PINE,)
    assert session.status(SHRUBS) is GroupStatus.LOADED


def test_group_is_incomplete_when_only_items_are_loaded(session: LoaderSession) -> None:
    session.tracker.activate_all([OAK, PINE])
    assert session.status(TREES) is GroupStatus.NOT_LOADED

    result = session.toggle(TREES)
    assert result.action is ToggleAction.LOAD
    assert result.loaded == (TREES,)
    assert result.status is GroupStatus.LOADED


def test_empty_group_round_trip(session: LoaderSession, host: InMemoryHost) -> None:
    assert session.toggle(EMPTY).loaded == (EMPTY,)
    result = session.toggle(EMPTY)

    assert result.group_unloaded is True
    assert not host.is_loaded(EMPTY)


def test_retoggle_reloads_after_unload(session: LoaderSession) -> None:
    session.toggle(TREES)
    session.toggle(TREES)
    result = session.toggle(TREES)

    assert result.action is ToggleAction.LOAD
    assert result.status is GroupStatus.LOADED


def test_viewers_close_before_anything_is_unloaded(session: LoaderSession, host: InMemoryHost) -> None:
    events: list[tuple[str, int]] = []
    session.toggle(TREES)
    baseline = len(host.unload_calls)

    def _close() -> None:
        events.append(("closed", len(host.unload_calls)))

    remove = session.add_viewer_closer(_close)
    session.toggle(TREES)
    assert events == [("closed", baseline)]
    assert len(host.unload_calls) > baseline

    remove()
    session.toggle(TREES)
    session.toggle(TREES)
    assert events == [("closed", baseline)]


def test_viewers_are_not_closed_when_loading(session: LoaderSession) -> None:
    closed: list[str] = []
    session.add_viewer_closer(lambda: closed.append("closed"))

    session.toggle(TREES)
    assert closed == []


def test_unknown_group_raises(session: LoaderSession) -> None:
    with pytest.raises(UnknownGroupError) as excinfo:
        session.toggle("rct2.missing")
    assert excinfo.value.identifier == "rct2.missing"
    with pytest.raises(KeyError):
        session.status("rct2.missing")


def test_alias_member_in_use_survives_toggle_and_tracker_matches_host() -> None:
    old = legacy("00000001", "TAS1", "0000AAAA")
    host = InMemoryHost(
        [
            InstalledObject("group.tas", ObjectKind.SCENERY_GROUP, "Tas"),
            InstalledObject("rct2.tas1", ObjectKind.SMALL_SCENERY, aliases=(old,)),
            InstalledObject("rct2.tas2", ObjectKind.SMALL_SCENERY, aliases=("tas2.old",)),
        ],
        members={"group.tas": (old, "tas2.old")},
    )
    surface = GridSurface(2, 2)
    session = LoaderSession.open(host, surface)

    loaded = session.toggle("group.tas")
    assert session.index["group.tas"].items == ("rct2.tas1", "rct2.tas2")
    assert loaded.loaded == ("group.tas", "rct2.tas1", "rct2.tas2")
    assert loaded.status is GroupStatus.LOADED

    surface.place(1, 0, SlotReference(ObjectKind.SMALL_SCENERY, "rct2.tas1"))
    surface.place(0, 1, SlotReference(ObjectKind.SMALL_SCENERY, "tas2.old"))
    unloaded = session.toggle("group.tas")

    assert unloaded.action is ToggleAction.UNLOAD
    assert unloaded.unloaded == ()
    assert set(unloaded.retained) == {"rct2.tas1", "rct2.tas2"}
    assert host.is_loaded("rct2.tas1")
    assert host.is_loaded("rct2.tas2")
    assert frozenset(session.tracker.active_identifiers()) == host.loaded_identifiers()
