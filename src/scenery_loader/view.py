# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Presentation model for the searchable scenery group list."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from rich.table import Table

from .controller import ToggleAction, ToggleResult
from .kinds import DEFAULT_CAPACITIES, kind_label
from .models import GroupStatus, SceneryGroup
from .session import LoaderSession
from .usage import UsageReport


class SortColumn(str, Enum):
    """Columns the group list can be sorted by."""

    NAME = "name"
    IDENTIFIER = "identifier"
    AUTHORS = "authors"
    STATUS = "status"


@dataclass(frozen=True, slots=True)
class GroupRow:
    """One rendered line of the group list."""

    name: str
    identifier: str
    authors: str
    status: GroupStatus

    def sort_key(self, column: SortColumn) -> str:
        """Return the case-folded value of ``column`` for sorting."""

        value = self.status.value if column is SortColumn.STATUS else getattr(self, column.value)
        return value.casefold()


def filter_groups(groups: Iterable[SceneryGroup], needle: str) -> list[SceneryGroup]:
    """Return the groups whose name, identifier or authors contain ``needle``."""

    return [group for group in groups if group.matches(needle)]


def build_rows(
    session: LoaderSession,
    *,
    search: str = "",
    sort: SortColumn | None = None,
    descending: bool = False,
) -> list[GroupRow]:
    """Return the rows shown for ``search``, optionally sorted.

    Args:
        session: Session providing the index and current statuses.
        search: Case-insensitive filter text.
        sort: Column to sort by; host order is kept when ``None``.
        descending: Reverse the sort order.

    Returns:
        list[GroupRow]: Rows in display order.
    """

    rows = [
        GroupRow(
            name=group.name,
            identifier=group.identifier,
            authors=group.authors,
            status=session.status(group.identifier),
        )
        for group in filter_groups(session.build_index(), search)
    ]
    if sort is not None:
        rows.sort(key=lambda row: row.sort_key(sort), reverse=descending)
    return rows


_STATUS_STYLES = {
    GroupStatus.LOADED: "green",
    GroupStatus.PARTIAL: "yellow",
    GroupStatus.NOT_LOADED: "dim",
}


def render_groups(rows: Sequence[GroupRow]) -> Table:
    """Return a Rich table listing ``rows``."""

    table = Table(title="Scenery Groups")
    table.add_column("Name")
    table.add_column("Identifier", overflow="fold")
    table.add_column("Author(s)")
    table.add_column("Status", no_wrap=True)
    for row in rows:
        table.add_row(row.name, row.identifier, row.authors, row.status.value, style=_STATUS_STYLES[row.status])
    return table


def render_capacities(session: LoaderSession, report: UsageReport | None = None) -> Table:
    """Return a Rich table of loaded counts against capacity per kind.

    When ``report`` is supplied an extra column shows how many loaded objects
    of each kind the map references.
    """

    table = Table(title="Loaded Objects")
    table.add_column("Kind")
    table.add_column("Loaded", justify="right")
    table.add_column("Maximum", justify="right")
    if report is not None:
        table.add_column("In use", justify="right")
    for kind in DEFAULT_CAPACITIES:
        limit = session.capacity(kind)
        cells = [kind_label(kind), str(session.active_count(kind)), "-" if limit is None else str(limit)]
        if report is not None:
            cells.append(str(report.count(kind)))
        table.add_row(*cells)
    return table


def describe_toggle(result: ToggleResult) -> str:
    """Return a one-line summary of ``result``."""

    if result.action is ToggleAction.LOAD:
        summary = f"{result.group}: loaded {len(result.loaded)} object(s)"
        if result.failed:
            summary += f", {len(result.failed)} refused"
    else:
        summary = f"{result.group}: unloaded {len(result.unloaded)} object(s)"
        if result.retained:
            summary += f", kept {len(result.retained)} in use"
        if result.group_unloaded:
            summary += ", group unloaded"
    return f"{summary} [{result.status.value}]"


__all__ = [
    "GroupRow",
    "SortColumn",
    "build_rows",
    "describe_toggle",
    "filter_groups",
    "render_capacities",
    "render_groups",
]
