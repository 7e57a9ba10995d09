# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Canonical identifier resolution for legacy object references.

Legacy identifiers are three fixed-width segments joined by ``|``: the
source flags, the object name and a checksum. The same logical object can be
shipped under different checksums by different packages, so every variant
of a ``source|name`` prefix maps onto the identifier the host tracks for the
first entry observed with that prefix.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Final, NamedTuple

from .models import InstalledObject, LoadedObject

LOGGER = logging.getLogger(__name__)

SEGMENT_WIDTH: Final[int] = 8
SEPARATOR: Final[str] = "|"
LEGACY_IDENTIFIER_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<source>[^|]{{{SEGMENT_WIDTH}}})\|(?P<name>[^|]{{{SEGMENT_WIDTH}}})\|(?P<checksum>[^|]{{{SEGMENT_WIDTH}}})$",
)

PeekCallable = Callable[[str], LoadedObject | None]


class LegacyIdentifier(NamedTuple):
    """Segments of a legacy identifier."""

    source: str
    name: str
    checksum: str

    @property
    def prefix(self) -> str:
        """Return the ``source|name`` key shared by every checksum variant."""

        return f"{self.source}{SEPARATOR}{self.name}"


def split_legacy_identifier(raw: str) -> LegacyIdentifier | None:
    """Return the segments of ``raw`` or ``None`` when it is not a legacy identifier.

    Args:
        raw: Identifier text as referenced by a group or a map cell.

    Returns:
        LegacyIdentifier | None: Parsed segments when ``raw`` matches the
        three-segment pattern; otherwise ``None``.
    """

    match = LEGACY_IDENTIFIER_RE.match(raw)
    if match is None:
        return None
    return LegacyIdentifier(match["source"], match["name"], match["checksum"])


class IdentifierCanonicalizer:
    """Map raw object references to the identifier the host tracks.

    The alias table is populated from the installed catalog and, for prefixes
    never seen there, by peeking the host. Entries are never replaced once
    recorded.
    """

    def __init__(self, *, peek: PeekCallable | None = None) -> None:
        """Initialise an empty alias table.

        Args:
            peek: Optional side-effect-free host lookup used for prefixes that
                are missing from the table.
        """

        self._aliases: dict[str, str] = {}
        self._exact: dict[str, str] = {}
        self._peek = peek

    def bind_peek(self, peek: PeekCallable | None) -> None:
        """Install the host lookup used for unseen prefixes."""

        self._peek = peek

    def observe(self, raw: str, tracked: str | None = None) -> str:
        """Record that ``raw`` refers to the object the host tracks as ``tracked``.

        Legacy identifiers are recorded under their ``source|name`` prefix and
        any other identifier is recorded as-is. Existing entries are never
        replaced.

        Args:
            raw: Identifier or alias observed on an installed or loaded object.
            tracked: Identifier the host tracks the object under. Defaults to
                ``raw``.

        Returns:
            str: Canonical identifier recorded for ``raw`` after the call.
        """

        target = self._settle(raw if tracked is None else tracked)
        parsed = split_legacy_identifier(raw)
        if parsed is None:
            return self._exact.setdefault(raw, target)
        return self._aliases.setdefault(parsed.prefix, target)

    def observe_installed(self, objects: Iterable[InstalledObject]) -> None:
        """Map every identifier and alias of ``objects`` onto the entry's identifier."""

        for entry in objects:
            for raw in entry.raw_identifiers():
                self.observe(raw, entry.identifier)
        LOGGER.debug("Alias table holds %d prefixes", len(self._aliases))

    def lookup(self, raw: str) -> str | None:
        """Return the recorded identifier for the prefix of ``raw`` without peeking."""

        parsed = split_legacy_identifier(raw)
        if parsed is None:
            return None
        return self._aliases.get(parsed.prefix)

    def canonicalize(self, raw: str) -> str:
        """Return the canonical identifier for ``raw``.

        Args:
            raw: Raw identifier referenced by a group member or a map cell.

        Returns:
            str: Identifier the host tracks for the logical object. Unknown
            non-legacy identifiers and unresolvable prefixes are returned
            unchanged.
        """

        parsed = split_legacy_identifier(raw)
        if parsed is None:
            return self._exact.get(raw, raw)
        known = self._aliases.get(parsed.prefix)
        if known is not None:
            return known
        if self._peek is None:
            return raw
        loaded = self._peek(raw)
        if loaded is None:
            LOGGER.debug("Host could not resolve %r; keeping it as-is", raw)
            return raw
        return self._aliases.setdefault(parsed.prefix, self._settle(loaded.identifier))

    def canonicalize_all(self, raws: Iterable[str]) -> tuple[str, ...]:
        """Canonicalize every identifier in ``raws`` keeping order and duplicates."""

        return tuple(self.canonicalize(raw) for raw in raws)

    def _settle(self, identifier: str) -> str:
        # Recorded values are fixed points of canonicalize.
        parsed = split_legacy_identifier(identifier)
        if parsed is None:
            return self._exact.setdefault(identifier, identifier)
        return self._aliases.setdefault(parsed.prefix, identifier)

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, raw: object) -> bool:
        return isinstance(raw, str) and self.lookup(raw) is not None


__all__ = [
    "IdentifierCanonicalizer",
    "LEGACY_IDENTIFIER_RE",
    "LegacyIdentifier",
    "split_legacy_identifier",
]
