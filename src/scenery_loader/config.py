# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and TOML loading for scenery loader sessions."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .kinds import DEFAULT_CAPACITIES, PLACEMENT_KINDS, ObjectKind

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "scenery-loader"
DEFAULT_UNKNOWN_AUTHOR: Final[str] = "unknown"


class LoaderConfig(BaseModel):
    """Session-wide knobs for capacity enforcement and display."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    capacities: dict[ObjectKind, int] = Field(default_factory=lambda: dict(DEFAULT_CAPACITIES))
    scanned_kinds: tuple[ObjectKind, ...] = PLACEMENT_KINDS
    enforce_capacity: bool = True
    unknown_author: str = DEFAULT_UNKNOWN_AUTHOR
    author_separator: str = ", "

    @field_validator("capacities")
    @classmethod
    def _merge_capacities(cls, value: dict[ObjectKind, int]) -> dict[ObjectKind, int]:
        """Reject negative limits and fill in defaults for omitted kinds."""

        for kind, limit in value.items():
            if limit < 0:
                raise ValueError(f"capacity for '{kind.value}' must not be negative")
        merged = dict(DEFAULT_CAPACITIES)
        merged.update(value)
        return merged

    @field_validator("scanned_kinds")
    @classmethod
    def _require_scanned_kinds(cls, value: tuple[ObjectKind, ...]) -> tuple[ObjectKind, ...]:
        if not value:
            raise ValueError("scanned_kinds must name at least one object kind")
        return tuple(dict.fromkeys(value))

    def capacity(self, kind: ObjectKind) -> int | None:
        """Return the configured maximum for ``kind`` or ``None`` when unlimited.

        Args:
            kind: Object kind to inspect.

        Returns:
            int | None: Capacity for capped kinds; ``None`` otherwise.
        """

        return self.capacities.get(kind)


def _select_section(document: Mapping[str, Any]) -> Mapping[str, Any]:
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if isinstance(tool_section, Mapping) and PYPROJECT_SECTION_KEY in tool_section:
        section = tool_section[PYPROJECT_SECTION_KEY]
        if not isinstance(section, Mapping):
            raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] must be a table")
        return section
    return {key: value for key, value in document.items() if key != PYPROJECT_TOOL_KEY}


def load_config(path: Path | None) -> LoaderConfig:
    """Load a :class:`LoaderConfig` from a TOML document.

    The settings may live at the document root or under
    ``[tool.scenery-loader]`` so the loader can share a ``pyproject.toml``.

    Args:
        path: TOML file to read; ``None`` or a missing file yields defaults.

    Returns:
        LoaderConfig: Validated configuration.

    Raises:
        ConfigError: If the document cannot be parsed or fails validation.
    """

    if path is None or not path.exists():
        return LoaderConfig()
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    try:
        return LoaderConfig.model_validate(dict(_select_section(document)))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}: {exc}") from exc


__all__ = ["DEFAULT_UNKNOWN_AUTHOR", "LoaderConfig", "load_config"]
