# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration models and TOML loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from scenery_loader.config import LoaderConfig, load_config
from scenery_loader.errors import ConfigError
from scenery_loader.kinds import PLACEMENT_KINDS, ObjectKind


def test_defaults() -> None:
    config = LoaderConfig()

    assert config.capacity(ObjectKind.WALL) == 2047
    assert config.capacity(ObjectKind.FOOTPATH_RAILINGS) == 255
    assert config.capacity(ObjectKind.RIDE) is None
    assert config.scanned_kinds == PLACEMENT_KINDS
    assert config.unknown_author == "unknown"


def test_partial_capacities_merge_with_defaults() -> None:
    config = LoaderConfig(capacities={ObjectKind.BANNER: 12})

    assert config.capacity(ObjectKind.BANNER) == 12
    assert config.capacity(ObjectKind.SMALL_SCENERY) == 2047


def test_negative_capacity_is_rejected() -> None:
    with pytest.raises(ValidationError):
        LoaderConfig(capacities={ObjectKind.WALL: -1})


def test_assignment_is_validated() -> None:
    config = LoaderConfig()
    with pytest.raises(ValidationError):
        config.scanned_kinds = ()


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        LoaderConfig.model_validate({"capacity": 3})


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "absent.toml") == LoaderConfig()
    assert load_config(None) == LoaderConfig()


def test_load_config_root_table(tmp_path: Path) -> None:
    path = tmp_path / "loader.toml"
    path.write_text(
        'unknown_author = "anonymous"\nscanned_kinds = ["wall", "banner"]\n\n[capacities]\nwall = 100\n',
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.unknown_author == "anonymous"
    assert config.scanned_kinds == (ObjectKind.WALL, ObjectKind.BANNER)
    assert config.capacity(ObjectKind.WALL) == 100


def test_load_config_pyproject_section(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text(
        '[project]\nname = "park"\n\n[tool.scenery-loader]\nenforce_capacity = false\n',
        encoding="utf-8",
    )

    assert load_config(path).enforce_capacity is False


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("capacities = [", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(path)


def test_load_config_invalid_values(tmp_path: Path) -> None:
    path = tmp_path / "loader.toml"
    path.write_text("[capacities]\nwall = -5\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(path)
