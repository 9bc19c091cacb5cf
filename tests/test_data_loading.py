from __future__ import annotations

from pathlib import Path

import pytest

from bobidle.data.errors import DataLoadError, DataReferenceError, DataValidationError
from bobidle.data.repositories import LocationsRepository, UpgradesRepository
from tests.helpers.economy_fixtures import LOCATIONS, UPGRADES, write_json


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir


def test_locations_repo_loads_definitions(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(definitions_dir / "locations.json", LOCATIONS)

    repo = LocationsRepository(base_path=definitions_dir)
    belt = repo.get("belt")

    assert [location.id for location in repo.all()] == ["earth", "belt", "mars", "jupiter"]
    assert belt.mining_multiplier == pytest.approx(1.5)
    assert belt.unlock_cost == pytest.approx(500)
    assert belt.connections == ("earth", "mars", "jupiter")


def test_locations_repo_get_missing_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(definitions_dir / "locations.json", LOCATIONS)

    with pytest.raises(KeyError):
        LocationsRepository(base_path=definitions_dir).get("pluto")


def test_missing_definition_file_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)

    with pytest.raises(DataLoadError):
        LocationsRepository(base_path=definitions_dir).all()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "upgrades.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError):
        UpgradesRepository(base_path=definitions_dir).all()


def test_location_with_non_positive_multiplier_rejected(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(
        definitions_dir / "locations.json",
        {"earth": {"name": "Earth", "mining_multiplier": 0, "unlock_cost": 0, "connections": []}},
    )

    with pytest.raises(DataValidationError):
        LocationsRepository(base_path=definitions_dir).all()


def test_location_with_boolean_cost_rejected(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(
        definitions_dir / "locations.json",
        {"earth": {"name": "Earth", "mining_multiplier": 1, "unlock_cost": True, "connections": []}},
    )

    with pytest.raises(DataValidationError):
        LocationsRepository(base_path=definitions_dir).all()


def test_location_connection_to_unknown_rejected(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(
        definitions_dir / "locations.json",
        {"earth": {"name": "Earth", "mining_multiplier": 1, "unlock_cost": 0, "connections": ["moon"]}},
    )

    with pytest.raises(DataReferenceError):
        LocationsRepository(base_path=definitions_dir).all()


def test_upgrades_repo_parses_effects_and_prerequisites(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(definitions_dir / "upgrades.json", UPGRADES)

    repo = UpgradesRepository(base_path=definitions_dir)
    mining2 = repo.get("mining2")
    automation = repo.get("automation1")

    assert mining2.prerequisite == "mining1"
    assert mining2.effect.kind == "additive_rate_bonus"
    assert mining2.effect.value == pytest.approx(2)
    assert automation.effect.kind == "accrual_multiplier"
    assert automation.effect.value == pytest.approx(2)
    assert repo.get("mining1").prerequisite is None


def test_upgrade_with_unknown_effect_kind_rejected(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(
        definitions_dir / "upgrades.json",
        {"warp": {"name": "Warp", "cost": 1, "effect": {"kind": "teleport", "amount": 1}}},
    )

    with pytest.raises(DataValidationError):
        UpgradesRepository(base_path=definitions_dir).all()


def test_upgrade_with_missing_effect_value_rejected(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(
        definitions_dir / "upgrades.json",
        {"auto": {"name": "Auto", "cost": 1, "effect": {"kind": "accrual_multiplier", "amount": 2}}},
    )

    with pytest.raises(DataValidationError):
        UpgradesRepository(base_path=definitions_dir).all()


def test_upgrade_requiring_unknown_upgrade_rejected(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    write_json(
        definitions_dir / "upgrades.json",
        {
            "mining2": {
                "name": "Advanced Mining",
                "cost": 1,
                "requires": "mining1",
                "effect": {"kind": "additive_rate_bonus", "amount": 2},
            }
        },
    )

    with pytest.raises(DataReferenceError):
        UpgradesRepository(base_path=definitions_dir).all()


def test_shipped_definitions_load() -> None:
    locations = LocationsRepository().all()
    upgrades = UpgradesRepository().all()

    assert {location.id for location in locations} >= {"earth", "asteroid-belt", "sun"}
    assert {upgrade.id for upgrade in upgrades} == {"mining1", "efficiency1", "mining2", "automation1"}
