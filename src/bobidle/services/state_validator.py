"""Trust-boundary checks for externally supplied game state."""
from __future__ import annotations

import math
from typing import Any, List, Mapping

from bobidle.domain.location_graph import LocationGraph
from bobidle.domain.upgrade_catalog import UpgradeCatalog

STATE_FIELDS = (
    "resources",
    "probes",
    "replicationCost",
    "miningRate",
    "currentLocation",
    "unlockedLocations",
    "upgrades",
    "totalMined",
)

# Probes are stored in a signed 64-bit SQLite column.
MAX_PROBES = 2**63 - 1


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    if not _is_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _is_non_negative_finite(value: Any) -> bool:
    return _is_finite_number(value) and value >= 0


def _is_positive_integer(value: Any) -> bool:
    if not _is_finite_number(value) or value > MAX_PROBES:
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return value >= 1


class StateValidator:
    """Collects every violation in a decoded client payload."""

    def __init__(self, *, location_graph: LocationGraph, upgrade_catalog: UpgradeCatalog) -> None:
        self._location_graph = location_graph
        self._upgrade_catalog = upgrade_catalog

    def validate(self, candidate: Any) -> List[str]:
        """Return violated-field descriptions; an empty list means acceptable."""
        if not isinstance(candidate, Mapping):
            return ["Invalid game state: expected a JSON object"]
        issues: List[str] = []
        for field_name in ("resources", "replicationCost", "miningRate", "totalMined"):
            if not _is_non_negative_finite(candidate.get(field_name)):
                issues.append(f"Invalid {field_name} value")
        if not _is_positive_integer(candidate.get("probes")):
            issues.append("Invalid probes value")
        current_location = candidate.get("currentLocation")
        if not isinstance(current_location, str) or not self._location_graph.contains(current_location):
            issues.append("Invalid currentLocation value")
        issues.extend(self._check_unlocked_locations(candidate.get("unlockedLocations")))
        issues.extend(self._check_upgrades(candidate.get("upgrades")))
        return issues

    def _check_unlocked_locations(self, value: Any) -> List[str]:
        if not isinstance(value, list) or not value:
            return ["Invalid unlockedLocations value"]
        issues: List[str] = []
        for entry in value:
            if not isinstance(entry, str):
                issues.append("Invalid unlockedLocations value: entries must be strings")
            elif not self._location_graph.contains(entry):
                issues.append(f"Invalid unlockedLocations value: unknown location '{entry}'")
        return issues

    def _check_upgrades(self, value: Any) -> List[str]:
        if not isinstance(value, Mapping):
            return ["Invalid upgrades value"]
        issues: List[str] = []
        for upgrade_id, purchased in value.items():
            if not isinstance(upgrade_id, str) or not self._upgrade_catalog.contains(upgrade_id):
                issues.append(f"Invalid upgrades value: unknown upgrade '{upgrade_id}'")
            elif not isinstance(purchased, bool):
                issues.append(f"Invalid upgrades value: '{upgrade_id}' must be a boolean")
        return issues