"""Repository for travel graph location definitions."""
from __future__ import annotations

from typing import Dict

from bobidle.data.errors import DataReferenceError, DataValidationError
from bobidle.data.repositories.base import RepositoryBase
from bobidle.domain.defs import LocationDef


class LocationsRepository(RepositoryBase[LocationDef]):
    """Loads and validates location definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("locations.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, LocationDef]:
        locations_raw = self._require_mapping(raw, "locations.json")
        staged: Dict[str, dict[str, object]] = {}
        for location_id, payload in locations_raw.items():
            if not isinstance(location_id, str) or not location_id.strip():
                raise DataValidationError("location id must be a non-empty string.")
            staged[location_id] = self._require_mapping(payload, f"location '{location_id}'")

        definitions: Dict[str, LocationDef] = {}
        for location_id, mapping in staged.items():
            name = self._require_str(mapping.get("name"), f"location '{location_id}' name").strip()
            if not name:
                raise DataValidationError(f"location '{location_id}' name must not be empty.")
            description = self._require_str(
                mapping.get("description", ""), f"location '{location_id}' description"
            )
            multiplier = self._require_number(
                mapping.get("mining_multiplier"), f"location '{location_id}' mining_multiplier"
            )
            if multiplier <= 0:
                raise DataValidationError(
                    f"location '{location_id}' mining_multiplier must be > 0."
                )
            unlock_cost = self._require_number(
                mapping.get("unlock_cost"), f"location '{location_id}' unlock_cost"
            )
            if unlock_cost < 0:
                raise DataValidationError(f"location '{location_id}' unlock_cost must be >= 0.")

            connections: list[str] = []
            for to_id in self._require_str_list(
                mapping.get("connections"), f"location '{location_id}' connections"
            ):
                to_id = to_id.strip()
                if to_id not in staged:
                    raise DataReferenceError(
                        f"location '{location_id}' connection references unknown location '{to_id}'."
                    )
                if to_id == location_id:
                    raise DataValidationError(
                        f"location '{location_id}' must not connect to itself."
                    )
                if to_id in connections:
                    raise DataValidationError(
                        f"location '{location_id}' lists connection '{to_id}' twice."
                    )
                connections.append(to_id)

            definitions[location_id] = LocationDef(
                id=location_id,
                name=name,
                description=description,
                mining_multiplier=multiplier,
                unlock_cost=unlock_cost,
                connections=tuple(connections),
            )
        return definitions
