"""Static travel graph with per-node mining multipliers."""
from __future__ import annotations

from typing import Dict, Iterable, Tuple

from bobidle.data.errors import DataReferenceError, DataValidationError
from bobidle.domain.defs import LocationDef
from bobidle.domain.state import DEFAULT_STARTING_LOCATION_ID, GameState


class LocationGraph:
    """Read-only lookups over location definitions.

    Adjacency is undirected: construction fails unless every declared
    connection is mirrored by the destination.
    """

    def __init__(
        self,
        locations: Iterable[LocationDef],
        *,
        start_location_id: str = DEFAULT_STARTING_LOCATION_ID,
    ) -> None:
        self._locations: Dict[str, LocationDef] = {}
        for location in locations:
            if location.id in self._locations:
                raise DataValidationError(f"Duplicate location id '{location.id}'.")
            self._locations[location.id] = location
        if start_location_id not in self._locations:
            raise DataReferenceError(f"Start location '{start_location_id}' is not defined.")
        self._start_location_id = start_location_id
        self._validate()

    @classmethod
    def from_repository(cls, repository, *, start_location_id: str = DEFAULT_STARTING_LOCATION_ID) -> "LocationGraph":
        return cls(repository.all(), start_location_id=start_location_id)

    @property
    def start_location_id(self) -> str:
        return self._start_location_id

    def contains(self, location_id: str) -> bool:
        return location_id in self._locations

    def get(self, location_id: str) -> LocationDef:
        try:
            return self._locations[location_id]
        except KeyError as exc:
            raise KeyError(location_id) from exc

    def all(self) -> list[LocationDef]:
        return list(self._locations.values())

    def multiplier_of(self, location_id: str) -> float:
        return self.get(location_id).mining_multiplier

    def neighbors_of(self, location_id: str) -> Tuple[str, ...]:
        return self.get(location_id).connections

    def unlock_cost_of(self, location_id: str) -> float:
        return self.get(location_id).unlock_cost

    def is_unlocked(self, state: GameState, location_id: str) -> bool:
        return self.contains(location_id) and state.is_unlocked(location_id)

    def _validate(self) -> None:
        for location in self._locations.values():
            if location.mining_multiplier <= 0:
                raise DataValidationError(
                    f"location '{location.id}' mining_multiplier must be > 0."
                )
            if location.unlock_cost < 0:
                raise DataValidationError(f"location '{location.id}' unlock_cost must be >= 0.")
            for to_id in location.connections:
                target = self._locations.get(to_id)
                if target is None:
                    raise DataReferenceError(
                        f"location '{location.id}' connection references unknown location '{to_id}'."
                    )
                if to_id == location.id:
                    raise DataValidationError(f"location '{location.id}' must not connect to itself.")
                if location.id not in target.connections:
                    raise DataValidationError(
                        f"Connection '{location.id}' -> '{to_id}' is not mirrored by '{to_id}'."
                    )
