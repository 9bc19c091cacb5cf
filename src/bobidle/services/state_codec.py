"""Conversion between GameState and the camelCase JSON payload."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from bobidle.domain.state import GameState

StatePayload = Dict[str, Any]


class GameStateCodec:
    """Converts runtime state to/from the wire payload.

    ``decode`` expects a payload that already passed StateValidator; it only
    normalizes collections so the returned state honours the unlock invariants.
    """

    def __init__(self, *, start_location_id: str) -> None:
        self._start_location_id = start_location_id

    @property
    def start_location_id(self) -> str:
        return self._start_location_id

    def encode(self, state: GameState) -> StatePayload:
        """Return a JSON-serializable payload with the eight state fields."""
        return {
            "resources": state.resources,
            "probes": state.probes,
            "replicationCost": state.replication_cost,
            "miningRate": state.mining_rate,
            "currentLocation": state.current_location,
            "unlockedLocations": list(state.unlocked_locations),
            "upgrades": dict(state.upgrades),
            "totalMined": state.total_mined,
        }

    def decode(self, payload: Mapping[str, Any]) -> GameState:
        current_location = str(payload["currentLocation"])
        return GameState(
            resources=float(payload["resources"]),
            probes=int(payload["probes"]),
            replication_cost=float(payload["replicationCost"]),
            mining_rate=float(payload["miningRate"]),
            current_location=current_location,
            unlocked_locations=tuple(
                self._coerce_unlocked_locations(payload["unlockedLocations"], current_location)
            ),
            upgrades={key: bool(value) for key, value in dict(payload["upgrades"]).items()},
            total_mined=float(payload["totalMined"]),
        )

    def _coerce_unlocked_locations(self, value: List[str], current_location: str) -> List[str]:
        unlocked: List[str] = []
        for location_id in value:
            if location_id not in unlocked:
                unlocked.append(location_id)
        if self._start_location_id not in unlocked:
            unlocked.insert(0, self._start_location_id)
        if current_location not in unlocked:
            unlocked.append(current_location)
        return unlocked
