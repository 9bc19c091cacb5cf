"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple

DEFAULT_STARTING_LOCATION_ID = "earth"
DEFAULT_REPLICATION_COST = 100.0
DEFAULT_MINING_RATE = 1.0


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable economy snapshot; operations return a new instance.

    ``unlocked_locations`` keeps unlock order but never holds duplicates.
    ``upgrades`` only ever gains ``True`` entries.
    """

    resources: float = 0.0
    probes: int = 1
    replication_cost: float = DEFAULT_REPLICATION_COST
    mining_rate: float = DEFAULT_MINING_RATE
    current_location: str = DEFAULT_STARTING_LOCATION_ID
    unlocked_locations: Tuple[str, ...] = (DEFAULT_STARTING_LOCATION_ID,)
    upgrades: Mapping[str, bool] = field(default_factory=dict)
    total_mined: float = 0.0

    def has_upgrade(self, upgrade_id: str) -> bool:
        return bool(self.upgrades.get(upgrade_id, False))

    def is_unlocked(self, location_id: str) -> bool:
        return location_id in self.unlocked_locations


def new_game_state(start_location_id: str = DEFAULT_STARTING_LOCATION_ID) -> GameState:
    """Return the canonical starting state."""
    return GameState(
        current_location=start_location_id,
        unlocked_locations=(start_location_id,),
        upgrades={},
    )
