"""Location definition data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class LocationDef:
    """Describes a node in the travel graph and its mining modifier."""

    id: str
    name: str
    description: str
    mining_multiplier: float
    unlock_cost: float
    connections: Tuple[str, ...]
