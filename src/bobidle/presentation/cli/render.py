"""Shared CLI rendering helpers."""
from __future__ import annotations

import math
import os
from typing import List, Sequence

from bobidle.domain.location_graph import LocationGraph
from bobidle.domain.state import GameState
from bobidle.services.economy_service import TravelOptionView, UpgradeOptionView


def debug_enabled() -> bool:
    """Return True only when BOBIDLE_DEBUG is explicitly set to '1'."""
    return os.getenv("BOBIDLE_DEBUG") == "1"


def format_amount(value: float) -> str:
    """Floor and group thousands, the way resource counters are displayed."""
    return f"{math.floor(value):,}"


def format_rate(value: float) -> str:
    return f"{value:.1f}/s"


def render_status(state: GameState, *, rate: float, location_graph: LocationGraph) -> List[str]:
    location = location_graph.get(state.current_location)
    lines = [
        f"Resources:    {format_amount(state.resources)}",
        f"Probes:       {state.probes:,}",
        f"Mining rate:  {format_rate(rate)}",
        f"Total mined:  {format_amount(state.total_mined)}",
        f"Replicate:    (Cost: {format_amount(state.replication_cost)})",
        f"Location:     {location.name} - {location.description}",
    ]
    if debug_enabled():
        owned = sorted(key for key, value in state.upgrades.items() if value)
        lines.append(f"[debug] unlocked={list(state.unlocked_locations)} upgrades={owned}")
    return lines


def render_travel_options(options: Sequence[TravelOptionView]) -> List[str]:
    lines: List[str] = []
    for index, option in enumerate(options, start=1):
        suffix = "" if option.unlocked else f" (Unlock: {format_amount(option.unlock_cost)})"
        marker = "" if option.affordable else " [locked]"
        lines.append(f"{index}. {option.name}{suffix}{marker}")
    return lines


def render_upgrade_options(options: Sequence[UpgradeOptionView]) -> List[str]:
    lines: List[str] = []
    for index, option in enumerate(options, start=1):
        if option.purchased:
            status = "purchased"
        elif not option.available:
            status = "requires prerequisite"
        elif not option.affordable:
            status = "too expensive"
        else:
            status = "available"
        lines.append(
            f"{index}. {option.name} - {format_amount(option.cost)} [{status}]: {option.description}"
        )
    return lines
