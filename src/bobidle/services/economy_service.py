"""Accrual formula and the state transitions that depend on it."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List

from bobidle.domain.defs import UpgradeEffectDef
from bobidle.domain.location_graph import LocationGraph
from bobidle.domain.state import GameState
from bobidle.domain.upgrade_catalog import UpgradeCatalog
from bobidle.services.errors import (
    AlreadyPurchasedError,
    InsufficientResourcesError,
    NoSuchLocationError,
    NotReachableError,
    PrerequisiteNotMetError,
    UnknownUpgradeError,
)

REPLICATION_GROWTH_FACTOR = 1.15
MANUAL_MINE_SECONDS = 1.0


@dataclass(slots=True)
class TravelOptionView:
    """Renderable connection from the current location."""

    destination_id: str
    name: str
    unlocked: bool
    unlock_cost: float
    affordable: bool


@dataclass(slots=True)
class UpgradeOptionView:
    """Renderable upgrade entry."""

    upgrade_id: str
    name: str
    description: str
    cost: float
    purchased: bool
    available: bool
    affordable: bool


class EconomyService:
    """Pure economy operations; every method returns a new GameState."""

    def __init__(self, *, location_graph: LocationGraph, upgrade_catalog: UpgradeCatalog) -> None:
        self._location_graph = location_graph
        self._upgrade_catalog = upgrade_catalog

    @property
    def location_graph(self) -> LocationGraph:
        return self._location_graph

    @property
    def upgrade_catalog(self) -> UpgradeCatalog:
        return self._upgrade_catalog

    def accrual(self, state: GameState, elapsed_seconds: float) -> float:
        """Resources produced by ``state`` over ``elapsed_seconds``."""
        if elapsed_seconds < 0:
            raise ValueError("elapsed_seconds must be non-negative.")
        return self.current_rate(state) * elapsed_seconds

    def current_rate(self, state: GameState) -> float:
        """Resources produced per second at the current location."""
        return (
            state.mining_rate
            * state.probes
            * self._location_graph.multiplier_of(state.current_location)
            * self._upgrade_catalog.accrual_multiplier(state.upgrades)
        )

    def tick(self, state: GameState, elapsed_seconds: float) -> GameState:
        gained = self.accrual(state, elapsed_seconds)
        if gained == 0:
            return state
        return replace(
            state,
            resources=state.resources + gained,
            total_mined=state.total_mined + gained,
        )

    def mine_once(self, state: GameState) -> GameState:
        return self.tick(state, MANUAL_MINE_SECONDS)

    def replicate(self, state: GameState) -> GameState:
        if state.resources < state.replication_cost:
            raise InsufficientResourcesError(state.replication_cost, state.resources)
        return replace(
            state,
            resources=state.resources - state.replication_cost,
            probes=state.probes + 1,
            replication_cost=float(math.floor(state.replication_cost * REPLICATION_GROWTH_FACTOR)),
        )

    def purchase_upgrade(self, state: GameState, upgrade_id: str) -> GameState:
        if not self._upgrade_catalog.contains(upgrade_id):
            raise UnknownUpgradeError(f"Unknown upgrade '{upgrade_id}'.")
        upgrade = self._upgrade_catalog.get(upgrade_id)
        if state.has_upgrade(upgrade_id):
            raise AlreadyPurchasedError(f"Upgrade '{upgrade_id}' is already purchased.")
        if upgrade.prerequisite is not None and not state.has_upgrade(upgrade.prerequisite):
            raise PrerequisiteNotMetError(
                f"Upgrade '{upgrade_id}' requires '{upgrade.prerequisite}' first."
            )
        if state.resources < upgrade.cost:
            raise InsufficientResourcesError(upgrade.cost, state.resources)
        purchased = replace(
            state,
            resources=state.resources - upgrade.cost,
            upgrades={**state.upgrades, upgrade_id: True},
        )
        return self.apply_effect(purchased, upgrade.effect)

    def apply_effect(self, state: GameState, effect: UpgradeEffectDef) -> GameState:
        """Interpret a tagged upgrade effect."""
        if effect.kind == "additive_rate_bonus":
            return replace(state, mining_rate=state.mining_rate + effect.value)
        if effect.kind == "replication_cost_multiplier":
            return replace(state, replication_cost=state.replication_cost * effect.value)
        if effect.kind == "accrual_multiplier":
            # Read from the purchased flags by current_rate.
            return state
        raise ValueError(f"Unsupported effect kind '{effect.kind}'.")

    def travel(self, state: GameState, target_id: str) -> GameState:
        if not self._location_graph.contains(target_id):
            raise NoSuchLocationError(f"Unknown location '{target_id}'.")
        if target_id not in self._location_graph.neighbors_of(state.current_location):
            raise NotReachableError(
                f"'{target_id}' is not reachable from '{state.current_location}'."
            )
        if state.is_unlocked(target_id):
            return replace(state, current_location=target_id)
        unlock_cost = self._location_graph.unlock_cost_of(target_id)
        if state.resources < unlock_cost:
            raise InsufficientResourcesError(unlock_cost, state.resources)
        return replace(
            state,
            resources=state.resources - unlock_cost,
            unlocked_locations=state.unlocked_locations + (target_id,),
            current_location=target_id,
        )

    def travel_options(self, state: GameState) -> List[TravelOptionView]:
        options: List[TravelOptionView] = []
        for destination_id in self._location_graph.neighbors_of(state.current_location):
            location = self._location_graph.get(destination_id)
            unlocked = state.is_unlocked(destination_id)
            options.append(
                TravelOptionView(
                    destination_id=destination_id,
                    name=location.name,
                    unlocked=unlocked,
                    unlock_cost=location.unlock_cost,
                    affordable=unlocked or state.resources >= location.unlock_cost,
                )
            )
        return options

    def upgrade_options(self, state: GameState) -> List[UpgradeOptionView]:
        return [
            UpgradeOptionView(
                upgrade_id=upgrade.id,
                name=upgrade.name,
                description=upgrade.description,
                cost=upgrade.cost,
                purchased=state.has_upgrade(upgrade.id),
                available=self._upgrade_catalog.is_available(state, upgrade.id),
                affordable=state.resources >= upgrade.cost,
            )
            for upgrade in self._upgrade_catalog.all()
        ]
