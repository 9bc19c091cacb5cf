"""Construct the shared economy stack from definition files."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bobidle.core.clock import Clock
from bobidle.data.repositories import LocationsRepository, SqliteSnapshotRepository, UpgradesRepository
from bobidle.domain.location_graph import LocationGraph
from bobidle.domain.upgrade_catalog import UpgradeCatalog
from bobidle.services.economy_service import EconomyService
from bobidle.services.http_gateway import HttpGameGateway
from bobidle.services.reconciliation_store import ReconciliationStore
from bobidle.services.state_codec import GameStateCodec
from bobidle.services.state_validator import StateValidator


@dataclass(slots=True)
class EconomyComponents:
    """Everything derived from the static catalogs."""

    location_graph: LocationGraph
    upgrade_catalog: UpgradeCatalog
    economy_service: EconomyService
    validator: StateValidator
    codec: GameStateCodec


def build_economy_components(definitions_path: Path | str | None = None) -> EconomyComponents:
    location_graph = LocationGraph.from_repository(LocationsRepository(base_path=definitions_path))
    upgrade_catalog = UpgradeCatalog.from_repository(UpgradesRepository(base_path=definitions_path))
    return EconomyComponents(
        location_graph=location_graph,
        upgrade_catalog=upgrade_catalog,
        economy_service=EconomyService(
            location_graph=location_graph, upgrade_catalog=upgrade_catalog
        ),
        validator=StateValidator(location_graph=location_graph, upgrade_catalog=upgrade_catalog),
        codec=GameStateCodec(start_location_id=location_graph.start_location_id),
    )


def build_reconciliation_store(
    components: EconomyComponents,
    db_path: Path | str,
    *,
    clock: Clock | None = None,
) -> ReconciliationStore:
    return ReconciliationStore(
        repository=SqliteSnapshotRepository(db_path),
        economy_service=components.economy_service,
        validator=components.validator,
        codec=components.codec,
        clock=clock,
    )


def build_http_gateway(components: EconomyComponents, base_url: str) -> HttpGameGateway:
    return HttpGameGateway(base_url, codec=components.codec, validator=components.validator)
