"""HTTP surface for loading, saving and resetting the persisted snapshot."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bobidle.presentation.config import Settings
from bobidle.services.errors import StorageFailureError, ValidationFailedError
from bobidle.services.factories import EconomyComponents, build_economy_components, build_reconciliation_store
from bobidle.services.reconciliation_store import ReconciliationStore

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def create_app(store: ReconciliationStore, components: EconomyComponents) -> FastAPI:
    app = FastAPI(title="Bobiverse Idle Game API")

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [str(error.get("msg", error)) for error in exc.errors()]
        return _error_response(400, "Invalid game state", details=details)

    @app.get("/api/game")
    def get_game():
        try:
            result = store.load()
        except StorageFailureError as exc:
            return _error_response(500, str(exc))
        payload = components.codec.encode(result.state)
        payload["idleEarnings"] = result.idle_earnings
        return payload

    @app.post("/api/game")
    def save_game(payload: Any = Body(default=None)):
        try:
            store.save(payload)
        except ValidationFailedError as exc:
            return _error_response(400, "Invalid game state", details=exc.details)
        except StorageFailureError as exc:
            return _error_response(500, str(exc))
        return {"success": True}

    @app.post("/api/reset")
    def reset_game():
        try:
            store.reset()
        except StorageFailureError as exc:
            return _error_response(500, str(exc))
        return {"success": True}

    @app.get("/api/locations")
    def list_locations():
        return [
            {
                "id": location.id,
                "name": location.name,
                "description": location.description,
                "miningMultiplier": location.mining_multiplier,
                "unlockCost": location.unlock_cost,
                "connections": list(location.connections),
            }
            for location in components.location_graph.all()
        ]

    @app.get("/api/upgrades")
    def list_upgrades():
        return [
            {
                "id": upgrade.id,
                "name": upgrade.name,
                "description": upgrade.description,
                "cost": upgrade.cost,
                "requires": upgrade.prerequisite,
                "effect": {"kind": upgrade.effect.kind, "value": upgrade.effect.value},
            }
            for upgrade in components.upgrade_catalog.all()
        ]

    return app


def build_app(settings: Settings) -> FastAPI:
    """Wire the default definitions and SQLite snapshot into an app."""
    components = build_economy_components()
    store = build_reconciliation_store(components, settings.db_path)
    logger.info("Serving snapshot from %s", settings.db_path)
    return create_app(store, components)
