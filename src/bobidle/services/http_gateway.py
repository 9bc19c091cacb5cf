"""HTTP client for the /api/game endpoints."""
from __future__ import annotations

from typing import Any

import httpx

from bobidle.domain.state import GameState, new_game_state
from bobidle.services.errors import StorageFailureError, ValidationFailedError
from bobidle.services.reconciliation_store import LoadResult
from bobidle.services.state_codec import GameStateCodec
from bobidle.services.state_validator import StateValidator


class HttpGameGateway:
    """Talks to a remote save server with the same contract as ReconciliationStore."""

    def __init__(
        self,
        base_url: str,
        *,
        codec: GameStateCodec,
        validator: StateValidator,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._codec = codec
        self._validator = validator
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def load(self) -> LoadResult:
        data = self._request("GET", "/api/game")
        if not isinstance(data, dict):
            raise StorageFailureError("Server returned a non-object game state.")
        issues = self._validator.validate(data)
        if issues:
            raise StorageFailureError(f"Server returned invalid game state: {'; '.join(issues)}")
        idle_earnings = data.get("idleEarnings", 0.0)
        if isinstance(idle_earnings, bool) or not isinstance(idle_earnings, (int, float)):
            raise StorageFailureError("Server returned an invalid idleEarnings value.")
        return LoadResult(state=self._codec.decode(data), idle_earnings=float(idle_earnings))

    def save(self, state: GameState) -> None:
        self._request("POST", "/api/game", json=self._codec.encode(state))

    def reset(self) -> GameState:
        self._request("POST", "/api/reset")
        return new_game_state(self._codec.start_location_id)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise StorageFailureError(f"{method} {path} failed: {exc}") from exc
        try:
            data = response.json()
        except ValueError:
            data = None
        if response.status_code == 400:
            details = data.get("details", []) if isinstance(data, dict) else []
            raise ValidationFailedError([str(detail) for detail in details])
        if response.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise StorageFailureError(
                f"{method} {path} returned {response.status_code}: {message or response.text}"
            )
        return data
