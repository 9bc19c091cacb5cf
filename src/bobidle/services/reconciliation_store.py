"""Owner of the persisted snapshot: idle reconciliation and validated overwrite."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from bobidle.core.clock import Clock, SystemClock
from bobidle.data.errors import SnapshotStorageError
from bobidle.data.repositories import SqliteSnapshotRepository, StoredSnapshot
from bobidle.domain.state import GameState, new_game_state
from bobidle.services.economy_service import EconomyService
from bobidle.services.errors import StorageFailureError, ValidationFailedError
from bobidle.services.state_codec import GameStateCodec
from bobidle.services.state_validator import StateValidator

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_ID = 1

_LOCKS_GUARD = threading.Lock()
_SNAPSHOT_LOCKS: Dict[Tuple[str, int], threading.RLock] = {}


def _snapshot_lock(storage_key: str, snapshot_id: int) -> threading.RLock:
    """Return the lock shared by every store bound to the same snapshot."""
    with _LOCKS_GUARD:
        lock = _SNAPSHOT_LOCKS.get((storage_key, snapshot_id))
        if lock is None:
            lock = threading.RLock()
            _SNAPSHOT_LOCKS[(storage_key, snapshot_id)] = lock
        return lock


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Reconciled state plus the idle earnings folded into it."""

    state: GameState
    idle_earnings: float


class ReconciliationStore:
    """Serializes load/save/reset against one persisted snapshot."""

    def __init__(
        self,
        *,
        repository: SqliteSnapshotRepository,
        economy_service: EconomyService,
        validator: StateValidator,
        codec: GameStateCodec,
        clock: Clock | None = None,
        snapshot_id: int = DEFAULT_SNAPSHOT_ID,
    ) -> None:
        self._repository = repository
        self._economy_service = economy_service
        self._validator = validator
        self._codec = codec
        self._clock = clock or SystemClock()
        self._snapshot_id = snapshot_id
        self._lock = _snapshot_lock(repository.key, snapshot_id)

    @property
    def codec(self) -> GameStateCodec:
        return self._codec

    def load(self) -> LoadResult:
        """Read the snapshot and fold in earnings since the last persisted update.

        The idle gain is not written back; it becomes durable on the next save.
        """
        with self._lock:
            stored = self._read_or_seed()
            now_ms = self._clock.now_ms()
        elapsed_seconds = max(0, now_ms - stored.last_update_ms) / 1000.0
        idle_earnings = self._economy_service.accrual(stored.state, elapsed_seconds)
        reconciled = self._economy_service.tick(stored.state, elapsed_seconds)
        return LoadResult(state=reconciled, idle_earnings=idle_earnings)

    def save(self, candidate: Mapping[str, Any] | GameState) -> GameState:
        """Validate and overwrite the snapshot; returns the state that was stored."""
        if isinstance(candidate, GameState):
            candidate = self._codec.encode(candidate)
        issues = self._validator.validate(candidate)
        if issues:
            logger.warning("Rejected snapshot save: %s", "; ".join(issues))
            raise ValidationFailedError(issues)
        state = self._codec.decode(candidate)
        with self._lock:
            self._write(state, self._clock.now_ms())
        return state

    def reset(self) -> GameState:
        """Overwrite the snapshot with canonical defaults."""
        state = new_game_state(self._economy_service.location_graph.start_location_id)
        with self._lock:
            self._write(state, self._clock.now_ms())
        logger.info("Snapshot %s reset to defaults", self._snapshot_id)
        return state

    def _read_or_seed(self) -> StoredSnapshot:
        try:
            stored = self._repository.read(self._snapshot_id)
        except SnapshotStorageError as exc:
            logger.exception("Snapshot %s could not be read", self._snapshot_id)
            raise StorageFailureError(str(exc)) from exc
        if stored is not None:
            issues = self._validator.validate(self._codec.encode(stored.state))
            if issues:
                logger.error("Snapshot %s is invalid: %s", self._snapshot_id, "; ".join(issues))
                raise StorageFailureError(
                    f"Snapshot {self._snapshot_id} is invalid: {'; '.join(issues)}"
                )
            return stored
        seeded = StoredSnapshot(
            state=new_game_state(self._economy_service.location_graph.start_location_id),
            last_update_ms=self._clock.now_ms(),
        )
        self._write(seeded.state, seeded.last_update_ms)
        logger.info("Seeded snapshot %s with defaults", self._snapshot_id)
        return seeded

    def _write(self, state: GameState, last_update_ms: int) -> None:
        try:
            self._repository.write(self._snapshot_id, state, last_update_ms)
        except SnapshotStorageError as exc:
            logger.exception("Snapshot %s could not be written", self._snapshot_id)
            raise StorageFailureError(str(exc)) from exc
