"""Client-side working copy of the economy with periodic persistence."""
from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from bobidle.core.scheduler import TickScheduler
from bobidle.domain.state import GameState, new_game_state
from bobidle.services.economy_service import EconomyService
from bobidle.services.errors import StorageFailureError, ValidationFailedError
from bobidle.services.reconciliation_store import LoadResult

logger = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 0.1
DEFAULT_AUTOSAVE_SECONDS = 30.0


class PersistenceGateway(Protocol):
    def load(self) -> LoadResult: ...

    def save(self, state: GameState) -> object: ...

    def reset(self) -> GameState: ...


class GameSession:
    """Owns the single long-lived GameState for an interactive client.

    The session is local-first: persistence failures are logged and play
    continues. If the initial load fails, saving stays disabled so a default
    state never overwrites progress stored on the server.
    """

    def __init__(
        self,
        *,
        economy_service: EconomyService,
        gateway: PersistenceGateway,
        clock: Callable[[], float] = time.monotonic,
        tick_interval: float = DEFAULT_TICK_SECONDS,
        autosave_interval: float = DEFAULT_AUTOSAVE_SECONDS,
    ) -> None:
        self._economy = economy_service
        self._gateway = gateway
        self._tick_interval = tick_interval
        self._autosave_interval = autosave_interval
        self._state = new_game_state(economy_service.location_graph.start_location_id)
        self._persistence_enabled = False
        self._idle_earnings = 0.0
        self._ticker = TickScheduler(self._on_tick, clock=clock)
        self._autosaver = TickScheduler(self._on_autosave, clock=clock)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def economy(self) -> EconomyService:
        return self._economy

    @property
    def idle_earnings(self) -> float:
        return self._idle_earnings

    @property
    def persistence_enabled(self) -> bool:
        return self._persistence_enabled

    @property
    def running(self) -> bool:
        return self._ticker.running

    def start(self) -> float:
        """Load the persisted state, then begin ticking and autosaving."""
        try:
            result = self._gateway.load()
        except StorageFailureError as exc:
            logger.warning("Load failed, playing offline with saving disabled: %s", exc)
        else:
            self._state = result.state
            self._idle_earnings = result.idle_earnings
            self._persistence_enabled = True
            if result.idle_earnings > 0:
                logger.info("Earned %d resources while away", int(result.idle_earnings))
        self._ticker.start(self._tick_interval)
        self._autosaver.start(self._autosave_interval)
        return self._idle_earnings

    def stop(self) -> bool:
        """Stop scheduling and persist the final state."""
        self.poll()
        self._ticker.stop()
        self._autosaver.stop()
        return self.save()

    def poll(self) -> None:
        """Fold elapsed time into the state and autosave when due."""
        self._ticker.poll()
        self._autosaver.poll()

    def mine(self) -> GameState:
        self.poll()
        self._state = self._economy.mine_once(self._state)
        return self._state

    def replicate(self) -> GameState:
        self.poll()
        self._state = self._economy.replicate(self._state)
        return self._state

    def purchase_upgrade(self, upgrade_id: str) -> GameState:
        self.poll()
        self._state = self._economy.purchase_upgrade(self._state, upgrade_id)
        return self._state

    def travel(self, location_id: str) -> GameState:
        self.poll()
        self._state = self._economy.travel(self._state, location_id)
        return self._state

    def save(self) -> bool:
        """Persist the working state; returns False instead of raising on failure."""
        if not self._persistence_enabled:
            logger.warning("Skipping save: persisted state was never loaded")
            return False
        try:
            self._gateway.save(self._state)
        except StorageFailureError as exc:
            logger.warning("Save failed: %s", exc)
            return False
        except ValidationFailedError as exc:
            logger.error("Save rejected: %s", "; ".join(exc.details))
            return False
        return True

    def reset(self) -> GameState:
        """Reset the persisted snapshot and adopt the defaults locally."""
        self._state = self._gateway.reset()
        self._persistence_enabled = True
        self._idle_earnings = 0.0
        return self._state

    def _on_tick(self, elapsed_seconds: float) -> None:
        self._state = self._economy.tick(self._state, elapsed_seconds)

    def _on_autosave(self, _elapsed_seconds: float) -> None:
        self.save()
