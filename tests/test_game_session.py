from __future__ import annotations

from pathlib import Path

import pytest

from bobidle.domain.state import GameState, new_game_state
from bobidle.services.errors import (
    InsufficientResourcesError,
    StorageFailureError,
    ValidationFailedError,
)
from bobidle.services.game_session import GameSession
from tests.helpers.economy_fixtures import (
    FakeMonotonic,
    RecordingGateway,
    build_components,
    build_store,
)


def _session(tmp_path: Path, gateway, clock: FakeMonotonic, **kwargs) -> GameSession:
    components = build_components(tmp_path)
    return GameSession(
        economy_service=components.economy_service,
        gateway=gateway,
        clock=clock,
        **kwargs,
    )


def test_start_adopts_loaded_state_and_idle_earnings(tmp_path: Path) -> None:
    gateway = RecordingGateway(GameState(resources=75, probes=3), idle_earnings=25)
    session = _session(tmp_path, gateway, FakeMonotonic())

    earned = session.start()

    assert earned == 25
    assert session.state.probes == 3
    assert session.persistence_enabled
    assert session.running


def test_polling_ticks_with_elapsed_time(tmp_path: Path) -> None:
    clock = FakeMonotonic()
    session = _session(tmp_path, RecordingGateway(GameState(probes=2)), clock)
    session.start()

    clock.advance(5)
    session.poll()

    assert session.state.resources == pytest.approx(10)
    assert session.state.total_mined == pytest.approx(10)


def test_manual_action_folds_pending_time_first(tmp_path: Path) -> None:
    clock = FakeMonotonic()
    session = _session(tmp_path, RecordingGateway(GameState(resources=95)), clock)
    session.start()

    clock.advance(5)
    session.replicate()

    assert session.state.probes == 2
    assert session.state.resources == pytest.approx(0)


def test_failed_action_leaves_state(tmp_path: Path) -> None:
    session = _session(tmp_path, RecordingGateway(), FakeMonotonic())
    session.start()
    before = session.state

    with pytest.raises(InsufficientResourcesError):
        session.travel("belt")

    assert session.state == before


def test_autosave_runs_on_interval(tmp_path: Path) -> None:
    clock = FakeMonotonic()
    gateway = RecordingGateway()
    session = _session(tmp_path, gateway, clock, autosave_interval=30)
    session.start()

    clock.advance(29)
    session.poll()
    assert gateway.saved == []
    clock.advance(1)
    session.poll()

    assert len(gateway.saved) == 1
    assert gateway.saved[0].resources == pytest.approx(30)


def test_stop_performs_final_save(tmp_path: Path) -> None:
    clock = FakeMonotonic()
    gateway = RecordingGateway()
    session = _session(tmp_path, gateway, clock)
    session.start()
    session.mine()

    assert session.stop() is True
    assert gateway.saved[-1].resources == pytest.approx(1)
    assert not session.running


def test_save_failure_is_logged_and_play_continues(tmp_path: Path, caplog) -> None:
    clock = FakeMonotonic()
    gateway = RecordingGateway()
    gateway.save_error = StorageFailureError("connection refused")
    session = _session(tmp_path, gateway, clock)
    session.start()

    assert session.save() is False
    session.mine()

    assert session.state.resources == pytest.approx(1)
    assert "Save failed" in caplog.text


def test_rejected_save_returns_false(tmp_path: Path) -> None:
    gateway = RecordingGateway()
    gateway.save_error = ValidationFailedError(["Invalid probes value"])
    session = _session(tmp_path, gateway, FakeMonotonic())
    session.start()

    assert session.save() is False


def test_failed_load_plays_offline_without_saving(tmp_path: Path) -> None:
    clock = FakeMonotonic()
    gateway = RecordingGateway()
    gateway.fail_load = True
    session = _session(tmp_path, gateway, clock, autosave_interval=1)

    assert session.start() == 0
    session.mine()
    clock.advance(5)
    session.poll()

    assert not session.persistence_enabled
    assert session.state.resources == pytest.approx(6)
    assert session.save() is False
    assert gateway.saved == []


def test_reset_adopts_defaults_and_enables_saving(tmp_path: Path) -> None:
    gateway = RecordingGateway(GameState(resources=500, probes=9))
    gateway.fail_load = True
    session = _session(tmp_path, gateway, FakeMonotonic())
    session.start()

    session.reset()

    assert session.state == new_game_state()
    assert session.persistence_enabled
    assert gateway.resets == 1


def test_session_against_local_store_reconciles_idle_time(tmp_path: Path) -> None:
    store, components, clock = build_store(tmp_path)
    store.save(GameState(resources=10, probes=2))
    clock.advance(60)
    session = GameSession(
        economy_service=components.economy_service,
        gateway=store,
        clock=FakeMonotonic(),
    )

    earned = session.start()

    assert earned == pytest.approx(120)
    assert session.state.resources == pytest.approx(130)
    assert session.stop() is True
    assert store.load().state.resources == pytest.approx(130)
