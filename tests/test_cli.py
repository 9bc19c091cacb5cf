from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from bobidle.domain.state import GameState
from bobidle.presentation.cli import render
from bobidle.presentation.cli.app import run_session
from bobidle.services.game_session import GameSession
from tests.helpers.economy_fixtures import FakeMonotonic, RecordingGateway, build_components


def _scripted(responses: Iterable[str]):
    iterator = iter(responses)

    def _input(_prompt: str) -> str:
        return next(iterator)

    return _input


def _session(tmp_path: Path, gateway: RecordingGateway) -> GameSession:
    components = build_components(tmp_path)
    return GameSession(
        economy_service=components.economy_service,
        gateway=gateway,
        clock=FakeMonotonic(),
    )


def test_mine_then_quit_saves_progress(tmp_path: Path, capsys) -> None:
    gateway = RecordingGateway(idle_earnings=1500)
    session = _session(tmp_path, gateway)

    run_session(session, input_fn=_scripted(["1", "1", "8"]))

    output = capsys.readouterr().out
    assert "Earned 1,500 resources while away!" in output
    assert "Mined 1." in output
    assert "Progress saved. Goodbye!" in output
    assert gateway.saved[-1].resources == pytest.approx(2)


def test_rejected_action_prints_reason_and_continues(tmp_path: Path, capsys) -> None:
    gateway = RecordingGateway()
    session = _session(tmp_path, gateway)

    run_session(session, input_fn=_scripted(["2", "9", "8"]))

    output = capsys.readouterr().out
    assert "Insufficient resources: need 100, have 0." in output
    assert "Invalid selection. Please enter 1-8." in output
    assert session.state.probes == 1


def test_offline_session_reports_unsaved_exit(tmp_path: Path, capsys) -> None:
    gateway = RecordingGateway()
    gateway.fail_load = True
    session = _session(tmp_path, gateway)

    run_session(session, input_fn=_scripted(["5", "8"]))

    output = capsys.readouterr().out
    assert "Playing offline" in output
    assert "Save failed; continuing offline." in output
    assert "Goodbye! (progress not saved)" in output
    assert gateway.saved == []


def test_travel_menu_unlocks_destination(tmp_path: Path, capsys) -> None:
    gateway = RecordingGateway(GameState(resources=600))
    session = _session(tmp_path, gateway)

    run_session(session, input_fn=_scripted(["4", "1", "8"]))

    output = capsys.readouterr().out
    assert "1. Asteroid Belt (Unlock: 500)" in output
    assert "Arrived at Asteroid Belt." in output
    assert session.state.current_location == "belt"
    assert session.state.resources == pytest.approx(100)


def test_upgrade_menu_cancel_leaves_state(tmp_path: Path, capsys) -> None:
    gateway = RecordingGateway(GameState(resources=600))
    session = _session(tmp_path, gateway)

    run_session(session, input_fn=_scripted(["3", "", "8"]))

    output = capsys.readouterr().out
    assert "1. Enhanced Mining - 500 [available]" in output
    assert "3. Advanced Mining - 2,500 [requires prerequisite]" in output
    assert session.state.upgrades == {}


def test_reset_requires_confirmation(tmp_path: Path) -> None:
    gateway = RecordingGateway(GameState(resources=600, probes=4))
    session = _session(tmp_path, gateway)

    run_session(session, input_fn=_scripted(["6", "n", "6", "y", "8"]))

    assert gateway.resets == 1
    assert session.state.probes == 1


def test_format_amount_floors_and_groups() -> None:
    assert render.format_amount(1234.99) == "1,234"
    assert render.format_amount(0.5) == "0"


def test_debug_line_hidden_without_flag(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("BOBIDLE_DEBUG", raising=False)
    components = build_components(tmp_path)

    lines = render.render_status(
        GameState(), rate=1.0, location_graph=components.location_graph
    )

    assert not any(line.startswith("[debug]") for line in lines)
    monkeypatch.setenv("BOBIDLE_DEBUG", "1")
    lines = render.render_status(
        GameState(), rate=1.0, location_graph=components.location_graph
    )
    assert lines[-1].startswith("[debug] unlocked=['earth']")
