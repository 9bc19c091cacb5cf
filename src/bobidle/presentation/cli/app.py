"""Console-driven play loop backed by a GameSession."""
from __future__ import annotations

import logging
from typing import Callable, Literal, Sequence

from bobidle.presentation.cli import render
from bobidle.presentation.config import Settings
from bobidle.services.errors import EconomyError, StorageFailureError
from bobidle.services.factories import (
    build_economy_components,
    build_http_gateway,
    build_reconciliation_store,
)
from bobidle.services.game_session import GameSession

logger = logging.getLogger(__name__)

MenuAction = Literal["mine", "replicate", "upgrades", "travel", "save", "reset", "status", "quit"]

_MENU: Sequence[tuple[str, MenuAction, str]] = (
    ("1", "mine", "Mine"),
    ("2", "replicate", "Replicate probe"),
    ("3", "upgrades", "Upgrades"),
    ("4", "travel", "Travel"),
    ("5", "save", "Save"),
    ("6", "reset", "Reset game"),
    ("7", "status", "Status"),
    ("8", "quit", "Save and quit"),
)


def build_session(settings: Settings) -> GameSession:
    """Construct a session against the remote server or the local snapshot."""
    components = build_economy_components()
    if settings.server_url:
        gateway = build_http_gateway(components, settings.server_url)
    else:
        gateway = build_reconciliation_store(components, settings.db_path)
    return GameSession(
        economy_service=components.economy_service,
        gateway=gateway,
        tick_interval=settings.tick_seconds,
        autosave_interval=settings.autosave_seconds,
    )


def main(settings: Settings, *, input_fn: Callable[[str], str] = input) -> None:
    """Start the interactive CLI session."""
    session = build_session(settings)
    run_session(session, input_fn=input_fn)


def run_session(session: GameSession, *, input_fn: Callable[[str], str] = input) -> None:
    print("=== Bobiverse Idle ===")
    idle_earnings = session.start()
    if idle_earnings > 0:
        print(f"Earned {render.format_amount(idle_earnings)} resources while away!")
    if not session.persistence_enabled:
        print("Save server unreachable. Playing offline; progress will not be saved.")
    try:
        while True:
            session.poll()
            _print_status(session)
            action = _prompt_action(input_fn)
            if action == "quit":
                break
            _dispatch(session, action, input_fn)
    finally:
        saved = session.stop()
        print("Progress saved. Goodbye!" if saved else "Goodbye! (progress not saved)")


def _print_status(session: GameSession) -> None:
    print()
    for line in render.render_status(
        session.state,
        rate=session.economy.current_rate(session.state),
        location_graph=session.economy.location_graph,
    ):
        print(line)


def _prompt_action(input_fn: Callable[[str], str]) -> MenuAction:
    while True:
        print()
        for key, _action, label in _MENU:
            print(f"{key}. {label}")
        choice = input_fn("Select an option: ").strip()
        for key, action, _label in _MENU:
            if choice == key:
                return action
        print(f"Invalid selection. Please enter 1-{len(_MENU)}.")


def _dispatch(session: GameSession, action: MenuAction, input_fn: Callable[[str], str]) -> None:
    try:
        if action == "mine":
            before = session.state.resources
            session.mine()
            print(f"Mined {render.format_amount(session.state.resources - before)}.")
        elif action == "replicate":
            session.replicate()
            print(f"Replicated! Probes: {session.state.probes:,}")
        elif action == "upgrades":
            _upgrade_menu(session, input_fn)
        elif action == "travel":
            _travel_menu(session, input_fn)
        elif action == "save":
            print("Saved!" if session.save() else "Save failed; continuing offline.")
        elif action == "reset":
            confirm = input_fn("Reset the game? All progress will be lost (y/N): ").strip().lower()
            if confirm == "y":
                session.reset()
                print("Game reset.")
        elif action == "status":
            return
    except EconomyError as exc:
        print(str(exc))
    except StorageFailureError as exc:
        logger.warning("Action %s failed: %s", action, exc)
        print(f"Server unavailable: {exc}")


def _prompt_index(input_fn: Callable[[str], str], count: int) -> int | None:
    raw = input_fn("Choose (blank to cancel): ").strip()
    if not raw:
        return None
    try:
        index = int(raw)
    except ValueError:
        print("Please enter a number.")
        return None
    if not 1 <= index <= count:
        print(f"Please enter a number between 1 and {count}.")
        return None
    return index - 1


def _upgrade_menu(session: GameSession, input_fn: Callable[[str], str]) -> None:
    options = session.economy.upgrade_options(session.state)
    for line in render.render_upgrade_options(options):
        print(line)
    index = _prompt_index(input_fn, len(options))
    if index is None:
        return
    session.purchase_upgrade(options[index].upgrade_id)
    print(f"Purchased {options[index].name}.")


def _travel_menu(session: GameSession, input_fn: Callable[[str], str]) -> None:
    options = session.economy.travel_options(session.state)
    for line in render.render_travel_options(options):
        print(line)
    index = _prompt_index(input_fn, len(options))
    if index is None:
        return
    session.travel(options[index].destination_id)
    print(f"Arrived at {options[index].name}.")
