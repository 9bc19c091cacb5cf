from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from bobidle.data.errors import SnapshotStorageError
from bobidle.data.repositories import SqliteSnapshotRepository
from bobidle.domain.state import GameState


def test_read_missing_row_returns_none(tmp_path: Path) -> None:
    repo = SqliteSnapshotRepository(tmp_path / "nested" / "game.db")

    assert repo.read(1) is None
    assert (tmp_path / "nested" / "game.db").exists()


def test_write_then_read_round_trip(tmp_path: Path) -> None:
    repo = SqliteSnapshotRepository(tmp_path / "game.db")
    state = GameState(
        resources=42.5,
        probes=3,
        replication_cost=132,
        mining_rate=2,
        current_location="mars",
        unlocked_locations=("earth", "mars"),
        upgrades={"mining1": True},
        total_mined=1234.5,
    )

    repo.write(1, state, 1_000)
    repo.write(1, state, 2_000)
    stored = repo.read(1)

    assert stored is not None
    assert stored.state == state
    assert stored.last_update_ms == 2_000


def test_collections_are_stored_as_json_text(tmp_path: Path) -> None:
    db_path = tmp_path / "game.db"
    repo = SqliteSnapshotRepository(db_path)
    repo.write(1, GameState(upgrades={"mining1": True}), 5)

    with sqlite3.connect(db_path) as conn:
        unlocked, upgrades = conn.execute(
            "SELECT unlocked_locations, upgrades FROM game_state WHERE id = 1"
        ).fetchone()

    assert unlocked == '["earth"]'
    assert upgrades == '{"mining1": true}'


def test_corrupt_collection_text_raises_storage_error(tmp_path: Path) -> None:
    db_path = tmp_path / "game.db"
    repo = SqliteSnapshotRepository(db_path)
    repo.write(1, GameState(), 5)
    with sqlite3.connect(db_path) as conn:
        conn.execute("UPDATE game_state SET upgrades = 'not json' WHERE id = 1")

    with pytest.raises(SnapshotStorageError):
        repo.read(1)


def test_unreadable_database_raises_storage_error(tmp_path: Path) -> None:
    db_path = tmp_path / "game.db"
    db_path.write_text("this is not a sqlite database", encoding="utf-8")
    repo = SqliteSnapshotRepository(db_path)

    with pytest.raises(SnapshotStorageError):
        repo.read(1)


def test_repositories_on_same_file_share_key(tmp_path: Path) -> None:
    first = SqliteSnapshotRepository(tmp_path / "game.db")
    second = SqliteSnapshotRepository(tmp_path / "." / "game.db")

    assert first.key == second.key


def test_probe_count_beyond_int64_raises_storage_error(tmp_path: Path) -> None:
    repo = SqliteSnapshotRepository(tmp_path / "game.db")

    with pytest.raises(SnapshotStorageError):
        repo.write(1, GameState(probes=2**70), 1_000)

    assert repo.read(1) is None
