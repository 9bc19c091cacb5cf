"""SQLite persistence for the single reconciled game snapshot."""
from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path

from bobidle.data.errors import SnapshotStorageError
from bobidle.domain.state import GameState

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS game_state (
    id INTEGER PRIMARY KEY,
    resources REAL NOT NULL DEFAULT 0,
    probes INTEGER NOT NULL DEFAULT 1,
    replication_cost REAL NOT NULL DEFAULT 100,
    mining_rate REAL NOT NULL DEFAULT 1,
    current_location TEXT NOT NULL DEFAULT 'earth',
    unlocked_locations TEXT NOT NULL DEFAULT '["earth"]',
    upgrades TEXT NOT NULL DEFAULT '{}',
    last_update INTEGER NOT NULL DEFAULT 0,
    total_mined REAL NOT NULL DEFAULT 0
)
"""

_UPSERT = """
INSERT INTO game_state (
    id, resources, probes, replication_cost, mining_rate, current_location,
    unlocked_locations, upgrades, last_update, total_mined
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT(id) DO UPDATE SET
    resources = excluded.resources,
    probes = excluded.probes,
    replication_cost = excluded.replication_cost,
    mining_rate = excluded.mining_rate,
    current_location = excluded.current_location,
    unlocked_locations = excluded.unlocked_locations,
    upgrades = excluded.upgrades,
    last_update = excluded.last_update,
    total_mined = excluded.total_mined
"""


@dataclass(frozen=True, slots=True)
class StoredSnapshot:
    """Decoded row: the state plus the instant it was last reconciled."""

    state: GameState
    last_update_ms: int


class SqliteSnapshotRepository:
    """Reads and writes whole snapshot rows keyed by a fixed integer id."""

    def __init__(self, db_path: Path | str, *, timeout: float = 10.0) -> None:
        self._db_path = Path(db_path)
        self._timeout = timeout
        self._initialized = False

    @property
    def key(self) -> str:
        """Identity of the underlying database, shared by repositories on the same file."""
        return str(self._db_path.resolve())

    def read(self, snapshot_id: int) -> StoredSnapshot | None:
        """Return the decoded snapshot, or None when the row does not exist yet."""
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT * FROM game_state WHERE id = ?", (snapshot_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise SnapshotStorageError(f"Unable to read snapshot {snapshot_id}: {exc}") from exc
        if row is None:
            return None
        return self._decode_row(row)

    def write(self, snapshot_id: int, state: GameState, last_update_ms: int) -> None:
        """Overwrite the whole row in a single transaction."""
        params = (
            snapshot_id,
            state.resources,
            state.probes,
            state.replication_cost,
            state.mining_rate,
            state.current_location,
            json.dumps(list(state.unlocked_locations)),
            json.dumps(dict(state.upgrades), sort_keys=True),
            last_update_ms,
            state.total_mined,
        )
        try:
            with closing(self._connect()) as conn:
                with conn:
                    conn.execute(_UPSERT, params)
        except (sqlite3.Error, OverflowError) as exc:
            raise SnapshotStorageError(f"Unable to write snapshot {snapshot_id}: {exc}") from exc

    def _connect(self) -> sqlite3.Connection:
        if not self._initialized:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        conn.row_factory = sqlite3.Row
        if not self._initialized:
            try:
                with conn:
                    conn.execute(_SCHEMA)
            except sqlite3.Error:
                conn.close()
                raise
            self._initialized = True
            logger.info("Snapshot database ready at %s", self._db_path)
        return conn

    @staticmethod
    def _decode_row(row: sqlite3.Row) -> StoredSnapshot:
        snapshot_id = row["id"]
        try:
            unlocked = json.loads(row["unlocked_locations"])
            upgrades = json.loads(row["upgrades"])
        except (TypeError, json.JSONDecodeError) as exc:
            raise SnapshotStorageError(
                f"Snapshot {snapshot_id} holds undecodable collections: {exc}"
            ) from exc
        if not isinstance(unlocked, list) or not all(isinstance(item, str) for item in unlocked):
            raise SnapshotStorageError(f"Snapshot {snapshot_id} unlocked_locations must be a list of strings.")
        if not isinstance(upgrades, dict) or not all(
            isinstance(key, str) and isinstance(value, bool) for key, value in upgrades.items()
        ):
            raise SnapshotStorageError(f"Snapshot {snapshot_id} upgrades must map ids to booleans.")
        state = GameState(
            resources=float(row["resources"]),
            probes=int(row["probes"]),
            replication_cost=float(row["replication_cost"]),
            mining_rate=float(row["mining_rate"]),
            current_location=str(row["current_location"]),
            unlocked_locations=tuple(dict.fromkeys(unlocked)),
            upgrades=dict(upgrades),
            total_mined=float(row["total_mined"]),
        )
        return StoredSnapshot(state=state, last_update_ms=int(row["last_update"]))
