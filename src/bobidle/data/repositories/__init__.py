"""Repository exports."""

from .locations_repo import LocationsRepository
from .snapshot_repo import SqliteSnapshotRepository, StoredSnapshot
from .upgrades_repo import UpgradesRepository

__all__ = [
    "LocationsRepository",
    "SqliteSnapshotRepository",
    "StoredSnapshot",
    "UpgradesRepository",
]
