"""Data layer utilities for loading JSON definitions and the persisted snapshot."""

from .errors import (
    DataLoadError,
    DataReferenceError,
    DataValidationError,
    SnapshotStorageError,
)
from .paths import get_definitions_path, get_package_data_root

__all__ = [
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "SnapshotStorageError",
    "get_definitions_path",
    "get_package_data_root",
]
