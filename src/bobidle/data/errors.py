"""Custom exceptions for data loading, validation and storage."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when JSON files are missing or invalid."""


class DataValidationError(DataError):
    """Raised when JSON content fails structural validation."""


class DataReferenceError(DataError):
    """Raised when definitions reference missing related data."""


class SnapshotStorageError(DataError):
    """Raised when the persisted snapshot cannot be read or written."""
