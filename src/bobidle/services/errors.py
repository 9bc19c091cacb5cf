"""Service-layer exceptions."""
from __future__ import annotations

from typing import Sequence


class EconomyError(Exception):
    """Base class for rejected economy operations; state is left unchanged."""


class InsufficientResourcesError(EconomyError):
    """Raised when an action costs more than the available resources."""

    def __init__(self, required: float, available: float) -> None:
        super().__init__(f"Insufficient resources: need {required:g}, have {available:g}.")
        self.required = required
        self.available = available


class NoSuchLocationError(EconomyError):
    """Raised when travel targets an id missing from the location graph."""


class NotReachableError(EconomyError):
    """Raised when travel targets a location not adjacent to the current one."""


class UnknownUpgradeError(EconomyError):
    """Raised when a purchase references an id missing from the catalog."""


class AlreadyPurchasedError(EconomyError):
    """Raised when an upgrade has already been bought."""


class PrerequisiteNotMetError(EconomyError):
    """Raised when an upgrade's prerequisite has not been bought yet."""


class ValidationFailedError(Exception):
    """Raised when externally supplied state violates schema or range rules."""

    def __init__(self, details: Sequence[str]) -> None:
        super().__init__("Invalid game state")
        self.details = list(details)


class StorageFailureError(Exception):
    """Raised when the persisted snapshot cannot be read or written."""
