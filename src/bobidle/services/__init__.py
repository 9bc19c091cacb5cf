"""Service layer exports."""

from .economy_service import EconomyService
from .errors import (
    AlreadyPurchasedError,
    EconomyError,
    InsufficientResourcesError,
    NoSuchLocationError,
    NotReachableError,
    PrerequisiteNotMetError,
    StorageFailureError,
    UnknownUpgradeError,
    ValidationFailedError,
)
from .game_session import GameSession
from .reconciliation_store import LoadResult, ReconciliationStore
from .state_codec import GameStateCodec
from .state_validator import StateValidator

__all__ = [
    "AlreadyPurchasedError",
    "EconomyError",
    "EconomyService",
    "GameSession",
    "GameStateCodec",
    "InsufficientResourcesError",
    "LoadResult",
    "NoSuchLocationError",
    "NotReachableError",
    "PrerequisiteNotMetError",
    "ReconciliationStore",
    "StateValidator",
    "StorageFailureError",
    "UnknownUpgradeError",
    "ValidationFailedError",
]
