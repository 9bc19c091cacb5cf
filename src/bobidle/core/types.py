"""Shared type aliases for the core and domain layers."""
from typing import Literal

LocationId = str
UpgradeId = str

EffectKind = Literal["additive_rate_bonus", "accrual_multiplier", "replication_cost_multiplier"]

__all__ = ["EffectKind", "LocationId", "UpgradeId"]
