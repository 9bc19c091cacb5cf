"""Upgrade definition data structures."""
from __future__ import annotations

from dataclasses import dataclass

from bobidle.core.types import EffectKind


@dataclass(frozen=True, slots=True)
class UpgradeEffectDef:
    """Tagged effect applied once when an upgrade is purchased.

    ``value`` is the additive amount for ``additive_rate_bonus`` and the
    multiplicative factor for the two multiplier kinds.
    """

    kind: EffectKind
    value: float


@dataclass(frozen=True, slots=True)
class UpgradeDef:
    """One-time purchasable modifier."""

    id: str
    name: str
    description: str
    cost: float
    effect: UpgradeEffectDef
    prerequisite: str | None = None
