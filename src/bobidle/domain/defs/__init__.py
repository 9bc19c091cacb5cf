"""Domain definition exports."""

from .location_def import LocationDef
from .upgrade_def import UpgradeDef, UpgradeEffectDef

__all__ = [
    "LocationDef",
    "UpgradeDef",
    "UpgradeEffectDef",
]
