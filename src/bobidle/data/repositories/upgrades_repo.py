"""Repository for one-time upgrade definitions."""
from __future__ import annotations

from typing import Dict, get_args

from bobidle.core.types import EffectKind
from bobidle.data.errors import DataReferenceError, DataValidationError
from bobidle.data.repositories.base import RepositoryBase
from bobidle.domain.defs import UpgradeDef, UpgradeEffectDef

_EFFECT_VALUE_KEYS: Dict[str, str] = {
    "additive_rate_bonus": "amount",
    "accrual_multiplier": "factor",
    "replication_cost_multiplier": "factor",
}


class UpgradesRepository(RepositoryBase[UpgradeDef]):
    """Loads and validates upgrade definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("upgrades.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, UpgradeDef]:
        upgrades_raw = self._require_mapping(raw, "upgrades.json")
        definitions: Dict[str, UpgradeDef] = {}
        for upgrade_id, payload in upgrades_raw.items():
            if not isinstance(upgrade_id, str) or not upgrade_id.strip():
                raise DataValidationError("upgrade id must be a non-empty string.")
            mapping = self._require_mapping(payload, f"upgrade '{upgrade_id}'")
            name = self._require_str(mapping.get("name"), f"upgrade '{upgrade_id}' name")
            description = self._require_str(
                mapping.get("description", ""), f"upgrade '{upgrade_id}' description"
            )
            cost = self._require_number(mapping.get("cost"), f"upgrade '{upgrade_id}' cost")
            if cost < 0:
                raise DataValidationError(f"upgrade '{upgrade_id}' cost must be >= 0.")
            prerequisite = mapping.get("requires")
            if prerequisite is not None:
                prerequisite = self._require_str(prerequisite, f"upgrade '{upgrade_id}' requires")
                if prerequisite not in upgrades_raw:
                    raise DataReferenceError(
                        f"upgrade '{upgrade_id}' requires unknown upgrade '{prerequisite}'."
                    )
            effect = self._parse_effect(upgrade_id, mapping.get("effect"))
            definitions[upgrade_id] = UpgradeDef(
                id=upgrade_id,
                name=name,
                description=description,
                cost=cost,
                effect=effect,
                prerequisite=prerequisite,
            )
        return definitions

    def _parse_effect(self, upgrade_id: str, raw_effect: object) -> UpgradeEffectDef:
        effect_map = self._require_mapping(raw_effect, f"upgrade '{upgrade_id}' effect")
        kind = self._require_str(effect_map.get("kind"), f"upgrade '{upgrade_id}' effect.kind")
        if kind not in get_args(EffectKind):
            raise DataValidationError(
                f"upgrade '{upgrade_id}' effect.kind '{kind}' is invalid."
            )
        value_key = _EFFECT_VALUE_KEYS[kind]
        value = self._require_number(
            effect_map.get(value_key), f"upgrade '{upgrade_id}' effect.{value_key}"
        )
        if value_key == "factor" and value <= 0:
            raise DataValidationError(f"upgrade '{upgrade_id}' effect.factor must be > 0.")
        return UpgradeEffectDef(kind=kind, value=value)
