"""Static upgrade catalog with prerequisite resolution."""
from __future__ import annotations

from typing import Dict, Iterable, Mapping

from bobidle.data.errors import DataReferenceError, DataValidationError
from bobidle.domain.defs import UpgradeDef
from bobidle.domain.state import GameState


class UpgradeCatalog:
    """Read-only lookups over upgrade definitions."""

    def __init__(self, upgrades: Iterable[UpgradeDef]) -> None:
        self._upgrades: Dict[str, UpgradeDef] = {}
        for upgrade in upgrades:
            if upgrade.id in self._upgrades:
                raise DataValidationError(f"Duplicate upgrade id '{upgrade.id}'.")
            self._upgrades[upgrade.id] = upgrade
        self._validate_prerequisites()

    @classmethod
    def from_repository(cls, repository) -> "UpgradeCatalog":
        return cls(repository.all())

    def contains(self, upgrade_id: str) -> bool:
        return upgrade_id in self._upgrades

    def get(self, upgrade_id: str) -> UpgradeDef:
        try:
            return self._upgrades[upgrade_id]
        except KeyError as exc:
            raise KeyError(upgrade_id) from exc

    def all(self) -> list[UpgradeDef]:
        return list(self._upgrades.values())

    def is_available(self, state: GameState, upgrade_id: str) -> bool:
        """Return True when the upgrade is unpurchased and its prerequisite is owned."""
        upgrade = self.get(upgrade_id)
        if state.has_upgrade(upgrade_id):
            return False
        return upgrade.prerequisite is None or state.has_upgrade(upgrade.prerequisite)

    def accrual_multiplier(self, purchased: Mapping[str, bool]) -> float:
        """Product of every purchased passive accrual multiplier."""
        factor = 1.0
        for upgrade_id, owned in purchased.items():
            if not owned:
                continue
            upgrade = self._upgrades.get(upgrade_id)
            if upgrade is not None and upgrade.effect.kind == "accrual_multiplier":
                factor *= upgrade.effect.value
        return factor

    def _validate_prerequisites(self) -> None:
        for upgrade in self._upgrades.values():
            if upgrade.prerequisite is not None and upgrade.prerequisite not in self._upgrades:
                raise DataReferenceError(
                    f"upgrade '{upgrade.id}' requires unknown upgrade '{upgrade.prerequisite}'."
                )
        for upgrade in self._upgrades.values():
            seen = {upgrade.id}
            current = upgrade.prerequisite
            while current is not None:
                if current in seen:
                    raise DataValidationError(
                        f"upgrade '{upgrade.id}' has a prerequisite cycle through '{current}'."
                    )
                seen.add(current)
                current = self._upgrades[current].prerequisite
