"""Runtime settings loaded from a per-user JSON file and the environment."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping

_ENV_PREFIX = "BOBIDLE_"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Bobidle"
        return Path.home() / "Bobidle"
    return Path.home() / ".config" / "bobidle"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


@dataclass(frozen=True, slots=True)
class Settings:
    db_path: Path
    host: str = "0.0.0.0"
    port: int = 3000
    autosave_seconds: float = 30.0
    tick_seconds: float = 0.1
    server_url: str | None = None


def default_settings() -> Settings:
    return Settings(db_path=get_user_data_dir() / "game.db")


def load_settings(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from disk, then apply BOBIDLE_* environment overrides.

    Missing, unreadable or malformed values fall back to defaults.
    """
    settings = default_settings()
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        raw = {}
    if not isinstance(raw, dict):
        raw = {}
    settings = _apply_overrides(settings, raw)
    env = os.environ if environ is None else environ
    env_values = {
        key[len(_ENV_PREFIX):].lower(): value
        for key, value in env.items()
        if key.startswith(_ENV_PREFIX)
    }
    return _apply_overrides(settings, env_values)


def _apply_overrides(settings: Settings, values: Mapping[str, Any]) -> Settings:
    updates: Dict[str, Any] = {}
    db_path = values.get("db_path")
    if isinstance(db_path, str) and db_path:
        updates["db_path"] = Path(db_path)
    host = values.get("host")
    if isinstance(host, str) and host:
        updates["host"] = host
    port = _coerce_number(values.get("port"), int)
    if port is not None and 0 < port < 65536:
        updates["port"] = port
    autosave = _coerce_number(values.get("autosave_seconds"), float)
    if autosave is not None and autosave > 0:
        updates["autosave_seconds"] = autosave
    tick = _coerce_number(values.get("tick_seconds"), float)
    if tick is not None and tick >= 0:
        updates["tick_seconds"] = tick
    server_url = values.get("server_url")
    if isinstance(server_url, str) and server_url:
        updates["server_url"] = server_url
    return replace(settings, **updates)


def _coerce_number(value: Any, kind: type) -> Any:
    if value is None or isinstance(value, bool):
        return None
    try:
        return kind(value)
    except (TypeError, ValueError):
        return None
