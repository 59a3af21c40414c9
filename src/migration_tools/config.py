from __future__ import annotations

import json
from pathlib import Path

from .errors import ConfigurationError
from .models import SyncSettings

DEFAULT_AUDIT_FOLDERS: list[str] = ["Scripts", "migrations", "Quests"]


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid config file {config_path}: expected a JSON object")
    return data


def _section(config: dict, name: str) -> dict:
    value = config.get(name)
    return dict(value) if isinstance(value, dict) else {}


def audit_folders(config: dict) -> list[str]:
    raw = _section(config, "audit").get("folders")
    if isinstance(raw, str) and raw.strip():
        return [raw]
    if isinstance(raw, list) and raw:
        return [str(v) for v in raw]
    return list(DEFAULT_AUDIT_FOLDERS)


def sync_settings(config: dict) -> SyncSettings:
    cfg = _section(config, "sync")
    defaults = SyncSettings()
    extra = cfg.get("extra_args") or []
    if not isinstance(extra, list):
        raise ConfigurationError("sync.extra_args must be a list of strings")

    def pick(key: str, default: str) -> str:
        return str(cfg.get(key) or default).strip() or default

    return SyncSettings(
        flyway=pick("flyway", defaults.flyway),
        source=pick("source", defaults.source),
        target=pick("target", defaults.target),
        build_environment=pick("build_environment", defaults.build_environment),
        migrations_location=pick("migrations_location", defaults.migrations_location),
        generate_types=pick("generate_types", defaults.generate_types),
        extra_args=tuple(str(a) for a in extra if str(a).strip()),
    )
