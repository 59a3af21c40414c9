from __future__ import annotations

from pathlib import Path

import pytest

from migration_tools.config import DEFAULT_AUDIT_FOLDERS, audit_folders, load_config, sync_settings
from migration_tools.errors import ConfigurationError
from migration_tools.models import SyncSettings


def test_missing_config_is_empty(tmp_path: Path) -> None:
    assert load_config(tmp_path / "config.json") == {}
    assert audit_folders({}) == DEFAULT_AUDIT_FOLDERS
    assert sync_settings({}) == SyncSettings()


def test_invalid_config_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_sync_settings_overrides() -> None:
    settings = sync_settings(
        {
            "sync": {
                "flyway": "/opt/flyway/flyway",
                "source": "development",
                "build_environment": "",
                "generate_types": "versioned",
                "extra_args": ["-configFiles=flyway.toml"],
            }
        }
    )
    assert settings.flyway == "/opt/flyway/flyway"
    assert settings.source == "development"
    assert settings.target == "schemaModel"
    assert settings.build_environment == "shadow"
    assert settings.generate_types == "versioned"
    assert settings.extra_args == ("-configFiles=flyway.toml",)

    with pytest.raises(ConfigurationError):
        sync_settings({"sync": {"extra_args": "-x"}})


def test_audit_folders_accepts_string_or_list() -> None:
    assert audit_folders({"audit": {"folders": "Scripts,Quests"}}) == ["Scripts,Quests"]
    assert audit_folders({"audit": {"folders": ["Scripts"]}}) == ["Scripts"]
