# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from stint.config import StintConfig, get_config, get_config_dir, save_config


@pytest.fixture()
def stint_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("STINT_HOME", str(home))
    return home


def test_defaults_live_under_config_dir(stint_home: Path) -> None:
    config = get_config()

    assert get_config_dir() == stint_home
    assert config.data_file == stint_home / "tasks.json"
    assert config.storage_key == "hierarchicalTasks"
    assert config.tick_interval == 1.0


def test_save_then_load(stint_home: Path) -> None:
    save_config(StintConfig(data_file=stint_home / "other.json", tick_interval=0.5, log_level="DEBUG"))

    config = get_config()

    assert config.data_file == stint_home / "other.json"
    assert config.tick_interval == 0.5
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("content", ["{broken", '{"tick_interval": 0}', "[1]"])
def test_invalid_config_falls_back_to_defaults(stint_home: Path, content: str) -> None:
    stint_home.mkdir(parents=True, exist_ok=True)
    (stint_home / "config.json").write_text(content, encoding="utf-8")

    assert get_config().tick_interval == 1.0


def test_reading_config_does_not_create_home(stint_home: Path) -> None:
    get_config()

    assert not stint_home.exists()
