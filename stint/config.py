"""Configuration storage for stint.

Stores user preferences in ~/.stint/config.json. Set STINT_HOME to use a
different directory. The directory is only created when something is
written there (config, task store, logs).
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from stint.application.tick_loop import DEFAULT_TICK_INTERVAL
from stint.infrastructure.storage import STORAGE_KEY

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "STINT_HOME"


def get_config_dir() -> Path:
    """Get the stint config directory. Does not create it."""
    raw = os.environ.get(HOME_ENV_VAR)
    return Path(raw).expanduser() if raw else Path.home() / ".stint"


class StintConfig(BaseModel):
    """Application settings."""

    data_file: Path = Field(default_factory=lambda: get_config_dir() / "tasks.json")
    storage_key: str = STORAGE_KEY
    tick_interval: float = Field(default=DEFAULT_TICK_INTERVAL, gt=0)
    log_dir: Path = Field(default_factory=lambda: get_config_dir() / "logs")
    log_level: str = "INFO"


def get_config() -> StintConfig:
    """Load configuration, falling back to defaults for a missing or invalid file."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return StintConfig(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"Ignoring invalid config {config_file}: {e}")
    return StintConfig()  # defaults


def save_config(config: StintConfig) -> None:
    """Save configuration, creating the config directory if needed."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.json").write_text(
        json.dumps(config.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )
