"""Application configuration — env vars, YAML files, defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


def _repo_root() -> Path:
    """Find the repository root (directory containing pyproject.toml)."""
    current = Path(__file__).resolve().parent.parent
    if (current / "pyproject.toml").exists():
        return current
    return Path.cwd()


REPO_ROOT = _repo_root()
CONFIG_DIR = REPO_ROOT / "config"


class EnvFirstSettings(BaseSettings):
    """Settings where QDB_* env vars win over values passed in (e.g. from YAML)."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings


class DatabaseConfig(EnvFirstSettings):
    sqlite_path: Path = REPO_ROOT / "questions.db"
    type_translation: bool = True

    model_config = {"env_prefix": "QDB_DB_"}

    @field_validator("sqlite_path")
    @classmethod
    def _resolve_relative(cls, v: Path) -> Path:
        # Relative paths are relative to the repo, not the working directory
        return v if v.is_absolute() else REPO_ROOT / v


class LoggingConfig(EnvFirstSettings):
    level: str = "info"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    model_config = {"env_prefix": "QDB_LOG_"}


class AppConfig(EnvFirstSettings):
    """Top-level application configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    environment: str = "development"

    model_config = {"env_prefix": "QDB_"}

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """Load config from YAML file, with env var overrides."""
        values = load_yaml_config(path or "app.yml")

        # Build sections explicitly so their own QDB_* env sources apply
        return cls(
            **{
                **values,
                "database": DatabaseConfig(**(values.get("database") or {})),
                "logging": LoggingConfig(**(values.get("logging") or {})),
            }
        )


def load_yaml_config(filename: str | Path) -> dict[str, Any]:
    """Load a YAML file; bare names are looked up in the config directory."""
    path = Path(filename)
    if not path.is_absolute():
        path = CONFIG_DIR / path
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}
