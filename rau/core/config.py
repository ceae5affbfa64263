"""
Configuration Management.

Loads the credential from <root>/.env and settings from <root>/settings/*.yaml.
The configuration root is $RAU_HOME when set, otherwise ~/.rau.

Secrets (.env or environment, AIRTABLE_ prefix):
    AIRTABLE_API_KEY

Settings (YAML):
    application.yaml - Service URL, recent-records view, schema cache file
    tables.yaml      - Named configurations mapping to a base and table
    logging.yaml     - Logging configuration
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from rau.core.config_schema import (
    ApplicationSchema,
    LoggingSchema,
    TablesSchema,
)
from rau.core.exceptions import ConfigNotFoundError, ConfigurationError
from rau.schemas.airtable import TableRef

CONFIG_ROOT_ENV = "RAU_HOME"


def find_config_root() -> Path:
    """Locate the configuration root directory."""
    override = os.environ.get(CONFIG_ROOT_ENV)
    root = Path(override).expanduser() if override else Path.home() / ".rau"
    if not root.is_dir():
        raise RuntimeError(
            f"Configuration root not found: {root}. Create it or set {CONFIG_ROOT_ENV}."
        )
    return root


def validate_config_root() -> Path:
    """
    Validate that the configuration root can be found.

    Raises SystemExit with a clear message if it is missing.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_config_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """
    Load a YAML configuration file from <root>/settings/.

    Raises:
        ConfigurationError: If the file is missing, unparsable, or not a mapping
    """
    config_path = find_config_root() / "settings" / filename

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {filename}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{filename} must contain a mapping")
    return data


class Settings(BaseSettings):
    """Secrets loaded from <root>/.env and the environment."""

    api_key: str

    model_config = SettingsConfigDict(
        env_prefix="AIRTABLE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._tables = _load_validated(TablesSchema, "tables.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def tables(self) -> TablesSchema:
        """Named table configurations."""
        return self._tables

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    def config_names(self) -> list[str]:
        """Configured names in file order."""
        return list(self._tables.tables)

    def lookup(self, name: str) -> TableRef | None:
        """Resolve a configuration name to its table, or None if undefined."""
        entry = self._tables.tables.get(name)
        if entry is None:
            return None
        return TableRef(base_id=entry.base_id, table_name=entry.table_name)


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from the config root."""
    env_path = find_config_root() / ".env"
    try:
        return Settings(_env_file=str(env_path))
    except ValidationError as e:
        raise ConfigurationError(
            f"AIRTABLE_API_KEY is not set in {env_path} or the environment"
        ) from e


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_credential() -> str:
    """Return the service credential."""
    return get_settings().api_key


def require_table(name: str) -> TableRef:
    """
    Resolve a configuration name, failing when it is not defined.

    Raises:
        ConfigNotFoundError: If tables.yaml has no entry for name
    """
    table = get_app_config().lookup(name)
    if table is None:
        raise ConfigNotFoundError(name)
    return table
