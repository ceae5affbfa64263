"""
Unit Tests for Configuration Management.

Tests run against the repository's sample configuration, copied into a
private configuration root by the autouse config_root fixture.
Failure scenarios edit that copy or point RAU_HOME elsewhere.
"""

import pytest

from rau.core.config import (
    AppConfig,
    Settings,
    find_config_root,
    get_app_config,
    get_credential,
    get_settings,
    load_yaml_config,
    require_table,
    validate_config_root,
)
from rau.core.config_schema import ApplicationSchema, LoggingSchema, TablesSchema
from rau.core.exceptions import ConfigNotFoundError, ConfigurationError
from rau.schemas.airtable import TableRef


class TestFindConfigRoot:
    """Tests for configuration root discovery."""

    def test_uses_rau_home(self, config_root):
        assert find_config_root() == config_root

    def test_defaults_to_home_directory(self, tmp_path, monkeypatch):
        monkeypatch.delenv("RAU_HOME")
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / ".rau").mkdir()

        assert find_config_root() == tmp_path / ".rau"

    def test_raises_when_missing(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RAU_HOME", str(tmp_path / "absent"))
        with pytest.raises(RuntimeError, match="Configuration root not found"):
            find_config_root()

    def test_validate_exits_when_missing(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RAU_HOME", str(tmp_path / "absent"))
        with pytest.raises(SystemExit):
            validate_config_root()


class TestLoadYamlConfig:
    """Tests for YAML file loading from settings/."""

    def test_loads_application_yaml(self):
        data = load_yaml_config("application.yaml")
        assert data["api"]["base_url"] == "https://api.airtable.com/v0"

    def test_raises_for_nonexistent_file(self):
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            load_yaml_config("does_not_exist.yaml")

    def test_returns_empty_dict_for_empty_yaml(self, config_root):
        (config_root / "settings" / "empty.yaml").write_text("")
        assert load_yaml_config("empty.yaml") == {}

    def test_raises_for_malformed_yaml(self, config_root):
        (config_root / "settings" / "broken.yaml").write_text("key: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Could not parse broken.yaml"):
            load_yaml_config("broken.yaml")

    def test_raises_for_non_mapping(self, config_root):
        (config_root / "settings" / "list.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_yaml_config("list.yaml")


class TestAppConfig:
    """Tests for validated settings."""

    def test_sections_are_typed(self):
        config = AppConfig()
        assert isinstance(config.application, ApplicationSchema)
        assert isinstance(config.tables, TablesSchema)
        assert isinstance(config.logging, LoggingSchema)

    def test_sample_values(self):
        application = AppConfig().application
        assert application.recent.page_size == 100
        assert application.recent.view == "Grid view"
        assert application.cache.filename == "available_fields_cache.json"
        assert application.cache.per_table is False
        assert application.api.timeout is None

    def test_unknown_key_is_rejected(self, config_root):
        path = config_root / "settings" / "application.yaml"
        path.write_text(path.read_text() + "\nunexpected: 1\n")

        with pytest.raises(ConfigurationError, match="Invalid configuration in application.yaml"):
            AppConfig()

    def test_lookup(self):
        config = AppConfig()
        assert config.lookup("clients") == TableRef(base_id="appXXXXXXXXXXXXXX", table_name="Clients")
        assert config.lookup("missing") is None

    def test_config_names(self):
        assert AppConfig().config_names() == ["clients", "projects"]

    def test_get_app_config_is_cached(self):
        assert get_app_config() is get_app_config()


class TestRequireTable:
    """Tests for require_table()."""

    def test_known_name(self):
        assert require_table("projects").table_name == "Projects"

    def test_unknown_name(self):
        with pytest.raises(ConfigNotFoundError) as exc_info:
            require_table("nope")
        assert exc_info.value.code == "CFG_NOT_FOUND"
        assert exc_info.value.name == "nope"


class TestSettings:
    """Tests for the credential."""

    def test_reads_env_file(self):
        assert isinstance(get_settings(), Settings)
        assert get_credential() == "pat-test-key"

    def test_environment_overrides_env_file(self, monkeypatch):
        monkeypatch.setenv("AIRTABLE_API_KEY", "pat-from-env")
        assert get_credential() == "pat-from-env"

    def test_missing_credential_fails(self, config_root):
        (config_root / ".env").unlink()
        with pytest.raises(ConfigurationError, match="AIRTABLE_API_KEY is not set") as exc_info:
            get_settings()
        assert exc_info.value.code == "CFG_INVALID"
