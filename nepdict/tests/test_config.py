"""Tests for configuration loading."""

import json

import pytest

from nepdict.config import ConfigManager
from nepdict.error_handling import ConfigurationError

ENV_VARS = [
    "NEPDICT_DATA_DIR",
    "NEPDICT_LOG_LEVEL",
    "NEPDICT_LOG_FORMAT",
    "NEPDICT_CACHE_MAX_ENTRIES",
    "NEPDICT_CACHE_DISABLED",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def write_config(tmp_path, payload):
    path = tmp_path / "nepdict.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return str(path)


class TestConfigManager:
    """Defaults, file values and environment overrides."""

    def test_defaults(self):
        config = ConfigManager().load()

        assert config.data.data_dir == "data"
        assert len(config.data.sources) == 38
        assert config.data.sources[0] == "adverbs.json"
        assert config.search.max_results == 15
        assert config.search.advanced_max_results == 50
        assert config.search.fuzzy_threshold == 0.7
        assert config.cache.enabled is True
        assert config.logging.format == "text"

    def test_file_values_merge_with_defaults(self, tmp_path):
        path = write_config(tmp_path, {"search": {"max_results": 5}, "cache": {"enabled": False}})
        config = ConfigManager(path).load()

        assert config.search.max_results == 5
        assert config.search.advanced_max_results == 50
        assert config.cache.enabled is False
        assert config.cache.max_entries == 1000

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, {"data": {"data_dir": "from-file"}})
        monkeypatch.setenv("NEPDICT_DATA_DIR", "/srv/vocab")
        monkeypatch.setenv("NEPDICT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("NEPDICT_LOG_FORMAT", "json")
        monkeypatch.setenv("NEPDICT_CACHE_MAX_ENTRIES", "25")
        monkeypatch.setenv("NEPDICT_CACHE_DISABLED", "true")

        config = ConfigManager(path).load()

        assert config.data.data_dir == "/srv/vocab"
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"
        assert config.cache.max_entries == 25
        assert config.cache.enabled is False

    def test_load_is_memoized(self):
        manager = ConfigManager()
        assert manager.load() is manager.config

    def test_defaults_not_mutated(self, tmp_path):
        path = write_config(tmp_path, {"data": {"sources": ["verbs.json"]}})
        ConfigManager(path).load()
        assert len(ConfigManager.DEFAULT_CONFIG["data"]["sources"]) == 38


class TestConfigErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(str(tmp_path / "absent.json")).load()
        assert exc_info.value.config_key == "config_path"
        assert exc_info.value.error_code == "configuration_error"

    def test_invalid_json(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(write_config(tmp_path, "{broken")).load()

    def test_non_object(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(write_config(tmp_path, [1, 2])).load()

    def test_invalid_value(self, tmp_path):
        path = write_config(tmp_path, {"search": {"max_results": 0}})
        with pytest.raises(ConfigurationError):
            ConfigManager(path).load()

    def test_non_integer_env(self, monkeypatch):
        monkeypatch.setenv("NEPDICT_CACHE_MAX_ENTRIES", "lots")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load()
        assert exc_info.value.config_key == "cache.max_entries"


def test_save_template_round_trips(tmp_path):
    path = tmp_path / "template.json"
    ConfigManager().save_template(str(path))

    config = ConfigManager(str(path)).load()
    assert config.search.suggestion_limit == 10
    assert json.loads(path.read_text())["cache"]["max_entries"] == 1000
