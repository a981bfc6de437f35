"""Tests for smartagent_receiver.loader module."""

import pytest
import yaml

from smartagent_receiver.errors import ConfigError
from smartagent_receiver.loader import expand_env, load_config_file, read_config_file


class TestReadConfigFile:
    """Test cases for read_config_file."""

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            read_config_file(temp_dir / "nonexistent.yaml")

    def test_invalid_yaml(self, testdata_dir):
        with pytest.raises(yaml.YAMLError):
            read_config_file(testdata_dir / "invalid_yaml.yaml")

    def test_document_must_be_mapping(self, temp_dir):
        config_path = temp_dir / "list.yaml"
        config_path.write_text("- one\n- two\n")

        with pytest.raises(ConfigError) as exc_info:
            read_config_file(config_path)

        assert "must contain a mapping" in str(exc_info.value)

    def test_empty_file(self, temp_dir):
        config_path = temp_dir / "empty.yaml"
        config_path.write_text("")

        assert read_config_file(config_path) == {}


class TestLoadConfigFile:
    """Test cases for load_config_file."""

    def test_env_expansion(self, testdata_dir, monkeypatch):
        """Test ${VAR} and ${VAR:-default} references in values."""
        monkeypatch.setenv("REDIS_HOST", "redis.internal")
        monkeypatch.delenv("REDIS_PORT", raising=False)

        receivers = load_config_file(testdata_dir / "env_config.yaml")

        config = receivers["smartagent/redis"]
        assert config.endpoint == "redis.internal:6379"
        assert config.monitor_config.host == "redis.internal"
        assert config.monitor_config.port == 6379

    def test_env_overrides_default(self, testdata_dir, monkeypatch):
        monkeypatch.setenv("REDIS_HOST", "redis.internal")
        monkeypatch.setenv("REDIS_PORT", "6380")

        receivers = load_config_file(testdata_dir / "env_config.yaml")

        assert receivers["smartagent/redis"].monitor_config.port == 6380

    def test_missing_env_var(self, testdata_dir, monkeypatch):
        monkeypatch.delenv("REDIS_HOST", raising=False)

        with pytest.raises(ConfigError) as exc_info:
            load_config_file(testdata_dir / "env_config.yaml")

        assert "REDIS_HOST" in str(exc_info.value)

    def test_no_receivers_section(self, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("exporters:\n  nop: {}\n")

        assert load_config_file(config_path) == {}

    def test_receivers_must_be_mapping(self, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("receivers:\n  - smartagent/redis\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config_file(config_path)

        assert "'receivers' must be a mapping" in str(exc_info.value)


class TestExpandEnv:
    """Test cases for expand_env."""

    def test_nested_values(self, monkeypatch):
        monkeypatch.setenv("MOUNT", "/hostfs")

        expanded = expand_env(
            {"a": ["${MOUNT}/var", 5], "b": {"c": "${UNSET_FOR_TEST:-x}"}, "d": None}
        )

        assert expanded == {"a": ["/hostfs/var", 5], "b": {"c": "x"}, "d": None}

    def test_plain_strings_untouched(self):
        assert expand_env("$HOME and {braces}") == "$HOME and {braces}"

    def test_empty_default(self, monkeypatch):
        monkeypatch.delenv("UNSET_FOR_TEST", raising=False)

        assert expand_env("${UNSET_FOR_TEST:-}") == ""
