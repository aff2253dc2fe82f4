"""Tests for configuration loading."""

import json

import pytest
import yaml
from pydantic import ValidationError

from fieldstore.config import Config, substitute_env_vars
from fieldstore.exceptions import ConfigError
from fieldstore.observability import LogLevel


class TestEnvSubstitution:
    """Tests for environment variable substitution."""

    def test_substitute_string(self, monkeypatch):
        """Test substituting a string value."""
        monkeypatch.setenv("TEST_VAR", "hello")
        assert substitute_env_vars("${TEST_VAR}") == "hello"

    def test_substitute_nested(self, monkeypatch):
        """Test substituting values inside dicts and lists."""
        monkeypatch.setenv("TEST_NAME", "sessions")
        data = {"name": "${TEST_NAME}", "tags": ["${TEST_NAME}-a", "b"], "n": 3}
        assert substitute_env_vars(data) == {
            "name": "sessions",
            "tags": ["sessions-a", "b"],
            "n": 3,
        }

    def test_missing_env_var_raises(self, monkeypatch):
        """Test that missing env vars raise ValueError."""
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)
        with pytest.raises(ValueError, match="NONEXISTENT_VAR"):
            substitute_env_vars("${NONEXISTENT_VAR}")


class TestConfigLoading:
    """Tests for configuration loading."""

    def test_defaults(self):
        """Test that defaults are applied."""
        config = Config.from_dict({})
        assert config.name == "default"
        assert config.logging.level == LogLevel.INFO
        assert config.logging.format == "json"
        assert config.logging.configure is True

    def test_from_dict(self, sample_config_dict):
        """Test loading config from dictionary."""
        config = Config.from_dict(sample_config_dict)
        assert config.name == "sessions"
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == "text"

    def test_from_yaml_file(self, sample_config_dict, tmp_path, monkeypatch):
        """Test loading config from YAML file with substitution."""
        monkeypatch.setenv("STORE_NAME", "from-env")
        sample_config_dict["name"] = "${STORE_NAME}"
        path = tmp_path / "fieldstore.yaml"
        path.write_text(yaml.dump(sample_config_dict))

        config = Config.from_file(path)
        assert config.name == "from-env"

    def test_from_json_file(self, sample_config_dict, tmp_path):
        """Test loading config from JSON file."""
        path = tmp_path / "fieldstore.json"
        path.write_text(json.dumps(sample_config_dict))

        config = Config.from_file(str(path))
        assert config.name == "sessions"

    def test_empty_yaml_file(self, tmp_path):
        """An empty YAML file yields the defaults."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert Config.from_file(path).name == "default"

    def test_missing_file_raises(self, tmp_path):
        """Unreadable files raise ConfigError."""
        with pytest.raises(ConfigError):
            Config.from_file(tmp_path / "absent.yaml")

    def test_malformed_json_raises(self, tmp_path):
        """Unparseable files raise ConfigError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_invalid_level_rejected(self):
        """Unknown log levels fail validation."""
        with pytest.raises(ValidationError):
            Config.from_dict({"logging": {"level": "LOUD"}})
