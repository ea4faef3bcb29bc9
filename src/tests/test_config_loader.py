"""Tests for the configuration loader module."""

import json

import pytest

from zonefs_dns.config.loader import ConfigLoader, load_config_from_file
from zonefs_dns.config.schema import DNSServerConfig


class TestConfigLoader:
    """Test ConfigLoader functionality."""

    def test_load_default_config(self):
        """Test loading default configuration without file."""
        loader = ConfigLoader(environ={})
        config = loader.load_config()

        assert isinstance(config, DNSServerConfig)
        assert config.server.bind_address == "0.0.0.0"
        assert config.server.dns_port == 53
        assert config.zone.root_path == "zones"
        assert config.logging.level == "INFO"

    def test_load_yaml_config(self, tmp_path):
        """Test loading configuration from YAML file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
server:
  bind_address: "127.0.0.1"
  dns_port: 5353
  buffer_size: 4096

zone:
  root_path: "/srv/zones"
  default_ttl: 300

logging:
  level: "DEBUG"
  format: "json"
"""
        )

        config = ConfigLoader(str(config_file), environ={}).load_config()

        assert config.server.bind_address == "127.0.0.1"
        assert config.server.dns_port == 5353
        assert config.server.buffer_size == 4096
        assert config.zone.root_path == "/srv/zones"
        assert config.zone.default_ttl == 300
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"

    def test_load_json_config(self, tmp_path):
        """Test loading configuration from JSON file."""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps({"server": {"dns_port": 5300}, "zone": {"ttl_suffix": ".ttl"}})
        )

        config = ConfigLoader(str(config_file), environ={}).load_config()

        assert config.server.dns_port == 5300
        assert config.zone.ttl_suffix == ".ttl"

    def test_file_not_found(self, tmp_path):
        """Test handling of non-existent configuration file."""
        loader = ConfigLoader(str(tmp_path / "missing.yaml"), environ={})

        with pytest.raises(FileNotFoundError):
            loader.load_config()

    def test_invalid_yaml_file(self, tmp_path):
        """Test handling of invalid YAML file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("invalid: yaml: content: [")

        with pytest.raises(ValueError, match="Unsupported file format"):
            ConfigLoader(str(config_file), environ={}).load_config()

    def test_invalid_json_file(self, tmp_path):
        """Test handling of invalid JSON file."""
        config_file = tmp_path / "config.json"
        config_file.write_text('{"invalid": json, "content":')

        with pytest.raises(ValueError, match="Invalid JSON"):
            ConfigLoader(str(config_file), environ={}).load_config()

    def test_auto_format_detection(self, tmp_path):
        """Test files without extension are parsed as YAML."""
        config_file = tmp_path / "zonefs"
        config_file.write_text("server:\n  dns_port: 9999")

        config = ConfigLoader(str(config_file), environ={}).load_config()
        assert config.server.dns_port == 9999

    def test_empty_file_uses_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = ConfigLoader(str(config_file), environ={}).load_config()
        assert config.server.dns_port == 53

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server:\n  workers: 8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            ConfigLoader(str(config_file), environ={}).load_config()

    def test_config_validation_error(self, tmp_path):
        """Test handling of configuration validation errors."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server:\n  dns_port: 99999  # Invalid port number\n")

        with pytest.raises(ValueError, match="Invalid DNS port"):
            ConfigLoader(str(config_file), environ={}).load_config()

    def test_config_merge(self, tmp_path):
        """Test merging file config with defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server:\n  dns_port: 5555\n")

        config = ConfigLoader(str(config_file), environ={}).load_config()

        assert config.server.dns_port == 5555
        # Should keep default values for non-specified settings
        assert config.server.bind_address == "0.0.0.0"
        assert config.server.buffer_size == 8192
        assert config.zone.default_ttl == 600

    def test_environment_variable_overrides(self):
        """Test environment variable overrides."""
        environ = {
            "ZONEFS_DNS_SERVER_DNS_PORT": "9953",
            "ZONEFS_DNS_SERVER_BIND_ADDRESS": "10.0.0.1",
            "ZONEFS_DNS_ZONE_ROOT_PATH": "/srv/zones",
            "ZONEFS_DNS_LOGGING_LEVEL": "ERROR",
            "ZONEFS_DNS_LOGGING_LOG_QUERIES": "yes",
            "ZONEFS_DNS_SERVER_USE_UVLOOP": "false",
            "OTHER_SERVER_DNS_PORT": "1",
        }

        config = ConfigLoader(environ=environ).load_config()

        assert config.server.dns_port == 9953
        assert isinstance(config.server.dns_port, int)
        assert config.server.bind_address == "10.0.0.1"
        assert config.zone.root_path == "/srv/zones"
        assert config.logging.level == "ERROR"
        assert config.logging.log_queries is True
        assert config.server.use_uvloop is False

    def test_environment_overrides_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("zone:\n  default_ttl: 60\n")
        environ = {"ZONEFS_DNS_ZONE_DEFAULT_TTL": "120"}

        config = ConfigLoader(str(config_file), environ=environ).load_config()
        assert config.zone.default_ttl == 120

    def test_environment_unknown_section_ignored(self):
        environ = {"ZONEFS_DNS_CACHE_MAX_SIZE": "10", "ZONEFS_DNS_PORT": "1"}

        config = ConfigLoader(environ=environ).load_config()
        assert config.server.dns_port == 53

    def test_environment_bad_integer(self):
        environ = {"ZONEFS_DNS_SERVER_DNS_PORT": "fifty-three"}

        with pytest.raises(ValueError, match="Invalid DNS port"):
            ConfigLoader(environ=environ).load_config()

    def test_get_config(self):
        """Test getting current configuration."""
        loader = ConfigLoader(environ={})

        assert loader.get_config() is None

        config = loader.load_config()
        assert loader.get_config() is config


class TestLoadConfigFromFile:
    """Test the convenience function for loading configuration."""

    def test_zone_root_override(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ZONEFS_DNS_ZONE_ROOT_PATH", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("zone:\n  root_path: /srv/zones\n  default_ttl: 90\n")

        config = load_config_from_file(str(config_file), zone_root=str(tmp_path))

        assert config.zone.root_path == str(tmp_path)
        assert config.zone.default_ttl == 90

    def test_without_file(self, monkeypatch):
        monkeypatch.delenv("ZONEFS_DNS_SERVER_DNS_PORT", raising=False)

        config = load_config_from_file()
        assert isinstance(config, DNSServerConfig)
        assert config.server.dns_port == 53
