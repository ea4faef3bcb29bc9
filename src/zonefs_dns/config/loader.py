"""Configuration loader for the DNS server.

This module handles loading configuration from files and environment variables,
with validation.
"""

import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .schema import (
    DNSServerConfig,
    LoggingConfig,
    ServerConfig,
    ZoneConfig,
    create_default_config,
)

ENV_PREFIX = "ZONEFS_DNS_"

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


class ConfigLoader:
    """Configuration loader for file and environment settings."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        """Initialize configuration loader.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            environ: Environment mapping, defaults to os.environ
        """
        self.config_file = config_file
        self.environ = os.environ if environ is None else environ
        self._config: Optional[DNSServerConfig] = None

    def load_config(self) -> DNSServerConfig:
        """Load configuration from file and environment variables.

        Returns:
            Loaded and validated DNS configuration

        Raises:
            FileNotFoundError: If config file is specified but not found
            ValueError: If configuration is invalid
            yaml.YAMLError: If YAML parsing fails
        """
        config_dict = asdict(create_default_config())

        if self.config_file:
            file_config = self._load_from_file(self.config_file)
            config_dict = self._merge_configs(config_dict, file_config)

        config_dict = self._apply_env_overrides(config_dict)

        self._config = self._dict_to_config(config_dict)
        return self._config

    def get_config(self) -> Optional[DNSServerConfig]:
        """Get current configuration."""
        return self._config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file.

        Args:
            file_path: Path to configuration file

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If file is not found
            ValueError: If file format is not supported
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            content = f.read()

        if path.suffix.lower() == ".json":
            try:
                result = json.loads(content)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {file_path}: {e}") from e
        else:
            # YAML is a superset of JSON, so anything else goes through it
            try:
                result = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise ValueError(f"Unsupported file format: {file_path}") from e

        return result if isinstance(result, dict) else {}

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> DNSServerConfig:
        """Convert dictionary to configuration object.

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            return DNSServerConfig(
                server=ServerConfig(**config_dict.get("server", {})),
                zone=ZoneConfig(**config_dict.get("zone", {})),
                logging=LoggingConfig(**config_dict.get("logging", {})),
            )
        except TypeError as e:
            # Unknown keys in a section
            raise ValueError(f"Invalid configuration: {e}") from e

    def _merge_configs(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Merge two configuration dictionaries.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary

        Returns:
            Merged configuration dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration.

        Environment variables use the format ZONEFS_DNS_<SECTION>_<KEY>
        For example: ZONEFS_DNS_ZONE_ROOT_PATH=/srv/zones

        Args:
            config_dict: Base configuration dictionary

        Returns:
            Configuration dictionary with environment overrides applied
        """
        for env_key, env_value in self.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            key_parts = env_key[len(ENV_PREFIX) :].lower().split("_")
            if len(key_parts) < 2:
                continue

            section = key_parts[0]
            config_key = "_".join(key_parts[1:])

            if not isinstance(config_dict.get(section), dict):
                continue

            current = config_dict[section].get(config_key)
            config_dict[section][config_key] = self._convert_env_value(
                env_value, current
            )

        return config_dict

    def _convert_env_value(self, value: str, current: Any) -> Any:
        """Convert environment variable value to the type of the current setting.

        Args:
            value: Environment variable value as string
            current: Value the setting has before the override

        Returns:
            Converted value
        """
        if isinstance(current, bool):
            if value.lower() in _TRUE_VALUES:
                return True
            if value.lower() in _FALSE_VALUES:
                return False
            return value

        if isinstance(current, int):
            try:
                return int(value)
            except ValueError:
                return value

        return value


def load_config_from_file(
    config_file: Optional[str] = None, zone_root: Optional[str] = None
) -> DNSServerConfig:
    """Convenience function to load configuration.

    Args:
        config_file: Path to configuration file
        zone_root: Zone data directory overriding the configured one

    Returns:
        Loaded configuration
    """
    config = ConfigLoader(config_file).load_config()

    if zone_root:
        config.zone = ZoneConfig(
            root_path=zone_root,
            default_ttl=config.zone.default_ttl,
            ttl_suffix=config.zone.ttl_suffix,
        )

    return config
