"""DNS server configuration: schema, validators and loader."""

from .loader import ConfigLoader, load_config_from_file
from .schema import (
    DNSServerConfig,
    LoggingConfig,
    ServerConfig,
    ZoneConfig,
    create_default_config,
)

__all__ = [
    "ConfigLoader",
    "load_config_from_file",
    "DNSServerConfig",
    "LoggingConfig",
    "ServerConfig",
    "ZoneConfig",
    "create_default_config",
]
