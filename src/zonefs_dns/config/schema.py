"""
DNS Server Configuration Schema

Configuration sections for the listener, the zone store and logging.
"""

from dataclasses import dataclass, field
from typing import Optional

from .validators import (
    validate_bind_address,
    validate_boolean,
    validate_file_path,
    validate_log_level,
    validate_port,
    validate_positive_int,
    validate_ttl,
)

# Compression pointers address at most 16383 bytes into a message
MAX_BUFFER_SIZE = 16384
MIN_BUFFER_SIZE = 512


@dataclass
class ServerConfig:
    """Server configuration section."""

    bind_address: str = "0.0.0.0"
    dns_port: int = 53
    buffer_size: int = 8192
    use_uvloop: bool = True

    def __post_init__(self) -> None:
        """Validate server configuration."""
        if not validate_bind_address(self.bind_address):
            raise ValueError(f"Invalid bind address: {self.bind_address}")

        if not validate_port(self.dns_port):
            raise ValueError(f"Invalid DNS port: {self.dns_port}")

        if not validate_positive_int(self.buffer_size) or not (
            MIN_BUFFER_SIZE <= self.buffer_size <= MAX_BUFFER_SIZE
        ):
            raise ValueError(
                f"Buffer size must be between {MIN_BUFFER_SIZE} and "
                f"{MAX_BUFFER_SIZE}: {self.buffer_size}"
            )

        if not validate_boolean(self.use_uvloop):
            raise ValueError(f"Use uvloop must be boolean: {self.use_uvloop}")


@dataclass
class ZoneConfig:
    """Zone data configuration section."""

    root_path: str = "zones"
    default_ttl: int = 600
    ttl_suffix: str = ".TTL"

    def __post_init__(self) -> None:
        """Validate zone configuration."""
        if not validate_file_path(self.root_path):
            raise ValueError(f"Invalid zone root path: {self.root_path}")

        if not validate_ttl(self.default_ttl):
            raise ValueError(
                f"Default TTL must be between 0 and 4294967295: {self.default_ttl}"
            )

        if (
            not isinstance(self.ttl_suffix, str)
            or len(self.ttl_suffix) < 2
            or not self.ttl_suffix.startswith(".")
        ):
            raise ValueError(f"Invalid TTL suffix: {self.ttl_suffix}")


@dataclass
class LoggingConfig:
    """Logging configuration section."""

    level: str = "INFO"
    format: str = "console"
    file: Optional[str] = None
    max_size_mb: int = 100
    backup_count: int = 5
    log_queries: bool = False

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        if not validate_log_level(self.level):
            raise ValueError(f"Invalid log level: {self.level}")

        if self.format not in ["console", "json"]:
            raise ValueError(f"Invalid log format: {self.format}")

        if self.file is not None and not validate_file_path(self.file):
            raise ValueError(f"Invalid log file path: {self.file}")

        if not validate_positive_int(self.max_size_mb):
            raise ValueError(f"Max size MB must be positive: {self.max_size_mb}")

        if not validate_positive_int(self.backup_count):
            raise ValueError(f"Backup count must be positive: {self.backup_count}")

        if not validate_boolean(self.log_queries):
            raise ValueError(f"Log queries must be boolean: {self.log_queries}")


@dataclass
class DNSServerConfig:
    """Main DNS server configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    zone: ZoneConfig = field(default_factory=ZoneConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def create_default_config() -> DNSServerConfig:
    """Create a default configuration instance."""
    return DNSServerConfig()
