"""
DNS Server Logging Module

This module provides structured logging for the DNS server, including
per-request query logging.
"""

from .dns_logger import DNSRequestLogger, format_questions, format_response_data
from .logger import (
    StructuredLogger,
    get_logger,
    log_exception,
    setup_logging,
)

__all__ = [
    # Core logging
    "StructuredLogger",
    "setup_logging",
    "get_logger",
    "log_exception",
    # DNS-specific logging
    "DNSRequestLogger",
    "format_questions",
    "format_response_data",
]
