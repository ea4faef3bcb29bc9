"""Authoritative DNS server answering from a filesystem zone directory."""

__version__ = "0.1.0"
