"""Shared fixtures: zone directories and query packets."""

import struct

import pytest

from zonefs_dns.config.schema import DNSServerConfig, ServerConfig, ZoneConfig
from zonefs_dns.core.names import encode_name


@pytest.fixture
def zone_root(tmp_path):
    """Zone directory with a few domains.

    example.com      A (TTL 3600), AAAA, TXT, CNAME
    www.example.com  CNAME
    bad.example      A (unparsable), TXT
    any.example      A, A.TTL, TXT
    """
    root = tmp_path / "zones"

    example = root / "example.com"
    example.mkdir(parents=True)
    (example / "A").write_text("192.0.2.1\n")
    (example / "A.TTL").write_text("3600\n")
    (example / "AAAA").write_text("2001:db8::1\r\n")
    (example / "TXT").write_text("v=spf1 -all")
    (example / "CNAME").write_text("alias.example.net\n")

    www = root / "www.example.com"
    www.mkdir()
    (www / "CNAME").write_text("example.com\n")

    bad = root / "bad.example"
    bad.mkdir()
    (bad / "A").write_text("not-an-address\n")
    (bad / "TXT").write_text("still served")

    any_dir = root / "any.example"
    any_dir.mkdir()
    (any_dir / "A").write_text("198.51.100.7")
    (any_dir / "A.TTL").write_text("120")
    (any_dir / "TXT").write_text("hello")

    return root


@pytest.fixture
def server_config(zone_root):
    """Configuration serving zone_root on an ephemeral loopback port."""
    return DNSServerConfig(
        server=ServerConfig(bind_address="127.0.0.1", dns_port=0, use_uvloop=False),
        zone=ZoneConfig(root_path=str(zone_root)),
    )


@pytest.fixture
def build_query():
    """Build a raw query packet from (name, qtype[, qclass]) tuples."""

    def _build(questions, transaction_id=0x1234, flags=0x0100):
        data = struct.pack(
            "!HHHHHH", transaction_id, flags, len(questions), 0, 0, 0
        )
        for question in questions:
            name, qtype = question[0], question[1]
            qclass = question[2] if len(question) > 2 else 1
            data += encode_name(name) + struct.pack("!HH", qtype, qclass)
        return data

    return _build
