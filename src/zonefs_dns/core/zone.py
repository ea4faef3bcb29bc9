"""
Filesystem Zone Store

Zone data lives under a root directory with one subdirectory per domain name
and one file per record type:

    <root>/<domain>/<TYPE>        record contents (A, AAAA, CNAME, TXT)
    <root>/<domain>/<TYPE>.TTL    optional TTL override in seconds

Files are read on every lookup, so zone changes are visible immediately.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .message import DEFAULT_TTL, DNSClass
from .records import DNSRecordType, build_rdata, type_name

logger = logging.getLogger(__name__)

MAX_TTL = 0xFFFFFFFF
TTL_SUFFIX = ".TTL"


@dataclass
class ZoneRecord:
    """A record read from a zone file"""

    rtype: int
    ttl: int
    rdata: bytes
    source: Path


class ZoneStore:
    """Read-only record store backed by a directory tree"""

    def __init__(
        self,
        root: Union[str, Path],
        default_ttl: int = DEFAULT_TTL,
        ttl_suffix: str = TTL_SUFFIX,
    ):
        self.root = Path(root)
        self.default_ttl = default_ttl
        self.ttl_suffix = ttl_suffix

    def lookup(
        self, name: str, qtype: int, qclass: int = DNSClass.IN
    ) -> List[ZoneRecord]:
        """Get the records for a name and type.

        A missing domain or record file is not an error, it simply yields no
        records. Files that cannot be read or encoded are skipped.
        """
        if qclass != DNSClass.IN:
            return []

        domain_dir = self._find_domain_dir(name)
        if domain_dir is None:
            return []

        if qtype == DNSRecordType.ANY:
            try:
                paths = sorted(p for p in domain_dir.iterdir() if p.is_file())
            except OSError as e:
                logger.debug(f"Cannot list zone directory {domain_dir}: {e}")
                return []
        else:
            paths = [domain_dir / type_name(qtype)]

        records = []
        for path in paths:
            record = self.read_record_file(path)
            if record is not None:
                records.append(record)
        return records

    def read_record_file(self, path: Path) -> Optional[ZoneRecord]:
        """Read and encode a single zone file, or None if it cannot be served"""
        if self._is_ttl_file(path):
            return None

        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug(f"Cannot read zone file {path}: {e}")
            return None

        try:
            rtype, rdata = build_rdata(path.name.upper(), raw)
        except ValueError as e:
            logger.debug(f"Skipping zone file {path}: {e}")
            return None

        return ZoneRecord(
            rtype=rtype, ttl=self.read_ttl(path), rdata=rdata, source=path
        )

    def read_ttl(self, record_path: Path) -> int:
        """Get the TTL for a record file from its sidecar, or the default"""
        ttl_path = record_path.with_name(record_path.name + self.ttl_suffix)
        try:
            text = ttl_path.read_text(encoding="ascii")
        except (OSError, ValueError):
            return self.default_ttl

        text = text.strip()
        if not text.isdigit():
            logger.debug(f"Ignoring unparsable TTL in {ttl_path}")
            return self.default_ttl

        ttl = int(text)
        if ttl > MAX_TTL:
            logger.debug(f"Ignoring out of range TTL in {ttl_path}")
            return self.default_ttl
        return ttl

    def _is_ttl_file(self, path: Path) -> bool:
        return path.name.upper().endswith(self.ttl_suffix.upper())

    def _find_domain_dir(self, name: str) -> Optional[Path]:
        """Locate the directory for a domain, matching case-insensitively"""
        if not name or name in (".", "..") or any(c in name for c in "/\\\x00"):
            return None

        exact = self.root / name
        if exact.is_dir():
            return exact

        wanted = name.lower()
        try:
            for entry in self.root.iterdir():
                if entry.name.lower() == wanted and entry.is_dir():
                    return entry
        except OSError as e:
            logger.debug(f"Cannot list zone root {self.root}: {e}")
        return None
