"""
DNS Record Type Codec

Maps record type codes to the mnemonics used as zone file names and builds
wire-format RDATA from zone file contents for the supported types
(A, AAAA, CNAME, TXT).
"""

import ipaddress
import logging
from enum import IntEnum
from typing import Tuple

import dns.rdata
import dns.rdataclass

from .names import encode_name

logger = logging.getLogger(__name__)

MAX_TXT_LENGTH = 255


class DNSRecordType(IntEnum):
    """DNS Record Types served from zone files"""

    A = 1
    CNAME = 5
    TXT = 16
    AAAA = 28
    ANY = 255


class UnsupportedRecordTypeError(ValueError):
    """Raised when a mnemonic has no zone file encoding"""


# Types with a zone file encoding; ANY is a query-only type
_SERVED_TYPES = {
    "A": DNSRecordType.A,
    "AAAA": DNSRecordType.AAAA,
    "CNAME": DNSRecordType.CNAME,
    "TXT": DNSRecordType.TXT,
}


def type_name(rtype: int) -> str:
    """Get the zone file name for a record type code.

    Unlisted codes map to their decimal form, e.g. 15 -> "15".
    """
    for name, code in _SERVED_TYPES.items():
        if code == rtype:
            return name
    return str(rtype)


def type_code(name: str) -> int:
    """Get the record type code for a zone file mnemonic"""
    try:
        return int(_SERVED_TYPES[name])
    except KeyError:
        raise UnsupportedRecordTypeError(f"Unsupported record type: {name}") from None


def _one_line(raw: bytes) -> str:
    text = raw.decode("ascii").strip(" \r\n\t")
    return text.splitlines()[0].strip() if text else text


def build_rdata(name: str, raw: bytes) -> Tuple[int, bytes]:
    """Build wire-format RDATA from raw zone file contents.

    Args:
        name: Upper-case record type mnemonic (the zone file name)
        raw: Zone file contents

    Returns:
        Tuple of (record type code, RDATA bytes)

    Raises:
        UnsupportedRecordTypeError: If the mnemonic is not a served type
        ValueError: If the contents cannot be encoded for the type
    """
    rtype = type_code(name)

    if rtype == DNSRecordType.A:
        return rtype, ipaddress.IPv4Address(_one_line(raw)).packed
    elif rtype == DNSRecordType.AAAA:
        return rtype, ipaddress.IPv6Address(_one_line(raw)).packed
    elif rtype == DNSRecordType.CNAME:
        return rtype, encode_name(_one_line(raw))

    # TXT: a single character-string
    text = raw[:MAX_TXT_LENGTH]
    return rtype, bytes((len(text),)) + text


def describe_rdata(rtype: int, rdata: bytes) -> str:
    """Get human-readable representation of RDATA for logging"""
    try:
        rd = dns.rdata.from_wire(dns.rdataclass.IN, rtype, rdata, 0, len(rdata))
        return rd.to_text()
    except Exception as e:
        logger.debug(f"Failed to parse rdata for type {rtype}: {e}")
        return rdata.hex()
