"""
DNS Server Core Module

This module exports the protocol engine and the UDP listener.
"""

from .message import (
    Answer,
    BufferOverflowError,
    DNSClass,
    DNSHeader,
    DNSOpcode,
    MalformedMessageError,
    MessageBuffer,
    Question,
    encode_response,
    iter_questions,
    parse_header,
)
from .names import InvalidNameError, decode_name, encode_name, encode_name_pointer
from .records import (
    DNSRecordType,
    UnsupportedRecordTypeError,
    build_rdata,
    type_code,
    type_name,
)
from .resolver import ZoneResolver
from .server import DNSServer, ListenerState
from .zone import ZoneRecord, ZoneStore

__all__ = [
    # Main server
    "DNSServer",
    "ListenerState",
    # Resolution
    "ZoneResolver",
    "ZoneStore",
    "ZoneRecord",
    # Message components
    "Question",
    "Answer",
    "DNSHeader",
    "MessageBuffer",
    "parse_header",
    "iter_questions",
    "encode_response",
    # Names and record types
    "decode_name",
    "encode_name",
    "encode_name_pointer",
    "type_name",
    "type_code",
    "build_rdata",
    # Enums
    "DNSRecordType",
    "DNSClass",
    "DNSOpcode",
    # Errors
    "InvalidNameError",
    "MalformedMessageError",
    "BufferOverflowError",
    "UnsupportedRecordTypeError",
]
