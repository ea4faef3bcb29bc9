"""
DNS Message Decoder/Encoder

This module implements the query side of RFC 1035 message handling:
- Header validation (standard queries only)
- Question section decoding with duplicate-name tracking
- Response encoding into a fixed-capacity buffer with name compression
"""

import logging
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterator, List, Optional

from .names import decode_name, encode_name, encode_name_pointer, pointer_fits

logger = logging.getLogger(__name__)

HEADER_SIZE = 12
DEFAULT_TTL = 600
DEFAULT_BUFFER_SIZE = 8192

# QR=1, OPCODE=0, AA=0, TC=0, RD=1, RA=1, RCODE=0
RESPONSE_FLAGS = 0x8180


class DNSOpcode(IntEnum):
    """DNS Operation Codes"""

    QUERY = 0
    IQUERY = 1
    STATUS = 2
    NOTIFY = 4
    UPDATE = 5


class DNSClass(IntEnum):
    """DNS Classes"""

    IN = 1
    CS = 2
    CH = 3
    HS = 4
    ANY = 255


class MalformedMessageError(ValueError):
    """Raised when a datagram is not an answerable standard query"""


class BufferOverflowError(ValueError):
    """Raised when a response does not fit in the message buffer"""


@dataclass
class DNSHeader:
    """DNS Message Header (only the fields a query needs)"""

    transaction_id: int
    flags: int
    question_count: int = 0

    @property
    def qr(self) -> bool:
        return bool(self.flags & 0x8000)

    @property
    def opcode(self) -> int:
        return (self.flags >> 11) & 0x0F


@dataclass(eq=False)
class Question:
    """DNS Question Section entry"""

    name: str
    qtype: int
    qclass: int = DNSClass.IN
    first_occurrence: Optional["Question"] = None
    # Offset of the name in the response, set while encoding
    name_offset: Optional[int] = None


@dataclass(eq=False)
class Answer:
    """Answer record for a question, RDATA already in wire format"""

    question: Question
    rtype: int
    ttl: int = DEFAULT_TTL
    rdata: bytes = b""


@dataclass
class MessageBuffer:
    """Fixed-capacity output arena reused between requests"""

    capacity: int = DEFAULT_BUFFER_SIZE
    data: bytearray = field(init=False, repr=False)
    position: int = field(init=False, default=0)

    def __post_init__(self):
        self.data = bytearray(self.capacity)

    def reset(self) -> None:
        """Clear the arena for the next message"""
        self.data[:] = bytes(self.capacity)
        self.position = 0

    def write(self, chunk: bytes) -> None:
        end = self.position + len(chunk)
        if end > self.capacity:
            raise BufferOverflowError(
                f"Response exceeds buffer capacity of {self.capacity} bytes"
            )
        self.data[self.position : end] = chunk
        self.position = end

    def write_u16(self, value: int) -> None:
        self.write(struct.pack("!H", value))

    def write_u32(self, value: int) -> None:
        self.write(struct.pack("!I", value))

    def write_name(self, name: str) -> int:
        """Write a literal name and return the offset it starts at"""
        offset = self.position
        self.write(encode_name(name))
        return offset

    def write_name_pointer(self, offset: int) -> None:
        self.write(encode_name_pointer(offset))

    def getvalue(self) -> bytes:
        return bytes(self.data[: self.position])


def parse_header(data: bytes) -> DNSHeader:
    """Parse and validate the header of an incoming query"""
    if len(data) < HEADER_SIZE:
        raise MalformedMessageError("Invalid DNS header: too short")

    tid, flags, qcount = struct.unpack("!HHH", data[:6])
    header = DNSHeader(transaction_id=tid, flags=flags, question_count=qcount)

    if header.qr:
        raise MalformedMessageError("Refusing to process a DNS response")
    if header.opcode != DNSOpcode.QUERY:
        raise MalformedMessageError(f"Unsupported opcode: {header.opcode}")

    return header


def iter_questions(data: bytes, header: DNSHeader) -> Iterator[Question]:
    """Decode the question section one entry at a time.

    Questions are yielded as soon as they are decoded, so callers can resolve
    each one before the next is read. A question whose name matches an
    earlier one (case-insensitively) is linked to it via first_occurrence.
    """
    first_seen: Dict[str, Question] = {}
    offset = HEADER_SIZE

    for _ in range(header.question_count):
        name, offset = decode_name(data, offset)
        if not name:
            raise MalformedMessageError("Invalid question: empty name")

        if offset + 4 > len(data):
            raise MalformedMessageError(
                "Invalid question: not enough data for type and class"
            )
        qtype, qclass = struct.unpack("!HH", data[offset : offset + 4])
        offset += 4

        question = Question(name=name, qtype=qtype, qclass=qclass)
        key = name.lower()
        if key in first_seen:
            question.first_occurrence = first_seen[key]
        else:
            first_seen[key] = question

        yield question


def _write_name_reference(buffer: MessageBuffer, name: str, offset: int) -> int:
    """Point at a name written earlier, or repeat it when the offset is too far"""
    if pointer_fits(offset):
        buffer.write_name_pointer(offset)
        return offset
    return buffer.write_name(name)


def encode_response(
    buffer: MessageBuffer,
    header: DNSHeader,
    questions: List[Question],
    answers: List[Answer],
) -> bytes:
    """Encode the response for a decoded query.

    The buffer is reset first. Returns the encoded message bytes.
    """
    buffer.reset()

    buffer.write_u16(header.transaction_id)
    buffer.write_u16(RESPONSE_FLAGS)
    buffer.write_u16(header.question_count)
    buffer.write_u16(len(answers))
    buffer.write_u16(0)  # NSCOUNT
    buffer.write_u16(0)  # ARCOUNT

    for question in questions:
        first = question.first_occurrence
        if first is None or first.name_offset is None:
            question.name_offset = buffer.write_name(question.name)
        else:
            question.name_offset = _write_name_reference(
                buffer, question.name, first.name_offset
            )
        buffer.write_u16(question.qtype)
        buffer.write_u16(DNSClass.IN)

    for answer in answers:
        _write_name_reference(
            buffer, answer.question.name, answer.question.name_offset
        )
        buffer.write_u16(answer.rtype)
        buffer.write_u16(DNSClass.IN)
        buffer.write_u32(answer.ttl)
        buffer.write_u16(len(answer.rdata))
        buffer.write(answer.rdata)

    return buffer.getvalue()
