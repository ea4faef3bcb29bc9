"""
DNS Name Codec

Wire-format domain name handling (RFC 1035 section 4.1.4):
- Length-prefixed label decoding with compression pointer support
- Literal name encoding
- Two-byte compression pointer encoding
"""

from typing import List, Tuple

# Indirections allowed while following compression pointers
MAX_POINTER_DEPTH = 8

MAX_LABEL_LENGTH = 63
POINTER_MASK = 0xC0
MAX_POINTER_OFFSET = 0x3FFF


class InvalidNameError(ValueError):
    """Raised when a domain name cannot be decoded or encoded"""


def decode_name(data: bytes, offset: int, depth: int = 0) -> Tuple[str, int]:
    """Decode a domain name starting at ``offset``.

    Returns the dotted name (case preserved, no trailing dot) and the offset
    of the first byte after the name as it appears at ``offset``. When a
    compression pointer is met, the name continues at the pointer target and
    the returned offset is the byte after the pointer.
    """
    labels: List[str] = []
    next_offset = _read_labels(data, offset, labels, depth)
    return ".".join(labels), next_offset


def _read_labels(data: bytes, offset: int, labels: List[str], depth: int) -> int:
    if depth > MAX_POINTER_DEPTH:
        raise InvalidNameError("Invalid name: too many compression pointers")

    while True:
        if offset >= len(data):
            raise InvalidNameError("Invalid name: offset out of bounds")

        length = data[offset]
        offset += 1

        if length == 0:
            return offset

        if (length & POINTER_MASK) == POINTER_MASK:
            if offset >= len(data):
                raise InvalidNameError("Invalid compression pointer")
            target = ((length & 0x3F) << 8) | data[offset]
            _read_labels(data, target, labels, depth + 1)
            return offset + 1

        if length > MAX_LABEL_LENGTH:
            raise InvalidNameError(f"Invalid name: label length {length}")

        if offset + length > len(data):
            raise InvalidNameError("Invalid label: length exceeds data")

        # Any octet is legal in a label
        labels.append(data[offset : offset + length].decode("latin-1"))
        offset += length


def encode_name(name: str) -> bytes:
    """Encode a domain name as length-prefixed labels (no compression)"""
    name = name.rstrip(".")
    if not name:
        return b"\x00"

    result = bytearray()
    for label in name.split("."):
        try:
            label_bytes = label.encode("latin-1")
        except UnicodeEncodeError as e:
            raise InvalidNameError(f"Invalid label: {label!r}") from e
        if len(label_bytes) > MAX_LABEL_LENGTH:
            raise InvalidNameError(f"Label too long: {label}")
        result.append(len(label_bytes))
        result += label_bytes
    result.append(0)
    return bytes(result)


def encode_name_pointer(offset: int) -> bytes:
    """Encode a compression pointer to ``offset``.

    Only the low 14 bits of the offset are kept; use pointer_fits() first.
    """
    pointer = 0xC000 | (offset & MAX_POINTER_OFFSET)
    return bytes((pointer >> 8, pointer & 0xFF))


def pointer_fits(offset: int) -> bool:
    """Check whether a compression pointer can reference ``offset``"""
    return 0 <= offset <= MAX_POINTER_OFFSET
