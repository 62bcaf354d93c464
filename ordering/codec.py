"""
Order Key Codec
===============
Representations of an order key outside of memory.

Formats:
  wire    → list of ints 0..255 (JSON array), as items carry their
            ``ordering`` field to and from the server.
  storage → [len: 2B big-endian] [key bytes], the same length-prefixed
            shape used for variable-length STRING values.
  text    → "[55, 23]" for display; "55,23", "[55, 23]" or "55 23"
            accepted on input.
"""

import re
import struct
from typing import Any, List, Tuple

from ordering.keys import KeyLike


LENGTH_PREFIX = struct.Struct(">H")
MAX_KEY_LENGTH = 0xFFFF


class OrderKeyError(ValueError):
    """Malformed order key data."""


# ─── Wire ───────────────────────────────────────────────────────────────────

def to_wire(key: KeyLike) -> List[int]:
    return list(bytes(key))


def from_wire(values: Any) -> bytes:
    """
    Build a key from its wire form.

    Raises OrderKeyError unless ``values`` is a non-empty list/tuple of
    ints in 0..255. Booleans are rejected even though they are ints.
    """
    if not isinstance(values, (list, tuple)):
        raise OrderKeyError(f"Order key must be an array, got {type(values).__name__}")
    if not values:
        raise OrderKeyError("Order key must not be empty")
    for i, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, int):
            raise OrderKeyError(f"Order key element {i} is not an integer: {v!r}")
        if not 0 <= v <= 0xFF:
            raise OrderKeyError(f"Order key element {i} out of byte range: {v}")
    return bytes(values)


# ─── Storage ────────────────────────────────────────────────────────────────

def encode_key(key: KeyLike) -> bytes:
    """Serialize a key as a length-prefixed byte string."""
    raw = bytes(key)
    if len(raw) > MAX_KEY_LENGTH:
        raise OrderKeyError(f"Order key too long to encode: {len(raw)} bytes")
    return LENGTH_PREFIX.pack(len(raw)) + raw


def decode_key(data: bytes, offset: int = 0) -> Tuple[bytes, int]:
    """
    Decode a length-prefixed key at ``offset``.
    Returns (key, new_offset).
    """
    end = offset + LENGTH_PREFIX.size
    if end > len(data):
        raise OrderKeyError(f"Truncated order key header at offset {offset}")
    (length,) = LENGTH_PREFIX.unpack_from(data, offset)
    if end + length > len(data):
        raise OrderKeyError(
            f"Truncated order key at offset {offset}: need {length} bytes, "
            f"have {len(data) - end}"
        )
    return bytes(data[end:end + length]), end + length


# ─── Text ───────────────────────────────────────────────────────────────────

_SEPARATORS = re.compile(r"[\s,]+")


def format_key(key: KeyLike) -> str:
    return "[" + ", ".join(str(v) for v in bytes(key)) + "]"


def parse_key(text: str) -> bytes:
    """Parse "55,23", "[55, 23]" or "55 23" into a key."""
    body = text.strip()
    if body.startswith("[") and body.endswith("]"):
        body = body[1:-1]
    parts = [p for p in _SEPARATORS.split(body) if p]
    if not parts:
        raise OrderKeyError(f"Empty order key: {text!r}")
    values = []
    for p in parts:
        try:
            values.append(int(p))
        except ValueError:
            raise OrderKeyError(f"Invalid byte {p!r} in order key {text!r}") from None
    return from_wire(values)
