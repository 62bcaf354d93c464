"""
Order Keys
==========
Byte-string keys that keep sibling items in display order and admit
an insertion at any position without touching existing keys.

Usage:
    from ordering import new_key_at_end, new_key_between, compare
    from ordering import KeySpace, to_wire, from_wire

Components:
  - keys: comparison and generation (before / after / between)
  - codec: wire (JSON int array), storage (length-prefixed) and text forms
  - key_space: thread-safe per-container index of item keys
"""

from ordering.keys import (
    STEP, SINGLETON, compare, is_canonical,
    new_key, new_key_after, new_key_before, new_key_between,
    new_key_at_end, new_key_at_start, sort_keys, sorted_by_key,
)
from ordering.codec import (
    OrderKeyError, to_wire, from_wire, encode_key, decode_key,
    format_key, parse_key,
)
from ordering.key_space import KeySpace, KeySpaceError

__all__ = [
    "STEP", "SINGLETON", "compare", "is_canonical",
    "new_key", "new_key_after", "new_key_before", "new_key_between",
    "new_key_at_end", "new_key_at_start", "sort_keys", "sorted_by_key",
    "OrderKeyError", "to_wire", "from_wire", "encode_key", "decode_key",
    "format_key", "parse_key",
    "KeySpace", "KeySpaceError",
]
