"""
Order Key Algebra
=================
Variable-length byte keys that order the children of one container.

A key is an immutable ``bytes`` value. Two keys compare byte by byte;
on a tied common prefix the shorter key sorts first. New keys are always
computed from their neighbours, so existing keys are never rewritten.

Generation rules (STEP = 1):
  after    → copy leading 0xFF bytes, bump the first byte below 0xFF,
             or append STEP if every byte is 0xFF.
  before   → copy leading 0x00 bytes, lower the first non-zero byte,
             or emit 0x00 0xFE when that byte is 0x01.
  between  → base-256 midpoint; the lower key is padded with 0,
             the upper key with 256 (one past the maximum byte).

Concurrency: pure functions, no shared state. Callers serialize
"read min/max, then generate" per key space (see ordering.key_space).
"""

from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, TypeVar, Union


KeyLike = Union[bytes, bytearray, memoryview, Iterable[int]]
T = TypeVar("T")


# ─── Constants ──────────────────────────────────────────────────────────────

STEP = 1
MAX_BYTE = 0xFF
VIRTUAL_TOP = 0x100          # padding for a missing byte of the upper key
MIDPOINT = 0x80
SINGLETON = bytes([MIDPOINT])


# ─── Comparison ─────────────────────────────────────────────────────────────

def compare(a: KeyLike, b: KeyLike) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to, or after ``b``."""
    a = bytes(a)
    b = bytes(b)
    for x, y in zip(a, b):
        if x < y:
            return -1
        if x > y:
            return 1
    if len(a) < len(b):
        return -1
    if len(a) > len(b):
        return 1
    return 0


def is_canonical(key: KeyLike) -> bool:
    """
    True if ``key`` is non-empty and does not end in a zero byte.

    Only non-canonical keys can be adjacent with nothing between them
    (``[5]`` and ``[5, 0]``). Generation from canonical keys stays canonical.
    """
    key = bytes(key)
    return len(key) > 0 and key[-1] != 0


# ─── Generation ─────────────────────────────────────────────────────────────

def new_key() -> bytes:
    """The canonical key for the first child of an empty container."""
    return SINGLETON


def new_key_after(end: KeyLike) -> bytes:
    """Return the nearest cheap key strictly greater than ``end``."""
    result = bytearray()
    for v in bytes(end):
        if v == MAX_BYTE:
            result.append(MAX_BYTE)
            continue
        if v > MAX_BYTE - STEP:
            result.append(v + 1)
        else:
            result.append(v + STEP)
        return bytes(result)

    result.append(STEP)
    return bytes(result)


def new_key_before(start: KeyLike) -> bytes:
    """
    Return the nearest cheap key strictly less than ``start``.

    An all-zero (or empty) input has no key below it. By convention a
    zero byte is appended; the result then does NOT compare below the
    input. Such keys are never produced from canonical keys.
    """
    result = bytearray()
    for v in bytes(start):
        if v == 0:
            result.append(0)
            continue

        if v > STEP:
            result.append(v - STEP)
            return bytes(result)

        if v - 1 > 0:
            result.append(v - 1)
            return bytes(result)

        # v == 1: borrow into a new trailing byte
        result.append(0)
        result.append(MAX_BYTE - STEP)
        return bytes(result)

    result.append(0)
    return bytes(result)


def new_key_between(p1: KeyLike, p2: KeyLike) -> bytes:
    """
    Return a key strictly between ``p1`` and ``p2`` (argument order is
    irrelevant).

    Equal inputs have nothing between them; a copy of the input is
    returned. When the upper key is the lower key followed only by
    zero bytes (``[5]`` and ``[5, 0]``) nothing lies between them either.

    The result is at most a couple of bytes longer than the longer input.
    """
    p1 = bytes(p1)
    p2 = bytes(p2)

    cmp = compare(p1, p2)
    if cmp == 0:
        return bytes(p1)
    if cmp > 0:
        p1, p2 = p2, p1

    result = bytearray()
    halving = False

    for i in range(max(len(p1), len(p2))):
        a = p1[i] if i < len(p1) else 0
        b = p2[i] if i < len(p2) else VIRTUAL_TOP

        if halving:
            # p2 is already beaten; only need to climb above p1
            if a == MAX_BYTE:
                result.append(MAX_BYTE)
                continue
            result.append((a + VIRTUAL_TOP) // 2)
            return bytes(result)

        n = (a + b) // 2
        result.append(n)
        if n != a:
            # n > a and, being rounded down, n < b
            return bytes(result)
        if n != b:
            halving = True

    result.append(MIDPOINT)
    return bytes(result)


def new_key_at_end(keys: Iterable[KeyLike]) -> bytes:
    """Key after the greatest of ``keys``; ``new_key()`` when empty."""
    highest = None
    for k in keys:
        if highest is None or compare(highest, k) <= 0:
            highest = k
    if highest is None:
        return new_key()
    return new_key_after(highest)


def new_key_at_start(keys: Iterable[KeyLike]) -> bytes:
    """Key before the least of ``keys``; ``new_key()`` when empty."""
    lowest = None
    for k in keys:
        if lowest is None or compare(lowest, k) >= 0:
            lowest = k
    if lowest is None:
        return new_key()
    return new_key_before(lowest)


# ─── Sorting ────────────────────────────────────────────────────────────────

_SORT_KEY = cmp_to_key(compare)


def sort_keys(keys: Iterable[KeyLike]) -> List[bytes]:
    """Return ``keys`` as bytes, in order."""
    return sorted((bytes(k) for k in keys), key=_SORT_KEY)


def sorted_by_key(items: Iterable[T], key: Callable[[T], Any]) -> List[T]:
    """Order ``items`` by the order key ``key(item)`` returns. Stable."""
    return sorted(items, key=lambda item: _SORT_KEY(key(item)))
