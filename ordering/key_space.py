"""
Key Space
=========
Order keys of the children of one container.

A KeySpace maps item ids to order keys and hands out new keys for
positions in the current order. Each "look at the neighbours, then
generate" step runs under one mutex, so two threads appending to the
same container never compute the same key from the same snapshot.

Ties: two items holding equal keys are ordered by the sequence in
which they entered the key space.
"""

import threading
from functools import cmp_to_key
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

from ordering.codec import OrderKeyError
from ordering.keys import (
    KeyLike, compare, is_canonical, new_key, new_key_after, new_key_before,
    new_key_between, new_key_at_end, new_key_at_start,
)


class KeySpaceError(OrderKeyError):
    """Key space contract violation (duplicate item id)."""


class KeySpace:
    """
    Thread-safe ordering index for one parent's children.

    Invariants:
      - Every key handed out is computed from keys present at that moment
      - Moving an item replaces its key; no other key changes
      - Iteration order == compare() order, ties by arrival
    """

    def __init__(self, parent_id: Optional[Hashable] = None):
        self.parent_id = parent_id
        self._keys: Dict[Hashable, bytes] = {}
        self._arrival: Dict[Hashable, int] = {}
        self._next_arrival = 0
        self._mutex = threading.Lock()   # Protects _keys, _arrival, _next_arrival

    # ─── Public API ─────────────────────────────────────────────────

    def add(self, item_id: Hashable, key: KeyLike) -> bytes:
        """
        Register an item whose key already exists (e.g. loaded from storage).

        Raises OrderKeyError for an empty key or one ending in a zero byte;
        positional inserts next to such keys cannot stay in order.
        """
        key = bytes(key)
        if not key:
            raise OrderKeyError(f"Order key for item {item_id!r} must not be empty")
        if not is_canonical(key):
            raise OrderKeyError(
                f"Order key for item {item_id!r} ends in a zero byte: {list(key)}"
            )
        with self._mutex:
            return self._put(item_id, key)

    def append(self, item_id: Hashable) -> bytes:
        with self._mutex:
            self._require_absent(item_id)
            return self._put(item_id, new_key_at_end(self._keys.values()))

    def prepend(self, item_id: Hashable) -> bytes:
        with self._mutex:
            self._require_absent(item_id)
            return self._put(item_id, new_key_at_start(self._keys.values()))

    def insert_between(self, item_id: Hashable,
                       left_id: Optional[Hashable],
                       right_id: Optional[Hashable]) -> bytes:
        """
        Insert between two neighbours the caller knows to be adjacent.
        Either neighbour may be None, meaning "no neighbour on that side".
        """
        with self._mutex:
            self._require_absent(item_id)
            left = self._keys[left_id] if left_id is not None else None
            right = self._keys[right_id] if right_id is not None else None

            if left is not None and right is not None:
                key = new_key_between(left, right)
            elif left is not None:
                key = new_key_after(left)
            elif right is not None:
                key = new_key_before(right)
            else:
                key = new_key_at_end(self._keys.values())
            return self._put(item_id, key)

    def insert_at(self, item_id: Hashable, index: int) -> bytes:
        """Insert so the item lands at ``index`` (clamped) of the current order."""
        with self._mutex:
            self._require_absent(item_id)
            return self._put(item_id, self._key_for_index(index))

    def move(self, item_id: Hashable, index: int) -> bytes:
        """
        Give an existing item a fresh key for position ``index`` in the
        order of the remaining items. Raises KeyError if unknown.
        """
        with self._mutex:
            self._keys.pop(item_id)
            self._arrival.pop(item_id)
            return self._put(item_id, self._key_for_index(index))

    def remove(self, item_id: Hashable) -> bytes:
        """Forget an item. Returns its discarded key."""
        with self._mutex:
            self._arrival.pop(item_id)
            return self._keys.pop(item_id)

    def key_of(self, item_id: Hashable) -> bytes:
        with self._mutex:
            return self._keys[item_id]

    def ordered_ids(self) -> List[Hashable]:
        with self._mutex:
            return self._ordered()

    def items(self) -> List[Tuple[Hashable, bytes]]:
        """(item_id, key) pairs in order."""
        with self._mutex:
            return [(i, self._keys[i]) for i in self._ordered()]

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, item_id: Hashable) -> bool:
        return item_id in self._keys

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.ordered_ids())

    def __repr__(self) -> str:
        return f"KeySpace(parent_id={self.parent_id!r}, size={len(self._keys)})"

    # ─── Internal (caller holds _mutex) ─────────────────────────────

    def _require_absent(self, item_id: Hashable):
        if item_id in self._keys:
            raise KeySpaceError(
                f"Item {item_id!r} already has an order key in {self.parent_id!r}"
            )

    def _put(self, item_id: Hashable, key: bytes) -> bytes:
        self._require_absent(item_id)
        self._keys[item_id] = key
        self._arrival[item_id] = self._next_arrival
        self._next_arrival += 1
        return key

    def _ordered(self) -> List[Hashable]:
        def _cmp(x, y):
            c = compare(self._keys[x], self._keys[y])
            if c != 0:
                return c
            return (self._arrival[x] > self._arrival[y]) - (self._arrival[x] < self._arrival[y])
        return sorted(self._keys, key=cmp_to_key(_cmp))

    def _key_for_index(self, index: int) -> bytes:
        ordered = self._ordered()
        if not ordered:
            return new_key()
        index = max(0, min(index, len(ordered)))
        if index == 0:
            return new_key_before(self._keys[ordered[0]])
        if index == len(ordered):
            return new_key_after(self._keys[ordered[-1]])
        return new_key_between(self._keys[ordered[index - 1]], self._keys[ordered[index]])
