"""An open-addressing hash map with context-aware hashing and comparison.

Keys are looked up either by a "new" key, which is hashed and compared with
user-supplied callbacks, or by a stored key, which is hashed with its own
callback and compared by equality. Lookups return bucket indices, so a caller
can look up once and then insert at the returned slot.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .bitset import Bitset

N_BUCKETS_START = 512

# Maximum ratio of (elements + tombstones) to buckets before a rehash.
_MAX_FILL_NUMERATOR = 13
_MAX_FILL_DENOMINATOR = 20
_GROWTH_FACTOR = 2
_UINT32_MAX = 0xFFFFFFFF

Hasher = Callable[[Any, Any], int]
Comparer = Callable[[Any, Any, Any], bool]


class HashMapFullError(RuntimeError):
    """Raised when the map cannot grow any further."""


class HashMap:
    """Linear-probing hash map with tombstones and bucket-index lookups."""

    def __init__(
        self,
        compare_newkey: Comparer,
        hash_newkey: Hasher,
        hash_storedkey: Hasher,
        n_buckets: int = N_BUCKETS_START,
        store_values: bool = True,
    ) -> None:
        if not 1 <= n_buckets <= _UINT32_MAX:
            raise ValueError("bucket count must be between 1 and 2**32 - 1")
        self._compare_newkey = compare_newkey
        self._hash_newkey = hash_newkey
        self._hash_storedkey = hash_storedkey
        self._store_values = store_values
        self._n_elems = 0
        self._reset(n_buckets)

    def _reset(self, n_buckets: int) -> None:
        self._n_buckets = n_buckets
        self._mask = n_buckets - 1
        self._grow_at = n_buckets * _MAX_FILL_NUMERATOR // _MAX_FILL_DENOMINATOR
        self._keys: list[Any] = [None] * n_buckets
        self._values: list[Any] | None = [None] * n_buckets if self._store_values else None
        self._occupied = Bitset(n_buckets)
        self._tombstoned = Bitset(n_buckets)
        self._n_tombstones = 0

    def __len__(self) -> int:
        return self._n_elems

    @property
    def n_buckets(self) -> int:
        """Current number of buckets."""
        return self._n_buckets

    def _bucket(self, key: Any, hasher: Hasher, context: Any) -> int:
        return hasher(key, context) & self._mask

    def _rehash(self, context: Any) -> None:
        n_buckets = self._n_buckets
        if n_buckets > (_UINT32_MAX >> 1):
            if n_buckets == _UINT32_MAX:
                raise HashMapFullError("ran out of hash map space")
            new_n_buckets = _UINT32_MAX
        else:
            new_n_buckets = n_buckets * _GROWTH_FACTOR
        entries = [
            (self._keys[i], self._values[i] if self._values is not None else None)
            for i, occupied in enumerate(self._occupied)
            if occupied
        ]
        self._reset(new_n_buckets)
        self._n_elems = 0
        for key_stored, value in entries:
            self.insert_stored(key_stored, value, context)

    def _lookup(
        self,
        key: Any,
        hasher: Hasher,
        compare: Callable[[Any, Any], bool],
        context: Any,
    ) -> int:
        mask = self._mask
        i = self._bucket(key, hasher, context)
        first_empty = _UINT32_MAX
        while True:
            while self._occupied[i]:
                if compare(key, self._keys[i]):
                    return i
                i = (i + 1) & mask
            first_empty = min(first_empty, i)
            if self._tombstoned[i]:
                i = (i + 1) & mask
            else:
                return first_empty

    def lookup(self, key: Any, context: Any = None) -> int:
        """Return the bucket holding ``key``, or the bucket it would go in."""
        return self._lookup(
            key,
            self._hash_newkey,
            lambda new, stored: self._compare_newkey(new, stored, context),
            context,
        )

    def _lookup_stored(self, key: Any, context: Any) -> int:
        return self._lookup(
            key, self._hash_storedkey, lambda a, b: a == b, context
        )

    def maybe_rehash(self, context: Any = None) -> None:
        """Grow the table if it has reached its fill limit."""
        if self._n_elems + self._n_tombstones >= self._grow_at:
            self._rehash(context)

    def upsert(
        self, key: Any, key_stored: Any, value: Any = None, context: Any = None
    ) -> None:
        """Insert ``key_stored`` with ``value``, replacing any entry for ``key``."""
        self.maybe_rehash(context)
        self.insert_at(self.lookup(key, context), key_stored, value)

    def insert_stored(self, key_stored: Any, value: Any = None, context: Any = None) -> None:
        """Insert a stored key without checking for an existing entry."""
        self.maybe_rehash(context)
        mask = self._mask
        i = self._bucket(key_stored, self._hash_storedkey, context)
        while self._occupied[i]:
            i = (i + 1) & mask
        self.insert_at(i, key_stored, value)

    def insert_at(self, index: int, key_stored: Any, value: Any = None) -> None:
        """Write an entry into bucket ``index``; does not trigger a rehash."""
        was_occupied = self._occupied.get_set(index)
        self._keys[index] = key_stored
        if self._values is not None:
            self._values[index] = value
        if self._tombstoned.get_clear(index):
            self._n_tombstones -= 1
        if not was_occupied:
            self._n_elems += 1

    def _remove_at(self, index: int) -> int:
        if self._occupied.get_clear(index):
            self._tombstoned[index] = True
            self._n_tombstones += 1
            self._n_elems -= 1
        return index

    def remove(self, key: Any, context: Any = None) -> int:
        """Remove the entry for ``key``; return the bucket it was looked up in."""
        return self._remove_at(self.lookup(key, context))

    def remove_stored(self, key: Any, context: Any = None) -> int:
        """Remove the entry whose stored key equals ``key``."""
        return self._remove_at(self._lookup_stored(key, context))

    def is_occupied(self, index: int) -> bool:
        """Whether bucket ``index`` holds a live entry."""
        return self._occupied[index]

    def key_at(self, index: int) -> Any:
        """The stored key last written to bucket ``index``."""
        if not 0 <= index < self._n_buckets:
            raise IndexError("bucket index out of range")
        return self._keys[index]

    def value_at(self, index: int) -> Any:
        """The value last written to bucket ``index`` (None for a set)."""
        if not 0 <= index < self._n_buckets:
            raise IndexError("bucket index out of range")
        return self._values[index] if self._values is not None else None