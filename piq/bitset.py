"""A growable sequence of bits packed into bytes."""

from __future__ import annotations

from collections.abc import Iterator

_INITIAL_BYTES = 8


def _slots(bits: int) -> int:
    return (bits + 7) // 8


class Bitset:
    """A packed, growable sequence of booleans with stack-like operations."""

    __slots__ = ("_data", "_len")

    def __init__(self, length: int = 0) -> None:
        if length < 0:
            raise ValueError("bitset length cannot be negative")
        self._data = bytearray(_slots(length))
        self._len = length

    def __len__(self) -> int:
        return self._len

    def _index(self, index: int) -> int:
        if index < 0:
            index += self._len
        if not 0 <= index < self._len:
            raise IndexError("bitset index out of range")
        return index

    def _read(self, index: int) -> bool:
        return bool(self._data[index >> 3] & (1 << (index & 7)))

    def _write(self, index: int, value: bool) -> None:
        mask = 1 << (index & 7)
        if value:
            self._data[index >> 3] |= mask
        else:
            self._data[index >> 3] &= ~mask & 0xFF

    def _grow(self, bits: int) -> None:
        needed = _slots(bits)
        capacity = len(self._data)
        if needed > capacity:
            new_capacity = max(needed, _INITIAL_BYTES, capacity + (capacity >> 1))
            self._data.extend(bytes(new_capacity - capacity))

    def __getitem__(self, index: int) -> bool:
        return self._read(self._index(index))

    def __setitem__(self, index: int, value: bool) -> None:
        self._write(self._index(index), bool(value))

    def __iter__(self) -> Iterator[bool]:
        return (self._read(i) for i in range(self._len))

    def get_set(self, index: int) -> bool:
        """Set the bit and return its previous value."""
        index = self._index(index)
        previous = self._read(index)
        self._write(index, True)
        return previous

    def get_clear(self, index: int) -> bool:
        """Clear the bit and return its previous value."""
        index = self._index(index)
        previous = self._read(index)
        self._write(index, False)
        return previous

    def push(self, bit: bool) -> None:
        """Append one bit."""
        self._grow(self._len + 1)
        self._write(self._len, bool(bit))
        self._len += 1

    def push_n(self, bit: bool, amount: int) -> None:
        """Append ``amount`` copies of ``bit``."""
        if amount < 0:
            raise ValueError("cannot push a negative number of bits")
        self._grow(self._len + amount)
        value = bool(bit)
        for index in range(self._len, self._len + amount):
            self._write(index, value)
        self._len += amount

    def pop(self) -> bool:
        """Remove and return the last bit."""
        if self._len == 0:
            raise IndexError("pop from empty bitset")
        self._len -= 1
        return self._read(self._len)

    def peek(self) -> bool:
        """Return the last bit without removing it."""
        if self._len == 0:
            raise IndexError("peek at empty bitset")
        return self._read(self._len - 1)

    def pop_n(self, amount: int) -> None:
        """Remove the last ``amount`` bits."""
        if amount < 0:
            raise ValueError("cannot pop a negative number of bits")
        if amount > self._len:
            raise IndexError("pop more bits than the bitset holds")
        self._len -= amount