"""32-bit hash functions for byte strings, integers and source bindings."""

from __future__ import annotations

HASH_BITS = 32
_MASK = (1 << HASH_BITS) - 1

PRIME_1 = 4201133899
PRIME_2 = 3716661401
PRIME_3 = 2561059601
PRIME_4 = 3647556947
PRIME_5 = 4164797977

INITIAL_SEED = PRIME_2


def _rotate_right(value: int, amount: int) -> int:
    return ((value >> amount) | (value << (HASH_BITS - amount))) & _MASK


def mix(value: int) -> int:
    """Scramble the bits of a 32-bit value."""
    v = value & _MASK
    v ^= _rotate_right(v, 17) ^ _rotate_right(v, 24)
    v = (v * PRIME_1) & _MASK
    v ^= v >> 28
    v = (v * PRIME_3) & _MASK
    return v ^ (v >> 28)


def hash_int(seed: int, value: int) -> int:
    """Fold one 32-bit word (truncated two's complement) into ``seed``."""
    data = value & _MASK
    return ((data + seed) & _MASK) ^ mix(data)


def hash_bytes(seed: int, data: bytes) -> int:
    """Fold ``data`` into ``seed``, four little-endian bytes at a time."""
    view = memoryview(bytes(data))
    seed &= _MASK
    offset = 0
    remaining = len(view)
    while remaining >= 4:
        seed = hash_int(seed, int.from_bytes(view[offset:offset + 4], "little"))
        offset += 4
        remaining -= 4
    if remaining >= 2:
        seed = hash_int(seed, int.from_bytes(view[offset:offset + 2], "little"))
        offset += 2
        remaining -= 2
    if remaining == 1:
        seed = hash_int(seed, view[offset])
    return seed


def hash_string(seed: int, text: str) -> int:
    """Hash the UTF-8 encoding of ``text``."""
    return hash_bytes(seed, text.encode("utf-8"))


def hash_binding(source: str | bytes, start: int, length: int) -> int:
    """Hash the name spanning ``length`` bytes at ``start`` of ``source``."""
    data = source.encode("utf-8") if isinstance(source, str) else bytes(source)
    if start < 0 or length < 0 or start + length > len(data):
        raise IndexError("binding lies outside the source")
    return hash_bytes(INITIAL_SEED, data[start:start + length])