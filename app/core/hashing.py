"""Reproducible string hashing used for pseudo-random selection.

``stable_hash`` is the classic ``h = h * 31 + code`` rolling hash over UTF-16
code units, wrapped to a signed 32-bit integer. It is not cryptographic and does
not guarantee uniqueness; distinct strings may collide. Its only contract is that
the same string always maps to the same value, across processes and restarts,
unlike the builtin ``hash`` which is salted per interpreter.
"""
from __future__ import annotations

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def to_int32(value: int) -> int:
    value &= _UINT32_MASK
    if value & _INT32_SIGN:
        return value - (_UINT32_MASK + 1)
    return value


def _utf16_units(value: str):
    encoded = value.encode("utf-16-le", "surrogatepass")
    for offset in range(0, len(encoded), 2):
        yield int.from_bytes(encoded[offset : offset + 2], "little")


def stable_hash(value: str) -> int:
    h = 0
    for unit in _utf16_units(value):
        h = to_int32(h * 31 + unit)
    return h


def pick_index(seed: int, size: int) -> int:
    """Map ``seed`` onto ``range(size)``; negative seeds are folded by ``abs``."""
    if size <= 0:
        raise ValueError("size must be positive")
    return abs(seed) % size
