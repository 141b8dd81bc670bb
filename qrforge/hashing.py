"""64-bit FNV-1a hashing and hash combination."""

from __future__ import annotations

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK = (1 << 64) - 1
_GOLDEN = 0x9E3779B97F4A7C15


def hash_bytes(data: bytes) -> int:
    """64-bit FNV-1a hash of ``data``."""
    h = _FNV_OFFSET
    for b in data or b"":
        h ^= b
        h = (h * _FNV_PRIME) & _MASK
    return h


def hash_string(key: str) -> int:
    """64-bit FNV-1a hash of the UTF-8 encoding of ``key``."""
    return hash_bytes(key.encode("utf-8"))


def combine(h1: int, h2: int) -> int:
    """Order-dependent combination of two 64-bit hashes."""
    mixed = (h2 + _GOLDEN + ((h1 << 6) & _MASK) + (h1 >> 2)) & _MASK
    return (h1 ^ mixed) & _MASK