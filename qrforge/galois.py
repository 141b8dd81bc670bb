"""Arithmetic in GF(256) and Reed-Solomon error correction codewords."""

from __future__ import annotations

from collections.abc import Sequence

PRIMITIVE_POLY = 0x11D


def _build_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    exp = [0] * 512
    log = [0] * 256
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x >= 256:
            x ^= PRIMITIVE_POLY
    for i in range(255, 512):
        exp[i] = exp[i - 255]
    return tuple(exp), tuple(log)


_EXP, _LOG = _build_tables()


def gf_add(a: int, b: int) -> int:
    """Addition (and subtraction) in GF(256)."""
    return a ^ b


def gf_mul(a: int, b: int) -> int:
    """Multiplication in GF(256)."""
    if a == 0 or b == 0:
        return 0
    return _EXP[_LOG[a] + _LOG[b]]


def gf_exp(power: int) -> int:
    """The generator element raised to ``power``."""
    return _EXP[power % 255]


def gf_log(value: int) -> int:
    """Discrete logarithm of a non-zero field element."""
    if not 1 <= value <= 255:
        raise ValueError(f"logarithm undefined for {value}")
    return _LOG[value]


def generator_poly(degree: int) -> list[int]:
    """Reed-Solomon generator polynomial of the given degree, highest term first."""
    if degree <= 0:
        return [1]
    g = [1, 1]
    for i in range(1, degree):
        root = _EXP[i]
        new_g = [0] * (len(g) + 1)
        for j, coef in enumerate(g):
            new_g[j] ^= coef
            new_g[j + 1] ^= gf_mul(coef, root)
        g = new_g
    return g


def encode_ec(data: bytes | Sequence[int], ec_count: int) -> bytes:
    """Compute ``ec_count`` error correction codewords for a data block."""
    if ec_count <= 0 or len(data) == 0:
        return b""
    generator = generator_poly(ec_count)
    message = list(data) + [0] * ec_count
    for i in range(len(data)):
        coef = message[i]
        if coef == 0:
            continue
        for j, g in enumerate(generator[1:], start=1):
            message[i + j] ^= gf_mul(g, coef)
    return bytes(message[len(data) :])


def encode_ec_blocks(data_blocks: Sequence[bytes], ec_per_block: int) -> list[bytes]:
    """Compute error correction codewords for each data block."""
    return [encode_ec(block, ec_per_block) for block in data_blocks]