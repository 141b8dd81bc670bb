"""Encoding data into a complete QR symbol: mode selection, bitstream, EC and layout."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from qrforge.galois import encode_ec_blocks
from qrforge.masking import apply_mask, best_mask_pattern
from qrforge.matrix import (
    Matrix,
    build_matrix,
    matrix_size,
    place_data_bits,
    place_format_info,
    place_version_info,
)
from qrforge.version import (
    ECLevel,
    VersionInfo,
    get_version_info,
    min_version_for_data,
)


class Mode(IntEnum):
    """Data encoding mode, valued as its four-bit mode indicator."""

    NUMERIC = 1
    ALPHANUMERIC = 2
    BYTE = 4
    KANJI = 8


_ALPHANUMERIC_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_ALPHANUMERIC_TABLE = {ord(ch): i for i, ch in enumerate(_ALPHANUMERIC_CHARS)}
_PAD_BYTES = (0xEC, 0x11)


@dataclass
class QRCode:
    """An encoded QR symbol and the parameters it was built with."""

    version: int
    size: int
    modules: Matrix
    ec_level: int
    mask_pattern: int
    data: bytes
    metadata: dict[str, str] = field(default_factory=dict)


def is_alphanumeric(b: int) -> bool:
    """Whether byte ``b`` is in the alphanumeric character set."""
    return b in _ALPHANUMERIC_TABLE


def is_numeric(b: int) -> bool:
    """Whether byte ``b`` is an ASCII digit."""
    return ord("0") <= b <= ord("9")


def alphanumeric_value(b: int) -> int | None:
    """Alphanumeric-mode value of byte ``b``, or None if it is not in the set."""
    return _ALPHANUMERIC_TABLE.get(b)


def _is_kanji_byte1(b: int) -> bool:
    return 0x81 <= b <= 0x9F or 0xE0 <= b <= 0xEF


def _is_kanji_byte2(b: int) -> bool:
    return 0x40 <= b <= 0x7E or 0x80 <= b <= 0xFC


def best_encoding_mode(data: bytes) -> Mode:
    """The most compact mode that can represent all of ``data``."""
    if not data:
        return Mode.BYTE
    if len(data) % 2 == 0 and all(
        _is_kanji_byte1(hi) and _is_kanji_byte2(lo) for hi, lo in zip(data[::2], data[1::2])
    ):
        return Mode.KANJI
    if all(is_numeric(b) for b in data):
        return Mode.NUMERIC
    if all(is_alphanumeric(b) for b in data):
        return Mode.ALPHANUMERIC
    return Mode.BYTE


def char_count_bits(mode: int, version: int) -> int:
    """Width of the character count field for a mode and version."""
    small = version <= 9
    if mode == Mode.NUMERIC:
        return 10 if small else 12
    if mode == Mode.ALPHANUMERIC:
        return 9 if small else 11
    if mode == Mode.BYTE:
        return 8 if small else 16
    if mode == Mode.KANJI:
        return 8 if small else 10
    return 8


def append_bits(bits: list[bool], value: int, num_bits: int) -> None:
    """Append the low ``num_bits`` of ``value`` to ``bits``, most significant first."""
    bits.extend(bool(value & (1 << i)) for i in range(num_bits - 1, -1, -1))


def _estimate_data_bits(data: bytes, mode: int, version: int) -> int:
    bits = 4 + char_count_bits(mode, version)
    n = len(data)
    if mode == Mode.NUMERIC:
        bits += n * 10 // 3
    elif mode == Mode.ALPHANUMERIC:
        bits += n * 11 // 2
    elif mode == Mode.BYTE:
        bits += n * 8
    elif mode == Mode.KANJI:
        bits += n // 2 * 13
    return bits + 4


def _encode_numeric(bits: list[bool], data: bytes) -> None:
    digits = [b - ord("0") for b in data]
    for i in range(0, len(digits), 3):
        group = digits[i : i + 3]
        value = 0
        for d in group:
            value = value * 10 + d
        append_bits(bits, value, {3: 10, 2: 7, 1: 4}[len(group)])


def _encode_alphanumeric(bits: list[bool], data: bytes) -> None:
    values = [_ALPHANUMERIC_TABLE[b] for b in data]
    for i in range(0, len(values), 2):
        pair = values[i : i + 2]
        if len(pair) == 2:
            append_bits(bits, pair[0] * 45 + pair[1], 11)
        else:
            append_bits(bits, pair[0], 6)


def _encode_byte(bits: list[bool], data: bytes) -> None:
    for b in data:
        append_bits(bits, b, 8)


def _encode_kanji(bits: list[bool], data: bytes) -> None:
    for hi, lo in zip(data[::2], data[1::2]):
        code = hi << 8 | lo
        if 0x8140 <= code <= 0x9FFC:
            temp = code - 0x8140
        elif 0xE040 <= code <= 0xEBBF:
            temp = code - 0xC140
        else:
            continue
        append_bits(bits, (temp >> 8) * 192 + (temp & 0xFF), 13)


_DATA_ENCODERS = {
    Mode.NUMERIC: _encode_numeric,
    Mode.ALPHANUMERIC: _encode_alphanumeric,
    Mode.BYTE: _encode_byte,
    Mode.KANJI: _encode_kanji,
}


def add_terminator_and_padding(bits: list[bool], total_data_bits: int) -> None:
    """Append terminator, byte-align and pad codewords until ``total_data_bits``."""
    current = len(bits)
    terminator = min(4, total_data_bits - current)
    bits.extend([False] * max(terminator, 0))
    current += terminator
    aligned = (current + 7) // 8 * 8
    if aligned > current:
        bits.extend([False] * (aligned - current))
        current = aligned
    pad_index = 0
    while current < total_data_bits:
        append_bits(bits, _PAD_BYTES[pad_index], 8)
        pad_index = 1 - pad_index
        current += 8
    del bits[total_data_bits:]


def build_data_bitstream(
    data: bytes, mode: int, version: int, total_data_bits: int
) -> list[bool]:
    """Mode indicator, character count, data and padding as a bit list."""
    bits: list[bool] = []
    append_bits(bits, int(mode), 4)
    append_bits(bits, len(data), char_count_bits(mode, version))
    encoder = _DATA_ENCODERS.get(Mode(mode)) if mode in Mode._value2member_map_ else None
    if encoder is not None:
        encoder(bits, data)
    add_terminator_and_padding(bits, total_data_bits)
    return bits


def split_into_blocks(data: bytes, info: VersionInfo) -> list[bytes]:
    """Split data codewords into the group-1 then group-2 blocks of the layout."""
    blocks: list[bytes] = []
    offset = 0
    groups = (
        (info.group1_blocks, info.group1_data_codewords),
        (info.group2_blocks, info.group2_data_codewords),
    )
    for count, length in groups:
        for _ in range(count):
            blocks.append(bytes(data[offset : offset + length]).ljust(length, b"\0"))
            offset += length
    return blocks


def interleave_blocks(
    data_blocks: Sequence[bytes], ec_blocks: Sequence[bytes], info: VersionInfo
) -> bytes:
    """Interleave data codewords column-wise across blocks, then EC codewords."""
    result = bytearray()
    max_data_len = max(info.group1_data_codewords, info.group2_data_codewords)
    for i in range(max_data_len):
        result.extend(block[i] for block in data_blocks if i < len(block))
    for i in range(info.ec_codewords_per_block):
        result.extend(block[i] for block in ec_blocks if i < len(block))
    return bytes(result)


def bits_to_bytes(bits: Sequence[bool]) -> bytes:
    """Pack bits, most significant first, into bytes; the last byte is zero-filled."""
    out = bytearray((len(bits) + 7) // 8)
    for i, bit in enumerate(bits):
        if bit:
            out[i // 8] |= 1 << (7 - i % 8)
    return bytes(out)


def bytes_to_bits(data: bytes) -> list[bool]:
    """Unpack bytes into bits, most significant first."""
    return [bool(b & (1 << (7 - j))) for b in data for j in range(8)]


def mode_name(mode: int) -> str:
    """Display name of a mode, or "Unknown"."""
    try:
        return Mode(mode).name.capitalize()
    except ValueError:
        return "Unknown"


def ec_level_name(level: int) -> str:
    """Letter of an EC level, or "Unknown"."""
    try:
        return ECLevel(level).name
    except ValueError:
        return "Unknown"


def encode(
    data: bytes | str, ec_level: int, version: int = 0, mask_pattern: int = -1
) -> QRCode:
    """Encode data as a QR symbol.

    ``version`` 0 picks the smallest version that fits; ``mask_pattern`` -1
    picks the mask with the lowest penalty.
    """
    if not 0 <= ec_level <= 3:
        raise ValueError(f"invalid EC level {int(ec_level)}: must be 0-3 (L/M/Q/H)")
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    if not payload:
        raise ValueError("data must not be empty")
    if not -1 <= mask_pattern <= 7:
        raise ValueError(f"invalid mask pattern {mask_pattern}: must be 0-7 or -1 for auto")
    mode = best_encoding_mode(payload)
    if version == 0:
        needed = (_estimate_data_bits(payload, mode, 10) + 7) // 8
        try:
            version = min_version_for_data(needed, ec_level)
        except ValueError as exc:
            raise ValueError(f"data too large: {exc}") from exc
    elif not 1 <= version <= 40:
        raise ValueError(f"invalid version {version}: must be 1-40")
    info = get_version_info(version, ec_level)

    bitstream = build_data_bitstream(payload, mode, version, info.data_codewords * 8)
    data_blocks = split_into_blocks(bits_to_bytes(bitstream), info)
    ec_blocks = encode_ec_blocks(data_blocks, info.ec_codewords_per_block)
    interleaved = interleave_blocks(data_blocks, ec_blocks, info)

    matrix = build_matrix(version)
    place_data_bits(matrix, bytes_to_bits(interleaved), version)
    selected = best_mask_pattern(matrix, ec_level, version) if mask_pattern == -1 else mask_pattern
    apply_mask(matrix, selected, version)
    place_format_info(matrix, ec_level, selected)
    place_version_info(matrix, version)

    metadata = {
        "mode": mode_name(mode),
        "version": str(version),
        "ecLevel": ec_level_name(ec_level),
        "maskPattern": str(selected),
        "dataCodewords": str(info.data_codewords),
        "ecCodewords": str(info.data_codewords + info.ec_blocks * info.ec_codewords_per_block),
    }
    return QRCode(
        version=version,
        size=matrix_size(version),
        modules=matrix,
        ec_level=int(ec_level),
        mask_pattern=selected,
        data=payload,
        metadata=metadata,
    )


def capacity(version: int, ec_level: int, mode: int) -> int:
    """Characters of the given mode that fit a version and EC level; 0 if invalid."""
    try:
        info = get_version_info(version, ec_level)
    except ValueError:
        return 0
    available = info.data_codewords * 8 - 4 - char_count_bits(mode, version) - 4
    if available < 0:
        return 0
    if mode == Mode.NUMERIC:
        groups, remainder = divmod(available, 10)
        count = groups * 3
        if remainder >= 7:
            count += 2
        elif remainder >= 4:
            count += 1
        return count
    if mode == Mode.ALPHANUMERIC:
        groups, remainder = divmod(available, 11)
        return groups * 2 + (1 if remainder >= 6 else 0)
    if mode == Mode.BYTE:
        return available // 8
    if mode == Mode.KANJI:
        return available // 13
    return 0


def data_codewords(version: int, ec_level: int) -> int:
    """Number of data codewords, or 0 if the version or level is invalid."""
    try:
        return get_version_info(version, ec_level).data_codewords
    except ValueError:
        return 0


def ec_codewords(version: int, ec_level: int) -> int:
    """Number of error correction codewords, or 0 if invalid."""
    try:
        info = get_version_info(version, ec_level)
    except ValueError:
        return 0
    return info.ec_blocks * info.ec_codewords_per_block


def block_count(version: int, ec_level: int) -> tuple[int, int]:
    """Block counts of group 1 and group 2, or (0, 0) if invalid."""
    try:
        info = get_version_info(version, ec_level)
    except ValueError:
        return 0, 0
    return info.group1_blocks, info.group2_blocks