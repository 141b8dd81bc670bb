import pytest

from qrforge.encoder import (
    Mode,
    alphanumeric_value,
    append_bits,
    best_encoding_mode,
    bits_to_bytes,
    block_count,
    build_data_bitstream,
    bytes_to_bits,
    capacity,
    char_count_bits,
    data_codewords,
    ec_codewords,
    ec_level_name,
    encode,
    interleave_blocks,
    is_alphanumeric,
    is_numeric,
    mode_name,
    add_terminator_and_padding,
    split_into_blocks,
)
from qrforge.version import ECLevel, VersionInfo


def _info(**overrides):
    base = dict(
        version=1,
        total_codewords=0,
        data_codewords=0,
        ec_blocks=0,
        ec_codewords_per_block=0,
        num_groups=1,
        group1_blocks=0,
        group1_data_codewords=0,
        group2_blocks=0,
        group2_data_codewords=0,
    )
    base.update(overrides)
    return VersionInfo(**base)


@pytest.mark.parametrize(
    "b,want",
    [(ord("0"), True), (ord("9"), True), (ord("A"), False), (ord("a"), False),
     (ord(" "), False), (ord("/"), False), (0, False), (255, False)],
)
def test_is_numeric(b, want):
    assert is_numeric(b) is want


@pytest.mark.parametrize(
    "ch,want",
    [("0", True), ("9", True), ("A", True), ("Z", True), (" ", True), ("$", True),
     ("*", True), ("+", True), ("-", True), (".", True), ("/", True), (":", True),
     ("a", False), ("z", False), ("@", False), ("#", False), ("\0", False)],
)
def test_is_alphanumeric(ch, want):
    assert is_alphanumeric(ord(ch)) is want


def test_alphanumeric_value():
    assert alphanumeric_value(ord("A")) == 10
    assert alphanumeric_value(ord("Z")) == 35
    assert alphanumeric_value(ord("a")) is None


@pytest.mark.parametrize(
    "data,want",
    [(b"12345", Mode.NUMERIC), (b"HELLO WORLD", Mode.ALPHANUMERIC),
     (b"hello world", Mode.BYTE), (b"", Mode.BYTE), (bytes([0x82, 0xA0]), Mode.KANJI)],
)
def test_best_encoding_mode(data, want):
    assert best_encoding_mode(data) == want


def test_encode_basic():
    qr = encode(b"Hello", 1, 0)
    assert 1 <= qr.version <= 40
    assert qr.size >= 21
    assert qr.ec_level == 1
    assert 0 <= qr.mask_pattern <= 7
    assert len(qr.modules) == qr.size
    assert all(len(row) == qr.size for row in qr.modules)
    assert qr.data == b"Hello"


def test_encode_with_version():
    assert encode(b"Hello", 1, 2).version == 2


def test_encode_invalid_ec_level():
    with pytest.raises(ValueError):
        encode(b"Hello", 5, 0)


def test_encode_empty_data():
    with pytest.raises(ValueError):
        encode(b"", 1, 0)


@pytest.mark.parametrize("version", [50, -1])
def test_encode_invalid_version(version):
    with pytest.raises(ValueError):
        encode(b"Hello", 1, version)


def test_encode_with_mask():
    assert encode(b"Test", 1, 0, 0).mask_pattern == 0


def test_encode_with_mask_auto():
    assert 0 <= encode(b"Test", 1, 0, -1).mask_pattern <= 7


def test_encode_invalid_mask():
    with pytest.raises(ValueError):
        encode(b"Test", 1, 0, 8)


def test_encode_with_mask_invalid_ec_level():
    with pytest.raises(ValueError):
        encode(b"Test", -1, 0, 0)


def test_encode_deterministic():
    qr1 = encode(b"SameData", 2, 5)
    qr2 = encode(b"SameData", 2, 5)
    assert (qr1.version, qr1.size, qr1.mask_pattern) == (qr2.version, qr2.size, qr2.mask_pattern)
    assert qr1.modules == qr2.modules


def test_encode_metadata():
    qr = encode(b"meta-test", 1, 0)
    assert qr.metadata["mode"] == "Byte"
    assert qr.metadata["ecLevel"] == "M"
    assert qr.metadata["version"] == str(qr.version)
    assert qr.metadata["maskPattern"] == str(qr.mask_pattern)


def test_encode_numeric_mode():
    assert encode(b"1234567890", 0, 0).metadata["mode"] == "Numeric"


def test_encode_alphanumeric_mode():
    assert encode(b"HELLO WORLD", 1, 0).metadata["mode"] == "Alphanumeric"


def test_encode_kanji_mode():
    assert encode(bytes([0x82, 0xA0]), 1, 0).metadata["mode"] == "Kanji"


def test_encode_large_data():
    data = bytes(ord("A") + i % 26 for i in range(500))
    assert encode(data, 1, 0).version >= 5


def test_encode_data_too_large():
    with pytest.raises(ValueError, match="data too large"):
        encode(b"x" * 5000, 3, 0)


@pytest.mark.parametrize(
    "mode,version,want",
    [(Mode.NUMERIC, 1, 10), (Mode.NUMERIC, 10, 12), (Mode.ALPHANUMERIC, 1, 9),
     (Mode.ALPHANUMERIC, 10, 11), (Mode.BYTE, 1, 8), (Mode.BYTE, 10, 16),
     (Mode.KANJI, 1, 8), (Mode.KANJI, 10, 10), (Mode.BYTE, 0, 8)],
)
def test_char_count_bits(mode, version, want):
    assert char_count_bits(mode, version) == want


def test_bits_bytes_roundtrip():
    original = bytes([0xDE, 0xAD, 0xBE, 0xEF])
    assert bits_to_bytes(bytes_to_bits(original)) == original


def test_append_bits():
    bits = []
    append_bits(bits, 0xA, 4)
    assert bits == [True, False, True, False]


def test_build_data_bitstream_length_and_header():
    bits = build_data_bitstream(b"12", Mode.NUMERIC, 1, 152)
    assert len(bits) == 152
    assert bits[:4] == [False, False, False, True]


def test_split_into_blocks_single():
    data = bytes(range(19))
    blocks = split_into_blocks(data, _info(group1_blocks=1, group1_data_codewords=19))
    assert blocks == [data]


def test_split_into_blocks_two_groups():
    info = _info(group1_blocks=2, group1_data_codewords=30,
                 group2_blocks=2, group2_data_codewords=20)
    blocks = split_into_blocks(bytes(100), info)
    assert len(blocks) == 4
    assert len(blocks[0]) == 30
    assert len(blocks[2]) == 20


def test_mode_name():
    assert mode_name(Mode.NUMERIC) == "Numeric"
    assert mode_name(Mode.ALPHANUMERIC) == "Alphanumeric"
    assert mode_name(Mode.BYTE) == "Byte"
    assert mode_name(Mode.KANJI) == "Kanji"
    assert mode_name(99) == "Unknown"


def test_ec_level_name():
    assert ec_level_name(ECLevel.L) == "L"
    assert ec_level_name(ECLevel.M) == "M"
    assert ec_level_name(ECLevel.Q) == "Q"
    assert ec_level_name(ECLevel.H) == "H"
    assert ec_level_name(99) == "Unknown"


def test_capacity():
    cap_byte = capacity(1, ECLevel.L, Mode.BYTE)
    assert cap_byte == 17
    assert capacity(1, ECLevel.L, Mode.NUMERIC) > cap_byte
    assert capacity(41, ECLevel.L, Mode.BYTE) == 0


def test_data_codewords():
    assert data_codewords(1, ECLevel.L) == 19
    assert data_codewords(0, ECLevel.L) == 0


def test_ec_codewords():
    ec_h = ec_codewords(1, ECLevel.H)
    assert ec_h > 0
    assert ec_h > ec_codewords(1, ECLevel.L)


def test_block_count():
    g1, g2 = block_count(1, ECLevel.L)
    assert g1 > 0
    assert g2 == 0
    assert block_count(99, ECLevel.L) == (0, 0)


@pytest.mark.parametrize(
    "total,input_len,expected",
    [(24, 20, 24), (40, 8, 40), (8, 4, 8)],
)
def test_add_terminator_and_padding(total, input_len, expected):
    bits = [True] * input_len
    add_terminator_and_padding(bits, total)
    assert len(bits) == expected


def test_add_terminator_and_padding_pad_bytes():
    bits = [True] * 8
    add_terminator_and_padding(bits, 32)
    assert bits_to_bytes(bits) == bytes([0xFF, 0x00, 0xEC, 0x11])


def test_interleave_blocks_simple():
    info = _info(group1_data_codewords=3, ec_codewords_per_block=2)
    result = interleave_blocks([bytes([1, 2, 3]), bytes([4, 5, 6])],
                               [bytes([7, 8]), bytes([9, 10])], info)
    assert result == bytes([1, 4, 2, 5, 3, 6, 7, 9, 8, 10])