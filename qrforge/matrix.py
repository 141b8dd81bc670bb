"""Construction of the QR module matrix: function patterns, format and version info, data."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from qrforge.version import EC_LEVEL_FORMAT_BITS, MAX_VERSION, MIN_VERSION

Matrix = list[list[bool]]

_ALIGNMENT_POSITIONS: tuple[tuple[int, ...], ...] = (
    (),
    (6, 18),
    (6, 22),
    (6, 26),
    (6, 30),
    (6, 34),
    (6, 22, 38),
    (6, 24, 42),
    (6, 26, 46),
    (6, 28, 50),
    (6, 30, 54),
    (6, 32, 58),
    (6, 34, 62),
    (6, 26, 46, 66),
    (6, 26, 48, 70),
    (6, 26, 50, 74),
    (6, 30, 54, 78),
    (6, 30, 56, 82),
    (6, 30, 58, 86),
    (6, 34, 62, 90),
    (6, 28, 50, 72, 94),
    (6, 26, 50, 74, 98),
    (6, 30, 54, 78, 102),
    (6, 28, 54, 80, 106),
    (6, 32, 58, 84, 110),
    (6, 30, 58, 86, 114),
    (6, 34, 62, 90, 118),
    (6, 26, 50, 74, 98, 122),
    (6, 30, 54, 78, 102, 126),
    (6, 26, 52, 78, 104, 130),
    (6, 30, 56, 82, 108, 134),
    (6, 34, 60, 86, 112, 138),
    (6, 30, 58, 86, 114, 142),
    (6, 34, 62, 90, 118, 146),
    (6, 30, 54, 78, 102, 126, 150),
    (6, 24, 50, 76, 102, 128, 154),
    (6, 28, 54, 80, 106, 132, 158),
    (6, 32, 58, 84, 110, 136, 162),
    (6, 26, 54, 82, 110, 138, 166),
    (6, 30, 58, 86, 114, 142, 170),
)

# Positions of format bits 0..14 around the top-left finder pattern.
_FORMAT_POSITIONS = (
    (8, 0), (8, 1), (8, 2), (8, 3), (8, 4), (8, 5), (8, 7), (8, 8),
    (7, 8), (5, 8), (4, 8), (3, 8), (2, 8), (1, 8), (0, 8),
)


def _alignment_positions(version: int) -> tuple[int, ...]:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"invalid version {version}: must be 1-40")
    return _ALIGNMENT_POSITIONS[version - 1]


def matrix_size(version: int) -> int:
    """Side length in modules of a symbol of the given version."""
    return version * 4 + 17


def new_matrix(version: int) -> Matrix:
    """An all-light square matrix for the given version."""
    size = matrix_size(version)
    return [[False] * size for _ in range(size)]


def place_finder_pattern(matrix: Matrix, row: int, col: int) -> None:
    """Draw a 7x7 finder pattern with its top-left corner at (row, col)."""
    size = len(matrix)
    for r in range(7):
        for c in range(7):
            r2, c2 = row + r, col + c
            if not (0 <= r2 < size and 0 <= c2 < size):
                continue
            if r in (0, 6) or c in (0, 6) or (2 <= r <= 4 and 2 <= c <= 4):
                matrix[r2][c2] = True


def place_alignment_pattern(matrix: Matrix, row: int, col: int) -> None:
    """Draw a 5x5 alignment pattern centred on (row, col)."""
    size = len(matrix)
    for r in range(-2, 3):
        for c in range(-2, 3):
            r2, c2 = row + r, col + c
            if not (0 <= r2 < size and 0 <= c2 < size):
                continue
            if abs(r) == 2 or abs(c) == 2 or (r == 0 and c == 0):
                matrix[r2][c2] = True


def place_timing_patterns(matrix: Matrix, version: int) -> None:
    """Draw the alternating timing patterns along row 6 and column 6."""
    size = matrix_size(version)
    for i in range(8, size - 8, 2):
        matrix[6][i] = True
        matrix[i][6] = True


def place_dark_module(matrix: Matrix, version: int) -> None:
    """Set the always-dark module beside the bottom-left finder."""
    matrix[version * 4 + 9][8] = True


def bch_encode_format(data: int) -> int:
    """BCH(15,5) encode five format bits and apply the format mask."""
    generator = 0x537
    remainder = data << 10
    for i in range(14, 9, -1):
        if remainder & (1 << i):
            remainder ^= generator << (i - 10)
    return ((data << 10) | remainder) ^ 0x5412


def place_format_info(matrix: Matrix, ec_level: int, mask_pattern: int) -> None:
    """Write both copies of the format information for an EC level and mask."""
    if not 0 <= ec_level <= 3:
        ec_level = 0
    if not 0 <= mask_pattern <= 7:
        mask_pattern = 0
    bits = bch_encode_format(EC_LEVEL_FORMAT_BITS[ec_level] << 3 | mask_pattern)
    size = len(matrix)
    for i, (r, c) in enumerate(_FORMAT_POSITIONS):
        matrix[r][c] = bool((bits >> i) & 1)
    for i in range(7):
        matrix[8][size - 1 - i] = bool((bits >> i) & 1)
    for i in range(7, 15):
        matrix[size - 15 + i][8] = bool((bits >> i) & 1)


def bch_encode_version(version: int) -> int:
    """BCH(18,6) encode a version number."""
    generator = 0x1F25
    remainder = version << 12
    for i in range(17, 11, -1):
        if remainder & (1 << i):
            remainder ^= generator << (i - 12)
    return (version << 12) | remainder


def place_version_info(matrix: Matrix, version: int) -> None:
    """Write both version information blocks; versions below 7 have none."""
    if not 7 <= version <= MAX_VERSION:
        return
    bits = bch_encode_version(version)
    size = len(matrix)
    for i in range(18):
        bit = bool(bits & (1 << (17 - i)))
        matrix[size - 11 + i % 3][i // 3] = bit
        matrix[i // 3][size - 11 + i % 3] = bit


def is_function_pattern(row: int, col: int, version: int, size: int) -> bool:
    """Whether (row, col) is reserved for a function pattern rather than data."""
    if row <= 8 and col <= 8:
        return True
    if row <= 8 and col >= size - 8:
        return True
    if row >= size - 8 and col <= 8:
        return True
    if row == 6 or col == 6:
        return True
    if row == version * 4 + 9 and col == 8:
        return True
    if version >= 7:
        if size - 11 <= row <= size - 9 and col <= 5:
            return True
        if row <= 5 and size - 11 <= col <= size - 9:
            return True
    positions = _alignment_positions(version)
    for pr in positions:
        for pc in positions:
            if pr <= 8 and pc <= 8:
                continue
            if pr <= 8 and pc >= size - 8:
                continue
            if pr >= size - 8 and pc <= 8:
                continue
            if pr - 2 <= row <= pr + 2 and pc - 2 <= col <= pc + 2:
                return True
    return False


def _data_columns(size: int) -> Iterator[int]:
    """Right-hand columns of the two-column strips, skipping the timing column."""
    col = size - 1
    while col >= 1:
        if col == 6:
            col = 5
        yield col
        col -= 2


def place_data_bits(matrix: Matrix, data_bits: Sequence[bool], version: int) -> None:
    """Place data bits in the zig-zag order, skipping function patterns."""
    size = matrix_size(version)
    bits = iter(data_bits)
    for col in _data_columns(size):
        upward = ((size - 1 - col) // 2) % 2 == 0
        rows = range(size - 1, -1, -1) if upward else range(size)
        for r in rows:
            for c in (col, col - 1):
                if c < 0 or is_function_pattern(r, c, version, size):
                    continue
                bit = next(bits, None)
                if bit is not None:
                    matrix[r][c] = bool(bit)


def place_all_finder_patterns(matrix: Matrix, version: int) -> None:
    """Draw the three finder patterns."""
    size = matrix_size(version)
    place_finder_pattern(matrix, 0, 0)
    place_finder_pattern(matrix, 0, size - 7)
    place_finder_pattern(matrix, size - 7, 0)


def place_all_alignment_patterns(matrix: Matrix, version: int) -> None:
    """Draw every alignment pattern for the version."""
    if version < 2:
        return
    positions = _alignment_positions(version)
    for row in positions:
        for col in positions:
            place_alignment_pattern(matrix, row, col)


def build_matrix(version: int) -> Matrix:
    """A matrix with finder, alignment, timing patterns and the dark module."""
    matrix = new_matrix(version)
    place_all_finder_patterns(matrix, version)
    place_all_alignment_patterns(matrix, version)
    place_timing_patterns(matrix, version)
    place_dark_module(matrix, version)
    return matrix


def clone_matrix(matrix: Matrix) -> Matrix:
    """An independent copy of the matrix."""
    return [list(row) for row in matrix]


def print_matrix(matrix: Matrix) -> str:
    """Text picture of the matrix: '#' for dark, '.' for light, one line per row."""
    return "".join("".join("#" if cell else "." for cell in row) + "\n" for row in matrix)


def verify_matrix_size(matrix: Matrix, version: int) -> None:
    """Raise ValueError unless the matrix is square with the version's side length."""
    expected = matrix_size(version)
    if len(matrix) != expected:
        raise ValueError(
            f"matrix has {len(matrix)} rows, expected {expected} for version {version}"
        )
    for i, row in enumerate(matrix):
        if len(row) != expected:
            raise ValueError(
                f"matrix row {i} has {len(row)} columns, expected {expected} for version {version}"
            )