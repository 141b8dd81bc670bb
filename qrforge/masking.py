"""Data masking patterns and the penalty rules used to choose among them."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from itertools import groupby

from qrforge.matrix import (
    Matrix,
    clone_matrix,
    is_function_pattern,
    place_format_info,
    place_version_info,
)

_MASKS: tuple[Callable[[int, int], bool], ...] = (
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
)

_FINDER_LIKE_1 = (True, False, True, True, True, False, True, False, False, False, False)
_FINDER_LIKE_2 = (False, False, False, False, True, False, True, True, True, False, True)


def mask_applies(pattern: int, row: int, col: int) -> bool:
    """Whether mask ``pattern`` (0-7) inverts the module at (row, col)."""
    if not 0 <= pattern <= 7:
        raise ValueError(f"invalid mask pattern {pattern}: must be 0-7")
    return _MASKS[pattern](row, col)


def apply_mask(matrix: Matrix, mask_pattern: int, version: int) -> None:
    """Invert data modules selected by the mask; invalid patterns leave the matrix alone."""
    if not 0 <= mask_pattern <= 7:
        return
    size = len(matrix)
    fn = _MASKS[mask_pattern]
    for row in range(size):
        for col in range(size):
            if is_function_pattern(row, col, version, size):
                continue
            if fn(row, col):
                matrix[row][col] = not matrix[row][col]


def remove_mask(matrix: Matrix, mask_pattern: int, version: int) -> None:
    """Undo a mask; masking is its own inverse."""
    apply_mask(matrix, mask_pattern, version)


def _lines(matrix: Matrix) -> Iterable[Sequence[bool]]:
    yield from matrix
    yield from zip(*matrix)


def penalty_n1(matrix: Matrix) -> int:
    """Penalty for runs of five or more same-coloured modules in rows and columns."""
    penalty = 0
    for line in _lines(matrix):
        for _, run in groupby(line):
            length = sum(1 for _ in run)
            if length >= 5:
                penalty += 3 + (length - 5)
    return penalty


def penalty_n2(matrix: Matrix) -> int:
    """Penalty of 3 for every 2x2 block of one colour."""
    penalty = 0
    for upper, lower in zip(matrix, matrix[1:]):
        for col in range(len(upper) - 1):
            val = upper[col]
            if val == upper[col + 1] == lower[col] == lower[col + 1]:
                penalty += 3
    return penalty


def _finder_like_count(line: Sequence[bool]) -> int:
    line = tuple(line)
    size = len(line)
    width = len(_FINDER_LIKE_1)
    penalty = 0
    for start in range(size - width + 1):
        if line[start : start + width] not in (_FINDER_LIKE_1, _FINDER_LIKE_2):
            continue
        pre_ok = start >= 4 and not any(line[start - 4 : start])
        post_end = start + width + 4
        post_ok = post_end <= size and not any(line[start + width : post_end])
        if pre_ok and post_ok:
            penalty += 40
    return penalty


def penalty_n3(matrix: Matrix) -> int:
    """Penalty of 40 for each finder-like pattern with light space on both sides."""
    return sum(_finder_like_count(line) for line in _lines(matrix))


def penalty_n4(matrix: Matrix) -> int:
    """Penalty for the deviation of the dark-module share from 50%."""
    size = len(matrix)
    dark = sum(sum(1 for cell in row if cell) for row in matrix)
    percent = dark * 100 // (size * size)
    steps = (abs(percent - 50) + 4) // 5
    return steps * 10


def penalty_score(matrix: Matrix) -> int:
    """Total of the four penalty rules."""
    return penalty_n1(matrix) + penalty_n2(matrix) + penalty_n3(matrix) + penalty_n4(matrix)


def best_mask_pattern(base_matrix: Matrix, ec_level: int, version: int) -> int:
    """The mask with the lowest penalty; ties go to the lower pattern number."""
    best_mask = 0
    best_score: int | None = None
    for mask in range(8):
        matrix = clone_matrix(base_matrix)
        apply_mask(matrix, mask, version)
        place_format_info(matrix, ec_level, mask)
        place_version_info(matrix, version)
        score = penalty_score(matrix)
        if best_score is None or score < best_score:
            best_score = score
            best_mask = mask
    return best_mask