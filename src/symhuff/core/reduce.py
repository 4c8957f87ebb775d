"""Symmetry-driven reduction and its inverse (expansion).

The reduced rows are Huffman-coded as text with '\\n' separators so that the
row geometry survives the round trip. Profile "reference" keeps the historical
exception: None and Diagonal code the rows concatenated, without separators,
so their geometry is lost.
"""

from __future__ import annotations

from symhuff.core.matrix import ROW_SEP, Matrix, SymmetryKind
from symhuff.core.symmetry import PROFILE_LOSSLESS, PROFILE_REFERENCE, check_profile
from symhuff.errors import CorruptPayload


def reduce_matrix(matrix: Matrix, kind: SymmetryKind, profile: str = PROFILE_LOSSLESS) -> Matrix:
    """Minimal representative subset of `matrix` for the chosen symmetry."""
    profile = check_profile(profile)
    if kind is SymmetryKind.VERTICAL:
        return tuple(row[: (len(row) + 1) // 2] for row in matrix)
    if kind is SymmetryKind.HORIZONTAL:
        return matrix[: len(matrix) // 2]
    if kind is SymmetryKind.DIAGONAL:
        if profile == PROFILE_REFERENCE:
            return _concatenated(matrix)
        # lower triangle, diagonal included
        return tuple(row[: i + 1] for i, row in enumerate(matrix))
    if profile == PROFILE_REFERENCE:
        return _concatenated(matrix)
    return matrix


def _concatenated(matrix: Matrix) -> Matrix:
    # one row holding every cell, empty matrix stays empty
    return ("".join(matrix),) if matrix else ()


def reduced_text(rows: Matrix) -> str:
    return ROW_SEP.join(rows)


def _split_rows(text: str) -> list[str]:
    if not text:
        return []
    return [r.strip() for r in text.split(ROW_SEP)]


def _untriangle(rows: list[str]) -> list[str]:
    n = len(rows)
    for i, row in enumerate(rows):
        if len(row) != i + 1:
            raise CorruptPayload(f"triangolo inferiore malformato alla riga {i}: {len(row)} != {i + 1}")
    return ["".join(rows[i][j] if j <= i else rows[j][i] for j in range(n)) for i in range(n)]


def expand_matrix(text: str, kind: SymmetryKind, profile: str = PROFILE_LOSSLESS) -> str:
    """Rebuild the full matrix text from the decoded reduced text."""
    profile = check_profile(profile)
    rows = _split_rows(text)
    if not rows:
        return ""

    if kind is SymmetryKind.VERTICAL:
        return ROW_SEP.join(row + row[::-1] for row in rows)
    if kind is SymmetryKind.HORIZONTAL:
        return ROW_SEP.join(rows + rows[::-1])
    if kind is SymmetryKind.DIAGONAL:
        if profile == PROFILE_REFERENCE:
            # historical behavior: reverse in place (not the inverse of the no-op reduction)
            return ROW_SEP.join(row[::-1] for row in rows)
        return ROW_SEP.join(_untriangle(rows))
    return text
