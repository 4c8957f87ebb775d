"""Symmetry detection and selection.

Two profiles:
  - "lossless" (default): Diagonal means transpose symmetry, and a class is only
    selected when its reduction can be inverted exactly.
  - "reference": same payload and code table as the historical encoder for a
    rectangular matrix, quirks included (Diagonal tests row palindromes like
    Vertical; first true flag wins even when the reduction drops the middle
    row/column; None and Diagonal code the rows without separators; leaves
    are seeded '0', '1', '\\n'). Two deliberate departures: a one-symbol
    alphabet gets code "0" instead of an empty code, and a ragged matrix has
    no symmetry.
"""

from __future__ import annotations

from dataclasses import dataclass

from symhuff.core.matrix import Matrix, SymmetryKind, is_rectangular, shape
from symhuff.errors import UsageError

PROFILE_LOSSLESS = "lossless"
PROFILE_REFERENCE = "reference"
PROFILES: tuple[str, ...] = (PROFILE_LOSSLESS, PROFILE_REFERENCE)

# profile <-> u8 (container header). Keep stable.
PROFILE_TO_CODE: dict[str, int] = {PROFILE_LOSSLESS: 0, PROFILE_REFERENCE: 1}
CODE_TO_PROFILE: dict[int, str] = {v: k for k, v in PROFILE_TO_CODE.items()}


def check_profile(profile: str) -> str:
    p = (profile or "").strip().lower()
    if p not in PROFILES:
        raise UsageError(f"profilo non supportato: {profile!r} (attesi: {', '.join(PROFILES)})")
    return p


@dataclass(frozen=True)
class SymmetryFlags:
    """Independent predicates; exclusivity comes later from the priority order."""

    vertical: bool
    horizontal: bool
    diagonal: bool

    def as_dict(self) -> dict[str, bool]:
        return {"vertical": self.vertical, "horizontal": self.horizontal, "diagonal": self.diagonal}


NO_SYMMETRY = SymmetryFlags(vertical=False, horizontal=False, diagonal=False)


def _rows_are_palindromes(matrix: Matrix) -> bool:
    return all(row == row[::-1] for row in matrix)


def _mirrored_top_bottom(matrix: Matrix) -> bool:
    n = len(matrix)
    return all(matrix[i] == matrix[n - 1 - i] for i in range(n // 2))


def _transpose_symmetric(matrix: Matrix) -> bool:
    n, cols = shape(matrix)
    if n != cols:
        return False
    return all(matrix[i][j] == matrix[j][i] for i in range(n) for j in range(i))


def detect_symmetry(matrix: Matrix, profile: str = PROFILE_LOSSLESS) -> SymmetryFlags:
    """Classify `matrix` against the three symmetry predicates.

    The empty matrix satisfies all of them (vacuous truth). A ragged matrix
    satisfies none.
    """
    profile = check_profile(profile)
    if not is_rectangular(matrix):
        return NO_SYMMETRY

    vertical = _rows_are_palindromes(matrix)
    horizontal = _mirrored_top_bottom(matrix)
    if profile == PROFILE_REFERENCE:
        diagonal = _rows_are_palindromes(matrix)
    else:
        diagonal = _transpose_symmetric(matrix)
    return SymmetryFlags(vertical=vertical, horizontal=horizontal, diagonal=diagonal)


def choose_kind(matrix: Matrix, flags: SymmetryFlags, profile: str = PROFILE_LOSSLESS) -> SymmetryKind:
    """Priority order: Vertical > Horizontal > Diagonal > None."""
    profile = check_profile(profile)
    if profile == PROFILE_REFERENCE:
        if flags.vertical:
            return SymmetryKind.VERTICAL
        if flags.horizontal:
            return SymmetryKind.HORIZONTAL
        if flags.diagonal:
            return SymmetryKind.DIAGONAL
        return SymmetryKind.NONE

    n, cols = shape(matrix)
    if flags.vertical and cols > 0 and cols % 2 == 0:
        return SymmetryKind.VERTICAL
    if flags.horizontal and cols > 0 and n % 2 == 0:
        return SymmetryKind.HORIZONTAL
    if flags.diagonal and n > 0:
        return SymmetryKind.DIAGONAL
    return SymmetryKind.NONE
