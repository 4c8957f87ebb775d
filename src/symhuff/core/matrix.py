"""Binary matrix text model.

A matrix is a tuple of rows, each row a string over {'0', '1'}.
Text form: rows separated by '\\n'.
"""

from __future__ import annotations

import enum
import re

from symhuff.errors import CorruptPayload, MalformedInput

Matrix = tuple[str, ...]

ROW_SEP = "\n"
ALPHABET = frozenset("01")

_NOT_MATRIX_CHAR = re.compile(r"[^01\n]")


class SymmetryKind(enum.Enum):
    """Symmetry class exploited by a run. The value is the one-char wire flag."""

    NONE = "0"
    VERTICAL = "1"
    HORIZONTAL = "2"
    DIAGONAL = "3"

    @property
    def flag(self) -> str:
        return self.value

    @classmethod
    def from_flag(cls, flag: str) -> "SymmetryKind":
        try:
            return cls(flag)
        except ValueError as err:
            raise CorruptPayload(f"flag di simmetria sconosciuto: {flag!r}") from err


def sanitize_matrix_text(text: str) -> str:
    """Drop every character outside {'0', '1', '\\n'}."""
    return _NOT_MATRIX_CHAR.sub("", text.replace("\r\n", "\n"))


def parse_matrix(text: str) -> Matrix:
    """Split on newlines and trim each row.

    A single trailing newline does not add an empty row; empty text is the empty matrix.
    Rows may have different lengths (ragged input is modelled, not rejected).
    """
    if not text:
        return ()
    if text.endswith(ROW_SEP):
        text = text[:-1]
    rows = tuple(r.strip() for r in text.split(ROW_SEP))
    for i, row in enumerate(rows):
        bad = set(row) - ALPHABET
        if bad:
            raise MalformedInput(f"riga {i}: caratteri non binari {''.join(sorted(bad))!r}")
    return rows


def flatten(matrix: Matrix) -> str:
    return ROW_SEP.join(matrix)


def is_rectangular(matrix: Matrix) -> bool:
    return len({len(r) for r in matrix}) <= 1


def shape(matrix: Matrix) -> tuple[int, int]:
    """(rows, cols); cols is the first row's width (0 for the empty matrix)."""
    return len(matrix), (len(matrix[0]) if matrix else 0)
