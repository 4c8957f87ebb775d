from __future__ import annotations

import pytest

from symhuff.core.matrix import SymmetryKind, parse_matrix, sanitize_matrix_text
from symhuff.core.symmetry import SymmetryFlags, choose_kind, detect_symmetry
from symhuff.errors import CorruptPayload, MalformedInput, UsageError


def test_parse_matrix_trims_rows_and_trailing_newline() -> None:
    assert parse_matrix("0110 \n 0110\n") == ("0110", "0110")
    assert parse_matrix("") == ()


def test_parse_matrix_rejects_foreign_characters() -> None:
    with pytest.raises(MalformedInput):
        parse_matrix("01a\n010")


def test_sanitize_drops_everything_but_bits_and_newlines() -> None:
    assert sanitize_matrix_text("0 1x1\r\n2 10") == "011\n10"


def test_vertical_palindrome_rows() -> None:
    m = ("0110", "0110")
    flags = detect_symmetry(m)
    assert flags.vertical is True
    assert choose_kind(m, flags) is SymmetryKind.VERTICAL


def test_horizontal_mirror() -> None:
    m = ("11", "00", "00", "11")
    assert detect_symmetry(m).horizontal is True

    m2 = ("10", "01", "01", "10")
    flags = detect_symmetry(m2)
    assert flags == SymmetryFlags(vertical=False, horizontal=True, diagonal=False)
    assert choose_kind(m2, flags) is SymmetryKind.HORIZONTAL


def test_diagonal_is_transpose_in_lossless_profile() -> None:
    m = ("011", "101", "110")
    flags = detect_symmetry(m)
    assert flags == SymmetryFlags(vertical=False, horizontal=False, diagonal=True)
    assert choose_kind(m, flags) is SymmetryKind.DIAGONAL


def test_diagonal_repeats_vertical_test_in_reference_profile() -> None:
    m = ("011", "101", "110")
    assert detect_symmetry(m, "reference").diagonal is False
    m2 = ("0110", "1001")
    assert detect_symmetry(m2, "reference").diagonal is True
    assert detect_symmetry(m2, "lossless").diagonal is False


def test_empty_matrix_is_vacuously_symmetric() -> None:
    for profile in ("lossless", "reference"):
        flags = detect_symmetry((), profile)
        assert flags == SymmetryFlags(vertical=True, horizontal=True, diagonal=True)
    assert choose_kind((), detect_symmetry(())) is SymmetryKind.NONE
    assert choose_kind((), detect_symmetry((), "reference"), "reference") is SymmetryKind.VERTICAL


def test_ragged_matrix_has_no_symmetry() -> None:
    m = ("010", "1", "010")
    assert detect_symmetry(m) == SymmetryFlags(False, False, False)
    assert choose_kind(m, detect_symmetry(m)) is SymmetryKind.NONE


def test_lossless_skips_classes_with_odd_geometry() -> None:
    # palindromic rows of odd width, mirrored rows of odd count
    m = ("010", "111", "010")
    flags = detect_symmetry(m)
    assert flags.vertical and flags.horizontal
    # 3x3 and transpose-symmetric -> diagonal is the first invertible class
    assert choose_kind(m, flags) is SymmetryKind.DIAGONAL
    assert choose_kind(m, detect_symmetry(m, "reference"), "reference") is SymmetryKind.VERTICAL

    m2 = ("010",)
    assert choose_kind(m2, detect_symmetry(m2)) is SymmetryKind.NONE


def test_flag_roundtrip_and_unknown_flag() -> None:
    for kind in SymmetryKind:
        assert SymmetryKind.from_flag(kind.flag) is kind
    with pytest.raises(CorruptPayload):
        SymmetryKind.from_flag("7")


def test_unknown_profile() -> None:
    with pytest.raises(UsageError):
        detect_symmetry(("0",), "fancy")
