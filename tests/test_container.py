from __future__ import annotations

import pytest

from symhuff.core.bitpack import dec_varint, enc_varint, pack_bits, unpack_bits
from symhuff.core.matrix import SymmetryKind
from symhuff.engine.container import (
    MAGIC,
    compress_matrix_text,
    decompress_container,
    is_container,
    sha256_text,
    unpack_container,
)
from symhuff.errors import BadMagic, CorruptPayload, UnsupportedVersion


def test_pack_bits_msb_first_with_lastbits() -> None:
    assert pack_bits("") == (b"", 0)
    assert pack_bits("1") == (b"\x80", 1)
    assert pack_bits("11010110") == (b"\xd6", 8)
    assert pack_bits("110101101") == (b"\xd6\x80", 1)
    assert unpack_bits(b"\xd6\x80", 9) == "110101101"


def test_unpack_bits_out_of_range() -> None:
    with pytest.raises(ValueError):
        unpack_bits(b"\x00", 9)


def test_varint_multibyte() -> None:
    # 300 -> LEB128 0xAC 0x02
    assert enc_varint(300) == b"\xac\x02"
    assert dec_varint(b"\xac\x02", 0) == (300, 2)
    with pytest.raises(ValueError):
        dec_varint(b"\x80", 0)


def test_container_header_layout() -> None:
    blob = compress_matrix_text("0110\n0110\n")
    assert is_container(blob)
    # MAGIC | VER=1 | PROFILE=lossless(0) | FLAG='1'
    assert blob[:6] == MAGIC + b"\x01\x00" + b"1"

    c = unpack_container(blob)
    assert c.kind is SymmetryKind.VERTICAL
    assert c.profile == "lossless"
    assert c.bits == "11010110"
    assert c.codes == {"1": "0", "\n": "10", "0": "11"}
    assert c.sha256 == sha256_text("0110\n0110")
    assert c.exact is True


@pytest.mark.parametrize(
    "text",
    ["", "0000\n", "1\n", "011\n101\n110\n", "10\n01\n01\n10\n", "0011\n0101\n1110\n"],
)
def test_container_roundtrip(text: str) -> None:
    blob = compress_matrix_text(text)
    expected = text[:-1] if text.endswith("\n") else text
    assert decompress_container(blob) == expected
    assert decompress_container(blob, strategy="tree") == expected


def test_reference_profile_records_lossy_container() -> None:
    blob = compress_matrix_text("010\n", profile="reference")
    c = unpack_container(blob)
    assert c.profile == "reference"
    assert c.exact is False
    # the hash covers what the decoder produces, not the original
    assert c.sha256 == sha256_text("0110")
    assert decompress_container(blob) == "0110"


def test_reference_container_without_symmetry_decodes_to_one_line() -> None:
    blob = compress_matrix_text("01\n10\n", profile="reference")
    c = unpack_container(blob)
    assert c.kind is SymmetryKind.NONE
    assert c.codes == {"0": "0", "1": "1"}
    assert c.exact is False
    assert decompress_container(blob) == "0110"
    assert c.sha256 == sha256_text("0110")


def test_bad_magic() -> None:
    blob = compress_matrix_text("0110\n")
    with pytest.raises(BadMagic):
        unpack_container(b"XYZ" + blob[3:])


def test_unsupported_version() -> None:
    blob = compress_matrix_text("0110\n")
    with pytest.raises(UnsupportedVersion):
        unpack_container(blob[:3] + b"\x02" + blob[4:])


def test_unknown_flag_or_profile() -> None:
    blob = compress_matrix_text("0110\n")
    with pytest.raises(CorruptPayload):
        unpack_container(blob[:5] + b"7" + blob[6:])
    with pytest.raises(CorruptPayload):
        unpack_container(blob[:4] + b"\x09" + blob[5:])


def test_truncated_container() -> None:
    blob = compress_matrix_text("0011\n0101\n1110\n")
    with pytest.raises(CorruptPayload):
        unpack_container(blob[:4])
    with pytest.raises(CorruptPayload):
        unpack_container(blob[:-1])
    with pytest.raises(CorruptPayload):
        unpack_container(blob[:12])
