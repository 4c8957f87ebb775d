"""Encode/decode pipeline: detect -> reduce -> Huffman (+flag) and back.

Every call is a pure transformation: no state survives between calls, so runs
over independent matrices can execute concurrently without synchronization.
"""

from __future__ import annotations

from dataclasses import dataclass

from symhuff.core.codec_huffman import (
    build_code_table,
    build_freq_table,
    build_huffman_tree,
    encode_text,
    huffman_decompress,
    numeric_keys_first,
)
from symhuff.core.matrix import Matrix, SymmetryKind, flatten, parse_matrix, sanitize_matrix_text
from symhuff.core.reduce import expand_matrix, reduce_matrix, reduced_text
from symhuff.core.symmetry import (
    PROFILE_LOSSLESS,
    PROFILE_REFERENCE,
    SymmetryFlags,
    check_profile,
    choose_kind,
    detect_symmetry,
)
from symhuff.errors import CorruptPayload


@dataclass(frozen=True)
class EncodeResult:
    """The three artifacts of a run (flags, payload, codes) plus what led to them."""

    flags: SymmetryFlags
    kind: SymmetryKind
    reduced: str
    payload: str
    codes: dict[str, str]
    profile: str = PROFILE_LOSSLESS

    @property
    def flag(self) -> str:
        return self.payload[0]

    @property
    def bits(self) -> str:
        return self.payload[1:]

    def as_dict(self) -> dict[str, object]:
        return {
            "profile": self.profile,
            "symmetry": self.flags.as_dict(),
            "kind": self.kind.name.lower(),
            "flag": self.flag,
            "payload": self.payload,
            "codes": dict(sorted(self.codes.items())),
        }


def encode_pipeline(matrix: Matrix, profile: str = PROFILE_LOSSLESS) -> EncodeResult:
    profile = check_profile(profile)
    flags = detect_symmetry(matrix, profile)
    kind = choose_kind(matrix, flags, profile)
    text = reduced_text(reduce_matrix(matrix, kind, profile))

    freq = build_freq_table(text)
    if profile == PROFILE_REFERENCE:
        freq = numeric_keys_first(freq)
    root = build_huffman_tree(freq)
    codes = build_code_table(root)
    bits = encode_text(text, codes)

    return EncodeResult(
        flags=flags,
        kind=kind,
        reduced=text,
        payload=kind.flag + bits,
        codes=codes,
        profile=profile,
    )


def encode_matrix_text(text: str, profile: str = PROFILE_LOSSLESS) -> EncodeResult:
    """Raw matrix text (as typed by a user) -> EncodeResult."""
    return encode_pipeline(parse_matrix(sanitize_matrix_text(text)), profile)


def split_payload(payload: str) -> tuple[SymmetryKind, str]:
    if not payload:
        raise CorruptPayload("payload vuoto: manca il flag di simmetria")
    return SymmetryKind.from_flag(payload[0]), payload[1:]


def decode_pipeline(
    payload: str,
    codes: dict[str, str],
    profile: str = PROFILE_LOSSLESS,
    strategy: str = "table",
) -> str:
    """EncodedPayload + CodeTable -> full matrix text (rows joined by '\\n')."""
    profile = check_profile(profile)
    kind, bits = split_payload(payload)
    decoded = huffman_decompress(bits, codes, strategy=strategy)
    return expand_matrix(decoded, kind, profile)


def roundtrip_is_exact(matrix: Matrix, profile: str = PROFILE_LOSSLESS) -> bool:
    """True when decode(encode(matrix)) reproduces flatten(matrix)."""
    res = encode_pipeline(matrix, profile)
    return decode_pipeline(res.payload, res.codes, profile) == flatten(matrix)
