"""Binary container for one encoded matrix.

Layout (single version, no negotiation):

  [MAGIC "SYM"(3) | VER(1)=1 | PROFILE(u8) | FLAG(ascii '0'..'3') |
   varint(meta_len) | META (JSON, utf-8) | varint(nbits) | BITSTREAM (MSB-first)]

META keys: "codes" (symbol -> bit string), "sha256" (of the text the decoder
will produce), "exact" (whether that text equals the original input).
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any

from symhuff.core.bitpack import dec_varint, enc_varint, pack_bits, unpack_bits
from symhuff.core.codec_huffman import is_prefix_free
from symhuff.core.matrix import SymmetryKind, flatten, parse_matrix, sanitize_matrix_text
from symhuff.core.symmetry import CODE_TO_PROFILE, PROFILE_LOSSLESS, PROFILE_TO_CODE
from symhuff.errors import BadMagic, CorruptPayload, UnsupportedVersion
from symhuff.pipeline import EncodeResult, decode_pipeline, encode_pipeline

MAGIC = b"SYM"
VER_V1 = 1
HEADER_LEN = 6


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_container(blob: bytes) -> bool:
    return len(blob) >= 4 and blob[:3] == MAGIC


@dataclass(frozen=True)
class ContainerV1:
    profile: str
    kind: SymmetryKind
    codes: dict[str, str]
    bits: str
    sha256: str
    exact: bool

    @property
    def payload(self) -> str:
        return self.kind.flag + self.bits


def encode_meta(meta: dict[str, Any]) -> bytes:
    return json.dumps(meta, ensure_ascii=False, sort_keys=True, separators=(",", ":")).encode("utf-8")


def decode_meta(meta_bytes: bytes) -> dict[str, Any]:
    try:
        obj = json.loads(meta_bytes.decode("utf-8"))
    except Exception as e:
        raise CorruptPayload(f"container: meta JSON non valido: {e}") from e
    if not isinstance(obj, dict):
        raise CorruptPayload("container: meta root deve essere un oggetto")
    return obj


def pack_container(result: EncodeResult, original_text: str) -> bytes:
    decoded = decode_pipeline(result.payload, result.codes, result.profile)
    meta = {
        "codes": result.codes,
        "sha256": sha256_text(decoded),
        "exact": decoded == original_text,
    }
    meta_b = encode_meta(meta)
    bitstream, _lastbits = pack_bits(result.bits)

    return b"".join(
        [
            MAGIC,
            bytes([VER_V1]),
            bytes([PROFILE_TO_CODE[result.profile]]),
            result.flag.encode("ascii"),
            enc_varint(len(meta_b)),
            meta_b,
            enc_varint(len(result.bits)),
            bitstream,
        ]
    )


def _parse_codes(obj: Any) -> dict[str, str]:
    if not isinstance(obj, dict):
        raise CorruptPayload("container: 'codes' deve essere un oggetto")
    codes: dict[str, str] = {}
    for sym, code in obj.items():
        if not isinstance(sym, str) or len(sym) != 1:
            raise CorruptPayload(f"container: simbolo non valido: {sym!r}")
        if not isinstance(code, str) or not code or set(code) - {"0", "1"}:
            raise CorruptPayload(f"container: codice non valido per {sym!r}: {code!r}")
        codes[sym] = code
    if not is_prefix_free(codes):
        raise CorruptPayload("container: tabella dei codici non prefix-free")
    return codes


def unpack_container(blob: bytes) -> ContainerV1:
    if len(blob) < HEADER_LEN:
        raise CorruptPayload("container: blob troppo corto")
    if blob[:3] != MAGIC:
        raise BadMagic("container: magic non valido")
    ver = blob[3]
    if ver != VER_V1:
        raise UnsupportedVersion(f"container: versione non supportata: {ver}")

    profile = CODE_TO_PROFILE.get(blob[4])
    if profile is None:
        raise CorruptPayload(f"container: profilo sconosciuto: {blob[4]}")
    kind = SymmetryKind.from_flag(chr(blob[5]))

    idx = HEADER_LEN
    try:
        meta_len, idx = dec_varint(blob, idx)
        if idx + meta_len > len(blob):
            raise CorruptPayload("container: meta troncato")
        meta = decode_meta(blob[idx : idx + meta_len])
        idx += meta_len
        nbits, idx = dec_varint(blob, idx)
        bitstream = blob[idx:]
        if len(bitstream) != (nbits + 7) // 8:
            raise CorruptPayload(
                f"container: bitstream di {len(bitstream)} byte, attesi {(nbits + 7) // 8}"
            )
        bits = unpack_bits(bitstream, nbits)
    except ValueError as e:
        raise CorruptPayload(f"container: {e}") from e

    sha = meta.get("sha256")
    if not isinstance(sha, str) or len(sha) != 64:
        raise CorruptPayload("container: sha256 mancante o malformato")

    return ContainerV1(
        profile=profile,
        kind=kind,
        codes=_parse_codes(meta.get("codes")),
        bits=bits,
        sha256=sha,
        exact=bool(meta.get("exact", False)),
    )


# -------------------
# Engine-level helpers
# -------------------
def compress_matrix_text(text: str, profile: str = PROFILE_LOSSLESS) -> bytes:
    matrix = parse_matrix(sanitize_matrix_text(text))
    result = encode_pipeline(matrix, profile)
    return pack_container(result, flatten(matrix))


def decompress_container(blob: bytes, strategy: str = "table") -> str:
    c = unpack_container(blob)
    return decode_pipeline(c.payload, c.codes, c.profile, strategy=strategy)
