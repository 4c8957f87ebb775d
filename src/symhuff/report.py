"""Size report for one matrix: symmetry + Huffman vs. general-purpose baselines.

Determinism note: the report MUST be identical across runs for the same
input. No timestamps, no paths.
"""

from __future__ import annotations

from typing import Any

from symhuff.core.baseline import CodecZlib, CodecZstd, have_zstd
from symhuff.core.matrix import flatten, is_rectangular, parse_matrix, sanitize_matrix_text, shape
from symhuff.core.symmetry import PROFILE_LOSSLESS
from symhuff.engine.container import pack_container
from symhuff.pipeline import encode_pipeline


def _ratio(num: int, den: int) -> float:
    return round(num / den, 6) if den else 0.0


def build_report(text: str, profile: str = PROFILE_LOSSLESS) -> dict[str, Any]:
    matrix = parse_matrix(sanitize_matrix_text(text))
    original = flatten(matrix)
    res = encode_pipeline(matrix, profile)
    container = pack_container(res, original)
    raw = original.encode("utf-8")

    rows, cols = shape(matrix)
    zstd_bytes = len(CodecZstd(level=19, tight=True).compress(raw)) if have_zstd() else None

    return {
        "profile": res.profile,
        "rows": rows,
        "cols": cols if is_rectangular(matrix) else None,
        "symmetry": res.flags.as_dict(),
        "kind": res.kind.name.lower(),
        "flag": res.flag,
        "distinct_symbols": len(res.codes),
        "original_chars": len(original),
        "reduced_chars": len(res.reduced),
        "payload_chars": len(res.payload),
        "encoded_bits": len(res.bits),
        "container_bytes": len(container),
        "baseline_zlib_bytes": len(CodecZlib(level=9).compress(raw)),
        "baseline_zstd_bytes": zstd_bytes,
        "ratio_bits_per_cell": _ratio(len(res.bits), sum(len(r) for r in matrix)),
        "ratio_container": _ratio(len(container), len(raw)),
    }


def render_report(rep: dict[str, Any]) -> str:
    zstd_b = rep["baseline_zstd_bytes"]
    lines = [
        "=== symhuff report ===",
        f"Profilo        : {rep['profile']}",
        f"Matrice        : {rep['rows']} x {rep['cols'] if rep['cols'] is not None else '?'}",
        "Simmetrie      : " + (", ".join(k for k, v in rep["symmetry"].items() if v) or "-"),
        f"Classe / flag  : {rep['kind']} / {rep['flag']}",
        f"Caratteri      : originale={rep['original_chars']}  ridotto={rep['reduced_chars']}",
        f"Bit codificati : {rep['encoded_bits']} ({rep['ratio_bits_per_cell']:.3f} bit/cella)",
        f"Container      : {rep['container_bytes']} byte",
        f"Baseline zlib  : {rep['baseline_zlib_bytes']} byte",
        f"Baseline zstd  : {zstd_b if zstd_b is not None else 'n/d'} byte",
        f"Rapporto       : {rep['ratio_container']:.3f} (1.0 = nessuna compressione)",
        "======================",
    ]
    return "\n".join(lines) + "\n"
