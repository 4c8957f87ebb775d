#!/usr/bin/env python3
"""Benchmark: compress -> verify --full -> decompress over a directory of matrices.

Usage example:
  python tools/bench_matrices.py /tmp/matrices --profile lossless --iters 3

Notes:
- Uses internal APIs (no subprocess). Run inside repo venv.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import Any


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="bench_matrices.py", description="symhuff benchmark")
    ap.add_argument("input_dir", type=Path)
    ap.add_argument("--profile", default="lossless")
    ap.add_argument("--iters", type=int, default=3)
    ns = ap.parse_args(argv)

    from symhuff.core.matrix import flatten, parse_matrix, sanitize_matrix_text
    from symhuff.engine.container import compress_matrix_text, decompress_container
    from symhuff.report import build_report
    from symhuff.verify import verify_container_blob

    inp = ns.input_dir.resolve()
    if not inp.is_dir():
        raise SystemExit(f"input_dir non valido: {inp}")

    rows: list[dict[str, Any]] = []
    for path in sorted(inp.glob("*.txt")):
        text = path.read_text(encoding="utf-8")
        expected = flatten(parse_matrix(sanitize_matrix_text(text)))
        t0 = time.perf_counter()
        ok = True
        for _ in range(max(1, ns.iters)):
            blob = compress_matrix_text(text, ns.profile)
            verify_container_blob(blob, full=True)
            ok = ok and decompress_container(blob) == expected
        dt = (time.perf_counter() - t0) / max(1, ns.iters)

        rep = build_report(text, ns.profile)
        rows.append(
            {
                "file": path.name,
                "kind": rep["kind"],
                "container_bytes": rep["container_bytes"],
                "baseline_zstd_bytes": rep["baseline_zstd_bytes"],
                "roundtrip_ok": ok,
                "seconds": round(dt, 6),
            }
        )

    print(json.dumps({"profile": ns.profile, "files": rows}, indent=2))
    return 0 if all(r["roundtrip_ok"] for r in rows) else 1


if __name__ == "__main__":
    raise SystemExit(main())
