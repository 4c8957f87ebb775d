#!/usr/bin/env python3
"""Deterministic matrix dataset generator (one .txt per matrix).

Usage example:
  python tools/gen_matrices.py --out /tmp/matrices --seed 7 --count 20 --size 16
"""

from __future__ import annotations

import argparse
import json
import random
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Final

KINDS: Final[tuple[str, ...]] = ("none", "vertical", "horizontal", "diagonal")


@dataclass(frozen=True)
class DatasetMeta:
    seed: int
    count: int
    size: int
    files_written: int
    bytes_written: int


def _row(rng: random.Random, n: int) -> str:
    return "".join(rng.choice("01") for _ in range(n))


def make_matrix(kind: str, n: int, rng: random.Random) -> list[str]:
    if kind == "vertical":
        rows = [_row(rng, n // 2) for _ in range(n)]
        return [r + r[::-1] for r in rows]
    if kind == "horizontal":
        top = [_row(rng, n) for _ in range(n // 2)]
        return top + top[::-1]
    if kind == "diagonal":
        cells = [[""] * n for _ in range(n)]
        for i in range(n):
            for j in range(i + 1):
                cells[i][j] = cells[j][i] = rng.choice("01")
        return ["".join(r) for r in cells]
    return [_row(rng, n) for _ in range(n)]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="gen_matrices.py", description="symhuff matrix dataset")
    ap.add_argument("--out", type=Path, required=True)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=12)
    ap.add_argument("--size", type=int, default=16, help="Matrix side (even values keep every class)")
    ns = ap.parse_args(argv)

    rng = random.Random(ns.seed)
    ns.out.mkdir(parents=True, exist_ok=True)
    written = 0
    for i in range(ns.count):
        kind = KINDS[i % len(KINDS)]
        text = "\n".join(make_matrix(kind, ns.size, rng)) + "\n"
        (ns.out / f"{i:03d}_{kind}.txt").write_text(text, encoding="utf-8")
        written += len(text.encode("utf-8"))

    meta = DatasetMeta(
        seed=ns.seed, count=ns.count, size=ns.size, files_written=ns.count, bytes_written=written
    )
    (ns.out / "dataset_meta.json").write_text(
        json.dumps(asdict(meta), indent=2, sort_keys=True) + "\n", encoding="utf-8"
    )
    print(json.dumps(asdict(meta), sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
