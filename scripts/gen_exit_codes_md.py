#!/usr/bin/env python3
"""Write docs/exit_codes.md from the EXIT_CODES table in symhuff.errors.

With --check nothing is written: exit 1 when the committed file is stale.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
DOC = REPO / "docs" / "exit_codes.md"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="genera docs/exit_codes.md")
    ap.add_argument("--check", action="store_true", help="non scrive: fallisce se il file e' da rigenerare")
    args = ap.parse_args(argv)

    sys.path.insert(0, str(REPO / "src"))
    from symhuff.errors import render_exit_codes_markdown  # noqa: E402

    wanted = render_exit_codes_markdown()
    current = DOC.read_text(encoding="utf-8") if DOC.is_file() else None

    if args.check:
        if current != wanted:
            print(f"[symhuff] {DOC.relative_to(REPO)} non aggiornato: rigenera con scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print(f"[symhuff] {DOC.relative_to(REPO)} OK")
        return 0

    if current == wanted:
        print(f"[symhuff] {DOC.relative_to(REPO)} unchanged")
        return 0
    DOC.parent.mkdir(parents=True, exist_ok=True)
    DOC.write_text(wanted, encoding="utf-8")
    print(f"[symhuff] wrote {DOC.relative_to(REPO)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
