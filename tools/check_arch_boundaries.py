"""Run every layering rule of tests/test_arch_boundaries.py outside pytest.

Exit 0 when all rules hold, 2 when at least one is violated, 3 when the rule
module cannot be loaded.
"""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

RULES_FILE = Path(__file__).resolve().parents[1] / "tests" / "test_arch_boundaries.py"


def _load_rules() -> dict[str, object]:
    spec = importlib.util.spec_from_file_location("symhuff_arch_rules", RULES_FILE)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load {RULES_FILE}")
    mod = importlib.util.module_from_spec(spec)
    # dataclasses resolves string annotations through sys.modules
    sys.modules[spec.name] = mod
    spec.loader.exec_module(mod)
    return {name: fn for name, fn in vars(mod).items() if name.startswith("test_") and callable(fn)}


def main() -> int:
    if not RULES_FILE.is_file():
        print(f"[symhuff] ERROR: {RULES_FILE.name} non trovato", file=sys.stderr)
        return 3
    try:
        rules = _load_rules()
    except Exception as e:
        print(f"[symhuff] ERROR: impossibile caricare le regole: {e}", file=sys.stderr)
        return 3
    if not rules:
        print("[symhuff] ERROR: nessuna regola test_* trovata", file=sys.stderr)
        return 3

    failed = 0
    for name, fn in sorted(rules.items()):
        try:
            fn()  # type: ignore[operator]
        except AssertionError as e:
            failed += 1
            print(f"FAIL {name}\n{e}", file=sys.stderr)
        else:
            print(f"ok   {name}")

    if failed:
        print(f"[symhuff] {failed}/{len(rules)} regole di layering violate", file=sys.stderr)
        return 2
    print(f"OK: {len(rules)} regole di layering rispettate.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
