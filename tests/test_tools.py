from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from symhuff.errors import render_exit_codes_markdown

REPO = Path(__file__).resolve().parents[1]


def _run_script(rel: str, *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(REPO / rel), *args],
        cwd=str(REPO),
        text=True,
        capture_output=True,
    )


def test_exit_codes_doc_matches_errors_table() -> None:
    assert (REPO / "docs" / "exit_codes.md").read_text(encoding="utf-8") == render_exit_codes_markdown()


def test_gen_exit_codes_check_mode_does_not_write() -> None:
    doc = REPO / "docs" / "exit_codes.md"
    before = doc.stat().st_mtime_ns
    r = _run_script("scripts/gen_exit_codes_md.py", "--check")
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "OK" in r.stdout
    assert doc.stat().st_mtime_ns == before


def test_arch_checker_runs_every_layering_rule() -> None:
    r = _run_script("tools/check_arch_boundaries.py")
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "ok   test_low_level_modules_do_not_import_orchestrators" in r.stdout
    assert "ok   test_core_only_imports_core_and_errors" in r.stdout
    assert "2 regole" in r.stdout
