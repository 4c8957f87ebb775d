"""Typed errors for symhuff.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_UNSUPPORTED_VERSION = 11
EXIT_HASH_MISMATCH = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid pipeline spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt payload, undecodable bits, etc.)"),
    ExitCodeInfo(EXIT_UNSUPPORTED_VERSION, "UNSUPPORTED_VERSION", "Unsupported container version"),
    ExitCodeInfo(EXIT_HASH_MISMATCH, "HASH_MISMATCH", "Integrity failure (sha256 mismatch, tamper detected)"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE - do not edit manually.\n")
    lines.append("> Source of truth: `src/symhuff/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `SymhuffError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append("- `inspect` and `report --json` print JSON to stdout; errors always go to stderr.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class SymhuffError(Exception):
    """Base error for symhuff."""

    exit_code: int = EXIT_GENERIC


class UsageError(SymhuffError):
    exit_code = EXIT_USAGE


class MalformedInput(SymhuffError):
    """Matrix text that cannot be used at all (e.g. foreign characters after sanitizing)."""

    exit_code = EXIT_USAGE


class CorruptPayload(SymhuffError):
    exit_code = EXIT_GENERIC


class BadMagic(CorruptPayload):
    pass


class DecodeError(CorruptPayload):
    """Bits that never match a code (truncated or corrupted payload)."""


class UnknownSymbol(SymhuffError):
    """A symbol missing from the code table at encode time (internal inconsistency)."""

    exit_code = EXIT_GENERIC


class UnsupportedVersion(SymhuffError):
    exit_code = EXIT_UNSUPPORTED_VERSION


class HashMismatch(SymhuffError):
    exit_code = EXIT_HASH_MISMATCH
