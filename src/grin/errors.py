"""Typed errors for GRIN.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The core raises them immediately; nothing is retried or resynchronized.
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
EXIT_FORMAT = 11
EXIT_CORRUPT = 12
EXIT_CONSTRUCTION = 13
EXIT_IO = 14
EXIT_HASH_MISMATCH = 15


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage error (invalid args, unseekable input, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(EXIT_FORMAT, "FORMAT", "Not a GRIN file (magic number mismatch or file too short)"),
    ExitCodeInfo(EXIT_CORRUPT, "CORRUPT", "Corrupt or truncated tree header / compressed body"),
    ExitCodeInfo(EXIT_CONSTRUCTION, "CONSTRUCTION", "Huffman tree cannot be built from the given frequencies"),
    ExitCodeInfo(EXIT_IO, "IO", "I/O failure on the input or output file"),
    ExitCodeInfo(EXIT_HASH_MISMATCH, "HASH_MISMATCH", "Decoded content differs from the reference file (verify --against)"),
)

# For convenience (fast lookup)
_EXIT_CODE_BY_NAME: dict[str, int] = {e.name: e.code for e in EXIT_CODES}
_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def exit_code_by_name(name: str) -> int | None:
    return _EXIT_CODE_BY_NAME.get(name.strip().upper())


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE — do not edit manually.\n")
    lines.append("> Source of truth: `src/grin/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `GrinError` and carry an `exit_code`.\n")
    lines.append("- `OSError` from the input/output files is reported as `IO`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- A failed `decode` may leave a partial output file behind; it is never valid.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class GrinError(Exception):
    """Base error for GRIN."""

    exit_code: int = EXIT_GENERIC


class UsageError(GrinError):
    exit_code = EXIT_USAGE


class FormatError(GrinError):
    """Magic number mismatch: the input is not a GRIN container."""

    exit_code = EXIT_FORMAT


class CorruptPayload(GrinError):
    exit_code = EXIT_CORRUPT


class CorruptTreeError(CorruptPayload):
    """End of input (or an impossible value) while reading the tree header."""


class CorruptStreamError(CorruptPayload):
    """End of input in the middle of a code, before the end-of-stream symbol."""


class ConstructionError(GrinError):
    """A Huffman tree needs at least two leaves."""

    exit_code = EXIT_CONSTRUCTION


class HashMismatch(GrinError):
    exit_code = EXIT_HASH_MISMATCH
