#!/usr/bin/env python3
"""Compression ratio / timing benchmark: GRIN vs zlib vs zstd.

Runs compress -> decompress -> compare for every input file and prints one
row per file (or a JSON list with --json).

Usage example:
  python tools/bench_ratio.py data/*.txt --zstd-level 19

Notes:
- Uses internal APIs (no subprocess). Run inside repo venv.
- zstd needs the optional 'zstandard' module (pip install -e '.[bench]');
  without it the zstd column is left empty.
"""

from __future__ import annotations

import argparse
import json
import time
import zlib
from pathlib import Path
from typing import Any

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None


def _timed(fn, *args) -> tuple[Any, float]:
    t0 = time.perf_counter()
    out = fn(*args)
    return out, time.perf_counter() - t0


def _bench_one(path: Path, *, zlib_level: int, zstd_level: int) -> dict[str, Any]:
    from grin.engine.container import compress_bytes, decompress_bytes

    data = path.read_bytes()
    row: dict[str, Any] = {"file": str(path), "size": len(data)}

    comp, t_c = _timed(compress_bytes, data)
    back, t_d = _timed(decompress_bytes, comp)
    if back != data:
        raise SystemExit(f"roundtrip GRIN fallito: {path}")
    row["grin"] = len(comp)
    row["grin_c_s"] = round(t_c, 4)
    row["grin_d_s"] = round(t_d, 4)

    row["zlib"] = len(zlib.compress(data, zlib_level))

    if zstd is not None:
        row["zstd"] = len(zstd.ZstdCompressor(level=int(zstd_level)).compress(data))
    else:
        row["zstd"] = None

    return row


def _ratio(n: int | None, size: int) -> str:
    if n is None:
        return "-"
    if size == 0:
        return "n/a"
    return f"{n / size:.3f}"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="bench_ratio.py", description="GRIN ratio benchmark")
    ap.add_argument("inputs", nargs="+", type=Path)
    ap.add_argument("--zlib-level", type=int, default=9)
    ap.add_argument("--zstd-level", type=int, default=19)
    ap.add_argument("--json", action="store_true", help="Print a JSON list instead of a table")
    ns = ap.parse_args(argv)

    rows: list[dict[str, Any]] = []
    for p in ns.inputs:
        if not p.is_file():
            raise SystemExit(f"input non valido: {p}")
        rows.append(_bench_one(p, zlib_level=ns.zlib_level, zstd_level=ns.zstd_level))

    if ns.json:
        print(json.dumps(rows, indent=2))
        return 0

    print(f"{'file':40} {'size':>10} {'grin':>7} {'zlib':>7} {'zstd':>7} {'c_s':>8} {'d_s':>8}")
    for r in rows:
        print(
            f"{r['file'][-40:]:40} {r['size']:>10} "
            f"{_ratio(r['grin'], r['size']):>7} {_ratio(r['zlib'], r['size']):>7} "
            f"{_ratio(r['zstd'], r['size']):>7} {r['grin_c_s']:>8} {r['grin_d_s']:>8}"
        )
    if zstd is None:
        print("(zstd: modulo 'zstandard' non disponibile)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
