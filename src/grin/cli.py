"""GRIN CLI.

This is the stable CLI entrypoint (console-script: ``grin``).

    grin encode INPUT OUTPUT
    grin decode INPUT OUTPUT
    grin verify INPUT [--against ORIGINAL]
    grin info INPUT [--json]

UX policy:
  - results go to stdout, errors to stderr with a ``[grin]`` prefix;
  - exit codes come from grin.errors (single source of truth);
  - ``--debug`` re-raises to show the stack trace.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from grin.errors import EXIT_GENERIC, EXIT_IO, EXIT_OK, GrinError


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _encode(input_path: Path, output_path: Path) -> int:
    from grin.engine.container import compress_file

    compress_file(input_path, output_path)
    return EXIT_OK


def _decode(input_path: Path, output_path: Path) -> int:
    from grin.engine.container import decompress_file

    decompress_file(input_path, output_path)
    return EXIT_OK


def _verify(input_path: Path, *, against: Path | None) -> int:
    from grin.verify import verify_file

    verify_file(input_path, against=against)
    print("OK")
    return EXIT_OK


def _info(input_path: Path, *, as_json: bool) -> int:
    from grin.verify import inspect_file

    info = inspect_file(input_path)
    if as_json:
        print(json.dumps(info.to_json(), sort_keys=True))
        return EXIT_OK

    print(f"file:          {info.path}")
    print(f"magic:         {info.magic:#010x}")
    print(f"size:          {info.file_bytes} bytes")
    print(f"decoded:       {info.decoded_bytes} bytes (ratio {info.ratio:.3f})")
    print(f"leaves:        {info.n_leaves} ({info.byte_symbols} byte symbols + EOS)")
    print(f"tree depth:    {info.tree_depth}")
    print(f"header bits:   {info.header_bits}")
    print(f"body bits:     {info.body_bits}")
    print(f"padding bits:  {info.padding_bits}")
    print(f"sha256:        {info.decoded_sha256}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="grin", description="GRIN static Huffman compressor")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_e = sub.add_parser("encode", help="Compress INPUT into the GRIN file OUTPUT")
    p_e.add_argument("input", type=Path)
    p_e.add_argument("output", type=Path)
    _add_common_args(p_e)

    p_d = sub.add_parser("decode", help="Decompress the GRIN file INPUT into OUTPUT")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Fully decode a GRIN file without writing output")
    p_v.add_argument("input", type=Path)
    p_v.add_argument(
        "--against",
        type=Path,
        default=None,
        help="Original file: decoded content must match it byte for byte",
    )
    _add_common_args(p_v)

    p_i = sub.add_parser("info", help="Show header/body statistics of a GRIN file")
    p_i.add_argument("input", type=Path)
    p_i.add_argument("--json", action="store_true", help="Print a JSON object instead of text")
    _add_common_args(p_i)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "encode":
            return _encode(ns.input, ns.output)
        if ns.cmd == "decode":
            return _decode(ns.input, ns.output)
        if ns.cmd == "verify":
            return _verify(ns.input, against=ns.against)
        if ns.cmd == "info":
            return _info(ns.input, as_json=bool(ns.json))
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except GrinError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[grin] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except OSError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[grin] I/O error: {e}", file=sys.stderr)
        return EXIT_IO
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[grin] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
