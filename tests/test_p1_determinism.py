from __future__ import annotations

import hashlib
import os
from pathlib import Path

import pytest

from grin.engine.container import compress_file, decompress_file

pytestmark = pytest.mark.p1


def sha256_file(p: Path) -> str:
    h = hashlib.sha256()
    with p.open("rb") as f:
        while True:
            b = f.read(1024 * 1024)
            if not b:
                break
            h.update(b)
    return h.hexdigest()


def write_inputs(root: Path) -> list[Path]:
    # deterministico, include vuoto + unicode + bin
    root.mkdir(parents=True, exist_ok=True)
    files = {
        "hello.txt": "ciao\n".encode("utf-8"),
        "unicode.txt": "Ω\nλ\nunicø∂e\n".encode("utf-8"),
        "empty.txt": b"",
        "tiny.bin": b"\x00\x01\x02\x03\xff",
        "random_4k.bin": os.urandom(4096),
        "all_bytes.bin": bytes(range(256)) * 3,
    }
    out = []
    for name, data in files.items():
        p = root / name
        p.write_bytes(data)
        out.append(p)
    return out


def test_encode_twice_is_bit_identical(tmp_path: Path) -> None:
    for inp in write_inputs(tmp_path / "in"):
        out1 = tmp_path / f"{inp.name}.1.grin"
        out2 = tmp_path / f"{inp.name}.2.grin"
        compress_file(inp, out1)
        compress_file(inp, out2)
        assert sha256_file(out1) == sha256_file(out2), f"output non deterministico: {inp.name}"


def test_roundtrip_mixed_inputs(tmp_path: Path) -> None:
    for inp in write_inputs(tmp_path / "in"):
        out = tmp_path / f"{inp.name}.grin"
        back = tmp_path / f"{inp.name}.back"
        compress_file(inp, out)
        decompress_file(out, back)
        assert sha256_file(back) == sha256_file(inp), f"roundtrip fallito: {inp.name}"
