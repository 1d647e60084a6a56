"""Verification / inspection helpers for GRIN containers.

We implement:
  - verify: decode the whole container into a hashing sink (no output file)
    and optionally compare the result with the original file (--against)
  - inspect: header/body statistics for `grin info`

Both raise the same typed errors as decompress (FormatError, CorruptTreeError,
CorruptStreamError).
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from grin.core.bitio import BitReader, BitWriter
from grin.core.freq import EOS_SYMBOL
from grin.core.huffman_tree import iter_leaves
from grin.core.stream_codec import decode_stream
from grin.engine.container import MAGIC, read_header
from grin.errors import HashMismatch

CHUNK_SIZE_DEFAULT = 256 * 1024


class _HashSink:
    """Write-only binary sink: counts and hashes, keeps nothing."""

    def __init__(self) -> None:
        self._h = hashlib.sha256()
        self.n = 0

    def write(self, b: bytes) -> int:
        self._h.update(b)
        self.n += len(b)
        return len(b)

    def hexdigest(self) -> str:
        return self._h.hexdigest()


@dataclass(frozen=True)
class ContainerInfo:
    path: str
    magic: int
    file_bytes: int
    n_leaves: int
    byte_symbols: int  # foglie escluso il sentinel
    tree_depth: int
    header_bits: int
    body_bits: int
    padding_bits: int
    decoded_bytes: int
    decoded_sha256: str

    @property
    def ratio(self) -> float:
        if self.decoded_bytes == 0:
            return 0.0
        return self.file_bytes / self.decoded_bytes

    def to_json(self) -> dict[str, Any]:
        d = asdict(self)
        d["magic"] = f"{self.magic:#010x}"
        d["ratio"] = round(self.ratio, 4)
        return d


def sha256_file(path: Path, *, chunk_size: int = CHUNK_SIZE_DEFAULT) -> str:
    h = hashlib.sha256()
    with Path(path).open("rb") as f:
        while True:
            b = f.read(chunk_size)
            if not b:
                break
            h.update(b)
    return h.hexdigest()


def inspect_file(path: Path) -> ContainerInfo:
    p = Path(path)
    sink = _HashSink()
    with p.open("rb") as f, BitReader(f) as r, BitWriter(sink) as w:  # type: ignore[arg-type]
        tree = read_header(r)
        header_bits = r.bits_read
        n = decode_stream(tree.root, r, w)
        body_bits = r.bits_read - header_bits

    file_bytes = p.stat().st_size
    leaves = list(iter_leaves(tree.root))
    return ContainerInfo(
        path=str(p),
        magic=MAGIC,
        file_bytes=file_bytes,
        n_leaves=len(leaves),
        byte_symbols=sum(1 for lf in leaves if lf.symbol != EOS_SYMBOL),
        tree_depth=tree.depth,
        header_bits=header_bits,
        body_bits=body_bits,
        padding_bits=file_bytes * 8 - header_bits - body_bits,
        decoded_bytes=n,
        decoded_sha256=sink.hexdigest(),
    )


def verify_file(path: Path, *, against: Path | None = None) -> ContainerInfo:
    """Full decode; with `against`, the decoded bytes must hash like that file."""
    info = inspect_file(path)
    if against is not None:
        want = sha256_file(Path(against))
        if info.decoded_sha256 != want:
            raise HashMismatch(f"contenuto decodificato diverso da {against}")
    return info
