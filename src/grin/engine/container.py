"""GRIN container: magic (32 bit) + serialized Huffman tree + Huffman body.

    [ MAGIC(32) = 0x00000736
      | TREE (pre-order, 0+sym9 / 1+left+right)
      | BODY (one code per input byte, then the sentinel code)
      | zero padding up to the byte boundary ]

No length field anywhere: the tree ends where its shape ends, the body ends at
the sentinel.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from grin.core.bitio import BitReader, BitWriter
from grin.core.freq import count_frequencies, with_sentinel
from grin.core.huffman_tree import HuffmanTree
from grin.core.stream_codec import decode_stream, encode_stream
from grin.core.tree_codec import read_tree, serialize_tree
from grin.errors import FormatError, UsageError

MAGIC = 0x00000736
MAGIC_BITS = 32

# Input vuoto: solo il sentinel non basta per un albero, aggiungo un
# simbolo segnaposto a frequenza 0.
PLACEHOLDER_SYMBOL = 0


@dataclass(frozen=True)
class CompressStats:
    n_bytes: int
    n_leaves: int
    header_bits: int  # magic + tree
    body_bits: int  # codes + sentinel, padding escluso
    out_bytes: int


@dataclass(frozen=True)
class DecompressStats:
    n_bytes: int
    n_leaves: int
    header_bits: int
    body_bits: int


def build_tree_for(freq: dict[int, int]) -> HuffmanTree:
    """Frequenze dei byte (senza sentinel) -> albero pronto per la codifica."""
    full = with_sentinel(freq)
    if len(full) < 2:
        full[PLACEHOLDER_SYMBOL] = 0
    return HuffmanTree.from_frequencies(full)


def compress(src: BinaryIO, dst: BinaryIO) -> CompressStats:
    """
    Two-pass: frequency count, rewind, encode.

    `src` must be seekable; encoding restarts from the position `src` had
    on entry.
    """
    if not src.seekable():
        raise UsageError("compress: la sorgente deve essere riavvolgibile (seekable)")
    start = src.tell()

    with BitReader(src) as r:
        freq = count_frequencies(r)
    tree = build_tree_for(freq)
    src.seek(start)

    with BitReader(src) as r, BitWriter(dst) as w:
        w.write_bits(MAGIC, MAGIC_BITS)
        serialize_tree(tree.root, w)
        header_bits = w.bits_written
        n = encode_stream(tree.codes, r, w)
        body_bits = w.bits_written - header_bits
        total_bits = w.bits_written

    return CompressStats(
        n_bytes=n,
        n_leaves=tree.n_leaves,
        header_bits=header_bits,
        body_bits=body_bits,
        out_bytes=(total_bits + 7) // 8,
    )


def read_header(r: BitReader) -> HuffmanTree:
    magic = r.read_bits(MAGIC_BITS)
    if magic is None:
        raise FormatError("file troppo corto per un container GRIN")
    if magic != MAGIC:
        raise FormatError(f"magic number non valido: {magic:#010x} (atteso {MAGIC:#010x})")
    return HuffmanTree.from_root(read_tree(r))


def decompress(src: BinaryIO, dst: BinaryIO) -> DecompressStats:
    with BitReader(src) as r, BitWriter(dst) as w:
        tree = read_header(r)
        header_bits = r.bits_read
        n = decode_stream(tree.root, r, w)
        body_bits = r.bits_read - header_bits

    return DecompressStats(
        n_bytes=n,
        n_leaves=tree.n_leaves,
        header_bits=header_bits,
        body_bits=body_bits,
    )


# -------------------
# Helper bytes / path
# -------------------
def compress_bytes(data: bytes) -> bytes:
    out = io.BytesIO()
    compress(io.BytesIO(bytes(data)), out)
    return out.getvalue()


def decompress_bytes(blob: bytes) -> bytes:
    out = io.BytesIO()
    decompress(io.BytesIO(bytes(blob)), out)
    return out.getvalue()


def compress_file(input_path: str | Path, output_path: str | Path) -> CompressStats:
    with open(input_path, "rb") as fin, open(output_path, "wb") as fout:
        return compress(fin, fout)


def decompress_file(input_path: str | Path, output_path: str | Path) -> DecompressStats:
    with open(input_path, "rb") as fin, open(output_path, "wb") as fout:
        return decompress(fin, fout)
