from __future__ import annotations

import io
import random
from pathlib import Path

import pytest

from grin.core.bitio import BitReader
from grin.core.freq import EOS_SYMBOL
from grin.core.tree_codec import deserialize_tree
from grin.engine.container import (
    MAGIC,
    compress,
    compress_bytes,
    compress_file,
    decompress,
    decompress_bytes,
    decompress_file,
)
from grin.errors import CorruptStreamError, CorruptTreeError, FormatError, UsageError

# Golden vectors (byte-level)
# NOTE: these pin the wire format: magic, pre-order tree, body, zero padding.
# empty: magic | 1 0 000000000 0 100000000 | EOS=1 | pad
GRIN_EMPTY_HEX = "00000736800804"
# b"A": magic | 1 0 001000001 0 100000000 | A=0 EOS=1 | pad
GRIN_A_HEX = "00000736882802"


def _text(n: int, seed: int = 0) -> bytes:
    rnd = random.Random(seed)
    words = [b"huffman", b"tree", b"grin", b"codec", b"bit", b"stream", b"\n", b" "]
    out = bytearray()
    while len(out) < n:
        out += rnd.choice(words)
    return bytes(out[:n])


def test_empty_input_vector() -> None:
    blob = compress_bytes(b"")
    assert blob.hex() == GRIN_EMPTY_HEX
    assert decompress_bytes(blob) == b""

    r = BitReader(io.BytesIO(blob))
    assert r.read_bits(32) == MAGIC
    root = deserialize_tree(r)
    leaves = sorted(lf.symbol for lf in (root.left, root.right))  # type: ignore[union-attr]
    assert leaves == [0, EOS_SYMBOL]


def test_single_byte_vector() -> None:
    blob = compress_bytes(b"A")
    assert blob.hex() == GRIN_A_HEX
    assert decompress_bytes(blob) == b"A"


def test_repeated_single_value() -> None:
    data = b"\x41" * 1000
    src, dst = io.BytesIO(data), io.BytesIO()
    stats = compress(src, dst)
    assert stats.n_bytes == 1000
    assert stats.n_leaves == 2
    assert stats.header_bits == 32 + 21
    assert stats.body_bits == 1001
    assert stats.out_bytes == len(dst.getvalue()) == 132

    back = io.BytesIO()
    dstats = decompress(io.BytesIO(dst.getvalue()), back)
    assert back.getvalue() == data
    assert dstats.n_bytes == 1000
    assert dstats.n_leaves == 2
    assert dstats.header_bits == stats.header_bits
    assert dstats.body_bits == stats.body_bits


def test_all_byte_values_once() -> None:
    data = bytes(range(256))
    src, dst = io.BytesIO(data), io.BytesIO()
    stats = compress(src, dst)
    assert stats.n_leaves == 257
    assert decompress_bytes(dst.getvalue()) == data


@pytest.mark.parametrize("seed", range(8))
def test_random_roundtrip(seed: int) -> None:
    rnd = random.Random(seed)
    data = bytes(rnd.getrandbits(8) for _ in range(rnd.randint(0, 4096)))
    assert decompress_bytes(compress_bytes(data)) == data


def test_text_compresses() -> None:
    data = _text(20_000)
    blob = compress_bytes(data)
    # seeded word mix: about 51% of the input
    assert len(blob) == 10182
    assert len(blob) < len(data) * 6 // 10
    assert decompress_bytes(blob) == data


def test_bad_magic_is_format_error() -> None:
    blob = bytearray(compress_bytes(_text(500)))
    blob[0:4] = b"\xde\xad\xbe\xef"
    with pytest.raises(FormatError):
        decompress_bytes(bytes(blob))


@pytest.mark.parametrize("blob", [b"", b"\x00\x00\x07"])
def test_too_short_is_format_error(blob: bytes) -> None:
    with pytest.raises(FormatError):
        decompress_bytes(blob)


def test_truncated_tree_is_corrupt_tree() -> None:
    blob = compress_bytes(_text(500))
    with pytest.raises(CorruptTreeError):
        decompress_bytes(blob[:6])


def test_truncated_body_is_corrupt_stream() -> None:
    blob = compress_bytes(_text(5000))
    with pytest.raises(CorruptStreamError):
        decompress_bytes(blob[:-1])
    with pytest.raises(CorruptStreamError):
        decompress_bytes(blob[: len(blob) * 3 // 4])


def test_single_leaf_header_is_corrupt_tree() -> None:
    # magic | 0 100000000
    with pytest.raises(CorruptTreeError):
        decompress_bytes(bytes.fromhex("000007364000"))


class _NoSeek(io.BytesIO):
    def seekable(self) -> bool:
        return False


def test_compress_requires_seekable_source() -> None:
    with pytest.raises(UsageError):
        compress(_NoSeek(b"abc"), io.BytesIO())


def test_compress_restarts_from_entry_position() -> None:
    src = io.BytesIO(b"HEADERpayload payload")
    src.seek(6)
    out = io.BytesIO()
    compress(src, out)
    assert decompress_bytes(out.getvalue()) == b"payload payload"


def test_file_roundtrip(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.grin"
    back = tmp_path / "back.txt"
    data = _text(3000, seed=3)
    inp.write_bytes(data)

    stats = compress_file(inp, out)
    assert stats.out_bytes == out.stat().st_size
    dstats = decompress_file(out, back)
    assert dstats.n_bytes == len(data)
    assert back.read_bytes() == data


def test_missing_input_raises_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        compress_file(tmp_path / "nope", tmp_path / "out.grin")


def test_duplicate_leaf_header_is_corrupt_tree() -> None:
    # magic | 1 0 A 1 0 A 0 EOS | body "0" would decode b"A"
    a = format(0x41, "09b")
    bits = "1" + "0" + a + "1" + "0" + a + "0" + format(EOS_SYMBOL, "09b")
    bits += "0" + "11"
    bits += "0" * (-len(bits) % 8)
    tree_bytes = bytes(int(bits[i : i + 8], 2) for i in range(0, len(bits), 8))
    with pytest.raises(CorruptTreeError):
        decompress_bytes(bytes.fromhex("00000736") + tree_bytes)
