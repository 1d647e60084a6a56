from __future__ import annotations

from typing import BinaryIO

# -------------------
# Bit I/O (MSB-first)
# -------------------
MAX_BITS_PER_CALL = 32


def _check_width(n: int) -> None:
    if n < 1 or n > MAX_BITS_PER_CALL:
        raise ValueError(f"numero di bit non valido: {n} (1..{MAX_BITS_PER_CALL})")


class BitWriter:
    """
    Scrive bit su un canale a byte, MSB-first dentro ogni byte.

    Tiene al massimo un byte parziale; flush() lo completa con bit 0 nella
    parte bassa e lo scrive. Il file sottostante NON viene chiuso: è del
    chiamante.

        with BitWriter(fp) as w:
            w.write_bits(0x736, 32)
            w.write_bit(1)
    """

    def __init__(self, fp: BinaryIO) -> None:
        self._fp = fp
        self._cur = 0
        self._nbits = 0  # bit in _cur (0..7)
        self.bits_written = 0

    def write_bit(self, bit: int) -> None:
        self._cur = (self._cur << 1) | (1 if bit else 0)
        self._nbits += 1
        self.bits_written += 1
        if self._nbits == 8:
            self._fp.write(bytes((self._cur,)))
            self._cur = 0
            self._nbits = 0

    def write_bits(self, value: int, n: int) -> None:
        _check_width(n)
        if value < 0 or value >> n:
            raise ValueError(f"valore {value} non rappresentabile su {n} bit")
        for i in range(n - 1, -1, -1):
            self.write_bit((value >> i) & 1)

    def write_code(self, code: tuple[int, ...] | list[int]) -> None:
        for bit in code:
            self.write_bit(bit)

    @property
    def pending_bits(self) -> int:
        return self._nbits

    def flush(self) -> None:
        if self._nbits > 0:
            self._fp.write(bytes((self._cur << (8 - self._nbits),)))
            self._cur = 0
            self._nbits = 0

    def close(self) -> None:
        self.flush()

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class BitReader:
    """
    Legge bit da un canale a byte, MSB-first.

    read_bits(n) ritorna None quando restano meno di n bit: è l'unico
    segnale di fine input (mai bit inventati a zero).
    """

    def __init__(self, fp: BinaryIO) -> None:
        self._fp = fp
        self._cur = 0
        self._nbits = 0  # bit ancora da consumare in _cur
        self._eof = False
        self.bits_read = 0

    def _fill(self) -> bool:
        if self._eof:
            return False
        b = self._fp.read(1)
        if not b:
            self._eof = True
            return False
        self._cur = b[0]
        self._nbits = 8
        return True

    def read_bit(self) -> int | None:
        if self._nbits == 0 and not self._fill():
            return None
        self._nbits -= 1
        self.bits_read += 1
        return (self._cur >> self._nbits) & 1

    def read_bits(self, n: int) -> int | None:
        _check_width(n)
        value = 0
        for _ in range(n):
            bit = self.read_bit()
            if bit is None:
                return None
            value = (value << 1) | bit
        return value

    def close(self) -> None:
        # Scarta l'eventuale byte parziale: il canale resta del chiamante.
        self._cur = 0
        self._nbits = 0

    def __enter__(self) -> "BitReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
