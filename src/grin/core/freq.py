from __future__ import annotations

from typing import Dict

from .bitio import BitReader

EOS_SYMBOL = 256  # simbolo sintetico di fine stream
SYMBOL_BITS = 9  # 0..256 sta su 9 bit
BYTE_BITS = 8


def count_frequencies(reader: BitReader) -> Dict[int, int]:
    """
    Consuma tutto il reader 8 bit alla volta e conta i valori 0..255.

    Il sentinel (256) NON viene aggiunto qui: è compito del chiamante
    (vedi with_sentinel). Dopo la chiamata la sorgente è esaurita; per
    codificare va riavvolta o riaperta.
    """
    freq: Dict[int, int] = {}
    while True:
        val = reader.read_bits(BYTE_BITS)
        if val is None:
            break
        freq[val] = freq.get(val, 0) + 1
    return freq


def with_sentinel(freq: Dict[int, int]) -> Dict[int, int]:
    """Nuova mappa con EOS_SYMBOL -> 1 (il conteggio del sentinel è sempre 1)."""
    out = dict(freq)
    out[EOS_SYMBOL] = 1
    return out
