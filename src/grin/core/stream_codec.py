from __future__ import annotations

from typing import Dict

from grin.errors import ConstructionError, CorruptStreamError

from .bitio import BitReader, BitWriter
from .freq import BYTE_BITS, EOS_SYMBOL
from .huffman_tree import Code, Leaf, Node


def encode_stream(codes: Dict[int, Code], reader: BitReader, writer: BitWriter) -> int:
    """
    Scrive il codice di ogni byte letto, poi il codice del sentinel.
    Ritorna il numero di byte codificati.
    """
    n = 0
    while True:
        val = reader.read_bits(BYTE_BITS)
        if val is None:
            break
        code = codes.get(val)
        if code is None:
            raise ConstructionError(
                f"nessun codice per il byte {val:#04x} (input cambiato tra le due passate?)"
            )
        writer.write_code(code)
        n += 1

    eos = codes.get(EOS_SYMBOL)
    if eos is None:
        raise ConstructionError("nessun codice per il sentinel (256)")
    writer.write_code(eos)
    return n


def decode_stream(root: Node, reader: BitReader, writer: BitWriter) -> int:
    """
    Decodifica fino al sentinel. Ritorna il numero di byte emessi.

    Stati: in discesa (Traversing) -> foglia byte (emesso, si riparte dalla
    radice) -> foglia sentinel (Done). Il padding dopo il sentinel non viene
    letto.
    """
    if isinstance(root, Leaf):
        raise CorruptStreamError("albero senza nodi interni: nessun codice decodificabile")

    n = 0
    node: Node = root
    while True:
        bit = reader.read_bit()
        if bit is None:
            raise CorruptStreamError(
                f"stream troncato: fine input prima del sentinel (dopo {n} byte)"
            )

        node = node.left if bit == 0 else node.right  # type: ignore[union-attr]

        if isinstance(node, Leaf):
            if node.symbol == EOS_SYMBOL:
                return n
            writer.write_bits(node.symbol, BYTE_BITS)
            n += 1
            node = root
