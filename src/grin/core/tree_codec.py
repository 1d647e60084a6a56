from __future__ import annotations

from grin.errors import CorruptTreeError

from .bitio import BitReader, BitWriter
from .freq import EOS_SYMBOL, SYMBOL_BITS
from .huffman_tree import Internal, Leaf, Node, iter_leaves

# 257 foglie al massimo => profondità massima 256
MAX_TREE_DEPTH = EOS_SYMBOL

# -------------------
# Serializzazione albero (pre-ordine)
#   foglia:  0 + simbolo (9 bit)
#   interno: 1 + sinistro + destro
# -------------------


def serialize_tree(root: Node, writer: BitWriter) -> None:
    if isinstance(root, Leaf):
        writer.write_bit(0)
        writer.write_bits(root.symbol, SYMBOL_BITS)
        return
    writer.write_bit(1)
    serialize_tree(root.left, writer)
    serialize_tree(root.right, writer)


def deserialize_tree(reader: BitReader) -> Node:
    """
    Ricostruisce l'albero leggendo esattamente i bit dettati dalla sua forma.
    Non c'è un campo lunghezza: la fine è implicita nella ricorsione.
    """
    return _read_node(reader, 0)


def _read_node(reader: BitReader, depth: int) -> Node:
    bit = reader.read_bit()
    if bit is None:
        raise CorruptTreeError("fine input inattesa durante la lettura dell'albero")

    if bit == 0:
        sym = reader.read_bits(SYMBOL_BITS)
        if sym is None:
            raise CorruptTreeError("fine input inattesa durante la lettura di un simbolo")
        if sym > EOS_SYMBOL:
            raise CorruptTreeError(f"simbolo non valido nell'albero: {sym}")
        return Leaf(symbol=sym)

    if depth >= MAX_TREE_DEPTH:
        raise CorruptTreeError(f"albero troppo profondo (> {MAX_TREE_DEPTH})")
    left = _read_node(reader, depth + 1)
    right = _read_node(reader, depth + 1)
    return Internal(left=left, right=right)


def read_tree(reader: BitReader) -> Node:
    """
    deserialize_tree + controlli header: radice interna, simboli tutti
    distinti, sentinel presente.
    """
    root = deserialize_tree(reader)
    if isinstance(root, Leaf):
        raise CorruptTreeError("albero con una sola foglia")

    seen: set[int] = set()
    for leaf in iter_leaves(root):
        if leaf.symbol in seen:
            raise CorruptTreeError(f"simbolo duplicato nell'albero: {leaf.symbol}")
        seen.add(leaf.symbol)
    if EOS_SYMBOL not in seen:
        raise CorruptTreeError("albero senza sentinel (256)")
    return root


def serialized_tree_bits(root: Node) -> int:
    if isinstance(root, Leaf):
        return 1 + SYMBOL_BITS
    return 1 + serialized_tree_bits(root.left) + serialized_tree_bits(root.right)
