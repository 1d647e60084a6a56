from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

import heapq
import itertools

from grin.errors import ConstructionError

from .freq import EOS_SYMBOL

# -------------------
# Strutture di base Huffman
# -------------------
Code = Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Leaf:
    symbol: int  # 0-255 byte, 256 sentinel
    freq: int = 0


@dataclass(frozen=True, slots=True)
class Internal:
    left: "Node"
    right: "Node"
    freq: int = 0


Node = Union[Leaf, Internal]


def build_huffman_tree(freq: Dict[int, int]) -> Node:
    """
    Min-heap su (freq, seq). seq cresce a ogni inserimento e le foglie
    entrano in ordine crescente di simbolo: a parità di frequenza vince il
    nodo inserito prima, quindi l'albero è deterministico.

    Il primo nodo estratto diventa il figlio sinistro, il secondo il destro.
    """
    if len(freq) < 2:
        raise ConstructionError(
            f"servono almeno 2 simboli per un albero Huffman (ricevuti {len(freq)})"
        )

    heap: List[Tuple[int, int, Node]] = []
    counter = itertools.count()

    for sym in sorted(freq):
        f = freq[sym]
        if sym < 0 or sym > EOS_SYMBOL:
            raise ConstructionError(f"simbolo fuori range: {sym}")
        if f < 0:
            raise ConstructionError(f"frequenza negativa per il simbolo {sym}: {f}")
        heapq.heappush(heap, (f, next(counter), Leaf(symbol=sym, freq=f)))

    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = Internal(left=n1, right=n2, freq=f1 + f2)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    return heap[0][2]


def build_code_table(root: Node) -> Dict[int, Code]:
    """Percorso radice->foglia (0 = sinistra, 1 = destra) per ogni simbolo."""
    codes: Dict[int, Code] = {}

    def dfs(node: Node, path: Code) -> None:
        if isinstance(node, Leaf):
            codes[node.symbol] = path
            return
        dfs(node.left, path + (0,))
        dfs(node.right, path + (1,))

    dfs(root, ())
    return codes


def iter_leaves(root: Node):
    """Foglie in pre-ordine (stesso ordine della serializzazione)."""
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


def tree_depth(root: Node) -> int:
    if isinstance(root, Leaf):
        return 0
    return 1 + max(tree_depth(root.left), tree_depth(root.right))


def same_shape(a: Node, b: Node) -> bool:
    """Stessa forma e stessi simboli alle stesse posizioni (freq ignorate)."""
    if isinstance(a, Leaf) or isinstance(b, Leaf):
        return isinstance(a, Leaf) and isinstance(b, Leaf) and a.symbol == b.symbol
    return same_shape(a.left, b.left) and same_shape(a.right, b.right)


@dataclass(frozen=True)
class HuffmanTree:
    root: Node
    codes: Dict[int, Code]

    @classmethod
    def from_frequencies(cls, freq: Dict[int, int]) -> "HuffmanTree":
        return cls.from_root(build_huffman_tree(freq))

    @classmethod
    def from_root(cls, root: Node) -> "HuffmanTree":
        if isinstance(root, Leaf):
            raise ConstructionError("albero con una sola foglia: nessun codice possibile")
        return cls(root=root, codes=build_code_table(root))

    @property
    def n_leaves(self) -> int:
        return len(self.codes)

    @property
    def depth(self) -> int:
        return tree_depth(self.root)
