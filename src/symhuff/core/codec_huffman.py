from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import heapq
import itertools

from symhuff.errors import DecodeError, UnknownSymbol, UsageError

BITS = frozenset("01")
DECODE_STRATEGIES: tuple[str, ...] = ("table", "tree")


# -------------------
# Strutture di base Huffman
# -------------------
@dataclass
class HuffmanNode:
    freq: int
    symbol: Optional[str] = None  # carattere per foglie, None per interni
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None and self.left is None and self.right is None


def build_freq_table(text: str) -> Dict[str, int]:
    """symbol -> count, in order of first occurrence."""
    freq: Dict[str, int] = {}
    for ch in text:
        freq[ch] = freq.get(ch, 0) + 1
    return freq


def numeric_keys_first(freq: Dict[str, int]) -> Dict[str, int]:
    """Reorder `freq` the way the historical encoder enumerated its symbol table.

    Digit symbols come first in ascending numeric order, every other symbol
    follows in insertion order. For the binary alphabet: '0', '1', then '\\n'.
    """
    digits = sorted((s for s in freq if s.isascii() and s.isdigit()), key=int)
    rest = [s for s in freq if not (s.isascii() and s.isdigit())]
    return {s: freq[s] for s in digits + rest}


def build_huffman_tree(freq: Dict[str, int]) -> Optional[HuffmanNode]:
    """Min-heap keyed by (weight, creation order).

    Leaves are created in table order, each merged node takes the next counter
    value, so ties always resolve to the earliest-created node. First pop is the
    left child, second pop the right child.
    """
    heap: list[tuple[int, int, HuffmanNode]] = []
    counter = itertools.count()

    for sym, f in freq.items():
        if f > 0:
            node = HuffmanNode(freq=f, symbol=sym)
            heapq.heappush(heap, (f, next(counter), node))

    if not heap:
        return None

    # Caso speciale: un solo simbolo => la foglia e' la radice (codice "0" in build_code_table)
    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = HuffmanNode(freq=f1 + f2, symbol=None, left=n1, right=n2)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    return heap[0][2]


def build_code_table(root: Optional[HuffmanNode]) -> Dict[str, str]:
    codes: Dict[str, str] = {}
    if root is None:
        return codes

    def dfs(node: HuffmanNode, path: str) -> None:
        # Foglia
        if node.is_leaf:
            codes[node.symbol] = path or "0"  # type: ignore[index]
            return
        if node.left is not None:
            dfs(node.left, path + "0")
        if node.right is not None:
            dfs(node.right, path + "1")

    dfs(root, "")
    return codes


def count_leaves(root: Optional[HuffmanNode]) -> int:
    if root is None:
        return 0
    if root.is_leaf:
        return 1
    return count_leaves(root.left) + count_leaves(root.right)


def is_prefix_free(codes: Dict[str, str]) -> bool:
    words = sorted(codes.values())
    # in ordine lessicografico un prefisso precede sempre subito le sue estensioni
    return all(not b.startswith(a) for a, b in zip(words, words[1:]))


# -------------------
# Encode / decode su stringhe di bit '0'/'1'
# -------------------
def encode_text(text: str, codes: Dict[str, str]) -> str:
    out = []
    for ch in text:
        code = codes.get(ch)
        if code is None:
            raise UnknownSymbol(f"simbolo assente dalla tabella dei codici: {ch!r}")
        out.append(code)
    return "".join(out)


def decode_bits(bits: str, codes: Dict[str, str]) -> str:
    """Greedy prefix match over the inverted code table."""
    if not bits:
        return ""
    if not codes:
        raise DecodeError("bitstream non vuoto ma tabella dei codici vuota")

    reverse = {code: sym for sym, code in codes.items()}
    max_len = max(len(c) for c in reverse)
    out: list[str] = []
    buf = ""
    for i, bit in enumerate(bits):
        if bit not in BITS:
            raise DecodeError(f"carattere non binario nel bitstream alla posizione {i}: {bit!r}")
        buf += bit
        sym = reverse.get(buf)
        if sym is not None:
            out.append(sym)
            buf = ""
        elif len(buf) >= max_len:
            raise DecodeError(f"sequenza di bit senza codice alla posizione {i - len(buf) + 1}: {buf}")
    if buf:
        raise DecodeError(f"bit finali non corrispondenti ad alcun codice: {buf}")
    return "".join(out)


def build_decode_tree(codes: Dict[str, str]) -> Optional[HuffmanNode]:
    """Rebuild a decoding trie from the code table alone (weights are not transmitted)."""
    if not codes:
        return None
    root = HuffmanNode(freq=0)
    for sym, code in codes.items():
        if not code or set(code) - BITS:
            raise DecodeError(f"codice non valido per {sym!r}: {code!r}")
        node = root
        for bit in code:
            if node.is_leaf:
                raise DecodeError(f"tabella dei codici non prefix-free ({sym!r})")
            attr = "left" if bit == "0" else "right"
            child = getattr(node, attr)
            if child is None:
                child = HuffmanNode(freq=0)
                setattr(node, attr, child)
            node = child
        if node.left is not None or node.right is not None or node.symbol is not None:
            raise DecodeError(f"tabella dei codici non prefix-free ({sym!r})")
        node.symbol = sym
    return root


def decode_with_tree(bits: str, root: Optional[HuffmanNode]) -> str:
    """Walk the tree bit by bit, back to the root at every leaf."""
    if not bits:
        return ""
    if root is None:
        raise DecodeError("bitstream non vuoto ma albero vuoto")

    if root.is_leaf:
        # albero a foglia singola: il codice e' "0"
        root = HuffmanNode(freq=root.freq, left=root)

    out: list[str] = []
    node = root
    depth = 0
    for i, bit in enumerate(bits):
        if bit not in BITS:
            raise DecodeError(f"carattere non binario nel bitstream alla posizione {i}: {bit!r}")
        nxt = node.left if bit == "0" else node.right
        depth += 1
        if nxt is None:
            raise DecodeError(f"sequenza di bit senza codice alla posizione {i - depth + 1}")
        if nxt.is_leaf:
            out.append(nxt.symbol)  # type: ignore[arg-type]
            node = root
            depth = 0
        else:
            node = nxt
    if node is not root:
        raise DecodeError(f"bitstream troncato: {depth} bit finali senza simbolo")
    return "".join(out)


def huffman_compress(text: str) -> Tuple[Dict[str, str], str]:
    """
    Core riusabile: text -> (codes, bits)
    """
    freq = build_freq_table(text)
    root = build_huffman_tree(freq)
    codes = build_code_table(root)
    return codes, encode_text(text, codes)


def huffman_decompress(bits: str, codes: Dict[str, str], strategy: str = "table") -> str:
    """
    Core riusabile: (bits, codes) -> text, via tabella inversa o albero ricostruito.
    """
    if strategy == "table":
        return decode_bits(bits, codes)
    if strategy == "tree":
        return decode_with_tree(bits, build_decode_tree(codes))
    raise UsageError(f"strategia di decodifica non supportata: {strategy!r}")
