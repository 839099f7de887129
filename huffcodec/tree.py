import heapq
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from bitarray import bitarray

from .errors import SymbolNotInTable
from .frequency import sample_frequencies
from .settings import DOT_MAX_DEPTH

logger = logging.getLogger(__name__)

# tie keys for internal nodes start above every possible byte value
_INTERNAL_TIE_BASE = 256


# ---------------------------------
# Tree nodes
# ---------------------------------
@dataclass(frozen=True)
class Leaf:
    symbol: int
    weight: int


@dataclass(frozen=True)
class Internal:
    weight: int
    left: Optional['Node']
    right: Optional['Node']


Node = Union[Leaf, Internal]


# -------------------------------------
# Build the tree from a frequency map
# -------------------------------------
def build_tree(freq_map: Dict[int, int]) -> Optional[Node]:
    """Greedy Huffman construction over ``freq_map``.

    The heap is keyed on ``(weight, tie_key)``: leaves use their symbol as
    tie key, combined nodes use ``256 + n`` where ``n`` counts the merges so
    far.  Equal weights therefore always pop in the same order, which makes
    the result a pure function of the frequency map.  Returns ``None`` for an
    empty map.
    """
    if not freq_map:
        return None

    h: List[Tuple[int, int, Node]] = [(fr, sym, Leaf(sym, fr)) for sym, fr in freq_map.items()]
    heapq.heapify(h)

    # one symbol: give it a parent so its code is one bit long
    if len(h) == 1:
        weight, _, single = heapq.heappop(h)
        return Internal(weight, single, None)

    merges = 0
    while len(h) > 1:
        wa, _, a = heapq.heappop(h)
        wb, _, b = heapq.heappop(h)
        heapq.heappush(h, (wa + wb, _INTERNAL_TIE_BASE + merges, Internal(wa + wb, a, b)))
        merges += 1
    return h[0][2]


# ---------------------------
# Walk tree -> code map
# ---------------------------
def make_codes(root: Optional[Node]) -> Dict[int, bitarray]:
    codes: Dict[int, bitarray] = {}
    if root is None:
        return codes

    def walk(node: Optional[Node], prefix: bitarray):
        if node is None:
            return
        if isinstance(node, Leaf):
            codes[node.symbol] = prefix
            return
        walk(node.left, prefix + bitarray('0'))
        walk(node.right, prefix + bitarray('1'))

    walk(root, bitarray(endian='big'))
    return codes


def iter_leaves(root: Optional[Node]) -> Iterator[Leaf]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        if isinstance(node, Leaf):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


def tree_depth(root: Optional[Node]) -> int:
    if root is None or isinstance(root, Leaf):
        return 0
    return 1 + max(tree_depth(root.left), tree_depth(root.right))


class HuffmanTree:
    """Immutable Huffman tree plus the code table derived from it.

    An empty tree (``root is None``) is what empty input produces; it has no
    codes and can only decode an empty bit stream.
    """

    __slots__ = ('_root', '_codes')

    def __init__(self, root: Optional[Node] = None):
        self._root = root
        self._codes: Optional[Dict[int, bitarray]] = None

    @classmethod
    def build(cls, freq_map: Dict[int, int]) -> 'HuffmanTree':
        tree = cls(build_tree(freq_map))
        logger.debug("Built tree: %d symbols, depth %d, weight %d",
                     len(freq_map), tree.depth, tree.weight)
        return tree

    @classmethod
    def from_data(cls, data: bytes) -> 'HuffmanTree':
        return cls.build(sample_frequencies(data))

    @property
    def root(self) -> Optional[Node]:
        return self._root

    @property
    def codes(self) -> Dict[int, bitarray]:
        # computed once; callers get a copy so the cached table stays intact
        if self._codes is None:
            self._codes = make_codes(self._root)
        return {sym: code.copy() for sym, code in self._codes.items()}

    def code_for(self, symbol: int) -> bitarray:
        if self._codes is None:
            self._codes = make_codes(self._root)
        try:
            return self._codes[symbol].copy()
        except KeyError:
            raise SymbolNotInTable(symbol) from None

    @property
    def symbols(self) -> List[int]:
        return sorted(leaf.symbol for leaf in iter_leaves(self._root))

    @property
    def weight(self) -> int:
        return 0 if self._root is None else self._root.weight

    @property
    def depth(self) -> int:
        return tree_depth(self._root)

    def is_empty(self) -> bool:
        return self._root is None

    def __eq__(self, other):
        if not isinstance(other, HuffmanTree):
            return NotImplemented
        return self._root == other._root

    def __hash__(self):
        return hash(self._root)

    def __repr__(self):
        return f"HuffmanTree(symbols={len(self.symbols)}, weight={self.weight}, depth={self.depth})"


# --------------------------------
# Convert Tree to Graphviz format
# --------------------------------
def _dot_label(node: Node) -> str:
    if isinstance(node, Leaf):
        return f"{node.weight}\\n{node.symbol}"
    return f"{node.weight}"


def tree_to_dot(tree: HuffmanTree, max_depth: int = DOT_MAX_DEPTH) -> str:
    """Render the top ``max_depth`` levels of ``tree`` as a DOT digraph.

    Nodes get positional ids (``n0``, ``n1``...) because weights repeat.
    """
    lines = ["digraph G {", "node [shape=circle, style=filled, color=lightblue];"]
    counter = 0

    def traverse(node: Node, depth: int) -> str:
        nonlocal counter
        name = f"n{counter}"
        counter += 1
        shape = ", shape=box" if isinstance(node, Leaf) else ""
        lines.append(f'{name} [label="{_dot_label(node)}"{shape}];')
        if isinstance(node, Internal) and depth < max_depth:
            for bit, child in (("0", node.left), ("1", node.right)):
                if child is None:
                    continue
                child_name = traverse(child, depth + 1)
                lines.append(f'{name} -> {child_name} [label="{bit}"];')
        return name

    if tree.root is not None:
        traverse(tree.root, 0)
    lines.append("}")
    return "\n".join(lines)
