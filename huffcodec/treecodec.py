"""Preorder binary serialization of a Huffman tree.

One record per node, left subtree before right::

    0x00                            absent child
    0x01 <symbol:u8> <weight:u32le> <left record> <right record>

A node whose two children are both absent is a leaf.  Internal nodes write
symbol ``0``.  The empty tree serializes to ``b""``.
"""
import struct
from typing import Optional, Set, Tuple

from .errors import MalformedTree, WeightOverflow
from .tree import HuffmanTree, Internal, Leaf, Node

ABSENT = 0
PRESENT = 1

_NODE = struct.Struct("<BI")  # symbol, weight
MAX_WEIGHT = 0xFFFFFFFF
# 256 leaves never need more levels than this
MAX_DEPTH = 256


def serialize(tree: HuffmanTree) -> bytes:
    out = bytearray()
    if tree.root is None:
        return bytes(out)

    def dfs(node: Optional[Node]):
        if node is None:
            out.append(ABSENT)
            return
        if node.weight > MAX_WEIGHT:
            raise WeightOverflow(f"Weight {node.weight} does not fit in 32 bits")
        out.append(PRESENT)
        if isinstance(node, Leaf):
            out.extend(_NODE.pack(node.symbol, node.weight))
            out.append(ABSENT)
            out.append(ABSENT)
            return
        out.extend(_NODE.pack(0, node.weight))
        dfs(node.left)
        dfs(node.right)

    dfs(tree.root)
    return bytes(out)


def serialized_size(tree: HuffmanTree) -> int:
    # same traversal as serialize(), counting instead of writing
    if tree.root is None:
        return 0

    def size(node: Optional[Node]) -> int:
        if node is None:
            return 1
        if isinstance(node, Leaf):
            return 1 + _NODE.size + 2
        return 1 + _NODE.size + size(node.left) + size(node.right)

    return size(tree.root)


def deserialize(blob: bytes) -> HuffmanTree:
    # parse preorder serialization; raise MalformedTree on bad data
    if not blob:
        return HuffmanTree(None)
    n = len(blob)
    seen: Set[int] = set()

    def dfs(i: int, depth: int) -> Tuple[Optional[Node], int]:
        if i >= n:
            raise MalformedTree("Bad tree data: ran out")
        if depth > MAX_DEPTH:
            raise MalformedTree(f"Tree deeper than {MAX_DEPTH} levels")
        flag = blob[i]
        i += 1
        if flag == ABSENT:
            return None, i
        if flag != PRESENT:
            raise MalformedTree(f"Bad tree flag {flag} at {i - 1}")
        if i + _NODE.size > n:
            raise MalformedTree(f"Bad tree: node at {i - 1} cut short")
        sym, weight = _NODE.unpack_from(blob, i)
        i += _NODE.size
        left, i = dfs(i, depth + 1)
        right, i = dfs(i, depth + 1)

        if left is None and right is None:
            if weight == 0:
                raise MalformedTree(f"Leaf {sym} has zero weight")
            if sym in seen:
                raise MalformedTree(f"Symbol {sym} appears twice in tree")
            seen.add(sym)
            return Leaf(sym, weight), i
        if sym != 0:
            raise MalformedTree(f"Internal node carries symbol {sym}")
        children = sum(c.weight for c in (left, right) if c is not None)
        if children != weight:
            raise MalformedTree(f"Internal weight {weight} != children total {children}")
        return Internal(weight, left, right), i

    root, next_i = dfs(0, 0)
    if root is None:
        raise MalformedTree("Tree data describes no nodes")
    if isinstance(root, Leaf):
        raise MalformedTree("Root cannot be a leaf")
    if next_i != n:
        raise MalformedTree("Extra bytes after tree data")
    return HuffmanTree(root)
