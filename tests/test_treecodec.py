import struct

import pytest

from huffcodec.errors import MalformedTree, WeightOverflow
from huffcodec.tree import HuffmanTree, Internal, Leaf
from huffcodec.treecodec import deserialize, serialize, serialized_size


def test_single_symbol_layout():
    blob = serialize(HuffmanTree.from_data(b"aaaa"))
    assert blob == (b'\x01\x00' + struct.pack("<I", 4)
                    + b'\x01a' + struct.pack("<I", 4) + b'\x00\x00'
                    + b'\x00')


def test_empty_tree():
    empty = HuffmanTree(None)
    assert serialize(empty) == b""
    assert serialized_size(empty) == 0
    assert deserialize(b"").is_empty()


def test_size_matches_serialization(sample_tree, english_like, random_bytes):
    assert serialized_size(sample_tree) == len(serialize(sample_tree)) == 36
    for data in (english_like, random_bytes, b"aaaa", bytes(range(256))):
        tree = HuffmanTree.from_data(data)
        assert serialized_size(tree) == len(serialize(tree))


def test_deserialized_tree_has_same_codes(english_like, random_bytes):
    for data in (b"aaabbc", b"aaaa", english_like, random_bytes, bytes(range(256))):
        tree = HuffmanTree.from_data(data)
        restored = deserialize(serialize(tree))
        assert restored == tree
        assert restored.codes == tree.codes


def test_weights_are_little_endian(sample_tree):
    blob = serialize(sample_tree)
    assert blob[2:6] == b'\x06\x00\x00\x00'


def test_bad_flag():
    with pytest.raises(MalformedTree, match="flag"):
        deserialize(b'\x02')


def test_truncated_tree(sample_tree):
    blob = serialize(sample_tree)
    for cut in (1, 3, len(blob) - 1):
        with pytest.raises(MalformedTree):
            deserialize(blob[:cut])


def test_trailing_bytes(sample_tree):
    with pytest.raises(MalformedTree, match="Extra bytes"):
        deserialize(serialize(sample_tree) + b'\x00')


def test_internal_weight_must_match_children(sample_tree):
    blob = bytearray(serialize(sample_tree))
    blob[2:6] = struct.pack("<I", 7)
    with pytest.raises(MalformedTree, match="weight"):
        deserialize(bytes(blob))


def test_internal_node_with_symbol(sample_tree):
    blob = bytearray(serialize(sample_tree))
    blob[1] = 42
    with pytest.raises(MalformedTree, match="symbol"):
        deserialize(bytes(blob))


def test_root_leaf_rejected():
    with pytest.raises(MalformedTree, match="Root"):
        deserialize(b'\x01a' + struct.pack("<I", 4) + b'\x00\x00')


def test_absent_root_rejected():
    with pytest.raises(MalformedTree):
        deserialize(b'\x00')


def test_duplicate_symbols_rejected():
    tree = HuffmanTree(Internal(2, Leaf(1, 1), Leaf(1, 1)))
    with pytest.raises(MalformedTree, match="twice"):
        deserialize(serialize(tree))


def test_zero_weight_leaf_rejected():
    tree = HuffmanTree(Internal(1, Leaf(1, 1), Leaf(2, 0)))
    with pytest.raises(MalformedTree, match="zero weight"):
        deserialize(serialize(tree))


def test_overly_deep_tree_rejected():
    # a chain of 300 internal nodes, far deeper than any byte alphabet needs
    blob = (b'\x01\x00' + struct.pack("<I", 1)) * 300
    with pytest.raises(MalformedTree, match="deeper"):
        deserialize(blob)


def test_weight_overflow():
    big = 2 ** 32
    with pytest.raises(WeightOverflow):
        serialize(HuffmanTree(Internal(big, Leaf(0, big), None)))


def test_multi_node_layout(sample_tree):
    # root, leaf a, internal, leaf c, leaf b
    assert serialize(sample_tree) == (
        b'\x01\x00' + struct.pack("<I", 6)
        + b'\x01a' + struct.pack("<I", 3) + b'\x00\x00'
        + b'\x01\x00' + struct.pack("<I", 3)
        + b'\x01c' + struct.pack("<I", 1) + b'\x00\x00'
        + b'\x01b' + struct.pack("<I", 2) + b'\x00\x00'
    )
