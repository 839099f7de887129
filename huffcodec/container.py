"""Self-contained compressed blob: header, serialized tree, packed payload.

Layout (little-endian)::

    magic       4s   b"HUF1"
    version     B
    tree_len    I    bytes of serialized tree that follow the header
    symbols     Q    number of encoded bytes
    bits        Q    meaningful bits in the payload
    tree        tree_len bytes
    payload     ceil(bits / 8) bytes

The tree length is written up front so the payload offset never has to be
recomputed from the tree.
"""
import logging
import struct
import time
from typing import Dict, NamedTuple, Tuple

from .bits import pad_count, read_bits
from .coding import decode, encode
from .errors import HuffmanError, MalformedContainer
from .frequency import sample_frequencies
from .settings import FORMAT_VERSION, MAGIC
from .tree import HuffmanTree
from .treecodec import deserialize, serialize

logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<4sBIQQ")
HEADER_SIZE = _HEADER.size


class Header(NamedTuple):
    version: int
    tree_len: int
    symbol_count: int
    bit_count: int

    @property
    def payload_offset(self) -> int:
        return HEADER_SIZE + self.tree_len

    @property
    def pad_count(self) -> int:
        return pad_count(self.bit_count)


def is_compressed(blob: bytes) -> bool:
    return blob[:len(MAGIC)] == MAGIC


def read_header(blob: bytes) -> Header:
    if len(blob) < HEADER_SIZE:
        raise MalformedContainer(f"Not a valid container (too small: {len(blob)} bytes)")
    magic, version, tree_len, symbols, bits = _HEADER.unpack_from(blob)
    if magic != MAGIC:
        raise MalformedContainer("Not a compressed file (magic mismatch)")
    if version != FORMAT_VERSION:
        raise MalformedContainer(f"Unsupported format version {version}")
    if HEADER_SIZE + tree_len > len(blob):
        raise MalformedContainer("Header tree length unrealistic")
    return Header(version, tree_len, symbols, bits)


def compress_with_stats(data: bytes) -> Tuple[bytes, HuffmanTree, Dict[str, object]]:
    t0 = time.perf_counter()
    freq = sample_frequencies(data)
    tree = HuffmanTree.build(freq)
    t_tree = time.perf_counter()

    payload = encode(data, tree)
    packed = payload.packed()
    t_pack = time.perf_counter()

    tree_blob = serialize(tree)
    header = _HEADER.pack(MAGIC, FORMAT_VERSION, len(tree_blob), payload.symbol_count, payload.bit_length)
    blob = header + tree_blob + packed
    t_done = time.perf_counter()

    stats = {
        "original_bytes": len(data),
        "compressed_bytes": len(blob),
        "tree_bytes": len(tree_blob),
        "payload_bytes": len(packed),
        "payload_bits": payload.bit_length,
        "unique_symbols": len(freq),
        "pad_count": pad_count(payload.bit_length),
        "bit_ratio": payload.ratio,
        "time_tree_build": t_tree - t0,
        "time_pack": t_pack - t_tree,
        "time_serialize": t_done - t_pack,
    }
    logger.debug("Compressed %d bytes -> %d (tree %d, payload %d bits)",
                 len(data), len(blob), len(tree_blob), payload.bit_length)
    return blob, tree, stats


def compress(data: bytes) -> bytes:
    blob, _, _ = compress_with_stats(data)
    return blob


def decompress(blob: bytes) -> bytes:
    header = read_header(blob)
    tree = deserialize(blob[HEADER_SIZE:header.payload_offset])
    if tree.weight != header.symbol_count:
        raise MalformedContainer(
            f"Header says {header.symbol_count} symbols, tree weighs {tree.weight}")

    bits = read_bits(blob[header.payload_offset:], header.bit_count)
    out = decode(bits, tree, header.symbol_count)
    logger.debug("Decompressed %d bytes -> %d", len(blob), len(out))
    return out


def verify_roundtrip(data: bytes) -> bool:
    """Compress then decompress ``data``; True when the bytes come back intact."""
    try:
        return decompress(compress(data)) == data
    except HuffmanError as e:
        logger.warning("Round trip failed: %s", e)
        return False
