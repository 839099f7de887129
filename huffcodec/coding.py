import logging
from typing import NamedTuple, Optional

from bitarray import bitarray

from .bits import BitPacker, pack_bits
from .errors import MalformedPayload, MalformedTree, SymbolNotInTable, TruncatedPayload
from .tree import HuffmanTree, Leaf

logger = logging.getLogger(__name__)


class EncodedPayload(NamedTuple):
    bits: bitarray
    symbol_count: int

    @property
    def bit_length(self) -> int:
        return len(self.bits)

    @property
    def ratio(self) -> Optional[float]:
        return compression_ratio(len(self.bits), self.symbol_count)

    def packed(self) -> bytes:
        return pack_bits(self.bits)


def compression_ratio(bit_length: int, original_bytes: int) -> Optional[float]:
    # encoded bits over original bits; None when there was nothing to encode
    if original_bytes == 0:
        return None
    return bit_length / (8 * original_bytes)


def encode(data: bytes, tree: HuffmanTree) -> EncodedPayload:
    codes = tree.codes
    missing = set(data).difference(codes)
    if missing:
        raise SymbolNotInTable(min(missing))
    packer = BitPacker()
    if data:
        packer.encode(codes, data)
    return EncodedPayload(packer.bits, len(data))


def decode(bits: bitarray, tree: HuffmanTree, symbol_count: Optional[int] = None) -> bytes:
    """Walk ``tree`` over ``bits``, emitting a byte at each leaf.

    ``bits`` must hold only meaningful bits (no padding).  The walk has to
    end back at the root; when ``symbol_count`` is given it must also match
    the number of decoded bytes.
    """
    root = tree.root
    if root is None:
        if len(bits):
            raise MalformedTree("Bits present but the tree is empty")
        if symbol_count:
            raise TruncatedPayload(f"Expected {symbol_count} symbols from an empty tree")
        return b""

    out = bytearray()
    node = root
    for bit in bits:
        node = node.right if bit else node.left
        if node is None:
            raise MalformedTree("Corrupt bitstream (walked to an absent child)")
        if isinstance(node, Leaf):
            out.append(node.symbol)
            node = root
            if symbol_count is not None and len(out) > symbol_count:
                raise MalformedPayload(f"More than {symbol_count} symbols in payload")

    if node is not root:
        raise TruncatedPayload(f"Bit stream ends inside a code after {len(out)} symbols")
    if symbol_count is not None and len(out) != symbol_count:
        raise TruncatedPayload(f"Decoded {len(out)} of {symbol_count} symbols")
    return bytes(out)
