"""Bit packing between code bits and bytes.

Bits go into each byte most-significant first and the last byte is padded
with zero bits on its low-order end.  The packed bytes alone do not say how
many of their bits are meaningful, so ``BitPacker.bit_length`` has to travel
with them (the container header stores it) and ``read_bits`` needs it back.
"""
from typing import Dict, Iterable

from bitarray import bitarray

from .errors import MalformedPayload, TruncatedPayload


def pad_count(bit_length: int) -> int:
    return (8 - bit_length % 8) % 8


def packed_size(bit_length: int) -> int:
    return (bit_length + 7) // 8


class BitPacker:
    def __init__(self):
        self._bits = bitarray(endian='big')

    def write(self, bits: Iterable[int]) -> None:
        self._bits.extend(bits)

    def encode(self, codes: Dict[int, bitarray], symbols: Iterable[int]) -> None:
        # codes must cover every symbol; bitarray raises ValueError otherwise
        self._bits.encode(codes, symbols)

    @property
    def bit_length(self) -> int:
        return len(self._bits)

    @property
    def pad_count(self) -> int:
        return pad_count(len(self._bits))

    @property
    def bits(self) -> bitarray:
        return self._bits.copy()

    def getvalue(self) -> bytes:
        return self._bits.tobytes()

    def __len__(self):
        return len(self._bits)


def pack_bits(bits: Iterable[int]) -> bytes:
    packer = BitPacker()
    packer.write(bits)
    return packer.getvalue()


def read_bits(data: bytes, bit_count: int) -> bitarray:
    """Unpack the first ``bit_count`` bits of ``data``.

    ``data`` must be exactly as long as packing ``bit_count`` bits makes it,
    and its padding bits must be zero.
    """
    if bit_count < 0:
        raise ValueError(f"bit_count must be >= 0, got {bit_count}")
    expected = packed_size(bit_count)
    if len(data) < expected:
        raise TruncatedPayload(f"Payload has {len(data)} bytes, {expected} needed for {bit_count} bits")
    if len(data) > expected:
        raise MalformedPayload(f"Payload has {len(data) - expected} bytes past its {bit_count} bits")

    bits = bitarray(endian='big')
    bits.frombytes(data)
    if bits[bit_count:].any():
        raise MalformedPayload("Padding bits are not zero")
    del bits[bit_count:]
    return bits
