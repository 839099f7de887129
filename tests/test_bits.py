import pytest
from bitarray import bitarray

from huffcodec.bits import BitPacker, pack_bits, pad_count, packed_size, read_bits
from huffcodec.errors import MalformedPayload, TruncatedPayload


def test_msb_first_with_zero_padding():
    assert pack_bits([1, 0, 1]) == b'\xa0'
    assert pack_bits(bitarray('00000001' '1')) == b'\x01\x80'


def test_packer_tracks_bit_length():
    packer = BitPacker()
    packer.write(bitarray('101'))
    packer.write([1, 0, 0, 0, 0, 1])
    assert packer.bit_length == len(packer) == 9
    assert packer.pad_count == 7
    assert packer.bits == bitarray('101100001')
    assert packer.getvalue() == b'\xb0\x80'


def test_empty_packer():
    packer = BitPacker()
    assert packer.getvalue() == b""
    assert packer.pad_count == 0


@pytest.mark.parametrize("bits,pad,size", [(0, 0, 0), (1, 7, 1), (8, 0, 1), (9, 7, 2), (16, 0, 2)])
def test_padding_arithmetic(bits, pad, size):
    assert pad_count(bits) == pad
    assert packed_size(bits) == size


def test_read_bits_drops_padding():
    assert read_bits(b'\xb0\x80', 9) == bitarray('101100001')
    assert read_bits(b"", 0) == bitarray()


def test_read_bits_short_payload():
    with pytest.raises(TruncatedPayload):
        read_bits(b'\xff', 9)


def test_read_bits_extra_bytes():
    with pytest.raises(MalformedPayload):
        read_bits(b'\xff\x00', 8)


def test_read_bits_nonzero_padding():
    with pytest.raises(MalformedPayload):
        read_bits(b'\xa1', 3)


def test_read_bits_negative_count():
    with pytest.raises(ValueError):
        read_bits(b"", -1)


def test_packer_encodes_with_code_table():
    codes = {97: bitarray('0'), 98: bitarray('11'), 99: bitarray('10')}
    packer = BitPacker()
    packer.encode(codes, b"aaabbc")
    assert packer.bits == bitarray('000111110')
    assert packer.getvalue() == b'\x1f\x00'
