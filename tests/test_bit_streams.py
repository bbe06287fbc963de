import io

import pytest

from huffproc.huff_utils.bit_reader import END, BitReader
from huffproc.huff_utils.bit_writer import BitWriter


def test_read_bits_msb_first():
    reader = BitReader(io.BytesIO(bytes([0b10110010, 0xFF])))
    assert reader.read_bits(1) == 1
    assert reader.read_bits(3) == 0b011
    assert reader.read_bits(4) == 0b0010
    assert reader.read_bits(8) == 0xFF
    assert reader.bits_read == 16


def test_read_bits_returns_end_when_short():
    reader = BitReader(io.BytesIO(b"\x01"))
    assert reader.read_bits(4) == 0
    assert reader.read_bits(8) == END
    # cursor does not move on a failed read
    assert reader.read_bits(4) == 1
    assert reader.read_bit() == END


def test_read_bits_empty_stream():
    reader = BitReader(io.BytesIO(b""))
    assert reader.read_bits(1) == END


def test_read_32_bits():
    reader = BitReader(io.BytesIO(b"\xfa\xce\x82\x01"))
    assert reader.read_bits(32) == 0xFACE8201


@pytest.mark.parametrize("n", [0, 33, -1])
def test_read_bits_rejects_bad_width(n):
    reader = BitReader(io.BytesIO(b"\x00" * 8))
    with pytest.raises(ValueError):
        reader.read_bits(n)


def test_reset_rewinds():
    reader = BitReader(io.BytesIO(b"AB"))
    assert reader.read_bits(8) == 65
    assert reader.read_bits(8) == 66
    assert reader.read_bits(8) == END
    reader.reset()
    assert reader.read_bits(8) == 65


def test_read_bit_walks_every_bit():
    reader = BitReader(io.BytesIO(bytes([0b10100000])))
    bits = [reader.read_bit() for _ in range(8)]
    assert bits == [1, 0, 1, 0, 0, 0, 0, 0]
    assert reader.bits_read == 8
    assert reader.read_bit() == END
    assert reader.bits_read == 8


def test_read_bit_mixes_with_read_bits():
    reader = BitReader(io.BytesIO(b"\x81\xff"))
    assert reader.read_bit() == 1
    assert reader.read_bits(7) == 1
    assert reader.read_bit() == 1
    assert reader.bits_read == 9


def test_reset_clears_bits_read():
    reader = BitReader(io.BytesIO(b"AB"))
    reader.read_bits(16)
    reader.reset()
    assert reader.bits_read == 0
    reader.read_bits(8)
    assert reader.bits_read == 8


def test_writer_pads_last_byte_on_close():
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_bits(3, 0b101)
    assert out.getvalue() == b""
    writer.close()
    assert out.getvalue() == bytes([0b10100000])
    assert writer.bits_written == 3


def test_writer_keeps_only_low_bits():
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_bits(4, 0xAB)
    writer.write_bits(4, 0x1F)
    writer.close()
    assert out.getvalue() == b"\xbf"


def test_writer_zero_length_and_full_width():
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_bits(0, 123)
    writer.write_bits(32, 0xFACE8201)
    writer.close()
    assert out.getvalue() == b"\xfa\xce\x82\x01"


def test_writer_close_is_idempotent():
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_bits(8, 7)
    writer.close()
    writer.close()
    assert out.getvalue() == b"\x07"
    with pytest.raises(ValueError):
        writer.write_bits(1, 1)


def test_writer_rejects_bad_width():
    writer = BitWriter(io.BytesIO())
    with pytest.raises(ValueError):
        writer.write_bits(33, 0)
    with pytest.raises(ValueError):
        writer.write_bits(-1, 0)


def test_writer_then_reader():
    out = io.BytesIO()
    writer = BitWriter(out)
    for value in (1, 0, 256, 511):
        writer.write_bits(9, value)
    writer.close()

    reader = BitReader(io.BytesIO(out.getvalue()))
    assert [reader.read_bits(9) for _ in range(4)] == [1, 0, 256, 511]
