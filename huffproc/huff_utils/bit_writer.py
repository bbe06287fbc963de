from typing import BinaryIO

from bitarray import bitarray
from bitarray.util import int2ba

MAX_WRITE_BITS = 32


class BitWriter:
    """
    A class for writing bits to a binary stream, most significant bit first.
    Bits are collected in a bitarray and written out, padded with zeros to
    the byte boundary, when the writer is closed.
    """

    def __init__(self, stream: BinaryIO) -> None:
        """
        Initialize a new BitWriter on top of a binary stream.

        Args:
            stream: Binary stream opened for writing
        """
        self.stream = stream
        self.bits = bitarray(endian="big")
        self.bits_written = 0
        self.closed = False

    def write_bits(self, length: int, value: int) -> None:
        """
        Write the low `length` bits of value in MSB-first order.

        Args:
            length: Number of bits to write, 0 to 32
            value: Integer value to write

        Raises:
            ValueError: If length is out of range or the writer is closed
        """
        if self.closed:
            raise ValueError("Write to a closed BitWriter")
        if not 0 <= length <= MAX_WRITE_BITS:
            raise ValueError(f"Cannot write {length} bits at once")
        if length == 0:
            return
        value &= (1 << length) - 1
        self.bits.extend(int2ba(value, length=length, endian="big"))
        self.bits_written += length

    def close(self) -> None:
        """Pad the last partial byte with zeros and write everything out."""
        if self.closed:
            return
        self.closed = True
        self.bits.fill()
        self.stream.write(self.bits.tobytes())
        self.bits = bitarray(endian="big")
