from typing import BinaryIO

from bitarray import bitarray
from bitarray.util import ba2int

# returned by read_bits when the stream cannot supply the requested bits
END = -1

MAX_READ_BITS = 32


class BitReader:
    """
    A class for reading bits from a binary stream, most significant bit first.
    The whole stream is loaded into a bitarray so the reader can be rewound
    for a second pass over the same data.
    """

    def __init__(self, stream: BinaryIO) -> None:
        """
        Initialize BitReader by reading the entire stream into a bitarray.

        Args:
            stream: Binary stream opened for reading
        """
        self.bits = bitarray(endian="big")
        self.bits.frombytes(stream.read())
        self.pos = 0
        self.bits_read = 0

    def read_bit(self) -> int:
        """
        Read one bit from the stream.

        Returns:
            The bit value (0 or 1), or END if the stream is exhausted
        """
        if self.pos >= len(self.bits):
            return END
        val = self.bits[self.pos]
        self.pos += 1
        self.bits_read += 1
        return val

    def read_bits(self, n: int) -> int:
        """
        Read n bits in MSB-first order and return them as an unsigned integer.

        Args:
            n: Number of bits to read, 1 to 32

        Returns:
            The value as an integer, or END if fewer than n bits remain

        Raises:
            ValueError: If n is out of range
        """
        if not 1 <= n <= MAX_READ_BITS:
            raise ValueError(f"Cannot read {n} bits at once")
        if self.pos + n > len(self.bits):
            return END
        val = ba2int(self.bits[self.pos:self.pos + n])
        self.pos += n
        self.bits_read += n
        return val

    def reset(self) -> None:
        """Move the position back to the start of the stream."""
        self.pos = 0
        self.bits_read = 0
