"""
Huffman compressor with a self-describing tree header.

Container layout, most significant bit first:
    HUFF_TREE magic (32 bits) | preorder tree header | body codes | zero padding
The body ends with the code of PSEUDO_EOF, so no length field is stored.
"""
from typing import BinaryIO, List, Optional

from huffproc.compressor_ABC import Compressor
from huffproc.huff_exception import MalformedContainerError, TruncatedBodyError
from huffproc.huff_utils.bit_reader import END, BitReader
from huffproc.huff_utils.bit_writer import BitWriter
from huffproc.huffman_coding import (
    BITS_PER_INT,
    BITS_PER_WORD,
    PSEUDO_EOF,
    Node,
    build_tree,
    count_frequencies,
    make_codes,
    read_header,
    write_header,
)

HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1

DEBUG_LOW = 1
DEBUG_HIGH = 4


class HuffProcessor(Compressor):
    """
    Compresses and decompresses streams with Huffman codes.
    The debug level controls what is printed while running:
    DEBUG_LOW prints a summary, DEBUG_HIGH also prints every code.
    """

    def __init__(self, debug: int = 0):
        self.debug = debug
        self.log: List[str] = []

    def _report(self, message: str, level: int = DEBUG_LOW):
        if level == DEBUG_LOW:
            self.log.append(message)
        if self.debug >= level:
            print(message)

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Compresses input_stream into output_stream.
        The input is read twice: once to count symbols, once to encode them.
        Returns log information.
        """
        self.log.clear()
        reader = BitReader(input_stream)
        writer = BitWriter(output_stream)
        try:
            counts = count_frequencies(reader)
            root = build_tree(counts)
            codes = make_codes(root)
            self._report(f"Counted {sum(1 for c in counts if c)} distinct symbols")
            for sym, code in enumerate(codes):
                if code is not None:
                    self._report(f"{sym:>3} count={counts[sym]} code={code}", DEBUG_HIGH)

            writer.write_bits(BITS_PER_INT, HUFF_TREE)
            write_header(root, writer)
            self._report(f"Tree header uses {writer.bits_written - BITS_PER_INT} bits")

            reader.reset()
            self._write_compressed_bits(codes, reader, writer)
        finally:
            writer.close()

        self._report(f"Read {reader.bits_read} bits, wrote {writer.bits_written} bits")
        self._report_sizes(len(reader.bits) // 8, (writer.bits_written + 7) // 8)
        return '\n'.join(self.log)

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Decompresses input_stream into output_stream.
        Output is identical bit-by-bit to the original file.
        Returns log information.

        Raises:
            MalformedContainerError: If the stream does not start with HUFF_TREE
            TruncatedHeaderError: If the stream ends inside the tree header
            TruncatedBodyError: If the stream ends before the PSEUDO_EOF code
        """
        self.log.clear()
        reader = BitReader(input_stream)
        writer = BitWriter(output_stream)
        try:
            magic = reader.read_bits(BITS_PER_INT)
            if magic != HUFF_TREE:
                raise MalformedContainerError(f"Illegal header starts with {magic}")
            root = read_header(reader)
            self._read_compressed_bits(root, reader, writer)
        finally:
            writer.close()

        self._report(f"Read {reader.bits_read} bits, wrote {writer.bits_written} bits")
        self._report_sizes(len(reader.bits) // 8, writer.bits_written // 8)
        return '\n'.join(self.log)

    @staticmethod
    def _write_compressed_bits(codes: List[Optional[str]], reader: BitReader,
                               writer: BitWriter):
        while True:
            word = reader.read_bits(BITS_PER_WORD)
            if word == END:
                break
            code = codes[word]
            writer.write_bits(len(code), int(code, 2))
        eof_code = codes[PSEUDO_EOF]
        writer.write_bits(len(eof_code), int(eof_code, 2))

    @staticmethod
    def _read_compressed_bits(root: Node, reader: BitReader, writer: BitWriter):
        node = root
        while True:
            bit = reader.read_bit()
            if bit == END:
                raise TruncatedBodyError("Bad input, no PSEUDO_EOF")
            # a lone leaf at the root is reached by every bit
            if not root.is_leaf():
                node = node.left if bit == 0 else node.right
            if node.is_leaf():
                if node.value == PSEUDO_EOF:
                    break
                writer.write_bits(BITS_PER_WORD, node.value)
                node = root

    def _report_sizes(self, size_in: int, size_out: int):
        diff = size_in - size_out
        if diff > 0:
            ratio = diff / size_in * 100
            self._report(f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)")
        else:
            self._report(f"Size increased by {-diff} bytes")
