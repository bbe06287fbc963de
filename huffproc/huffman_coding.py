"""
Huffman coding algorithm -
frequency counting, tree construction, code generation
and the preorder tree header
"""
import heapq
from typing import List, Optional

from huffproc.huff_exception import HuffException, TruncatedHeaderError
from huffproc.huff_utils.bit_reader import END, BitReader
from huffproc.huff_utils.bit_writer import BitWriter

BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE

# width of a leaf value in the header, wide enough for PSEUDO_EOF
HEADER_VALUE_BITS = BITS_PER_WORD + 1


class Node:
    """
    Class object for Node in Huffman's Tree.
    A node is a leaf iff it has no children; internal nodes hold value 0.
    """

    def __init__(self, value: int, weight: int, left=None, right=None):
        """
        Function initializes the structure of a node.

        :param value: symbol held by a leaf, 0 for internal nodes
        :param weight: int, aggregate frequency of the subtree
        :param left: left child, None for leaves
        :param right: right child, None for leaves
        """
        self.value = value
        self.weight = weight
        self.left = left
        self.right = right

    @classmethod
    def leaf(cls, value: int, weight: int = 0) -> "Node":
        return cls(value, weight)

    @classmethod
    def internal(cls, left: "Node", right: "Node") -> "Node":
        return cls(0, left.weight + right.weight, left, right)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __eq__(self, other):
        """Structural equality, weights are ignored."""
        if not isinstance(other, Node):
            return NotImplemented
        if self.is_leaf() or other.is_leaf():
            return self.is_leaf() and other.is_leaf() and self.value == other.value
        return self.left == other.left and self.right == other.right

    __hash__ = None

    def __repr__(self):
        if self.is_leaf():
            return f"Node.leaf({self.value}, {self.weight})"
        return f"Node.internal({self.left!r}, {self.right!r})"


def count_frequencies(reader: BitReader) -> List[int]:
    """
    Function builds the frequency table of every 8-bit word in the stream.
    The stream is read to its end, PSEUDO_EOF is always counted once.

    :param reader: BitReader positioned at the start of the data
    :return: list of ALPH_SIZE + 1 counts indexed by symbol
    """
    counts = [0] * (ALPH_SIZE + 1)
    while True:
        word = reader.read_bits(BITS_PER_WORD)
        if word == END:
            break
        counts[word] += 1
    counts[PSEUDO_EOF] = 1
    return counts


def build_tree(counts: List[int]) -> Node:
    """
    Function builds Huffman Tree from the frequency table.

    Nodes sit in a heap keyed by (weight, sequence), the sequence number
    is the insertion order, so equal weights always leave the heap
    first-inserted first and the tree is the same on every run.

    :param counts: list of counts indexed by symbol, zeros are skipped
    :return: Node, root of the tree
    """
    heap = []
    sequence = 0

    symbols = [sym for sym, count in enumerate(counts) if count]
    if not symbols:
        raise ValueError("Cannot build a tree without symbols")
    if len(symbols) == 1:
        # a lone leaf gets a zero-weight sibling so every code has a bit
        filler = next(sym for sym, count in enumerate(counts) if not count)
        heap.append((0, sequence, Node.leaf(filler)))
        sequence += 1

    for sym in symbols:
        heap.append((counts[sym], sequence, Node.leaf(sym, counts[sym])))
        sequence += 1
    heapq.heapify(heap)

    while len(heap) > 1:
        # smallest node goes left, the next one right
        _, _, left = heapq.heappop(heap)
        _, _, right = heapq.heappop(heap)
        merged = Node.internal(left, right)
        heapq.heappush(heap, (merged.weight, sequence, merged))
        sequence += 1

    return heap[0][2]


def make_codes(root: Node) -> List[Optional[str]]:
    """
    Function generates the code of every leaf, preorder traversal
    of the tree: "0" for a left edge, "1" for a right edge.

    :param root: Node, root of the tree
    :return: list of ALPH_SIZE + 1 codes, None for symbols not in the tree
    """
    codes: List[Optional[str]] = [None] * (ALPH_SIZE + 1)
    if root.is_leaf():
        codes[root.value] = "0"
        return codes
    _codes_generation(root, "", codes)
    return codes


def _codes_generation(node: Node, curr_code: str, codes: List[Optional[str]]):
    if node.is_leaf():
        codes[node.value] = curr_code
        return
    _codes_generation(node.left, curr_code + "0", codes)
    _codes_generation(node.right, curr_code + "1", codes)


def write_header(root: Node, writer: BitWriter) -> None:
    """
    Function writes the tree in preorder: 0 followed by both subtrees
    for an internal node, 1 followed by the 9-bit value for a leaf.
    """
    if root.is_leaf():
        writer.write_bits(1, 1)
        writer.write_bits(HEADER_VALUE_BITS, root.value)
    else:
        writer.write_bits(1, 0)
        write_header(root.left, writer)
        write_header(root.right, writer)


def read_header(reader: BitReader, depth: int = 0) -> Node:
    """
    Function rebuilds the tree written by write_header.

    :param reader: BitReader positioned at the first header bit
    :return: Node, root of the tree
    :raises TruncatedHeaderError: if the stream ends inside the header
    :raises HuffException: if the header cannot describe a valid tree
    """
    if depth > ALPH_SIZE:
        raise HuffException("Tree header is deeper than the alphabet allows")
    bit = reader.read_bit()
    if bit == END:
        raise TruncatedHeaderError("Stream ended inside the tree header")
    if bit == 0:
        left = read_header(reader, depth + 1)
        right = read_header(reader, depth + 1)
        return Node.internal(left, right)

    value = reader.read_bits(HEADER_VALUE_BITS)
    if value == END:
        raise TruncatedHeaderError("Stream ended inside a leaf value")
    if value > PSEUDO_EOF:
        raise HuffException(f"Invalid leaf value {value} in tree header")
    return Node.leaf(value)
