"""Errors raised while decompressing malformed Huffman containers"""


class HuffException(ValueError):
    """Base class for every error reported by the Huffman processor."""


class MalformedContainerError(HuffException):
    """The stream does not start with the expected magic number."""


class TruncatedHeaderError(HuffException):
    """The stream ended in the middle of the tree header."""


class TruncatedBodyError(HuffException):
    """The stream ended before the end-of-stream code was decoded."""
