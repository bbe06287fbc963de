"""
Stream interface shared by compressors, with path and in-memory shortcuts.
"""
from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    A compressor turns a raw byte stream into a self-contained container
    and back. Subclasses get keyword arguments from the helpers below,
    e.g. HuffProcessor.compress_file(src, dst, debug=1).
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Write the container for everything in input_stream.
        input_stream must be readable from the start; the returned string
        holds the run's log lines.
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Restore the original bytes of the container in input_stream.
        Raises a ValueError subclass when the container is not valid.
        """

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, **kwargs) -> str:
        with open(input_file, 'rb') as src, open(output_file, 'wb') as dst:
            return cls(**kwargs).compress(src, dst)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, **kwargs) -> str:
        with open(input_file, 'rb') as src, open(output_file, 'wb') as dst:
            return cls(**kwargs).decompress(src, dst)

    @classmethod
    def compress_bytes(cls, data: bytes, **kwargs) -> Tuple[bytes, str]:
        """Return (container bytes, log) for an in-memory input."""
        return cls._run_in_memory('compress', data, kwargs)

    @classmethod
    def decompress_bytes(cls, data: bytes, **kwargs) -> Tuple[bytes, str]:
        """Return (original bytes, log) for an in-memory container."""
        return cls._run_in_memory('decompress', data, kwargs)

    @classmethod
    def _run_in_memory(cls, method: str, data: bytes, kwargs: dict) -> Tuple[bytes, str]:
        sink = io.BytesIO()
        log = getattr(cls(**kwargs), method)(io.BytesIO(data), sink)
        return sink.getvalue(), log
