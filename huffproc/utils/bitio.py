"""
Bit-level stream wrappers backed by `bitarray`.

Readers return ``None`` once the underlying stream cannot supply the requested
bits. Writers buffer partial bytes until `flush()` pads them with zero bits.
"""

from typing import BinaryIO, Iterator, Optional

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

from huffproc.errors import StreamReadFailure
from huffproc.pipeline.config import DEFAULT_CHUNK_SIZE


def _read_chunk(stream: BinaryIO, size: int) -> bytes:
    try:
        return stream.read(size)
    except OSError as exc:
        raise StreamReadFailure(f"Failed reading input stream: {exc}") from exc


def iter_symbols(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[int]:
    """Yield one 8-bit symbol at a time until the stream is exhausted."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    while True:
        chunk = _read_chunk(stream, chunk_size)
        if not chunk:
            return
        yield from chunk


class BitInputStream:
    def __init__(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer = bitarray(endian="big")
        self._pos = 0
        self.bits_read = 0

    def _fill(self, needed: int) -> bool:
        while len(self._buffer) - self._pos < needed:
            chunk = _read_chunk(self._stream, self._chunk_size)
            if not chunk:
                return False
            if self._pos:
                del self._buffer[:self._pos]
                self._pos = 0
            self._buffer.frombytes(chunk)
        return True

    def read_bit(self) -> Optional[int]:
        if self._pos >= len(self._buffer) and not self._fill(1):
            return None
        bit = self._buffer[self._pos]
        self._pos += 1
        self.bits_read += 1
        return bit

    def read_bits(self, count: int) -> Optional[int]:
        """Read `count` bits as an unsigned big-endian integer."""
        if count <= 0:
            raise ValueError("count must be positive")
        if not self._fill(count):
            return None
        value = ba2int(self._buffer[self._pos:self._pos + count])
        self._pos += count
        self.bits_read += count
        return value


class BitOutputStream:
    def __init__(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._stream = stream
        self._flush_threshold = chunk_size * 8
        self._buffer = bitarray(endian="big")
        self.bits_written = 0

    def write_bits(self, count: int, value: int) -> None:
        """Append the low `count` bits of `value`, most significant first."""
        self.write(int2ba(value, length=count, endian="big"))

    def write(self, bits: bitarray) -> None:
        self._buffer.extend(bits)
        self.bits_written += len(bits)
        if len(self._buffer) >= self._flush_threshold:
            self._drain()

    def _drain(self) -> None:
        whole = len(self._buffer) // 8 * 8
        if whole:
            self._stream.write(self._buffer[:whole].tobytes())
            del self._buffer[:whole]

    def flush(self) -> int:
        """Pad to a byte boundary with zero bits and push everything out. Returns pad bits."""
        pad = self._buffer.fill()
        self.bits_written += pad
        self._drain()
        self._stream.flush()
        return pad
