from typing import BinaryIO

from huffproc.encoding_schemes.alphabet import (
    BITS_PER_INT,
    BITS_PER_WORD,
    HEADER_FORMAT_NAMES,
    MAGIC_NUMBER,
    PSEUDO_EOF,
)
from huffproc.encoding_schemes.header import decode_header
from huffproc.encoding_schemes.tree import HuffNode
from huffproc.errors import FormatMismatch, TruncatedStream
from huffproc.pipeline.config import DEFAULT_CHUNK_SIZE, Viewer, dbg, show
from huffproc.utils.bitio import BitInputStream


def _decode_symbols(root: HuffNode, reader: BitInputStream) -> bytearray:
    """
    Walk the tree one bit at a time until the pseudo-EOF leaf is reached.

    Bits after pseudo-EOF are padding and are left unread.
    """
    decoded = bytearray()
    node = root
    while True:
        bit = reader.read_bit()
        if bit is None:
            raise TruncatedStream(
                f"Input ended after {len(decoded)} symbols without an end-of-stream code."
            )
        node = node.right if bit else node.left
        if node.is_leaf:
            if node.value == PSEUDO_EOF:
                return decoded
            decoded.append(node.value)
            node = root


def decompress(
    in_stream: BinaryIO,
    out_stream: BinaryIO,
    viewer: Viewer = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Decode a compressed stream and write the recovered bytes to `out_stream`.

    Nothing is written unless the whole stream decodes. Returns bits written.
    """
    reader = BitInputStream(in_stream, chunk_size=chunk_size)

    magic = reader.read_bits(BITS_PER_INT)
    if magic != MAGIC_NUMBER:
        raise FormatMismatch("Error reading file. Doesn't start with the magic number.")

    header_format = reader.read_bits(BITS_PER_INT)
    if header_format not in HEADER_FORMAT_NAMES:
        raise FormatMismatch("Error reading file. Can't determine header format.")
    show(viewer, f"Header format: {HEADER_FORMAT_NAMES[header_format]}")

    root = decode_header(header_format, reader)
    dbg(f"decompress header consumed {reader.bits_read - 2 * BITS_PER_INT} bits")

    decoded = _decode_symbols(root, reader)
    out_stream.write(decoded)
    out_stream.flush()

    show(viewer, f"Decoded {len(decoded)} symbols.")
    return len(decoded) * BITS_PER_WORD
