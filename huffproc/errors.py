"""
Error kinds raised by the Huffman codec.

All of them are fatal for the operation that raised them; nothing is retried.
"""


class HuffmanError(Exception):
    """Base class for codec failures."""


class StreamReadFailure(HuffmanError, OSError):
    """The underlying reader raised an I/O error."""


class FormatMismatch(HuffmanError, ValueError):
    """Magic number or header-format selector not recognized."""


class HeaderCorruption(HuffmanError, ValueError):
    """Header is truncated or describes an impossible tree."""


class TruncatedStream(HuffmanError, EOFError):
    """Compressed data ended before the pseudo-EOF code was read."""
