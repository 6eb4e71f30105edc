"""
Alphabet and wire-format constants shared by the encoder and decoder.
"""

from typing import Dict, Union

ALPH_SIZE = 256
BITS_PER_WORD = 8
BITS_PER_INT = 32

# Sentinel symbol outside the byte range, always weighted 1.
PSEUDO_EOF = ALPH_SIZE
LEAF_VALUE_BITS = BITS_PER_WORD + 1

MAGIC_NUMBER = 0xFACE8200
STORE_COUNTS = 0x73746300  # "stc\0"
STORE_TREE = 0x73747400  # "stt\0"

# Largest possible preorder tree: 257 leaves (flag + value) and 256 internal flags.
MAX_TREE_HEADER_BITS = (ALPH_SIZE + 1) * (1 + LEAF_VALUE_BITS) + ALPH_SIZE

HEADER_FORMATS: Dict[str, int] = {
    "counts": STORE_COUNTS,
    "tree": STORE_TREE,
}

HEADER_FORMAT_NAMES: Dict[int, str] = {value: name for name, value in HEADER_FORMATS.items()}


def resolve_header_format(header_format: Union[str, int]) -> int:
    """
    Map a header format name ("counts", "tree") or wire value to the wire value.
    """
    if isinstance(header_format, str):
        key = header_format.lower()
        if key not in HEADER_FORMATS:
            raise ValueError(f"Unsupported header format: {header_format}")
        return HEADER_FORMATS[key]
    if header_format not in HEADER_FORMAT_NAMES:
        raise ValueError(f"Unsupported header format: {header_format:#010x}")
    return header_format
