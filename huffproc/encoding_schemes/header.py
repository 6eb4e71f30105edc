"""
Header codec: serializes the code tree so the decoder can rebuild it.

Two formats are registered:

- STORE_COUNTS: the 256 symbol counts as 32-bit integers; the decoder rebuilds
  the tree with the same construction (and tie-break) as the encoder.
- STORE_TREE: a 32-bit bit length followed by a preorder walk of the tree,
  `0` for an internal node and `1` + 9-bit symbol value for a leaf.
"""

from typing import Callable, Dict, List, Sequence, Tuple

from bitarray import bitarray

from huffproc.encoding_schemes.alphabet import (
    ALPH_SIZE,
    BITS_PER_INT,
    LEAF_VALUE_BITS,
    MAX_TREE_HEADER_BITS,
    PSEUDO_EOF,
    STORE_COUNTS,
    STORE_TREE,
)
from huffproc.encoding_schemes.tree import HuffNode, build_tree, iter_preorder
from huffproc.errors import HeaderCorruption
from huffproc.utils.bitio import BitInputStream
from huffproc.utils.bits_bytes_utils import bits_to_int, int_to_bits

EncodeFn = Callable[[Sequence[int], HuffNode], bitarray]
DecodeFn = Callable[[BitInputStream], HuffNode]


def encode_counts_header(frequencies: Sequence[int], tree: HuffNode) -> bitarray:
    header = bitarray(endian="big")
    for count in frequencies:
        header.extend(int_to_bits(count, BITS_PER_INT))
    return header


def decode_counts_header(reader: BitInputStream) -> HuffNode:
    counts: List[int] = []
    for symbol in range(ALPH_SIZE):
        count = reader.read_bits(BITS_PER_INT)
        if count is None:
            raise HeaderCorruption(f"Header data missing: count table ends at symbol {symbol}.")
        counts.append(count)
    return build_tree(counts)


def serialize_tree(tree: HuffNode) -> bitarray:
    """Preorder bit serialization of the tree, without the length prefix."""
    bits = bitarray(endian="big")
    for node in iter_preorder(tree):
        if node.is_leaf:
            bits.append(1)
            bits.extend(int_to_bits(node.value, LEAF_VALUE_BITS))
        else:
            bits.append(0)
    return bits


def encode_tree_header(frequencies: Sequence[int], tree: HuffNode) -> bitarray:
    shape = serialize_tree(tree)
    header = int_to_bits(len(shape), BITS_PER_INT)
    header.extend(shape)
    return header


def _read_leaf(bits: bitarray, cursor: int) -> Tuple[HuffNode, int]:
    end = cursor + LEAF_VALUE_BITS
    if end > len(bits):
        raise HeaderCorruption("Tree header ends inside a leaf value.")
    value = bits_to_int(bits[cursor:end])
    if value > PSEUDO_EOF:
        raise HeaderCorruption(f"Tree header holds out-of-range symbol {value}.")
    return HuffNode(value=value), end


def deserialize_tree(bits: bitarray) -> HuffNode:
    """
    Rebuild a tree from its preorder serialization.

    Parsing keeps an explicit cursor and a stack of internal nodes still
    waiting for children. The serialization must be consumed exactly.
    """
    root = None
    pending: List[HuffNode] = []
    cursor = 0
    seen_eof = False

    while True:
        if cursor >= len(bits):
            raise HeaderCorruption("Tree header ends before the tree is complete.")
        flag = bits[cursor]
        cursor += 1
        if flag:
            node, cursor = _read_leaf(bits, cursor)
            seen_eof = seen_eof or node.value == PSEUDO_EOF
        else:
            node = HuffNode()

        if pending:
            parent = pending[-1]
            if parent.left is None:
                parent.left = node
            else:
                parent.right = node
                pending.pop()
        else:
            root = node

        if not node.is_leaf:
            pending.append(node)
        if not pending:
            break

    if cursor != len(bits):
        raise HeaderCorruption(f"Tree header has {len(bits) - cursor} unused trailing bits.")
    if root.is_leaf:
        raise HeaderCorruption("Tree header describes a single leaf.")
    if not seen_eof:
        raise HeaderCorruption("Tree header has no end-of-stream leaf.")
    return root


def decode_tree_header(reader: BitInputStream) -> HuffNode:
    size = reader.read_bits(BITS_PER_INT)
    if size is None:
        raise HeaderCorruption("Can't determine size of tree header.")
    if size > MAX_TREE_HEADER_BITS:
        raise HeaderCorruption(f"Declared tree header size {size} exceeds {MAX_TREE_HEADER_BITS} bits.")

    bits = bitarray(endian="big")
    for _ in range(size):
        bit = reader.read_bit()
        if bit is None:
            raise HeaderCorruption("Header data missing: tree header is truncated.")
        bits.append(bit)
    return deserialize_tree(bits)


HEADER_CODECS: Dict[int, Tuple[EncodeFn, DecodeFn]] = {
    STORE_COUNTS: (encode_counts_header, decode_counts_header),
    STORE_TREE: (encode_tree_header, decode_tree_header),
}


def encode_header(header_format: int, frequencies: Sequence[int], tree: HuffNode) -> bitarray:
    if header_format not in HEADER_CODECS:
        raise ValueError(f"Unsupported header format: {header_format:#010x}")
    encode, _ = HEADER_CODECS[header_format]
    return encode(frequencies, tree)


def decode_header(header_format: int, reader: BitInputStream) -> HuffNode:
    if header_format not in HEADER_CODECS:
        raise ValueError(f"Unsupported header format: {header_format:#010x}")
    _, decode = HEADER_CODECS[header_format]
    return decode(reader)
