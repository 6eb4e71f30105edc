from dataclasses import dataclass
from typing import BinaryIO, Dict, List, Union

from bitarray import bitarray, frozenbitarray

from huffproc.encoding_schemes.alphabet import (
    BITS_PER_INT,
    HEADER_FORMAT_NAMES,
    MAGIC_NUMBER,
    PSEUDO_EOF,
    resolve_header_format,
)
from huffproc.encoding_schemes.codes import build_code_table
from huffproc.encoding_schemes.frequency import count_frequencies
from huffproc.encoding_schemes.header import encode_header
from huffproc.encoding_schemes.tree import build_tree
from huffproc.pipeline.config import DEFAULT_CHUNK_SIZE, Viewer, dbg, show
from huffproc.utils.bitio import BitOutputStream, iter_symbols
from huffproc.utils.bits_bytes_utils import bits_to_bitstring, padded_bit_length


@dataclass
class CompressionPlan:
    """
    Everything `compress` needs, derived from one preprocessing pass.

    - header_format: wire value of the header format
    - frequencies: the 256 symbol counts of the input
    - codes: symbol -> code bits, including PSEUDO_EOF
    - header: serialized header payload (without magic and format selector)
    - original_bits: size of the input in bits
    - compressed_bits: projected output size in bits, padding included
    """
    header_format: int
    frequencies: List[int]
    codes: Dict[int, frozenbitarray]
    header: bitarray
    original_bits: int
    compressed_bits: int

    @property
    def saved_bits(self) -> int:
        return self.original_bits - self.compressed_bits

    @property
    def worthwhile(self) -> bool:
        return self.compressed_bits <= self.original_bits


def _projected_bits(frequencies: List[int], codes: Dict[int, frozenbitarray], header: bitarray) -> int:
    data_bits = sum(count * len(codes[symbol]) for symbol, count in enumerate(frequencies) if count)
    total = 2 * BITS_PER_INT + len(header) + data_bits + len(codes[PSEUDO_EOF])
    return padded_bit_length(total)


def preprocess(
    stream: BinaryIO,
    header_format: Union[str, int] = "counts",
    viewer: Viewer = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> CompressionPlan:
    """
    First pass: count symbols, build the tree, code table and header.

    The returned plan's `saved_bits` is the projected saving (negative when
    the output would be larger than the input).
    """
    header_format = resolve_header_format(header_format)
    table = count_frequencies(stream, chunk_size=chunk_size)
    tree = build_tree(table.counts)
    codes = build_code_table(tree)
    header = encode_header(header_format, table.counts, tree)

    plan = CompressionPlan(
        header_format=header_format,
        frequencies=table.counts,
        codes=codes,
        header=header,
        original_bits=table.original_bits,
        compressed_bits=_projected_bits(table.counts, codes, header),
    )
    dbg(
        f"preprocess format={HEADER_FORMAT_NAMES[header_format]} symbols={table.symbol_count} "
        f"distinct={len(codes) - 1} header_bits={len(header)} "
        f"eof_code={bits_to_bitstring(codes[PSEUDO_EOF])}"
    )
    show(
        viewer,
        f"Original: {plan.original_bits} bits, compressed: {plan.compressed_bits} bits, "
        f"saved: {plan.saved_bits} bits",
    )
    return plan


def compress(
    plan: CompressionPlan,
    in_stream: BinaryIO,
    out_stream: BinaryIO,
    force: bool = False,
    viewer: Viewer = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Second pass: write magic, format selector, header, codes, pseudo-EOF and padding.

    Returns the number of bits written, or 0 (nothing written) when the
    output would be larger than the input and `force` is false.
    """
    if not plan.worthwhile and not force:
        show(
            viewer,
            f"Compressed file has {plan.compressed_bits - plan.original_bits} more bits "
            "than the uncompressed file. Select force compression to compress anyway.",
        )
        return 0

    writer = BitOutputStream(out_stream, chunk_size=chunk_size)
    writer.write_bits(BITS_PER_INT, MAGIC_NUMBER)
    writer.write_bits(BITS_PER_INT, plan.header_format)
    writer.write(plan.header)

    codes = plan.codes
    for symbol in iter_symbols(in_stream, chunk_size=chunk_size):
        code = codes.get(symbol)
        if code is None:
            raise ValueError(f"Symbol {symbol} was not seen during preprocessing.")
        writer.write(code)
    writer.write(codes[PSEUDO_EOF])
    writer.flush()

    dbg(f"compress wrote {writer.bits_written} bits (projected {plan.compressed_bits})")
    show(viewer, f"Compressed to {writer.bits_written} bits.")
    return writer.bits_written
