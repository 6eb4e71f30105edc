from collections import Counter
from dataclasses import dataclass
from typing import BinaryIO, List

from huffproc.encoding_schemes.alphabet import ALPH_SIZE, BITS_PER_WORD
from huffproc.pipeline.config import DEFAULT_CHUNK_SIZE
from huffproc.utils.bitio import iter_symbols


@dataclass
class FrequencyTable:
    """
    Occurrence counts for every byte value of one input.

    - counts: 256 non-negative counts indexed by symbol value
    - symbol_count: number of symbols read
    """
    counts: List[int]
    symbol_count: int

    @property
    def original_bits(self) -> int:
        return self.symbol_count * BITS_PER_WORD


def count_frequencies(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> FrequencyTable:
    """
    Scan `stream` once and tally how often each byte value occurs.

    """
    tally = Counter(iter_symbols(stream, chunk_size=chunk_size))
    counts = [tally.get(symbol, 0) for symbol in range(ALPH_SIZE)]
    return FrequencyTable(counts=counts, symbol_count=sum(counts))
