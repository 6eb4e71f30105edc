from bitarray import bitarray
from bitarray.util import ba2int, int2ba


def int_to_bits(value: int, width: int) -> bitarray:
    """Fixed-width, most-significant-bit-first encoding of `value`."""
    if value < 0 or value >> width:
        raise ValueError(f"Value {value} does not fit in {width} bits")
    return int2ba(value, length=width, endian="big")


def bits_to_int(bits: bitarray) -> int:
    """Read a big-endian bit buffer back as a non-negative integer."""
    if not len(bits):
        raise ValueError("Cannot convert an empty bit buffer to int")
    return ba2int(bits, signed=False)


def padded_bit_length(bit_count: int) -> int:
    """Round a bit count up to the next whole byte."""
    return (bit_count + 7) // 8 * 8


def bits_to_bitstring(bits: bitarray) -> str:
    """Printable '0'/'1' form, for debug output only."""
    return bits.to01()
