"""Utility helpers shared across codec components."""

from huffproc.utils.file_utils import add_suffix_to_top_level, mirrored_path, suffix_filename
from huffproc.utils.bits_bytes_utils import bits_to_bitstring, bits_to_int, int_to_bits, padded_bit_length

__all__ = [
    "add_suffix_to_top_level",
    "mirrored_path",
    "suffix_filename",
    "bits_to_bitstring",
    "bits_to_int",
    "int_to_bits",
    "padded_bit_length",
]
