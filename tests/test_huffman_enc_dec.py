import io
import random
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from huffproc.pipeline.compressor import compress, preprocess
from huffproc.pipeline.config import CodecConfig
from huffproc.pipeline.decompressor import decompress
from huffproc.pipeline.runner import compress_bytes, decompress_bytes


def _roundtrip(data: bytes, header_format: str) -> bytes:
    cfg = CodecConfig(header_format=header_format, force=True)
    return decompress_bytes(compress_bytes(data, cfg))


@pytest.mark.parametrize("header_format", ["counts", "tree"])
def test_roundtrip_random_10kb(header_format):
    rng = random.Random(2024)
    data = bytes(rng.getrandbits(8) for _ in range(10 * 1024))
    assert _roundtrip(data, header_format) == data


@pytest.mark.parametrize("header_format", ["counts", "tree"])
def test_roundtrip_all_bytes_once(header_format):
    data = bytes(range(256))
    assert _roundtrip(data, header_format) == data


@pytest.mark.parametrize("header_format", ["counts", "tree"])
def test_roundtrip_empty_input(header_format):
    assert _roundtrip(b"", header_format) == b""


@pytest.mark.parametrize("header_format", ["counts", "tree"])
def test_roundtrip_single_byte_repeated(header_format):
    data = b"A" * (1024 * 10)
    assert _roundtrip(data, header_format) == data


def test_roundtrip_small_inputs():
    rng = random.Random(7)
    for n in (1, 2, 3):
        data = bytes(rng.getrandbits(8) for _ in range(n))
        assert _roundtrip(data, "counts") == data
        assert _roundtrip(data, "tree") == data


def test_roundtrip_text_compresses():
    data = b"the quick brown fox jumps over the lazy dog. " * 200
    blob = compress_bytes(data, CodecConfig(header_format="tree"))
    assert 0 < len(blob) < len(data)
    assert decompress_bytes(blob) == data


def test_aaab_counts_format_code_lengths_and_roundtrip():
    data = b"aaab"
    plan = preprocess(io.BytesIO(data), header_format="counts")

    assert len(plan.codes[ord("a")]) == 1
    assert len(plan.codes[ord("b")]) == 2

    out = io.BytesIO()
    compress(plan, io.BytesIO(data), out, force=True)
    restored = io.BytesIO()
    bits = decompress(io.BytesIO(out.getvalue()), restored)

    assert restored.getvalue() == b"aaab"
    assert bits == 4 * 8


def test_aaab_tree_format_exact_bytes():
    blob = compress_bytes(b"aaab", CodecConfig(header_format="tree", force=True))

    expected = (
        b"\xfa\xce\x82\x00"  # magic
        + b"stt\x00"  # tree header format
        + b"\x00\x00\x00\x20"  # 32 tree bits follow
        + b"\x26\x2c\x02\x61"  # 0 0 1 'b' 1 EOF 1 'a'
        + b"\xe2"  # a a a b EOF + 1 pad bit
    )
    assert blob == expected


def test_chunk_size_does_not_change_output():
    data = bytes(range(200)) * 7
    small = compress_bytes(data, CodecConfig(header_format="tree", force=True, chunk_size=3))
    large = compress_bytes(data, CodecConfig(header_format="tree", force=True))
    assert small == large
    assert decompress_bytes(small, CodecConfig(chunk_size=5)) == data


if __name__ == "__main__":
    print("Running round-trip tests directly...")
    test_roundtrip_all_bytes_once("counts")
    test_aaab_tree_format_exact_bytes()
    print("Round-trip tests completed.")
