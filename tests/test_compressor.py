import io
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from huffproc.encoding_schemes.alphabet import STORE_TREE
from huffproc.pipeline.compressor import compress, preprocess
from huffproc.pipeline.processor import HuffmanProcessor

TEXT = b"savings accounting should match the written stream exactly. " * 50


@pytest.mark.parametrize("header_format", ["counts", "tree"])
def test_projected_size_matches_bits_written(header_format):
    plan = preprocess(io.BytesIO(TEXT), header_format=header_format)
    out = io.BytesIO()
    bits = compress(plan, io.BytesIO(TEXT), out, force=True)

    assert bits == plan.compressed_bits
    assert len(out.getvalue()) * 8 == bits
    assert plan.saved_bits == len(TEXT) * 8 - bits


def test_savings_for_aaab_tree_format():
    plan = preprocess(io.BytesIO(b"aaab"), header_format="tree")

    # 64 bits magic+format, 32 + 32 tree header, 5 data bits, 2 EOF bits, 1 pad bit
    assert plan.header_format == STORE_TREE
    assert plan.original_bits == 32
    assert plan.compressed_bits == 136
    assert plan.saved_bits == -104


def test_savings_for_aaab_counts_format():
    plan = preprocess(io.BytesIO(b"aaab"), header_format="counts")
    assert plan.compressed_bits == 8264
    assert plan.saved_bits == 32 - 8264


def test_force_policy_skips_growing_output():
    data = b"xyz"
    plan = preprocess(io.BytesIO(data), header_format="counts")
    assert not plan.worthwhile

    out = io.BytesIO()
    assert compress(plan, io.BytesIO(data), out, force=False) == 0
    assert out.getvalue() == b""

    forced = io.BytesIO()
    bits = compress(plan, io.BytesIO(data), forced, force=True)
    assert bits == plan.compressed_bits
    assert len(forced.getvalue()) * 8 == bits
    assert bits > len(data) * 8


def test_compress_rejects_symbols_missing_from_plan():
    plan = preprocess(io.BytesIO(b"aaaa"), header_format="tree")
    with pytest.raises(ValueError):
        compress(plan, io.BytesIO(b"aaaz"), io.BytesIO(), force=True)


def test_viewer_receives_status_messages():
    messages = []
    plan = preprocess(io.BytesIO(b"abc"), header_format="counts", viewer=messages.append)
    compress(plan, io.BytesIO(b"abc"), io.BytesIO(), force=False, viewer=messages.append)

    assert any("saved" in m for m in messages)
    assert any("force" in m for m in messages)


def test_processor_requires_preprocess():
    processor = HuffmanProcessor()
    with pytest.raises(RuntimeError):
        processor.compress(io.BytesIO(TEXT), io.BytesIO())


def test_processor_replaces_plan_and_roundtrips():
    processor = HuffmanProcessor()
    saved_counts = processor.preprocess_compress(io.BytesIO(TEXT), "counts")
    saved_tree = processor.preprocess_compress(io.BytesIO(TEXT), "tree")

    assert processor.plan.header_format == STORE_TREE
    assert saved_tree > saved_counts

    compressed = io.BytesIO()
    bits = processor.compress(io.BytesIO(TEXT), compressed)
    restored = io.BytesIO()
    out_bits = processor.uncompress(io.BytesIO(compressed.getvalue()), restored)

    assert bits == len(TEXT) * 8 - saved_tree
    assert out_bits == len(TEXT) * 8
    assert restored.getvalue() == TEXT
