import io
from pathlib import Path

from huffproc.pipeline.compressor import compress, preprocess
from huffproc.pipeline.config import CodecConfig
from huffproc.pipeline.decompressor import decompress


def compress_bytes(data: bytes, cfg: CodecConfig | None = None) -> bytes:
    """
    Compress an in-memory buffer.
    Returns b"" when compression would not help and cfg.force is off.
    """
    if cfg is None:
        cfg = CodecConfig()
    plan = preprocess(io.BytesIO(data), header_format=cfg.header_format, chunk_size=cfg.chunk_size)
    out = io.BytesIO()
    compress(plan, io.BytesIO(data), out, force=cfg.force, chunk_size=cfg.chunk_size)
    return out.getvalue()


def decompress_bytes(blob: bytes, cfg: CodecConfig | None = None) -> bytes:
    if cfg is None:
        cfg = CodecConfig()
    out = io.BytesIO()
    decompress(io.BytesIO(blob), out, chunk_size=cfg.chunk_size)
    return out.getvalue()


def compress_file(in_path: Path, out_path: Path, cfg: CodecConfig | None = None) -> int:
    """
    Compress `in_path` into `out_path`, reading the input twice.

    Returns bits written; 0 means compression was skipped and `out_path`
    was not created.
    """
    if cfg is None:
        cfg = CodecConfig()
    with open(in_path, "rb") as src:
        plan = preprocess(src, header_format=cfg.header_format, chunk_size=cfg.chunk_size)
    if not plan.worthwhile and not cfg.force:
        return 0
    with open(in_path, "rb") as src, open(out_path, "wb") as dst:
        return compress(plan, src, dst, force=cfg.force, chunk_size=cfg.chunk_size)


def decompress_file(in_path: Path, out_path: Path, cfg: CodecConfig | None = None) -> int:
    """
    Decompress `in_path` into `out_path`. `out_path` is only created once the
    input decodes completely.
    """
    if cfg is None:
        cfg = CodecConfig()
    out = io.BytesIO()
    with open(in_path, "rb") as src:
        bits = decompress(src, out, chunk_size=cfg.chunk_size)
    Path(out_path).write_bytes(out.getvalue())
    return bits
