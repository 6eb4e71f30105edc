from huffproc.pipeline.config import CodecConfig


# Lazy imports so that `huffproc.pipeline.config` can be imported by the
# low-level stream helpers without pulling in the whole codec.
def compress_bytes(*args, **kwargs):
    from huffproc.pipeline.runner import compress_bytes as _compress_bytes

    return _compress_bytes(*args, **kwargs)


def decompress_bytes(*args, **kwargs):
    from huffproc.pipeline.runner import decompress_bytes as _decompress_bytes

    return _decompress_bytes(*args, **kwargs)


def run_batch_on_folder(*args, **kwargs):
    from huffproc.utils.batch import run_batch_on_folder as _run_batch_on_folder

    return _run_batch_on_folder(*args, **kwargs)


__all__ = [
    "CodecConfig",
    "compress_bytes",
    "decompress_bytes",
    "run_batch_on_folder",
]
