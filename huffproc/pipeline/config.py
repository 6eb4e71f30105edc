import os
import sys
from dataclasses import dataclass
from typing import Callable, Optional

# Read/write granularity for the stream wrappers, overridable via HUFF_CHUNK_SIZE.
DEFAULT_CHUNK_SIZE = int(os.environ.get("HUFF_CHUNK_SIZE", "65536"))

# Debug tracing controlled by environment variable HUFF_DEBUG
DEBUG = os.environ.get("HUFF_DEBUG", "").lower() in {"1", "true", "yes"}


def dbg(msg: str) -> None:
    if DEBUG:
        print(f"[huff] {msg}", file=sys.stderr)


# Optional sink for human-readable status messages.
Viewer = Optional[Callable[[str], None]]


def show(viewer: Viewer, message: str) -> None:
    if viewer is not None:
        viewer(message)


@dataclass
class CodecConfig:
    """
    Configuration for compress/decompress runs.
    """
    header_format: str = "counts"
    force: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE
    # Extension given to compressed files by the batch runner.
    compressed_suffix: str = ".huf"
