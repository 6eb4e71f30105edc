from typing import BinaryIO, Optional, Union

from huffproc.pipeline.compressor import CompressionPlan, compress, preprocess
from huffproc.pipeline.config import DEFAULT_CHUNK_SIZE, Viewer
from huffproc.pipeline.decompressor import decompress


class HuffmanProcessor:
    """
    Stateful front for interactive callers.

    Keeps the plan from the latest `preprocess_compress` call until the next
    one replaces it, so a caller can show the projected saving before
    deciding to `compress`.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._chunk_size = chunk_size
        self._plan: Optional[CompressionPlan] = None
        self._viewer: Viewer = None

    @property
    def plan(self) -> Optional[CompressionPlan]:
        return self._plan

    def set_viewer(self, viewer: Viewer) -> None:
        self._viewer = viewer

    def preprocess_compress(self, stream: BinaryIO, header_format: Union[str, int] = "counts") -> int:
        self._plan = None
        self._plan = preprocess(
            stream,
            header_format=header_format,
            viewer=self._viewer,
            chunk_size=self._chunk_size,
        )
        return self._plan.saved_bits

    def compress(self, in_stream: BinaryIO, out_stream: BinaryIO, force: bool = False) -> int:
        if self._plan is None:
            raise RuntimeError("preprocess_compress must be called before compress.")
        return compress(
            self._plan,
            in_stream,
            out_stream,
            force=force,
            viewer=self._viewer,
            chunk_size=self._chunk_size,
        )

    def uncompress(self, in_stream: BinaryIO, out_stream: BinaryIO) -> int:
        return decompress(in_stream, out_stream, viewer=self._viewer, chunk_size=self._chunk_size)
