import os
import shutil
from pathlib import Path
from typing import Dict, List

from huffproc.pipeline.config import CodecConfig
from huffproc.pipeline.runner import compress_file, decompress_file
from huffproc.utils.file_utils import mirrored_path

COMPRESSED_DIR = "out_compressed"
DECODED_DIR = "out_decoded"


def compressed_path_for(in_path: Path, rel_root: Path, output_root: Path, cfg: CodecConfig) -> Path:
    return mirrored_path(output_root / COMPRESSED_DIR, rel_root, in_path.name, "_compressed", cfg.compressed_suffix)


def decoded_path_for(in_path: Path, rel_root: Path, output_root: Path) -> Path:
    return mirrored_path(output_root / DECODED_DIR, rel_root, in_path.name, "_decoded")


def run_batch_on_folder(
    input_root: Path,
    output_root: Path,
    cfg: CodecConfig | None = None,
) -> List[Dict[str, object]]:
    """
    Compress and decompress every file under `input_root`.

    Returns one row per file with the bit counts of the compression pass.
    """
    if cfg is None:
        cfg = CodecConfig()

    input_root = input_root.resolve()
    output_root = output_root.resolve()

    rows: List[Dict[str, object]] = []
    for root, _, files in os.walk(input_root):
        root_path = Path(root)
        rel_root = root_path.relative_to(input_root)

        for filename in sorted(files):
            in_path = root_path / filename
            print("Processing:", in_path)
            rows.append(process_file(in_path, rel_root, output_root, cfg))

    return rows


def process_file(in_path: Path, rel_root: Path, output_root: Path, cfg: CodecConfig) -> Dict[str, object]:
    compressed_path = compressed_path_for(in_path, rel_root, output_root, cfg)
    decoded_path = decoded_path_for(in_path, rel_root, output_root)
    compressed_path.parent.mkdir(parents=True, exist_ok=True)
    decoded_path.parent.mkdir(parents=True, exist_ok=True)

    original_bits = in_path.stat().st_size * 8
    bits_written = compress_file(in_path, compressed_path, cfg)

    if bits_written:
        decompress_file(compressed_path, decoded_path, cfg)
        status = "ok"
    else:
        # Skipped: keep the decoded tree complete for reporting.
        shutil.copyfile(in_path, decoded_path)
        status = "skipped"

    return {
        "input_path": str(in_path),
        "status": status,
        "original_bits": original_bits,
        "compressed_bits": bits_written,
        "saved_bits": original_bits - bits_written if bits_written else 0,
    }
