import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from huffproc.pipeline import CodecConfig, run_batch_on_folder
from huffproc.reporting.report import generate_report
from huffproc.utils.file_utils import add_suffix_to_top_level, suffix_filename


def _make_inputs(root: Path) -> None:
    (root / "logs" / "2024").mkdir(parents=True)
    (root / "logs" / "2024" / "app.log").write_bytes(b"INFO request served\n" * 300)
    (root / "logs" / "tiny.bin").write_bytes(b"\x01\x02")


def test_batch_compresses_and_restores(tmp_path):
    input_root = tmp_path / "in"
    output_root = tmp_path / "out"
    _make_inputs(input_root)

    cfg = CodecConfig(header_format="tree")
    rows = run_batch_on_folder(input_root, output_root, cfg)
    by_name = {Path(row["input_path"]).name: row for row in rows}

    assert by_name["app.log"]["status"] == "ok"
    assert by_name["app.log"]["saved_bits"] > 0
    assert by_name["tiny.bin"]["status"] == "skipped"

    compressed = output_root / "out_compressed" / "logs_compressed" / "2024" / "app_compressed.log.huf"
    decoded = output_root / "out_decoded" / "logs_decoded" / "2024" / "app_decoded.log"
    assert compressed.exists()
    assert decoded.read_bytes() == (input_root / "logs" / "2024" / "app.log").read_bytes()
    assert not (output_root / "out_compressed" / "logs_compressed" / "tiny_compressed.bin.huf").exists()


def test_report_summarises_batch(tmp_path):
    input_root = tmp_path / "in"
    output_root = tmp_path / "out"
    _make_inputs(input_root)
    cfg = CodecConfig(header_format="tree")
    run_batch_on_folder(input_root, output_root, cfg)

    report_dir = tmp_path / "report"
    report = generate_report(input_root, output_root, report_dir, formats=("csv", "json"), cfg=cfg)

    summary = report["summary"]
    assert summary["total_files"] == 2
    assert summary["compressed_count"] == 1
    assert summary["skipped_count"] == 1
    assert summary["success_rate"] == 1.0
    assert summary["total_saved_bits"] > 0

    payload = json.loads((report_dir / "report.json").read_text(encoding="utf-8"))
    assert payload["meta"]["header_format"] == "tree"
    csv_lines = (report_dir / "report.csv").read_text(encoding="utf-8").splitlines()
    assert csv_lines[0].startswith("input_path,status")
    assert len(csv_lines) == 3


def test_path_helpers():
    assert add_suffix_to_top_level(Path("logs/2024/app.log"), "_x") == Path("logs_x/2024/app.log")
    assert add_suffix_to_top_level(Path(""), "_x") == Path()
    assert suffix_filename(Path("app.log"), "_c", ".huf") == Path("app_c.log.huf")
    assert suffix_filename(Path("README"), "_d") == Path("README_d")
