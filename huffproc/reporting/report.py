from __future__ import annotations

import argparse
import csv
import json
import statistics
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from huffproc.pipeline.config import CodecConfig
from huffproc.utils.batch import compressed_path_for, decoded_path_for

REPORT_COLUMNS = [
    "input_path",
    "status",
    "original_size_bytes",
    "compressed_size_bytes",
    "decoded_size_bytes",
    "saved_bits",
    "compression_ratio",
    "success",
]


def _iter_files(root: Path) -> Iterable[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


def _format_csv_value(value: object) -> object:
    if value is None:
        return ""
    return value


def _report_row(input_file: Path, input_root: Path, output_root: Path, cfg: CodecConfig) -> Dict[str, object]:
    rel_path = input_file.relative_to(input_root)
    rel_root = rel_path.parent
    compressed_path = compressed_path_for(input_file, rel_root, output_root, cfg)
    decoded_path = decoded_path_for(input_file, rel_root, output_root)

    original_bytes = input_file.read_bytes()
    original_size = len(original_bytes)
    row: Dict[str, object] = {
        "input_path": str(rel_path),
        "status": "ok",
        "original_size_bytes": original_size,
        "compressed_size_bytes": None,
        "decoded_size_bytes": None,
        "saved_bits": None,
        "compression_ratio": None,
        "success": False,
    }

    if compressed_path.exists():
        compressed_size = compressed_path.stat().st_size
        row["compressed_size_bytes"] = compressed_size
        row["saved_bits"] = (original_size - compressed_size) * 8
        if original_size:
            row["compression_ratio"] = compressed_size / original_size
    else:
        row["status"] = "skipped"

    if decoded_path.exists():
        decoded_bytes = decoded_path.read_bytes()
        row["decoded_size_bytes"] = len(decoded_bytes)
        row["success"] = decoded_bytes == original_bytes
    else:
        row["status"] = "missing_decoded"

    return row


def generate_report(
    input_root: Path,
    output_root: Path,
    report_dir: Path,
    formats: Sequence[str] = ("csv", "json"),
    cfg: Optional[CodecConfig] = None,
) -> Dict[str, object]:
    if cfg is None:
        cfg = CodecConfig()
    input_root = input_root.resolve()
    output_root = output_root.resolve()
    report_dir = report_dir.resolve()

    rows: List[Dict[str, object]] = [
        _report_row(input_file, input_root, output_root, cfg) for input_file in _iter_files(input_root)
    ]

    compressed_rows = [row for row in rows if row["compressed_size_bytes"] is not None]
    ratios = [row["compression_ratio"] for row in compressed_rows if row["compression_ratio"] is not None]
    success_count = sum(1 for row in rows if row["success"])

    summary = {
        "total_files": len(rows),
        "compressed_count": len(compressed_rows),
        "skipped_count": sum(1 for row in rows if row["status"] == "skipped"),
        "success_count": success_count,
        "success_rate": (success_count / len(rows)) if rows else 0.0,
        "total_original_bytes": sum(row["original_size_bytes"] for row in rows),
        "total_compressed_bytes": sum(row["compressed_size_bytes"] for row in compressed_rows),
        "total_saved_bits": sum(row["saved_bits"] for row in compressed_rows),
        "avg_compression_ratio": statistics.mean(ratios) if ratios else 0.0,
        "median_compression_ratio": statistics.median(ratios) if ratios else 0.0,
    }

    meta = {
        "input_root": str(input_root),
        "output_root": str(output_root),
        "report_dir": str(report_dir),
        "header_format": cfg.header_format,
        "generated_at_utc": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }

    report_dir.mkdir(parents=True, exist_ok=True)
    formats = [fmt.lower() for fmt in formats]

    if "csv" in formats:
        csv_path = report_dir / "report.csv"
        with csv_path.open("w", newline="", encoding="utf-8") as csv_file:
            writer = csv.DictWriter(csv_file, fieldnames=REPORT_COLUMNS)
            writer.writeheader()
            for row in rows:
                writer.writerow({k: _format_csv_value(row.get(k)) for k in REPORT_COLUMNS})

    if "json" in formats:
        json_path = report_dir / "report.json"
        report_payload = {"meta": meta, "summary": summary, "files": rows}
        json_path.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")

    return {"meta": meta, "summary": summary, "files": rows}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate compression reports for a batch output folder.",
    )
    parser.add_argument("--input-root", required=True, help="Path to original input data root.")
    parser.add_argument("--output-root", required=True, help="Path to batch output root.")
    parser.add_argument(
        "--report-dir",
        default="",
        help="Output directory for reports (default: <output-root>/report).",
    )
    parser.add_argument(
        "--formats",
        default="csv,json",
        help="Comma-separated list of formats: csv,json (default: csv,json).",
    )
    parser.add_argument(
        "--compressed-suffix",
        default=CodecConfig.compressed_suffix,
        help="Extension used for compressed files (default: .huf).",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    input_root = Path(args.input_root)
    output_root = Path(args.output_root)
    report_dir = Path(args.report_dir) if args.report_dir else output_root / "report"
    formats = [fmt.strip() for fmt in args.formats.split(",") if fmt.strip()]
    generate_report(
        input_root=input_root,
        output_root=output_root,
        report_dir=report_dir,
        formats=formats,
        cfg=CodecConfig(compressed_suffix=args.compressed_suffix),
    )
    print(f"Report written to {report_dir}")


if __name__ == "__main__":
    main()
