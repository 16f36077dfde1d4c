"""LoudQC CLI - Loudness and Stereo Field Quality Control."""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable

import numpy as np

from loudqc.version import __version__
from loudqc.types import Status
from loudqc.config import load_analysis_config
from loudqc.io.audio import load_audio
from loudqc.analysis.engine import analyze, diff
from loudqc.analysis.compliance import (
    LOUDNESS_TARGETS,
    check_all_platforms,
    compliance_status,
)
from loudqc.reporting.format import format_db, format_lufs
from loudqc.reporting.report import build_report_dict, difference_dict, summarize_result
from loudqc.utils.hashing import sha256_hex_file

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_WARN = 10
EXIT_FAIL = 20
EXIT_BAD_ARGS = 2
EXIT_DECODE_ERROR = 3
EXIT_INTERNAL_ERROR = 5
SUPPORTED_AUDIO_EXTS = {".wav", ".flac", ".aiff", ".aif", ".ogg", ".mp3"}


def _exit_code_for_status(status: Status) -> int:
    if status == Status.FAIL:
        return EXIT_FAIL
    if status == Status.WARN:
        return EXIT_WARN
    return EXIT_PASS


def _iter_audio_files(folder: Path, recursive: bool) -> list[Path]:
    """Collect supported audio files from a folder."""
    if not folder.exists():
        raise ValueError(f"Folder not found: {folder}")
    files: Iterable[Path]
    files = folder.rglob("*") if recursive else folder.glob("*")
    return sorted(
        p for p in files
        if p.is_file() and p.suffix.lower() in SUPPORTED_AUDIO_EXTS
    )


def _output_path(out_dir: Path, audio_path: Path) -> Path:
    """Build output report path for a given audio file."""
    return out_dir / (audio_path.stem + ".loudqc.json")


def _build_input_meta(audio_path: str, loaded) -> dict:
    cs = loaded.channel_set
    return {
        "path": audio_path,
        "file_hash_sha256": sha256_hex_file(audio_path),
        "backend": loaded.backend,
        "warnings": list(loaded.warnings),
        "channels": cs.channels,
        "frames": int(max(ch.size for ch in cs.as_list())),
    }


def _analyze_file(audio_path: str, cfg: dict, platforms: list[str] | None):
    """Load, analyze and build a report for one file."""
    loaded = load_audio(audio_path)
    result = analyze(
        loaded.channel_set,
        peak_count=int(cfg["waveform"]["peak_count"]),
        oversample=int(cfg["true_peak"]["oversample"]),
        true_peak_method=cfg["true_peak"]["method"],
    )
    tolerance = float(cfg["compliance"]["tolerance_lu"])
    names = platforms or cfg["compliance"]["platforms"]
    compliance = check_all_platforms(
        result.loudness.integrated, names, tolerance_lu=tolerance
    )
    status = compliance_status(compliance, tolerance_lu=tolerance)
    report = build_report_dict(
        result,
        input_meta=_build_input_meta(audio_path, loaded),
        compliance=compliance,
        status=status.value,
    )
    return report, status, result


def _write_or_print(payload: dict, out: str | None) -> None:
    output_json = json.dumps(payload, indent=2)
    if out:
        Path(out).write_text(output_json, encoding="utf-8")
        print(f"Report written to: {out}", file=sys.stderr)
    else:
        print(output_json)


def cmd_analyze(args) -> int:
    """Handle analyze command."""
    try:
        cfg = load_analysis_config(args.config)
        if args.peaks is not None:
            if args.peaks < 0:
                raise ValueError("--peaks must be >= 0.")
            cfg["waveform"] = {**cfg["waveform"], "peak_count": args.peaks}
    except FileNotFoundError as e:
        print(f"Error: Config not found - {e}", file=sys.stderr)
        return EXIT_BAD_ARGS
    except json.JSONDecodeError as e:
        print(f"Error: Invalid config JSON - {e}", file=sys.stderr)
        return EXIT_BAD_ARGS
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_ARGS

    try:
        report, status, result = _analyze_file(args.audio_path, cfg, args.platform)
        _write_or_print(report, args.out)
        loud = result.loudness
        print(
            f"I {format_lufs(loud.integrated)} | LRA {format_db(loud.loudness_range)} | "
            f"TP {format_db(loud.true_peak)} | status {status.value}",
            file=sys.stderr
        )
        return _exit_code_for_status(status)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    except Exception as e:
        logger.exception("analyze failed")
        print(f"Internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def cmd_compare(args) -> int:
    """Handle compare command."""
    try:
        a = analyze(load_audio(args.audio_a).channel_set)
        b = analyze(load_audio(args.audio_b).channel_set)
        payload = {
            "a": {"path": args.audio_a, **summarize_result(a)},
            "b": {"path": args.audio_b, **summarize_result(b)},
            "difference": difference_dict(diff(a, b)),
        }
        _write_or_print(payload, args.out)
        return EXIT_PASS
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    except Exception as e:
        logger.exception("compare failed")
        print(f"Internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def cmd_targets(args) -> int:
    """Handle targets command."""
    width = max(len(name) for name in LOUDNESS_TARGETS)
    for name, target in LOUDNESS_TARGETS.items():
        print(f"{name.ljust(width)}  {format_lufs(target)}")
    return EXIT_PASS


def _batch_worker(
    args: tuple[str, dict, list[str] | None, str | None]
) -> tuple[str, str, str | None, dict | None]:
    """Worker for batch analysis."""
    audio_path, cfg, platforms, out_dir = args
    try:
        report, status, _ = _analyze_file(audio_path, cfg, platforms)
        if out_dir:
            out_path = _output_path(Path(out_dir), Path(audio_path))
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        return (audio_path, status.value, None, report)
    except Exception as exc:
        return (audio_path, "error", str(exc), None)


def _aggregate_batch_results(results: list[tuple[str, str, str | None, dict | None]]) -> dict:
    """Aggregate batch results into summary statistics."""
    counts = {"pass": 0, "warn": 0, "fail": 0, "error": 0}
    failure_causes: dict[str, int] = {}
    metrics: dict[str, list] = {
        "integrated": [],
        "loudness_range": [],
        "true_peak": [],
        "correlation": [],
    }

    for _, status, err, report in results:
        counts[status if status in counts else "error"] += 1
        if err:
            failure_causes[err] = failure_causes.get(err, 0) + 1
            continue
        if not report:
            continue
        for c in report.get("compliance", []):
            if not c.get("compliant"):
                note = f"non_compliant:{c.get('platform')}"
                failure_causes[note] = failure_causes.get(note, 0) + 1
        m = report.get("metrics", {})
        loud = m.get("loudness", {})
        metrics["integrated"].append(loud.get("integrated"))
        metrics["loudness_range"].append(loud.get("loudness_range"))
        metrics["true_peak"].append(loud.get("true_peak"))
        metrics["correlation"].append(m.get("stereo", {}).get("correlation"))

    def _summary(values: list) -> dict | None:
        vals = [v for v in values if isinstance(v, (int, float))]
        if not vals:
            return None
        arr = np.asarray(vals, dtype=np.float64)
        return {
            "count": int(arr.size),
            "min": float(np.min(arr)),
            "p50": float(np.percentile(arr, 50)),
            "p90": float(np.percentile(arr, 90)),
            "max": float(np.max(arr))
        }

    distributions = {k: _summary(v) for k, v in metrics.items()}
    distributions = {k: v for k, v in distributions.items() if v is not None}

    return {
        "counts": counts,
        "failure_causes": dict(sorted(failure_causes.items(), key=lambda kv: kv[1], reverse=True)),
        "distributions": distributions
    }


def cmd_batch(args) -> int:
    """Handle batch command."""
    try:
        cfg = load_analysis_config(args.config)
        audio_paths = _iter_audio_files(Path(args.folder), args.recursive)
    except (ValueError, json.JSONDecodeError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_ARGS
    if not audio_paths:
        print("Error: No input files found.", file=sys.stderr)
        return EXIT_BAD_ARGS

    out_dir = Path(args.out_dir) if args.out_dir else None
    if out_dir:
        out_dir.mkdir(parents=True, exist_ok=True)
    out_dir_str = str(out_dir) if out_dir else None
    max_workers = min(max(1, int(args.workers)), len(audio_paths))

    results: list[tuple[str, str, str | None, dict | None]] = []
    jobs = [(str(p), cfg, args.platform, out_dir_str) for p in audio_paths]
    if max_workers == 1:
        completed = (_batch_worker(job) for job in jobs)
        for result in completed:
            results.append(result)
            _print_batch_line(result)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as ex:
            futures = [ex.submit(_batch_worker, job) for job in jobs]
            for fut in as_completed(futures):
                result = fut.result()
                results.append(result)
                _print_batch_line(result)

    summary = _aggregate_batch_results(results)
    if out_dir:
        summary_path = out_dir / "batch-summary.json"
        summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
        print(f"Summary written to: {summary_path}", file=sys.stderr)
    else:
        print(json.dumps(summary, indent=2))

    counts = summary["counts"]
    if counts["error"]:
        return EXIT_DECODE_ERROR
    if counts["fail"]:
        return EXIT_FAIL
    if counts["warn"]:
        return EXIT_WARN
    return EXIT_PASS


def _print_batch_line(result: tuple[str, str, str | None, dict | None]) -> None:
    path, status, err, _ = result
    if err is not None:
        print(f"[ERROR] {path}: {err}", file=sys.stderr)
    else:
        print(f"[OK] {path}: {status}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loudqc",
        description="LoudQC - Loudness and Stereo Field Quality Control"
    )
    parser.add_argument(
        "--version", action="version",
        version=f"loudqc {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    platform_choices = sorted(LOUDNESS_TARGETS)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze loudness and stereo field of an audio file"
    )
    analyze_parser.add_argument(
        "audio_path",
        help="Path to audio file"
    )
    analyze_parser.add_argument(
        "--platform",
        action="append",
        choices=platform_choices,
        help="Platform target to check (repeatable, default: all)"
    )
    analyze_parser.add_argument(
        "--config", "-c",
        help="Path to analysis config JSON overrides"
    )
    analyze_parser.add_argument(
        "--peaks",
        type=int,
        help="Number of waveform peaks (default: 500)"
    )
    analyze_parser.add_argument(
        "--out", "-o",
        help="Output path for report JSON"
    )
    analyze_parser.set_defaults(func=cmd_analyze)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare loudness and stereo metrics of two audio files"
    )
    compare_parser.add_argument("audio_a", help="First audio file")
    compare_parser.add_argument("audio_b", help="Second audio file")
    compare_parser.add_argument(
        "--out", "-o",
        help="Output path for comparison JSON"
    )
    compare_parser.set_defaults(func=cmd_compare)

    targets_parser = subparsers.add_parser(
        "targets",
        help="List platform loudness targets"
    )
    targets_parser.set_defaults(func=cmd_targets)

    batch_parser = subparsers.add_parser(
        "batch",
        help="Batch analyze a folder"
    )
    batch_parser.add_argument(
        "folder",
        help="Folder containing audio files"
    )
    batch_parser.add_argument(
        "--platform",
        action="append",
        choices=platform_choices,
        help="Platform target to check (repeatable, default: all)"
    )
    batch_parser.add_argument(
        "--config", "-c",
        help="Path to analysis config JSON overrides"
    )
    batch_parser.add_argument(
        "--out-dir",
        help="Output directory for per-file reports and batch-summary.json"
    )
    batch_parser.add_argument(
        "--recursive",
        action="store_true",
        help="Recurse into subfolders"
    )
    batch_parser.add_argument(
        "--workers",
        type=int,
        default=max(1, (os.cpu_count() or 2) - 1),
        help="Parallel workers (default: cpu_count-1)"
    )
    batch_parser.set_defaults(func=cmd_batch)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
