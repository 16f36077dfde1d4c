from __future__ import annotations

from dataclasses import asdict

from loudqc.types import AnalysisResult, AudioDifference, ComplianceResult
from loudqc.utils.hashing import sha256_hex_canonical_json
from loudqc.utils.quantize import q, q_list
from loudqc.version import __version__

SCHEMA_VERSION = "1.0"
LEVEL_STEP = 0.01
RATIO_STEP = 0.001
PEAK_STEP = 0.0001


def _loudness_dict(result: AnalysisResult) -> dict:
    return {key: q(value, LEVEL_STEP) for key, value in asdict(result.loudness).items()}


def _stereo_dict(result: AnalysisResult) -> dict:
    s = result.stereo
    return {
        "correlation": q(s.correlation, RATIO_STEP),
        "width": q(s.width, RATIO_STEP),
        "balance": q(s.balance, RATIO_STEP),
        "mid_level": q(s.mid_level, LEVEL_STEP),
        "side_level": q(s.side_level, LEVEL_STEP),
    }


def _compliance_dict(res: ComplianceResult) -> dict:
    return {
        "platform": res.platform,
        "target_lufs": res.target,
        "difference_lu": q(res.difference, LEVEL_STEP),
        "compliant": res.compliant,
    }


def summarize_result(result: AnalysisResult) -> dict:
    """Quantized, JSON-safe metrics for one analysis (no waveform)."""
    return {
        "duration_seconds": q(result.duration, 0.001),
        "sample_rate_hz": result.sample_rate,
        "channels": result.channels,
        "loudness": _loudness_dict(result),
        "stereo": _stereo_dict(result),
    }


def difference_dict(difference: AudioDifference) -> dict:
    return {
        "loudness_diff_lu": q(difference.loudness_diff, LEVEL_STEP),
        "correlation_diff": q(difference.correlation_diff, RATIO_STEP),
        "width_diff": q(difference.width_diff, RATIO_STEP),
        "spectral_diff": difference.spectral_diff,
    }


def build_report_dict(
    result: AnalysisResult,
    *,
    input_meta: dict | None = None,
    compliance: list[ComplianceResult] | None = None,
    status: str | None = None,
    include_waveform: bool = True
) -> dict:
    """
    Build a report dictionary with quantized metrics and an integrity hash.

    Args:
        result: Analysis result to serialize
        input_meta: Source metadata (path, hash, backend, warnings)
        compliance: Platform compliance results
        status: Overall pass/warn/fail status
        include_waveform: Whether to embed the waveform peaks

    Returns:
        Report dictionary; -inf levels are encoded as None
    """
    report = {
        "schema_version": SCHEMA_VERSION,
        "engine": {"name": "loudqc", "version": __version__},
        "input": input_meta or {},
        "metrics": summarize_result(result),
        "compliance": [_compliance_dict(c) for c in (compliance or [])],
        "status": status,
        "integrity": {"report_hash_sha256": ""},
    }
    if include_waveform:
        report["metrics"]["waveform_peaks"] = q_list(result.waveform_peaks, PEAK_STEP)

    tmp = dict(report)
    tmp.pop("integrity", None)
    report["integrity"]["report_hash_sha256"] = sha256_hex_canonical_json(tmp)
    return report
