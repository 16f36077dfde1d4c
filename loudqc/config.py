from __future__ import annotations

import copy
import json
from pathlib import Path

from loudqc.analysis.compliance import LOUDNESS_TARGETS
from loudqc.metrics.truepeak import TRUE_PEAK_METHODS


DEFAULT_ANALYSIS_CONFIG = {
    "waveform": {"peak_count": 500},
    "true_peak": {"oversample": 4, "method": "linear"},
    "compliance": {"tolerance_lu": 1.0, "platforms": None},
}


def _merge_config(base: dict, overrides: dict | None) -> dict:
    if not overrides:
        return base
    merged = {**base}
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merged[key] = _merge_config(base[key], value)
        else:
            merged[key] = value
    return merged


def build_analysis_config(overrides: dict | None = None) -> dict:
    """Return merged analysis config with defaults applied."""
    cfg = copy.deepcopy(_merge_config(DEFAULT_ANALYSIS_CONFIG, overrides))
    peak_count = int(cfg["waveform"]["peak_count"])
    if peak_count < 0:
        raise ValueError("waveform.peak_count must be >= 0.")
    oversample = int(cfg["true_peak"]["oversample"])
    if oversample < 1:
        raise ValueError("true_peak.oversample must be >= 1.")
    method = cfg["true_peak"]["method"]
    if method not in TRUE_PEAK_METHODS:
        raise ValueError(
            f"true_peak.method must be one of {TRUE_PEAK_METHODS}, got {method!r}."
        )
    tolerance = float(cfg["compliance"]["tolerance_lu"])
    if tolerance < 0:
        raise ValueError("compliance.tolerance_lu must be >= 0.")
    platforms = cfg["compliance"]["platforms"]
    if platforms is not None:
        if not isinstance(platforms, list):
            raise ValueError("compliance.platforms must be a list of platform names or null.")
        unknown = [p for p in platforms if not isinstance(p, str) or p not in LOUDNESS_TARGETS]
        if unknown:
            raise ValueError(
                f"compliance.platforms has unknown entries {unknown}; "
                f"expected any of {sorted(LOUDNESS_TARGETS)}."
            )
    return cfg


def load_analysis_config(path: str | Path | None) -> dict:
    """Load JSON overrides from ``path`` (or none) and merge with defaults."""
    if path is None:
        return build_analysis_config()
    overrides = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(overrides, dict):
        raise ValueError("Analysis config must be a JSON object.")
    return build_analysis_config(overrides)
