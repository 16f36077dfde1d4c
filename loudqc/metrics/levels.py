"""Peak, RMS, and crest factor metrics."""
from __future__ import annotations

import numpy as np

LUFS_OFFSET = -0.691


def validate_mono(x: np.ndarray, name: str = "audio") -> np.ndarray:
    """Validate and coerce mono audio arrays; NaN/Inf samples are rejected."""
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Expected 1D mono {name} array.")
    if x.size and not np.all(np.isfinite(x)):
        raise ValueError(f"{name} contains non-finite samples (NaN/Inf).")
    return x


def linear_to_db(value: float) -> float:
    """Convert a linear amplitude to dB, -inf at or below zero."""
    value = float(value)
    if value <= 0:
        return float("-inf")
    return float(20.0 * np.log10(value))


def mean_square_to_lufs(mean_square: float) -> float:
    """Convert a K-weighted mean square to LUFS, -inf at or below zero."""
    mean_square = float(mean_square)
    if mean_square <= 0:
        return float("-inf")
    return float(LUFS_OFFSET + 10.0 * np.log10(mean_square))


def mean_square(x: np.ndarray) -> float:
    """Mean of squared samples; 0 for an empty buffer."""
    x = validate_mono(x)
    if x.size == 0:
        return 0.0
    return float(np.mean(x ** 2))


def sample_peak(x: np.ndarray) -> float:
    """Maximum absolute sample value; 0 for an empty buffer."""
    x = validate_mono(x)
    if x.size == 0:
        return 0.0
    return float(np.max(np.abs(x)))


def rms(x: np.ndarray) -> float:
    """Linear RMS level; 0 for an empty buffer."""
    return float(np.sqrt(mean_square(x)))


def crest_factor_db(peak: float, rms_level: float) -> float:
    """
    Crest factor in dB from linear peak and RMS.

    Silence (peak or RMS at zero) reports -inf rather than the NaN that
    ``-inf - -inf`` would produce.
    """
    if peak <= 0 or rms_level <= 0:
        return float("-inf")
    return linear_to_db(peak) - linear_to_db(rms_level)
