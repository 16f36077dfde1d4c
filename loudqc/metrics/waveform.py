"""Waveform peak reduction for display."""
from __future__ import annotations

import numpy as np

from loudqc.metrics.levels import validate_mono

DEFAULT_PEAK_COUNT = 500


def reduce_waveform(mono: np.ndarray, peak_count: int = DEFAULT_PEAK_COUNT) -> np.ndarray:
    """
    Reduce a mono buffer to ``peak_count`` absolute-value peaks.

    Windows hold ``len(mono) // peak_count`` samples each; samples past the
    last full window are ignored and empty windows report 0.
    """
    x = validate_mono(mono, "reduce_waveform input")
    peak_count = int(peak_count)
    if peak_count < 0:
        raise ValueError(f"peak_count must be >= 0, got {peak_count}.")
    peaks = np.zeros(peak_count, dtype=np.float64)
    if peak_count == 0:
        return peaks
    window = x.size // peak_count
    if window == 0:
        return peaks
    frames = x[:window * peak_count].reshape(peak_count, window)
    peaks[:] = np.max(np.abs(frames), axis=1)
    return peaks
