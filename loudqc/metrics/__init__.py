"""Loudness, peak, and stereo metrics."""

from loudqc.metrics.levels import (
    crest_factor_db,
    linear_to_db,
    mean_square_to_lufs,
    rms,
    sample_peak,
)
from loudqc.metrics.loudness import integrated_lufs_mono, measure_loudness
from loudqc.metrics.stereo import phase_correlation, stereo_field
from loudqc.metrics.truepeak import true_peak, true_peak_dbtp_mono
from loudqc.metrics.waveform import reduce_waveform

__all__ = [
    "crest_factor_db",
    "integrated_lufs_mono",
    "linear_to_db",
    "mean_square_to_lufs",
    "measure_loudness",
    "phase_correlation",
    "reduce_waveform",
    "rms",
    "sample_peak",
    "stereo_field",
    "true_peak",
    "true_peak_dbtp_mono",
]
