"""Analysis orchestration: one call in, one immutable result out."""
from __future__ import annotations

import logging
import math

import numpy as np

from loudqc.metrics.levels import crest_factor_db, linear_to_db, rms, sample_peak
from loudqc.metrics.loudness import measure_loudness
from loudqc.metrics.stereo import stereo_field
from loudqc.metrics.truepeak import true_peak
from loudqc.metrics.waveform import DEFAULT_PEAK_COUNT, reduce_waveform
from loudqc.types import (
    AnalysisResult,
    AudioDifference,
    ChannelSet,
    LoudnessMetrics,
)

logger = logging.getLogger(__name__)


def mono_mix(channel_set: ChannelSet) -> np.ndarray:
    """Element-wise mean of left and right over the shared length."""
    if channel_set.right is None:
        return np.array(channel_set.left, dtype=np.float64)
    n = channel_set.shared_length
    return (channel_set.left[:n] + channel_set.right[:n]) / 2.0


def analyze(
    channel_set: ChannelSet,
    *,
    peak_count: int = DEFAULT_PEAK_COUNT,
    oversample: int = 4,
    true_peak_method: str = "linear"
) -> AnalysisResult:
    """
    Run every loudness, peak and stereo metric over a channel set.

    Mono input is analysed as a pair of identical channels for the stereo
    metrics. Silence and empty buffers come back as -inf levels and zero
    ratios; nothing here raises for ordinary signal content.

    Args:
        channel_set: Decoded left/right samples and sample rate
        peak_count: Number of waveform peaks to produce
        oversample: True peak oversampling factor
        true_peak_method: "linear" or "polyphase"

    Returns:
        AnalysisResult
    """
    left = channel_set.left
    right = channel_set.right if channel_set.right is not None else left
    fs = channel_set.fs

    levels = measure_loudness(channel_set.as_list(), fs)

    peak = max(sample_peak(left), sample_peak(right))
    tp = max(
        true_peak(left, oversample=oversample, method=true_peak_method),
        true_peak(right, oversample=oversample, method=true_peak_method),
    )
    left_rms = rms(left)
    right_rms = rms(right)
    total_rms = math.sqrt((left_rms ** 2 + right_rms ** 2) / 2.0)

    loudness = LoudnessMetrics(
        momentary=levels.momentary,
        short_term=levels.short_term,
        integrated=levels.integrated,
        loudness_range=levels.loudness_range,
        true_peak=linear_to_db(tp),
        sample_peak=linear_to_db(peak),
        rms=linear_to_db(total_rms),
        crest_factor=crest_factor_db(peak, total_rms),
    )

    peaks = reduce_waveform(mono_mix(channel_set), peak_count)
    peaks.setflags(write=False)

    length = max(left.size, right.size)
    logger.debug(
        "analyzed %d samples x %d channels at %.0f Hz: I=%.2f LUFS",
        length, channel_set.channels, fs, loudness.integrated,
    )
    return AnalysisResult(
        loudness=loudness,
        stereo=stereo_field(left, right),
        waveform_peaks=peaks,
        duration=float(length) / fs,
        sample_rate=fs,
        channels=channel_set.channels,
    )


def analyze_samples(samples, fs: int, **kwargs) -> AnalysisResult:
    """Analyze a 1D mono or (n, 2) stereo array."""
    return analyze(ChannelSet.from_samples(samples, fs), **kwargs)


def _abs_diff(a: float, b: float) -> float:
    if a == b:
        return 0.0
    return abs(a - b)


def diff(
    a: AnalysisResult,
    b: AnalysisResult,
    *,
    spectral_diff: float | None = None
) -> AudioDifference:
    """
    Absolute differences of integrated loudness, correlation and width.

    Two silent results compare equal; one silent side gives an infinite
    loudness difference. Spectral comparison is not computed here and is
    passed through from the caller.
    """
    return AudioDifference(
        loudness_diff=_abs_diff(a.loudness.integrated, b.loudness.integrated),
        correlation_diff=_abs_diff(a.stereo.correlation, b.stereo.correlation),
        width_diff=_abs_diff(a.stereo.width, b.stereo.width),
        spectral_diff=spectral_diff,
    )
