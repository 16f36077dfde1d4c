"""Loudness measurement module (BS.1770 block gating)."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from loudqc.dsp.kweighting import apply_k_weighting
from loudqc.metrics.levels import mean_square_to_lufs, validate_mono
from loudqc.types import LoudnessLevels

logger = logging.getLogger(__name__)

MOMENTARY_WINDOW_SECONDS = 0.4
SHORT_TERM_WINDOW_SECONDS = 3.0
BLOCK_SECONDS = 0.4
BLOCK_HOP_FRACTION = 0.25
ABSOLUTE_GATE_LUFS = -70.0
RELATIVE_GATE_LU = -10.0
LRA_LOW_PERCENTILE = 0.10
LRA_HIGH_PERCENTILE = 0.95
LRA_MIN_BLOCKS = 11


def _energy_mean_lufs(block_lufs: np.ndarray) -> float:
    """Average block loudness in the power domain and convert back."""
    power = np.power(10.0, block_lufs / 10.0)
    return float(10.0 * np.log10(np.mean(power)))


def summed_channel_power(channels: Sequence[np.ndarray]) -> np.ndarray:
    """
    K-weight each channel and sum the squared outputs per sample.

    Channels are truncated to the shortest length; every channel has unity
    weight.
    """
    arrays = [validate_mono(ch, f"channel {i}") for i, ch in enumerate(channels)]
    if not arrays:
        raise ValueError("summed_channel_power expects at least one channel.")
    length = min(ch.size for ch in arrays)
    summed = np.zeros(length, dtype=np.float64)
    for ch in arrays:
        weighted = apply_k_weighting(ch[:length])
        summed += weighted * weighted
    return summed


def block_loudness(power: np.ndarray, fs: float) -> np.ndarray:
    """
    Loudness of every complete 400 ms block at 75% overlap.

    Args:
        power: Per-sample channel-summed K-weighted power
        fs: Sample rate in Hz

    Returns:
        Array of block loudness values in LUFS (may contain -inf)
    """
    block_size = int(np.floor(BLOCK_SECONDS * fs))
    if block_size <= 0 or power.size < block_size:
        return np.array([], dtype=np.float64)
    hop_size = max(1, int(np.floor(block_size * BLOCK_HOP_FRACTION)))
    csum = np.concatenate(([0.0], np.cumsum(power)))
    starts = np.arange(0, power.size - block_size + 1, hop_size)
    means = (csum[starts + block_size] - csum[starts]) / block_size
    return np.array([mean_square_to_lufs(m) for m in means], dtype=np.float64)


def _tail_loudness(power: np.ndarray, window: int) -> float:
    n = min(window, power.size)
    if n <= 0:
        return float("-inf")
    return mean_square_to_lufs(float(np.mean(power[power.size - n:])))


def integrated_loudness(gated: np.ndarray) -> float:
    """Integrated loudness from blocks that already passed the absolute gate."""
    if gated.size == 0:
        return float("-inf")
    relative_threshold = _energy_mean_lufs(gated) + RELATIVE_GATE_LU
    survivors = gated[gated > relative_threshold]
    logger.debug(
        "relative gate %.2f LUFS kept %d of %d blocks",
        relative_threshold, survivors.size, gated.size,
    )
    if survivors.size == 0:
        return float("-inf")
    return _energy_mean_lufs(survivors)


def loudness_range(gated: np.ndarray) -> float:
    """Spread between the 10th and 95th percentile of gated block loudness."""
    if gated.size < LRA_MIN_BLOCKS:
        return 0.0
    ordered = np.sort(gated)
    n = ordered.size
    low = ordered[int(np.floor(n * LRA_LOW_PERCENTILE))]
    high = ordered[int(np.floor(n * LRA_HIGH_PERCENTILE))]
    return float(high - low)


def measure_loudness(channels: Sequence[np.ndarray], fs: float) -> LoudnessLevels:
    """
    Measure momentary, short-term, integrated loudness and loudness range.

    Args:
        channels: One or two mono sample arrays
        fs: Sample rate in Hz

    Returns:
        LoudnessLevels in LUFS (range in LU); -inf for silence
    """
    fs = float(fs)
    if not np.isfinite(fs) or fs <= 0:
        raise ValueError(f"measure_loudness expects a positive sample rate, got {fs!r}.")
    power = summed_channel_power(channels)

    blocks = block_loudness(power, fs)
    gated = blocks[blocks > ABSOLUTE_GATE_LUFS]
    logger.debug(
        "absolute gate kept %d of %d blocks", gated.size, blocks.size
    )

    momentary = _tail_loudness(power, int(np.floor(MOMENTARY_WINDOW_SECONDS * fs)))
    short_term = _tail_loudness(power, int(np.floor(SHORT_TERM_WINDOW_SECONDS * fs)))
    return LoudnessLevels(
        momentary=momentary,
        short_term=short_term,
        integrated=integrated_loudness(gated),
        loudness_range=loudness_range(gated),
    )


def integrated_lufs_mono(x: np.ndarray, fs: float) -> float:
    """Compute integrated loudness in LUFS for mono audio."""
    return measure_loudness([x], fs).integrated
