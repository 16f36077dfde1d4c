"""Stereo field metrics: phase correlation, mid/side width, balance."""
from __future__ import annotations

import numpy as np

from loudqc.metrics.levels import linear_to_db, validate_mono
from loudqc.types import StereoMetrics


def _shared_pair(left: np.ndarray, right: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Coerce both channels and truncate to the shorter length."""
    left = validate_mono(left, "left channel")
    right = validate_mono(right, "right channel")
    n = min(left.size, right.size)
    return left[:n], right[:n]


def phase_correlation(left: np.ndarray, right: np.ndarray) -> float:
    """
    Zero-lag normalized cross-correlation of two channels.

    Unlike a Pearson coefficient the channels are not mean-centred, so a
    DC offset counts as in-phase content. Returns 0 when either channel
    has no energy.
    """
    left, right = _shared_pair(left, right)
    sum_lr = float(np.dot(left, right))
    sum_ll = float(np.dot(left, left))
    sum_rr = float(np.dot(right, right))
    denom = float(np.sqrt(sum_ll * sum_rr))
    if denom <= 0:
        return 0.0
    return float(np.clip(sum_lr / denom, -1.0, 1.0))


def mid_side_rms(left: np.ndarray, right: np.ndarray) -> dict:
    """RMS of mid, side, left and right over the shared length."""
    left, right = _shared_pair(left, right)
    if left.size == 0:
        return {"mid": 0.0, "side": 0.0, "left": 0.0, "right": 0.0}
    mid = (left + right) / 2.0
    side = (left - right) / 2.0
    return {
        "mid": float(np.sqrt(np.mean(mid ** 2))),
        "side": float(np.sqrt(np.mean(side ** 2))),
        "left": float(np.sqrt(np.mean(left ** 2))),
        "right": float(np.sqrt(np.mean(right ** 2))),
    }


def stereo_width(mid_rms: float, side_rms: float) -> float:
    """Side share of mid+side RMS in [0, 1]; 0 for silence."""
    total = mid_rms + side_rms
    if total <= 0:
        return 0.0
    return float(np.clip(side_rms / total, 0.0, 1.0))


def stereo_balance(left_rms: float, right_rms: float) -> float:
    """-1 fully left, +1 fully right, 0 centred or silent."""
    loudest = max(left_rms, right_rms)
    if loudest <= 0:
        return 0.0
    return float(np.clip((right_rms - left_rms) / loudest, -1.0, 1.0))


def stereo_field(left: np.ndarray, right: np.ndarray) -> StereoMetrics:
    """Compute all stereo field metrics for a channel pair."""
    levels = mid_side_rms(left, right)
    return StereoMetrics(
        correlation=phase_correlation(left, right),
        width=stereo_width(levels["mid"], levels["side"]),
        balance=stereo_balance(levels["left"], levels["right"]),
        mid_level=linear_to_db(levels["mid"]),
        side_level=linear_to_db(levels["side"]),
    )
