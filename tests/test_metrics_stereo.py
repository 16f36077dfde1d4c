from __future__ import annotations

import numpy as np

from loudqc.metrics.stereo import (
    mid_side_rms,
    phase_correlation,
    stereo_balance,
    stereo_field,
    stereo_width,
)
from tests.conftest import sine


def test_identical_channels_are_mono():
    x = sine(440.0, 0.5)
    m = stereo_field(x, x)
    assert np.isclose(m.correlation, 1.0)
    assert m.width == 0.0
    assert m.balance == 0.0
    assert m.side_level == float("-inf")


def test_inverted_channels():
    x = sine(440.0, 0.5)
    m = stereo_field(x, -x)
    assert np.isclose(m.correlation, -1.0)
    assert np.isclose(m.width, 1.0)
    assert m.mid_level == float("-inf")


def test_silence_reports_zero_ratios():
    z = np.zeros(1000)
    m = stereo_field(z, z)
    assert (m.correlation, m.width, m.balance) == (0.0, 0.0, 0.0)
    assert m.mid_level == float("-inf")
    assert m.side_level == float("-inf")


def test_one_sided_signal():
    x = sine(440.0, 0.5)
    m = stereo_field(x, np.zeros_like(x))
    assert m.correlation == 0.0
    assert np.isclose(m.width, 0.5)
    assert np.isclose(m.balance, -1.0)


def test_balance_sign_and_scale():
    x = sine(440.0, 0.5)
    assert np.isclose(stereo_field(x, 0.5 * x).balance, -0.5)
    assert np.isclose(stereo_field(0.5 * x, x).balance, 0.5)


def test_uncorrelated_noise_is_near_zero():
    rng = np.random.default_rng(3)
    left = rng.standard_normal(48000)
    right = rng.standard_normal(48000)
    assert abs(phase_correlation(left, right)) < 0.05


def test_unequal_lengths_use_shared_prefix():
    x = sine(440.0, 0.5)
    assert np.isclose(phase_correlation(x, x[: x.size // 2]), 1.0)
    levels = mid_side_rms(x, x[:0])
    assert levels == {"mid": 0.0, "side": 0.0, "left": 0.0, "right": 0.0}


def test_ratio_helpers_guard_zero():
    assert stereo_width(0.0, 0.0) == 0.0
    assert stereo_balance(0.0, 0.0) == 0.0
