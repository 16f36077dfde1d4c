from __future__ import annotations

import numpy as np
import pytest

from loudqc.metrics.levels import (
    crest_factor_db,
    linear_to_db,
    mean_square_to_lufs,
    rms,
    sample_peak,
)
from loudqc.metrics.truepeak import true_peak, true_peak_dbtp_mono
from loudqc.metrics.waveform import reduce_waveform
from tests.conftest import sine


def test_true_peak_basic_sine():
    x = sine(1000.0, 0.1, 48000, amp=0.5)
    tp = true_peak_dbtp_mono(x)
    assert np.isclose(tp, -6.02, atol=0.1)


def test_full_scale_sine_peaks():
    x = sine(1000.0, 0.1, 48000)
    sample_db = linear_to_db(sample_peak(x))
    assert np.isclose(sample_db, 0.0, atol=1e-6)
    assert true_peak_dbtp_mono(x) >= sample_db
    assert true_peak_dbtp_mono(x, method="polyphase") >= sample_db


def test_linear_true_peak_never_exceeds_sample_peak():
    # Straight-line interpolation stays within its endpoints.
    x = sine(12000.0, 0.1, 48000, phase=np.pi / 4)
    assert np.isclose(true_peak(x), np.max(np.abs(x)))


def test_polyphase_true_peak_finds_intersample_overshoot():
    x = sine(12000.0, 0.1, 48000, phase=np.pi / 4)
    assert np.isclose(np.max(np.abs(x)), np.sqrt(0.5), atol=1e-9)
    assert true_peak(x, method="polyphase") > 0.95


def test_true_peak_degenerate_lengths():
    assert true_peak(np.zeros(0)) == 0.0
    assert true_peak(np.array([-0.25])) == 0.25
    assert true_peak_dbtp_mono(np.zeros(64)) == float("-inf")


def test_true_peak_rejects_bad_arguments():
    with pytest.raises(ValueError):
        true_peak(np.zeros(4), oversample=0)
    with pytest.raises(ValueError):
        true_peak(np.zeros(4), method="sinc")
    with pytest.raises(ValueError):
        true_peak(np.zeros((4, 2)))


def test_db_conversions_guard_zero():
    assert linear_to_db(0.0) == float("-inf")
    assert linear_to_db(1.0) == 0.0
    assert mean_square_to_lufs(0.0) == float("-inf")
    assert np.isclose(mean_square_to_lufs(1.0), -0.691)


def test_levels_of_empty_and_silent_buffers():
    assert sample_peak(np.zeros(0)) == 0.0
    assert rms(np.zeros(0)) == 0.0
    assert linear_to_db(rms(np.zeros(32))) == float("-inf")
    assert crest_factor_db(sample_peak(np.zeros(32)), rms(np.zeros(32))) == float("-inf")
    assert crest_factor_db(0.0, 0.0) == float("-inf")


def test_crest_factor_of_sine_is_3db():
    x = sine(1000.0, 1.0, 48000)
    assert np.isclose(crest_factor_db(sample_peak(x), rms(x)), 3.01, atol=0.01)


def test_reduce_waveform_window_maxima():
    x = np.array([0.1, -0.4, 0.2, 0.3, -0.9, 0.0, 0.5, 0.5, 0.0, -0.05])
    peaks = reduce_waveform(x, 5)
    assert np.allclose(peaks, [0.4, 0.3, 0.9, 0.5, 0.05])


def test_reduce_waveform_drops_partial_tail():
    x = np.zeros(11)
    x[10] = 1.0
    peaks = reduce_waveform(x, 5)
    assert peaks.size == 5
    assert np.all(peaks == 0.0)


def test_reduce_waveform_short_input_returns_zeros():
    peaks = reduce_waveform(np.ones(3), 500)
    assert peaks.size == 500
    assert np.all(peaks == 0.0)


def test_reduce_waveform_peak_count_bounds():
    assert reduce_waveform(np.ones(10), 0).size == 0
    with pytest.raises(ValueError):
        reduce_waveform(np.ones(10), -1)
