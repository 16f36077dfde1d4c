from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from loudqc.analysis.engine import analyze, analyze_samples, diff, mono_mix
from loudqc.types import ChannelSet
from tests.conftest import sine, square

NEG_INF = float("-inf")


def test_all_zero_input_is_silent_everywhere():
    z = np.zeros(4800)
    res = analyze(ChannelSet(left=z, right=z, fs=48000))
    loud = res.loudness
    for value in (
        loud.momentary, loud.short_term, loud.integrated, loud.true_peak,
        loud.sample_peak, loud.rms, loud.crest_factor,
    ):
        assert value == NEG_INF
    assert loud.loudness_range == 0.0
    assert (res.stereo.correlation, res.stereo.width, res.stereo.balance) == (0.0, 0.0, 0.0)
    assert res.waveform_peaks.size == 500
    assert np.all(res.waveform_peaks == 0.0)


def test_empty_input_is_tolerated():
    res = analyze(ChannelSet(left=np.zeros(0), right=np.zeros(0), fs=44100))
    assert res.duration == 0.0
    assert res.loudness.integrated == NEG_INF
    assert res.stereo.correlation == 0.0
    assert res.waveform_peaks.size == 500


def test_square_wave_end_to_end():
    x = square(441.0, 1.0, 44100)
    res = analyze(ChannelSet(left=x, right=x, fs=44100))
    assert np.isclose(res.stereo.correlation, 1.0)
    assert np.isclose(res.stereo.width, 0.0)
    assert np.isclose(res.loudness.sample_peak, 0.0)
    assert np.isclose(res.loudness.crest_factor, 0.0, atol=1e-9)
    assert res.channels == 2
    assert np.isclose(res.duration, 1.0)


def test_inverted_channels_end_to_end():
    x = sine(440.0, 1.0, 44100, amp=0.5)
    res = analyze(ChannelSet(left=x, right=-x, fs=44100))
    assert np.isclose(res.stereo.correlation, -1.0)
    # mono fold-down cancels completely
    assert np.all(res.waveform_peaks == 0.0)


def test_dc_offset_is_removed_by_k_weighting():
    dc = np.full(44100, 0.5)
    res = analyze(ChannelSet(left=dc, right=dc, fs=44100))
    raw_dc_lufs = -0.691 + 10.0 * np.log10(2 * 0.25)
    assert res.loudness.momentary < -60.0
    assert res.loudness.integrated < raw_dc_lufs - 10.0
    assert np.isclose(res.loudness.sample_peak, 20.0 * np.log10(0.5))


def test_crest_factor_non_negative_for_signal():
    rng = np.random.default_rng(11)
    x = 0.2 * rng.standard_normal(48000)
    res = analyze(ChannelSet(left=x, right=0.5 * x, fs=48000))
    assert res.loudness.crest_factor >= 0.0
    assert res.loudness.true_peak >= res.loudness.sample_peak


def test_mono_input_analysed_as_centre():
    x = sine(997.0, 3.0, 48000)
    res = analyze(ChannelSet(left=x, fs=48000))
    assert res.channels == 1
    assert np.isclose(res.stereo.correlation, 1.0)
    assert res.stereo.width == 0.0
    assert np.isclose(res.loudness.integrated, -3.01, atol=0.1)


def test_unequal_lengths_do_not_raise():
    left = sine(440.0, 1.0, 48000)
    right = sine(440.0, 0.5, 48000)
    res = analyze(ChannelSet(left=left, right=right, fs=48000))
    assert np.isclose(res.duration, 1.0)
    assert np.isclose(res.stereo.correlation, 1.0)
    assert mono_mix(ChannelSet(left=left, right=right, fs=48000)).size == right.size


def test_analyze_samples_accepts_stereo_matrix():
    x = sine(440.0, 0.5)
    res = analyze_samples(np.stack([x, x], axis=1), 48000, peak_count=64)
    assert res.channels == 2
    assert res.waveform_peaks.size == 64


def test_result_is_immutable_and_detached_from_input():
    x = sine(440.0, 0.5)
    cs = ChannelSet(left=x, right=x, fs=48000)
    x[:] = 0.0
    assert np.max(np.abs(cs.left)) > 0.9
    res = analyze(cs)
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.duration = 2.0
    with pytest.raises(ValueError):
        res.waveform_peaks[0] = 1.0


@pytest.mark.parametrize("fs", [0, -44100, float("nan"), float("inf"), 44100.5])
def test_invalid_sample_rate_fails_fast(fs):
    with pytest.raises(ValueError, match="Sample rate"):
        ChannelSet(left=np.zeros(10), fs=fs)


def test_sample_rate_is_reported_as_integer_hz():
    cs = ChannelSet(left=np.zeros(4410), fs=44100.0)
    assert cs.fs == 44100
    assert isinstance(cs.fs, int)
    res = analyze(cs)
    assert res.sample_rate == 44100
    assert isinstance(res.sample_rate, int)
    assert res.duration == pytest.approx(0.1)


def test_non_finite_samples_fail_fast():
    x = np.zeros(10)
    x[3] = np.nan
    with pytest.raises(ValueError, match="non-finite"):
        ChannelSet(left=np.zeros(10), right=x, fs=48000)


def test_concurrent_calls_match_sequential():
    rng = np.random.default_rng(5)
    sets = [
        ChannelSet(left=rng.uniform(-1, 1, 24000), right=rng.uniform(-1, 1, 24000), fs=48000)
        for _ in range(4)
    ]
    sequential = [analyze(cs) for cs in sets]
    with ThreadPoolExecutor(max_workers=4) as ex:
        concurrent = list(ex.map(analyze, sets))
    for a, b in zip(sequential, concurrent):
        assert a.loudness == b.loudness
        assert a.stereo == b.stereo
        assert np.array_equal(a.waveform_peaks, b.waveform_peaks)


def test_diff_of_results():
    x = sine(997.0, 2.0, 48000)
    loud = analyze(ChannelSet(left=x, right=x, fs=48000))
    wide = analyze(ChannelSet(left=x, right=-x, fs=48000))
    silent = analyze(ChannelSet(left=np.zeros(96000), fs=48000))

    same = diff(loud, loud)
    assert (same.loudness_diff, same.correlation_diff, same.width_diff) == (0.0, 0.0, 0.0)
    assert same.spectral_diff is None

    d = diff(loud, wide, spectral_diff=0.25)
    assert np.isclose(d.correlation_diff, 2.0)
    assert np.isclose(d.width_diff, 1.0)
    assert d.spectral_diff == 0.25

    assert diff(silent, silent).loudness_diff == 0.0
    assert diff(loud, silent).loudness_diff == float("inf")
