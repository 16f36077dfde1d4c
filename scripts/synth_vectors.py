#!/usr/bin/env python
"""
Synthesize stereo test vectors for LoudQC validation.

Generates WAV files with known loudness and stereo-field characteristics.
"""
from __future__ import annotations
import json
from pathlib import Path

import numpy as np
import soundfile as sf

from loudqc.analysis.engine import analyze
from loudqc.reporting.report import summarize_result
from loudqc.types import ChannelSet


def write_wav_stereo(path: Path, left: np.ndarray, right: np.ndarray, fs: int) -> None:
    """Write a stereo pair to a 32-bit float WAV file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    sf.write(str(path), np.stack([left, right], axis=1), fs, subtype="FLOAT")


def gen_sine(freq_hz: float, duration_s: float, fs: int, amp: float = 1.0) -> np.ndarray:
    """Generate a sine wave."""
    t = np.arange(int(duration_s * fs)) / fs
    return amp * np.sin(2.0 * np.pi * freq_hz * t)


def gen_square(freq_hz: float, duration_s: float, fs: int, amp: float = 1.0) -> np.ndarray:
    """Generate a square wave (peak equals RMS)."""
    return amp * np.where(gen_sine(freq_hz, duration_s, fs) >= 0.0, 1.0, -1.0)


def db_to_linear(db: float) -> float:
    """Convert dB to linear amplitude."""
    return 10.0 ** (db / 20.0)


def main():
    """Generate all test vectors and their expected metrics."""
    base_dir = Path(__file__).parent.parent / "validation" / "vectors"
    fs = 48000
    duration = 5.0
    sine = gen_sine(997.0, duration, fs, db_to_linear(-18.0))
    rng = np.random.default_rng(42)
    noise_l = 0.1 * rng.standard_normal(int(duration * fs))
    noise_r = 0.1 * rng.standard_normal(int(duration * fs))

    vectors = {
        "v0001_sine_997hz_-18dbfs_mono_field": (sine, sine),
        "v0002_sine_997hz_inverted": (sine, -sine),
        "v0003_square_441hz_fullscale": (
            gen_square(441.0, 1.0, 44100), gen_square(441.0, 1.0, 44100)
        ),
        "v0004_dc_offset_0.5": (np.full(fs, 0.5), np.full(fs, 0.5)),
        "v0005_silence": (np.zeros(fs), np.zeros(fs)),
        "v0006_uncorrelated_noise": (noise_l, noise_r),
        "v0007_left_only": (sine, np.zeros_like(sine)),
    }

    print("Generating test vectors...")
    for name, (left, right) in vectors.items():
        rate = 44100 if "square" in name else fs
        out_dir = base_dir / name
        write_wav_stereo(out_dir / "input.wav", left, right, rate)
        result = analyze(ChannelSet(left=left, right=right, fs=rate))
        (out_dir / "expected.json").write_text(
            json.dumps(summarize_result(result), indent=2), encoding="utf-8"
        )
        print(f"  Created: {out_dir / 'input.wav'}")

    print(f"\nGenerated {len(vectors)} test vectors in: {base_dir}")


if __name__ == "__main__":
    main()
