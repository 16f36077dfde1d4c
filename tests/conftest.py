from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def sine(
    freq_hz: float,
    seconds: float,
    fs: int = 48000,
    *,
    amp: float = 1.0,
    phase: float = 0.0
) -> np.ndarray:
    n = int(round(seconds * fs))
    t = np.arange(n, dtype=np.float64) / fs
    return amp * np.sin(2.0 * np.pi * freq_hz * t + phase)


def square(freq_hz: float, seconds: float, fs: int = 44100, *, amp: float = 1.0) -> np.ndarray:
    return amp * np.where(sine(freq_hz, seconds, fs) >= 0.0, 1.0, -1.0)


def write_wav(path: Path, samples: np.ndarray, fs: int = 48000) -> Path:
    import soundfile as sf

    sf.write(str(path), samples, fs, subtype="FLOAT")
    return path
