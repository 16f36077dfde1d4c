from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import numpy as np


class Status(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


def _as_channel(x, name: str) -> np.ndarray:
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"ChannelSet.{name} must be a 1D sample array.")
    if arr.size and not np.all(np.isfinite(arr)):
        raise ValueError(f"ChannelSet.{name} contains non-finite samples (NaN/Inf).")
    arr = arr.copy()
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class ChannelSet:
    """One or two channels of decoded audio sharing a sample rate.

    ``right`` is None for mono input. Samples are copied into read-only
    float64 arrays so the caller keeps ownership of what it passed in.
    """
    left: np.ndarray
    fs: int
    right: np.ndarray | None = None

    def __post_init__(self) -> None:
        fs = float(self.fs)
        if not np.isfinite(fs) or fs <= 0 or not fs.is_integer():
            raise ValueError(f"Sample rate must be a positive integer in Hz, got {self.fs!r}.")
        object.__setattr__(self, "fs", int(fs))
        object.__setattr__(self, "left", _as_channel(self.left, "left"))
        if self.right is not None:
            object.__setattr__(self, "right", _as_channel(self.right, "right"))

    @classmethod
    def from_samples(cls, samples, fs: int) -> "ChannelSet":
        """Build from a 1D mono array or an (n, 2) stereo array."""
        x = np.asarray(samples, dtype=np.float64)
        if x.ndim == 1:
            return cls(left=x, fs=fs)
        if x.ndim == 2 and x.shape[1] == 1:
            return cls(left=x[:, 0], fs=fs)
        if x.ndim == 2 and x.shape[1] == 2:
            return cls(left=x[:, 0], right=x[:, 1], fs=fs)
        raise ValueError("Expected mono samples (n,) or stereo samples (n, 2).")

    @property
    def channels(self) -> int:
        return 1 if self.right is None else 2

    @property
    def shared_length(self) -> int:
        if self.right is None:
            return int(self.left.size)
        return int(min(self.left.size, self.right.size))

    def as_list(self) -> list[np.ndarray]:
        if self.right is None:
            return [self.left]
        return [self.left, self.right]


@dataclass(frozen=True)
class BiquadCoefficients:
    b0: float
    b1: float
    b2: float
    a1: float
    a2: float


@dataclass(frozen=True)
class LoudnessLevels:
    momentary: float
    short_term: float
    integrated: float
    loudness_range: float


@dataclass(frozen=True)
class LoudnessMetrics:
    momentary: float
    short_term: float
    integrated: float
    loudness_range: float
    true_peak: float
    sample_peak: float
    rms: float
    crest_factor: float


@dataclass(frozen=True)
class StereoMetrics:
    correlation: float
    width: float
    balance: float
    mid_level: float
    side_level: float


@dataclass(frozen=True)
class AnalysisResult:
    loudness: LoudnessMetrics
    stereo: StereoMetrics
    waveform_peaks: np.ndarray
    duration: float
    sample_rate: int
    channels: int


@dataclass(frozen=True)
class AudioDifference:
    loudness_diff: float
    correlation_diff: float
    width_diff: float
    spectral_diff: float | None = None


@dataclass(frozen=True)
class ComplianceResult:
    platform: str
    target: float
    difference: float
    compliant: bool
