"""Audio I/O module."""
from __future__ import annotations

import logging
import warnings as py_warnings
from dataclasses import dataclass, field

import numpy as np

from loudqc.types import ChannelSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedAudio:
    channel_set: ChannelSet
    backend: str
    warnings: list[str] = field(default_factory=list)


def _normalize_channels(
    samples: np.ndarray,
    *,
    backend: str,
    warnings: list[str]
) -> np.ndarray:
    """Normalize decoded audio to a mono 1D or stereo (n, 2) float64 buffer."""
    x = np.asarray(samples, dtype=np.float64)
    if x.ndim == 1:
        return x
    if x.ndim != 2:
        raise ValueError("Decoded audio must be 1D or 2D array.")
    if x.shape[1] == 1:
        return x[:, 0]
    if x.shape[1] == 2:
        return x
    message = f"{backend}: downmixed {x.shape[1]} channels to mono."
    logger.warning(message)
    warnings.append(message)
    return np.mean(x, axis=1)


def _decode_soundfile(path: str) -> tuple[np.ndarray, float, list[str]]:
    """Decode using soundfile (libsndfile)."""
    try:
        import soundfile as sf
    except ImportError as exc:
        raise RuntimeError("soundfile backend not available.") from exc

    with py_warnings.catch_warnings(record=True) as w:
        py_warnings.simplefilter("always")
        data, fs = sf.read(path, always_2d=True, dtype="float64")
    warn_list = [str(wi.message) for wi in w]
    return data, int(fs), warn_list


def load_audio(path: str) -> LoadedAudio:
    """
    Load an audio file into a mono or stereo ChannelSet.

    Supports whatever libsndfile decodes (WAV, FLAC, AIFF, OGG, MP3 on
    recent builds). Files with more than two channels are downmixed to mono.
    """
    backend = "soundfile"
    data, fs, warnings_list = _decode_soundfile(str(path))
    for message in warnings_list:
        logger.warning("%s: %s", path, message)
    data = _normalize_channels(data, backend=backend, warnings=warnings_list)
    logger.debug("loaded %s: %d frames at %.0f Hz", path, data.shape[0], fs)
    return LoadedAudio(
        channel_set=ChannelSet.from_samples(data, fs),
        backend=backend,
        warnings=warnings_list,
    )
