"""Audio decoding into channel sets."""

from loudqc.io.audio import LoadedAudio, load_audio

__all__ = ["LoadedAudio", "load_audio"]
