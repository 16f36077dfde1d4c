"""
LoudQC - Loudness and Stereo Field Quality Control

BS.1770-style loudness, true peak, crest factor, phase correlation and
mid/side width analysis over decoded sample buffers.
"""
from loudqc.version import __version__
from loudqc.types import (
    Status,
    ChannelSet,
    BiquadCoefficients,
    LoudnessLevels,
    LoudnessMetrics,
    StereoMetrics,
    AnalysisResult,
    AudioDifference,
    ComplianceResult,
)
from loudqc.analysis.engine import analyze, analyze_samples, diff
from loudqc.analysis.compliance import LOUDNESS_TARGETS, check_compliance

__all__ = [
    "__version__",
    "Status",
    "ChannelSet",
    "BiquadCoefficients",
    "LoudnessLevels",
    "LoudnessMetrics",
    "StereoMetrics",
    "AnalysisResult",
    "AudioDifference",
    "ComplianceResult",
    "analyze",
    "analyze_samples",
    "diff",
    "LOUDNESS_TARGETS",
    "check_compliance",
]
