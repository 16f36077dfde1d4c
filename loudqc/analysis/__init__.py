"""Analysis orchestration and platform compliance."""

from loudqc.analysis.compliance import (
    COMPLIANCE_TOLERANCE_LU,
    LOUDNESS_TARGETS,
    check_all_platforms,
    check_compliance,
    compliance_status,
)
from loudqc.analysis.engine import analyze, analyze_samples, diff, mono_mix

__all__ = [
    "COMPLIANCE_TOLERANCE_LU",
    "LOUDNESS_TARGETS",
    "analyze",
    "analyze_samples",
    "check_all_platforms",
    "check_compliance",
    "compliance_status",
    "diff",
    "mono_mix",
]
