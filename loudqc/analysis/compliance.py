"""Platform loudness targets and compliance checks."""
from __future__ import annotations

import math
from typing import Iterable

from loudqc.types import ComplianceResult, Status

LOUDNESS_TARGETS = {
    "spotify": -14.0,
    "youtube": -14.0,
    "apple_music": -16.0,
    "amazon_music": -14.0,
    "tidal": -14.0,
    "broadcast": -24.0,  # EBU R128
    "cinema": -27.0,     # SMPTE
    "podcast": -16.0,
}

COMPLIANCE_TOLERANCE_LU = 1.0


def platform_target(platform: str) -> float:
    """Return the integrated loudness target for ``platform`` in LUFS."""
    try:
        return LOUDNESS_TARGETS[platform]
    except KeyError:
        known = ", ".join(sorted(LOUDNESS_TARGETS))
        raise ValueError(f"Unknown platform {platform!r}; expected one of: {known}.") from None


def check_compliance(
    integrated: float,
    platform: str,
    *,
    tolerance_lu: float = COMPLIANCE_TOLERANCE_LU
) -> ComplianceResult:
    """
    Compare integrated loudness against a platform target.

    ``difference`` is measured minus target, so silence (-inf LUFS) yields
    -inf and is never compliant.
    """
    target = platform_target(platform)
    difference = float(integrated) - target
    return ComplianceResult(
        platform=platform,
        target=target,
        difference=difference,
        compliant=bool(abs(difference) <= tolerance_lu),
    )


def check_all_platforms(
    integrated: float,
    platforms: Iterable[str] | None = None,
    *,
    tolerance_lu: float = COMPLIANCE_TOLERANCE_LU
) -> list[ComplianceResult]:
    """Check compliance against each named platform (all by default)."""
    names = list(LOUDNESS_TARGETS) if platforms is None else list(platforms)
    return [
        check_compliance(integrated, name, tolerance_lu=tolerance_lu)
        for name in names
    ]


def compliance_status(
    results: Iterable[ComplianceResult],
    *,
    tolerance_lu: float = COMPLIANCE_TOLERANCE_LU
) -> Status:
    """
    Collapse compliance results into pass/warn/fail.

    Warn covers misses within twice the tolerance; anything further out,
    or silence, fails.
    """
    status = Status.PASS
    for res in results:
        if res.compliant:
            continue
        if math.isfinite(res.difference) and abs(res.difference) <= 2.0 * tolerance_lu:
            status = Status.WARN if status == Status.PASS else status
        else:
            return Status.FAIL
    return status
