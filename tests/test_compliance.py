from __future__ import annotations

import pytest

from loudqc.analysis.compliance import (
    LOUDNESS_TARGETS,
    check_all_platforms,
    check_compliance,
    compliance_status,
)
from loudqc.types import Status


@pytest.mark.parametrize("platform", sorted(LOUDNESS_TARGETS))
def test_exact_target_is_compliant(platform):
    target = LOUDNESS_TARGETS[platform]
    res = check_compliance(target, platform)
    assert res.compliant
    assert res.difference == 0.0
    assert res.target == target


def test_tolerance_is_one_lu():
    assert check_compliance(-15.0, "spotify").compliant
    assert check_compliance(-13.0, "spotify").compliant
    res = check_compliance(-16.0, "spotify")
    assert not res.compliant
    assert res.difference == -2.0


def test_silence_is_never_compliant():
    res = check_compliance(float("-inf"), "broadcast")
    assert not res.compliant
    assert res.difference == float("-inf")


def test_unknown_platform_raises():
    with pytest.raises(ValueError, match="Unknown platform"):
        check_compliance(-14.0, "myspace")


def test_table_values():
    assert LOUDNESS_TARGETS["broadcast"] == -24.0
    assert LOUDNESS_TARGETS["cinema"] == -27.0
    assert LOUDNESS_TARGETS["apple_music"] == -16.0
    assert len(check_all_platforms(-14.0)) == len(LOUDNESS_TARGETS)


def test_compliance_status_levels():
    assert compliance_status(check_all_platforms(-14.0, ["spotify", "tidal"])) == Status.PASS
    assert compliance_status(check_all_platforms(-15.5, ["spotify", "apple_music"])) == Status.WARN
    assert compliance_status(check_all_platforms(-15.5, ["spotify", "cinema"])) == Status.FAIL
    assert compliance_status(check_all_platforms(-15.8, ["spotify"])) == Status.WARN
    assert compliance_status(check_all_platforms(-16.5, ["spotify"])) == Status.FAIL
    assert compliance_status(check_all_platforms(float("-inf"), ["podcast"])) == Status.FAIL
