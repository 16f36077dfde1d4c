"""DSP modules for LoudQC."""

from loudqc.dsp.biquad import apply_biquad
from loudqc.dsp.kweighting import (
    K_WEIGHT_HIGH_PASS,
    K_WEIGHT_HIGH_SHELF,
    apply_k_weighting,
)

__all__ = [
    "K_WEIGHT_HIGH_PASS",
    "K_WEIGHT_HIGH_SHELF",
    "apply_biquad",
    "apply_k_weighting",
]
