"""K-weighting pre-filter (ITU-R BS.1770-4)."""
from __future__ import annotations

import numpy as np

from loudqc.dsp.biquad import apply_biquad
from loudqc.types import BiquadCoefficients

# Stage 1: head-diffraction high shelf.
K_WEIGHT_HIGH_SHELF = BiquadCoefficients(
    b0=1.53512485958697,
    b1=-2.69169618940638,
    b2=1.19839281085285,
    a1=-1.69065929318241,
    a2=0.73248077421585,
)

# Stage 2: RLB high-pass.
K_WEIGHT_HIGH_PASS = BiquadCoefficients(
    b0=1.0,
    b1=-2.0,
    b2=1.0,
    a1=-1.99004745483398,
    a2=0.99007225036621,
)


def apply_k_weighting(samples: np.ndarray) -> np.ndarray:
    """Apply the shelf stage, then the high-pass stage."""
    stage1 = apply_biquad(samples, K_WEIGHT_HIGH_SHELF)
    return apply_biquad(stage1, K_WEIGHT_HIGH_PASS)
