"""Second-order IIR (biquad) filtering."""
from __future__ import annotations

import numpy as np
from scipy.signal import lfilter

from loudqc.metrics.levels import validate_mono
from loudqc.types import BiquadCoefficients


def apply_biquad(samples: np.ndarray, coeffs: BiquadCoefficients) -> np.ndarray:
    """
    Filter a mono buffer through one biquad section.

    Evaluates ``y[n] = b0*x[n] + b1*x[n-1] + b2*x[n-2] - a1*y[n-1] - a2*y[n-2]``
    with the filter state zeroed at the start of every call, so the output
    depends only on ``samples`` and ``coeffs``.

    Args:
        samples: Mono audio samples (1D array, any length)
        coeffs: Normalized biquad coefficients (a0 == 1)

    Returns:
        Filtered samples, same length as the input
    """
    x = validate_mono(samples, "apply_biquad input")
    if x.size == 0:
        return np.zeros(0, dtype=np.float64)
    b = np.array([coeffs.b0, coeffs.b1, coeffs.b2], dtype=np.float64)
    a = np.array([1.0, coeffs.a1, coeffs.a2], dtype=np.float64)
    return np.asarray(lfilter(b, a, x), dtype=np.float64)
