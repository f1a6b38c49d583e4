"""Quantization of basis coefficients into blur hash integers."""

import math
from typing import Tuple

import numpy as np

from engines.color_space import to_gamma
from models.coefficients import Coefficients
from models.quantized_hash import QuantizedHash
from utils.constants import AC_LEVELS, AC_MAX_LEVELS, AC_MAX_SCALE


def sign_sqrt(values: np.ndarray) -> np.ndarray:
    """Sign-preserving square root."""
    return np.copysign(np.sqrt(np.abs(values)), values)


def quantize_max(ac: np.ndarray) -> Tuple[int, float]:
    """Shared AC scale as (quantized digit, reconstructed max).

    The reconstructed max is one bucket above the floor of the true max, so
    no AC value clips when it is divided back out.
    """
    if len(ac) == 0:
        return 0, 1.0
    actual_max = float(np.max(np.abs(ac)))
    quantized = int(np.clip(math.floor(actual_max * AC_MAX_SCALE - 0.5), 0, AC_MAX_LEVELS))
    return quantized, (quantized + 1) / AC_MAX_SCALE


def encode_dc(dc: np.ndarray) -> int:
    """Average color as a 24-bit sRGB integer."""
    r, g, b = (to_gamma(float(c)) for c in dc)
    return (r << 16) | (g << 8) | b


def quantize_ac(ac: np.ndarray, max_value: float) -> np.ndarray:
    """Per-channel AC digits in [0, 18], same shape as ``ac``."""
    q = np.floor(sign_sqrt(ac / max_value) * 9.0 + 9.5)
    return np.clip(q, 0, AC_LEVELS - 1).astype(np.int64)


def encode_ac(ac: np.ndarray, max_value: float) -> np.ndarray:
    """Combine per-channel AC digits as qR*19^2 + qG*19 + qB (0..6858)."""
    q = quantize_ac(np.atleast_2d(ac), max_value)
    return q[:, 0] * (AC_LEVELS * AC_LEVELS) + q[:, 1] * AC_LEVELS + q[:, 2]


def quantize(coefficients: Coefficients) -> QuantizedHash:
    """Quantize normalized coefficients into the fields of a blur hash."""
    quantized_max, max_value = quantize_max(coefficients.ac)
    ac = encode_ac(coefficients.ac, max_value) if len(coefficients.ac) else []

    return QuantizedHash(
        packed_shape=coefficients.packed_shape,
        quantized_max=quantized_max,
        dc=encode_dc(coefficients.dc),
        ac=[int(v) for v in ac],
        max_value=max_value,
    )
