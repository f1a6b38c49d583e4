"""Data models for encode parameters, coefficients and errors."""

from .errors import BlurHashError, InvalidComponentCount, InvalidImageDimensions
from .encode_params import EncodeParams, STRATEGIES
from .coefficients import Coefficients
from .quantized_hash import QuantizedHash

__all__ = [
    'BlurHashError',
    'InvalidComponentCount',
    'InvalidImageDimensions',
    'EncodeParams',
    'STRATEGIES',
    'Coefficients',
    'QuantizedHash',
]
