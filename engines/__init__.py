"""Blur hash engines - pure computation, no image decoding."""

from .color_space import SRGB_TO_LINEAR, to_linear, to_linear_array, to_gamma, rgb_to_ycbcr, subsample_chroma
from .sampler import (
    CallableSource,
    PackedRGBASource,
    PlanarYCbCrSource,
    GenericSampler,
    as_source,
    make_sampler,
)
from .dct_engine import compute_coefficients
from .quantizer import quantize, quantize_max, encode_dc, encode_ac
from .base83 import append_base83, encode_base83, pack
from .pipeline import encode, append_encoded, encoded_length, encode_components

__all__ = [
    'SRGB_TO_LINEAR',
    'to_linear',
    'to_linear_array',
    'to_gamma',
    'rgb_to_ycbcr',
    'subsample_chroma',
    'CallableSource',
    'PackedRGBASource',
    'PlanarYCbCrSource',
    'GenericSampler',
    'as_source',
    'make_sampler',
    'compute_coefficients',
    'quantize',
    'quantize_max',
    'encode_dc',
    'encode_ac',
    'append_base83',
    'encode_base83',
    'pack',
    'encode',
    'append_encoded',
    'encoded_length',
    'encode_components',
]
