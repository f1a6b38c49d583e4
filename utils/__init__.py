"""Shared utilities."""

from .constants import BASE83_ALPHABET, MIN_COMPONENTS, MAX_COMPONENTS, SUBSAMPLING_RATIOS
from .metrics import Timer
from .test_images import (
    generate_solid,
    generate_colored_checkerboard,
    generate_thin_stripes,
    generate_gradient,
    generate_chroma_stripes,
    generate_noise,
)

__all__ = [
    'BASE83_ALPHABET',
    'MIN_COMPONENTS',
    'MAX_COMPONENTS',
    'SUBSAMPLING_RATIOS',
    'Timer',
    'generate_solid',
    'generate_colored_checkerboard',
    'generate_thin_stripes',
    'generate_gradient',
    'generate_chroma_stripes',
    'generate_noise',
]
