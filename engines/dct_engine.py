"""Cosine basis projection (unnormalized 2D DCT-II at a few frequencies).

For every pixel (x, y) and frequency pair (i, j) the engine accumulates
``cos(pi*i*y/H) * cos(pi*j*x/W) * linear(x, y)`` into coefficient ``i*w + j``.
Cost is O(W*H*w*h); rows are streamed from the sampler.
"""

import math
from typing import Iterator

import numpy as np

from engines.color_space import to_linear_array
from models.coefficients import Coefficients
from models.encode_params import STRATEGIES


def _rotate(sin_a: np.ndarray, cos_a: np.ndarray, sin_b: np.ndarray, cos_b: np.ndarray):
    """Angle addition: (sin(a + b), cos(a + b))."""
    return sin_a * cos_b + cos_a * sin_b, cos_a * cos_b - sin_a * sin_b


def recurrence_cosines(components: int, length: int) -> Iterator[np.ndarray]:
    """Yield ``cos(pi*k*pos/length)`` for k < components, pos = 0 .. length-1.

    Keeps one running (sin, cos) pair per frequency and rotates it by the
    fixed step ``pi*k/length`` instead of calling cos. Drift is bounded by
    ``length`` steps since the state restarts at every axis start.
    """
    steps = math.pi * np.arange(components) / length
    step_sin, step_cos = np.sin(steps), np.cos(steps)

    sin = np.zeros(components)
    cos = np.ones(components)
    for pos in range(length):
        if pos == 0:
            sin[:] = 0.0
            cos[:] = 1.0
        else:
            sin, cos = _rotate(sin, cos, step_sin, step_cos)
            # frequency 0 is constant
            sin[0] = 0.0
            cos[0] = 1.0
        yield cos


def direct_cosines(components: int, length: int) -> Iterator[np.ndarray]:
    """Yield ``cos(pi*k*pos/length)`` evaluated directly."""
    step = math.pi / length
    freqs = np.arange(components)
    for pos in range(length):
        yield np.cos(step * (freqs * pos))


def axis_cosines(components: int, length: int, strategy: str = 'recurrence') -> Iterator[np.ndarray]:
    """Per-position cosine vectors along one axis."""
    if strategy == 'recurrence':
        return recurrence_cosines(components, length)
    if strategy == 'direct':
        return direct_cosines(components, length)
    raise ValueError(f"Strategy must be one of {STRATEGIES}, got {strategy!r}")


def compute_coefficients(
    sampler,
    x_components: int,
    y_components: int,
    strategy: str = 'recurrence'
) -> Coefficients:
    """Project the sampled image onto ``x_components * y_components`` cosines.

    Returns normalized coefficients: DC scaled by 1/(W*H), AC by 2/(W*H).
    """
    width, height = sampler.width, sampler.height

    # Horizontal state restarts at the first pixel of every row, so the
    # sequence is the same for all rows: table of shape (w, W).
    x_cos = np.stack(list(axis_cosines(x_components, width, strategy)), axis=1)

    sums = np.zeros((y_components, x_components, 3), dtype=np.float64)
    rows = axis_cosines(y_components, height, strategy)
    for y, y_cos in enumerate(rows):
        linear = to_linear_array(sampler.row(y))
        row_sums = x_cos @ linear
        sums += y_cos[:, None, None] * row_sums[None, :, :]

    coefficients = Coefficients(
        x_components=x_components,
        y_components=y_components,
        values=sums.reshape(y_components * x_components, 3),
    )
    coefficients.scale(width, height)
    return coefficients
