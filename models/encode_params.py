"""Encode parameters."""

import numbers
from dataclasses import dataclass
from typing import Literal

from models.errors import InvalidComponentCount
from utils.constants import MIN_COMPONENTS, MAX_COMPONENTS

STRATEGIES = ('recurrence', 'direct')


def _check_components(axis: str, value) -> None:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidComponentCount(axis, value)
    if not (MIN_COMPONENTS <= value <= MAX_COMPONENTS):
        raise InvalidComponentCount(axis, value)


@dataclass
class EncodeParams:
    """Blur hash encode parameters.

    ``x_components`` counts horizontal cosine terms, ``y_components`` vertical
    ones. ``strategy`` picks how basis cosines are evaluated: ``'recurrence'``
    rotates a running (sin, cos) pair per frequency, ``'direct'`` calls cos.
    """

    x_components: int = 4
    y_components: int = 3
    strategy: Literal['recurrence', 'direct'] = 'recurrence'

    def __post_init__(self):
        _check_components('x', self.x_components)
        _check_components('y', self.y_components)
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Strategy must be one of {STRATEGIES}, got {self.strategy!r}")
