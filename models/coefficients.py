"""Basis coefficients of one encode call."""

from dataclasses import dataclass

import numpy as np


@dataclass
class Coefficients:
    """Linear-light cosine coefficients, row-major, index 0 is DC.

    ``values`` has shape (x_components * y_components, 3).
    """

    x_components: int
    y_components: int
    values: np.ndarray

    @property
    def dc(self) -> np.ndarray:
        return self.values[0]

    @property
    def ac(self) -> np.ndarray:
        return self.values[1:]

    def scale(self, width: int, height: int) -> None:
        """Normalize raw sums: DC by 1/(W*H), AC by 2/(W*H)."""
        n = float(width * height)
        self.values[0] *= 1.0 / n
        self.values[1:] *= 2.0 / n

    @property
    def packed_shape(self) -> int:
        """Component counts folded into the single shape digit."""
        return (self.y_components - 1) * 9 + (self.x_components - 1)
