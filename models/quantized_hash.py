"""Quantized blur hash fields, ready for base-83 packing."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class QuantizedHash:
    """Integer fields of a blur hash in output order."""

    packed_shape: int
    quantized_max: int
    dc: int
    ac: List[int] = field(default_factory=list)

    # Reconstructed AC scale, not part of the text format
    max_value: float = 1.0
