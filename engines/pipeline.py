"""Blur hash encode pipeline: sample, project, quantize, pack."""

import logging
from typing import Tuple

from engines.base83 import pack
from engines.dct_engine import compute_coefficients
from engines.quantizer import quantize
from engines.sampler import as_source, make_sampler
from models.coefficients import Coefficients
from models.encode_params import EncodeParams
from models.errors import InvalidImageDimensions
from models.quantized_hash import QuantizedHash
from utils.constants import AC_DIGITS, DC_DIGITS, MAX_DIGITS, SHAPE_DIGITS
from utils.metrics import Timer

logger = logging.getLogger(__name__)


def encoded_length(x_components: int, y_components: int) -> int:
    """Length in characters of a hash with the given component counts."""
    return SHAPE_DIGITS + MAX_DIGITS + DC_DIGITS + AC_DIGITS * (x_components * y_components - 1)


def encode_components(image, params: EncodeParams) -> Tuple[QuantizedHash, Coefficients]:
    """Run sampling, projection and quantization; return both stages."""
    source = as_source(image)
    if source.width < 1 or source.height < 1:
        raise InvalidImageDimensions(source.width, source.height)

    sampler = make_sampler(source)
    timer = Timer()
    coefficients = timer.measure(
        compute_coefficients, sampler, params.x_components, params.y_components, params.strategy
    )
    quantized = quantize(coefficients)

    logger.debug(
        "Encoded %dx%d image with %dx%d components (%s) in %.2f ms",
        source.width, source.height, params.x_components, params.y_components,
        params.strategy, timer.elapsed_ms,
    )
    return quantized, coefficients


def append_encoded(
    buffer: bytearray,
    image,
    x_components: int = 4,
    y_components: int = 3,
    strategy: str = 'recurrence'
) -> bytearray:
    """Append the blur hash of ``image`` to ``buffer`` as ASCII bytes.

    Nothing is appended if the request is rejected.
    """
    params = EncodeParams(x_components, y_components, strategy)
    quantized, _ = encode_components(image, params)
    return pack(quantized, buffer)


def encode(image, x_components: int = 4, y_components: int = 3, strategy: str = 'recurrence') -> str:
    """Blur hash of ``image``.

    ``image`` may be a uint8 numpy array (H, W[, 3|4]), a PIL image or any
    pixel source (see :mod:`engines.sampler`).

    Raises:
        InvalidComponentCount: a component count is outside 1-9.
        InvalidImageDimensions: the image has zero width or height.
    """
    return append_encoded(bytearray(), image, x_components, y_components, strategy).decode('ascii')
