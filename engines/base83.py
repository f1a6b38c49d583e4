"""Base-83 digit packing used by the blur hash text format."""

from models.quantized_hash import QuantizedHash
from utils.constants import AC_DIGITS, BASE83_ALPHABET, DC_DIGITS, MAX_DIGITS, SHAPE_DIGITS

_DIGITS = BASE83_ALPHABET.encode('ascii')


def append_base83(buffer: bytearray, value: int, length: int) -> bytearray:
    """Append ``value`` as ``length`` big-endian base-83 digits."""
    value = int(value)
    if value < 0 or value >= 83 ** length:
        raise ValueError(f"{value} does not fit in {length} base-83 digits")

    divisor = 83 ** (length - 1)
    for _ in range(length):
        buffer.append(_DIGITS[(value // divisor) % 83])
        divisor //= 83
    return buffer


def encode_base83(value: int, length: int) -> str:
    return append_base83(bytearray(), value, length).decode('ascii')


def pack(quantized: QuantizedHash, buffer: bytearray) -> bytearray:
    """Append shape, scale, DC and AC digits in output order."""
    append_base83(buffer, quantized.packed_shape, SHAPE_DIGITS)
    append_base83(buffer, quantized.quantized_max, MAX_DIGITS)
    append_base83(buffer, quantized.dc, DC_DIGITS)
    for value in quantized.ac:
        append_base83(buffer, value, AC_DIGITS)
    return buffer
