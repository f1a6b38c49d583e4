"""sRGB linearization and YCbCr conversion for pixel sources."""

import math

import numpy as np
import cv2
from typing import Tuple

from utils.constants import SUBSAMPLING_RATIOS


def build_srgb_to_linear_table() -> np.ndarray:
    """256-entry sRGB byte -> linear light [0, 1] table (IEC 61966-2-1)."""
    v = np.arange(256, dtype=np.float64) / 255.0
    lin = np.where(v <= 0.04045, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)
    lin.flags.writeable = False
    return lin


# Built once at import; read-only afterwards, safe to share between threads.
SRGB_TO_LINEAR = build_srgb_to_linear_table()


def to_linear(value: int) -> float:
    """sRGB byte to linear light."""
    if not 0 <= value <= 255:
        raise ValueError(f"sRGB byte must be in [0, 255], got {value}")
    return float(SRGB_TO_LINEAR[value])


def to_linear_array(values: np.ndarray) -> np.ndarray:
    """Vectorized :func:`to_linear` for uint8 arrays."""
    return SRGB_TO_LINEAR[values]


def to_gamma(value: float) -> int:
    """Linear light to sRGB byte, clamped to [0, 255]."""
    v = max(0.0, min(1.0, value))
    if v <= 0.0031308:
        out = int(v * 12.92 * 255 + 0.5)
    else:
        out = int((1.055 * math.pow(v, 1 / 2.4) - 0.055) * 255 + 0.5)
    return max(0, min(255, out))


def rgb_to_ycbcr(rgb: np.ndarray) -> np.ndarray:
    """RGB to YCbCr using ITU-R BT.601 (full range)."""
    R, G, B = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]
    Y = 0.299 * R + 0.587 * G + 0.114 * B
    Cb = -0.168736 * R - 0.331264 * G + 0.5 * B + 128.0
    Cr = 0.5 * R - 0.418688 * G - 0.081312 * B + 128.0
    return np.stack([Y, Cb, Cr], axis=-1)


def ycbcr_to_rgba64(y: int, cb: int, cr: int) -> Tuple[int, int, int, int]:
    """One YCbCr sample to 16-bit RGBA.

    16.16 fixed point; results outside [0, 0xffff] saturate.
    """
    yy1 = int(y) * 0x10101
    cb1 = int(cb) - 128
    cr1 = int(cr) - 128

    r = yy1 + 91881 * cr1
    g = yy1 - 22554 * cb1 - 46802 * cr1
    b = yy1 + 116130 * cb1

    return (
        min(max(r, 0), 0xffffff) >> 8,
        min(max(g, 0), 0xffffff) >> 8,
        min(max(b, 0), 0xffffff) >> 8,
        0xffff,
    )


def ycbcr_to_rgb8(y: np.ndarray, cb: np.ndarray, cr: np.ndarray) -> np.ndarray:
    """Vectorized :func:`ycbcr_to_rgba64`, keeping the top 8 bits of R, G, B."""
    yy1 = y.astype(np.int64) * 0x10101
    cb1 = cb.astype(np.int64) - 128
    cr1 = cr.astype(np.int64) - 128

    r = yy1 + 91881 * cr1
    g = yy1 - 22554 * cb1 - 46802 * cr1
    b = yy1 + 116130 * cb1

    rgb = np.stack([r, g, b], axis=-1)
    return (np.clip(rgb, 0, 0xffffff) >> 16).astype(np.uint8)


def chroma_factors(mode: str) -> Tuple[int, int]:
    """Horizontal and vertical chroma subsampling factors for a ratio."""
    factors = {
        '4:4:4': (1, 1),
        '4:2:2': (2, 1),
        '4:2:0': (2, 2),
        '4:4:0': (1, 2),
        '4:1:1': (4, 1),
        '4:1:0': (4, 2),
    }
    if mode not in factors:
        raise ValueError(f"Unknown subsampling mode: {mode}, expected one of {SUBSAMPLING_RATIOS}")
    return factors[mode]


def chroma_shape(shape: Tuple[int, int], mode: str) -> Tuple[int, int]:
    """Chroma plane (height, width) covering a luma plane of ``shape``."""
    fx, fy = chroma_factors(mode)
    h, w = shape
    return (h + fy - 1) // fy, (w + fx - 1) // fx


def subsample_chroma(
    cb: np.ndarray,
    cr: np.ndarray,
    mode: str
) -> Tuple[np.ndarray, np.ndarray]:
    """Subsample chroma channels according to mode, rounded to uint8."""
    ch, cw = chroma_shape(cb.shape, mode)
    if mode == '4:4:4':
        cb_sub, cr_sub = cb, cr
    else:
        # Area averaging; plane sizes round up so every luma sample has chroma
        cb_sub = cv2.resize(cb.astype(np.float32), (cw, ch), interpolation=cv2.INTER_AREA)
        cr_sub = cv2.resize(cr.astype(np.float32), (cw, ch), interpolation=cv2.INTER_AREA)

    return (
        np.clip(np.round(cb_sub), 0, 255).astype(np.uint8).reshape(ch, cw),
        np.clip(np.round(cr_sub), 0, 255).astype(np.uint8).reshape(ch, cw),
    )
