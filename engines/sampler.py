"""Pixel sources and samplers.

A pixel source is anything with ``width``, ``height`` and
``rgba64(x, y) -> (r, g, b, a)`` returning 16-bit alpha-premultiplied
samples (an 8-bit value ``v`` expands to ``v * 0x101``). Samplers reduce a
source to 8-bit R, G, B by keeping the top byte of each sample.

Sources that know their memory layout hand out a specialized sampler from
``sampler()``; its rows must match the generic per-pixel query exactly.
"""

import logging
from typing import Callable, Protocol, Tuple

import numpy as np
from PIL import Image

from engines.color_space import (
    chroma_factors,
    chroma_shape,
    rgb_to_ycbcr,
    subsample_chroma,
    ycbcr_to_rgba64,
    ycbcr_to_rgb8,
)

logger = logging.getLogger(__name__)

RGBA64 = Tuple[int, int, int, int]


class PixelSource(Protocol):
    width: int
    height: int

    def rgba64(self, x: int, y: int) -> RGBA64: ...


class GenericSampler:
    """Per-pixel sampler over any :class:`PixelSource`."""

    def __init__(self, source: PixelSource):
        self.source = source
        self.width = int(source.width)
        self.height = int(source.height)

    def at(self, x: int, y: int) -> Tuple[int, int, int]:
        r, g, b, _ = self.source.rgba64(x, y)
        return (r >> 8) & 0xff, (g >> 8) & 0xff, (b >> 8) & 0xff

    def row(self, y: int) -> np.ndarray:
        """Row ``y`` as a (width, 3) uint8 array."""
        out = np.empty((self.width, 3), dtype=np.uint8)
        for x in range(self.width):
            out[x] = self.at(x, y)
        return out


class CallableSource:
    """Source backed by a function returning 16-bit RGBA for (x, y)."""

    def __init__(self, width: int, height: int, at: Callable[[int, int], RGBA64]):
        self.width = width
        self.height = height
        self._at = at

    def rgba64(self, x: int, y: int) -> RGBA64:
        return self._at(x, y)

    def sampler(self) -> GenericSampler:
        return GenericSampler(self)


# ---------------------------------------------------------------------------
# Packed RGB(A), straight alpha
# ---------------------------------------------------------------------------

class PackedRGBASource:
    """Interleaved uint8 pixels of shape (H, W), (H, W, 3) or (H, W, 4).

    Alpha is straight (not premultiplied); samples are premultiplied on read.
    """

    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels)
        if pixels.dtype != np.uint8:
            raise ValueError(f"Packed pixels must be uint8, got {pixels.dtype}")
        if pixels.ndim == 2:
            pixels = np.repeat(pixels[:, :, None], 3, axis=2)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(f"Packed pixels must have shape (H, W, 3|4), got {pixels.shape}")
        self.pixels = pixels
        self.height, self.width = pixels.shape[:2]

    @property
    def has_alpha(self) -> bool:
        return self.pixels.shape[2] == 4

    def rgba64(self, x: int, y: int) -> RGBA64:
        px = self.pixels[y, x]
        a = int(px[3]) if self.has_alpha else 0xff
        r = (int(px[0]) * 0x101) * a // 0xff
        g = (int(px[1]) * 0x101) * a // 0xff
        b = (int(px[2]) * 0x101) * a // 0xff
        return r, g, b, a * 0x101

    def sampler(self) -> 'PackedRGBASampler':
        return PackedRGBASampler(self)


class PackedRGBASampler(GenericSampler):
    """Row-at-a-time sampler for :class:`PackedRGBASource`."""

    def row(self, y: int) -> np.ndarray:
        px = self.source.pixels[y]
        rgb = px[:, :3]
        if not self.source.has_alpha:
            return np.ascontiguousarray(rgb)
        a = px[:, 3:4].astype(np.int64)
        premul = (rgb.astype(np.int64) * 0x101) * a // 0xff
        return (premul >> 8).astype(np.uint8)


# ---------------------------------------------------------------------------
# Planar YCbCr with subsampled chroma
# ---------------------------------------------------------------------------

class PlanarYCbCrSource:
    """Separate Y, Cb, Cr uint8 planes; chroma may be subsampled.

    ``mode`` is one of ``4:4:4``, ``4:2:2``, ``4:2:0``, ``4:4:0``, ``4:1:1``,
    ``4:1:0``. Chroma planes cover the luma plane rounded up.
    """

    def __init__(self, y: np.ndarray, cb: np.ndarray, cr: np.ndarray, mode: str = '4:2:0'):
        self.fx, self.fy = chroma_factors(mode)
        self.mode = mode
        self.y, self.cb, self.cr = (np.asarray(p) for p in (y, cb, cr))
        for name, plane in (('Y', self.y), ('Cb', self.cb), ('Cr', self.cr)):
            if plane.dtype != np.uint8:
                raise ValueError(f"{name} plane must be uint8, got {plane.dtype}")
        if self.y.ndim != 2:
            raise ValueError(f"Luma plane must be 2D, got shape {self.y.shape}")
        expected = chroma_shape(self.y.shape, mode)
        if self.cb.shape != expected or self.cr.shape != expected:
            raise ValueError(
                f"Chroma planes for {mode} must be {expected}, got {self.cb.shape} and {self.cr.shape}"
            )
        self.height, self.width = self.y.shape

    @classmethod
    def from_rgb(cls, rgb: np.ndarray, mode: str = '4:2:0') -> 'PlanarYCbCrSource':
        """Build planes from a packed RGB uint8 image."""
        ycbcr = rgb_to_ycbcr(np.asarray(rgb)[:, :, :3].astype(np.float64))
        y = np.clip(np.round(ycbcr[:, :, 0]), 0, 255).astype(np.uint8)
        cb, cr = subsample_chroma(ycbcr[:, :, 1], ycbcr[:, :, 2], mode)
        return cls(y, cb, cr, mode)

    def rgba64(self, x: int, y: int) -> RGBA64:
        cy, cx = y // self.fy, x // self.fx
        return ycbcr_to_rgba64(self.y[y, x], self.cb[cy, cx], self.cr[cy, cx])

    def sampler(self) -> 'PlanarYCbCrSampler':
        return PlanarYCbCrSampler(self)


class PlanarYCbCrSampler(GenericSampler):
    """Row-at-a-time sampler for :class:`PlanarYCbCrSource`."""

    def __init__(self, source: PlanarYCbCrSource):
        super().__init__(source)
        self._cx = np.arange(self.width) // source.fx

    def row(self, y: int) -> np.ndarray:
        src = self.source
        cy = y // src.fy
        return ycbcr_to_rgb8(src.y[y], src.cb[cy, self._cx], src.cr[cy, self._cx])


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

SIXTEEN_BIT_MODES = ('I;16', 'I;16L', 'I;16B', 'I;16N', 'I')


def from_pil(image: Image.Image):
    """Adapt a PIL image, keeping its pixel layout where one is supported.

    16-bit grey modes keep the top byte of each sample. Float images have no
    defined sample range and are rejected.
    """
    if image.mode in ('RGB', 'RGBA'):
        return PackedRGBASource(np.asarray(image))
    if image.mode == 'YCbCr':
        planes = np.asarray(image)
        return PlanarYCbCrSource(planes[:, :, 0], planes[:, :, 1], planes[:, :, 2], '4:4:4')
    if image.mode in SIXTEEN_BIT_MODES:
        samples = np.clip(np.asarray(image).astype(np.int64), 0, 0xffff)
        return PackedRGBASource((samples >> 8).astype(np.uint8))
    if image.mode == 'F':
        raise ValueError("Float PIL images are not supported; convert to an integer mode first")
    # remaining modes hold 8-bit samples
    return PackedRGBASource(np.asarray(image.convert('RGBA')))


def as_source(image) -> PixelSource:
    """Adapt ``image`` to the pixel source protocol."""
    if hasattr(image, 'rgba64') and hasattr(image, 'width') and hasattr(image, 'height'):
        return image
    if isinstance(image, np.ndarray):
        return PackedRGBASource(image)
    if isinstance(image, Image.Image):
        return from_pil(image)
    raise TypeError(f"Unsupported image type: {type(image).__name__}")


def make_sampler(source: PixelSource) -> GenericSampler:
    """Sampler chosen by the source; generic per-pixel access otherwise."""
    factory = getattr(source, 'sampler', None)
    sampler = factory() if callable(factory) else GenericSampler(source)
    logger.debug("Sampling %dx%d %s with %s",
                 sampler.width, sampler.height, type(source).__name__, type(sampler).__name__)
    return sampler
