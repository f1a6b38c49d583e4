"""Tests for the encode pipeline and public API."""

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from engines.pipeline import encode, append_encoded, encoded_length, encode_components
from engines.sampler import CallableSource
from models.encode_params import EncodeParams
from models.errors import BlurHashError, InvalidComponentCount, InvalidImageDimensions
from utils.constants import BASE83_ALPHABET
from utils.test_images import (
    generate_solid,
    generate_gradient,
    generate_colored_checkerboard,
    generate_chroma_stripes,
    generate_noise,
)


def _reference_encode(pixels, components_x, components_y):
    """Straight transcription of the published pure-Python encoder."""
    def srgb_to_linear(value):
        value = float(value) / 255.0
        if value <= 0.04045:
            return value / 12.92
        return math.pow((value + 0.055) / 1.055, 2.4)

    def linear_to_srgb(value):
        value = max(0.0, min(1.0, value))
        if value <= 0.0031308:
            return int(value * 12.92 * 255 + 0.5)
        return int((1.055 * math.pow(value, 1 / 2.4) - 0.055) * 255 + 0.5)

    def sign_pow(value, exp):
        return math.copysign(math.pow(abs(value), exp), value)

    def base83(value, length):
        return ''.join(BASE83_ALPHABET[value // 83 ** (length - i) % 83] for i in range(1, length + 1))

    height, width = len(pixels), len(pixels[0])
    linear = [[[srgb_to_linear(c) for c in px[:3]] for px in row] for row in pixels]
    components = []
    max_ac = 0.0
    for j in range(components_y):
        for i in range(components_x):
            norm = 1.0 if (i == 0 and j == 0) else 2.0
            comp = [0.0, 0.0, 0.0]
            for y in range(height):
                for x in range(width):
                    basis = norm * math.cos(math.pi * i * x / width) * math.cos(math.pi * j * y / height)
                    for c in range(3):
                        comp[c] += basis * linear[y][x][c]
            comp = [v / (width * height) for v in comp]
            components.append(comp)
            if not (i == 0 and j == 0):
                max_ac = max(max_ac, *(abs(v) for v in comp))

    dc = (linear_to_srgb(components[0][0]) << 16) + (linear_to_srgb(components[0][1]) << 8) + \
        linear_to_srgb(components[0][2])
    quant_max = int(max(0, min(82, math.floor(max_ac * 166 - 0.5))))
    norm_max = float(quant_max + 1) / 166.0

    def q(v):
        return int(max(0.0, min(18.0, math.floor(sign_pow(v / norm_max, 0.5) * 9.0 + 9.5))))

    out = base83((components_x - 1) + (components_y - 1) * 9, 1) + base83(quant_max, 1) + base83(dc, 4)
    for r, g, b in components[1:]:
        out += base83(q(r) * 19 * 19 + q(g) * 19 + q(b), 2)
    return out


def test_encoded_length_formula():
    assert encoded_length(1, 1) == 6
    assert encoded_length(4, 3) == 28
    assert encoded_length(9, 9) == 166


def test_length_for_every_component_pair():
    image = generate_gradient(12, 9)
    for w in range(1, 10):
        for h in range(1, 10):
            assert len(encode(image, w, h)) == encoded_length(w, h)


def test_deterministic():
    image = generate_noise(21, 14)
    assert encode(image, 5, 4) == encode(image, 5, 4)


def test_flat_mid_gray_reference_vector():
    """4x4 flat gray (128) with a single component."""
    image = generate_solid(4, 4, (128, 128, 128))
    assert encode(image, 1, 1) == '00Eyb['


def test_black_image_ac_digits_are_zero():
    """Zero linear light: scale digit '0' and every AC pair is the zero pair."""
    result = encode(generate_solid(16, 12, (0, 0, 0)), 4, 3)
    zero_pair = BASE83_ALPHABET[3429 // 83] + BASE83_ALPHABET[3429 % 83]
    assert result[0] == BASE83_ALPHABET[2 * 9 + 3]
    assert result[1] == '0'
    assert result[2:6] == '0000'
    assert result[6:] == zero_pair * 11


def test_solid_single_component_is_six_chars():
    result = encode(generate_solid(7, 5, (12, 200, 99)), 1, 1)
    assert len(result) == 6
    assert result[:2] == '00'


def test_max_components_shape_digit():
    """9x9 packs into the single shape digit 80."""
    result = encode(generate_gradient(10, 10), 9, 9)
    assert result[0] == BASE83_ALPHABET[80] == '|'
    assert len(result) == 166


@pytest.mark.parametrize('image, w, h', [
    (generate_gradient(16, 11), 4, 3),
    (generate_colored_checkerboard(24, 16, 4), 5, 5),
    (generate_chroma_stripes(20, 9), 9, 2),
    (generate_noise(13, 10)[:, :, :3], 3, 7),
    (generate_solid(6, 9, (250, 20, 140)), 4, 4),
])
def test_matches_reference_encoder(image, w, h):
    assert encode(image, w, h) == _reference_encode(image.tolist(), w, h)


@pytest.mark.parametrize('image', [
    generate_gradient(40, 30),
    generate_colored_checkerboard(64, 48),
    generate_chroma_stripes(64, 32),
    generate_noise(37, 23),
])
def test_strategies_give_identical_hashes(image):
    for w, h in [(1, 1), (4, 3), (9, 9), (2, 8)]:
        assert encode(image, w, h, strategy='direct') == encode(image, w, h, strategy='recurrence')


def test_digit_ranges_in_output():
    quantized, coeffs = encode_components(generate_noise(25, 17), EncodeParams(6, 5))
    assert 0 <= quantized.quantized_max <= 82
    assert 0 <= quantized.dc < 2 ** 24
    assert all(0 <= v <= 6858 for v in quantized.ac)
    assert coeffs.values.shape == (30, 3)


@pytest.mark.parametrize('w, h', [(0, 3), (10, 3), (4, 0), (4, 10), (-1, 1)])
def test_rejects_component_counts(w, h):
    with pytest.raises(InvalidComponentCount):
        encode(generate_solid(4, 4), w, h)


def test_rejects_non_integer_component_counts():
    with pytest.raises(InvalidComponentCount):
        encode(generate_solid(4, 4), 2.5, 3)
    with pytest.raises(InvalidComponentCount):
        EncodeParams(True, 3)


def test_accepts_numpy_integer_components():
    image = generate_gradient(8, 8)
    assert encode(image, np.int64(3), np.int32(2)) == encode(image, 3, 2)


@pytest.mark.parametrize('shape', [(0, 5, 3), (5, 0, 3), (0, 0, 4)])
def test_rejects_empty_images(shape):
    with pytest.raises(InvalidImageDimensions):
        encode(np.zeros(shape, dtype=np.uint8), 4, 3)


def test_errors_are_value_errors():
    assert issubclass(InvalidComponentCount, BlurHashError)
    assert issubclass(InvalidImageDimensions, ValueError)


def test_rejection_happens_before_sampling():
    calls = []

    def at(x, y):
        calls.append((x, y))
        return 0, 0, 0, 0xffff

    with pytest.raises(InvalidComponentCount):
        encode(CallableSource(4, 4, at), 0, 3)
    with pytest.raises(InvalidImageDimensions):
        encode(CallableSource(0, 4, at), 4, 3)
    assert calls == []


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        encode(generate_solid(4, 4), 4, 3, strategy='fft')


def test_append_encoded_extends_buffer():
    image = generate_gradient(16, 12)
    buf = bytearray(b'hash:')
    out = append_encoded(buf, image, 4, 3)
    assert out is buf
    assert buf[:5] == b'hash:'
    assert buf[5:].decode('ascii') == encode(image, 4, 3)
    assert len(buf) == 5 + encoded_length(4, 3)


def test_append_encoded_leaves_buffer_on_error():
    buf = bytearray(b'abc')
    with pytest.raises(InvalidComponentCount):
        append_encoded(buf, generate_solid(4, 4), 4, 12)
    assert buf == b'abc'


def test_concurrent_encodes_agree():
    """Encodes share only the read-only table; threads need no locking."""
    images = [generate_noise(30, 20, seed=s) for s in range(8)]
    expected = [encode(img, 5, 4) for img in images]
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda img: encode(img, 5, 4), images * 4))
    assert results == expected * 4
