"""Test the canvas buffer, tone mapping and PNG encoding.

Tests for src.ray_tracer.canvas:
    - Construction (size, all black)
    - Bounds-checked pixel_at / write_pixel
    - Row-major layout
    - tone_map: hue-preserving compression, clamp, NaN handling
    - quantize / encode: truncation, alpha, byte layout, snapshot semantics
    - PNG: decodable, 8-bit RGBA, deterministic
    - write_to_path: overwrite, atomic failure reporting

Run:
    pytest tests/test_canvas.py -v
"""

import io
import logging
import math

import numpy as np
import pytest
from PIL import Image

from src.ray_tracer.canvas import (
    ALPHA,
    Canvas,
    ImageWriteError,
    PixelOutOfBoundsError,
    quantize,
    tone_map,
)
from src.ray_tracer.color import BLACK, RED, Color
from src.utils import hashing
from src.utils.fuzzy import assert_feq, fuzzy_eq


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def canvas():
    """Blank 10×20 canvas."""
    return Canvas(10, 20)


@pytest.fixture
def gray_canvas():
    """Uniform mid-gray 8×6 canvas."""
    c = Canvas(8, 6)
    for y in range(c.height):
        for x in range(c.width):
            c.write_pixel(x, y, Color(0.5, 0.5, 0.5))
    return c


# ============================================================================
# CONSTRUCTION & ACCESS
# ============================================================================

def test_creating_a_canvas(canvas):
    """New canvas has the requested size and every pixel is black."""
    assert canvas.width == 10
    assert canvas.height == 20
    assert len(canvas) == 200
    for y in range(canvas.height):
        for x in range(canvas.width):
            assert_feq(canvas.pixel_at(x, y), BLACK)


def test_writing_pixels_to_a_canvas(canvas):
    """write_pixel then pixel_at returns the color; others stay black."""
    canvas.write_pixel(2, 3, RED)
    assert_feq(canvas.pixel_at(2, 3), RED)
    others = [c for i, c in enumerate(canvas) if i != 3 * canvas.width + 2]
    assert all(fuzzy_eq(c, BLACK) for c in others)


@pytest.mark.parametrize("x, y", [(10, 0), (0, 20), (10, 20), (-1, 0), (0, -1)])
def test_pixel_at_out_of_bounds(canvas, x, y):
    """Coordinates outside [0, width) × [0, height) raise, negatives included."""
    with pytest.raises(PixelOutOfBoundsError):
        canvas.pixel_at(x, y)


def test_write_pixel_out_of_bounds(canvas):
    """Writes outside the canvas raise and leave the buffer untouched."""
    with pytest.raises(PixelOutOfBoundsError) as exc_info:
        canvas.write_pixel(10, 0, RED)
    err = exc_info.value
    assert (err.x, err.y, err.width, err.height) == (10, 0, 10, 20)
    assert isinstance(err, IndexError)
    assert all(fuzzy_eq(c, BLACK) for c in canvas)


def test_non_integer_coordinates_are_rejected(canvas):
    with pytest.raises(TypeError):
        canvas.pixel_at(1.5, 0)


def test_write_pixel_requires_a_color(canvas):
    with pytest.raises(TypeError, match="Expected Color"):
        canvas.write_pixel(0, 0, (1.0, 0.0, 0.0))


def test_numpy_integer_coordinates(canvas):
    """numpy integers index like ints."""
    canvas.write_pixel(np.int64(1), np.int32(2), RED)
    assert_feq(canvas.pixel_at(1, 2), RED)


@pytest.mark.parametrize("w, h", [(-1, 5), (5, -1)])
def test_negative_size_is_rejected(w, h):
    with pytest.raises(ValueError, match="non-negative"):
        Canvas(w, h)


def test_pixel_at_returns_a_copy(canvas):
    """Later writes do not change colors already read."""
    canvas.write_pixel(0, 0, RED)
    before = canvas.pixel_at(0, 0)
    canvas.write_pixel(0, 0, BLACK)
    assert_feq(before, RED)


def test_iteration_is_row_major():
    """Flat index is y * width + x."""
    c = Canvas(3, 2)
    c.write_pixel(1, 0, Color(1.0, 0.0, 0.0))
    c.write_pixel(0, 1, Color(0.0, 1.0, 0.0))
    pixels = list(c)
    assert len(pixels) == 6
    assert_feq(pixels[1], Color(1.0, 0.0, 0.0))
    assert_feq(pixels[3], Color(0.0, 1.0, 0.0))


def test_copy_is_independent(canvas):
    canvas.write_pixel(1, 1, RED)
    other = canvas.copy()
    other.write_pixel(1, 1, BLACK)
    assert_feq(canvas.pixel_at(1, 1), RED)
    assert_feq(other.pixel_at(1, 1), BLACK)


# ============================================================================
# TONE MAPPING
# ============================================================================

@pytest.mark.parametrize("rgb, expected", [
    ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
    ((0.5, 0.5, 0.5), (255.0, 255.0, 255.0)),
    ((1.0, 0.5, 0.0), (255.0, 127.5, 0.0)),
    ((2.0, 1.0, 0.5), (255.0, 127.5, 63.75)),
    ((1.0, -0.5, 0.0), (255.0, 0.0, 0.0)),
    ((0.0, 0.0, 4.0), (0.0, 0.0, 255.0)),
    ((-1.0, -2.0, -3.0), (255.0, 255.0, 255.0)),
])
def test_tone_map_preserves_hue(rgb, expected):
    """Channels are divided by the pixel maximum, scaled to 255 and clamped."""
    out = tone_map(np.array([rgb]))
    assert np.allclose(out[0], expected)


def test_tone_map_differs_from_per_channel_clamp():
    """An over-exposed orange stays orange instead of turning yellow."""
    out = tone_map(np.array([[3.0, 1.5, 0.0]]))
    assert np.allclose(out[0], [255.0, 127.5, 0.0])


def test_tone_map_nan_channel_saturates():
    """NaN channels saturate to 255; the maximum ignores NaN."""
    out = tone_map(np.array([[math.nan, 1.0, 0.0]]))
    assert np.allclose(out[0], [255.0, 255.0, 0.0])


@pytest.mark.parametrize("rgb, expected", [
    ((math.inf, 1.0, 0.0), [255, 0, 0, 255]),
    ((math.inf, math.inf, math.inf), [255, 255, 255, 255]),
    ((0.0, math.inf, 2.0), [0, 255, 0, 255]),
])
def test_infinite_channels_stay_bright(rgb, expected):
    """An infinite maximum keeps its channel at full intensity."""
    c = Canvas(1, 1)
    c.write_pixel(0, 0, Color(*rgb))
    assert list(c.encode()) == expected


def test_tone_map_does_not_modify_input():
    pixels = np.array([[[2.0, 1.0, 0.5]]])
    before = pixels.copy()
    tone_map(pixels)
    assert np.array_equal(pixels, before)


def test_tone_map_rejects_wrong_shape():
    with pytest.raises(ValueError, match="Expected shape"):
        tone_map(np.zeros((2, 2, 4)))


def test_quantize_truncates_and_adds_alpha():
    out = quantize(np.array([[255.0, 127.5, 63.75]]))
    assert out.dtype == np.uint8
    assert out[0].tolist() == [255, 127, 63, ALPHA]


# ============================================================================
# ENCODING
# ============================================================================

def test_encode_layout():
    """One RGBA quadruple per pixel, in buffer order."""
    c = Canvas(2, 1)
    c.write_pixel(0, 0, Color(1.0, 0.5, 0.0))
    assert c.encode() == bytes([255, 127, 0, 255, 0, 0, 0, 255])


def test_encode_length(canvas):
    assert len(canvas.encode()) == canvas.width * canvas.height * 4
    assert canvas.to_rgba().shape == (20, 10, 4)


def test_encode_does_not_mutate_buffer():
    """Encoding works on a snapshot; live values stay unbounded."""
    c = Canvas(3, 3)
    c.write_pixel(1, 1, Color(2.0, 4.0, 8.0))
    c.encode()
    c.to_png_bytes()
    assert_feq(c.pixel_at(1, 1), Color(2.0, 4.0, 8.0))


def test_encoding_is_deterministic(gray_canvas):
    """Same buffer → byte-identical output."""
    assert gray_canvas.encode() == gray_canvas.encode()
    first = gray_canvas.to_png_bytes()
    second = gray_canvas.to_png_bytes()
    assert first == second
    assert hashing.sha256_bytes(first) == hashing.sha256_bytes(second)


def test_png_is_8bit_rgba(gray_canvas):
    """The PNG decodes to the tone-mapped pixels."""
    gray_canvas.write_pixel(0, 0, Color(1.0, 0.5, 0.0))
    image = Image.open(io.BytesIO(gray_canvas.to_png_bytes()))
    assert image.format == "PNG"
    assert image.mode == "RGBA"
    assert image.size == (8, 6)
    assert image.getpixel((0, 0)) == (255, 127, 0, 255)
    assert image.getpixel((1, 0)) == (255, 255, 255, 255)


def test_empty_canvas():
    """A 0×0 canvas encodes to no samples but cannot be a PNG."""
    c = Canvas(0, 0)
    assert len(c) == 0
    assert c.encode() == b""
    with pytest.raises(ValueError, match="empty"):
        c.to_png_bytes()


# ============================================================================
# WRITING
# ============================================================================

def test_write_to_path(tmp_path, gray_canvas, caplog):
    """Writes a decodable PNG and logs start/finish."""
    path = tmp_path / "out" / "gray.png"
    with caplog.at_level(logging.INFO, logger="src.ray_tracer.canvas"):
        written = gray_canvas.write_to_path(path)
    assert written == path
    assert path.read_bytes() == gray_canvas.to_png_bytes()
    assert "Finished writing" in caplog.text
    assert not list(path.parent.glob("*.tmp"))


def test_write_to_path_overwrites(tmp_path, gray_canvas):
    path = tmp_path / "gray.png"
    path.write_bytes(b"stale content")
    gray_canvas.write_to_path(path)
    with Image.open(path) as image:
        assert image.size == (8, 6)


def test_write_to_path_failure_reports_path(tmp_path, gray_canvas):
    """An unwritable destination raises ImageWriteError with context."""
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file, not directory")
    path = blocker / "gray.png"
    with pytest.raises(ImageWriteError) as exc_info:
        gray_canvas.write_to_path(path)
    err = exc_info.value
    assert err.path == path
    assert isinstance(err, OSError)
    assert isinstance(err.cause, OSError)
    assert err.__cause__ is not None
