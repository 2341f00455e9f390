"""Pixel canvas with hue-preserving tone mapping and PNG encoding.

The canvas owns a fixed-size, row-major buffer of unbounded RGB values
(pixel (x, y) lives at flat index y * width + x). Pixels are written one at a
time; no write depends on any other pixel, so a parallel write phase can be
added later without changing the layout.

Encoding pipeline (applied to a snapshot, never to the live buffer):
    1. tone_map: m = max(r, g, b); m == 0 → (0, 0, 0), else channel / m × 255.
       Relative channel ratios (hue) survive, unlike per-channel clamping.
    2. clamp each channel to [0, 255]
    3. quantize: truncate to uint8, append alpha 255 → row-major RGBA

Output:
    - Canvas.encode(): raw RGBA bytes (width × height × 4)
    - Canvas.to_png_bytes(): 8-bit RGBA PNG via Pillow
    - Canvas.write_to_path(): atomic PNG write, ImageWriteError on failure

Invariants:
    - len(canvas) == width * height for the canvas lifetime
    - Out-of-range coordinates raise PixelOutOfBoundsError (never wrap around)
    - Identical buffers encode to identical bytes
"""

import io
import logging
import operator
from pathlib import Path
from typing import Iterator, Tuple, Union

import numpy as np
from PIL import Image

from src.utils import fs

from .color import Color

logger = logging.getLogger(__name__)

ALPHA = 255
MAX_CHANNEL = 255.0


class PixelOutOfBoundsError(IndexError):
    """Raised when a pixel coordinate falls outside [0, width) × [0, height)."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Pixel ({x}, {y}) is outside the {width}x{height} canvas."
        )


class ImageWriteError(OSError):
    """Raised when the encoded image could not be written to storage.

    Attributes
    ----------
    path : Path
        Destination that failed
    cause : BaseException
        Underlying OS error
    """

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not write PNG to {self.path}: {cause}")


# ============================================================================
# TONE MAPPING
# ============================================================================

def tone_map(pixels: np.ndarray) -> np.ndarray:
    """Hue-preserving exposure compression into [0, 255].

    Parameters
    ----------
    pixels : np.ndarray
        Unbounded RGB values, shape (..., 3)

    Returns
    -------
    np.ndarray
        float64 array, same shape, every channel in [0, 255]

    Notes
    -----
    Each pixel is divided by its largest channel and scaled to 255, then
    clamped. A pixel whose maximum is exactly 0 maps to black. NaN in the
    maximum is ignored; a NaN result (NaN channel, or inf / inf when the
    maximum is infinite) saturates to 255, so an over-exposed channel stays
    bright. A negative maximum flips signs and saturates to white. The input
    is not modified.
    """
    pixels = np.asarray(pixels, dtype=np.float64)
    if pixels.shape[-1] != 3:
        raise ValueError(f"Expected shape (..., 3), got {pixels.shape}")

    m = np.fmax.reduce(pixels, axis=-1, keepdims=True)
    with np.errstate(divide='ignore', invalid='ignore'):
        scaled = np.where(m == 0.0, 0.0, pixels / m * MAX_CHANNEL)
    scaled = np.nan_to_num(scaled, nan=MAX_CHANNEL, posinf=MAX_CHANNEL, neginf=0.0)
    return np.clip(scaled, 0.0, MAX_CHANNEL)


def quantize(tone_mapped: np.ndarray) -> np.ndarray:
    """Truncate tone-mapped channels to uint8 and append a constant alpha.

    Parameters
    ----------
    tone_mapped : np.ndarray
        Output of tone_map, shape (..., 3), range [0, 255]

    Returns
    -------
    np.ndarray
        uint8 array, shape (..., 4), RGBA with alpha = 255
    """
    rgb = np.clip(tone_mapped, 0.0, MAX_CHANNEL).astype(np.uint8)
    alpha = np.full(rgb.shape[:-1] + (1,), ALPHA, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1)


# ============================================================================
# CANVAS
# ============================================================================

class Canvas:
    """Fixed-size 2D buffer of colors, initialized to black."""

    __slots__ = ('_width', '_height', '_pixels')

    def __init__(self, width: int, height: int):
        width = operator.index(width)
        height = operator.index(height)
        if width < 0 or height < 0:
            raise ValueError(f"Canvas size must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __len__(self) -> int:
        return self._width * self._height

    def __iter__(self) -> Iterator[Color]:
        """Yield every pixel in row-major order."""
        for r, g, b in self._pixels.reshape(-1, 3):
            yield Color(float(r), float(g), float(b))

    def __repr__(self):
        return f"Canvas(width={self._width}, height={self._height})"

    def _check_bounds(self, x: int, y: int) -> Tuple[int, int]:
        x = operator.index(x)
        y = operator.index(y)
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise PixelOutOfBoundsError(x, y, self._width, self._height)
        return x, y

    def pixel_at(self, x: int, y: int) -> Color:
        """Return a copy of the color at (x, y).

        Raises
        ------
        PixelOutOfBoundsError
            If x ∉ [0, width) or y ∉ [0, height)
        """
        x, y = self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Replace the color at (x, y).

        Raises
        ------
        PixelOutOfBoundsError
            If x ∉ [0, width) or y ∉ [0, height)
        TypeError
            If color is not a Color
        """
        if not isinstance(color, Color):
            raise TypeError(f"Expected Color, got {type(color).__name__}")
        x, y = self._check_bounds(x, y)
        self._pixels[y, x] = (color.red, color.green, color.blue)

    def copy(self) -> "Canvas":
        """Independent canvas with the same size and pixel values."""
        other = Canvas(self._width, self._height)
        other._pixels[...] = self._pixels
        return other

    def to_array(self) -> np.ndarray:
        """Copy of the raw buffer, shape (height, width, 3), float64."""
        return self._pixels.copy()

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_rgba(self) -> np.ndarray:
        """Tone-map and quantize a snapshot of the buffer.

        Returns
        -------
        np.ndarray
            uint8 array, shape (height, width, 4)
        """
        return quantize(tone_map(self._pixels.copy()))

    def encode(self) -> bytes:
        """Row-major RGBA samples, 4 bytes per pixel, in buffer order."""
        return self.to_rgba().tobytes()

    def to_png_bytes(self) -> bytes:
        """Encode as an 8-bit RGBA PNG.

        Raises
        ------
        ValueError
            If the canvas has zero width or height (PNG cannot be empty)
        """
        if self._width == 0 or self._height == 0:
            raise ValueError(
                f"Cannot encode an empty {self._width}x{self._height} canvas as PNG"
            )
        image = Image.fromarray(self.to_rgba())
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def write_to_path(self, path: Union[str, Path]) -> Path:
        """Write the canvas as PNG, replacing any existing file at path.

        Parameters
        ----------
        path : Union[str, Path]
            Destination file

        Returns
        -------
        Path
            The written path

        Raises
        ------
        ImageWriteError
            If the bytes could not be written; carries path and cause
        """
        path = Path(path)
        logger.info(f"Attempting to write {path}")
        data = self.to_png_bytes()
        try:
            fs.atomic_write_bytes(path, data)
        except fs.AtomicWriteError as e:
            logger.error(f"Writing {path} failed: {e.cause}")
            raise ImageWriteError(path, e.cause) from e
        logger.info(f"Finished writing {path} ({len(data)} bytes)")
        return path
