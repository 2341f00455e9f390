"""Ray tracer math kernel.

Modules:
    - tuples: Point / Vector / raw Tuple homogeneous algebra
    - color: unbounded RGB algebra
    - canvas: pixel buffer, tone mapping, PNG output

Depends only on src.utils.
"""

from .canvas import Canvas, ImageWriteError, PixelOutOfBoundsError, quantize, tone_map
from .color import BLACK, BLUE, GREEN, RED, WHITE, Color
from .tuples import HomogeneousTuple, IllegalOperationError, Point, Tuple, Vector

__all__ = [
    'BLACK',
    'BLUE',
    'Canvas',
    'Color',
    'GREEN',
    'HomogeneousTuple',
    'IllegalOperationError',
    'ImageWriteError',
    'PixelOutOfBoundsError',
    'Point',
    'RED',
    'Tuple',
    'Vector',
    'WHITE',
    'quantize',
    'tone_map',
]
