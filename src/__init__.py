"""Ray Tracer Challenge: math kernel for a future ray-tracing renderer.

This package contains the numeric core that later rendering stages build on:
homogeneous-coordinate points and vectors, an unbounded color algebra, and a
pixel canvas that tone-maps itself into an 8-bit RGBA PNG.

Architecture layers (strict one-way dependency):
    scripts/ → src/ray_tracer/ → src/utils/

Key invariants:
    - Points carry w=1.0, vectors w=0.0; illegal combinations raise
    - All equality checks between computed floats go through src.utils.fuzzy
    - Canvas buffers are row-major, fixed-size after construction
    - Encoding reads a snapshot; it never mutates the live buffer
"""

__version__ = "0.2.0"
