"""Approximate equality for floating-point scalars and composite values.

Provides:
    - fuzzy_eq / fuzzy_ne: |a - b| < epsilon for scalars, component-wise
      for Tuples, Colors and plain sequences
    - assert_feq / assert_fne: assertion helpers with both values in the message
    - Process-wide epsilon: get_epsilon, set_epsilon, reset_epsilon,
      epsilon_override

Used by:
    - ray_tracer.tuples / ray_tracer.color: fuzzy_eq on composite values
    - Tests: every comparison of computed floats
    - Drivers: epsilon loaded from configs/render.v1.yaml

Exact equality is unusable after chained floating-point operations, so this is
the equality relation the rest of the package relies on.

Invariants:
    - Epsilon is a module-level value, resolved once at import time from
      RAY_TRACER_EPSILON (if set) or DEFAULT_EPSILON
    - Epsilon is always a positive finite float
    - Comparisons are strict: |a - b| == epsilon is NOT equal
"""

import logging
import math
import os
from contextlib import contextmanager
from numbers import Real
from typing import Any, Iterator

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-5
EPSILON_ENV_VAR = "RAY_TRACER_EPSILON"


def _validate_epsilon(value: Any) -> float:
    try:
        eps = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Epsilon must be a number, got {value!r}") from e
    if not math.isfinite(eps) or eps <= 0.0:
        raise ValueError(f"Epsilon must be a positive finite float, got {eps}")
    return eps


def _epsilon_from_env() -> float:
    raw = os.environ.get(EPSILON_ENV_VAR)
    if raw is None or raw.strip() == "":
        return DEFAULT_EPSILON
    return _validate_epsilon(raw)


_epsilon = _epsilon_from_env()


def get_epsilon() -> float:
    """Return the tolerance currently used by every fuzzy comparison."""
    return _epsilon


def set_epsilon(value: float) -> None:
    """Replace the process-wide tolerance.

    Parameters
    ----------
    value : float
        New tolerance, must be positive and finite

    Raises
    ------
    ValueError
        If value is not a positive finite number
    """
    global _epsilon
    _epsilon = _validate_epsilon(value)
    logger.debug(f"Fuzzy epsilon set to {_epsilon:g}")


def reset_epsilon() -> None:
    """Restore DEFAULT_EPSILON (ignores the environment override)."""
    set_epsilon(DEFAULT_EPSILON)


@contextmanager
def epsilon_override(value: float) -> Iterator[float]:
    """Temporarily use a different tolerance.

    Examples
    --------
    >>> with epsilon_override(0.1):
    ...     fuzzy_eq(1.0, 1.05)
    True
    """
    previous = _epsilon
    set_epsilon(value)
    try:
        yield _epsilon
    finally:
        set_epsilon(previous)


def fuzzy_eq(a: Any, b: Any) -> bool:
    """Approximate equality under the process-wide epsilon.

    Parameters
    ----------
    a, b : Any
        Real scalars, values exposing ``fuzzy_eq`` (Tuple, Color), or
        equal-length sequences of those

    Returns
    -------
    bool
        True iff every corresponding component differs by less than epsilon

    Notes
    -----
    NaN is never fuzzy-equal to anything, including itself.
    """
    if isinstance(a, Real) and isinstance(b, Real):
        return abs(a - b) < _epsilon
    if hasattr(a, "fuzzy_eq"):
        return a.fuzzy_eq(b)
    if hasattr(b, "fuzzy_eq"):
        return b.fuzzy_eq(a)
    if isinstance(a, (str, bytes)) or isinstance(b, (str, bytes)):
        return False
    try:
        left, right = list(a), list(b)
    except TypeError:
        return False
    if len(left) != len(right):
        return False
    return all(fuzzy_eq(x, y) for x, y in zip(left, right))


def fuzzy_ne(a: Any, b: Any) -> bool:
    """Negation of fuzzy_eq."""
    return not fuzzy_eq(a, b)


def assert_feq(left: Any, right: Any) -> None:
    """Assert left and right are fuzzy-equal.

    Raises
    ------
    AssertionError
        With both values in the message
    """
    if fuzzy_ne(left, right):
        raise AssertionError(
            "The following are not fuzzy equal:\n"
            f"  LEFT VALUE---{left!r}\n"
            f"  RIGHT VALUE--{right!r}\n"
            f"  (epsilon={_epsilon:g})"
        )


def assert_fne(left: Any, right: Any) -> None:
    """Assert left and right are NOT fuzzy-equal."""
    if fuzzy_eq(left, right):
        raise AssertionError(
            "The following are unexpectedly fuzzy equal:\n"
            f"  LEFT VALUE---{left!r}\n"
            f"  RIGHT VALUE--{right!r}\n"
            f"  (epsilon={_epsilon:g})"
        )
