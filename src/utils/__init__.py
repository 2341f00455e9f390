"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Floating-point fuzzy comparison (fuzzy)
    - Atomic file I/O and YAML loading (fs)
    - SHA-256 digests for output provenance (hashing)
    - Unified logging (logging_config)
    - Config validation (validators)

No module in utils/ may import from upper layers (ray_tracer, scripts).

Convenience imports:
    from src.utils import fuzzy, fs, validators
    from src.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import fuzzy
from . import hashing
from . import logging_config
from . import validators

# Common functions for direct import
from .fuzzy import fuzzy_eq, fuzzy_ne
from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'fuzzy',
    'hashing',
    'logging_config',
    'validators',
    # Direct exports
    'fuzzy_eq',
    'fuzzy_ne',
    'setup_logging',
    'get_logger',
    'push_context',
]
