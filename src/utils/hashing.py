"""SHA-256 hashing for encoded image provenance.

Provides:
    - sha256_bytes(): Hash an in-memory buffer (encoded PNG, raw RGBA)
    - sha256_file(): Hash file contents, read in chunks
    - verify_file_hash(): Compare a file against an expected digest

Used by:
    - scripts/plot_projectile.py: log the digest of the written image
    - Tests: determinism of Canvas.encode() / Canvas.to_png_bytes()

Results are lowercase hex strings (64 chars).

Note: Module named `hashing.py` to avoid shadowing builtin `hash()`.
"""

import hashlib
from pathlib import Path
from typing import Union


def sha256_bytes(data: bytes) -> str:
    """Compute SHA-256 hex digest of a bytes-like object."""
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    chunk_size : int
        Read chunk size in bytes, default 1 MB

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256 = hashlib.sha256()
    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            sha256.update(chunk)

    return sha256.hexdigest()


def verify_file_hash(path: Union[str, Path], expected_hash: str) -> bool:
    """Return True if the file's SHA-256 matches expected_hash (case-insensitive)."""
    return sha256_file(path) == expected_hash.lower()
