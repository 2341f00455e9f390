"""Shared pytest fixtures.

Fixtures:
    - restore_epsilon (autouse): every test starts and ends with the same
      process-wide fuzzy epsilon, whatever a test sets in between
    - project_root: repository root (for configs/)
"""

from pathlib import Path

import pytest

from src.utils import fuzzy


@pytest.fixture(autouse=True)
def restore_epsilon():
    """Undo any epsilon change made by a test."""
    previous = fuzzy.get_epsilon()
    yield previous
    fuzzy.set_epsilon(previous)


@pytest.fixture(scope="session")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent
