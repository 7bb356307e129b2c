"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def rng():
    """Provide a seeded random generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def default_config():
    """Provide a configuration holding the default values."""
    from evodrive.run.config import Config
    return Config()
