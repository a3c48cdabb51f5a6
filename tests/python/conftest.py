"""Pytest configuration for welchstats tests."""

import sys
import os

# Add src to path so welchstats package can be imported
_src = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'src'))
if _src not in sys.path:
    sys.path.insert(0, _src)

import pytest
import numpy as np

from welchstats import GroupSummary, disable_logging

disable_logging()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "numba: tests compiling Numba kernels")
    config.addinivalue_line("markers", "slow: slow tests")


# =============================================================================
# Fixtures - Helpers
# =============================================================================

@pytest.fixture
def summarize():
    """GroupSummary of raw observations (mean, ddof=1 variance, count)."""
    def _summarize(values):
        values = np.asarray(values, dtype=np.float64)
        return GroupSummary(float(np.mean(values)), float(np.var(values, ddof=1)), len(values))
    return _summarize


# =============================================================================
# Fixtures - Groups
# =============================================================================

@pytest.fixture
def group_a():
    """Group A of the canonical example."""
    return GroupSummary(mean=17.1474, variance=14.4299, n=19)


@pytest.fixture
def group_b():
    """Group B of the canonical example."""
    return GroupSummary(mean=24.3923, variance=33.5238, n=13)


@pytest.fixture
def raw_samples():
    """Two raw samples with unequal variances and sizes."""
    np.random.seed(42)
    x = np.random.normal(10.0, 2.0, 40)
    y = np.random.normal(11.0, 5.0, 25)
    return x, y


# =============================================================================
# Fixtures - Batch Arrays
# =============================================================================

@pytest.fixture
def batch_arrays():
    """200 random, valid summary pairs as parallel arrays."""
    rng = np.random.default_rng(42)
    n_rows = 200
    return (
        rng.normal(0.0, 3.0, n_rows),
        rng.uniform(0.1, 10.0, n_rows),
        rng.integers(2, 500, n_rows),
        rng.normal(0.0, 3.0, n_rows),
        rng.uniform(0.1, 10.0, n_rows),
        rng.integers(2, 500, n_rows),
    )
