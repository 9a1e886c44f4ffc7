"""
Pytest configuration and fixtures for space_helpers tests
"""
import os
# Force non-interactive matplotlib backend early to avoid GUI hangs
os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
# Ensure any accidental plt.show() during tests is a no-op
plt.show = lambda *args, **kwargs: None

import pytest
import numpy as np


# Auto-close figures after each test to prevent resource buildup
@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close('all')


@pytest.fixture
def ascending_bins():
    """Bin centres 0.5, 1.5, …, 9.5"""
    return np.arange(10) + 0.5


@pytest.fixture
def descending_bins():
    """Bin centres 9.5, 8.5, …, 0.5"""
    return (np.arange(10) + 0.5)[::-1].copy()


@pytest.fixture
def uniform_times():
    """1-hour, 1-s cadence UTC time tags"""
    start = np.datetime64('2019-01-27T12:00:00', 'ns')
    return start + np.arange(3600) * np.timedelta64(1, 's')


@pytest.fixture
def pol_results():
    """Synthetic polarization-analysis output on a 60 × 32 grid"""
    rng = np.random.default_rng(42)
    n_t, n_f = 60, 32
    power = rng.lognormal(0.0, 1.0, (n_t, n_f))
    pol_degree = np.clip(rng.uniform(0.3, 1.0, (n_t, n_f)), 0, 1)
    ellipticity = rng.uniform(-1.0, 1.0, (n_t, n_f))
    wave_angle = rng.uniform(0.0, 90.0, (n_t, n_f))
    return {
        'power': power,
        'pol_degree': pol_degree,
        'ellipticity': ellipticity,
        'wave_angle': wave_angle,
    }


@pytest.fixture
def sample_magnetic_field():
    """Sample magnetic field data for testing"""
    n_points = 1000
    # Simple synthetic B-field with some variation
    Bx = 10 + 2 * np.sin(np.linspace(0, 4*np.pi, n_points))
    By = 5 + np.cos(np.linspace(0, 6*np.pi, n_points))
    Bz = -2 + 0.5 * np.sin(np.linspace(0, 8*np.pi, n_points))
    return np.column_stack([Bx, By, Bz])
