"""
Test configuration and fixtures for het-sensitivity tests.
"""

import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest

from het_sensitivity.config import SensitivityConfig


@pytest.fixture
def seed():
    """Fixed random seed for reproducible tests."""
    return 42


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def small_config(seed):
    """Config with a small pool and small chunks so tests spread over several tasks."""
    return SensitivityConfig(
        seed=seed,
        sample_size=500,
        log_odds_threshold=3.0,
        worker_count=2,
        chunk_size=100,
        with_logging=False,
    )


@pytest.fixture
def degenerate_quality():
    """Quality distribution with every base at Q30."""
    return make_degenerate_quality(30)


@pytest.fixture
def illumina_like_quality():
    """Quality distribution concentrated in Q25-Q40 with a small Q2 spike."""
    return make_quality_distribution()


@pytest.fixture
def deep_depth():
    """Depth distribution around 30x."""
    return make_poisson_depth(mean=30.0, max_depth=80)


@pytest.fixture
def shallow_depth():
    """Depth distribution around 3x."""
    return make_poisson_depth(mean=3.0, max_depth=80)


# Utility functions for tests
def make_degenerate_quality(quality, length=None):
    """Quality distribution with all mass on a single score."""
    length = length or quality + 1
    dist = np.zeros(length)
    dist[quality] = 1.0
    return dist


def make_quality_distribution(max_quality=41):
    """Bell-shaped quality distribution with a low-quality spike at Q2."""
    q = np.arange(max_quality + 1)
    dist = np.exp(-0.5 * ((q - 33) / 4.0) ** 2)
    dist[2] += 0.05
    return dist / dist.sum()


def make_poisson_depth(mean, max_depth):
    """Truncated and renormalized Poisson depth distribution."""
    n = np.arange(max_depth + 1)
    log_pmf = n * np.log(mean) - mean - np.array([np.sum(np.log(np.arange(1, k + 1))) for k in n])
    dist = np.exp(log_pmf)
    return dist / dist.sum()


def write_histogram(path, counts, header=("value", "count"), sep="\t"):
    """Write a two-column histogram file with a header line."""
    lines = [sep.join(header)]
    lines.extend(f"{key}{sep}{count}" for key, count in counts.items())
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
