"""Reproducibility helpers: environment fingerprint and array hashing."""

from __future__ import annotations

import hashlib
import os
import platform
import subprocess
import sys
from typing import Any

import numpy as np
import pandas as pd


def hash_array(array: np.ndarray, precision: int = 6) -> str:
    """Compute SHA256 hash of numpy array for determinism testing.

    Args:
        array: NumPy array to hash
        precision: Decimal precision for rounding floating point arrays

    Returns:
        SHA256 hash as hexadecimal string
    """
    array = np.ascontiguousarray(array)
    if np.issubdtype(array.dtype, np.floating):
        array = np.round(array.astype(np.float64), decimals=precision)

    digest = hashlib.sha256()
    digest.update(str(array.shape).encode())
    digest.update(str(array.dtype).encode())
    digest.update(array.tobytes())
    return digest.hexdigest()


def git_sha() -> str:
    """Get current git SHA, return 'unknown' if not available."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
        return "unknown"


def env_fingerprint() -> dict[str, Any]:
    """Capture environment fingerprint for reproducibility tracking."""
    fingerprint = {
        "python_version": sys.version,
        "platform": platform.platform(),
        "git_sha": git_sha(),
        "numpy_version": np.__version__,
        "cpu_count": os.cpu_count(),
        "machine": platform.machine(),
        "pandas_version": pd.__version__,
    }
    return fingerprint
