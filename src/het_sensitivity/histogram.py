"""Depth and base-quality histograms: reading and normalization."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Union

import numpy as np
import pandas as pd

from .exceptions import InvalidHistogramError

Histogram = Union[Mapping[int, float], pd.Series]


def normalize_histogram(histogram: Optional[Histogram]) -> np.ndarray:
    """Turn key -> count into a dense probability array.

    The result has length ``max_key + 1`` and ``result[i] = count(i) / total``;
    keys absent from the histogram get probability 0.

    Raises:
        InvalidHistogramError: If the histogram is None or empty, has a
            negative key or count, or its counts sum to zero
    """
    if histogram is None:
        raise InvalidHistogramError("Histogram is null and cannot be normalized")

    items = list(histogram.items())
    if not items:
        raise InvalidHistogramError("Histogram is empty and cannot be normalized")

    try:
        keys = np.array([int(key) for key, _ in items], dtype=np.int64)
        counts = np.array([float(count) for _, count in items], dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidHistogramError(f"Histogram must map integer keys to numeric counts: {e}") from e

    if np.any(keys < 0):
        raise InvalidHistogramError(
            "Histogram keys must be non-negative integers",
            details={"min_key": int(keys.min())},
        )
    if np.any(counts < 0) or not np.all(np.isfinite(counts)):
        raise InvalidHistogramError("Histogram counts must be finite and non-negative")

    total = counts.sum()
    if total == 0:
        raise InvalidHistogramError("Histogram total is zero and cannot be normalized")

    dense = np.zeros(int(keys.max()) + 1, dtype=np.float64)
    np.add.at(dense, keys, counts)
    return dense / total


def read_histogram(
    path: str | Path,
    key_column: Optional[str] = None,
    count_column: Optional[str] = None,
) -> pd.Series:
    """Read a two-column histogram file into a Series indexed by key.

    ``.csv`` files are comma separated, anything else is tab separated.
    Lines starting with ``#`` are skipped. Without explicit column names the
    first column holds keys and the second holds counts.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Histogram file not found: {path}")

    sep = "," if path.suffix.lower() == ".csv" else "\t"
    try:
        frame = pd.read_csv(path, sep=sep, comment="#")
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise InvalidHistogramError(f"Cannot parse histogram file {path}: {e}") from e

    if frame.shape[1] < 2 and (key_column is None or count_column is None):
        raise InvalidHistogramError(
            f"Histogram file {path} needs a key column and a count column",
            details={"columns": list(frame.columns)},
        )

    key_column = key_column or frame.columns[0]
    count_column = count_column or frame.columns[1]
    missing = [c for c in (key_column, count_column) if c not in frame.columns]
    if missing:
        raise InvalidHistogramError(f"Missing histogram columns: {missing}")

    try:
        keys = pd.to_numeric(frame[key_column], errors="raise").astype(np.int64)
        counts = pd.to_numeric(frame[count_column], errors="raise").astype(np.float64)
    except (ValueError, TypeError) as e:
        raise InvalidHistogramError(f"Non-numeric histogram values in {path}: {e}") from e

    return pd.Series(counts.to_numpy(), index=keys.to_numpy(), name=str(count_column))


def load_distribution(
    path: str | Path,
    key_column: Optional[str] = None,
    count_column: Optional[str] = None,
) -> np.ndarray:
    """Read a histogram file and normalize it into a probability array."""
    return normalize_histogram(read_histogram(path, key_column, count_column))
