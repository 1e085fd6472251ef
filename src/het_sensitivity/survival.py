"""Empirical survival function of sampled quality sums."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .exceptions import ValidationError

SampleRows = Union[np.ndarray, Sequence[Sequence[int]]]


def _proportions_for_row(sorted_row: np.ndarray, thresholds: np.ndarray) -> np.ndarray:
    n_samples = sorted_row.size
    if n_samples == 0:
        return np.zeros(thresholds.size, dtype=np.float64)
    # number of samples strictly below each threshold, one binary search
    # per threshold; ascending thresholds give non-decreasing counts
    below = np.searchsorted(sorted_row, thresholds, side="left")
    return (n_samples - below) / n_samples


def proportions_above_thresholds(samples: SampleRows, thresholds: Sequence[float]) -> np.ndarray:
    """Fraction of each sample row at or above each threshold.

    Args:
        samples: One row of sampled quality sums per number of alt reads m.
            A 2-D ndarray is sorted in place along its rows.
        thresholds: Non-decreasing quality-sum thresholds, one per depth n

    Returns:
        ``(rows, len(thresholds))`` array where ``[m, n]`` estimates the
        probability that the sum of m qualities reaches threshold n. Entries
        past the largest sample are 0.

    Raises:
        ValidationError: If thresholds decrease anywhere
    """
    thresholds = np.asarray(thresholds, dtype=np.float64)
    if thresholds.ndim != 1:
        raise ValidationError("thresholds must be one-dimensional")
    if thresholds.size > 1 and np.any(np.diff(thresholds) < 0):
        raise ValidationError("thresholds must be non-decreasing")

    if isinstance(samples, np.ndarray) and samples.ndim == 2:
        samples.sort(axis=1)
        rows = samples
    else:
        rows = [np.sort(np.asarray(row)) for row in samples]

    result = np.zeros((len(rows), thresholds.size), dtype=np.float64)
    for m, row in enumerate(rows):
        result[m] = _proportions_for_row(row, thresholds)
    return result
