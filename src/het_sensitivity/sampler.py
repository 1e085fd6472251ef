"""
Weighted categorical sampling by stochastic acceptance.

A draw picks a uniformly random category and keeps it with probability
``weight / max_weight``, retrying otherwise. The expected cost is O(1)
when the largest weight is not far above the average weight
(Lipowski & Lipowska, Physica A 391, 2193, 2012).
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .config import DEFAULT_SEED, SAMPLING_MAX
from .exceptions import EmptyDistributionError, ValidationError


class WeightedSampler:
    """Draw integers ``0..K-1`` with probability proportional to ``weights``.

    The acceptance probabilities are fixed at construction. Parallel callers
    should pass their own generator to :meth:`draws` instead of sharing the
    sampler's default stream.
    """

    def __init__(
        self,
        weights: Sequence[float],
        rng: Optional[np.random.Generator] = None,
        sampling_max: int = SAMPLING_MAX,
    ):
        weights = np.asarray(weights, dtype=np.float64)
        if weights.ndim != 1:
            raise ValidationError("weights must be a one-dimensional sequence")
        if weights.size == 0:
            raise EmptyDistributionError("Quality score distribution is empty.")
        if not np.all(np.isfinite(weights)):
            raise ValidationError("weights must be finite")
        if np.any(weights < 0):
            raise ValidationError("weights must be non-negative")

        max_weight = weights.max()
        if max_weight == 0:
            raise EmptyDistributionError(
                "Quality score distribution is empty.",
                details={"n_categories": int(weights.size)},
            )
        if sampling_max < 1:
            raise ValidationError("sampling_max must be at least 1")

        acceptance = weights / max_weight
        acceptance.setflags(write=False)
        self._acceptance = acceptance
        self._rng = rng if rng is not None else np.random.default_rng(DEFAULT_SEED)
        self.sampling_max = sampling_max

    @property
    def n_categories(self) -> int:
        return int(self._acceptance.size)

    @property
    def acceptance_probabilities(self) -> np.ndarray:
        """Read-only ``weight / max_weight`` array."""
        return self._acceptance

    def draw(self) -> int:
        """Draw a single category from the sampler's own stream."""
        return int(self.draws(1)[0])

    def draws(
        self,
        size: Union[int, Tuple[int, ...]],
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        """Draw an array of independent categories.

        Every element gets at most ``sampling_max`` trials; an element still
        rejected after that many trials is reported as category 0.
        """
        rng = self._rng if rng is None else rng
        shape = (size,) if isinstance(size, (int, np.integer)) else tuple(size)

        result = np.zeros(int(np.prod(shape, dtype=np.int64)), dtype=np.int64)
        pending = np.arange(result.size)

        for _ in range(self.sampling_max):
            if pending.size == 0:
                break
            candidates = rng.integers(0, self.n_categories, size=pending.size)
            accepted = rng.random(pending.size) < self._acceptance[candidates]
            result[pending[accepted]] = candidates[accepted]
            pending = pending[~accepted]

        return result.reshape(shape)

    def __repr__(self) -> str:
        return f"WeightedSampler(n_categories={self.n_categories}, sampling_max={self.sampling_max})"
