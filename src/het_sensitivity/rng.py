"""Deterministic random utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(slots=True)
class RandomState:
    """Wrapper for deterministic random number generation."""

    seed: int
    generator: np.random.Generator
    offset: Optional[int] = None

    @classmethod
    def create(cls, seed: int) -> "RandomState":
        return cls(seed=seed, generator=np.random.default_rng(seed))

    def spawn(self, offset: int) -> "RandomState":
        """Derive an independent child stream keyed by ``(seed, offset)``.

        The child depends only on the base seed and the offset, never on how
        much of the parent stream has been consumed, so substreams can be
        created in any order and from any thread.
        """

        sequence = np.random.SeedSequence([self.seed, offset])
        return RandomState(seed=self.seed, generator=np.random.default_rng(sequence), offset=offset)


def choose_rng(seed: int) -> RandomState:
    """Convenience helper to create a ``RandomState``."""

    return RandomState.create(seed)
