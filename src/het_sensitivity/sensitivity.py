"""
Theoretical heterozygous SNP sensitivity.

For each depth n (weighted by the depth distribution) and each alt-read
count m (weighted by the binomial allele balance at a het site), a SNP is
called when the sum of the m alt base qualities reaches the phred-scaled
log-odds threshold for depth n. The probability of that event is estimated
by Monte-Carlo sampling of quality sums.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .allele_balance import allele_balance_table
from .config import SensitivityConfig
from .exceptions import ValidationError
from .logging_config import ProgressCallback, progress_logger
from .quality_sums import sample_cumulative_sums
from .rng import choose_rng
from .sampler import WeightedSampler
from .survival import proportions_above_thresholds

logger = logging.getLogger(__name__)

LOG10_2 = np.log10(2)


@dataclass
class SensitivityResult:
    """Sensitivity together with the tables it was reduced from."""
    sensitivity: float
    n_depths: int
    thresholds: np.ndarray
    exceed_probabilities: np.ndarray
    allele_balance: np.ndarray

    def to_dict(self) -> dict:
        return {
            'sensitivity': float(self.sensitivity),
            'n_depths': int(self.n_depths),
        }


def quality_sum_thresholds(n_depths: int, log_odds_threshold: float) -> np.ndarray:
    """Quality-sum threshold a het call at depth n must reach, for n < n_depths."""
    return 10.0 * (np.arange(n_depths) * LOG10_2 + log_odds_threshold)


def het_snp_sensitivity_details(
    depth_distribution: Sequence[float],
    quality_distribution: Sequence[float],
    sample_size: int,
    log_odds_threshold: float,
    with_logging: bool = True,
    *,
    config: Optional[SensitivityConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> SensitivityResult:
    """Compute het SNP sensitivity and keep the intermediate tables.

    Args:
        depth_distribution: Probability of depth n at index n
        quality_distribution: Probability of base quality q at index q
        sample_size: Number of random quality sums per number of alt reads
        log_odds_threshold: log10 likelihood ratio required to call a SNP,
            e.g. 5 when the variant must be 10^5 times more likely
        with_logging: Report progress; without ``on_progress`` messages go to
            this module's logger
        config: Sampling and parallelism settings; defaults when omitted.
            Only seed, max_considered_depth, sampling_max, worker_count,
            chunk_size and join_timeout are read from it. Its sample_size,
            log_odds_threshold and with_logging fields are ignored in favour
            of the arguments above
        on_progress: Observer receiving progress messages

    Returns:
        SensitivityResult with the scalar sensitivity in [0, 1]
    """
    config = config or SensitivityConfig()
    if sample_size < 1:
        raise ValidationError("sample_size must be positive")
    if config.max_considered_depth < 0:
        raise ValidationError("max_considered_depth cannot be negative")

    depth_distribution = np.asarray(depth_distribution, dtype=np.float64)
    if depth_distribution.ndim != 1:
        raise ValidationError("depth_distribution must be one-dimensional")

    if not with_logging:
        on_progress = None
    elif on_progress is None:
        on_progress = progress_logger(logger)

    def report(message: str) -> None:
        if on_progress is not None:
            on_progress(message)

    n_depths = min(depth_distribution.size, config.max_considered_depth + 1)
    depths = depth_distribution[:n_depths]

    report("Creating quality score sampler")
    sampler = WeightedSampler(
        quality_distribution,
        rng=choose_rng(config.seed).generator,
        sampling_max=config.sampling_max,
    )

    # quality_sums[m] holds sample_size random sums of m qualities
    report("Calculating quality sums from quality sampler")
    quality_sums = sample_cumulative_sums(
        sampler,
        n_depths,
        sample_size,
        seed=config.seed,
        worker_count=config.worker_count,
        chunk_size=config.chunk_size,
        join_timeout=config.join_timeout,
        on_progress=on_progress,
    )

    report("Calculating theoretical het sensitivity")
    thresholds = quality_sum_thresholds(n_depths, log_odds_threshold)
    exceed = proportions_above_thresholds(quality_sums, thresholds)
    alt_depth = allele_balance_table(n_depths)

    # alt_depth is zero above the diagonal, so the full sum is the m <= n sum
    sensitivity = float(np.sum(depths[:, np.newaxis] * alt_depth * exceed.T))
    logger.debug("Het SNP sensitivity over %d depths: %.6f", n_depths, sensitivity)

    return SensitivityResult(
        sensitivity=sensitivity,
        n_depths=n_depths,
        thresholds=thresholds,
        exceed_probabilities=exceed,
        allele_balance=alt_depth,
    )


def het_snp_sensitivity(
    depth_distribution: Sequence[float],
    quality_distribution: Sequence[float],
    sample_size: int,
    log_odds_threshold: float,
    with_logging: bool = True,
    *,
    config: Optional[SensitivityConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> float:
    """Theoretical probability of detecting a heterozygous SNP.

    See :func:`het_snp_sensitivity_details` for the arguments.
    """
    return het_snp_sensitivity_details(
        depth_distribution,
        quality_distribution,
        sample_size,
        log_odds_threshold,
        with_logging,
        config=config,
        on_progress=on_progress,
    ).sensitivity
