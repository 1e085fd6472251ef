"""Het sensitivity: theoretical heterozygous SNP detection sensitivity from depth and quality histograms."""

from __future__ import annotations

__version__ = "0.1.0"

# Core computation
from .sensitivity import (
    SensitivityResult,
    het_snp_sensitivity,
    het_snp_sensitivity_details,
    quality_sum_thresholds,
)
from .sampler import WeightedSampler
from .quality_sums import sample_cumulative_sums
from .survival import proportions_above_thresholds
from .allele_balance import allele_balance_table

# Histograms
from .histogram import normalize_histogram, read_histogram, load_distribution

# Configuration
from .config import SensitivityConfig, load_config, dump_config

# Errors
from .exceptions import (
    HetSensitivityError,
    ValidationError,
    ConfigurationError,
    EmptyDistributionError,
    InvalidHistogramError,
    SamplingWorkerError,
    SamplingTimeoutError,
)

__all__ = [
    "__version__",
    # Core computation
    "SensitivityResult",
    "het_snp_sensitivity",
    "het_snp_sensitivity_details",
    "quality_sum_thresholds",
    "WeightedSampler",
    "sample_cumulative_sums",
    "proportions_above_thresholds",
    "allele_balance_table",
    # Histograms
    "normalize_histogram",
    "read_histogram",
    "load_distribution",
    # Configuration
    "SensitivityConfig",
    "load_config",
    "dump_config",
    # Errors
    "HetSensitivityError",
    "ValidationError",
    "ConfigurationError",
    "EmptyDistributionError",
    "InvalidHistogramError",
    "SamplingWorkerError",
    "SamplingTimeoutError",
]
