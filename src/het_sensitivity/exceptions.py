"""
Custom exceptions for the het-sensitivity package.

Every error raised by the sampling and aggregation code derives from
``HetSensitivityError`` so callers can catch the whole family at once.
"""

from typing import Any, Dict, Optional


class HetSensitivityError(Exception):
    """Base exception for het-sensitivity errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(HetSensitivityError):
    """Raised when input validation fails."""
    pass


class ConfigurationError(HetSensitivityError):
    """Raised when configuration is invalid."""
    pass


class EmptyDistributionError(ValidationError):
    """Raised when a distribution carries no positive mass."""
    pass


class InvalidHistogramError(ValidationError):
    """Raised when a histogram cannot be normalized."""
    pass


class SamplingWorkerError(HetSensitivityError):
    """Raised when a parallel sampling task fails."""
    pass


class SamplingTimeoutError(SamplingWorkerError):
    """Raised when sampling tasks do not finish within the join timeout."""
    pass
