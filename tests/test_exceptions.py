"""
Tests for custom exceptions and error handling.
"""

import pytest

from het_sensitivity.exceptions import (
    ConfigurationError,
    EmptyDistributionError,
    HetSensitivityError,
    InvalidHistogramError,
    SamplingTimeoutError,
    SamplingWorkerError,
    ValidationError,
)


class TestCustomExceptions:
    """Test custom exception hierarchy."""

    def test_base_exception(self):
        error = HetSensitivityError("Base error")
        assert str(error) == "Base error"
        assert error.details == {}

        details = {"chunk_index": 3}
        error_with_details = HetSensitivityError("Error with details", details)
        assert error_with_details.details == details

    @pytest.mark.parametrize(
        "error_cls, parent",
        [
            (ValidationError, HetSensitivityError),
            (ConfigurationError, HetSensitivityError),
            (EmptyDistributionError, ValidationError),
            (InvalidHistogramError, ValidationError),
            (SamplingWorkerError, HetSensitivityError),
            (SamplingTimeoutError, SamplingWorkerError),
        ],
    )
    def test_hierarchy(self, error_cls, parent):
        error = error_cls("failure")
        assert isinstance(error, parent)
        assert str(error) == "failure"

    def test_chaining(self):
        with pytest.raises(SamplingWorkerError) as exc_info:
            try:
                raise RuntimeError("worker crashed")
            except RuntimeError as exc:
                raise SamplingWorkerError("Sampling chunk 0 failed", {"chunk_index": 0}) from exc
        assert isinstance(exc_info.value.__cause__, RuntimeError)
