"""
Tests for the binomial allele-balance table.
"""

import numpy as np
import pytest
from scipy import stats

from het_sensitivity.allele_balance import allele_balance_table
from het_sensitivity.exceptions import ValidationError


class TestAlleleBalanceTable:
    """Test C(n, m) * 0.5^n table construction."""

    def test_small_table(self):
        table = allele_balance_table(4)
        expected = np.array([
            [1.0, 0.0, 0.0, 0.0],
            [0.5, 0.5, 0.0, 0.0],
            [0.25, 0.5, 0.25, 0.0],
            [0.125, 0.375, 0.375, 0.125],
        ])
        assert np.allclose(table, expected)

    def test_matches_binomial_pmf(self):
        n_depths = 120
        table = allele_balance_table(n_depths)
        for n in range(n_depths):
            expected = stats.binom.pmf(np.arange(n + 1), n, 0.5)
            assert np.allclose(table[n, :n + 1], expected, rtol=1e-9, atol=1e-300)

    def test_rows_sum_to_one_up_to_depth_cap(self):
        table = allele_balance_table(1001)
        assert np.allclose(table.sum(axis=1), 1.0, rtol=0, atol=1e-9)

    def test_symmetric_ends(self):
        table = allele_balance_table(300)
        for n in range(300):
            assert table[n, 0] == table[n, n]

    def test_upper_triangle_is_zero(self):
        table = allele_balance_table(50)
        assert np.all(np.triu(table, k=1) == 0)

    def test_cells_are_probabilities(self):
        table = allele_balance_table(200)
        assert np.all(table >= 0)
        assert np.all(table <= 1)

    def test_empty_table(self):
        assert allele_balance_table(0).shape == (0, 0)

    def test_single_row(self):
        assert np.array_equal(allele_balance_table(1), [[1.0]])

    def test_negative_size(self):
        with pytest.raises(ValidationError):
            allele_balance_table(-1)
