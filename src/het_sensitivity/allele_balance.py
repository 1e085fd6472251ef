"""Binomial allele-balance table for heterozygous sites."""

from __future__ import annotations

import numpy as np

from .exceptions import ValidationError


def allele_balance_table(n_depths: int) -> np.ndarray:
    """Table of ``C(n, m) * 0.5**n`` for ``0 <= m <= n < n_depths``.

    Row n is the distribution of alt-read counts at a heterozygous site of
    depth n. Cells above the diagonal are zero. Rows are filled from the row
    above using ``C(n, m) = C(n-1, m-1) * n / m``.
    """
    if n_depths < 0:
        raise ValidationError("n_depths cannot be negative")

    table = np.zeros((n_depths, n_depths), dtype=np.float64)
    for n in range(n_depths):
        table[n, 0] = 0.5 ** n
        if n > 1:
            m = np.arange(1, n)
            table[n, 1:n] = table[n - 1, 0:n - 1] * (n * 0.5 / m)
        if n > 0:
            table[n, n] = table[n, 0]
    return table
