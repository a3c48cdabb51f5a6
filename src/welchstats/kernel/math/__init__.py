"""Mathematical and Statistical Kernels.

Welch's t-test formulas on summary statistics, written once and compiled
with Numba for the batch path.

Strategy:
    - Formulas in a Numba-compatible scalar routine (welch_statistic)
    - Batch kernel parallelised over rows with prange
    - Student's t CDF from scipy.special.stdtr (vectorized, not JIT-compiled)

Submodules:
    welch: t-statistic, Welch-Satterthwaite df, two-sided p-value
"""

from ._welch import (
    welch_statistic,
    welch_kernel,
    student_t_sf,
    two_sided_pvalue,
)

__all__ = [
    'welch_statistic',
    'welch_kernel',
    'student_t_sf',
    'two_sided_pvalue',
]
