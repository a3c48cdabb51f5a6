"""Welch T-Test Formulas.

Closed-form Welch's t-test on summary statistics (mean, unbiased variance,
count per group). The formulas live in one Numba-compiled scalar routine
shared by the single-test path (through its pure-Python ``py_func``) and
the parallel batch kernel.

Functions:
    - welch_statistic: t-statistic and Welch-Satterthwaite df for one pair
    - welch_kernel: welch_statistic over parallel arrays (prange)
    - student_t_sf: Student's t survival function P(T_df > x)
    - two_sided_pvalue: 2 * P(T_df > |t|), clamped into [0, 1]

P-values come from scipy.special.stdtr, the Student's t CDF.
"""

import math
import numpy as np
from numba import prange
from scipy import special

from welchstats.optim import optimized_jit, parallel_jit

__all__ = [
    'welch_statistic',
    'welch_kernel',
    'student_t_sf',
    'two_sided_pvalue',
]


# =============================================================================
# Statistic and Degrees of Freedom
# =============================================================================

@optimized_jit
def welch_statistic(
    mean1: float,
    var1: float,
    n1: float,
    mean2: float,
    var2: float,
    n2: float
) -> tuple:
    """Welch's t-statistic and degrees of freedom for one pair of groups.

    t  = (mean1 - mean2) / sqrt(var1/n1 + var2/n2)
    df = (var1/n1 + var2/n2)^2 / ((var1/n1)^2/(n1-1) + (var2/n2)^2/(n2-1))

    Inputs must already be validated (n >= 2, var >= 0, finite).

    Returns:
        (t, df, degenerate). With both variances zero the standard error
        is zero: degenerate is True, df is NaN and t is 0.0 for equal
        means, +-inf otherwise.
    """
    v1_n1 = var1 / n1
    v2_n2 = var2 / n2
    sum_v = v1_n1 + v2_n2
    mean_diff = mean1 - mean2

    if sum_v == 0.0:
        if mean_diff == 0.0:
            return 0.0, np.nan, True
        return math.copysign(np.inf, mean_diff), np.nan, True

    t_stat = mean_diff / math.sqrt(sum_v)

    denom = (v1_n1 * v1_n1) / (n1 - 1.0) + (v2_n2 * v2_n2) / (n2 - 1.0)
    if denom > 0.0:
        df = (sum_v * sum_v) / denom
        if math.isfinite(df):
            return t_stat, df, False

    # Squares under- or overflowed; same ratio with terms scaled by sum_v
    r1 = v1_n1 / sum_v
    r2 = v2_n2 / sum_v
    df = 1.0 / ((r1 * r1) / (n1 - 1.0) + (r2 * r2) / (n2 - 1.0))
    return t_stat, df, False


# Jitted code can only call the bare numba dispatcher
_welch_statistic = welch_statistic.dispatcher


@parallel_jit
def welch_kernel(
    mean1: np.ndarray,
    var1: np.ndarray,
    n1: np.ndarray,
    mean2: np.ndarray,
    var2: np.ndarray,
    n2: np.ndarray,
    t_out: np.ndarray,
    df_out: np.ndarray,
    degenerate_out: np.ndarray
) -> None:
    """Row-wise welch_statistic.

    Args:
        mean1: Means of group 1
        var1: Variances of group 1
        n1: Sample sizes of group 1 (float64)
        mean2: Means of group 2
        var2: Variances of group 2
        n2: Sample sizes of group 2 (float64)
        t_out: Output t-statistics
        df_out: Output degrees of freedom
        degenerate_out: Output zero-standard-error flags
    """
    n = len(mean1)

    for i in prange(n):
        t_stat, df, degenerate = _welch_statistic(
            mean1[i], var1[i], n1[i], mean2[i], var2[i], n2[i]
        )
        t_out[i] = t_stat
        df_out[i] = df
        degenerate_out[i] = degenerate


# =============================================================================
# P-Values
# =============================================================================

def student_t_sf(x, df):
    """P(T_df > x) for Student's t with ``df`` degrees of freedom.

    Evaluated as stdtr(df, -x), which keeps full precision in the upper
    tail where 1 - CDF would cancel.
    """
    return special.stdtr(df, np.negative(x))


def two_sided_pvalue(t, df):
    """Two-sided p-value 2 * P(T_df > |t|), clamped into [0, 1].

    Accepts scalars or arrays.
    """
    p = 2.0 * student_t_sf(np.abs(t), df)
    return np.clip(p, 0.0, 1.0)
