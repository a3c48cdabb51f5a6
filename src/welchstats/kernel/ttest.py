"""Welch's T-Test on Summary Statistics.

Two-sample Welch's t-test computed from per-group mean, unbiased variance
and count, so groups too large to load can still be compared.

Design:
    - compute: exactly two GroupSummary values -> TestResult
    - welch_ttest: the same from six scalars
    - welch_ttest_batch: many independent pairs as parallel arrays
    - welch_ttest_vs_reference: one reference vs each target (one-vs-all)

The sign of t follows (first - second); for the reference design it is
(target - reference). Only |t| enters the two-sided p-value.

Degenerate input (both variances zero) does not raise. It returns a
sentinel flagged with ``degenerate=True`` and NaN degrees of freedom;
call ``TestResult.raise_if_degenerate()`` to turn it into an error.
"""

import math
from typing import Sequence

import numpy as np

from welchstats._errors import InvalidInputError
from welchstats._logging import get_logger
from welchstats.summary import GroupSummary, TestResult, BatchTestResult
from welchstats.kernel.math._welch import (
    welch_statistic,
    welch_kernel,
    two_sided_pvalue,
)

__all__ = [
    'compute',
    'welch_ttest',
    'welch_ttest_batch',
    'welch_ttest_vs_reference',
]

logger = get_logger(__name__)

# Single tests run the uncompiled formulas; no JIT warm-up per process
_welch_statistic_py = welch_statistic.py_func


# =============================================================================
# Validation
# =============================================================================

def _check_group(group, index, label=None) -> GroupSummary:
    label = label or f"group {index}"

    if not isinstance(group, GroupSummary):
        raise InvalidInputError(
            f"{label}: expected GroupSummary, got {type(group).__name__}",
            index=index, field='groups',
        )
    if group.n < 2:
        raise InvalidInputError(
            f"{label}: n must be at least 2, got {group.n}",
            index=index, field='n',
        )
    if not math.isfinite(group.mean):
        raise InvalidInputError(
            f"{label}: mean must be finite, got {group.mean}",
            index=index, field='mean',
        )
    if not math.isfinite(group.variance) or group.variance < 0.0:
        raise InvalidInputError(
            f"{label}: variance must be finite and non-negative, got {group.variance}",
            index=index, field='variance',
        )
    return group


def _pvalue(t_stat: float, df: float, degenerate: bool) -> float:
    if degenerate:
        return 1.0 if t_stat == 0.0 else 0.0
    return float(two_sided_pvalue(t_stat, df))


# =============================================================================
# Single Test
# =============================================================================

def compute(groups: Sequence[GroupSummary]) -> TestResult:
    """Welch's two-sample t-test from two group summaries.

    Args:
        groups: Exactly two GroupSummary values; t is groups[0] - groups[1]

    Returns:
        TestResult with t-statistic, Welch-Satterthwaite degrees of
        freedom and two-sided p-value in [0, 1]

    Raises:
        InvalidInputError: not exactly two groups, a group with n < 2,
            a negative or non-finite variance, or a non-finite mean
    """
    try:
        groups = list(groups)
    except TypeError:
        raise InvalidInputError(
            f"groups must be a sequence of two GroupSummary values, "
            f"got {type(groups).__name__}",
            field='groups',
        ) from None

    if len(groups) != 2:
        raise InvalidInputError(
            f"Welch's t-test compares exactly 2 groups, got {len(groups)}",
            field='groups',
        )

    g1 = _check_group(groups[0], 0)
    g2 = _check_group(groups[1], 1)

    t_stat, df, degenerate = _welch_statistic_py(
        g1.mean, g1.variance, float(g1.n), g2.mean, g2.variance, float(g2.n)
    )

    return TestResult(
        t_value=float(t_stat),
        degrees_of_freedom=float(df),
        p_value=_pvalue(t_stat, df, degenerate),
        degenerate=bool(degenerate),
    )


def welch_ttest(
    mean1: float,
    variance1: float,
    n1: int,
    mean2: float,
    variance2: float,
    n2: int
) -> TestResult:
    """Welch's t-test (convenience wrapper over compute).

    Args:
        mean1, variance1, n1: Summary of group 1
        mean2, variance2, n2: Summary of group 2

    Returns:
        TestResult, t sign is group 1 - group 2
    """
    groups = []
    for i, fields in enumerate(((mean1, variance1, n1), (mean2, variance2, n2))):
        try:
            groups.append(GroupSummary(*fields))
        except InvalidInputError as e:
            raise InvalidInputError(f"group {i}: {e}", index=i, field=e.field) from e
    return compute(groups)


# =============================================================================
# Batch Tests
# =============================================================================

def _as_column(values, name: str) -> np.ndarray:
    try:
        col = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be numeric: {e}") from e
    if col.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {col.shape}")
    return col


def _check_columns(mean, var, n, side: int) -> None:
    label = f"group {side}"

    def fail(mask, field, message):
        row = int(np.flatnonzero(mask)[0])
        raise InvalidInputError(f"row {row}, {label}: {message}", index=row, field=field)

    bad = ~np.isfinite(n) | (n != np.floor(n))
    if bad.any():
        fail(bad, 'n', "n must be an integer count")
    bad = n < 2
    if bad.any():
        fail(bad, 'n', "n must be at least 2")
    bad = ~np.isfinite(mean)
    if bad.any():
        fail(bad, 'mean', "mean must be finite")
    bad = ~np.isfinite(var) | (var < 0.0)
    if bad.any():
        fail(bad, 'variance', "variance must be finite and non-negative")


def welch_ttest_batch(
    mean1,
    var1,
    n1,
    mean2,
    var2,
    n2
) -> BatchTestResult:
    """Many independent Welch's t-tests, one per row.

    Row i compares (mean1[i], var1[i], n1[i]) against
    (mean2[i], var2[i], n2[i]); rows are computed in parallel.

    Args:
        mean1: Means of group 1
        var1: Variances of group 1
        n1: Sample sizes of group 1
        mean2: Means of group 2
        var2: Variances of group 2
        n2: Sample sizes of group 2

    Returns:
        BatchTestResult of row-aligned arrays

    Raises:
        InvalidInputError: arrays not 1-D or of different lengths, or a
            row violating the single-test preconditions (the error names
            the first such row)
    """
    names = ('mean1', 'var1', 'n1', 'mean2', 'var2', 'n2')
    cols = [_as_column(v, name) for v, name in zip((mean1, var1, n1, mean2, var2, n2), names)]

    lengths = {name: len(col) for name, col in zip(names, cols)}
    if len(set(lengths.values())) != 1:
        raise InvalidInputError(f"parallel arrays differ in length: {lengths}")

    m1, v1, c1, m2, v2, c2 = cols
    _check_columns(m1, v1, c1, 1)
    _check_columns(m2, v2, c2, 2)

    n_rows = len(m1)
    t_values = np.empty(n_rows, dtype=np.float64)
    dfs = np.empty(n_rows, dtype=np.float64)
    degenerate = np.zeros(n_rows, dtype=np.bool_)

    if n_rows > 0:
        welch_kernel(m1, v1, c1, m2, v2, c2, t_values, dfs, degenerate)

    p_values = np.empty(n_rows, dtype=np.float64)
    ok = ~degenerate
    p_values[ok] = two_sided_pvalue(t_values[ok], dfs[ok])
    p_values[degenerate] = np.where(t_values[degenerate] == 0.0, 1.0, 0.0)

    logger.debug(
        "welch batch: %d rows, %d degenerate", n_rows, int(degenerate.sum())
    )

    return BatchTestResult(t_values, dfs, p_values, degenerate)


def welch_ttest_vs_reference(
    reference: GroupSummary,
    targets: Sequence[GroupSummary]
) -> BatchTestResult:
    """Welch's t-test of each target against a shared reference group.

    Every row is an independent two-group test; t sign is
    target - reference.

    Args:
        reference: Reference (control) group
        targets: Groups compared against the reference

    Returns:
        BatchTestResult with one row per target, in input order
    """
    _check_group(reference, None, label="reference")

    targets = list(targets)
    if not targets:
        raise InvalidInputError("at least one target group is required", field='groups')
    for i, target in enumerate(targets):
        _check_group(target, i, label=f"target {i}")

    n_targets = len(targets)
    return welch_ttest_batch(
        [g.mean for g in targets],
        [g.variance for g in targets],
        [g.n for g in targets],
        np.full(n_targets, reference.mean),
        np.full(n_targets, reference.variance),
        np.full(n_targets, float(reference.n)),
    )
