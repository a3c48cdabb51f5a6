"""Group Summaries and Test Results.

Value objects exchanged with the Welch t-test:

    - GroupSummary: mean, unbiased variance and count of one group
    - TestResult: t-statistic, Welch-Satterthwaite df, two-sided p-value
    - BatchTestResult: the same fields as parallel arrays, one row per test

Summaries are produced upstream (database aggregation, distributed jobs);
this module only carries them.
"""

import operator
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence

import numpy as np

from ._errors import InvalidInputError, NumericalDegeneracyError

__all__ = [
    'GroupSummary',
    'TestResult',
    'BatchTestResult',
    'summaries_from_arrays',
]


@dataclass(frozen=True)
class GroupSummary:
    """Aggregated observations of one group.

    Args:
        mean: Arithmetic mean of the group's values
        variance: Sample variance (divisor n - 1)
        n: Number of observations
    """

    mean: float
    variance: float
    n: int

    def __post_init__(self):
        try:
            mean = float(self.mean)
            variance = float(self.variance)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"mean and variance must be real numbers: {e}") from e

        try:
            n = operator.index(self.n)
        except TypeError:
            # Accept integral floats such as 12.0 coming out of numeric tables
            if isinstance(self.n, (float, np.floating)) and float(self.n).is_integer():
                n = int(self.n)
            else:
                raise InvalidInputError(
                    f"n must be an integer count, got {self.n!r}", field='n'
                ) from None

        object.__setattr__(self, 'mean', mean)
        object.__setattr__(self, 'variance', variance)
        object.__setattr__(self, 'n', int(n))


@dataclass(frozen=True)
class TestResult:
    """Outcome of one two-group Welch t-test.

    When both variances are zero the standard error vanishes and the
    result is a sentinel: ``degenerate`` is True, ``degrees_of_freedom``
    is NaN, and ``t_value``/``p_value`` are 0/1 for equal means or
    +-inf/0 for different means.
    """

    __test__ = False  # not a pytest test class

    t_value: float
    degrees_of_freedom: float
    p_value: float
    degenerate: bool = False

    def raise_if_degenerate(self) -> "TestResult":
        """Return self, or raise NumericalDegeneracyError for a sentinel result."""
        if self.degenerate:
            raise NumericalDegeneracyError(
                "both groups have zero variance; t = "
                f"{self.t_value}, degrees of freedom undefined"
            )
        return self


class BatchTestResult(NamedTuple):
    """Row-aligned results of many independent Welch t-tests."""

    t_values: np.ndarray
    degrees_of_freedom: np.ndarray
    p_values: np.ndarray
    degenerate: np.ndarray

    def __len__(self):
        return len(self.t_values)

    def row(self, i: int) -> TestResult:
        """Result of test ``i`` as a TestResult."""
        return TestResult(
            t_value=float(self.t_values[i]),
            degrees_of_freedom=float(self.degrees_of_freedom[i]),
            p_value=float(self.p_values[i]),
            degenerate=bool(self.degenerate[i]),
        )


def summaries_from_arrays(
    means: Sequence[float],
    variances: Sequence[float],
    counts: Sequence[int],
) -> List[GroupSummary]:
    """Build GroupSummary rows from three parallel sequences.

    Element ``i`` of each sequence describes group ``i``.
    """
    columns = {
        'means': np.asarray(means),
        'variances': np.asarray(variances),
        'counts': np.asarray(counts),
    }
    for name, col in columns.items():
        if col.ndim != 1:
            raise InvalidInputError(f"{name} must be one-dimensional, got shape {col.shape}")

    lengths = {name: len(col) for name, col in columns.items()}
    if len(set(lengths.values())) != 1:
        raise InvalidInputError(f"parallel sequences differ in length: {lengths}")

    summaries = []
    for i, (m, v, n) in enumerate(zip(columns['means'], columns['variances'], columns['counts'])):
        try:
            summaries.append(GroupSummary(m, v, n))
        except InvalidInputError as e:
            raise InvalidInputError(f"group {i}: {e}", index=i, field=e.field) from e
    return summaries
