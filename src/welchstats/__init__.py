"""welchstats: Welch's t-test from group summary statistics.

Compares two groups from their mean, unbiased variance and count alone,
so the raw observations never need to be loaded.

Quick Start:
    from welchstats import GroupSummary, compute

    a = GroupSummary(mean=17.1474, variance=14.4299, n=19)
    b = GroupSummary(mean=24.3923, variance=33.5238, n=13)
    result = compute([a, b])
    result.t_value, result.degrees_of_freedom, result.p_value
"""

__version__ = '0.1.0'

from ._errors import InvalidInputError, NumericalDegeneracyError
from ._logging import configure_logging, disable_logging, get_logger
from .summary import (
    GroupSummary,
    TestResult,
    BatchTestResult,
    summaries_from_arrays,
)
from .kernel.ttest import (
    compute,
    welch_ttest,
    welch_ttest_batch,
    welch_ttest_vs_reference,
)

__all__ = [
    '__version__',

    # Errors
    'InvalidInputError',
    'NumericalDegeneracyError',

    # Data model
    'GroupSummary',
    'TestResult',
    'BatchTestResult',
    'summaries_from_arrays',

    # Tests
    'compute',
    'welch_ttest',
    'welch_ttest_batch',
    'welch_ttest_vs_reference',

    # Logging
    'configure_logging',
    'disable_logging',
    'get_logger',
]
