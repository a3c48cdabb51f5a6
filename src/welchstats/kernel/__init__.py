"""welchstats Kernel Module.

Welch's t-test on summary statistics, with Numba-compiled batch kernels.

Design Pattern:
    - Single test: exactly two GroupSummary values (compute, welch_ttest)
    - Batch: one independent two-group test per row (welch_ttest_batch)
    - One-vs-all: reference vs each target (welch_ttest_vs_reference)

Submodules:
    math: Welch formulas and Student's t p-values
    ttest: Public test operations
"""

from . import math
from . import ttest

__all__ = [
    'math',
    'ttest',
]
