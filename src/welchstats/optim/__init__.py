"""JIT toolkit for the welchstats kernels.

Components:

    JIT Decorators:
        - optimized_jit: @njit with package defaults and compile logging
        - parallel_jit: Shorthand for @optimized_jit(parallel=True)
        - JitDispatcher: Wrapper returned by both decorators

    Logging:
        - disable_logging: Silence package log records
"""

from ._jit import (
    optimized_jit,
    parallel_jit,
    JitDispatcher,
)

from .._logging import disable_logging

__all__ = [
    'optimized_jit',
    'parallel_jit',
    'JitDispatcher',
    'disable_logging',
]
