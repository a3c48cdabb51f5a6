"""JIT Decorators for the Batch Kernels.

This module provides thin wrappers around Numba's @njit that apply the
package defaults (nogil, on-disk cache and parallel settings from the
environment) and log each newly compiled signature.

Usage:
    from welchstats.optim import optimized_jit, parallel_jit

    @optimized_jit
    def scale(x, k):
        return x * k

    @parallel_jit
    def scale_all(arr, k, out):
        for i in prange(len(arr)):
            out[i] = arr[i] * k

Note:
    fastmath is never switched on by the shorthands. The Welch kernels
    mark degenerate rows with inf/NaN, which fastmath's nnan/ninf flags
    would let LLVM fold away.
"""

from typing import Callable, Optional, Any, Dict, Union
from numba import njit
from numba.core.dispatcher import Dispatcher

from .. import _config
from .._logging import get_logger


__all__ = [
    'optimized_jit',
    'parallel_jit',
    'JitDispatcher',
]

logger = get_logger(__name__)


# =============================================================================
# Dispatcher Wrapper
# =============================================================================

class JitDispatcher:
    """Wrapper around a Numba Dispatcher that logs new compilations.

    Calls and attribute access are forwarded to the wrapped dispatcher.

    Attributes:
        _dispatcher: The underlying Numba Dispatcher
        _options: Options the function was compiled with
        _seen_signatures: Signatures already reported
    """

    def __init__(self, dispatcher: Dispatcher, options: Dict[str, Any]):
        self._dispatcher = dispatcher
        self._options = options
        self._seen_signatures = set()

    def __call__(self, *args, **kwargs):
        n_before = len(self.signatures)
        result = self._dispatcher(*args, **kwargs)

        # Only a first call with new argument types grows the signature list
        if len(self.signatures) != n_before:
            self._report_new_signatures()

        return result

    def _report_new_signatures(self):
        for sig in self.signatures:
            if sig not in self._seen_signatures:
                self._seen_signatures.add(sig)
                logger.debug(
                    "compiled %s%s (parallel=%s, cache=%s)",
                    self._dispatcher.__name__, sig,
                    self._options.get('parallel'), self._options.get('cache'),
                )

    # ==========================================================================
    # Dispatcher Interface
    # ==========================================================================

    @property
    def dispatcher(self):
        """The bare Numba dispatcher, callable from other jitted functions."""
        return self._dispatcher

    @property
    def signatures(self):
        """Compiled signatures (empty under NUMBA_DISABLE_JIT)."""
        return getattr(self._dispatcher, "signatures", [])

    @property
    def options(self) -> Dict[str, Any]:
        """Numba options used for compilation."""
        return dict(self._options)

    @property
    def py_func(self):
        """The original Python function."""
        return getattr(self._dispatcher, "py_func", self._dispatcher)

    @property
    def __name__(self):
        return self._dispatcher.__name__

    @property
    def __doc__(self):
        return self._dispatcher.__doc__

    def __repr__(self):
        return f"<JitDispatcher({self._dispatcher.__name__})>"

    def __getattr__(self, name):
        return getattr(self._dispatcher, name)


# =============================================================================
# Decorators
# =============================================================================

def optimized_jit(
    func: Optional[Callable] = None,
    *,
    nogil: bool = True,
    cache: Optional[bool] = None,
    parallel: bool = False,
    fastmath: bool = False,
    boundscheck: bool = False,
    **numba_options
) -> Union[Callable, JitDispatcher]:
    """JIT decorator with package defaults.

    Args:
        func: Function to compile (when used without parentheses)
        nogil: Release GIL during execution (default: True)
        cache: Cache compiled function to disk (default: WELCHSTATS_JIT_CACHE)
        parallel: Enable automatic parallelization (default: False)
        fastmath: Enable fast math optimizations (default: False)
        boundscheck: Enable array bounds checking (default: False)
        **numba_options: Additional Numba options

    Returns:
        JitDispatcher wrapping the compiled function

    Example:
        @optimized_jit
        def add(a, b):
            return a + b

        @optimized_jit(cache=True, boundscheck=True)
        def checked(arr, i):
            return arr[i]
    """
    numba_opts = {
        'nogil': nogil,
        'cache': _config.JIT_CACHE if cache is None else cache,
        'parallel': parallel,
        'fastmath': fastmath,
        'boundscheck': boundscheck,
        **numba_options
    }

    def decorator(fn: Callable) -> JitDispatcher:
        dispatcher = njit(**numba_opts)(fn)
        return JitDispatcher(dispatcher, numba_opts)

    # Handle both @optimized_jit and @optimized_jit()
    if func is not None:
        return decorator(func)
    return decorator


def parallel_jit(func: Optional[Callable] = None, **kwargs) -> Union[Callable, JitDispatcher]:
    """Shorthand for @optimized_jit(parallel=True).

    Parallelism follows WELCHSTATS_PARALLEL unless ``parallel`` is passed.

    Example:
        @parallel_jit
        def my_func(arr):
            ...
    """
    kwargs.setdefault('parallel', _config.PARALLEL)
    return optimized_jit(func, **kwargs)
