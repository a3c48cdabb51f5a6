"""Runtime settings read from the environment at import time."""

import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


LOG_LEVEL = os.getenv("WELCHSTATS_LOG_LEVEL", "WARNING").upper()

# Numba on-disk cache for the batch kernels
JIT_CACHE = _flag("WELCHSTATS_JIT_CACHE", "0")

# Compile batch kernels with parallel=True (rows split across threads)
PARALLEL = _flag("WELCHSTATS_PARALLEL", "1")
