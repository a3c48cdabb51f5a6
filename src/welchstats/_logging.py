"""Package logger setup.

The library only attaches a NullHandler; applications (or tests) call
configure_logging() to see output.
"""

import logging

from . import _config

__all__ = [
    'get_logger',
    'configure_logging',
    'disable_logging',
]

_ROOT = "welchstats"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logging.getLogger(_ROOT).addHandler(logging.NullHandler())


def _resolve_level(value) -> int:
    if isinstance(value, str):
        return getattr(logging, value.upper(), logging.WARNING)
    if isinstance(value, int):
        return value
    return logging.WARNING


def get_logger(name: str) -> logging.Logger:
    """Child logger of the package logger ('welchstats.<name>')."""
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


def configure_logging(level=None) -> None:
    """Send package records to stderr at ``level`` (default WELCHSTATS_LOG_LEVEL)."""
    resolved = _resolve_level(level or _config.LOG_LEVEL)
    logging.basicConfig(level=resolved, format=_FORMAT)
    logging.getLogger(_ROOT).setLevel(resolved)
    # numba's compiler logs are noisy below WARNING
    logging.getLogger("numba").setLevel(logging.WARNING)


def disable_logging() -> None:
    """Silence all package records."""
    # children inherit the effective level
    logging.getLogger(_ROOT).setLevel(logging.CRITICAL + 1)
