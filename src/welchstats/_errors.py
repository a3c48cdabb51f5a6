"""Exception types raised by welchstats."""

__all__ = [
    'InvalidInputError',
    'NumericalDegeneracyError',
]


class InvalidInputError(ValueError):
    """A precondition of the test was violated.

    Attributes:
        index: Group (or batch row) index the problem was found at, if any
        field: Offending field ('groups', 'mean', 'variance', 'n'), if any
    """

    def __init__(self, message: str, index=None, field=None):
        super().__init__(message)
        self.index = index
        self.field = field


class NumericalDegeneracyError(InvalidInputError):
    """The standard error of the mean difference is zero."""
