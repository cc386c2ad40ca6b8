"""
Errors raised by the combination index.

Both concrete errors subclass ValueError, so callers that only care about
"bad argument" can catch the builtin.
"""


class CombinationError(Exception):
    """Base class for combination index errors."""


class InvalidArgument(CombinationError, ValueError):
    """
    Bad construction argument or bulk matrix shape.

    Raised for a non-positive arity, a display-name list of the wrong length,
    a bulk matrix whose orientation does not match the arity, or input that
    cannot be coerced to integers / a real increment.
    """


class PreconditionViolation(CombinationError, ValueError):
    """A combination whose length differs from the table's arity."""


__all__ = [
    'CombinationError',
    'InvalidArgument',
    'PreconditionViolation',
]
