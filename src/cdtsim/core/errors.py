"""
Exceptions raised by the Metropolis core.

Nothing here is recoverable: a Monte Carlo chain with a skipped or patched
step is invalid, so every error aborts the run.
"""


class MetropolisError(Exception):
    """Base class for all simulation errors."""


class PreconditionError(MetropolisError):
    """An operation was requested in a state where it is undefined."""


class PrecisionError(MetropolisError, ArithmeticError):
    """High-precision arithmetic could not be set up or produced a non-finite value."""


class BookkeepingError(MetropolisError):
    """State counts disagree with the triangulation, or would become invalid."""


class ConsumedHandleError(MetropolisError):
    """A triangulation handle was used after its ownership was transferred."""
