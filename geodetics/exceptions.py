"""Exceptions raised by geodetics"""

__all__ = [
    'GeodesyConvergenceError', 'GeodesyError', 'GeodesyFormatError',
    'IncompatibleDatumError',
]


class GeodesyError(ValueError):
    """Base class for all errors raised by geodetics"""


class GeodesyFormatError(GeodesyError):
    """An invalid parameter value or a malformed coordinate text"""


class GeodesyConvergenceError(GeodesyError):
    """An iterative solver did not converge within its iteration ceiling"""

    def __init__(self, solver: str, iterations: int, reason: str = 'failed to converge'):
        super().__init__(f'{solver} {reason} after {iterations} iterations')
        self.solver = solver
        self.iterations = iterations


class IncompatibleDatumError(GeodesyError):
    """A datum and an ellipsoid were both supplied but do not match"""
