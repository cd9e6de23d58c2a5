# geomath/core/errors.py
"""Exception taxonomy shared by every geomath module."""


class GeomathError(Exception):
    """Base class for errors raised by geomath."""


class InvalidArgumentError(GeomathError, ValueError):
    """A parameter passed to an operation is not acceptable."""


class OutOfRangeError(GeomathError, ValueError):
    """A value lies outside the domain defined for it (e.g. latitude > 90)."""


class ParseError(InvalidArgumentError):
    """Text could not be parsed in any of the supported formats."""


class NoIntersection(GeomathError, ArithmeticError):
    """Raised when two lines do not intersect."""

    def __init__(self, message: str = "the lines do not intersect") -> None:
        super().__init__(message)


class NoConvergence(GeomathError, RuntimeError):
    """An iterative algorithm exhausted its iteration budget."""

    def __init__(self, message: str = "the algorithm does not appear to be converging") -> None:
        super().__init__(message)
