# geomath/numerical/minimum.py
"""
One dimensional minimisation by Brent's method.

Based on the description and sample code in *Numerical Recipes (FORTRAN)*,
ISBN 0 521 38330 7. Unlike the Numerical Recipes routine the tolerance is an
absolute tolerance on x rather than a fraction of the x values.
"""
import logging
import math
import sys
from typing import Callable, Optional, Tuple

from geomath.core.errors import InvalidArgumentError, NoConvergence

logger = logging.getLogger(__name__)

# Maximum number of iterations before giving up.
MAX_ITERATIONS = 100

# Default absolute tolerance on x. Brent's method cannot locate a minimum more
# precisely than the square root of the machine epsilon.
DEFAULT_TOLERANCE = math.sqrt(sys.float_info.epsilon)

_CGOLD = 1.0 - (math.sqrt(5.0) - 1.0) / 2.0


def minimum_value(ax: float, bx: float, cx: float, fn: Callable[[float], float],
                  tol: float = DEFAULT_TOLERANCE,
                  fbx: Optional[float] = None) -> Tuple[float, float]:
    """
    Find a local minimum of ``fn`` bracketed by ax < bx < cx.

    Args:
        ax: Lower bound of the bracket
        bx: A point inside the bracket with fn(bx) below fn(ax) and fn(cx)
        cx: Upper bound of the bracket
        fn: The function to minimise. Any exception it raises is passed along.
        tol: Absolute tolerance on the returned x
        fbx: fn(bx), if the caller has already computed it

    Returns:
        The pair (fmin, xmin), the minimum value and where it was found

    Raises:
        InvalidArgumentError: If ax, bx and cx are not in increasing order
        NoConvergence: If no minimum is found within MAX_ITERATIONS iterations
    """
    if ax >= bx or bx >= cx:
        raise InvalidArgumentError("ax, bx, and cx must be in increasing order")
    if not tol > 0.0:
        raise InvalidArgumentError(f"tol must be positive, got {tol}")

    a, b = float(ax), float(cx)
    v = w = x = float(bx)
    e = 0.0
    d = 0.0
    fx = fn(x) if fbx is None else fbx
    fv = fw = fx
    tol1 = float(tol)
    tol2 = 2.0 * tol1

    for iteration in range(MAX_ITERATIONS):
        xm = 0.5 * (a + b)
        if abs(x - xm) <= (tol2 - 0.5 * (b - a)):
            logger.debug("Minimum %s at %s found after %d iterations", fx, x, iteration)
            return fx, x

        if abs(e) > tol1:
            # Try a parabolic fit through x, v and w
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)
            if abs(p) >= abs(0.5 * q * e) or p <= q * (a - x) or p >= q * (b - x):
                e = a - x if x >= xm else b - x
                d = _CGOLD * e
            else:
                e = d
                d = p / q
                u = x + d
                if (u - a) < tol2 or (b - u) < tol2:
                    d = math.copysign(tol1, xm - x)
        else:
            e = a - x if x >= xm else b - x
            d = _CGOLD * e

        u = x + d if abs(d) >= tol1 else x + math.copysign(tol1, d)
        fu = fn(u)
        if fu <= fx:
            if u >= x:
                a = x
            else:
                b = x
            v, fv = w, fw
            w, fw = x, fx
            x, fx = u, fu
        else:
            if u < x:
                a = u
            else:
                b = u
            if fu <= fw or w == x:
                v, fv = w, fw
                w, fw = u, fu
            elif fu <= fv or v == x or v == w:
                v, fv = u, fu

    logger.debug("No minimum found in [%s, %s] after %d iterations", ax, cx, MAX_ITERATIONS)
    raise NoConvergence()


def maximum_value(ax: float, bx: float, cx: float, fn: Callable[[float], float],
                  tol: float = DEFAULT_TOLERANCE,
                  fbx: Optional[float] = None) -> Tuple[float, float]:
    """Find a local maximum of ``fn``; the counterpart of minimum_value()."""
    fmin, xmin = minimum_value(ax, bx, cx, lambda x: -fn(x), tol,
                               None if fbx is None else -fbx)
    return -fmin, xmin
