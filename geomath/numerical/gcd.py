# geomath/numerical/gcd.py
import numbers

from geomath.core.errors import InvalidArgumentError


def gcd(u: int, v: int) -> int:
    """
    Compute the greatest common divisor of two non-negative integers.

    Uses the binary algorithm from Knuth, *The Art of Computer Programming*
    Vol. 2, section 4.5.2, algorithm B. ``gcd(0, 0)`` is 0 and ``gcd(u, 0)``
    is u.

    Raises:
        InvalidArgumentError: If either argument is negative or not an integer
    """
    for name, value in (("u", u), ("v", v)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
        if value < 0:
            raise InvalidArgumentError(f"{name} must not be negative, got {value}")
    u, v = int(u), int(v)

    if u == 0 or v == 0:
        return u | v

    # B1: factor out the common power of 2
    k = 0
    while not (u & 1) and not (v & 1):
        k += 1
        u >>= 1
        v >>= 1

    # B2: t holds -v when u is odd, u otherwise
    t = -v if u & 1 else u
    while t != 0:
        # B3/B4: halve t until it is odd
        while not (t & 1):
            t >>= 1
        # B5: replace max(u, v)
        if t > 0:
            u = t
        else:
            v = -t
        # B6
        t = u - v

    return u << k
