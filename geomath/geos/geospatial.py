# geomath/geos/geospatial.py
"""
Great-circle computations on GeospatialPoint values.

Distances follow the haversine formula as described at
http://www.movable-type.co.uk/scripts/latlong.html. The ``diameter_of_the_earth``
argument is used directly as R in ``d = R*c``; its default is the value used
by PostGIS.
"""
import logging
import math
from typing import Sequence

import numpy as np

from geomath.core.constants import pi
from geomath.core.errors import InvalidArgumentError
from geomath.core.radians import to_degrees, to_radians
from geomath.geos.constants import (
    DEFAULT_CLOSE_EPSILON_M,
    DEFAULT_DIAMETER_OF_THE_EARTH_IN_M,
    MIN_DIAMETER_OF_THE_EARTH_IN_M,
)
from geomath.geos.point import GeospatialPoint

logger = logging.getLogger(__name__)

# Points closer than this (in metres) are treated as identical by intermediate_point.
_COINCIDENT_EPSILON_M = float(np.finfo(np.float64).eps) * 2


def distance(p1: GeospatialPoint, p2: GeospatialPoint,
             diameter_of_the_earth: float = DEFAULT_DIAMETER_OF_THE_EARTH_IN_M) -> float:
    """
    Compute the distance between two points, in metres, using the haversine formula.

    The result is checked against R·π, half of the circumference. This departs
    on purpose from an R·π/2 bound, which would reject any pair of points more
    than a quarter of the way around the globe.

    Raises:
        InvalidArgumentError: If diameter_of_the_earth is not above 6,370,000 m
        RuntimeError: If the result exceeds half of the great circle
    """
    _check_diameter(diameter_of_the_earth)
    r = float(diameter_of_the_earth)
    phi1 = float(to_radians(p1.latitude))
    phi2 = float(to_radians(p2.latitude))
    delta_phi = float(to_radians(p2.latitude - p1.latitude))
    delta_lambda = float(to_radians(p2.longitude - p1.longitude))

    a = (math.sin(delta_phi / 2.0) ** 2
         + (math.cos(phi1) * math.cos(phi2)) * math.sin(delta_lambda / 2.0) ** 2)
    # Rounding can leave a few ulps outside [0,1] for near-antipodal points.
    a = min(max(a, 0.0), 1.0)
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    d = r * c

    if d > r * float(pi()):
        raise RuntimeError(f"distance {d} exceeds half of the great circle for R={r}")
    return d


def are_close(p1: GeospatialPoint, p2: GeospatialPoint,
              epsilon: float = DEFAULT_CLOSE_EPSILON_M,
              diameter_of_the_earth: float = DEFAULT_DIAMETER_OF_THE_EARTH_IN_M) -> bool:
    """
    Return True if two points are within epsilon metres of each other.

    Raises:
        InvalidArgumentError: If epsilon is not positive
    """
    if not epsilon > 0.0:
        raise InvalidArgumentError(f"epsilon must be positive, got {epsilon}")
    return distance(p1, p2, diameter_of_the_earth) <= epsilon


def intermediate_point(p1: GeospatialPoint, p2: GeospatialPoint, fraction: float,
                       diameter_of_the_earth: float = DEFAULT_DIAMETER_OF_THE_EARTH_IN_M) -> GeospatialPoint:
    """
    Compute the point at ``fraction`` of the way along the great circle from p1 to p2.

    A fraction of 0 gives p1 and a fraction of 1 gives p2 (to within rounding).
    When the two points coincide every intermediate point is p1 itself.

    Raises:
        InvalidArgumentError: If fraction is not in [0,1] or the diameter is too small
    """
    _check_fraction(fraction)
    _check_diameter(diameter_of_the_earth)

    if are_close(p1, p2, _COINCIDENT_EPSILON_M, diameter_of_the_earth):
        logger.debug("Points %s and %s coincide, intermediate point is the first", p1, p2)
        return p1

    f = float(fraction)
    delta = distance(p1, p2, diameter_of_the_earth) / float(diameter_of_the_earth)
    phi1 = float(to_radians(p1.latitude))
    lambda1 = float(to_radians(p1.longitude))
    phi2 = float(to_radians(p2.latitude))
    lambda2 = float(to_radians(p2.longitude))

    a = math.sin((1.0 - f) * delta) / math.sin(delta)
    b = math.sin(f * delta) / math.sin(delta)
    x = a * math.cos(phi1) * math.cos(lambda1) + b * math.cos(phi2) * math.cos(lambda2)
    y = a * math.cos(phi1) * math.sin(lambda1) + b * math.cos(phi2) * math.sin(lambda2)
    z = a * math.sin(phi1) + b * math.sin(phi2)

    latitude = float(to_degrees(math.atan2(z, math.sqrt(x * x + y * y))))
    longitude = normalize_longitude(float(to_degrees(math.atan2(y, x))))
    # Rounding in to_degrees can overshoot a pole by an ulp.
    latitude = min(max(latitude, -90.0), 90.0)
    return GeospatialPoint(latitude, longitude)


def path_length(path: Sequence[GeospatialPoint],
                diameter_of_the_earth: float = DEFAULT_DIAMETER_OF_THE_EARTH_IN_M) -> float:
    """
    Compute the length, in metres, of a path through an ordered set of points.

    An empty path or a path of a single point has zero length.
    """
    length = 0.0
    previous = None
    for p in path:
        if previous is not None:
            length += distance(previous, p, diameter_of_the_earth)
        previous = p
    return length


def path_intermediate_point(path: Sequence[GeospatialPoint], fraction: float,
                            diameter_of_the_earth: float = DEFAULT_DIAMETER_OF_THE_EARTH_IN_M) -> GeospatialPoint:
    """
    Compute the point found at ``fraction`` of the way along a path.

    A fraction of 0 returns the first point of the path and 1 returns the
    last, exactly. A path of a single point returns that point for any
    fraction.

    Raises:
        InvalidArgumentError: If fraction is not in [0,1] or the path is empty
    """
    _check_fraction(fraction)
    path = list(path)
    if not path:
        raise InvalidArgumentError("cannot determine an intermediate point on an empty path")
    if len(path) == 1:
        return path[0]
    if fraction == 0.0:
        return path[0]
    if fraction == 1.0:
        return path[-1]

    # Accumulate in the same order as path_length so the last running total
    # equals the length exactly and the target can never lie beyond it.
    target = path_length(path, diameter_of_the_earth) * float(fraction)
    walked = 0.0
    previous = path[0]
    for index, p in enumerate(path[1:], start=1):
        segment = distance(previous, p, diameter_of_the_earth)
        reached = walked + segment
        if reached == target:
            return p
        if reached > target:
            local = min(max((target - walked) / segment, 0.0), 1.0)
            logger.debug("Fraction %s of the path falls on segment %d at %s", fraction, index, local)
            return intermediate_point(previous, p, local, diameter_of_the_earth)
        walked = reached
        previous = p

    raise RuntimeError(f"walked off the end of a {len(path)} point path looking for fraction {fraction}")


def normalize_longitude(longitude: float) -> float:
    """Wrap a longitude in degrees into the range (-180,180]."""
    normalized = math.fmod(longitude + 540.0, 360.0) - 180.0
    if normalized == -180.0:
        return 180.0
    return normalized


def _check_fraction(fraction: float) -> None:
    if not 0.0 <= fraction <= 1.0:
        raise InvalidArgumentError(f"fraction must be in the range [0,1], got {fraction}")


def _check_diameter(diameter_of_the_earth: float) -> None:
    if not diameter_of_the_earth > MIN_DIAMETER_OF_THE_EARTH_IN_M:
        raise InvalidArgumentError(
            f"diameter_of_the_earth must exceed {MIN_DIAMETER_OF_THE_EARTH_IN_M} m, got {diameter_of_the_earth}"
        )
