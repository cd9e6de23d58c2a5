# geomath/geometry/line.py
import logging
from typing import Any, Union

import numpy as np
from pydantic import Field, model_validator

from geomath.core.closeto import close_to
from geomath.core.constants import scalar_type
from geomath.core.errors import InvalidArgumentError, NoIntersection
from geomath.geometry.constants import DEFAULT_COORDINATE_TYPE, DEFAULT_RESULT_TYPE
from geomath.geometry.point import Point
from geomath.geometry import point as _point
from geomath.la.vector import ArrayVector, dot_product, norm
from geomath.utils.base_model import ImmutableModel

logger = logging.getLogger(__name__)


class Line(ImmutableModel):
    """
    Represents a line segment defined by two points.

    The segment also stands for the infinite line through its end points:
    distance() and intersection() work on that infinite line. A zero-length
    line (a == b) is allowed. Two lines are equal when their end points are
    equal in order, so (a, b) differs from (b, a) unless a == b.
    """
    a: Point = Field(description="First end point of the segment")
    b: Point = Field(description="Second end point of the segment")

    @model_validator(mode="after")
    def validate_dimensions(self) -> "Line":
        """Ensure both end points live in the same space."""
        if self.a.dimension != self.b.dimension:
            raise ValueError(
                f"End points must have the same dimension, got {self.a.dimension} and {self.b.dimension}"
            )
        return self

    @classmethod
    def zero(cls, dimension: int, dtype: Any = DEFAULT_COORDINATE_TYPE) -> "Line":
        """The zero-length line from the origin to itself."""
        origin = Point.origin(dimension, dtype)
        return cls(a=origin, b=origin)

    @property
    def dimension(self) -> int:
        """The dimension of the space the line lives in."""
        return self.a.dimension

    @property
    def direction_vector(self) -> ArrayVector:
        """Get the direction vector from a to b."""
        return self.b - self.a

    def length(self, result: Any = DEFAULT_RESULT_TYPE) -> Any:
        """Get the length of the line segment."""
        return length(self, result)

    def midpoint(self, result: Any = DEFAULT_RESULT_TYPE) -> Point:
        """Get the midpoint of the line segment."""
        return midpoint(self, result)

    def distance_to_point(self, point: Point, result: Any = DEFAULT_RESULT_TYPE) -> Any:
        """Calculate the distance from a point to the infinite line."""
        return distance(self, point, result)

    def intersect(self, other: "Line", result: Any = DEFAULT_RESULT_TYPE) -> Point:
        """Find the intersection point with another 2D line."""
        return intersection(self, other, result)

    def __str__(self) -> str:
        """String representation of the line."""
        return f"Line({self.a} -> {self.b})"


def length(line: Line, result: Any = DEFAULT_RESULT_TYPE) -> Any:
    """Return the distance between the end points of a line."""
    return _point.distance(line.a, line.b, result)


def midpoint(line: Line, result: Any = DEFAULT_RESULT_TYPE) -> Point:
    """
    Return the midpoint of a segment.

    The average is computed in the ``result`` type and the returned point has
    that type, regardless of the type of the line's own coordinates.
    """
    t = scalar_type(result)
    values = [(t(line.a[i]) + t(line.b[i])) / t(2) for i in range(line.dimension)]
    return Point(dtype=result, coordinates=values)


def distance(x: Union[Line, Point], y: Union[Line, Point],
             result: Any = DEFAULT_RESULT_TYPE) -> Any:
    """
    Return the distance between two geometric objects.

    Point/point gives the Euclidean distance. Line/point (in either order)
    gives the distance from the point to the closest point on the infinite
    line through the segment.

    The point is projected onto the line with
    ``t = dot(p-a, b-a) / dot(b-a, b-a)`` and the distance is the length of
    ``(p-a) - t*(b-a)``. All coordinates are converted to ``result`` before
    subtracting, so the point and the line may use different coordinate types.
    A zero-length line has no direction; the distance is then the distance
    to its single point.
    """
    if isinstance(x, Point) and isinstance(y, Point):
        return _point.distance(x, y, result)
    if isinstance(x, Point) and isinstance(y, Line):
        x, y = y, x
    if not (isinstance(x, Line) and isinstance(y, Point)):
        raise InvalidArgumentError(
            f"cannot compute a distance between {type(x).__name__} and {type(y).__name__}"
        )

    line, p = x, y
    if p.dimension != line.dimension:
        raise InvalidArgumentError(
            f"point of dimension {p.dimension} cannot be measured against a line of dimension {line.dimension}"
        )
    t = scalar_type(result)
    pa = _differences(p, line.a, t)
    ba = _differences(line.b, line.a, t)
    denominator = dot_product(ba, ba, t)
    if denominator == 0:
        logger.debug("Distance to zero-length line %s taken as distance to its end point", line)
        return norm(pa, t)
    projection = dot_product(pa, ba, t) / denominator
    return norm(pa - projection * ba, t)


def intersection(l1: Line, l2: Line, result: Any = DEFAULT_RESULT_TYPE) -> Point:
    """
    Returns the point of intersection between two 2D lines.

    This is the intersection of the infinite lines, not just the segments. If
    you are interested in segment intersection you will need to check that
    the point is within the bounds of both segments.

    Based on the algorithm in *Computational Geometry in C* by O'Rourke.

    Raises:
        NoIntersection: If the lines are parallel. Overlapping lines (two
            segments on the same line) count as parallel.
        InvalidArgumentError: If either line is not two dimensional
    """
    if l1.dimension != 2 or l2.dimension != 2:
        raise InvalidArgumentError("intersection is only defined for 2D lines")

    t = scalar_type(result)
    a, b, c, d = ([t(v) for v in p.coordinates] for p in (l1.a, l1.b, l2.a, l2.b))

    denominator = (a[0] * (d[1] - c[1]) + b[0] * (c[1] - d[1])
                   + d[0] * (b[1] - a[1]) + c[0] * (a[1] - b[1]))
    if close_to(denominator, t(0)):
        logger.debug("Lines %s and %s are parallel", l1, l2)
        raise NoIntersection()

    s = (a[0] * (d[1] - c[1]) + c[0] * (a[1] - d[1]) + d[0] * (c[1] - a[1])) / denominator
    values = [a[i] + s * (b[i] - a[i]) for i in range(2)]
    return Point(dtype=result, coordinates=values)


def _differences(p: Point, q: Point, t: type) -> ArrayVector:
    return ArrayVector(np.array([t(p[i]) - t(q[i]) for i in range(p.dimension)], dtype=t))
