# geomath/geometry/point.py
from functools import lru_cache
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np
from pydantic import Field, ValidationInfo, field_validator

from geomath.core.constants import machine_epsilon, scalar_type
from geomath.core.errors import InvalidArgumentError
from geomath.geometry.constants import DEFAULT_COORDINATE_TYPE, DEFAULT_RESULT_TYPE
from geomath.la.vector import ArrayVector, BufferVector, SliceVector, norm, to_string
from geomath.utils.base_model import ImmutableModel


class Point(ImmutableModel):
    """
    Represents a point in N-dimensional Cartesian space.

    The dimension is the number of coordinates and is fixed once the point is
    created. Coordinates are normalised through ``dtype`` on construction, so
    an int64 point holds integers and a float32 point holds values that are
    exactly representable in float32. Equality is exact and element-wise.
    """
    dtype: str = Field(
        default=DEFAULT_COORDINATE_TYPE,
        description="Numeric type of the coordinates (e.g. 'int64', 'float32', 'float64')"
    )
    coordinates: Tuple[Union[int, float], ...] = Field(
        description="Coordinate values, one per dimension"
    )

    @field_validator("dtype", mode="before")
    @classmethod
    def validate_dtype(cls, value: Any) -> str:
        """Accept anything numpy understands as an integral or floating type."""
        try:
            dt = np.dtype(value)
        except TypeError as e:
            raise ValueError(f"Unknown coordinate type: {value!r}") from e
        if dt == np.longdouble and dt != np.float64:
            raise ValueError("longdouble cannot be used for coordinates, only as a result type")
        if not (np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.floating)):
            raise ValueError(f"Coordinates must be integral or floating, got {dt}")
        return dt.name

    @field_validator("coordinates", mode="before")
    @classmethod
    def validate_coordinates(cls, value: Any, info: ValidationInfo) -> Tuple[Union[int, float], ...]:
        """Convert every coordinate to the point's numeric type."""
        if isinstance(value, (str, bytes)) or not hasattr(value, "__len__"):
            raise ValueError(f"Coordinates must be a sequence of numbers, got {value!r}")
        t = scalar_type(info.data.get("dtype", DEFAULT_COORDINATE_TYPE))
        coordinates = []
        for i in range(len(value)):
            if value[i] is None:
                raise ValueError(f"Coordinate {i} is missing")
            try:
                coordinates.append(t(value[i]).item())
            except (TypeError, OverflowError) as e:
                raise ValueError(f"Coordinate {i} is not a valid {np.dtype(t)} value: {value[i]!r}") from e
        return tuple(coordinates)

    @classmethod
    def zeros(cls, dimension: int, dtype: Any = DEFAULT_COORDINATE_TYPE) -> "Point":
        """Create a point with every coordinate set to zero."""
        if dimension < 0:
            raise InvalidArgumentError(f"dimension must not be negative, got {dimension}")
        return cls(dtype=dtype, coordinates=(0,) * dimension)

    @classmethod
    def origin(cls, dimension: int, dtype: Any = DEFAULT_COORDINATE_TYPE) -> "Point":
        """Return the shared origin (0,0,...,0) for a dimension and type."""
        return _origin(dimension, np.dtype(dtype).name)

    @classmethod
    def from_values(cls, values: Sequence[Any], dimension: Optional[int] = None,
                    dtype: Any = DEFAULT_COORDINATE_TYPE) -> "Point":
        """
        Create a point from a list of coordinate values.

        Args:
            values: The coordinates, in order
            dimension: Expected dimension; the number of values must match it
            dtype: Numeric type of the coordinates

        Raises:
            InvalidArgumentError: If the number of values differs from dimension
        """
        values = list(values)
        if dimension is not None and len(values) != dimension:
            raise InvalidArgumentError(
                f"initializer list must have {dimension} values, got {len(values)}"
            )
        return cls(dtype=dtype, coordinates=values)

    @classmethod
    def from_buffer(cls, buffer: Any, dimension: int, dtype: Any = None) -> "Point":
        """
        Create a point by copying the first ``dimension`` values of a buffer.

        The buffer may be anything exposing the buffer protocol (numpy array,
        array.array, bytearray) or any indexable sequence. When ``dtype`` is
        omitted the buffer's own element type is used.

        Raises:
            InvalidArgumentError: If the buffer is None or too short
        """
        if buffer is None:
            raise InvalidArgumentError("buffer must not be None")
        if _supports_buffer_protocol(buffer):
            source = BufferVector(buffer, dimension, dtype)
        else:
            source = SliceVector(buffer, dimension, dtype=dtype)
        return cls(dtype=dtype if dtype is not None else source.dtype,
                   coordinates=source.to_array().tolist())

    @property
    def dimension(self) -> int:
        """The number of coordinates."""
        return len(self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)

    def __getitem__(self, i: int) -> Union[int, float]:
        return self.coordinates[i]

    def vector(self) -> ArrayVector:
        """Return the coordinates as an owned vector."""
        return ArrayVector(self.coordinates, dtype=self.dtype)

    def with_coordinate(self, i: int, value: Any) -> "Point":
        """Create a copy of this point with coordinate ``i`` replaced."""
        coordinates = list(self.coordinates)
        coordinates[i] = value
        return self.with_changes(coordinates=coordinates)

    def __add__(self, other: Any) -> "Point":
        """
        Translate the point by a vector.

        Raises:
            InvalidArgumentError: If the translation needs a wider kind of
                number than the point holds, such as a float offset on an
                integer point
        """
        moved = self.vector() + other
        if not np.can_cast(moved.dtype, np.dtype(self.dtype), casting="same_kind"):
            raise InvalidArgumentError(
                f"cannot translate a {self.dtype} point by {np.dtype(moved.dtype)} values")
        return self.with_changes(coordinates=moved.to_array().tolist())

    def __sub__(self, other: "Point") -> ArrayVector:
        """Vector from ``other`` to this point."""
        if not isinstance(other, Point):
            return NotImplemented
        return self.vector() - other.vector()

    def distance_to(self, other: "Point", result: Any = DEFAULT_RESULT_TYPE) -> Any:
        """Calculate the Euclidean distance to another point."""
        return distance(self, other, result)

    def is_close_to(self, other: "Point", epsilon: Any = None,
                    result: Any = DEFAULT_RESULT_TYPE) -> bool:
        """Check if another point lies strictly within epsilon of this one."""
        return are_close(self, other, epsilon, result)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.coordinates == other.coordinates

    def __hash__(self) -> int:
        return hash(self.coordinates)

    def __str__(self) -> str:
        return to_string(self.coordinates)


@lru_cache(maxsize=None)
def _origin(dimension: int, dtype: str) -> Point:
    return Point.zeros(dimension, dtype)


def _supports_buffer_protocol(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return True
    try:
        memoryview(value)
    except TypeError:
        return False
    return True


def distance(p1: Point, p2: Point, result: Any = DEFAULT_RESULT_TYPE) -> Any:
    """
    Return the distance between two points.

    The difference is taken in the points' own type and the length is
    accumulated in ``result``, which should be at least as precise.

    Raises:
        InvalidArgumentError: If the points have different dimensions
    """
    return norm(p2 - p1, result)


def are_close(p1: Point, p2: Point, epsilon: Any = None,
              result: Any = DEFAULT_RESULT_TYPE) -> bool:
    """
    Return True if the distance between two points is less than epsilon.

    The comparison is strict. When epsilon is omitted the machine epsilon of
    ``result`` is used.
    """
    if epsilon is None:
        epsilon = machine_epsilon(result)
    return bool(distance(p1, p2, result) < epsilon)
