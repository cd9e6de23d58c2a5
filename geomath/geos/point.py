# geomath/geos/point.py
import logging
from typing import Any, Tuple

from pydantic import field_validator

from geomath.core.errors import InvalidArgumentError, OutOfRangeError, ParseError
from geomath.geometry.point import Point
from geomath.geos.constants import (
    DEGREE_SIGN, GIS_PREFIX,
    MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE,
)

logger = logging.getLogger(__name__)


class GeospatialPoint(Point):
    """
    A latitude/longitude pair on a spherical earth.

    This is a two dimensional float64 point whose first coordinate (the x
    axis) is the longitude and whose second (the y axis) is the latitude.
    Both are checked on every construction:

    - -90 <= latitude <= +90
    - -180 <= longitude <= +180

    Values outside those ranges raise OutOfRangeError. Text that cannot be
    parsed raises ParseError, so callers can tell malformed input from
    well-formed but impossible coordinates.
    """

    def __init__(self, latitude: float = 0.0, longitude: float = 0.0, **data: Any) -> None:
        if "coordinates" in data:
            coordinates = data.pop("coordinates")
            if len(coordinates) != 2:
                raise InvalidArgumentError(
                    f"a geospatial point has 2 coordinates, got {len(coordinates)}"
                )
            longitude, latitude = coordinates
        data.pop("dtype", None)
        super().__init__(
            dtype="float64",
            coordinates=(_check_longitude(longitude), _check_latitude(latitude)),
            **data
        )

    @field_validator("coordinates")
    @classmethod
    def validate_range(cls, value: Tuple[float, ...]) -> Tuple[float, ...]:
        """Re-check the ranges for copies made through with_changes()."""
        if len(value) != 2:
            raise ValueError(f"a geospatial point has 2 coordinates, got {len(value)}")
        _check_longitude(value[0])
        _check_latitude(value[1])
        return value

    @classmethod
    def parse(cls, text: str) -> "GeospatialPoint":
        """
        Construct a point from a textual description.

        Two formats are accepted: "(<latitude>,<longitude>)" and the GIS
        format "POINT(<longitude> <latitude>)". Note the reversed order of the
        GIS format.

        Raises:
            ParseError: If the text is in neither format
            OutOfRangeError: If the text parses but the values are out of range
        """
        if not isinstance(text, str) or not text:
            raise ParseError(f"could not parse {text!r} as a Point")
        if text.startswith(GIS_PREFIX):
            latitude, longitude = _parse_gis_format(text)
        else:
            latitude, longitude = _parse_internal_format(text)
        return cls(latitude, longitude)

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    def with_latitude(self, latitude: float) -> "GeospatialPoint":
        """Create a copy of this point with a new latitude."""
        return type(self)(latitude, self.longitude)

    def with_longitude(self, longitude: float) -> "GeospatialPoint":
        """Create a copy of this point with a new longitude."""
        return type(self)(self.latitude, longitude)

    def gis(self) -> str:
        """
        Write out as a GIS string.

        The format is "POINT(<longitude> <latitude>)", suitable for use with
        PostGIS or other similar GIS databases.
        """
        return f"{GIS_PREFIX}{format_coordinate(self.longitude)} {format_coordinate(self.latitude)})"

    def dms(self) -> str:
        """Write out the latitude and longitude in degrees-minutes-seconds."""
        return f"{_to_dms(self.latitude, 'N', 'S')}, {_to_dms(self.longitude, 'E', 'W')}"

    def __str__(self) -> str:
        """The internal format, "(<latitude>,<longitude>)"."""
        return f"({format_coordinate(self.latitude)},{format_coordinate(self.longitude)})"

    def __repr__(self) -> str:
        return f"GeospatialPoint(latitude={self.latitude!r}, longitude={self.longitude!r})"


def format_coordinate(value: float) -> str:
    """
    Render a coordinate with the shortest text that round-trips exactly.

    Whole numbers are written without a fractional part, e.g. "40" not "40.0".
    """
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _check_latitude(value: Any) -> float:
    value = float(value)
    if not MIN_LATITUDE <= value <= MAX_LATITUDE:
        raise OutOfRangeError(f"latitude must be in the range [-90,90], got {value}")
    return value


def _check_longitude(value: Any) -> float:
    value = float(value)
    if not MIN_LONGITUDE <= value <= MAX_LONGITUDE:
        raise OutOfRangeError(f"longitude must be in the range [-180,180], got {value}")
    return value


def _to_dms(value: float, positive: str, negative: str) -> str:
    direction = positive if value >= 0.0 else negative
    value = abs(value)
    degrees = int(value)
    minutes = int((value - degrees) * 60.0)
    seconds = (value - degrees - minutes / 60.0) * 3600.0
    return f"{degrees}{DEGREE_SIGN} {minutes}' {format_coordinate(seconds)}\"{direction}"


def _parse_number(part: str, text: str) -> float:
    try:
        return float(part)
    except ValueError:
        logger.debug("Rejected %r: %r is not a number", text, part)
        raise ParseError(f"could not parse {text!r} as a Point") from None


def _parse_internal_format(text: str) -> Tuple[float, float]:
    if text[0] != "(" or text[-1] != ")":
        raise ParseError(f"could not parse {text!r} as a Point")
    comma = text.find(",", 1)
    if comma == -1:
        raise ParseError(f"could not parse {text!r} as a Point")
    return _parse_number(text[1:comma], text), _parse_number(text[comma + 1:-1], text)


def _parse_gis_format(text: str) -> Tuple[float, float]:
    if text[-1] != ")":
        raise ParseError(f"could not parse {text!r} as a Point")
    space = text.find(" ", len(GIS_PREFIX))
    if space == -1:
        raise ParseError(f"could not parse {text!r} as a Point")
    longitude = _parse_number(text[len(GIS_PREFIX):space], text)
    latitude = _parse_number(text[space + 1:-1], text)
    return latitude, longitude
