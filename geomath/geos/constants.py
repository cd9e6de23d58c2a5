# geomath/geos/constants.py
"""Constants for geospatial calculations."""

# Default diameter of the earth in metres, the same value PostGIS uses
DEFAULT_DIAMETER_OF_THE_EARTH_IN_M = 6370986.0

# Sanity check on caller supplied diameters
MIN_DIAMETER_OF_THE_EARTH_IN_M = 6370000.0

# Two points within this many metres are considered the same place
DEFAULT_CLOSE_EPSILON_M = 1.0

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# Textual point formats
GIS_PREFIX = "POINT("
DEGREE_SIGN = "º"
