# geomath/geometry/constants.py
"""Defaults for geometric calculations."""

# Precision used for lengths, distances and other derived values when the
# caller does not ask for a specific one
DEFAULT_RESULT_TYPE = "float64"

# Coordinate type of points created without an explicit dtype
DEFAULT_COORDINATE_TYPE = "float64"
