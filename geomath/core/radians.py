# geomath/core/radians.py
from typing import Any

import numpy as np

from geomath.core.constants import pi, scalar_type


def to_radians(degrees: Any, dtype: Any = np.float64) -> np.floating:
    """Convert from degrees to radians in the given floating precision."""
    t = scalar_type(dtype)
    return (t(degrees) * pi(t)) / t(180)


def to_degrees(radians: Any, dtype: Any = np.float64) -> np.floating:
    """Convert from radians to degrees in the given floating precision."""
    t = scalar_type(dtype)
    return (t(radians) * t(180)) / pi(t)
