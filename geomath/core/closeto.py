# geomath/core/closeto.py
from typing import Any, Optional

import numpy as np

from geomath.core.constants import machine_epsilon


def close_to(x: Any, y: Any, epsilon: Optional[Any] = None) -> bool:
    """
    Return True if x and y are within epsilon of each other.

    When epsilon is omitted the machine epsilon of x's type is used, which for
    integers means the values must be equal.
    """
    if epsilon is None:
        epsilon = machine_epsilon(np.asarray(x).dtype)
    diff = x - y if y <= x else y - x
    return bool(diff <= epsilon)
