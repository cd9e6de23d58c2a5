# geomath/core/constants.py
"""
Numeric constants selected by floating point precision.

The value of PI is held per numpy floating type so a computation done in
float32 uses a float32-accurate constant, and one done in longdouble gets as
many digits as the platform can hold.
"""
from typing import Any, Dict

import numpy as np

_PI_LITERALS: Dict[type, str] = {
    np.float16: "3.1415926",
    np.float32: "3.1415926",
    np.float64: "3.1415926535897932",
    np.longdouble: "3.14159265358979323846",
}


def scalar_type(dtype: Any) -> type:
    """Return the numpy scalar type for anything numpy accepts as a dtype."""
    return np.dtype(dtype).type


def pi(dtype: Any = np.float64) -> np.floating:
    """
    Return PI in the precision of the given floating type.

    Raises:
        TypeError: If dtype is not a floating point type
    """
    t = scalar_type(dtype)
    if t not in _PI_LITERALS:
        raise TypeError(f"no PI constant for non-floating type {np.dtype(dtype)}")
    return t(_PI_LITERALS[t])


def machine_epsilon(dtype: Any = np.float64) -> Any:
    """
    Return the machine epsilon of a numeric type.

    Integral types have an epsilon of zero, so closeness tests on integers
    collapse to exact equality.
    """
    dt = np.dtype(dtype)
    if np.issubdtype(dt, np.floating):
        return np.finfo(dt).eps
    if np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.bool_):
        return dt.type(0)
    raise TypeError(f"machine epsilon is undefined for {dt}")
