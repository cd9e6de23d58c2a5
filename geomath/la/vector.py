# geomath/la/vector.py
"""
Fixed size mathematical vectors over interchangeable storage.

A vector in this module is an ordered, fixed size collection of numbers. The
arithmetic and reduction functions below only rely on ``len(v)`` and
``v[i]``, so they accept tuples, lists and numpy arrays as well as the
``VectorLike`` classes defined here. The VectorLike classes differ only in
where their elements live:

- ``ArrayVector`` owns a numpy array.
- ``BufferVector`` wraps a writable buffer (bytearray, array.array, mmap,
  numpy array) without copying it.
- ``ListVector`` wraps a Python list owned by somebody else.
- ``SliceVector`` is a strided window into a larger indexable buffer.

The non-owning variants keep a reference to the backing storage. Writes go
straight through to that storage, and the caller is responsible for keeping
it at least as long as the vector is in use.
"""
import math
import numbers
import operator
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, Optional, Sequence

import numpy as np

from geomath.core.constants import scalar_type
from geomath.core.errors import InvalidArgumentError


class VectorLike(ABC):
    """
    Capability shared by all vector storages.

    Subclasses provide size(), dtype and element access; everything else
    (iteration, equality, arithmetic) is defined here in terms of those.
    Index checking is left to the backing storage.
    """

    @abstractmethod
    def size(self) -> int:
        """Return the fixed number of elements."""

    @property
    @abstractmethod
    def dtype(self) -> np.dtype:
        """The numeric type of the elements."""

    @abstractmethod
    def __getitem__(self, i: int) -> Any:
        ...

    @abstractmethod
    def __setitem__(self, i: int, value: Any) -> None:
        ...

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.size()):
            yield self[i]

    def to_array(self) -> np.ndarray:
        """Return a copy of the elements as a numpy array."""
        return np.array([self[i] for i in range(self.size())], dtype=self.dtype)

    # Equality is structural: any storage holding the same values is equal.
    def __eq__(self, other: object) -> bool:
        if not _is_vector_like(other):
            return NotImplemented
        return equal(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # elements are mutable

    # Make numpy arrays and scalars defer to the reflected operators below.
    __array_ufunc__ = None

    # Binary operators always produce a fresh ArrayVector.
    def __add__(self, other: Any) -> "ArrayVector":
        return add(self, other)

    def __radd__(self, other: Any) -> "ArrayVector":
        return add(other, self)

    def __sub__(self, other: Any) -> "ArrayVector":
        return subtract(self, other)

    def __rsub__(self, other: Any) -> "ArrayVector":
        return subtract(other, self)

    def __mul__(self, other: Any) -> "ArrayVector":
        return multiply(self, other)

    def __rmul__(self, other: Any) -> "ArrayVector":
        return multiply(other, self)

    def __truediv__(self, other: Any) -> "ArrayVector":
        return divide(self, other)

    def __rtruediv__(self, other: Any) -> "ArrayVector":
        return divide(other, self)

    # In-place operators write through to the backing storage.
    def __iadd__(self, other: Any) -> "VectorLike":
        return self._assign(operator.add, other)

    def __isub__(self, other: Any) -> "VectorLike":
        return self._assign(operator.sub, other)

    def __imul__(self, other: Any) -> "VectorLike":
        return self._assign(operator.mul, other)

    def __itruediv__(self, other: Any) -> "VectorLike":
        return self._assign(_divide, other)

    def _assign(self, op: Callable[[Any, Any], Any], other: Any) -> "VectorLike":
        values = _elementwise(op, self, other, self.dtype)
        for i, value in enumerate(values):
            self[i] = value
        return self

    def __str__(self) -> str:
        return to_string(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}{to_string(self)}"


class ArrayVector(VectorLike):
    """A vector that owns its elements in a numpy array."""

    def __init__(self, values: Any, dtype: Any = None) -> None:
        if _is_vector_like(values) and not isinstance(values, np.ndarray):
            if dtype is None:
                dtype = _dtype_of(values)
            values = [values[i] for i in range(len(values))]
        self._values = np.array(values, dtype=dtype)
        if self._values.ndim != 1:
            raise InvalidArgumentError("an ArrayVector must be one dimensional")

    @classmethod
    def zeros(cls, size: int, dtype: Any = np.float64) -> "ArrayVector":
        """Create a vector of the given size with every element zero."""
        return cls(np.zeros(size, dtype=dtype))

    def size(self) -> int:
        return int(self._values.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    def __getitem__(self, i: int) -> Any:
        return self._values[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self._values[i] = value

    def to_array(self) -> np.ndarray:
        return self._values.copy()


class BufferVector(VectorLike):
    """
    A vector over the first ``size`` elements of a writable buffer.

    The buffer is not copied: ``bytearray``, ``array.array``, ``mmap`` objects
    and numpy arrays are all wrapped in place, so writes through the vector
    are visible in the buffer and vice versa. Raw byte buffers are read as
    ``dtype`` elements.

    Raises:
        InvalidArgumentError: If the buffer is None or holds fewer than
            ``size`` elements
    """

    def __init__(self, buffer: Any, size: int, dtype: Any = None) -> None:
        if buffer is None:
            raise InvalidArgumentError("buffer must not be None")
        if size < 0:
            raise InvalidArgumentError(f"size must not be negative, got {size}")
        if isinstance(buffer, np.ndarray):
            if dtype is not None and np.dtype(dtype) != buffer.dtype:
                raise InvalidArgumentError(
                    f"buffer holds {buffer.dtype} values, not {np.dtype(dtype)}"
                )
            if buffer.ndim != 1:
                raise InvalidArgumentError("buffer must be one dimensional")
            view = buffer
        else:
            if dtype is None:
                dtype = _buffer_dtype(buffer)
            try:
                view = np.frombuffer(buffer, dtype=dtype)
            except (TypeError, ValueError) as e:
                raise InvalidArgumentError(f"cannot read the buffer as {np.dtype(dtype)} values: {e}") from e
        if view.shape[0] < size:
            raise InvalidArgumentError(
                f"buffer must hold at least {size} values, it holds {view.shape[0]}"
            )
        self._view = view[:size]
        self._buffer = buffer

    @property
    def buffer(self) -> Any:
        """The wrapped storage."""
        return self._buffer

    def size(self) -> int:
        return int(self._view.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._view.dtype

    def __getitem__(self, i: int) -> Any:
        return self._view[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self._view[i] = value


class ListVector(VectorLike):
    """
    A vector over the first ``size`` elements of an externally owned list.

    The list is held by reference and may be resized by its owner, but it
    must keep at least ``size`` elements while the vector is in use.
    """

    def __init__(self, values: list, size: Optional[int] = None, dtype: Any = None) -> None:
        if values is None:
            raise InvalidArgumentError("values must not be None")
        if size is None:
            size = len(values)
        if size < 0:
            raise InvalidArgumentError(f"size must not be negative, got {size}")
        if len(values) < size:
            raise InvalidArgumentError(
                f"list must hold at least {size} values, it holds {len(values)}"
            )
        self._values = values
        self._size = size
        self._dtype = np.dtype(dtype) if dtype is not None else np.asarray(values[:size]).dtype

    @property
    def values(self) -> list:
        """The wrapped list."""
        return self._values

    def size(self) -> int:
        return self._size

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def __getitem__(self, i: int) -> Any:
        return self._values[_check_index(i, self._size)]

    def __setitem__(self, i: int, value: Any) -> None:
        # Keep the list holding plain Python numbers.
        self._values[_check_index(i, self._size)] = self._dtype.type(value).item()


class SliceVector(VectorLike):
    """
    A strided window of ``size`` elements into a larger buffer.

    Element ``i`` of the vector is element ``offset + i * stride`` of the
    buffer. The buffer can be anything indexable with ``len()`` (a numpy
    array, a list, an ``array.array``) and is not copied.

    Raises:
        InvalidArgumentError: If the window does not fit inside the buffer
    """

    def __init__(self, buffer: Any, size: int, offset: int = 0, stride: int = 1,
                 dtype: Any = None) -> None:
        if buffer is None:
            raise InvalidArgumentError("buffer must not be None")
        if size < 0 or offset < 0:
            raise InvalidArgumentError("size and offset must not be negative")
        if stride < 1:
            raise InvalidArgumentError(f"stride must be positive, got {stride}")
        if not is_valid_slice(len(buffer), size, offset, stride):
            raise InvalidArgumentError(
                f"buffer of length {len(buffer)} cannot contain a slice of {size} "
                f"values at offset {offset} with stride {stride}"
            )
        self._buffer = buffer
        self._size = size
        self._offset = offset
        self._stride = stride
        if dtype is None:
            dtype = _buffer_dtype(buffer)
        self._dtype = np.dtype(dtype)

    @property
    def buffer(self) -> Any:
        """The wrapped storage."""
        return self._buffer

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def stride(self) -> int:
        return self._stride

    def size(self) -> int:
        return self._size

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def __getitem__(self, i: int) -> Any:
        return self._buffer[self._index(i)]

    def __setitem__(self, i: int, value: Any) -> None:
        if not isinstance(self._buffer, np.ndarray):
            value = self._dtype.type(value).item()
        self._buffer[self._index(i)] = value

    def _index(self, i: int) -> int:
        # Convert an index in the slice to the underlying index of the buffer.
        return self._offset + _check_index(i, self._size) * self._stride


def is_valid_slice(buffer_length: int, size: int, offset: int, stride: int) -> bool:
    """Return True if the last element of the slice lies inside the buffer."""
    if size == 0:
        return offset <= buffer_length
    return offset + (size - 1) * stride < buffer_length


# MARK: operations on generic vector-like objects


def equal(a: Sequence, b: Sequence) -> bool:
    """Return True if a and b have the same size and equal elements."""
    if len(a) != len(b):
        return False
    return all(a[i] == b[i] for i in range(len(a)))


def add(a: Any, b: Any) -> ArrayVector:
    """Elementwise sum of two vectors, or of a vector and a scalar."""
    return _binary(operator.add, a, b)


def subtract(a: Any, b: Any) -> ArrayVector:
    """Elementwise difference of two vectors, or of a vector and a scalar."""
    return _binary(operator.sub, a, b)


def multiply(a: Any, b: Any) -> ArrayVector:
    """Elementwise product of two vectors, or of a vector and a scalar."""
    return _binary(operator.mul, a, b)


def divide(a: Any, b: Any) -> ArrayVector:
    """
    Elementwise quotient of two vectors, or of a vector and a scalar.

    Integral vectors divide with truncation toward zero.
    """
    return _binary(_divide, a, b)


def vector_sum(v: Sequence, result: Any = np.float64) -> Any:
    """
    Sum the elements of a vector, accumulating in the ``result`` type.

    The accumulation starts at zero and adds the elements left to right, each
    converted to ``result`` first.
    """
    t = scalar_type(result)
    s = t(0)
    for i in range(len(v)):
        s = s + t(v[i])
    return s


def dot_product(v1: Sequence, v2: Sequence, result: Any = np.float64) -> Any:
    """
    Compute the dot product of two vectors.

    The elementwise products are formed in the element type and summed in the
    ``result`` type, which should have at least the precision and range of
    the elements.
    """
    return vector_sum(multiply(v1, v2), result)


def norm(v: Sequence, result: Any = np.float64) -> Any:
    """Return the Euclidean length of a vector, computed in the ``result`` type."""
    t = scalar_type(result)
    return t(np.sqrt(dot_product(v, v, t)))


def to_string(v: Sequence) -> str:
    """Return a "(e0,e1,...)" rendering of a vector, mostly for debugging."""
    return "(" + ",".join(_format_element(v[i]) for i in range(len(v))) + ")"


# MARK: internals


def _is_vector_like(value: Any) -> bool:
    return (hasattr(value, "__len__") and hasattr(value, "__getitem__")
            and not isinstance(value, (str, bytes)))


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Number)


def _is_python_scalar(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, np.generic)


def _dtype_of(value: Any) -> np.dtype:
    if _is_scalar(value):
        return np.asarray(value).dtype
    dtype = getattr(value, "dtype", None)
    if dtype is not None:
        return np.dtype(dtype)
    return np.asarray([value[i] for i in range(len(value))]).dtype


def _buffer_dtype(buffer: Any) -> np.dtype:
    dtype = getattr(buffer, "dtype", None)
    if dtype is not None:
        return np.dtype(dtype)
    typecode = getattr(buffer, "typecode", None)
    if typecode is not None:
        return np.dtype(typecode)
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return np.dtype(np.uint8)
    return np.asarray([buffer[i] for i in range(len(buffer))]).dtype


def _check_index(i: int, size: int) -> int:
    if i < 0:
        i += size
    if not 0 <= i < size:
        raise IndexError(f"vector index {i} out of range for size {size}")
    return i


def _operand(value: Any, size: int) -> Callable[[int], Any]:
    if _is_scalar(value):
        return lambda i: value
    if len(value) != size:
        raise InvalidArgumentError(
            f"vectors must be the same size, got {size} and {len(value)}"
        )
    return lambda i: value[i]


def _elementwise(op: Callable[[Any, Any], Any], a: Any, b: Any, dtype: np.dtype) -> np.ndarray:
    if _is_scalar(a):
        size = len(b)
    else:
        size = len(a)
    left = _operand(a, size)
    right = _operand(b, size)
    t = dtype.type
    values = np.empty(size, dtype=dtype)
    for i in range(size):
        values[i] = op(t(left(i)), t(right(i)))
    return values


def _binary(op: Callable[[Any, Any], Any], a: Any, b: Any) -> ArrayVector:
    if _is_scalar(a) and _is_scalar(b):
        raise InvalidArgumentError("at least one operand must be a vector")
    # Python scalars take the vector's precision rather than widening it.
    dtype = np.result_type(a if _is_python_scalar(a) else _dtype_of(a),
                           b if _is_python_scalar(b) else _dtype_of(b))
    return ArrayVector(_elementwise(op, a, b, dtype))


def _divide(x: Any, y: Any) -> Any:
    if isinstance(x, np.integer) and isinstance(y, np.integer):
        if y == 0:
            raise ZeroDivisionError("integer division by zero")
        q = abs(int(x)) // abs(int(y))
        return type(x)(q if (x < 0) == (y < 0) else -q)
    return x / y


def _format_element(value: Any) -> str:
    if isinstance(value, (numbers.Integral, np.integer)):
        return str(int(value))
    if isinstance(value, (numbers.Real, np.floating)) and math.isfinite(float(value)):
        return format(float(value), "g")
    return str(value)
