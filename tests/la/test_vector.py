import array

import numpy as np
import pytest

from geomath.core.errors import InvalidArgumentError
from geomath.la.vector import (
    ArrayVector, BufferVector, ListVector, SliceVector,
    add, divide, dot_product, equal, is_valid_slice, multiply, norm, subtract,
    to_string, vector_sum,
)

DTYPES = [np.int64, np.int32, np.float32, np.float64, np.longdouble]


def make_vectors(t, first=(1, 2, 3, 4, 5)):
    """A contiguous vector over one buffer and a strided vector over another."""
    va1 = np.array(first, dtype=t)
    va2 = np.array([x for x in first for _ in range(2)], dtype=t)
    return va1, va2, BufferVector(va1, 5), SliceVector(va2, 5, 0, 2)


@pytest.mark.parametrize("t", DTYPES)
class TestVectorArithmetic:
    def test_basic(self, t):
        va1, va2, vec1, vec2 = make_vectors(t)
        assert vec1.size() == 5
        assert len(vec2) == 5
        for i in range(5):
            assert vec1[i] == t(i + 1)
            assert vec2[i] == t(i + 1)

        vec1[2] += t(2)
        vec2[2] = vec1[2]
        assert equal(vec1, vec2)
        assert equal(va1, (1, 2, 5, 4, 5))
        assert equal(va2, (1, 1, 2, 2, 5, 3, 4, 4, 5, 5))

    def test_equality(self, t):
        _, _, vec1, vec2 = make_vectors(t)
        ar = (1, 2, 3, 4, 5)
        assert vec1 == vec1
        assert vec1 == vec2
        assert vec1 == ar
        assert ar == vec2
        assert equal(ar, ar)

        ar = (1, 0, 3, 4, 5)
        assert vec1 != ar
        assert vec2 != ar
        assert not equal(vec1, ar)

    def test_addition(self, t):
        _, _, vec1, vec2 = make_vectors(t)
        ar = (1, 2, 3, 4, 5)
        ar2 = (0, 1, 0, -1, 0)
        assert vec1 + vec2 == (2, 4, 6, 8, 10)
        assert vec1 + ar == (2, 4, 6, 8, 10)
        assert ar + vec2 == (2, 4, 6, 8, 10)
        assert vec1 + ar2 == (1, 3, 3, 3, 5)

        vec1 += t(2)
        vec2 += t(2)
        assert vec1 == (3, 4, 5, 6, 7)
        assert vec2 == (3, 4, 5, 6, 7)
        vec1 += ar2
        vec2 += ar2
        assert vec1 == (3, 5, 5, 5, 7)
        assert vec2 == (3, 5, 5, 5, 7)

    def test_subtraction(self, t):
        _, _, vec1, vec2 = make_vectors(t)
        ar = (1, 2, 3, 4, 5)
        ar2 = (0, 1, 0, -1, 0)
        assert vec1 - vec2 == (0, 0, 0, 0, 0)
        assert vec1 - ar == (0, 0, 0, 0, 0)
        assert ar - vec2 == (0, 0, 0, 0, 0)
        assert vec1 - ar2 == (1, 1, 3, 5, 5)

        vec1 -= t(2)
        vec2 -= t(2)
        assert vec1 == (-1, 0, 1, 2, 3)
        assert vec2 == (-1, 0, 1, 2, 3)
        vec1 -= ar2
        vec2 -= ar2
        assert vec1 == (-1, -1, 1, 3, 3)
        assert vec2 == (-1, -1, 1, 3, 3)

    def test_multiplication(self, t):
        _, _, vec1, vec2 = make_vectors(t)
        ar = (1, 2, 3, 4, 5)
        ar2 = (0, 1, 0, -1, 0)
        assert vec1 * vec2 == (1, 4, 9, 16, 25)
        assert vec1 * ar == (1, 4, 9, 16, 25)
        assert ar * vec2 == (1, 4, 9, 16, 25)
        assert vec1 * ar2 == (0, 2, 0, -4, 0)

        vec1 *= t(2)
        vec2 *= t(2)
        assert vec1 == (2, 4, 6, 8, 10)
        assert vec2 == (2, 4, 6, 8, 10)
        vec1 *= ar2
        vec2 *= ar2
        assert vec1 == (0, 4, 0, -8, 0)
        assert vec2 == (0, 4, 0, -8, 0)

    def test_division(self, t):
        _, _, vec1, vec2 = make_vectors(t, (2, 2, 4, 4, 6))
        ar = (2, 2, 4, 4, 6)
        ar2 = (1, -1, 2, -2, 1)
        assert vec1 / vec2 == (1, 1, 1, 1, 1)
        assert vec1 / ar == (1, 1, 1, 1, 1)
        assert ar / vec2 == (1, 1, 1, 1, 1)
        assert vec1 / ar2 == (2, -2, 2, -2, 6)

        vec1 /= t(2)
        vec2 /= t(2)
        assert vec1 == (1, 1, 2, 2, 3)
        assert vec2 == (1, 1, 2, 2, 3)
        vec1 /= ar2
        vec2 /= ar2
        assert vec1 == (1, -1, 1, -1, 3)
        assert vec2 == (1, -1, 1, -1, 3)

    def test_sum(self, t):
        _, _, vec1, vec2 = make_vectors(t, (2, 2, 4, 4, 6))
        assert vector_sum(vec1, np.float64) == 18.0
        assert vector_sum(vec2, np.float64) == 18.0
        assert vector_sum((2, 2, 4, 4, 6), np.float64) == 18.0

    def test_dot_product(self, t):
        _, _, vec1, vec2 = make_vectors(t)
        ar = (1, 2, 3, 4, 5)
        ar2 = (3, 1, 0, -1, -2)
        for a in (vec1, vec2, ar):
            assert dot_product(a, ar2, np.float64) == -9.0
            assert dot_product(ar2, a, np.float64) == -9.0

    def test_norm(self, t):
        _, _, vec1, vec2 = make_vectors(t)
        for v in (vec1, vec2, (1, 2, 3, 4, 5)):
            assert norm(v, np.float64) == pytest.approx(7.4162, abs=0.001)


class TestOperators:
    def test_binary_results_are_owned(self):
        va = np.array([1.0, 2.0, 3.0])
        v = BufferVector(va, 3)
        result = v + v
        assert isinstance(result, ArrayVector)
        result[0] = 100.0
        assert va[0] == 1.0

    def test_scalar_forms(self):
        v = ArrayVector([1, 2, 3])
        assert v * 2 == (2, 4, 6)
        assert 2 * v == (2, 4, 6)
        assert v + 1 == (2, 3, 4)
        assert 10 - v == (9, 8, 7)
        assert 12 / ArrayVector([1, 2, 3]) == (12, 6, 4)

    def test_numpy_scalar_defers_to_vector(self):
        v = ArrayVector([1.0, 2.0])
        result = np.float64(3.0) * v
        assert isinstance(result, ArrayVector)
        assert result == (3.0, 6.0)

    def test_numpy_array_defers_to_vector(self):
        v = ArrayVector([1.0, 2.0])
        result = np.array([1.0, 1.0]) + v
        assert isinstance(result, ArrayVector)
        assert result == (2.0, 3.0)

    def test_python_scalar_keeps_precision(self):
        v = ArrayVector([1.0, 2.0], dtype=np.float32)
        assert (v * 2.5).dtype == np.float32

    def test_mixed_types_promote(self):
        v = ArrayVector([1, 2], dtype=np.int64)
        assert (v * ArrayVector([0.5, 0.5])).dtype == np.float64

    def test_integer_division_truncates_toward_zero(self):
        v = ArrayVector([7, -7, 7, -7], dtype=np.int64)
        assert v / ArrayVector([2, 2, -2, -2], dtype=np.int64) == (3, -3, -3, 3)

    def test_integer_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            divide(ArrayVector([1, 2]), (1, 0))

    def test_size_mismatch(self):
        for op in (add, subtract, multiply, divide):
            with pytest.raises(InvalidArgumentError, match="same size"):
                op((1, 2), (1, 2, 3))
        with pytest.raises(InvalidArgumentError):
            dot_product((1, 2), (1, 2, 3))
        assert not equal((1, 2), (1, 2, 3))

    def test_two_scalars_rejected(self):
        with pytest.raises(InvalidArgumentError):
            add(1, 2)

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(ArrayVector([1, 2]))

    def test_comparison_with_non_vector(self):
        assert ArrayVector([1, 2]) != 3
        assert not (ArrayVector([1, 2]) == "12")


class TestArrayVector:
    def test_zeros(self):
        v = ArrayVector.zeros(3, np.int32)
        assert v.dtype == np.int32
        assert v == (0, 0, 0)

    def test_owns_its_values(self):
        source = np.array([1.0, 2.0])
        v = ArrayVector(source)
        v[0] = 5.0
        assert source[0] == 1.0

    def test_copy_from_other_vector_keeps_dtype(self):
        v = ArrayVector(ListVector([1, 2, 3], dtype=np.int32))
        assert v.dtype == np.int32
        assert v == (1, 2, 3)

    def test_must_be_one_dimensional(self):
        with pytest.raises(InvalidArgumentError):
            ArrayVector([[1, 2], [3, 4]])

    def test_string_forms(self):
        assert str(ArrayVector([1, 2, 3])) == "(1,2,3)"
        assert str(ArrayVector([1.5, 2.0])) == "(1.5,2)"
        assert repr(ArrayVector([1, 2])) == "ArrayVector(1,2)"
        assert to_string(()) == "()"


class TestBufferVector:
    def test_numpy_array_written_through(self):
        storage = np.zeros(4)
        v = BufferVector(storage, 3)
        v[1] = 2.5
        assert storage[1] == 2.5
        assert v.size() == 3
        assert v.buffer is storage

    def test_array_module(self):
        storage = array.array("d", [1.0, 2.0, 3.0])
        v = BufferVector(storage, 3)
        assert v.dtype == np.float64
        v *= 2
        assert list(storage) == [2.0, 4.0, 6.0]

    def test_bytearray_with_dtype(self):
        storage = bytearray(16)
        v = BufferVector(storage, 2, np.float64)
        v[1] = 1.0
        assert np.frombuffer(storage, dtype=np.float64)[1] == 1.0

    def test_too_short(self):
        with pytest.raises(InvalidArgumentError, match="at least 5"):
            BufferVector(np.zeros(4), 5)

    def test_none(self):
        with pytest.raises(InvalidArgumentError):
            BufferVector(None, 1)

    def test_dtype_mismatch(self):
        with pytest.raises(InvalidArgumentError):
            BufferVector(np.zeros(3, dtype=np.float32), 3, np.float64)

    def test_index_out_of_range(self):
        v = BufferVector(np.zeros(4), 2)
        with pytest.raises(IndexError):
            v[2]


class TestListVector:
    def test_wraps_by_reference(self):
        values = [1, 2, 3]
        v = ListVector(values)
        v[0] = 10
        assert values == [10, 2, 3]
        assert type(values[0]) is int

    def test_owner_may_resize(self):
        values = [1.0, 2.0]
        v = ListVector(values, 2)
        values.extend([3.0, 4.0])
        assert v.size() == 2
        assert v == (1.0, 2.0)

    def test_dtype_inferred(self):
        assert ListVector([1, 2]).dtype == np.int64
        assert ListVector([1.0, 2]).dtype == np.float64

    def test_too_short(self):
        with pytest.raises(InvalidArgumentError):
            ListVector([1, 2], 3)

    def test_index_checked(self):
        v = ListVector([1, 2, 3], 2)
        with pytest.raises(IndexError):
            v[2]
        assert v[-1] == 2


class TestSliceVector:
    def test_strided_view(self):
        storage = list(range(10))
        v = SliceVector(storage, 5, 1, 2)
        assert v == (1, 3, 5, 7, 9)
        v[4] = 0
        assert storage[9] == 0
        assert (v.offset, v.stride) == (1, 2)

    def test_window_must_fit(self):
        with pytest.raises(InvalidArgumentError):
            SliceVector(list(range(10)), 5, 2, 2)

    def test_invalid_parameters(self):
        with pytest.raises(InvalidArgumentError):
            SliceVector([1, 2, 3], 2, 0, 0)
        with pytest.raises(InvalidArgumentError):
            SliceVector([1, 2, 3], -1)
        with pytest.raises(InvalidArgumentError):
            SliceVector(None, 1)

    def test_is_valid_slice(self):
        assert is_valid_slice(10, 5, 0, 2)
        assert is_valid_slice(10, 5, 1, 2)
        assert not is_valid_slice(10, 5, 2, 2)
        assert is_valid_slice(10, 0, 10, 3)
        assert not is_valid_slice(10, 0, 11, 1)
