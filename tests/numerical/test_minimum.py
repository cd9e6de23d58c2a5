import math

import pytest

from geomath.core.errors import InvalidArgumentError, NoConvergence
from geomath.numerical import minimum
from geomath.numerical.minimum import maximum_value, minimum_value


class TestMinimumValue:
    def test_parabola(self):
        fmin, xmin = minimum_value(0.0, 1.0, 5.0, lambda x: (x - 2.0) ** 2 + 1.0)
        assert xmin == pytest.approx(2.0, abs=1e-6)
        assert fmin == pytest.approx(1.0)

    def test_cosine(self):
        fmin, xmin = minimum_value(2.0, 3.0, 4.0, math.cos)
        assert xmin == pytest.approx(math.pi, abs=1e-6)
        assert fmin == pytest.approx(-1.0)

    def test_non_parabolic(self):
        fmin, xmin = minimum_value(-1.0, 0.5, 3.0, lambda x: math.exp(x) - 2.0 * x)
        assert xmin == pytest.approx(math.log(2.0), abs=1e-6)
        assert fmin == pytest.approx(2.0 - 2.0 * math.log(2.0))

    def test_precomputed_fbx(self):
        calls = []

        def fn(x):
            calls.append(x)
            return (x - 2.0) ** 2

        minimum_value(0.0, 1.0, 5.0, fn, fbx=1.0)
        assert 1.0 not in calls

    @pytest.mark.parametrize("ax,bx,cx", [(1.0, 0.0, 2.0), (0.0, 2.0, 1.0), (0.0, 0.0, 1.0), (1.0, 1.0, 1.0)])
    def test_bracket_order(self, ax, bx, cx):
        with pytest.raises(InvalidArgumentError, match="increasing order"):
            minimum_value(ax, bx, cx, math.cos)

    def test_tolerance_must_be_positive(self):
        with pytest.raises(InvalidArgumentError):
            minimum_value(0.0, 1.0, 2.0, math.cos, tol=0.0)

    def test_function_errors_propagate(self):
        def fn(x):
            raise KeyError("stop")

        with pytest.raises(KeyError):
            minimum_value(0.0, 1.0, 2.0, fn)

    def test_no_convergence(self, monkeypatch):
        monkeypatch.setattr(minimum, "MAX_ITERATIONS", 3)
        with pytest.raises(NoConvergence):
            minimum_value(0.0, 1.0, 5.0, lambda x: (x - 2.0) ** 2)


class TestMaximumValue:
    def test_sine(self):
        fmax, xmax = maximum_value(0.0, 1.0, 3.0, math.sin)
        assert xmax == pytest.approx(math.pi / 2, abs=1e-6)
        assert fmax == pytest.approx(1.0)

    def test_precomputed_fbx_is_negated(self):
        fmax, xmax = maximum_value(0.0, 1.0, 3.0, math.sin, fbx=math.sin(1.0))
        assert fmax == pytest.approx(1.0)
