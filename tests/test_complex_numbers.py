"""Tests for Complex arithmetic."""
import pytest

from expressions import Complex, Number


class TestComplex:

    def test_add(self):
        assert Complex(1, 2) + Complex(3, 4) == Complex(4, 6)

    def test_subtract(self):
        assert Complex(1, 2) - Complex(3, 4) == Complex(-2, -2)

    def test_multiply(self):
        assert Complex(1, 2) * Complex(3, 4) == Complex(-5, 10)

    def test_divide(self):
        result = Complex(1, 2) / Complex(3, 4)
        assert result.real == pytest.approx(0.44)
        assert result.imaginary == pytest.approx(0.08)

    def test_divide_by_real(self):
        assert Complex(4, -6) / Complex(2, 0) == Complex(2, -3)

    def test_divide_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            Complex(1, 2) / Complex(0, 0)

    def test_divide_by_tiny_divisor(self):
        tiny = Complex(1e-200, 0)
        assert tiny / tiny == Complex(1, 0)
        result = Complex(1e-200, 1e-200) / Complex(0, 1e-200)
        assert result.real == pytest.approx(1.0)
        assert result.imaginary == pytest.approx(-1.0)

    def test_divide_by_huge_divisor(self):
        result = Complex(1e300, 1e300) / Complex(1e300, 1e300)
        assert result.real == pytest.approx(1.0)
        assert result.imaginary == pytest.approx(0.0)

    def test_parts_are_floats(self):
        c = Complex(1, 2)
        assert isinstance(c.real, float)
        assert isinstance(c.imaginary, float)

    @pytest.mark.parametrize("real, imaginary", [
        ("1", 2), (1, None), (True, 0), (1j, 0)
    ])
    def test_rejects_non_real_parts(self, real, imaginary):
        with pytest.raises(TypeError):
            Complex(real, imaginary)

    def test_str(self):
        assert str(Complex(4, 6)) == "4 + 6i"
        assert str(Complex(-2, -2)) == "-2 + -2i"
        assert str(Complex(2.5, -1)) == "2.5 + -1i"
        assert str(Complex(0.25, 0)) == "0.25 + 0i"

    def test_repr(self):
        assert repr(Complex(0.5, 3)) == "Complex(0.5, 3.0)"

    def test_immutable(self):
        c = Complex(1, 2)
        with pytest.raises(AttributeError):
            c.real = 5.0

    def test_hashable(self):
        assert len({Complex(1, 2), Complex(1.0, 2.0)}) == 1

    def test_operands_are_not_modified(self):
        a, b = Complex(1, 2), Complex(3, 4)
        a * b
        assert a == Complex(1, 2)
        assert b == Complex(3, 4)

    def test_not_mixed_with_expressions(self):
        with pytest.raises(TypeError):
            Complex(1, 2) + Number(1)
        with pytest.raises(TypeError):
            Number(1) * Complex(1, 2)
        with pytest.raises(TypeError):
            Complex(1, 2) / 2
