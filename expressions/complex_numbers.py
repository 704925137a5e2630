"""Complex number values, independent of the expression tree."""
import numbers


def _format_part(value):
    # Whole values print without a trailing ".0", as in "4 + 6i".
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


class Complex:
    """An immutable (real, imaginary) pair of floats."""

    __slots__ = ('real', 'imaginary')

    def __init__(self, real, imaginary):
        for part in (real, imaginary):
            if (isinstance(part, bool)
                    or not isinstance(part, numbers.Real)):
                raise TypeError("Complex parts must be real numbers")
        object.__setattr__(self, 'real', float(real))
        object.__setattr__(self, 'imaginary', float(imaginary))

    def __setattr__(self, name, value):
        raise AttributeError("Complex is immutable")

    def __delattr__(self, name):
        raise AttributeError("Complex is immutable")

    def __repr__(self):
        return f"Complex({self.real!r}, {self.imaginary!r})"

    def __str__(self):
        return f"{_format_part(self.real)} + {_format_part(self.imaginary)}i"

    def __eq__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return (self.real == other.real
                and self.imaginary == other.imaginary)

    def __hash__(self):
        return hash((self.real, self.imaginary))

    def __add__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.real + other.real,
                       self.imaginary + other.imaginary)

    def __sub__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.real - other.real,
                       self.imaginary - other.imaginary)

    def __mul__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(
            self.real * other.real - self.imaginary * other.imaginary,
            self.real * other.imaginary + self.imaginary * other.real
        )

    def __truediv__(self, other):
        """Divide using (a + bi)/(c + di) = ((ac + bd) + (bc - ad)i)/(c² + d²).

        Raises ZeroDivisionError when the divisor has zero magnitude.
        """
        if not isinstance(other, Complex):
            return NotImplemented
        if other.real == 0 and other.imaginary == 0:
            raise ZeroDivisionError("complex division by zero")
        # The divisor is scaled to unit size so tiny parts do not underflow.
        scale = max(abs(other.real), abs(other.imaginary))
        c, d = other.real / scale, other.imaginary / scale
        denominator = (c * c + d * d) * scale
        return Complex(
            (self.real * c + self.imaginary * d) / denominator,
            (self.imaginary * c - self.real * d) / denominator
        )
