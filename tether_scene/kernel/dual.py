# tether_scene/kernel/dual.py
"""
DUAL NUMBERS: Forward-Mode Automatic Differentiation in Two Parameters
======================================================================

PURPOSE:
--------
A dual number carries a function value together with its partial
derivatives. Arithmetic on dual numbers applies the sum, product and
quotient rules automatically, and the elementary functions below apply the
chain rule. Evaluating any expression built from these pieces therefore
returns the EXACT derivative alongside the value - no finite differences,
no symbolic algebra.

    (f, df) + (g, dg) = (f + g, df + dg)
    (f, df) * (g, dg) = (f * g, f dg + df g)
    (f, df) / (g, dg) = (f / g, (g df - f dg) / g^2)
    h((g, dg))        = (h(g), h'(g) dg)

Here the derivative is a 2-vector: the partials with respect to the two
surface parameters u and v. Lifting u with derivative (1, 0) and v with
derivative (0, 1) makes every result carry (d/du, d/dv).

USAGE:
------
    U, V = lift_u(0.3), lift_v(0.7)
    Z = U * U + V * V
    Z.value    # 0.58
    Z.deriv    # array([0.6, 1.4])
"""

import math
from numbers import Real
from typing import Union

import numpy as np


class DualDomainError(ArithmeticError):
    """Raised when an operation is evaluated outside its real domain."""
    pass


def _frozen(vec) -> np.ndarray:
    arr = np.array(vec, dtype=float).reshape(2)
    arr.setflags(write=False)
    return arr


_ZERO = _frozen((0.0, 0.0))


class Dnum2:
    """
    A scalar with a 2-component derivative (partials w.r.t. u and v).

    Instances are immutable: every operation returns a new Dnum2 and the
    derivative array is read-only. Plain real numbers mix in on either side
    of an operator and behave as constants (zero derivative).

    Attributes:
    -----------
    value : float
        The function value.
    deriv : np.ndarray
        Read-only array of shape (2,): (d/du, d/dv).
    """

    __slots__ = ('value', 'deriv')

    # numpy scalars on the left-hand side must defer to the reflected operators
    __array_ufunc__ = None

    def __init__(self, value: float = 0.0, deriv=None):
        object.__setattr__(self, 'value', float(value))
        object.__setattr__(self, 'deriv', _ZERO if deriv is None else _frozen(deriv))

    def __setattr__(self, name, value):
        raise AttributeError("Dnum2 is immutable")

    def __repr__(self) -> str:
        return f"Dnum2({self.value!r}, ({self.deriv[0]!r}, {self.deriv[1]!r}))"

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return Dnum2(self.value + other.value, self.deriv + other.deriv)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return Dnum2(self.value - other.value, self.deriv - other.deriv)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.__sub__(self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return Dnum2(
            self.value * other.value,
            self.value * other.deriv + self.deriv * other.value,
        )

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        g = other.value
        if g == 0.0:
            raise DualDomainError(f"Division by a dual number with zero value ({other!r})")
        return Dnum2(
            self.value / g,
            (g * self.deriv - other.deriv * self.value) / (g * g),
        )

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.__truediv__(self)

    def __neg__(self):
        return Dnum2(-self.value, -self.deriv)

    def __pos__(self):
        return self

    def __pow__(self, n):
        if not isinstance(n, Real):
            return NotImplemented
        return power(self, n)


DualLike = Union[Dnum2, float, int]


def _coerce(x):
    if isinstance(x, Dnum2):
        return x
    if isinstance(x, Real):
        return Dnum2(x)
    return NotImplemented


def as_dual(x: DualLike) -> Dnum2:
    """Return x as a Dnum2; plain numbers become constants."""
    d = _coerce(x)
    if d is NotImplemented:
        raise TypeError(f"Cannot interpret {type(x).__name__} as a dual number")
    return d


def constant(c: float) -> Dnum2:
    """A dual number with zero derivative."""
    return Dnum2(c)


def lift_u(u: float) -> Dnum2:
    """Lift the first surface parameter: derivative (1, 0)."""
    return Dnum2(u, (1.0, 0.0))


def lift_v(v: float) -> Dnum2:
    """Lift the second surface parameter: derivative (0, 1)."""
    return Dnum2(v, (0.0, 1.0))


# =============================================================================
# ELEMENTARY FUNCTIONS (chain rule)
# =============================================================================

def _overflow(name: str, x: float) -> DualDomainError:
    return DualDomainError(f"{name}({x!r}) overflows a float")


def exp(g: DualLike) -> Dnum2:
    g = as_dual(g)
    try:
        e = math.exp(g.value)
    except OverflowError as err:
        raise _overflow("exp", g.value) from err
    return Dnum2(e, e * g.deriv)


def sin(g: DualLike) -> Dnum2:
    g = as_dual(g)
    return Dnum2(math.sin(g.value), math.cos(g.value) * g.deriv)


def cos(g: DualLike) -> Dnum2:
    g = as_dual(g)
    return Dnum2(math.cos(g.value), -math.sin(g.value) * g.deriv)


def tan(g: DualLike) -> Dnum2:
    return sin(g) / cos(g)


def sinh(g: DualLike) -> Dnum2:
    g = as_dual(g)
    try:
        return Dnum2(math.sinh(g.value), math.cosh(g.value) * g.deriv)
    except OverflowError as err:
        raise _overflow("sinh", g.value) from err


def cosh(g: DualLike) -> Dnum2:
    g = as_dual(g)
    try:
        return Dnum2(math.cosh(g.value), math.sinh(g.value) * g.deriv)
    except OverflowError as err:
        raise _overflow("cosh", g.value) from err


def tanh(g: DualLike) -> Dnum2:
    return sinh(g) / cosh(g)


def log(g: DualLike) -> Dnum2:
    """Natural logarithm. Undefined for values <= 0."""
    g = as_dual(g)
    if g.value <= 0.0:
        raise DualDomainError(f"log is undefined at {g.value!r}")
    return Dnum2(math.log(g.value), g.deriv / g.value)


def power(g: DualLike, n: float) -> Dnum2:
    """
    Raise a dual number to a real exponent: d(g^n) = n g^(n-1) dg.

    Out-of-domain inputs raise DualDomainError instead of producing NaN/Inf:
    - negative base with a non-integer exponent (complex result)
    - zero base with a non-zero exponent below 1 (infinite value or slope)
    - a result too large for a float
    """
    g = as_dual(g)
    n = float(n)
    if n == 0.0:
        return Dnum2(1.0)
    base = g.value
    if base < 0.0 and not n.is_integer():
        raise DualDomainError(f"{base!r} ** {n!r} has no real value")
    if base == 0.0 and n < 1.0:
        raise DualDomainError(f"0 ** {n!r} has a non-finite derivative")
    try:
        return Dnum2(base ** n, n * base ** (n - 1.0) * g.deriv)
    except OverflowError as err:
        raise DualDomainError(f"{base!r} ** {n!r} overflows a float") from err
