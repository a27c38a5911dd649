# File: tests/test_dual.py
"""
Tests for the dual-number kernel.

WHAT WE CHECK:
--------------
1. Values follow ordinary arithmetic
2. Derivatives follow the sum, product and quotient rules exactly
3. Elementary functions apply the chain rule
4. Out-of-domain operations fail loudly instead of returning NaN/Inf
5. Polynomials differentiate exactly (no finite-difference drift)
"""

import math

import numpy as np
import pytest

from tether_scene.kernel.dual import (
    Dnum2, DualDomainError, as_dual, constant, lift_u, lift_v,
    exp, sin, cos, tan, sinh, cosh, tanh, log, power,
)


def assert_dual(d, value, deriv, rtol=1e-12, atol=1e-12):
    assert d.value == pytest.approx(value, rel=rtol, abs=atol)
    np.testing.assert_allclose(d.deriv, deriv, rtol=rtol, atol=atol)


A = Dnum2(1.5, (0.25, -2.0))
B = Dnum2(-0.75, (3.0, 0.5))


class TestOperators:
    """Each operator against the rule it must implement."""

    def test_add(self):
        assert_dual(A + B, 1.5 - 0.75, (3.25, -1.5))

    def test_subtract(self):
        assert_dual(A - B, 1.5 + 0.75, (-2.75, -2.5))

    def test_multiply_product_rule(self):
        # d(ab) = a db + da b
        expected = 1.5 * np.array([3.0, 0.5]) + np.array([0.25, -2.0]) * -0.75
        assert_dual(A * B, 1.5 * -0.75, expected)

    def test_divide_quotient_rule(self):
        # d(a/b) = (b da - a db) / b^2
        da, db = np.array([0.25, -2.0]), np.array([3.0, 0.5])
        expected = (-0.75 * da - 1.5 * db) / 0.75 ** 2
        assert_dual(A / B, 1.5 / -0.75, expected)

    def test_negation(self):
        assert_dual(-A, -1.5, (-0.25, 2.0))

    def test_plain_numbers_are_constants(self):
        assert_dual(A + 2, 3.5, A.deriv)
        assert_dual(2 - A, 0.5, -A.deriv)
        assert_dual(3 * A, 4.5, 3 * A.deriv)
        assert_dual(A * 3.0, 4.5, 3 * A.deriv)

    def test_reflected_division(self):
        # d(1/a) = -da / a^2
        assert_dual(1.0 / A, 1 / 1.5, -A.deriv / 1.5 ** 2)

    def test_numpy_scalar_on_left(self):
        result = np.float64(2.0) * A
        assert isinstance(result, Dnum2)
        assert_dual(result, 3.0, 2 * A.deriv)

    def test_divide_by_zero_value_raises(self):
        with pytest.raises(DualDomainError):
            A / Dnum2(0.0, (1.0, 1.0))
        with pytest.raises(DualDomainError):
            1.0 / Dnum2(0.0)

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            A + "x"
        with pytest.raises(TypeError):
            as_dual([1.0, 2.0])


class TestImmutability:

    def test_cannot_set_attributes(self):
        d = Dnum2(1.0, (1.0, 0.0))
        with pytest.raises(AttributeError):
            d.value = 2.0

    def test_derivative_is_read_only(self):
        d = Dnum2(1.0, (1.0, 0.0))
        with pytest.raises(ValueError):
            d.deriv[0] = 5.0

    def test_operations_do_not_touch_operands(self):
        a = Dnum2(2.0, (1.0, 2.0))
        _ = a * a + a / a
        assert_dual(a, 2.0, (1.0, 2.0))


class TestLifting:

    def test_lift_u_v(self):
        assert_dual(lift_u(0.3), 0.3, (1.0, 0.0))
        assert_dual(lift_v(0.7), 0.7, (0.0, 1.0))
        assert_dual(constant(4.0), 4.0, (0.0, 0.0))

    def test_gradient_of_two_parameter_function(self):
        # f(u, v) = u^2 v + 3v  ->  (2uv, u^2 + 3)
        u, v = 0.4, -1.2
        U, V = lift_u(u), lift_v(v)
        f = U * U * V + 3 * V
        assert_dual(f, u * u * v + 3 * v, (2 * u * v, u * u + 3))


class TestElementaryFunctions:
    """Chain rule: h(g)' = h'(g) g'."""

    g = Dnum2(0.6, (2.0, -1.0))

    @pytest.mark.parametrize("fn, f, df", [
        (exp, math.exp, math.exp),
        (sin, math.sin, math.cos),
        (cos, math.cos, lambda x: -math.sin(x)),
        (tan, math.tan, lambda x: 1 / math.cos(x) ** 2),
        (sinh, math.sinh, math.cosh),
        (cosh, math.cosh, math.sinh),
        (tanh, math.tanh, lambda x: 1 - math.tanh(x) ** 2),
        (log, math.log, lambda x: 1 / x),
    ])
    def test_chain_rule(self, fn, f, df):
        x = self.g.value
        assert_dual(fn(self.g), f(x), df(x) * self.g.deriv, rtol=1e-10)

    def test_power_real_exponent(self):
        x = self.g.value
        assert_dual(power(self.g, 2.5), x ** 2.5, 2.5 * x ** 1.5 * self.g.deriv)

    def test_pow_operator(self):
        assert_dual(self.g ** 3, 0.6 ** 3, 3 * 0.6 ** 2 * self.g.deriv)

    def test_power_negative_base_integer_exponent(self):
        g = Dnum2(-2.0, (1.0, 0.0))
        assert_dual(power(g, 3), -8.0, (12.0, 0.0))
        assert_dual(power(g, -1), -0.5, (-0.25, 0.0))

    def test_power_zero_exponent(self):
        assert_dual(power(Dnum2(0.0, (1.0, 1.0)), 0), 1.0, (0.0, 0.0))

    def test_power_out_of_domain(self):
        with pytest.raises(DualDomainError):
            power(Dnum2(-1.0, (1.0, 0.0)), 0.5)
        with pytest.raises(DualDomainError):
            power(Dnum2(0.0, (1.0, 0.0)), 0.5)
        with pytest.raises(DualDomainError):
            power(Dnum2(0.0, (1.0, 0.0)), -2)

    def test_log_out_of_domain(self):
        with pytest.raises(DualDomainError):
            log(Dnum2(0.0))
        with pytest.raises(DualDomainError):
            log(Dnum2(-1.0))

    @pytest.mark.parametrize("fn", [exp, sinh, cosh])
    def test_overflow_is_a_domain_error(self, fn):
        with pytest.raises(DualDomainError):
            fn(Dnum2(1000.0, (1.0, 0.0)))

    def test_power_overflow_is_a_domain_error(self):
        with pytest.raises(DualDomainError):
            power(Dnum2(1e200, (1.0, 0.0)), 3)
        with pytest.raises(DualDomainError):
            Dnum2(-1e200) ** 3

    def test_functions_accept_plain_numbers(self):
        assert_dual(cos(0.0), 1.0, (0.0, 0.0))


def test_polynomial_derivative_is_exact():
    """
    Repeated multiplication must not accumulate error the way finite
    differences do: d/du of u^10 at u = 1 is exactly 10.
    """
    U = lift_u(1.0)
    p = Dnum2(1.0)
    for _ in range(10):
        p = p * U
    assert p.value == 1.0
    assert p.deriv[0] == 10.0
    assert p.deriv[1] == 0.0
