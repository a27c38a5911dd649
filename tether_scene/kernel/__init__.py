# tether_scene/kernel - Dual-number automatic differentiation
"""
KERNEL: EXACT DERIVATIVES WITHOUT SYMBOLIC ALGEBRA
==================================================

The kernel holds the dual-number type everything else differentiates
through. Surfaces, terrain and any other parametric geometry are written as
plain Python expressions over Dnum2 values; the kernel makes the
derivatives fall out of the evaluation.
"""

from .dual import (
    Dnum2,
    DualDomainError,
    as_dual,
    constant,
    lift_u,
    lift_v,
    exp,
    sin,
    cos,
    tan,
    sinh,
    cosh,
    tanh,
    log,
    power,
)

__all__ = [
    'Dnum2', 'DualDomainError', 'as_dual', 'constant', 'lift_u', 'lift_v',
    'exp', 'sin', 'cos', 'tan', 'sinh', 'cosh', 'tanh', 'log', 'power',
]
