"""
src/relativistic/rapidity.py - Velocity / Rapidity Conversions

Hyperbolic-angle parameterization of 1D velocity.

    v = tanh(phi)            phi = artanh(v)
    gamma = cosh(phi) = 1 / sqrt(1 - v^2)

Rapidities add under successive boosts, so composing two velocities is a
sum in rapidity space. Velocities are fractions of c; |v| < 1 is a hard
domain boundary, never clamped.
"""

import math

from .errors import DomainError, stoprule


# =============================================================================
# INVERSE HYPERBOLIC FUNCTIONS
# =============================================================================

def artanh(x: float) -> float:
    """
    Inverse hyperbolic tangent, 0.5 * ln((1 + x) / (1 - x)).

    Raises:
        DomainError: If |x| >= 1 (or x is NaN)
    """
    if not -1.0 < x < 1.0:
        stoprule(DomainError, f"artanh: |x| must be < 1, got {x}", {"x": x})
    return math.atanh(x)


def arsinh(x: float) -> float:
    """Inverse hyperbolic sine, ln(x + sqrt(x^2 + 1)), for every real x."""
    return math.asinh(x)


def arcosh(x: float) -> float:
    """
    Inverse hyperbolic cosine, ln(x + sqrt(x^2 - 1)).

    Raises:
        DomainError: If x < 1 (or x is NaN)
    """
    if not x >= 1.0:
        stoprule(DomainError, f"arcosh: x must be >= 1, got {x}", {"x": x})
    return math.log(x + math.sqrt(x * x - 1.0))


# =============================================================================
# CONVERSIONS
# =============================================================================

def velocity_to_rapidity(v: float) -> float:
    """
    Convert velocity (v/c) to rapidity.

    Raises:
        DomainError: If |v| >= 1, straight from artanh
    """
    return artanh(v)


def rapidity_to_velocity(phi: float) -> float:
    """Convert rapidity to velocity (v/c). Defined for every real phi."""
    return math.tanh(phi)


def lorentz_factor(v: float) -> float:
    """
    Lorentz factor gamma = 1 / sqrt(1 - v^2).

    Raises:
        DomainError: If |v| >= 1
    """
    if not -1.0 < v < 1.0:
        stoprule(DomainError, f"lorentz_factor: |v| must be < 1, got {v}", {"v": v})
    return 1.0 / math.sqrt(1.0 - v * v)


def add_velocities(v1: float, v2: float) -> float:
    """
    Relativistic velocity addition, (v1 + v2) / (1 + v1*v2).

    Computed as tanh(phi1 + phi2), so the result stays strictly inside
    (-1, 1) without clamping.
    """
    return rapidity_to_velocity(velocity_to_rapidity(v1) + velocity_to_rapidity(v2))
