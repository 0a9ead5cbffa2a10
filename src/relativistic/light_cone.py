"""
src/relativistic/light_cone.py - Light-Cone Geometry

Causal structure of 1+1D Minkowski space.

An event B is inside the future light cone of A when
    t_B > t_A  and  |x_B - x_A| <= c * (t_B - t_A)

The boundary (light-like separation) counts as inside.
"""

from dataclasses import dataclass

from .constants import NUMERICAL_PRECISION, SPEED_OF_LIGHT


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class SpacetimeEvent:
    """A point in 1+1D Minkowski space (x in light-years, t in years)."""
    x: float
    t: float


# =============================================================================
# CAUSALITY
# =============================================================================

def is_inside_light_cone(delta_x: float, delta_t: float, margin: float = 0.0) -> bool:
    """
    Check whether a displacement lies inside the future light cone.

    Args:
        delta_x: Spatial displacement
        delta_t: Coordinate-time displacement
        margin: Relative widening (> 0) or narrowing (< 0) of the cone

    Returns:
        True iff delta_t > 0 and |delta_x| <= c * delta_t * (1 + margin)
    """
    if not delta_t > 0:
        return False
    return abs(delta_x) <= SPEED_OF_LIGHT * delta_t * (1.0 + margin)


def spacetime_interval(a: SpacetimeEvent, b: SpacetimeEvent) -> float:
    """Squared interval c^2 dt^2 - dx^2 between two events."""
    dt = b.t - a.t
    dx = b.x - a.x
    return (SPEED_OF_LIGHT * dt) ** 2 - dx ** 2


def classify_separation(a: SpacetimeEvent, b: SpacetimeEvent) -> str:
    """
    Classify the separation between two events.

    Returns:
        "timelike", "lightlike" or "spacelike"
    """
    s2 = spacetime_interval(a, b)
    if abs(s2) < NUMERICAL_PRECISION:
        return "lightlike"
    return "timelike" if s2 > 0 else "spacelike"
