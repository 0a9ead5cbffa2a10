"""
src/relativistic/isochrone.py - Rendezvous Isochrones

An isochrone is the set of target events that a traveller leaving the
origin at rest reaches, by the constant-proper-acceleration rendezvous
maneuver, after the same proper time tau.

For a target at (dx, dt) from the origin:
    dphi = 2 * artanh(dx / (c * dt))
    tau  = dt * dphi / sinh(dphi)          (tau = dt when dx = 0)

tau grows monotonically with dt at fixed dx, from 0 on the light cone to
dt far inside it, so each x has one isochrone time. It is found with
scipy's brentq.

Receipt: isochrone
"""

import math
from pathlib import Path
from typing import List, Optional

import numpy as np
from scipy import optimize

# Import from project root
import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from receipts import emit_receipt

from .constants import (
    ISOCHRONE_POINTS_COUNT,
    MIN_PROPER_TIME,
    NUMERICAL_PRECISION,
    SPEED_OF_LIGHT,
)
from .errors import CausalityError, PhysicsParameterError, stoprule
from .light_cone import SpacetimeEvent
from .rapidity import artanh
from .validators import validate_isochrone_parameters


# =============================================================================
# CONSTANTS
# =============================================================================

# Lower bracket sits this far (relative) inside the light cone
CONE_OFFSET = 1e-12
MAX_BRACKET_DOUBLINGS = 200


# =============================================================================
# PROPER TIME OF A RENDEZVOUS FROM REST
# =============================================================================

def rendezvous_proper_time(delta_x: float, delta_t: float) -> float:
    """
    Proper time of the rendezvous maneuver from rest to (delta_x, delta_t).

    Raises:
        CausalityError: If delta_t <= 0 or |delta_x| >= c * delta_t
    """
    if delta_t <= 0 or abs(delta_x) >= SPEED_OF_LIGHT * delta_t:
        stoprule(
            CausalityError,
            "Target must lie strictly inside the future light cone",
            {"delta_x": delta_x, "delta_t": delta_t},
        )

    delta_phi = 2.0 * artanh(delta_x / (SPEED_OF_LIGHT * delta_t))
    if abs(delta_phi) < NUMERICAL_PRECISION:
        return delta_t
    return delta_t * delta_phi / math.sinh(delta_phi)


def _solve_delta_t(delta_x: float, proper_time: float) -> Optional[float]:
    """Coordinate-time offset of the isochrone at |delta_x|, or None if unresolvable."""
    dx = abs(delta_x)
    if dx < NUMERICAL_PRECISION:
        return proper_time

    def residual(dt: float) -> float:
        return rendezvous_proper_time(dx, dt) - proper_time

    lo = dx / SPEED_OF_LIGHT * (1.0 + CONE_OFFSET)
    if residual(lo) >= 0:
        return None

    hi = dx / SPEED_OF_LIGHT + proper_time
    for _ in range(MAX_BRACKET_DOUBLINGS):
        if residual(hi) > 0:
            break
        hi *= 2.0
    else:
        return None

    return optimize.brentq(residual, lo, hi, maxiter=200)


def coordinate_time_for_isochrone(
    origin: SpacetimeEvent,
    target_x: float,
    proper_time: float,
) -> float:
    """
    Coordinate time at which the isochrone of proper_time crosses target_x.

    Raises:
        PositionError: If origin is invalid
        PhysicsParameterError: If proper_time is invalid, or too small to
            resolve that far from the origin
    """
    validate_isochrone_parameters(origin, proper_time)

    delta_t = _solve_delta_t(target_x - origin.x, proper_time)
    if delta_t is None:
        stoprule(
            PhysicsParameterError,
            "Proper time too small to resolve an isochrone this far from the origin",
            {"origin_x": origin.x, "origin_t": origin.t,
             "target_x": target_x, "proper_time": proper_time},
        )
    return origin.t + delta_t


def isochrone_points(
    origin: SpacetimeEvent,
    proper_time: float,
    x_min: float,
    x_max: float,
    max_t: Optional[float] = None,
    count: int = ISOCHRONE_POINTS_COUNT,
    tenant_id: str = "default",
) -> List[SpacetimeEvent]:
    """
    Sample the isochrone of proper_time over [x_min, x_max].

    Args:
        origin: Departure event (traveller at rest)
        proper_time: Proper time shared by every returned event
        x_min, x_max: Spatial range, x_min < x_max
        max_t: Drop events later than this coordinate time
        count: Number of evenly spaced x samples, >= 2
        tenant_id: Tenant ID for receipt

    Returns:
        Events in increasing x; empty when proper_time < MIN_PROPER_TIME
    """
    validate_isochrone_parameters(origin, proper_time)
    params = {"x_min": x_min, "x_max": x_max, "count": count}
    if not (math.isfinite(x_min) and math.isfinite(x_max) and x_min < x_max):
        stoprule(PhysicsParameterError, "x range must be finite with x_min < x_max", params, tenant_id)
    if not math.isfinite(count) or int(count) != count or count < 2:
        stoprule(PhysicsParameterError, "count must be an integer >= 2", params, tenant_id)

    points: List[SpacetimeEvent] = []
    if proper_time >= MIN_PROPER_TIME:
        for x in np.linspace(x_min, x_max, int(count)).tolist():
            delta_t = _solve_delta_t(x - origin.x, proper_time)
            if delta_t is None:
                continue
            t = origin.t + delta_t
            if max_t is not None and t > max_t:
                continue
            points.append(SpacetimeEvent(x=x, t=t))

    emit_receipt("isochrone", {
        "tenant_id": tenant_id,
        "origin_x": origin.x,
        "origin_t": origin.t,
        "proper_time": proper_time,
        "x_min": x_min,
        "x_max": x_max,
        "max_t": max_t,
        "n_points": len(points),
    })

    return points
