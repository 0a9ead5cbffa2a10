"""
src/relativistic/rendezvous.py - Relativistic Rendezvous Solver

Two-point boundary value problem: leave event A = (x0, t0) with velocity v0
and arrive exactly at event B = (x1, t1) under constant proper acceleration.

Closed form (natural units, c = 1):
    beta      = dx / (c * dt)                      average velocity
    phi0      = artanh(v0)
    dphi      = 2 * (artanh(beta) - phi0)          rapidity increment
    phi_f     = phi0 + dphi
    alpha     = c * (sinh(phi_f) - sinh(phi0)) / dt
    tau_f     = c * |dphi| / |alpha|

The midpoint rapidity (phi0 + phi_f) / 2 equals artanh(beta), which is
what makes the worldline land on B in both x and t.

Receipt: rendezvous, rendezvous_chain
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

# Import from project root
import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from receipts import emit_receipt

from .constants import NUMERICAL_PRECISION, SPEED_OF_LIGHT
from .errors import (
    CausalityError,
    DomainError,
    PhysicsParameterError,
    stoprule,
)
from .light_cone import SpacetimeEvent
from .rapidity import artanh, rapidity_to_velocity, velocity_to_rapidity
from .validators import validate_position, validate_source_frame


# =============================================================================
# CONSTANTS
# =============================================================================

# Twin-paradox waypoints sit this fraction of the distance from each turn
TWIN_WAYPOINT_FRACTION = 0.1
DEFAULT_ACCELERATION_PHASE = 0.1


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class RendezvousSolution:
    """
    Constant-proper-acceleration maneuver connecting two events.

    alpha is signed: negative means thrust toward -x. energy_consumed is
    |delta_phi| in units of m0*c^2 and never negative.
    """
    alpha: float
    tau_f: float
    phi_f: float
    v_f: float
    delta_phi: float
    energy_consumed: float
    is_valid: bool = True


@dataclass(frozen=True)
class ChainLeg:
    """One leg of a rendezvous chain."""
    source: SpacetimeEvent
    target: SpacetimeEvent
    v0: float
    solution: RendezvousSolution


@dataclass(frozen=True)
class RendezvousChain:
    """Consecutive rendezvous legs, each starting at the previous leg's v_f."""
    legs: Tuple[ChainLeg, ...]
    total_proper_time: float
    total_coordinate_time: float
    final_velocity: float
    time_dilation_factor: float


# =============================================================================
# CLOSED-FORM STEPS
# =============================================================================

def calculate_rendezvous_rapidity(v0: float, delta_x: float, delta_t: float) -> float:
    """
    Rapidity increment needed to reach (delta_x, delta_t) from velocity v0.

    Returns:
        delta_phi = 2 * (artanh(beta) - artanh(v0)); negative means net
        deceleration relative to v0

    Raises:
        CausalityError: If |beta| >= 1
        DomainError: If |v0| >= 1
    """
    beta = delta_x / (SPEED_OF_LIGHT * delta_t)
    if abs(beta) >= 1:
        stoprule(
            CausalityError,
            f"Rendezvous impossible: |beta| = {abs(beta)} >= 1 (causality violation)",
            {"delta_x": delta_x, "delta_t": delta_t, "beta": beta},
        )

    phi0 = velocity_to_rapidity(v0)
    return 2.0 * (artanh(beta) - phi0)


def calculate_required_acceleration(phi0: float, delta_phi: float, delta_t: float) -> float:
    """
    Proper acceleration alpha = c * (sinh(phi0 + dphi) - sinh(phi0)) / dt, signed.

    The difference is evaluated as 2 * cosh(phi0 + dphi/2) * sinh(dphi/2),
    which keeps full precision when dphi is small next to phi0.
    """
    midpoint = phi0 + 0.5 * delta_phi
    return SPEED_OF_LIGHT * 2.0 * math.cosh(midpoint) * math.sinh(0.5 * delta_phi) / delta_t


def calculate_final_proper_time(delta_phi: float, alpha: float) -> float:
    """
    Proper time tau_f = c * |dphi| / |alpha| experienced on board.

    Raises:
        DomainError: If alpha is exactly zero
    """
    if alpha == 0:
        stoprule(
            DomainError,
            "Final proper time is undefined for zero acceleration",
            {"delta_phi": delta_phi, "alpha": alpha},
        )
    return SPEED_OF_LIGHT * abs(delta_phi) / abs(alpha)


def is_rendezvous_possible(delta_x: float, delta_t: float) -> bool:
    """True iff delta_t > 0 and the average velocity is strictly sub-light."""
    if delta_t <= 0:
        return False
    return abs(delta_x) / (SPEED_OF_LIGHT * delta_t) < 1


# =============================================================================
# SOLVER
# =============================================================================

def solve_rendezvous(
    x0: float,
    t0: float,
    v0: float,
    x1: float,
    t1: float,
    tenant_id: str = "default",
) -> RendezvousSolution:
    """
    Solve the relativistic rendezvous problem.

    Args:
        x0, t0: Start event
        v0: Initial velocity (v/c)
        x1, t1: Target event
        tenant_id: Tenant ID for receipt

    Returns:
        RendezvousSolution (always is_valid=True; failures raise)

    Raises:
        PhysicsParameterError: If any input is not finite
        CausalityError: If t1 <= t0 or |x1 - x0| >= c * (t1 - t0)
        DomainError: If |v0| >= 1
    """
    params = {"x0": x0, "t0": t0, "v0": v0, "x1": x1, "t1": t1}
    if not all(math.isfinite(value) for value in params.values()):
        stoprule(PhysicsParameterError, "Rendezvous inputs must be finite numbers", params, tenant_id)

    delta_x = x1 - x0
    delta_t = t1 - t0

    if delta_t <= 0:
        stoprule(CausalityError, "Rendezvous time must be in the future", params, tenant_id)
    if abs(v0) >= 1:
        stoprule(DomainError, "Initial velocity must be below the speed of light", params, tenant_id)

    if abs(delta_x) < NUMERICAL_PRECISION and abs(v0) < NUMERICAL_PRECISION:
        # At rest and staying put
        solution = RendezvousSolution(
            alpha=0.0,
            tau_f=delta_t,
            phi_f=0.0,
            v_f=0.0,
            delta_phi=0.0,
            energy_consumed=0.0,
        )
        _emit_rendezvous_receipt(params, solution, "at_rest", tenant_id)
        return solution

    delta_phi = calculate_rendezvous_rapidity(v0, delta_x, delta_t)
    phi0 = velocity_to_rapidity(v0)
    phi_f = phi0 + delta_phi

    alpha = 0.0
    if abs(delta_phi) >= NUMERICAL_PRECISION:
        alpha = calculate_required_acceleration(phi0, delta_phi, delta_t)

    if alpha == 0:
        # Already coasting at the average velocity
        solution = RendezvousSolution(
            alpha=0.0,
            tau_f=delta_t * math.sqrt(1.0 - v0 * v0),
            phi_f=phi_f,
            v_f=rapidity_to_velocity(phi_f),
            delta_phi=delta_phi,
            energy_consumed=abs(delta_phi),
        )
        _emit_rendezvous_receipt(params, solution, "coasting", tenant_id)
        return solution

    tau_f = calculate_final_proper_time(abs(delta_phi), abs(alpha))

    solution = RendezvousSolution(
        alpha=alpha,
        tau_f=tau_f,
        phi_f=phi_f,
        v_f=rapidity_to_velocity(phi_f),
        delta_phi=delta_phi,
        energy_consumed=abs(delta_phi),
    )
    _emit_rendezvous_receipt(params, solution, "maneuver", tenant_id)
    return solution


def _emit_rendezvous_receipt(
    params: dict,
    solution: RendezvousSolution,
    case: str,
    tenant_id: str,
) -> dict:
    return emit_receipt("rendezvous", {
        "tenant_id": tenant_id,
        **params,
        "case": case,
        "alpha": solution.alpha,
        "tau_f": solution.tau_f,
        "v_f": solution.v_f,
        "delta_phi": solution.delta_phi,
        "energy_consumed": solution.energy_consumed,
    })


# =============================================================================
# CHAINS
# =============================================================================

def solve_rendezvous_chain(
    events: Sequence[SpacetimeEvent],
    v0: float = 0.0,
    tenant_id: str = "default",
) -> RendezvousChain:
    """
    Solve a sequence of rendezvous legs through consecutive events.

    The first leg starts at events[0] with velocity v0; every later leg
    starts with the previous leg's arrival velocity.

    Args:
        events: At least two events, in causal order
        v0: Velocity at events[0]
        tenant_id: Tenant ID for receipt

    Returns:
        RendezvousChain

    Raises:
        PhysicsParameterError: If fewer than two events are given
        PositionError: If an event has invalid coordinates
        SourceFrameError: If an event is not reachable from its predecessor
    """
    if len(events) < 2:
        stoprule(
            PhysicsParameterError,
            "A rendezvous chain needs at least two events",
            {"n_events": len(events)},
            tenant_id,
        )

    for event in events:
        validate_position(event)

    legs: List[ChainLeg] = []
    velocity = v0
    total_proper_time = 0.0

    for source, target in zip(events[:-1], events[1:]):
        validate_source_frame(source, target)
        solution = solve_rendezvous(source.x, source.t, velocity, target.x, target.t, tenant_id)
        legs.append(ChainLeg(source=source, target=target, v0=velocity, solution=solution))
        total_proper_time += solution.tau_f
        velocity = solution.v_f

    total_coordinate_time = events[-1].t - events[0].t

    chain = RendezvousChain(
        legs=tuple(legs),
        total_proper_time=total_proper_time,
        total_coordinate_time=total_coordinate_time,
        final_velocity=velocity,
        time_dilation_factor=total_coordinate_time / total_proper_time,
    )

    emit_receipt("rendezvous_chain", {
        "tenant_id": tenant_id,
        "n_legs": len(legs),
        "v0": v0,
        "total_proper_time": chain.total_proper_time,
        "total_coordinate_time": chain.total_coordinate_time,
        "final_velocity": chain.final_velocity,
        "time_dilation_factor": chain.time_dilation_factor,
        "energy_consumed": sum(leg.solution.energy_consumed for leg in legs),
    })

    return chain


def generate_twin_paradox_events(
    max_distance: float,
    total_time: float,
    acceleration_phase: float = DEFAULT_ACCELERATION_PHASE,
) -> List[SpacetimeEvent]:
    """
    Canned out-and-back itinerary for solve_rendezvous_chain().

    The traveller leaves the origin, speeds up over the first
    acceleration_phase of the trip, cruises, slows to a stop at max_distance
    at total_time / 2, then mirrors the route home, arriving at x = 0 at
    total_time.

    Args:
        max_distance: Turnaround distance
        total_time: Coordinate time of the return
        acceleration_phase: Fraction of total_time per speed-up or slow-down,
            0 < phase < 0.25

    Returns:
        Seven events in causal order, starting at (0, 0)

    Raises:
        PhysicsParameterError: If a parameter is out of range
    """
    params = {
        "max_distance": max_distance,
        "total_time": total_time,
        "acceleration_phase": acceleration_phase,
    }
    if not (math.isfinite(max_distance) and max_distance >= 0):
        stoprule(PhysicsParameterError, "max_distance must be a finite non-negative number", params)
    if not (math.isfinite(total_time) and total_time > 0):
        stoprule(PhysicsParameterError, "total_time must be a finite positive number", params)
    if not 0 < acceleration_phase < 0.25:
        stoprule(PhysicsParameterError, "acceleration_phase must lie in (0, 0.25)", params)

    near = max_distance * TWIN_WAYPOINT_FRACTION
    far = max_distance * (1.0 - TWIN_WAYPOINT_FRACTION)
    boost = total_time * acceleration_phase
    half = 0.5 * total_time

    return [
        SpacetimeEvent(x=0.0, t=0.0),
        SpacetimeEvent(x=near, t=boost),
        SpacetimeEvent(x=far, t=half - boost),
        SpacetimeEvent(x=max_distance, t=half),
        SpacetimeEvent(x=far, t=half + boost),
        SpacetimeEvent(x=near, t=total_time - boost),
        SpacetimeEvent(x=0.0, t=total_time),
    ]
