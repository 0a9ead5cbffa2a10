"""
src/relativistic/trajectory.py - Proper-Time Trajectory Sampling

Closed-form worldline under constant proper acceleration alpha, starting at
(x0, t0) with velocity v0, parameterized by proper time tau:

    phi(tau) = phi0 + alpha * tau / c
    x(tau)   = x0 + (c^2 / alpha) * (cosh(phi) - cosh(phi0))
    t(tau)   = t0 + (c / alpha) * (sinh(phi) - sinh(phi0))
    v(tau)   = tanh(phi)
    gamma    = cosh(phi)

For |alpha| < NUMERICAL_PRECISION the sampler returns x = x0, t = t0 + tau
and v = v0 at every sample. x is held at x0 even when v0 != 0; callers
that want inertial translation apply x0 + v0 * t themselves.
generate_rendezvous_trajectory() samples coasting solutions as inertial
motion instead, so it always ends on the target event.

Samples are independent of each other and computed as numpy arrays.

Receipt: trajectory
"""

import math
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np

# Import from project root
import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from receipts import emit_receipt, merkle

from .constants import DEFAULT_SAMPLE_COUNT, NUMERICAL_PRECISION, SPEED_OF_LIGHT
from .errors import PhysicsParameterError, stoprule
from .rapidity import lorentz_factor, velocity_to_rapidity
from .rendezvous import RendezvousSolution, solve_rendezvous
from .validators import validate_proper_time


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class TrajectoryPoint:
    """One worldline sample. tau is proper time since the trajectory start."""
    x: float
    t: float
    v: float
    gamma: float
    phi: float
    tau: float


@dataclass(frozen=True)
class RendezvousTrajectory:
    """A solved rendezvous together with its sampled worldline."""
    rendezvous: RendezvousSolution
    points: Tuple[TrajectoryPoint, ...]


TRAJECTORY_FIELDS = ("x", "t", "v", "gamma", "phi", "tau")


# =============================================================================
# SAMPLING CORE
# =============================================================================

def _check_start_state(x0: float, t0: float, alpha: float) -> None:
    params = {"x0": x0, "t0": t0, "alpha": alpha}
    if not all(math.isfinite(value) for value in params.values()):
        stoprule(PhysicsParameterError, "Trajectory start state must be finite", params)


def _sample(
    x0: float,
    t0: float,
    v0: float,
    alpha: float,
    taus: np.ndarray,
    hold_position: bool = True,
) -> List[TrajectoryPoint]:
    """
    Evaluate the closed form at every proper time in taus.

    With hold_position, |alpha| < NUMERICAL_PRECISION takes the degenerate
    branch. Without it the closed form is used for every alpha, written as

        x = x0 + c * tau * sinh(phi_mid) * S(h)
        t = t0 + tau * cosh(phi_mid) * S(h)

    with h = alpha * tau / (2c), phi_mid = phi0 + h and S(h) = sinh(h) / h,
    S(0) = 1. At alpha = 0 this is inertial motion at v0.
    """
    phi0 = velocity_to_rapidity(v0)

    if hold_position and abs(alpha) < NUMERICAL_PRECISION:
        gamma0 = lorentz_factor(v0)
        return [
            TrajectoryPoint(x=x0, t=t0 + tau, v=v0, gamma=gamma0, phi=phi0, tau=tau)
            for tau in taus.tolist()
        ]

    c = SPEED_OF_LIGHT
    h = alpha * taus / (2.0 * c)
    nonzero = h != 0
    shape = np.ones_like(h)
    shape[nonzero] = np.sinh(h[nonzero]) / h[nonzero]

    phi_mid = phi0 + h
    phi = phi0 + 2.0 * h
    x = x0 + c * taus * np.sinh(phi_mid) * shape
    t = t0 + taus * np.cosh(phi_mid) * shape
    v = np.tanh(phi)
    gamma = np.cosh(phi)

    return [
        TrajectoryPoint(x=xi, t=ti, v=vi, gamma=gi, phi=pi, tau=taui)
        for xi, ti, vi, gi, pi, taui in zip(
            x.tolist(), t.tolist(), v.tolist(), gamma.tolist(), phi.tolist(), taus.tolist()
        )
    ]


def trajectory_point(
    x0: float,
    t0: float,
    v0: float,
    alpha: float,
    tau: float,
) -> TrajectoryPoint:
    """
    Worldline sample at proper time tau.

    Raises:
        DomainError: If |v0| >= 1
    """
    return _sample(x0, t0, v0, alpha, np.array([tau], dtype=np.float64))[0]


# =============================================================================
# SAMPLING MODES
# =============================================================================

def _fixed_count_points(
    x0: float,
    t0: float,
    v0: float,
    alpha: float,
    tau_f: float,
    sample_count: int,
    tenant_id: str,
    hold_position: bool = True,
) -> List[TrajectoryPoint]:
    if (
        not math.isfinite(sample_count)
        or int(sample_count) != sample_count
        or sample_count < 2
    ):
        stoprule(
            PhysicsParameterError,
            f"sample_count must be an integer >= 2, got {sample_count}",
            {"sample_count": sample_count},
            tenant_id,
        )
    _check_start_state(x0, t0, alpha)
    validate_proper_time(tau_f)

    n = int(sample_count)
    taus = np.arange(n, dtype=np.float64) / (n - 1) * tau_f
    return _sample(x0, t0, v0, alpha, taus, hold_position)


def generate_trajectory(
    x0: float,
    t0: float,
    v0: float,
    alpha: float,
    tau_f: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    tenant_id: str = "default",
) -> List[TrajectoryPoint]:
    """
    Sample a worldline at sample_count proper times evenly spread over
    [0, tau_f], both ends included.

    Args:
        x0, t0: Start event
        v0: Initial velocity (v/c)
        alpha: Constant proper acceleration (signed)
        tau_f: Final proper time
        sample_count: Number of samples, >= 2
        tenant_id: Tenant ID for receipt

    Returns:
        List of TrajectoryPoint in increasing tau

    Raises:
        PhysicsParameterError: If sample_count < 2, tau_f < 0 or an input
            is not finite
        DomainError: If |v0| >= 1
    """
    points = _fixed_count_points(x0, t0, v0, alpha, tau_f, sample_count, tenant_id)

    _emit_trajectory_receipt(points, x0, t0, v0, alpha, tau_f, "fixed_count", tenant_id)
    return points


def generate_trajectory_with_step(
    x0: float,
    t0: float,
    v0: float,
    alpha: float,
    tau_f: float,
    dtau: float,
    tenant_id: str = "default",
) -> List[TrajectoryPoint]:
    """
    Sample a worldline every dtau of proper time.

    Samples sit at tau = 0, dtau, 2*dtau, ... while tau <= tau_f. If the
    last one falls short of tau_f, a final sample at exactly tau_f is
    appended.

    Raises:
        PhysicsParameterError: If dtau is not finite and positive, tau_f < 0
            or an input is not finite
        DomainError: If |v0| >= 1
    """
    if not (math.isfinite(dtau) and dtau > 0):
        stoprule(
            PhysicsParameterError,
            f"dtau must be a finite positive number, got {dtau}",
            {"dtau": dtau},
            tenant_id,
        )
    _check_start_state(x0, t0, alpha)
    validate_proper_time(tau_f)

    tau_values = []
    k = 0
    while k * dtau <= tau_f:
        tau_values.append(k * dtau)
        k += 1
    if tau_values[-1] < tau_f:
        tau_values.append(tau_f)

    points = _sample(x0, t0, v0, alpha, np.array(tau_values, dtype=np.float64))

    _emit_trajectory_receipt(points, x0, t0, v0, alpha, tau_f, "fixed_step", tenant_id)
    return points


def generate_rendezvous_trajectory(
    x0: float,
    t0: float,
    v0: float,
    x1: float,
    t1: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    tenant_id: str = "default",
) -> RendezvousTrajectory:
    """
    Solve the rendezvous from (x0, t0, v0) to (x1, t1) and sample it.

    Samples sample_count proper times over [0, tau_f] of the solution, like
    generate_trajectory(). A coasting solution (alpha = 0) is sampled as
    inertial motion at v0, so the last sample is always the target event.
    """
    rendezvous = solve_rendezvous(x0, t0, v0, x1, t1, tenant_id)
    points = _fixed_count_points(
        x0, t0, v0, rendezvous.alpha, rendezvous.tau_f, sample_count, tenant_id,
        hold_position=False,
    )
    _emit_trajectory_receipt(
        points, x0, t0, v0, rendezvous.alpha, rendezvous.tau_f, "rendezvous", tenant_id
    )
    return RendezvousTrajectory(rendezvous=rendezvous, points=tuple(points))


# =============================================================================
# ANALYSIS
# =============================================================================

def trajectory_curvature(points: Sequence[TrajectoryPoint], index: int) -> float:
    """
    Three-point curvature of the sampled worldline at points[index].

    Uses the (x, t) chords to the neighbouring samples:
        kappa = |dx1 * dt2 - dt1 * dx2| / (|d1|^2 * |d2|)

    Returns:
        kappa >= 0; 0 at either end, outside the sequence, or when a chord
        has zero length
    """
    if index <= 0 or index >= len(points) - 1:
        return 0.0

    p1, p2, p3 = points[index - 1], points[index], points[index + 1]
    dx1, dt1 = p2.x - p1.x, p2.t - p1.t
    dx2, dt2 = p3.x - p2.x, p3.t - p2.t

    norm1 = math.hypot(dx1, dt1)
    norm2 = math.hypot(dx2, dt2)
    if norm1 == 0 or norm2 == 0:
        return 0.0

    cross = dx1 * dt2 - dt1 * dx2
    return abs(cross) / (norm1 * norm1 * norm2)


# =============================================================================
# EXPORT
# =============================================================================

def trajectory_arrays(points: Sequence[TrajectoryPoint]) -> Dict[str, np.ndarray]:
    """
    Column view of a trajectory.

    Returns:
        Dict with float64 arrays under x, t, v, gamma, phi, tau
    """
    return {
        field: np.array([getattr(p, field) for p in points], dtype=np.float64)
        for field in TRAJECTORY_FIELDS
    }


def _emit_trajectory_receipt(
    points: List[TrajectoryPoint],
    x0: float,
    t0: float,
    v0: float,
    alpha: float,
    tau_f: float,
    mode: str,
    tenant_id: str,
) -> dict:
    last = points[-1]
    return emit_receipt("trajectory", {
        "tenant_id": tenant_id,
        "mode": mode,
        "x0": x0,
        "t0": t0,
        "v0": v0,
        "alpha": alpha,
        "tau_f": tau_f,
        "n_samples": len(points),
        "final_x": last.x,
        "final_t": last.t,
        "final_v": last.v,
        "samples_hash": merkle([asdict(p) for p in points]),
    })
