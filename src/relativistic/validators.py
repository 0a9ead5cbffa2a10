"""
src/relativistic/validators.py - Kinematics Validation

Two modes:

Fail-fast (input-level):
    validate_* functions raise a KinematicsError subclass on the first
    violation. They gate every solver call; nothing is clamped.

Collected (trajectory-level):
    validate_trajectory() returns a ValidationResult listing every
    violation found in an already generated worldline.

Receipt: trajectory_validation
"""

import math
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple

import numpy as np

# Import from project root
import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from receipts import emit_receipt

from .constants import CONSISTENCY_TOLERANCE, LIGHT_CONE_MARGIN
from .errors import (
    PhysicsParameterError,
    PositionError,
    SourceFrameError,
    stoprule,
)
from .light_cone import SpacetimeEvent, is_inside_light_cone

if TYPE_CHECKING:
    from .trajectory import TrajectoryPoint


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a trajectory check. errors keeps detection order."""
    valid: bool
    errors: Tuple[str, ...]


# =============================================================================
# HELPERS
# =============================================================================

def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


# =============================================================================
# INPUT VALIDATORS (FAIL-FAST)
# =============================================================================

def validate_position(event: SpacetimeEvent) -> None:
    """
    Validate a spacetime event.

    Raises:
        PositionError: If x or t is not finite, or t < 0
    """
    params = {"x": event.x, "t": event.t}
    if not _is_finite_number(event.x):
        stoprule(PositionError, "Spatial coordinate must be a finite number", params)
    if not _is_finite_number(event.t):
        stoprule(PositionError, "Time coordinate must be a finite number", params)
    if event.t < 0:
        stoprule(PositionError, "Time coordinate cannot be negative", params)


def validate_source_frame(
    source: Optional[SpacetimeEvent],
    target: SpacetimeEvent,
) -> None:
    """
    Validate that target is reachable from source.

    No source means the target hangs off the origin and needs no check.
    The light cone is narrowed by LIGHT_CONE_MARGIN so targets hugging
    the cone edge are rejected.

    Raises:
        SourceFrameError: If target is not later than source, or lies
            outside the narrowed light cone of source
    """
    if source is None:
        return

    params = {
        "source_x": source.x,
        "source_t": source.t,
        "target_x": target.x,
        "target_t": target.t,
    }
    if not (_is_finite_number(source.x) and _is_finite_number(source.t)):
        stoprule(SourceFrameError, "Source frame must have finite x and t", params)

    if target.t <= source.t:
        stoprule(SourceFrameError, "Target time must be later than the source frame", params)

    delta_x = target.x - source.x
    delta_t = target.t - source.t
    if not is_inside_light_cone(delta_x, delta_t, -LIGHT_CONE_MARGIN):
        stoprule(
            SourceFrameError,
            "Target must lie inside the light cone of the source frame",
            params,
        )


def validate_physics_parameters(
    delta_x: float,
    delta_t: float,
    initial_velocity: Optional[float] = None,
) -> None:
    """
    Validate the parameters of a kinematics calculation.

    Raises:
        PhysicsParameterError: If a displacement is not finite, delta_t <= 0,
            or a supplied initial velocity is not finite or |v| >= 1
    """
    params = {
        "delta_x": delta_x,
        "delta_t": delta_t,
        "initial_velocity": initial_velocity,
    }
    if not _is_finite_number(delta_x):
        stoprule(PhysicsParameterError, "Spatial displacement must be a finite number", params)
    if not _is_finite_number(delta_t):
        stoprule(PhysicsParameterError, "Time displacement must be a finite number", params)
    if delta_t <= 0:
        stoprule(PhysicsParameterError, "Time displacement must be positive", params)

    if initial_velocity is not None:
        if not _is_finite_number(initial_velocity):
            stoprule(PhysicsParameterError, "Initial velocity must be a finite number", params)
        if abs(initial_velocity) >= 1:
            stoprule(
                PhysicsParameterError,
                "Initial velocity must be below the speed of light",
                params,
            )


def validate_velocity(velocity: float, name: str = "velocity") -> None:
    """Raise PhysicsParameterError unless velocity is finite with |v| < 1."""
    params = {"velocity": velocity, "name": name}
    if not _is_finite_number(velocity):
        stoprule(PhysicsParameterError, f"{name} must be a finite number", params)
    if abs(velocity) >= 1:
        stoprule(PhysicsParameterError, f"{name} must be below the speed of light", params)


def validate_acceleration(acceleration: float) -> None:
    """
    Validate a non-negative acceleration magnitude.

    Rendezvous solutions carry a signed alpha; this check is for
    magnitude inputs only.
    """
    params = {"acceleration": acceleration}
    if not _is_finite_number(acceleration):
        stoprule(PhysicsParameterError, "Acceleration must be a finite number", params)
    if acceleration < 0:
        stoprule(PhysicsParameterError, "Proper acceleration must be non-negative", params)


def validate_proper_time(proper_time: float) -> None:
    """Raise PhysicsParameterError unless proper_time is finite and >= 0."""
    params = {"proper_time": proper_time}
    if not _is_finite_number(proper_time):
        stoprule(PhysicsParameterError, "Proper time must be a finite number", params)
    if proper_time < 0:
        stoprule(PhysicsParameterError, "Proper time cannot be negative", params)


def validate_lorentz_factor(gamma: float) -> None:
    """Raise PhysicsParameterError unless gamma is finite and >= 1."""
    params = {"gamma": gamma}
    if not _is_finite_number(gamma):
        stoprule(PhysicsParameterError, "Lorentz factor must be a finite number", params)
    if gamma < 1:
        stoprule(PhysicsParameterError, "Lorentz factor must be >= 1", params)


def validate_light_cone_parameters(
    origin: SpacetimeEvent,
    radius: Optional[float] = None,
) -> None:
    """Validate a light-cone origin and optional non-negative radius."""
    validate_position(origin)
    if radius is not None and not (_is_finite_number(radius) and radius >= 0):
        stoprule(
            PhysicsParameterError,
            "Light-cone radius must be a finite non-negative number",
            {"origin_x": origin.x, "origin_t": origin.t, "radius": radius},
        )


def validate_isochrone_parameters(origin: SpacetimeEvent, proper_time: float) -> None:
    """Validate an isochrone's origin and proper time."""
    validate_proper_time(proper_time)
    validate_position(origin)


def validate_physics_consistency(
    acceleration: float,
    final_velocity: float,
    proper_time: float,
    coordinate_time: float,
) -> None:
    """
    Cross-check the results of a kinematics calculation.

    acceleration is a magnitude here; pass abs(alpha) for signed solutions.

    Raises:
        PhysicsParameterError: If any value is out of range, or proper time
            exceeds coordinate time by more than CONSISTENCY_TOLERANCE
    """
    validate_acceleration(acceleration)
    validate_velocity(final_velocity, "final_velocity")
    validate_proper_time(proper_time)

    if not (_is_finite_number(coordinate_time) and coordinate_time > 0):
        stoprule(
            PhysicsParameterError,
            "Coordinate time must be a finite positive number",
            {"coordinate_time": coordinate_time},
        )

    if proper_time > coordinate_time + CONSISTENCY_TOLERANCE:
        stoprule(
            PhysicsParameterError,
            "Proper time cannot exceed coordinate time",
            {"proper_time": proper_time, "coordinate_time": coordinate_time},
        )


# =============================================================================
# TRAJECTORY VALIDATION (COLLECTED)
# =============================================================================

def validate_trajectory(
    points: Sequence["TrajectoryPoint"],
    tenant_id: str = "default",
) -> ValidationResult:
    """
    Check a sampled worldline for physical consistency.

    Every sample is checked for |v| < 1 and gamma >= 1. Coordinate time and
    proper time must be strictly increasing; the first break in each is
    reported once. All checks run so the caller gets a full diagnosis.

    Args:
        points: Trajectory samples in generation order
        tenant_id: Tenant ID for receipt

    Returns:
        ValidationResult
    """
    errors = []

    if len(points) < 2:
        errors.append(f"Trajectory too short: {len(points)} sample(s), need at least 2")
    else:
        v = np.array([p.v for p in points], dtype=np.float64)
        gamma = np.array([p.gamma for p in points], dtype=np.float64)
        t = np.array([p.t for p in points], dtype=np.float64)
        tau = np.array([p.tau for p in points], dtype=np.float64)

        for i in range(len(points)):
            if not abs(v[i]) < 1:
                errors.append(f"Superluminal velocity at sample {i}: v = {v[i]}c")
            if not gamma[i] >= 1:
                errors.append(f"Invalid Lorentz factor at sample {i}: gamma = {gamma[i]}")

        t_breaks = np.flatnonzero(~(np.diff(t) > 0))
        if t_breaks.size:
            errors.append(
                f"Coordinate time not strictly increasing at sample {int(t_breaks[0]) + 1}"
            )

        tau_breaks = np.flatnonzero(~(np.diff(tau) > 0))
        if tau_breaks.size:
            errors.append(
                f"Proper time not strictly increasing at sample {int(tau_breaks[0]) + 1}"
            )

    result = ValidationResult(valid=not errors, errors=tuple(errors))

    emit_receipt("trajectory_validation", {
        "tenant_id": tenant_id,
        "n_samples": len(points),
        "valid": result.valid,
        "n_errors": len(errors),
        "errors": list(errors),
    })

    for error in errors:
        emit_receipt("anomaly", {
            "tenant_id": tenant_id,
            "metric": "trajectory_consistency",
            "message": error,
            "classification": "violation",
            "action": "alert",
        })

    return result
