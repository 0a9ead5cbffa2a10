"""
src/relativistic - Special-Relativistic Rendezvous Kinematics

Constant-proper-acceleration maneuvers for a single observer in 1+1D
Minkowski space, natural units (c = 1). All functions emit receipts.

Modules:
    rapidity: velocity <-> rapidity conversions, Lorentz factor
    light_cone: causal containment and interval classification
    validators: fail-fast input checks, collected trajectory checks
    rendezvous: two-event boundary value solver, rendezvous chains
    trajectory: proper-time worldline sampling
    isochrone: equal-proper-time curves of rendezvous targets
"""

from .constants import (
    SPEED_OF_LIGHT,
    MASS_UNIT,
    NUMERICAL_PRECISION,
    ROUNDTRIP_TOLERANCE,
    CONSISTENCY_TOLERANCE,
    LIGHT_CONE_MARGIN,
    DEFAULT_SAMPLE_COUNT,
    MIN_PROPER_TIME,
    ISOCHRONE_POINTS_COUNT,
    RECEIPT_SCHEMA,
)
from .errors import (
    ErrorKind,
    KinematicsError,
    PositionError,
    SourceFrameError,
    PhysicsParameterError,
    CausalityError,
    DomainError,
)
from .rapidity import (
    artanh,
    arsinh,
    arcosh,
    velocity_to_rapidity,
    rapidity_to_velocity,
    lorentz_factor,
    add_velocities,
)
from .light_cone import (
    SpacetimeEvent,
    is_inside_light_cone,
    spacetime_interval,
    classify_separation,
)
from .validators import (
    ValidationResult,
    validate_position,
    validate_source_frame,
    validate_physics_parameters,
    validate_velocity,
    validate_acceleration,
    validate_proper_time,
    validate_lorentz_factor,
    validate_light_cone_parameters,
    validate_isochrone_parameters,
    validate_physics_consistency,
    validate_trajectory,
)
from .rendezvous import (
    RendezvousSolution,
    ChainLeg,
    RendezvousChain,
    calculate_rendezvous_rapidity,
    calculate_required_acceleration,
    calculate_final_proper_time,
    is_rendezvous_possible,
    solve_rendezvous,
    solve_rendezvous_chain,
    generate_twin_paradox_events,
)
from .trajectory import (
    TrajectoryPoint,
    RendezvousTrajectory,
    trajectory_point,
    generate_trajectory,
    generate_trajectory_with_step,
    generate_rendezvous_trajectory,
    trajectory_curvature,
    trajectory_arrays,
)
from .isochrone import (
    rendezvous_proper_time,
    coordinate_time_for_isochrone,
    isochrone_points,
)

__all__ = [
    # Constants
    "SPEED_OF_LIGHT",
    "MASS_UNIT",
    "NUMERICAL_PRECISION",
    "ROUNDTRIP_TOLERANCE",
    "CONSISTENCY_TOLERANCE",
    "LIGHT_CONE_MARGIN",
    "DEFAULT_SAMPLE_COUNT",
    "MIN_PROPER_TIME",
    "ISOCHRONE_POINTS_COUNT",
    "RECEIPT_SCHEMA",
    # Errors
    "ErrorKind",
    "KinematicsError",
    "PositionError",
    "SourceFrameError",
    "PhysicsParameterError",
    "CausalityError",
    "DomainError",
    # Rapidity
    "artanh",
    "arsinh",
    "arcosh",
    "velocity_to_rapidity",
    "rapidity_to_velocity",
    "lorentz_factor",
    "add_velocities",
    # Light cone
    "SpacetimeEvent",
    "is_inside_light_cone",
    "spacetime_interval",
    "classify_separation",
    # Validators
    "ValidationResult",
    "validate_position",
    "validate_source_frame",
    "validate_physics_parameters",
    "validate_velocity",
    "validate_acceleration",
    "validate_proper_time",
    "validate_lorentz_factor",
    "validate_light_cone_parameters",
    "validate_isochrone_parameters",
    "validate_physics_consistency",
    "validate_trajectory",
    # Rendezvous
    "RendezvousSolution",
    "ChainLeg",
    "RendezvousChain",
    "calculate_rendezvous_rapidity",
    "calculate_required_acceleration",
    "calculate_final_proper_time",
    "is_rendezvous_possible",
    "solve_rendezvous",
    "solve_rendezvous_chain",
    "generate_twin_paradox_events",
    # Trajectory
    "TrajectoryPoint",
    "RendezvousTrajectory",
    "trajectory_point",
    "generate_trajectory",
    "generate_trajectory_with_step",
    "generate_rendezvous_trajectory",
    "trajectory_curvature",
    "trajectory_arrays",
    # Isochrone
    "rendezvous_proper_time",
    "coordinate_time_for_isochrone",
    "isochrone_points",
]
