"""
src/relativistic/constants.py - Physical and Numerical Constants

Process-wide read-only configuration for the relativistic core.
Natural units throughout: c = 1, m0 = 1. Distances in light-years,
times in years, accelerations in c/year.

Nothing here is mutated at runtime.
"""


# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

SPEED_OF_LIGHT = 1.0  # c (natural units)
MASS_UNIT = 1.0  # m0 (natural units)


# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

NUMERICAL_PRECISION = 1e-12  # "near-zero" threshold for alpha, dx, v0, dphi
ROUNDTRIP_TOLERANCE = 1e-9  # velocity <-> rapidity round-trip agreement
CONSISTENCY_TOLERANCE = 1e-10  # allowed excess of proper time over coordinate time


# =============================================================================
# GEOMETRY & SAMPLING
# =============================================================================

# Fraction of the light-cone radius kept clear when checking a target
# against its source frame
LIGHT_CONE_MARGIN = 0.02

DEFAULT_SAMPLE_COUNT = 100  # fixed-count trajectory sampling

MIN_PROPER_TIME = 0.01  # isochrones below this proper time are empty
ISOCHRONE_POINTS_COUNT = 500


# =============================================================================
# RECEIPTS
# =============================================================================

RECEIPT_SCHEMA = [
    "rendezvous",
    "rendezvous_chain",
    "trajectory",
    "trajectory_validation",
    "isochrone",
    "anomaly",
]
