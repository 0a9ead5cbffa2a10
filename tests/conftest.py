"""
Shared pytest fixtures for relativistic kinematics tests.

Provides:
- origin: SpacetimeEvent at (0, 0)
- rendezvous_case: start/target of the reference rendezvous (0,0) -> (10,20)
- make_point: factory for hand-built TrajectoryPoint samples
- valid_points: short, physically consistent worldline
"""

import math
from pathlib import Path
from typing import Callable, List

import pytest

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.relativistic.light_cone import SpacetimeEvent
from src.relativistic.trajectory import TrajectoryPoint


@pytest.fixture
def origin() -> SpacetimeEvent:
    """Origin event (x=0, t=0)."""
    return SpacetimeEvent(x=0.0, t=0.0)


@pytest.fixture
def rendezvous_case() -> dict:
    """
    Reference rendezvous from rest.

    beta = 10 / 20 = 0.5, so the maneuver is well inside the light cone.
    """
    return {"x0": 0.0, "t0": 0.0, "v0": 0.0, "x1": 10.0, "t1": 20.0}


@pytest.fixture
def make_point() -> Callable[..., TrajectoryPoint]:
    """
    Factory for TrajectoryPoint with a consistent gamma/phi for v.

    Any field can be overridden to build broken samples.
    """
    def _make(t: float, tau: float, v: float = 0.0, x: float = 0.0, **overrides) -> TrajectoryPoint:
        fields = {
            "x": x,
            "t": t,
            "v": v,
            "gamma": 1.0 / math.sqrt(1.0 - v * v) if abs(v) < 1 else float("inf"),
            "phi": math.atanh(v) if abs(v) < 1 else float("inf"),
            "tau": tau,
        }
        fields.update(overrides)
        return TrajectoryPoint(**fields)

    return _make


@pytest.fixture
def valid_points(make_point) -> List[TrajectoryPoint]:
    """Three samples at rest, one year apart."""
    return [
        make_point(t=0.0, tau=0.0),
        make_point(t=1.0, tau=1.0),
        make_point(t=2.0, tau=2.0),
    ]
