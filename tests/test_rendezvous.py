"""
tests/test_rendezvous.py - Rendezvous Solver Tests

Exactness of the closed form, trivial and coasting cases, causality
rejection, energy bookkeeping and rendezvous chains.
"""

import json
import math
from pathlib import Path

import pytest

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.relativistic.errors import (
    CausalityError,
    DomainError,
    ErrorKind,
    PhysicsParameterError,
    PositionError,
    SourceFrameError,
)
from src.relativistic.light_cone import SpacetimeEvent
from src.relativistic.rendezvous import (
    RendezvousSolution,
    calculate_final_proper_time,
    calculate_rendezvous_rapidity,
    calculate_required_acceleration,
    generate_twin_paradox_events,
    is_rendezvous_possible,
    solve_rendezvous,
    solve_rendezvous_chain,
)
from src.relativistic.trajectory import trajectory_point


class TestClosedFormSteps:
    """Test the individual closed-form steps."""

    def test_rapidity_from_rest(self):
        """beta = 0.5 from rest needs dphi = ln 3."""
        assert calculate_rendezvous_rapidity(0.0, 10.0, 20.0) == pytest.approx(math.log(3.0))

    def test_rapidity_superluminal(self):
        """|beta| >= 1 is a causality violation."""
        with pytest.raises(CausalityError, match="causality violation"):
            calculate_rendezvous_rapidity(0.0, 20.0, 10.0)

    def test_required_acceleration(self):
        """alpha = (sinh(phi_f) - sinh(phi0)) / dt."""
        alpha = calculate_required_acceleration(0.0, math.log(3.0), 20.0)
        assert alpha == pytest.approx(1.0 / 15.0)

    def test_final_proper_time(self):
        """tau_f = |dphi| / |alpha|."""
        assert calculate_final_proper_time(-2.0, -0.5) == pytest.approx(4.0)

    def test_final_proper_time_zero_alpha(self):
        """Zero acceleration has no defined tau_f."""
        with pytest.raises(DomainError):
            calculate_final_proper_time(1.0, 0.0)

    def test_is_rendezvous_possible(self):
        """Strictly sub-light average velocity with dt > 0."""
        assert is_rendezvous_possible(10.0, 20.0) is True
        assert is_rendezvous_possible(-10.0, 20.0) is True
        assert is_rendezvous_possible(20.0, 20.0) is False
        assert is_rendezvous_possible(0.0, 0.0) is False
        assert is_rendezvous_possible(0.0, -1.0) is False


class TestSolveRendezvous:
    """Test solve_rendezvous."""

    def test_reference_solution(self, rendezvous_case):
        """(0,0) -> (10,20) from rest: alpha = 1/15, v_f = 0.8."""
        solution = solve_rendezvous(**rendezvous_case)
        assert isinstance(solution, RendezvousSolution)
        assert solution.is_valid is True
        assert solution.alpha == pytest.approx(1.0 / 15.0)
        assert solution.delta_phi == pytest.approx(math.log(3.0))
        assert solution.phi_f == pytest.approx(math.log(3.0))
        assert solution.v_f == pytest.approx(0.8)
        assert solution.tau_f == pytest.approx(15.0 * math.log(3.0))
        assert solution.energy_consumed == pytest.approx(math.log(3.0))

    def test_exact_arrival(self, rendezvous_case):
        """Worldline at tau_f sits on the target event to 1e-9."""
        solution = solve_rendezvous(**rendezvous_case)
        end = trajectory_point(0.0, 0.0, 0.0, solution.alpha, solution.tau_f)
        assert abs(end.x - 10.0) < 1e-9
        assert abs(end.t - 20.0) < 1e-9

    def test_exact_arrival_moving_start(self):
        """Exactness holds from a moving, offset start."""
        x0, t0, v0, x1, t1 = 3.0, 2.0, -0.3, 40.0, 70.0
        solution = solve_rendezvous(x0, t0, v0, x1, t1)
        end = trajectory_point(x0, t0, v0, solution.alpha, solution.tau_f)
        assert end.x == pytest.approx(x1, abs=1e-9)
        assert end.t == pytest.approx(t1, abs=1e-9)
        assert end.v == pytest.approx(solution.v_f, abs=1e-12)

    def test_proper_time_below_coordinate_time(self, rendezvous_case):
        """The travelling clock runs slow."""
        solution = solve_rendezvous(**rendezvous_case)
        assert 0 < solution.tau_f < 20.0

    def test_trivial_case(self):
        """At rest and staying put: tau_f = dt, no thrust."""
        solution = solve_rendezvous(0, 0, 0, 0, 5)
        assert solution.alpha == 0.0
        assert solution.tau_f == 5.0
        assert solution.v_f == 0.0
        assert solution.delta_phi == 0.0
        assert solution.energy_consumed == 0.0

    def test_coasting_case(self):
        """Already moving at the average velocity: coast, no NaN."""
        solution = solve_rendezvous(0.0, 0.0, 0.5, 10.0, 20.0)
        assert solution.alpha == 0.0
        assert solution.v_f == pytest.approx(0.5)
        assert solution.tau_f == pytest.approx(20.0 * math.sqrt(0.75))
        assert not math.isnan(solution.tau_f)

    def test_tiny_offset_long_interval(self):
        """Tiny displacement over a long interval solves instead of raising."""
        solution = solve_rendezvous(0.0, 0.0, 0.0, 1e-9, 1000.0)
        assert solution.alpha > 0
        assert math.isfinite(solution.tau_f)
        assert solution.tau_f == pytest.approx(1000.0, rel=1e-9)
        assert solution.energy_consumed == pytest.approx(2e-12, rel=1e-9)

    def test_small_rapidity_change_at_speed(self):
        """Acceleration stays accurate when dphi is small next to phi0."""
        x0, t0, v0, x1, t1 = 0.0, 0.0, 0.9, 90.0 + 1e-7, 100.0
        solution = solve_rendezvous(x0, t0, v0, x1, t1)
        end = trajectory_point(x0, t0, v0, solution.alpha, solution.tau_f)
        assert end.x == pytest.approx(x1, abs=1e-9)
        assert end.t == pytest.approx(t1, abs=1e-9)

    def test_deceleration_energy_non_negative(self):
        """Net deceleration has dphi < 0 but non-negative energy."""
        solution = solve_rendezvous(0.0, 0.0, 0.8, 10.0, 20.0)
        assert solution.delta_phi < 0
        assert solution.alpha < 0
        assert solution.energy_consumed >= 0
        assert solution.energy_consumed == pytest.approx(abs(solution.delta_phi))
        assert solution.v_f == pytest.approx(0.0, abs=1e-12)

    def test_backward_target(self):
        """Negative dx gives negative alpha from rest."""
        solution = solve_rendezvous(0.0, 0.0, 0.0, -10.0, 20.0)
        assert solution.alpha == pytest.approx(-1.0 / 15.0)
        assert solution.v_f == pytest.approx(-0.8)

    def test_causality_violation(self):
        """Target outside the light cone is rejected."""
        with pytest.raises(CausalityError) as exc_info:
            solve_rendezvous(0, 0, 0, 200, 100)
        assert exc_info.value.kind == ErrorKind.CAUSALITY_VIOLATION

    def test_target_in_past(self):
        """t1 <= t0 is rejected."""
        with pytest.raises(CausalityError, match="future"):
            solve_rendezvous(0.0, 10.0, 0.0, 0.0, 10.0)
        with pytest.raises(CausalityError):
            solve_rendezvous(0.0, 10.0, 0.0, 0.0, 5.0)

    def test_superluminal_start(self):
        """|v0| >= 1 is out of domain."""
        with pytest.raises(DomainError):
            solve_rendezvous(0.0, 0.0, 1.0, 1.0, 10.0)

    def test_non_finite_input(self):
        """NaN inputs are rejected before any math runs."""
        with pytest.raises(PhysicsParameterError):
            solve_rendezvous(float("nan"), 0.0, 0.0, 1.0, 10.0)

    def test_receipt(self, rendezvous_case, capsys):
        """A rendezvous receipt records the maneuver case."""
        solve_rendezvous(**rendezvous_case, tenant_id="test")
        receipt = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert receipt["receipt_type"] == "rendezvous"
        assert receipt["case"] == "maneuver"
        assert receipt["tenant_id"] == "test"
        assert ":" in receipt["payload_hash"]

    def test_anomaly_before_raise(self, capsys):
        """A violation emits an anomaly receipt before raising."""
        with pytest.raises(CausalityError):
            solve_rendezvous(0, 0, 0, 200, 100)
        receipts = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert receipts[-1]["receipt_type"] == "anomaly"
        assert receipts[-1]["metric"] == "causality_violation"
        assert receipts[-1]["action"] == "halt"


class TestRendezvousChain:
    """Test solve_rendezvous_chain."""

    def test_two_legs(self):
        """Out and back: second leg starts at the first leg's arrival velocity."""
        events = [
            SpacetimeEvent(x=0.0, t=0.0),
            SpacetimeEvent(x=10.0, t=20.0),
            SpacetimeEvent(x=10.0, t=40.0),
        ]
        chain = solve_rendezvous_chain(events)
        assert len(chain.legs) == 2
        assert chain.legs[0].v0 == 0.0
        assert chain.legs[1].v0 == pytest.approx(0.8)
        assert chain.final_velocity == pytest.approx(-0.8)
        assert chain.total_coordinate_time == 40.0
        assert chain.total_proper_time == pytest.approx(
            sum(leg.solution.tau_f for leg in chain.legs)
        )
        assert chain.time_dilation_factor > 1.0

    def test_single_leg_matches_solver(self, rendezvous_case):
        """One-leg chain equals a direct solve."""
        events = [SpacetimeEvent(x=0.0, t=0.0), SpacetimeEvent(x=10.0, t=20.0)]
        chain = solve_rendezvous_chain(events)
        assert chain.legs[0].solution == solve_rendezvous(**rendezvous_case)

    def test_too_few_events(self, origin):
        """A chain needs two events."""
        with pytest.raises(PhysicsParameterError):
            solve_rendezvous_chain([origin])

    def test_unreachable_event(self, origin):
        """A leg outside the light cone is rejected."""
        with pytest.raises(SourceFrameError):
            solve_rendezvous_chain([origin, SpacetimeEvent(x=50.0, t=10.0)])

    def test_invalid_event(self, origin):
        """Negative time is rejected before solving."""
        with pytest.raises(PositionError):
            solve_rendezvous_chain([origin, SpacetimeEvent(x=0.0, t=-5.0)])


class TestTwinParadoxEvents:
    """Test the canned out-and-back itinerary."""

    def test_waypoints(self):
        """Seven events, turnaround at half time."""
        events = generate_twin_paradox_events(10.0, 40.0)
        assert [e.x for e in events] == pytest.approx([0.0, 1.0, 9.0, 10.0, 9.0, 1.0, 0.0])
        assert [e.t for e in events] == pytest.approx([0.0, 4.0, 16.0, 20.0, 24.0, 36.0, 40.0])

    def test_strictly_later(self):
        """Every event is later than the one before."""
        events = generate_twin_paradox_events(5.0, 30.0, acceleration_phase=0.2)
        assert all(b.t > a.t for a, b in zip(events, events[1:]))

    def test_traveller_ages_less(self):
        """Solved as a chain, the traveller returns home younger."""
        chain = solve_rendezvous_chain(generate_twin_paradox_events(10.0, 40.0))
        assert len(chain.legs) == 6
        assert chain.legs[-1].target == SpacetimeEvent(x=0.0, t=40.0)
        assert chain.total_coordinate_time == pytest.approx(40.0)
        assert chain.total_proper_time < 40.0
        assert chain.time_dilation_factor > 1.0

    def test_invalid_parameters(self):
        """Out-of-range parameters are rejected."""
        with pytest.raises(PhysicsParameterError):
            generate_twin_paradox_events(10.0, 40.0, acceleration_phase=0.3)
        with pytest.raises(PhysicsParameterError):
            generate_twin_paradox_events(10.0, 0.0)
        with pytest.raises(PhysicsParameterError):
            generate_twin_paradox_events(float("nan"), 40.0)
