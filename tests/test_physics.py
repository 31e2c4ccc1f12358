"""
Unit Tests for the Ballistics Core Physics
==========================================
Tests the acceleration model, integrators and launch inputs.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ballistic_sim.atmosphere import isa_density, TROPOPAUSE_ALT
from ballistic_sim.constants import GRAVITY, SEA_LEVEL_DENSITY
from ballistic_sim.drag_model import acceleration, drag_factor, drag_force
from ballistic_sim.integrator import (
    State, step, euler_step, initial_state, get_stepper,
)
from ballistic_sim.projectile import (
    LaunchConditions, PhysicalParameters, InvalidParameterError, reference_area,
)
from ballistic_sim.driver import run_to_impact


RIFLE = LaunchConditions().parameters()
VACUUM = PhysicalParameters(mass=1.0, drag_coefficient=0.0,
                            reference_area=0.01, air_density=0.0)


class TestAtmosphere:
    """Site density from the ISA troposphere."""

    def test_sea_level_density(self):
        assert isa_density(0) == pytest.approx(SEA_LEVEL_DENSITY)

    def test_density_at_1000m(self):
        assert abs(isa_density(1000) - 1.112) < 0.002

    def test_density_decreases_with_altitude(self):
        assert isa_density(0) > isa_density(2000) > isa_density(8000) > isa_density(15000)

    def test_continuous_at_tropopause(self):
        below = isa_density(TROPOPAUSE_ALT - 1e-6)
        above = isa_density(TROPOPAUSE_ALT + 1e-6)
        assert below == pytest.approx(above, rel=1e-6)

    def test_negative_altitude_is_sea_level(self):
        assert isa_density(-50.0) == isa_density(0.0)


class TestDragModel:
    """Verify the quadratic drag acceleration."""

    def test_zero_velocity_is_finite(self):
        ax, ay = acceleration(0.0, 0.0, RIFLE)
        assert math.isfinite(ax) and math.isfinite(ay)
        assert ax == pytest.approx(0.0, abs=1e-12)
        assert ay == pytest.approx(-GRAVITY)

    def test_vacuum_is_pure_gravity(self):
        ax, ay = acceleration(300.0, -40.0, VACUUM)
        assert ax == 0.0
        assert ay == -GRAVITY

    def test_drag_factor(self):
        p = PhysicalParameters(mass=2.0, drag_coefficient=0.5,
                               reference_area=0.04, air_density=1.0)
        assert drag_factor(p) == pytest.approx(0.5 * 1.0 * 0.5 * 0.04 / 2.0)

    def test_drag_opposes_motion(self):
        vx, vy = 500.0, 120.0
        ax, ay = acceleration(vx, vy, RIFLE)
        drag = np.array([ax, ay + GRAVITY])
        assert np.dot(drag, [vx, vy]) < 0

    def test_drag_is_quadratic_in_speed(self):
        ax1, _ = acceleration(100.0, 0.0, RIFLE)
        ax2, _ = acceleration(200.0, 0.0, RIFLE)
        assert ax2 / ax1 == pytest.approx(4.0, rel=1e-9)

    def test_drag_force_matches_acceleration(self):
        Fx, Fy = drag_force(300.0, 50.0, RIFLE)
        ax, ay = acceleration(300.0, 50.0, RIFLE)
        assert Fx / RIFLE.mass == pytest.approx(ax, rel=1e-9)
        assert Fy / RIFLE.mass == pytest.approx(ay + RIFLE.gravity, rel=1e-9)

    def test_drag_force_zero_at_rest(self):
        assert drag_force(0.0, 0.0, RIFLE) == (0.0, 0.0)


class TestLaunchConditions:
    """Launch inputs, conversion and validation."""

    def test_reference_area(self):
        assert reference_area(0.00782) == pytest.approx(math.pi * (0.00782 / 2) ** 2)

    def test_initial_state(self):
        cond = LaunchConditions(velocity=100.0, elevation_deg=30.0, launch_altitude=1.0)
        s = initial_state(cond)
        assert s.t == 0.0 and s.x == 0.0 and s.y == 1.0
        assert math.hypot(s.vx, s.vy) == pytest.approx(100.0)
        assert s.vy == pytest.approx(50.0)

    def test_parameters_are_frozen(self):
        params = LaunchConditions().parameters()
        with pytest.raises(Exception):
            params.mass = 1.0

    def test_defaults_are_valid(self):
        LaunchConditions().validate()

    @pytest.mark.parametrize("field_name, value", [
        ('mass', 0.0),
        ('mass', -1.0),
        ('diameter', 0.0),
        ('air_density', -0.1),
        ('drag_coefficient', -0.2),
        ('launch_altitude', -1.0),
        ('launch_altitude', 0.0),
        ('velocity', float('nan')),
        ('elevation_deg', float('inf')),
    ])
    def test_invalid_inputs_rejected(self, field_name, value):
        cond = LaunchConditions(**{field_name: value})
        with pytest.raises(InvalidParameterError) as exc:
            cond.validate()
        assert exc.value.field_name == field_name
        assert isinstance(exc.value, ValueError)


class TestIntegrators:
    """Verify the single-step integrators."""

    def test_step_is_deterministic(self):
        s = State(t=0.0, x=0.0, y=1.0, vx=796.9, vy=69.7)
        assert step(s, 0.0005, RIFLE) == step(s, 0.0005, RIFLE)

    def test_step_does_not_mutate_input(self):
        s = State(t=0.25, x=3.0, y=4.0, vx=10.0, vy=-2.0)
        before = (s.t, s.x, s.y, s.vx, s.vy)
        step(s, 0.01, RIFLE)
        assert (s.t, s.x, s.y, s.vx, s.vy) == before

    def test_midpoint_velocity_formula(self):
        s = State(t=0.5, x=10.0, y=5.0, vx=400.0, vy=30.0)
        dt = 0.001
        ax, ay = acceleration(s.vx, s.vy, RIFLE)
        ax_m, ay_m = acceleration(s.vx + 0.5 * dt * ax, s.vy + 0.5 * dt * ay, RIFLE)
        vx_new = s.vx + dt * ax_m
        vy_new = s.vy + dt * ay_m

        new = step(s, dt, RIFLE)
        assert new.vx == vx_new
        assert new.vy == vy_new
        assert new.x == s.x + dt * (s.vx + vx_new) / 2
        assert new.y == s.y + dt * (s.vy + vy_new) / 2
        assert new.t == s.t + dt

    def test_vacuum_step_is_exact(self):
        s = State(t=0.0, x=0.0, y=0.0, vx=10.0, vy=20.0)
        new = step(s, 0.5, VACUUM)
        assert new.x == pytest.approx(5.0)
        assert new.y == pytest.approx(20.0 * 0.5 - 0.5 * GRAVITY * 0.25)
        assert new.vy == pytest.approx(20.0 - GRAVITY * 0.5)

    def test_euler_step(self):
        s = State(t=0.0, x=0.0, y=0.0, vx=10.0, vy=20.0)
        new = euler_step(s, 0.5, VACUUM)
        assert new.x == 5.0
        assert new.y == 10.0
        assert new.vy == pytest.approx(20.0 - GRAVITY * 0.5)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            get_stepper('rk4')

    def test_midpoint_more_accurate_than_euler(self):
        """At the same coarse step, midpoint stays closer to a fine-step reference."""
        cond = LaunchConditions(velocity=300.0, elevation_deg=30.0)
        ref = run_to_impact(cond, physics_dt=0.0005)
        mid = run_to_impact(cond, physics_dt=0.05, method='midpoint')
        euler = run_to_impact(cond, physics_dt=0.05, method='euler')

        assert abs(mid.range_total - ref.range_total) < abs(euler.range_total - ref.range_total)

    def test_higher_drag_reduces_range(self):
        low = run_to_impact(LaunchConditions(velocity=300.0, elevation_deg=20.0,
                                             drag_coefficient=0.2), physics_dt=0.002)
        high = run_to_impact(LaunchConditions(velocity=300.0, elevation_deg=20.0,
                                              drag_coefficient=0.6), physics_dt=0.002)
        assert high.range_total < low.range_total


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
