"""
Validation Tests
================
The fixed-step driver against closed-form vacuum motion and the
adaptive DOP853 reference solution.
Run: python -m pytest tests/ -v
"""

import sys
import os
import inspect
import typing
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ballistic_sim.driver import run_to_impact
from ballistic_sim.projectile import LaunchConditions, InvalidParameterError
from ballistic_sim.validation import (
    vacuum_case, vacuum_error, vacuum_position,
    reference_solution, validate_against_reference,
)


BALL = LaunchConditions(velocity=25.0, elevation_deg=20.0, mass=0.0027,
                        drag_coefficient=0.47, diameter=0.04)


class TestVacuum:
    """Drag-free runs must follow the parabola."""

    @pytest.mark.parametrize("velocity, elevation", [
        (800.0, 5.0),
        (100.0, 45.0),
        (30.0, 80.0),
    ])
    def test_matches_closed_form(self, velocity, elevation):
        """Worst position error, scaled by the largest distance from the muzzle."""
        cond = vacuum_case(LaunchConditions(velocity=velocity, elevation_deg=elevation))
        result = run_to_impact(cond)
        assert result.landed
        assert vacuum_error(result, cond) < 1e-3

    @pytest.mark.parametrize("velocity, elevation", [
        (800.0, 5.0),
        (30.0, 80.0),
    ])
    def test_every_sample_on_parabola(self, velocity, elevation):
        """Each sample matches the closed form at its own time."""
        cond = vacuum_case(LaunchConditions(velocity=velocity, elevation_deg=elevation))
        result = run_to_impact(cond)
        x_ref, y_ref = vacuum_position(cond, result.time)
        np.testing.assert_allclose(result.x, x_ref, rtol=1e-6, atol=1e-9)
        # landing sample is linearly interpolated: off the parabola by at most g·dt²/8
        np.testing.assert_allclose(result.y, y_ref, rtol=0, atol=1e-4)

    def test_closed_form_landing(self):
        cond = vacuum_case(LaunchConditions(velocity=100.0, elevation_deg=45.0))
        result = run_to_impact(cond)
        x_ref, y_ref = vacuum_position(cond, result.flight_time)
        assert result.range_total == pytest.approx(float(x_ref), rel=1e-3)
        assert float(y_ref) == pytest.approx(0.0, abs=1e-3)

    def test_vacuum_case_removes_drag(self):
        cond = vacuum_case(BALL)
        assert cond.drag_coefficient == 0.0
        assert cond.air_density == 0.0
        assert cond.mass == BALL.mass


class TestReferenceSolution:
    """Agreement with scipy's DOP853 on the full drag equations."""

    def test_vacuum_reference_is_parabola(self):
        cond = vacuum_case(LaunchConditions(velocity=50.0, elevation_deg=60.0,
                                            launch_altitude=1.0))
        ref = reference_solution(cond)
        vx0, vy0 = cond.initial_velocity()
        g, y0 = cond.gravity, cond.launch_altitude
        t_flight = (vy0 + np.sqrt(vy0 ** 2 + 2 * g * y0)) / g
        assert ref.flight_time == pytest.approx(t_flight, rel=1e-6)
        assert ref.range == pytest.approx(vx0 * t_flight, rel=1e-6)
        assert ref.max_altitude == pytest.approx(y0 + vy0 ** 2 / (2 * g), rel=1e-4)

    def test_driver_matches_reference(self):
        ref = reference_solution(BALL)
        result = run_to_impact(BALL)
        assert result.range_total == pytest.approx(ref.range, rel=1e-4)
        assert result.flight_time == pytest.approx(ref.flight_time, rel=1e-4)

    def test_drag_shortens_range(self):
        with_drag = reference_solution(BALL)
        without = reference_solution(vacuum_case(BALL))
        assert with_drag.range < without.range

    def test_rejects_invalid_conditions(self):
        with pytest.raises(InvalidParameterError):
            reference_solution(LaunchConditions(mass=-1.0))

    def test_cases_are_optional(self):
        hints = typing.get_type_hints(validate_against_reference)
        assert type(None) in typing.get_args(hints['cases'])
        assert inspect.signature(validate_against_reference).parameters['cases'].default is None

    def test_validate_against_reference(self):
        results = validate_against_reference({'ball': BALL}, verbose=False)
        assert len(results) == 1
        assert results[0].name == 'ball'
        assert abs(results[0].range_error_pct) < 0.01
        assert abs(results[0].tof_error_pct) < 0.01
        assert np.isfinite(results[0].alt_error_pct)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
