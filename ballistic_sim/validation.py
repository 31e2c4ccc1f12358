"""
Validation Against Reference Solutions
======================================
Checks the fixed-step driver against two independent references:

  - Closed-form vacuum motion (drag-free):
        x = v0 cosθ t,   y = y0 + v0 sinθ t - ½ g t²
  - A high-order adaptive solution of the same drag equations from
    scipy's DOP853 integrator, with a terminal ground-impact event.

Reference cases cover a flat rifle shot, a lobbed shot and a
drag-dominated light sphere.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.integrate import solve_ivp

from .constants import PHYSICS_DT
from .driver import run_to_impact
from .drag_model import acceleration
from .integrator import TrajectoryResult
from .projectile import LaunchConditions


REFERENCE_CASES: Dict[str, LaunchConditions] = {
    '7.62mm flat': LaunchConditions(),
    '7.62mm lob 30°': LaunchConditions(velocity=300.0, elevation_deg=30.0),
    'Table tennis ball': LaunchConditions(
        velocity=25.0, elevation_deg=20.0, mass=0.0027,
        drag_coefficient=0.47, diameter=0.04,
    ),
}


def vacuum_position(conditions: LaunchConditions, t) -> Tuple[np.ndarray, np.ndarray]:
    """Closed-form drag-free position at time(s) t."""
    t = np.asarray(t, dtype=float)
    vx0, vy0 = conditions.initial_velocity()
    x = vx0 * t
    y = conditions.launch_altitude + vy0 * t - 0.5 * conditions.gravity * t ** 2
    return x, y


def vacuum_error(result: TrajectoryResult, conditions: LaunchConditions) -> float:
    """
    Largest position error of a run relative to the closed form,
    normalised by the distance travelled.
    """
    x_ref, y_ref = vacuum_position(conditions, result.time)
    err = np.hypot(result.x - x_ref, result.y - y_ref)
    scale = max(float(np.max(np.hypot(x_ref, y_ref))), 1e-12)
    return float(np.max(err) / scale)


@dataclass
class ReferenceSolution:
    """Impact metrics from the adaptive reference integrator."""
    range: float         # m
    flight_time: float   # s
    max_altitude: float  # m


def reference_solution(conditions: LaunchConditions, max_time: float = 300.0,
                       rtol: float = 1e-10, atol: float = 1e-10) -> ReferenceSolution:
    """
    Solve the drag equations with DOP853 until the ground is reached.
    """
    conditions.validate()
    params = conditions.parameters()
    vx0, vy0 = conditions.initial_velocity()

    def rhs(t, s):
        ax, ay = acceleration(s[2], s[3], params)
        return [s[2], s[3], ax, ay]

    def hit_ground(t, s):
        return s[1]
    hit_ground.terminal = True
    hit_ground.direction = -1

    sol = solve_ivp(rhs, (0.0, max_time),
                    [0.0, conditions.launch_altitude, vx0, vy0],
                    method='DOP853', events=hit_ground,
                    rtol=rtol, atol=atol, dense_output=True)

    if sol.t_events[0].size:
        t_impact = float(sol.t_events[0][0])
        x_impact = float(sol.y_events[0][0][0])
    else:
        t_impact = float(sol.t[-1])
        x_impact = float(sol.y[0, -1])

    t_fine = np.linspace(0.0, t_impact, 2001)
    max_alt = float(np.max(sol.sol(t_fine)[1]))
    return ReferenceSolution(range=x_impact, flight_time=t_impact, max_altitude=max_alt)


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    name: str
    ref_range: float        # reference range (m)
    sim_range: float        # simulated range (m)
    range_error_pct: float  # % error
    ref_max_alt: float
    sim_max_alt: float
    alt_error_pct: float
    ref_tof: float
    sim_tof: float
    tof_error_pct: float


def _pct(sim: float, ref: float) -> float:
    return 100.0 * (sim - ref) / ref


def validate_against_reference(cases: Optional[Dict[str, LaunchConditions]] = None,
                               physics_dt: float = PHYSICS_DT,
                               verbose: bool = True) -> List[ValidationResult]:
    """
    Run the driver at each case and compare against the adaptive
    reference solution.

    Returns list of ValidationResult, one per case.
    """
    if cases is None:
        cases = REFERENCE_CASES

    results = []

    if verbose:
        print(f"\n{'='*75}")
        print(f"  VALIDATION: fixed-step midpoint vs DOP853 reference")
        print(f"  Physics step: {physics_dt} s")
        print(f"{'='*75}")
        print(f"{'Case':<18} {'Ref R':>9} {'Sim R':>9} {'Err %':>8} "
              f"{'Ref Alt':>8} {'Sim Alt':>8} {'Err %':>8} "
              f"{'Ref ToF':>7} {'Err %':>8}")
        print("-" * 75)

    for name, cond in cases.items():
        ref = reference_solution(cond)
        traj = run_to_impact(cond, physics_dt=physics_dt)

        vr = ValidationResult(
            name=name,
            ref_range=ref.range,
            sim_range=traj.range_total,
            range_error_pct=_pct(traj.range_total, ref.range),
            ref_max_alt=ref.max_altitude,
            sim_max_alt=traj.max_altitude,
            alt_error_pct=_pct(traj.max_altitude, ref.max_altitude),
            ref_tof=ref.flight_time,
            sim_tof=traj.flight_time,
            tof_error_pct=_pct(traj.flight_time, ref.flight_time),
        )
        results.append(vr)

        if verbose:
            print(f"{name:<18} {vr.ref_range:>9.1f} {vr.sim_range:>9.1f} "
                  f"{vr.range_error_pct:>+8.4f} "
                  f"{vr.ref_max_alt:>8.1f} {vr.sim_max_alt:>8.1f} {vr.alt_error_pct:>+8.4f} "
                  f"{vr.ref_tof:>7.3f} {vr.tof_error_pct:>+8.4f}")

    if verbose:
        worst = max(abs(r.range_error_pct) for r in results)
        print("-" * 75)
        print(f"  Worst range error: {worst:.4f}%")
        status = "✓ PASS" if worst < 0.1 else "✗ CHECK STEP SIZE"
        print(f"  Status: {status}")
        print(f"{'='*75}\n")

    return results


def vacuum_case(conditions: LaunchConditions) -> LaunchConditions:
    """Same launch with drag switched off."""
    return replace(conditions, drag_coefficient=0.0, air_density=0.0)


if __name__ == "__main__":
    validate_against_reference(verbose=True)
