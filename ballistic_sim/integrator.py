"""
Numerical Integration Engine
=============================
Single-step time integrators for the point-mass equations of motion:

    dx/dt = v
    dv/dt = a(v)  (from drag_model.acceleration)

1. **Midpoint velocity scheme** (2nd order) — acceleration is sampled at
   the start of the step and again at a half-step velocity estimate;
   position advances with the trapezoidal average of the old and new
   velocity. This is the production stepper.
2. **Euler Method** (1st order) — kept for accuracy comparison only.

Steppers are pure: they return a new State and never touch the input.

Output of a complete run: TrajectoryResult dataclass with the full
state history as numpy arrays.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple

import numpy as np

from .drag_model import acceleration
from .projectile import LaunchConditions, PhysicalParameters


@dataclass(frozen=True)
class State:
    """Snapshot of projectile state at one instant."""
    t: float     # s, elapsed simulation time
    x: float     # m, downrange
    y: float     # m, height above ground
    vx: float    # m/s
    vy: float    # m/s


class TrajectorySample(NamedTuple):
    """One point of the rendered path."""
    t: float
    x: float
    y: float


def initial_state(conditions: LaunchConditions) -> State:
    """State at the muzzle, t = 0."""
    vx, vy = conditions.initial_velocity()
    return State(t=0.0, x=0.0, y=conditions.launch_altitude, vx=vx, vy=vy)


def sample_of(state: State) -> TrajectorySample:
    return TrajectorySample(state.t, state.x, state.y)


def step(state: State, dt: float, params: PhysicalParameters) -> State:
    """
    Advance one fixed step with the midpoint velocity scheme.

    v' = v + dt · a(v + ½ dt · a(v))
    x' = x + dt · (v + v') / 2
    """
    ax, ay = acceleration(state.vx, state.vy, params)

    vx_mid = state.vx + 0.5 * dt * ax
    vy_mid = state.vy + 0.5 * dt * ay
    ax_mid, ay_mid = acceleration(vx_mid, vy_mid, params)

    vx_new = state.vx + dt * ax_mid
    vy_new = state.vy + dt * ay_mid

    return State(
        t=state.t + dt,
        x=state.x + dt * (state.vx + vx_new) / 2,
        y=state.y + dt * (state.vy + vy_new) / 2,
        vx=vx_new,
        vy=vy_new,
    )


def euler_step(state: State, dt: float, params: PhysicalParameters) -> State:
    """
    Forward Euler step.

    x_{n+1} = x_n + v_n * dt
    v_{n+1} = v_n + a(v_n) * dt
    """
    ax, ay = acceleration(state.vx, state.vy, params)
    return State(
        t=state.t + dt,
        x=state.x + state.vx * dt,
        y=state.y + state.vy * dt,
        vx=state.vx + ax * dt,
        vy=state.vy + ay * dt,
    )


Stepper = Callable[[State, float, PhysicalParameters], State]

STEPPERS: Dict[str, Stepper] = {
    'midpoint': step,
    'euler': euler_step,
}


def get_stepper(method: str) -> Stepper:
    if method not in STEPPERS:
        raise ValueError(
            f"Unknown integration method '{method}'. "
            f"Available: {list(STEPPERS.keys())}"
        )
    return STEPPERS[method]


@dataclass
class TrajectoryResult:
    """Complete trajectory output."""
    conditions: LaunchConditions
    method: str               # 'midpoint' or 'euler'
    dt: float                 # physics step used
    landed: bool              # False if the run hit its time limit

    # Arrays — each has shape (N,)
    time: np.ndarray
    x: np.ndarray
    y: np.ndarray
    vx: np.ndarray
    vy: np.ndarray
    speed: np.ndarray

    @property
    def range_total(self) -> float:
        """Horizontal distance at the last sample (m)."""
        return float(self.x[-1])

    @property
    def max_altitude(self) -> float:
        """Maximum height reached (m)."""
        return float(np.max(self.y))

    @property
    def flight_time(self) -> float:
        """Total flight time (s)."""
        return float(self.time[-1])

    @property
    def impact_velocity(self) -> float:
        """Speed at the last sample (m/s)."""
        return float(self.speed[-1])

    @property
    def impact_angle_deg(self) -> float:
        """Angle of descent at impact (degrees below horizontal)."""
        return float(np.degrees(np.arctan2(-self.vy[-1], abs(self.vx[-1]))))

    def summary(self) -> str:
        """Human-readable summary string."""
        status = "LANDED" if self.landed else "TIME LIMIT"
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY — {status:<30s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Method       : {self.method.upper():<36s} ║",
            f"║  Timestep     : {self.dt:<36.4f} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Launch vel   : {self.conditions.velocity:>10.1f} m/s{'':<22s} ║",
            f"║  Elevation    : {self.conditions.elevation_deg:>10.1f} °{'':<24s} ║",
            f"║  Mass         : {self.conditions.mass * 1000:>10.2f} g{'':<24s} ║",
            f"║  Cd           : {self.conditions.drag_coefficient:>10.3f}{'':<26s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Range        : {self.range_total:>10.1f} m{'':<24s} ║",
            f"║  Max altitude : {self.max_altitude:>10.1f} m{'':<24s} ║",
            f"║  Flight time  : {self.flight_time:>10.3f} s{'':<24s} ║",
            f"║  Impact vel   : {self.impact_velocity:>10.1f} m/s{'':<22s} ║",
            f"║  Impact angle : {self.impact_angle_deg:>10.2f} °{'':<24s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def build_result(history: List[State], conditions: LaunchConditions,
                 method: str, dt: float, landed: bool) -> TrajectoryResult:
    """Convert a state history to TrajectoryResult."""
    data = np.array([(s.t, s.x, s.y, s.vx, s.vy) for s in history], dtype=float)
    vx = data[:, 3]
    vy = data[:, 4]
    return TrajectoryResult(
        conditions=conditions,
        method=method,
        dt=dt,
        landed=landed,
        time=data[:, 0],
        x=data[:, 1],
        y=data[:, 2],
        vx=vx,
        vy=vy,
        speed=np.hypot(vx, vy),
    )
