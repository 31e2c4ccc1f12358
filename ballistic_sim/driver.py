"""
Simulation Driver
=================
Frame-driven run context for one projectile at a time.

The host calls ``on_frame`` from its render callback with a monotonic
timestamp. The elapsed wall-clock interval is clamped to
``max_frame_catchup`` and consumed in fixed physics sub-steps, so the
trajectory does not depend on the frame rate. After each sub-step the
driver checks for a ground crossing; on a crossing the overshoot sample
is replaced by a linearly interpolated landing sample at y = 0 and the
run ends.

Lifecycle:  IDLE ──launch──▶ RUNNING ──crossing──▶ LANDED
                               │
                               └──stop──▶ IDLE
"""

import enum
import logging
from typing import List, Optional, Tuple

from .constants import PHYSICS_DT, MAX_FRAME_CATCHUP, MIN_SUBSTEP
from .integrator import (
    State, TrajectorySample, TrajectoryResult,
    initial_state, sample_of, get_stepper, build_result,
)
from .projectile import LaunchConditions, PhysicalParameters

logger = logging.getLogger(__name__)


class RunPhase(enum.Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    LANDED = 'landed'


def crossed_ground(prev: State, new: State) -> bool:
    """True if the step from prev to new went from y >= 0 to y < 0."""
    return prev.y >= 0 and new.y < 0


def interpolate_impact(prev: State, new: State) -> Tuple[State, float]:
    """
    Landing state between two samples that straddle the ground.

    alpha = y_prev / (y_prev - y_new) is the fraction of the step at
    which the straight line between the samples reaches y = 0. Time and
    downrange are interpolated with it; velocity is taken unchanged from
    the post-step state.
    """
    alpha = prev.y / (prev.y - new.y)
    landed = State(
        t=prev.t + alpha * (new.t - prev.t),
        x=prev.x + alpha * (new.x - prev.x),
        y=0.0,
        vx=new.vx,
        vy=new.vy,
    )
    return landed, alpha


def format_status(state: State) -> str:
    """Status line: t=<s> s, x=<m> m, y=<m> m (height floored at 0)."""
    return f"t={state.t:.3f} s, x={state.x:.1f} m, y={max(0.0, state.y):.1f} m"


class SimulationDriver:
    """
    Owns the state and trajectory samples of the active run.

    Parameters
    ----------
    physics_dt : float
        Fixed sub-step (s).
    max_frame_catchup : float
        Upper bound on simulated time per frame (s).
    method : str
        Stepper name from ``integrator.STEPPERS``.
    """

    def __init__(self, physics_dt: float = PHYSICS_DT,
                 max_frame_catchup: float = MAX_FRAME_CATCHUP,
                 method: str = 'midpoint'):
        if not physics_dt > 0:
            raise ValueError(f"physics_dt must be > 0, got {physics_dt!r}")
        if not max_frame_catchup > 0:
            raise ValueError(f"max_frame_catchup must be > 0, got {max_frame_catchup!r}")

        self.physics_dt = physics_dt
        self.max_frame_catchup = max_frame_catchup
        self.method = method
        self._step = get_stepper(method)

        self.phase = RunPhase.IDLE
        self.conditions: Optional[LaunchConditions] = None
        self.params: Optional[PhysicalParameters] = None
        self.state: Optional[State] = None
        self.samples: List[TrajectorySample] = []
        self.impact_alpha: Optional[float] = None
        self._last_timestamp_ms: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self.phase is RunPhase.RUNNING

    @property
    def landed(self) -> bool:
        return self.phase is RunPhase.LANDED

    def launch(self, conditions: LaunchConditions,
               timestamp_ms: Optional[float] = None) -> State:
        """
        Start a new run, discarding the previous trajectory.

        Raises InvalidParameterError before touching any run state if
        the conditions are invalid.
        """
        conditions.validate()
        params = conditions.parameters()
        state = initial_state(conditions)

        self.conditions = conditions
        self.params = params
        self.state = state
        self.samples = [sample_of(state)]
        self.impact_alpha = None
        self._last_timestamp_ms = timestamp_ms
        self.phase = RunPhase.RUNNING

        logger.info("Launch: v0=%.1f m/s, elevation=%.2f deg, y0=%.2f m",
                    conditions.velocity, conditions.elevation_deg, state.y)
        return state

    def stop(self) -> None:
        """Abort the active run; the last trajectory stays available."""
        if self.phase is RunPhase.RUNNING:
            logger.info("Run aborted at %s", format_status(self.state))
            self.phase = RunPhase.IDLE

    def on_frame(self, timestamp_ms: float) -> float:
        """
        Host render callback. Returns simulated seconds consumed.

        The first callback after a launch without a timestamp only
        records the reference time.
        """
        if self._last_timestamp_ms is None:
            self._last_timestamp_ms = timestamp_ms
            return 0.0
        frame_dt = (timestamp_ms - self._last_timestamp_ms) / 1000.0
        self._last_timestamp_ms = timestamp_ms
        return self.advance(frame_dt)

    def advance(self, frame_dt: float) -> float:
        """
        Consume one frame interval in fixed sub-steps.

        Returns simulated seconds consumed, which is less than the
        clamped interval if the projectile lands during the frame.
        """
        if self.phase is not RunPhase.RUNNING:
            return 0.0

        remaining = min(frame_dt, self.max_frame_catchup)
        if frame_dt > self.max_frame_catchup:
            logger.debug("Frame interval %.4f s clamped to %.4f s",
                         frame_dt, self.max_frame_catchup)

        t_start = self.state.t
        while remaining > MIN_SUBSTEP and self.phase is RunPhase.RUNNING:
            h = min(self.physics_dt, remaining)
            self._substep(h)
            remaining -= h
        return self.state.t - t_start

    def _substep(self, h: float) -> None:
        prev = self.state
        new = self._step(prev, h, self.params)

        if crossed_ground(prev, new):
            new, self.impact_alpha = interpolate_impact(prev, new)
            self.phase = RunPhase.LANDED
            logger.info("Impact at t=%.4f s, x=%.2f m (alpha=%.4f)",
                        new.t, new.x, self.impact_alpha)

        self.state = new
        self.samples.append(sample_of(new))

    def status_line(self) -> str:
        if self.state is None:
            return ""
        return format_status(self.state)


def run_to_impact(conditions: LaunchConditions, physics_dt: float = PHYSICS_DT,
                  max_time: float = 300.0,
                  method: str = 'midpoint') -> TrajectoryResult:
    """
    Fly one trajectory to the ground without a host clock.

    Uses the same driver as the interactive path, one sub-step per
    advance, and records the full state history. Stops at impact or
    once ``max_time`` of simulated time has elapsed.
    """
    driver = SimulationDriver(physics_dt=physics_dt,
                              max_frame_catchup=physics_dt,
                              method=method)
    history = [driver.launch(conditions)]

    while driver.is_running and driver.state.t < max_time:
        driver.advance(physics_dt)
        history.append(driver.state)

    return build_result(history, conditions, method, physics_dt, driver.landed)
