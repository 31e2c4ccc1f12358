"""
Point-Mass Ballistics Core
==========================
Fixed-step simulation of a projectile under gravity and quadratic
aerodynamic drag, with sub-step ground-impact detection:
  - Quadratic drag with a constant drag coefficient
  - Midpoint-velocity integrator with trapezoidal position update
  - Frame-driven driver with a catch-up clamp and fixed physics sub-steps
  - Linear interpolation of the landing point onto y = 0

Rendering and input handling belong to the host; the host feeds launch
conditions and frame timestamps and reads back the sample list, the
current state and a status line.
"""

from .constants import GRAVITY, PHYSICS_DT, MAX_FRAME_CATCHUP
from .atmosphere import isa_density
from .projectile import (
    PhysicalParameters, LaunchConditions, InvalidParameterError, reference_area,
)
from .drag_model import acceleration, drag_factor, drag_force
from .integrator import (
    State, TrajectorySample, TrajectoryResult,
    step, euler_step, initial_state,
)
from .driver import (
    SimulationDriver, RunPhase, interpolate_impact, format_status, run_to_impact,
)
from .validation import (
    vacuum_position, vacuum_error, reference_solution,
    validate_against_reference, REFERENCE_CASES,
)

__version__ = "1.0.0"
__all__ = [
    'PhysicalParameters', 'LaunchConditions', 'InvalidParameterError',
    'State', 'TrajectorySample', 'TrajectoryResult',
    'acceleration', 'drag_factor', 'drag_force', 'reference_area',
    'step', 'euler_step', 'initial_state',
    'SimulationDriver', 'RunPhase', 'interpolate_impact', 'format_status',
    'run_to_impact', 'isa_density',
    'vacuum_position', 'vacuum_error', 'reference_solution',
    'validate_against_reference', 'REFERENCE_CASES',
    'GRAVITY', 'PHYSICS_DT', 'MAX_FRAME_CATCHUP',
]
