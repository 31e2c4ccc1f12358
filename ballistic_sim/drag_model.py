"""
Aerodynamic Drag Model
======================
Quadratic drag plus constant gravity for a point mass.

    F_drag = -½ ρ |v|² Cd A v̂

Dividing by the mass and folding the constants into a single drag
factor k = ½ ρ Cd A / m (units 1/m) gives the acceleration

    a = -k |v| v - g ŷ

The drag coefficient is held constant over the whole flight; there is
no Mach dependence.
"""

import math
from typing import Tuple

from .constants import SPEED_FLOOR
from .projectile import PhysicalParameters


def drag_factor(params: PhysicalParameters) -> float:
    """k = ½ ρ Cd A / m  (1/m)."""
    return (0.5 * params.air_density * params.drag_coefficient
            * params.reference_area / params.mass)


def acceleration(vx: float, vy: float,
                 params: PhysicalParameters) -> Tuple[float, float]:
    """
    Instantaneous acceleration (m/s²) at velocity (vx, vy).

    The speed carries a tiny floor so a projectile at rest yields pure
    gravity instead of 0·inf.
    """
    v = math.sqrt(vx * vx + vy * vy) + SPEED_FLOOR
    k = drag_factor(params)
    ax = -k * v * vx
    ay = -params.gravity - k * v * vy
    return ax, ay


def drag_force(vx: float, vy: float,
               params: PhysicalParameters) -> Tuple[float, float]:
    """
    Drag force vector (N) at velocity (vx, vy).

    Parameters
    ----------
    vx, vy : float
        Velocity components (m/s)
    params : PhysicalParameters

    Returns
    -------
    (Fx, Fy) : tuple of float
    """
    v = math.sqrt(vx * vx + vy * vy)
    if v == 0.0:
        return 0.0, 0.0

    F_mag = 0.5 * params.air_density * v ** 2 * params.drag_coefficient * params.reference_area
    return -F_mag * vx / v, -F_mag * vy / v
