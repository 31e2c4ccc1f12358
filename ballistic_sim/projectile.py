"""
Projectile Definition & Launch Conditions
=========================================
Defines the immutable parameter set consumed by the acceleration model
and the launch record supplied by the host.

Coordinate system:
  x = downrange (horizontal)
  y = height above ground (vertical, up positive, ground at y = 0)
"""

import math
from dataclasses import dataclass, fields

from .constants import GRAVITY, SEA_LEVEL_DENSITY, LAUNCH_ALTITUDE


class InvalidParameterError(ValueError):
    """A launch input is non-finite or outside its physical range."""

    def __init__(self, field_name: str, value, requirement: str):
        self.field_name = field_name
        self.value = value
        super().__init__(f"{field_name} must be {requirement}, got {value!r}")


@dataclass(frozen=True)
class PhysicalParameters:
    """
    Parameters held constant for one trajectory run.
    """
    mass: float                # kg
    drag_coefficient: float    # dimensionless
    reference_area: float      # m²
    air_density: float         # kg/m³
    gravity: float = GRAVITY   # m/s²


def reference_area(diameter: float) -> float:
    """Frontal area π·(d/2)² of a round projectile (m²)."""
    return math.pi * (diameter / 2) ** 2


@dataclass
class LaunchConditions:
    """
    Complete description of one launch, as entered by the host.

    Defaults describe a 7.62 mm rifle bullet fired almost flat.
    """
    velocity: float = 800.0                  # m/s  muzzle velocity
    elevation_deg: float = 5.0               # degrees above horizontal
    mass: float = 0.0095                     # kg
    drag_coefficient: float = 0.295          # dimensionless
    diameter: float = 0.00782                # m
    air_density: float = SEA_LEVEL_DENSITY   # kg/m³
    gravity: float = GRAVITY                 # m/s²
    launch_altitude: float = LAUNCH_ALTITUDE # m above ground

    def validate(self) -> None:
        """
        Reject inputs that would corrupt a run.

        Raises
        ------
        InvalidParameterError
            Naming the first offending field.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise InvalidParameterError(f.name, value, "finite")

        if self.mass <= 0:
            raise InvalidParameterError('mass', self.mass, "> 0")
        if self.diameter <= 0:
            raise InvalidParameterError('diameter', self.diameter, "> 0")
        if self.drag_coefficient < 0:
            raise InvalidParameterError('drag_coefficient', self.drag_coefficient, ">= 0")
        if self.air_density < 0:
            raise InvalidParameterError('air_density', self.air_density, ">= 0")
        if self.velocity < 0:
            raise InvalidParameterError('velocity', self.velocity, ">= 0")
        if self.launch_altitude <= 0:
            raise InvalidParameterError('launch_altitude', self.launch_altitude, "> 0")

    @property
    def elevation_rad(self) -> float:
        return self.elevation_deg * math.pi / 180

    def parameters(self) -> PhysicalParameters:
        """Freeze the physical inputs for a run."""
        return PhysicalParameters(
            mass=self.mass,
            drag_coefficient=self.drag_coefficient,
            reference_area=reference_area(self.diameter),
            air_density=self.air_density,
            gravity=self.gravity,
        )

    def initial_velocity(self):
        """Launch speed decomposed into (vx, vy)."""
        theta = self.elevation_rad
        return self.velocity * math.cos(theta), self.velocity * math.sin(theta)
