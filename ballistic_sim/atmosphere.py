"""
Standard Atmosphere Density
===========================
Air density for a launch site, from the ISA 1976 troposphere layer.

The simulation itself runs with a constant density for the whole
trajectory; this helper only picks that constant for a site altitude.
Valid from sea level to the tropopause (11 km); above it the
isothermal layer is used.

Reference: U.S. Standard Atmosphere, 1976 (NASA-TM-X-74335)
"""

import numpy as np

from .constants import SEA_LEVEL_DENSITY


SEA_LEVEL_TEMP       = 288.15      # K
LAPSE_RATE           = -0.0065     # K/m
TROPOPAUSE_ALT       = 11000.0     # m
STANDARD_GRAVITY     = 9.80665     # m/s²  (ISA definition, not the sim's g)
R_SPECIFIC           = 287.058     # J/(kg·K)

# ρ/ρ0 = (T/T0)^(g/(R·L) - 1) in a layer with constant lapse rate
_TROPO_EXPONENT = STANDARD_GRAVITY / (R_SPECIFIC * -LAPSE_RATE) - 1.0


def isa_temperature(altitude: float) -> float:
    """Temperature (K) at geometric altitude (m), clipped at the tropopause."""
    h = min(max(altitude, 0.0), TROPOPAUSE_ALT)
    return SEA_LEVEL_TEMP + LAPSE_RATE * h


def isa_density(altitude: float) -> float:
    """
    Air density (kg/m³) at a site altitude (m).

    Negative altitudes are treated as sea level.
    """
    if not np.isfinite(altitude):
        raise ValueError(f"altitude must be finite, got {altitude!r}")

    h = max(altitude, 0.0)
    T_tropo = isa_temperature(TROPOPAUSE_ALT)
    rho_tropo = SEA_LEVEL_DENSITY * (T_tropo / SEA_LEVEL_TEMP) ** _TROPO_EXPONENT

    if h <= TROPOPAUSE_ALT:
        T = isa_temperature(h)
        return float(SEA_LEVEL_DENSITY * (T / SEA_LEVEL_TEMP) ** _TROPO_EXPONENT)

    # Isothermal layer: exponential decay with scale height R·T/g
    scale_height = R_SPECIFIC * T_tropo / STANDARD_GRAVITY
    return float(rho_tropo * np.exp(-(h - TROPOPAUSE_ALT) / scale_height))
