"""
Shared Constants
================
Physical constants and stepping defaults (SI units).

The stepping values decouple simulation accuracy from the host's frame
rate: every frame is consumed in fixed sub-steps of ``PHYSICS_DT``, and
a frame never contributes more than ``MAX_FRAME_CATCHUP`` of simulated
time.
"""

# ── Physics ───────────────────────────────────────────────────────────────
GRAVITY            = 9.81        # m/s²
SEA_LEVEL_DENSITY  = 1.225       # kg/m³
SPEED_FLOOR        = 1e-15       # m/s  added to |v| before use

# ── Stepping ──────────────────────────────────────────────────────────────
PHYSICS_DT         = 0.0005      # s  fixed physics sub-step
MAX_FRAME_CATCHUP  = 0.05        # s  largest frame interval simulated at once

# ── Launch defaults ───────────────────────────────────────────────────────
LAUNCH_ALTITUDE    = 1.0         # m  height of the muzzle above ground
MIN_SUBSTEP        = 1e-12       # s  frame leftovers below this are rounding noise
