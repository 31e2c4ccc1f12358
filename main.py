#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  POINT-MASS BALLISTICS CORE — Headless Runner
═══════════════════════════════════════════════════════════════════════════════

  Drives the simulation core the way a rendering host would, without a
  window:
    1. Launch parameters and site air density
    2. Frame-driven run with a simulated 60 Hz clock (and one stalled frame)
    3. Batch run to impact
    4. Midpoint vs Euler accuracy
    5. Drag-free run vs closed form
    6. Validation against the DOP853 reference

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip validation (faster)
    python main.py --debug      # Show driver log output
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
import sys
import time

from ballistic_sim.atmosphere import isa_density
from ballistic_sim.driver import SimulationDriver, run_to_impact
from ballistic_sim.projectile import LaunchConditions
from ballistic_sim.validation import (
    vacuum_case, vacuum_error, validate_against_reference,
)


FRAME_MS = 1000.0 / 60.0
STALL_MS = 2000.0


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv
    logging.basicConfig(
        level=logging.DEBUG if '--debug' in sys.argv else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Launch Parameters
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Launch Parameters")
    cond = LaunchConditions()
    params = cond.parameters()
    print(f"  Muzzle velocity : {cond.velocity:.1f} m/s")
    print(f"  Elevation       : {cond.elevation_deg:.1f} °")
    print(f"  Mass            : {cond.mass * 1000:.2f} g")
    print(f"  Cd / diameter   : {cond.drag_coefficient:.3f} / {cond.diameter * 1000:.2f} mm")
    print(f"  Reference area  : {params.reference_area * 1e6:.3f} mm²")
    print(f"\n  {'Site alt (m)':>12} {'ρ (kg/m³)':>11}")
    for h in [0, 500, 1500, 3000]:
        print(f"  {h:>12} {isa_density(h):>11.4f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Frame-Driven Run
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Frame-Driven Run (60 Hz, one 2 s stall)")
    driver = SimulationDriver()
    now_ms = 0.0
    driver.launch(cond, timestamp_ms=now_ms)
    frame = 0
    while driver.is_running:
        frame += 1
        now_ms += STALL_MS if frame == 30 else FRAME_MS
        consumed = driver.on_frame(now_ms)
        if frame % 30 == 0 or not driver.is_running:
            print(f"  frame {frame:>4}  +{consumed * 1000:6.2f} ms sim  {driver.status_line()}")
    print(f"\n  Samples recorded : {len(driver.samples)}")
    print(f"  Impact alpha     : {driver.impact_alpha:.4f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Batch Run
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Batch Run to Impact")
    result = run_to_impact(cond)
    print(result.summary())

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Midpoint vs Euler
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Midpoint vs Euler Numerical Accuracy")
    dt_ref, dt_test = 0.0005, 0.02
    coarse_mid = run_to_impact(cond, physics_dt=dt_test, method='midpoint')
    coarse_euler = run_to_impact(cond, physics_dt=dt_test, method='euler')
    print(f"  Timestep: {dt_test} s (reference {dt_ref} s)")
    print(f"  Reference — Range: {result.range_total:.2f} m")
    print(f"  Midpoint  — Range: {coarse_mid.range_total:.2f} m  "
          f"Δ {coarse_mid.range_total - result.range_total:+.3f} m")
    print(f"  Euler     — Range: {coarse_euler.range_total:.2f} m  "
          f"Δ {coarse_euler.range_total - result.range_total:+.3f} m")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Drag-Free Check
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Drag-Free Run vs Closed Form")
    vac = vacuum_case(cond)
    vac_result = run_to_impact(vac)
    print(f"  Range: {vac_result.range_total:.2f} m  Flight time: {vac_result.flight_time:.3f} s")
    print(f"  Max relative position error: {vacuum_error(vac_result, vac):.2e}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Validation
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 6: Validation vs DOP853")
        validate_against_reference(verbose=True)
    else:
        section("PHASE 6: Validation SKIPPED (--quick mode)")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"\n  Total runtime: {elapsed:.1f} seconds\n")


if __name__ == "__main__":
    main()
