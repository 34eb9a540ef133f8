"""
Analysis layer: diagnostics derived from a population snapshot.

IMPORTANT: This is NOT seen by the simulation. One-way derivation only.

- compute_speed_profile: mean speed per radial bin
- fit_acceleration_law: recover acceleration_multiplier * dt by regression
- check_radial_alignment: worst angle between velocity and position
"""

from starfield.analysis.motion import (
    AccelerationFit,
    check_radial_alignment,
    compute_speed_profile,
    fit_acceleration_law,
    radial_distances,
    speeds,
)

__all__ = [
    "AccelerationFit",
    "check_radial_alignment",
    "compute_speed_profile",
    "fit_acceleration_law",
    "radial_distances",
    "speeds",
]
