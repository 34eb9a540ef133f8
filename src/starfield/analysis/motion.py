"""
Motion diagnostics for a starfield population.

After a velocity update every star satisfies

    |v| = r * k * dt * base_speed,    k = acceleration_multiplier

so |v| / base_speed is linear in r with slope k * dt and zero intercept.
These tools measure how closely a population follows that law.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats

if TYPE_CHECKING:
    from starfield.core.config import StarfieldConfig
    from starfield.core.population import StarPopulation


@dataclass
class AccelerationFit:
    """Result of regressing normalised speed against distance."""

    slope: float           # Fitted k * dt
    intercept: float       # Should be ~0
    r_squared: float       # Goodness of the linear fit
    expected_slope: float  # acceleration_multiplier * dt from config

    @property
    def relative_error(self) -> float:
        if self.expected_slope == 0:
            return abs(self.slope)
        return abs(self.slope - self.expected_slope) / abs(self.expected_slope)


def radial_distances(population: "StarPopulation") -> np.ndarray:
    """Distance of each star from the origin in the xy plane."""
    xy = population.xy
    return np.hypot(xy[:, 0], xy[:, 1])


def speeds(population: "StarPopulation") -> np.ndarray:
    """Velocity magnitude of each star."""
    return np.linalg.norm(population.velocities, axis=1)


def compute_speed_profile(
    population: "StarPopulation",
    n_bins: int = 20,
    max_radius: float | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Mean speed binned by distance from the origin.

    Args:
        population: Stars with up-to-date velocities
        n_bins: Number of equal-width radial bins
        max_radius: Outer edge of the last bin (default: farthest star)

    Returns:
        (radii, values) - bin centres and mean speed per bin (0 where empty)
    """
    if n_bins <= 0:
        raise ValueError(f"n_bins must be positive, got {n_bins}")

    dist = radial_distances(population)
    spd = speeds(population)

    if max_radius is None:
        max_radius = float(dist.max()) if len(dist) else 1.0
    if max_radius <= 0:
        max_radius = 1.0

    edges = np.linspace(0.0, max_radius, n_bins + 1)
    radii = 0.5 * (edges[:-1] + edges[1:])

    # Bin index per star; stars beyond max_radius are dropped
    idx = np.digitize(dist, edges) - 1
    idx[dist == max_radius] = n_bins - 1
    keep = (idx >= 0) & (idx < n_bins)

    totals = np.bincount(idx[keep], weights=spd[keep], minlength=n_bins)
    counts = np.bincount(idx[keep], minlength=n_bins)

    values = np.zeros(n_bins)
    nonempty = counts > 0
    values[nonempty] = totals[nonempty] / counts[nonempty]

    return radii, values


def fit_acceleration_law(
    population: "StarPopulation",
    dt: float,
    config: "StarfieldConfig",
) -> AccelerationFit:
    """
    Fit |v| / base_speed = slope * r + intercept.

    Stars with zero base speed carry no information and are skipped.
    Needs at least two usable stars at distinct distances.
    """
    dist = radial_distances(population)
    mask = population.base_speeds > 0
    if np.count_nonzero(mask) < 2:
        raise ValueError("Need at least two stars with positive base speed")

    normalised = speeds(population)[mask] / population.base_speeds[mask]
    slope, intercept, r_value, _, _ = stats.linregress(dist[mask], normalised)

    return AccelerationFit(
        slope=float(slope),
        intercept=float(intercept),
        r_squared=float(r_value ** 2),
        expected_slope=config.acceleration_multiplier * dt,
    )


def check_radial_alignment(population: "StarPopulation") -> float:
    """
    Largest angle (radians) between a star's velocity and its xy position.

    Stars at the origin or with zero velocity are skipped. Returns 0 when
    no star qualifies.
    """
    xy = population.xy
    vel = population.velocities[:, :2]

    r = np.hypot(xy[:, 0], xy[:, 1])
    v = np.hypot(vel[:, 0], vel[:, 1])
    mask = (r > 0) & (v > 0)
    if not np.any(mask):
        return 0.0

    cos_angle = np.einsum("ij,ij->i", xy[mask], vel[mask]) / (r[mask] * v[mask])
    return float(np.arccos(np.clip(cos_angle, -1.0, 1.0)).max())
