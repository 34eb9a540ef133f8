"""
The three per-frame stages.

Run once per frame, in this order:
1. reset_stars         - writes positions and base speeds of escaped stars
2. calculate_velocity  - writes velocities
3. move_stars          - writes positions

Stars are independent within a stage, so every stage is a single
vectorised pass over the whole population.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

import numpy as np

from starfield.core.population import sample_uniform

if TYPE_CHECKING:
    from starfield.core.config import StarfieldConfig
    from starfield.core.population import StarPopulation

logger = logging.getLogger(__name__)


def find_outside(positions: np.ndarray, extent: float) -> np.ndarray:
    """
    Boolean mask of stars outside the square [-E, E] x [-E, E].

    z is deliberately not tested: it is render depth, not position.
    """
    xy = positions[:, :2]
    return np.any((xy < -extent) | (xy > extent), axis=1)


def reset_stars(
    population: "StarPopulation",
    config: "StarfieldConfig",
    rng: np.random.Generator,
) -> int:
    """
    Respawn every star that has left the extent.

    Escaped stars get x, y and z drawn independently from the half
    extent and a fresh base speed. Stars still inside are untouched.
    The old velocity is left as is; calculate_velocity overwrites it.

    Returns:
        Number of stars relocated
    """
    outside = find_outside(population.positions, config.space_extent)
    n_reset = int(np.count_nonzero(outside))

    if n_reset:
        population.positions[outside] = sample_uniform(
            rng, config.half_space_range, (n_reset, 3)
        )
        population.base_speeds[outside] = sample_uniform(
            rng, config.speed_range, n_reset
        )
        logger.debug("Reset %d stars", n_reset)

    return n_reset


def calculate_velocity(
    population: "StarPopulation",
    dt: float,
    config: "StarfieldConfig",
) -> None:
    """
    Recompute every star's velocity from its current position.

    direction = normalize(x, y, 0)
    magnitude = |(x, y)| * acceleration_multiplier * dt * base_speed

    dt appears once here even though acceleration goes as dt^2, because
    move_stars multiplies by dt again. A star exactly at the origin has
    no direction and gets a zero velocity.
    """
    xy = population.xy
    distance = np.hypot(xy[:, 0], xy[:, 1])

    direction = np.zeros_like(xy)
    np.divide(xy, distance[:, None], out=direction, where=distance[:, None] > 0)

    magnitude = distance * config.acceleration_multiplier * dt * population.base_speeds

    population.velocities[:, :2] = direction * magnitude[:, None]
    population.velocities[:, 2] = 0.0


def move_stars(population: "StarPopulation", dt: float) -> None:
    """Advance positions by this frame's velocity: p += v * dt."""
    population.positions += population.velocities * dt
