"""
StarPopulation: the flat collection of stars the frame stages operate on.

Stars are stored structure-of-arrays:
- positions   [N, 3]  x, y drive the simulation; z is render depth only
- velocities  [N, 3]  derived, recomputed every frame
- base_speeds [N]     sampled at spawn and at every reset

The population size never changes after construction. Stars are
recycled in place, never created or destroyed mid-run.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

import numpy as np

if TYPE_CHECKING:
    from starfield.core.config import StarfieldConfig

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create the random source injected into spawn and reset."""
    return np.random.default_rng(seed)


def sample_uniform(
    rng: np.random.Generator,
    bounds: tuple[float, float],
    size: int | tuple[int, ...] | None = None,
) -> float | np.ndarray:
    """
    Draw independent uniform samples inside a closed interval.

    Every element is a fresh draw; nothing is shared across axes or stars.

    Args:
        rng: Random source
        bounds: (low, high) with low <= high
        size: Output shape (None for a single float)
    """
    low, high = bounds
    if size is None:
        return float(rng.uniform(low, high))
    return rng.uniform(low, high, size=size)


@dataclass
class Star:
    """
    A single star record.

    Snapshots come from StarPopulation indexing. New stars should be made
    with spawn(), which samples base_speed from the configured range; the
    bare constructor leaves base_speed at 0, outside any valid range.
    """

    position: Vec3 = (0.0, 0.0, 0.0)
    velocity: Vec3 = (0.0, 0.0, 0.0)
    base_speed: float = 0.0

    @classmethod
    def spawn(
        cls,
        position: Vec3,
        config: "StarfieldConfig",
        rng: np.random.Generator,
    ) -> "Star":
        """New star at rest with a freshly sampled base speed."""
        return cls(
            position=tuple(float(c) for c in position),
            velocity=(0.0, 0.0, 0.0),
            base_speed=sample_uniform(rng, config.speed_range),
        )


class StarPopulation:
    """
    Fixed-size star storage.

    Indexing returns a Star snapshot; mutate through the arrays or
    set_star().
    """

    def __init__(
        self,
        positions: np.ndarray,
        velocities: np.ndarray | None = None,
        base_speeds: np.ndarray | None = None,
    ):
        positions = np.array(positions, dtype=np.float64).reshape(-1, 3)
        n = positions.shape[0]

        if velocities is None:
            velocities = np.zeros((n, 3), dtype=np.float64)
        else:
            velocities = np.array(velocities, dtype=np.float64).reshape(-1, 3)

        if base_speeds is None:
            base_speeds = np.zeros(n, dtype=np.float64)
        else:
            base_speeds = np.array(base_speeds, dtype=np.float64).reshape(-1)

        if velocities.shape[0] != n or base_speeds.shape[0] != n:
            raise ValueError(
                f"Mismatched star arrays: {n} positions, "
                f"{velocities.shape[0]} velocities, {base_speeds.shape[0]} base speeds"
            )

        self.positions = positions
        self.velocities = velocities
        self.base_speeds = base_speeds

    @classmethod
    def from_stars(cls, stars: Iterable[Star]) -> "StarPopulation":
        """Build a population from explicit Star records."""
        stars = list(stars)
        if not stars:
            return cls(np.zeros((0, 3)))
        return cls(
            positions=[s.position for s in stars],
            velocities=[s.velocity for s in stars],
            base_speeds=[s.base_speed for s in stars],
        )

    def __len__(self) -> int:
        return self.positions.shape[0]

    def __getitem__(self, index: int) -> Star:
        return Star(
            position=tuple(float(c) for c in self.positions[index]),
            velocity=tuple(float(c) for c in self.velocities[index]),
            base_speed=float(self.base_speeds[index]),
        )

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def set_star(self, index: int, star: Star) -> None:
        """Overwrite one star in place."""
        if len(star.position) != 3 or len(star.velocity) != 3:
            raise ValueError("Star position and velocity must have 3 components")
        self.positions[index] = star.position
        self.velocities[index] = star.velocity
        self.base_speeds[index] = star.base_speed

    @property
    def xy(self) -> np.ndarray:
        """Simulation plane coordinates [N, 2] (a view, not a copy)."""
        return self.positions[:, :2]

    def copy(self) -> "StarPopulation":
        """Deep copy of all arrays."""
        return StarPopulation(
            self.positions.copy(),
            self.velocities.copy(),
            self.base_speeds.copy(),
        )


def create_population(
    config: "StarfieldConfig",
    rng: np.random.Generator,
) -> StarPopulation:
    """
    Spawn the startup population.

    x and y cover the full extent and z covers half of it, so the first
    frame already shows a populated field rather than a cluster at the
    origin. Every star starts at rest with a sampled base speed.
    """
    n = config.num_stars

    positions = np.empty((n, 3), dtype=np.float64)
    positions[:, 0] = sample_uniform(rng, config.space_range, n)
    positions[:, 1] = sample_uniform(rng, config.space_range, n)
    positions[:, 2] = sample_uniform(rng, config.half_space_range, n)

    population = spawn_stars(positions, config, rng)
    logger.debug("Spawned %d stars over extent %.1f", n, config.space_extent)
    return population


def spawn_stars(
    positions: Iterable[Vec3] | np.ndarray,
    config: "StarfieldConfig",
    rng: np.random.Generator,
) -> StarPopulation:
    """Build a population of stars at rest at the given positions via Star.spawn."""
    return StarPopulation.from_stars(Star.spawn(p, config, rng) for p in positions)
