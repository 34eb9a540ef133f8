"""
Frame driver: runs reset, velocity and integration once per frame.

The host (a render loop, an animation callback, a test) owns the clock
and calls step(dt). The stage order is fixed so that a star respawned
this frame gets a velocity computed from its new position before it
moves.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field

import numpy as np

from starfield.core.config import ConfigError, StarfieldConfig
from starfield.core.population import StarPopulation, create_population, make_rng
from starfield.core.systems import calculate_velocity, move_stars, reset_stars

logger = logging.getLogger(__name__)


class FrameClock:
    """
    Host-side time source.

    tick() returns seconds since the previous tick; the first tick
    returns 0.
    """

    def __init__(self, timer=time.perf_counter):
        self._timer = timer
        self._last: float | None = None

    def tick(self) -> float:
        now = self._timer()
        dt = 0.0 if self._last is None else now - self._last
        self._last = now
        return max(dt, 0.0)

    def reset(self) -> None:
        self._last = None


@dataclass
class StarfieldSimulation:
    """
    Owns the star population for its whole lifetime.

    The population is spawned from config at construction unless one is
    passed in explicitly.
    """

    config: StarfieldConfig = field(default_factory=StarfieldConfig)
    rng: np.random.Generator = field(default_factory=make_rng)
    population: StarPopulation | None = None

    # Simulation state
    frame_count: int = field(default=0, init=False)
    total_resets: int = field(default=0, init=False)
    elapsed_time: float = field(default=0.0, init=False)

    def __post_init__(self):
        """Validate config and spawn the population."""
        self.config.validate()
        if self.population is None:
            self.population = create_population(self.config, self.rng)
        else:
            self._check_base_speeds()
        logger.info(
            "Starfield ready: %d stars, extent %.1f, speeds %s",
            len(self.population),
            self.config.space_extent,
            self.config.speed_range,
        )

    def _check_base_speeds(self) -> None:
        """Reject an explicit population with base speeds outside the range."""
        low, high = self.config.speed_range
        speeds = self.population.base_speeds
        bad = ~((speeds >= low) & (speeds <= high))
        if np.any(bad):
            message = (
                f"{int(np.count_nonzero(bad))} stars have base_speed outside "
                f"[{low}, {high}]; create stars with Star.spawn or spawn_stars"
            )
            logger.warning("Rejecting star population: %s", message)
            raise ConfigError(message)

    @property
    def num_stars(self) -> int:
        return len(self.population)

    def step(self, dt: float) -> dict:
        """
        Advance one frame.

        Args:
            dt: Seconds since the previous frame (>= 0, not NaN, not clamped)

        Returns:
            Per-frame statistics dictionary
        """
        if not dt >= 0:
            raise ValueError(f"dt must be non-negative, got {dt}")

        n_reset = reset_stars(self.population, self.config, self.rng)
        calculate_velocity(self.population, dt, self.config)
        move_stars(self.population, dt)

        self.frame_count += 1
        self.total_resets += n_reset
        self.elapsed_time += dt

        speeds = np.linalg.norm(self.population.velocities, axis=1)
        return {
            "frame": self.frame_count,
            "dt": dt,
            "n_reset": n_reset,
            "mean_speed": float(speeds.mean()) if len(speeds) else 0.0,
            "max_speed": float(speeds.max()) if len(speeds) else 0.0,
        }

    def run(self, n_frames: int, dt: float) -> dict:
        """
        Run a fixed number of frames at a constant dt.

        Returns:
            Aggregate statistics dictionary
        """
        resets_before = self.total_resets
        stats = {"mean_speed": 0.0, "max_speed": 0.0}
        for _ in range(n_frames):
            stats = self.step(dt)

        return {
            "n_frames": n_frames,
            "total_resets": self.total_resets - resets_before,
            "mean_speed": stats["mean_speed"],
            "max_speed": stats["max_speed"],
            "num_stars": self.num_stars,
        }
