"""
Core simulation primitives.

This layer knows NOTHING about rendering, cameras or windows.
It only knows:
- The startup configuration (extent, population size, speed range)
- The star population stored as flat arrays
- The three per-frame stages (reset, velocity, integration)
- A frame driver that runs the stages in order
"""

from starfield.core.config import ConfigError, StarfieldConfig
from starfield.core.population import (
    Star,
    StarPopulation,
    create_population,
    make_rng,
    sample_uniform,
    spawn_stars,
)
from starfield.core.systems import (
    calculate_velocity,
    find_outside,
    move_stars,
    reset_stars,
)
from starfield.core.simulation import FrameClock, StarfieldSimulation

__all__ = [
    "ConfigError",
    "StarfieldConfig",
    "Star",
    "StarPopulation",
    "create_population",
    "make_rng",
    "sample_uniform",
    "spawn_stars",
    "calculate_velocity",
    "find_outside",
    "move_stars",
    "reset_stars",
    "FrameClock",
    "StarfieldSimulation",
]
