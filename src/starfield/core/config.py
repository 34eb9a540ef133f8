"""
Startup configuration for the starfield.

All values are fixed at process start. Nothing here is read or
re-validated per frame.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a StarfieldConfig violates a startup precondition."""


@dataclass
class StarfieldConfig:
    """Configuration for a starfield simulation."""

    num_stars: int = 1300  # Fixed population size
    space_extent: float = 1000.0  # Half-width E of the square region [-E, E]
    min_speed: float = 10.0  # Lower bound of the base speed interval
    max_speed: float = 80.0  # Upper bound of the base speed interval

    # Scales distance into acceleration. Stylised, not a force law.
    acceleration_multiplier: float = 1.0

    @property
    def space_range(self) -> tuple[float, float]:
        """Full extent (-E, E), used for bounds checks and the initial spawn."""
        return -self.space_extent, self.space_extent

    @property
    def half_space_range(self) -> tuple[float, float]:
        """Half extent (-E/2, E/2), used for respawn positions and initial z."""
        half = self.space_extent / 2.0
        return -half, half

    @property
    def speed_range(self) -> tuple[float, float]:
        """Closed interval base speeds are sampled from."""
        return self.min_speed, self.max_speed

    def validate(self) -> "StarfieldConfig":
        """
        Check startup preconditions.

        Returns:
            self, so construction and validation can be chained

        Raises:
            ConfigError: if any value is out of its allowed domain
        """
        problems = []

        if self.num_stars < 0:
            problems.append(f"num_stars must be >= 0, got {self.num_stars}")
        if not math.isfinite(self.space_extent) or self.space_extent <= 0:
            problems.append(f"space_extent must be finite and > 0, got {self.space_extent}")
        for name in ("min_speed", "max_speed"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                problems.append(f"{name} must be finite and >= 0, got {value}")
        if self.min_speed > self.max_speed:
            problems.append(
                f"min_speed ({self.min_speed}) must not exceed max_speed ({self.max_speed})"
            )
        if not math.isfinite(self.acceleration_multiplier) or self.acceleration_multiplier < 0:
            problems.append(
                "acceleration_multiplier must be finite and >= 0, "
                f"got {self.acceleration_multiplier}"
            )

        if problems:
            message = "; ".join(problems)
            logger.warning("Rejecting starfield config: %s", message)
            raise ConfigError(message)

        return self
