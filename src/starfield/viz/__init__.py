"""
Visualization utilities.

- Starfield snapshots (white points on black, z as parallax depth)
- Live animation driving the simulation once per drawn frame
- Radial speed profiles
"""

from starfield.viz.starfield import (
    animate_starfield,
    depth_weights,
    plot_speed_profile,
    plot_starfield,
    save_figure,
)

__all__ = [
    "animate_starfield",
    "depth_weights",
    "plot_speed_profile",
    "plot_starfield",
    "save_figure",
]
