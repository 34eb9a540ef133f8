"""
Starfield rendering with matplotlib.

Stars are drawn as white points on a black background. z never enters
the simulation; here it only sets point size and brightness so nearer
stars read as larger and brighter.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from starfield.core.simulation import FrameClock

if TYPE_CHECKING:
    from matplotlib.collections import PathCollection
    from starfield.core.config import StarfieldConfig
    from starfield.core.population import StarPopulation
    from starfield.core.simulation import StarfieldSimulation


BACKGROUND = "black"
STAR_COLOR = (1.0, 1.0, 1.0)


def depth_weights(z: np.ndarray, extent: float) -> np.ndarray:
    """
    Map z in [-E/2, E/2] to a weight in [0.25, 1] (far to near).

    Values outside the range are clipped.
    """
    half = extent / 2.0
    t = (np.clip(z, -half, half) + half) / (2 * half)
    return 0.25 + 0.75 * t


def _star_style(
    population: "StarPopulation",
    extent: float,
    base_size: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Point sizes and RGBA colors for the current population."""
    w = depth_weights(population.positions[:, 2], extent)
    sizes = base_size * w
    colors = np.empty((len(w), 4))
    colors[:, :3] = STAR_COLOR
    colors[:, 3] = w
    return sizes, colors


def _style_axes(ax: Axes, extent: float) -> None:
    ax.set_facecolor(BACKGROUND)
    ax.figure.set_facecolor(BACKGROUND)
    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_visible(False)


def plot_starfield(
    population: "StarPopulation",
    config: "StarfieldConfig",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 8),
    base_size: float = 4.0,
    title: str = "",
) -> tuple[Figure, Axes, "PathCollection"]:
    """
    Draw a single frame of the starfield.

    Args:
        population: Stars to draw
        config: Provides the extent for axis limits and depth scaling
        ax: Existing axes (creates new if None)
        base_size: Marker area for the nearest stars
        title: Optional title (drawn in white)

    Returns:
        (fig, ax, scatter) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    _style_axes(ax, config.space_extent)
    sizes, colors = _star_style(population, config.space_extent, base_size)

    # Draw far stars first so near ones sit on top
    order = np.argsort(population.positions[:, 2])
    scatter = ax.scatter(
        population.positions[order, 0],
        population.positions[order, 1],
        s=sizes[order],
        c=colors[order],
        marker="o",
        linewidths=0,
    )

    if title:
        ax.set_title(title, color="white")

    return fig, ax, scatter


def _update_frame(
    simulation: "StarfieldSimulation",
    scatter: "PathCollection",
    dt: float,
    base_size: float = 4.0,
) -> tuple["PathCollection"]:
    """Step the simulation by dt and push the new stars into the scatter."""
    simulation.step(dt)

    population = simulation.population
    order = np.argsort(population.positions[:, 2])
    sizes, colors = _star_style(population, simulation.config.space_extent, base_size)
    scatter.set_offsets(population.positions[order, :2])
    scatter.set_sizes(sizes[order])
    scatter.set_facecolors(colors[order])
    return (scatter,)


def animate_starfield(
    simulation: "StarfieldSimulation",
    interval_ms: int = 16,
    clock: FrameClock | None = None,
    fixed_dt: float | None = None,
    frames: int | None = None,
    figsize: tuple[float, float] = (8, 8),
    base_size: float = 4.0,
) -> tuple[Figure, FuncAnimation]:
    """
    Animate the starfield, stepping the simulation once per drawn frame.

    Each frame pulls dt from the clock (or uses fixed_dt when given, for
    reproducible recordings), runs simulation.step(dt), then pushes the
    new positions into the scatter.

    Args:
        simulation: The simulation to drive
        interval_ms: Delay between frames
        clock: Time source (default: a fresh FrameClock)
        fixed_dt: Constant dt per frame instead of wall-clock time
        frames: Number of frames (None runs until the window closes)

    Returns:
        (fig, animation) - keep a reference to the animation alive
    """
    if clock is None:
        clock = FrameClock()

    config = simulation.config
    fig, ax, scatter = plot_starfield(
        simulation.population, config, figsize=figsize, base_size=base_size
    )

    def update(_frame):
        dt = fixed_dt if fixed_dt is not None else clock.tick()
        return _update_frame(simulation, scatter, dt, base_size)

    def init():
        return (scatter,)

    animation = FuncAnimation(
        fig,
        update,
        init_func=init,
        frames=frames,
        interval=interval_ms,
        blit=False,
        cache_frame_data=False,
    )
    return fig, animation


def plot_speed_profile(
    radii: np.ndarray,
    values: np.ndarray,
    label: str = "",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 5),
    **plot_kwargs,
) -> tuple[Figure, Axes]:
    """
    Plot mean speed against distance from the origin.

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.plot(radii, values, label=label, **plot_kwargs)
    ax.set_xlabel("Distance from origin (r)")
    ax.set_ylabel("Mean speed")
    ax.grid(True, alpha=0.3)

    if label:
        ax.legend()

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    kwargs.setdefault("facecolor", fig.get_facecolor())
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
