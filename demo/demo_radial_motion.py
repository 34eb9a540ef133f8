#!/usr/bin/env python3
"""
Demo: Speed Grows With Distance

Runs the starfield headless at a constant 60 fps dt and checks the
motion law after the last frame:

1. Every velocity points straight away from the origin
2. |v| / base_speed is linear in distance with slope k * dt
3. The population size never changes

Output: output/demo_radial/radial_motion.png
"""

from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from starfield.core import StarfieldConfig, StarfieldSimulation, calculate_velocity, make_rng
from starfield.analysis import (
    check_radial_alignment,
    compute_speed_profile,
    fit_acceleration_law,
)
from starfield.viz import plot_speed_profile, plot_starfield, save_figure


def main():
    print("=" * 60)
    print("  RADIAL MOTION STUDY")
    print("=" * 60)

    dt = 1.0 / 60.0
    n_frames = 600

    config = StarfieldConfig()
    sim = StarfieldSimulation(config=config, rng=make_rng(7))

    print(f"\n1. Running {n_frames} frames at dt={dt:.4f}...")
    stats = sim.run(n_frames, dt)
    print(f"   Stars: {stats['num_stars']} (started with {config.num_stars})")
    print(f"   Resets: {stats['total_resets']}")
    print(f"   Mean speed: {stats['mean_speed']:.2f}, max: {stats['max_speed']:.2f}")

    # Velocities at the end of a frame belong to the pre-move positions;
    # recompute so they match the positions we analyse.
    population = sim.population.copy()
    calculate_velocity(population, dt, config)

    print("\n2. Checking direction...")
    angle = check_radial_alignment(population)
    print(f"   Worst angle between v and r: {np.degrees(angle):.2e} deg")

    print("\n3. Fitting |v|/base_speed = slope * r + c ...")
    fit = fit_acceleration_law(population, dt, config)
    print(f"   slope = {fit.slope:.6f} (expected {fit.expected_slope:.6f})")
    print(f"   intercept = {fit.intercept:.2e}, R² = {fit.r_squared:.6f}")

    print("\n4. Creating visualization...")
    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    plot_starfield(population, config, ax=axes[0])
    axes[0].set_title(f"Frame {sim.frame_count}")
    fig.set_facecolor("white")

    radii, values = compute_speed_profile(population, n_bins=25, max_radius=config.space_extent)
    plot_speed_profile(radii, values, label="mean |v|", ax=axes[1], color="tab:blue")
    mean_base = population.base_speeds.mean()
    axes[1].plot(radii, fit.expected_slope * mean_base * radii, "--",
                 color="tab:red", label="r·k·dt·⟨base_speed⟩")
    axes[1].legend()
    axes[1].set_title("Speed vs distance")

    output_path = Path("output/demo_radial") / "radial_motion.png"
    save_figure(fig, output_path)
    plt.close(fig)
    print(f"   Saved: {output_path}")

    print("\n" + "=" * 60)
    print("  Radial motion study complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
