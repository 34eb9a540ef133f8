#!/usr/bin/env python3
"""
Demo: Flying Through Space

Opens a window with the live starfield. Every drawn frame:

1. Stars that left the square [-E, E] respawn near the origin
2. Velocities are recomputed: radial, growing with distance
3. Positions advance by velocity * dt

Use --save to write an animated GIF instead of opening a window.

Output (with --save): output/demo_starfield/starfield.gif
"""

import argparse
import logging
from pathlib import Path

import matplotlib.pyplot as plt

from starfield.core import StarfieldConfig, StarfieldSimulation, make_rng
from starfield.viz import animate_starfield


def parse_args():
    parser = argparse.ArgumentParser(description="Animated radial starfield")
    parser.add_argument("--stars", type=int, default=1300, help="number of stars")
    parser.add_argument("--extent", type=float, default=1000.0, help="space half-width E")
    parser.add_argument("--min-speed", type=float, default=10.0)
    parser.add_argument("--max-speed", type=float, default=80.0)
    parser.add_argument("--accel", type=float, default=1.0, help="acceleration multiplier")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--save", action="store_true", help="write a GIF instead of showing")
    parser.add_argument("--frames", type=int, default=300, help="frames to record with --save")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    print("=" * 60)
    print("  STARFIELD")
    print("=" * 60)

    config = StarfieldConfig(
        num_stars=args.stars,
        space_extent=args.extent,
        min_speed=args.min_speed,
        max_speed=args.max_speed,
        acceleration_multiplier=args.accel,
    )
    sim = StarfieldSimulation(config=config, rng=make_rng(args.seed))
    print(f"\n   {sim.num_stars} stars, extent ±{config.space_extent:.0f}")
    print(f"   Base speed range: {config.speed_range}")

    interval_ms = max(1, int(1000 / args.fps))

    if args.save:
        # Fixed dt so the recording does not depend on render speed
        fig, anim = animate_starfield(
            sim, interval_ms=interval_ms, fixed_dt=1.0 / args.fps, frames=args.frames
        )
        output_dir = Path("output/demo_starfield")
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / "starfield.gif"
        print(f"\n   Recording {args.frames} frames...")
        anim.save(output_path, writer="pillow", fps=args.fps)
        plt.close(fig)
        print(f"   Saved: {output_path}")
    else:
        fig, anim = animate_starfield(sim, interval_ms=interval_ms)
        plt.show()

    print(f"\n   Frames: {sim.frame_count}, resets: {sim.total_resets}")


if __name__ == "__main__":
    main()
