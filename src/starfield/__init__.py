"""
starfield: radially accelerating starfield simulation

A fixed population of point-like stars flies outward from the origin,
accelerating with distance, and is recycled near the centre whenever a
star leaves the square region [-E, E] x [-E, E].

Each rendered frame runs three stages in a fixed order:
- Boundary reset: stars outside the extent respawn near the origin
- Velocity update: radial velocity from distance, dt and base speed
- Position integration: position += velocity * dt

The core knows nothing about rendering. The viz layer is a host that
drives the core once per drawn frame.
"""

__version__ = "0.1.0"
