"""Unit tests for the reset, velocity and integration stages."""

import numpy as np
import pytest

from starfield.core.config import StarfieldConfig
from starfield.core.population import Star, StarPopulation, create_population
from starfield.core.systems import (
    calculate_velocity,
    find_outside,
    move_stars,
    reset_stars,
)


def _population(*positions, base_speed=50.0):
    return StarPopulation.from_stars(
        Star(position=p, base_speed=base_speed) for p in positions
    )


class TestFindOutside:
    """Tests for the bounds test."""

    def test_inside_and_edges(self):
        positions = np.array([
            [0.0, 0.0, 0.0],
            [1000.0, -1000.0, 0.0],  # On the boundary counts as inside
            [999.9, 999.9, 0.0],
        ])
        assert not np.any(find_outside(positions, 1000.0))

    def test_x_or_y_outside(self):
        positions = np.array([
            [1000.1, 0.0, 0.0],
            [0.0, -1200.0, 0.0],
            [-5000.0, 5000.0, 0.0],
        ])
        assert np.all(find_outside(positions, 1000.0))

    def test_z_is_ignored(self):
        positions = np.array([[0.0, 0.0, 1e9], [0.0, 0.0, -1e9]])
        assert not np.any(find_outside(positions, 1000.0))


class TestResetStars:
    """Tests for the boundary reset stage."""

    def test_outside_stars_land_in_half_extent(self, rng):
        cfg = StarfieldConfig()
        pop = _population((1200.0, 0.0, 0.0), (0.0, -3000.0, 10.0), (5e4, 5e4, 5e4))

        n = reset_stars(pop, cfg, rng)

        assert n == 3
        assert np.all(np.abs(pop.positions) <= cfg.space_extent / 2)
        assert np.all(pop.base_speeds >= cfg.min_speed)
        assert np.all(pop.base_speeds <= cfg.max_speed)

    def test_inside_stars_untouched(self, rng):
        cfg = StarfieldConfig()
        pop = _population((100.0, 200.0, 999.0), (1200.0, 0.0, 0.0), base_speed=123.0)
        before = pop.copy()

        n = reset_stars(pop, cfg, rng)

        assert n == 1
        assert np.array_equal(pop.positions[0], before.positions[0])
        assert pop.base_speeds[0] == 123.0
        assert cfg.min_speed <= pop.base_speeds[1] <= cfg.max_speed

    def test_nothing_outside_returns_zero(self, rng):
        cfg = StarfieldConfig()
        pop = _population((1.0, 2.0, 3.0))
        before = pop.copy()

        assert reset_stars(pop, cfg, rng) == 0
        assert np.array_equal(pop.positions, before.positions)
        assert np.array_equal(pop.base_speeds, before.base_speeds)

    def test_fresh_draws_per_axis(self, rng):
        cfg = StarfieldConfig()
        pop = _population(*[(2000.0, 0.0, 0.0)] * 50)

        reset_stars(pop, cfg, rng)

        assert len(np.unique(pop.positions)) == pop.positions.size
        assert len(np.unique(pop.base_speeds)) == 50

    def test_bounds_invariant_on_large_population(self, rng):
        cfg = StarfieldConfig()
        pop = create_population(cfg, rng)
        pop.positions *= 3.0  # Push most of the field outside

        reset_stars(pop, cfg, rng)
        outside_after = find_outside(pop.positions, cfg.space_extent)

        assert not np.any(outside_after)


class TestCalculateVelocity:
    """Tests for the velocity update stage."""

    def test_magnitude_formula(self):
        cfg = StarfieldConfig(acceleration_multiplier=1.0)
        pop = _population((300.0, 400.0, 0.0), base_speed=50.0)

        calculate_velocity(pop, 0.016, cfg)

        expected = 500.0 * 1.0 * 0.016 * 50.0
        assert np.isclose(np.linalg.norm(pop.velocities[0]), expected)
        assert np.allclose(pop.velocities[0], [0.6 * expected, 0.8 * expected, 0.0])

    def test_multiplier_scales_linearly(self):
        pop_a = _population((100.0, 0.0, 0.0))
        pop_b = _population((100.0, 0.0, 0.0))

        calculate_velocity(pop_a, 0.01, StarfieldConfig(acceleration_multiplier=1.0))
        calculate_velocity(pop_b, 0.01, StarfieldConfig(acceleration_multiplier=2.5))

        assert np.allclose(pop_b.velocities, 2.5 * pop_a.velocities)

    def test_z_excluded(self):
        cfg = StarfieldConfig()
        near = _population((30.0, 40.0, 0.0))
        deep = _population((30.0, 40.0, 450.0))

        calculate_velocity(near, 0.02, cfg)
        calculate_velocity(deep, 0.02, cfg)

        assert np.allclose(near.velocities, deep.velocities)
        assert deep.velocities[0, 2] == 0.0

    def test_origin_gives_zero_velocity(self):
        cfg = StarfieldConfig()
        pop = _population((0.0, 0.0, 0.0), (0.0, 0.0, 250.0))
        pop.velocities[:] = 5.0  # Stale values must be replaced

        calculate_velocity(pop, 0.016, cfg)

        assert np.all(pop.velocities == 0.0)
        assert np.all(np.isfinite(pop.velocities))

    def test_radial_direction(self, small_config, rng):
        pop = create_population(small_config, rng)
        calculate_velocity(pop, 0.016, small_config)

        xy = pop.positions[:, :2]
        vel = pop.velocities[:, :2]
        # Parallel: zero cross product; outward: positive dot product
        cross = xy[:, 0] * vel[:, 1] - xy[:, 1] * vel[:, 0]
        dot = np.einsum("ij,ij->i", xy, vel)
        scale = np.linalg.norm(xy, axis=1) * np.linalg.norm(vel, axis=1)
        assert np.allclose(cross / scale, 0.0, atol=1e-12)
        assert np.all(dot >= 0.0)

    def test_farther_is_faster(self):
        cfg = StarfieldConfig()
        pop = _population((10.0, 0.0, 0.0), (0.0, 200.0, 0.0), (-600.0, 600.0, 0.0))

        calculate_velocity(pop, 0.016, cfg)
        speeds = np.linalg.norm(pop.velocities, axis=1)

        assert speeds[0] <= speeds[1] <= speeds[2]

    def test_replaces_previous_velocity(self):
        cfg = StarfieldConfig()
        pop = _population((100.0, 0.0, 0.0))
        pop.velocities[0] = (-999.0, 999.0, 999.0)

        calculate_velocity(pop, 0.01, cfg)

        assert pop.velocities[0, 0] > 0.0
        assert pop.velocities[0, 1] == 0.0
        assert pop.velocities[0, 2] == 0.0

    def test_zero_dt_gives_zero_velocity(self):
        cfg = StarfieldConfig()
        pop = _population((100.0, 100.0, 0.0))
        calculate_velocity(pop, 0.0, cfg)
        assert np.all(pop.velocities == 0.0)


class TestMoveStars:
    """Tests for position integration."""

    def test_integration(self):
        pop = StarPopulation(
            positions=[[1.0, 2.0, 3.0], [-5.0, 0.0, 1.0]],
            velocities=[[10.0, -20.0, 0.0], [0.5, 0.5, 0.5]],
        )
        move_stars(pop, 0.1)
        assert np.allclose(pop.positions, [[2.0, 0.0, 3.0], [-4.95, 0.05, 1.05]])

    def test_independent_of_order(self, small_config, rng):
        pop = create_population(small_config, rng)
        calculate_velocity(pop, 0.016, small_config)

        perm = rng.permutation(len(pop))
        shuffled = StarPopulation(pop.positions[perm], pop.velocities[perm], pop.base_speeds[perm])

        move_stars(pop, 0.016)
        move_stars(shuffled, 0.016)

        assert np.allclose(shuffled.positions, pop.positions[perm])

    def test_velocity_not_modified(self):
        pop = StarPopulation([[0.0, 0.0, 0.0]], velocities=[[1.0, 2.0, 3.0]])
        move_stars(pop, 0.5)
        assert np.array_equal(pop.velocities, [[1.0, 2.0, 3.0]])


class TestEndToEndFrame:
    """A single frame on a star that has left the extent."""

    def test_scenario(self, rng):
        cfg = StarfieldConfig(space_extent=1000.0)
        pop = _population((1200.0, 0.0, 0.0))
        dt = 0.016

        reset_stars(pop, cfg, rng)
        assert np.all(np.abs(pop.positions[0]) <= 500.0)

        pop.base_speeds[0] = 50.0
        calculate_velocity(pop, dt, cfg)
        distance = np.hypot(pop.positions[0, 0], pop.positions[0, 1])
        assert np.isclose(np.linalg.norm(pop.velocities[0]), distance * 1.0 * dt * 50.0)

        before = pop.positions[0].copy()
        velocity = pop.velocities[0].copy()
        move_stars(pop, dt)
        assert np.allclose(pop.positions[0], before + velocity * dt)
