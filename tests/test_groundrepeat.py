"""Unit tests for orbitaccess.groundrepeat module."""

import unittest

import numpy as np

from orbitaccess.base import WGS84_EARTH_EQUATORIAL_RADIUS
from orbitaccess.config import AccessOptions
from orbitaccess.groundrepeat import (
    _j2_mean_angular_velocity,
    _raan_time_derivative,
    ground_repeating_orbit_adjacent_track_angle,
    ground_repeating_orbit_adjacent_track_distance,
)

# Sun-synchronous orbit with 14.4 revolutions per day, repeating after 5 days.
SSO = (7130.982, 0.001111, 98.405, 5)


class TestJ2Rates(unittest.TestCase):
    """Tests for the secular J2 rates."""

    def test_sun_synchronous(self):
        a, e, inclination_deg, _ = SSO
        i = np.radians(inclination_deg)
        period = 2.0 * np.pi / _j2_mean_angular_velocity(a, e, i, np.float64)
        self.assertAlmostEqual(period, 6000.0, delta=3.0)
        # The node follows the mean Sun, one turn per year.
        raan_rate = _raan_time_derivative(a, e, i, np.float64)
        self.assertAlmostEqual(raan_rate, 2.0 * np.pi / (365.2422 * 86400.0), delta=5e-9)

    def test_polar_orbit_has_no_node_drift(self):
        self.assertAlmostEqual(
            _raan_time_derivative(7000.0, 0.0, np.pi / 2, np.float64), 0.0, places=15
        )


class TestAdjacentTrackDistance(unittest.TestCase):
    """Tests for the ground_repeating_orbit_adjacent_track_distance function."""

    def test_sun_synchronous(self):
        # 72 tracks around the Equator, crossed with the ground track inclination.
        distance = ground_repeating_orbit_adjacent_track_distance(*SSO)
        self.assertAlmostEqual(distance, 550.6, delta=2.0)
        self.assertLess(distance, 2.0 * np.pi * WGS84_EARTH_EQUATORIAL_RADIUS / 72.0)

    def test_longer_cycle_halves_distance(self):
        a, e, inclination_deg, _ = SSO
        five_days = ground_repeating_orbit_adjacent_track_distance(a, e, inclination_deg, 5)
        ten_days = ground_repeating_orbit_adjacent_track_distance(a, e, inclination_deg, 10)
        self.assertAlmostEqual(ten_days / five_days, 0.5, delta=1e-3)

    def test_float32(self):
        distance = ground_repeating_orbit_adjacent_track_distance(
            *SSO, options={"precision": "FLOAT32"}
        )
        self.assertAlmostEqual(
            distance, ground_repeating_orbit_adjacent_track_distance(*SSO), delta=0.05
        )

    def test_invalid(self):
        a, e, inclination_deg, cycle = SSO
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(6000.0, e, inclination_deg, cycle)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(a, 0.2, inclination_deg, cycle)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(a, 1.0, inclination_deg, cycle)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(a, -0.1, inclination_deg, cycle)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(a, e, 0.0, cycle)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(a, e, 180.0, cycle)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(a, e, inclination_deg, 0)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(a, e, inclination_deg, 2.5)


class TestAdjacentTrackAngle(unittest.TestCase):
    """Tests for the ground_repeating_orbit_adjacent_track_angle function."""

    def test_sun_synchronous(self):
        a = SSO[0]
        radius = WGS84_EARTH_EQUATORIAL_RADIUS
        beta = ground_repeating_orbit_adjacent_track_distance(*SSO) / (2.0 * radius)
        # Half angle at the satellite, from the position of the ground track
        # point relative to the satellite.
        expected = 2.0 * np.degrees(
            np.arctan2(radius * np.sin(beta), a - radius * np.cos(beta))
        )
        angle = ground_repeating_orbit_adjacent_track_angle(*SSO)
        self.assertAlmostEqual(angle, expected, places=6)
        self.assertAlmostEqual(angle, 39.9, delta=0.5)
        # Seen from the satellite, the tracks are wider apart than from the
        # Earth center.
        self.assertGreater(angle, 2.0 * np.degrees(beta))

    def test_float32(self):
        angle = ground_repeating_orbit_adjacent_track_angle(
            *SSO, options=AccessOptions(precision="FLOAT32")
        )
        self.assertAlmostEqual(
            angle, ground_repeating_orbit_adjacent_track_angle(*SSO), delta=0.01
        )

    def test_invalid(self):
        a, e, inclination_deg, cycle = SSO
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_angle(
                WGS84_EARTH_EQUATORIAL_RADIUS, 0.0, inclination_deg, cycle
            )
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_angle(a, e, 0.0, cycle)
        with self.assertRaises(ValueError):
            ground_repeating_orbit_adjacent_track_angle(a, e, inclination_deg, -1)


if __name__ == "__main__":
    unittest.main()
