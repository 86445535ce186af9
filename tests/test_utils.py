"""Unit tests for orbitaccess.utils module."""

import unittest

import numpy as np

from orbitaccess.utils import calculate_elevation_angles, normalize


class TestNormalize(unittest.TestCase):
    """Test the normalize function."""

    def test_normalize(self):
        np.testing.assert_allclose(normalize([3.0, 0.0, 4.0]), [0.6, 0.0, 0.8])

    def test_zero_vector(self):
        with self.assertRaises(ZeroDivisionError):
            normalize([0.0, 0.0, 0.0])


class TestElevationAngles(unittest.TestCase):
    """Test the calculate_elevation_angles function."""

    def setUp(self):
        self.observer = np.array([6378.137, 0.0, 0.0])
        self.zenith = np.array([1.0, 0.0, 0.0])

    def elevation(self, target, zenith=None):
        zenith = self.zenith if zenith is None else zenith
        return float(
            calculate_elevation_angles(
                np.array([self.observer]), np.array([zenith]), target
            )[0]
        )

    def test_zenith(self):
        self.assertAlmostEqual(self.elevation([7000.0, 0.0, 0.0]), 90.0)

    def test_horizon(self):
        self.assertAlmostEqual(self.elevation([6378.137, 1000.0, 0.0]), 0.0)

    def test_below_horizon(self):
        self.assertAlmostEqual(self.elevation([0.0, 0.0, 0.0]), -90.0)

    def test_forty_five_degrees(self):
        self.assertAlmostEqual(self.elevation([7378.137, 1000.0, 0.0]), 45.0)

    def test_zenith_direction(self):
        """Test that the elevation is measured from the given zenith direction."""
        self.assertAlmostEqual(
            self.elevation([6378.137, 1000.0, 0.0], zenith=[0.0, 1.0, 0.0]), 90.0
        )

    def test_several_observers(self):
        """Test observers spread along the Equator, looking at a target above
        the first of them."""
        longitudes = np.radians([0.0, 30.0, 90.0, 180.0])
        zeniths = np.column_stack(
            [np.cos(longitudes), np.sin(longitudes), np.zeros(len(longitudes))]
        )
        observers = 6378.137 * zeniths
        target = np.array([7000.0, 0.0, 0.0])
        elevations = calculate_elevation_angles(observers, zeniths, target)
        self.assertEqual(elevations.shape, (4,))
        self.assertAlmostEqual(elevations[0], 90.0)
        self.assertAlmostEqual(elevations[2], -np.degrees(np.arctan2(6378.137, 7000.0)))
        self.assertAlmostEqual(elevations[3], -90.0)
        self.assertTrue(np.all(np.diff(elevations) < 0.0))

    def test_float32(self):
        elevations = calculate_elevation_angles(
            np.array([self.observer]), np.array([[1.0, 0.0, 0.0]]), [7000.0, 0.0, 0.0],
            dtype=np.float32,
        )
        self.assertEqual(elevations.dtype, np.float32)
        self.assertAlmostEqual(float(elevations[0]), 90.0, places=3)

    def test_coincident(self):
        with self.assertRaises(ValueError):
            calculate_elevation_angles(
                np.array([self.observer]), np.array([[1.0, 0.0, 0.0]]), self.observer
            )


if __name__ == "__main__":
    unittest.main()
