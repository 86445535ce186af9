"""Unit tests for orbitaccess.position module."""

import unittest
import random

import numpy as np
from astropy.coordinates import EarthLocation as Astropy_EarthLocation
import astropy.units as astropy_u

from orbitaccess.base import ReferenceFrame
from orbitaccess.position import (
    Cartesian3DPosition,
    GeographicPosition,
    ellipsoid_zenith,
    geodetic_to_cartesian,
    geodetic_zenith,
)


class TestCartesian3DPosition(unittest.TestCase):
    """Test the Cartesian3DPosition class."""

    def setUp(self):
        self.x = round(random.uniform(-1e6, 1e6), 6)
        self.y = round(random.uniform(-1e6, 1e6), 6)
        self.z = round(random.uniform(-1e6, 1e6), 6)
        self.frame = ReferenceFrame.ITRF

    def test_initialization(self):
        pos = Cartesian3DPosition(self.x, self.y, self.z, self.frame)
        np.testing.assert_array_equal(pos.coords, [self.x, self.y, self.z])
        self.assertEqual(pos.frame, self.frame)

    def test_from_list(self):
        pos = Cartesian3DPosition.from_list([self.x, self.y, self.z], self.frame)
        np.testing.assert_array_equal(pos.to_numpy(), [self.x, self.y, self.z])
        with self.assertRaises(ValueError):
            Cartesian3DPosition.from_list([self.x, self.y], self.frame)

    def test_to_list(self):
        pos = Cartesian3DPosition(self.x, self.y, self.z, self.frame)
        self.assertEqual(pos.to_list(), [self.x, self.y, self.z])

    def test_from_dict(self):
        dict_in = {"x": self.x, "y": self.y, "z": self.z, "frame": "ITRF"}
        pos = Cartesian3DPosition.from_dict(dict_in)
        self.assertEqual(pos.to_list(), [self.x, self.y, self.z])
        self.assertEqual(pos.frame, ReferenceFrame.ITRF)

    def test_to_dict(self):
        pos = Cartesian3DPosition(self.x, self.y, self.z, self.frame)
        self.assertEqual(
            pos.to_dict(), {"x": self.x, "y": self.y, "z": self.z, "frame": "ITRF"}
        )

    def test_invalid(self):
        with self.assertRaises(ValueError):
            Cartesian3DPosition("1", 2.0, 3.0, self.frame)
        with self.assertRaises(ValueError):
            Cartesian3DPosition(1.0, 2.0, 3.0, "ITRF")


class TestGeographicPosition(unittest.TestCase):
    """Test the GeographicPosition class."""

    def setUp(self):
        self.latitude_degrees = round(random.uniform(-90, 90), 6)
        self.longitude_degrees = round(random.uniform(-180, 180), 6)
        self.elevation_m = round(random.uniform(0, 10000), 6)

    def test_initialization(self):
        pos = GeographicPosition(
            self.latitude_degrees, self.longitude_degrees, self.elevation_m
        )
        self.assertAlmostEqual(pos.latitude, self.latitude_degrees)
        self.assertAlmostEqual(pos.longitude, self.longitude_degrees)
        self.assertAlmostEqual(pos.elevation, self.elevation_m)

    def test_invalid_latitude(self):
        with self.assertRaises(ValueError):
            GeographicPosition(90.5, 0.0, 0.0)

    def test_from_dict(self):
        dict_in = {
            "latitude": self.latitude_degrees,
            "longitude": self.longitude_degrees,
            "elevation": self.elevation_m,
        }
        pos = GeographicPosition.from_dict(dict_in)
        self.assertAlmostEqual(pos.latitude, self.latitude_degrees)
        self.assertAlmostEqual(pos.longitude, self.longitude_degrees)
        self.assertAlmostEqual(pos.elevation, self.elevation_m)

    def test_to_dict(self):
        pos = GeographicPosition(
            self.latitude_degrees, self.longitude_degrees, self.elevation_m
        )
        dict_out = pos.to_dict()
        self.assertAlmostEqual(dict_out["latitude"], self.latitude_degrees)
        self.assertAlmostEqual(dict_out["longitude"], self.longitude_degrees)
        self.assertAlmostEqual(dict_out["elevation"], self.elevation_m)

    def test_itrs_xyz_astropy_validation(self):
        """Validate the ITRS position against astropy EarthLocation."""
        pos = GeographicPosition(
            self.latitude_degrees, self.longitude_degrees, self.elevation_m
        )
        location = Astropy_EarthLocation.from_geodetic(
            lon=self.longitude_degrees * astropy_u.deg,
            lat=self.latitude_degrees * astropy_u.deg,
            height=self.elevation_m * astropy_u.m,
            ellipsoid="WGS84",
        )
        expected = [
            location.x.to_value(astropy_u.km),
            location.y.to_value(astropy_u.km),
            location.z.to_value(astropy_u.km),
        ]
        np.testing.assert_allclose(pos.itrs_xyz, expected, atol=1e-6)

    def test_to_cartesian3d_position(self):
        pos = GeographicPosition(0.0, 90.0, 0.0)
        cartesian = pos.to_cartesian3d_position()
        self.assertEqual(cartesian.frame, ReferenceFrame.ITRF)
        np.testing.assert_allclose(cartesian.to_numpy(), [0.0, 6378.137, 0.0], atol=1e-6)


class TestGeodeticFunctions(unittest.TestCase):
    """Test the geodetic conversion and zenith functions."""

    def test_geodetic_to_cartesian(self):
        np.testing.assert_allclose(
            geodetic_to_cartesian(0.0, 0.0, 0.0), [6378.137, 0.0, 0.0], atol=1e-6
        )
        np.testing.assert_allclose(
            geodetic_to_cartesian(0.0, 0.0, 1000.0), [6379.137, 0.0, 0.0], atol=1e-6
        )
        np.testing.assert_allclose(
            geodetic_to_cartesian(-90.0, 0.0, 0.0), [0.0, 0.0, -6356.752314], atol=1e-5
        )

    def test_geodetic_zenith(self):
        np.testing.assert_allclose(geodetic_zenith(0.0, 0.0), [1.0, 0.0, 0.0], atol=1e-15)
        np.testing.assert_allclose(geodetic_zenith(0.0, 90.0), [0.0, 1.0, 0.0], atol=1e-15)
        np.testing.assert_allclose(geodetic_zenith(90.0, 0.0), [0.0, 0.0, 1.0], atol=1e-15)

    def test_ellipsoid_zenith_matches_geodetic_zenith(self):
        """Test that the gradient normal on the surface is the geodetic normal."""
        rng = random.Random(17)
        for _ in range(20):
            latitude = rng.uniform(-89.0, 89.0)
            longitude = rng.uniform(-180.0, 180.0)
            position = geodetic_to_cartesian(latitude, longitude, 0.0)
            np.testing.assert_allclose(
                ellipsoid_zenith(position), geodetic_zenith(latitude, longitude), atol=1e-8
            )

    def test_ellipsoid_zenith_at_center(self):
        with self.assertRaises(ValueError):
            ellipsoid_zenith(np.zeros(3))


if __name__ == "__main__":
    unittest.main()
