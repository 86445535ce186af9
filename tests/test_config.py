"""Unit tests for orbitaccess.config module."""

import unittest

import numpy as np

from orbitaccess.base import Precision
from orbitaccess.config import AccessOptions, Reduction, resolve_options


class TestReduction(unittest.TestCase):
    """Test the Reduction enumeration."""

    def test_to_function(self):
        visibility = np.array([True, False, True])
        self.assertTrue(Reduction.ANY.to_function()(visibility))
        self.assertFalse(Reduction.ALL.to_function()(visibility))
        self.assertTrue(Reduction.ALL.to_function()(np.ones(3, dtype=bool)))


class TestAccessOptions(unittest.TestCase):
    """Test the AccessOptions class."""

    def test_defaults(self):
        options = AccessOptions()
        self.assertEqual(options.min_elevation_deg, 10.0)
        self.assertIs(options.reduction, np.any)
        self.assertEqual(options.step, 60.0)
        self.assertEqual(options.start_offset, 0.0)
        self.assertEqual(options.crossing_tolerance, 1e-3)
        self.assertEqual(options.max_crossing_iterations, 100)
        self.assertEqual(options.precision, Precision.FLOAT64)
        self.assertIs(options.dtype, np.float64)

    def test_named_values(self):
        options = AccessOptions(reduction="all", precision="float32")
        self.assertIs(options.reduction, np.all)
        self.assertEqual(options.precision, Precision.FLOAT32)
        self.assertIs(options.dtype, np.float32)

    def test_callable_reduction(self):
        def majority(visibility):
            return np.count_nonzero(visibility) > visibility.size / 2

        options = AccessOptions(reduction=majority)
        self.assertIs(options.reduction, majority)
        with self.assertRaises(ValueError):
            options.to_dict()

    def test_from_dict(self):
        options = AccessOptions.from_dict(
            {
                "min_elevation_deg": 5.0,
                "reduction": "ALL",
                "step": 30,
                "start_offset": 120.0,
                "crossing_tolerance": 1e-4,
                "max_crossing_iterations": 50,
                "precision": "FLOAT32",
            }
        )
        self.assertEqual(options.min_elevation_deg, 5.0)
        self.assertIs(options.reduction, np.all)
        self.assertEqual(options.step, 30.0)
        self.assertEqual(options.start_offset, 120.0)
        self.assertEqual(options.crossing_tolerance, 1e-4)
        self.assertEqual(options.max_crossing_iterations, 50)
        self.assertEqual(options.precision, Precision.FLOAT32)

    def test_from_dict_partial(self):
        options = AccessOptions.from_dict({"step": 10.0})
        self.assertEqual(options.step, 10.0)
        self.assertEqual(options.min_elevation_deg, 10.0)
        self.assertEqual(AccessOptions.from_dict(None).to_dict(), AccessOptions().to_dict())

    def test_round_trip(self):
        options = AccessOptions(
            min_elevation_deg=-2.5,
            reduction="ALL",
            step=15.0,
            start_offset=3600.0,
            precision="FLOAT32",
        )
        dict_out = options.to_dict()
        self.assertEqual(AccessOptions.from_dict(dict_out).to_dict(), dict_out)
        self.assertEqual(dict_out["reduction"], "ALL")
        self.assertEqual(dict_out["precision"], "FLOAT32")

    def test_invalid_values(self):
        for kwargs in (
            {"min_elevation_deg": 90.1},
            {"min_elevation_deg": -91.0},
            {"step": 0.0},
            {"step": -60.0},
            {"start_offset": -1.0},
            {"crossing_tolerance": 0.0},
            {"max_crossing_iterations": 0},
            {"reduction": "MOST"},
            {"precision": "FLOAT16"},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    AccessOptions(**kwargs)

    def test_invalid_types(self):
        for kwargs in (
            {"min_elevation_deg": "10"},
            {"step": None},
            {"start_offset": True},
            {"reduction": 3},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(TypeError):
                    AccessOptions(**kwargs)


class TestResolveOptions(unittest.TestCase):
    """Test the resolve_options function."""

    def test_inputs(self):
        options = AccessOptions(step=5.0)
        self.assertIs(resolve_options(options), options)
        self.assertEqual(resolve_options({"step": 5.0}).step, 5.0)
        self.assertEqual(resolve_options(None).step, 60.0)
        with self.assertRaises(TypeError):
            resolve_options([("step", 5.0)])


if __name__ == "__main__":
    unittest.main()
