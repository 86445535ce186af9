"""Unit tests for orbitaccess.predicates module."""

import unittest

import numpy as np
from scipy.spatial.transform import Rotation

from orbitaccess.base import ReferenceFrame, WGS84_EARTH_EQUATORIAL_RADIUS
from orbitaccess.lighting import LightingCondition
from orbitaccess.predicates import (
    Comparison,
    EclipseCondition,
    EclipsePredicate,
    ThresholdPredicate,
    VisibilityPredicate,
)
from orbitaccess.time import AbsoluteDate

EPOCH = AbsoluteDate.from_iso("2025-03-17T00:00:00.000")
ORBIT_RADIUS = 7000.0  # km
ORBIT_PERIOD = 6000.0  # s
SUN_DISTANCE = 1.496e8  # km


class CircularOrbitPropagator:
    """Equatorial circular orbit whose phase is zero `phase_time` seconds after the epoch."""

    def __init__(self, phase_time=0.0):
        self.phase_time = phase_time
        self.calls = []

    def epoch(self):
        return EPOCH

    def propagate_to(self, elapsed):
        self.calls.append(elapsed)
        angle = 2.0 * np.pi * (elapsed - self.phase_time) / ORBIT_PERIOD
        speed = 2.0 * np.pi * ORBIT_RADIUS / ORBIT_PERIOD
        position = ORBIT_RADIUS * np.array([np.cos(angle), np.sin(angle), 0.0])
        velocity = speed * np.array([-np.sin(angle), np.cos(angle), 0.0])
        return position, velocity


def identity_transform(from_frame, to_frame, date):  # pylint: disable=unused-argument
    return Rotation.identity()


def fixed_sun(date):  # pylint: disable=unused-argument
    return np.array([SUN_DISTANCE, 0.0, 0.0])


class TestEclipseCondition(unittest.TestCase):
    """Unit tests for the EclipseCondition enumeration."""

    def test_matches(self):
        self.assertTrue(EclipseCondition.UMBRA.matches(LightingCondition.UMBRA))
        self.assertFalse(EclipseCondition.UMBRA.matches(LightingCondition.PENUMBRA))
        self.assertTrue(EclipseCondition.PENUMBRA.matches(LightingCondition.PENUMBRA))
        self.assertTrue(EclipseCondition.ECLIPSE.matches(LightingCondition.UMBRA))
        self.assertTrue(EclipseCondition.ECLIPSE.matches(LightingCondition.PENUMBRA))
        self.assertFalse(EclipseCondition.ECLIPSE.matches(LightingCondition.SUNLIGHT))
        self.assertTrue(EclipseCondition.SUNLIGHT.matches(LightingCondition.SUNLIGHT))

    def test_get(self):
        self.assertEqual(EclipseCondition.get("umbra"), EclipseCondition.UMBRA)
        self.assertIsNone(EclipseCondition.get("twilight"))


class TestComparison(unittest.TestCase):
    """Unit tests for the Comparison enumeration."""

    def test_compare(self):
        self.assertTrue(Comparison.GREATER.compare(2.0, 1.0))
        self.assertFalse(Comparison.GREATER.compare(1.0, 1.0))
        self.assertTrue(Comparison.GREATER_EQUAL.compare(1.0, 1.0))
        self.assertTrue(Comparison.LESS.compare(0.5, 1.0))
        self.assertFalse(Comparison.LESS.compare(1.0, 1.0))
        self.assertTrue(Comparison.LESS_EQUAL.compare(1.0, 1.0))


class TestVisibilityPredicate(unittest.TestCase):
    """Unit tests for the VisibilityPredicate class."""

    def setUp(self):
        radius = WGS84_EARTH_EQUATORIAL_RADIUS
        # Station A below the orbit phase 0, station B below the phase 180 deg.
        self.positions = np.array([[radius, 0.0, 0.0], [-radius, 0.0, 0.0]])
        self.zeniths = np.array([[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])

    def make_predicate(self, propagator, **kwargs):
        kwargs.setdefault("min_elevations_deg", 10.0)
        return VisibilityPredicate(
            propagator,
            self.positions,
            self.zeniths,
            source_frame=ReferenceFrame.TEME,
            target_frame=ReferenceFrame.ITRF,
            window_start=EPOCH,
            frame_transform=identity_transform,
            **kwargs,
        )

    def test_visibility_vector(self):
        """Test the per-target visibility written at each evaluation."""
        predicate = self.make_predicate(CircularOrbitPropagator())
        self.assertTrue(predicate(0.0))
        np.testing.assert_array_equal(predicate.visibility, [True, False])
        self.assertTrue(predicate(ORBIT_PERIOD / 2))
        np.testing.assert_array_equal(predicate.visibility, [False, True])
        self.assertFalse(predicate(ORBIT_PERIOD / 4))
        np.testing.assert_array_equal(predicate.visibility, [False, False])
        self.assertEqual(predicate.num_evaluations, 3)

    def test_visibility_vector_reused(self):
        """Test that the visibility vector is overwritten in place."""
        predicate = self.make_predicate(CircularOrbitPropagator())
        buffer = predicate.visibility
        for elapsed in np.linspace(0.0, ORBIT_PERIOD, 13):
            predicate(elapsed)
            self.assertIs(predicate.visibility, buffer)
        self.assertEqual(predicate.visibility.dtype, bool)

    def test_reduction_all(self):
        predicate = self.make_predicate(CircularOrbitPropagator(), reduction=np.all)
        self.assertFalse(predicate(0.0))
        self.assertFalse(predicate(ORBIT_PERIOD / 2))

    def test_or_contains_and(self):
        """Test that the OR reduction is true whenever the AND reduction is."""
        any_predicate = self.make_predicate(CircularOrbitPropagator(), reduction=np.any)
        all_predicate = self.make_predicate(CircularOrbitPropagator(), reduction=np.all)
        for elapsed in np.linspace(0.0, ORBIT_PERIOD, 101):
            if all_predicate(elapsed):
                self.assertTrue(any_predicate(elapsed))

    def test_start_offset(self):
        """Test that the propagator is queried at the offset time."""
        propagator = CircularOrbitPropagator()
        predicate = self.make_predicate(propagator, start_offset=500.0)
        predicate(10.0)
        self.assertEqual(propagator.calls, [510.0])

    def test_frame_transform_arguments(self):
        calls = []

        def transform(from_frame, to_frame, date):
            calls.append((from_frame, to_frame, date))
            return Rotation.identity()

        predicate = VisibilityPredicate(
            CircularOrbitPropagator(),
            self.positions,
            self.zeniths,
            10.0,
            source_frame=ReferenceFrame.TEME,
            target_frame=ReferenceFrame.ITRF,
            window_start=EPOCH,
            frame_transform=transform,
        )
        predicate(60.0)
        self.assertEqual(calls[0][0], ReferenceFrame.TEME)
        self.assertEqual(calls[0][1], ReferenceFrame.ITRF)
        self.assertEqual(calls[0][2], EPOCH + 60.0)

    def test_rotated_target_frame(self):
        """Test that the satellite position is rotated into the target frame."""

        def half_turn(from_frame, to_frame, date):  # pylint: disable=unused-argument
            return Rotation.from_euler("z", 180.0, degrees=True)

        predicate = VisibilityPredicate(
            CircularOrbitPropagator(),
            self.positions,
            self.zeniths,
            10.0,
            source_frame=ReferenceFrame.TEME,
            target_frame=ReferenceFrame.ITRF,
            window_start=EPOCH,
            frame_transform=half_turn,
        )
        predicate(0.0)
        np.testing.assert_array_equal(predicate.visibility, [False, True])

    def test_per_target_min_elevation(self):
        """Test one minimum elevation per target."""
        predicate = self.make_predicate(
            CircularOrbitPropagator(), min_elevations_deg=[10.0, 95.0]
        )
        predicate(ORBIT_PERIOD / 2)
        np.testing.assert_array_equal(predicate.visibility, [False, False])

    def test_float32_precision(self):
        predicate = self.make_predicate(CircularOrbitPropagator(), dtype=np.float32)
        self.assertTrue(predicate(0.0))
        self.assertEqual(predicate.target_positions.dtype, np.float32)

    def test_invalid_shapes(self):
        with self.assertRaises(ValueError):
            VisibilityPredicate(
                CircularOrbitPropagator(),
                self.positions,
                self.zeniths[:1],
                10.0,
                ReferenceFrame.TEME,
                ReferenceFrame.ITRF,
                EPOCH,
            )
        with self.assertRaises(ValueError):
            VisibilityPredicate(
                CircularOrbitPropagator(),
                np.zeros((0, 3)),
                np.zeros((0, 3)),
                10.0,
                ReferenceFrame.TEME,
                ReferenceFrame.ITRF,
                EPOCH,
            )


class TestEclipsePredicate(unittest.TestCase):
    """Unit tests for the EclipsePredicate class."""

    def make_predicate(self, condition):
        return EclipsePredicate(
            CircularOrbitPropagator(),
            EPOCH,
            condition=condition,
            source_frame=ReferenceFrame.GCRF,
            sun_position=fixed_sun,
        )

    def test_lighting_condition_at(self):
        predicate = self.make_predicate(EclipseCondition.ECLIPSE)
        self.assertEqual(predicate.lighting_condition_at(0.0), LightingCondition.SUNLIGHT)
        self.assertEqual(
            predicate.lighting_condition_at(ORBIT_PERIOD / 4), LightingCondition.SUNLIGHT
        )
        self.assertEqual(
            predicate.lighting_condition_at(ORBIT_PERIOD / 2), LightingCondition.UMBRA
        )

    def test_conditions(self):
        self.assertTrue(self.make_predicate(EclipseCondition.ECLIPSE)(ORBIT_PERIOD / 2))
        self.assertTrue(self.make_predicate(EclipseCondition.UMBRA)(ORBIT_PERIOD / 2))
        self.assertFalse(self.make_predicate(EclipseCondition.SUNLIGHT)(ORBIT_PERIOD / 2))
        self.assertTrue(self.make_predicate(EclipseCondition.SUNLIGHT)(0.0))
        self.assertFalse(self.make_predicate("PENUMBRA")(0.0))

    def test_unknown_condition(self):
        with self.assertRaises(ValueError):
            self.make_predicate("DUSK")


class TestThresholdPredicate(unittest.TestCase):
    """Unit tests for the ThresholdPredicate class."""

    def test_comparisons(self):
        quantity = lambda t: t - 50.0  # pylint: disable=unnecessary-lambda-assignment
        predicate = ThresholdPredicate(quantity, 0.0)
        self.assertTrue(predicate(50.0))
        self.assertFalse(predicate(49.0))
        predicate = ThresholdPredicate(quantity, 0.0, comparison="LESS")
        self.assertTrue(predicate(49.0))
        self.assertFalse(predicate(50.0))

    def test_absolute(self):
        predicate = ThresholdPredicate(lambda t: -t, 10.0, absolute=True)
        self.assertTrue(predicate(20.0))
        self.assertFalse(predicate(5.0))

    def test_unknown_comparison(self):
        with self.assertRaises(ValueError):
            ThresholdPredicate(lambda t: t, 0.0, comparison="ABOUT")


if __name__ == "__main__":
    unittest.main()
