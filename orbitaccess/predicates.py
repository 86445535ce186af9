"""
.. module:: orbitaccess.predicates
   :synopsis: Boolean conditions of a satellite evaluated at an instant.

Every predicate is a callable ``predicate(elapsed) -> bool`` where ``elapsed``
is the time since the start of the analysis window, in seconds. The
predicates are consumed by :class:`orbitaccess.intervalfinder.IntervalFinder`.

The predicates that propagate the orbit advance the state of the propagator
they hold; an instance must not be shared between concurrent analyses.
"""

from typing import Callable, Optional

import numpy as np

from .base import EnumBase, ReferenceFrame, WGS84_EARTH_EQUATORIAL_RADIUS
from .frames import frame_transform as default_frame_transform
from .lighting import LightingCondition, lighting_condition, sun_position_gcrf
from .time import AbsoluteDate
from .utils import calculate_elevation_angles


class EclipseCondition(EnumBase):
    """Lighting conditions for which the eclipse predicate is true.

    Attributes:
        UMBRA (str): Satellite in the umbra.
        PENUMBRA (str): Satellite in the penumbra.
        ECLIPSE (str): Satellite in the umbra or the penumbra.
        SUNLIGHT (str): Satellite in full sunlight.
    """

    UMBRA = "UMBRA"
    PENUMBRA = "PENUMBRA"
    ECLIPSE = "ECLIPSE"
    SUNLIGHT = "SUNLIGHT"

    def matches(self, condition: LightingCondition) -> bool:
        """True if the lighting condition satisfies this eclipse condition."""
        if self == EclipseCondition.ECLIPSE:
            return condition != LightingCondition.SUNLIGHT
        return condition.value == self.value


class Comparison(EnumBase):
    """Comparison of a quantity against a threshold."""

    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"

    def compare(self, value: float, threshold: float) -> bool:
        """Evaluate ``value <op> threshold``."""
        if self == Comparison.GREATER:
            return value > threshold
        if self == Comparison.GREATER_EQUAL:
            return value >= threshold
        if self == Comparison.LESS:
            return value < threshold
        return value <= threshold


class VisibilityPredicate:
    """Visibility of the satellite from a set of targets (ground stations or
    facilities).

    At each evaluation the orbit is propagated, the satellite position is
    rotated into the targets frame, and the elevation of the satellite above
    the local horizon of each target is compared with the minimum elevation.
    The per-target results are written in place into the `visibility` vector,
    which is then combined into one boolean by the reduction.

    Attributes:
        visibility (np.ndarray): Boolean visibility vector, one element per
                    target. It is overwritten at every evaluation.
        num_evaluations (int): Number of evaluations so far.
    """

    def __init__(
        self,
        propagator,
        target_positions: np.ndarray,
        target_zeniths: np.ndarray,
        min_elevations_deg,
        source_frame: ReferenceFrame,
        target_frame: ReferenceFrame,
        window_start: AbsoluteDate,
        start_offset: float = 0.0,
        reduction: Callable[[np.ndarray], bool] = np.any,
        frame_transform: Optional[Callable] = None,
        dtype: type = np.float64,
    ):
        """
        Args:
            propagator: Propagator with the `propagate_to(elapsed)` method.
            target_positions (np.ndarray): (N, 3) target positions [km] in `target_frame`.
            target_zeniths (np.ndarray): (N, 3) unit local zenith of each target.
            min_elevations_deg (float or np.ndarray): Minimum elevation [deg],
                        a scalar or one value per target.
            source_frame (ReferenceFrame): Output frame of the propagator.
            target_frame (ReferenceFrame): Frame of the targets (Earth-fixed).
            window_start (AbsoluteDate): Start of the analysis window.
            start_offset (float): Window start after the propagator epoch [s].
            reduction (Callable[[np.ndarray], bool]): Combines the visibility
                        vector into one boolean. Defaults to logical OR.
            frame_transform (Callable, optional): Function
                        `(from_frame, to_frame, date) -> Rotation`.
                        Defaults to :func:`orbitaccess.frames.frame_transform`.
            dtype (type): Floating-point type of the computation.

        Raises:
            ValueError: If there is no target or the array shapes do not agree.
        """
        self.dtype = dtype
        self.target_positions = np.atleast_2d(
            np.asarray(target_positions, dtype=dtype)
        )
        self.target_zeniths = np.atleast_2d(np.asarray(target_zeniths, dtype=dtype))
        num_targets = self.target_positions.shape[0]
        if num_targets == 0:
            raise ValueError("At least one target is required.")
        if self.target_positions.shape != (num_targets, 3) or (
            self.target_zeniths.shape != self.target_positions.shape
        ):
            raise ValueError(
                "Target positions and zeniths must be arrays of shape (N, 3)."
            )
        self.min_elevations_deg = np.broadcast_to(
            np.asarray(min_elevations_deg, dtype=dtype), (num_targets,)
        ).copy()

        self.propagator = propagator
        self.source_frame = source_frame
        self.target_frame = target_frame
        self.window_start = window_start
        self.start_offset = float(start_offset)
        self.reduction = reduction
        self.frame_transform = (
            frame_transform if frame_transform is not None else default_frame_transform
        )
        self.visibility = np.zeros(num_targets, dtype=bool)
        self.num_evaluations = 0

    def __call__(self, elapsed: float) -> bool:
        position, _ = self.propagator.propagate_to(self.start_offset + elapsed)
        rotation = self.frame_transform(
            self.source_frame, self.target_frame, self.window_start + elapsed
        )
        position = rotation.apply(np.asarray(position, dtype=float))
        elevations = calculate_elevation_angles(
            self.target_positions, self.target_zeniths, position, self.dtype
        )
        np.greater_equal(elevations, self.min_elevations_deg, out=self.visibility)
        self.num_evaluations += 1
        return bool(self.reduction(self.visibility))


class EclipsePredicate:
    """True when the lighting condition of the satellite satisfies an
    :class:`EclipseCondition`."""

    def __init__(
        self,
        propagator,
        window_start: AbsoluteDate,
        condition: EclipseCondition = EclipseCondition.ECLIPSE,
        source_frame: ReferenceFrame = ReferenceFrame.TEME,
        start_offset: float = 0.0,
        sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
        frame_transform: Optional[Callable] = None,
        earth_radius: float = WGS84_EARTH_EQUATORIAL_RADIUS,
        dtype: type = np.float64,
    ):
        """
        Args:
            propagator: Propagator with the `propagate_to(elapsed)` method.
            window_start (AbsoluteDate): Start of the analysis window.
            condition (EclipseCondition): Condition for which the predicate is true.
            source_frame (ReferenceFrame): Output frame of the propagator.
            start_offset (float): Window start after the propagator epoch [s].
            sun_position (Callable, optional): Function `date -> Earth-to-Sun
                        vector [km] in GCRF`. Defaults to
                        :func:`orbitaccess.lighting.sun_position_gcrf`.
            frame_transform (Callable, optional): Function
                        `(from_frame, to_frame, date) -> Rotation`.
            earth_radius (float): Radius of the spherical Earth [km].
            dtype (type): Floating-point type of the computation.
        """
        condition_ = EclipseCondition.get(condition)
        if condition_ is None:
            raise ValueError(f"Unknown eclipse condition: {condition}")
        self.propagator = propagator
        self.window_start = window_start
        self.condition = condition_
        self.source_frame = source_frame
        self.start_offset = float(start_offset)
        self.sun_position = (
            sun_position if sun_position is not None else sun_position_gcrf
        )
        self.frame_transform = (
            frame_transform if frame_transform is not None else default_frame_transform
        )
        self.earth_radius = earth_radius
        self.dtype = dtype

    def lighting_condition_at(self, elapsed: float) -> LightingCondition:
        """Lighting condition of the satellite `elapsed` seconds after the window start."""
        position, _ = self.propagator.propagate_to(self.start_offset + elapsed)
        date = self.window_start + elapsed
        rotation = self.frame_transform(self.source_frame, ReferenceFrame.GCRF, date)
        position = rotation.apply(np.asarray(position, dtype=float))
        return lighting_condition(
            np.asarray(position, dtype=self.dtype),
            np.asarray(self.sun_position(date), dtype=self.dtype),
            self.earth_radius,
        )

    def __call__(self, elapsed: float) -> bool:
        return self.condition.matches(self.lighting_condition_at(elapsed))


class ThresholdPredicate:
    """Comparison of a scalar quantity (for example the beta angle) against a
    fixed threshold."""

    def __init__(
        self,
        quantity: Callable[[float], float],
        threshold: float,
        comparison: Comparison = Comparison.GREATER_EQUAL,
        absolute: bool = False,
    ):
        """
        Args:
            quantity (Callable[[float], float]): Function of the elapsed time [s].
            threshold (float): Threshold value.
            comparison (Comparison): Comparison operator. Defaults to GREATER_EQUAL.
            absolute (bool): If True, the absolute value of the quantity is compared.
        """
        comparison_ = Comparison.get(comparison)
        if comparison_ is None:
            raise ValueError(f"Unknown comparison: {comparison}")
        self.quantity = quantity
        self.threshold = threshold
        self.comparison = comparison_
        self.absolute = absolute

    def __call__(self, elapsed: float) -> bool:
        value = self.quantity(elapsed)
        if self.absolute:
            value = abs(value)
        return bool(self.comparison.compare(value, self.threshold))
