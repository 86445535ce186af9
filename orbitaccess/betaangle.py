"""
.. module:: orbitaccess.betaangle
    :synopsis: Beta angle of a satellite orbit and instants at which it
               crosses a threshold.

The beta angle is the angle between the orbital plane and the Sun vector. It
is positive when the Sun is on the side of the orbit normal ``r x v``.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from .base import ReferenceFrame
from .config import AccessOptions, resolve_options
from .frames import frame_transform as default_frame_transform
from .intervalfinder import IntervalFinder, interval_boundaries, intervals_to_dates
from .lighting import sun_position_gcrf
from .predicates import Comparison, ThresholdPredicate
from .time import AbsoluteDate
from .utils import normalize

logger = logging.getLogger(__name__)


def beta_angle(
    position: np.ndarray,
    velocity: np.ndarray,
    sun_position: np.ndarray,
    dtype: type = np.float64,
) -> float:
    """Beta angle of an orbit.

    Args:
        position (np.ndarray): Satellite position in an inertial frame.
        velocity (np.ndarray): Satellite velocity in the same frame.
        sun_position (np.ndarray): Earth-to-Sun vector in the same frame.
        dtype (type): Floating-point type of the computation.

    Returns:
        float: Beta angle in degrees, within [-90, 90].

    Raises:
        ZeroDivisionError: If the orbit normal or the Sun vector is zero.
    """
    orbit_normal = normalize(
        np.cross(np.asarray(position, dtype=dtype), np.asarray(velocity, dtype=dtype))
    )
    sun_direction = normalize(np.asarray(sun_position, dtype=dtype))
    sin_beta = np.clip(np.dot(orbit_normal, sun_direction), -1.0, 1.0)
    return float(np.degrees(np.arcsin(sin_beta)))


class BetaAngleFunction:
    """Beta angle of the propagated orbit as a function of the time elapsed
    since the window start."""

    def __init__(
        self,
        propagator,
        window_start: AbsoluteDate,
        source_frame: ReferenceFrame = ReferenceFrame.TEME,
        start_offset: float = 0.0,
        sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
        frame_transform: Optional[Callable] = None,
        dtype: type = np.float64,
    ):
        if ReferenceFrame.get(source_frame) == ReferenceFrame.ITRF:
            raise ValueError(
                "The beta angle requires the propagator state in an inertial frame."
            )
        self.propagator = propagator
        self.window_start = window_start
        self.source_frame = source_frame
        self.start_offset = float(start_offset)
        self.sun_position = (
            sun_position if sun_position is not None else sun_position_gcrf
        )
        self.frame_transform = (
            frame_transform if frame_transform is not None else default_frame_transform
        )
        self.dtype = dtype

    def __call__(self, elapsed: float) -> float:
        position, velocity = self.propagator.propagate_to(self.start_offset + elapsed)
        date = self.window_start + elapsed
        rotation = self.frame_transform(self.source_frame, ReferenceFrame.GCRF, date)
        return beta_angle(
            rotation.apply(np.asarray(position, dtype=float)),
            rotation.apply(np.asarray(velocity, dtype=float)),
            self.sun_position(date),
            self.dtype,
        )


def _beta_angle_accesses(
    propagator,
    threshold_deg: float,
    duration: float,
    comparison: Union[Comparison, str],
    absolute: bool,
    source_frame: ReferenceFrame,
    options: AccessOptions,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]],
    frame_transform: Optional[Callable],
) -> Tuple[AbsoluteDate, List[Tuple[float, float]]]:
    if not -90.0 <= threshold_deg <= 90.0:
        raise ValueError(
            f"Beta angle threshold must be within [-90, 90] degrees, got {threshold_deg}."
        )
    window_start = propagator.epoch() + options.start_offset
    quantity = BetaAngleFunction(
        propagator,
        window_start,
        source_frame=source_frame,
        start_offset=options.start_offset,
        sun_position=sun_position,
        frame_transform=frame_transform,
        dtype=options.dtype,
    )
    predicate = ThresholdPredicate(
        quantity, threshold_deg, comparison=comparison, absolute=absolute
    )
    logger.info(
        "Computing beta angle %s %.3f deg intervals from %s during %.1f s.",
        predicate.comparison.value,
        threshold_deg,
        window_start.to_iso(),
        duration,
    )
    return window_start, IntervalFinder.from_options(options).execute(
        predicate, duration
    )


def beta_angle_analysis(
    propagator,
    threshold_deg: float,
    duration: float,
    comparison: Union[Comparison, str] = Comparison.GREATER_EQUAL,
    absolute: bool = False,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
    frame_transform: Optional[Callable] = None,
) -> Tuple[List[Tuple[AbsoluteDate, AbsoluteDate]], List[AbsoluteDate]]:
    """Intervals during which ``beta <comparison> threshold_deg`` and the
    instants at which the beta angle crosses the threshold, from a single
    march of the analysis window.

    The arguments are the same as in :func:`beta_angle_intervals`.

    Returns:
        Tuple[List[Tuple[AbsoluteDate, AbsoluteDate]], List[AbsoluteDate]]:
            The intervals and the ordered crossing instants. The window
            bounds are never reported as crossings.

    Raises:
        ValueError: If the threshold is outside [-90, 90] degrees.
    """
    options = resolve_options(options)
    window_start, intervals = _beta_angle_accesses(
        propagator,
        threshold_deg,
        duration,
        comparison,
        absolute,
        source_frame,
        options,
        sun_position,
        frame_transform,
    )
    crossings = interval_boundaries(intervals, 0.0, float(duration))
    return (
        intervals_to_dates(intervals, window_start),
        [window_start + t for t in crossings],
    )


def beta_angle_intervals(
    propagator,
    threshold_deg: float,
    duration: float,
    comparison: Union[Comparison, str] = Comparison.GREATER_EQUAL,
    absolute: bool = False,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
    frame_transform: Optional[Callable] = None,
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Compute the intervals during which ``beta <comparison> threshold_deg``.

    The beta angle varies slowly (days), so a `step` option of several hours is
    usually appropriate.

    Args:
        propagator: Propagator providing `epoch()` and `propagate_to(elapsed)`.
        threshold_deg (float): Threshold in degrees, within [-90, 90].
        duration (float): Duration of the analysis window [s].
        comparison (Union[Comparison, str]): Comparison operator. Defaults to GREATER_EQUAL.
        absolute (bool): If True, the absolute beta angle is compared.
        source_frame (ReferenceFrame): Inertial output frame of the propagator.
        options (Union[AccessOptions, dict, None]): Analysis options.
        sun_position (Callable, optional): Function `date -> Earth-to-Sun vector
                    [km] in GCRF`. Defaults to the astropy Sun position.
        frame_transform (Callable, optional): Frame transform function.

    Returns:
        List[Tuple[AbsoluteDate, AbsoluteDate]]: Start and end of each interval.

    Raises:
        ValueError: If the threshold is outside [-90, 90] degrees.
    """
    intervals, _ = beta_angle_analysis(
        propagator,
        threshold_deg,
        duration,
        comparison=comparison,
        absolute=absolute,
        source_frame=source_frame,
        options=options,
        sun_position=sun_position,
        frame_transform=frame_transform,
    )
    return intervals


def beta_angle_crossings(
    propagator,
    threshold_deg: float,
    duration: float,
    comparison: Union[Comparison, str] = Comparison.GREATER_EQUAL,
    absolute: bool = False,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
    frame_transform: Optional[Callable] = None,
) -> List[AbsoluteDate]:
    """Instants at which the beta angle crosses the threshold during the
    analysis window. The arguments are the same as in :func:`beta_angle_intervals`.

    Returns:
        List[AbsoluteDate]: Ordered crossing instants. The window bounds are
                            never reported as crossings.
    """
    _, crossings = beta_angle_analysis(
        propagator,
        threshold_deg,
        duration,
        comparison=comparison,
        absolute=absolute,
        source_frame=source_frame,
        options=options,
        sun_position=sun_position,
        frame_transform=frame_transform,
    )
    return crossings
