"""
.. module:: orbitaccess.eclipsefinder
    :synopsis: Module to find eclipse times, i.e. the times at which a
                satellite is in the shadow of Earth.

The lighting condition is evaluated with a conical shadow model (umbra and
penumbra) of a spherical Earth, see :func:`orbitaccess.lighting.lighting_condition`.
The eclipse intervals are found with the same sampling and bisection
machinery as the ground station accesses.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from .base import ReferenceFrame
from .config import AccessOptions, resolve_options
from .intervalfinder import IntervalFinder, derive_gaps, intervals_to_dates
from .predicates import EclipseCondition, EclipsePredicate
from .time import AbsoluteDate

logger = logging.getLogger(__name__)


def _eclipse_accesses(
    propagator,
    duration: float,
    condition: Union[EclipseCondition, str],
    source_frame: ReferenceFrame,
    options: AccessOptions,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]],
    frame_transform: Optional[Callable],
) -> Tuple[AbsoluteDate, List[Tuple[float, float]]]:
    window_start = propagator.epoch() + options.start_offset
    predicate = EclipsePredicate(
        propagator,
        window_start,
        condition=condition,
        source_frame=source_frame,
        start_offset=options.start_offset,
        sun_position=sun_position,
        frame_transform=frame_transform,
        dtype=options.dtype,
    )
    logger.info(
        "Computing %s intervals from %s during %.1f s.",
        predicate.condition.value,
        window_start.to_iso(),
        duration,
    )
    return window_start, IntervalFinder.from_options(options).execute(
        predicate, duration
    )


def eclipse_intervals(
    propagator,
    duration: float,
    condition: Union[EclipseCondition, str] = EclipseCondition.ECLIPSE,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
    frame_transform: Optional[Callable] = None,
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Compute the intervals during which the satellite lighting condition
    satisfies `condition`.

    Only the `step`, `start_offset`, `crossing_tolerance`,
    `max_crossing_iterations` and `precision` options are used.

    Args:
        propagator: Propagator providing `epoch()` and `propagate_to(elapsed)`.
        duration (float): Duration of the analysis window [s].
        condition (Union[EclipseCondition, str]): UMBRA, PENUMBRA, ECLIPSE
                    (umbra or penumbra) or SUNLIGHT. Defaults to ECLIPSE.
        source_frame (ReferenceFrame): Output frame of the propagator. Defaults to TEME.
        options (Union[AccessOptions, dict, None]): Analysis options.
        sun_position (Callable, optional): Function `date -> Earth-to-Sun vector
                    [km] in GCRF`. Defaults to the astropy Sun position.
        frame_transform (Callable, optional): Frame transform function.

    Returns:
        List[Tuple[AbsoluteDate, AbsoluteDate]]: Start and end of each interval.
    """
    options = resolve_options(options)
    window_start, intervals = _eclipse_accesses(
        propagator,
        duration,
        condition,
        source_frame,
        options,
        sun_position,
        frame_transform,
    )
    return intervals_to_dates(intervals, window_start)


def eclipse_gaps(
    propagator,
    duration: float,
    condition: Union[EclipseCondition, str] = EclipseCondition.ECLIPSE,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
    frame_transform: Optional[Callable] = None,
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Compute the intervals during which the satellite lighting condition does
    not satisfy `condition`. The arguments are the same as in
    :func:`eclipse_intervals`.

    Returns:
        List[Tuple[AbsoluteDate, AbsoluteDate]]: Start and end of each gap.
    """
    options = resolve_options(options)
    window_start, intervals = _eclipse_accesses(
        propagator,
        duration,
        condition,
        source_frame,
        options,
        sun_position,
        frame_transform,
    )
    gaps = derive_gaps(intervals, 0.0, float(duration))
    return intervals_to_dates(gaps, window_start)


def eclipse_time_summary(
    propagator,
    duration: float,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    sun_position: Optional[Callable[[AbsoluteDate], np.ndarray]] = None,
    frame_transform: Optional[Callable] = None,
) -> Dict[str, float]:
    """Total time spent by the satellite in sunlight, penumbra and umbra
    during the analysis window.

    The umbra and the eclipse (umbra or penumbra) intervals are computed by
    two marches of the window, each on its own copy of the propagator, so the
    propagator must provide `copy()` and is left untouched. The penumbra time
    is the difference of the two totals.

    Returns:
        Dict[str, float]: Seconds spent in each condition, with the keys
                          "sunlight", "penumbra" and "umbra". The three values
                          add up to `duration`.
    """
    options = resolve_options(options)
    totals = {}
    for condition in (EclipseCondition.UMBRA, EclipseCondition.ECLIPSE):
        _, intervals = _eclipse_accesses(
            propagator.copy(),
            duration,
            condition,
            source_frame,
            options,
            sun_position,
            frame_transform,
        )
        totals[condition] = sum(end - start for start, end in intervals)

    umbra = totals[EclipseCondition.UMBRA]
    eclipse = max(totals[EclipseCondition.ECLIPSE], umbra)
    summary = {
        "sunlight": float(duration) - eclipse,
        "penumbra": eclipse - umbra,
        "umbra": umbra,
    }
    logger.info(
        "Eclipse summary: %.1f s sunlight, %.1f s penumbra, %.1f s umbra.",
        summary["sunlight"],
        summary["penumbra"],
        summary["umbra"],
    )
    return summary
