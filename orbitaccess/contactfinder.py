"""
.. module:: orbitaccess.contactfinder
    :synopsis: Accesses and gaps between a satellite and ground stations or
    ground facilities.

The analysis window starts at the propagator epoch plus the `start_offset`
option and lasts `duration` seconds. The satellite is visible from a target
when its elevation above the target's local horizon is at least the minimum
elevation. With several targets, the per-target visibilities are combined by
the `reduction` option (by default the satellite is visible if any target
sees it).

Results are lists of ``(start, end)`` tuples of
:class:`orbitaccess.time.AbsoluteDate`.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .base import ReferenceFrame
from .config import AccessOptions, resolve_options
from .intervalfinder import IntervalFinder, derive_gaps, intervals_to_dates
from .position import Cartesian3DPosition, GeographicPosition, ellipsoid_zenith
from .predicates import VisibilityPredicate
from .resources import GroundFacility
from .time import AbsoluteDate

logger = logging.getLogger(__name__)

StationType = Union[
    GeographicPosition, Cartesian3DPosition, np.ndarray, Tuple[float, float, float]
]


def _is_number_triple(value: Any) -> bool:
    return len(value) == 3 and all(
        isinstance(e, (int, float, np.integer, np.floating)) for e in value
    )


def _is_single_station(stations: Any) -> bool:
    """True if the input describes one station rather than a list of them."""
    if isinstance(stations, (GeographicPosition, Cartesian3DPosition, GroundFacility)):
        return True
    if isinstance(stations, np.ndarray):
        return stations.ndim == 1
    if isinstance(stations, (tuple, list)):
        return _is_number_triple(stations)
    return False


def get_station_geometry(station: Any) -> Tuple[np.ndarray, np.ndarray]:
    """ITRF position [km] and local zenith of a ground station.

    Args:
        station: One of
            - :class:`GeographicPosition` or :class:`GroundFacility`,
            - :class:`Cartesian3DPosition` in the ITRF frame (or without frame),
            - numpy array or list of three numbers with the ITRF position
              in kilometers,
            - tuple ``(latitude [deg], longitude [deg], altitude [m])``.

    Returns:
        Tuple[np.ndarray, np.ndarray]: Position and unit zenith vector.

    Raises:
        TypeError: If the station type is not supported.
        ValueError: If a Cartesian position is not Earth-fixed.
    """
    if isinstance(station, (GroundFacility, GeographicPosition)):
        return station.itrs_xyz, station.zenith
    if isinstance(station, tuple) and _is_number_triple(station):
        geo_position = GeographicPosition(*station)
        return geo_position.itrs_xyz, geo_position.zenith
    if isinstance(station, Cartesian3DPosition):
        if station.frame not in (None, ReferenceFrame.ITRF):
            raise ValueError(
                "Cartesian station positions must be given in the ITRF frame."
            )
        position = station.to_numpy()
        return position, ellipsoid_zenith(position)
    if isinstance(station, np.ndarray) and station.shape == (3,):
        position = station.astype(float)
        return position, ellipsoid_zenith(position)
    if isinstance(station, list) and _is_number_triple(station):
        position = np.asarray(station, dtype=float)
        return position, ellipsoid_zenith(position)
    raise TypeError(f"Unsupported ground station type: {type(station).__name__}")


def _stations_geometry(stations: Any) -> Tuple[np.ndarray, np.ndarray]:
    if _is_single_station(stations):
        stations = [stations]
    elif isinstance(stations, np.ndarray):
        stations = list(stations)
    if len(stations) == 0:
        raise ValueError("At least one ground station is required.")
    geometry = [get_station_geometry(station) for station in stations]
    positions = np.array([position for position, _ in geometry])
    zeniths = np.array([zenith for _, zenith in geometry])
    return positions, zeniths


def _visibility_accesses(
    propagator,
    positions: np.ndarray,
    zeniths: np.ndarray,
    min_elevations_deg,
    duration: float,
    source_frame: ReferenceFrame,
    target_frame: ReferenceFrame,
    options: AccessOptions,
    frame_transform: Optional[Callable],
) -> Tuple[AbsoluteDate, List[Tuple[float, float]]]:
    """Window start and accesses (seconds since the window start)."""
    window_start = propagator.epoch() + options.start_offset
    predicate = VisibilityPredicate(
        propagator,
        positions,
        zeniths,
        min_elevations_deg,
        source_frame=source_frame,
        target_frame=target_frame,
        window_start=window_start,
        start_offset=options.start_offset,
        reduction=options.reduction,
        frame_transform=frame_transform,
        dtype=options.dtype,
    )
    logger.info(
        "Computing accesses of %d target(s) from %s during %.1f s.",
        positions.shape[0],
        window_start.to_iso(),
        duration,
    )
    accesses = IntervalFinder.from_options(options).execute(predicate, duration)
    logger.debug("Visibility predicate evaluated %d times.", predicate.num_evaluations)
    return window_start, accesses


def ground_station_accesses(
    propagator,
    stations: Union[StationType, Sequence[StationType]],
    duration: float,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    target_frame: ReferenceFrame = ReferenceFrame.ITRF,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    frame_transform: Optional[Callable] = None,
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Compute the accesses of a satellite to one or more ground stations.

    An access is a maximal interval during which the reduced visibility of the
    stations is true. The crossings are refined by bisection; however, an
    access shorter than the sampling step can be missed.

    Args:
        propagator: Propagator providing `epoch()` and `propagate_to(elapsed)`.
        stations: A station or a list of stations, see :func:`get_station_geometry`.
        duration (float): Duration of the analysis window [s].
        source_frame (ReferenceFrame): Output frame of the propagator. Defaults to TEME.
        target_frame (ReferenceFrame): Earth-fixed frame of the stations. Defaults to ITRF.
        options (Union[AccessOptions, dict, None]): Analysis options.
        frame_transform (Callable, optional): Function `(from_frame, to_frame, date)
                    -> Rotation`. Defaults to :func:`orbitaccess.frames.frame_transform`.

    Returns:
        List[Tuple[AbsoluteDate, AbsoluteDate]]: Start and end of each access.
    """
    options = resolve_options(options)
    positions, zeniths = _stations_geometry(stations)
    window_start, accesses = _visibility_accesses(
        propagator,
        positions,
        zeniths,
        options.min_elevation_deg,
        duration,
        source_frame,
        target_frame,
        options,
        frame_transform,
    )
    return intervals_to_dates(accesses, window_start)


def ground_station_gaps(
    propagator,
    stations: Union[StationType, Sequence[StationType]],
    duration: float,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    target_frame: ReferenceFrame = ReferenceFrame.ITRF,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    frame_transform: Optional[Callable] = None,
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Compute the gaps between the accesses of a satellite to ground stations.

    The arguments are the same as in :func:`ground_station_accesses`. The gaps
    and the accesses together exactly cover the analysis window.

    Returns:
        List[Tuple[AbsoluteDate, AbsoluteDate]]: Start and end of each gap.
    """
    options = resolve_options(options)
    positions, zeniths = _stations_geometry(stations)
    window_start, accesses = _visibility_accesses(
        propagator,
        positions,
        zeniths,
        options.min_elevation_deg,
        duration,
        source_frame,
        target_frame,
        options,
        frame_transform,
    )
    gaps = derive_gaps(accesses, 0.0, float(duration))
    return intervals_to_dates(gaps, window_start)


def _facilities_geometry(
    facilities: Union[GroundFacility, Sequence[GroundFacility]],
    options: AccessOptions,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    if isinstance(facilities, GroundFacility):
        facilities = [facilities]
    if len(facilities) == 0:
        raise ValueError("At least one ground facility is required.")
    for facility in facilities:
        if not isinstance(facility, GroundFacility):
            raise TypeError("facilities must be GroundFacility objects.")
    positions = np.array([facility.itrs_xyz for facility in facilities])
    zeniths = np.array([facility.zenith for facility in facilities])
    min_elevations = np.array(
        [
            facility.min_elevation_angle_deg
            if facility.min_elevation_angle_deg is not None
            else options.min_elevation_deg
            for facility in facilities
        ]
    )
    return positions, zeniths, min_elevations


def ground_facility_accesses(
    propagator,
    facilities: Union[GroundFacility, Sequence[GroundFacility]],
    duration: float,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    target_frame: ReferenceFrame = ReferenceFrame.ITRF,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    frame_transform: Optional[Callable] = None,
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Compute the accesses of a satellite to one or more ground facilities.

    Same as :func:`ground_station_accesses`, except that the minimum elevation
    angle of a facility, when set, takes precedence over the
    `min_elevation_deg` option.

    Args:
        propagator: Propagator providing `epoch()` and `propagate_to(elapsed)`.
        facilities (Union[GroundFacility, Sequence[GroundFacility]]): Facilities.
        duration (float): Duration of the analysis window [s].
        source_frame (ReferenceFrame): Output frame of the propagator. Defaults to TEME.
        target_frame (ReferenceFrame): Earth-fixed frame. Defaults to ITRF.
        options (Union[AccessOptions, dict, None]): Analysis options.
        frame_transform (Callable, optional): Frame transform function.

    Returns:
        List[Tuple[AbsoluteDate, AbsoluteDate]]: Start and end of each access.
    """
    options = resolve_options(options)
    positions, zeniths, min_elevations = _facilities_geometry(facilities, options)
    window_start, accesses = _visibility_accesses(
        propagator,
        positions,
        zeniths,
        min_elevations,
        duration,
        source_frame,
        target_frame,
        options,
        frame_transform,
    )
    return intervals_to_dates(accesses, window_start)


def ground_facility_gaps(
    propagator,
    facilities: Union[GroundFacility, Sequence[GroundFacility]],
    duration: float,
    source_frame: ReferenceFrame = ReferenceFrame.TEME,
    target_frame: ReferenceFrame = ReferenceFrame.ITRF,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
    frame_transform: Optional[Callable] = None,
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Compute the gaps between the accesses of a satellite to ground facilities.
    The arguments are the same as in :func:`ground_facility_accesses`.

    Returns:
        List[Tuple[AbsoluteDate, AbsoluteDate]]: Start and end of each gap.
    """
    options = resolve_options(options)
    positions, zeniths, min_elevations = _facilities_geometry(facilities, options)
    window_start, accesses = _visibility_accesses(
        propagator,
        positions,
        zeniths,
        min_elevations,
        duration,
        source_frame,
        target_frame,
        options,
        frame_transform,
    )
    gaps = derive_gaps(accesses, 0.0, float(duration))
    return intervals_to_dates(gaps, window_start)
