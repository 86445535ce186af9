"""
.. module:: orbitaccess.groundrepeat
    :synopsis: Spacing of adjacent ground tracks of ground repeating orbits.

A ground repeating orbit completes a rational number of revolutions per day,
so its ground trace repeats after an integer number of days (the orbit
cycle). The functions below give the separation at the Equator of two
adjacent tracks, either as the angle seen from the satellite or as a distance
on the Earth surface. Secular J2 rates are used for the orbital angular
velocity and for the drift of the right ascension of the ascending node.

The orbit is not checked to be ground repeating with the given cycle.
"""

import logging
from typing import Any, Dict, Tuple, Union

import numpy as np

from .base import (
    EARTH_ANGULAR_SPEED,
    EARTH_GRAVITATIONAL_PARAMETER,
    EARTH_J2,
    WGS84_EARTH_EQUATORIAL_RADIUS,
)
from .config import AccessOptions, resolve_options

logger = logging.getLogger(__name__)


def _j2_factor(semi_major_axis, eccentricity, dtype):
    """Mean motion of the unperturbed orbit and ``J2 (R/p)^2``."""
    mean_motion = np.sqrt(dtype(EARTH_GRAVITATIONAL_PARAMETER) / semi_major_axis**3)
    semi_latus_rectum = semi_major_axis * (dtype(1) - eccentricity**2)
    ratio = dtype(WGS84_EARTH_EQUATORIAL_RADIUS) / semi_latus_rectum
    return mean_motion, dtype(EARTH_J2) * ratio**2


def _j2_mean_angular_velocity(semi_major_axis, eccentricity, inclination, dtype):
    """Angular velocity [rad/s] of the satellite along its orbit: the J2
    perturbed mean motion plus the drift of the argument of perigee."""
    mean_motion, k2 = _j2_factor(semi_major_axis, eccentricity, dtype)
    sin_i_2 = np.sin(inclination) ** 2
    beta_e = np.sqrt(dtype(1) - eccentricity**2)
    three_quarters = dtype(0.75)
    mean_motion_rate = mean_motion * (
        dtype(1) + three_quarters * k2 * beta_e * (dtype(2) - dtype(3) * sin_i_2)
    )
    perigee_rate = three_quarters * k2 * mean_motion * (dtype(4) - dtype(5) * sin_i_2)
    return mean_motion_rate + perigee_rate


def _raan_time_derivative(semi_major_axis, eccentricity, inclination, dtype):
    """Secular J2 drift [rad/s] of the right ascension of the ascending node."""
    mean_motion, k2 = _j2_factor(semi_major_axis, eccentricity, dtype)
    return -dtype(1.5) * mean_motion * k2 * np.cos(inclination)


def _adjacent_track_geometry(
    semi_major_axis: float,
    eccentricity: float,
    inclination_deg: float,
    orbit_cycle: int,
    dtype: type,
) -> Tuple[Any, Any]:
    """Semi-major axis cast to `dtype` and the angle, measured from the Earth
    center, between one ground track and the middle of the two adjacent tracks
    at the Equator.

    Raises:
        ValueError: If the orbital parameters are out of domain.
    """
    if int(orbit_cycle) != orbit_cycle or orbit_cycle < 1:
        raise ValueError(
            f"orbit_cycle must be a positive integer number of days, got {orbit_cycle}."
        )
    if not 0.0 <= eccentricity < 1.0:
        raise ValueError(f"eccentricity must be within [0, 1), got {eccentricity}.")
    if not semi_major_axis * (1.0 - eccentricity) > WGS84_EARTH_EQUATORIAL_RADIUS:
        raise ValueError(
            f"Perigee of the orbit (a = {semi_major_axis} km, e = {eccentricity}) "
            "is inside the Earth."
        )

    a = dtype(semi_major_axis)
    e = dtype(eccentricity)
    i = dtype(np.radians(inclination_deg))
    sin_i = np.sin(i)
    cos_i = np.cos(i)
    if abs(sin_i) < np.finfo(dtype).eps:
        raise ValueError(
            f"Ground tracks of an equatorial orbit (i = {inclination_deg} deg) "
            "do not cross the Equator."
        )

    angular_velocity = _j2_mean_angular_velocity(a, e, i, dtype)
    period = dtype(2.0 * np.pi) / angular_velocity
    raan_rate = _raan_time_derivative(a, e, i, dtype)

    theta = (
        period * (dtype(EARTH_ANGULAR_SPEED) - raan_rate) / dtype(orbit_cycle) / dtype(2)
    )
    sin_theta = np.sin(theta)
    if abs(sin_theta) < np.finfo(dtype).resolution:
        raise ValueError(
            f"Adjacent ground tracks coincide for an orbit cycle of {orbit_cycle} day(s)."
        )
    cot_theta = np.cos(theta) / sin_theta

    x = cot_theta * sin_i + (cos_i / sin_i) * cos_i / sin_theta
    beta = dtype(np.pi / 2) if x == 0 else np.arctan(dtype(1) / x)
    logger.debug(
        "Orbit period %.3f s, node drift %.3e rad/s, half track spacing %.6f rad.",
        period,
        raan_rate,
        beta,
    )
    return a, beta


def ground_repeating_orbit_adjacent_track_angle(
    semi_major_axis: float,
    eccentricity: float,
    inclination_deg: float,
    orbit_cycle: int,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
) -> float:
    """Angle, seen from the satellite, between two adjacent ground tracks at
    the Equator.

    Args:
        semi_major_axis (float): Semi-major axis [km].
        eccentricity (float): Eccentricity.
        inclination_deg (float): Inclination [deg].
        orbit_cycle (int): Number of days after which the ground trace repeats.
        options (Union[AccessOptions, Dict[str, Any], None]): Only the
                        precision is used.

    Returns:
        float: Adjacent track angle [deg].

    Raises:
        ValueError: If the orbital parameters are out of domain: non positive
                    or non integer cycle, eccentricity outside [0, 1), perigee
                    inside the Earth, equatorial orbit or coinciding tracks.
    """
    dtype = resolve_options(options).dtype
    a, beta = _adjacent_track_geometry(
        semi_major_axis, eccentricity, inclination_deg, orbit_cycle, dtype
    )
    radius = dtype(WGS84_EARTH_EQUATORIAL_RADIUS)
    # Triangle Earth center, satellite and ground track point.
    alpha = np.sqrt(radius**2 + a**2 - dtype(2) * radius * a * np.cos(beta))
    sin_gamma = radius / alpha * np.sin(beta)
    if not -1.0 <= sin_gamma <= 1.0:
        raise ValueError(
            f"Adjacent track angle is undefined (sine of the half angle {sin_gamma})."
        )
    return float(np.degrees(dtype(2) * np.arcsin(sin_gamma)))


def ground_repeating_orbit_adjacent_track_distance(
    semi_major_axis: float,
    eccentricity: float,
    inclination_deg: float,
    orbit_cycle: int,
    options: Union[AccessOptions, Dict[str, Any], None] = None,
) -> float:
    """Distance on the Earth surface between two adjacent ground tracks at the
    Equator.

    Takes the same arguments as
    :func:`ground_repeating_orbit_adjacent_track_angle`.

    Returns:
        float: Adjacent track distance [km], along the equatorial circle.

    Raises:
        ValueError: If the orbital parameters are out of domain.
    """
    dtype = resolve_options(options).dtype
    _, beta = _adjacent_track_geometry(
        semi_major_axis, eccentricity, inclination_deg, orbit_cycle, dtype
    )
    return float(dtype(2) * beta * dtype(WGS84_EARTH_EQUATORIAL_RADIUS))
