"""
.. module:: orbitaccess.lighting
   :synopsis: Sun position and lighting condition (sunlight, penumbra, umbra)
              of a satellite.
"""

import numpy as np
import astropy.units as astropy_u
from astropy.coordinates import get_sun as astropy_get_sun

from .base import EnumBase, WGS84_EARTH_EQUATORIAL_RADIUS, SUN_RADIUS
from .time import AbsoluteDate


class LightingCondition(EnumBase):
    """Lighting condition of an object with respect to the Earth's shadow."""

    SUNLIGHT = "SUNLIGHT"
    PENUMBRA = "PENUMBRA"
    UMBRA = "UMBRA"


def sun_position_gcrf(date: AbsoluteDate) -> np.ndarray:
    """Apparent position of the Sun relative to the Earth in the GCRF frame.

    The position is computed by astropy from its built-in ephemeris, so no
    ephemeris file is downloaded.

    Args:
        date (AbsoluteDate): Date of the position.

    Returns:
        np.ndarray: Earth-to-Sun vector in kilometers.
    """
    sun = astropy_get_sun(date.to_astropy_time())
    return np.asarray(sun.cartesian.xyz.to_value(astropy_u.km), dtype=float)


def lighting_condition(
    satellite_position: np.ndarray,
    sun_position: np.ndarray,
    earth_radius: float = WGS84_EARTH_EQUATORIAL_RADIUS,
    sun_radius: float = SUN_RADIUS,
) -> LightingCondition:
    """Lighting condition of a satellite with a conical shadow model of a
    spherical Earth.

    The satellite is projected on the Earth-Sun axis. Behind the Earth, the
    umbra cone narrows and the penumbra cone widens with the distance `d`
    along the axis::

        r_umbra    = R_e - d * (R_sun - R_e) / D
        r_penumbra = R_e + d * (R_sun + R_e) / D

    where `D` is the Earth-Sun distance.

    Reference: Montenbruck, O., Gill, E., "Satellite Orbits", Section 3.4.2.

    Args:
        satellite_position (np.ndarray): Earth-to-satellite vector [km].
        sun_position (np.ndarray): Earth-to-Sun vector [km], in the same frame.
        earth_radius (float): Radius of the spherical Earth [km].
        sun_radius (float): Radius of the Sun [km].

    Returns:
        LightingCondition: SUNLIGHT, PENUMBRA or UMBRA.

    Raises:
        ValueError: If the Sun position is the zero vector.
    """
    satellite_position = np.asarray(satellite_position)
    sun_position = np.asarray(sun_position)

    sun_distance = np.linalg.norm(sun_position)
    if sun_distance == 0:
        raise ValueError("Sun position vector cannot be zero.")
    sun_unit_vector = sun_position / sun_distance

    # Distance along the shadow axis, positive behind the Earth.
    along_axis = -np.dot(satellite_position, sun_unit_vector)
    if along_axis <= 0:
        return LightingCondition.SUNLIGHT

    off_axis = np.linalg.norm(
        satellite_position + along_axis * sun_unit_vector
    )
    umbra_radius = earth_radius - along_axis * (sun_radius - earth_radius) / sun_distance
    penumbra_radius = earth_radius + along_axis * (sun_radius + earth_radius) / sun_distance

    if off_axis < umbra_radius:
        return LightingCondition.UMBRA
    if off_axis < penumbra_radius:
        return LightingCondition.PENUMBRA
    return LightingCondition.SUNLIGHT
