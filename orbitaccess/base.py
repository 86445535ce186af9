"""
.. module:: orbitaccess.base
   :synopsis: Collection of basic utility classes, enumerations and constants.

Collection of basic utility classes, enumerations and constants.
"""

from enum import Enum

import numpy as np

WGS84_EARTH_EQUATORIAL_RADIUS = 6378.137  # km
WGS84_EARTH_POLAR_RADIUS = 6356.7523142  # km
SUN_RADIUS = 695700.0  # km (IAU 2015 nominal)
EARTH_ANGULAR_SPEED = 7.292115146706979e-5  # rad/s
EARTH_GRAVITATIONAL_PARAMETER = 398600.4418  # km^3/s^2
EARTH_J2 = 1.08262668e-3  # EGM-08 unnormalized

NUMBER_OF_SECONDS_IN_A_DAY = 86400.0


class EnumBase(str, Enum):
    """Enumeration of recognized types.
    All enum values defined by the inheriting class are
    expected to be in uppercase."""

    @classmethod
    def get(cls, key):
        """Attempts to parse a type from a string, otherwise returns None."""
        if isinstance(key, cls):
            return key
        elif isinstance(key, list):
            return [cls.get(e) for e in key]
        elif not isinstance(key, str):
            return None
        try:
            return cls(key.upper())
        except ValueError:
            return None

    def to_string(self) -> str:
        """Returns the string value of the enumeration."""
        return str(self.value)


class ReferenceFrame(EnumBase):
    """
    Enumeration of recognized Reference frames.

    Attributes:
        GCRF (str): Geocentric Celestial Reference Frame. See:
                    https://rhodesmill.org/skyfield/api-position.html#geocentric-position-relative-to-the-earth

        ITRF (str): International Terrestrial Reference Frame. See:
                    https://rhodesmill.org/skyfield/api-framelib.html#skyfield.framelib.itrs

        TEME (str): True Equator Mean Equinox frame, the output frame of SGP4. See:
                    https://rhodesmill.org/skyfield/earth-satellites.html

    """

    GCRF = "GCRF"  # Geocentric Celestial Reference Frame
    ITRF = "ITRF"  # International Terrestrial Reference Frame
    TEME = "TEME"  # True Equator Mean Equinox


class Precision(EnumBase):
    """Floating-point precision used to evaluate the analysis formulas."""

    FLOAT32 = "FLOAT32"
    FLOAT64 = "FLOAT64"

    def to_dtype(self) -> type:
        """Numpy dtype corresponding to the precision."""
        if self == Precision.FLOAT32:
            return np.float32
        return np.float64
