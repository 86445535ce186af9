"""
.. module:: orbitaccess.position
   :synopsis: Position information.

Collection of classes and functions for handling position information of the
analysis targets (ground stations and facilities).
"""

import numpy as np
from typing import Dict, Any, List, Optional

from skyfield.api import wgs84 as skyfield_wgs84

from .base import (
    ReferenceFrame,
    WGS84_EARTH_EQUATORIAL_RADIUS,
    WGS84_EARTH_POLAR_RADIUS,
)


def geodetic_to_cartesian(
    latitude_degrees: float, longitude_degrees: float, altitude_m: float
) -> np.ndarray:
    """Convert WGS84 geodetic coordinates into an ITRF (Earth-fixed) position.

    Args:
        latitude_degrees (float): Geodetic latitude in degrees.
        longitude_degrees (float): Longitude in degrees.
        altitude_m (float): Height above the WGS84 ellipsoid in meters.

    Returns:
        np.ndarray: Position vector in kilometers.
    """
    return GeographicPosition(
        latitude_degrees, longitude_degrees, altitude_m
    ).itrs_xyz


def geodetic_zenith(
    latitude_degrees: float, longitude_degrees: float
) -> np.ndarray:
    """Local zenith (unit normal to the WGS84 ellipsoid) at a geodetic location,
    expressed in the Earth-fixed frame."""
    lat = np.radians(latitude_degrees)
    lon = np.radians(longitude_degrees)
    return np.array(
        [np.cos(lat) * np.cos(lon), np.cos(lat) * np.sin(lon), np.sin(lat)]
    )


def ellipsoid_zenith(position: np.ndarray) -> np.ndarray:
    """Unit normal of the WGS84 ellipsoid through an Earth-fixed position.

    The normal is the gradient of the ellipsoid equation, exact for points on
    the ellipsoid surface and a close approximation near it.

    Args:
        position (np.ndarray): Earth-fixed position in kilometers.

    Returns:
        np.ndarray: Unit vector of the local zenith.

    Raises:
        ValueError: If the position is the Earth's center.
    """
    position = np.asarray(position, dtype=float)
    gradient = np.array(
        [
            position[0] / WGS84_EARTH_EQUATORIAL_RADIUS**2,
            position[1] / WGS84_EARTH_EQUATORIAL_RADIUS**2,
            position[2] / WGS84_EARTH_POLAR_RADIUS**2,
        ]
    )
    norm = np.linalg.norm(gradient)
    if norm == 0:
        raise ValueError("The zenith is undefined at the Earth's center.")
    return gradient / norm


class Cartesian3DPosition:
    """Handles 3D position information."""

    def __init__(
        self, x: float, y: float, z: float, frame: Optional[ReferenceFrame]
    ) -> None:
        if not all(
            isinstance(coord, (int, float, np.floating)) for coord in [x, y, z]
        ):
            raise ValueError("x, y, and z must be numeric values.")
        if frame is not None and not isinstance(frame, ReferenceFrame):
            raise ValueError("frame must be a ReferenceFrame object or None.")
        self.coords = np.array([x, y, z], dtype=float)
        self.frame = frame

    @staticmethod
    def from_list(
        list_in: List[float], frame: Optional[ReferenceFrame]
    ) -> "Cartesian3DPosition":
        """Construct a Cartesian3DPosition object from a list.

        Args:
            list_in (List[float]): Position coordinates in kilometers.
            frame (ReferenceFrame): The reference-frame.

        Returns:
            Cartesian3DPosition: Cartesian3DPosition object.
        """
        if len(list_in) != 3:
            raise ValueError("The list must contain exactly 3 elements.")
        return Cartesian3DPosition(list_in[0], list_in[1], list_in[2], frame)

    def to_list(self) -> List[float]:
        """Convert the Cartesian3DPosition object to a list.

        Returns:
            List[float]: List with the position coordinates in kilometers.
        """
        return self.coords.tolist()

    def to_numpy(self) -> np.ndarray:
        """Position coordinates in kilometers as a numpy array."""
        return self.coords.copy()

    @staticmethod
    def from_dict(dict_in: Dict[str, Any]) -> "Cartesian3DPosition":
        """Construct a Cartesian3DPosition object from a dictionary.

        Args:
            dict_in (dict): Dictionary with the position information.
                The dictionary should contain the following key-value
                pairs:
                - "x" (float): The x-coordinate in kilometers.
                - "y" (float): The y-coordinate in kilometers.
                - "z" (float): The z-coordinate in kilometers.
                - "frame" (str): The reference-frame,
                                see :class:`orbitaccess.base.ReferenceFrame`.

        Returns:
            Cartesian3DPosition: Cartesian3DPosition object.
        """
        frame = ReferenceFrame.get(dict_in["frame"])
        return Cartesian3DPosition(
            dict_in["x"], dict_in["y"], dict_in["z"], frame
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Cartesian3DPosition object to a dictionary.

        Returns:
            dict: Dictionary with the position information.
        """
        return {
            "x": self.coords[0],
            "y": self.coords[1],
            "z": self.coords[2],
            "frame": self.frame.value if self.frame else None,
        }


class GeographicPosition:
    """Handles geographic position information using Skyfield.
    The geographic position is managed internally using the Skyfield
    GeographicPosition object and is referenced to the WGS84 ellipsoid."""

    def __init__(
        self,
        latitude_degrees: float,
        longitude_degrees: float,
        elevation_m: float,
    ):
        """
        Args:
            latitude_degrees (float): Latitude in degrees.
            longitude_degrees (float): Longitude in degrees.
            elevation_m (float): Elevation in meters.
        """
        if not -90.0 <= latitude_degrees <= 90.0:
            raise ValueError(
                f"Latitude must be within [-90, 90] degrees, got {latitude_degrees}."
            )
        self.skyfield_geo_position = skyfield_wgs84.latlon(
            latitude_degrees=latitude_degrees,
            longitude_degrees=longitude_degrees,
            elevation_m=elevation_m,
        )

    @classmethod
    def from_dict(cls, dict_in: Dict[str, Any]) -> "GeographicPosition":
        """Construct a GeographicPosition object from a dictionary.

        Args:
            dict_in (dict): Dictionary with the geographic position information.
                The dictionary should contain the following key-value pairs:
                - "latitude" (float): Latitude in degrees.
                - "longitude" (float): Longitude in degrees.
                - "elevation" (float): Elevation in meters.

        Returns:
            GeographicPosition: GeographicPosition object.
        """
        latitude_degrees = dict_in["latitude"]
        longitude_degrees = dict_in["longitude"]
        elevation_m = dict_in["elevation"]
        return cls(latitude_degrees, longitude_degrees, elevation_m)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the GeographicPosition object to a dictionary.

        Returns:
            dict: Dictionary with the geographic position information.
        """
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "elevation": self.elevation,
        }

    @property
    def latitude(self):
        """Get the latitude in degrees."""
        return self.skyfield_geo_position.latitude.degrees

    @property
    def longitude(self):
        """Get the longitude in degrees."""
        return self.skyfield_geo_position.longitude.degrees

    @property
    def elevation(self):
        """Get the elevation in meters."""
        return self.skyfield_geo_position.elevation.m

    @property
    def itrs_xyz(self) -> np.ndarray:
        """Get the ITRS XYZ position in kilometers."""
        return np.array(self.skyfield_geo_position.itrs_xyz.km, dtype=float)

    @property
    def zenith(self) -> np.ndarray:
        """Local zenith unit vector in the ITRS frame."""
        return geodetic_zenith(self.latitude, self.longitude)

    def to_cartesian3d_position(self) -> Cartesian3DPosition:
        """The geographic position as an ITRF Cartesian position."""
        return Cartesian3DPosition.from_list(
            self.itrs_xyz.tolist(), ReferenceFrame.ITRF
        )
