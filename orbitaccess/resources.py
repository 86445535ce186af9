"""
.. module:: orbitaccess.resources
   :synopsis: Models of ground resources used in the access analyses.
"""

from typing import Dict, Any, Optional
import uuid
from uuid import uuid4

import numpy as np

from .position import GeographicPosition


class GroundFacility:
    """Handles ground facility location and properties."""

    def __init__(
        self,
        identifier: Optional[str],
        name: Optional[str],
        geographic_position: GeographicPosition,
        min_elevation_angle_deg: Optional[float] = None,
    ):
        """
        Args:
            identifier (str or None): Unique identifier for the ground facility.
                              Must be a valid UUID.
                              If None, a new UUID is generated.
            name (str or None): Name of the ground facility.
            geographic_position (:class:`orbitaccess.position.GeographicPosition`):
                                    Geographic position of the ground facility.
            min_elevation_angle_deg (float or None): Minimum elevation angle in degrees.
                                    If None, the analysis option is used.
        """
        if identifier is not None:
            try:
                uuid.UUID(identifier)
            except ValueError as exc:
                raise ValueError("identifier must be a valid UUID.") from exc
        else:
            identifier = str(
                uuid4()
            )  # Generate a new UUID if identifier is None
        if not isinstance(geographic_position, GeographicPosition):
            raise TypeError(
                "geographic_position must be a GeographicPosition object."
            )
        if min_elevation_angle_deg is not None:
            if isinstance(min_elevation_angle_deg, bool) or not isinstance(
                min_elevation_angle_deg, (int, float)
            ):
                raise TypeError("min_elevation_angle_deg must be a numeric value.")
            if not -90.0 <= min_elevation_angle_deg <= 90.0:
                raise ValueError(
                    "min_elevation_angle_deg must be within [-90, 90] degrees."
                )
        if name is not None and not isinstance(name, str):
            raise TypeError("name must be a string or None.")

        self.identifier = identifier
        self.name = name
        self.geographic_position = geographic_position
        self.min_elevation_angle_deg = min_elevation_angle_deg

    @classmethod
    def from_dict(cls, dict_in: Dict[str, Any]) -> "GroundFacility":
        """Construct a GroundFacility object from a dictionary.

        Args:
            dict_in (dict): Dictionary with the ground facility information.
                The dictionary should contain the following key-value pairs:
                - "id" (str): (Optional) Unique identifier.
                - "name" (str): (Optional) Name of the ground facility.
                - "latitude" (float): Latitude in degrees.
                - "longitude" (float): Longitude in degrees.
                - "height" (float): WGS84 geodetic height in meters.
                - "min_elevation_angle" (float): (Optional) Minimum elevation angle
                                                 in degrees.

        Returns:
            GroundFacility: GroundFacility object.
        """
        identifier = dict_in.get("id", None)  # allow id to be None
        name = dict_in.get("name", None)
        geographic_position = GeographicPosition.from_dict(
            {
                "latitude": dict_in["latitude"],
                "longitude": dict_in["longitude"],
                "elevation": dict_in["height"],
            }
        )
        return cls(
            identifier,
            name,
            geographic_position,
            dict_in.get("min_elevation_angle", None),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the GroundFacility object to a dictionary.

        Returns:
            dict: Dictionary with the ground facility information.
        """
        return {
            "id": self.identifier,
            "name": self.name,
            "latitude": self.geographic_position.latitude,
            "longitude": self.geographic_position.longitude,
            "height": self.geographic_position.elevation,
            "min_elevation_angle": self.min_elevation_angle_deg,
        }

    @property
    def itrs_xyz(self) -> np.ndarray:
        """ITRS position of the facility in kilometers."""
        return self.geographic_position.itrs_xyz

    @property
    def zenith(self) -> np.ndarray:
        """Local zenith unit vector of the facility in the ITRS frame."""
        return self.geographic_position.zenith
