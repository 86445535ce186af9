"""
.. module:: orbitaccess.orbits
   :synopsis: Orbit inputs of the propagators.

Only Two-Line Element Sets are supported, consumed by
:class:`orbitaccess.propagator.SGP4Propagator`.
"""

from typing import Dict, Tuple, Optional

from .base import EnumBase


class OrbitType(EnumBase):
    """Enumeration of supported orbit types."""

    TWO_LINE_ELEMENT_SET = "TWO_LINE_ELEMENT_SET"


class TwoLineElementSet:
    """Two-Line Element Set of one satellite, with an optional title line.

    Attributes:
        line0 (Optional[str]): Title line (satellite name), may be None.
        line1 (str): First element line, starting with "1 ".
        line2 (str): Second element line, starting with "2 ".
    """

    def __init__(self, line0: Optional[str], line1: str, line2: str) -> None:
        self.line0 = line0
        self.line1 = line1
        self.line2 = line2

    @property
    def catalog_number(self) -> str:
        """Satellite catalog number read from the first element line."""
        return self.line1[2:7].strip()

    @classmethod
    def from_dict(cls, dict_in: Dict[str, str]) -> "TwoLineElementSet":
        """Parse a TLE from a dictionary with the keys "TLE_LINE1", "TLE_LINE2"
        and, optionally, "TLE_LINE0".

        Raises:
            KeyError: If an element line is missing.
        """
        return cls(
            dict_in.get("TLE_LINE0"), dict_in["TLE_LINE1"], dict_in["TLE_LINE2"]
        )

    def to_dict(self) -> Dict[str, str]:
        """Dictionary with the "orbit_type" key and the three TLE lines."""
        return {
            "orbit_type": OrbitType.TWO_LINE_ELEMENT_SET.value,
            "TLE_LINE0": self.line0,
            "TLE_LINE1": self.line1,
            "TLE_LINE2": self.line2,
        }

    def get_tle_as_tuple(self) -> Tuple[str, str]:
        """The two element lines, as expected by ``sgp4.api.Satrec.twoline2rv``.

        Raises:
            ValueError: If an element line is missing, does not start with its
                        line number, or the two lines describe different satellites.
        """
        if self.line1 is None or self.line2 is None:
            raise ValueError("TLE lines are missing.")
        if not (self.line1.startswith("1 ") and self.line2.startswith("2 ")):
            raise ValueError("TLE element lines must start with '1 ' and '2 '.")
        if self.line2[2:7].strip() != self.catalog_number:
            raise ValueError(
                "TLE element lines refer to different catalog numbers: "
                f"{self.catalog_number} and {self.line2[2:7].strip()}."
            )
        return self.line1, self.line2
