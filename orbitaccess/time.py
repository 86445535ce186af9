"""
.. module:: orbitaccess.time
   :synopsis: Time information.

Collection of classes and functions for handling time information. The
:class:`AbsoluteDate` class is the instant type returned by all the analyses
(start and end of accesses and gaps).
"""

from datetime import datetime
from typing import Dict, Any, Union

import astropy.units as astropy_u
from astropy.time import Time as Astropy_Time, TimeDelta as Astropy_TimeDelta
from skyfield.api import load as Skyfield_Load
from skyfield.timelib import Time as Skyfield_Time

from .base import EnumBase

_SKYFIELD_TIMESCALE = None


def get_skyfield_timescale():
    """Skyfield timescale built from the data files shipped with skyfield.
    The timescale is loaded once and reused."""
    global _SKYFIELD_TIMESCALE  # pylint: disable=global-statement
    if _SKYFIELD_TIMESCALE is None:
        _SKYFIELD_TIMESCALE = Skyfield_Load.timescale(builtin=True)
    return _SKYFIELD_TIMESCALE


class TimeFormat(EnumBase):
    """
    Enumeration of recognized time formats.
    """

    GREGORIAN_DATE = "GREGORIAN_DATE"
    JULIAN_DATE = "JULIAN_DATE"


class TimeScale(EnumBase):
    """
    Enumeration of recognized time scales.
    """

    UT1 = "UT1"
    UTC = "UTC"


class AbsoluteDate:
    """Handles date-time information with support to Julian and Gregorian
    date-time formats and UT1 and UTC time scales. Date-time is managed
    internally using the Astropy Time object.

    Dates are totally ordered. Adding a number of seconds to a date gives a new
    date, and subtracting two dates gives the elapsed time in seconds.

    .. note:: Skyfield Time was not used since it appears not to
    support handling of JD-UTC."""

    def __init__(self, astropy_time: Astropy_Time) -> None:
        """Constructor for the AbsoluteDate class.

        Args:
            astropy_time (astropy.time.Time): Astropy Time object.
        """
        self.astropy_time = astropy_time

    @staticmethod
    def from_dict(dict_in: Dict[str, Any]) -> "AbsoluteDate":
        """Construct an AbsoluteDate object from a dictionary.

        Args:
            dict_in (dict): Dictionary with the date-time information.
                The dictionary should contain the following key-value pairs:
                - "time_format" (str): The date-time format, either
                                       "Gregorian_Date" or "Julian_Date"
                                       (case-insensitive).
                - "time_scale" (str): The time scale, e.g., "UTC" or "UT1"
                                      (case-insensitive).

                For "Gregorian_Date" format, either:
                - "calendar_date" (str): ISO 8601 date, e.g. "2025-03-17T12:00:00.000".
                or all of:
                - "year" (int): The year component of the date.
                - "month" (int): The month component of the date.
                - "day" (int): The day component of the date.
                - "hour" (int): The hour component of the time.
                - "minute" (int): The minute component of the time.
                - "second" (float): The second component of the time.

                For "Julian_Date" format:
                - "jd" (float): The Julian Date.

        Returns:
            AbsoluteDate: AbsoluteDate object.
        """
        time_scale: TimeScale = TimeScale.get(dict_in.get("time_scale", "UTC"))
        time_format: TimeFormat = TimeFormat.get(dict_in["time_format"])
        if time_scale is None:
            raise ValueError(
                f"Unsupported time scale: {dict_in.get('time_scale')}"
            )
        if time_format == TimeFormat.GREGORIAN_DATE:
            if "calendar_date" in dict_in:
                isot = dict_in["calendar_date"]
            else:
                year: int = dict_in["year"]
                month: int = dict_in["month"]
                day: int = dict_in["day"]
                hour: int = dict_in["hour"]
                minute: int = dict_in["minute"]
                second: float = dict_in["second"]
                isot = f"{year}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:06.3f}"  # pylint: disable=line-too-long
            astropy_time = Astropy_Time(
                isot, format="isot", scale=time_scale.value.lower()
            )
        elif time_format == TimeFormat.JULIAN_DATE:
            jd: float = dict_in["jd"]
            astropy_time = Astropy_Time(
                jd, format="jd", scale=time_scale.value.lower()
            )
        else:
            raise ValueError(
                f"Unsupported date-time format: {dict_in['time_format']}"
            )
        return AbsoluteDate(astropy_time=astropy_time)

    @staticmethod
    def from_julian_date(jd1: float, jd2: float = 0.0) -> "AbsoluteDate":
        """Construct an AbsoluteDate object from a (two-part) UTC Julian date.

        Args:
            jd1 (float): Julian date, or its integer part.
            jd2 (float): Fractional part of the Julian date. Defaults to 0.

        Returns:
            AbsoluteDate: AbsoluteDate object.
        """
        return AbsoluteDate(Astropy_Time(jd1, jd2, format="jd", scale="utc"))

    @staticmethod
    def from_iso(isot: str) -> "AbsoluteDate":
        """Construct an AbsoluteDate object from an ISO 8601 UTC string."""
        return AbsoluteDate(Astropy_Time(isot, format="isot", scale="utc"))

    def to_dict(
        self, time_format_str: str = "GREGORIAN_DATE"
    ) -> Dict[str, Any]:
        """Convert the AbsoluteDate object to a dictionary.

        Args:
            time_format (str): The type of date-time format to use
                                ("GREGORIAN_DATE" or "JULIAN_DATE").

        Returns:
            dict: Dictionary with the date-time information.
        """
        time_format = TimeFormat.get(time_format_str)
        if time_format == TimeFormat.GREGORIAN_DATE:
            return {
                "time_format": "GREGORIAN_DATE",
                "calendar_date": self.to_iso(),
                "time_scale": self.astropy_time.scale.upper(),
            }
        elif time_format == TimeFormat.JULIAN_DATE:
            return {
                "time_format": "JULIAN_DATE",
                "jd": self.astropy_time.jd,
                "time_scale": self.astropy_time.scale.upper(),
            }
        else:
            raise ValueError(f"Unsupported date-time format: {time_format_str}")

    def to_iso(self) -> str:
        """ISO 8601 representation with millisecond resolution."""
        return self.astropy_time.isot

    def __repr__(self) -> str:
        return f"AbsoluteDate({self.to_iso()} {self.astropy_time.scale.upper()})"

    def __add__(self, seconds: float) -> "AbsoluteDate":
        """Date `seconds` after this date."""
        if isinstance(seconds, AbsoluteDate):
            return NotImplemented
        return AbsoluteDate(
            self.astropy_time
            + Astropy_TimeDelta(float(seconds), format="sec")
        )

    def __sub__(
        self, other: Union["AbsoluteDate", float]
    ) -> Union[float, "AbsoluteDate"]:
        """Elapsed seconds between two dates, or the date `other` seconds earlier."""
        if isinstance(other, AbsoluteDate):
            return float(
                (self.astropy_time - other.astropy_time).to_value(astropy_u.s)
            )
        return self + (-float(other))

    def __eq__(self, other: object) -> bool:
        """
        Check if two AbsoluteDate objects are equal.

        Args:
            other (object): The object to compare with.

        Returns:
            bool: True if the two AbsoluteDate objects represent the
                  same date and time, False otherwise.
        """
        if not isinstance(other, AbsoluteDate):
            return False
        return bool(self.astropy_time == other.astropy_time)

    def __lt__(self, other: "AbsoluteDate") -> bool:
        if not isinstance(other, AbsoluteDate):
            return NotImplemented
        return bool(self.astropy_time < other.astropy_time)

    def __le__(self, other: "AbsoluteDate") -> bool:
        if not isinstance(other, AbsoluteDate):
            return NotImplemented
        return bool(self.astropy_time <= other.astropy_time)

    def __gt__(self, other: "AbsoluteDate") -> bool:
        if not isinstance(other, AbsoluteDate):
            return NotImplemented
        return bool(self.astropy_time > other.astropy_time)

    def __ge__(self, other: "AbsoluteDate") -> bool:
        if not isinstance(other, AbsoluteDate):
            return NotImplemented
        return bool(self.astropy_time >= other.astropy_time)

    __hash__ = None

    def to_astropy_time(self) -> Astropy_Time:
        """Convert the AbsoluteDate object to an Astropy Time object.

        Returns:
            astropy.time.Time: Astropy Time object.
        """
        return self.astropy_time

    def to_datetime(self) -> datetime:
        """Convert the AbsoluteDate object to a (naive, UTC) datetime."""
        return self.astropy_time.utc.datetime

    def to_skyfield_time(self) -> Skyfield_Time:
        """Convert the AbsoluteDate object to a Skyfield Time object.

        Returns:
            skyfield.time.Time: Skyfield Time object.
        """
        return get_skyfield_timescale().from_astropy(self.astropy_time)
