"""
.. module:: orbitaccess.mission
   :synopsis: Module to handle the initialization and execution of a batch of
              access analyses.

The main class is `AccessMission` which holds the satellite propagator, the
ground facilities, the analysis window and options, and the list of analyses
to execute. An `AccessMission` object can be initialized from a dictionary
(e.g. loaded from a JSON file) using the `from_dict` function and executed
with `execute_all`.

This module is utilized by the `bin/run_access_analysis.py` script to execute
the analyses defined in a JSON file.

Example of a mission dictionary::

    {
        "propagator": {
            "propagator_type": "SGP4_PROPAGATOR",
            "orbit": {
                "orbit_type": "TWO_LINE_ELEMENT_SET",
                "TLE_LINE0": "ISS (ZARYA)",
                "TLE_LINE1": "1 25544U 98067A   ...",
                "TLE_LINE2": "2 25544  51.6416 ..."
            }
        },
        "duration_days": 1.0,
        "ground_facilities": [
            {"name": "Svalbard", "latitude": 78.23, "longitude": 15.41,
             "height": 500.0, "min_elevation_angle": 5.0}
        ],
        "options": {"step": 30.0, "min_elevation_deg": 10.0},
        "analyses": [
            {"analysis_type": "GROUND_FACILITY_ACCESSES"},
            {"analysis_type": "ECLIPSE", "condition": "UMBRA"},
            {"analysis_type": "BETA_ANGLE", "threshold_deg": 60.0,
             "absolute": true}
        ]
    }

Each of the dictionaries within the mission dictionary can be directly
converted to the corresponding object using the `from_dict` function of the
respective class. A list of ground facilities can also be given as
``{"relative_file_path": "facilities.json"}``, relative to the `user_dir`
setting.

The results are JSON-ready: dates are ISO-8601 strings in the UTC scale.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple, Union

from .base import EnumBase, NUMBER_OF_SECONDS_IN_A_DAY
from .betaangle import beta_angle_analysis
from .config import AccessOptions
from .contactfinder import ground_facility_accesses, ground_facility_gaps
from .eclipsefinder import eclipse_intervals, eclipse_time_summary
from .predicates import Comparison, EclipseCondition
from .propagator import PropagatorFactory
from .resources import GroundFacility
from .time import AbsoluteDate

logger = logging.getLogger(__name__)


class AnalysisType(EnumBase):
    """Analyses supported by :class:`AccessMission`."""

    GROUND_FACILITY_ACCESSES = "GROUND_FACILITY_ACCESSES"
    GROUND_FACILITY_GAPS = "GROUND_FACILITY_GAPS"
    ECLIPSE = "ECLIPSE"
    BETA_ANGLE = "BETA_ANGLE"


def intervals_to_iso(
    intervals: List[Tuple[AbsoluteDate, AbsoluteDate]],
) -> List[List[str]]:
    """Convert a list of date intervals into ``[start, end]`` ISO string pairs."""
    return [[start.to_iso(), end.to_iso()] for start, end in intervals]


class Analysis:
    """One analysis of a mission and its parameters."""

    def __init__(
        self,
        analysis_type: Union[AnalysisType, str],
        condition: Union[EclipseCondition, str] = EclipseCondition.ECLIPSE,
        threshold_deg: Optional[float] = None,
        comparison: Union[Comparison, str] = Comparison.GREATER_EQUAL,
        absolute: bool = False,
    ):
        """
        Args:
            analysis_type (Union[AnalysisType, str]): Type of the analysis.
            condition (Union[EclipseCondition, str]): Lighting condition of an
                        ECLIPSE analysis. Defaults to ECLIPSE.
            threshold_deg (Optional[float]): Threshold of a BETA_ANGLE analysis [deg].
            comparison (Union[Comparison, str]): Comparison of a BETA_ANGLE analysis.
            absolute (bool): If True, a BETA_ANGLE analysis compares |beta|.

        Raises:
            ValueError: If a type is unknown or a BETA_ANGLE analysis has no threshold.
        """
        analysis_type_ = AnalysisType.get(analysis_type)
        if analysis_type_ is None:
            raise ValueError(f"Unknown analysis type: {analysis_type}")
        condition_ = EclipseCondition.get(condition)
        if condition_ is None:
            raise ValueError(f"Unknown eclipse condition: {condition}")
        comparison_ = Comparison.get(comparison)
        if comparison_ is None:
            raise ValueError(f"Unknown comparison: {comparison}")
        if analysis_type_ == AnalysisType.BETA_ANGLE and threshold_deg is None:
            raise ValueError("A BETA_ANGLE analysis requires threshold_deg.")

        self.analysis_type = analysis_type_
        self.condition = condition_
        self.threshold_deg = threshold_deg
        self.comparison = comparison_
        self.absolute = bool(absolute)

    @classmethod
    def from_dict(cls, dict_in: Dict[str, Any]) -> "Analysis":
        """Create an Analysis object from a dictionary with the keys
        "analysis_type" and, depending on the type, "condition",
        "threshold_deg", "comparison" and "absolute"."""
        return cls(
            analysis_type=dict_in["analysis_type"],
            condition=dict_in.get("condition", EclipseCondition.ECLIPSE),
            threshold_deg=dict_in.get("threshold_deg", None),
            comparison=dict_in.get("comparison", Comparison.GREATER_EQUAL),
            absolute=dict_in.get("absolute", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Analysis object to a dictionary holding only the
        parameters relevant to its type."""
        dict_out: Dict[str, Any] = {"analysis_type": self.analysis_type.to_string()}
        if self.analysis_type == AnalysisType.ECLIPSE:
            dict_out["condition"] = self.condition.to_string()
        elif self.analysis_type == AnalysisType.BETA_ANGLE:
            dict_out["threshold_deg"] = self.threshold_deg
            dict_out["comparison"] = self.comparison.to_string()
            dict_out["absolute"] = self.absolute
        return dict_out


class AccessMission:
    """A satellite, its ground facilities and the analyses to run over a
    common analysis window."""

    def __init__(
        self,
        propagator,
        duration_days: float,
        ground_facilities: Optional[Union[GroundFacility, List[GroundFacility]]] = None,
        options: Optional[AccessOptions] = None,
        analyses: Optional[List[Analysis]] = None,
        user_dir: Optional[str] = None,
    ):
        """
        Args:
            propagator: Propagator of the satellite (e.g. :class:`SGP4Propagator`).
            duration_days (float): Duration of the analysis window in days.
            ground_facilities (Optional[Union[GroundFacility, List[GroundFacility]]]):
                        Ground facilities.
            options (Optional[AccessOptions]): Analysis options. Defaults to
                        the default options.
            analyses (Optional[List[Analysis]]): Analyses to execute. If None,
                        the ground facility accesses (when facilities are
                        given) and the eclipse intervals are computed.
            user_dir (Optional[str]): Directory used to resolve relative file paths.

        Raises:
            ValueError: If the duration is not positive or a ground facility
                        analysis is requested without ground facilities.
        """
        if duration_days <= 0:
            raise ValueError("duration_days must be positive.")
        if ground_facilities is not None and not isinstance(ground_facilities, list):
            ground_facilities = [ground_facilities]
        ground_facilities = ground_facilities if ground_facilities else []
        if analyses is None:
            analyses = [Analysis(AnalysisType.ECLIPSE)]
            if ground_facilities:
                analyses.insert(0, Analysis(AnalysisType.GROUND_FACILITY_ACCESSES))
        for analysis in analyses:
            if (
                analysis.analysis_type
                in (
                    AnalysisType.GROUND_FACILITY_ACCESSES,
                    AnalysisType.GROUND_FACILITY_GAPS,
                )
                and not ground_facilities
            ):
                raise ValueError(
                    f"{analysis.analysis_type.value} requires at least one ground facility."
                )

        self.propagator = propagator
        self.duration_days = duration_days
        self.ground_facilities = ground_facilities
        self.options = options if options is not None else AccessOptions()
        self.analyses = analyses
        self.user_dir = user_dir

    @property
    def duration(self) -> float:
        """Duration of the analysis window in seconds."""
        return self.duration_days * NUMBER_OF_SECONDS_IN_A_DAY

    @property
    def window_start(self) -> AbsoluteDate:
        """Start of the analysis window."""
        return self.propagator.epoch() + self.options.start_offset

    @staticmethod
    def load_object(other_cls, dict_in: Any, ref_dir: Optional[str]) -> Any:
        """Load an object (or a list of objects) from a dictionary or a JSON file.

        Args:
            other_cls (Type[Any]): The class type to instantiate the object.
                                    The class should support a 'from_dict' function.
            dict_in (dict or list): Dictionary (or list of dictionaries) with the
                                    object data, or ``{"relative_file_path": ...}``.
            ref_dir (str): Directory path to resolve relative file paths.

        Returns:
            Any or None: An instance (or list of instances) of the specified
                         class, or None if dict_in is None.
        """
        if dict_in is None:
            return None

        if isinstance(dict_in, dict) and "relative_file_path" in dict_in:
            file_path = os.path.join(ref_dir or "", dict_in["relative_file_path"])
            with open(file_path, "r", encoding="utf-8") as json_file:
                dict_in = json.load(json_file)

        if isinstance(dict_in, list):
            return [other_cls.from_dict(item) for item in dict_in]
        return other_cls.from_dict(dict_in)

    @classmethod
    def from_dict(cls, dict_in: Dict[str, Any]) -> "AccessMission":
        """Create an AccessMission object from a dictionary.

        Args:
            dict_in (Dict[str, Any]): Dictionary containing the mission
                        specifications, see the module documentation.

        Returns:
            AccessMission: An instance of the AccessMission class.
        """
        settings = dict_in.get("settings", None) or {}
        user_dir = settings.get("user_dir", None)

        propagator = AccessMission.load_object(
            PropagatorFactory, dict_in["propagator"], user_dir
        )
        ground_facilities = AccessMission.load_object(
            GroundFacility, dict_in.get("ground_facilities", None), user_dir
        )
        options = AccessOptions.from_dict(dict_in.get("options", None))
        analyses_dict = dict_in.get("analyses", None)
        analyses = (
            [Analysis.from_dict(item) for item in analyses_dict]
            if analyses_dict is not None
            else None
        )
        return cls(
            propagator=propagator,
            duration_days=dict_in["duration_days"],
            ground_facilities=ground_facilities,
            options=options,
            analyses=analyses,
            user_dir=user_dir,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the AccessMission object to a dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation of the AccessMission object.
        """
        return {
            "propagator": self.propagator.to_dict(),
            "duration_days": self.duration_days,
            "ground_facilities": (
                [facility.to_dict() for facility in self.ground_facilities]
                if self.ground_facilities
                else None
            ),
            "options": self.options.to_dict(),
            "analyses": [analysis.to_dict() for analysis in self.analyses],
            "settings": {"user_dir": self.user_dir},
        }

    def execute(self, analysis: Analysis) -> Dict[str, Any]:
        """Execute one analysis.

        Every march of the analysis window runs on its own copy of the
        propagator, so the mission propagator is never advanced.

        Args:
            analysis (Analysis): The analysis to execute.

        Returns:
            Dict[str, Any]: The analysis parameters and its results. Every
                result holds an "intervals" list of ``[start, end]`` ISO
                strings. ECLIPSE results also hold a "summary" with the
                seconds spent in sunlight, penumbra and umbra, and BETA_ANGLE
                results a "crossings" list of ISO strings.
        """
        result = analysis.to_dict()
        analysis_type = analysis.analysis_type

        if analysis_type == AnalysisType.GROUND_FACILITY_ACCESSES:
            intervals = ground_facility_accesses(
                self.propagator.copy(),
                self.ground_facilities,
                self.duration,
                options=self.options,
            )
        elif analysis_type == AnalysisType.GROUND_FACILITY_GAPS:
            intervals = ground_facility_gaps(
                self.propagator.copy(),
                self.ground_facilities,
                self.duration,
                options=self.options,
            )
        elif analysis_type == AnalysisType.ECLIPSE:
            intervals = eclipse_intervals(
                self.propagator.copy(),
                self.duration,
                condition=analysis.condition,
                options=self.options,
            )
            # Copies the propagator for each of its marches.
            result["summary"] = eclipse_time_summary(
                self.propagator, self.duration, options=self.options
            )
        elif analysis_type == AnalysisType.BETA_ANGLE:
            intervals, crossings = beta_angle_analysis(
                self.propagator.copy(),
                analysis.threshold_deg,
                self.duration,
                comparison=analysis.comparison,
                absolute=analysis.absolute,
                options=self.options,
            )
            result["crossings"] = [date.to_iso() for date in crossings]
        else:
            raise ValueError(f"Unsupported analysis type: {analysis_type}")

        result["intervals"] = intervals_to_iso(intervals)
        logger.info(
            "%s analysis found %d interval(s).",
            analysis_type.value,
            len(intervals),
        )
        return result

    def execute_all(self) -> Dict[str, Any]:
        """Execute all the analyses of the mission.

        Returns:
            Dict[str, Any]: JSON-ready dictionary with the keys "window_start",
                "window_end" (ISO strings) and "results" (one entry per
                analysis, in order, see :meth:`execute`).

        Example:
            {
                "window_start": "2024-01-01T12:00:00.000",
                "window_end": "2024-01-02T12:00:00.000",
                "results": [
                    {
                        "analysis_type": "ECLIPSE",
                        "condition": "ECLIPSE",
                        "summary": {"sunlight": ..., "penumbra": ..., "umbra": ...},
                        "intervals": [["2024-01-01T12:20:05.123", "..."], ...]
                    }
                ]
            }
        """
        window_start = self.window_start
        return {
            "window_start": window_start.to_iso(),
            "window_end": (window_start + self.duration).to_iso(),
            "results": [self.execute(analysis) for analysis in self.analyses],
        }
