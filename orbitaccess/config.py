"""
.. module:: orbitaccess.config
   :synopsis: Configuration of the access and gap analyses.

All the options of an analysis are grouped in a single :class:`AccessOptions`
object:

======================== =============================================== ============
Option                   Effect                                          Default
======================== =============================================== ============
min_elevation_deg        Visibility threshold angle [deg].               10
reduction                Combines the per-target visibilities into one.  ANY (OR)
step                     Sampling interval [s].                          60
start_offset             Offset from the propagator epoch to the         0
                         window start [s].
crossing_tolerance       Bisection bracket width at which the            1e-3
                         refinement of a crossing stops [s].
max_crossing_iterations  Bisection iteration budget per crossing.        100
precision                Floating-point precision of the formulas.       FLOAT64
======================== =============================================== ============
"""

from typing import Any, Callable, Dict, Optional, Union

import numpy as np

from .base import EnumBase, Precision
from .crossing import DEFAULT_CROSSING_TOLERANCE, DEFAULT_MAX_CROSSING_ITERATIONS


class Reduction(EnumBase):
    """Built-in reductions of the visibility vector.

    Attributes:
        ANY (str): Visible if at least one target sees the satellite (logical OR).
        ALL (str): Visible if every target sees the satellite (logical AND).
    """

    ANY = "ANY"
    ALL = "ALL"

    def to_function(self) -> Callable[[np.ndarray], bool]:
        """Function reducing a boolean vector to a boolean."""
        if self == Reduction.ALL:
            return np.all
        return np.any


class AccessOptions:
    """Options of an access/gap analysis.

    Attributes:
        min_elevation_deg (float): Minimum elevation angle for visibility [deg].
        reduction (Callable[[np.ndarray], bool]): Function combining the
                            per-target visibility vector into a single boolean.
        step (float): Sampling step [s].
        start_offset (float): Window start after the propagator epoch [s].
        crossing_tolerance (float): Bisection tolerance [s].
        max_crossing_iterations (int): Bisection iteration budget.
        precision (Precision): Floating-point precision of the formulas.
    """

    def __init__(
        self,
        min_elevation_deg: float = 10.0,
        reduction: Union[Reduction, str, Callable[[np.ndarray], bool]] = Reduction.ANY,
        step: float = 60.0,
        start_offset: float = 0.0,
        crossing_tolerance: float = DEFAULT_CROSSING_TOLERANCE,
        max_crossing_iterations: int = DEFAULT_MAX_CROSSING_ITERATIONS,
        precision: Union[Precision, str] = Precision.FLOAT64,
    ):
        """
        Args:
            min_elevation_deg (float): Minimum elevation angle [deg]. Defaults to 10.
            reduction (Union[Reduction, str, Callable]): Reduction name ("ANY",
                            "ALL") or a function of the boolean visibility vector.
                            Defaults to "ANY".
            step (float): Sampling step [s]. Defaults to 60.
            start_offset (float): Window start after the propagator epoch [s].
                            Defaults to 0.
            crossing_tolerance (float): Bisection tolerance [s]. Defaults to 1e-3.
            max_crossing_iterations (int): Bisection iteration budget. Defaults to 100.
            precision (Union[Precision, str]): "FLOAT32" or "FLOAT64".
                            Defaults to "FLOAT64".

        Raises:
            TypeError: If a numeric option is not numeric, or the reduction is
                       neither a recognized name nor callable.
            ValueError: If an option is out of its valid range.
        """
        for name, value in (
            ("min_elevation_deg", min_elevation_deg),
            ("step", step),
            ("start_offset", start_offset),
            ("crossing_tolerance", crossing_tolerance),
            ("max_crossing_iterations", max_crossing_iterations),
        ):
            if isinstance(value, bool) or not isinstance(
                value, (int, float, np.integer, np.floating)
            ):
                raise TypeError(f"{name} must be a numeric value.")

        if not -90.0 <= min_elevation_deg <= 90.0:
            raise ValueError(
                f"min_elevation_deg must be within [-90, 90], got {min_elevation_deg}."
            )
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}.")
        if start_offset < 0:
            raise ValueError(f"start_offset must not be negative, got {start_offset}.")
        if crossing_tolerance <= 0:
            raise ValueError(
                f"crossing_tolerance must be positive, got {crossing_tolerance}."
            )
        if max_crossing_iterations < 1:
            raise ValueError(
                f"max_crossing_iterations must be positive, got {max_crossing_iterations}."
            )

        if isinstance(reduction, str):
            reduction_type = Reduction.get(reduction)
            if reduction_type is None:
                raise ValueError(f"Unknown reduction: {reduction}")
            reduction = reduction_type
        elif not isinstance(reduction, Reduction) and not callable(reduction):
            raise TypeError("reduction must be a Reduction name or a callable.")

        precision_type = Precision.get(precision)
        if precision_type is None:
            raise ValueError(f"Unknown precision: {precision}")

        self.min_elevation_deg = float(min_elevation_deg)
        self._reduction = reduction
        self.step = float(step)
        self.start_offset = float(start_offset)
        self.crossing_tolerance = float(crossing_tolerance)
        self.max_crossing_iterations = int(max_crossing_iterations)
        self.precision = precision_type

    @property
    def reduction(self) -> Callable[[np.ndarray], bool]:
        """The reduction function."""
        if isinstance(self._reduction, Reduction):
            return self._reduction.to_function()
        return self._reduction

    @property
    def dtype(self) -> type:
        """Numpy dtype of the configured precision."""
        return self.precision.to_dtype()

    @classmethod
    def from_dict(cls, dict_in: Optional[Dict[str, Any]]) -> "AccessOptions":
        """Create an AccessOptions object from a dictionary.

        Args:
            dict_in (Dict[str, Any]): Dictionary with the (all optional) keys:
                - "min_elevation_deg" (float)
                - "reduction" (str): "ANY" or "ALL".
                - "step" (float)
                - "start_offset" (float)
                - "crossing_tolerance" (float)
                - "max_crossing_iterations" (int)
                - "precision" (str): "FLOAT32" or "FLOAT64".
                Missing keys take their default values.

        Returns:
            AccessOptions: An instance of the AccessOptions class.
        """
        dict_in = dict_in or {}
        return cls(
            min_elevation_deg=dict_in.get("min_elevation_deg", 10.0),
            reduction=dict_in.get("reduction", Reduction.ANY),
            step=dict_in.get("step", 60.0),
            start_offset=dict_in.get("start_offset", 0.0),
            crossing_tolerance=dict_in.get(
                "crossing_tolerance", DEFAULT_CROSSING_TOLERANCE
            ),
            max_crossing_iterations=dict_in.get(
                "max_crossing_iterations", DEFAULT_MAX_CROSSING_ITERATIONS
            ),
            precision=dict_in.get("precision", Precision.FLOAT64),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the AccessOptions object to a dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation of the options.

        Raises:
            ValueError: If the reduction is a custom function, which cannot be
                        serialized.
        """
        if not isinstance(self._reduction, Reduction):
            raise ValueError("A custom reduction function cannot be serialized.")
        return {
            "min_elevation_deg": self.min_elevation_deg,
            "reduction": self._reduction.to_string(),
            "step": self.step,
            "start_offset": self.start_offset,
            "crossing_tolerance": self.crossing_tolerance,
            "max_crossing_iterations": self.max_crossing_iterations,
            "precision": self.precision.to_string(),
        }


def resolve_options(
    options: Union["AccessOptions", Dict[str, Any], None]
) -> AccessOptions:
    """Options given as an AccessOptions object, a dictionary or None (defaults)."""
    if options is None:
        return AccessOptions()
    if isinstance(options, AccessOptions):
        return options
    if isinstance(options, dict):
        return AccessOptions.from_dict(options)
    raise TypeError("options must be an AccessOptions object, a dictionary or None.")
