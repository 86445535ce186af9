"""
.. module:: orbitaccess.propagator
   :synopsis: Spacecraft propagator module for orbitaccess.

The analyses consume a propagator through two methods:

- ``epoch() -> AbsoluteDate``: epoch of the propagator.
- ``propagate_to(elapsed_s) -> (position, velocity)``: state [km, km/s] at
  ``elapsed_s`` seconds after the epoch, in the propagator output frame.
  The call advances the propagator internal state.
"""

from typing import Type, Dict, Any, Callable, Tuple, Union

import numpy as np
from sgp4.api import Satrec as Sgp4_Satrec
from sgp4.api import WGS72 as Sgp4_WGS72
from sgp4.api import SGP4_ERRORS as Sgp4_Errors

from .base import EnumBase, ReferenceFrame, NUMBER_OF_SECONDS_IN_A_DAY
from .orbits import TwoLineElementSet
from .time import AbsoluteDate


class PropagatorType(EnumBase):
    """Enumeration of supported propagator types."""

    SGP4_PROPAGATOR = "SGP4_PROPAGATOR"


class PropagatorFactory:
    """Factory class to register and invoke the appropriate propagator class.

    This class allows registering propagator classes and retrieving instances
    of the appropriate propagator based on specifications.

    Example:
        PropagatorFactory.register_type("CUSTOM_PROPAGATOR")(CustomPropagator)
        specs = {"propagator_type": "CUSTOM_PROPAGATOR", ...}
        propagator = PropagatorFactory.from_dict(specs)

    Attributes:
        _registry (Dict[str, Type]): A dictionary mapping propagator type
                                     labels to their respective classes.
    """

    _registry: Dict[str, Type] = {}

    @classmethod
    def register_type(cls, type_name: str) -> Callable[[Type], Type]:
        """
        Decorator to register a propagator class under a type name.
        """

        def decorator(propagator_class: Type) -> Type:
            cls._registry[type_name] = propagator_class
            return propagator_class

        return decorator

    @classmethod
    def from_dict(cls, specs: Dict[str, Any]) -> object:
        """Retrieves an instance of the appropriate propagator based on specifications.

        Args:
            specs (Dict[str, Any]): A dictionary containing propagator specifications.
                Must include a valid propagator type in the "propagator_type" key.

        Returns:
            object: An instance of the appropriate propagator class initialized
                 with the given specifications.

        Raises:
            KeyError: If the "propagator_type" key is missing in the specifications dictionary.
            ValueError: If the specified propagator type is not registered.
        """
        propagator_type_str = specs.get("propagator_type")
        if propagator_type_str is None:
            raise KeyError(
                'Propagator type key "propagator_type" not found in specifications dictionary.'
            )
        propagator_class = cls._registry.get(propagator_type_str)
        if not propagator_class:
            raise ValueError(
                f'Propagator type "{propagator_type_str}" is not registered.'
            )
        return propagator_class.from_dict(specs)


@PropagatorFactory.register_type(PropagatorType.SGP4_PROPAGATOR.value)
class SGP4Propagator:
    """A Simplified General Perturbations 4 (SGP4) orbit propagator class.

    This class is a stateful wrapper around the `sgp4` Satrec object. Every call
    to :meth:`propagate_to` updates the last propagated state. The output frame
    is TEME.

    Attributes:
        orbit (TwoLineElementSet): The propagated TLE.
        frame (ReferenceFrame): Output frame, always TEME.
        elapsed (float or None): Time of the last propagated state [s from epoch].
        position (np.ndarray or None): Last propagated position [km].
        velocity (np.ndarray or None): Last propagated velocity [km/s].
    """

    frame = ReferenceFrame.TEME

    def __init__(self, orbit: TwoLineElementSet):
        """Initializes the SGP4Propagator.

        Args:
            orbit (TwoLineElementSet): Orbit to be propagated.

        Raises:
            TypeError: If the orbit is not a TwoLineElementSet.
        """
        if not isinstance(orbit, TwoLineElementSet):
            raise TypeError(
                "Invalid orbit type for SGP4 propagation. Must be a TwoLineElementSet."
            )
        line1, line2 = orbit.get_tle_as_tuple()
        self.orbit = orbit
        self._satrec = Sgp4_Satrec.twoline2rv(line1, line2, Sgp4_WGS72)
        self._epoch = AbsoluteDate.from_julian_date(
            self._satrec.jdsatepoch, self._satrec.jdsatepochF
        )
        self.elapsed = None
        self.position = None
        self.velocity = None

    @classmethod
    def from_dict(cls, specs: Dict[str, Any]) -> "SGP4Propagator":
        """Parses an SGP4Propagator object from a dictionary.

        Args:
            specs (dict): Dictionary with the SGP4 propagator specifications.
                The following keys are expected:
                - "orbit" (dict): TLE dictionary, see
                  :meth:`orbitaccess.orbits.TwoLineElementSet.from_dict`.

        Returns:
            SGP4Propagator: An instance of the SGP4Propagator class.
        """
        return cls(TwoLineElementSet.from_dict(specs["orbit"]))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the SGP4Propagator object to a dictionary."""
        return {
            "propagator_type": PropagatorType.SGP4_PROPAGATOR.value,
            "orbit": self.orbit.to_dict(),
        }

    def epoch(self) -> AbsoluteDate:
        """Epoch of the TLE."""
        return self._epoch

    def propagate_to(
        self, elapsed: Union[int, float]
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Propagate the orbit to a time after the epoch.

        Args:
            elapsed (float): Seconds since the TLE epoch.

        Returns:
            Tuple[np.ndarray, np.ndarray]: Position [km] and velocity [km/s] in TEME.

        Raises:
            RuntimeError: If SGP4 reports an error at the requested time.
        """
        error, position, velocity = self._satrec.sgp4(
            self._satrec.jdsatepoch,
            self._satrec.jdsatepochF + elapsed / NUMBER_OF_SECONDS_IN_A_DAY,
        )
        if error != 0:
            raise RuntimeError(
                f"SGP4 propagation failed {elapsed} s after epoch: "
                f"{Sgp4_Errors.get(error, 'unknown error')} (code {error})."
            )
        self.elapsed = float(elapsed)
        self.position = np.array(position)
        self.velocity = np.array(velocity)
        return self.position, self.velocity

    def copy(self) -> "SGP4Propagator":
        """Independent propagator with the same orbit and state. Use one copy
        per analysis when analyses run concurrently."""
        other = SGP4Propagator(self.orbit)
        other.elapsed = self.elapsed
        if self.position is not None:
            other.position = self.position.copy()
            other.velocity = self.velocity.copy()
        return other
