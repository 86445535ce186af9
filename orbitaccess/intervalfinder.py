"""
.. module:: orbitaccess.intervalfinder
   :synopsis: Detection of the intervals during which a boolean predicate of
              time holds, and of the complementary gaps.

The :class:`IntervalFinder` marches the analysis window at a fixed step,
evaluates the predicate at every sample and refines each change of value with
:func:`orbitaccess.crossing.find_crossing`. :func:`derive_gaps` computes the
complement of the accesses inside the window.

Times handled by this module are seconds since the start of the analysis
window. :func:`intervals_to_dates` converts them to absolute dates.
"""

import logging
import math
from typing import Any, Callable, List, Sequence, Tuple

from .base import EnumBase
from .crossing import (
    find_crossing,
    DEFAULT_CROSSING_TOLERANCE,
    DEFAULT_MAX_CROSSING_ITERATIONS,
)
from .time import AbsoluteDate

logger = logging.getLogger(__name__)

Interval = Tuple[Any, Any]


class PredicateState(EnumBase):
    """State of the interval finder while marching the analysis window."""

    INITIAL = "INITIAL"
    VISIBLE = "VISIBLE"
    NOT_VISIBLE = "NOT_VISIBLE"


def sample_times(duration: float, step: float) -> List[float]:
    """Sampling instants ``0, step, 2*step, ...`` of a window of `duration`
    seconds. When the grid does not land on `duration`, a last sample is
    added at `duration`.

    Raises:
        ValueError: If `duration` or `step` is not positive.
    """
    if step <= 0:
        raise ValueError(f"Sampling step must be positive, got {step}.")
    if duration <= 0:
        raise ValueError(f"Window duration must be positive, got {duration}.")

    num_steps = int(math.floor(duration / step))
    times = [min(k * step, duration) for k in range(num_steps + 1)]
    if times[-1] < duration:
        times.append(float(duration))
    return times


class IntervalFinder:
    """Finds the intervals of a window during which a predicate is true.

    Accesses shorter than the sampling step may be missed entirely: this is
    the accuracy bound of fixed-step sampling and no error is raised.

    Attributes:
        step (float): Sampling step in seconds.
        tolerance (float): Width of the bisection bracket at which the
                           refinement of a crossing stops, in seconds.
        max_iterations (int): Bisection iteration budget per crossing.
    """

    def __init__(
        self,
        step: float = 60.0,
        tolerance: float = DEFAULT_CROSSING_TOLERANCE,
        max_iterations: int = DEFAULT_MAX_CROSSING_ITERATIONS,
    ):
        if step <= 0:
            raise ValueError(f"Sampling step must be positive, got {step}.")
        self.step = float(step)
        self.tolerance = float(tolerance)
        self.max_iterations = int(max_iterations)

    @classmethod
    def from_options(cls, options) -> "IntervalFinder":
        """Builds the finder from an :class:`orbitaccess.config.AccessOptions`."""
        return cls(
            step=options.step,
            tolerance=options.crossing_tolerance,
            max_iterations=options.max_crossing_iterations,
        )

    def _refine(
        self,
        predicate: Callable[[float], bool],
        t0: float,
        t1: float,
        f_t0: bool,
        f_t1: bool,
    ) -> float:
        return find_crossing(
            predicate,
            t0,
            t1,
            f_t0,
            f_t1,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
        )

    def execute(
        self, predicate: Callable[[float], bool], duration: float
    ) -> List[Tuple[float, float]]:
        """Find the accesses of the predicate in the window [0, duration].

        Args:
            predicate (Callable[[float], bool]): Boolean function of the time
                                    elapsed since the window start [s].
            duration (float): Duration of the window [s].

        Returns:
            List[Tuple[float, float]]: Ordered, non-overlapping (start, end)
                                       tuples of the accesses [s].

        Raises:
            ValueError: If `duration` is not positive.
        """
        times = sample_times(duration, self.step)

        accesses: List[Tuple[float, float]] = []
        state = PredicateState.INITIAL
        access_start = 0.0
        previous_time = 0.0

        for current_time in times:
            visible = bool(predicate(current_time))

            if state == PredicateState.INITIAL:
                # The window start is an exact boundary.
                if visible:
                    access_start = current_time
                    state = PredicateState.VISIBLE
                else:
                    state = PredicateState.NOT_VISIBLE

            elif state == PredicateState.NOT_VISIBLE:
                if visible:
                    access_start = self._refine(
                        predicate, previous_time, current_time, False, True
                    )
                    state = PredicateState.VISIBLE

            elif state == PredicateState.VISIBLE:
                if not visible:
                    access_end = self._refine(
                        predicate, previous_time, current_time, True, False
                    )
                    accesses.append((access_start, access_end))
                    state = PredicateState.NOT_VISIBLE

            else:
                raise RuntimeError(f"Unhandled predicate state: {state}")

            previous_time = current_time

        # The window end is an exact boundary.
        if state == PredicateState.VISIBLE:
            accesses.append((access_start, float(duration)))

        logger.info(
            "Found %d access(es) in a window of %.3f s (%d samples, step %.3f s).",
            len(accesses),
            duration,
            len(times),
            self.step,
        )
        return accesses


def derive_gaps(
    accesses: Sequence[Interval], window_start: Any, window_end: Any
) -> List[Interval]:
    """Complement of the accesses inside the window [window_start, window_end].

    Accesses and gaps together tile the window without overlap. The bounds may
    be of any ordered type (seconds, :class:`AbsoluteDate`) as long as the
    accesses use the same type.

    Args:
        accesses (Sequence[Interval]): Ordered, non-overlapping accesses.
        window_start: Start of the window.
        window_end: End of the window.

    Returns:
        List[Interval]: Ordered (start, end) tuples of the gaps.
    """
    if len(accesses) == 0:
        return [(window_start, window_end)]

    gaps: List[Interval] = []
    if accesses[0][0] != window_start:
        gaps.append((window_start, accesses[0][0]))

    for (_, previous_end), (next_start, _) in zip(accesses[:-1], accesses[1:]):
        # Touching accesses leave no gap.
        if previous_end != next_start:
            gaps.append((previous_end, next_start))

    if accesses[-1][1] != window_end:
        gaps.append((accesses[-1][1], window_end))

    logger.debug("Derived %d gap(s) from %d access(es).", len(gaps), len(accesses))
    return gaps


def intervals_to_dates(
    intervals: Sequence[Tuple[float, float]], window_start: AbsoluteDate
) -> List[Tuple[AbsoluteDate, AbsoluteDate]]:
    """Convert intervals in seconds since the window start to absolute dates."""
    return [
        (window_start + start, window_start + end) for start, end in intervals
    ]


def interval_boundaries(
    intervals: Sequence[Interval], window_start: Any, window_end: Any
) -> List[Any]:
    """Ordered starts and ends of the intervals, leaving out the window bounds.

    These are the instants at which the predicate changes value inside the
    window, read from an access list without marching the window again.
    """
    return [
        boundary
        for interval in intervals
        for boundary in interval
        if boundary != window_start and boundary != window_end
    ]
