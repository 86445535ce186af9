"""
.. module:: orbitaccess.crossing
   :synopsis: Refinement of the instant at which a boolean function of time
              changes value.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_CROSSING_TOLERANCE = 1e-3  # seconds
DEFAULT_MAX_CROSSING_ITERATIONS = 100


def find_crossing(
    f: Callable[[float], bool],
    t0: float,
    t1: float,
    f_t0: bool,
    f_t1: bool,
    tolerance: float = DEFAULT_CROSSING_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_CROSSING_ITERATIONS,
) -> float:
    """Find the instant in [t0, t1] at which the boolean function `f` changes
    value, using bisection.

    The bracket is halved at each iteration, keeping the half whose end values
    still disagree. The iteration stops when the bracket is narrower than
    `tolerance` or after `max_iterations` evaluations of `f`.

    Args:
        f (Callable[[float], bool]): Boolean function of time.
        t0 (float): Left end of the bracket.
        t1 (float): Right end of the bracket.
        f_t0 (bool): Known value of `f` at `t0`.
        f_t1 (bool): Known value of `f` at `t1`. Must differ from `f_t0`.
        tolerance (float): Bracket width at which the refinement stops.
                    Defaults to 1 ms when time is in seconds.
        max_iterations (int): Maximum number of evaluations of `f`.

    Returns:
        float: Midpoint of the final bracket.

    Raises:
        ValueError: If `f_t0 == f_t1` (there is no crossing to refine), if
                    `t1 <= t0`, or if `tolerance` or `max_iterations`
                    is not positive.
    """
    f_t0 = bool(f_t0)
    f_t1 = bool(f_t1)
    if f_t0 == f_t1:
        raise ValueError(
            f"No crossing to refine: the function has the same value ({f_t0}) "
            f"at both ends of the bracket [{t0}, {t1}]."
        )
    if not t1 > t0:
        raise ValueError(f"Invalid bracket [{t0}, {t1}].")
    if tolerance <= 0:
        raise ValueError(f"Crossing tolerance must be positive, got {tolerance}.")
    if max_iterations < 1:
        raise ValueError(
            f"Maximum number of iterations must be positive, got {max_iterations}."
        )

    left, right = float(t0), float(t1)
    iterations = 0
    while (right - left) >= tolerance and iterations < max_iterations:
        mid = 0.5 * (left + right)
        if bool(f(mid)) == f_t0:
            left = mid
        else:
            right = mid
        iterations += 1

    crossing = 0.5 * (left + right)
    logger.debug(
        "Crossing %s -> %s found at %.6f after %d iterations (bracket %.3e).",
        f_t0,
        f_t1,
        crossing,
        iterations,
        right - left,
    )
    return crossing
