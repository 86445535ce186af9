"""
.. module:: orbitaccess.utils
    :synopsis: Utilities to help with various calculations.

Collection of utility functions for various calculations. The API of the functions
in this module should only use standard and widely used data structures such as lists
and numpy arrays. It should not use custom data structures or types.
This ensures compatibility and ease of use across different parts
of the codebase.
"""

from typing import Union
import numpy as np


def normalize(v: Union[list[float], np.ndarray]) -> np.ndarray:
    """Normalize an input vector.
    Args:
        v (Union[list[float], np.ndarray]): Input vector to be normalized.
    Returns:
        np.ndarray: Normalized vector.
    Raises:
        ZeroDivisionError: If the input vector has zero magnitude.
    """
    v = np.asarray(v)
    norm = np.linalg.norm(v)
    if norm == 0:
        raise ZeroDivisionError(
            "Encountered division by zero in vector normalization function."
        )
    return v / norm


def calculate_elevation_angles(
    observer_positions: np.ndarray,
    zenith_directions: np.ndarray,
    target_position: np.ndarray,
    dtype: type = np.float64,
) -> np.ndarray:
    """
    Calculate the elevation angles of one target seen from several observers.

    Args:
        observer_positions (np.ndarray): (N, 3) array of observer positions.
        zenith_directions (np.ndarray): (N, 3) array of unit local zenith vectors.
        target_position (np.ndarray): Target position, in the same frame as the observers.
        dtype (type): Floating-point type of the computation.

    Returns:
        np.ndarray: (N,) array of elevation angles in degrees.

    Raises:
        ValueError: If the target coincides with one of the observers.
    """
    relative_vectors = np.asarray(target_position, dtype=dtype) - np.asarray(
        observer_positions, dtype=dtype
    )
    relative_norms = np.linalg.norm(relative_vectors, axis=1)
    if np.any(relative_norms == 0):
        raise ValueError(
            "Relative vector between observer and target cannot be zero."
        )
    sin_elevation = (
        np.einsum("ij,ij->i", relative_vectors, np.asarray(zenith_directions, dtype=dtype))
        / relative_norms
    )
    return np.degrees(np.arcsin(np.clip(sin_elevation, -1.0, 1.0)))
