"""
.. module:: orbitaccess.frames
   :synopsis: Orientation transforms between the recognized reference frames.

The rotations are computed with the Skyfield frame library and returned as
:class:`scipy.spatial.transform.Rotation` objects, so that a vector ``v``
expressed in ``from_frame`` is expressed in ``to_frame`` by ``rot.apply(v)``.
"""

import numpy as np
from scipy.spatial.transform import Rotation
from skyfield.framelib import itrs as skyfield_itrs
from skyfield.sgp4lib import TEME as skyfield_teme
from skyfield.timelib import Time as Skyfield_Time

from .base import ReferenceFrame
from .time import AbsoluteDate


def _gcrf_to_frame_matrix(
    frame: ReferenceFrame, skyfield_time: Skyfield_Time
) -> np.ndarray:
    """Rotation matrix from GCRF to the input frame. Skyfield's GCRS axes are
    taken to be the GCRF axes."""
    if frame == ReferenceFrame.GCRF:
        return np.eye(3)
    if frame == ReferenceFrame.ITRF:
        return np.asarray(skyfield_itrs.rotation_at(skyfield_time))
    if frame == ReferenceFrame.TEME:
        return np.asarray(skyfield_teme.rotation_at(skyfield_time))
    raise ValueError(f"Unsupported reference frame: {frame}")


def frame_transform(
    from_frame: ReferenceFrame, to_frame: ReferenceFrame, date: AbsoluteDate
) -> Rotation:
    """Orientation transform between two reference frames at a date.

    Args:
        from_frame (ReferenceFrame): Frame of the input vectors.
        to_frame (ReferenceFrame): Frame of the output vectors.
        date (AbsoluteDate): Date of the transform.

    Returns:
        scipy.spatial.transform.Rotation: Rotation from `from_frame` to `to_frame`.

    Raises:
        ValueError: If any of the frames is not supported.
    """
    from_frame_ = ReferenceFrame.get(from_frame)
    to_frame_ = ReferenceFrame.get(to_frame)
    if from_frame_ is None or to_frame_ is None:
        raise ValueError(
            f"Unsupported reference frame transform: {from_frame} -> {to_frame}"
        )
    if from_frame_ == to_frame_:
        return Rotation.identity()

    skyfield_time = date.to_skyfield_time()
    from_matrix = _gcrf_to_frame_matrix(from_frame_, skyfield_time)
    to_matrix = _gcrf_to_frame_matrix(to_frame_, skyfield_time)
    return Rotation.from_matrix(to_matrix @ from_matrix.T)
