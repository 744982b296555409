"""Lane cross sections from centre clicks and existing boundaries.

This module defines helper functions to derive lane boundary points.
A lanelet is edited by clicking centre points on the ground plane; each
click is turned into a cross section by offsetting it half the lane
width to either side, perpendicular to the direction of travel.  The
ground plane is XZ with +Y pointing up.

Adjacent lanes are synthesised by mirroring the far boundary of an
existing lane across the boundary the two lanes will share.
"""

from typing import Tuple

import numpy as np

UP = np.array([0.0, 1.0, 0.0])
DOWN = -UP


def _normalized(vector: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vector)
    if norm < 1e-12:
        return np.zeros(3)
    return vector / norm


def lateral_offsets(
    center: np.ndarray,
    direction: np.ndarray,
    width: float
) -> Tuple[np.ndarray, np.ndarray]:
    """Offset a centre point half a lane width to the left and right.

    Parameters
    ----------
    center : numpy.ndarray
        XYZ position of the centre point.
    direction : numpy.ndarray
        Direction of travel at the centre point.  Need not be unit
        length.
    width : float
        Lane width in metres.

    Returns
    -------
    (numpy.ndarray, numpy.ndarray)
        Tuple of (left point, right point).  The left offset is along
        ``direction x up`` and the right offset along
        ``direction x down``, so the two are anti-parallel.  A zero
        direction leaves both points on the centre.
    """
    center = np.asarray(center, dtype=float)
    direction = np.asarray(direction, dtype=float)
    half = width / 2.0
    left = center + _normalized(np.cross(direction, UP)) * half
    right = center + _normalized(np.cross(direction, DOWN)) * half
    return left, right


def cross_section(
    previous_center: np.ndarray,
    center: np.ndarray,
    width: float
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the (left, right) pair at `center` for the segment ending there."""
    previous_center = np.asarray(previous_center, dtype=float)
    center = np.asarray(center, dtype=float)
    return lateral_offsets(center, center - previous_center, width)


def closest_points_on_polyline(points: np.ndarray, polyline: np.ndarray) -> np.ndarray:
    """Project each point onto its closest location on a polyline.

    Parameters
    ----------
    points : numpy.ndarray
        Array of shape (N, 3).
    polyline : numpy.ndarray
        Array of shape (M, 3), M >= 1.

    Returns
    -------
    numpy.ndarray
        Array of shape (N, 3) with the closest polyline location for
        every input point.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    polyline = np.asarray(polyline, dtype=float).reshape(-1, 3)
    if len(polyline) == 1:
        return np.repeat(polyline, len(points), axis=0)

    starts = polyline[:-1]
    seg = polyline[1:] - starts
    seg_len_sq = np.einsum('ij,ij->i', seg, seg)
    # (N, S) projection parameter of every point on every segment
    rel = points[:, None, :] - starts[None, :, :]
    t = np.einsum('nsk,sk->ns', rel, seg) / np.where(seg_len_sq == 0, 1, seg_len_sq)
    t = np.clip(t, 0.0, 1.0)
    candidates = starts[None, :, :] + t[..., None] * seg[None, :, :]
    dists = np.linalg.norm(candidates - points[:, None, :], axis=2)
    best = np.argmin(dists, axis=1)
    return candidates[np.arange(len(points)), best]


def mirror_boundary(source: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """Reflect a boundary across another one.

    Each point of `source` is reflected through its closest point on
    the `axis` polyline.  Mirroring the right boundary of a lane across
    its left boundary yields the left boundary of a new lane of the same
    width next to it.

    Parameters
    ----------
    source : numpy.ndarray
        Array of shape (N, 3), the boundary being mirrored.
    axis : numpy.ndarray
        Array of shape (M, 3), the boundary the lanes will share.

    Returns
    -------
    numpy.ndarray
        Array of shape (N, 3) in the same order as `source`.
    """
    source = np.asarray(source, dtype=float).reshape(-1, 3)
    if len(source) == 0 or len(axis) == 0:
        return source.copy()
    foot = closest_points_on_polyline(source, axis)
    return 2.0 * foot - source
