"""Triangle strip between two lane boundaries.

This module turns a left and a right boundary polyline into the
drivable surface of a lanelet.  The two boundaries are edited
independently and usually have a different number of points, so they
cannot simply be zipped together.  Instead the strip is grown greedily:
at every step the side whose next point lies closer to the last placed
point of the opposite side is advanced, and one triangle is emitted
bridging the two most recent points of each side.

The result is not globally optimal but needs no resampling and is
linear in the total number of points.  Winding is not considered here;
see `orientation` for the repair pass.
"""

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ..utils.logging import get_logger

logger = get_logger(__name__)


def _empty_vertices() -> np.ndarray:
    return np.zeros((0, 3), dtype=float)


def _empty_indices() -> np.ndarray:
    return np.zeros(0, dtype=int)


@dataclass
class Mesh:
    """Vertex and triangle index lists of a lanelet surface."""

    vertices: np.ndarray = field(default_factory=_empty_vertices)
    """Array of shape (N, 3) with vertex positions."""

    indices: np.ndarray = field(default_factory=_empty_indices)
    """Flat triangle list; every three entries form one triangle."""

    name: str = ""

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def triangles(self) -> np.ndarray:
        """Triangle indices reshaped to (K, 3)."""
        return self.indices.reshape(-1, 3)

    @property
    def is_empty(self) -> bool:
        return self.vertex_count == 0 and len(self.indices) == 0

    def clear(self) -> None:
        self.vertices = _empty_vertices()
        self.indices = _empty_indices()

    def copy(self) -> "Mesh":
        return Mesh(self.vertices.copy(), self.indices.copy(), self.name)


def _as_points(points: Sequence) -> np.ndarray:
    return np.asarray(points, dtype=float).reshape(-1, 3)


def build_strip(left: Sequence, right: Sequence, name: str = "") -> Mesh:
    """Triangulate the surface between two boundaries.

    Parameters
    ----------
    left : sequence of points
        Left boundary, shape (M, 3), in travel order.
    right : sequence of points
        Right boundary, shape (N, 3), in travel order.
    name : str, optional
        Name given to the resulting mesh.

    Returns
    -------
    Mesh
        Vertices are ``[right[0], left[0]]`` followed by the points in
        the order they were consumed, so a completed strip holds M + N
        vertices and M + N - 2 triangles.

    Raises
    ------
    ValueError
        If either boundary is empty.
    """
    left = _as_points(left)
    right = _as_points(right)
    if len(left) == 0 or len(right) == 0:
        raise ValueError("Both boundaries need at least one point to build a strip")

    last_left = left[0]
    last_right = right[0]
    last_left_index = 1
    last_right_index = 0
    left_count = 1
    right_count = 1
    vertices = [last_right, last_left]
    indices = []

    for i in range(len(left) + len(right) - 2):
        add_left = left_count < len(left)
        add_right = right_count < len(right)
        if not (add_left or add_right):
            logger.debug("Strip %r ran out of points after %d steps", name, i)
            break

        # Ties go to the left side
        if add_left and add_right:
            dl = np.linalg.norm(left[left_count] - last_right)
            dr = np.linalg.norm(right[right_count] - last_left)
            if dl > dr:
                add_left = False

        indices.extend((last_right_index, last_left_index))
        new_index = i + 2
        if add_left:
            last_left = left[left_count]
            left_count += 1
            last_left_index = new_index
            vertices.append(last_left)
        else:
            last_right = right[right_count]
            right_count += 1
            last_right_index = new_index
            vertices.append(last_right)
        indices.append(new_index)

    return Mesh(np.array(vertices, dtype=float), np.array(indices, dtype=int), name)


def triangle_normals(mesh: Mesh) -> np.ndarray:
    """Return unnormalised face normals ``(b - a) x (c - a)`` of shape (K, 3)."""
    if mesh.triangle_count == 0:
        return np.zeros((0, 3))
    tri = mesh.vertices[mesh.triangles]
    return np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])


def vertex_normals(mesh: Mesh) -> np.ndarray:
    """Compute per-vertex normals.

    Each vertex normal is the normalised, area-weighted sum of the face
    normals of the triangles using that vertex.  Vertices that belong to
    no triangle, or whose incident normals cancel out, get a zero
    normal.

    Parameters
    ----------
    mesh : Mesh
        Mesh to inspect.

    Returns
    -------
    numpy.ndarray
        Array of shape (N, 3) aligned with ``mesh.vertices``.
    """
    normals = np.zeros((mesh.vertex_count, 3))
    faces = triangle_normals(mesh)
    for corner in range(3):
        np.add.at(normals, mesh.triangles[:, corner], faces)
    norms = np.linalg.norm(normals, axis=1)
    degenerate = norms < 1e-12
    normals[degenerate] = 0.0
    normals[~degenerate] /= norms[~degenerate, None]
    return normals
