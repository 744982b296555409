"""Orientation repair for lanelet strips.

`build_strip` only looks at distances, so depending on how the two
boundaries were drawn the resulting surface can face downward.  The
repair pass rebuilds the strip with one or both boundaries reversed
until every vertex normal points to the upper hemisphere.  The
reversals form a fixed cycle:

    NONE -> LEFT -> RIGHT -> ALL

A repair starts with the mode cached from the previous rebuild, then
walks the cycle above over the modes not tried yet, so a stale cache
never keeps good geometry face down.  Each mode is tried at most once
per repair.  If no mode faces up, the ALL mesh is accepted anyway and
the outcome is reported as unresolved.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .strip import Mesh, build_strip, vertex_normals
from ..roadmodel.lanes import UP
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ReversedMode(Enum):
    """Which boundaries are reversed before building the strip."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    ALL = "all"

    def next(self) -> Optional["ReversedMode"]:
        """Return the mode tried after this one, or None after ALL."""
        return _NEXT_MODE[self]

    def apply(self, left: Sequence, right: Sequence) -> Tuple[np.ndarray, np.ndarray]:
        """Return reordered copies of the two boundaries."""
        left = np.array(left, dtype=float).reshape(-1, 3)
        right = np.array(right, dtype=float).reshape(-1, 3)
        if self in (ReversedMode.LEFT, ReversedMode.ALL):
            left = left[::-1].copy()
        if self in (ReversedMode.RIGHT, ReversedMode.ALL):
            right = right[::-1].copy()
        return left, right


_NEXT_MODE = {
    ReversedMode.NONE: ReversedMode.LEFT,
    ReversedMode.LEFT: ReversedMode.RIGHT,
    ReversedMode.RIGHT: ReversedMode.ALL,
    ReversedMode.ALL: None,
}


def _cycle() -> List[ReversedMode]:
    """Return every mode in the fixed repair order."""
    modes = []
    mode = ReversedMode.NONE
    while mode is not None:
        modes.append(mode)
        mode = mode.next()
    return modes


@dataclass
class RepairResult:
    """Outcome of one orientation repair."""

    mesh: Mesh
    mode: ReversedMode
    """Mode that produced `mesh`."""

    attempts: List[ReversedMode] = field(default_factory=list)
    """Modes tried, in order."""

    resolved: bool = True
    """False when every attempt faced down and a misoriented mesh was kept."""


def is_misoriented(mesh: Mesh, up: Sequence[float] = UP) -> bool:
    """Check whether any vertex normal is more than 90 degrees from `up`.

    Zero normals (isolated or degenerate vertices) never count as
    misoriented, nor does a mesh with fewer than two vertices.
    """
    if mesh.vertex_count < 2:
        return False
    up = np.asarray(up, dtype=float)
    up = up / np.linalg.norm(up)
    dots = vertex_normals(mesh) @ up
    return bool(np.any(dots < -1e-9))


def repair_orientation(
    left: Sequence,
    right: Sequence,
    start_mode: ReversedMode = ReversedMode.NONE,
    max_attempts: int = 4,
    up: Sequence[float] = UP,
    name: str = ""
) -> RepairResult:
    """Build a strip that faces `up`, reversing boundaries if needed.

    Parameters
    ----------
    left, right : sequence of points
        Boundaries in their stored order.  They are never modified;
        every attempt works on fresh copies.
    start_mode : ReversedMode, optional
        Mode tried first, typically the one cached from the previous
        rebuild of the same lanelet.  The remaining modes follow in
        cycle order.
    max_attempts : int, optional
        Upper bound on the number of strips built (default 4, one per
        mode).
    up : sequence of float, optional
        Direction the surface has to face.
    name : str, optional
        Name given to the mesh.

    Returns
    -------
    RepairResult
        The accepted mesh, the mode that produced it, all modes tried
        and whether the orientation was actually resolved.
    """
    order = [start_mode] + [m for m in _cycle() if m is not start_mode]
    attempts: List[ReversedMode] = []
    fallback = None
    for mode in order[:max(1, max_attempts)]:
        ordered_left, ordered_right = mode.apply(left, right)
        mesh = build_strip(ordered_left, ordered_right, name=name)
        attempts.append(mode)
        if not is_misoriented(mesh, up):
            logger.debug("Strip %r oriented with mode %s after %d attempt(s)",
                         name, mode.value, len(attempts))
            return RepairResult(mesh, mode, attempts, True)
        if fallback is None or fallback[0] is not ReversedMode.ALL:
            fallback = (mode, mesh)

    logger.warning("Strip %r still faces down after trying %s; keeping %s result",
                   name, ", ".join(m.value for m in attempts), fallback[0].value)
    return RepairResult(fallback[1], fallback[0], attempts, False)
