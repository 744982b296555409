"""Lanelets: a pair of boundaries and the surface between them.

A `Lanelet` owns (or shares) a left and a right `Boundary` and keeps a
triangle mesh of the drivable surface in sync with them.  Lanelets are
drawn by clicking centre points on the ground plane; every click is
converted into a cross section of lane width and appended to both
boundaries at once.

Whenever a referenced boundary changes, the mesh is thrown away and
rebuilt from scratch before the editing call returns.  The boundary
reversal that last produced an upward-facing surface is cached and
tried first on the next rebuild.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .boundary import Boundary
from ..meshing import Mesh, RepairResult, ReversedMode, repair_orientation
from ..roadmodel.lanes import UP, cross_section, lateral_offsets, mirror_boundary
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WIDTH = 3.75


class TurnDirection(Enum):
    """Turn tag of a lanelet.  Metadata only; meshing ignores it."""

    NULL = "null"
    STRAIGHT = "straight"
    LEFT = "left"
    RIGHT = "right"


class Lanelet:
    """One lane segment: left and right boundary plus derived surface mesh.

    Parameters
    ----------
    left, right : Boundary, optional
        Boundaries to reference.  Fresh empty boundaries are created when
        omitted.
    width : float, optional
        Lane width used when synthesising boundary points from clicks.
    name : str, optional
        Name of the lanelet and of its mesh.
    turn_direction : TurnDirection, optional
        Turn tag stored with the lanelet.
    up : sequence of float, optional
        Direction the surface has to face.
    max_repair_attempts : int, optional
        Maximum number of strips built per rebuild.
    lanelet_map : LaneletMap, optional
        Container the lanelet belongs to.  Duplicates are created through
        it so they are registered there as well.
    """

    def __init__(
        self,
        left: Optional[Boundary] = None,
        right: Optional[Boundary] = None,
        width: float = DEFAULT_WIDTH,
        name: str = "",
        turn_direction: TurnDirection = TurnDirection.NULL,
        up: Sequence[float] = UP,
        max_repair_attempts: int = 4,
        lanelet_map=None
    ):
        self.name = name
        self.width = width
        self.turn_direction = turn_direction
        self.up = np.array(up, dtype=float)
        self.max_repair_attempts = max_repair_attempts
        self.map = lanelet_map

        self.left = left if left is not None else Boundary(name=f"{name}/left")
        self.right = right if right is not None else Boundary(name=f"{name}/right")
        self.center_points: List[np.ndarray] = []
        self.reversed_mode = ReversedMode.NONE
        self.mesh = Mesh(name=name)
        self.last_repair: Optional[RepairResult] = None

        self._hold = 0
        self._dirty = False

        self.left.attach(self)
        self.right.attach(self)
        self.rebuild()

    def __repr__(self) -> str:
        return (f"Lanelet(name={self.name!r}, left={len(self.left)}, "
                f"right={len(self.right)}, triangles={self.mesh.triangle_count})")

    @property
    def boundaries(self) -> Tuple[Boundary, Boundary]:
        return self.left, self.right

    # Invalidation

    def on_boundary_changed(self, boundary: Boundary) -> None:
        """Listener registered on both boundaries."""
        if self._hold:
            self._dirty = True
        else:
            self.rebuild()

    @contextmanager
    def _batched(self):
        """Collapse the rebuilds requested inside the block into one."""
        self._hold += 1
        try:
            yield
        finally:
            self._hold -= 1
            if self._hold == 0 and self._dirty:
                self._dirty = False
                self.rebuild()

    def rebuild(self) -> Optional[RepairResult]:
        """Regenerate the surface mesh from the current boundaries.

        The previous mesh is cleared first.  Both boundaries need at
        least two points; otherwise the mesh stays empty.

        Returns
        -------
        RepairResult or None
            Outcome of the orientation repair, or None if meshing was
            skipped.
        """
        self.mesh.clear()
        if len(self.left) < 2 or len(self.right) < 2:
            self.last_repair = None
            logger.debug("Lanelet %r not meshed (left=%d, right=%d points)",
                         self.name, len(self.left), len(self.right))
            return None

        result = repair_orientation(
            self.left.points,
            self.right.points,
            start_mode=self.reversed_mode,
            max_attempts=self.max_repair_attempts,
            up=self.up,
            name=self.name,
        )
        self.reversed_mode = result.mode
        self.mesh = result.mesh
        self.last_repair = result
        return result

    # Point editing

    def add_point(self, anchor: Sequence[float]) -> None:
        """Add a centre click and extend both boundaries.

        The first click only records the centre.  The second click has a
        direction to offset along, so it emits cross sections at both the
        first and the second centre.  Every later click emits one cross
        section at the new centre.

        Parameters
        ----------
        anchor : sequence of float
            XYZ position of the click.  Its height is pinned to 0.
        """
        center = np.array(anchor, dtype=float)
        center[1] = 0.0
        with self._batched():
            if len(self.center_points) > 1:
                left_point, right_point = cross_section(self.center_points[-1], center, self.width)
                self.left.add_point(left_point)
                self.right.add_point(right_point)
            elif len(self.center_points) == 1:
                previous = self.center_points[-1]
                direction = center - previous
                left_0, right_0 = lateral_offsets(previous, direction, self.width)
                left_1, right_1 = lateral_offsets(center, direction, self.width)
                self.left.add_point(left_0)
                self.right.add_point(right_0)
                self.left.add_point(left_1)
                self.right.add_point(right_1)
            self.center_points.append(center)

    def remove_last_point(self) -> None:
        """Undo the effect of the last click on the centre line.

        Each boundary drops its own most recent point; empty boundaries
        are left alone.
        """
        if self.center_points:
            self.center_points.pop()
        with self._batched():
            self.left.remove_last_point()
            self.right.remove_last_point()

    # Duplication

    @property
    def can_duplicate_left(self) -> bool:
        return len(self.left) > 1 and self.left.only_used_by(self)

    @property
    def can_duplicate_right(self) -> bool:
        return len(self.right) > 1 and self.right.only_used_by(self)

    def duplicate_left(self) -> Optional["Lanelet"]:
        """Create the neighbouring lanelet on the left.

        The new lanelet shares this lanelet's left boundary as its right
        boundary.  Its left boundary is this lanelet's right boundary
        mirrored across the shared one.

        Returns
        -------
        Lanelet or None
            The new lanelet, or None if the left boundary is too short or
            already shared.
        """
        if not self.can_duplicate_left:
            logger.warning("Lanelet %r: left boundary cannot be duplicated", self.name)
            return None
        fresh = mirror_boundary(self.right.points, self.left.points)
        return self._spawn(left=Boundary(fresh), right=self.left, action="duplicate_left")

    def duplicate_right(self) -> Optional["Lanelet"]:
        """Create the neighbouring lanelet on the right.  See `duplicate_left`."""
        if not self.can_duplicate_right:
            logger.warning("Lanelet %r: right boundary cannot be duplicated", self.name)
            return None
        fresh = mirror_boundary(self.left.points, self.right.points)
        return self._spawn(left=self.right, right=Boundary(fresh), action="duplicate_right")

    def _spawn(self, left: Boundary, right: Boundary, action: str) -> "Lanelet":
        if self.map is not None:
            return self.map.create(left, right, action=action)
        lanelet = Lanelet(
            left,
            right,
            width=self.width,
            name=f"{self.name}'",
            up=self.up,
            max_repair_attempts=self.max_repair_attempts,
        )
        logger.info("Lanelet %r created by %s of %r", lanelet.name, action, self.name)
        return lanelet

    def dispose(self) -> None:
        """Stop referencing both boundaries."""
        self.left.detach(self)
        self.right.detach(self)
        self.mesh.clear()

    def to_metadata_dict(self) -> Dict[str, Any]:
        """Summarise the lanelet without point arrays."""
        return {
            "name": self.name,
            "left_points": len(self.left),
            "right_points": len(self.right),
            "center_points": len(self.center_points),
            "vertices": self.mesh.vertex_count,
            "triangles": self.mesh.triangle_count,
            "reversed_mode": self.reversed_mode.value,
            "orientation_resolved": self.last_repair.resolved if self.last_repair else None,
            "turn_direction": self.turn_direction.value,
            "left_shared": self.left.is_shared,
            "right_shared": self.right.is_shared,
        }
