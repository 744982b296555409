"""Surface meshing between lane boundaries.

`strip` builds the triangle strip connecting a left and a right
boundary; `orientation` rebuilds it with reversed boundaries until the
surface faces up.
"""

from .strip import Mesh, build_strip, triangle_normals, vertex_normals
from .orientation import ReversedMode, RepairResult, is_misoriented, repair_orientation

__all__ = [
    "Mesh",
    "build_strip",
    "triangle_normals",
    "vertex_normals",
    "ReversedMode",
    "RepairResult",
    "is_misoriented",
    "repair_orientation",
]
