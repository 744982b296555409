"""Lanelet editing.

This package contains the editable lane model: observable boundary
polylines, the lanelet aggregate that keeps its surface mesh in sync
with them and the map container lanelets are created in.
"""

from .boundary import Boundary
from .lanelet import Lanelet, TurnDirection, DEFAULT_WIDTH
from .lanelet_map import LaneletMap

__all__ = [
    "Boundary",
    "Lanelet",
    "TurnDirection",
    "DEFAULT_WIDTH",
    "LaneletMap",
]
