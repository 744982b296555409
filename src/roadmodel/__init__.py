"""Road model construction utilities."""

from .lanes import lateral_offsets, cross_section, closest_points_on_polyline, mirror_boundary

__all__ = ["lateral_offsets", "cross_section", "closest_points_on_polyline", "mirror_boundary"]
