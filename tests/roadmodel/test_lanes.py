"""Unit tests for lane cross-section geometry."""

import numpy as np

from src.roadmodel.lanes import closest_points_on_polyline, cross_section, lateral_offsets, mirror_boundary


class TestLateralOffsets:
    """Test suite for lateral_offsets and cross_section."""

    def test_offsets_along_z(self):
        """Test left/right placement when travelling along +Z."""
        left, right = lateral_offsets(np.zeros(3), np.array([0.0, 0.0, 10.0]), 4.0)

        np.testing.assert_allclose(left, [-2.0, 0.0, 0.0])
        np.testing.assert_allclose(right, [2.0, 0.0, 0.0])

    def test_offsets_anti_parallel(self):
        """Test that both offsets have half the width and opposite directions."""
        center = np.array([3.0, 0.0, -1.0])
        left, right = lateral_offsets(center, np.array([1.0, 0.0, 2.0]), 3.75)

        np.testing.assert_allclose(np.linalg.norm(left - center), 1.875)
        np.testing.assert_allclose(np.linalg.norm(right - center), 1.875)
        np.testing.assert_allclose(left - center, -(right - center))

    def test_zero_direction(self):
        """Test that a zero direction keeps both points on the centre."""
        center = np.array([1.0, 0.0, 1.0])
        left, right = lateral_offsets(center, np.zeros(3), 4.0)

        np.testing.assert_array_equal(left, center)
        np.testing.assert_array_equal(right, center)
        assert not np.any(np.isnan(left))

    def test_cross_section(self):
        """Test that the cross section sits at the second centre."""
        left, right = cross_section([0, 0, 0], [10, 0, 0], 2.0)

        # Travelling along +X the left side is +Z
        np.testing.assert_allclose(left, [10.0, 0.0, 1.0])
        np.testing.assert_allclose(right, [10.0, 0.0, -1.0])


class TestMirrorBoundary:
    """Test suite for mirror_boundary."""

    def test_closest_points(self):
        """Test projection onto a polyline, clamped to its ends."""
        polyline = np.array([[0.0, 0, 0], [0, 0, 10]])
        points = np.array([[3.0, 0, 5], [1.0, 0, -4], [-2.0, 0, 12]])

        closest = closest_points_on_polyline(points, polyline)

        np.testing.assert_allclose(closest, [[0, 0, 5], [0, 0, 0], [0, 0, 10]])

    def test_mirror_straight_lane(self):
        """Test that mirroring a boundary yields a lane of equal width."""
        shared = np.array([[-2.0, 0, 0], [-2.0, 0, 10], [-2.0, 0, 20]])
        opposite = np.array([[2.0, 0, 0], [2.0, 0, 10], [2.0, 0, 20]])

        mirrored = mirror_boundary(opposite, shared)

        np.testing.assert_allclose(mirrored, [[-6, 0, 0], [-6, 0, 10], [-6, 0, 20]])

    def test_mirror_bent_axis(self):
        """Test mirroring across the nearest segment of a bent polyline."""
        axis = np.array([[0.0, 0, 0], [0, 0, 10], [10, 0, 10]])
        source = np.array([[1.0, 0, 5], [5.0, 0, 11]])

        mirrored = mirror_boundary(source, axis)

        np.testing.assert_allclose(mirrored, [[-1, 0, 5], [5, 0, 9]])

    def test_single_point_axis(self):
        """Test point reflection when the axis is a single point."""
        mirrored = mirror_boundary(np.array([[1.0, 0, 1]]), np.array([[0.0, 0, 0]]))

        np.testing.assert_allclose(mirrored, [[-1, 0, -1]])

    def test_empty_source(self):
        """Test that an empty source stays empty."""
        mirrored = mirror_boundary(np.zeros((0, 3)), np.array([[0.0, 0, 0]]))
        assert mirrored.shape == (0, 3)
