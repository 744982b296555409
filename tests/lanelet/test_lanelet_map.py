"""Unit tests for the lanelet map container."""

import numpy as np
import pandas as pd

from src.lanelet.boundary import Boundary
from src.lanelet.lanelet_map import LaneletMap


def _draw(lanelet, clicks=((0, 0, 0), (0, 0, 10), (0, 0, 20))):
    for click in clicks:
        lanelet.add_point(click)
    return lanelet


class TestLaneletMap:
    """Test suite for LaneletMap."""

    def test_add_new(self):
        """Test that new lanelets get fresh boundaries and sequential names."""
        lanelet_map = LaneletMap(width=4.0)

        first = lanelet_map.add_new()
        second = lanelet_map.add_new()

        assert len(lanelet_map) == 2
        assert [item.name for item in lanelet_map] == ["0", "1"]
        assert first.left is not second.left
        assert first.left.name == "0/left"
        assert first.map is lanelet_map
        assert first.width == 4.0
        assert lanelet_map[1] is second

    def test_history_called_before_creation(self):
        """Test that the undo hook sees the map before it changes."""
        lanelet_map = LaneletMap()
        seen = []
        lanelet_map.history = lambda action, name: seen.append((action, name, len(lanelet_map)))

        lanelet = _draw(lanelet_map.add_new())
        lanelet_map.duplicate_left(lanelet)

        assert seen == [("add", "0", 0), ("duplicate_left", "1", 1)]

    def test_duplicate_registers_new_lanelet(self):
        """Test that duplicates are created inside the map."""
        lanelet_map = LaneletMap(width=4.0)
        lanelet = _draw(lanelet_map.add_new())

        left = lanelet_map.duplicate_left(lanelet)
        right = lanelet_map.duplicate_right(lanelet)

        assert len(lanelet_map) == 3
        assert left.name == "1" and right.name == "2"
        assert left.map is lanelet_map
        assert lanelet_map.lanelets_using(lanelet.left) == [lanelet, left]
        assert lanelet_map.lanelets_using(lanelet.right) == [lanelet, right]
        # Further duplication of shared sides is refused
        assert lanelet_map.duplicate_left(lanelet) is None
        assert len(lanelet_map) == 3

    def test_remove(self):
        """Test that removing a lanelet releases its boundaries."""
        lanelet_map = LaneletMap()
        lanelet = _draw(lanelet_map.add_new())
        neighbour = lanelet_map.duplicate_right(lanelet)

        lanelet_map.remove(neighbour)

        assert len(lanelet_map) == 1
        assert lanelet.right.only_used_by(lanelet)
        assert lanelet.can_duplicate_right
        assert lanelet_map.lanelets_using(neighbour.right) == []

    def test_summary(self):
        """Test the summary table."""
        lanelet_map = LaneletMap(width=4.0)
        lanelet = _draw(lanelet_map.add_new())
        lanelet_map.duplicate_left(lanelet)
        lanelet_map.add_new()

        summary = lanelet_map.summary()

        assert isinstance(summary, pd.DataFrame)
        assert len(summary) == 3
        assert list(summary["name"]) == ["0", "1", "2"]
        assert list(summary["vertices"]) == [6, 6, 0]
        assert summary.loc[0, "left_shared"]
        assert summary.loc[0:1, "orientation_ok"].all()
        assert summary.loc[0:1, "complete_ok"].all()
        assert not summary.loc[2, "complete_ok"]

    def test_empty_summary(self):
        """Test the summary of an empty map."""
        assert len(LaneletMap().summary()) == 0

    def test_from_config(self):
        """Test building a map from a config dictionary."""
        lanelet_map = LaneletMap.from_config({"lanelet": {"width": 5.0, "max_repair_attempts": 2}})

        lanelet = lanelet_map.add_new()

        assert lanelet.width == 5.0
        assert lanelet.max_repair_attempts == 2
        np.testing.assert_allclose(lanelet.up, [0, 1, 0])

    def test_from_empty_config(self):
        """Test that missing settings fall back to the defaults."""
        lanelet_map = LaneletMap.from_config({})

        assert lanelet_map.width == 3.75
        assert lanelet_map.max_repair_attempts == 4

    def test_create_keeps_boundary_names(self):
        """Test that named boundaries keep their names."""
        lanelet_map = LaneletMap()
        lanelet = lanelet_map.create(Boundary(name="kerb"), Boundary())

        assert lanelet.left.name == "kerb"
        assert lanelet.right.name == "0/right"
