"""Demo script for interactive lanelet editing with synthetic clicks.

This script replays a sequence of centre clicks along a gently curving
road, duplicates the resulting lanelet to both sides, drags a point of
a shared boundary and prints the summary table of the map.

Usage:
    python examples/demo_lanelet_editing.py --clicks 8 --curvature 0.02
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.lanelet import LaneletMap
from src.utils import get_logger, load_config, set_level
from src.utils.config import DEFAULT_CONFIG_PATH

logger = get_logger("src.demo")


def synthetic_clicks(n_clicks: int, spacing: float, curvature: float) -> List[np.ndarray]:
    """Sample centre clicks along a circular arc on the ground plane.

    Parameters
    ----------
    n_clicks : int
        Number of clicks.
    spacing : float
        Arc length between consecutive clicks in metres.
    curvature : float
        Signed curvature (1/m); 0 gives a straight road along +Z.

    Returns
    -------
    list of numpy.ndarray
        XYZ click positions with Y = 0.
    """
    s = np.arange(n_clicks) * spacing
    if abs(curvature) < 1e-9:
        return [np.array([0.0, 0.0, si]) for si in s]
    radius = 1.0 / curvature
    angle = s * curvature
    return [np.array([radius * (1 - np.cos(a)), 0.0, radius * np.sin(a)]) for a in angle]


def main() -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Replay synthetic lanelet edits")
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="YAML config file (default: configs/default.yaml)"
    )
    parser.add_argument(
        "--clicks",
        type=int,
        default=8,
        help="Number of centre clicks (default: 8)"
    )
    parser.add_argument(
        "--spacing",
        type=float,
        default=5.0,
        help="Distance between clicks in metres (default: 5)"
    )
    parser.add_argument(
        "--curvature",
        type=float,
        default=0.02,
        help="Road curvature in 1/m (default: 0.02)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every rebuild"
    )
    args = parser.parse_args()

    checkpoints = []
    lanelet_map = LaneletMap.from_config(
        load_config(args.config),
        history=lambda action, name: checkpoints.append((action, name)),
    )
    if args.verbose:
        set_level(logging.DEBUG)

    lanelet = lanelet_map.add_new()
    for click in synthetic_clicks(args.clicks, args.spacing, args.curvature):
        lanelet.add_point(click)

    left_neighbour = lanelet_map.duplicate_left(lanelet)
    right_neighbour = lanelet_map.duplicate_right(lanelet)
    # Already shared, so this is refused
    lanelet_map.duplicate_left(lanelet)

    # Drag the far end of the shared left boundary sideways
    if left_neighbour is not None and len(lanelet.left) > 0:
        end = lanelet.left[-1]
        lanelet.left.move_point(-1, end + np.array([-0.5, 0.0, 0.0]))

    logger.info("Undo checkpoints: %s", checkpoints)
    with pd.option_context("display.max_columns", None, "display.width", 200):
        print(lanelet_map.summary())
    return 0 if right_neighbour is not None else 1


if __name__ == "__main__":
    sys.exit(main())
