"""Container for the lanelets of one map.

The map is where new lanelets come from: it allocates their boundaries,
names them after the number of lanelets already present and registers
them.  Editors that keep an undo history pass a `history` callback,
which is called before any lanelet is created so a checkpoint can be
recorded.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

import pandas as pd

from .boundary import Boundary
from .lanelet import DEFAULT_WIDTH, Lanelet
from ..qa.qa_tests import MeshQA
from ..roadmodel.lanes import UP
from ..utils.config import lanelet_settings
from ..utils.logging import get_logger

logger = get_logger(__name__)

History = Callable[[str, str], None]


class LaneletMap:
    """Ordered collection of lanelets sharing boundaries."""

    def __init__(
        self,
        width: float = DEFAULT_WIDTH,
        up: Sequence[float] = UP,
        max_repair_attempts: int = 4,
        history: Optional[History] = None
    ):
        """Initialize an empty map.

        Parameters
        ----------
        width : float, optional
            Lane width given to new lanelets.
        up : sequence of float, optional
            Direction lanelet surfaces have to face.
        max_repair_attempts : int, optional
            Bound on orientation repair attempts per rebuild.
        history : callable, optional
            Called as ``history(action, name)`` before a lanelet is
            created.
        """
        self.width = width
        self.up = up
        self.max_repair_attempts = max_repair_attempts
        self.history = history
        self.lanelets: List[Lanelet] = []

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], history: Optional[History] = None) -> "LaneletMap":
        """Build a map from the `lanelet` section of a config dictionary."""
        settings = lanelet_settings(cfg)
        return cls(
            width=float(settings["width"]),
            up=settings["up"],
            max_repair_attempts=int(settings["max_repair_attempts"]),
            history=history,
        )

    def __len__(self) -> int:
        return len(self.lanelets)

    def __iter__(self) -> Iterator[Lanelet]:
        return iter(self.lanelets)

    def __getitem__(self, index: int) -> Lanelet:
        return self.lanelets[index]

    def create(self, left: Boundary, right: Boundary, action: str = "add") -> Lanelet:
        """Create and register a lanelet referencing the given boundaries."""
        name = str(len(self.lanelets))
        if self.history is not None:
            self.history(action, name)
        lanelet = Lanelet(
            left,
            right,
            width=self.width,
            name=name,
            up=self.up,
            max_repair_attempts=self.max_repair_attempts,
            lanelet_map=self,
        )
        if not left.name:
            left.name = f"{name}/left"
        if not right.name:
            right.name = f"{name}/right"
        self.lanelets.append(lanelet)
        logger.info("Lanelet %r created (%s)", name, action)
        return lanelet

    def add_new(self) -> Lanelet:
        """Create a lanelet with two fresh, empty boundaries."""
        return self.create(Boundary(), Boundary(), action="add")

    def duplicate_left(self, lanelet: Lanelet) -> Optional[Lanelet]:
        return lanelet.duplicate_left()

    def duplicate_right(self, lanelet: Lanelet) -> Optional[Lanelet]:
        return lanelet.duplicate_right()

    def remove(self, lanelet: Lanelet) -> None:
        """Unregister a lanelet and release its boundaries."""
        lanelet.dispose()
        self.lanelets = [item for item in self.lanelets if item is not lanelet]

    def lanelets_using(self, boundary: Boundary) -> List[Lanelet]:
        return [item for item in self.lanelets
                if item.left is boundary or item.right is boundary]

    def summary(self) -> pd.DataFrame:
        """Tabulate every lanelet with its mesh QA flags.

        Returns
        -------
        pandas.DataFrame
            One row per lanelet, in creation order.
        """
        qa = MeshQA(up=self.up)
        records = []
        for lanelet in self.lanelets:
            record = lanelet.to_metadata_dict()
            record.update(qa.run(lanelet.mesh, len(lanelet.left), len(lanelet.right)))
            records.append(record)
        return pd.DataFrame(records)
