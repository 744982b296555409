"""Lane boundary polylines.

A `Boundary` is an ordered list of XYZ points describing one edge of a
lane in travel order.  Boundaries are shared: after a lanelet is
duplicated, the new lanelet references one boundary of the original, so
a single boundary can belong to several lanelets.  Every lanelet that
references a boundary is attached to it and is told synchronously when
any of its points change.
"""

from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np

Listener = Callable[["Boundary"], None]


def _as_point(point: Sequence[float]) -> np.ndarray:
    p = np.asarray(point, dtype=float)
    if p.shape != (3,):
        raise ValueError(f"Expected an XYZ point, got shape {p.shape}")
    return p


class Boundary:
    """Ordered, observable point sequence of one lane edge."""

    def __init__(self, points: Optional[Sequence] = None, name: str = ""):
        self.name = name
        self._points = np.zeros((0, 3), dtype=float)
        self._listeners: List[Listener] = []
        self._refs: List[object] = []
        if points is not None and len(points) > 0:
            self._points = self._as_points(points)

    @staticmethod
    def _as_points(points: Sequence) -> np.ndarray:
        arr = np.array(points, dtype=float)
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ValueError(f"Expected an (N, 3) point array, got shape {arr.shape}")
        return arr

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> np.ndarray:
        return self._points[index].copy()

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.points)

    def __repr__(self) -> str:
        return f"Boundary(name={self.name!r}, points={len(self)}, refs={self.ref_count})"

    @property
    def points(self) -> np.ndarray:
        """Copy of the points as an (N, 3) array."""
        return self._points.copy()

    # Point editing

    def add_point(self, point: Sequence[float]) -> None:
        """Append a point at the end of the boundary."""
        self._points = np.vstack([self._points, _as_point(point)])
        self._notify()

    def remove_last_point(self) -> None:
        """Drop the most recent point.  Does nothing on an empty boundary."""
        if len(self._points) == 0:
            return
        self._points = self._points[:-1].copy()
        self._notify()

    def move_point(self, index: int, point: Sequence[float]) -> None:
        """Move an existing point.

        Raises
        ------
        IndexError
            If `index` is out of range.
        """
        if not -len(self._points) <= index < len(self._points):
            raise IndexError(f"Point index {index} out of range for {len(self._points)} points")
        self._points[index] = _as_point(point)
        self._notify()

    def set_points(self, points: Sequence) -> None:
        """Replace all points at once."""
        if len(points) == 0:
            self._points = np.zeros((0, 3), dtype=float)
        else:
            self._points = self._as_points(points)
        self._notify()

    # Listeners

    def subscribe(self, listener: Listener) -> None:
        """Register a callback; registering the same callback twice has no effect."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # Sharing

    def attach(self, owner) -> None:
        """Record that `owner` references this boundary and subscribe it.

        `owner` must provide an ``on_boundary_changed(boundary)`` method.
        """
        if not any(ref is owner for ref in self._refs):
            self._refs.append(owner)
        self.unsubscribe(owner.on_boundary_changed)
        self.subscribe(owner.on_boundary_changed)

    def detach(self, owner) -> None:
        self._refs = [ref for ref in self._refs if ref is not owner]
        self.unsubscribe(owner.on_boundary_changed)

    @property
    def refs(self) -> List[object]:
        return list(self._refs)

    @property
    def ref_count(self) -> int:
        return len(self._refs)

    @property
    def is_shared(self) -> bool:
        return self.ref_count > 1

    def only_used_by(self, owner) -> bool:
        """True if `owner` is the one and only referencing object."""
        return self.ref_count == 1 and self._refs[0] is owner
