"""Blue-noise point sampling for the route mesh."""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from .alea_prng import AleaPRNG, get_prng

logger = structlog.get_logger()


class PoissonDiskSampler:
    """
    Poisson disk (dart throwing) sampler over a rectangular domain.

    Points are spread so that no two of them are closer than ``min_distance``.
    New candidates are thrown around an active point at a distance between
    ``min_distance`` and ``max_distance``; an active point is retired after
    ``tries`` consecutive misses. A background grid with cells of size
    ``min_distance / sqrt(2)`` holds at most one point per cell, so the
    distance check only has to look at the 5x5 block of cells around a
    candidate.

    Fixed points (start and goal) are inserted with ``add_point`` before
    ``fill`` and are treated like any sampled point afterwards.
    """

    def __init__(self, width: float, height: float, min_distance: float,
                 max_distance: Optional[float] = None, tries: int = 30,
                 prng: Optional[AleaPRNG] = None):
        """
        Args:
            width: Domain width
            height: Domain height
            min_distance: Minimum distance between accepted points (dMin)
            max_distance: Maximum candidate distance from its parent (dMax),
                defaults to twice min_distance
            tries: Candidates thrown around an active point before it retires
            prng: Random source, defaults to the process-wide PRNG
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Domain must have positive size, got {width}x{height}")
        if min_distance <= 0:
            raise ValueError(f"min_distance must be > 0, got {min_distance}")
        if max_distance is None:
            max_distance = min_distance * 2
        if max_distance < min_distance:
            raise ValueError(
                f"max_distance ({max_distance}) is smaller than min_distance ({min_distance})"
            )
        if tries < 1:
            raise ValueError(f"tries must be >= 1, got {tries}")

        self.width = width
        self.height = height
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.tries = tries
        self.prng = prng or get_prng()

        self.cell_size = min_distance / math.sqrt(2)
        self.grid_w = int(math.ceil(width / self.cell_size))
        self.grid_h = int(math.ceil(height / self.cell_size))
        # Each cell stores indices of the points inside it. Fixed points are
        # not distance checked, so a cell can hold more than one.
        self.grid: Dict[Tuple[int, int], List[int]] = {}

        self.points: List[Tuple[float, float]] = []
        self.active: List[int] = []
        self._index: Dict[Tuple[float, float], int] = {}

    def _cell(self, x: float, y: float) -> Tuple[int, int]:
        return int(x / self.cell_size), int(y / self.cell_size)

    def _in_domain(self, x: float, y: float) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _insert(self, x: float, y: float) -> int:
        idx = len(self.points)
        self.points.append((x, y))
        self.active.append(idx)
        self._index[(x, y)] = idx
        self.grid.setdefault(self._cell(x, y), []).append(idx)
        return idx

    def _has_neighbor_within(self, x: float, y: float) -> bool:
        """Check whether any existing point is closer than min_distance."""
        gx, gy = self._cell(x, y)
        r2 = self.min_distance * self.min_distance
        for cx in range(max(gx - 2, 0), min(gx + 3, self.grid_w)):
            for cy in range(max(gy - 2, 0), min(gy + 3, self.grid_h)):
                for idx in self.grid.get((cx, cy), ()):
                    px, py = self.points[idx]
                    if (x - px) ** 2 + (y - py) ** 2 < r2:
                        return True
        return False

    def add_point(self, point: Sequence[float]) -> Optional[int]:
        """
        Insert a fixed point regardless of its distance to existing points.

        Args:
            point: [x, y] coordinates

        Returns:
            Index of the point, the existing index if the coordinates are
            already present, or None if the point lies outside the domain
        """
        x, y = float(point[0]), float(point[1])
        if not self._in_domain(x, y):
            logger.warning("Fixed point outside sampling domain", x=x, y=y)
            return None
        existing = self._index.get((x, y))
        if existing is not None:
            return existing
        return self._insert(x, y)

    def add_random_point(self) -> int:
        """Insert a uniformly random point anywhere in the domain."""
        return self._insert(self.prng.uniform(0, self.width),
                            self.prng.uniform(0, self.height))

    def next(self) -> Optional[int]:
        """
        Run dart throwing until one point is accepted.

        Returns:
            Index of the accepted point, or None once no active point remains
        """
        while self.active:
            slot = int(self.prng.random() * len(self.active))
            px, py = self.points[self.active[slot]]

            for _ in range(self.tries):
                angle = self.prng.random() * 2 * math.pi
                distance = self.prng.uniform(self.min_distance, self.max_distance)
                x = px + distance * math.cos(angle)
                y = py + distance * math.sin(angle)

                if not self._in_domain(x, y) or self._has_neighbor_within(x, y):
                    continue
                return self._insert(x, y)

            # Retry budget exhausted: retire the active point
            self.active.pop(slot)

        return None

    def fill(self) -> np.ndarray:
        """
        Saturate the domain.

        Seeds one random point if nothing was added beforehand.

        Returns:
            Array of [x, y] coordinates in acceptance order
        """
        if not self.points:
            self.add_random_point()

        while self.next() is not None:
            pass

        logger.info("Poisson disk sampling complete", points=len(self.points),
                    min_distance=self.min_distance, max_distance=self.max_distance)
        return self.get_points()

    def get_points(self) -> np.ndarray:
        return np.array(self.points, dtype=np.float64).reshape(-1, 2)


def filter_to_disk(points: np.ndarray, center: Sequence[float],
                   radius: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Keep the points within ``radius`` of ``center``.

    Order is preserved so that indices of retained points can be remapped.

    Args:
        points: Array of [x, y] coordinates
        center: Disk centre
        radius: Disk radius, inclusive

    Returns:
        Tuple of (retained points, index map) where ``index_map[old]`` is the
        new index of point ``old`` or -1 if it was dropped
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    distances = np.hypot(points[:, 0] - center[0], points[:, 1] - center[1])
    keep = distances <= radius

    index_map = np.full(len(points), -1, dtype=np.int64)
    index_map[keep] = np.arange(int(keep.sum()))

    logger.info("Filtered points to disk", kept=int(keep.sum()),
                dropped=int((~keep).sum()), radius=radius)
    return points[keep], index_map


@dataclass
class SampledPoints:
    """Disk-filtered sample set with the indices of the fixed endpoints."""
    points: np.ndarray  # (n, 2) coordinates, row index = node id
    start_index: int
    goal_index: int

    def __len__(self):
        return len(self.points)


def sample_points(width: float, height: float, min_distance: float,
                  max_distance: float, tries: int,
                  start: Sequence[float], goal: Sequence[float],
                  center: Sequence[float], radius: float,
                  prng: Optional[AleaPRNG] = None) -> SampledPoints:
    """
    Sample the mesh points: fixed endpoints first, then fill, then the disk filter.

    Args:
        width: Domain width
        height: Domain height
        min_distance: Minimum spacing (dMin)
        max_distance: Maximum candidate distance (dMax)
        tries: Retry budget per active point (k)
        start: Start coordinates
        goal: Goal coordinates
        center: Disk filter centre
        radius: Disk filter radius
        prng: Random source

    Returns:
        SampledPoints with start and goal indices in the filtered array
    """
    sampler = PoissonDiskSampler(width, height, min_distance, max_distance,
                                 tries, prng)
    start_raw = sampler.add_point(start)
    goal_raw = sampler.add_point(goal)
    if start_raw is None or goal_raw is None:
        raise ValueError("Start and goal must lie inside the sampling domain")

    points, index_map = filter_to_disk(sampler.fill(), center, radius)
    start_index = int(index_map[start_raw])
    goal_index = int(index_map[goal_raw])
    if start_index < 0 or goal_index < 0:
        raise ValueError("Start and goal must lie inside the disk filter radius")

    return SampledPoints(points, start_index, goal_index)
