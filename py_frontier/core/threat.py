"""
Threat scoring for border stars.

Border stars are ranked by how close the nearest enemy star is, measured in
units of the longest hyperspace jump anyone in the game can make. Stars far
from every enemy are left out entirely.
"""

import heapq
import itertools
import sys
from typing import Iterable, List, Optional, Tuple

import numpy as np
import structlog

logger = structlog.get_logger()

DEFAULT_SAFE_DISTANCE_RATIO = 2.5
MAX_SCORE = sys.float_info.max


class BorderStarQueue:
    """Max-priority queue of (score, vertex) entries.

    Built on heapq, which is a min-heap, so scores are stored negated. An
    insertion counter breaks ties: entries with equal scores come out in the
    order they were pushed.
    """

    def __init__(self, entries: Optional[Iterable[Tuple[float, int]]] = None):
        self._heap: List[Tuple[float, int, int]] = []
        self._counter = itertools.count()
        for score, vertex in entries or ():
            self.push(score, vertex)

    def push(self, score: float, vertex: int) -> None:
        heapq.heappush(self._heap, (-score, next(self._counter), vertex))

    def pop(self) -> Tuple[float, int]:
        """Remove and return the highest-scoring (score, vertex) entry."""
        if not self._heap:
            raise IndexError("pop from empty BorderStarQueue")
        neg_score, _, vertex = heapq.heappop(self._heap)
        return -neg_score, vertex

    def peek(self) -> Tuple[float, int]:
        if not self._heap:
            raise IndexError("peek into empty BorderStarQueue")
        neg_score, _, vertex = self._heap[0]
        return -neg_score, vertex

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)


def score_relative_distance(relative_distance: float) -> float:
    """Inverse of the relative distance; a co-located enemy gets MAX_SCORE."""
    if relative_distance == 0:
        return MAX_SCORE
    return 1.0 / relative_distance


def nearest_hostile_distances(points: np.ndarray, hostile_points: np.ndarray) -> np.ndarray:
    """
    Distance from each point to its closest hostile point.

    Args:
        points: (N, 2) coordinates
        hostile_points: (M, 2) coordinates, M >= 1

    Returns:
        (N,) array of distances
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    hostile_points = np.asarray(hostile_points, dtype=np.float64).reshape(-1, 2)

    deltas = points[:, np.newaxis, :] - hostile_points[np.newaxis, :, :]
    return np.hypot(deltas[..., 0], deltas[..., 1]).min(axis=1)


def compute_border_star_queue(border_vertices: Iterable[int],
                              points: np.ndarray,
                              hostile_points: np.ndarray,
                              max_range: float,
                              safe_distance_ratio: float = DEFAULT_SAFE_DISTANCE_RATIO) -> BorderStarQueue:
    """
    Score border stars by enemy proximity and load them into a queue.

    Args:
        border_vertices: Indices of border points
        points: (N, 2) coordinates of the player's stars
        hostile_points: (M, 2) coordinates of enemy stars, may be empty
        max_range: Longest hyperspace range in the game
        safe_distance_ratio: Relative distance at or beyond which a star is safe

    Returns:
        BorderStarQueue holding every threatened border star
    """
    if max_range <= 0:
        raise ValueError(f"max_range must be positive, got {max_range}")

    queue = BorderStarQueue()
    # Sorted so that equal scores keep a reproducible FIFO order
    vertices = sorted(border_vertices)
    hostile_points = np.asarray(hostile_points, dtype=np.float64).reshape(-1, 2)

    if not vertices or len(hostile_points) == 0:
        logger.info("No threatened border stars",
                    border_vertices=len(vertices), hostile_stars=len(hostile_points))
        return queue

    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    distances = nearest_hostile_distances(points[vertices], hostile_points)

    for vertex, distance in zip(vertices, distances):
        relative_distance = float(distance) / max_range
        # Far from any enemy, no need to fortify it now
        if relative_distance >= safe_distance_ratio:
            continue
        queue.push(score_relative_distance(relative_distance), vertex)

    logger.info("Border star queue built",
                border_vertices=len(vertices),
                threatened=len(queue),
                max_range=max_range)
    return queue
