"""
Delaunay triangulation of owned star positions and the graphs derived from it.

The triangulation is only used to get a sparse neighbour structure out of raw
coordinates. Point indices are indices into the coordinate array, which in
turn are indices into the owned-star list, so every structure here can be
resolved back to a star by position.
"""

import numpy as np
from scipy.spatial import Delaunay, QhullError
from typing import FrozenSet, List, Set, Tuple
from dataclasses import dataclass
import structlog

logger = structlog.get_logger()


@dataclass
class TerritoryGraph:
    """Triangulated territory of a single player.

    All lists are arenas addressed by integer index: point_to_triangles and
    adjacency have one entry per point, triangle_to_points one per triangle.
    """
    points: np.ndarray                        # points[i] = [x, y]
    triangles: np.ndarray                     # triangles[t] = [p0, p1, p2]
    point_to_triangles: List[Set[int]]        # triangles incident to each point
    triangle_to_points: List[FrozenSet[int]]  # the 3 points of each triangle
    adjacency: List[Set[int]]                 # points sharing a triangle, self excluded

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def n_triangles(self) -> int:
        return len(self.triangles)

    def is_empty(self) -> bool:
        return self.n_triangles == 0


def _empty_triangles() -> np.ndarray:
    return np.empty((0, 3), dtype=np.int64)


def is_degenerate(points: np.ndarray) -> bool:
    """
    Check whether a point set cannot be triangulated.

    True for fewer than 3 distinct points and for point sets that are
    collinear (all points on one line) or coincident.
    """
    if len(points) < 3:
        return True

    unique_points = np.unique(points, axis=0)
    if len(unique_points) < 3:
        return True

    centred = unique_points - unique_points[0]
    return np.linalg.matrix_rank(centred) < 2


def build_triangulation(points: np.ndarray) -> np.ndarray:
    """
    Triangulate 2D points with scipy's Delaunay.

    Args:
        points: Array of [x, y] coordinates, one per owned star

    Returns:
        Int array of shape (T, 3); each row holds the point indices of one
        triangle. Empty for degenerate input.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)

    if is_degenerate(points):
        logger.warning("Degenerate point set, skipping triangulation", points=len(points))
        return _empty_triangles()

    try:
        delaunay = Delaunay(points)
    except QhullError as e:
        logger.warning("Qhull could not triangulate point set", points=len(points), error=str(e))
        return _empty_triangles()

    triangles = np.asarray(delaunay.simplices, dtype=np.int64)
    logger.info("Triangulation built", points=len(points), triangles=len(triangles))
    return triangles


def build_dual_mappings(triangles: np.ndarray, n_points: int) -> Tuple[List[Set[int]], List[FrozenSet[int]]]:
    """
    Build point->triangles and triangle->points mappings.

    Args:
        triangles: (T, 3) array from build_triangulation
        n_points: Number of points that were triangulated

    Returns:
        Tuple of (point_to_triangles, triangle_to_points)
    """
    point_to_triangles: List[Set[int]] = [set() for _ in range(n_points)]
    triangle_to_points: List[FrozenSet[int]] = []

    for triangle_idx, vertices in enumerate(triangles):
        vertex_set = frozenset(int(v) for v in vertices)
        triangle_to_points.append(vertex_set)
        for vertex_idx in vertex_set:
            point_to_triangles[vertex_idx].add(triangle_idx)

    return point_to_triangles, triangle_to_points


def build_adjacency_graph(point_to_triangles: List[Set[int]],
                          triangle_to_points: List[FrozenSet[int]]) -> List[Set[int]]:
    """
    Connect every point to all points it shares a triangle with.

    Returns:
        adjacency[i] = set of neighbouring point indices (never contains i)
    """
    adjacency: List[Set[int]] = []

    for point_idx, triangle_indices in enumerate(point_to_triangles):
        neighbors: Set[int] = set()
        for triangle_idx in triangle_indices:
            neighbors |= triangle_to_points[triangle_idx]
        neighbors.discard(point_idx)
        adjacency.append(neighbors)

    return adjacency


def build_territory_graph(points: np.ndarray) -> TerritoryGraph:
    """
    Triangulate points and derive the dual mappings and adjacency graph.

    This is the entry point used by the planner. Degenerate input gives a
    graph with no triangles and an empty adjacency set for every point.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    triangles = build_triangulation(points)
    point_to_triangles, triangle_to_points = build_dual_mappings(triangles, len(points))
    adjacency = build_adjacency_graph(point_to_triangles, triangle_to_points)

    return TerritoryGraph(
        points=points,
        triangles=triangles,
        point_to_triangles=point_to_triangles,
        triangle_to_points=triangle_to_points,
        adjacency=adjacency,
    )
