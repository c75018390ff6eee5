"""
Border detection on a triangulated territory.

A triangle whose three edges are all shared with neighbouring triangles is
enclosed by the territory. Any triangle with fewer than 3 edge neighbours has
at least one free edge facing outwards and is a border triangle. The
endpoints of those free edges are the stars at the edge of the empire.
"""

from itertools import combinations
from typing import List, Optional, Set, Tuple

import structlog

from .triangulation import TerritoryGraph

logger = structlog.get_logger()

Edge = Tuple[int, int]


def _triangle_edges(vertices) -> List[Edge]:
    return [tuple(sorted(pair)) for pair in combinations(vertices, 2)]


def find_triangle_candidates(graph: TerritoryGraph, triangle_idx: int) -> Set[int]:
    """All other triangles sharing at least one point with the given triangle."""
    candidates: Set[int] = set()
    for vertex_idx in graph.triangle_to_points[triangle_idx]:
        candidates |= graph.point_to_triangles[vertex_idx]
    candidates.discard(triangle_idx)
    return candidates


def find_edge_neighbors(graph: TerritoryGraph, triangle_idx: int) -> Set[int]:
    """Triangles sharing exactly two points (one edge) with the given triangle."""
    vertices = graph.triangle_to_points[triangle_idx]
    return {
        candidate for candidate in find_triangle_candidates(graph, triangle_idx)
        if len(vertices & graph.triangle_to_points[candidate]) == 2
    }


def count_edge_neighbors(graph: TerritoryGraph) -> List[int]:
    """Number of edge-sharing neighbours for every triangle, each in 0..3."""
    return [len(find_edge_neighbors(graph, t)) for t in range(graph.n_triangles)]


def find_border_triangles(graph: TerritoryGraph) -> Set[int]:
    """Triangles with fewer than 3 edge neighbours."""
    return {
        t for t, count in enumerate(count_edge_neighbors(graph))
        if count < 3
    }


def find_free_edges(graph: TerritoryGraph, triangle_idx: int) -> List[Edge]:
    """Edges of a triangle not shared with any other triangle."""
    vertices = graph.triangle_to_points[triangle_idx]
    shared: Set[Edge] = set()
    for neighbor in find_edge_neighbors(graph, triangle_idx):
        common = sorted(vertices & graph.triangle_to_points[neighbor])
        shared.add((common[0], common[1]))

    return [edge for edge in _triangle_edges(sorted(vertices)) if edge not in shared]


def compute_border_vertices(graph: TerritoryGraph, border_triangles: Optional[Set[int]] = None) -> Set[int]:
    """
    Derive the set of border points from the border triangles.

    A point is on the border when it is an endpoint of a free edge. Every
    such point is shared by the border triangles that meet along the outer
    boundary; points that belong to no triangle are never border points.

    Args:
        graph: Triangulated territory
        border_triangles: Precomputed border triangles, computed if omitted

    Returns:
        Set of border point indices
    """
    if border_triangles is None:
        border_triangles = find_border_triangles(graph)

    border_vertices: Set[int] = set()
    for triangle_idx in border_triangles:
        for v1, v2 in find_free_edges(graph, triangle_idx):
            border_vertices.add(v1)
            border_vertices.add(v2)

    logger.info("Border detected",
                triangles=graph.n_triangles,
                border_triangles=len(border_triangles),
                border_vertices=len(border_vertices))
    return border_vertices
