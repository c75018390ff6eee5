"""
Logistics planning pass.

Runs triangulation, border detection, threat scoring, logistics graph
construction and carrier loop derivation over one snapshot of a player's
stars and the enemy stars around them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

import numpy as np
import structlog
from pydantic import BaseModel, Field

from ..config import settings
from .borders import compute_border_vertices, find_border_triangles
from .logistics import CarrierLoop, LogisticsGraph, compute_carrier_loops, create_logistics_graph
from .models import Star
from .threat import compute_border_star_queue
from .triangulation import TerritoryGraph, build_territory_graph

logger = structlog.get_logger()


class PlannerOptions(BaseModel):
    """Logistics planner tuning."""

    decay_factor: float = Field(
        default_factory=lambda: settings.planner_decay_factor, gt=0.0, lt=1.0,
        description="Score multiplier for a border star re-queued after receiving supply",
    )
    safe_distance_ratio: float = Field(
        default_factory=lambda: settings.planner_safe_distance_ratio, gt=0.0,
        description="Relative enemy distance at or beyond which a border star is ignored",
    )
    full_component_search: bool = Field(
        default_factory=lambda: settings.planner_full_component_search,
        description="Search the whole territory for supply, not only existing supply chains",
    )


@dataclass
class LogisticsPlan:
    """Everything one planning pass produced."""
    territory: TerritoryGraph
    border_triangles: Set[int]
    border_vertices: Set[int]
    threatened_vertices: int
    logistics_graph: LogisticsGraph
    carrier_loops: List[CarrierLoop] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.carrier_loops


def star_coordinates(stars: Sequence[Star]) -> np.ndarray:
    """(N, 2) coordinate array, row i belonging to stars[i]."""
    if not stars:
        return np.empty((0, 2), dtype=np.float64)
    return np.array([[star.location.x, star.location.y] for star in stars], dtype=np.float64)


class LogisticsPlanner:
    """Plans supply routes from interior stars to threatened border stars."""

    def __init__(self, options: Optional[PlannerOptions] = None):
        self.options = options or PlannerOptions()

    def plan(self, player_stars: Sequence[Star], hostile_stars: Sequence[Star],
             max_range: float) -> LogisticsPlan:
        """
        Run one planning pass.

        Args:
            player_stars: Stars owned by the planning player; their positions
                in this sequence are the point indices used throughout
            hostile_stars: Stars owned by other, non-neutral players
            max_range: Longest hyperspace range achievable in the game

        Returns:
            LogisticsPlan with the logistics graph and carrier loops
        """
        logger.info("Starting logistics plan",
                    player_stars=len(player_stars), hostile_stars=len(hostile_stars))

        points = star_coordinates(player_stars)
        territory = build_territory_graph(points)

        border_triangles = find_border_triangles(territory)
        border_vertices = compute_border_vertices(territory, border_triangles)

        queue = compute_border_star_queue(
            border_vertices, points, star_coordinates(hostile_stars), max_range,
            safe_distance_ratio=self.options.safe_distance_ratio,
        )
        threatened_vertices = len(queue)

        logistics_graph = create_logistics_graph(
            territory.adjacency, border_vertices, queue,
            decay_factor=self.options.decay_factor,
            full_component_search=self.options.full_component_search,
        )
        carrier_loops = compute_carrier_loops(logistics_graph, player_stars)

        logger.info("Logistics plan complete", carrier_loops=len(carrier_loops))
        return LogisticsPlan(
            territory=territory,
            border_triangles=border_triangles,
            border_vertices=border_vertices,
            threatened_vertices=threatened_vertices,
            logistics_graph=logistics_graph,
            carrier_loops=carrier_loops,
        )
