"""
Core frontier logistics planning functionality.
"""

from .triangulation import TerritoryGraph, build_territory_graph, build_triangulation
from .borders import compute_border_vertices, find_border_triangles
from .threat import BorderStarQueue, compute_border_star_queue
from .logistics import CarrierLoop, compute_carrier_loops, create_logistics_graph
from .planner import LogisticsPlan, LogisticsPlanner, PlannerOptions
from .ai import AIService

__all__ = ['TerritoryGraph', 'build_territory_graph', 'build_triangulation',
           'compute_border_vertices', 'find_border_triangles',
           'BorderStarQueue', 'compute_border_star_queue',
           'CarrierLoop', 'compute_carrier_loops', 'create_logistics_graph',
           'LogisticsPlan', 'LogisticsPlanner', 'PlannerOptions', 'AIService']
