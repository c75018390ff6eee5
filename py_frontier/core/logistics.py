"""
Logistics graph construction and carrier loop derivation.

Interior stars are handed out one at a time to threatened border stars,
highest threat first. Each handout adds a directed supply edge
source -> interior star. A border star that received supply goes back into
the queue with a decayed score so the other border stars get a turn.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

import structlog

from .models import Star
from .threat import BorderStarQueue

logger = structlog.get_logger()

DEFAULT_DECAY_FACTOR = 0.5

LogisticsGraph = Dict[int, Set[int]]


@dataclass
class CarrierLoop:
    """A supply loop between two stars of the same player."""
    from_star: Star
    to_star: Star


def find_next_logistics_connection(adjacency: Sequence[Set[int]],
                                   logistics_graph: LogisticsGraph,
                                   unmarked_vertices: Set[int],
                                   starting_vertex: int,
                                   full_component_search: bool = True,
                                   border_vertices: Optional[Set[int]] = None) -> Optional[Tuple[int, int]]:
    """
    Find and claim the next interior star to connect to a border star.

    Depth-first search with an explicit stack, starting at the border star.
    The first visited star with an unmarked neighbour wins: that neighbour is
    removed from unmarked_vertices and the edge (visited star, neighbour) is
    returned. Existing supply chains are followed before plain territory
    adjacency; with full_component_search disabled, only supply chains are
    followed. Territory adjacency never leads through another border star,
    so supply always stays on the border star that asked for it.

    Args:
        adjacency: Point adjacency graph
        logistics_graph: Supply edges built so far
        unmarked_vertices: Interior stars not yet claimed, shrinks on success
        starting_vertex: Border star to supply
        full_component_search: Whether to also walk territory adjacency
        border_vertices: Border stars the search must not relay through

    Returns:
        (from, to) edge, or None if no unmarked star is reachable
    """
    border_vertices = border_vertices or set()
    stack = [starting_vertex]
    visited: Set[int] = set()

    while stack:
        vertex = stack.pop()
        if vertex in visited:
            continue
        visited.add(vertex)

        neighbors = sorted(adjacency[vertex])
        for neighbor in neighbors:
            if neighbor in unmarked_vertices:
                unmarked_vertices.remove(neighbor)
                return vertex, neighbor

        # Pushed last so supply chains are popped first
        next_vertices: List[int] = []
        if full_component_search:
            next_vertices.extend(v for v in reversed(neighbors) if v not in border_vertices)
        next_vertices.extend(sorted(logistics_graph.get(vertex, ()), reverse=True))

        stack.extend(v for v in next_vertices if v not in visited)

    return None


def create_logistics_graph(adjacency: Sequence[Set[int]],
                           border_vertices: Set[int],
                           border_star_queue: BorderStarQueue,
                           decay_factor: float = DEFAULT_DECAY_FACTOR,
                           full_component_search: bool = True) -> LogisticsGraph:
    """
    Greedily drain the border star queue into a logistics graph.

    Terminates because every iteration either claims an unmarked star or
    permanently drops a queue entry.

    Args:
        adjacency: Point adjacency graph
        border_vertices: Border point indices, never used as supply
        border_star_queue: Threatened border stars, consumed
        decay_factor: Score multiplier for re-queued border stars, in (0, 1)
        full_component_search: Passed to find_next_logistics_connection

    Returns:
        Mapping of source index to the set of destination indices
    """
    if not 0 < decay_factor < 1:
        raise ValueError(f"decay_factor must be in (0, 1), got {decay_factor}")

    unmarked_vertices = {v for v in range(len(adjacency)) if v not in border_vertices}
    logistics_graph: LogisticsGraph = {}
    dropped = 0

    while unmarked_vertices and border_star_queue:
        score, border_vertex = border_star_queue.pop()
        connection = find_next_logistics_connection(
            adjacency, logistics_graph, unmarked_vertices, border_vertex,
            full_component_search=full_component_search, border_vertices=border_vertices,
        )
        if connection is None:
            logger.debug("No supply reachable for border star", vertex=border_vertex, score=score)
            dropped += 1
            continue

        source, destination = connection
        logistics_graph.setdefault(source, set()).add(destination)
        border_star_queue.push(score * decay_factor, border_vertex)

    logger.info("Logistics graph created",
                sources=len(logistics_graph),
                edges=sum(len(d) for d in logistics_graph.values()),
                unmarked_left=len(unmarked_vertices),
                dropped=dropped)
    return logistics_graph


def compute_carrier_loops(logistics_graph: LogisticsGraph, player_stars: Sequence[Star]) -> List[CarrierLoop]:
    """Resolve every logistics edge to the pair of stars it connects."""
    return [
        CarrierLoop(from_star=player_stars[start], to_star=player_stars[end])
        for start in sorted(logistics_graph)
        for end in sorted(logistics_graph[start])
    ]
