from __future__ import annotations

import heapq
import itertools
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Callable

from src.domain.algorithms.geo_utils import haversine_distance_km
from src.domain.algorithms.path import reconstruct_path
from src.domain.models import GeoPoint, RoadEdge, RoadGraph, RoadNode, SearchAlgorithm
from src.domain.models.road import SPEED_LIMITS_KMH

logger = logging.getLogger(__name__)

Visitor = Callable[[GeoPoint], None]
EdgeWeight = Callable[[RoadEdge], float]
Heuristic = Callable[[GeoPoint, GeoPoint], float]


def edge_length(edge: RoadEdge) -> float:
    return edge.length_km


def edge_time(edge: RoadEdge) -> float:
    return edge.time_h


def zero_heuristic(point: GeoPoint, goal: GeoPoint) -> float:
    return 0.0


def distance_heuristic(point: GeoPoint, goal: GeoPoint) -> float:
    """Straight-line km to the goal."""

    return haversine_distance_km(point, goal)


def straight_line_ratio(graph: RoadGraph) -> float:
    """Smallest ``length / great-circle distance`` over all edges, capped at 1.

    Scaling straight-line km by this ratio never overestimates the road
    length between two vertices, whatever lengths the edges were given.
    """

    ratio = 1.0
    for edge in graph.edges():
        straight = haversine_distance_km(edge.source.coords, edge.target.coords)
        if straight > 0.0:
            ratio = min(ratio, edge.length_km / straight)
    return ratio


def distance_heuristic_for(graph: RoadGraph) -> Heuristic:
    """Lower bound on remaining km for this graph."""

    ratio = straight_line_ratio(graph)
    if ratio >= 1.0:
        return distance_heuristic

    def _heuristic(point: GeoPoint, goal: GeoPoint) -> float:
        return ratio * haversine_distance_km(point, goal)

    return _heuristic


def time_heuristic_for(graph: RoadGraph) -> Heuristic:
    """Lower bound on remaining hours: scaled straight-line km at the fastest
    speed found anywhere in the graph."""

    max_speed = graph.max_speed_kmh() or max(SPEED_LIMITS_KMH.values())
    if math.isinf(max_speed):
        # A zero-time edge makes any positive bound inadmissible.
        return zero_heuristic
    ratio = straight_line_ratio(graph)

    def _heuristic(point: GeoPoint, goal: GeoPoint) -> float:
        return ratio * haversine_distance_km(point, goal) / max_speed

    return _heuristic


@dataclass(slots=True)
class NodeScratch:
    """Working memory for one node during one search."""

    cost_from_start: float = math.inf
    cost_to_goal: float = 0.0
    priority: float = math.inf

    @property
    def total_cost(self) -> float:
        return self.cost_from_start + self.cost_to_goal


@dataclass(frozen=True, slots=True)
class SearchResult:
    algorithm: SearchAlgorithm
    path: tuple[GeoPoint, ...] | None
    visited_count: int
    cost: float | None = None

    @property
    def found(self) -> bool:
        return self.path is not None


def _ignore(point: GeoPoint) -> None:
    return None


def _endpoints(
    graph: RoadGraph, start: GeoPoint | None, goal: GeoPoint | None
) -> tuple[RoadNode, RoadNode] | None:
    start_node = graph.node(start)
    goal_node = graph.node(goal)
    if start_node is None or goal_node is None:
        logger.debug("Search endpoints not in graph: %s -> %s", start, goal)
        return None
    return start_node, goal_node


def _finish(
    algorithm: SearchAlgorithm,
    path: list[GeoPoint] | None,
    visited_count: int,
    cost: float | None = None,
) -> SearchResult:
    if path is None:
        logger.debug("%s: no path, visited %d nodes", algorithm.value, visited_count)
        return SearchResult(algorithm=algorithm, path=None, visited_count=visited_count)

    logger.debug(
        "%s: found %d-node path, visited %d nodes",
        algorithm.value,
        len(path),
        visited_count,
    )
    return SearchResult(
        algorithm=algorithm, path=tuple(path), visited_count=visited_count, cost=cost
    )


def bfs_search(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    on_visit: Visitor | None = None,
) -> SearchResult:
    """Breadth-first search: the path with the fewest road segments."""

    on_visit = on_visit or _ignore
    endpoints = _endpoints(graph, start, goal)
    if endpoints is None:
        return _finish(SearchAlgorithm.BFS, None, 0)
    start_node, goal_node = endpoints

    visited = {start_node}
    parent_by_node: dict[RoadNode, RoadNode] = {}
    frontier: deque[RoadNode] = deque([start_node])
    dequeued = 0

    while frontier:
        current = frontier.popleft()
        dequeued += 1
        on_visit(current.coords)

        if current is goal_node:
            path = reconstruct_path(parent_by_node, start=start_node, goal=goal_node)
            hops = None if path is None else float(len(path) - 1)
            return _finish(SearchAlgorithm.BFS, path, dequeued, hops)

        for edge in current.outgoing:
            neighbor = edge.target
            if neighbor in visited:
                continue
            visited.add(neighbor)
            parent_by_node[neighbor] = current
            frontier.append(neighbor)

    return _finish(SearchAlgorithm.BFS, None, dequeued)


def priority_search(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    *,
    weight: EdgeWeight = edge_length,
    heuristic: Heuristic | None = None,
    on_visit: Visitor | None = None,
    algorithm: SearchAlgorithm = SearchAlgorithm.DIJKSTRA,
) -> SearchResult:
    """Dijkstra (no heuristic) or A* (with heuristic) over a pluggable weight.

    The queue uses lazy deletion: a node whose cost improves is pushed again
    and older entries are dropped when popped after the node was finalized.
    """

    on_visit = on_visit or _ignore
    endpoints = _endpoints(graph, start, goal)
    if endpoints is None:
        return _finish(algorithm, None, 0)
    start_node, goal_node = endpoints
    estimate = heuristic or zero_heuristic

    # Fresh scratch per search; nothing survives between calls.
    scratch: dict[RoadNode, NodeScratch] = {
        node: NodeScratch(cost_to_goal=estimate(node.coords, goal_node.coords))
        for node in graph.nodes()
    }
    origin = scratch[start_node]
    origin.cost_from_start = 0.0
    origin.priority = origin.total_cost

    finalized: set[RoadNode] = set()
    parent_by_node: dict[RoadNode, RoadNode] = {}
    tie = itertools.count()
    queue: list[tuple[float, int, RoadNode]] = [(origin.priority, next(tie), start_node)]

    while queue:
        _, _, current = heapq.heappop(queue)
        if current in finalized:
            continue
        finalized.add(current)
        on_visit(current.coords)

        current_state = scratch[current]
        if current is goal_node:
            path = reconstruct_path(parent_by_node, start=start_node, goal=goal_node)
            return _finish(algorithm, path, len(finalized), current_state.cost_from_start)

        for edge in current.outgoing:
            neighbor = edge.target
            if neighbor in finalized:
                continue
            candidate = current_state.cost_from_start + weight(edge)
            state = scratch[neighbor]
            if candidate < state.cost_from_start:
                state.cost_from_start = candidate
                parent_by_node[neighbor] = current
                state.priority = state.total_cost
                heapq.heappush(queue, (state.priority, next(tie), neighbor))

    return _finish(algorithm, None, len(finalized))


def bfs(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    on_visit: Visitor | None = None,
) -> list[GeoPoint] | None:
    return _as_path(bfs_search(graph, start, goal, on_visit))


def dijkstra(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    on_visit: Visitor | None = None,
) -> list[GeoPoint] | None:
    return _as_path(run_search(graph, start, goal, SearchAlgorithm.DIJKSTRA, on_visit))


def a_star_search(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    on_visit: Visitor | None = None,
) -> list[GeoPoint] | None:
    return _as_path(run_search(graph, start, goal, SearchAlgorithm.ASTAR, on_visit))


def time_dijkstra(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    on_visit: Visitor | None = None,
) -> list[GeoPoint] | None:
    return _as_path(
        run_search(graph, start, goal, SearchAlgorithm.TIME_DIJKSTRA, on_visit)
    )


def time_search(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    on_visit: Visitor | None = None,
) -> list[GeoPoint] | None:
    """A* minimising travel time."""

    return _as_path(run_search(graph, start, goal, SearchAlgorithm.TIME_ASTAR, on_visit))


def run_search(
    graph: RoadGraph,
    start: GeoPoint | None,
    goal: GeoPoint | None,
    algorithm: SearchAlgorithm | str = SearchAlgorithm.DIJKSTRA,
    on_visit: Visitor | None = None,
) -> SearchResult:
    """Run the named search and return the path with its visit count."""

    algorithm = SearchAlgorithm(algorithm)
    if algorithm is SearchAlgorithm.BFS:
        return bfs_search(graph, start, goal, on_visit)

    if algorithm in (SearchAlgorithm.DIJKSTRA, SearchAlgorithm.ASTAR):
        weight = edge_length
    else:
        weight = edge_time

    heuristic: Heuristic | None = None
    if algorithm is SearchAlgorithm.ASTAR:
        heuristic = distance_heuristic_for(graph)
    elif algorithm is SearchAlgorithm.TIME_ASTAR:
        heuristic = time_heuristic_for(graph)

    return priority_search(
        graph,
        start,
        goal,
        weight=weight,
        heuristic=heuristic,
        on_visit=on_visit,
        algorithm=algorithm,
    )


def _as_path(result: SearchResult) -> list[GeoPoint] | None:
    return None if result.path is None else list(result.path)
