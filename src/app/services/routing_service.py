from __future__ import annotations

import logging
from dataclasses import dataclass

from src.app.ports.output import IGraphRepository
from src.domain.algorithms.search import Visitor, run_search
from src.domain.exceptions import InvalidEndpoint, NoPathFound
from src.domain.models import GeoPoint, Route, SearchAlgorithm

from .routing_helpers import nearest_vertex, path_edges, segments_for

logger = logging.getLogger(__name__)

TIME_ALGORITHMS = frozenset(
    {SearchAlgorithm.TIME_DIJKSTRA, SearchAlgorithm.TIME_ASTAR}
)


@dataclass(slots=True)
class RoutingService:
    """Application service (use case) for route calculation.

    This layer orchestrates ports. Domain stays pure: the searches return
    None for "no route", this service turns that into typed errors.
    """

    graph_repository: IGraphRepository

    def calculate_route(
        self,
        *,
        origin: GeoPoint,
        destination: GeoPoint,
        algorithm: SearchAlgorithm | str = SearchAlgorithm.DIJKSTRA,
        snap: bool = False,
        on_visit: Visitor | None = None,
    ) -> Route:
        algorithm = SearchAlgorithm(algorithm)
        graph = self.graph_repository.load_graph()

        start, goal = origin, destination
        if snap:
            start = nearest_vertex(graph, origin)
            goal = nearest_vertex(graph, destination)

        for label, point in (("origin", start), ("destination", goal)):
            if not graph.has_vertex(point):
                raise InvalidEndpoint(f"{label} {point} is not an intersection")

        result = run_search(graph, start, goal, algorithm, on_visit)
        if result.path is None:
            raise NoPathFound(f"No {algorithm.value} route from {start} to {goal}")

        logger.info(
            "Route %s -> %s via %s: %d nodes, %d visited",
            start,
            goal,
            algorithm.value,
            len(result.path),
            result.visited_count,
        )

        edges = path_edges(
            graph, result.path, by_time=algorithm in TIME_ALGORITHMS
        )
        return Route(
            origin=start,
            destination=goal,
            algorithm=algorithm,
            path=result.path,
            segments=segments_for(edges),
            visited_count=result.visited_count,
        )

    def graph_stats(self) -> dict[str, int]:
        graph = self.graph_repository.load_graph()
        return {"vertices": graph.vertex_count(), "edges": graph.edge_count()}
