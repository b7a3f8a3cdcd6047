from __future__ import annotations

from typing import Sequence

from src.domain.algorithms.geo_utils import haversine_distance_km
from src.domain.exceptions import InvalidEndpoint
from src.domain.models import GeoPoint, RoadEdge, RoadGraph, RouteSegment


def cheapest_edge(
    graph: RoadGraph, a: GeoPoint, b: GeoPoint, *, by_time: bool = False
) -> RoadEdge | None:
    """The edge a -> b with the smallest length (or time); None if there is none."""

    node = graph.node(a)
    if node is None:
        return None

    best: RoadEdge | None = None
    for edge in node.outgoing:
        if edge.target.coords != b:
            continue
        if best is None:
            best = edge
        elif by_time and edge.time_h < best.time_h:
            best = edge
        elif not by_time and edge.length_km < best.length_km:
            best = edge
    return best


def path_edges(
    graph: RoadGraph, path: Sequence[GeoPoint], *, by_time: bool = False
) -> list[RoadEdge]:
    """Map consecutive path points back onto graph edges.

    Raises:
        ValueError: two consecutive points are not joined by an edge.
    """

    out: list[RoadEdge] = []
    for a, b in zip(path, path[1:]):
        edge = cheapest_edge(graph, a, b, by_time=by_time)
        if edge is None:
            raise ValueError(f"No edge from {a} to {b}")
        out.append(edge)
    return out


def path_distance_km(graph: RoadGraph, path: Sequence[GeoPoint]) -> float:
    return float(sum(e.length_km for e in path_edges(graph, path)))


def path_time_h(graph: RoadGraph, path: Sequence[GeoPoint]) -> float:
    return float(sum(e.time_h for e in path_edges(graph, path, by_time=True)))


def segments_for(edges: Sequence[RoadEdge]) -> tuple[RouteSegment, ...]:
    return tuple(
        RouteSegment(
            origin=e.source.coords,
            destination=e.target.coords,
            name=e.name or None,
            category=e.category or None,
            distance_km=e.length_km,
            duration_h=e.time_h,
        )
        for e in edges
    )


def nearest_vertex(graph: RoadGraph, point: GeoPoint) -> GeoPoint:
    """Closest intersection to an arbitrary coordinate (great-circle distance)."""

    if graph.has_vertex(point):
        return point

    best: GeoPoint | None = None
    best_d = float("inf")
    for node in graph.nodes():
        vertex = node.coords
        d = haversine_distance_km(point, vertex)
        if d < best_d:
            best_d = d
            best = vertex

    if best is None:
        raise InvalidEndpoint("Road graph contains no intersections")
    return best
