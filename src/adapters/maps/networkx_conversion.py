from __future__ import annotations

import logging
from typing import Any

import networkx as nx

from src.domain.models import GeoPoint, RoadGraph

logger = logging.getLogger(__name__)


def _first(value: Any) -> Any:
    # OSMnx merges attributes of simplified edges into lists.
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _as_float(value: Any) -> float | None:
    try:
        return float(_first(value))
    except (TypeError, ValueError):
        return None


def _node_point(data: dict[str, Any]) -> GeoPoint | None:
    lat = _as_float(data.get("y"))
    lon = _as_float(data.get("x"))
    if lat is None or lon is None:
        return None
    try:
        return GeoPoint(lat=lat, lon=lon)
    except ValueError:
        return None


def road_graph_from_networkx(graph: nx.Graph) -> RoadGraph:
    """Convert an OSMnx-style networkx graph into a RoadGraph.

    Nodes carry lon/lat in x/y. Edges carry ``length`` in meters and
    optionally ``travel_time`` in seconds, ``name`` and ``highway``.
    Undirected graphs produce one edge per direction.
    """

    road_graph = RoadGraph()
    points: dict[Any, GeoPoint] = {}
    for node_id, data in graph.nodes(data=True):
        point = _node_point(dict(data))
        if point is None:
            continue
        points[node_id] = point
        road_graph.add_vertex(point)

    skipped = 0
    directed = graph.is_directed()
    for u, v, data in graph.edges(data=True):
        source = points.get(u)
        target = points.get(v)
        length_m = _as_float(data.get("length"))
        if source is None or target is None or source == target:
            skipped += 1
            continue
        if length_m is None or length_m <= 0.0:
            skipped += 1
            continue

        name = _first(data.get("name"))
        category = _first(data.get("highway"))
        travel_time_s = _as_float(data.get("travel_time"))
        time_h = None if travel_time_s is None else travel_time_s / 3600.0

        pairs = [(source, target)] if directed else [(source, target), (target, source)]
        for a, b in pairs:
            road_graph.add_edge(
                a,
                b,
                str(name) if name else "",
                str(category) if category else "",
                length_m / 1000.0,
                time_h,
            )

    if skipped:
        logger.debug("Skipped %d unusable edges during conversion", skipped)
    return road_graph
