from .geo import GeoPoint
from .road import RoadEdge, RoadNode
from .road_graph import RoadGraph
from .route import Route, RouteSegment, SearchAlgorithm

__all__ = [
    "GeoPoint",
    "RoadEdge",
    "RoadGraph",
    "RoadNode",
    "Route",
    "RouteSegment",
    "SearchAlgorithm",
]
