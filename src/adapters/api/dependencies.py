from __future__ import annotations

import os
from functools import lru_cache

from src.adapters.persistence.local_map_repository import LocalMapRepository
from src.app.ports.output import IGraphRepository
from src.app.services.routing_service import RoutingService


@lru_cache(maxsize=1)
def get_graph_repository() -> IGraphRepository:
    """One repository per process so the road graph is loaded once.

    Env vars:
      - GRAPH_SOURCE: map|osm (default: map)
    """

    source = (os.getenv("GRAPH_SOURCE") or "map").strip().lower()
    if source == "osm":
        # Imported lazily: OSMnx pulls in the geospatial stack.
        from src.adapters.maps.osmnx_map_adapter import OSMnxGraphRepository

        return OSMnxGraphRepository()
    if source != "map":
        raise RuntimeError(f"Unsupported GRAPH_SOURCE: {source}")
    return LocalMapRepository()


def get_routing_service() -> RoutingService:
    return RoutingService(graph_repository=get_graph_repository())
