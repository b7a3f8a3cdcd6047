from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import osmnx as ox

from src.app.ports.output import IGraphRepository
from src.domain.models import RoadGraph

from .networkx_conversion import road_graph_from_networkx

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OSMnxGraphRepository(IGraphRepository):
    """Road graph built from OpenStreetMap data through OSMnx.

    Env vars:
      - OSM_GRAPH_PATH: prebuilt .graphml to load (written after a download)
      - OSM_PLACE: place string for OSMnx (e.g. 'La Jolla, San Diego, USA')
      - OSM_NETWORK_TYPE: OSMnx network type (default: drive)
      - OSMNX_CACHE_FOLDER: HTTP cache for Overpass downloads
    """

    graph_path: str | Path | None = None
    place: str | None = None
    network_type: str | None = None

    _graph: RoadGraph | None = None

    def _configure_osmnx(self) -> None:
        # Make Overpass/OSM downloads cacheable across runs.
        ox.settings.use_cache = True
        ox.settings.log_console = False
        ox.settings.cache_folder = os.getenv("OSMNX_CACHE_FOLDER") or "data/osm_cache"

    def _graph_path(self) -> Path | None:
        raw = str(self.graph_path or os.getenv("OSM_GRAPH_PATH") or "").strip()
        return Path(raw) if raw else None

    def _network_type(self) -> str:
        return self.network_type or os.getenv("OSM_NETWORK_TYPE") or "drive"

    def _download(self, target: Path | None):
        place = (self.place or os.getenv("OSM_PLACE") or "").strip()
        if not place:
            raise RuntimeError(
                "No prebuilt OSM graph found and OSM_PLACE is missing; "
                "set OSM_GRAPH_PATH to an existing .graphml or set OSM_PLACE."
            )

        logger.info("Downloading %s network for %s", self._network_type(), place)
        graph = ox.graph_from_place(
            place, network_type=self._network_type(), simplify=True
        )
        graph = ox.add_edge_speeds(graph)
        graph = ox.add_edge_travel_times(graph)

        if target is not None:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp = target.with_suffix(target.suffix + ".tmp")
            ox.save_graphml(graph, tmp)
            os.replace(tmp, target)
        return graph

    def load_graph(self) -> RoadGraph:
        if self._graph is not None:
            return self._graph

        self._configure_osmnx()
        path = self._graph_path()
        if path is not None and path.suffix.lower() != ".graphml":
            raise RuntimeError(f"Unsupported OSM_GRAPH_PATH format: {path}")

        if path is not None and path.exists():
            # OSMnx loader keeps numeric edge attributes numeric.
            nx_graph = ox.load_graphml(path)
        else:
            nx_graph = self._download(path)

        self._graph = road_graph_from_networkx(nx_graph)
        logger.info(
            "OSM road graph ready: %d vertices, %d edges",
            self._graph.vertex_count(),
            self._graph.edge_count(),
        )
        return self._graph
