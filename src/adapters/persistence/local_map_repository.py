from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from src.app.ports.output import IGraphRepository
from src.domain.algorithms.geo_utils import haversine_distance_km
from src.domain.models import GeoPoint, RoadGraph

logger = logging.getLogger(__name__)


def _content_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        yield lineno, line


def _parse_count(entry: tuple[int, str] | None, what: str) -> int:
    if entry is None:
        raise ValueError(f"Map file ends before the {what} count")
    lineno, line = entry
    try:
        value = int(line)
    except ValueError as exc:
        raise ValueError(f"line {lineno}: expected {what} count, got {line!r}") from exc
    if value < 0:
        raise ValueError(f"line {lineno}: negative {what} count")
    return value


def parse_map(lines: Iterable[str], graph: RoadGraph | None = None) -> RoadGraph:
    """Populate a RoadGraph from the line-oriented map format.

    Layout::

        <vertex count>
        <edge count>
        lat lon                                     (one per vertex)
        lat1 lon1 lat2 lon2 "road name" category [length_km]   (one per edge)

    Edge lines are shell-quoted so road names may contain spaces. When the
    length is omitted it is the great-circle distance between the endpoints.
    """

    graph = graph if graph is not None else RoadGraph()
    entries = _content_lines(lines)

    vertex_count = _parse_count(next(entries, None), "vertex")
    edge_count = _parse_count(next(entries, None), "edge")

    for _ in range(vertex_count):
        entry = next(entries, None)
        if entry is None:
            raise ValueError("Map file ends before all vertices were read")
        lineno, line = entry
        fields = line.split()
        if len(fields) != 2:
            raise ValueError(f"line {lineno}: expected 'lat lon', got {line!r}")
        try:
            point = GeoPoint.parse(fields[0], fields[1])
        except ValueError as exc:
            raise ValueError(f"line {lineno}: {exc}") from exc
        if not graph.add_vertex(point):
            logger.warning("line %d: duplicate vertex %s ignored", lineno, point)

    for _ in range(edge_count):
        entry = next(entries, None)
        if entry is None:
            raise ValueError("Map file ends before all edges were read")
        lineno, line = entry
        try:
            fields = shlex.split(line)
        except ValueError as exc:
            raise ValueError(f"line {lineno}: {exc}") from exc
        if len(fields) not in (6, 7):
            raise ValueError(
                f"line {lineno}: expected 'lat1 lon1 lat2 lon2 name category [length]'"
            )
        try:
            source = GeoPoint.parse(fields[0], fields[1])
            target = GeoPoint.parse(fields[2], fields[3])
            if len(fields) == 7:
                length_km = float(fields[6])
            else:
                length_km = haversine_distance_km(source, target)
            graph.add_edge(source, target, fields[4], fields[5], length_km)
        except ValueError as exc:
            raise ValueError(f"line {lineno}: {exc}") from exc

    trailing = next(entries, None)
    if trailing is not None:
        logger.warning("line %d: ignoring content after the last edge", trailing[0])

    return graph


@dataclass(slots=True)
class LocalMapRepository(IGraphRepository):
    """Loads a road graph from a map file on disk.

    Env vars:
      - MAP_PATH: path to the map file (default: data/maps/simpletest.map)
    """

    path: str | Path | None = None

    _graph: RoadGraph | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("MAP_PATH") or "data/maps/simpletest.map"
        return Path(value)

    def load_graph(self) -> RoadGraph:
        if self._graph is not None:
            return self._graph

        path = self._path()
        with path.open("r", encoding="utf-8") as fp:
            graph = parse_map(fp)

        logger.info(
            "Loaded %s: %d vertices, %d edges",
            path,
            graph.vertex_count(),
            graph.edge_count(),
        )
        self._graph = graph
        return graph
