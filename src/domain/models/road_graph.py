from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

from .geo import GeoPoint
from .road import RoadEdge, RoadNode, travel_time_h


@dataclass(slots=True)
class RoadGraph:
    """Directed road network keyed by intersection coordinates.

    Vertices and edges are added by a loader before any search runs; the
    search algorithms only read the graph.
    """

    _vertices: dict[GeoPoint, RoadNode] = field(default_factory=dict)
    _edges: list[RoadEdge] = field(default_factory=list)

    def add_vertex(self, location: GeoPoint | None) -> bool:
        """Add an intersection. Returns False for None or a known location."""

        if location is None or location in self._vertices:
            return False
        self._vertices[location] = RoadNode(coords=location)
        return True

    def add_edge(
        self,
        source: GeoPoint,
        target: GeoPoint,
        name: str,
        category: str,
        length_km: float,
        time_h: float | None = None,
    ) -> RoadEdge:
        """Add a directed road segment between two known intersections.

        When ``time_h`` is omitted it is derived from the category speed.

        Raises:
            ValueError: unknown endpoint, self-loop, non-positive length or
                negative time.
        """

        if source is None or source not in self._vertices:
            raise ValueError(f"Unknown source vertex: {source}")
        if target is None or target not in self._vertices:
            raise ValueError(f"Unknown target vertex: {target}")
        if source == target:
            raise ValueError(f"Self-loop at {source} is not allowed")

        length = float(length_km)
        if math.isnan(length) or length <= 0.0:
            raise ValueError(f"Edge length must be positive, got {length_km}")

        if time_h is None:
            time = travel_time_h(length, category)
        else:
            time = float(time_h)
            if math.isnan(time) or time < 0.0:
                raise ValueError(f"Edge time must be non-negative, got {time_h}")

        from_node = self._vertices[source]
        edge = RoadEdge(
            name=name,
            category=category,
            length_km=length,
            time_h=time,
            source=from_node,
            target=self._vertices[target],
        )
        self._edges.append(edge)
        from_node.add_edge(edge)
        return edge

    def vertex_count(self) -> int:
        return len(self._vertices)

    def edge_count(self) -> int:
        return len(self._edges)

    def vertices(self) -> set[GeoPoint]:
        """Return a copy of all intersection coordinates."""

        return set(self._vertices)

    def has_vertex(self, location: GeoPoint | None) -> bool:
        return location is not None and location in self._vertices

    def node(self, location: GeoPoint | None) -> RoadNode | None:
        if location is None:
            return None
        return self._vertices.get(location)

    def nodes(self) -> Iterator[RoadNode]:
        return iter(self._vertices.values())

    def edges(self) -> Iterator[RoadEdge]:
        return iter(self._edges)

    def max_speed_kmh(self) -> float:
        """Fastest edge speed in the graph, or 0.0 for a graph without edges."""

        best = 0.0
        for edge in self._edges:
            speed = edge.speed_kmh
            if speed > best:
                best = speed
        return best

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, location: object) -> bool:
        return location in self._vertices
