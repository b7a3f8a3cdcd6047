from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class RouteSegmentSchema(BaseModel):
    origin: GeoPointSchema
    destination: GeoPointSchema
    name: str | None = None
    category: str | None = None
    distance_km: float | None = None
    duration_h: float | None = None


class RouteSchema(BaseModel):
    origin: GeoPointSchema
    destination: GeoPointSchema
    algorithm: str
    path: list[GeoPointSchema] = []
    segments: list[RouteSegmentSchema] = []
    visited_count: int = 0
    hop_count: int = 0

    total_distance_km: float | None = None
    total_time_h: float | None = None


class RouteRequestSchema(BaseModel):
    origin: GeoPointSchema
    destination: GeoPointSchema
    algorithm: Literal[
        "bfs", "dijkstra", "astar", "time_dijkstra", "time_astar"
    ] = "dijkstra"
    snap: bool = False


class GraphStatsSchema(BaseModel):
    vertices: int
    edges: int
