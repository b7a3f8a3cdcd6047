from __future__ import annotations

import networkx as nx
import pytest

from src.adapters.maps.networkx_conversion import road_graph_from_networkx
from src.domain.models import GeoPoint


def _osm_like_graph() -> nx.MultiDiGraph:
    g = nx.MultiDiGraph()
    # Nodes carry lon/lat in x/y.
    g.add_node(1, x=0.0, y=0.0)
    g.add_node(2, x=0.01, y=0.0)
    g.add_node(3, x=0.02, y=0.0)
    g.add_node(4)  # no coordinates
    g.add_edge(1, 2, length=1200.0, name=["Main Street", "Old Main"], highway="primary")
    g.add_edge(1, 2, length=1500.0, highway="residential", travel_time=90.0)
    g.add_edge(2, 3, length="1300.5", highway=["tertiary", "residential"])
    g.add_edge(2, 1, length=0.0, highway="primary")
    g.add_edge(3, 4, length=100.0)
    return g


def test_conversion_keeps_directed_and_parallel_edges() -> None:
    road = road_graph_from_networkx(_osm_like_graph())

    assert road.vertex_count() == 3
    assert road.edge_count() == 3

    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.0, lon=0.01)
    out = road.node(a).outgoing
    assert [e.name for e in out] == ["Main Street", ""]
    assert out[0].length_km == pytest.approx(1.2)
    assert out[0].time_h == pytest.approx(1.2 / 80.0)
    assert out[1].time_h == pytest.approx(90.0 / 3600.0)
    assert road.node(b).outgoing[0].category == "tertiary"
    assert road.node(b).outgoing[0].length_km == pytest.approx(1.3005)


def test_undirected_graph_produces_both_directions() -> None:
    g = nx.Graph()
    g.add_node("a", x=0.0, y=0.0)
    g.add_node("b", x=0.0, y=0.01)
    g.add_edge("a", "b", length=1111.0, name="Two Way")

    road = road_graph_from_networkx(g)

    assert road.edge_count() == 2
    assert {(e.source.coords, e.target.coords) for e in road.edges()} == {
        (GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.01, lon=0.0)),
        (GeoPoint(lat=0.01, lon=0.0), GeoPoint(lat=0.0, lon=0.0)),
    }
