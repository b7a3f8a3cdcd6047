from __future__ import annotations

import pytest

from src.domain.models import GeoPoint, RoadGraph
from src.domain.models.road import normalize_category, speed_kmh_for_category

A = GeoPoint(lat=0.0, lon=0.0)
B = GeoPoint(lat=1.0, lon=0.0)
C = GeoPoint(lat=2.0, lon=0.0)


def _graph(*points: GeoPoint) -> RoadGraph:
    g = RoadGraph()
    for p in points:
        g.add_vertex(p)
    return g


def test_add_vertex_reports_insertion() -> None:
    g = RoadGraph()

    assert g.add_vertex(A) is True
    assert g.add_vertex(GeoPoint(lat=0.0, lon=0.0)) is False
    assert g.add_vertex(None) is False
    assert g.vertex_count() == 1


def test_add_edge_registers_outgoing_edge_on_source_only() -> None:
    g = _graph(A, B)

    edge = g.add_edge(A, B, "Main Street", "residential", 1.0)

    assert g.edge_count() == 1
    assert list(g.edges()) == [edge]
    assert g.node(A).outgoing == [edge]
    assert g.node(B).outgoing == []
    assert edge.source is g.node(A)
    assert edge.target is g.node(B)


def test_node_neighbours_come_from_outgoing_edges() -> None:
    g = _graph(A, B, C)
    g.add_edge(A, B, "Main Street", "residential", 1.0)
    g.add_edge(A, C, "Oak Avenue", "residential", 2.0)

    node = g.node(A)
    assert [edge.target.coords for edge in node.outgoing] == [B, C]
    assert not hasattr(node, "neighbors")


def test_parallel_edges_are_kept() -> None:
    g = _graph(A, B)

    g.add_edge(A, B, "Old Road", "residential", 2.0)
    g.add_edge(A, B, "New Road", "primary", 2.5)

    assert g.edge_count() == 2
    assert len(g.node(A).outgoing) == 2


@pytest.mark.parametrize(
    ("source", "target", "length"),
    [
        (A, C, 1.0),  # unknown target
        (C, A, 1.0),  # unknown source
        (None, A, 1.0),
        (A, A, 1.0),  # self-loop
        (A, B, 0.0),
        (A, B, -3.0),
        (A, B, float("nan")),
    ],
)
def test_add_edge_rejects_invalid_arguments(
    source: GeoPoint | None, target: GeoPoint | None, length: float
) -> None:
    g = _graph(A, B)

    with pytest.raises(ValueError):
        g.add_edge(source, target, "Bad Road", "residential", length)

    assert g.edge_count() == 0
    assert g.node(A).outgoing == []


def test_add_edge_rejects_negative_time() -> None:
    g = _graph(A, B)

    with pytest.raises(ValueError):
        g.add_edge(A, B, "Bad Road", "residential", 1.0, time_h=-0.1)


def test_edge_time_defaults_to_category_speed() -> None:
    g = _graph(A, B, C)

    slow = g.add_edge(A, B, "Side Street", "residential", 3.0)
    fast = g.add_edge(B, C, "Expressway", "primary_link", 8.0)
    given = g.add_edge(C, A, "Ferry", "ferry", 5.0, time_h=0.5)

    assert slow.time_h == pytest.approx(0.1)
    assert fast.time_h == pytest.approx(0.1)
    assert given.time_h == 0.5
    assert g.max_speed_kmh() == pytest.approx(80.0)


def test_categories_are_normalized() -> None:
    assert normalize_category(" Primary ") == "primary"
    assert normalize_category("secondary_link") == "secondary"
    assert normalize_category("cycleway") == "residential"
    assert normalize_category(None) == "residential"
    assert speed_kmh_for_category("motorway") == 100.0


def test_vertices_returns_a_copy() -> None:
    g = _graph(A, B)

    vertices = g.vertices()
    vertices.add(C)

    assert g.vertices() == {A, B}
    assert g.has_vertex(A)
    assert not g.has_vertex(C)
    assert not g.has_vertex(None)
    assert C not in g
    assert len(g) == 2


def test_empty_graph_has_no_speed() -> None:
    assert RoadGraph().max_speed_kmh() == 0.0
