import pytest

from graphtheory import Edge, Graph
from graphtheory.geometry import build_curve, crossing_points, intersects, segment_intersections


def _line(edge_id, start_vertex, end_vertex, start, end, control=None):
    edge = Edge(id=edge_id, start=start_vertex, end=end_vertex, control_point=control)
    return build_curve(edge, start, end, vertex_diameter=30.0)


def test_shared_endpoint_only_is_not_a_crossing():
    c1 = _line("e1", "a", "b", (0, 0), (10, 0))
    c2 = _line("e2", "a", "c", (0, 0), (0, 10))
    assert intersects(c1, c2) is False
    assert intersects(c2, c1) is False


def test_crossing_interiors():
    c1 = _line("e1", "a", "b", (0, 0), (10, 10))
    c2 = _line("e2", "c", "d", (0, 10), (10, 0))
    assert intersects(c1, c2) is True
    assert intersects(c2, c1) is True
    assert crossing_points(c1, c2) == [pytest.approx((5.0, 5.0))]


def test_disjoint_segments():
    c1 = _line("e1", "a", "b", (0, 0), (10, 0))
    c2 = _line("e2", "c", "d", (0, 1), (10, 1))
    assert intersects(c1, c2) is False


def test_collinear_overlap_is_a_crossing():
    c1 = _line("e1", "a", "b", (0, 0), (10, 0))
    c2 = _line("e2", "c", "d", (5, 0), (15, 0))
    assert intersects(c1, c2) is True
    assert intersects(c2, c1) is True


def test_collinear_edges_meeting_at_a_shared_vertex_do_not_cross():
    c1 = _line("e1", "a", "b", (0, 0), (10, 0))
    c2 = _line("e2", "b", "c", (10, 0), (20, 0))
    assert intersects(c1, c2) is False


def test_overlapping_parallel_edges_cross():
    c1 = _line("e1", "a", "b", (0, 0), (10, 0))
    c2 = _line("e2", "a", "b", (0, 0), (10, 0))
    assert intersects(c1, c2) is True


def test_endpoint_touching_an_interior_counts():
    c1 = _line("e1", "a", "b", (0, 0), (10, 0))
    c2 = _line("e2", "c", "d", (5, 0), (5, 10))
    assert intersects(c1, c2) is True


def test_curved_edge_against_lines():
    arch = _line("e1", "a", "b", (0, 0), (10, 0), control=(5, 10))
    low = _line("e2", "c", "d", (0, 3), (10, 3))
    high = _line("e3", "c", "d", (0, 6), (10, 6))
    assert intersects(arch, low) is True
    assert len(crossing_points(arch, low)) == 2
    assert intersects(arch, high) is False


def test_curved_parallel_edge_meets_only_at_vertices():
    straight = _line("e1", "a", "b", (0, 0), (10, 0))
    arch = _line("e2", "a", "b", (0, 0), (10, 0), control=(5, 10))
    assert intersects(straight, arch) is False
    assert intersects(arch, straight) is False


def test_same_edge_is_rejected():
    c1 = _line("e1", "a", "b", (0, 0), (10, 0))
    with pytest.raises(ValueError):
        intersects(c1, c1)


def test_segment_intersections_degenerate_segment_off_the_line():
    assert segment_intersections((5, 3), (5, 3), (0, 0), (10, 10)) == []
    assert segment_intersections((0, 0), (10, 0), (5, 0), (5, 0)) == [(5, 0)]


def test_loop_and_its_own_vertex_edges():
    graph = Graph(vertex_diameter=30.0)
    v = graph.add_vertex((0, 0))
    w = graph.add_vertex((100, 0))
    p = graph.add_vertex((-90, 30))
    q = graph.add_vertex((90, 30))
    loop = graph.add_edge(v, v)
    spoke = graph.add_edge(v, w)
    across = graph.add_edge(p, q)

    assert graph.edges_intersect(loop, spoke) is False
    assert graph.edges_intersect(spoke, loop) is False
    assert graph.edges_intersect(loop, across) is True
    assert graph.crossing_pairs() == [(loop, across)]


def test_result_is_stable_across_calls():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 10))
    c = graph.add_vertex((0, 10))
    d = graph.add_vertex((10, 0))
    e1 = graph.add_edge(a, b)
    e2 = graph.add_edge(c, d)
    first = graph.edges_intersect(e1, e2)
    assert all(graph.edges_intersect(e1, e2) == first for _ in range(3))
    assert graph.vertex(a).position == (0.0, 0.0)
