import numpy as np
import pytest

from graphtheory import (
    Directed,
    Graph,
    InvalidReference,
    LabelConflict,
    TextDirection,
    VertexStatus,
)
from graphtheory.model import as_point


def test_vertices_get_sequential_labels():
    graph = Graph()
    ids = [graph.add_vertex((i, 0)) for i in range(28)]
    labels = [graph.vertex(v).label for v in ids]
    assert labels[:3] == ["A", "B", "C"]
    assert labels[25] == "Z"
    assert labels[26:] == ["AA", "AB"]


def test_auto_label_skips_labels_in_use():
    graph = Graph()
    graph.add_vertex((0, 0), label="A")
    v = graph.add_vertex((1, 0))
    assert graph.vertex(v).label == "B"


def test_duplicate_label_is_rejected():
    graph = Graph()
    a = graph.add_vertex((0, 0), label="P")
    b = graph.add_vertex((1, 0), label="Q")
    with pytest.raises(LabelConflict):
        graph.add_vertex((2, 0), label="P")
    with pytest.raises(LabelConflict):
        graph.set_label(b, "P")
    graph.set_label(a, "P")
    graph.delete_vertex(a)
    graph.set_label(b, "P")
    assert graph.vertex_by_label("P").id == b


def test_edge_requires_existing_vertices():
    graph = Graph()
    v = graph.add_vertex((0, 0))
    with pytest.raises(InvalidReference):
        graph.add_edge(v, "missing")
    with pytest.raises(KeyError):
        graph.add_edge("missing", v)
    assert graph.edges() == []


def test_delete_vertex_cascades_to_edges():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((1, 0))
    c = graph.add_vertex((2, 0))
    ab = graph.add_edge(a, b)
    bc = graph.add_edge(b, c)
    ca = graph.add_edge(c, a)
    vertex = graph.vertex(b)

    graph.delete_vertex(b)

    assert graph.edge_ids() == [ca]
    assert ab not in graph and bc not in graph
    assert vertex.status is VertexStatus.DELETED
    with pytest.raises(InvalidReference):
        graph.degree(b)


def test_ids_are_never_reused():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    graph.delete_vertex(a)
    b = graph.add_vertex((0, 0))
    assert a != b


def test_unknown_edge_in_subset_is_an_invalid_reference():
    graph = Graph()
    graph.add_vertex((0, 0))
    with pytest.raises(InvalidReference):
        graph.has_cycle(["nope"])


def test_edge_attributes():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((1, 0))
    e = graph.add_edge(a, b, Directed.FORWARD, 2.5)
    edge = graph.edge(e)
    assert edge.directed is Directed.FORWARD
    assert edge.weight == 2.5
    graph.set_weight(e, 4)
    graph.set_direction(e, "bidirectional")
    assert edge.weight == 4.0
    assert edge.directed is Directed.BIDIRECTIONAL
    assert edge.traverse(a) == b
    assert edge.traverse("other") is None


def test_curve_kinds():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 0))
    line = graph.add_edge(a, b)
    bent = graph.add_edge(a, b, control_point=(5, 5))
    loop = graph.add_edge(a, a)
    assert graph.curve(line).kind == "line"
    assert graph.curve(bent).kind == "quadratic"
    assert graph.curve(loop).kind == "loop"
    graph.straighten_edge(bent)
    assert graph.curve(bent).kind == "line"
    with pytest.raises(ValueError):
        graph.curve_edge(loop, (1, 1))


def test_vertex_drag_previews_without_committing():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 0))
    e = graph.add_edge(a, b)

    graph.drag_vertex(b, (10, 0))

    assert graph.vertex(b).position == (10.0, 0.0)
    assert graph.curve(e).end == (20.0, 0.0)

    graph.end_vertex_drag(b)

    assert graph.vertex(b).position == (20.0, 0.0)
    assert graph.vertex(b).offset == (0.0, 0.0)


def test_control_point_follows_dragged_vertex():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 0))
    e = graph.add_edge(a, b, control_point=(5, 5))

    graph.drag_vertex(b, (10, 0))

    assert graph.curve(e).control[1] == pytest.approx((10.0, 10.0))
    assert graph.edge(e).control_point == (5.0, 5.0)

    graph.end_vertex_drag(b)

    assert graph.edge(e).control_point == pytest.approx((10.0, 10.0))
    assert graph.edge(e).control_offset == (0.0, 0.0)


def test_move_vertex_carries_the_bend_like_a_drag():
    moved = Graph()
    a = moved.add_vertex((0, 0))
    b = moved.add_vertex((10, 0))
    e = moved.add_edge(a, b, control_point=(5, 5))
    dragged = moved.copy()

    moved.move_vertex(b, (20, 0))
    dragged.drag_vertex(b, (10, 0))
    dragged.end_vertex_drag(b)

    assert moved.vertex(b).position == (20.0, 0.0)
    assert moved.vertex(b).offset == (0.0, 0.0)
    assert moved.edge(e).control_point == pytest.approx((10.0, 10.0))
    assert moved.edge(e).control_point == pytest.approx(dragged.edge(e).control_point)


def test_positions_accept_any_pair_sequence():
    graph = Graph()
    a = graph.add_vertex(np.array([1.5, -2.0]))
    b = graph.add_vertex([3, 4])
    assert graph.vertex(a).position == (1.5, -2.0)
    assert isinstance(graph.vertex(a).position[0], float)

    graph.move_vertex(b, np.array([6.0, 8.0]))
    assert graph.vertex(b).position == (6.0, 8.0)


@pytest.mark.parametrize("value", [(1, 2, 3), "xy", 5.0, [[1, 2]], ("a", "b")])
def test_positions_reject_non_pairs(value):
    with pytest.raises(ValueError):
        as_point(value)


def test_label_keeps_its_parameter_during_drag():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 0))
    e = graph.add_edge(a, b)
    assert graph.label_position(e) == pytest.approx((5.0, 20.0))

    graph.drag_vertex(b, (10, 0))

    assert graph.label_position(e) == pytest.approx((10.0, 20.0))


def test_control_point_drag_bends_a_straight_edge():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 0))
    e = graph.add_edge(a, b)

    graph.drag_control_point(e, (0, 4))

    curve = graph.curve(e)
    assert curve.kind == "quadratic"
    assert curve.control[1] == pytest.approx((5.0, 4.0))

    graph.end_control_point_drag(e)

    assert graph.edge(e).control_point == pytest.approx((5.0, 4.0))
    assert graph.edge(e).control_offset == (0.0, 0.0)


def test_loops_cannot_be_bent():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    loop = graph.add_edge(a, a)
    with pytest.raises(ValueError):
        graph.drag_control_point(loop, (1, 1))


def test_place_label_picks_nearest_side():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 0))
    e = graph.add_edge(a, b)

    graph.place_label(e, (3, -4))

    edge = graph.edge(e)
    assert edge.text_edge_position == pytest.approx(0.3)
    assert edge.text_distance == pytest.approx(4.0)
    assert edge.text_direction is TextDirection.NEGATIVE
    assert graph.label_position(e) == pytest.approx((3.0, -4.0))


def test_copy_and_restore():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((1, 0))
    graph.add_edge(a, b)
    snapshot = graph.copy()

    graph.move_vertex(a, (5, 5))
    extra = graph.add_vertex((2, 2))
    graph.delete_vertex(b)

    graph.restore(snapshot)

    assert graph.vertex_ids() == [a, b]
    assert graph.vertex(a).position == (0.0, 0.0)
    assert len(graph.edges()) == 1
    assert graph.add_vertex((3, 3)) not in (a, b, extra)
    # the snapshot is not shared with the restored graph
    graph.move_vertex(a, (9, 9))
    assert snapshot.vertex(a).position == (0.0, 0.0)


def test_edges_intersect_rejects_the_same_edge():
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((1, 0))
    e = graph.add_edge(a, b)
    with pytest.raises(ValueError):
        graph.edges_intersect(e, e)
