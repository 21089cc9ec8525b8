import numpy as np
import pytest

from graphtheory import PlanarPuzzle, PlanarStatus, planar_graph
from graphtheory.textbook import PLANAR_POSITIONS

SOLVED_LAYOUT = {
    "a": (0.5, 0.05),
    "b": (0.95, 0.85),
    "c": (0.05, 0.85),
    "f": (0.5, 0.7),
    "d": (0.35, 0.4),
    "e": (0.65, 0.4),
}


def _ids(graph):
    return {vertex.label: vertex.id for vertex in graph.vertices()}


def _edge(graph, ids, first, second):
    return graph.edges_between(ids[first], ids[second])[0].id


def test_starting_layout_is_tangled():
    graph = planar_graph()
    puzzle = PlanarPuzzle(graph)
    ids = _ids(graph)

    pairs = puzzle.crossing_pairs()

    assert pairs
    crossing = {frozenset(pair) for pair in pairs}
    assert frozenset({_edge(graph, ids, "a", "c"), _edge(graph, ids, "b", "e")}) in crossing
    assert puzzle.check() is PlanarStatus.UNSOLVED


def test_untangled_layout_is_solved():
    graph = planar_graph()
    puzzle = PlanarPuzzle(graph)
    ids = _ids(graph)

    for label, position in SOLVED_LAYOUT.items():
        status = puzzle.move_vertex(ids[label], position)

    assert status is PlanarStatus.SOLVED
    assert puzzle.crossing_pairs() == []


def test_drag_is_checked_on_release():
    graph = planar_graph()
    puzzle = PlanarPuzzle(graph)
    ids = _ids(graph)
    for label, position in SOLVED_LAYOUT.items():
        if label != "f":
            puzzle.move_vertex(ids[label], position)
    graph.move_vertex(ids["f"], (0.5, 0.95))
    assert puzzle.check() is PlanarStatus.UNSOLVED

    puzzle.drag_vertex(ids["f"], (0.0, -0.25))
    assert puzzle.status is PlanarStatus.UNSOLVED

    assert puzzle.end_vertex_drag(ids["f"]) is PlanarStatus.SOLVED
    assert graph.vertex(ids["f"]).position == pytest.approx((0.5, 0.7))


def test_reset_restores_the_starting_layout():
    graph = planar_graph()
    puzzle = PlanarPuzzle(graph)
    ids = _ids(graph)
    for label, position in SOLVED_LAYOUT.items():
        puzzle.move_vertex(ids[label], position)
    assert puzzle.status is PlanarStatus.SOLVED

    puzzle.reset()

    assert puzzle.status is PlanarStatus.UNSOLVED
    for label, position in PLANAR_POSITIONS.items():
        assert graph.vertex(ids[label]).position == position
    assert puzzle.check() is PlanarStatus.UNSOLVED


def test_move_and_drag_reach_the_same_layout():
    moved_graph = planar_graph()
    dragged_graph = planar_graph()
    moved = PlanarPuzzle(moved_graph)
    dragged = PlanarPuzzle(dragged_graph)
    ids = _ids(moved_graph)

    for label, position in SOLVED_LAYOUT.items():
        moved.move_vertex(ids[label], position)
        start = dragged_graph.vertex(ids[label]).position
        dragged.drag_vertex(ids[label], (position[0] - start[0], position[1] - start[1]))
        dragged.end_vertex_drag(ids[label])

    assert moved.status is dragged.status is PlanarStatus.SOLVED
    for edge in moved_graph.edges():
        assert np.asarray(moved_graph.curve(edge.id).control) == pytest.approx(
            np.asarray(dragged_graph.curve(edge.id).control)
        )
