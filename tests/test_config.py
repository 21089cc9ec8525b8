import pytest

from graphtheory import EngineConfig, Graph, get_engine_config, set_engine_config


@pytest.fixture
def restore_config():
    original = get_engine_config()
    yield
    set_engine_config(original)


def test_get_returns_a_copy():
    config = get_engine_config()
    config.cycle_search_limit = 1
    assert get_engine_config().cycle_search_limit != 1


def test_defaults_flow_into_new_graphs(restore_config):
    set_engine_config(EngineConfig(default_vertex_diameter=12.0, default_text_distance=7.5))
    graph = Graph()
    a = graph.add_vertex((0, 0))
    b = graph.add_vertex((10, 0))
    e = graph.add_edge(a, b)
    assert graph.vertex_diameter == 12.0
    assert graph.edge(e).text_distance == 7.5
    assert graph.label_position(e) == pytest.approx((5.0, 7.5))


def test_explicit_vertex_diameter_wins():
    assert Graph(vertex_diameter=0.05).vertex_diameter == 0.05
