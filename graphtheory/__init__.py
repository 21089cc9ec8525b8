from .model import (
    Directed,
    Edge,
    GraphError,
    InvalidReference,
    LabelConflict,
    SearchLimitExceeded,
    TextDirection,
    Vertex,
    VertexStatus,
)
from .config import EngineConfig, get_engine_config, set_engine_config
from .geometry import EdgeCurve, build_curve, crossing_pairs, crossing_points, intersects
from .graph import Graph
from .games import GameStatus, IcosianGame, PlanarPuzzle, PlanarStatus
from .textbook import (
    ICOSIAN_TOUR,
    REFERENCE_GRAPHS,
    icosian_graph,
    konigsberg_graph,
    planar_graph,
    tour_edges,
)

__all__ = [
    'Directed',
    'Edge',
    'GraphError',
    'InvalidReference',
    'LabelConflict',
    'SearchLimitExceeded',
    'TextDirection',
    'Vertex',
    'VertexStatus',
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
    'EdgeCurve',
    'build_curve',
    'crossing_pairs',
    'crossing_points',
    'intersects',
    'Graph',
    'GameStatus',
    'IcosianGame',
    'PlanarPuzzle',
    'PlanarStatus',
    'ICOSIAN_TOUR',
    'REFERENCE_GRAPHS',
    'icosian_graph',
    'konigsberg_graph',
    'planar_graph',
    'tour_edges',
]
