"""Configuration helpers for the graph and curve engines."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Tolerances and limits shared by the engines."""

    eps: float = 1e-9
    # maximum midpoint deviation allowed for a polyline piece, relative to the curve extent
    flatness_tolerance: float = 1e-3
    max_subdivision_depth: int = 12
    cycle_search_limit: int = 250_000
    default_text_distance: float = 20.0
    default_vertex_diameter: float = 30.0
    closest_parameter_xatol: float = 1e-6


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    _ENGINE_CONFIG = copy.deepcopy(config)


__all__ = ["EngineConfig", "get_engine_config", "set_engine_config"]
