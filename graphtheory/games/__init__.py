"""Interactive puzzles layered on the graph engine."""

from .icosian import GameStatus, IcosianGame
from .planar import PlanarPuzzle, PlanarStatus

__all__ = ["GameStatus", "IcosianGame", "PlanarPuzzle", "PlanarStatus"]
