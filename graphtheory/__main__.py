import argparse
import logging
from typing import Optional, Sequence

from graphtheory import (
    ICOSIAN_TOUR,
    REFERENCE_GRAPHS,
    Graph,
    SearchLimitExceeded,
    tour_edges,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _report(name: str, graph: Graph) -> None:
    labels = {vertex.id: vertex.label for vertex in graph.vertices()}
    print(f"{name}:")
    print(f"  vertices: {len(graph.vertices())}")
    print(f"  edges: {len(graph.edges())}")
    print(f"  connected: {_yes_no(graph.is_connected())}")
    try:
        print(f"  has cycle: {_yes_no(graph.has_cycle())}")
    except SearchLimitExceeded as exc:
        logger.warning("Cycle search on %s gave up: %s", name, exc)
        print("  has cycle: unknown")
    print(f"  cycle rank: {graph.cycle_rank()}")
    print(f"  eulerian: {_yes_no(graph.is_eulerian())}")
    odd = [labels[vertex_id] for vertex_id in graph.odd_degree_vertices()]
    print(f"  odd-degree vertices: {', '.join(odd) if odd else '(none)'}")
    print(f"  complete: {_yes_no(graph.is_complete())}")
    crossings = graph.crossing_pairs()
    print(f"  crossing edge pairs: {len(crossings)}")
    if name == "icosian":
        tour = tour_edges(graph, ICOSIAN_TOUR)
        print(f"  reference tour is hamiltonian: {_yes_no(graph.is_hamiltonian_cycle(tour))}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Report structural properties of the reference graphs"
    )
    parser.add_argument(
        "graphs",
        nargs="*",
        help=f"Graphs to report on: {', '.join(sorted(REFERENCE_GRAPHS))} (default: all)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    names = args.graphs or sorted(REFERENCE_GRAPHS)
    unknown = [name for name in names if name not in REFERENCE_GRAPHS]
    if unknown:
        parser.error(f"unknown graph(s): {', '.join(unknown)}")
    for name in names:
        logger.info("Building reference graph %s", name)
        _report(name, REFERENCE_GRAPHS[name]())


if __name__ == "__main__":
    main()
