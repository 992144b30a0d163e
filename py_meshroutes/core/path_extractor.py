"""
Diverse route extraction.

Repeatedly finds the shortest start-to-goal route on the proximity graph,
records it, then deletes one random interior waypoint of that route so the
next search has to go around it. Because the mesh is a Delaunay
triangulation, deleting a single node rarely disconnects the endpoints and
each round usually produces a new route.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

import structlog

from .alea_prng import AleaPRNG, get_prng
from .path_graph import Heuristic, PathGraph, astar

logger = structlog.get_logger()

Segment = Tuple[float, float, float, float]


@dataclass
class RouteSet:
    """Accumulated output of the extraction loop."""
    visited: Set[int] = field(default_factory=set)  # nodes on any route
    segments: Set[Segment] = field(default_factory=set)  # (x1, y1, x2, y2)
    paths: List[List[int]] = field(default_factory=list)  # in extraction order
    removed: List[int] = field(default_factory=list)  # diversification choices

    @property
    def iterations(self) -> int:
        return len(self.paths)

    def record(self, graph: PathGraph, path: List[int]) -> None:
        """
        Union a route into the visited and segment sets.

        Segments run from each node back to its predecessor on the route.
        """
        self.paths.append(list(path))
        self.visited.update(path)
        for j in range(1, len(path)):
            x1, y1 = graph.position(path[j])
            x2, y2 = graph.position(path[j - 1])
            self.segments.add((x1, y1, x2, y2))


class PathExtractor:
    """
    Extracts a family of diverging shortest routes.

    The extractor owns the graph for the duration of ``run``: it deletes
    nodes from it in place and nothing else may use the graph meanwhile.
    """

    def __init__(self, graph: PathGraph, start: int, goal: int,
                 max_iterations: int, prng: Optional[AleaPRNG] = None,
                 heuristic: Optional[Heuristic] = None):
        """
        Args:
            graph: Proximity graph, mutated in place
            start: Start node
            goal: Goal node
            max_iterations: Upper bound on the number of extracted routes
            prng: Random source for waypoint removal
            heuristic: A* heuristic, straight-line distance when None
        """
        self.graph = graph
        self.start = start
        self.goal = goal
        self.max_iterations = max_iterations
        self.prng = prng or get_prng()
        self.heuristic = heuristic

    def pick_removal(self, path: List[int]) -> Optional[int]:
        """
        Choose the waypoint to delete after a route was recorded.

        Any node other than the first and last one is eligible, with equal
        probability.

        Returns:
            The node to remove, or None when the route has no interior node
        """
        if len(path) <= 2:
            return None
        return path[self.prng.randint(1, len(path) - 2)]

    def run(self) -> RouteSet:
        """Run the extraction loop and return the accumulated routes."""
        routes = RouteSet()
        logger.info("Extracting routes", start=self.start, goal=self.goal,
                    max_iterations=self.max_iterations)

        for iteration in range(self.max_iterations):
            path = astar(self.graph, self.start, self.goal, self.heuristic)
            if not path:
                logger.info("Start and goal disconnected", iteration=iteration)
                break

            routes.record(self.graph, path)

            node = self.pick_removal(path)
            if node is None:
                logger.info("Route has no interior waypoint", iteration=iteration,
                            length=len(path))
                break

            self.graph.remove_node(node)
            routes.removed.append(node)
            logger.debug("Route extracted", iteration=iteration,
                         waypoints=len(path), removed=node)

        logger.info("Route extraction complete", routes=routes.iterations,
                    visited=len(routes.visited), segments=len(routes.segments))
        return routes


def extract_routes(graph: PathGraph, start: int, goal: int, max_iterations: int,
                   prng: Optional[AleaPRNG] = None) -> RouteSet:
    """Convenience wrapper around ``PathExtractor(...).run()``."""
    return PathExtractor(graph, start, goal, max_iterations, prng).run()
