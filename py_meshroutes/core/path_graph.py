"""
Weighted proximity graph and shortest-path search.

Nodes are integer indices into the sampled point array, so two nodes are the
same node exactly when they came from the same sampled coordinate pair.
"""

import heapq
import math
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np
import structlog

logger = structlog.get_logger()

Heuristic = Callable[[int, int], float]


class PathGraph:
    """
    Mutable undirected graph with Euclidean edge weights.

    Edges are added while the graph is built from a triangulation. After
    that the graph only shrinks: ``remove_node`` drops a node together with
    every edge touching it.
    """

    def __init__(self, points: np.ndarray):
        """
        Args:
            points: Array of [x, y] coordinates, row index = node id
        """
        self.points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        self._adjacency: Dict[int, Dict[int, float]] = {
            i: {} for i in range(len(self.points))
        }

    def position(self, node: int) -> Tuple[float, float]:
        x, y = self.points[node]
        return float(x), float(y)

    def distance(self, a: int, b: int) -> float:
        """Straight-line distance between two nodes."""
        ax, ay = self.points[a]
        bx, by = self.points[b]
        return math.hypot(bx - ax, by - ay)

    def add_edge(self, a: int, b: int) -> bool:
        """
        Connect two nodes, weighting the edge by their distance.

        Returns:
            False if the edge already existed (or is a self loop)
        """
        if a == b or b in self._adjacency[a]:
            return False
        weight = self.distance(a, b)
        self._adjacency[a][b] = weight
        self._adjacency[b][a] = weight
        return True

    def has_node(self, node: int) -> bool:
        return node in self._adjacency

    def has_edge(self, a: int, b: int) -> bool:
        return a in self._adjacency and b in self._adjacency[a]

    def neighbors(self, node: int) -> List[int]:
        """Neighbours of a node; empty for a removed node."""
        return list(self._adjacency.get(node, ()))

    def weight(self, a: int, b: int) -> float:
        """Weight of edge (a, b). Raises KeyError if there is no such edge."""
        try:
            return self._adjacency[a][b]
        except KeyError:
            raise KeyError(f"No edge between {a} and {b}") from None

    def remove_node(self, node: int) -> None:
        """Remove a node and its incident edges. Absent nodes are ignored."""
        neighbors = self._adjacency.pop(node, None)
        if neighbors is None:
            return
        for other in neighbors:
            del self._adjacency[other][node]

    def nodes(self) -> List[int]:
        return list(self._adjacency)

    def edges(self) -> Iterator[Tuple[int, int, float]]:
        """Yield each undirected edge once as (a, b, weight) with a < b."""
        for a, neighbors in self._adjacency.items():
            for b, weight in neighbors.items():
                if a < b:
                    yield a, b, weight

    def number_of_nodes(self) -> int:
        return len(self._adjacency)

    def number_of_edges(self) -> int:
        return sum(len(n) for n in self._adjacency.values()) // 2

    def __contains__(self, node: int) -> bool:
        return self.has_node(node)

    def __len__(self) -> int:
        return self.number_of_nodes()


def zero_heuristic(node: int, goal: int) -> float:
    return 0.0


def astar(graph: PathGraph, start: int, goal: int,
          heuristic: Optional[Heuristic] = None) -> List[int]:
    """
    A* shortest path from start to goal.

    Edge cost is the stored Euclidean weight. The default heuristic is the
    straight-line distance to the goal, which never overestimates the
    remaining cost because every edge is itself a straight line.

    Args:
        graph: Graph to search
        start: Start node
        goal: Goal node
        heuristic: Estimate of remaining cost, ``heuristic(node, goal)``

    Returns:
        Node list from start to goal inclusive, or an empty list if the goal
        cannot be reached
    """
    if heuristic is None:
        heuristic = graph.distance
    if not graph.has_node(start) or not graph.has_node(goal):
        return []
    if start == goal:
        return [start]

    # Priority queue: (estimated total, cost so far, node)
    open_heap = [(heuristic(start, goal), 0.0, start)]
    best_cost = {start: 0.0}
    came_from: Dict[int, int] = {}
    closed = set()

    while open_heap:
        _, cost, node = heapq.heappop(open_heap)
        if node == goal:
            return _reconstruct(came_from, goal)
        if node in closed:
            continue
        closed.add(node)

        for neighbor in graph.neighbors(node):
            if neighbor in closed:
                continue
            new_cost = cost + graph.weight(node, neighbor)
            if new_cost < best_cost.get(neighbor, math.inf):
                best_cost[neighbor] = new_cost
                came_from[neighbor] = node
                heapq.heappush(open_heap,
                               (new_cost + heuristic(neighbor, goal), new_cost, neighbor))

    logger.debug("No path found", start=start, goal=goal, expanded=len(closed))
    return []


def _reconstruct(came_from: Dict[int, int], goal: int) -> List[int]:
    path = [goal]
    while path[-1] in came_from:
        path.append(came_from[path[-1]])
    path.reverse()
    return path


def path_length(graph: PathGraph, path: List[int]) -> float:
    """Total edge weight along a path."""
    return sum(graph.weight(a, b) for a, b in zip(path, path[1:]))
