"""Delaunay triangulation and proximity graph construction."""

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError

from .path_graph import PathGraph

logger = structlog.get_logger()


def triangulate(points: np.ndarray) -> np.ndarray:
    """
    Delaunay-triangulate a point set.

    Degenerate input (fewer than three points, all points collinear or
    coincident) produces no triangles rather than an error.

    Args:
        points: Array of [x, y] coordinates

    Returns:
        (m, 3) array of point indices, one row per triangle
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(points) < 3:
        logger.warning("Too few points to triangulate", points=len(points))
        return np.empty((0, 3), dtype=np.int64)

    try:
        tri = Delaunay(points)
    except QhullError as e:
        logger.warning("Degenerate point set, no triangles produced",
                       points=len(points), error=str(e).split("\n", 1)[0])
        return np.empty((0, 3), dtype=np.int64)

    triangles = tri.simplices.astype(np.int64)
    logger.info("Delaunay triangulation calculated",
                points=len(points), triangles=len(triangles),
                coplanar=len(tri.coplanar))
    return triangles


def build_proximity_graph(points: np.ndarray, triangles: np.ndarray) -> PathGraph:
    """
    Build the weighted proximity graph from triangle sides.

    Every triangle contributes its three sides; a side shared by two
    triangles is inserted once. Points that belong to no triangle stay in the
    graph as isolated nodes.

    Args:
        points: Array of [x, y] coordinates
        triangles: (m, 3) index triples from ``triangulate``

    Returns:
        PathGraph over all points
    """
    graph = PathGraph(points)
    for a, b, c in np.asarray(triangles, dtype=np.int64).reshape(-1, 3):
        graph.add_edge(int(a), int(b))
        graph.add_edge(int(b), int(c))
        graph.add_edge(int(c), int(a))

    logger.info("Proximity graph built",
                nodes=graph.number_of_nodes(), edges=graph.number_of_edges())
    return graph
