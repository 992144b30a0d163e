"""End-to-end route map generation: sample, triangulate, extract."""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import structlog

from .alea_prng import AleaPRNG, get_prng
from .path_extractor import PathExtractor, RouteSet
from .path_graph import PathGraph
from .point_sampler import sample_points
from .triangulation import build_proximity_graph, triangulate
from ..config import Settings

logger = structlog.get_logger()

START = "start"
GOAL = "goal"
OTHER = "other"


@dataclass
class RouteMap:
    """Everything produced by one generation run."""
    points: np.ndarray
    start_index: int
    goal_index: int
    triangles: np.ndarray
    graph: PathGraph  # state after extraction, with removed nodes gone
    routes: RouteSet
    seed: Optional[str] = None

    def node_tags(self) -> Dict[tuple, str]:
        """Tag every visited node's coordinates as start, goal or other."""
        tags = {}
        for node in self.routes.visited:
            if node == self.start_index:
                tag = START
            elif node == self.goal_index:
                tag = GOAL
            else:
                tag = OTHER
            x, y = self.points[node]
            tags[(float(x), float(y))] = tag
        return tags


def generate_route_map(settings: Settings, prng: Optional[AleaPRNG] = None) -> RouteMap:
    """
    Run the full generation pipeline.

    Args:
        settings: Generation parameters
        prng: Random source; when None, a fresh PRNG seeded from
            ``settings.seed`` is used, or the default PRNG if no seed is set

    Returns:
        RouteMap with the sampled mesh and extracted routes
    """
    if prng is None:
        prng = AleaPRNG(settings.seed) if settings.seed is not None else get_prng()

    logger.info("Generating route map",
                canvas=f"{settings.canvas_width}x{settings.canvas_height}",
                seed=prng.seed)

    sampled = sample_points(
        settings.domain_width, settings.domain_height,
        settings.min_distance, settings.max_distance, settings.tries,
        settings.start, settings.goal,
        settings.disk_center, settings.disk_radius,
        prng=prng,
    )
    triangles = triangulate(sampled.points)
    graph = build_proximity_graph(sampled.points, triangles)

    extractor = PathExtractor(graph, sampled.start_index, sampled.goal_index,
                              settings.max_iterations, prng)
    routes = extractor.run()

    return RouteMap(
        points=sampled.points,
        start_index=sampled.start_index,
        goal_index=sampled.goal_index,
        triangles=triangles,
        graph=graph,
        routes=routes,
        seed=str(prng.seed),
    )
