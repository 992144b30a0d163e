"""
Core route generation functionality.
"""

from .alea_prng import AleaPRNG, get_prng, set_random_seed
from .point_sampler import PoissonDiskSampler, SampledPoints, filter_to_disk, sample_points
from .triangulation import triangulate, build_proximity_graph
from .path_graph import PathGraph, astar, zero_heuristic
from .path_extractor import PathExtractor, RouteSet, extract_routes
from .pipeline import RouteMap, generate_route_map

__all__ = [
    'AleaPRNG', 'get_prng', 'set_random_seed',
    'PoissonDiskSampler', 'SampledPoints', 'filter_to_disk', 'sample_points',
    'triangulate', 'build_proximity_graph',
    'PathGraph', 'astar', 'zero_heuristic',
    'PathExtractor', 'RouteSet', 'extract_routes',
    'RouteMap', 'generate_route_map',
]
