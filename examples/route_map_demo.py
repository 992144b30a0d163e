#!/usr/bin/env python3
"""
Demo script showing route extraction on a seeded mesh.

Generates the default 500x500 map, prints each extracted route and the
waypoint removed after it, and writes a PNG next to this script.
"""

from pathlib import Path

from py_meshroutes.config import Settings
from py_meshroutes.core import generate_route_map
from py_meshroutes.core.path_graph import PathGraph, path_length
from py_meshroutes.core.triangulation import build_proximity_graph
from py_meshroutes.render import render_route_map


def main():
    settings = Settings(seed="demo123")

    print("Py-Meshroutes Demo")
    print("=" * 40)

    route_map = generate_route_map(settings)
    print(f"\nSampled {len(route_map.points)} points, "
          f"{len(route_map.triangles)} triangles")

    # The extractor consumed its graph; rebuild one to measure route lengths
    full_graph: PathGraph = build_proximity_graph(route_map.points, route_map.triangles)

    routes = route_map.routes
    for i, path in enumerate(routes.paths):
        removed = routes.removed[i] if i < len(routes.removed) else None
        print(f"  Route {i + 1}: {len(path)} waypoints, "
              f"length {path_length(full_graph, path):.1f}, removed {removed}")

    print(f"\nVisited {len(routes.visited)} nodes, {len(routes.segments)} segments")

    output = Path(__file__).parent / "route_map_demo.png"
    render_route_map(settings.canvas_width, settings.canvas_height,
                     route_map.node_tags(), routes.segments, output)
    print(f"Saved {output}")


if __name__ == "__main__":
    main()
