"""Tests for Delaunay triangulation and proximity graph construction."""

import math

import numpy as np
import pytest

from py_meshroutes.core.alea_prng import AleaPRNG
from py_meshroutes.core.point_sampler import PoissonDiskSampler
from py_meshroutes.core.triangulation import build_proximity_graph, triangulate


@pytest.fixture
def square_points():
    """Unit square plus its centre."""
    return np.array([[0, 0], [10, 0], [10, 10], [0, 10], [5, 5]], dtype=float)


@pytest.fixture
def sampled_points():
    return PoissonDiskSampler(300, 300, 30, 60, 20, prng=AleaPRNG("mesh")).fill()


class TestTriangulate:
    """Test triangle generation."""

    def test_square_with_centre(self, square_points):
        triangles = triangulate(square_points)
        assert triangles.shape == (4, 3)
        # Every triangle uses the centre point
        assert all(4 in tri for tri in triangles)

    def test_indices_in_range(self, sampled_points):
        triangles = triangulate(sampled_points)
        assert len(triangles) > 0
        assert triangles.min() >= 0
        assert triangles.max() < len(sampled_points)

    def test_empty_circumcircle(self, sampled_points):
        """Test that no point lies strictly inside a triangle's circumcircle."""
        triangles = triangulate(sampled_points)
        for a, b, c in triangles:
            (ax, ay), (bx, by), (cx, cy) = sampled_points[[a, b, c]]
            d = 2 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
            ux = ((ax**2 + ay**2) * (by - cy) + (bx**2 + by**2) * (cy - ay)
                  + (cx**2 + cy**2) * (ay - by)) / d
            uy = ((ax**2 + ay**2) * (cx - bx) + (bx**2 + by**2) * (ax - cx)
                  + (cx**2 + cy**2) * (bx - ax)) / d
            r = math.hypot(ax - ux, ay - uy)
            dists = np.hypot(sampled_points[:, 0] - ux, sampled_points[:, 1] - uy)
            assert np.all(dists >= r - 1e-6)

    @pytest.mark.parametrize("points", [
        np.empty((0, 2)),
        np.array([[1.0, 1.0]]),
        np.array([[1.0, 1.0], [2.0, 2.0]]),
        np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0], [3.0, 3.0]]),
    ])
    def test_degenerate_input(self, points):
        """Test that too few or collinear points yield no triangles."""
        triangles = triangulate(points)
        assert triangles.shape == (0, 3)


class TestProximityGraph:
    """Test graph construction from triangles."""

    def test_square_edges(self, square_points):
        graph = build_proximity_graph(square_points, triangulate(square_points))
        # 4 hull sides + 4 spokes to the centre
        assert graph.number_of_edges() == 8
        assert graph.number_of_nodes() == 5
        assert not graph.has_edge(0, 2)
        assert graph.has_edge(0, 4)

    def test_edge_weights_are_euclidean(self, sampled_points):
        graph = build_proximity_graph(sampled_points, triangulate(sampled_points))
        for a, b, weight in graph.edges():
            expected = np.hypot(*(sampled_points[a] - sampled_points[b]))
            assert weight == pytest.approx(expected)
            assert graph.weight(b, a) == weight

    def test_shared_sides_inserted_once(self, sampled_points):
        """Test that edge count matches the distinct triangle sides."""
        triangles = triangulate(sampled_points)
        graph = build_proximity_graph(sampled_points, triangles)

        sides = set()
        for a, b, c in triangles:
            for u, v in ((a, b), (b, c), (c, a)):
                sides.add((min(u, v), max(u, v)))
        assert graph.number_of_edges() == len(sides)

    def test_graph_is_connected(self, sampled_points):
        graph = build_proximity_graph(sampled_points, triangulate(sampled_points))
        seen = {0}
        stack = [0]
        while stack:
            for n in graph.neighbors(stack.pop()):
                if n not in seen:
                    seen.add(n)
                    stack.append(n)
        assert len(seen) == len(sampled_points)

    def test_degenerate_graph(self):
        points = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]])
        graph = build_proximity_graph(points, triangulate(points))
        assert graph.number_of_nodes() == 3
        assert graph.number_of_edges() == 0
