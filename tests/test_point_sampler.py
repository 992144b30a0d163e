"""Tests for blue-noise point sampling."""

import numpy as np
import pytest
from scipy.spatial.distance import pdist

from py_meshroutes.core.alea_prng import AleaPRNG
from py_meshroutes.core.point_sampler import (
    PoissonDiskSampler, filter_to_disk, sample_points
)

START = (250.0, 445.0)
GOAL = (225.0, 15.0)


@pytest.fixture
def filled_sampler():
    sampler = PoissonDiskSampler(450, 450, 40, 80, 20, prng=AleaPRNG("sampler"))
    sampler.add_point(START)
    sampler.add_point(GOAL)
    sampler.fill()
    return sampler


class TestPoissonDiskSampler:
    """Test the dart throwing sampler."""

    def test_minimum_distance(self, filled_sampler):
        """Test that no two points are closer than min_distance."""
        points = filled_sampler.get_points()
        assert len(points) > 2
        assert pdist(points).min() >= 40 - 1e-9

    def test_points_in_domain(self, filled_sampler):
        points = filled_sampler.get_points()
        assert np.all(points >= 0)
        assert np.all(points[:, 0] < 450)
        assert np.all(points[:, 1] < 450)

    def test_fixed_points_kept(self, filled_sampler):
        """Test that start and goal are the first two points."""
        points = filled_sampler.get_points()
        np.testing.assert_array_equal(points[0], START)
        np.testing.assert_array_equal(points[1], GOAL)

    def test_saturation_retires_all_active_points(self, filled_sampler):
        assert filled_sampler.active == []
        assert filled_sampler.next() is None

    def test_reproducibility(self):
        """Test that same seed produces identical samples."""
        def run():
            sampler = PoissonDiskSampler(200, 200, 20, 40, 10, prng=AleaPRNG("repro"))
            return sampler.fill()

        np.testing.assert_array_equal(run(), run())

    def test_different_seeds(self):
        a = PoissonDiskSampler(200, 200, 20, 40, 10, prng=AleaPRNG("seed1")).fill()
        b = PoissonDiskSampler(200, 200, 20, 40, 10, prng=AleaPRNG("seed2")).fill()
        assert a.shape != b.shape or not np.array_equal(a, b)

    def test_fill_seeds_random_point_when_empty(self):
        sampler = PoissonDiskSampler(100, 100, 10, prng=AleaPRNG("empty"))
        points = sampler.fill()
        assert len(points) > 1
        assert sampler.max_distance == 20

    def test_add_point_outside_domain(self):
        sampler = PoissonDiskSampler(100, 100, 10, prng=AleaPRNG("outside"))
        assert sampler.add_point((150, 50)) is None
        assert sampler.add_point((-1, 50)) is None
        assert sampler.points == []

    def test_add_point_deduplicates_coordinates(self):
        sampler = PoissonDiskSampler(100, 100, 10, prng=AleaPRNG("dup"))
        first = sampler.add_point((50, 50))
        assert sampler.add_point((50.0, 50.0)) == first
        assert len(sampler.points) == 1

    def test_fixed_points_not_distance_checked(self):
        """Test that fixed points closer than min_distance are both kept."""
        sampler = PoissonDiskSampler(100, 100, 10, prng=AleaPRNG("close"))
        assert sampler.add_point((50, 50)) == 0
        assert sampler.add_point((52, 50)) == 1

    def test_under_saturation_is_not_an_error(self):
        """Test that a domain too small for a second point yields one point."""
        sampler = PoissonDiskSampler(5, 5, 40, 80, 5, prng=AleaPRNG("tiny"))
        points = sampler.fill()
        assert len(points) == 1

    @pytest.mark.parametrize("kwargs", [
        dict(width=0, height=10, min_distance=1),
        dict(width=10, height=10, min_distance=0),
        dict(width=10, height=10, min_distance=5, max_distance=2),
        dict(width=10, height=10, min_distance=5, tries=0),
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            PoissonDiskSampler(**kwargs)


class TestFilterToDisk:
    """Test the circular region filter."""

    def test_filter_keeps_inside_points(self):
        points = np.array([[0, 0], [5, 0], [10, 0], [3, 4]], dtype=float)
        kept, index_map = filter_to_disk(points, (0, 0), 5)

        np.testing.assert_array_equal(kept, [[0, 0], [5, 0], [3, 4]])
        np.testing.assert_array_equal(index_map, [0, 1, -1, 2])

    def test_filter_empty(self):
        kept, index_map = filter_to_disk(np.empty((0, 2)), (0, 0), 5)
        assert kept.shape == (0, 2)
        assert len(index_map) == 0


class TestSamplePoints:
    """Test the full sampling stage."""

    @pytest.fixture
    def sampled(self):
        return sample_points(450, 450, 40, 80, 20, START, GOAL,
                             center=(225, 225), radius=225, prng=AleaPRNG("stage"))

    def test_start_and_goal_present(self, sampled):
        np.testing.assert_array_equal(sampled.points[sampled.start_index], START)
        np.testing.assert_array_equal(sampled.points[sampled.goal_index], GOAL)

    def test_points_within_radius(self, sampled):
        distances = np.hypot(sampled.points[:, 0] - 225, sampled.points[:, 1] - 225)
        assert np.all(distances <= 225)

    def test_minimum_distance_after_filter(self, sampled):
        assert pdist(sampled.points).min() >= 40 - 1e-9

    def test_same_start_and_goal(self):
        sampled = sample_points(450, 450, 40, 80, 20, START, START,
                                center=(225, 225), radius=225, prng=AleaPRNG("same"))
        assert sampled.start_index == sampled.goal_index

    def test_endpoint_outside_radius(self):
        with pytest.raises(ValueError):
            sample_points(450, 450, 40, 80, 20, START, (5, 5),
                          center=(225, 225), radius=225, prng=AleaPRNG("corner"))
