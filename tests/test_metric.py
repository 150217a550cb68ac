"""Tests for the angular distance metric."""

import math

import numpy as np
import pytest

from fracset.orientation import (
    PoleVector,
    angular_distance,
    pairwise_angular_distances,
    pole_vectors,
    to_pole_vector,
)


_ORIENTATIONS = [(30, 110), (32, 115), (70, 10), (45, 200), (89, 0), (5, 300)]


class TestAngularDistance:
    def test_self_distance_is_zero(self):
        for dip, dd in _ORIENTATIONS:
            p = to_pole_vector(dip, dd)
            assert angular_distance(p, p) == 0.0

    def test_symmetric(self):
        poles = [to_pole_vector(d, dd) for d, dd in _ORIENTATIONS]
        for u in poles:
            for v in poles:
                assert angular_distance(u, v) == angular_distance(v, u)

    def test_orthogonal(self):
        d = angular_distance(PoleVector(1.0, 0.0, 0.0), PoleVector(0.0, 1.0, 0.0))
        assert d == pytest.approx(math.pi / 2)

    def test_same_dip_direction(self):
        # Poles in the same vertical plane differ by the dip difference.
        d = angular_distance(to_pole_vector(30, 110), to_pole_vector(40, 110))
        assert d == pytest.approx(math.radians(10.0))

    def test_range(self):
        poles = [to_pole_vector(d, dd) for d, dd in _ORIENTATIONS]
        for u in poles:
            for v in poles:
                assert 0.0 <= angular_distance(u, v) <= math.pi

    def test_opposite_steep_planes(self):
        # No axial folding: steep planes dipping in opposite directions
        # are almost antipodal poles.
        d = angular_distance(to_pole_vector(89, 0), to_pole_vector(89, 180))
        assert d == pytest.approx(math.radians(178.0))

    def test_clamped_dot_product(self):
        d = angular_distance([1.0, 0.0, 0.0], [1.0 + 1e-12, 0.0, 0.0])
        assert d == 0.0
        assert not math.isnan(d)


class TestPairwise:
    def test_matches_scalar_metric(self):
        vecs = pole_vectors(_ORIENTATIONS)
        dist = pairwise_angular_distances(vecs)
        assert dist.shape == (6, 6)
        for i in range(6):
            for j in range(6):
                assert dist[i, j] == pytest.approx(
                    angular_distance(vecs[i], vecs[j]), abs=1e-12
                )

    def test_symmetric_zero_diagonal(self):
        dist = pairwise_angular_distances(pole_vectors(_ORIENTATIONS))
        assert np.array_equal(dist, dist.T)
        assert np.all(np.diag(dist) == 0.0)

    def test_duplicates_are_zero_apart(self):
        dist = pairwise_angular_distances(pole_vectors([(30, 110)] * 3 + [(60, 250)]))
        assert np.all(dist[:3, :3] == 0.0)
        assert dist[0, 3] > 0.5

    def test_empty(self):
        assert pairwise_angular_distances(np.empty((0, 3))).shape == (0, 0)
