"""End-to-end tests for the clustering pipeline."""

from __future__ import annotations

import math
from types import SimpleNamespace

import pytest

from fracset.clustering import (
    DEFAULT_PALETTE,
    ClusterGroup,
    ClusteringResult,
    DBSCANOptions,
    OPTICSOptions,
    cluster_by_density,
    cluster_by_ordering,
)
from fracset.orientation import OrientationSample


# ======================================================================
# Synthetic datasets
# ======================================================================

def _make_tight_and_far():
    return [
        OrientationSample(30, 110),
        OrientationSample(31, 105),
        OrientationSample(29, 115),
        OrientationSample(32, 112),
        OrientationSample(28, 108),
        OrientationSample(70, 10),
    ]


def _make_interleaved_sets():
    return [
        OrientationSample(30, 110) if i % 2 == 0 else OrientationSample(60, 250)
        for i in range(20)
    ]


def _make_jittered_sets(spread):
    def group(dip, dd):
        return [
            OrientationSample(dip + spread * math.sin(1.3 * k), dd + spread * math.cos(0.7 * k))
            for k in range(10)
        ]
    return group(30, 110) + group(65, 250)


def _make_three_sets():
    return (
        [OrientationSample(30, 110)] * 3
        + [OrientationSample(60, 250)] * 3
        + [OrientationSample(80, 20)] * 3
    )


# ======================================================================
# cluster_by_density
# ======================================================================

class TestClusterByDensity:
    def test_tight_cluster_and_outlier(self):
        samples = _make_tight_and_far()
        result = cluster_by_density(samples, eps_deg=12, min_pts=3)
        assert isinstance(result, ClusteringResult)
        assert len(result.clusters) == 1
        group = result.clusters[0]
        assert isinstance(group, ClusterGroup)
        assert group.members == samples[:5]
        assert result.outliers == [samples[5]]
        assert group.color == DEFAULT_PALETTE[0]
        assert group.name == "Cluster 1"
        assert group.centroid.dip_angle == pytest.approx(30.0, abs=2.0)
        assert group.centroid.dip_direction == pytest.approx(110.0, abs=3.0)

    def test_empty_input(self):
        result = cluster_by_density([])
        assert result.clusters == []
        assert result.outliers == []

    def test_palette_cycles_and_prefix(self):
        result = cluster_by_density(
            _make_three_sets(), eps_deg=5, min_pts=2,
            palette=["red", "blue"], name_prefix="Set",
        )
        assert [g.color for g in result.clusters] == ["red", "blue", "red"]
        assert [g.name for g in result.clusters] == ["Set 1", "Set 2", "Set 3"]
        assert result.outliers == []

    def test_centroids(self):
        result = cluster_by_density(_make_three_sets(), eps_deg=5, min_pts=2)
        expected = [(30, 110), (60, 250), (80, 20)]
        for group, (dip, dd) in zip(result.clusters, expected):
            assert group.centroid.dip_angle == pytest.approx(dip)
            assert group.centroid.dip_direction == pytest.approx(dd)

    def test_records_returned_unmodified(self):
        records = [
            SimpleNamespace(dip_angle=s.dip_angle, dip_direction=s.dip_direction,
                            color=None, path=f"path-{i}")
            for i, s in enumerate(_make_tight_and_far())
        ]
        result = cluster_by_density(records, eps_deg=12, min_pts=3)
        assert all(a is b for a, b in zip(result.clusters[0].members, records[:5]))
        assert result.outliers[0] is records[5]
        assert all(r.color is None for r in records)

    def test_options_object_and_overrides(self):
        opts = DBSCANOptions(eps_deg=12, min_pts=3, name_prefix="Joint set")
        result = cluster_by_density(_make_tight_and_far(), opts)
        assert result.clusters[0].name == "Joint set 1"
        # Overrides win over the options object.
        strict = cluster_by_density(_make_tight_and_far(), opts, min_pts=7)
        assert strict.clusters == []
        assert len(strict.outliers) == 6

    def test_wrong_options_type(self):
        with pytest.raises(TypeError):
            cluster_by_density(_make_tight_and_far(), OPTICSOptions())

    def test_invalid_options_fail_fast(self):
        with pytest.raises(ValueError):
            cluster_by_density(_make_tight_and_far(), min_pts=-1)
        with pytest.raises(ValueError):
            cluster_by_density([], eps_deg=-3)

    def test_poles_converted_once(self, monkeypatch):
        import importlib

        dbscan_module = importlib.import_module("fracset.clustering.dbscan")

        calls = []
        original = dbscan_module.pole_vectors

        def counting(samples):
            calls.append(len(samples))
            return original(samples)

        monkeypatch.setattr(dbscan_module, "pole_vectors", counting)
        result = cluster_by_density(_make_tight_and_far(), eps_deg=12, min_pts=3)
        assert calls == [6]
        assert result.clusters[0].centroid.dip_angle == pytest.approx(30.0, abs=2.0)

    def test_reproducible(self):
        a = cluster_by_density(_make_tight_and_far(), eps_deg=12, min_pts=3)
        b = cluster_by_density(_make_tight_and_far(), eps_deg=12, min_pts=3)
        assert a == b


# ======================================================================
# cluster_by_ordering
# ======================================================================

class TestClusterByOrdering:
    def test_two_groups_of_coincident_samples(self):
        # Every reachability inside a group of identical samples is 0, so
        # the threshold is 0 and each group forms one segment.
        samples = _make_interleaved_sets()
        result = cluster_by_ordering(samples, min_pts=5, quantile=0.75, min_cluster_size=8)
        assert len(result.clusters) == 2
        assert all(len(g) >= 8 for g in result.clusters)
        assert 0 <= len(result.outliers) <= 4
        first, second = result.clusters
        assert all(s == OrientationSample(30, 110) for s in first.members)
        assert all(s == OrientationSample(60, 250) for s in second.members)
        assert first.centroid.dip_angle == pytest.approx(30.0)
        assert second.centroid.dip_direction == pytest.approx(250.0)
        assert [g.color for g in result.clusters] == list(DEFAULT_PALETTE[:2])

    def test_jittered_groups_keep_only_densest_run(self):
        # Spread samples raise the 0.75 quantile only to the within-group
        # spacing, so the cut yields a single cluster from the first group.
        samples = _make_jittered_sets(spread=1.0)
        result = cluster_by_ordering(samples, min_pts=5, quantile=0.75, min_cluster_size=8)
        assert len(result.clusters) == 1
        assert result.clusters[0].members == [samples[i] for i in (2, 1, 5, 6, 7, 8, 9, 3, 4)]
        assert result.outliers == [samples[0]] + samples[10:]
        assert result.clusters[0].centroid.dip_angle == pytest.approx(30.0, abs=1.0)

    def test_empty_input(self):
        result = cluster_by_ordering([])
        assert result.clusters == []
        assert result.outliers == []

    def test_outliers_in_input_order(self):
        # The stray sample at index 0 lies nearer the second group, so the
        # ordering visits the second group first and rejects 0, 11, 1 in
        # that order.
        samples = (
            [OrientationSample(80, 260)]
            + [OrientationSample(30, 110)] * 10
            + [OrientationSample(60, 250)] * 10
        )
        result = cluster_by_ordering(samples, min_pts=5, min_cluster_size=8)
        assert result.outliers == [samples[0], samples[1], samples[11]]
        assert result.clusters[0].centroid.dip_direction == pytest.approx(250.0)
        assert result.clusters[1].centroid.dip_direction == pytest.approx(110.0)

    def test_options_object(self):
        opts = OPTICSOptions(min_pts=5, min_cluster_size=8, name_prefix="Set")
        result = cluster_by_ordering(_make_interleaved_sets(), opts)
        assert [g.name for g in result.clusters] == ["Set 1", "Set 2"]

    def test_invalid_options_fail_fast(self):
        with pytest.raises(ValueError):
            cluster_by_ordering(_make_interleaved_sets(), quantile=2.0)
        with pytest.raises(ValueError):
            cluster_by_ordering(_make_interleaved_sets(), palette=[])

    def test_reproducible(self):
        a = cluster_by_ordering(_make_interleaved_sets(), min_pts=5, min_cluster_size=8)
        b = cluster_by_ordering(_make_interleaved_sets(), min_pts=5, min_cluster_size=8)
        assert a == b
