"""
Tests for Cluster membership, seeding and bounds.
"""

import dataclasses

import pytest

from marker_precluster import BoundingBox, Cluster, GeoBounds, GeoPoint


def test_empty_cluster(engine, marker_factory):
    cluster = Cluster(engine)
    assert cluster.size == 0
    assert cluster.center is None
    assert cluster.accept_region is None
    assert cluster.get_bounds() is None
    assert not cluster.is_marker_in_cluster_bounds(marker_factory(0.0, 0.0))


def test_first_marker_seeds_center_and_region(engine, marker_factory):
    seed = marker_factory(10.0, 20.0)
    cluster = Cluster(engine)

    assert cluster.add_marker(seed) is True
    assert cluster.center == seed.position
    expected = engine.extend_bounds_by_grid(BoundingBox.around(seed.position)).snapshot()
    assert cluster.accept_region == expected


def test_duplicate_add_is_a_silent_noop(engine, marker_factory):
    m = marker_factory(1.0, 1.0)
    cluster = Cluster(engine)
    assert cluster.add_marker(m) is True
    region = cluster.accept_region

    assert cluster.add_marker(m) is False
    assert cluster.markers == (m,)
    assert cluster.accept_region is region


def test_assigned_flips_once(engine, marker_factory):
    m = marker_factory(1.0, 1.0)
    cluster = Cluster(engine)

    assert not engine.is_assigned(m)
    cluster.add_marker(m)
    assert engine.is_assigned(m)
    assert engine.mark_assigned(engine.index_of(m)) is False
    # 呼び出し側のマーカー自体は変更されない
    assert m.assigned is False


def test_center_and_region_never_move(engine, marker_factory):
    seed = marker_factory(0.0, 0.0)
    cluster = Cluster(engine)
    cluster.add_marker(seed)
    region = cluster.accept_region

    for lng in (0.05, 0.1, 0.15):
        cluster.add_marker(marker_factory(0.0, lng))

    assert cluster.center == seed.position
    assert cluster.accept_region == region
    assert isinstance(region, GeoBounds)
    with pytest.raises(dataclasses.FrozenInstanceError):
        region.ne = GeoPoint(1.0, 1.0)


def test_region_tests_against_seed_not_members(engine, marker_factory):
    cluster = Cluster(engine)
    cluster.add_marker(marker_factory(0.0, 0.0))
    # 領域外のマーカーも add_marker は受け付ける (判定はエンジン側)
    cluster.add_marker(marker_factory(0.0, 0.15))

    beyond = marker_factory(0.0, 0.25)
    assert not cluster.is_marker_in_cluster_bounds(beyond)


def test_get_bounds_is_tight_and_recomputed(engine, marker_factory):
    cluster = Cluster(engine)
    cluster.add_marker(marker_factory(0.0, 0.0))
    cluster.add_marker(marker_factory(0.01, -0.02))
    cluster.add_marker(marker_factory(-0.03, 0.04))

    bounds = cluster.get_bounds()
    assert bounds == BoundingBox(ne=GeoPoint(0.01, 0.04), sw=GeoPoint(-0.03, -0.02))
    assert cluster.accept_region.contains(bounds.ne)

    bounds.extend(GeoPoint(5.0, 5.0))
    assert cluster.get_bounds().ne == GeoPoint(0.01, 0.04)
    assert not cluster.accept_region.contains(GeoPoint(5.0, 5.0))


def test_len_and_payloads(engine, marker_factory):
    cluster = Cluster(engine)
    cluster.add_marker(marker_factory(0.0, 0.0, {"id": 1}))
    cluster.add_marker(marker_factory(0.0, 0.0, {"id": 2}))
    assert len(cluster) == 2
    assert cluster.payloads() == [{"id": 1}, {"id": 2}]
    assert "size=2" in repr(cluster)
