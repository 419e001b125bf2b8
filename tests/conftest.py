"""
Pytest configuration for marker_precluster tests.

Shared fixtures: marker factories and a default engine.
"""

import pytest

from marker_precluster import ClusterEngine, GeoPoint, Marker


def make_marker(lat, lng, payload=None, assigned=False):
    return Marker(payload=payload, position=GeoPoint(lat, lng), assigned=assigned)


@pytest.fixture
def marker_factory():
    """Build a Marker from (lat, lng[, payload])."""
    return make_marker


@pytest.fixture
def sample_markers():
    """Two nearby markers on the equator plus one far away."""
    return [
        make_marker(0.0, 0.0, "a"),
        make_marker(0.0, 0.0001, "b"),
        make_marker(10.0, 10.0, "c"),
    ]


@pytest.fixture
def engine():
    """Engine with default settings and no input markers."""
    return ClusterEngine([])


@pytest.fixture
def scattered_markers():
    """Deterministic pseudo-random markers around two cities."""
    import numpy as np

    rng = np.random.default_rng(42)
    markers = []
    for i, (lat0, lng0) in enumerate([(35.68, 139.76), (34.69, 135.50)]):
        lats = lat0 + rng.normal(0.0, 0.3, 150)
        lngs = lng0 + rng.normal(0.0, 0.3, 150)
        for j, (lat, lng) in enumerate(zip(lats, lngs)):
            markers.append(make_marker(float(lat), float(lng), f"{i}-{j}"))
    return markers
