"""Greedy grid-based marker clustering.

Markers are visited once in input order. Each unassigned marker is compared
against the center of every existing cluster; it joins the nearest one only
when it falls inside that cluster's frozen acceptance region, otherwise it
seeds a new cluster. The second-nearest cluster is never consulted.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple
import logging

import numpy as np

from .cluster import Cluster
from ..config import ClusterConfig
from ..model.models import BoundingBox, GeoPoint, Marker
from ..projection import Pixel, Projection, TileProjector

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
# 大円距離の最大値 (~20015 km) より大きいので実質無制限
NEAREST_SENTINEL_KM = 40000.0


def _haversine(lat1, lng1, lat2, lng2):
    """haversine (km)。スカラーでも配列でも可。範囲外の入力は例外ではなく nan を返す"""
    with np.errstate(invalid="ignore"):
        d_lat = np.radians(lat2 - lat1)
        d_lng = np.radians(lng2 - lng1)
        a = (np.sin(d_lat / 2) ** 2 +
             np.cos(np.radians(lat1)) * np.cos(np.radians(lat2)) * np.sin(d_lng / 2) ** 2)
        return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def haversine_km(p1: GeoPoint, p2: GeoPoint) -> float:
    """Great-circle distance in km.

    Near-antipodal pairs and non-finite coordinates give nan.
    See http://www.movable-type.co.uk/scripts/latlong.html
    """
    return float(_haversine(p1.lat, p1.lng, p2.lat, p2.lng))


class ClusterEngine:
    """Engine for one clustering run over a fixed marker sequence.

    The engine owns the cluster list and the per-marker "assigned" table.
    Markers handed in by the caller are never mutated, so the same list can
    be clustered again by a fresh engine with different settings.

    Usage:
        ```python
        engine = ClusterEngine(markers, grid_size=60, zoom=9)
        for cluster in engine.create_clusters():
            print(cluster.size, cluster.center)
        ```

    An engine is not safe to drive from more than one thread at a time.
    """

    def __init__(
        self,
        markers: Iterable[Marker],
        config: Optional[ClusterConfig] = None,
        *,
        grid_size: Optional[float] = None,
        zoom: Optional[int] = None,
        projection: Optional[Projection] = None,
    ):
        config = config or ClusterConfig()
        overrides = {k: v for k, v in (("grid_size", grid_size), ("zoom", zoom)) if v is not None}
        if overrides:
            config = replace(config, **overrides)
        self.config = config
        self.projection: Projection = projection or TileProjector()

        # id(marker) -> 安定インデックス。_markers が参照を保持するので id は再利用されない
        self._markers: List[Marker] = []
        self._index: Dict[int, int] = {}
        self._assigned: List[bool] = []

        self._input: Tuple[Marker, ...] = tuple(markers)
        for m in self._input:
            self.index_of(m)

        self._clusters: List[Cluster] = []
        # クラスタ中心 (lat, lng) の表。行 i が self._clusters[i] に対応
        self._centers = np.empty((max(len(self._markers), 1), 2), dtype=float)

    # --- 設定 ---------------------------------------------------------

    @property
    def grid_size(self) -> float:
        return self.config.grid_size

    @property
    def zoom(self) -> int:
        return self.config.zoom

    # --- 状態 ---------------------------------------------------------

    @property
    def markers(self) -> Tuple[Marker, ...]:
        return self._input

    @property
    def clusters(self) -> Tuple[Cluster, ...]:
        return tuple(self._clusters)

    @property
    def assigned_count(self) -> int:
        return sum(self._assigned)

    def index_of(self, marker: Marker) -> int:
        """マーカーの安定インデックス。初見なら登録する"""
        index = self._index.get(id(marker))
        if index is not None:
            return index
        self.config.check_point(marker.position)
        index = len(self._markers)
        self._markers.append(marker)
        self._index[id(marker)] = index
        self._assigned.append(bool(marker.assigned))
        return index

    def is_assigned(self, marker: Marker) -> bool:
        index = self._index.get(id(marker))
        if index is None:
            return bool(marker.assigned)
        return self._assigned[index]

    def mark_assigned(self, index: int) -> bool:
        """unassigned -> assigned。遷移したときだけ True"""
        if self._assigned[index]:
            return False
        self._assigned[index] = True
        return True

    # --- 幾何 ---------------------------------------------------------

    def distance(self, p1: GeoPoint, p2: GeoPoint) -> float:
        return haversine_km(p1, p2)

    def extend_bounds_by_grid(self, bounds: BoundingBox) -> BoundingBox:
        """Extend ``bounds`` by ``grid_size`` pixels on every side, in place.

        Pixel y grows downwards, so NE moves by (+grid, -grid) and SW by
        (-grid, +grid) before both are projected back to lat/lng.
        """
        g = self.grid_size
        ne_px = self.projection.to_pixel(bounds.ne, self.zoom)
        sw_px = self.projection.to_pixel(bounds.sw, self.zoom)
        ne = self.projection.to_lat_lng(Pixel(ne_px.x + g, ne_px.y - g), self.zoom)
        sw = self.projection.to_lat_lng(Pixel(sw_px.x - g, sw_px.y + g), self.zoom)
        bounds.extend(ne)
        bounds.extend(sw)
        return bounds

    def _distances_to_centers(self, point: GeoPoint) -> np.ndarray:
        """各クラスタ中心 -> point の距離。distance(center, point) と同じ式"""
        k = len(self._clusters)
        return _haversine(self._centers[:k, 0], self._centers[:k, 1], point.lat, point.lng)

    def _nearest_cluster(self, point: GeoPoint) -> Optional[Cluster]:
        if not self._clusters:
            return None
        d = self._distances_to_centers(point)
        # nan は常に候補外。等距離なら先に作られたクラスタ (argmin は最初の最小値)
        with np.errstate(invalid="ignore"):
            candidates = d < NEAREST_SENTINEL_KM
        if not candidates.any():
            return None
        return self._clusters[int(np.argmin(np.where(candidates, d, np.inf)))]

    # --- クラスタリング -----------------------------------------------

    def _append_cluster(self, cluster: Cluster) -> None:
        k = len(self._clusters)
        if k == len(self._centers):
            grown = np.empty((2 * k, 2), dtype=float)
            grown[:k] = self._centers
            self._centers = grown
        self._centers[k] = cluster.center.as_tuple()
        self._clusters.append(cluster)
        logger.debug(f"Opened cluster #{k} at {cluster.center}")

    def add_to_closest_cluster(self, marker: Marker) -> Cluster:
        """Add ``marker`` to its nearest cluster or seed a new one.

        Returns the cluster the marker ended up in.
        """
        nearest = self._nearest_cluster(marker.position)
        if nearest is not None and nearest.is_marker_in_cluster_bounds(marker):
            nearest.add_marker(marker)
            return nearest

        cluster = Cluster(self)
        cluster.add_marker(marker)
        self._append_cluster(cluster)
        return cluster

    def create_clusters(self) -> List[Cluster]:
        """Run the single greedy pass and return the clusters in creation order."""
        total = len(self._input)
        percent = 0
        for i, marker in enumerate(self._input):
            if not self._assigned[self._index[id(marker)]]:
                self.add_to_closest_cluster(marker)

            n = (i + 1) * 10 // total
            if n > percent:
                percent = n
                logger.info(f"completed: {percent * 10}%")

        logger.debug(f"Built {len(self._clusters)} clusters from {total} markers")
        return list(self._clusters)


def cluster_markers(
    markers: Iterable[Marker],
    config: Optional[ClusterConfig] = None,
    **options,
) -> List[Cluster]:
    """Shortcut: build an engine and run it once."""
    return ClusterEngine(markers, config, **options).create_clusters()
