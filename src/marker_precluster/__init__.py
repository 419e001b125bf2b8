"""
marker_precluster
-----------------------------------
地図なしでマーカーを事前クラスタリングし、後段の描画用に渡すライブラリ。
MarkerClustererPlus のグリッド方式 (gridSize px @ zoom) を踏襲する。
"""
from .model.models import GeoPoint, GeoBounds, BoundingBox, Marker
from .projection import Pixel, Projection, TileProjector
from .config import ClusterConfig
from .errors import PreclusterError, ConfigurationError, DomainError
from .cluster import Cluster, ClusterEngine, cluster_markers, haversine_km
from .model.loader import MarkerLoader
from .export import cluster_to_dict, clusters_to_dict, dump_clusters

__version__ = "1.0.0"

__all__ = [
    "GeoPoint",
    "GeoBounds",
    "BoundingBox",
    "Marker",
    "Pixel",
    "Projection",
    "TileProjector",
    "ClusterConfig",
    "PreclusterError",
    "ConfigurationError",
    "DomainError",
    "Cluster",
    "ClusterEngine",
    "cluster_markers",
    "haversine_km",
    "MarkerLoader",
    "cluster_to_dict",
    "clusters_to_dict",
    "dump_clusters",
]
