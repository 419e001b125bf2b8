# export.py
"""クラスタ結果を JSON 化してクライアントへ渡すための薄いヘルパ"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, Optional
import json

from .cluster.cluster import Cluster
from .config import ClusterConfig
from .model.models import GeoBounds, BoundingBox, GeoPoint


def _point(p: Optional[GeoPoint]) -> Optional[Dict[str, float]]:
    if p is None:
        return None
    return {"lat": p.lat, "lng": p.lng}


def _bounds(b: GeoBounds | BoundingBox | None) -> Optional[Dict[str, Any]]:
    if b is None:
        return None
    return {"ne": _point(b.ne), "sw": _point(b.sw)}


def cluster_to_dict(cluster: Cluster, index: int) -> Dict[str, Any]:
    return {
        "index": index,
        "size": cluster.size,
        "center": _point(cluster.center),
        "bounds": _bounds(cluster.get_bounds()),
        "accept_region": _bounds(cluster.accept_region),
        "payloads": cluster.payloads(),
    }


def clusters_to_dict(clusters: Iterable[Cluster], config: ClusterConfig | None = None) -> Dict[str, Any]:
    items = [cluster_to_dict(c, i) for i, c in enumerate(clusters)]
    return {
        "config": (config or ClusterConfig()).to_dict(),
        "cluster_count": len(items),
        "marker_count": sum(c["size"] for c in items),
        "clusters": items,
    }


def dump_clusters(
    clusters: Iterable[Cluster],
    path: str | Path,
    config: ClusterConfig | None = None,
    indent: int | None = 2,
) -> Path:
    """clusters → JSON ファイル。payload は JSON 化できる値である必要がある"""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(clusters_to_dict(clusters, config), f, ensure_ascii=False, indent=indent)
    return p
