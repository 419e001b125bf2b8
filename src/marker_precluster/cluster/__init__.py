# cluster/__init__.py
"""
Cluster layer: 貪欲法によるグリッドクラスタリング。

- Cluster: マーカー群 + 固定中心 + 凍結された受け入れ領域
- ClusterEngine: 1回分のクラスタリング実行を管理
"""
from .cluster import Cluster
from .engine import ClusterEngine, cluster_markers, haversine_km

__all__ = ["Cluster", "ClusterEngine", "cluster_markers", "haversine_km"]
