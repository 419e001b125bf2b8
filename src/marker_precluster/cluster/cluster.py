from __future__ import annotations
from typing import TYPE_CHECKING, Any, List, Optional, Set, Tuple

from ..model.models import BoundingBox, GeoBounds, GeoPoint, Marker

if TYPE_CHECKING:
    from .engine import ClusterEngine


class Cluster:
    """
    近接するマーカーの集まり。ClusterEngine が生成して返す。
    - center は最初に追加されたマーカーの位置で固定 (重心には更新しない)
    - accept_region は center 確定時に一度だけ計算し、以後は凍結
    """

    def __init__(self, engine: "ClusterEngine"):
        self._engine = engine
        self._markers: List[Marker] = []
        self._member_indices: Set[int] = set()
        self._center: Optional[GeoPoint] = None
        self._accept_region: Optional[GeoBounds] = None

    def __len__(self) -> int:
        return len(self._markers)

    def __repr__(self) -> str:
        return f"Cluster(size={self.size}, center={self._center})"

    @property
    def size(self) -> int:
        return len(self._markers)

    @property
    def markers(self) -> Tuple[Marker, ...]:
        return tuple(self._markers)

    @property
    def center(self) -> Optional[GeoPoint]:
        return self._center

    @property
    def accept_region(self) -> Optional[GeoBounds]:
        return self._accept_region

    def payloads(self) -> List[Any]:
        return [m.payload for m in self._markers]

    def get_bounds(self) -> Optional[BoundingBox]:
        """メンバー全体を覆う最小矩形 (受け入れ領域とは別物)"""
        if self._center is None:
            return None
        bounds = BoundingBox.around(self._center)
        for m in self._markers:
            bounds.extend(m.position)
        return bounds

    def add_marker(self, marker: Marker) -> bool:
        """追加できたら True。既にメンバーなら何もせず False"""
        index = self._engine.index_of(marker)
        if index in self._member_indices:
            return False

        if self._center is None:
            self._center = marker.position
            self._accept_region = self._calculate_bounds()

        self._engine.mark_assigned(index)
        self._member_indices.add(index)
        self._markers.append(marker)
        return True

    def is_marker_in_cluster_bounds(self, marker: Marker) -> bool:
        if self._accept_region is None:
            return False
        return self._accept_region.contains(marker.position)

    def _calculate_bounds(self) -> GeoBounds:
        box = self._engine.extend_bounds_by_grid(BoundingBox.around(self._center))
        return box.snapshot()
