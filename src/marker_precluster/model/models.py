from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Tuple


# --- 幾何 -------------------------------------------------------------

@dataclass(frozen=True)
class GeoPoint:
    """緯度経度 (度)。範囲のクランプはしない"""
    lat: float
    lng: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lng)


def _box_contains(ne: GeoPoint, sw: GeoPoint, p: GeoPoint) -> bool:
    return (
        sw.lat <= p.lat <= ne.lat and
        sw.lng <= p.lng <= ne.lng
    )


@dataclass(frozen=True)
class GeoBounds:
    """凍結済みの矩形 (Cluster の受け入れ領域で利用)"""
    ne: GeoPoint
    sw: GeoPoint

    def contains(self, point: GeoPoint) -> bool:
        return _box_contains(self.ne, self.sw, point)


@dataclass
class BoundingBox:
    """
    NE/SW の2点で表す lat/lng 矩形。
    - コンストラクタは角の並べ替えをしない (正しい NE/SW を渡すのは呼び出し側の責任)
    - extend() はその場で更新する。±180° 跨ぎや極の扱いはない
    """
    ne: GeoPoint
    sw: GeoPoint

    def extend(self, point: GeoPoint) -> None:
        ne, sw = self.ne, self.sw
        if point.lat < sw.lat:
            sw = GeoPoint(point.lat, sw.lng)
        if point.lng < sw.lng:
            sw = GeoPoint(sw.lat, point.lng)
        if point.lat > ne.lat:
            ne = GeoPoint(point.lat, ne.lng)
        if point.lng > ne.lng:
            ne = GeoPoint(ne.lat, point.lng)
        self.ne, self.sw = ne, sw

    def contains(self, point: GeoPoint) -> bool:
        return _box_contains(self.ne, self.sw, point)

    def copy(self) -> "BoundingBox":
        return BoundingBox(ne=self.ne, sw=self.sw)

    def snapshot(self) -> GeoBounds:
        return GeoBounds(ne=self.ne, sw=self.sw)

    @classmethod
    def around(cls, point: GeoPoint) -> "BoundingBox":
        """1点だけを含む退化した矩形"""
        return cls(ne=point, sw=point)


# --- マーカー ---------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Marker:
    """
    位置 + 任意のペイロード。
    同一性 (is) で比較するので、同じ座標・同じペイロードでも別マーカーとして扱う。
    assigned=True で渡したマーカーはクラスタリング対象から外れる。
    """
    payload: Any
    position: GeoPoint
    assigned: bool = field(default=False)

    @property
    def lat(self) -> float:
        return self.position.lat

    @property
    def lng(self) -> float:
        return self.position.lng


__all__ = [
    "GeoPoint",
    "GeoBounds",
    "BoundingBox",
    "Marker",
]
