# projection.py
from dataclasses import dataclass
from typing import NamedTuple, Protocol

import numpy as np

from .model.models import GeoPoint

TILE_SIZE = 256  # px per tile edge


class Pixel(NamedTuple):
    x: float
    y: float  # 下向きに増える


class Projection(Protocol):
    def to_pixel(self, point: GeoPoint, zoom: int) -> Pixel: ...
    def to_lat_lng(self, pixel: Pixel, zoom: int) -> GeoPoint: ...


@dataclass(frozen=True)
class TileProjector:
    """
    Web-Mercator (slippy tile) の lat/lng <-> pixel 変換。
    整数タイルには丸めない連続値を返す。
    極付近 (lat -> ±90°) では ±inf / nan に発散するがクランプはしない。
    see: http://wiki.openstreetmap.org/wiki/Slippy_map_tilenames
    """
    tile_size: int = TILE_SIZE

    def to_pixel(self, point: GeoPoint, zoom: int) -> Pixel:
        n = 2.0 ** zoom
        lat_rad = np.deg2rad(point.lat)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            tile_x = ((point.lng + 180.0) / 360.0) * n
            tile_y = (1.0 - np.log(np.tan(lat_rad) + 1.0 / np.cos(lat_rad)) / np.pi) * n / 2.0
        return Pixel(float(tile_x * self.tile_size), float(tile_y * self.tile_size))

    def to_lat_lng(self, pixel: Pixel, zoom: int) -> GeoPoint:
        n = 2.0 ** zoom
        tile_x = pixel.x / self.tile_size
        tile_y = pixel.y / self.tile_size
        lng = tile_x / n * 360.0 - 180.0
        with np.errstate(over="ignore", invalid="ignore"):
            lat_rad = np.arctan(np.sinh(np.pi * (1.0 - 2.0 * tile_y / n)))
        return GeoPoint(float(np.rad2deg(lat_rad)), float(lng))
