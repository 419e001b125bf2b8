# config.py
from dataclasses import dataclass, asdict
from numbers import Integral, Real
import math

from .errors import ConfigurationError, DomainError
from .model.models import GeoPoint

DEFAULT_GRID_SIZE = 60  # px
DEFAULT_ZOOM = 9

# Web-Mercator が定義される緯度の上限
MERCATOR_MAX_LAT = 85.05112878


@dataclass(frozen=True)
class ClusterConfig:
    grid_size: float = DEFAULT_GRID_SIZE
    zoom: int = DEFAULT_ZOOM
    strict_domain: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        gs = self.grid_size
        if isinstance(gs, bool) or not isinstance(gs, Real) or not math.isfinite(gs) or gs <= 0:
            raise ConfigurationError(f"grid_size must be a positive number of pixels: {gs!r}")
        z = self.zoom
        if isinstance(z, bool) or not isinstance(z, Integral) or z < 0:
            raise ConfigurationError(f"zoom must be a non-negative integer: {z!r}")

    def check_point(self, point: GeoPoint) -> None:
        """strict_domain のときだけ座標を検査する。通常は何もしない"""
        if not self.strict_domain:
            return
        lat, lng = point.lat, point.lng
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise DomainError(f"non-finite coordinate ({lat}, {lng})", lat, lng)
        if abs(lat) > MERCATOR_MAX_LAT:
            raise DomainError(f"latitude {lat} outside Web-Mercator range", lat, lng)
        if abs(lng) > 180.0:
            raise DomainError(f"longitude {lng} outside [-180, 180]", lat, lng)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict | None) -> "ClusterConfig":
        data = dict(data or {})
        unknown = set(data) - {"grid_size", "zoom", "strict_domain"}
        if unknown:
            raise ConfigurationError(f"unknown config keys: {sorted(unknown)}")
        return cls(**data)

