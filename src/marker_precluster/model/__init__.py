# model/__init__.py
"""
Model layer: 幾何プリミティブとマーカー、JSON ローダ。

- models: GeoPoint / BoundingBox / GeoBounds / Marker
- loader: MarkerLoader (markers.json, config.json を読み込む)
"""
__all__ = ["models", "loader"]
