from __future__ import annotations
import pathlib, json, warnings
from typing import Any, List, Tuple

from jsonschema import validate

from .models import GeoPoint, Marker
from ..config import ClusterConfig

_RESERVED_KEYS = ("lat", "lng", "assigned")


class MarkerLoader:
    """JSONファイルを読み込んで Marker / ClusterConfig に変換する共通ローダ"""

    def __init__(self, validate_schema: bool = True, schema_dir: str | pathlib.Path | None = None):
        self.validate_schema = validate_schema
        # デフォルト: このパッケージの schemas ディレクトリ
        if schema_dir is None:
            self.schema_dir = pathlib.Path(__file__).parent.parent / "schemas"
        else:
            self.schema_dir = pathlib.Path(schema_dir)

    def _load_json(self, path: str | pathlib.Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _validate(self, instance: Any, schema_name: str) -> None:
        if self.validate_schema:
            schema = self._load_json(self.schema_dir / schema_name)
            validate(instance=instance, schema=schema)

    # --- 公開API ------------------------------------------------------

    def parse_markers(self, data: dict) -> List[Marker]:
        """dict (markers.json 相当) → Marker のリスト。入力順を保つ"""
        self._validate(data, "markers.schema.json")

        markers: List[Marker] = []
        seen_ids: set = set()
        for item in data["markers"]:
            mid = item.get("id")
            if mid is not None:
                if mid in seen_ids:
                    warnings.warn(f"Duplicate marker id {mid!r}")
                seen_ids.add(mid)

            if "payload" in item:
                payload = item["payload"]
            else:
                payload = {k: v for k, v in item.items() if k not in _RESERVED_KEYS}
            markers.append(
                Marker(
                    payload=payload,
                    position=GeoPoint(float(item["lat"]), float(item["lng"])),
                    assigned=bool(item.get("assigned", False)),
                )
            )
        return markers

    def load_markers(self, path: str | pathlib.Path) -> List[Marker]:
        """markers.json → Marker のリスト"""
        return self.parse_markers(self._load_json(path))

    def load_document(self, path: str | pathlib.Path) -> Tuple[List[Marker], ClusterConfig]:
        """markers.json → (Marker のリスト, 同梱の config。無ければデフォルト)"""
        data = self._load_json(path)
        markers = self.parse_markers(data)
        return markers, ClusterConfig.from_dict(data.get("config"))

    def load_config(self, path: str | pathlib.Path) -> ClusterConfig:
        """config.json → ClusterConfig"""
        data = self._load_json(path)
        self._validate(data, "config.schema.json")
        return ClusterConfig.from_dict(data)
