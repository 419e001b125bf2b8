# errors.py
class PreclusterError(Exception):
    """marker_precluster の例外の基底"""


class ConfigurationError(PreclusterError, ValueError):
    """grid_size / zoom などの設定値が不正"""


class DomainError(PreclusterError, ValueError):
    """Web-Mercator で扱えない座標 (strict_domain 時のみ)"""

    def __init__(self, message: str, lat: float | None = None, lng: float | None = None):
        super().__init__(message)
        self.lat = lat
        self.lng = lng
