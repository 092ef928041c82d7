"""Runtime configuration for the KMZ Layers project."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class StoragePaths:
    """Filesystem locations used for cached source files."""

    uploads: Path

    def ensure(self) -> None:
        """Ensure the backing directories exist."""
        self.uploads.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AppConfig:
    """High level runtime configuration values."""

    max_upload_mb: int = 10
    allowed_extensions: tuple[str, ...] = ("kmz", "kml")
    max_workers: int = 4

    @property
    def max_upload_bytes(self) -> int:
        """Maximum upload payload in bytes."""
        return self.max_upload_mb * 1024 * 1024


@dataclass(frozen=True)
class MapConfig:
    """Values handed to the map view alongside framing rectangles."""

    bounds_padding_px: int = 50
    fallback_zoom: float = 10.0
    initial_center: tuple[float, float] = (37.42796133580664, -122.085749655962)
    initial_zoom: float = 14.0
    fill_opacity: float = 0.3


@dataclass(frozen=True)
class QueueConfig:
    """Configuration for the Redis-backed parse queue."""

    redis_url: str = "redis://localhost:6379/0"
    queue_name: str = "kmz-layers"
    default_timeout: int = 60 * 5  # seconds
    enabled: bool = False


APP_CONFIG = AppConfig(
    max_upload_mb=int(os.environ.get("KMZ_LAYERS_MAX_UPLOAD_MB", AppConfig.max_upload_mb)),
    max_workers=int(os.environ.get("KMZ_LAYERS_MAX_WORKERS", AppConfig.max_workers)),
)
MAP_CONFIG = MapConfig()
STORAGE_PATHS = StoragePaths(
    uploads=Path(os.environ.get("KMZ_LAYERS_UPLOADS", "uploads")),
)
QUEUE_CONFIG = QueueConfig(
    redis_url=os.environ.get("KMZ_LAYERS_REDIS_URL", QueueConfig.redis_url),
    queue_name=os.environ.get("KMZ_LAYERS_QUEUE", QueueConfig.queue_name),
    default_timeout=int(
        os.environ.get("KMZ_LAYERS_QUEUE_TIMEOUT", QueueConfig.default_timeout)
    ),
    enabled=_env_flag("KMZ_LAYERS_ASYNC"),
)
