"""Core domain primitives for KMZ Layers."""

from .models import (
    Bounds,
    Color,
    Coordinate,
    FeatureSet,
    FramingRequest,
    IngestionResult,
    Layer,
    PointMarker,
    Polygon,
    Polyline,
)
from .exceptions import (
    CorruptArchive,
    IoError,
    MalformedXml,
    MissingKmlEntry,
    NoVisibleFeatures,
    ProcessingError,
)

__all__ = [
    "Bounds",
    "Color",
    "Coordinate",
    "FeatureSet",
    "FramingRequest",
    "IngestionResult",
    "Layer",
    "PointMarker",
    "Polygon",
    "Polyline",
    "CorruptArchive",
    "IoError",
    "MalformedXml",
    "MissingKmlEntry",
    "NoVisibleFeatures",
    "ProcessingError",
]
