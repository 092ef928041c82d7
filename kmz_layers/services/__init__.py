"""Service layer exports."""

from .archive_reader import ArchiveReader
from .bounds import BoundsCalculator
from .colors import ColorAllocator
from .coordinates import CoordinateParser, parse_coordinates
from .kml_parser import KmlParser
from .layer_registry import LayerRegistry
from .source_cache import SourceCache

__all__ = [
    "ArchiveReader",
    "BoundsCalculator",
    "ColorAllocator",
    "CoordinateParser",
    "parse_coordinates",
    "KmlParser",
    "LayerRegistry",
    "SourceCache",
]
