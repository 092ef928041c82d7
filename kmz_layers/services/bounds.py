"""Framing rectangles for visible features."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..config import MAP_CONFIG
from ..core import Bounds, Coordinate, FramingRequest, NoVisibleFeatures

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoundsCalculator:
    """Compute the axis-aligned rectangle enclosing a set of coordinates."""

    padding: int = MAP_CONFIG.bounds_padding_px
    fallback_zoom: float = MAP_CONFIG.fallback_zoom

    def calculate(self, coordinates: Iterable[Coordinate | tuple[float, float]]) -> Bounds:
        min_lat = min_lon = float("inf")
        max_lat = max_lon = float("-inf")
        count = 0

        for latitude, longitude in coordinates:
            count += 1
            min_lat = min(min_lat, latitude)
            max_lat = max(max_lat, latitude)
            min_lon = min(min_lon, longitude)
            max_lon = max(max_lon, longitude)

        if not count:
            raise NoVisibleFeatures("No visible features to frame")

        bounds = Bounds(
            southwest=Coordinate(min_lat, min_lon),
            northeast=Coordinate(max_lat, max_lon),
        )
        logger.info(
            "Calculated bounds from %d points: SW(%s, %s), NE(%s, %s)",
            count,
            min_lat,
            min_lon,
            max_lat,
            max_lon,
        )
        return bounds

    def frame(self, coordinates: Iterable[Coordinate | tuple[float, float]]) -> FramingRequest:
        """Return the camera request the map view should apply."""

        return FramingRequest(
            bounds=self.calculate(coordinates),
            padding=self.padding,
            fallback_zoom=self.fallback_zoom,
        )
