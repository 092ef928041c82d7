"""Placemark geometry extraction from KML documents."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterator

from ..config import MAP_CONFIG
from ..core import Coordinate, FeatureSet, Layer, MalformedXml, PointMarker, Polygon, Polyline
from ..utils.xmltree import child, child_chain, descendants, first_descendant, local_name, text_of
from .colors import ColorAllocator
from .coordinates import CoordinateParser

logger = logging.getLogger(__name__)

UNNAMED = "Unnamed"


@dataclass(slots=True)
class _ParseContext:
    """Accumulators for a single :meth:`KmlParser.parse` call."""

    layer: Layer
    polygons: list[Polygon] = field(default_factory=list)
    polylines: list[Polyline] = field(default_factory=list)
    markers: list[PointMarker] = field(default_factory=list)

    def feature_id(self, kind: str, index: int) -> str:
        return f"{self.layer.name}_{kind}_{index}"

    def freeze(self) -> FeatureSet:
        return FeatureSet(
            polygons=frozenset(self.polygons),
            polylines=frozenset(self.polylines),
            markers=frozenset(self.markers),
        )


@dataclass(slots=True)
class KmlParser:
    """Build polygon, polyline and marker features for a layer."""

    coordinate_parser: CoordinateParser = field(default_factory=CoordinateParser)
    color_allocator: ColorAllocator = field(default_factory=ColorAllocator)
    fill_opacity: float = MAP_CONFIG.fill_opacity

    def parse(self, text: str, layer: Layer) -> FeatureSet:
        """Parse ``text`` and publish the resulting features on ``layer``."""

        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise MalformedXml(
                f"KML document for layer {layer.name!r} is not well-formed",
                details={"layer": layer.name, "reason": str(exc)},
            ) from exc

        context = _ParseContext(layer=layer)
        placemarks = list(self._placemarks(root))
        logger.info("Found %d placemarks for layer %s", len(placemarks), layer.name)

        for placemark in placemarks:
            self._parse_placemark(placemark, context)

        features = context.freeze()
        layer.publish(features)
        logger.info(
            "Parsed layer %s: %d polygons, %d polylines, %d markers",
            layer.name,
            len(features.polygons),
            len(features.polylines),
            len(features.markers),
        )
        return features

    @staticmethod
    def _placemarks(root: ET.Element) -> Iterator[ET.Element]:
        if local_name(root) == "Placemark":
            yield root
        yield from descendants(root, "Placemark")

    def _parse_placemark(self, placemark: ET.Element, context: _ParseContext) -> None:
        label = text_of(child(placemark, "name")) or UNNAMED

        for element in descendants(placemark, "Polygon"):
            polygon = self._build_polygon(element, context)
            if polygon is not None:
                context.polygons.append(polygon)

        for element in descendants(placemark, "LineString"):
            polyline = self._build_polyline(element, context)
            if polyline is not None:
                context.polylines.append(polyline)

        for element in descendants(placemark, "Point"):
            marker = self._build_marker(element, label, context)
            if marker is not None:
                context.markers.append(marker)

    def _coordinates(self, element: ET.Element | None) -> list[Coordinate]:
        if element is None:
            return []
        return self.coordinate_parser.parse(text_of(first_descendant(element, "coordinates")) or None)

    def _build_polygon(self, element: ET.Element, context: _ParseContext) -> Polygon | None:
        # Inner boundaries (holes) are not extracted.
        ring = child_chain(element, "outerBoundaryIs", "LinearRing")
        points = self._coordinates(ring)
        if not points:
            logger.debug("Skipping polygon without outer boundary coordinates in %s", context.layer.name)
            return None
        color = context.layer.color
        return Polygon(
            id=context.feature_id("polygon", len(context.polygons)),
            points=tuple(points),
            fill_color=color.with_opacity(self.fill_opacity),
            stroke_color=color,
        )

    def _build_polyline(self, element: ET.Element, context: _ParseContext) -> Polyline | None:
        points = self._coordinates(element)
        if not points:
            logger.debug("Skipping empty LineString in %s", context.layer.name)
            return None
        return Polyline(
            id=context.feature_id("polyline", len(context.polylines)),
            points=tuple(points),
            color=context.layer.color,
        )

    def _build_marker(
        self, element: ET.Element, label: str, context: _ParseContext
    ) -> PointMarker | None:
        points = self._coordinates(element)
        if not points:
            logger.debug("Skipping empty Point in %s", context.layer.name)
            return None
        return PointMarker(
            id=context.feature_id("marker", len(context.markers)),
            position=points[0],
            label=label,
            layer_name=context.layer.name,
            hue=self.color_allocator.color_to_marker_hue(context.layer.color),
        )
