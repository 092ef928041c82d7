"""Ordered collection of layers and their visible feature unions."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Iterator

from ..core import Coordinate, FeatureSet, Layer, PointMarker, Polygon, Polyline
from .colors import ColorAllocator

logger = logging.getLogger(__name__)


class LayerRegistry:
    """Owns the layers shown on the map.

    List order is display order only. Mutations and colour allocation share
    one lock, so two ingestions started together never receive the same
    colour. Visible unions are rebuilt from a snapshot on every call.
    """

    def __init__(self, color_allocator: ColorAllocator | None = None):
        self.color_allocator = color_allocator or ColorAllocator()
        self._layers: list[Layer] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> Layer:
        with self._lock:
            return self._layers[index]

    def snapshot(self) -> list[Layer]:
        with self._lock:
            return list(self._layers)

    def add(self, layer: Layer) -> Layer:
        with self._lock:
            self._layers.append(layer)
        logger.info("Added layer %s (%s)", layer.name, layer.color.name)
        return layer

    def create_layer(self, name: str, source: str, *, visible: bool = False) -> Layer:
        """Allocate a colour and append a new, empty layer in one step."""

        with self._lock:
            color = self.color_allocator.get_unused_color(self._layers)
            layer = Layer(name, source, color, visible=visible)
            return self.add(layer)

    def _checked(self, index: int) -> int:
        if not 0 <= index < len(self._layers):
            raise IndexError(f"No layer at index {index}")
        return index

    def remove(self, index: int) -> Layer:
        with self._lock:
            layer = self._layers.pop(self._checked(index))
        logger.info("Removed layer %s", layer.name)
        return layer

    def clear(self) -> None:
        with self._lock:
            count = len(self._layers)
            self._layers.clear()
        logger.info("Cleared %d layers", count)

    def toggle_visibility(self, index: int) -> bool:
        with self._lock:
            layer = self._layers[self._checked(index)]
            layer.visible = not layer.visible
        logger.debug("Layer %s visible=%s", layer.name, layer.visible)
        return layer.visible

    def set_all_visible(self, visible: bool = True) -> None:
        with self._lock:
            for layer in self._layers:
                layer.visible = visible

    def set_visible(self, layers: Iterable[Layer], visible: bool = True) -> None:
        with self._lock:
            for layer in layers:
                layer.visible = visible

    def find(self, source: str) -> Layer | None:
        with self._lock:
            for layer in self._layers:
                if layer.source == source:
                    return layer
        return None

    def index_of(self, layer: Layer) -> int:
        with self._lock:
            for index, candidate in enumerate(self._layers):
                if candidate is layer:
                    return index
        raise ValueError(f"Layer {layer.name!r} is not registered")

    def publish(self, index: int, features: FeatureSet) -> Layer:
        with self._lock:
            layer = self._layers[self._checked(index)]
            layer.publish(features)
        return layer

    def visible_layers(self) -> list[Layer]:
        return [layer for layer in self.snapshot() if layer.visible]

    def visible_polygons(self) -> set[Polygon]:
        result: set[Polygon] = set()
        for layer in self.visible_layers():
            result.update(layer.polygons)
        return result

    def visible_polylines(self) -> set[Polyline]:
        result: set[Polyline] = set()
        for layer in self.visible_layers():
            result.update(layer.polylines)
        return result

    def visible_markers(self) -> set[PointMarker]:
        result: set[PointMarker] = set()
        for layer in self.visible_layers():
            result.update(layer.markers)
        return result

    def visible_coordinates(self) -> list[Coordinate]:
        """Every coordinate of every visible feature, duplicates included."""

        coordinates: list[Coordinate] = []
        for layer in self.visible_layers():
            coordinates.extend(layer.features.coordinates())
        return coordinates

    def visible_features(self) -> FeatureSet:
        polygons: set[Polygon] = set()
        polylines: set[Polyline] = set()
        markers: set[PointMarker] = set()
        for layer in self.visible_layers():
            features = layer.features
            polygons.update(features.polygons)
            polylines.update(features.polylines)
            markers.update(features.markers)
        return FeatureSet(frozenset(polygons), frozenset(polylines), frozenset(markers))
