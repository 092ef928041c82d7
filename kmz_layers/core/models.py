"""Domain models used throughout KMZ Layers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Mapping, NamedTuple


class Coordinate(NamedTuple):
    """A WGS84 position, latitude first."""

    latitude: float
    longitude: float

    def as_list(self) -> list[float]:
        return [self.latitude, self.longitude]


def _coordinates_from(values: Iterable[Iterable[float]]) -> tuple[Coordinate, ...]:
    return tuple(Coordinate(float(lat), float(lon)) for lat, lon in values)


@dataclass(frozen=True, slots=True)
class Color:
    """A display colour identified by its palette name."""

    name: str
    hex: str
    opacity: float = 1.0

    def with_opacity(self, opacity: float) -> "Color":
        return replace(self, opacity=opacity)

    def same_hue(self, other: "Color") -> bool:
        """Return ``True`` when both colours share name and RGB value."""
        return self.name == other.name and self.hex.upper() == other.hex.upper()

    @property
    def argb(self) -> str:
        alpha = round(max(0.0, min(1.0, self.opacity)) * 255)
        return f"#{alpha:02X}{self.hex.lstrip('#').upper()}"

    def as_dict(self) -> dict:
        return {"name": self.name, "hex": self.hex, "opacity": self.opacity, "argb": self.argb}

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Color":
        return cls(
            name=str(payload["name"]),
            hex=str(payload["hex"]),
            opacity=float(payload.get("opacity", 1.0)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class Polygon:
    """Outer ring of a KML polygon, styled for the map view."""

    id: str
    points: tuple[Coordinate, ...]
    fill_color: Color
    stroke_color: Color
    stroke_width: int = 2

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "points": [point.as_list() for point in self.points],
            "fill_color": self.fill_color.as_dict(),
            "stroke_color": self.stroke_color.as_dict(),
            "stroke_width": self.stroke_width,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Polygon":
        return cls(
            id=str(payload["id"]),
            points=_coordinates_from(payload["points"]),  # type: ignore[arg-type]
            fill_color=Color.from_dict(payload["fill_color"]),  # type: ignore[arg-type]
            stroke_color=Color.from_dict(payload["stroke_color"]),  # type: ignore[arg-type]
            stroke_width=int(payload.get("stroke_width", 2)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class Polyline:
    """A KML LineString, styled for the map view."""

    id: str
    points: tuple[Coordinate, ...]
    color: Color
    width: int = 3

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "points": [point.as_list() for point in self.points],
            "color": self.color.as_dict(),
            "width": self.width,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Polyline":
        return cls(
            id=str(payload["id"]),
            points=_coordinates_from(payload["points"]),  # type: ignore[arg-type]
            color=Color.from_dict(payload["color"]),  # type: ignore[arg-type]
            width=int(payload.get("width", 3)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class PointMarker:
    """A KML Point rendered as a tinted marker."""

    id: str
    position: Coordinate
    label: str
    layer_name: str
    hue: float

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "position": self.position.as_list(),
            "label": self.label,
            "layer_name": self.layer_name,
            "hue": self.hue,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "PointMarker":
        lat, lon = payload["position"]  # type: ignore[misc]
        return cls(
            id=str(payload["id"]),
            position=Coordinate(float(lat), float(lon)),
            label=str(payload["label"]),
            layer_name=str(payload["layer_name"]),
            hue=float(payload["hue"]),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class FeatureSet:
    """The three geometry collections produced by one parse."""

    polygons: frozenset[Polygon] = field(default_factory=frozenset)
    polylines: frozenset[Polyline] = field(default_factory=frozenset)
    markers: frozenset[PointMarker] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not (self.polygons or self.polylines or self.markers)

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield polygon rings, polyline vertices and marker positions."""

        for polygon in sorted(self.polygons, key=lambda item: item.id):
            yield from polygon.points
        for polyline in sorted(self.polylines, key=lambda item: item.id):
            yield from polyline.points
        for marker in sorted(self.markers, key=lambda item: item.id):
            yield marker.position

    def counts(self) -> dict[str, int]:
        return {
            "polygons": len(self.polygons),
            "polylines": len(self.polylines),
            "markers": len(self.markers),
        }

    def as_dict(self) -> dict:
        return {
            "polygons": [item.as_dict() for item in sorted(self.polygons, key=lambda p: p.id)],
            "polylines": [item.as_dict() for item in sorted(self.polylines, key=lambda p: p.id)],
            "markers": [item.as_dict() for item in sorted(self.markers, key=lambda p: p.id)],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "FeatureSet":
        return cls(
            polygons=frozenset(Polygon.from_dict(item) for item in payload.get("polygons", ())),  # type: ignore[union-attr]
            polylines=frozenset(Polyline.from_dict(item) for item in payload.get("polylines", ())),  # type: ignore[union-attr]
            markers=frozenset(PointMarker.from_dict(item) for item in payload.get("markers", ())),  # type: ignore[union-attr]
        )


EMPTY_FEATURES = FeatureSet()


class Layer:
    """Features from one ingested source, with a fixed colour and a visibility flag.

    The three feature collections are held in a single :class:`FeatureSet`
    so :meth:`publish` swaps all of them in one assignment.
    """

    __slots__ = ("name", "source", "visible", "_color", "_features")

    def __init__(self, name: str, source: str, color: Color, *, visible: bool = False):
        self.name = name
        self.source = source
        self.visible = visible
        self._color = color
        self._features = EMPTY_FEATURES

    @property
    def color(self) -> Color:
        return self._color

    @property
    def features(self) -> FeatureSet:
        return self._features

    @property
    def polygons(self) -> frozenset[Polygon]:
        return self._features.polygons

    @property
    def polylines(self) -> frozenset[Polyline]:
        return self._features.polylines

    @property
    def markers(self) -> frozenset[PointMarker]:
        return self._features.markers

    def publish(self, features: FeatureSet) -> None:
        """Replace all three feature collections at once."""
        self._features = features

    def as_dict(self, *, include_features: bool = False) -> dict:
        payload = {
            "name": self.name,
            "source": self.source,
            "visible": self.visible,
            "color": self._color.as_dict(),
            "counts": self._features.counts(),
        }
        if include_features:
            payload["features"] = self._features.as_dict()
        return payload

    def __repr__(self) -> str:
        return f"Layer(name={self.name!r}, color={self._color.name}, visible={self.visible})"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned latitude/longitude rectangle."""

    southwest: Coordinate
    northeast: Coordinate

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            (self.southwest.latitude + self.northeast.latitude) / 2,
            (self.southwest.longitude + self.northeast.longitude) / 2,
        )

    @property
    def is_degenerate(self) -> bool:
        return (
            self.southwest.latitude == self.northeast.latitude
            or self.southwest.longitude == self.northeast.longitude
        )

    def as_dict(self) -> dict:
        return {
            "southwest": self.southwest.as_list(),
            "northeast": self.northeast.as_list(),
        }


@dataclass(frozen=True, slots=True)
class FramingRequest:
    """Camera request for the map view: fit ``bounds`` with ``padding`` pixels.

    When the renderer rejects the rectangle (zero area), the view centres on
    ``fallback_center`` at ``fallback_zoom`` instead.
    """

    bounds: Bounds
    padding: int
    fallback_zoom: float

    @property
    def fallback_center(self) -> Coordinate:
        return self.bounds.center

    def as_dict(self) -> dict:
        return {
            "bounds": self.bounds.as_dict(),
            "padding": self.padding,
            "degenerate": self.bounds.is_degenerate,
            "fallback": {
                "center": self.fallback_center.as_list(),
                "zoom": self.fallback_zoom,
            },
        }


@dataclass(slots=True)
class IngestionResult:
    """Outcome of ingesting one source into a layer."""

    layer: Layer
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> dict:
        payload: dict[str, object] = {"layer": self.layer.as_dict(), "ok": self.ok}
        if self.error is not None:
            as_dict = getattr(self.error, "as_dict", None)
            payload["error"] = as_dict() if as_dict else {"message": str(self.error)}
        return payload
