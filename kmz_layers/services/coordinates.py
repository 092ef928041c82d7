"""Parsing of KML ``<coordinates>`` text."""

from __future__ import annotations

import logging
import math
import re

from ..core import Coordinate

logger = logging.getLogger(__name__)

_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def _parse_decimal(value: str) -> float | None:
    value = value.strip()
    if not _DECIMAL_PATTERN.match(value):
        return None
    result = float(value)
    if not math.isfinite(result):
        return None
    return result


def parse_coordinate_token(token: str) -> Coordinate | None:
    """Parse one ``lon,lat[,alt]`` tuple, or return ``None`` if it is unusable."""

    parts = token.split(",")
    if len(parts) < 2:
        return None
    longitude = _parse_decimal(parts[0])
    latitude = _parse_decimal(parts[1])
    if longitude is None or latitude is None:
        return None
    return Coordinate(latitude, longitude)


def parse_coordinates(text: str | None) -> list[Coordinate]:
    """Parse the content of a ``<coordinates>`` element.

    KML stores tuples as ``lon,lat[,alt]`` separated by whitespace. The result
    is latitude-first and keeps document order. Tuples that do not parse are
    dropped without raising.
    """

    if not text:
        return []
    tokens = text.split()
    coordinates = [parse_coordinate_token(token) for token in tokens]
    parsed = [coordinate for coordinate in coordinates if coordinate is not None]
    if len(parsed) != len(tokens):
        logger.debug("Discarded %d invalid coordinate tuple(s)", len(tokens) - len(parsed))
    return parsed


class CoordinateParser:
    """Service wrapper around :func:`parse_coordinates`."""

    def parse(self, text: str | None) -> list[Coordinate]:
        return parse_coordinates(text)
