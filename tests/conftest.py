from __future__ import annotations

import io
import zipfile

import pytest

from kmz_layers.core import Layer
from kmz_layers.services.colors import BLUE, RED

SAMPLE_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <name>Field survey</name>
    <Folder>
      <Placemark>
        <name>North field</name>
        <Polygon>
          <outerBoundaryIs>
            <LinearRing>
              <coordinates>-122.1,37.4,0 -122.2,37.4,0 -122.2,37.5,0 -122.1,37.4,0</coordinates>
            </LinearRing>
          </outerBoundaryIs>
          <innerBoundaryIs>
            <LinearRing>
              <coordinates>-122.15,37.42,0 -122.16,37.42,0 -122.16,37.43,0</coordinates>
            </LinearRing>
          </innerBoundaryIs>
        </Polygon>
      </Placemark>
      <Placemark>
        <name>Access road</name>
        <LineString>
          <coordinates>-122.3,37.6 -122.35,37.65</coordinates>
        </LineString>
      </Placemark>
      <Placemark>
        <name>Gate</name>
        <Point>
          <coordinates>-122.05,37.45,12</coordinates>
        </Point>
      </Placemark>
    </Folder>
  </Document>
</kml>
"""


def make_kmz(entries: dict[str, str | bytes]) -> bytes:
    """Build an in-memory zip archive with the given members, in order."""

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture()
def sample_kml() -> str:
    return SAMPLE_KML


@pytest.fixture()
def sample_kmz() -> bytes:
    return make_kmz({"doc.kml": SAMPLE_KML})


@pytest.fixture()
def red_layer() -> Layer:
    return Layer("survey", "survey.kmz", RED)


@pytest.fixture()
def blue_layer() -> Layer:
    return Layer("roads", "roads.kmz", BLUE)


@pytest.fixture()
def kmz_factory():
    return make_kmz
