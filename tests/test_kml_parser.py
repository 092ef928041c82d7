from __future__ import annotations

import pytest

from kmz_layers.core import Coordinate, Layer, MalformedXml
from kmz_layers.services import KmlParser
from kmz_layers.services import colors


def test_parse_extracts_each_geometry_kind(sample_kml, red_layer):
    features = KmlParser().parse(sample_kml, red_layer)

    (polygon,) = features.polygons
    assert polygon.id == "survey_polygon_0"
    assert polygon.points == (
        (37.4, -122.1),
        (37.4, -122.2),
        (37.5, -122.2),
        (37.4, -122.1),
    )
    assert polygon.stroke_color == colors.RED
    assert polygon.fill_color == colors.RED.with_opacity(0.3)
    assert polygon.stroke_width == 2

    (polyline,) = features.polylines
    assert polyline.id == "survey_polyline_0"
    assert polyline.points == ((37.6, -122.3), (37.65, -122.35))
    assert polyline.color == colors.RED
    assert polyline.width == 3

    (marker,) = features.markers
    assert marker.id == "survey_marker_0"
    assert marker.position == Coordinate(37.45, -122.05)
    assert marker.label == "Gate"
    assert marker.layer_name == "survey"
    assert marker.hue == colors.HUE_RED


def test_parse_publishes_features_on_layer(sample_kml, red_layer):
    features = KmlParser().parse(sample_kml, red_layer)

    assert red_layer.features is features
    assert red_layer.polygons == features.polygons
    assert red_layer.polylines == features.polylines
    assert red_layer.markers == features.markers


def test_inner_boundaries_are_ignored(sample_kml, red_layer):
    features = KmlParser().parse(sample_kml, red_layer)

    points = {point for polygon in features.polygons for point in polygon.points}
    assert Coordinate(37.42, -122.15) not in points


def test_parse_without_namespace_and_multiple_geometries_per_placemark(red_layer):
    document = """
    <kml><Document><Placemark>
      <MultiGeometry>
        <Point><coordinates>1,2 3,4</coordinates></Point>
        <Point><coordinates>5,6</coordinates></Point>
        <LineString><coordinates>1,1 2,2</coordinates></LineString>
        <LineString><coordinates>3,3 4,4</coordinates></LineString>
      </MultiGeometry>
    </Placemark></Document></kml>
    """

    features = KmlParser().parse(document, red_layer)

    assert {marker.id for marker in features.markers} == {"survey_marker_0", "survey_marker_1"}
    assert {marker.position for marker in features.markers} == {(2.0, 1.0), (6.0, 5.0)}
    assert {line.id for line in features.polylines} == {"survey_polyline_0", "survey_polyline_1"}
    assert {marker.label for marker in features.markers} == {"Unnamed"}


def test_parse_skips_empty_or_incomplete_geometry(red_layer):
    document = """
    <kml xmlns="http://www.opengis.net/kml/2.2"><Document>
      <Placemark><name>No ring</name><Polygon><coordinates>1,2 3,4</coordinates></Polygon></Placemark>
      <Placemark><name>Empty line</name><LineString><coordinates>   </coordinates></LineString></Placemark>
      <Placemark><name>Bad point</name><Point><coordinates>abc</coordinates></Point></Placemark>
      <Placemark><name>No coords</name><Point/></Placemark>
      <Placemark><name>Good</name><Point><coordinates>10,20</coordinates></Point></Placemark>
    </Document></kml>
    """

    features = KmlParser().parse(document, red_layer)

    assert not features.polygons
    assert not features.polylines
    (marker,) = features.markers
    assert marker.id == "survey_marker_0"
    assert marker.label == "Good"


def test_blank_name_falls_back_to_unnamed(red_layer):
    document = "<kml><Placemark><name>  </name><Point><coordinates>1,2</coordinates></Point></Placemark></kml>"

    (marker,) = KmlParser().parse(document, red_layer).markers

    assert marker.label == "Unnamed"


def test_marker_hue_follows_layer_color():
    layer = Layer("teal", "teal.kmz", colors.TEAL)
    document = "<kml><Placemark><Point><coordinates>1,2</coordinates></Point></Placemark></kml>"

    (marker,) = KmlParser().parse(document, layer).markers

    assert marker.hue == colors.HUE_AZURE


def test_malformed_xml_raises_and_leaves_layer_untouched(red_layer):
    with pytest.raises(MalformedXml):
        KmlParser().parse("<kml><Placemark>", red_layer)

    assert red_layer.features.is_empty


def test_reparsing_produces_identical_feature_sets(sample_kml):
    parser = KmlParser()

    first = parser.parse(sample_kml, Layer("survey", "a.kmz", colors.RED))
    second = parser.parse(sample_kml, Layer("survey", "a.kmz", colors.RED))

    assert first == second
    assert {polygon.id for polygon in second.polygons} == {"survey_polygon_0"}


def test_reparse_replaces_previous_features(sample_kml, red_layer):
    parser = KmlParser()
    parser.parse(sample_kml, red_layer)

    parser.parse("<kml><Placemark><Point><coordinates>1,2</coordinates></Point></Placemark></kml>", red_layer)

    assert not red_layer.polygons
    assert not red_layer.polylines
    assert {marker.id for marker in red_layer.markers} == {"survey_marker_0"}


def test_ids_are_namespaced_by_layer(sample_kml, red_layer, blue_layer):
    parser = KmlParser()
    survey = parser.parse(sample_kml, red_layer)
    roads = parser.parse(sample_kml, blue_layer)

    survey_ids = {item.id for item in survey.polygons | survey.polylines | survey.markers}
    road_ids = {item.id for item in roads.polygons | roads.polylines | roads.markers}
    assert survey_ids.isdisjoint(road_ids)
