from __future__ import annotations

import pytest

from kmz_layers.core import CorruptArchive, IoError, MalformedXml, MissingKmlEntry, NoVisibleFeatures
from kmz_layers.pipelines import LayerPipeline
from kmz_layers.services import colors


@pytest.fixture()
def pipeline() -> LayerPipeline:
    return LayerPipeline.default()


def test_ingest_kmz_creates_visible_populated_layer(pipeline, sample_kmz):
    result = pipeline.ingest(sample_kmz, "north_field_2024.kmz")

    assert result.ok
    assert result.layer.name == "north field"
    assert result.layer.visible
    assert result.layer.color == colors.RED
    assert result.layer.features.counts() == {"polygons": 1, "polylines": 1, "markers": 1}
    assert list(pipeline.registry) == [result.layer]


def test_ingest_plain_kml(pipeline, sample_kml):
    result = pipeline.ingest(sample_kml.encode("utf-8"), "survey.kml", source="/cache/survey.kml")

    assert result.ok
    assert result.layer.source == "/cache/survey.kml"
    assert len(result.layer.markers) == 1


@pytest.mark.parametrize(
    "payload, filename, error_type",
    [
        (b"not a zip", "broken.kmz", CorruptArchive),
        (b"<kml><Placemark>", "broken.kml", MalformedXml),
    ],
)
def test_ingest_failures_are_reported_not_raised(pipeline, payload, filename, error_type):
    result = pipeline.ingest(payload, filename)

    assert not result.ok
    assert isinstance(result.error, error_type)
    assert result.layer.features.is_empty
    assert result.as_dict()["error"]["error"] == error_type.code


def test_missing_kml_entry_leaves_layer_empty(pipeline, kmz_factory):
    result = pipeline.ingest(kmz_factory({"notes.txt": "x"}), "empty.kmz")

    assert isinstance(result.error, MissingKmlEntry)
    assert result.layer.features.is_empty
    assert len(pipeline.registry) == 1


def test_ingest_many_isolates_failures(pipeline, sample_kmz):
    results = pipeline.ingest_many(
        [(sample_kmz, "a.kmz"), (b"garbage", "b.kmz"), (sample_kmz, "c.kmz")]
    )

    by_name = {result.layer.name: result for result in results}
    assert set(by_name) == {"a", "b", "c"}
    assert by_name["a"].ok and by_name["c"].ok
    assert isinstance(by_name["b"].error, CorruptArchive)
    assert len({result.layer.color for result in results}) == 3


def test_ingest_path_missing_file_reports_io_error(pipeline, tmp_path):
    result = pipeline.ingest_path(tmp_path / "gone.kmz")

    assert isinstance(result.error, IoError)
    assert result.layer.name == "gone"


def test_load_bundled_shows_layers_after_loading(pipeline, tmp_path, sample_kmz):
    paths = []
    for name in ("parcels_v1.kmz", "trails_v1.kmz"):
        path = tmp_path / name
        path.write_bytes(sample_kmz)
        paths.append(path)

    results = pipeline.load_bundled(paths)

    assert all(result.ok for result in results)
    assert all(layer.visible for layer in pipeline.registry)
    assert {layer.name for layer in pipeline.registry} == {"parcels", "trails"}


def test_frame_covers_visible_layers(pipeline, sample_kmz):
    pipeline.ingest(sample_kmz, "survey.kmz")

    request = pipeline.frame()

    assert request.bounds.southwest == (37.4, -122.35)
    assert request.bounds.northeast == (37.65, -122.05)


def test_frame_without_visible_features_raises(pipeline, sample_kmz):
    pipeline.ingest(sample_kmz, "survey.kmz")
    pipeline.registry.toggle_visibility(0)

    with pytest.raises(NoVisibleFeatures):
        pipeline.frame()


def test_load_bundled_leaves_other_hidden_layers_alone(pipeline, tmp_path, sample_kmz):
    hidden = pipeline.ingest(sample_kmz, "manual.kmz", visible=False).layer
    path = tmp_path / "parcels.kmz"
    path.write_bytes(sample_kmz)

    (result,) = pipeline.load_bundled([path])

    assert result.layer.visible
    assert hidden.visible is False
