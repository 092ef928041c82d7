"""REST API blueprint."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request
from rq.exceptions import NoSuchJobError
from rq.job import Job

from ..config import APP_CONFIG, MAP_CONFIG
from ..core import FeatureSet
from ..utils import layer_name_from_filename

api_bp = Blueprint("api", __name__)


@api_bp.post("/layers")
def upload_layers():
    """Create one layer per uploaded KMZ/KML file."""

    uploads = [item for item in request.files.getlist("files") if item.filename]
    if not uploads:
        return jsonify({"error": "files field is required"}), 400

    for uploaded in uploads:
        if not _allowed(uploaded.filename, APP_CONFIG.allowed_extensions):
            return jsonify({"error": f"Unsupported file: {uploaded.filename}"}), 400

    pipeline = _pipeline()
    cache = _extension()["cache"]
    queue = _queue()
    created_at = datetime.now(timezone.utc).isoformat()

    if queue is None:
        results = []
        for uploaded in uploads:
            data = uploaded.read()
            source = cache.store(data, uploaded.filename)
            result = pipeline.ingest(data, uploaded.filename, source=str(source))
            results.append(result.as_dict())
        return jsonify({"layers": results}), 201

    jobs = []
    for uploaded in uploads:
        source = str(cache.store(uploaded.read(), uploaded.filename))
        layer = pipeline.registry.create_layer(
            layer_name_from_filename(uploaded.filename), source, visible=True
        )
        job = queue.enqueue(
            "kmz_layers.tasks.parse_source",
            kwargs={
                "layer_name": layer.name,
                "color": layer.color.as_dict(),
                "source_path": source,
            },
            meta={"created_at": created_at, "source": source},
        )
        jobs.append(
            {
                "job_id": job.id,
                "status": job.get_status(refresh=False),
                "layer": layer.as_dict(),
            }
        )
    return jsonify({"jobs": jobs}), 202


@api_bp.get("/jobs/<job_id>")
def job_status(job_id: str):
    connection = _extension()["connection"]
    if connection is None:
        return jsonify({"error": "Job queue is disabled"}), 404
    try:
        job = Job.fetch(job_id, connection=connection)
    except NoSuchJobError:
        return jsonify({"error": "Job not found"}), 404

    payload: dict[str, object] = {
        "job_id": job.id,
        "status": job.get_status(refresh=True),
        "created_at": job.meta.get("created_at"),
    }

    if job.is_finished:
        layer = _pipeline().registry.find(job.meta.get("source", ""))
        if layer is not None:
            layer.publish(FeatureSet.from_dict(job.return_value() or {}))
            payload["layer"] = layer.as_dict()
        return jsonify(payload), 200
    if job.is_failed:
        payload["error"] = job.meta.get("error", job.exc_info)
        return jsonify(payload), 500

    payload["progress"] = job.meta.get("progress", 0)
    return jsonify(payload), 200


@api_bp.get("/layers")
def list_layers():
    layers = [layer.as_dict() for layer in _pipeline().registry]
    return jsonify({"layers": layers}), 200


@api_bp.post("/layers/<int:index>/toggle")
def toggle_layer(index: int):
    registry = _pipeline().registry
    try:
        registry.toggle_visibility(index)
    except IndexError:
        return jsonify({"error": "Layer not found"}), 404
    return jsonify(registry[index].as_dict()), 200


@api_bp.delete("/layers/<int:index>")
def remove_layer(index: int):
    try:
        layer = _pipeline().registry.remove(index)
    except IndexError:
        return jsonify({"error": "Layer not found"}), 404
    return jsonify(layer.as_dict()), 200


@api_bp.delete("/layers")
def clear_layers():
    _pipeline().registry.clear()
    return jsonify({"layers": []}), 200


@api_bp.get("/features")
def visible_features():
    return jsonify(_pipeline().registry.visible_features().as_dict()), 200


@api_bp.get("/bounds")
def bounds():
    return jsonify(_pipeline().frame().as_dict()), 200


@api_bp.get("/camera")
def initial_camera():
    latitude, longitude = MAP_CONFIG.initial_center
    return jsonify({"center": [latitude, longitude], "zoom": MAP_CONFIG.initial_zoom}), 200


def _allowed(filename: str, extensions: tuple[str, ...]) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in extensions


def _extension() -> dict:
    return current_app.extensions["kmz_layers"]


def _pipeline():
    return _extension()["pipeline"]


def _queue():
    return _extension()["queue"]
