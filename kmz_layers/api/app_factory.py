"""Flask application factory."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, jsonify
from flask_cors import CORS
from redis import Redis
from rq import Queue

from ..config import APP_CONFIG, QUEUE_CONFIG, STORAGE_PATHS
from ..core import NoVisibleFeatures, ProcessingError
from ..pipelines import LayerPipeline
from ..services import LayerRegistry, SourceCache
from .routes import api_bp

logger = logging.getLogger(__name__)


def create_app(
    *,
    registry: LayerRegistry | None = None,
    uploads: Path | str | None = None,
    queue: Queue | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Uploads are parsed inline unless a queue is passed in or
    ``KMZ_LAYERS_ASYNC`` enables the Redis-backed queue.
    """

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = APP_CONFIG.max_upload_bytes

    CORS(app)
    app.register_blueprint(api_bp, url_prefix="/api")

    connection = None
    if queue is None and QUEUE_CONFIG.enabled:
        connection = Redis.from_url(QUEUE_CONFIG.redis_url)
        queue = Queue(
            name=QUEUE_CONFIG.queue_name,
            connection=connection,
            default_timeout=QUEUE_CONFIG.default_timeout,
        )
    elif queue is not None:
        connection = queue.connection

    app.extensions["kmz_layers"] = {
        "pipeline": LayerPipeline.default(registry),
        "cache": SourceCache(root=Path(uploads) if uploads else STORAGE_PATHS.uploads),
        "queue": queue,
        "connection": connection,
    }

    @app.errorhandler(ProcessingError)
    def handle_processing_error(exc: ProcessingError):
        status = 404 if isinstance(exc, NoVisibleFeatures) else 422
        return jsonify(exc.as_dict()), status

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    logger.info("Flask application initialised (queue=%s)", "on" if queue is not None else "off")
    return app
