"""RQ task definitions for asynchronous layer parsing."""

from __future__ import annotations

import logging
from pathlib import Path

from rq import get_current_job

from .core import Color, Layer
from .core.exceptions import ProcessingError
from .services import ArchiveReader, KmlParser

logger = logging.getLogger(__name__)


def parse_source(*, layer_name: str, color: dict, source_path: str) -> dict:
    """Parse a cached source file and return its serialised feature set.

    The worker has no access to the API's registry, so it parses into a
    detached layer carrying the same name and colour; the API publishes the
    returned payload once the job has finished.
    """

    job = get_current_job()
    if job:
        job.meta["progress"] = 0
        job.save_meta()

    layer = Layer(layer_name, source_path, Color.from_dict(color))
    try:
        text = ArchiveReader().read_path(Path(source_path))
        features = KmlParser().parse(text, layer)
    except ProcessingError as exc:
        logger.warning("Parse job for %s failed: %s", source_path, exc)
        if job:
            job.meta["error"] = exc.as_dict()
            job.save_meta()
        raise

    if job:
        job.meta["progress"] = 100
        job.save_meta()

    return features.as_dict()
