"""Entry point for the KMZ Layers Flask application."""

from __future__ import annotations

import logging
import os

from kmz_layers import create_app

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

app = create_app()


def _is_production() -> bool:
    """Return ``True`` when the app should run in production mode."""

    return os.environ.get("FLASK_ENV", "production") == "production"


def _bundled_paths() -> list[str]:
    value = os.environ.get("KMZ_LAYERS_BUNDLED", "")
    return [path.strip() for path in value.split(os.pathsep) if path.strip()]


if __name__ == "__main__":
    bundled = _bundled_paths()
    if bundled:
        app.extensions["kmz_layers"]["pipeline"].load_bundled(bundled)

    port = int(os.environ.get("PORT", 5000))
    debug = not _is_production()
    app.run(host="0.0.0.0", port=port, debug=debug, use_reloader=debug)
