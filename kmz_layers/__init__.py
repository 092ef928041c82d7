"""Top-level package for the KMZ Layers backend."""

from .api.app_factory import create_app
from .pipelines.layer_pipeline import LayerPipeline

__all__ = ["create_app", "LayerPipeline"]
